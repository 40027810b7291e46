import logging
from pathlib import Path

import typer

from nztm.angles import decimal_to_dms, parse_angle
from nztm.csv_handler import DIRECTIONS, convert_csv
from nztm.exceptions import NZTMError
from nztm.grid import geodetic_to_grid, grid_to_geodetic

__version__ = "0.1.0"

# (easting, northing, latitude, longitude) checked against the C implementation;
# latitude/longitude are None where only the round trip is checked
SELFTEST_POINTS = [
    (1783295.0, 5868193.0, -37.314852, 175.068489),
    (1375175.0, 5086098.0, -44.343561, 170.179492),
    (1576041.15, 6188574.24, None, None),
    (1576542.01, 5515331.05, None, None),
    (1307103.22, 4826464.86, None, None),
]

app = typer.Typer(no_args_is_help=True)


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s | %(message)s")


def _fail(message: str) -> None:
    typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(code=1)


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging.")) -> None:
    """nztm: NZGD2000 latitude/longitude <-> NZTM2000 conversions."""
    _configure_logging(verbose)


@app.command()
def version() -> None:
    """Print version."""
    typer.echo(f"nztm {__version__}")


@app.command("to-geodetic")
def to_geodetic(
    easting: float = typer.Argument(..., help="NZTM easting (metres)"),
    northing: float = typer.Argument(..., help="NZTM northing (metres)"),
    json_out: bool = typer.Option(False, "--json", help="Print the result as JSON."),
) -> None:
    """Convert an NZTM easting/northing to latitude/longitude."""
    try:
        result = grid_to_geodetic(easting, northing)
    except NZTMError as e:
        _fail(str(e))
    if json_out:
        typer.echo(result.model_dump_json())
        return
    typer.echo(f"Latitude:  {result.latitude:.6f} ({decimal_to_dms(result.latitude, 'N', 'S')})")
    typer.echo(f"Longitude: {result.longitude:.6f} ({decimal_to_dms(result.longitude, 'E', 'W')})")


@app.command("to-grid")
def to_grid(
    latitude: str = typer.Argument(..., help="Decimal degrees or DMS, e.g. S37°18'53.47\". Put -- before negative values."),
    longitude: str = typer.Argument(..., help="Decimal degrees or DMS, e.g. 175°04'06.56\"E"),
    json_out: bool = typer.Option(False, "--json", help="Print the result as JSON."),
) -> None:
    """Convert a latitude/longitude to NZTM easting/northing."""
    try:
        result = geodetic_to_grid(parse_angle(latitude), parse_angle(longitude))
    except (NZTMError, ValueError) as e:
        _fail(str(e))
    if json_out:
        typer.echo(result.model_dump_json())
        return
    typer.echo(f"Easting:  {result.easting} mE")
    typer.echo(f"Northing: {result.northing} mN")


@app.command()
def convert(
    input_csv: Path = typer.Argument(..., exists=True, readable=True, help="CSV with Latitude,Longitude or Easting,Northing columns"),
    output_csv: Path = typer.Argument(..., help="Output CSV with the converted columns added."),
    direction: str = typer.Option("to-grid", "--direction", help="Conversion direction: [to-grid|to-geodetic]"),
) -> None:
    """Convert every point of a CSV file."""
    if direction not in DIRECTIONS:
        _fail(f"Unknown direction {direction!r}, expected one of {', '.join(DIRECTIONS)}")
    try:
        out = convert_csv(input_csv, output_csv, direction)
    except (NZTMError, ValueError) as e:
        _fail(str(e))
    typer.echo(f"Wrote {len(out)} points to {output_csv}")


@app.command()
def selftest(
    proj: bool = typer.Option(False, "--proj", help="Also compare against PROJ (EPSG:2193)."),
) -> None:
    """Round trip the reference points and report the differences."""
    failures = 0
    for e, n, exp_lat, exp_lon in SELFTEST_POINTS:
        geod = grid_to_geodetic(e, n)
        grid = geodetic_to_grid(geod.latitude, geod.longitude)
        dE = grid.easting - e
        dN = grid.northing - n
        typer.echo(f"Input NZTM e,n:  {e:12.3f} {n:12.3f}")
        typer.echo(f"Output Lat/Long: {geod.latitude:12.6f} {geod.longitude:12.6f}")
        typer.echo(f"Output NZTM e,n: {grid.easting:12.3f} {grid.northing:12.3f}")
        typer.echo(f"Difference:      {dE:12.3f} {dN:12.3f}")
        ok = abs(dE) <= 1.0 and abs(dN) <= 1.0
        if exp_lat is not None:
            ok = ok and geod.latitude == exp_lat and geod.longitude == exp_lon
        typer.echo("PASSED" if ok else "FAILED")
        typer.echo("")
        failures += not ok

    if proj:
        from nztm.core.verification import compare_with_proj

        lats, lons = [], []
        for e, n, _, _ in SELFTEST_POINTS:
            geod = grid_to_geodetic(e, n)
            lats.append(geod.latitude)
            lons.append(geod.longitude)
        try:
            cmp = compare_with_proj(lats, lons)
        except RuntimeError as e:
            _fail(str(e))
        max_diff = float(max(cmp["dE"].abs().max(), cmp["dN"].abs().max()))
        typer.echo(f"Max difference from PROJ: {max_diff * 1000.0:.3f} mm")
        if max_diff > 0.01:
            failures += 1

    if failures:
        _fail(f"{failures} self test check(s) failed")
    typer.echo("All self test checks passed.")


if __name__ == "__main__":
    app()
