from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd

from nztm.core.projections import ProjectionFactory
from nztm.grid import fixed
from nztm.models import DEFAULT_CONFIG, ConversionConfig

LOGGER = logging.getLogger(__name__)

DIRECTIONS = ("to-grid", "to-geodetic")


def read_points_csv(path: str | Path) -> pd.DataFrame:
    """Reads a CSV of points, trimming whitespace around the column names."""
    df = pd.read_csv(path)
    df.columns = [str(c).strip() for c in df.columns]
    if df.empty:
        raise ValueError(f"No points in {path}")
    return df


def save_results_csv(path: str | Path, df: pd.DataFrame) -> None:
    """Saves a Pandas DataFrame to CSV."""
    df.to_csv(path, index=False)


def convert_points(df: pd.DataFrame, direction: str, config: ConversionConfig = DEFAULT_CONFIG) -> pd.DataFrame:
    """
    Converts every row of df and rounds the computed columns like the
    single point entry points do.

    direction:
      - "to-grid": Latitude/Longitude -> Easting/Northing
      - "to-geodetic": Easting/Northing -> Latitude/Longitude
    """
    projection = ProjectionFactory.create("nztm", config=config)
    if direction == "to-grid":
        out = projection.project(df)
        for col in ("Easting", "Northing"):
            out[col] = out[col].map(lambda v: fixed(v, config.metre_places))
    elif direction == "to-geodetic":
        out = projection.unproject(df)
        for col in ("Latitude", "Longitude"):
            out[col] = out[col].map(lambda v: fixed(v, config.degree_places))
    else:
        raise ValueError(f"Unknown direction: {direction} (expected one of {DIRECTIONS})")
    LOGGER.info("Converted %d points %s", len(out), direction)
    return out


def convert_csv(input_csv: str | Path, output_csv: str | Path, direction: str,
                config: ConversionConfig = DEFAULT_CONFIG) -> pd.DataFrame:
    df = read_points_csv(input_csv)
    out = convert_points(df, direction, config)
    save_results_csv(output_csv, out)
    return out
