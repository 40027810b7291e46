"""
Conversions between NZGD2000 latitude/longitude and NZTM2000.

The NZTM projection is defined once and shared by every call. Inputs are in
decimal degrees and metres; outputs are rounded to ConversionConfig places.
"""
from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal, localcontext
from functools import lru_cache
from typing import Union

from nztm.core.ellipsoid import TMProjection, define_tm_projection
from nztm.core.redfearn import geod_to_tm, tm_to_geod
from nztm.domain.schemas import (
    GeodeticCoordinate,
    GeodeticResult,
    GridCoordinate,
    GridResult,
    parse_coordinate,
)
from nztm.models import (
    DEFAULT_CONFIG,
    NZTM_A,
    NZTM_CM,
    NZTM_FE,
    NZTM_FN,
    NZTM_OLAT,
    NZTM_RF,
    NZTM_SF,
    NZTM_UTOM,
    ConversionConfig,
)


@lru_cache(maxsize=None)
def get_nztm_projection() -> TMProjection:
    """The NZTM projection parameters, derived on first use."""
    return define_tm_projection(NZTM_A, NZTM_RF, math.radians(NZTM_CM), NZTM_SF,
                                math.radians(NZTM_OLAT), NZTM_FE, NZTM_FN, NZTM_UTOM)


def fixed(value: float, places: int) -> Union[int, float]:
    """
    Rounds half away from zero to a fixed number of decimals.

    Non-finite values are returned unchanged as floats.
    """
    value = float(value)
    if not math.isfinite(value):
        return value
    d = Decimal(repr(value))
    # quantize needs every digit up to the requested place
    with localcontext() as ctx:
        ctx.prec = max(28, d.adjusted() + places + 2)
        q = d.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)
    return int(q) if places == 0 else float(q)


def grid_to_geodetic(easting, northing, config: ConversionConfig = DEFAULT_CONFIG) -> GeodeticResult:
    """
    NZTM to latitude and longitude.

    Arguments:
    easting  - NZTM easting (metres)
    northing - NZTM northing (metres)

    Returns the validated input echoed back as floats (so "1783295" comes
    back as 1783295.0) with latitude and longitude in decimal degrees
    rounded to config.degree_places.
    """
    point = parse_coordinate(GridCoordinate, easting=easting, northing=northing)
    lt, ln = tm_to_geod(get_nztm_projection(), point.easting, point.northing,
                        max_dlon=math.radians(config.max_longitude_offset))
    return GeodeticResult(
        easting=point.easting,
        northing=point.northing,
        latitude=fixed(math.degrees(lt), config.degree_places),
        longitude=fixed(math.degrees(ln), config.degree_places),
    )


def geodetic_to_grid(latitude, longitude, config: ConversionConfig = DEFAULT_CONFIG) -> GridResult:
    """
    Latitude and longitude to NZTM.

    Arguments:
    latitude  - decimal degrees, -90 to 90
    longitude - decimal degrees

    Returns the validated input echoed back as floats, with easting and
    northing in metres rounded to config.metre_places (integers by default).
    """
    point = parse_coordinate(GeodeticCoordinate, latitude=latitude, longitude=longitude)
    ce, cn = geod_to_tm(get_nztm_projection(), math.radians(point.latitude),
                        math.radians(point.longitude),
                        max_dlon=math.radians(config.max_longitude_offset))
    return GridResult(
        latitude=point.latitude,
        longitude=point.longitude,
        easting=fixed(ce, config.metre_places),
        northing=fixed(cn, config.metre_places),
    )
