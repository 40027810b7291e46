from __future__ import annotations

import logging
from typing import Iterable

import numpy as np
import pandas as pd
from pyproj import CRS, Transformer
from pyproj.exceptions import ProjError

from nztm.core.redfearn import geod_to_tm
from nztm.grid import get_nztm_projection
from nztm.models import NZGD2000_EPSG, NZTM2000_EPSG

LOGGER = logging.getLogger(__name__)


def proj_transformer() -> Transformer:
    """PROJ's NZGD2000 -> NZTM2000 transformer, always (lon, lat) ordered."""
    try:
        return Transformer.from_crs(CRS.from_epsg(NZGD2000_EPSG), CRS.from_epsg(NZTM2000_EPSG), always_xy=True)
    except ProjError as e:
        raise RuntimeError(f"Could not build the NZTM2000 transformer: {e}")


def compare_with_proj(latitudes: Iterable[float], longitudes: Iterable[float]) -> pd.DataFrame:
    """
    Projects the points with Redfearn's series and with PROJ (EPSG:2193).

    PROJ uses an exact Transverse Mercator formulation, so the differences
    show the series truncation error, which is sub-millimetre near the
    central meridian and grows with distance from it.

    Returns a DataFrame with columns Latitude, Longitude, Easting, Northing,
    Easting_proj, Northing_proj, dE, dN (metres).
    """
    lat = np.asarray(list(latitudes), dtype=float)
    lon = np.asarray(list(longitudes), dtype=float)

    easting, northing = geod_to_tm(get_nztm_projection(), np.radians(lat), np.radians(lon))

    try:
        easting_proj, northing_proj = proj_transformer().transform(lon, lat, errcheck=True)
    except ProjError as e:
        raise RuntimeError(f"PROJ transformation failed: {e}")

    result = pd.DataFrame({
        "Latitude": lat,
        "Longitude": lon,
        "Easting": easting,
        "Northing": northing,
        "Easting_proj": easting_proj,
        "Northing_proj": northing_proj,
    })
    result["dE"] = result["Easting"] - result["Easting_proj"]
    result["dN"] = result["Northing"] - result["Northing_proj"]
    LOGGER.debug("Max PROJ difference: dE=%.6f dN=%.6f",
                 result["dE"].abs().max(), result["dN"].abs().max())
    return result
