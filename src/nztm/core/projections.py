from abc import ABC, abstractmethod
import math
from typing import Dict, Iterable, Optional

import numpy as np
import pandas as pd

from nztm.core.ellipsoid import TMProjection
from nztm.core.redfearn import geod_to_tm, tm_to_geod
from nztm.exceptions import InvalidInputError
from nztm.grid import get_nztm_projection
from nztm.models import DEFAULT_CONFIG, ConversionConfig


_COLUMN_ALIASES: Dict[str, Iterable[str]] = {
    "Latitude": ("latitude", "lat"),
    "Longitude": ("longitude", "lon", "long"),
    "Easting": ("easting", "e", "east"),
    "Northing": ("northing", "n", "north"),
}


def _column(df: pd.DataFrame, canonical: str) -> np.ndarray:
    lookup = {str(c).strip().lower(): c for c in df.columns}
    for alias in _COLUMN_ALIASES[canonical]:
        if alias in lookup:
            return df[lookup[alias]].to_numpy(dtype=float)
    raise ValueError(f"DataFrame has no {canonical} column (looked for {list(_COLUMN_ALIASES[canonical])})")


class Projection(ABC):
    @abstractmethod
    def project(self, df: pd.DataFrame) -> pd.DataFrame:
        """Adds Easting/Northing computed from Latitude/Longitude."""
        pass

    @abstractmethod
    def unproject(self, df: pd.DataFrame) -> pd.DataFrame:
        """Adds Latitude/Longitude computed from Easting/Northing."""
        pass


class NZTMProjection(Projection):
    def __init__(self, tm: Optional[TMProjection] = None, config: ConversionConfig = DEFAULT_CONFIG):
        self.tm = tm if tm is not None else get_nztm_projection()
        self.config = config

    def project(self, df: pd.DataFrame) -> pd.DataFrame:
        """
        Projects geodetic coordinates (decimal degrees) to NZTM metres.
        Values are not rounded; the input frame is left untouched.
        """
        lat = _column(df, "Latitude")
        lon = _column(df, "Longitude")
        if np.any(np.abs(lat) > 90.0):
            bad = int(np.count_nonzero(np.abs(lat) > 90.0))
            raise InvalidInputError(f"{bad} latitude(s) outside -90 to 90 degrees")

        easting, northing = geod_to_tm(
            self.tm, np.radians(lat), np.radians(lon),
            max_dlon=math.radians(self.config.max_longitude_offset),
        )
        out = df.copy()
        out["Easting"] = easting
        out["Northing"] = northing
        return out

    def unproject(self, df: pd.DataFrame) -> pd.DataFrame:
        """
        Converts NZTM metres to geodetic coordinates (decimal degrees).
        """
        easting = _column(df, "Easting")
        northing = _column(df, "Northing")

        lat, lon = tm_to_geod(
            self.tm, easting, northing,
            max_dlon=math.radians(self.config.max_longitude_offset),
        )
        out = df.copy()
        out["Latitude"] = np.degrees(lat)
        out["Longitude"] = np.degrees(lon)
        return out


class ProjectionFactory:
    @staticmethod
    def create(method: str, **kwargs) -> Projection:
        if method == "nztm":
            return NZTMProjection(**kwargs)
        else:
            raise ValueError(f"Unknown projection method: {method}")
