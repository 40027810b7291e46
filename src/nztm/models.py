from __future__ import annotations

from dataclasses import dataclass


# GRS80 ellipsoid, used by the NZGD2000 datum (and hence by NZTM)
NZTM_A = 6378137.0
NZTM_RF = 298.257222101

NZTM_CM = 173.0
NZTM_OLAT = 0.0
NZTM_SF = 0.9996
NZTM_FE = 1600000.0
NZTM_FN = 10000000.0
NZTM_UTOM = 1.0

# EPSG codes for NZGD2000 geographic and NZTM2000 projected
NZGD2000_EPSG = 4167
NZTM2000_EPSG = 2193


@dataclass(frozen=True)
class ConversionConfig:
    """
    Boundary behaviour of the NZTM entry points.

    degree_places:
      decimals kept on latitude/longitude results.
    metre_places:
      decimals kept on easting/northing results. 0 returns integers.
    max_longitude_offset:
      degrees from the central meridian beyond which an
      OutOfValidRegionWarning is issued.
    """
    degree_places: int = 6
    metre_places: int = 0
    max_longitude_offset: float = 10.0


DEFAULT_CONFIG = ConversionConfig()
