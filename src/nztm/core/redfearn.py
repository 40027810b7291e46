"""
Transverse Mercator projection by Redfearn's series.

Method based on Redfearn's formulation as expressed in the GDA technical
manual (ICSM). Loosely based on FORTRAN source code by J.Hannah and
A.Broadhurst.

Latitudes and longitudes are in radians, eastings and northings in grid
units. Inputs may be scalars or numpy arrays of matching shape.
"""
from __future__ import annotations

import warnings
from typing import Optional, Tuple

import numpy as np

from nztm.core.ellipsoid import TMProjection
from nztm.core.meridian import ArrayLike, foot_point_lat, meridian_arc
from nztm.exceptions import InvalidInputError, OutOfValidRegionWarning, SingularInputError

# cos(latitude) below this is treated as a pole
_POLE_TOLERANCE = 1e-12


def _as_finite(name: str, value: ArrayLike) -> np.ndarray:
    try:
        arr = np.asarray(value, dtype=float)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"{name} must be numeric, got {value!r}") from e
    if not np.all(np.isfinite(arr)):
        raise InvalidInputError(f"{name} must be finite, got {value!r}")
    return arr


def _warn_if_far(dlon: np.ndarray, max_dlon: Optional[float]) -> None:
    if max_dlon is None:
        return
    far = np.abs(dlon) > max_dlon
    if np.any(far):
        warnings.warn(
            f"{int(np.count_nonzero(far))} point(s) lie more than "
            f"{np.degrees(max_dlon):.1f} degrees from the central meridian "
            f"(max {np.degrees(np.max(np.abs(dlon))):.3f}); accuracy is degraded",
            OutOfValidRegionWarning,
            stacklevel=3,
        )


def normalize_longitude(dlon: ArrayLike) -> ArrayLike:
    """Reduces a longitude difference into (-pi, pi]."""
    dlon = np.asarray(dlon, dtype=float)
    return np.pi - np.mod(np.pi - dlon, 2.0 * np.pi)


def geod_to_tm(
    tm: TMProjection,
    lt: ArrayLike,
    ln: ArrayLike,
    max_dlon: Optional[float] = None,
) -> Tuple[ArrayLike, ArrayLike]:
    """
    Converts latitude and longitude to Transverse Mercator.

    Args:
        tm: projection
        lt: latitude (radians)
        ln: longitude (radians)
        max_dlon: warn with OutOfValidRegionWarning beyond this many radians
            from the central meridian (None disables the check)

    Returns:
        (easting, northing) in grid units

    Raises:
        InvalidInputError: for non-finite input
        SingularInputError: for a latitude at a pole
    """
    lt = _as_finite("latitude", lt)
    ln = _as_finite("longitude", ln)

    fn = tm.falsen
    fe = tm.falsee
    sf = tm.scalef
    e2 = tm.e2
    a = tm.a
    cm = tm.meridian
    om = tm.om
    utom = tm.utom

    dlon = normalize_longitude(ln - cm)
    _warn_if_far(dlon, max_dlon)

    m = meridian_arc(tm, lt)

    slt = np.sin(lt)

    eslt = 1.0 - e2 * slt * slt
    eta = a / np.sqrt(eslt)
    rho = eta * (1.0 - e2) / eslt
    psi = eta / rho

    clt = np.cos(lt)
    if np.any(np.abs(clt) < _POLE_TOLERANCE):
        raise SingularInputError("Latitude at a pole cannot be projected")
    w = dlon

    wc = clt * w
    wc2 = wc * wc

    t = slt / clt
    t2 = t * t
    t4 = t2 * t2
    t6 = t2 * t4

    trm1 = (psi - t2) / 6.0

    trm2 = (((4.0 * (1.0 - 6.0 * t2) * psi
              + (1.0 + 8.0 * t2)) * psi
             - 2.0 * t2) * psi + t4) / 120.0

    trm3 = (61.0 - 479.0 * t2 + 179.0 * t4 - t6) / 5040.0

    gce = (sf * eta * dlon * clt) * (((trm3 * wc2 + trm2) * wc2 + trm1) * wc2 + 1.0)
    ce = gce / utom + fe

    trm1 = 1.0 / 2.0

    trm2 = ((4.0 * psi + 1.0) * psi - t2) / 24.0

    trm3 = ((((8.0 * (11.0 - 24.0 * t2) * psi
               - 28.0 * (1.0 - 6.0 * t2)) * psi
              + (1.0 - 32.0 * t2)) * psi
             - 2.0 * t2) * psi
            + t4) / 720.0

    trm4 = (1385.0 - 3111.0 * t2 + 543.0 * t4 - t6) / 40320.0

    gcn = (eta * t) * ((((trm4 * wc2 + trm3) * wc2 + trm2) * wc2 + trm1) * wc2)
    cn = (gcn + m - om) * sf / utom + fn

    return ce, cn


def tm_to_geod(
    tm: TMProjection,
    ce: ArrayLike,
    cn: ArrayLike,
    max_dlon: Optional[float] = None,
) -> Tuple[ArrayLike, ArrayLike]:
    """
    Converts Transverse Mercator to latitude and longitude.

    Args:
        tm: projection
        ce: easting (grid units)
        cn: northing (grid units)
        max_dlon: warn with OutOfValidRegionWarning when the result lies
            beyond this many radians from the central meridian

    Returns:
        (latitude, longitude) in radians

    Raises:
        InvalidInputError: for non-finite input
        SingularInputError: when the foot point latitude is at a pole
    """
    ce = _as_finite("easting", ce)
    cn = _as_finite("northing", cn)

    fn = tm.falsen
    fe = tm.falsee
    sf = tm.scalef
    e2 = tm.e2
    a = tm.a
    cm = tm.meridian
    om = tm.om
    utom = tm.utom

    cn1 = (cn - fn) * utom / sf + om
    fphi = foot_point_lat(tm, cn1)
    slt = np.sin(fphi)
    clt = np.cos(fphi)
    if np.any(np.abs(clt) < _POLE_TOLERANCE):
        raise SingularInputError("Foot point latitude is at a pole")

    eslt = 1.0 - e2 * slt * slt
    eta = a / np.sqrt(eslt)
    rho = eta * (1.0 - e2) / eslt
    psi = eta / rho

    E = (ce - fe) * utom
    x = E / (eta * sf)
    x2 = x * x

    t = slt / clt
    t2 = t * t
    t4 = t2 * t2

    trm1 = 1.0 / 2.0

    trm2 = ((-4.0 * psi + 9.0 * (1.0 - t2)) * psi + 12.0 * t2) / 24.0

    trm3 = ((((8.0 * (11.0 - 24.0 * t2) * psi
               - 12.0 * (21.0 - 71.0 * t2)) * psi
              + 15.0 * ((15.0 * t2 - 98.0) * t2 + 15.0)) * psi
             + 180.0 * ((-3.0 * t2 + 5.0) * t2)) * psi + 360.0 * t4) / 720.0

    trm4 = (((1575.0 * t2 + 4095.0) * t2 + 3633.0) * t2 + 1385.0) / 40320.0

    lt = fphi + (t * x * E / (sf * rho)) * (((trm4 * x2 - trm3) * x2 + trm2) * x2 - trm1)

    trm1 = 1.0

    trm2 = (psi + 2.0 * t2) / 6.0

    trm3 = (((-4.0 * (1.0 - 6.0 * t2) * psi
              + (9.0 - 68.0 * t2)) * psi
             + 72.0 * t2) * psi
            + 24.0 * t4) / 120.0

    trm4 = (((720.0 * t2 + 1320.0) * t2 + 662.0) * t2 + 61.0) / 5040.0

    ln = cm - (x / clt) * (((trm4 * x2 - trm3) * x2 + trm2) * x2 - trm1)

    _warn_if_far(ln - cm, max_dlon)
    return lt, ln
