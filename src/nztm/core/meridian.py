"""
Meridional arc and its inverse.

Method based on Redfearn's formulation as expressed in the GDA technical
manual (ICSM). Both functions accept scalars or numpy arrays.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Union

import numpy as np

if TYPE_CHECKING:
    from nztm.core.ellipsoid import TMProjection

ArrayLike = Union[float, np.ndarray]


def meridian_arc(tm: "TMProjection", lt: ArrayLike) -> ArrayLike:
    """
    Length of the meridional arc from the equator (Helmert formula).

    Args:
        tm: projection (only the ellipsoid is used)
        lt: latitude (radians)

    Returns the arc length in metres.
    """
    a = tm.a

    e2 = tm.e2
    e4 = e2 * e2
    e6 = e4 * e2

    A0 = 1.0 - (e2 / 4.0) - (3.0 * e4 / 64.0) - (5.0 * e6 / 256.0)
    A2 = (3.0 / 8.0) * (e2 + e4 / 4.0 + 15.0 * e6 / 128.0)
    A4 = (15.0 / 256.0) * (e4 + 3.0 * e6 / 4.0)
    A6 = 35.0 * e6 / 3072.0

    lt = np.asarray(lt, dtype=float)
    return a * (A0 * lt - A2 * np.sin(2.0 * lt) + A4 * np.sin(4.0 * lt) - A6 * np.sin(6.0 * lt))


def foot_point_lat(tm: "TMProjection", m: ArrayLike) -> ArrayLike:
    """
    Foot point latitude for a meridional arc length.

    Args:
        tm: projection (only the ellipsoid is used)
        m: meridional arc (metres)

    Returns the latitude (radians) whose meridional arc is m.
    """
    f = tm.f
    a = tm.a

    n = f / (2.0 - f)
    n2 = n * n
    n3 = n2 * n
    n4 = n2 * n2

    g = a * (1.0 - n) * (1.0 - n2) * (1.0 + 9.0 * n2 / 4.0 + 225.0 * n4 / 64.0)
    sig = np.asarray(m, dtype=float) / g

    return (sig + (3.0 * n / 2.0 - 27.0 * n3 / 32.0) * np.sin(2.0 * sig)
                + (21.0 * n2 / 16.0 - 55.0 * n4 / 32.0) * np.sin(4.0 * sig)
                + (151.0 * n3 / 96.0) * np.sin(6.0 * sig)
                + (1097.0 * n4 / 512.0) * np.sin(8.0 * sig))
