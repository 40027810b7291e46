from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace

from nztm.core.meridian import meridian_arc
from nztm.exceptions import ConfigurationError

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class TMProjection:
    """
    Parameters of a Transverse Mercator projection on an ellipsoid.

    Angles are in radians, distances in metres. Build it with
    define_tm_projection() so that the derived fields stay consistent.
    """
    a: float         # Semi-major axis
    rf: float        # Inverse flattening (0 for a sphere)
    f: float         # Flattening
    e2: float        # First eccentricity squared
    ep2: float       # Second eccentricity squared
    meridian: float  # Central meridian
    orglat: float    # Origin latitude
    scalef: float    # Scale factor on the central meridian
    falsee: float    # False easting
    falsen: float    # False northing
    utom: float      # Grid unit to metre conversion
    om: float        # Meridional arc at the origin latitude


def define_tm_projection(
    a: float,
    rf: float,
    cm: float,
    sf: float,
    lto: float,
    fe: float,
    fn: float,
    utom: float = 1.0,
) -> TMProjection:
    """
    Derives the ellipsoid constants of a TM projection.

    Args:
        a: semi-major axis (metres)
        rf: inverse flattening, 0 meaning a sphere
        cm: central meridian (radians)
        sf: scale factor on the central meridian
        lto: origin latitude (radians)
        fe: false easting (grid units)
        fn: false northing (grid units)
        utom: grid unit to metre conversion

    Raises:
        ConfigurationError: if a constant is not finite or out of range.
    """
    for name, value in (("a", a), ("rf", rf), ("cm", cm), ("sf", sf),
                        ("lto", lto), ("fe", fe), ("fn", fn), ("utom", utom)):
        if not math.isfinite(value):
            raise ConfigurationError(f"Projection constant {name} must be finite, got {value!r}")
    if a <= 0.0:
        raise ConfigurationError(f"Semi-major axis must be positive, got {a!r}")
    if rf < 0.0:
        raise ConfigurationError(f"Inverse flattening must not be negative, got {rf!r}")
    if sf <= 0.0:
        raise ConfigurationError(f"Scale factor must be positive, got {sf!r}")
    if utom <= 0.0:
        raise ConfigurationError(f"Unit to metre conversion must be positive, got {utom!r}")

    f = 1.0 / rf if rf != 0.0 else 0.0
    e2 = 2.0 * f - f * f
    ep2 = e2 / (1.0 - e2)

    # om depends on the ellipsoid only, so arc the origin on a provisional record
    provisional = TMProjection(
        a=float(a), rf=float(rf), f=f, e2=e2, ep2=ep2,
        meridian=float(cm), orglat=float(lto), scalef=float(sf),
        falsee=float(fe), falsen=float(fn), utom=float(utom), om=0.0,
    )
    om = float(meridian_arc(provisional, lto))
    tm = replace(provisional, om=om)

    LOGGER.debug("Defined TM projection a=%s rf=%s e2=%.12g om=%.4f", a, rf, e2, om)
    return tm
