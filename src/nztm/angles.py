from __future__ import annotations

import re


_DMS_RE = re.compile(
    r"""^\s*
    (?P<pre>[NSEW])?\s*
    (?P<deg>\d{1,3})\s*[°d]\s*
    (?:(?P<min>\d{1,2})\s*['′m]\s*)?
    (?:(?P<sec>\d+(?:\.\d+)?)\s*(?:"|″|s)\s*)?
    (?P<post>[NSEW])?
    \s*$""",
    re.VERBOSE | re.IGNORECASE,
)


def dms_to_decimal(dms: str) -> float:
    """
    Convert strings like:
      S37°18'53.4672"  -> -37.31485200
      175°04'06.56"E   ->  175.06848889
    The hemisphere letter may lead or trail, but exactly one is required.
    """
    m = _DMS_RE.match(dms)
    if not m or bool(m.group("pre")) == bool(m.group("post")):
        raise ValueError(f"Bad DMS format: {dms!r}")

    hem = (m.group("pre") or m.group("post")).upper()
    deg = float(m.group("deg"))
    minute = float(m.group("min") or 0.0)
    sec = float(m.group("sec") or 0.0)
    if minute >= 60.0 or sec >= 60.0:
        raise ValueError(f"Minutes and seconds must be below 60: {dms!r}")

    dec = deg + minute / 60.0 + sec / 3600.0
    if hem in ("S", "W"):
        dec = -dec
    return dec


def decimal_to_dms(value: float, positive: str = "N", negative: str = "S", places: int = 4) -> str:
    """Format decimal degrees as e.g. S37°18'53.4672"."""
    hem = negative if value < 0 else positive
    # Round on total seconds so 59.99995" carries into the minutes
    total = round(abs(value) * 3600.0, places)
    deg, rem = divmod(total, 3600.0)
    minute, sec = divmod(rem, 60.0)
    width = places + 3 if places else 2
    return f"{hem}{int(deg)}°{int(minute):02d}'{sec:0{width}.{places}f}\""


def parse_angle(text: str) -> float:
    """Decimal degrees, or a DMS string with a hemisphere letter."""
    try:
        return float(text)
    except ValueError:
        return dms_to_decimal(text)
