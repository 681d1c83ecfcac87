"""EXIF GPS extraction.

Best-effort parsing: nothing here raises on bad metadata; callers get `None`
when a photo carries no usable coordinates.
"""

from __future__ import annotations

from collections.abc import Mapping
import math
import numbers
from typing import Any

from loguru import logger
from PIL import ExifTags, Image

_LAT_KEYS = ("GPSLatitude", "gpsLatitude", "latitude")
_LON_KEYS = ("GPSLongitude", "gpsLongitude", "longitude")
_LAT_REF_KEYS = ("GPSLatitudeRef", "gpsLatitudeRef")
_LON_REF_KEYS = ("GPSLongitudeRef", "gpsLongitudeRef")


def _first(exif: Mapping[str, Any], keys: tuple[str, ...]) -> Any:
    for key in keys:
        value = exif.get(key)
        if value is not None:
            return value
    return None


def _component(value: Any) -> float:
    """One DMS component: a number, a rational, a (num, den) pair or "n/d"."""
    if isinstance(value, tuple) and len(value) == 2:
        num, den = value
        return float(num) / float(den) if float(den) else float(num)
    if isinstance(value, str) and "/" in value:
        num, den = (float(x) for x in value.split("/", 1))
        return num / den if den else num
    return float(value)


def _dms_to_degrees(parts: list[Any]) -> float | None:
    deg, minutes, seconds = (list(parts) + [0, 0])[:3]
    value = _component(deg) + _component(minutes) / 60 + _component(seconds) / 3600
    return value if math.isfinite(value) else None


def _to_degrees(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        if isinstance(value, numbers.Real):
            number = float(value)
            return number if math.isfinite(number) else None
        if isinstance(value, (list, tuple)):
            return _dms_to_degrees(list(value)) if value else None
        if isinstance(value, str):
            parts = [p.strip() for p in value.split(",")]
            if len(parts) == 1:
                number = _component(parts[0])
                return number if math.isfinite(number) else None
            return _dms_to_degrees(parts)
    except (TypeError, ValueError, ZeroDivisionError) as ex:
        logger.debug("Unparseable GPS component {!r}: {}", value, ex)
    return None


def _ref(value: Any) -> str:
    if isinstance(value, bytes):
        value = value.decode("ascii", errors="ignore")
    return str(value or "").strip().upper()


def extract_gps_from_exif(exif: Mapping[str, Any] | None) -> tuple[float, float] | None:
    """Return (latitude, longitude) from an EXIF mapping, or None.

    Coordinates may be decimal numbers, [deg, min, sec] sequences or strings
    such as "12,34,56" and "12/1,34/1,56/1". `S`/`W` refs make them negative.
    """
    if not exif:
        return None

    lat = _to_degrees(_first(exif, _LAT_KEYS))
    lon = _to_degrees(_first(exif, _LON_KEYS))
    if lat is None or lon is None:
        return None

    if _ref(_first(exif, _LAT_REF_KEYS)) == "S":
        lat = -abs(lat)
    if _ref(_first(exif, _LON_REF_KEYS)) == "W":
        lon = -abs(lon)
    return lat, lon


def read_exif_gps_tags(path: str) -> dict[str, Any]:
    """Read the GPS IFD of an image file as a name -> value mapping."""
    try:
        with Image.open(path) as im:
            gps_ifd = im.getexif().get_ifd(ExifTags.IFD.GPSInfo)
    except (OSError, ValueError, TypeError) as ex:
        logger.debug("EXIF read failed for {}: {}", path, ex)
        return {}
    return {ExifTags.GPSTAGS.get(tag, str(tag)): value for tag, value in gps_ifd.items()}


def read_gps_from_image(path: str) -> tuple[float, float] | None:
    """Coordinates embedded in the photo at `path`, or None."""
    return extract_gps_from_exif(read_exif_gps_tags(path))
