"""
Coercion of the EXIF scalars whose JSON type varies between cameras.

Each function returns the normalized value or raises a MetadataError
subclass; the caller decides how to report it.
"""
import re
from decimal import Decimal
from typing import List, Optional, Tuple

from ..exceptions import MalformedValueError, UnexpectedShapeError
from ..models import ExifOutput, RawValue, ValueKind

_DIGITS = re.compile(r"[0-9]+")


def format_number(value: float) -> str:
    """
    Shortest decimal text for a number, never in exponent form.

    1.0 -> "1", 0.005 -> "0.005", 1e-05 -> "0.00001"
    """
    if isinstance(value, int):
        return str(value)
    text = format(Decimal(repr(value)), 'f')
    if '.' in text:
        text = text.rstrip('0').rstrip('.')
    return text


def format_optional_number(value: Optional[float]) -> str:
    if value is None:
        return ""
    return format_number(value)


def normalize_iso(raw: RawValue) -> str:
    if raw.kind is ValueKind.ABSENT:
        return ""
    if raw.kind is ValueKind.INTEGER:
        return str(raw.value)
    if raw.kind is ValueKind.FLOAT:
        return format_number(raw.value)
    if raw.kind is ValueKind.STRING:
        # Some cameras write "ISO 400" or "400 (auto)"
        match = _DIGITS.search(raw.value)
        return match.group(0) if match else ""
    raise UnexpectedShapeError(f"Unexpected ISO type: {type(raw.value).__name__} ({raw.value!r})", raw.value)


def normalize_exposure_time(raw: RawValue) -> str:
    if raw.kind is ValueKind.ABSENT:
        # Videos don't have one
        return ""
    if raw.kind in (ValueKind.INTEGER, ValueKind.FLOAT):
        return format_number(raw.value)
    if raw.kind is ValueKind.STRING:
        return raw.value
    raise UnexpectedShapeError(f"Unexpected ExposureTime type: {type(raw.value).__name__} ({raw.value!r})", raw.value)


def normalize_keywords(raw: RawValue) -> List[str]:
    if raw.kind is ValueKind.ABSENT:
        return []
    if raw.kind is ValueKind.STRING_LIST:
        return list(raw.value)
    if raw.kind is ValueKind.STRING:
        return [raw.value]
    raise UnexpectedShapeError(f"Unexpected keyword type: {type(raw.value).__name__} ({raw.value!r})", raw.value)


def resolve_dimensions(exif: ExifOutput) -> Tuple[int, int]:
    """File group dimensions win over QuickTime; each pair is used only when complete."""
    if exif.file.image_width and exif.file.image_height:
        return exif.file.image_width, exif.file.image_height
    if exif.quicktime.image_width and exif.quicktime.image_height:
        return exif.quicktime.image_width, exif.quicktime.image_height
    return 0, 0


def parse_duration(duration: str) -> float:
    """Parses exiftool's "10.15 s"; only the leading number is used."""
    if not duration:
        return 0.0
    token = duration.split(" ")[0]
    try:
        return float(token)
    except ValueError:
        raise MalformedValueError(f"Unsupported duration: '{duration}'", duration) from None
