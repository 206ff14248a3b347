import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional


class ValueKind(Enum):
    ABSENT = "absent"
    INTEGER = "integer"
    FLOAT = "float"
    STRING = "string"
    STRING_LIST = "string_list"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class RawValue:
    """
    A tag whose JSON type depends on the camera or codec.

    exiftool emits ISO as 400 on most cameras and as "ISO 400" on a few,
    ExposureTime as 1 or "1/200", and Keywords as either a string or a list.
    """
    kind: ValueKind
    value: Any = None

    @classmethod
    def classify(cls, obj: Any) -> "RawValue":
        if obj is None:
            return cls(ValueKind.ABSENT)
        # bool is an int subclass, but never a legitimate tag value here
        if isinstance(obj, bool):
            return cls(ValueKind.UNKNOWN, obj)
        if isinstance(obj, int):
            return cls(ValueKind.INTEGER, obj)
        if isinstance(obj, float):
            return cls(ValueKind.FLOAT, obj)
        if isinstance(obj, str):
            return cls(ValueKind.STRING, obj)
        if isinstance(obj, (list, tuple)) and all(isinstance(v, str) for v in obj):
            return cls(ValueKind.STRING_LIST, list(obj))
        return cls(ValueKind.UNKNOWN, obj)

    @property
    def is_absent(self) -> bool:
        return self.kind is ValueKind.ABSENT


ABSENT = RawValue(ValueKind.ABSENT)


# --- exiftool output (-json -groupHeadings) ---

@dataclass(frozen=True)
class ExifFileGroup:
    mime_type: str = ""
    image_width: int = 0
    image_height: int = 0


@dataclass(frozen=True)
class ExifGroup:
    aperture_value: Optional[float] = None
    create_date: str = ""
    date_time_original: str = ""
    modify_date: str = ""
    exposure_program: str = ""
    exposure_time: RawValue = ABSENT
    flash: str = ""
    f_number: Optional[float] = None
    focal_length: str = ""
    gps_latitude_ref: str = ""
    gps_latitude: str = ""
    gps_longitude_ref: str = ""
    gps_longitude: str = ""
    iso: RawValue = ABSENT
    lens_info: str = ""
    lens_model: str = ""
    make: str = ""
    model: str = ""
    white_balance: str = ""


@dataclass(frozen=True)
class QuickTimeGroup:
    content_create_date: str = ""
    create_date: str = ""
    modify_date: str = ""
    image_width: int = 0
    image_height: int = 0
    duration: str = ""


@dataclass(frozen=True)
class CompositeGroup:
    gps_position: str = ""


@dataclass(frozen=True)
class IptcGroup:
    keywords: RawValue = ABSENT


@dataclass(frozen=True)
class ExifOutput:
    source_file: str = ""
    file: ExifFileGroup = field(default_factory=ExifFileGroup)
    exif: ExifGroup = field(default_factory=ExifGroup)
    iptc: IptcGroup = field(default_factory=IptcGroup)
    quicktime: QuickTimeGroup = field(default_factory=QuickTimeGroup)
    composite: CompositeGroup = field(default_factory=CompositeGroup)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ExifOutput":
        """
        Builds the model from one object of `exiftool -json -groupHeadings`.

        Group and tag names are matched case-insensitively (exiftool writes
        'QuickTime'). Missing groups and tags fall back to empty defaults.
        """
        file_tags = _group(data, "File")
        exif_tags = _group(data, "EXIF")
        qt_tags = _group(data, "QuickTime")
        composite_tags = _group(data, "Composite")
        iptc_tags = _group(data, "IPTC")

        return cls(
            source_file=_to_str(_lookup(data, "SourceFile")),
            file=ExifFileGroup(
                mime_type=_to_str(_lookup(file_tags, "MIMEType")),
                image_width=_to_int(_lookup(file_tags, "ImageWidth")),
                image_height=_to_int(_lookup(file_tags, "ImageHeight")),
            ),
            exif=ExifGroup(
                aperture_value=_to_float(_lookup(exif_tags, "ApertureValue")),
                create_date=_to_str(_lookup(exif_tags, "CreateDate")),
                date_time_original=_to_str(_lookup(exif_tags, "DateTimeOriginal")),
                modify_date=_to_str(_lookup(exif_tags, "ModifyDate")),
                exposure_program=_to_str(_lookup(exif_tags, "ExposureProgram")),
                exposure_time=RawValue.classify(_lookup(exif_tags, "ExposureTime")),
                flash=_to_str(_lookup(exif_tags, "Flash")),
                f_number=_to_float(_lookup(exif_tags, "FNumber")),
                focal_length=_to_str(_lookup(exif_tags, "FocalLength")),
                gps_latitude_ref=_to_str(_lookup(exif_tags, "GPSLatitudeRef")),
                gps_latitude=_to_str(_lookup(exif_tags, "GPSLatitude")),
                gps_longitude_ref=_to_str(_lookup(exif_tags, "GPSLongitudeRef")),
                gps_longitude=_to_str(_lookup(exif_tags, "GPSLongitude")),
                iso=RawValue.classify(_lookup(exif_tags, "ISO")),
                lens_info=_to_str(_lookup(exif_tags, "LensInfo")),
                lens_model=_to_str(_lookup(exif_tags, "LensModel")),
                make=_to_str(_lookup(exif_tags, "Make")),
                model=_to_str(_lookup(exif_tags, "Model")),
                white_balance=_to_str(_lookup(exif_tags, "WhiteBalance")),
            ),
            iptc=IptcGroup(
                keywords=RawValue.classify(_lookup(iptc_tags, "Keywords")),
            ),
            quicktime=QuickTimeGroup(
                content_create_date=_to_str(_lookup(qt_tags, "ContentCreateDate")),
                create_date=_to_str(_lookup(qt_tags, "CreateDate")),
                modify_date=_to_str(_lookup(qt_tags, "ModifyDate")),
                image_width=_to_int(_lookup(qt_tags, "ImageWidth")),
                image_height=_to_int(_lookup(qt_tags, "ImageHeight")),
                duration=_to_str(_lookup(qt_tags, "Duration")),
            ),
            composite=CompositeGroup(
                gps_position=_to_str(_lookup(composite_tags, "GPSPosition")),
            ),
        )


@dataclass(frozen=True)
class CandidateFile:
    """
    A discovered media file plus its extracted metadata, awaiting preparation.
    """
    full_path: str
    aliased_path: str
    signature: str
    length_in_bytes: int
    exif: ExifOutput = field(default_factory=ExifOutput)


@dataclass
class GeoPoint:
    latitude: float
    longitude: float


@dataclass
class Media:
    """
    The search-ready record for one media file.
    """
    signature: str
    filename: str
    path: str
    length_in_bytes: int

    mime_type: str = ""
    width: int = 0
    height: int = 0
    duration_seconds: float = 0.0

    # EXIF info
    aperture: str = ""
    exposure_program: str = ""
    exposure_time: str = ""
    flash: str = ""
    f_number: str = ""
    focal_length: str = ""
    iso: str = ""
    white_balance: str = ""
    lens_info: str = ""
    lens_model: str = ""
    camera_make: str = ""
    camera_model: str = ""

    keywords: List[str] = field(default_factory=list)

    # Both coordinates or nothing
    location: Optional[GeoPoint] = None

    # Filled in by place-name resolution
    country_name: str = ""
    country_code: str = ""
    city_name: str = ""
    site_name: str = ""
    place_name: str = ""

    date_time: Optional[datetime] = None
    date: str = ""          # YYYYMMDD, for aggregating by date
    day_name: str = ""      # "Wednesday Wed"
    month_name: str = ""    # "April Apr"

    def to_document(self) -> Dict[str, Any]:
        """Returns the search index document, omitting empty optional fields."""
        doc: Dict[str, Any] = {
            'signature': self.signature,
            'filename': self.filename,
            'path': self.path,
            'lengthinbytes': self.length_in_bytes,
        }

        optional = [
            ('mimetype', self.mime_type),
            ('width', self.width),
            ('height', self.height),
            ('durationseconds', self.duration_seconds),
            ('aperture', self.aperture),
            ('exposureprogram', self.exposure_program),
            ('exposuretime', self.exposure_time),
            ('flash', self.flash),
            ('fnumber', self.f_number),
            ('focallength', self.focal_length),
            ('iso', self.iso),
            ('whitebalance', self.white_balance),
            ('lensinfo', self.lens_info),
            ('lensmodel', self.lens_model),
            ('cameramake', self.camera_make),
            ('cameramodel', self.camera_model),
            ('keywords', list(self.keywords)),
            ('countryname', self.country_name),
            ('countrycode', self.country_code),
            ('cityname', self.city_name),
            ('sitename', self.site_name),
            ('placename', self.place_name),
        ]
        for key, value in optional:
            if value:
                doc[key] = value

        if self.location is not None:
            doc['location'] = {'lat': self.location.latitude, 'lon': self.location.longitude}

        doc['datetime'] = self.date_time.isoformat() if self.date_time else None
        doc['date'] = self.date
        doc['dayname'] = self.day_name
        doc['monthname'] = self.month_name
        return doc


# --- Helpers for loosely typed JSON ---

def _lookup(tags: Dict[str, Any], name: str) -> Any:
    if name in tags:
        return tags[name]
    lowered = name.lower()
    for key, value in tags.items():
        if key.lower() == lowered:
            return value
    return None


def _group(data: Dict[str, Any], name: str) -> Dict[str, Any]:
    value = _lookup(data, name)
    return value if isinstance(value, dict) else {}


def _to_str(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _to_int(value: Any) -> int:
    if value is None or isinstance(value, bool):
        return 0
    try:
        return int(value)
    except (TypeError, ValueError):
        logging.debug(f"Ignoring non-integer dimension: {value!r}")
        return 0


def _to_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        logging.debug(f"Ignoring non-numeric value: {value!r}")
        return None
