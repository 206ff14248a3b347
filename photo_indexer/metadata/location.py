"""
GPS resolution.

exiftool reports a position two ways: the Composite GPSPosition string
("47 deg 37' 23.06\" N, 122 deg 20' 59.08\" W") and the discrete EXIF
GPSLatitude/GPSLatitudeRef/GPSLongitude/GPSLongitudeRef tags. The composite
form is tried first.
"""
import logging
from typing import Optional, Tuple

from .. import config
from ..exceptions import IncompleteLocationError, MalformedValueError
from ..models import CandidateFile, GeoPoint


def dms_to_decimal(dms: str, seconds_denominator: float = config.DMS_SECONDS_DENOMINATOR) -> float:
    """Converts "47 deg 37' 23.06\"" to decimal degrees (unsigned)."""
    tokens = dms.split(" ")
    if len(tokens) != 4:
        raise MalformedValueError(f"Invalid DMS (wrong number of tokens): {dms}", dms)

    try:
        degrees = int(tokens[0])
        minutes = int(tokens[2][:-1])
        seconds = float(tokens[3][:-1])
    except ValueError as e:
        raise MalformedValueError(f"Unable to convert DMS '{dms}': {e}", dms) from e

    return degrees + (minutes / 60.0) + (seconds / seconds_denominator)


def split_gps_position(position: str) -> Tuple[str, str, str, str]:
    """
    Splits a composite position into (latitude, lat ref, longitude, lon ref),
    with refs spelled out as exiftool writes them in the discrete tags.
    """
    parts = position.split(",")
    if len(parts) != 2:
        raise MalformedValueError(f"Unsupported GPSPosition: '{position}'", position)

    lat_value = parts[0].strip(" ")
    lat_tokens = lat_value.split(" ")
    if len(lat_tokens) != 5:
        raise MalformedValueError(f"Unsupported GPSPosition (latitude): '{position}'", position)

    lon_value = parts[1].strip(" ")
    lon_tokens = lon_value.split(" ")
    if len(lon_tokens) != 5:
        raise MalformedValueError(f"Unsupported GPSPosition (longitude): '{position}'", position)

    lat_ref = config.LATITUDE_REFS.get(lat_tokens[4])
    if lat_ref is None:
        raise MalformedValueError(f"Unsupported GPSPosition (latitude ref): '{position}'", position)
    lon_ref = config.LONGITUDE_REFS.get(lon_tokens[4])
    if lon_ref is None:
        raise MalformedValueError(f"Unsupported GPSPosition (longitude ref): '{position}'", position)

    return lat_value.rstrip("NSEW "), lat_ref, lon_value.rstrip("NSEW "), lon_ref


def location_from_refs(latitude: str, latitude_ref: str, longitude: str, longitude_ref: str) -> Optional[GeoPoint]:
    """
    All or nothing: returns None when no GPS tag is set, raises when only
    some are or when a value doesn't parse.
    """
    if not (latitude or latitude_ref or longitude or longitude_ref):
        return None

    location = f"{latitude} {latitude_ref}, {longitude} {longitude_ref}"
    if not (latitude and latitude_ref and longitude and longitude_ref):
        raise IncompleteLocationError(f"Ignoring poorly formed location: {location}", location)

    if latitude_ref not in config.LATITUDE_REFS.values() or longitude_ref not in config.LONGITUDE_REFS.values():
        raise MalformedValueError(
            f"Ignoring poorly formed location - invalid reference: '{latitude_ref}', '{longitude_ref}' ({location})",
            location,
        )

    lat = dms_to_decimal(latitude)
    lon = dms_to_decimal(longitude)

    if latitude_ref in config.NEGATIVE_REFS:
        lat = -lat
    if longitude_ref in config.NEGATIVE_REFS:
        lon = -lon

    return GeoPoint(latitude=lat, longitude=lon)


def resolve_location(candidate: CandidateFile) -> Optional[GeoPoint]:
    exif = candidate.exif
    position = exif.composite.gps_position
    if position:
        try:
            return location_from_refs(*split_gps_position(position))
        except (MalformedValueError, IncompleteLocationError) as e:
            logging.warning(f"{e} (in {candidate.full_path})")

    try:
        return location_from_refs(
            exif.exif.gps_latitude,
            exif.exif.gps_latitude_ref,
            exif.exif.gps_longitude,
            exif.exif.gps_longitude_ref,
        )
    except (MalformedValueError, IncompleteLocationError) as e:
        logging.warning(f"{e} (in {candidate.full_path})")
        return None
