import logging
import os
from datetime import datetime, timezone
from typing import Optional, Tuple

from .. import config
from ..exceptions import MalformedValueError
from ..models import CandidateFile


def parse_content_create_date(value: str) -> datetime:
    """QuickTime ContentCreateDate, e.g. "2016:07:15 10:20:30-07:00"."""
    try:
        return datetime.strptime(value, config.CONTENT_CREATE_DATE_FORMAT)
    except ValueError as e:
        raise MalformedValueError(f"Failed parsing ContentCreateDate '{value}': {e}", value) from e


def parse_utc_date(value: str) -> datetime:
    """QuickTime CreateDate is UTC by definition; it carries no offset."""
    try:
        return datetime.strptime(value, config.EXIF_DATE_FORMAT).replace(tzinfo=timezone.utc)
    except ValueError as e:
        raise MalformedValueError(f"Failed parsing CreateDate '{value}': {e}", value) from e


def parse_local_date(value: str) -> datetime:
    """EXIF dates are wall-clock time of the camera; read them in the local zone."""
    try:
        return datetime.strptime(value, config.EXIF_DATE_FORMAT).astimezone()
    except ValueError as e:
        raise MalformedValueError(f"Failed parsing '{value}': {e}", value) from e


def file_creation_time(path: str) -> Optional[datetime]:
    """
    Creation time from the file system, in the local zone.
    Uses st_birthtime where the platform reports it, else st_ctime.
    """
    try:
        st = os.stat(path)
    except OSError as e:
        logging.warning(f"Unable to stat {path} for a timestamp: {e}")
        return None
    ts = getattr(st, 'st_birthtime', None) or st.st_ctime
    return datetime.fromtimestamp(ts).astimezone()


def first_exif_date(candidate: CandidateFile) -> str:
    for tag in config.EXIF_DATE_TAGS:
        value = getattr(candidate.exif.exif, tag)
        if value:
            return value
    return ""


def resolve_datetime(candidate: CandidateFile) -> Optional[datetime]:
    """
    Picks the capture time from the first source that parses.

    Priority: QuickTime ContentCreateDate -> QuickTime CreateDate ->
    EXIF (CreateDate, DateTimeOriginal, ModifyDate) -> file system.
    """
    qt = candidate.exif.quicktime
    sources = []
    if qt.content_create_date:
        sources.append((parse_content_create_date, qt.content_create_date))
    if qt.create_date:
        sources.append((parse_utc_date, qt.create_date))
    exif_date = first_exif_date(candidate)
    if exif_date:
        sources.append((parse_local_date, exif_date))

    for parse, value in sources:
        try:
            return parse(value)
        except MalformedValueError as e:
            logging.warning(f"{e} (in {candidate.full_path})")

    logging.debug(f"No metadata date for {candidate.full_path}; using file system timestamp")
    dt = file_creation_time(candidate.full_path)
    if dt is None:
        logging.warning(f"No usable date for {candidate.full_path}")
    return dt


def date_fields(dt: datetime) -> Tuple[str, str, str]:
    """
    Returns (YYYYMMDD, day name, month name) in the timestamp's own zone.

    Names hold the full and abbreviated forms, "Wednesday Wed", so a search
    for either one matches.
    """
    day = config.DAY_NAMES[dt.weekday()]
    month = config.MONTH_NAMES[dt.month - 1]
    return (
        dt.strftime(config.DATE_BUCKET_FORMAT),
        f"{day} {day[:3]}",
        f"{month} {month[:3]}",
    )
