import logging
import os

from ..exceptions import MetadataError
from ..models import CandidateFile, Media
from . import dates, fields, location


class MediaNormalizer:
    """
    Turns one CandidateFile into one Media record.

    Stateless and safe to share between worker threads. Every field is
    populated independently; a field that can't be normalized is logged and
    left empty, and the record is still returned.
    """

    def normalize(self, candidate: CandidateFile) -> Media:
        exif = candidate.exif
        media = Media(
            signature=candidate.signature,
            filename=os.path.basename(candidate.full_path),
            path=candidate.aliased_path,
            length_in_bytes=candidate.length_in_bytes,
            mime_type=exif.file.mime_type,
            aperture=fields.format_optional_number(exif.exif.aperture_value),
            exposure_program=exif.exif.exposure_program,
            flash=exif.exif.flash,
            f_number=fields.format_optional_number(exif.exif.f_number),
            focal_length=exif.exif.focal_length,
            white_balance=exif.exif.white_balance,
            lens_info=exif.exif.lens_info,
            lens_model=exif.exif.lens_model,
            camera_make=exif.exif.make,
            camera_model=exif.exif.model,
        )

        for populate in (
            self._populate_iso,
            self._populate_exposure_time,
            self._populate_keywords,
            self._populate_date_time,
            self._populate_location,
            self._populate_dimensions,
        ):
            try:
                populate(media, candidate)
            except MetadataError as e:
                logging.warning(f"{e} (in {candidate.full_path})")
            except Exception:
                # Keep the partial record; one bad field must not drop the file
                logging.exception(f"Unexpected failure in {populate.__name__} for {candidate.full_path}")

        return media

    def _populate_iso(self, media: Media, candidate: CandidateFile):
        media.iso = fields.normalize_iso(candidate.exif.exif.iso)

    def _populate_exposure_time(self, media: Media, candidate: CandidateFile):
        media.exposure_time = fields.normalize_exposure_time(candidate.exif.exif.exposure_time)

    def _populate_keywords(self, media: Media, candidate: CandidateFile):
        media.keywords = fields.normalize_keywords(candidate.exif.iptc.keywords)

    def _populate_date_time(self, media: Media, candidate: CandidateFile):
        dt = dates.resolve_datetime(candidate)
        if dt is None:
            return
        media.date_time = dt
        media.date, media.day_name, media.month_name = dates.date_fields(dt)

    def _populate_location(self, media: Media, candidate: CandidateFile):
        media.location = location.resolve_location(candidate)

    def _populate_dimensions(self, media: Media, candidate: CandidateFile):
        media.width, media.height = fields.resolve_dimensions(candidate.exif)
        media.duration_seconds = fields.parse_duration(candidate.exif.quicktime.duration)
