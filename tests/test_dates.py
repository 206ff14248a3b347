import os
from datetime import datetime, timedelta, timezone

import pytest
from photo_indexer.metadata import dates


def _fs_time(path):
    st = os.stat(path)
    ts = getattr(st, 'st_birthtime', None) or st.st_ctime
    return datetime.fromtimestamp(ts).astimezone()


ALL_SOURCES = {
    "QuickTime": {
        "ContentCreateDate": "2016:07:15 10:20:30-07:00",
        "CreateDate": "2016:07:16 01:00:00",
    },
    "EXIF": {
        "CreateDate": "2015:03:04 05:06:07",
        "DateTimeOriginal": "2014:01:02 03:04:05",
        "ModifyDate": "2013:12:24 18:00:00",
    },
}


def _without(tags, group, key):
    trimmed = {g: dict(v) for g, v in tags.items()}
    del trimmed[group][key]
    return trimmed


def test_content_create_date_wins(make_candidate):
    dt = dates.resolve_datetime(make_candidate(ALL_SOURCES))

    assert dt == datetime(2016, 7, 15, 10, 20, 30, tzinfo=timezone(timedelta(hours=-7)))
    assert dt.utcoffset() == timedelta(hours=-7)


def test_create_date_is_utc(make_candidate):
    tags = _without(ALL_SOURCES, "QuickTime", "ContentCreateDate")

    dt = dates.resolve_datetime(make_candidate(tags))

    assert dt == datetime(2016, 7, 16, 1, 0, 0, tzinfo=timezone.utc)


def test_exif_dates_in_order(make_candidate):
    tags = {"EXIF": dict(ALL_SOURCES["EXIF"])}
    assert dates.resolve_datetime(make_candidate(tags)) == datetime(2015, 3, 4, 5, 6, 7).astimezone()

    del tags["EXIF"]["CreateDate"]
    assert dates.resolve_datetime(make_candidate(tags)) == datetime(2014, 1, 2, 3, 4, 5).astimezone()

    del tags["EXIF"]["DateTimeOriginal"]
    assert dates.resolve_datetime(make_candidate(tags)) == datetime(2013, 12, 24, 18, 0, 0).astimezone()


def test_exif_date_is_local_and_aware(make_candidate):
    dt = dates.resolve_datetime(make_candidate({"EXIF": {"CreateDate": "2015:03:04 05:06:07"}}))

    assert dt.tzinfo is not None
    assert (dt.hour, dt.minute) == (5, 6)


def test_falls_back_to_file_system(make_candidate, tmp_path):
    f = tmp_path / "IMG_0001.JPG"
    f.write_bytes(b"jpeg")

    dt = dates.resolve_datetime(make_candidate({}, full_path=str(f)))

    assert dt == _fs_time(f)


def test_malformed_sources_fall_through_with_warning(make_candidate, caplog):
    tags = {
        "QuickTime": {"ContentCreateDate": "yesterday", "CreateDate": "2016:07:16 01:00:00"},
    }
    with caplog.at_level("WARNING"):
        dt = dates.resolve_datetime(make_candidate(tags))

    assert dt == datetime(2016, 7, 16, 1, 0, 0, tzinfo=timezone.utc)
    assert "yesterday" in caplog.text
    assert "/photos/2016/IMG_0001.JPG" in caplog.text


def test_only_first_non_empty_exif_date_is_tried(make_candidate, tmp_path):
    f = tmp_path / "scan.tif"
    f.write_bytes(b"tiff")
    tags = {"EXIF": {"CreateDate": "0000:00:00 00:00:00", "DateTimeOriginal": "2014:01:02 03:04:05"}}

    dt = dates.resolve_datetime(make_candidate(tags, full_path=str(f)))

    assert dt == _fs_time(f)


def test_no_source_at_all(make_candidate, tmp_path, caplog):
    missing = tmp_path / "gone.jpg"
    with caplog.at_level("WARNING"):
        dt = dates.resolve_datetime(make_candidate({}, full_path=str(missing)))

    assert dt is None
    assert "No usable date" in caplog.text


@pytest.mark.parametrize(
    "dt,expected",
    [
        (datetime(2016, 7, 15, 10, 20, 30), ("20160715", "Friday Fri", "July Jul")),
        (datetime(2015, 3, 4, 5, 6, 7), ("20150304", "Wednesday Wed", "March Mar")),
        (datetime(2020, 2, 29, 23, 59, 59), ("20200229", "Saturday Sat", "February Feb")),
    ],
)
def test_date_fields(dt, expected):
    assert dates.date_fields(dt) == expected


def test_date_fields_use_the_timestamps_own_zone():
    # 23:30 on the 14th in UTC-7 is already the 15th in UTC
    dt = datetime(2016, 7, 14, 23, 30, tzinfo=timezone(timedelta(hours=-7)))

    assert dates.date_fields(dt) == ("20160714", "Thursday Thu", "July Jul")
