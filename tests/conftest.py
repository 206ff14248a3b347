import pytest
from photo_indexer.models import CandidateFile, ExifOutput


@pytest.fixture
def make_candidate():
    """Returns a factory building a CandidateFile from grouped exiftool JSON."""
    def _make(tags=None,
              full_path="/photos/2016/IMG_0001.JPG",
              aliased_path="2016/IMG_0001.JPG",
              signature="sig-0001",
              length_in_bytes=2048):
        return CandidateFile(
            full_path=full_path,
            aliased_path=aliased_path,
            signature=signature,
            length_in_bytes=length_in_bytes,
            exif=ExifOutput.from_dict(tags or {}),
        )
    return _make


@pytest.fixture
def photo_tags():
    """Grouped exiftool output for a typical phone photo."""
    return {
        "SourceFile": "/photos/2016/IMG_0001.JPG",
        "File": {"MIMEType": "image/jpeg", "ImageWidth": 4032, "ImageHeight": 3024},
        "EXIF": {
            "ApertureValue": 2.2,
            "CreateDate": "2016:07:15 10:20:30",
            "DateTimeOriginal": "2016:07:15 10:20:30",
            "ModifyDate": "2016:07:16 08:00:00",
            "ExposureProgram": "Program AE",
            "ExposureTime": "1/200",
            "Flash": "Off, Did not fire",
            "FNumber": 2.2,
            "FocalLength": "4.2 mm",
            "GPSLatitude": "47 deg 37' 23.06\"",
            "GPSLatitudeRef": "North",
            "GPSLongitude": "122 deg 20' 59.08\"",
            "GPSLongitudeRef": "West",
            "ISO": 400,
            "LensInfo": "4.15mm f/2.2",
            "LensModel": "iPhone 6s back camera 4.15mm f/2.2",
            "Make": "Apple",
            "Model": "iPhone 6s",
            "WhiteBalance": "Auto",
        },
        "IPTC": {"Keywords": ["beach", "family"]},
        "Composite": {"GPSPosition": "47 deg 37' 23.06\" N, 122 deg 20' 59.08\" W"},
    }


@pytest.fixture
def video_tags():
    """Grouped exiftool output for a phone video."""
    return {
        "SourceFile": "/videos/IMG_0420.MOV",
        "File": {"MIMEType": "video/quicktime"},
        "QuickTime": {
            "ContentCreateDate": "2016:07:15 10:20:30-07:00",
            "CreateDate": "2016:07:15 17:20:31",
            "ModifyDate": "2016:07:15 17:20:45",
            "ImageWidth": 1920,
            "ImageHeight": 1080,
            "Duration": "10.15 s",
        },
    }
