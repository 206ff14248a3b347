"""
Photo indexer: prepares extracted media metadata for the search index.
"""
from .models import CandidateFile, ExifOutput, GeoPoint, Media, RawValue, ValueKind
from .metadata.normalizer import MediaNormalizer
from .pipeline.downstream import DownstreamStage, MediaCollector
from .pipeline.stage import PreparationStage
from .log import setup_logging

__all__ = [
    "CandidateFile",
    "DownstreamStage",
    "ExifOutput",
    "GeoPoint",
    "Media",
    "MediaCollector",
    "MediaNormalizer",
    "PreparationStage",
    "RawValue",
    "ValueKind",
    "setup_logging",
]
