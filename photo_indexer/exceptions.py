"""
Custom exception hierarchy for the photo indexer.

Metadata errors are raised by the field parsers and recovered per field by
the normalizer; pipeline errors signal lifecycle misuse to the caller.
"""


class PhotoIndexerError(Exception):
    """Base exception for all photo indexer errors."""
    pass


class MetadataError(PhotoIndexerError):
    """Raised when one metadata field cannot be normalized."""

    def __init__(self, message: str, value=None):
        super().__init__(message)
        self.value = value


class UnexpectedShapeError(MetadataError):
    """Raised when an extracted field has a type outside the recognized variants."""
    pass


class MalformedValueError(MetadataError):
    """Raised when a field of a recognized type fails to parse."""
    pass


class IncompleteLocationError(MetadataError):
    """Raised when only some of the GPS fields are populated."""
    pass


class PipelineError(PhotoIndexerError):
    """Base exception for preparation stage lifecycle errors."""
    pass


class PipelineStateError(PipelineError):
    """Raised when a lifecycle operation is called out of order."""
    pass


class PipelineClosedError(PipelineError):
    """Raised when a candidate is submitted after end of input was signalled."""
    pass
