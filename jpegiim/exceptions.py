# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Exception classes for jpegiim

This module defines the error taxonomy shared by the JPEG segment codec
and the IPTC-IIM record codec.

Scanners never raise these for damaged input unless asked to be strict;
they hand the error back alongside whatever was readable. Encoders and
the file assembler always raise, before any byte is produced.

Copyright 2025 DNAi inc.
"""


class JpegIimError(Exception):
    """
    Base exception for all jpegiim errors.

    All jpegiim exceptions inherit from this class, allowing
    catch-all error handling for any codec-related errors.
    """
    def __init__(self, message: str = ""):
        """
        Initialize the exception with an optional error message.

        Args:
            message: Descriptive error message explaining what went wrong
        """
        self.message = message
        super().__init__(message)


class MetadataReadError(JpegIimError):
    """
    Raised when metadata cannot be read from a stream.

    Parent of every scanner-side error.
    """
    pass


class MetadataWriteError(JpegIimError):
    """
    Raised when metadata cannot be written.

    This exception is raised when:
    - A session opened read-only is saved
    - A segment or record does not fit its length field
    - The destination file cannot be replaced
    """
    pass


class FormatError(MetadataReadError):
    """Raised when a stream does not start with SOI (not a JPEG stream)."""
    pass


class CorruptStreamError(MetadataReadError):
    """
    Raised when a stream is structurally damaged.

    This exception is raised when:
    - A marker is not prefixed by 0xFF (marker desynchronization)
    - A length field is smaller than its own two bytes
    - The stream ends before a terminal marker (SOS or EOI)
    - An IPTC record does not start with the 0x1C tag marker
    """
    pass


class TruncatedDataError(CorruptStreamError):
    """Raised when a stream ends in the middle of a segment, record or resource."""
    pass


class UnsupportedFeatureError(MetadataReadError):
    """Raised for the IPTC extended dataset length form (size field high bit set)."""
    pass


class OversizeSegmentError(MetadataWriteError):
    """Raised when a JPEG segment payload exceeds 65533 bytes."""
    pass


class OversizeRecordError(MetadataWriteError):
    """Raised when an IPTC record's data does not fit the standard size field."""
    pass


class InvalidTagError(JpegIimError):
    """
    Raised when an invalid tag is specified.

    This exception is raised when:
    - A marker, record number or dataset number does not fit in one byte
    - A "record:dataset" identifier cannot be parsed
    """
    pass


class NotFoundError(JpegIimError, LookupError):
    """Raised when a requested segment (e.g. the comment) is not present."""
    pass
