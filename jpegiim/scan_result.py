# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Scan outcome shared by the segment, record and resource scanners.

Copyright 2025 DNAi inc.
"""

from enum import Enum
from typing import Optional

from jpegiim.exceptions import (
    JpegIimError,
    TruncatedDataError,
    UnsupportedFeatureError,
)


class ScanOutcome(Enum):
    """How far a tolerant scan got."""
    COMPLETE = "complete"  # Everything was read
    TRUNCATED = "truncated"  # Input ended mid-segment / mid-record
    CORRUPT = "corrupt"  # Input is structurally damaged
    UNSUPPORTED = "unsupported"  # Input uses a feature the codec refuses to guess at


def outcome_for(error: Optional[JpegIimError]) -> ScanOutcome:
    """Map a scanner error (or None) to its outcome tag."""
    if error is None:
        return ScanOutcome.COMPLETE
    if isinstance(error, TruncatedDataError):
        return ScanOutcome.TRUNCATED
    if isinstance(error, UnsupportedFeatureError):
        return ScanOutcome.UNSUPPORTED
    return ScanOutcome.CORRUPT


class ScanStatusMixin:
    """
    Status accessors for scan results carrying an ``error`` attribute.

    A scan result always holds whatever was readable. Check ``complete``
    (or call ``raise_for_error``) before treating it as the whole input.
    """
    error: Optional[JpegIimError]

    @property
    def outcome(self) -> ScanOutcome:
        return outcome_for(self.error)

    @property
    def complete(self) -> bool:
        return self.error is None

    def raise_for_error(self) -> None:
        """Raise the carried error, if any."""
        if self.error is not None:
            raise self.error
