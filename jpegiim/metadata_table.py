# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Metadata name table

Wraps the static JPEG marker and IPTC dataset definitions in an immutable
value that is handed to the scanners, so a scanner never reaches for
module-level state and a caller can substitute its own names.

Copyright 2025 DNAi inc.
"""

from dataclasses import dataclass, field
from functools import lru_cache
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from jpegiim.iptc_tags import (
    IPTC_ENTRY_DESCRIPTIONS,
    IPTC_ENTRY_NAMES,
    IPTC_FILE_FORMATS,
    IPTC_IMAGE_TYPE_NAMES,
    IPTC_RECORD_NAMES,
)
from jpegiim.jpeg_tags import JPEG_SEGMENT_DESCRIPTIONS, JPEG_SEGMENT_NAMES


def _frozen(mapping: Optional[Mapping]) -> Mapping:
    return MappingProxyType(dict(mapping or {}))


@dataclass(frozen=True, eq=False)
class MetadataTable:
    """
    Immutable lookup table for marker and dataset names.

    Every field is a read-only mapping; build a new table to change
    anything.

    Example:
        >>> table = default_table()
        >>> table.segment_name(0xE1)
        'APP1'
        >>> table.record_name(2, 25)
        'Keywords'
    """
    segment_names: Mapping[int, str] = field(default_factory=dict)
    segment_descriptions: Mapping[int, str] = field(default_factory=dict)
    record_names: Mapping[int, str] = field(default_factory=dict)
    entry_names: Mapping[Tuple[int, int], str] = field(default_factory=dict)
    entry_descriptions: Mapping[Tuple[int, int], str] = field(default_factory=dict)
    file_formats: Tuple[str, ...] = ()
    image_type_names: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        # Copy into read-only views so callers cannot mutate a shared table
        for name in ("segment_names", "segment_descriptions", "record_names",
                     "entry_names", "entry_descriptions", "image_type_names"):
            object.__setattr__(self, name, _frozen(getattr(self, name)))
        object.__setattr__(self, "file_formats", tuple(self.file_formats))

    def segment_name(self, marker: int) -> str:
        """Return the short name of a JPEG marker, e.g. ``'APP13'``."""
        return self.segment_names.get(marker, f"Unknown_0x{marker:02X}")

    def segment_description(self, marker: int) -> str:
        """Return the long description of a JPEG marker."""
        return self.segment_descriptions.get(marker, "Unknown marker")

    def record_class(self, record_number: int) -> str:
        return self.record_names.get(record_number, f"Unknown Record {record_number}")

    def record_name(self, record_number: int, dataset_number: int) -> str:
        """Return the name of an IPTC dataset, e.g. ``'Keywords'`` for 2:25."""
        return self.entry_names.get(
            (record_number, dataset_number),
            f"Unknown_{record_number}:{dataset_number:02d}",
        )

    def record_description(self, record_number: int, dataset_number: int) -> str:
        return self.entry_descriptions.get((record_number, dataset_number), "")

    def file_format_name(self, code: int) -> str:
        """Return the name of an IPTC file format number (dataset 1:20)."""
        if 0 <= code < len(self.file_formats):
            return self.file_formats[code]
        return f"Unknown file format {code}"

    def image_type_name(self, code: str) -> str:
        """Return the colour component name for an Image Type (2:130) code."""
        return self.image_type_names.get(code, f"Unknown image type {code}")


@lru_cache(maxsize=1)
def default_table() -> MetadataTable:
    """
    Build the standard table from the bundled definitions.

    The result is immutable, so a cached instance is shared between callers.
    """
    return MetadataTable(
        segment_names=JPEG_SEGMENT_NAMES,
        segment_descriptions=JPEG_SEGMENT_DESCRIPTIONS,
        record_names=IPTC_RECORD_NAMES,
        entry_names=IPTC_ENTRY_NAMES,
        entry_descriptions=IPTC_ENTRY_DESCRIPTIONS,
        file_formats=IPTC_FILE_FORMATS,
        image_type_names=IPTC_IMAGE_TYPE_NAMES,
    )
