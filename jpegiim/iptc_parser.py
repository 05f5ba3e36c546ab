# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
IPTC metadata parser

This module decodes IPTC-NAA IIM data (the content of the Photoshop
IPTC resource embedded in a JPEG APP13 segment) into an ordered list of
records.

IPTC data is stored as a series of records, each containing:
- 1 byte: Tag marker (0x1C)
- 1 byte: Record number
- 1 byte: Dataset number
- 2 bytes: Data length (big-endian, high bit reserved for the extended form)
- N bytes: Data

Copyright 2025 DNAi inc.
"""

import logging
import struct
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from jpegiim.exceptions import (
    CorruptStreamError,
    FormatError,
    InvalidTagError,
    JpegIimError,
    MetadataReadError,
    TruncatedDataError,
    UnsupportedFeatureError,
)
from jpegiim.jpeg_parser import scan_segments
from jpegiim.metadata_table import MetadataTable, default_table
from jpegiim.photoshop_irb import find_iptc_block
from jpegiim.scan_result import ScanStatusMixin

logger = logging.getLogger(__name__)

IPTC_TAG_MARKER = 0x1C
IPTC_HEADER_SIZE = 5
EXTENDED_SIZE_FLAG = 0x8000
# Largest size the standard (non-extended) size field can express
MAX_RECORD_DATA = EXTENDED_SIZE_FLAG - 1


@dataclass
class IPTCRecord:
    """One IPTC dataset occurrence."""
    record_number: int
    dataset_number: int
    data: bytes = b""

    @property
    def type(self) -> str:
        """Identifier used for table lookup, e.g. ``'2:05'``."""
        return f"{self.record_number}:{self.dataset_number:02d}"

    @classmethod
    def from_text(cls, record_number: int, dataset_number: int, text: str,
                  encoding: str = 'utf-8') -> "IPTCRecord":
        return cls(record_number, dataset_number, text.encode(encoding))

    def text(self, encoding: str = 'utf-8') -> str:
        """Decode the data as text, replacing undecodable bytes."""
        return self.data.decode(encoding, errors='replace')


@dataclass
class RecordScan(ScanStatusMixin):
    """
    Result of decoding an IPTC block.

    Attributes:
        records: Records in stream order, duplicates included
        error: Error that stopped decoding, or None
        end_offset: Offset just past the last complete record
    """
    records: List[IPTCRecord] = field(default_factory=list)
    error: Optional[JpegIimError] = None
    end_offset: int = 0


def parse_dataset_id(value: str) -> Tuple[int, int]:
    """
    Parse a ``"record:dataset"`` identifier such as ``"2:25"``.

    Raises:
        InvalidTagError: If the identifier is malformed or out of range
    """
    record_text, sep, dataset_text = value.partition(':')
    try:
        if not sep:
            raise ValueError(value)
        record_number = int(record_text)
        dataset_number = int(dataset_text)
    except ValueError:
        raise InvalidTagError(f"Invalid IPTC dataset identifier '{value}', expected RECORD:DATASET")
    if not (0 <= record_number <= 255 and 0 <= dataset_number <= 255):
        raise InvalidTagError(f"IPTC dataset identifier '{value}' is out of range")
    return record_number, dataset_number


def decode_iptc(data: bytes, strict: bool = False) -> RecordScan:
    """
    Decode a raw IPTC block into records.

    Decoding stops at the first damaged record; the records before it
    are returned together with the error.

    Args:
        data: Raw IPTC-NAA IIM bytes
        strict: If True, raise the error instead of returning it

    Returns:
        RecordScan with the decoded records
    """
    data = bytes(data)
    result = RecordScan()
    offset = 0
    size = len(data)

    while offset < size:
        remaining = size - offset
        if remaining < IPTC_HEADER_SIZE:
            if not any(data[offset:]):
                # Resource padding, not a record
                break
            result.error = TruncatedDataError(
                f"Only {remaining} bytes left at offset {offset}, not enough for a record header"
            )
            break

        tag_marker, record_number, dataset_number, record_size = struct.unpack(
            '>BBBH', data[offset:offset + IPTC_HEADER_SIZE]
        )
        if tag_marker != IPTC_TAG_MARKER:
            if not any(data[offset:]):
                break
            result.error = CorruptStreamError(
                f"Expected IPTC tag marker 0x1C at offset {offset}, found 0x{tag_marker:02X}"
            )
            break

        if record_size & EXTENDED_SIZE_FLAG:
            result.error = UnsupportedFeatureError(
                f"Extended dataset {record_number}:{dataset_number:02d} at offset {offset} "
                f"is not supported"
            )
            break

        data_start = offset + IPTC_HEADER_SIZE
        if record_size > size - data_start:
            result.error = TruncatedDataError(
                f"Dataset {record_number}:{dataset_number:02d} at offset {offset} declares "
                f"{record_size} bytes but only {size - data_start} remain"
            )
            break

        result.records.append(IPTCRecord(
            record_number=record_number,
            dataset_number=dataset_number,
            data=data[data_start:data_start + record_size],
        ))
        offset = data_start + record_size

    result.end_offset = offset
    if result.error is not None:
        logger.warning("IPTC decode stopped after %d records: %s", len(result.records), result.error)
        if strict:
            raise result.error
    else:
        logger.debug("Decoded %d IPTC records", len(result.records))
    return result


def records_to_dict(
    records: List[IPTCRecord],
    table: Optional[MetadataTable] = None,
    encoding: str = 'utf-8',
) -> Dict[str, Any]:
    """
    Summarize records as a name -> value dictionary.

    Repeated datasets (e.g. Keywords) become lists in record order.
    """
    table = table or default_table()
    metadata: Dict[str, Any] = {}
    for record in records:
        tag_name = f"IPTC:{table.record_name(record.record_number, record.dataset_number)}"
        value = record.text(encoding)
        if tag_name in metadata:
            if isinstance(metadata[tag_name], list):
                metadata[tag_name].append(value)
            else:
                metadata[tag_name] = [metadata[tag_name], value]
        else:
            metadata[tag_name] = value
    return metadata


class IPTCParser:
    """
    Parser for IPTC metadata from JPEG files.

    IPTC metadata is embedded in JPEG APP13 segments in Photoshop
    image resource format.
    """

    def __init__(
        self,
        file_path: Optional[Union[str, Path]] = None,
        file_data: Optional[bytes] = None,
        table: Optional[MetadataTable] = None,
    ):
        """
        Initialize the IPTC parser.

        Args:
            file_path: Path to the image file
            file_data: Raw file data (alternative to file_path)
            table: Name table used for ``read_metadata``
        """
        self.file_path = file_path
        self.file_data = file_data
        self.table = table or default_table()

    def _load(self) -> bytes:
        if self.file_path:
            with open(self.file_path, 'rb') as f:
                self.file_data = f.read()
        elif not self.file_data:
            raise MetadataReadError("No file path or file data provided")
        return self.file_data

    def read(self) -> RecordScan:
        """
        Read the IPTC records of the first Photoshop APP13 segment.

        Returns:
            RecordScan; empty and complete when the file has no IPTC data,
            empty with the error when the header or the Photoshop resources
            are damaged before an IPTC block was found

        Raises:
            FormatError: If the file is not a JPEG
        """
        file_data = self._load()
        if file_data[:2] != b'\xff\xd8':
            raise FormatError("IPTC is only read from JPEG files")

        header = scan_segments(file_data, table=self.table)
        iptc_data, resource_error = find_iptc_block(header.segments)
        if iptc_data is None:
            # The IPTC block may sit beyond the point where the resources
            # or the header broke
            return RecordScan(error=resource_error or header.error)

        scan = decode_iptc(iptc_data)
        if scan.error is None:
            scan.error = resource_error
        return scan

    def read_metadata(self) -> Dict[str, Any]:
        """
        Read IPTC metadata as a name -> value dictionary.

        Raises:
            MetadataReadError: If the IPTC data cannot be read completely
        """
        scan = self.read()
        scan.raise_for_error()
        return records_to_dict(scan.records, self.table)
