# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
JPEG segment parser

This module reads the header segments of a JPEG stream (everything from
SOI up to and including the SOS segment) and isolates the entropy-coded
image data that follows, up to EOI.

The header scanner is tolerant: on damaged input it returns the segments
read so far together with the error that stopped it.

Copyright 2025 DNAi inc.
"""

import io
import logging
import struct
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO, List, Optional, Union

from jpegiim.exceptions import (
    CorruptStreamError,
    FormatError,
    JpegIimError,
    MetadataReadError,
    TruncatedDataError,
)
from jpegiim.jpeg_tags import EOI, RST0, RST7, SOI, SOS, STANDALONE_MARKERS, STUFFED
from jpegiim.metadata_table import MetadataTable, default_table
from jpegiim.scan_result import ScanStatusMixin

logger = logging.getLogger(__name__)

# Largest payload a 16-bit length field (which counts itself) can describe
MAX_SEGMENT_PAYLOAD = 0xFFFF - 2

Source = Union[BinaryIO, bytes, bytearray, memoryview]


@dataclass
class Segment:
    """
    One JPEG header segment.

    ``payload_offset`` is the offset of the first payload byte in the
    stream the segment was read from (None for segments built in memory).
    It is not part of equality.
    """
    marker: int
    name: str = ""
    description: str = ""
    payload_offset: Optional[int] = field(default=None, compare=False)
    payload: bytes = b""

    @property
    def is_standalone(self) -> bool:
        """True for markers that carry no length field and no payload."""
        return self.marker in STANDALONE_MARKERS

    @property
    def segment_length(self) -> int:
        """Value of the 16-bit length field (payload plus its own 2 bytes)."""
        return len(self.payload) + 2

    @classmethod
    def create(cls, marker: int, payload: bytes = b"",
               table: Optional[MetadataTable] = None) -> "Segment":
        """Build an in-memory segment with names filled from ``table``."""
        table = table or default_table()
        return cls(
            marker=marker,
            name=table.segment_name(marker),
            description=table.segment_description(marker),
            payload=bytes(payload),
        )


@dataclass
class SegmentScan(ScanStatusMixin):
    """
    Result of scanning a JPEG header.

    Attributes:
        segments: Header segments in file order, ending with SOS when found
        error: Error that stopped the scan, or None when SOS was reached
        end_offset: Stream offset just past the last byte consumed
    """
    segments: List[Segment] = field(default_factory=list)
    error: Optional[JpegIimError] = None
    end_offset: int = 0

    @property
    def sos(self) -> Optional[Segment]:
        """The SOS segment, when the scan reached it."""
        if self.segments and self.segments[-1].marker == SOS:
            return self.segments[-1]
        return None


def _as_stream(source: Source) -> BinaryIO:
    if isinstance(source, (bytes, bytearray, memoryview)):
        return io.BytesIO(bytes(source))
    return source


def scan_segments(
    source: Source,
    table: Optional[MetadataTable] = None,
    strict: bool = False,
) -> SegmentScan:
    """
    Read the header segments of a JPEG stream.

    Args:
        source: Binary stream positioned at the start of the JPEG, or bytes
        table: Name table used to label segments (default table if None)
        strict: If True, raise the scan error instead of returning it

    Returns:
        SegmentScan with the segments read and the error that stopped the
        scan (None when the SOS segment was reached). An EOI met before
        SOS is the last segment of the list and sets a CorruptStreamError.

    Raises:
        FormatError: If the stream does not start with SOI
    """
    table = table or default_table()
    stream = _as_stream(source)
    result = SegmentScan()

    soi = stream.read(2)
    if len(soi) != 2 or soi[0] != 0xFF or soi[1] != SOI:
        raise FormatError("No SOI (FF D8) at start of stream - this probably is not a JPEG")
    offset = 2

    while True:
        lead = stream.read(1)
        if not lead:
            result.error = CorruptStreamError(
                f"Unexpected end of stream at offset {offset} before SOS"
            )
            break
        if lead[0] != 0xFF:
            result.error = CorruptStreamError(
                f"No FF found at offset {offset} (found 0x{lead[0]:02X}) - JPEG is probably corrupted"
            )
            break
        offset += 1

        # Any number of 0xFF fill bytes may precede the marker code
        code = stream.read(1)
        while code and code[0] == 0xFF:
            offset += 1
            code = stream.read(1)
        if not code:
            result.error = CorruptStreamError(f"Unexpected end of stream in marker at offset {offset}")
            break
        marker = code[0]
        offset += 1

        if marker == EOI:
            # Recorded like any standalone marker, but the header has no scan
            result.segments.append(Segment(
                marker=marker,
                name=table.segment_name(marker),
                description=table.segment_description(marker),
                payload_offset=offset,
            ))
            result.error = CorruptStreamError(f"EOI at offset {offset - 2} before SOS")
            break

        if marker in STANDALONE_MARKERS:
            logger.debug("Standalone marker %s at offset %d", table.segment_name(marker), offset - 2)
            result.segments.append(Segment(
                marker=marker,
                name=table.segment_name(marker),
                description=table.segment_description(marker),
                payload_offset=offset,
            ))
            continue

        raw_length = stream.read(2)
        if len(raw_length) != 2:
            result.error = TruncatedDataError(
                f"Stream ends inside the length field of {table.segment_name(marker)} at offset {offset}"
            )
            break
        length = struct.unpack('>H', raw_length)[0]
        offset += 2
        if length < 2:
            result.error = CorruptStreamError(
                f"Invalid length {length} for {table.segment_name(marker)} at offset {offset - 2}"
            )
            break

        # At most 65533 bytes, so the read is bounded whatever the field says
        payload = stream.read(length - 2)
        if len(payload) != length - 2:
            result.error = TruncatedDataError(
                f"{table.segment_name(marker)} at offset {offset} declares {length - 2} "
                f"payload bytes but only {len(payload)} remain"
            )
            break

        logger.debug("Segment %s at offset %d, %d bytes", table.segment_name(marker), offset, len(payload))
        result.segments.append(Segment(
            marker=marker,
            name=table.segment_name(marker),
            description=table.segment_description(marker),
            payload_offset=offset,
            payload=payload,
        ))
        offset += len(payload)

        if marker == SOS:
            break

    result.end_offset = offset
    if result.error is not None:
        logger.warning("JPEG header scan stopped after %d segments: %s",
                       len(result.segments), result.error)
        if strict:
            raise result.error
    return result


def _image_data_end(data: bytes) -> int:
    """
    Find the EOI that terminates the scan data in ``data``.

    Returns the index of the 0xFF of that EOI.
    """
    pos = 0
    size = len(data)
    while True:
        pos = data.find(b'\xff', pos)
        if pos < 0 or pos + 1 >= size:
            raise CorruptStreamError("No EOI (FF D9) found after the scan data")
        code = data[pos + 1]
        if code == EOI:
            return pos
        if code == STUFFED or RST0 <= code <= RST7:
            # Byte-stuffed 0xFF or restart marker: part of the scan data
            pos += 2
        elif code == 0xFF:
            # Fill byte, the next 0xFF may start the marker
            pos += 1
        elif code in STANDALONE_MARKERS:
            pos += 2
        else:
            # A marker segment between scans (progressive DHT/SOS/...)
            if pos + 4 > size:
                raise TruncatedDataError(f"Stream ends inside a marker at offset {pos}")
            length = struct.unpack('>H', data[pos + 2:pos + 4])[0]
            if length < 2:
                raise CorruptStreamError(f"Invalid length {length} for marker 0x{code:02X} at offset {pos}")
            if pos + 2 + length > size:
                raise TruncatedDataError(
                    f"Marker 0x{code:02X} at offset {pos} runs past the end of the stream"
                )
            pos += 2 + length


def read_image_data(stream: BinaryIO) -> bytes:
    """
    Read the entropy-coded data from the current position up to EOI.

    The stream must be positioned just past the SOS payload. The returned
    bytes exclude the EOI marker and anything after it.

    Raises:
        CorruptStreamError: If no EOI is found
    """
    data = stream.read()
    end = _image_data_end(data)
    trailing = len(data) - end - 2
    if trailing:
        logger.debug("Ignoring %d bytes after EOI", trailing)
    return data[:end]


def extract_image_data(source: Source, table: Optional[MetadataTable] = None) -> bytes:
    """
    Return the compressed image data of a JPEG stream.

    Scans the header, then copies everything after the SOS payload up to
    (but excluding) the terminating EOI. Stuffed bytes (FF 00) and restart
    markers are copied unchanged.

    Raises:
        FormatError: If the stream does not start with SOI
        CorruptStreamError: If the header is damaged or no EOI is found
    """
    stream = _as_stream(source)
    scan = scan_segments(stream, table=table, strict=True)
    if scan.sos is None:
        raise CorruptStreamError("No SOS segment found")
    return read_image_data(stream)


class JPEGParser:
    """
    Parser for the segment structure of a JPEG file.

    Reads the file once and serves the header segments and the image
    data from memory.
    """

    def __init__(
        self,
        file_path: Optional[Union[str, Path]] = None,
        file_data: Optional[bytes] = None,
        table: Optional[MetadataTable] = None,
    ):
        """
        Initialize the JPEG parser.

        Args:
            file_path: Path to the JPEG file
            file_data: Raw file data (alternative to file_path)
            table: Name table used to label segments
        """
        self.file_path = Path(file_path) if file_path else None
        self.file_data = file_data
        self.table = table or default_table()

    def _load(self) -> bytes:
        if self.file_data is None:
            if self.file_path is None:
                raise MetadataReadError("No file path or file data provided")
            with open(self.file_path, 'rb') as f:
                self.file_data = f.read()
        return self.file_data

    def read_segments(self, strict: bool = False) -> SegmentScan:
        """Scan the header segments. See ``scan_segments``."""
        return scan_segments(self._load(), table=self.table, strict=strict)

    def read_image_data(self) -> bytes:
        """Return the compressed image data. See ``extract_image_data``."""
        return extract_image_data(self._load(), table=self.table)
