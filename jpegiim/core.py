# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Core JPEGFile class

This module provides the file-level API: reading the header segments and
image data of a JPEG on disk, and an edit session that changes the
comment and IPTC records of one file and saves it back.

Copyright 2025 DNAi inc.
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

from jpegiim.exceptions import CorruptStreamError, MetadataWriteError, NotFoundError
from jpegiim.iptc_parser import IPTCRecord, RecordScan, decode_iptc
from jpegiim.iptc_writer import encode_iptc
from jpegiim.jpeg_modifier import comment_text, put_comment, put_iptc_block
from jpegiim.jpeg_parser import Segment, SegmentScan, extract_image_data, read_image_data, scan_segments
from jpegiim.jpeg_writer import write_jpeg
from jpegiim.metadata_table import MetadataTable, default_table
from jpegiim.photoshop_irb import find_iptc_block

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def read_jpeg_header(file_path: PathLike, table: Optional[MetadataTable] = None) -> SegmentScan:
    """
    Read the header segments of a JPEG file.

    Returns:
        SegmentScan; check ``complete`` before trusting it is the whole header

    Raises:
        FormatError: If the file is not a JPEG
    """
    with open(file_path, 'rb') as f:
        return scan_segments(f, table=table)


def read_jpeg_image_data(file_path: PathLike, table: Optional[MetadataTable] = None) -> bytes:
    """
    Read the compressed image data of a JPEG file (up to, excluding, EOI).

    Raises:
        FormatError: If the file is not a JPEG
        CorruptStreamError: If the header is damaged or there is no EOI
    """
    with open(file_path, 'rb') as f:
        return extract_image_data(f, table=table)


def write_jpeg_header(old_path: PathLike, new_path: PathLike, segments: List[Segment]) -> None:
    """
    Write ``segments`` with the image data of ``old_path`` to ``new_path``.

    ``new_path`` may be ``old_path``: the image data is read completely and
    the new file is assembled and validated before the destination is
    replaced.

    Raises:
        CorruptStreamError: If the image data of ``old_path`` cannot be read
        OversizeSegmentError: If a segment is too large (nothing is written)
    """
    image_data = read_jpeg_image_data(old_path)
    if not image_data:
        raise MetadataWriteError(f"Couldn't get image data from '{old_path}'")
    written = write_jpeg(Path(new_path), segments, image_data)
    logger.info("Wrote %d segments (%d bytes) to %s", len(segments), written, new_path)


class JPEGFile:
    """
    Edit session over the metadata of one JPEG file.

    The file is read once; changes are held in memory until ``save``.

    Example:
        >>> with JPEGFile('image.jpg') as jpeg:
        ...     jpeg.set_comment('Harbour at dawn')
        ...     records = jpeg.get_iptc_records()
        ...     records.append(IPTCRecord.from_text(2, 25, 'harbour'))
        ...     jpeg.set_iptc_records(records)
        ...     jpeg.save()
    """

    def __init__(
        self,
        file_path: PathLike,
        read_only: bool = False,
        table: Optional[MetadataTable] = None,
        strict: bool = False,
    ):
        """
        Open a JPEG file.

        Args:
            file_path: Path to the JPEG file
            read_only: If True, ``save`` is refused
            table: Name table used to label segments
            strict: If True, a damaged header raises instead of being
                    kept as a partial scan

        Raises:
            FileNotFoundError: If the file does not exist
            FormatError: If the file is not a JPEG
        """
        self.file_path = Path(file_path)
        if not self.file_path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        self.read_only = read_only
        self.table = table or default_table()
        self.modified = False

        self._image_data: Optional[bytes] = None
        self._image_data_error: Optional[CorruptStreamError] = None
        with open(self.file_path, 'rb') as f:
            self.header = scan_segments(f, table=self.table, strict=strict)
            if self.header.sos is not None:
                try:
                    self._image_data = read_image_data(f)
                except CorruptStreamError as e:
                    if strict:
                        raise
                    logger.warning("Couldn't read image data of %s: %s", self.file_path, e)
                    self._image_data_error = e

    @property
    def segments(self) -> List[Segment]:
        return self.header.segments

    @property
    def complete(self) -> bool:
        """True when both the header and the image data were read completely."""
        return self.header.complete and self._image_data is not None

    @property
    def image_data(self) -> bytes:
        """
        Compressed image data.

        Raises:
            CorruptStreamError: If the header or image data could not be read
        """
        if self._image_data is None:
            self.header.raise_for_error()
            if self._image_data_error is not None:
                raise self._image_data_error
            raise CorruptStreamError(f"No SOS segment in '{self.file_path}'")
        return self._image_data

    def get_comment(self) -> Optional[str]:
        """Return the comment text, or None when there is none."""
        try:
            return comment_text(self.segments)
        except NotFoundError:
            return None

    def set_comment(self, text: Union[str, bytes]) -> None:
        put_comment(self.segments, text, table=self.table)
        self.modified = True

    def read_iptc(self) -> RecordScan:
        """
        Decode the IPTC block, keeping any decode error in the result.

        A damaged Photoshop resource list is reported as the error even
        when no IPTC block could be found in it.
        """
        iptc_data, resource_error = find_iptc_block(self.segments)
        if iptc_data is None:
            return RecordScan(error=resource_error)
        scan = decode_iptc(iptc_data)
        if scan.error is None:
            scan.error = resource_error
        return scan

    def get_iptc_records(self) -> List[IPTCRecord]:
        """
        Return the IPTC records (empty when the file has none).

        Raises:
            MetadataReadError: If the IPTC block is damaged
        """
        scan = self.read_iptc()
        scan.raise_for_error()
        return scan.records

    def set_iptc_records(self, records: List[IPTCRecord]) -> None:
        """Replace the IPTC records; an empty list removes the IPTC block."""
        put_iptc_block(self.segments, encode_iptc(records), table=self.table)
        self.modified = True

    def save(self, output_path: Optional[PathLike] = None) -> None:
        """
        Write the (edited) header and the original image data.

        Args:
            output_path: Destination; the source file when None

        Raises:
            MetadataWriteError: If the session is read-only, or the source
                                could not be read completely
        """
        if self.read_only:
            raise MetadataWriteError(
                f"Cannot save changes: File '{self.file_path}' is opened in read-only mode. "
                "Open the file without read_only=True to enable writing."
            )
        if not self.header.complete or self._image_data is None:
            raise MetadataWriteError(
                f"Cannot save '{self.file_path}': it was not read completely"
            )

        output = Path(output_path) if output_path else self.file_path
        write_jpeg(output, self.segments, self._image_data)
        self.modified = False
        logger.info("Saved %s", output)

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        # Changes are only written by an explicit save()
        pass
