# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
jpegiim - JPEG segment and IPTC-IIM record codec

A pure Python library for reading and writing the header segments of
JPEG files and the IPTC-NAA IIM records carried in their APP13 segment.
Every structure is read directly from the binary stream and written
back byte-exactly.

Copyright 2025 DNAi inc.
"""

__version__ = "0.1.0"
__author__ = "DNAi inc."

from jpegiim.core import JPEGFile, read_jpeg_header, read_jpeg_image_data, write_jpeg_header
from jpegiim.exceptions import (
    CorruptStreamError,
    FormatError,
    InvalidTagError,
    JpegIimError,
    MetadataReadError,
    MetadataWriteError,
    NotFoundError,
    OversizeRecordError,
    OversizeSegmentError,
    TruncatedDataError,
    UnsupportedFeatureError,
)
from jpegiim.iptc_parser import IPTCParser, IPTCRecord, RecordScan, decode_iptc, parse_dataset_id
from jpegiim.iptc_writer import IPTCWriter, encode_iptc
from jpegiim.jpeg_modifier import get_comment, get_iptc_block, put_comment, put_iptc_block
from jpegiim.jpeg_parser import (
    JPEGParser,
    Segment,
    SegmentScan,
    extract_image_data,
    read_image_data,
    scan_segments,
)
from jpegiim.jpeg_writer import assemble_jpeg, write_jpeg
from jpegiim.metadata_table import MetadataTable, default_table
from jpegiim.photoshop_irb import find_iptc_block
from jpegiim.scan_result import ScanOutcome

__all__ = [
    "JPEGFile",
    "read_jpeg_header",
    "read_jpeg_image_data",
    "write_jpeg_header",
    "JpegIimError",
    "MetadataReadError",
    "MetadataWriteError",
    "FormatError",
    "CorruptStreamError",
    "TruncatedDataError",
    "UnsupportedFeatureError",
    "OversizeSegmentError",
    "OversizeRecordError",
    "InvalidTagError",
    "NotFoundError",
    "IPTCParser",
    "IPTCRecord",
    "RecordScan",
    "decode_iptc",
    "parse_dataset_id",
    "IPTCWriter",
    "encode_iptc",
    "get_comment",
    "put_comment",
    "get_iptc_block",
    "put_iptc_block",
    "find_iptc_block",
    "JPEGParser",
    "Segment",
    "SegmentScan",
    "scan_segments",
    "extract_image_data",
    "read_image_data",
    "assemble_jpeg",
    "write_jpeg",
    "MetadataTable",
    "default_table",
    "ScanOutcome",
]
