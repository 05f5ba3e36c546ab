# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
JPEG file assembler

This module serializes a list of header segments and the compressed image
data back into a complete JPEG byte stream. Every segment is validated
before any output is produced, and file output goes through a temporary
file so a failed write never leaves a half-written image behind, even
when the destination is the file the segments were read from.

Copyright 2025 DNAi inc.
"""

import logging
import os
import shutil
import struct
import tempfile
from pathlib import Path
from typing import BinaryIO, Iterable, List, Optional, Union

from jpegiim.exceptions import InvalidTagError, OversizeSegmentError
from jpegiim.jpeg_parser import MAX_SEGMENT_PAYLOAD, Segment
from jpegiim.jpeg_tags import EOI, SOI

logger = logging.getLogger(__name__)


def validate_segments(segments: Iterable[Segment]) -> None:
    """
    Check that every segment can be written as it is.

    Raises:
        InvalidTagError: If a marker does not fit in one byte
        OversizeSegmentError: Naming the first segment whose payload does not
                              fit (any payload, for a standalone marker)
    """
    for index, segment in enumerate(segments):
        if not 0 <= segment.marker <= 0xFF:
            raise InvalidTagError(f"Segment {index} has marker {segment.marker}, markers must be 0-255")
        name = segment.name or f"0x{segment.marker:02X}"
        if segment.is_standalone:
            if segment.payload:
                raise OversizeSegmentError(
                    f"Segment {index} ({name}) is a standalone marker but has "
                    f"{len(segment.payload)} payload bytes"
                )
            continue
        if len(segment.payload) > MAX_SEGMENT_PAYLOAD:
            raise OversizeSegmentError(
                f"Segment {index} ({name}) has {len(segment.payload)} payload bytes, "
                f"more than the {MAX_SEGMENT_PAYLOAD} a JPEG segment can hold"
            )


def assemble_jpeg(
    segments: List[Segment],
    image_data: bytes,
    sos: Optional[Segment] = None,
) -> bytes:
    """
    Build a complete JPEG file from header segments and image data.

    Args:
        segments: Header segments in file order. As returned by the scanner
                  they already end with the SOS segment.
        image_data: Compressed scan data (without the EOI marker)
        sos: SOS segment, when ``segments`` does not include it

    Returns:
        SOI, the segments, the image data and EOI as bytes

    Raises:
        InvalidTagError: If a marker does not fit in one byte
        OversizeSegmentError: If a payload exceeds 65533 bytes
    """
    ordered = list(segments)
    if sos is not None:
        ordered.append(sos)
    validate_segments(ordered)

    output = bytearray()
    output.extend((0xFF, SOI))
    for segment in ordered:
        output.extend((0xFF, segment.marker))
        if segment.is_standalone:
            continue
        output.extend(struct.pack('>H', segment.segment_length))
        output.extend(segment.payload)
    output.extend(image_data)
    output.extend((0xFF, EOI))
    return bytes(output)


def _replace_file(path: Path, data: bytes) -> None:
    """Write ``data`` to ``path`` through a temporary file in the same directory."""
    with tempfile.NamedTemporaryFile(
        dir=path.parent, prefix=f".{path.name}.", suffix=".tmp", delete=False
    ) as temp_output:
        temp_path = Path(temp_output.name)
        try:
            temp_output.write(data)
        except BaseException:
            temp_output.close()
            temp_path.unlink()
            raise
    try:
        # The temp file is created 0600; give it the mode the destination has
        # (or would get from a plain open())
        if path.exists():
            shutil.copymode(path, temp_path)
        else:
            umask = os.umask(0)
            os.umask(umask)
            os.chmod(temp_path, 0o666 & ~umask)
        os.replace(temp_path, path)
    except OSError:
        temp_path.unlink()
        raise


def write_jpeg(
    output: Union[str, Path, BinaryIO],
    segments: List[Segment],
    image_data: bytes,
    sos: Optional[Segment] = None,
) -> int:
    """
    Assemble a JPEG and write it to a path or a writable binary sink.

    The whole file is built in memory first; nothing is written when
    validation fails.

    Returns:
        Number of bytes written
    """
    data = assemble_jpeg(segments, image_data, sos=sos)
    if isinstance(output, (str, Path)):
        path = Path(output)
        _replace_file(path, data)
        logger.debug("Wrote %d bytes to %s", len(data), path)
    else:
        output.write(data)
    return len(data)
