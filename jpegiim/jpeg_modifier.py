# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
JPEG segment list modifier

This module edits a scanned segment list in place: reading and replacing
the comment (COM) segment, and reading and replacing the IPTC block held
in the Photoshop APP13 segment. The image data is never touched; the
edited list is written out by ``jpegiim.jpeg_writer``.

Copyright 2025 DNAi inc.
"""

import logging
from typing import List, Optional, Union

from jpegiim.exceptions import NotFoundError, OversizeSegmentError
from jpegiim.iptc_writer import IPTCWriter
from jpegiim.jpeg_parser import MAX_SEGMENT_PAYLOAD, Segment
from jpegiim.jpeg_tags import APP0, APP1, APP13, COM
from jpegiim.metadata_table import MetadataTable, default_table
from jpegiim.photoshop_irb import (
    PHOTOSHOP_SIGNATURE,
    find_iptc_block,
    is_photoshop_payload,
)

logger = logging.getLogger(__name__)

# Markers below this are not application segments
_FIRST_APP_MARKER = APP0


def _check_payload(payload: bytes, name: str) -> None:
    if len(payload) > MAX_SEGMENT_PAYLOAD:
        raise OversizeSegmentError(
            f"{name} payload of {len(payload)} bytes exceeds the {MAX_SEGMENT_PAYLOAD} "
            f"bytes a JPEG segment can hold"
        )


def find_segments(segments: List[Segment], marker: int) -> List[int]:
    """Return the indexes of every segment with ``marker``, in order."""
    return [index for index, segment in enumerate(segments) if segment.marker == marker]


def get_comment(segments: List[Segment]) -> Segment:
    """
    Return the first comment (COM) segment.

    Raises:
        NotFoundError: If there is no comment segment
    """
    for segment in segments:
        if segment.marker == COM:
            return segment
    raise NotFoundError("Couldn't find comment segment")


def comment_text(segments: List[Segment], encoding: str = 'utf-8') -> str:
    """Return the comment as text. Raises NotFoundError when absent."""
    return get_comment(segments).payload.decode(encoding, errors='replace')


def put_comment(
    segments: List[Segment],
    text: Union[str, bytes],
    table: Optional[MetadataTable] = None,
) -> List[Segment]:
    """
    Set the comment of a segment list.

    An existing COM segment keeps its position and gets the new payload.
    Otherwise a COM segment is inserted before the first segment that is
    not an application segment (APPn, JPGn, COM), or appended when every
    segment is one.

    Args:
        segments: Segment list, modified in place
        text: Comment text (UTF-8 encoded when str) or raw bytes
        table: Name table used to label a new segment

    Returns:
        The same list

    Raises:
        OversizeSegmentError: If the comment does not fit in a segment
    """
    payload = text.encode('utf-8') if isinstance(text, str) else bytes(text)
    _check_payload(payload, "Comment")

    for segment in segments:
        if segment.marker == COM:
            segment.payload = payload
            return segments

    comment = Segment.create(COM, payload, table=table)
    for index, segment in enumerate(segments):
        if segment.marker < _FIRST_APP_MARKER:
            segments.insert(index, comment)
            break
    else:
        segments.append(comment)
    return segments


def get_iptc_block(segments: List[Segment]) -> Optional[bytes]:
    """
    Return the raw IPTC block from the first Photoshop APP13 segment.

    Returns:
        IPTC bytes, or None when no APP13 segment carries an IPTC resource.
        Use ``find_iptc_block`` to also get the error of a damaged
        resource list.
    """
    return find_iptc_block(segments)[0]


def put_iptc_block(
    segments: List[Segment],
    iptc_data: bytes,
    table: Optional[MetadataTable] = None,
) -> List[Segment]:
    """
    Store an IPTC block in the Photoshop APP13 segment.

    The first Photoshop APP13 segment is updated, keeping its other image
    resources. Without one, a new APP13 segment is inserted after the
    last APP0/APP1 segment (or first, when there is none). Empty
    ``iptc_data`` removes the IPTC resource, and the APP13 segment with
    it when nothing else is left.

    Returns:
        The same list, modified in place
    """
    table = table or default_table()
    writer = IPTCWriter(table)

    for index in find_segments(segments, APP13):
        segment = segments[index]
        if not is_photoshop_payload(segment.payload):
            continue
        payload = writer.build_app13_payload(iptc_data, existing_payload=segment.payload)
        if payload == PHOTOSHOP_SIGNATURE:
            logger.debug("Removing APP13 segment %d, no resources left", index)
            del segments[index]
        else:
            _check_payload(payload, "APP13")
            segment.payload = payload
        return segments

    if not iptc_data:
        return segments

    payload = writer.build_app13_payload(iptc_data)
    _check_payload(payload, "APP13")
    insert_at = 0
    for index, segment in enumerate(segments):
        if segment.marker in (APP0, APP1):
            insert_at = index + 1
    segments.insert(insert_at, Segment.create(APP13, payload, table=table))
    return segments
