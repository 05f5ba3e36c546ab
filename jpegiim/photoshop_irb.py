# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Photoshop image resource blocks

IPTC data in a JPEG lives in an APP13 segment laid out as Photoshop
image resources:

- "Photoshop 3.0\\x00" signature
- repeated resource blocks:
    - 4 bytes: "8BIM"
    - 2 bytes: Resource ID (0x0404 for IPTC-NAA)
    - Pascal string name, padded to even length (length byte included)
    - 4 bytes: Resource size (big-endian)
    - N bytes: Resource data, padded to even length

This module splits an APP13 payload into resources and joins them back.

Copyright 2025 DNAi inc.
"""

import logging
import struct
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from jpegiim.exceptions import (
    CorruptStreamError,
    FormatError,
    JpegIimError,
    TruncatedDataError,
)
from jpegiim.jpeg_parser import Segment
from jpegiim.jpeg_tags import APP13
from jpegiim.scan_result import ScanStatusMixin

logger = logging.getLogger(__name__)

PHOTOSHOP_SIGNATURE = b'Photoshop 3.0\x00'
RESOURCE_SIGNATURE = b'8BIM'
IPTC_RESOURCE_ID = 0x0404

# Other block signatures seen in the wild
_KNOWN_SIGNATURES = (RESOURCE_SIGNATURE, b'PHUT', b'AgHg', b'DCSR')


@dataclass
class PhotoshopResource:
    """One image resource block."""
    resource_id: int
    name: bytes = b""
    data: bytes = b""
    signature: bytes = RESOURCE_SIGNATURE


@dataclass
class ResourceScan(ScanStatusMixin):
    resources: List[PhotoshopResource] = field(default_factory=list)
    error: Optional[JpegIimError] = None
    end_offset: int = 0


def is_photoshop_payload(payload: bytes) -> bool:
    """True if an APP13 payload carries Photoshop image resources."""
    return bytes(payload[:len(PHOTOSHOP_SIGNATURE)]) == PHOTOSHOP_SIGNATURE


def parse_resources(payload: bytes, strict: bool = False) -> ResourceScan:
    """
    Split an APP13 payload into Photoshop image resources.

    Args:
        payload: APP13 segment payload (starting with the Photoshop signature)
        strict: If True, raise the scan error instead of returning it

    Returns:
        ResourceScan with the resources read so far and the error, if any

    Raises:
        FormatError: If the payload has no Photoshop signature
    """
    if not is_photoshop_payload(payload):
        raise FormatError("APP13 payload does not start with 'Photoshop 3.0'")

    data = bytes(payload)
    result = ResourceScan()
    offset = len(PHOTOSHOP_SIGNATURE)
    size = len(data)

    while offset < size:
        if not any(data[offset:]):
            # Zero padding after the last block
            break
        if size - offset < 7:
            result.error = TruncatedDataError(f"Resource header at offset {offset} is truncated")
            break

        signature = data[offset:offset + 4]
        if signature not in _KNOWN_SIGNATURES:
            result.error = CorruptStreamError(
                f"No 8BIM signature at offset {offset} (found {signature!r})"
            )
            break

        resource_id = struct.unpack('>H', data[offset + 4:offset + 6])[0]
        name_len = data[offset + 6]
        name_start = offset + 7
        # Length byte plus name is padded to an even size
        name_end = name_start + name_len
        if name_len % 2 == 0:
            name_end += 1

        if name_end + 4 > size:
            result.error = TruncatedDataError(
                f"Resource 0x{resource_id:04X} at offset {offset} is truncated"
            )
            break
        name = data[name_start:name_start + name_len]

        data_length = struct.unpack('>I', data[name_end:name_end + 4])[0]
        data_start = name_end + 4
        if data_length > size - data_start:
            result.error = TruncatedDataError(
                f"Resource 0x{resource_id:04X} declares {data_length} bytes "
                f"but only {size - data_start} remain"
            )
            break

        result.resources.append(PhotoshopResource(
            resource_id=resource_id,
            name=name,
            data=data[data_start:data_start + data_length],
            signature=signature,
        ))
        offset = data_start + data_length + (data_length % 2)

    result.end_offset = min(offset, size)
    if result.error is not None:
        logger.warning("Photoshop resource scan stopped after %d resources: %s",
                       len(result.resources), result.error)
        if strict:
            raise result.error
    return result


def build_resources(resources: List[PhotoshopResource]) -> bytes:
    """
    Serialize image resources into an APP13 payload.

    Returns:
        Photoshop signature followed by every resource block
    """
    output = bytearray(PHOTOSHOP_SIGNATURE)
    for resource in resources:
        name = bytes(resource.name)[:255]
        output.extend(resource.signature)
        output.extend(struct.pack('>H', resource.resource_id))
        output.append(len(name))
        output.extend(name)
        if len(name) % 2 == 0:
            output.append(0)
        output.extend(struct.pack('>I', len(resource.data)))
        output.extend(resource.data)
        if len(resource.data) % 2:
            output.append(0)
    return bytes(output)


def find_iptc(resources: List[PhotoshopResource]) -> Optional[bytes]:
    """Return the data of the first IPTC-NAA resource, or None."""
    for resource in resources:
        if resource.resource_id == IPTC_RESOURCE_ID:
            return resource.data
    return None


def replace_iptc(resources: List[PhotoshopResource], iptc_data: bytes) -> List[PhotoshopResource]:
    """
    Return a resource list whose IPTC-NAA resource holds ``iptc_data``.

    The first existing IPTC resource keeps its position; a new one is
    appended when there is none. Empty ``iptc_data`` removes every IPTC
    resource.
    """
    updated: List[PhotoshopResource] = []
    replaced = False
    for resource in resources:
        if resource.resource_id != IPTC_RESOURCE_ID:
            updated.append(resource)
        elif iptc_data and not replaced:
            updated.append(PhotoshopResource(
                resource_id=IPTC_RESOURCE_ID,
                name=resource.name,
                data=bytes(iptc_data),
                signature=resource.signature,
            ))
            replaced = True
    if iptc_data and not replaced:
        updated.append(PhotoshopResource(resource_id=IPTC_RESOURCE_ID, data=bytes(iptc_data)))
    return updated


def find_iptc_block(segments: List[Segment]) -> Tuple[Optional[bytes], Optional[JpegIimError]]:
    """
    Locate the IPTC block in the Photoshop APP13 segments of a header.

    Returns:
        (IPTC bytes or None, resource scan error or None). The error of a
        damaged resource list is returned even when no IPTC block was
        found, since the block may lie past the damage.
    """
    error: Optional[JpegIimError] = None
    for segment in segments:
        if segment.marker != APP13 or not is_photoshop_payload(segment.payload):
            continue
        resources = parse_resources(segment.payload)
        iptc_data = find_iptc(resources.resources)
        if iptc_data is not None:
            return iptc_data, resources.error
        if error is None:
            error = resources.error
    return None, error
