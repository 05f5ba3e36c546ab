# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
IPTC metadata writer

This module encodes IPTC-NAA IIM records back into their binary form and
wraps the result in a Photoshop APP13 payload.

Copyright 2025 DNAi inc.
"""

import struct
from typing import Any, Dict, List, Optional, Tuple

from jpegiim.exceptions import InvalidTagError, OversizeRecordError
from jpegiim.iptc_parser import IPTC_TAG_MARKER, MAX_RECORD_DATA, IPTCRecord, parse_dataset_id
from jpegiim.metadata_table import MetadataTable, default_table
from jpegiim.photoshop_irb import (
    PhotoshopResource,
    build_resources,
    is_photoshop_payload,
    parse_resources,
    replace_iptc,
)


def validate_records(records: List[IPTCRecord]) -> None:
    """
    Check that every record can be encoded.

    Raises:
        InvalidTagError: If a record or dataset number does not fit in a byte
        OversizeRecordError: If a record's data does not fit the size field
    """
    for index, record in enumerate(records):
        if not (0 <= record.record_number <= 255 and 0 <= record.dataset_number <= 255):
            raise InvalidTagError(
                f"Record {index} has identifier {record.record_number}:{record.dataset_number}, "
                f"record and dataset numbers must be 0-255"
            )
        if len(record.data) > MAX_RECORD_DATA:
            raise OversizeRecordError(
                f"Record {index} ({record.type}) has {len(record.data)} data bytes, "
                f"more than the {MAX_RECORD_DATA} a standard IPTC dataset can hold"
            )


def encode_iptc(records: List[IPTCRecord]) -> bytes:
    """
    Encode records as IPTC-NAA IIM bytes, in list order.

    All records are validated before anything is encoded.
    """
    validate_records(records)
    iptc_data = bytearray()
    for record in records:
        iptc_data.extend(struct.pack(
            '>BBBH', IPTC_TAG_MARKER, record.record_number, record.dataset_number, len(record.data)
        ))
        iptc_data.extend(record.data)
    return bytes(iptc_data)


class IPTCWriter:
    """
    Writes IPTC metadata into Photoshop APP13 payloads.
    """

    def __init__(self, table: Optional[MetadataTable] = None):
        """Initialize IPTC writer."""
        self.table = table or default_table()
        # Reverse lookup from dataset names to (record, dataset)
        self.tag_names_to_dataset: Dict[str, Tuple[int, int]] = {}
        for dataset, tag_name in self.table.entry_names.items():
            # Prefer the first occurrence (Envelope before Application)
            self.tag_names_to_dataset.setdefault(tag_name, dataset)

    def records_from_metadata(self, metadata: Dict[str, Any], encoding: str = 'utf-8') -> List[IPTCRecord]:
        """
        Build records from a name -> value dictionary.

        Keys are dataset names (optionally prefixed ``IPTC:``) or
        ``"record:dataset"`` identifiers. List values produce one record
        per item.

        Raises:
            InvalidTagError: If a key names no known dataset
        """
        records: List[IPTCRecord] = []
        for key, value in metadata.items():
            tag_name = key.split(':', 1)[1] if key.startswith('IPTC:') else key
            if tag_name in self.tag_names_to_dataset:
                record_number, dataset_number = self.tag_names_to_dataset[tag_name]
            else:
                record_number, dataset_number = parse_dataset_id(tag_name)

            values = value if isinstance(value, (list, tuple)) else [value]
            for val in values:
                if isinstance(val, (bytes, bytearray)):
                    data = bytes(val)
                else:
                    data = str(val).encode(encoding)
                records.append(IPTCRecord(record_number, dataset_number, data))
        return records

    def build_iptc_data(self, records: List[IPTCRecord]) -> bytes:
        """Encode records. See ``encode_iptc``."""
        return encode_iptc(records)

    def build_app13_payload(self, iptc_data: bytes, existing_payload: Optional[bytes] = None) -> bytes:
        """
        Build an APP13 payload holding ``iptc_data``.

        Args:
            iptc_data: Raw IPTC block
            existing_payload: Current APP13 payload; its other Photoshop
                              resources are kept in place

        Returns:
            Photoshop image resource payload
        """
        resources: List[PhotoshopResource] = []
        if existing_payload and is_photoshop_payload(existing_payload):
            resources = parse_resources(existing_payload, strict=True).resources
        return build_resources(replace_iptc(resources, iptc_data))
