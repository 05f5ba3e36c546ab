"""Tests for Photoshop image resource parsing."""

from __future__ import annotations

import struct

import pytest

from conftest import SAMPLE_IPTC, app13_payload
from jpegiim.exceptions import CorruptStreamError, FormatError, TruncatedDataError
from jpegiim.photoshop_irb import (
    PHOTOSHOP_SIGNATURE,
    PhotoshopResource,
    build_resources,
    find_iptc,
    is_photoshop_payload,
    parse_resources,
    replace_iptc,
)
from jpegiim.scan_result import ScanOutcome


def test_parses_single_iptc_resource():
    scan = parse_resources(app13_payload(SAMPLE_IPTC))

    assert scan.complete
    assert len(scan.resources) == 1
    assert scan.resources[0].resource_id == 0x0404
    assert find_iptc(scan.resources) == SAMPLE_IPTC


def test_build_then_parse_with_odd_and_even_lengths():
    resources = [
        PhotoshopResource(resource_id=0x03ED, name=b"", data=b"\x00\x48\x00\x01"),
        PhotoshopResource(resource_id=0x0404, name=b"iptc", data=b"odd"),
        PhotoshopResource(resource_id=0x0424, name=b"x", data=b"", signature=b"PHUT"),
    ]

    payload = build_resources(resources)

    assert len(payload) % 2 == 0
    scan = parse_resources(payload)
    assert scan.complete
    assert scan.resources == resources
    assert scan.end_offset == len(payload)


def test_rejects_payload_without_signature():
    assert not is_photoshop_payload(b"Adobe_CM")
    with pytest.raises(FormatError):
        parse_resources(b"Adobe_CM\x00\x01")


def test_only_signature_has_no_resources():
    scan = parse_resources(PHOTOSHOP_SIGNATURE)
    assert scan.complete
    assert scan.resources == []


def test_trailing_zero_padding_is_ignored():
    scan = parse_resources(app13_payload(SAMPLE_IPTC) + bytes(4))
    assert scan.complete
    assert len(scan.resources) == 1


def test_truncated_resource_data():
    payload = PHOTOSHOP_SIGNATURE + b"8BIM\x04\x04\x00\x00" + struct.pack(">I", 100) + b"short"

    scan = parse_resources(payload)

    assert scan.resources == []
    assert scan.outcome is ScanOutcome.TRUNCATED
    with pytest.raises(TruncatedDataError):
        parse_resources(payload, strict=True)


def test_unknown_signature_is_corrupt():
    payload = app13_payload(SAMPLE_IPTC) + b"XXXX\x04\x04\x00\x00\x00\x00\x00\x00"

    scan = parse_resources(payload)

    assert len(scan.resources) == 1
    assert type(scan.error) is CorruptStreamError


def test_replace_iptc_keeps_position():
    resources = [
        PhotoshopResource(resource_id=0x0404, name=b"n", data=b"old"),
        PhotoshopResource(resource_id=0x03ED, data=b"res"),
    ]

    updated = replace_iptc(resources, b"new")

    assert [r.resource_id for r in updated] == [0x0404, 0x03ED]
    assert updated[0].data == b"new"
    assert updated[0].name == b"n"
    assert resources[0].data == b"old"


def test_replace_iptc_appends_when_missing():
    updated = replace_iptc([PhotoshopResource(resource_id=0x03ED)], b"new")
    assert [r.resource_id for r in updated] == [0x03ED, 0x0404]


def test_replace_iptc_with_empty_data_removes_all():
    resources = [
        PhotoshopResource(resource_id=0x0404, data=b"a"),
        PhotoshopResource(resource_id=0x03ED),
        PhotoshopResource(resource_id=0x0404, data=b"b"),
    ]
    assert [r.resource_id for r in replace_iptc(resources, b"")] == [0x03ED]
