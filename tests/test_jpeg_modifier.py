"""Tests for comment and APP13 segment editing."""

from __future__ import annotations

import pytest

from conftest import JFIF_PAYLOAD, SAMPLE_IPTC, SOS_PAYLOAD, app13_payload, iptc_bytes
from jpegiim.exceptions import NotFoundError, OversizeSegmentError
from jpegiim.jpeg_modifier import (
    comment_text,
    find_segments,
    get_comment,
    get_iptc_block,
    put_comment,
    put_iptc_block,
)
from jpegiim.jpeg_parser import Segment
from jpegiim.photoshop_irb import PhotoshopResource, build_resources, parse_resources


def header(*markers):
    return [Segment.create(marker, SOS_PAYLOAD if marker == 0xDA else b"x") for marker in markers]


def test_get_comment_when_absent():
    with pytest.raises(NotFoundError) as excinfo:
        get_comment(header(0xE0, 0xDA))
    assert isinstance(excinfo.value, LookupError)
    assert "Couldn't find comment segment" in str(excinfo.value)


def test_get_comment_returns_first():
    segments = header(0xE0, 0xDA)
    segments.insert(1, Segment.create(0xFE, b"first"))
    segments.insert(2, Segment.create(0xFE, b"second"))

    assert get_comment(segments).payload == b"first"
    assert comment_text(segments) == "first"


def test_put_comment_twice_keeps_single_segment():
    segments = header(0xE0, 0xDB, 0xDA)

    put_comment(segments, "a")
    put_comment(segments, "b")

    coms = find_segments(segments, 0xFE)
    assert len(coms) == 1
    assert segments[coms[0]].payload == b"b"


def test_new_comment_goes_before_first_non_application_segment():
    segments = header(0xE0, 0xE1, 0xDB, 0xC0, 0xDA)

    result = put_comment(segments, "hello")

    assert result is segments
    assert [s.marker for s in segments] == [0xE0, 0xE1, 0xFE, 0xDB, 0xC0, 0xDA]
    assert segments[2].name == "COM"


def test_new_comment_appended_after_application_segments():
    segments = header(0xE0, 0xE1)

    put_comment(segments, "tail")

    assert [s.marker for s in segments] == [0xE0, 0xE1, 0xFE]


def test_existing_comment_keeps_position():
    segments = header(0xE0, 0xFE, 0xE1, 0xDA)

    put_comment(segments, "new text")

    assert [s.marker for s in segments] == [0xE0, 0xFE, 0xE1, 0xDA]
    assert segments[1].payload == b"new text"


def test_comment_text_is_utf8_and_bytes_pass_through():
    segments = header(0xDA)

    put_comment(segments, "café")
    assert get_comment(segments).payload == b"caf\xc3\xa9"

    put_comment(segments, b"\x00\x01raw")
    assert get_comment(segments).payload == b"\x00\x01raw"


def test_oversize_comment_is_rejected():
    segments = header(0xE0, 0xDA)
    with pytest.raises(OversizeSegmentError):
        put_comment(segments, "x" * 65534)
    assert find_segments(segments, 0xFE) == []


def test_get_iptc_block_reads_photoshop_resource():
    segments = header(0xE0, 0xDA)
    segments.insert(1, Segment.create(0xED, app13_payload(SAMPLE_IPTC)))

    assert get_iptc_block(segments) == SAMPLE_IPTC


def test_get_iptc_block_skips_foreign_app13():
    segments = header(0xE0, 0xDA)
    segments.insert(1, Segment.create(0xED, b"Adobe_CM\x00\x01"))

    assert get_iptc_block(segments) is None


def test_put_iptc_block_inserts_after_last_app0_app1():
    segments = header(0xE0, 0xE1, 0xE2, 0xDB, 0xDA)

    put_iptc_block(segments, SAMPLE_IPTC)

    assert [s.marker for s in segments] == [0xE0, 0xE1, 0xED, 0xE2, 0xDB, 0xDA]
    assert segments[2].name == "APP13"
    assert get_iptc_block(segments) == SAMPLE_IPTC


def test_put_iptc_block_without_app0_goes_first():
    segments = header(0xDB, 0xDA)

    put_iptc_block(segments, SAMPLE_IPTC)

    assert segments[0].marker == 0xED


def test_put_iptc_block_keeps_other_resources():
    other = PhotoshopResource(resource_id=0x03ED, data=b"\x00\x48\x00\x00")
    iptc = PhotoshopResource(resource_id=0x0404, data=SAMPLE_IPTC)
    segments = header(0xE0, 0xDA)
    segments.insert(1, Segment.create(0xED, build_resources([other, iptc])))
    new_iptc = iptc_bytes((2, 5, b"Replaced"))

    put_iptc_block(segments, new_iptc)

    resources = parse_resources(segments[1].payload).resources
    assert [r.resource_id for r in resources] == [0x03ED, 0x0404]
    assert resources[0].data == other.data
    assert resources[1].data == new_iptc
    assert len(find_segments(segments, 0xED)) == 1


def test_empty_iptc_block_removes_lone_app13():
    segments = header(0xE0, 0xDA)
    segments.insert(1, Segment.create(0xED, app13_payload(SAMPLE_IPTC)))

    put_iptc_block(segments, b"")

    assert find_segments(segments, 0xED) == []
    assert get_iptc_block(segments) is None


def test_empty_iptc_block_without_app13_is_a_no_op():
    segments = header(0xE0, 0xDA)
    put_iptc_block(segments, b"")
    assert [s.marker for s in segments] == [0xE0, 0xDA]


def test_jfif_app0_kept_unchanged():
    segments = [Segment.create(0xE0, JFIF_PAYLOAD), Segment.create(0xDA, SOS_PAYLOAD)]
    put_iptc_block(segments, SAMPLE_IPTC)
    put_comment(segments, "c")
    assert segments[0].payload == JFIF_PAYLOAD
