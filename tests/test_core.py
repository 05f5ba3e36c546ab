"""Tests for file-level reading, writing and the JPEGFile session."""

from __future__ import annotations

import os
import stat
import struct

import pytest

from conftest import JFIF_PAYLOAD, SAMPLE_IPTC, SCAN_DATA, jpeg_bytes, segment_bytes
from jpegiim.core import JPEGFile, read_jpeg_header, read_jpeg_image_data, write_jpeg_header
from jpegiim.exceptions import (
    CorruptStreamError,
    FormatError,
    MetadataWriteError,
    OversizeSegmentError,
    TruncatedDataError,
)
from jpegiim.iptc_parser import IPTCRecord, decode_iptc
from jpegiim.jpeg_modifier import put_comment
from jpegiim.jpeg_parser import Segment


def test_read_header_and_image_data(jpeg_file):
    scan = read_jpeg_header(jpeg_file)

    assert scan.complete
    assert [s.name for s in scan.segments] == ["APP0", "APP13", "DQT", "SOS"]
    assert read_jpeg_image_data(jpeg_file) == SCAN_DATA


def test_read_header_of_truncated_file(make_jpeg_file):
    path = make_jpeg_file(data=b"\xff\xd8" + segment_bytes(0xE0, JFIF_PAYLOAD) + b"\xff\xe1\x00\x20abc")

    scan = read_jpeg_header(path)

    assert len(scan.segments) == 1
    assert isinstance(scan.error, TruncatedDataError)


def test_read_header_of_non_jpeg(make_jpeg_file):
    with pytest.raises(FormatError):
        read_jpeg_header(make_jpeg_file(data=b"not a jpeg"))


def test_write_header_in_place(jpeg_file):
    segments = read_jpeg_header(jpeg_file).segments
    put_comment(segments, "edited")

    write_jpeg_header(jpeg_file, jpeg_file, segments)

    scan = read_jpeg_header(jpeg_file)
    assert [s.name for s in scan.segments] == ["APP0", "APP13", "COM", "DQT", "SOS"]
    assert scan.segments[2].payload == b"edited"
    assert read_jpeg_image_data(jpeg_file) == SCAN_DATA


def test_write_header_to_new_file(jpeg_file, tmp_path):
    out = tmp_path / "copy.jpg"

    write_jpeg_header(jpeg_file, out, read_jpeg_header(jpeg_file).segments)

    assert out.read_bytes() == jpeg_file.read_bytes()


def test_oversize_header_leaves_file_untouched(jpeg_file):
    original = jpeg_file.read_bytes()
    segments = read_jpeg_header(jpeg_file).segments
    segments.insert(1, Segment.create(0xE1, bytes(65534)))

    with pytest.raises(OversizeSegmentError):
        write_jpeg_header(jpeg_file, jpeg_file, segments)

    assert jpeg_file.read_bytes() == original


def test_write_header_needs_image_data(make_jpeg_file, tmp_path):
    source = make_jpeg_file(data=jpeg_bytes(scan_data=b""))
    with pytest.raises(MetadataWriteError):
        write_jpeg_header(source, tmp_path / "out.jpg", read_jpeg_header(source).segments)


def test_write_header_with_missing_eoi(make_jpeg_file, tmp_path):
    source = make_jpeg_file(data=jpeg_bytes()[:-2])
    with pytest.raises(CorruptStreamError):
        write_jpeg_header(source, tmp_path / "out.jpg", read_jpeg_header(source).segments)


def test_jpeg_file_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        JPEGFile(tmp_path / "missing.jpg")


def test_jpeg_file_comment_round_trip(jpeg_file, tmp_path):
    out = tmp_path / "out.jpg"

    with JPEGFile(jpeg_file) as jpeg:
        assert jpeg.get_comment() is None
        jpeg.set_comment("Harbour at dawn")
        assert jpeg.modified
        jpeg.save(out)
        assert not jpeg.modified

    assert JPEGFile(out).get_comment() == "Harbour at dawn"
    assert JPEGFile(jpeg_file).get_comment() is None


def test_jpeg_file_iptc_round_trip(jpeg_file):
    with JPEGFile(jpeg_file) as jpeg:
        records = jpeg.get_iptc_records()
        assert records == decode_iptc(SAMPLE_IPTC).records
        records.append(IPTCRecord.from_text(2, 25, "harbour"))
        jpeg.set_iptc_records(records)
        jpeg.save()

    reopened = JPEGFile(jpeg_file, read_only=True)
    assert [r.text() for r in reopened.get_iptc_records() if r.dataset_number == 25] == [
        "boats", "dawn", "harbour",
    ]
    assert reopened.image_data == SCAN_DATA


def test_jpeg_file_remove_iptc(jpeg_file):
    with JPEGFile(jpeg_file) as jpeg:
        jpeg.set_iptc_records([])
        jpeg.save()

    reopened = JPEGFile(jpeg_file)
    assert reopened.get_iptc_records() == []
    assert "APP13" not in [s.name for s in reopened.segments]


def test_jpeg_file_without_iptc(make_jpeg_file):
    jpeg = JPEGFile(make_jpeg_file())
    assert jpeg.read_iptc().complete
    assert jpeg.get_iptc_records() == []


def test_read_only_session_refuses_save(jpeg_file):
    jpeg = JPEGFile(jpeg_file, read_only=True)
    jpeg.set_comment("x")
    with pytest.raises(MetadataWriteError):
        jpeg.save()


def test_partial_file_is_not_saved(make_jpeg_file):
    path = make_jpeg_file(data=jpeg_bytes()[:-2])

    jpeg = JPEGFile(path)

    assert jpeg.header.complete
    assert not jpeg.complete
    with pytest.raises(CorruptStreamError):
        jpeg.image_data
    with pytest.raises(MetadataWriteError):
        jpeg.save()


def test_strict_session_raises_on_damage(make_jpeg_file):
    path = make_jpeg_file(data=jpeg_bytes()[:-2])
    with pytest.raises(CorruptStreamError):
        JPEGFile(path, strict=True)


def test_truncated_header_session(make_jpeg_file):
    path = make_jpeg_file(data=b"\xff\xd8" + segment_bytes(0xE0, JFIF_PAYLOAD) + b"\xff\xe1\x00\x20abc")

    jpeg = JPEGFile(path)

    assert len(jpeg.segments) == 1
    with pytest.raises(TruncatedDataError):
        jpeg.image_data


def _mode(path):
    return stat.S_IMODE(os.stat(path).st_mode)


posix_only = pytest.mark.skipif(os.name != "posix", reason="POSIX file modes")


@posix_only
def test_in_place_rewrite_keeps_file_mode(jpeg_file):
    os.chmod(jpeg_file, 0o644)

    write_jpeg_header(jpeg_file, jpeg_file, read_jpeg_header(jpeg_file).segments)

    assert _mode(jpeg_file) == 0o644


@posix_only
def test_session_save_keeps_file_mode(jpeg_file):
    os.chmod(jpeg_file, 0o640)

    with JPEGFile(jpeg_file) as jpeg:
        jpeg.set_comment("mode")
        jpeg.save()

    assert _mode(jpeg_file) == 0o640


@posix_only
def test_new_file_gets_default_mode(jpeg_file, tmp_path):
    umask = os.umask(0)
    os.umask(umask)
    out = tmp_path / "new.jpg"

    write_jpeg_header(jpeg_file, out, read_jpeg_header(jpeg_file).segments)

    assert _mode(out) == 0o666 & ~umask


def test_truncated_iptc_resource_is_reported(make_jpeg_file):
    resource = b"8BIM\x04\x04\x00\x00" + struct.pack(">I", 100) + b"\x1c\x02\x05\x00\x04Test"
    path = make_jpeg_file(segments=((0xE0, JFIF_PAYLOAD), (0xED, b"Photoshop 3.0\x00" + resource)))

    jpeg = JPEGFile(path)
    scan = jpeg.read_iptc()

    assert scan.records == []
    assert isinstance(scan.error, TruncatedDataError)
    assert not scan.complete
    with pytest.raises(TruncatedDataError):
        jpeg.get_iptc_records()
