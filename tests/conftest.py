"""Shared JPEG and IPTC byte fixtures."""

from __future__ import annotations

import struct
from pathlib import Path
from typing import Callable, Iterable, Tuple

import pytest

# 14 byte JFIF header (APP0 length field 0x0010)
JFIF_PAYLOAD = b"JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00"
# 10 byte scan header (SOS length field 0x000C)
SOS_PAYLOAD = b"\x03\x01\x00\x02\x11\x03\x11\x00\x3f\x00"
# Entropy-coded data with stuffed bytes and a restart marker
SCAN_DATA = b"\x12\x34\xff\x00\xd9\x56\xff\xd0\x78\xff\x00\x9a"


def segment_bytes(marker: int, payload: bytes) -> bytes:
    """Serialize one length-carrying segment."""
    return bytes((0xFF, marker)) + struct.pack(">H", len(payload) + 2) + payload


def jpeg_bytes(
    segments: Iterable[Tuple[int, bytes]] = ((0xE0, JFIF_PAYLOAD),),
    scan_data: bytes = SCAN_DATA,
    sos_payload: bytes = SOS_PAYLOAD,
) -> bytes:
    """Build SOI, the given segments, SOS, scan data and EOI."""
    data = bytearray(b"\xff\xd8")
    for marker, payload in segments:
        data.extend(segment_bytes(marker, payload))
    data.extend(segment_bytes(0xDA, sos_payload))
    data.extend(scan_data)
    data.extend(b"\xff\xd9")
    return bytes(data)


def iptc_bytes(*records: Tuple[int, int, bytes]) -> bytes:
    data = bytearray()
    for record_number, dataset_number, value in records:
        data.extend(struct.pack(">BBBH", 0x1C, record_number, dataset_number, len(value)))
        data.extend(value)
    return bytes(data)


def app13_payload(iptc_data: bytes) -> bytes:
    """Photoshop payload holding one unnamed IPTC resource."""
    payload = bytearray(b"Photoshop 3.0\x00")
    payload.extend(b"8BIM")
    payload.extend(struct.pack(">H", 0x0404))
    payload.extend(b"\x00\x00")
    payload.extend(struct.pack(">I", len(iptc_data)))
    payload.extend(iptc_data)
    if len(iptc_data) % 2:
        payload.append(0)
    return bytes(payload)


SAMPLE_IPTC = iptc_bytes(
    (2, 5, b"Harbour"),
    (2, 25, b"boats"),
    (2, 25, b"dawn"),
    (2, 120, b"Fishing boats at dawn"),
)


@pytest.fixture
def sample_jpeg() -> bytes:
    """JPEG with APP0, APP13 (IPTC), DQT and a comment-free header."""
    return jpeg_bytes(
        segments=(
            (0xE0, JFIF_PAYLOAD),
            (0xED, app13_payload(SAMPLE_IPTC)),
            (0xDB, bytes(range(65))),
        )
    )


@pytest.fixture
def jpeg_file(tmp_path: Path, sample_jpeg: bytes) -> Path:
    path = tmp_path / "sample.jpg"
    path.write_bytes(sample_jpeg)
    return path


@pytest.fixture
def make_jpeg_file(tmp_path: Path) -> Callable[..., Path]:
    """Return a factory writing ``jpeg_bytes(...)`` to a file."""

    def _make(name: str = "image.jpg", data: bytes | None = None, **kwargs) -> Path:
        path = tmp_path / name
        path.write_bytes(data if data is not None else jpeg_bytes(**kwargs))
        return path

    return _make
