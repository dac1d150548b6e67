"""Shared builders for synthetic Novatek GPS records and MP4 files."""

import struct
from pathlib import Path

import pytest


def _record(
    hour=10,
    minute=0,
    second=0,
    year=21,
    month=6,
    day=15,
    lock=b"A",
    lat_hemi=b"N",
    lon_hemi=b"E",
    lat=4730.0,
    lon=1915.5,
    speed=10.0,
    bearing=90.0,
    size=60,
    box_size=None,
    box_type=b"free",
    magic=b"GPS ",
):
    """Build one embedded GPS record of *size* bytes."""
    if box_size is None:
        box_size = size
    data = bytearray(struct.pack(">I4s4s", box_size, box_type, magic))
    data.extend(b"\x00" * 4)
    data.extend(struct.pack("<6I", hour, minute, second, year, month, day))
    data.extend(lock + lat_hemi + lon_hemi + b"\x00")
    data.extend(struct.pack("<4f", lat, lon, speed, bearing))
    data.extend(b"\x00" * (size - len(data)))
    return bytes(data[:size])


def _atom(fourcc: bytes, payload: bytes) -> bytes:
    return struct.pack(">I4s", 8 + len(payload), fourcc) + payload


def _mp4(path: Path, records=(), with_gps=True, blocks=None, version=1, date=0x20210615):
    """Write a minimal MP4: ftyp, mdat holding *records*, moov with a gps index.

    *blocks* overrides the ``(offset, size)`` list written into the index.
    Returns the ``(offset, size)`` pairs of the written records.
    """
    ftyp = _atom(b"ftyp", b"isom\x00\x00\x02\x00isomiso2mp41")
    mdat_payload = b"".join(records)
    mdat = _atom(b"mdat", mdat_payload)

    located = []
    pos = len(ftyp) + 8
    for rec in records:
        located.append((pos, len(rec)))
        pos += len(rec)
    index = located if blocks is None else blocks

    moov_children = _atom(b"mvhd", b"\x00" * 100)
    if with_gps:
        gps_payload = struct.pack(">II", version, date)
        gps_payload += b"".join(struct.pack(">II", o, s) for o, s in index)
        moov_children += _atom(b"gps ", gps_payload)
    moov = _atom(b"moov", moov_children)

    path.write_bytes(ftyp + mdat + moov)
    return located


@pytest.fixture
def make_record():
    return _record


@pytest.fixture
def make_atom():
    return _atom


@pytest.fixture
def make_mp4():
    return _mp4
