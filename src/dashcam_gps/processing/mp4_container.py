"""MP4 atom traversal for locating the Novatek GPS index.

Novatek firmware stores a ``gps `` atom inside ``moov``. Its payload is::

    version       u32 BE
    encoded_date  u32 BE
    (offset u32 BE, size u32 BE) * n

where each pair points at one embedded GPS record elsewhere in the file.
"""

from __future__ import annotations

import logging
import struct
from pathlib import Path
from typing import BinaryIO

from dashcam_gps.errors import FatalError, FatalErrorKind
from dashcam_gps.track_data import GpsIndex, RawBlock

logger = logging.getLogger(__name__)

_ATOM_HEADER = struct.Struct(">I4s")
_GPS_HEADER = struct.Struct(">II")
_GPS_ENTRY = struct.Struct(">II")


def _find_mp4_atom(
    f: BinaryIO, parent_end: int, target: bytes, path: Path
) -> tuple[int, int] | None:
    """Scan sibling atoms within *parent_end* for *target* FourCC.

    Returns ``(data_offset, data_size)`` or ``None`` if not found. An atom
    header that does not fit its parent raises a ``ContainerError``.
    """
    while f.tell() + 8 <= parent_end:
        pos = f.tell()
        header = f.read(8)
        if len(header) < 8:
            raise FatalError(
                FatalErrorKind.CONTAINER_ERROR, path, f"truncated atom header at 0x{pos:X}"
            )
        size, fourcc = _ATOM_HEADER.unpack(header)
        if size == 0:  # extends to the end of the parent
            size = parent_end - pos
            data_start = pos + 8
        elif size == 1:  # 64-bit extended size
            ext = f.read(8)
            if len(ext) < 8:
                raise FatalError(
                    FatalErrorKind.CONTAINER_ERROR,
                    path,
                    f"truncated extended size at 0x{pos:X}",
                )
            size = struct.unpack(">Q", ext)[0]
            data_start = pos + 16
        else:
            data_start = pos + 8
        atom_end = pos + size
        if atom_end < data_start or atom_end > parent_end:
            raise FatalError(
                FatalErrorKind.CONTAINER_ERROR,
                path,
                f"atom {fourcc!r} at 0x{pos:X} has invalid size {size}",
            )
        if fourcc == target:
            return data_start, atom_end - data_start
        f.seek(atom_end)
    return None


def _parse_gps_atom(payload: bytes, path: Path) -> GpsIndex:
    if len(payload) < _GPS_HEADER.size:
        raise FatalError(
            FatalErrorKind.CONTAINER_ERROR, path, "gps atom shorter than its header"
        )
    version, encoded_date = _GPS_HEADER.unpack_from(payload, 0)
    entries = payload[_GPS_HEADER.size :]
    usable = len(entries) - len(entries) % _GPS_ENTRY.size
    if usable != len(entries):
        logger.debug(
            "Ignoring %d trailing bytes in gps atom of %s",
            len(entries) - usable,
            path.name,
        )
    blocks = [
        RawBlock(offset=offset, size=size)
        for offset, size in _GPS_ENTRY.iter_unpack(entries[:usable])
    ]
    return GpsIndex(version=version, encoded_date=encoded_date, data_blocks=blocks)


def read_gps_index(f: BinaryIO, file_size: int, path: Path) -> GpsIndex | None:
    """Locate and parse the ``moov > gps `` atom of an open MP4 stream.

    Returns ``None`` when the container has no GPS index. A file without a
    ``moov`` atom, or with malformed atom headers, raises ``ContainerError``.
    """
    f.seek(0)
    moov = _find_mp4_atom(f, file_size, b"moov", path)
    if moov is None:
        raise FatalError(FatalErrorKind.CONTAINER_ERROR, path, "no moov atom found")
    moov_offset, moov_size = moov

    f.seek(moov_offset)
    gps = _find_mp4_atom(f, moov_offset + moov_size, b"gps ", path)
    if gps is None:
        return None
    gps_offset, gps_size = gps

    f.seek(gps_offset)
    payload = f.read(gps_size)
    if len(payload) < gps_size:
        raise FatalError(FatalErrorKind.IO, path, "unexpected end of file in gps atom")
    return _parse_gps_atom(payload, path)
