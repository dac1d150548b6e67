"""
Novatek embedded GPS record: validation and decoding.

Novatek-based dashcams write one ``free`` box per GPS fix into the MP4 file.
The ``moov > gps `` atom lists where these boxes are (see ``mp4_container``).
Each box has a fixed layout, minimum 60 bytes:

| Offset | Width | Type | Meaning |
|--------|-------|------|---------|
| 0  | 4 | u32 BE | box size, must equal the buffer length |
| 4  | 4 | ASCII  | box type, ``"free"`` |
| 8  | 4 | ASCII  | magic word, ``"GPS "`` |
| 16 | 4 | u32 LE | hour |
| 20 | 4 | u32 LE | minute |
| 24 | 4 | u32 LE | second |
| 28 | 4 | u32 LE | year - 2000 |
| 32 | 4 | u32 LE | month |
| 36 | 4 | u32 LE | day |
| 40 | 1 | ASCII  | satellite lock, ``'A'`` = locked |
| 41 | 1 | ASCII  | latitude hemisphere ``N`` / ``S`` |
| 42 | 1 | ASCII  | longitude hemisphere ``E`` / ``W`` |
| 44 | 4 | f32 LE | latitude, ``DDDmm.mmmm`` |
| 48 | 4 | f32 LE | longitude, ``DDDmm.mmmm`` |
| 52 | 4 | f32 LE | speed, knots |
| 56 | 4 | f32 LE | bearing, degrees |

Validation runs the checks in table order and stops at the first failure.
Buffers may be any readable byte view (``bytes``, ``bytearray``,
``memoryview``, ``mmap``).
"""

from __future__ import annotations

import datetime
import struct
from dataclasses import dataclass
from enum import StrEnum
from typing import Union

from dashcam_gps.errors import RecordError, RecordErrorKind
from dashcam_gps.processing import coordinates
from dashcam_gps.track_data import GpsRecord

Buffer = Union[bytes, bytearray, memoryview]

MIN_SIZE = 60
BOX_TYPE = "free"
MAGIC_WORD = "GPS "
YEAR_OFFSET = 2000

# ---------------------------------------------------------------------------
# Field layout
# ---------------------------------------------------------------------------

_BOX_SIZE = struct.Struct(">I")  # offset 0
_BOX_TYPE = slice(4, 8)
_MAGIC = slice(8, 12)
_DATE_TIME = struct.Struct("<6I")  # offset 16: hour, min, sec, year, month, day
_DATE_TIME_OFFSET = 16
_SAT_LOCK = 40
_LAT_HEMI = 41
_LON_HEMI = 42
_VALUES = struct.Struct("<4f")  # offset 44: lat, lon, speed, bearing
_VALUES_OFFSET = 44

_SAT_LOCKED = ord("A")


class LatitudeHemisphere(StrEnum):
    NORTH = "N"
    SOUTH = "S"


class LongitudeHemisphere(StrEnum):
    EAST = "E"
    WEST = "W"


def _ascii(data: Buffer, field: slice) -> str:
    return bytes(data[field]).decode("latin1")


def _hemispheres(
    data: Buffer,
) -> tuple[LatitudeHemisphere, LongitudeHemisphere] | None:
    try:
        return (
            LatitudeHemisphere(chr(data[_LAT_HEMI])),
            LongitudeHemisphere(chr(data[_LON_HEMI])),
        )
    except ValueError:
        return None


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def validate_record(data: Buffer) -> RecordError | None:
    """Check that *data* is a well-formed, locked Novatek GPS record.

    Returns ``None`` when every check passes, otherwise the first failure.
    """
    buf_len = len(data)
    if buf_len < MIN_SIZE:
        return RecordError(RecordErrorKind.MISSING_BYTES)

    (box_size,) = _BOX_SIZE.unpack_from(data, 0)
    if box_size != buf_len:
        return RecordError(RecordErrorKind.INVALID_BOX_SIZE, buf_len, box_size)

    box_type = _ascii(data, _BOX_TYPE)
    if box_type != BOX_TYPE:
        return RecordError(RecordErrorKind.INVALID_BOX_TYPE, box_type, BOX_TYPE)

    magic = _ascii(data, _MAGIC)
    if magic != MAGIC_WORD:
        return RecordError(RecordErrorKind.INVALID_MAGIC_WORD, magic, MAGIC_WORD)

    if data[_SAT_LOCK] != _SAT_LOCKED:
        return RecordError(RecordErrorKind.NO_SAT_LOCK)

    if _hemispheres(data) is None:
        return RecordError(RecordErrorKind.INVALID_HEMISPHERE)

    return None


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class NovatekRecord:
    """Raw field values of one validated record."""

    year: int
    month: int
    day: int
    hour: int
    minute: int
    second: int
    latitude_hemisphere: LatitudeHemisphere
    longitude_hemisphere: LongitudeHemisphere
    latitude: float  # DDDmm.mmmm
    longitude: float  # DDDmm.mmmm
    speed: float  # knots
    bearing: float  # degrees

    @property
    def timestamp(self) -> datetime.datetime:
        """Naive timestamp, raises ``ValueError`` for impossible dates."""
        return datetime.datetime(
            self.year, self.month, self.day, self.hour, self.minute, self.second
        )

    @property
    def latitude_deg(self) -> float:
        invert = self.latitude_hemisphere is LatitudeHemisphere.SOUTH
        return coordinates.dms_to_deg(self.latitude, invert)

    @property
    def longitude_deg(self) -> float:
        invert = self.longitude_hemisphere is LongitudeHemisphere.WEST
        return coordinates.dms_to_deg(self.longitude, invert)

    @property
    def speed_mps(self) -> float:
        return coordinates.speed_mps(self.speed)

    def to_gps_record(self, source_file_name: str) -> GpsRecord:
        return GpsRecord(
            source_file_name=source_file_name,
            timestamp=self.timestamp,
            latitude_deg=self.latitude_deg,
            longitude_deg=self.longitude_deg,
            speed_mps=self.speed_mps,
            bearing_deg=self.bearing,
        )


def decode_record(data: Buffer) -> NovatekRecord | RecordError:
    """Validate *data* and extract its fields.

    A record whose date/time fields do not form a calendar date is rejected
    with ``InvalidDateTime``.
    """
    error = validate_record(data)
    if error is not None:
        return error

    hour, minute, second, year, month, day = _DATE_TIME.unpack_from(
        data, _DATE_TIME_OFFSET
    )
    lat, lon, speed, bearing = _VALUES.unpack_from(data, _VALUES_OFFSET)
    hemispheres = _hemispheres(data)
    assert hemispheres is not None  # checked by validate_record
    lat_hemi, lon_hemi = hemispheres

    record = NovatekRecord(
        year=YEAR_OFFSET + year,
        month=month,
        day=day,
        hour=hour,
        minute=minute,
        second=second,
        latitude_hemisphere=lat_hemi,
        longitude_hemisphere=lon_hemi,
        latitude=lat,
        longitude=lon,
        speed=speed,
        bearing=bearing,
    )
    try:
        _ = record.timestamp
    except (ValueError, OverflowError):
        return RecordError(
            RecordErrorKind.INVALID_DATE_TIME,
            f"{record.year}-{month}-{day} {hour}:{minute}:{second}",
        )
    return record
