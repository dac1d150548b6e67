"""Track data models: GPS index descriptors and decoded GPS records."""

from __future__ import annotations

import datetime

import pydantic

# ---------------------------------------------------------------------------
# Container index models
# ---------------------------------------------------------------------------


class RawBlock(pydantic.BaseModel):
    """A byte range inside one input file holding one embedded GPS record."""

    model_config = pydantic.ConfigDict(frozen=True)

    offset: int = pydantic.Field(ge=0, lt=2**64)
    size: int = pydantic.Field(ge=0, lt=2**32)


class GpsIndex(pydantic.BaseModel):
    """Contents of the ``moov > gps `` atom of a Novatek MP4 file."""

    version: int
    encoded_date: int
    data_blocks: list[RawBlock] = pydantic.Field(default_factory=list)

    def summary(self) -> str:
        return (
            f"version={self.version}, date=0x{self.encoded_date:08X}, "
            f"blocks={len(self.data_blocks)}"
        )


# ---------------------------------------------------------------------------
# Decoded GPS record
# ---------------------------------------------------------------------------


class GpsRecord(pydantic.BaseModel):
    """One GPS fix recovered from a dashcam recording.

    ``timestamp`` is naive: it is the device's local clock, the source format
    carries no timezone.
    """

    source_file_name: str
    """Base name of the file the record came from."""

    timestamp: datetime.datetime

    latitude_deg: float
    """Decimal degrees, negative in the southern hemisphere."""

    longitude_deg: float
    """Decimal degrees, negative in the western hemisphere."""

    speed_mps: float
    bearing_deg: float
