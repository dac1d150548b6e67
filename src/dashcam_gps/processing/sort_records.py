from __future__ import annotations

import logging
from enum import StrEnum

from dashcam_gps.track_data import GpsRecord

logger = logging.getLogger(__name__)


class SortingMode(StrEnum):
    FILE = "file"  # by source file name
    GPS_DATE = "gps"  # by decoded GPS timestamp
    NONE = "none"  # file order, then block order

    @classmethod
    def parse(cls, value: str) -> SortingMode:
        try:
            return cls(value.lower())
        except ValueError:
            raise ValueError(f"Unsupported sorting mode {value!r}") from None


def sort_records(records: list[GpsRecord], mode: SortingMode) -> None:
    """Reorder *records* in place.

    ``list.sort`` is stable, so records sharing a file name or a timestamp
    keep their arrival order.
    """
    logger.debug("Sorting %d records by %s", len(records), mode)
    match mode:
        case SortingMode.FILE:
            records.sort(key=lambda r: r.source_file_name)
        case SortingMode.GPS_DATE:
            records.sort(key=lambda r: r.timestamp)
        case SortingMode.NONE:
            pass
