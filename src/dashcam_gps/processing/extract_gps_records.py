"""
Novatek GPS extraction: turns one or more dashcam MP4 files into GPS records.

For each input file, in the order given:

1. Read the ``moov > gps `` index (``mp4_container.read_gps_index``). Files
   without an index are logged and skipped.
2. For every block listed in the index, in index order, seek to its offset and
   read it into a scratch buffer shared by all blocks and files. The buffer
   is resized to each block, so memory is bounded by the largest block.
3. Validate and decode the block (``novatek_record.decode_record``). Rejected
   blocks are logged with their file, index, offset, size and reason, then
   skipped.
4. Append the decoded record, tagged with the file's base name, to the
   run-wide list.

Records are therefore ordered by input file, then by block index. Ordering for
output is applied afterwards by ``sort_records``.
"""

from __future__ import annotations

import itertools
import logging
import time
from pathlib import Path
from typing import BinaryIO, Sequence

from dashcam_gps.errors import FatalError, FatalErrorKind, RecordError
from dashcam_gps.processing.mp4_container import read_gps_index
from dashcam_gps.processing.novatek_record import decode_record
from dashcam_gps.track_data import GpsRecord, RawBlock

logger = logging.getLogger(__name__)


def _read_block(
    f: BinaryIO, block: RawBlock, buf: bytearray, file_size: int, path: Path
) -> None:
    """Fill *buf* with exactly ``block.size`` bytes from ``block.offset``.

    A block reaching past the end of the file raises ``Io`` before the buffer
    is resized.
    """
    if block.offset + block.size > file_size:
        raise FatalError(
            FatalErrorKind.IO,
            path,
            f"block of {block.size} bytes at 0x{block.offset:08X} "
            f"ends past end of file ({file_size} bytes)",
        )

    del buf[block.size :]
    buf.extend(itertools.repeat(0, block.size - len(buf)))

    try:
        f.seek(block.offset)
        with memoryview(buf) as view:
            n = f.readinto(view)
    except OSError as exc:
        raise FatalError(FatalErrorKind.IO, path, str(exc)) from exc
    if n != block.size:
        raise FatalError(
            FatalErrorKind.IO,
            path,
            f"unexpected end of file reading {block.size} bytes at 0x{block.offset:08X}",
        )


def extract_file(path: Path, records: list[GpsRecord], buf: bytearray) -> int:
    """Append the valid GPS records of one MP4 file to *records*.

    *buf* is the scratch buffer reused across blocks. Returns the number of
    records appended.
    """
    if not path.is_file():
        raise FatalError(FatalErrorKind.PATH_NOT_FILE, path)
    file_name = path.name

    try:
        f = open(path, "rb")
    except OSError as exc:
        raise FatalError(FatalErrorKind.IO, path, str(exc)) from exc

    with f:
        file_size = path.stat().st_size
        gps_index = read_gps_index(f, file_size, path)
        if gps_index is None:
            logger.warning("No GPS blocks in %s", path)
            return 0

        logger.info("Loaded '%s', %s", file_name, gps_index.summary())

        appended = 0
        skipped = 0
        for idx, block in enumerate(gps_index.data_blocks):
            logger.debug("[%d] 0x%08X, size=%d", idx, block.offset, block.size)

            _read_block(f, block, buf, file_size, path)

            result = decode_record(buf)
            if isinstance(result, RecordError):
                logger.warning(
                    "Skipping GPS block [%d] of %s at offset 0x%08X size=%d: %s",
                    idx,
                    path,
                    block.offset,
                    block.size,
                    result,
                )
                skipped += 1
                continue

            records.append(result.to_gps_record(file_name))
            appended += 1

    if skipped:
        logger.info("  %s: %d records, %d skipped", file_name, appended, skipped)
    return appended


def extract_gps_records(paths: Sequence[Path]) -> list[GpsRecord]:
    """Extract GPS records from *paths*, in the given order."""
    t_total = time.monotonic()
    records: list[GpsRecord] = []
    buf = bytearray()

    for path in paths:
        extract_file(path, records, buf)

    elapsed = time.monotonic() - t_total
    logger.info(
        "Extracted %d GPS records from %d file(s) in %.1f s",
        len(records),
        len(paths),
        elapsed,
    )
    return records
