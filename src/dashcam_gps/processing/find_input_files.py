"""Resolve an input argument (file, directory or glob pattern) into MP4 paths."""

from __future__ import annotations

import glob
import logging
import os
import re
from pathlib import Path

from dashcam_gps.config import config
from dashcam_gps.errors import FatalError, FatalErrorKind

logger = logging.getLogger(__name__)

_SEPARATORS = re.compile(r"[/\\]" if os.sep == "\\" else r"/")


def _check_pattern(pattern: str) -> None:
    """Reject glob patterns that ``glob.glob`` would silently treat as literals."""
    for component in _SEPARATORS.split(pattern):
        if "**" in component and component != "**":
            raise FatalError(
                FatalErrorKind.PATTERN_ERROR,
                pattern,
                "recursive wildcards must form a single path component",
            )

    i = 0
    while i < len(pattern):
        if pattern[i] == "[":
            j = i + 1
            if j < len(pattern) and pattern[j] == "!":
                j += 1
            if j < len(pattern) and pattern[j] == "]":
                j += 1
            close = pattern.find("]", j)
            if close == -1:
                raise FatalError(
                    FatalErrorKind.PATTERN_ERROR, pattern, "invalid range pattern"
                )
            i = close
        i += 1


def _directory_files(directory: Path) -> list[Path]:
    extensions = {ext.lower() for ext in config.INPUT_EXTENSIONS}
    logger.info("Directory '%s' specified as input, listing …", directory)
    return [
        p
        for p in directory.iterdir()
        if p.is_file() and p.suffix.lower() in extensions
    ]


def find_input_files(pattern: str) -> list[Path]:
    """Return the input files named by *pattern*, sorted by path.

    *pattern* may be a single file, a directory (its MP4/MOV files are used)
    or a glob pattern. Duplicates (same resolved file) are dropped.
    """
    path = Path(pattern)
    if path.is_file():
        candidates = [path]
    elif path.is_dir():
        candidates = _directory_files(path)
    else:
        _check_pattern(pattern)
        candidates = [Path(m) for m in glob.glob(pattern, recursive=True)]
        for candidate in candidates:
            if not candidate.is_file():
                raise FatalError(FatalErrorKind.PATH_NOT_FILE, candidate)

    if not candidates:
        raise FatalError(FatalErrorKind.NO_INPUT_FILES, pattern)

    seen: set[Path] = set()
    unique: list[Path] = []
    for candidate in sorted(candidates, key=str):
        resolved = candidate.resolve()
        if resolved in seen:
            continue
        seen.add(resolved)
        unique.append(candidate)

    logger.debug("Resolved %d input file(s) from '%s'", len(unique), pattern)
    return unique
