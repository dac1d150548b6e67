"""Error taxonomy for dashcam GPS extraction.

Two severities exist:

* **Record-level** problems are plain values (:class:`RecordError`). They are
  returned by the record validator/decoder and cause the pipeline to skip the
  current block. They never escape the pipeline.
* **Run-level** problems raise :class:`FatalError`, which carries a
  :class:`FatalErrorKind` tag and the offending path or detail. The CLI logs it
  and exits with a non-zero status.

A missing GPS index in a readable container is neither: the container reader
returns ``None`` and the pipeline moves on to the next file.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path


class RecordErrorKind(StrEnum):
    MISSING_BYTES = "MissingBytes"
    INVALID_BOX_SIZE = "InvalidBoxSize"
    INVALID_BOX_TYPE = "InvalidBoxType"
    INVALID_MAGIC_WORD = "InvalidMagicWord"
    NO_SAT_LOCK = "NoSatLock"
    INVALID_HEMISPHERE = "InvalidHemisphere"
    INVALID_DATE_TIME = "InvalidDateTime"


@dataclass(frozen=True)
class RecordError:
    """Why a single embedded GPS record was rejected.

    ``actual`` / ``expected`` hold the mismatching values for the size, type
    and magic word checks and are ``None`` otherwise.
    """

    kind: RecordErrorKind
    actual: int | str | None = None
    expected: int | str | None = None

    def __str__(self) -> str:
        match self.kind:
            case RecordErrorKind.MISSING_BYTES:
                return "Buffer too small"
            case RecordErrorKind.INVALID_BOX_SIZE:
                return f"Invalid buffer length {self.actual} for box size {self.expected}"
            case RecordErrorKind.INVALID_BOX_TYPE:
                return f"Invalid box type '{self.actual}', expected '{self.expected}'"
            case RecordErrorKind.INVALID_MAGIC_WORD:
                return f"Invalid magic word '{self.actual}', expected '{self.expected}'"
            case RecordErrorKind.NO_SAT_LOCK:
                return "No satellite lock"
            case RecordErrorKind.INVALID_HEMISPHERE:
                return "Invalid latitude (N/S) or longitude (E/W) hemisphere"
            case RecordErrorKind.INVALID_DATE_TIME:
                return f"Invalid date/time {self.actual}"


class FatalErrorKind(StrEnum):
    OUTPUT_FILE_EXISTS = "OutputFileExists"
    OUTPUT_NOT_CREATABLE = "OutputNotCreatable"
    PATH_NOT_FILE = "PathNotFile"
    CONTAINER_ERROR = "ContainerError"
    PATTERN_ERROR = "PatternError"
    NO_INPUT_FILES = "NoInputFiles"
    IO = "Io"


_FATAL_MESSAGES: dict[FatalErrorKind, str] = {
    FatalErrorKind.OUTPUT_FILE_EXISTS: "The output file {path} already exists, use --force to overwrite",
    FatalErrorKind.OUTPUT_NOT_CREATABLE: "The output file {path} cannot be created",
    FatalErrorKind.PATH_NOT_FILE: "The input path {path} is not a file",
    FatalErrorKind.CONTAINER_ERROR: "Cannot parse MP4 container {path}",
    FatalErrorKind.PATTERN_ERROR: "Invalid glob pattern {path}",
    FatalErrorKind.NO_INPUT_FILES: "No input files match {path}",
    FatalErrorKind.IO: "IO error on {path}",
}


class FatalError(Exception):
    """A condition that aborts the whole run."""

    def __init__(self, kind: FatalErrorKind, path: Path | str, detail: str | None = None):
        self.kind = kind
        self.path = path
        self.detail = detail
        message = _FATAL_MESSAGES[kind].format(path=repr(str(path)))
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
