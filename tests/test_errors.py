"""Tests for fatal error messages and record-level error values."""

from pathlib import Path

import pydantic
import pytest

from dashcam_gps.errors import FatalError, FatalErrorKind, RecordError, RecordErrorKind
from dashcam_gps.track_data import RawBlock


class TestFatalError:
    def test_output_exists_message(self):
        error = FatalError(FatalErrorKind.OUTPUT_FILE_EXISTS, Path("out.gpx"))
        assert str(error) == "The output file 'out.gpx' already exists, use --force to overwrite"

    def test_detail_is_appended(self):
        error = FatalError(FatalErrorKind.PATTERN_ERROR, "[a.mp4", "invalid range pattern")
        assert str(error) == "Invalid glob pattern '[a.mp4': invalid range pattern"
        assert error.kind is FatalErrorKind.PATTERN_ERROR
        assert error.path == "[a.mp4"


class TestRecordError:
    def test_is_a_value(self):
        assert RecordError(RecordErrorKind.NO_SAT_LOCK) == RecordError(RecordErrorKind.NO_SAT_LOCK)
        assert not isinstance(RecordError(RecordErrorKind.NO_SAT_LOCK), Exception)

    def test_kind_names(self):
        assert [k.value for k in RecordErrorKind][:6] == [
            "MissingBytes",
            "InvalidBoxSize",
            "InvalidBoxType",
            "InvalidMagicWord",
            "NoSatLock",
            "InvalidHemisphere",
        ]


class TestRawBlock:
    def test_size_is_u32(self):
        with pytest.raises(pydantic.ValidationError):
            RawBlock(offset=0, size=2**32)

    def test_offset_is_unsigned(self):
        with pytest.raises(pydantic.ValidationError):
            RawBlock(offset=-1, size=60)
