"""Tests for the dashcam-gps-extract command line."""

import gpxpy
import pandas as pd
import pytest

from dashcam_gps.processing.sort_records import SortingMode
from dashcam_gps.scripts.extract_dashcam_gps import EXIT_FATAL, build_parser, main


@pytest.fixture
def clips(tmp_path, make_mp4, make_record):
    clip_dir = tmp_path / "clips"
    clip_dir.mkdir()
    make_mp4(clip_dir / "a.mp4", [make_record(hour=10), make_record(hour=10, lock=b"V")])
    make_mp4(clip_dir / "b.mp4", [make_record(hour=9)])
    return clip_dir


class TestParser:
    def test_defaults(self):
        args = build_parser().parse_args(["clip.mp4"])
        assert args.sort is SortingMode.GPS_DATE
        assert args.force is False
        assert args.output.name == "dashcam.gpx"

    def test_sort_mode_is_case_insensitive(self):
        args = build_parser().parse_args(["-s", "FILE", "clip.mp4"])
        assert args.sort is SortingMode.FILE

    def test_unknown_sort_mode(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--sort", "date", "clip.mp4"])


class TestMain:
    def test_writes_gpx_sorted_by_gps_date(self, clips, tmp_path):
        output = tmp_path / "track.gpx"
        assert main(["-o", str(output), str(clips / "*.mp4")]) == 0
        points = gpxpy.parse(output.read_text()).tracks[0].segments[0].points
        assert [(p.name, p.time.hour) for p in points] == [("b.mp4", 9), ("a.mp4", 10)]

    def test_none_sort_keeps_file_order(self, clips, tmp_path):
        output = tmp_path / "track.csv"
        assert main(["-o", str(output), "-s", "none", str(clips)]) == 0
        df = pd.read_csv(output)
        assert list(df["source_file"]) == ["a.mp4", "b.mp4"]

    def test_existing_output_is_fatal(self, clips, tmp_path):
        output = tmp_path / "track.gpx"
        output.write_text("keep me")
        assert main(["-o", str(output), str(clips / "*.mp4")]) == EXIT_FATAL
        assert output.read_text() == "keep me"

    def test_force_overwrites(self, clips, tmp_path):
        output = tmp_path / "track.gpx"
        output.write_text("old")
        assert main(["-f", "-o", str(output), str(clips / "a.mp4")]) == 0
        assert "a.mp4" in output.read_text()

    def test_invalid_pattern_is_fatal(self, clips, tmp_path):
        output = tmp_path / "track.gpx"
        assert main(["-o", str(output), str(clips / "[a.mp4")]) == EXIT_FATAL
        assert not output.exists()

    def test_unparseable_container_is_fatal(self, tmp_path):
        bogus = tmp_path / "bogus.mp4"
        bogus.write_bytes(b"\x00\x00\x10\x00junk")
        output = tmp_path / "track.gpx"
        assert main(["-o", str(output), str(bogus)]) == EXIT_FATAL
        assert not output.exists()

    def test_no_gps_data_writes_empty_track(self, tmp_path, make_mp4):
        clip = tmp_path / "a.mp4"
        make_mp4(clip, [], with_gps=False)
        output = tmp_path / "track.gpx"
        assert main(["-o", str(output), str(clip)]) == 0
        assert gpxpy.parse(output.read_text()).get_points_no() == 0
