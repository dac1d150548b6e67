"""Write the ordered GPS records to a GPX or CSV track file."""

from __future__ import annotations

import datetime
import logging
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Sequence

import gpxpy
import gpxpy.gpx
import pandas as pd

from dashcam_gps.config import config
from dashcam_gps.errors import FatalError, FatalErrorKind
from dashcam_gps.track_data import GpsRecord

logger = logging.getLogger(__name__)

TPX_NS = "http://www.garmin.com/xmlschemas/TrackPointExtension/v2"

# The source format has no fix type or satellite count, these are placeholders
GPX_FIX = "2d"
GPX_SATELLITES = 3

CSV_COLUMNS = [
    "source_file",
    "timestamp",
    "latitude_deg",
    "longitude_deg",
    "speed_mps",
    "bearing_deg",
]


def check_output_path(output: Path, force: bool) -> None:
    """Fail early if the track cannot be written to *output*."""
    if output.exists() and not force:
        raise FatalError(FatalErrorKind.OUTPUT_FILE_EXISTS, output)
    if output.exists() and not output.is_file():
        raise FatalError(FatalErrorKind.OUTPUT_NOT_CREATABLE, output, "not a regular file")
    parent = output.parent
    if not parent.is_dir():
        raise FatalError(
            FatalErrorKind.OUTPUT_NOT_CREATABLE, output, f"directory {parent} does not exist"
        )


def _track_point(record: GpsRecord) -> gpxpy.gpx.GPXTrackPoint:
    point = gpxpy.gpx.GPXTrackPoint(
        latitude=record.latitude_deg,
        longitude=record.longitude_deg,
        # Device local time, labelled UTC without conversion
        time=record.timestamp.replace(tzinfo=datetime.timezone.utc),
        name=record.source_file_name,
    )
    point.type_of_gpx_fix = GPX_FIX
    point.satellites = GPX_SATELLITES

    # GPX 1.1 has no speed/course, use the Garmin TrackPointExtension
    extension = ET.Element(f"{{{TPX_NS}}}TrackPointExtension")
    ET.SubElement(extension, f"{{{TPX_NS}}}speed").text = str(record.speed_mps)
    ET.SubElement(extension, f"{{{TPX_NS}}}course").text = str(record.bearing_deg)
    point.extensions.append(extension)
    return point


def build_gpx(records: Sequence[GpsRecord]) -> gpxpy.gpx.GPX:
    gpx = gpxpy.gpx.GPX()
    gpx.creator = "dashcam-gps-extract"
    gpx.nsmap["gpxtpx"] = TPX_NS

    track = gpxpy.gpx.GPXTrack(name=config.TRACK_NAME)
    gpx.tracks.append(track)
    segment = gpxpy.gpx.GPXTrackSegment()
    track.segments.append(segment)

    segment.points.extend(_track_point(r) for r in records)
    return gpx


def records_to_dataframe(records: Sequence[GpsRecord]) -> pd.DataFrame:
    return pd.DataFrame(
        {
            "source_file": [r.source_file_name for r in records],
            "timestamp": [r.timestamp.isoformat() for r in records],
            "latitude_deg": [r.latitude_deg for r in records],
            "longitude_deg": [r.longitude_deg for r in records],
            "speed_mps": [r.speed_mps for r in records],
            "bearing_deg": [r.bearing_deg for r in records],
        },
        columns=CSV_COLUMNS,
    )


def write_track(records: Sequence[GpsRecord], output: Path) -> None:
    """Write *records*, in order, to *output* (``.csv`` or GPX otherwise)."""
    try:
        if output.suffix.lower() == ".csv":
            records_to_dataframe(records).to_csv(output, index=False)
        else:
            output.write_text(build_gpx(records).to_xml(), encoding="utf-8")
    except OSError as exc:
        raise FatalError(FatalErrorKind.OUTPUT_NOT_CREATABLE, output, str(exc)) from exc

    size_kb = output.stat().st_size / 1024
    logger.info("Wrote track: %s  (%d points, %.0f KiB)", output, len(records), size_kb)
