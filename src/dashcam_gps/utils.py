"""Utility helpers for the dashcam_gps package."""

from __future__ import annotations

import datetime
import logging
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from dashcam_gps.track_data import GpsRecord

logger = logging.getLogger(__name__)

EARTH_RADIUS_M = 6371000.0


def haversine_vectorized(lat1, lon1, lat2, lon2):
    """Vectorized Haversine distance calculation in meters."""
    phi1, phi2 = np.radians(lat1), np.radians(lat2)
    dphi = np.radians(lat2 - lat1)
    dlambda = np.radians(lon2 - lon1)

    a = np.sin(dphi / 2) ** 2 + np.cos(phi1) * np.cos(phi2) * np.sin(dlambda / 2) ** 2
    c = 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))
    return EARTH_RADIUS_M * c


@dataclass
class TrackSummary:
    points: int
    files: int
    start: datetime.datetime | None = None
    end: datetime.datetime | None = None
    distance_m: float = 0.0
    max_speed_mps: float = 0.0


def summarize_track(records: Sequence[GpsRecord]) -> TrackSummary:
    """Point count, time span, path length and top speed of an ordered track.

    Distance follows the records in their current order, so it depends on the
    sorting mode.
    """
    summary = TrackSummary(
        points=len(records),
        files=len({r.source_file_name for r in records}),
    )
    if not records:
        return summary

    timestamps = [r.timestamp for r in records]
    summary.start = min(timestamps)
    summary.end = max(timestamps)

    lat = np.array([r.latitude_deg for r in records], dtype=np.float64)
    lon = np.array([r.longitude_deg for r in records], dtype=np.float64)
    speed = np.array([r.speed_mps for r in records], dtype=np.float64)

    if len(records) > 1:
        steps = haversine_vectorized(lat[:-1], lon[:-1], lat[1:], lon[1:])
        summary.distance_m = float(np.nansum(steps))
    summary.max_speed_mps = float(np.nanmax(speed)) if not np.all(np.isnan(speed)) else 0.0
    return summary


def log_track_summary(summary: TrackSummary) -> None:
    if summary.points == 0:
        logger.warning("Track is empty")
        return
    logger.info(
        "  Track: %d points from %d file(s)  |  %s – %s",
        summary.points,
        summary.files,
        summary.start.isoformat() if summary.start else "?",
        summary.end.isoformat() if summary.end else "?",
    )
    logger.info(
        "  distance: %.2f km  |  max speed: %.1f m/s (%.0f km/h)",
        summary.distance_m / 1000,
        summary.max_speed_mps,
        summary.max_speed_mps * 3.6,
    )
