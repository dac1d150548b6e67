"""Unit conversions for Novatek GPS values."""

from __future__ import annotations

# 1 knot = 0.514444 m/s, kept at this precision for output compatibility
KNOTS_TO_MPS = 0.514444


def dms_to_deg(dms: float, invert: bool) -> float:
    """Convert a packed ``DDDmm.mmmm`` value into decimal degrees.

    ``4730.0`` is 47 degrees 30.0 minutes, i.e. ``47.5``. The device stores
    the magnitude only, *invert* supplies the sign (south / west).
    """
    minutes = dms % 100.0
    degrees = dms - minutes
    out = degrees / 100.0 + minutes / 60.0
    if invert:
        return -1.0 * out
    return out


def speed_mps(knots: float) -> float:
    return knots * KNOTS_TO_MPS
