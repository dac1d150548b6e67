"""
Dashcam GPS Scripts Package

This package contains command-line scripts for converting GPS data embedded in
Novatek dashcam recordings into track files.

Available scripts:
- extract_dashcam_gps: Convert MP4 file(s) into a GPX or CSV track
"""

__version__ = "1.0.0"
__all__ = ["extract_dashcam_gps"]
