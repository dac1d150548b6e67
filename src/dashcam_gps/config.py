import pathlib

import pydantic
import pydantic_settings

from dashcam_gps.processing.sort_records import SortingMode


class DashcamGpsConfig(pydantic_settings.BaseSettings):
    model_config = pydantic_settings.SettingsConfigDict(env_prefix="DASHCAM_GPS_")

    # Default output track, the suffix selects the format (.gpx or .csv)
    OUTPUT: pathlib.Path = pathlib.Path("dashcam.gpx")

    # Overwrite an existing output file
    FORCE: bool = False

    SORT: SortingMode = SortingMode.GPS_DATE

    # Container suffixes picked up when the input names a directory
    INPUT_EXTENSIONS: list[str] = [".mp4", ".mov"]

    # --- GPX output ---
    TRACK_NAME: str = "Dashcam track"

    @pydantic.field_validator("SORT", mode="before")
    @classmethod
    def _parse_sort(cls, value):
        if isinstance(value, str):
            return SortingMode.parse(value)
        return value


config = DashcamGpsConfig()
