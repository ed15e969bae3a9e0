"""Application configuration and settings management."""

from pathlib import Path
from typing import Any, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Fallback distance (km) for moves that start and end in the same prefecture.
DEFAULT_SAME_REGION_DISTANCES_KM: dict[str, float] = {
    "01": 560, "02": 205, "03": 235, "04": 165, "05": 205, "06": 195,
    "07": 225, "08": 135, "09": 125, "10": 125, "11": 90, "12": 100,
    "13": 50, "14": 60, "15": 175, "16": 90, "17": 110, "18": 90,
    "19": 80, "20": 195, "21": 135, "22": 135, "23": 125, "24": 125,
    "25": 80, "26": 70, "27": 60, "28": 80, "29": 50, "30": 70,
    "31": 70, "32": 80, "33": 90, "34": 135, "35": 90, "36": 60,
    "37": 60, "38": 80, "39": 90, "40": 100, "41": 70, "42": 100,
    "43": 100, "44": 90, "45": 100, "46": 110, "47": 165,
}


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="MOVING_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Moving Estimate Service"
    data_root: Path = Field(default=Path("data"), description="Root directory for static data files.")
    reference_workbook: Path = Field(
        default=Path("data/reference_data.xlsx"),
        description="Workbook with one sheet per reference table, used when the database is unavailable.",
    )
    default_distance_km: float = Field(
        default=50.0,
        ge=0.0,
        description="Distance reported when no row exists for a pair of different prefectures.",
    )
    same_region_distances: dict[str, float] = Field(
        default_factory=lambda: dict(DEFAULT_SAME_REGION_DISTANCES_KM),
        description="Per-prefecture distance (km) for moves within a single prefecture.",
    )

    # Supabase configuration
    supabase_url: Optional[str] = Field(
        default=None,
        description="Supabase project URL (e.g., https://xxx.supabase.co).",
    )
    supabase_key: Optional[str] = Field(
        default=None,
        description="Supabase service role key for backend operations.",
    )

    @field_validator("data_root", "reference_workbook", mode="before")
    @classmethod
    def _expand_path(cls, value: Any) -> Path:
        path_value = value if isinstance(value, Path) else Path(str(value))
        return path_value.expanduser().resolve()

    @field_validator("same_region_distances", mode="before")
    @classmethod
    def _merge_same_region_overrides(cls, value: Any) -> dict[str, float]:
        """Merge overrides (mapping or JSON object) onto the built-in table."""
        if value is None or value == "":
            return dict(DEFAULT_SAME_REGION_DISTANCES_KM)
        if isinstance(value, str):
            try:
                value = json.loads(value)
            except json.JSONDecodeError as exc:
                raise ValueError("same_region_distances must be a JSON object") from exc
        if not isinstance(value, dict):
            raise ValueError("same_region_distances must be a mapping of prefecture code to km")

        merged = dict(DEFAULT_SAME_REGION_DISTANCES_KM)
        for code, distance in value.items():
            merged[str(code).strip().zfill(2)] = float(distance)
        return merged


settings = Settings()
