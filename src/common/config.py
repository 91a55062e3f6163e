"""Project configuration and paths.

Loads settings from config/settings.yaml and environment variables.
Nothing is read at import time; call ``Settings.load()``.
"""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

from src.tag_engine.config import RankingConfig
from src.tag_engine.models import PolarityFiltering, SortMode

__all__ = [
    "CONFIG_DIR",
    "DATA_DIR",
    "PROJECT_ROOT",
    "PolarityFiltering",
    "RankingConfig",
    "Settings",
    "SortMode",
]

# === Paths ===
PROJECT_ROOT = Path(__file__).parent.parent.parent
CONFIG_DIR = PROJECT_ROOT / "config"
DATA_DIR = PROJECT_ROOT / "data"


class Settings(BaseModel):
    """Top-level application settings."""
    ranking: RankingConfig = Field(default_factory=RankingConfig)
    exclusions_file: str = ""
    default_sort_mode: SortMode = SortMode.SMART
    log_level: str = "INFO"

    @classmethod
    def load(cls, path: str | Path | None = None) -> Settings:
        """Load settings from config/settings.yaml, falling back to defaults.

        Environment variables TAG_EXCLUSIONS_FILE, TAG_SORT_MODE and
        LOG_LEVEL (also read from a project .env) override values from
        the file.
        """
        load_dotenv(PROJECT_ROOT / ".env")

        settings_path = Path(path) if path else CONFIG_DIR / "settings.yaml"
        data: dict = {}
        if settings_path.exists():
            with open(settings_path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}

        if exclusions := os.getenv("TAG_EXCLUSIONS_FILE"):
            data["exclusions_file"] = exclusions
        if sort_mode := os.getenv("TAG_SORT_MODE"):
            data["default_sort_mode"] = sort_mode
        if level := os.getenv("LOG_LEVEL"):
            data["log_level"] = level
        return cls(**data)

    @property
    def exclusions_abs_path(self) -> Path | None:
        """Resolve the exclusions file relative to project root."""
        if not self.exclusions_file:
            return None
        p = Path(self.exclusions_file)
        if p.is_absolute():
            return p
        return PROJECT_ROOT / p
