#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Settings - Centralized configuration management
"""

from pathlib import Path
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import IMAGE_DECODE_TIMEOUT_MS, TOC_DEFAULT_TITLE


# Base directory
BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Engine settings (env prefix DOCSTYLE_)"""

    # ========== Assets ==========
    # Image URLs containing this prefix are served by the asset endpoint and
    # must carry the bearer token as a query parameter (<img> can't send headers)
    asset_url_prefix: str = "/api/upload/"
    auth_token: Optional[str] = None

    # ========== Pagination ==========
    measure_backend: str = "heuristic"  # heuristic | browser
    image_decode_timeout_ms: int = IMAGE_DECODE_TIMEOUT_MS
    browser_headless: bool = True

    # ========== Typography defaults (measurement container) ==========
    default_font_size_pt: float = 14.0
    default_line_height: float = 1.5

    # ========== Table of Contents ==========
    toc_title: str = TOC_DEFAULT_TITLE

    model_config = SettingsConfigDict(
        env_prefix="DOCSTYLE_",
        env_file=str(BASE_DIR / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Allow extra fields from .env that aren't defined in model
    )

    @property
    def image_decode_timeout(self) -> float:
        """Image decode timeout in seconds"""
        return self.image_decode_timeout_ms / 1000.0


# Global settings instance
settings = Settings()
