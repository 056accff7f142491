"""
Purpose:
- Centralized configuration using pydantic-settings.
- Reads from environment variables and optional .env file.
- Built once at startup and handed to the router factories; never mutated afterwards.
"""

import logging
from typing import List
from pathlib import Path
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Shipped in place of a real key; rejected at request time.
API_KEY_PLACEHOLDER = "add_API_Key"

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Gemini credential (env: API_KEY)
    api_key: str = Field(default=API_KEY_PLACEHOLDER, description="Gemini API key")
    model_name: str = Field(default="gemini-2.0-flash", description="Gemini model used for generation")
    harassment_threshold: str = Field(
        default="BLOCK_ONLY_HIGH",
        description="HarmBlockThreshold applied to the harassment category"
    )

    # Listen address for `genproxy --addr`
    addr: str = Field(default="localhost:8080", description="host:port to serve on")

    # Static assets + sample images
    static_dir: Path = Field(default=Path("static"), description="Static assets and index.html template")
    images_dir: Path = Field(default=Path("static/images"), description="Directory scanned for sample images")
    sample_image_pattern: str = Field(default="baked_goods_*.jpeg")

    # Upload cap (10 MiB)
    max_upload_bytes: int = Field(default=10 << 20, gt=0)

    # Unmatched GET paths answer 200 with an empty body when true, 404 when false
    index_fallthrough: bool = Field(default=True)

    # CORS
    cors_allow_origins: List[str] = Field(
        default=["http://localhost:8080"],
        description="Allowed origins for browser apps"
    )

    log_level: str = Field(default="INFO")

    @field_validator("api_key", mode="before")
    @classmethod
    def _empty_key_is_placeholder(cls, v):
        # API_KEY="" behaves like an unset variable
        if v is None or (isinstance(v, str) and not v.strip()):
            return API_KEY_PLACEHOLDER
        return v.strip() if isinstance(v, str) else v

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        level = v.strip().upper()
        # getLevelName maps known names to their int value
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level {v!r}")
        return level


def api_key_configured(api_key: str) -> bool:
    """True once a real key has replaced the placeholder."""
    return bool(api_key) and api_key != API_KEY_PLACEHOLDER


def get_settings() -> Settings:
    return Settings()
