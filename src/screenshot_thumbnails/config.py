"""
Screenshot Thumbnails Configuration
===================================

This module handles configuration loading for the thumbnail audit.

Configuration Sources (in order of precedence):
    1. Environment variables (highest priority)
    2. config.yaml file
    3. Default values (lowest priority)

Environment Variable Mapping:
    THUMBNAILS_COUNT        -> thumbnails.count
    THUMBNAILS_HEIGHT       -> thumbnails.height
    THUMBNAILS_QUALITY      -> thumbnails.quality
    THUMBNAILS_MAX_WORKERS  -> thumbnails.max_workers
    THUMBNAILS_TIMEOUT      -> thumbnails.timeout_seconds
    THUMBNAILS_FAST_MODE    -> trace.fast_mode
    THUMBNAILS_LOG_LEVEL    -> logging.level

Example:
    from screenshot_thumbnails.config import settings

    print(settings.thumbnails.count)
    print(settings.thumbnails.quality)

Logging:
    Importing this module only loads settings; it does not touch logging.
    The host process calls setup_logging(settings) once at startup to
    install the json or text format.
"""

import os
import logging
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field

from screenshot_thumbnails.rendering.encoder import JPEG_QUALITY
from screenshot_thumbnails.rendering.scaling import THUMBNAIL_HEIGHT
from screenshot_thumbnails.selection.selector import NUMBER_OF_THUMBNAILS
from screenshot_thumbnails.trace.speedline import SCREENSHOT_CATEGORY


logger = logging.getLogger(__name__)


# =============================================================================
# Configuration Models
# =============================================================================

class ThumbnailConfig(BaseModel):
    """Storyboard shape and encoding configuration."""

    count: int = Field(
        default=NUMBER_OF_THUMBNAILS,
        ge=1,
        description="Number of thumbnails in the storyboard",
    )
    height: int = Field(
        default=THUMBNAIL_HEIGHT,
        ge=1,
        description="Thumbnail height in pixels",
    )
    quality: int = Field(
        default=JPEG_QUALITY,
        ge=0,
        le=100,
        description="JPEG quality",
    )
    max_workers: int = Field(
        default=1,
        ge=1,
        description="Rendering threads (1 = sequential)",
    )
    timeout_seconds: Optional[float] = Field(
        default=None,
        gt=0,
        description="Deadline for the render loop (None = no deadline)",
    )


class TraceConfig(BaseModel):
    """Trace analysis configuration."""

    fast_mode: bool = Field(
        default=True,
        description="Interpolate visual progress instead of decoding every frame",
    )
    screenshot_category: str = Field(
        default=SCREENSHOT_CATEGORY,
        description="Trace category of screenshot events",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(default="json", description="Log format: json or text")


class Settings(BaseModel):
    """
    Main settings class for screenshot thumbnails.

    Loads configuration from YAML file and environment variables.
    Environment variables take precedence over file values.
    """

    thumbnails: ThumbnailConfig = Field(default_factory=ThumbnailConfig)
    trace: TraceConfig = Field(default_factory=TraceConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


# =============================================================================
# Configuration Loading
# =============================================================================

def load_config(config_path: Optional[str] = None) -> Settings:
    """
    Load configuration from YAML file and environment variables.

    Priority (highest to lowest):
        1. Environment variables
        2. YAML config file
        3. Default values

    Args:
        config_path: Path to config.yaml. If None, searches common locations.

    Returns:
        Settings: Loaded configuration
    """
    if config_path is None:
        search_paths = [
            Path("config.yaml"),
            Path("config.yml"),
        ]
        for path in search_paths:
            if path.exists():
                config_path = str(path)
                break

    config_data = {}
    if config_path and Path(config_path).exists():
        logger.info(f"Loading config from: {config_path}")
        with open(config_path, "r") as f:
            config_data = yaml.safe_load(f) or {}
    else:
        logger.debug("No config file found, using defaults and environment variables")

    _apply_env_overrides(config_data)

    return Settings.model_validate(config_data)


def _apply_env_overrides(config_data: dict) -> None:
    """Apply environment variable overrides to config data."""

    # Thumbnail settings
    if env_count := os.environ.get("THUMBNAILS_COUNT"):
        config_data.setdefault("thumbnails", {})["count"] = int(env_count)
    if env_height := os.environ.get("THUMBNAILS_HEIGHT"):
        config_data.setdefault("thumbnails", {})["height"] = int(env_height)
    if env_quality := os.environ.get("THUMBNAILS_QUALITY"):
        config_data.setdefault("thumbnails", {})["quality"] = int(env_quality)
    if env_workers := os.environ.get("THUMBNAILS_MAX_WORKERS"):
        config_data.setdefault("thumbnails", {})["max_workers"] = int(env_workers)
    if env_timeout := os.environ.get("THUMBNAILS_TIMEOUT"):
        config_data.setdefault("thumbnails", {})["timeout_seconds"] = float(env_timeout)

    # Trace settings
    if env_fast := os.environ.get("THUMBNAILS_FAST_MODE"):
        config_data.setdefault("trace", {})["fast_mode"] = env_fast.lower() in ("1", "true", "yes")

    # Logging settings
    if env_log := os.environ.get("THUMBNAILS_LOG_LEVEL"):
        config_data.setdefault("logging", {})["level"] = env_log


def setup_logging(settings: Settings) -> None:
    """
    Configure root logging based on settings.

    Called by the host at startup, not on import.
    """
    log_level = getattr(logging, settings.logging.level.upper(), logging.INFO)

    if settings.logging.format == "json":
        log_format = '{"time": "%(asctime)s", "level": "%(levelname)s", "module": "%(name)s", "message": "%(message)s"}'
    else:
        log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=log_level,
        format=log_format,
        datefmt="%Y-%m-%dT%H:%M:%S",
    )


# =============================================================================
# Global Settings Instance
# =============================================================================

# Global settings instance - loaded on import
settings = load_config()
