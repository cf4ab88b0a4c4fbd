"""Configuration management for ocrpdf.

Loads and validates YAML configuration with defaults for rasterization,
OCR and filtering. The resulting ``AppConfig`` is built once and passed
down to the extraction entry point.
"""

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from ocrpdf.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("configs/config.yaml")


class OCRConfig(BaseModel):
    """Configuration for the Tesseract OCR engine and worker pool."""

    tesseract_cmd: str | None = None
    language: str = "eng"
    psm: int | None = None
    workers: int | None = Field(default=None, ge=1)


class RasterConfig(BaseModel):
    """Configuration for PDF page rasterization."""

    first_page: int = Field(default=1, ge=1)
    last_page: int | None = Field(default=None, ge=1)
    dpi: int = Field(default=300, gt=0)
    image_format: str = "tiff"
    poppler_path: str | None = None


class FilterConfig(BaseModel):
    """Rule specification files, applied in the listed order."""

    rule_files: list[str] = Field(default_factory=list)


class AppConfig(BaseModel):
    """Top-level application configuration."""

    ocr: OCRConfig = Field(default_factory=OCRConfig)
    raster: RasterConfig = Field(default_factory=RasterConfig)
    filters: FilterConfig = Field(default_factory=FilterConfig)
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        return value.upper()


def load_config(path: Path | None = None) -> AppConfig:
    """Load configuration from a YAML file.

    Args:
        path: Path to the YAML configuration file.
            Defaults to configs/config.yaml.

    Returns:
        Validated application configuration.

    Raises:
        ConfigurationError: If the file cannot be parsed or holds
            invalid values.
    """
    if path is None:
        path = DEFAULT_CONFIG_PATH

    if not path.exists():
        logger.info("No config file found at %s, using defaults", path)
        return AppConfig()

    logger.info("Loading configuration from %s", path)
    try:
        with open(path) as f:
            raw = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigurationError(f"{path}: {exc}") from exc

    if not isinstance(raw, dict):
        raise ConfigurationError(f"{path}: expected a mapping at top level")

    try:
        return AppConfig(**raw)
    except ValidationError as exc:
        raise ConfigurationError(f"{path}: {exc}") from exc
