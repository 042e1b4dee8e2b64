"""Runtime settings loaded from `.env` and environment variables."""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from certverify.exceptions import SettingsError

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Package settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    project_name: str = "certverify"
    app_env: str = Field(
        default="dev",
        validation_alias="APP_ENV",
        description="Application environment, e.g. 'dev', 'prod'.",
    )

    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Logging level, e.g. 'INFO', 'DEBUG'.",
    )
    log_json: bool = Field(
        default=True,
        validation_alias="LOG_JSON",
        description="Enable JSON formatted logs.",
    )
    log_file: str | None = Field(
        default=None,
        validation_alias="LOG_FILE",
        description="File path for log output.",
    )

    ocr_language: str = Field(
        default="eng",
        validation_alias="OCR_LANGUAGE",
        description="Tesseract language code(s), e.g. 'eng' or 'eng+fra'.",
    )
    tesseract_cmd: str | None = Field(
        default=None,
        validation_alias="TESSERACT_CMD",
        description="Explicit path to the tesseract executable.",
    )
    pdf_render_scale: float = Field(
        default=2.0,
        gt=0.0,
        le=8.0,
        validation_alias="PDF_RENDER_SCALE",
        description="Zoom factor used when rendering the first PDF page for OCR.",
    )
    theme_sample_scale: float = Field(
        default=0.25,
        gt=0.0,
        le=1.0,
        validation_alias="THEME_SAMPLE_SCALE",
        description="Linear downscale applied before color sampling.",
    )

    results_dir: str = Field(
        default="results",
        validation_alias="RESULTS_DIR",
        description="Directory to store reports.",
    )
    missing_value_sentinel: str = Field(
        default="N/A",
        validation_alias="MISSING_VALUE_SENTINEL",
        description="Reference-data placeholder for an absent optional field.",
    )

    @field_validator("ocr_language")
    @classmethod
    def _validate_ocr_language(cls, value: str) -> str:
        """Ensure the OCR language is a non-empty tesseract language spec.

        Args:
            value (str): Raw language value.

        Raises:
            ValueError: If the value is blank.

        Returns:
            str: Normalized language value.
        """
        normalized = value.strip()
        if not normalized:
            raise ValueError("OCR_LANGUAGE must not be empty")  # noqa: TRY003
        return normalized


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance.

    Raises:
        SettingsError: If settings cannot be loaded or validated.

    Returns:
        Settings: The loaded settings instance.
    """
    try:
        return Settings()
    except Exception as exc:
        if _is_missing_settings_error(exc):
            ensure_env_file_exists()
            try:
                return Settings()
            except Exception as retry_exc:
                raise SettingsError(exc=retry_exc) from retry_exc
        raise SettingsError(exc=exc) from exc


def ensure_env_file_exists(
    *,
    env_path: Path = Path(".env"),
    template_path: Path = Path(".env.template"),
) -> None:
    """Create `.env` from template when missing.

    Args:
        env_path (Path): Target environment file path.
        template_path (Path): Template file path.
    """
    if env_path.exists() or not template_path.exists():
        return
    env_path.write_text(template_path.read_text(encoding="utf-8"), encoding="utf-8")
    logger.info(
        "Created environment file from template",
        extra={"env_path": str(env_path), "template_path": str(template_path)},
    )


def _is_missing_settings_error(exc: Exception) -> bool:
    """Return whether the settings failure is due to missing values.

    Args:
        exc (Exception): Caught settings initialization error.

    Returns:
        bool: True when the error represents missing settings values.
    """
    if not isinstance(exc, ValidationError):
        return False
    return any(error.get("type") == "missing" for error in exc.errors())
