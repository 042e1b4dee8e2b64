"""Analysis request model."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, field_validator


class AnalyzeRequest(BaseModel):
    """Certificate analysis request settings."""

    model_config = ConfigDict(extra="forbid")

    input_path: Path
    output_path: Path | None = None
    reference_path: Path | None = None

    @field_validator("input_path")
    @classmethod
    def _validate_input_path(cls, value: Path) -> Path:
        """Ensure input path exists and points to a file.

        Args:
            value (Path): Input path.

        Raises:
            ValueError: If the path does not exist or is not a file.

        Returns:
            Path: Validated input path.
        """
        if not value.exists():
            raise ValueError("Input path does not exist")  # noqa: TRY003
        if not value.is_file():
            raise ValueError("Input path is not a file")  # noqa: TRY003
        return value
