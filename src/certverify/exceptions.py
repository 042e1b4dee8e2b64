"""Package exceptions."""

from __future__ import annotations

from dataclasses import dataclass


class PackageError(Exception):
    """Root exception for the package."""


@dataclass(frozen=True)
class SettingsError(PackageError):
    """Raised when settings cannot be loaded or validated."""

    message: str = "Failed to load settings"
    exc: BaseException | None = None

    def __str__(self) -> str:
        """Return error message payload."""
        return f"{self.message}: {self.exc}" if self.exc else self.message


@dataclass(frozen=True)
class AsyncExecutionError(PackageError):
    """Raised when an async operation fails in compatibility runner."""

    result: BaseException
    message: str = "Async operation failed"

    def __str__(self) -> str:
        """Return error message payload."""
        return f"{self.message}: {self.result}"


@dataclass(frozen=True)
class DependencyError(PackageError):
    """Raised when optional runtime dependencies are missing."""

    missing_package: list[str]
    message: str

    def __str__(self) -> str:
        """Return error message payload."""
        return f"Missing runtime dependencies for '{self.message}': {', '.join(self.missing_package)}"


@dataclass(frozen=True)
class DocumentLoadError(PackageError):
    """Raised when an uploaded document cannot be decoded into a raster image."""

    message: str

    def __str__(self) -> str:
        """Return error message payload."""
        return self.message


@dataclass(frozen=True)
class RecognitionError(PackageError):
    """Raised when the text recognizer fails on a document."""

    message: str

    def __str__(self) -> str:
        """Return error message payload."""
        return self.message


class ClaimError(PackageError):
    """Base class for claim evaluation failures."""


@dataclass(frozen=True)
class UnknownClaimError(ClaimError):
    """Raised when a proof is requested for an unsupported claim type."""

    claim: str

    def __str__(self) -> str:
        """Return error message payload."""
        return f"Unknown claim type: {self.claim}"


@dataclass(frozen=True)
class ClaimThresholdError(ClaimError):
    """Raised when a threshold claim is requested without a usable threshold."""

    claim: str
    message: str = "Claim requires a threshold value"

    def __str__(self) -> str:
        """Return error message payload."""
        return f"{self.message}: {self.claim}"


@dataclass(frozen=True)
class ReferenceDataError(PackageError):
    """Raised when the reference record file cannot be loaded."""

    message: str

    def __str__(self) -> str:
        """Return error message payload."""
        return self.message
