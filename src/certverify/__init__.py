"""Certificate field extraction, cross-referencing and claim proofs."""

from certverify.async_runner import run_async
from certverify.exceptions import (
    AsyncExecutionError,
    ClaimError,
    ClaimThresholdError,
    DependencyError,
    DocumentLoadError,
    PackageError,
    RecognitionError,
    ReferenceDataError,
    SettingsError,
    UnknownClaimError,
)
from certverify.logging import configure_logging, get_logger
from certverify.settings import Settings, get_settings

__version__ = "0.1.0"

# Initialize package logger at import time via `get_logger`.
logger = get_logger("certverify")

__all__ = [
    "AsyncExecutionError",
    "ClaimError",
    "ClaimThresholdError",
    "DependencyError",
    "DocumentLoadError",
    "PackageError",
    "RecognitionError",
    "ReferenceDataError",
    "Settings",
    "SettingsError",
    "UnknownClaimError",
    "__version__",
    "configure_logging",
    "get_logger",
    "get_settings",
    "logger",
    "run_async",
]
