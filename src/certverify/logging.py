"""Structlog configuration for package-wide logging.

Call sites pass structured context as ``logger.info("msg", extra={...})``;
the processor chain lifts that mapping into the event, masks private
certificate payloads and renders JSON or console output through stdlib
handlers.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any

import structlog

from certverify.settings import Settings, get_settings

if TYPE_CHECKING:
    from structlog.typing import EventDict, Processor

_LOGGING_CONFIGURED = False

# Never written to a sink: claim secrets and full OCR text.
REDACTED_KEYS = frozenset({"secret_data", "raw_text"})
REDACTED = "***"


def _lift_extra(
    logger: logging.Logger,  # noqa: ARG001
    method_name: str,  # noqa: ARG001
    event_dict: EventDict,
) -> EventDict:
    """Merge an ``extra`` mapping into the event; event keys win on collision."""
    extra = event_dict.pop("extra", None)
    if isinstance(extra, dict):
        for key, value in extra.items():
            event_dict.setdefault(key, value)
    elif extra is not None:
        event_dict["extra"] = extra
    return event_dict


def _redact_private_values(
    logger: logging.Logger,  # noqa: ARG001
    method_name: str,  # noqa: ARG001
    event_dict: EventDict,
) -> EventDict:
    """Mask private certificate payloads.

    Args:
        logger: The logger instance (unused).
        method_name: The logging method name (unused).
        event_dict: Event dictionary after `extra` was lifted.

    Returns:
        The event dictionary with private values replaced.
    """
    for key in REDACTED_KEYS & event_dict.keys():
        event_dict[key] = REDACTED
    return event_dict


def _event_to_message(
    logger: logging.Logger,  # noqa: ARG001
    method_name: str,  # noqa: ARG001
    event_dict: EventDict,
) -> EventDict:
    if "event" in event_dict:
        event_dict["message"] = event_dict.pop("event")
    return event_dict


def _build_handlers(config: Settings) -> list[logging.Handler]:
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if config.log_file:
        handlers.append(logging.FileHandler(config.log_file, encoding="utf-8"))
    return handlers


def _build_processors(config: Settings) -> list[Processor]:
    """Return the processor chain, ending with the configured renderer.

    Args:
        config (Settings): Runtime settings.

    Returns:
        list[Processor]: Ordered structlog processors.
    """
    renderer: Any = structlog.processors.JSONRenderer() if config.log_json else structlog.dev.ConsoleRenderer()
    return [
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.add_log_level,
        _lift_extra,
        _redact_private_values,
        _event_to_message,
        structlog.processors.format_exc_info,
        renderer,
    ]


def configure_logging(*, settings: Settings | None = None, force: bool = False) -> None:
    """Configure structlog and stdlib logging once for the package.

    Args:
        settings (Settings | None): Settings to use, loaded lazily when omitted.
        force (bool): Reconfigure even when logging is already set up.
    """
    global _LOGGING_CONFIGURED  # noqa: PLW0603

    if _LOGGING_CONFIGURED and not force:
        return

    config = settings or get_settings()
    level = logging.getLevelNamesMapping().get(config.log_level.upper(), logging.INFO)

    logging.basicConfig(level=level, format="%(message)s", handlers=_build_handlers(config), force=force)
    structlog.configure(
        processors=_build_processors(config),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    _LOGGING_CONFIGURED = True


def get_logger(name: str = "certverify") -> structlog.BoundLogger:
    """Return a named logger, configuring logging on first use."""
    if not _LOGGING_CONFIGURED:
        configure_logging()
    return structlog.get_logger(name)
