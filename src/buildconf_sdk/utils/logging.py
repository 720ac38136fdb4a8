from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, cast

import structlog

if TYPE_CHECKING:
    from buildconf_sdk.core.config import SdkConfig


def configure_logging(level: str = "INFO", json: bool = True) -> None:
    """Route the SDK's structlog events to stderr through stdlib logging.

    The runtime only logs at debug level (``schema_registered``,
    ``entity_class_built``, ``compound_variant_assigned``, ``entity_added``,
    ``entity_validated``) plus one warning,
    ``compound_unknown_variant_replaced``, when a stored discriminator is
    overwritten without its variant keys being known.  Pass ``"DEBUG"`` to
    trace how a build configuration is assembled.

    Args:
        level: Standard logging level name.  Unknown names fall back to INFO.
        json: One JSON object per line when True, for CI log collectors;
            coloured console output otherwise.
    """
    log_level = getattr(logging, level.upper(), None)
    if not isinstance(log_level, int):
        log_level = logging.INFO

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=shared_processors
        + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
        foreign_pre_chain=shared_processors,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)


def configure_from(config: SdkConfig) -> None:
    """Apply the logging settings carried by an :class:`SdkConfig`."""
    configure_logging(config.log_level, json=config.log_json)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger named *name* (usually ``__name__``)."""
    return cast(structlog.stdlib.BoundLogger, structlog.get_logger(name))
