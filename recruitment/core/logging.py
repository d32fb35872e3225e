from __future__ import annotations

import logging
import sys
from collections.abc import MutableMapping
from typing import Any

import structlog

_CONFIGURED = False

# Event keys that must never reach a log sink verbatim.
SENSITIVE_KEYS = frozenset(
    {"password", "new_password", "hashed_password", "access_token", "refresh_token", "token"}
)


def redact_secrets(
    _: Any, __: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """structlog processor replacing credential material with a marker."""
    for key in SENSITIVE_KEYS.intersection(event_dict):
        event_dict[key] = "[redacted]"
    return event_dict


def setup_logging(level: int = logging.INFO, *, json_output: bool = True) -> None:
    """Configure structlog to emit JSON logs with contextvars support.

    ``json_output=False`` switches to the human readable console renderer,
    which is handy when running the API locally.
    """
    global _CONFIGURED
    if _CONFIGURED:
        return

    logging.basicConfig(
        level=level,
        format="%(message)s",
        stream=sys.stdout,
    )

    renderer: Any = (
        structlog.processors.JSONRenderer() if json_output else structlog.dev.ConsoleRenderer()
    )
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", key="timestamp"),
        redact_secrets,
        structlog.processors.dict_tracebacks,
        renderer,
    ]

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=True,
    )

    _CONFIGURED = True
