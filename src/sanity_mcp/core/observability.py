from __future__ import annotations

import logging
from typing import Any, Dict

EVENT_LOGGER = "sanity_mcp.observability"

# Attributes every LogRecord already has; `extra` may not overwrite them.
RESERVED_LOG_KEYS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))
) | {"message", "asctime"}


def _clean_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in fields.items() if k not in RESERVED_LOG_KEYS}


def log_event(
    event: str,
    logger: logging.Logger | None = None,
    *,
    level: int = logging.INFO,
    **fields: Any,
) -> None:
    """
    Emit one structured event (op_call, tool_call, history_fallback, ...).
    The event name is the message; `fields` travel as record attributes so
    LogfmtFormatter and caplog can read them. Reserved record attributes
    are dropped rather than raising.
    """
    log = logger or logging.getLogger(EVENT_LOGGER)
    log.log(level, event, extra={"event": event, **_clean_fields(fields)})


__all__ = ["EVENT_LOGGER", "log_event"]
