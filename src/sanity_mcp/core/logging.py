import logging
import re
import sys
from typing import Any, Iterable, Union

LOG_EXTRA_FIELDS = (
    "request_id",
    "tool",
    "method",
    "endpoint",
    "status",
    "error_type",
    "duration_ms",
)

# Loggers that repeat what op_call already records.
CHATTY_LOGGERS = ("httpx", "httpcore")

_BEARER = re.compile(r"(Bearer\s+)\S+", re.IGNORECASE)


def redact(text: str) -> str:
    """Mask bearer credentials, e.g. when an error body echoes a header."""
    return _BEARER.sub(r"\1***", text)


def _fmt_val(val: Any) -> str:
    if isinstance(val, bool):
        return "true" if val else "false"
    if isinstance(val, (int, float)):
        return str(val)
    s = redact(str(val))
    if not s or any(c in s for c in ' ="'):
        s = '"' + s.replace("\\", "\\\\").replace('"', '\\"') + '"'
    return s


class LogfmtFormatter(logging.Formatter):
    """
    One `key=value` line per record: level, logger, event, then whichever of
    `fields` the record carries. Missing extras are skipped.
    """

    def __init__(self, fields: Iterable[str] = LOG_EXTRA_FIELDS):
        super().__init__()
        self.fields = tuple(fields)

    def format(self, record: logging.LogRecord) -> str:
        pairs: list[tuple[str, Any]] = [
            ("level", record.levelname.lower()),
            ("logger", record.name),
        ]

        msg = record.getMessage()
        if msg:
            pairs.append(("event", msg))

        for key in self.fields:
            val = getattr(record, key, None)
            if val is not None:
                pairs.append((key, val))

        if record.exc_info and record.exc_info[0] is not None:
            pairs.append(("exc_type", record.exc_info[0].__name__))
            pairs.append(("exc", record.exc_info[1]))

        return " ".join(f"{key}={_fmt_val(val)}" for key, val in pairs)


def _level_number(level: Union[str, int]) -> int:
    if isinstance(level, int):
        return level
    number = logging.getLevelName(level.strip().upper())
    return number if isinstance(number, int) else logging.INFO


def setup_logging(level: Union[str, int] = "INFO") -> None:
    """
    Route all logging to stderr as logfmt; stdout carries the MCP stdio stream.
    Safe to call twice: existing root handlers are replaced.
    """
    number = _level_number(level)

    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(LogfmtFormatter())
    root.addHandler(handler)
    root.setLevel(number)

    for name in CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(max(number, logging.WARNING))


__all__ = ["setup_logging", "LogfmtFormatter", "LOG_EXTRA_FIELDS", "redact"]
