"""Root logger configuration for the career outlooks service."""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import IO, Any, Dict, Literal, Optional

from .context import get_log_context

OutputFormat = Literal["json", "key-value"]

SERVICE_NAME = "career-outlooks"

KEY_VALUE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
KEY_VALUE_DATEFMT = "%Y-%m-%d %H:%M:%S"

# LogRecord attributes that are never treated as structured extras
RESERVED_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {
    "message",
    "asctime",
    "taskName",
}


class ContextualFilter(logging.Filter):
    """Stamps each record with service metadata and the active log context.

    Fields already on the record (from an explicit ``extra``) are left as is,
    so call-site values beat context values.
    """

    def __init__(self, service: str = SERVICE_NAME, environment: str = "local"):
        super().__init__()
        self.static_fields = {"service": service, "environment": environment}

    def filter(self, record: logging.LogRecord) -> bool:
        record.__dict__.update(self.static_fields)
        for key, value in get_log_context().items():
            record.__dict__.setdefault(key, value)
        return True


def _record_extras(record: logging.LogRecord, skip=RESERVED_ATTRS) -> Dict[str, Any]:
    """Collect the non-standard attributes of a record."""
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in skip and not key.startswith("_")
    }


class JSONFormatter(logging.Formatter):
    """One JSON object per line.

    ``timestamp``, ``level``, ``logger`` and ``message`` come first; extras
    and context fields follow as top-level keys.
    """

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        payload: Dict[str, Any] = {
            "timestamp": created.strftime("%Y-%m-%dT%H:%M:%S.") + f"{created.microsecond // 1000:03d}Z",
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(
            (key, self._serialize(value)) for key, value in _record_extras(record).items()
        )

        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)

    @staticmethod
    def _serialize(value: Any) -> Any:
        if isinstance(value, datetime):
            return value.isoformat()
        if isinstance(value, (tuple, set, frozenset)):
            return list(value)
        if value is None or isinstance(value, (str, int, float, bool, list, dict)):
            return value
        return str(value)


class KeyValueFormatter(logging.Formatter):
    """Human-readable ``timestamp [level] logger: message key=value ...`` lines."""

    SKIP_ATTRS = RESERVED_ATTRS | {"service", "environment"}

    def __init__(self, fmt: Optional[str] = KEY_VALUE_FORMAT, datefmt: Optional[str] = KEY_VALUE_DATEFMT):
        super().__init__(fmt, datefmt=datefmt)

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        extras = _record_extras(record, self.SKIP_ATTRS)
        pairs = " ".join(f"{key}={self._format_value(extras[key])}" for key in sorted(extras))
        return f"{line} {pairs}" if pairs else line

    @staticmethod
    def _format_value(value: Any) -> str:
        if value is None:
            return "null"
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, datetime):
            return value.isoformat()
        text = str(value)
        if isinstance(value, str) and any(ch in text for ch in " =,"):
            return f'"{text}"'
        return text


FORMATTERS = {
    "json": JSONFormatter,
    "key-value": KeyValueFormatter,
}


def configure_logging(
    level: str = "INFO",
    format_type: OutputFormat = "key-value",
    environment: str = "local",
    stream: Optional[IO[str]] = None,
) -> None:
    """Install a single handler on the root logger.

    Output goes to stderr unless a stream is given, keeping stdout free for
    the CLI's JSON results.

    Args:
        level: Level name (DEBUG, INFO, WARNING, ERROR, CRITICAL), any case
        format_type: 'json' or 'key-value'
        environment: Label stamped on every record
        stream: Optional output stream

    Raises:
        ValueError: On an unknown level or format
    """
    level_name = level.upper()
    numeric_level = logging.getLevelName(level_name)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {level}")

    formatter_class = FORMATTERS.get(format_type)
    if formatter_class is None:
        raise ValueError(
            f"Invalid log format: {format_type}. Must be one of: {', '.join(FORMATTERS)}"
        )

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(formatter_class())
    handler.addFilter(ContextualFilter(service=SERVICE_NAME, environment=environment))

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(numeric_level)

    logging.getLogger(__name__).debug(
        "Logging configured",
        extra={
            "event": "logging.configured",
            "component": "logging",
            "log_level": level_name,
            "log_format": format_type,
        },
    )
