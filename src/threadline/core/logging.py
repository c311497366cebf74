import logging, sys, json, time, uuid
from datetime import date, datetime
from typing import Any, MutableMapping, Mapping, Sequence


# Attributes every LogRecord carries; anything else was passed via ``extra=``.
RESERVED_LOG_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime", "taskName"}


def _coerce_for_json(value: Any) -> Any:
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, uuid.UUID):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Mapping):
        return {str(k): _coerce_for_json(v) for k, v in value.items()}
    if isinstance(value, Sequence) and not isinstance(value, (bytes, bytearray)):
        return [_coerce_for_json(v) for v in value]
    return repr(value)


class JsonFormatter(logging.Formatter):
    """One JSON object per line; ``extra`` fields become top-level keys."""

    def __init__(self, service: str | None = None) -> None:
        super().__init__()
        self.service = service

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        base: MutableMapping[str, Any] = {
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "time": time.strftime('%Y-%m-%dT%H:%M:%SZ', time.gmtime(record.created)),
        }
        if self.service:
            base["service"] = self.service
        for key, value in record.__dict__.items():
            if key in RESERVED_LOG_RECORD_ATTRS or key in base or key.startswith("_"):
                continue
            base[key] = _coerce_for_json(value)
        if record.exc_info:
            base["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(base, ensure_ascii=False)


def configure_logging(level: str = "INFO", service: str | None = None) -> None:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter(service=service))
    # force=True so a second app import (tests, reload) does not stack handlers
    logging.basicConfig(level=level.upper(), handlers=[handler], force=True)
