import logging
import json
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler

from fashion_variations.config import LOG_LEVEL, LOG_TO_FILE, LOG_FILE_PATH

_STD_RECORD_KEYS = {
    "name", "msg", "args", "levelname", "levelno", "pathname", "filename", "module",
    "exc_info", "exc_text", "stack_info", "lineno", "funcName", "created", "msecs",
    "relativeCreated", "thread", "threadName", "processName", "process", "stacklevel",
    "taskName", "message",
}


class JsonFormatter(logging.Formatter):
    """Structured JSON log formatter.

    - Merges dict messages into the top-level payload.
    - Includes timestamp, level, logger, module, func, line.
    - Appends exc_info when present.
    - Carries along extra attributes such as ``request_id``.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: dict = {
            "timestamp": datetime.now(timezone.utc).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "logger": record.name,
            "module": record.module,
            "func": record.funcName,
            "line": record.lineno,
        }

        if isinstance(record.msg, dict):
            payload.update(record.msg)
        else:
            payload["message"] = record.getMessage()

        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key in _STD_RECORD_KEYS or key.startswith("_") or key in payload:
                continue
            try:
                json.dumps(value)
                payload[key] = value
            except (TypeError, ValueError):
                payload[key] = str(value)

        return json.dumps(payload, ensure_ascii=False)


def setup_logging(level: str | None = None) -> None:
    """Configure root logging once with the JSON formatter.

    Existing handlers are re-formatted instead of duplicated, so calling this
    more than once (app import plus ``main``) is harmless. uvicorn's loggers
    are aligned to the same level and format.
    """
    numeric_level = getattr(logging, (level or LOG_LEVEL).upper(), logging.INFO)
    root = logging.getLogger()
    json_formatter = JsonFormatter()

    if root.handlers:
        for handler in root.handlers:
            handler.setLevel(numeric_level)
            handler.setFormatter(json_formatter)
    else:
        stream_handler = logging.StreamHandler()
        stream_handler.setLevel(numeric_level)
        stream_handler.setFormatter(json_formatter)
        root.addHandler(stream_handler)
    root.setLevel(numeric_level)

    if LOG_TO_FILE:
        file_handler = RotatingFileHandler(LOG_FILE_PATH, maxBytes=5 * 1024 * 1024, backupCount=3)
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(json_formatter)
        # Avoid adding duplicate file handlers for the same filename
        if not any(
            isinstance(h, RotatingFileHandler) and h.baseFilename == file_handler.baseFilename
            for h in root.handlers
        ):
            root.addHandler(file_handler)
        else:
            file_handler.close()

    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        lg = logging.getLogger(name)
        lg.setLevel(numeric_level)
        for handler in lg.handlers:
            handler.setLevel(numeric_level)
            handler.setFormatter(json_formatter)
