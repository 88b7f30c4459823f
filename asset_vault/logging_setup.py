"""
App-layer JSONL logging bootstrap.
Initializes a single canonical JSONL sink early in CLI startup.
"""

import json
import logging
import os
from datetime import UTC
from datetime import datetime
from pathlib import Path

DEFAULT_PATH = "./assetvault.log.jsonl"
DEFAULT_LEVEL = "INFO"

_RESERVED_ATTRS = frozenset(
    {
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
        "name",
    }
)


class JsonlHandler(logging.Handler):
    def __init__(self, path: str):
        super().__init__()
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def format_record(self, record: logging.LogRecord) -> dict:
        base = {
            "ts": datetime.now(UTC).isoformat(timespec="milliseconds"),
            "lvl": record.levelname,
            "schema": {"name": "assetvault.log", "ver": "1.0.0"},
            "logger": record.name,
            "event": getattr(record, "event", None),
            "message": record.getMessage(),
        }
        # Extras passed via logger.info(..., extra={...})
        for k, v in record.__dict__.items():
            if k in _RESERVED_ATTRS:
                continue
            base.setdefault(k, v)
        if record.exc_info:
            base["exc"] = logging.Formatter().formatException(record.exc_info)
        return base

    def emit(self, record: logging.LogRecord) -> None:
        try:
            line = json.dumps(self.format_record(record), ensure_ascii=False, default=str)
            with self.path.open("a", encoding="utf-8") as f:
                f.write(line + "\n")
        except Exception:
            # As a last resort, swallow errors to avoid interfering with main flow
            pass


def init_json_logging(path: str | None = None, level: str | None = None) -> None:
    path = path or os.environ.get("ASSETVAULT_LOG_PATH", DEFAULT_PATH)
    level = (level or os.environ.get("ASSETVAULT_LOG_LEVEL", DEFAULT_LEVEL)).upper()
    root = logging.getLogger()
    root.setLevel(getattr(logging, level, logging.INFO))
    # Remove existing handlers of the same kind to avoid duplicates
    for h in list(root.handlers):
        if isinstance(h, JsonlHandler):
            root.removeHandler(h)
    root.addHandler(JsonlHandler(path))
