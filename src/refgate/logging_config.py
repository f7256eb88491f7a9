from __future__ import annotations

import json
import logging
import sys
from typing import Final

LOG_FORMAT: Final[str] = "%(asctime)s %(levelname)s %(name)s %(message)s"
HANDLER_NAME: Final[str] = "refgate"

# Record attribute -> key under "push" in JSON output.
PUSH_CONTEXT_FIELDS: Final[dict[str, str]] = {
    "repository": "repository",
    "ref_id": "ref",
    "changeset_id": "changeset",
}


def push_context(record: logging.LogRecord) -> dict[str, str]:
    context: dict[str, str] = {}
    for attribute, key in PUSH_CONTEXT_FIELDS.items():
        value = getattr(record, attribute, None)
        if value is not None:
            context[key] = str(value)
    return context


class TextFormatter(logging.Formatter):
    def __init__(self) -> None:
        super().__init__(LOG_FORMAT)

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = push_context(record)
        if not context:
            return line
        suffix = " ".join(f"{key}={value}" for key, value in context.items())
        head, newline, rest = line.partition("\n")
        return f"{head} [{suffix}]{newline}{rest}"


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "time": self.formatTime(record, "%Y-%m-%dT%H:%M:%S%z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        context = push_context(record)
        if context:
            payload["push"] = context
        if record.exc_info:
            payload["error"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, sort_keys=True)


def configure_logging(*, level: str = "WARNING", json_logs: bool = False) -> logging.Handler:
    """Install the refgate stderr handler on the root logger, replacing an earlier one."""
    root = logging.getLogger()
    for existing in [item for item in root.handlers if item.get_name() == HANDLER_NAME]:
        root.removeHandler(existing)

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(JsonFormatter() if json_logs else TextFormatter())
    root.addHandler(handler)
    root.setLevel(level.upper())
    return handler
