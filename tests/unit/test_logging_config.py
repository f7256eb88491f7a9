from __future__ import annotations

import json
import logging
from collections.abc import Iterator

import pytest

from refgate.logging_config import (
    HANDLER_NAME,
    JsonFormatter,
    TextFormatter,
    configure_logging,
)

pytestmark = pytest.mark.unit


@pytest.fixture
def pristine_root_logger() -> Iterator[logging.Logger]:
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    try:
        yield root
    finally:
        root.handlers[:] = handlers
        root.setLevel(level)


def _record(**context: str) -> logging.LogRecord:
    record = logging.LogRecord(
        name="refgate.engine.orchestrator",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="checking %s",
        args=("c1",),
        exc_info=None,
    )
    for attribute, value in context.items():
        setattr(record, attribute, value)
    return record


def _refgate_handlers(root: logging.Logger) -> list[logging.Handler]:
    return [handler for handler in root.handlers if handler.get_name() == HANDLER_NAME]


def test_json_formatter_groups_push_context() -> None:
    record = _record(changeset_id="c1", ref_id="refs/heads/master")

    payload = json.loads(JsonFormatter().format(record))

    assert payload["message"] == "checking c1"
    assert payload["logger"] == "refgate.engine.orchestrator"
    assert payload["push"] == {"changeset": "c1", "ref": "refs/heads/master"}
    assert "error" not in payload


def test_json_formatter_omits_empty_push_context() -> None:
    payload = json.loads(JsonFormatter().format(_record()))

    assert "push" not in payload


def test_text_formatter_appends_push_context() -> None:
    line = TextFormatter().format(_record(repository="platform/api", ref_id="refs/heads/x"))

    assert line.endswith("checking c1 [repository=platform/api ref=refs/heads/x]")


def test_configure_logging_replaces_its_own_handler(pristine_root_logger: logging.Logger) -> None:
    foreign = logging.NullHandler()
    pristine_root_logger.addHandler(foreign)

    configure_logging(level="debug", json_logs=True)
    handler = configure_logging(level="info", json_logs=False)

    assert _refgate_handlers(pristine_root_logger) == [handler]
    assert isinstance(handler.formatter, TextFormatter)
    assert foreign in pristine_root_logger.handlers
    assert pristine_root_logger.level == logging.INFO


def test_json_logs_select_json_formatter(pristine_root_logger: logging.Logger) -> None:
    handler = configure_logging(json_logs=True)

    assert isinstance(handler.formatter, JsonFormatter)
    assert pristine_root_logger.level == logging.WARNING
