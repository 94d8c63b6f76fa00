# ruff: noqa: INP001
"""Text and JSON log formatting of `extra=` fields."""

from __future__ import annotations

import json
import logging

import pytest

from task_planner.core import logging as app_logging


def _record(**extra: object) -> logging.LogRecord:
    record = logging.LogRecord(
        name="task_planner.services.tasks",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="task.created",
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_text_formatter_appends_sorted_extra_fields() -> None:
    formatter = app_logging.TextFormatter(fmt="%(levelname)s %(message)s")

    line = formatter.format(_record(task_id="1", category="Cloud"))

    assert line == "INFO task.created category=Cloud task_id=1"


def test_json_formatter_emits_one_object_per_record() -> None:
    formatter = app_logging.JsonFormatter()

    payload = json.loads(formatter.format(_record(task_id="1")))

    assert payload["level"] == "INFO"
    assert payload["logger"] == "task_planner.services.tasks"
    assert payload["message"] == "task.created"
    assert payload["task_id"] == "1"


def test_configure_logging_replaces_its_own_handler(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(app_logging.settings, "log_format", "json")

    app_logging.configure_logging()
    app_logging.configure_logging()

    handlers = [h for h in logging.getLogger().handlers if h.get_name() == "task_planner"]
    assert len(handlers) == 1
    assert isinstance(handlers[0].formatter, app_logging.JsonFormatter)

    monkeypatch.setattr(app_logging.settings, "log_format", "text")
    app_logging.configure_logging()
