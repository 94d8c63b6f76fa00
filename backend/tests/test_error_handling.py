# ruff: noqa

from __future__ import annotations

import pytest
from fastapi import FastAPI, HTTPException
from fastapi.testclient import TestClient
from pydantic import BaseModel, Field
from starlette.requests import Request

from task_planner.core import error_handling
from task_planner.core.error_handling import (
    REQUEST_ID_HEADER,
    _error_payload,
    _get_request_id,
    _http_exception_exception_handler,
    _request_validation_exception_handler,
    _response_validation_exception_handler,
    _task_planner_exception_handler,
    install_error_handling,
)
from task_planner.core.errors import (
    CategoryInUseError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)


def _app() -> FastAPI:
    app = FastAPI()
    install_error_handling(app)
    return app


def test_request_validation_error_includes_request_id():
    app = _app()

    @app.get("/tasks-by-limit")
    def by_limit(limit: int) -> dict[str, int]:
        return {"limit": limit}

    client = TestClient(app)
    resp = client.get("/tasks-by-limit?limit=abc")

    assert resp.status_code == 422
    body = resp.json()
    assert isinstance(body.get("detail"), list)
    assert isinstance(body.get("request_id"), str) and body["request_id"]
    assert resp.headers.get(REQUEST_ID_HEADER) == body["request_id"]


def test_request_validation_error_handles_bytes_body_without_500():
    class Payload(BaseModel):
        title: str

    app = _app()

    @app.post("/tasks")
    def create(payload: Payload) -> dict[str, str]:
        return {"title": payload.title}

    client = TestClient(app, raise_server_exceptions=False)
    resp = client.post(
        "/tasks",
        content=b"\xffnot-json",
        headers={"content-type": "text/plain"},
    )

    assert resp.status_code == 422
    assert isinstance(resp.json().get("request_id"), str)


def test_http_exception_keeps_detail_and_request_id():
    app = _app()

    @app.get("/gone")
    def gone() -> None:
        raise HTTPException(status_code=410, detail="gone")

    resp = TestClient(app).get("/gone")

    assert resp.status_code == 410
    body = resp.json()
    assert body["detail"] == "gone"
    assert resp.headers.get(REQUEST_ID_HEADER) == body["request_id"]


@pytest.mark.parametrize(
    ("exc", "status_code", "code"),
    [
        (NotFoundError("Task", "42"), 404, "not_found"),
        (ValidationError("Title and category are required"), 400, "validation_error"),
        (CategoryInUseError("Cloud", 2), 400, "category_in_use"),
        (PersistenceError("disk full"), 500, "persistence_failure"),
    ],
)
def test_domain_errors_map_to_status_codes(exc: Exception, status_code: int, code: str):
    app = _app()

    @app.get("/raise")
    def raise_it() -> None:
        raise exc

    resp = TestClient(app).get("/raise")

    assert resp.status_code == status_code
    body = resp.json()
    assert body["code"] == code
    assert body["detail"] == str(exc)
    assert body["request_id"]


def test_category_in_use_payload_carries_task_count():
    app = _app()

    @app.delete("/categories/1")
    def delete() -> None:
        raise CategoryInUseError("Cloud", 3)

    body = TestClient(app).delete("/categories/1").json()

    assert body["task_count"] == 3
    assert "3 task(s)" in body["detail"]


def test_unhandled_exception_returns_500_with_request_id():
    app = _app()

    @app.get("/boom")
    def boom() -> None:
        raise RuntimeError("boom")

    client = TestClient(app, raise_server_exceptions=False)
    resp = client.get("/boom")

    assert resp.status_code == 500
    body = resp.json()
    assert body["detail"] == "Internal Server Error"
    assert resp.headers.get(REQUEST_ID_HEADER) == body["request_id"]


def test_response_validation_error_returns_500():
    class Out(BaseModel):
        name: str = Field(min_length=1)

    app = _app()

    @app.get("/bad", response_model=Out)
    def bad() -> dict[str, str]:
        return {"name": ""}

    resp = TestClient(app, raise_server_exceptions=False).get("/bad")

    assert resp.status_code == 500
    assert resp.json()["detail"] == "Internal Server Error"


def test_client_provided_request_id_is_preserved():
    app = _app()

    @app.get("/ping")
    def ping() -> dict[str, bool]:
        return {"ok": True}

    resp = TestClient(app).get("/ping", headers={REQUEST_ID_HEADER: "  req-123  "})

    assert resp.headers.get(REQUEST_ID_HEADER) == "req-123"


def test_slow_request_emits_slow_log(monkeypatch: pytest.MonkeyPatch) -> None:
    warnings: list[tuple[str, dict[str, object]]] = []

    def _fake_warning(message: str, *args: object, **kwargs: object) -> None:
        _ = args
        extra = kwargs.get("extra")
        warnings.append((message, extra if isinstance(extra, dict) else {}))

    perf_ticks = iter((100.0, 100.2))

    monkeypatch.setattr(error_handling.settings, "request_log_slow_ms", 1)
    monkeypatch.setattr(error_handling, "perf_counter", lambda: next(perf_ticks))
    monkeypatch.setattr(error_handling.logger, "warning", _fake_warning)

    app = _app()

    @app.get("/slow")
    def slow() -> dict[str, str]:
        return {"ok": "1"}

    resp = TestClient(app).get("/slow")

    assert resp.status_code == 200
    assert any(
        message == "http.request.slow" and extra.get("slow_threshold_ms") == 1
        for message, extra in warnings
    )


def test_health_route_skips_request_logs_when_disabled(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    logged: list[str] = []
    monkeypatch.setattr(error_handling.settings, "request_log_include_health", False)
    monkeypatch.setattr(error_handling.settings, "request_log_slow_ms", 0)
    monkeypatch.setattr(
        error_handling.logger,
        "debug",
        lambda message, *args, **kwargs: logged.append(message),
    )

    app = _app()

    @app.get("/healthz")
    def healthz() -> dict[str, bool]:
        return {"ok": True}

    resp = TestClient(app).get("/healthz")

    assert resp.status_code == 200
    assert isinstance(resp.headers.get(REQUEST_ID_HEADER), str)
    assert logged == []


def test_get_request_id_returns_none_for_missing_or_invalid_state() -> None:
    assert _get_request_id(Request({"type": "http", "headers": [], "state": {}})) is None
    req = Request({"type": "http", "headers": [], "state": {"request_id": 123}})
    assert _get_request_id(req) is None
    req = Request({"type": "http", "headers": [], "state": {"request_id": ""}})
    assert _get_request_id(req) is None


def test_error_payload_omits_request_id_when_none() -> None:
    assert _error_payload(detail="x", request_id=None) == {"detail": "x"}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("handler", "expected"),
    [
        (_request_validation_exception_handler, "Expected RequestValidationError"),
        (_response_validation_exception_handler, "Expected ResponseValidationError"),
        (_http_exception_exception_handler, "Expected StarletteHTTPException"),
        (_task_planner_exception_handler, "Expected TaskPlannerError"),
    ],
)
async def test_handlers_reject_wrong_exception_type(handler, expected: str) -> None:
    req = Request({"type": "http", "headers": [], "state": {}})
    with pytest.raises(TypeError, match=expected):
        await handler(req, Exception("x"))


def test_json_safe_covers_bytes_and_fallback_str() -> None:
    assert error_handling._json_safe(b"\xff") == "\ufffd"
    assert error_handling._json_safe(bytearray(b"\xff")) == "\ufffd"
    assert error_handling._json_safe(memoryview(b"\xff")) == "\ufffd"
    assert error_handling._json_safe({"ctx": (ValueError("bad"),)}) == {"ctx": ["bad"]}
