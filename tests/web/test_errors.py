"""Tests for the global exception handler."""

from starlette.applications import Starlette
from starlette.requests import Request
from starlette.routing import Route
from starlette.testclient import TestClient

from aspectdemo.kernel.exceptions import OperationFailure
from aspectdemo.web.errors import global_exception_handler


def _app(exc: Exception) -> Starlette:
    def endpoint(request: Request):
        raise exc

    return Starlette(
        routes=[Route("/boom", endpoint)],
        exception_handlers={Exception: global_exception_handler},
    )


class TestGlobalExceptionHandler:
    def test_operation_failure_body(self):
        failure = OperationFailure("User logout failed", code="LOGOUT_FAILED", context={"user": "alice"})
        resp = TestClient(_app(failure), raise_server_exceptions=False).get("/boom")

        assert resp.status_code == 500
        error = resp.json()["error"]
        assert error["message"] == "User logout failed"
        assert error["code"] == "LOGOUT_FAILED"
        assert error["context"] == {"user": "alice"}
        assert error["status"] == 500
        assert error["path"] == "/boom"
        assert "timestamp" in error

    def test_code_defaults_to_class_name(self):
        resp = TestClient(_app(OperationFailure("nope")), raise_server_exceptions=False).get("/boom")
        assert resp.json()["error"]["code"] == "OperationFailure"
        assert "context" not in resp.json()["error"]

    def test_foreign_exception_hides_message(self):
        resp = TestClient(_app(KeyError("secret")), raise_server_exceptions=False).get("/boom")
        error = resp.json()["error"]
        assert error["message"] == "Internal server error"
        assert error["code"] == "INTERNAL_ERROR"
