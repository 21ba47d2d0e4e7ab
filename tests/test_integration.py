"""End-to-end: HTTP request -> pipeline -> logging aspect -> UserService."""

from __future__ import annotations

import pytest
from starlette.testclient import TestClient
from structlog.testing import capture_logs

from aspectdemo.aop.pipeline import qualified_name
from aspectdemo.core.application import AspectDemoApplication
from aspectdemo.core.config import Config
from aspectdemo.kernel.exceptions import OperationFailure
from aspectdemo.web.app import LOGIN_RESPONSE

ASPECT_EVENTS = {
    "around_operation_started",
    "before_operation",
    "after_operation_returned",
    "after_operation_failed",
    "around_operation_finished",
}


def _aspect_events(logs: list[dict]) -> list[str]:
    return [entry["event"] for entry in logs if entry["event"] in ASPECT_EVENTS | {"user_logged_in"}]


class TestLoginFlow:
    def test_request_produces_full_interceptor_sequence(self):
        application = AspectDemoApplication(Config({}))
        client = TestClient(application.web_app)

        with capture_logs() as logs:
            resp = client.get("/")

        assert resp.status_code == 200
        assert resp.text == LOGIN_RESPONSE
        assert _aspect_events(logs) == [
            "around_operation_started",
            "before_operation",
            "user_logged_in",
            "after_operation_returned",
            "around_operation_finished",
        ]

    def test_repeated_requests_log_identically(self):
        application = AspectDemoApplication(Config({}))
        client = TestClient(application.web_app)

        sequences = []
        for _ in range(2):
            with capture_logs() as logs:
                client.get("/")
            sequences.append(_aspect_events(logs))

        assert sequences[0] == sequences[1]


class TestLogoutFailure:
    def test_failure_observable_after_invoke(self):
        application = AspectDemoApplication(Config({"aspectdemo": {"users": {"logout-fails": True}}}))
        users = application.users

        with capture_logs() as logs, pytest.raises(OperationFailure):
            application.pipeline.invoke(qualified_name(users, "log_out"), users.log_out)

        assert "after_operation_failed" in _aspect_events(logs)
        assert _aspect_events(logs)[-1] == "around_operation_finished"
