# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Web application factory built on Starlette."""

from __future__ import annotations

from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.requests import Request
from starlette.responses import PlainTextResponse
from starlette.routing import Route

from aspectdemo.aop.pipeline import InterceptionPipeline, qualified_name
from aspectdemo.service.user_service import UserService
from aspectdemo.web.errors import global_exception_handler
from aspectdemo.web.request_logger import RequestLoggingMiddleware

LOGIN_RESPONSE = "User login endpoint called successfully!"


def create_web_app(pipeline: InterceptionPipeline, users: UserService, debug: bool = False) -> Starlette:
    """Create the Starlette app exposing ``GET /``.

    The route calls ``UserService.log_in`` through *pipeline* and answers
    with a fixed plain-text body.
    """
    log_in = qualified_name(users, "log_in")

    def user_login(request: Request) -> PlainTextResponse:
        pipeline.invoke(log_in, users.log_in)
        return PlainTextResponse(LOGIN_RESPONSE)

    return Starlette(
        debug=debug,
        routes=[Route("/", user_login, methods=["GET"])],
        middleware=[Middleware(RequestLoggingMiddleware)],
        exception_handlers={Exception: global_exception_handler},
    )
