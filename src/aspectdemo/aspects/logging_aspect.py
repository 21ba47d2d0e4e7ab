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
"""Logging aspect — before, after and around interceptors for UserService."""

from __future__ import annotations

import time
from collections.abc import Generator
from typing import Any

import structlog

from aspectdemo.aop.decorators import after_returning, after_throwing, around, aspect, before
from aspectdemo.aop.ordering import HIGHEST_PRECEDENCE, order
from aspectdemo.aop.types import InvocationContext

USER_SERVICE_OPERATIONS = "**.UserService.*"


@aspect
@order(HIGHEST_PRECEDENCE)
class UserServiceLoggingAspect:
    """Emits one structured log event per interception point.

    The before advice is bound through two identical alternatives; the
    pointcut collapses them, so it still fires once per call.
    """

    def __init__(self, logger: Any = None) -> None:
        self._logger = logger if logger is not None else structlog.get_logger("aspectdemo.aspects")

    @around(USER_SERVICE_OPERATIONS)
    def log_around(self, ctx: InvocationContext) -> Generator[None, None, None]:
        self._logger.info("around_operation_started", operation=ctx.operation_name)
        start = time.perf_counter()
        yield
        duration_ms = (time.perf_counter() - start) * 1000
        self._logger.info(
            "around_operation_finished",
            operation=ctx.operation_name,
            outcome="failure" if ctx.failed else "success",
            duration_ms=round(duration_ms, 2),
        )

    @before("**.UserService.log_in || **.UserService.log_in || **.UserService.log_out")
    def log_before(self, ctx: InvocationContext) -> None:
        self._logger.info("before_operation", operation=ctx.operation_name)

    @after_returning(USER_SERVICE_OPERATIONS)
    def log_after_returning(self, ctx: InvocationContext) -> None:
        self._logger.info("after_operation_returned", operation=ctx.operation_name)

    @after_throwing(USER_SERVICE_OPERATIONS)
    def log_after_throwing(self, ctx: InvocationContext) -> None:
        self._logger.warning(
            "after_operation_failed",
            operation=ctx.operation_name,
            error=str(ctx.exception),
            error_type=type(ctx.exception).__name__,
        )
