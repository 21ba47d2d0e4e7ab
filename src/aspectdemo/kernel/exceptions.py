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
"""Unified exception hierarchy for AspectDemo.

All application exceptions inherit from AspectDemoException, carrying an
optional machine-readable code and a context dict for structured error data.

Categories:
- OperationFailure: raised by an intercepted operation at runtime
- AopConfigurationException: advice wiring mistakes, raised during startup
"""

from __future__ import annotations


class AspectDemoException(Exception):
    """Base exception for all AspectDemo errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "LOGOUT_FAILED").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


class OperationFailure(AspectDemoException):
    """An intercepted operation failed.

    Routed to after-throwing advice by the interception pipeline and then
    re-raised unchanged to the caller.
    """


class AopConfigurationException(AspectDemoException):
    """Advice or aspect wiring is invalid (bad around advice, frozen registry)."""
