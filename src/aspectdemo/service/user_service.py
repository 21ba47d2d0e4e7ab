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
"""UserService — log-in and log-out operations."""

from __future__ import annotations

from typing import Any

import structlog

from aspectdemo.config.properties.users import UserProperties
from aspectdemo.kernel.exceptions import OperationFailure


class UserService:
    """Stateless user operations.

    ``log_in`` always completes. ``log_out`` raises :class:`OperationFailure`
    when the service is configured with ``logout_fails``.
    """

    def __init__(self, properties: UserProperties | None = None, logger: Any = None) -> None:
        self._properties = properties or UserProperties()
        self._logger = logger if logger is not None else structlog.get_logger("aspectdemo.service")

    def log_in(self) -> None:
        self._logger.info("user_logged_in")

    def log_out(self) -> None:
        if self._properties.logout_fails:
            raise OperationFailure("User logout failed", code="LOGOUT_FAILED")
        self._logger.info("user_logged_out")
