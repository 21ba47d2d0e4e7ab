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
"""Tests for UserService."""

from __future__ import annotations

import pytest

from aspectdemo.config.properties.users import UserProperties
from aspectdemo.kernel.exceptions import AspectDemoException, OperationFailure
from aspectdemo.service.user_service import UserService


class TestUserService:
    def test_log_in_returns_none(self) -> None:
        assert UserService().log_in() is None

    def test_log_out_succeeds_by_default(self) -> None:
        assert UserService().log_out() is None

    def test_log_out_fails_when_configured(self) -> None:
        users = UserService(UserProperties(logout_fails=True))
        with pytest.raises(OperationFailure) as exc_info:
            users.log_out()
        assert exc_info.value.code == "LOGOUT_FAILED"
        assert isinstance(exc_info.value, AspectDemoException)
