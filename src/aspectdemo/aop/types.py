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
"""AOP core types — advice phases and the per-call InvocationContext."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class AdvicePhase(Enum):
    """When advice runs relative to the intercepted operation.

    Declaration order is the grouping order used when resolving advice.
    """

    AROUND = "around"
    BEFORE = "before"
    AFTER_RETURNING = "after_returning"
    AFTER_THROWING = "after_throwing"


@dataclass
class InvocationContext:
    """State of a single intercepted call, handed to every advice.

    A fresh context is created for each ``InterceptionPipeline.invoke`` and
    dropped when the call completes.

    Attributes:
        operation_name: Stable name of the intercepted operation.
        args: Positional arguments passed to the operation.
        kwargs: Keyword arguments passed to the operation.
        return_value: The operation's result (set after success).
        exception: The failure raised by the operation or by advice that
            aborted the call.
    """

    operation_name: str
    args: tuple = ()
    kwargs: dict[str, Any] = field(default_factory=dict)
    return_value: Any = None
    exception: BaseException | None = None

    @property
    def failed(self) -> bool:
        return self.exception is not None

    @property
    def succeeded(self) -> bool:
        return self.exception is None
