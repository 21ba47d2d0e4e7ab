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
"""Global exception handler — RFC 7807 inspired error responses."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

import structlog
from starlette.requests import Request
from starlette.responses import JSONResponse

from aspectdemo.kernel.exceptions import AspectDemoException

logger = structlog.get_logger("aspectdemo.web")


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render any unhandled failure as a structured 500 JSON body."""
    status = 500
    if isinstance(exc, AspectDemoException):
        error: dict[str, Any] = {
            "message": str(exc),
            "code": exc.code or type(exc).__name__,
        }
        if exc.context:
            error["context"] = exc.context
    else:
        error = {"message": "Internal server error", "code": "INTERNAL_ERROR"}

    error.update(
        status=status,
        path=request.url.path,
        timestamp=datetime.now(UTC).isoformat(),
    )
    logger.error("unhandled_exception", path=request.url.path, error_type=type(exc).__name__, error=str(exc))
    return JSONResponse({"error": error}, status_code=status)
