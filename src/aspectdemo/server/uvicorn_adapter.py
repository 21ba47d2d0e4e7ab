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
"""Uvicorn ASGI server adapter."""

from __future__ import annotations

from typing import Any

import uvicorn

from aspectdemo.config.properties.server import ServerProperties

APP_FACTORY = "aspectdemo.core.application:create_app"


class UvicornServerAdapter:
    """Runs the application factory under Uvicorn."""

    def build_kwargs(self, config: ServerProperties, reload: bool = False) -> dict[str, Any]:
        """Translate :class:`ServerProperties` into ``uvicorn.run`` arguments."""
        kwargs: dict[str, Any] = {
            "host": config.host or "0.0.0.0",
            "port": config.port or 8080,
            "factory": True,
            "log_level": "warning",
            "timeout_keep_alive": config.keep_alive_timeout,
        }
        if reload:
            kwargs["reload"] = True
        elif config.workers > 1:
            kwargs["workers"] = config.workers
        return kwargs

    def serve(self, config: ServerProperties, app: str = APP_FACTORY, reload: bool = False) -> None:
        """Start Uvicorn (blocking)."""
        uvicorn.run(app, **self.build_kwargs(config, reload=reload))
