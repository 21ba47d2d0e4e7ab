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
"""Application bootstrap — wires config, logging, advice and the web app once."""

from __future__ import annotations

import os
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import structlog
from starlette.applications import Starlette

from aspectdemo.aop.pipeline import InterceptionPipeline
from aspectdemo.aop.registry import AdviceRegistry
from aspectdemo.aspects.logging_aspect import UserServiceLoggingAspect
from aspectdemo.config.properties.users import UserProperties
from aspectdemo.core.config import Config
from aspectdemo.logging.port import LoggingPort
from aspectdemo.logging.structlog_adapter import StructlogAdapter
from aspectdemo.service.user_service import UserService
from aspectdemo.web.app import create_web_app

logger = structlog.get_logger("aspectdemo.core")


class AspectDemoApplication:
    """Startup wiring for the login endpoint.

    Builds every collaborator in a fixed order: logging, advice registry
    (then frozen), interception pipeline, user service, web app. Nothing is
    rediscovered after construction.
    """

    def __init__(
        self,
        config: Config | None = None,
        aspects: Iterable[Any] | None = None,
        logging_port: LoggingPort | None = None,
    ) -> None:
        self.config = config if config is not None else _load_config()
        self.logging = logging_port or StructlogAdapter()
        self.logging.configure(self.config)

        self.registry = AdviceRegistry()
        if aspects is None:
            aspects = [UserServiceLoggingAspect(logger=self.logging.get_logger("aspectdemo.aspects"))]
        for aspect_instance in aspects:
            added = self.registry.register_aspect(aspect_instance)
            logger.info("aspect_registered", aspect=type(aspect_instance).__name__, bindings=added)
        self.registry.freeze()

        self.pipeline = InterceptionPipeline(self.registry)
        self.users = UserService(
            self.config.bind(UserProperties),
            logger=self.logging.get_logger("aspectdemo.service"),
        )
        self.web_app = create_web_app(
            self.pipeline,
            self.users,
            debug=str(self.config.get("aspectdemo.app.debug", False)).lower() in ("true", "1", "yes"),
        )

        logger.info(
            "application_started",
            name=self.config.get("aspectdemo.app.name", "aspectdemo"),
            advice_bindings=len(self.registry.get_all_bindings()),
            config_sources=self.config.loaded_sources,
        )


def _load_config() -> Config:
    """Load config from the working directory and ``ASPECTDEMO_PROFILES_ACTIVE``."""
    profiles = [p.strip() for p in os.environ.get("ASPECTDEMO_PROFILES_ACTIVE", "").split(",") if p.strip()]
    return Config.from_sources(Path.cwd(), active_profiles=profiles)


def create_app(config: Config | None = None) -> Starlette:
    """ASGI application factory (``aspectdemo.core.application:create_app``)."""
    return AspectDemoApplication(config).web_app
