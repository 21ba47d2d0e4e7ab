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
"""AdviceRegistry — collects and resolves advice bindings."""

from __future__ import annotations

import inspect
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import structlog

from aspectdemo.aop.ordering import get_order
from aspectdemo.aop.pointcut import matches_pointcut, split_alternatives
from aspectdemo.aop.types import AdvicePhase
from aspectdemo.kernel.exceptions import AopConfigurationException

logger = structlog.get_logger("aspectdemo.aop")

_PHASE_RANK = {phase: rank for rank, phase in enumerate(AdvicePhase)}


@dataclass(frozen=True)
class AdviceBinding:
    """A single piece of advice bound to a pointcut.

    Attributes:
        phase: When the advice runs relative to the operation.
        pointcut: The normalized pointcut expression (duplicate ``||``
            alternatives removed).
        handler: The callable implementing the advice. Receives the
            :class:`InvocationContext`.
        aspect_order: Numeric ordering value from :func:`get_order`.
    """

    phase: AdvicePhase
    pointcut: str
    handler: Callable[..., Any]
    aspect_order: int = 0


class AdviceRegistry:
    """Registry of advice bindings, populated once at startup.

    Usage::

        registry = AdviceRegistry()
        registry.register("**.UserService.log_in", AdvicePhase.BEFORE, audit)
        registry.register_aspect(UserServiceLoggingAspect())
        registry.freeze()

        bindings = registry.resolve("aspectdemo.service.user_service.UserService.log_in")
    """

    def __init__(self) -> None:
        self._bindings: list[AdviceBinding] = []
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def register(
        self,
        selector: str,
        phase: AdvicePhase,
        advice_fn: Callable[..., Any],
        aspect_order: int = 0,
    ) -> bool:
        """Bind *advice_fn* to every operation matching *selector*.

        Returns ``False`` when the same selector, phase and advice were
        already registered, whatever *aspect_order* was given; the duplicate
        is ignored so the advice never fires twice for one call.
        """
        if self._frozen:
            raise AopConfigurationException(
                "Advice registry is frozen; register advice during startup",
                code="AOP_REGISTRY_FROZEN",
                context={"selector": selector, "phase": phase.value},
            )
        if phase is AdvicePhase.AROUND and not inspect.isgeneratorfunction(advice_fn):
            raise AopConfigurationException(
                f"Around advice {_describe(advice_fn)} must be a generator function that yields once",
                code="AOP_INVALID_AROUND",
            )

        try:
            pointcut = " || ".join(split_alternatives(selector))
        except ValueError as exc:
            raise AopConfigurationException(
                str(exc),
                code="AOP_INVALID_POINTCUT",
                context={"selector": selector, "phase": phase.value},
            ) from exc

        if any(b.pointcut == pointcut and b.phase is phase and b.handler == advice_fn for b in self._bindings):
            logger.debug("advice_already_registered", pointcut=pointcut, phase=phase.value)
            return False

        self._bindings.append(
            AdviceBinding(phase=phase, pointcut=pointcut, handler=advice_fn, aspect_order=aspect_order)
        )
        # Stable: equal orders keep registration order.
        self._bindings.sort(key=lambda b: b.aspect_order)
        logger.debug("advice_registered", pointcut=pointcut, phase=phase.value, advice=_describe(advice_fn))
        return True

    def register_aspect(self, aspect_instance: Any) -> int:
        """Register every decorated advice method of an ``@aspect`` instance.

        Methods are taken in definition order. Returns the number of
        bindings actually added.
        """
        aspect_cls = type(aspect_instance)
        if not getattr(aspect_cls, "__aspectdemo_aspect__", False):
            raise AopConfigurationException(
                f"{aspect_cls.__name__} is not decorated with @aspect",
                code="AOP_NOT_AN_ASPECT",
            )

        order = get_order(aspect_cls)
        added = 0
        for name, member in _definition_order(aspect_cls):
            phase = getattr(member, "__aspectdemo_advice_phase__", None)
            pointcut = getattr(member, "__aspectdemo_pointcut__", None)
            if phase is None or pointcut is None:
                continue
            if self.register(pointcut, phase, getattr(aspect_instance, name), aspect_order=order):
                added += 1
        return added

    def freeze(self) -> None:
        """Reject any further registration; resolution stays available."""
        self._frozen = True

    def get_all_bindings(self) -> list[AdviceBinding]:
        """Return all registered bindings, sorted by ``aspect_order``."""
        return list(self._bindings)

    def resolve(self, operation_name: str) -> list[AdviceBinding]:
        """Return bindings matching *operation_name*, grouped by phase.

        Within a phase, bindings keep their registration order. An empty
        list is a valid answer.
        """
        matching = [b for b in self._bindings if matches_pointcut(b.pointcut, operation_name)]
        return sorted(matching, key=lambda b: _PHASE_RANK[b.phase])


def _definition_order(cls: type) -> list[tuple[str, Any]]:
    """Class attributes in definition order, base classes first."""
    seen: dict[str, Any] = {}
    for klass in reversed(cls.__mro__):
        for name, member in vars(klass).items():
            seen[name] = member
    return list(seen.items())


def _describe(fn: Callable[..., Any]) -> str:
    return getattr(fn, "__qualname__", repr(fn))
