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
"""Tests for AdviceRegistry and AdviceBinding."""

from __future__ import annotations

import pytest

from aspectdemo.aop.decorators import after_returning, around, aspect, before
from aspectdemo.aop.ordering import order
from aspectdemo.aop.registry import AdviceRegistry
from aspectdemo.aop.types import AdvicePhase
from aspectdemo.kernel.exceptions import AopConfigurationException

LOG_IN = "aspectdemo.service.user_service.UserService.log_in"
LOG_OUT = "aspectdemo.service.user_service.UserService.log_out"

# ---- Fixture aspects --------------------------------------------------------


@aspect
class LoggingAspect:
    @before("**.UserService.*")
    def log_before(self, ctx):
        pass

    @after_returning("**.UserService.*")
    def log_after(self, ctx):
        pass

    def helper(self):
        pass


@order(10)
@aspect
class TimingAspect:
    @around("**.UserService.log_in")
    def time_it(self, ctx):
        yield


@order(-5)
@aspect
class EarlyAspect:
    @before("**.UserService.*")
    def run_early(self, ctx):
        pass


def _noop(ctx):
    pass


def _other(ctx):
    pass


def _wrap(ctx):
    yield


# ---- Tests ------------------------------------------------------------------


class TestRegister:
    def test_register_adds_binding(self) -> None:
        registry = AdviceRegistry()
        assert registry.register(LOG_IN, AdvicePhase.BEFORE, _noop) is True
        assert len(registry.get_all_bindings()) == 1

    def test_duplicate_registration_is_ignored(self) -> None:
        registry = AdviceRegistry()
        registry.register(LOG_IN, AdvicePhase.BEFORE, _noop)
        assert registry.register(LOG_IN, AdvicePhase.BEFORE, _noop) is False
        assert len(registry.resolve(LOG_IN)) == 1

    def test_duplicate_alternatives_normalize_to_one_binding(self) -> None:
        registry = AdviceRegistry()
        registry.register(f"{LOG_IN} || {LOG_IN}", AdvicePhase.BEFORE, _noop)
        registry.register(LOG_IN, AdvicePhase.BEFORE, _noop)
        bindings = registry.resolve(LOG_IN)
        assert len(bindings) == 1
        assert bindings[0].pointcut == LOG_IN

    def test_duplicate_with_different_order_is_ignored(self) -> None:
        registry = AdviceRegistry()
        registry.register(LOG_IN, AdvicePhase.BEFORE, _noop)
        assert registry.register(LOG_IN, AdvicePhase.BEFORE, _noop, aspect_order=1) is False
        bindings = registry.resolve(LOG_IN)
        assert len(bindings) == 1
        assert bindings[0].aspect_order == 0

    def test_empty_selector_rejected(self) -> None:
        registry = AdviceRegistry()
        with pytest.raises(AopConfigurationException) as exc_info:
            registry.register(f"{LOG_IN} ||", AdvicePhase.BEFORE, _noop)
        assert exc_info.value.code == "AOP_INVALID_POINTCUT"
        assert registry.get_all_bindings() == []

    def test_same_advice_in_different_phases_is_kept(self) -> None:
        registry = AdviceRegistry()
        registry.register(LOG_IN, AdvicePhase.BEFORE, _noop)
        registry.register(LOG_IN, AdvicePhase.AFTER_RETURNING, _noop)
        assert len(registry.resolve(LOG_IN)) == 2

    def test_around_must_be_generator_function(self) -> None:
        registry = AdviceRegistry()
        with pytest.raises(AopConfigurationException) as exc_info:
            registry.register(LOG_IN, AdvicePhase.AROUND, _noop)
        assert exc_info.value.code == "AOP_INVALID_AROUND"

    def test_register_after_freeze_rejected(self) -> None:
        registry = AdviceRegistry()
        registry.freeze()
        assert registry.frozen
        with pytest.raises(AopConfigurationException) as exc_info:
            registry.register(LOG_IN, AdvicePhase.BEFORE, _noop)
        assert exc_info.value.code == "AOP_REGISTRY_FROZEN"


class TestRegisterAspect:
    def test_collects_decorated_methods_only(self) -> None:
        registry = AdviceRegistry()
        assert registry.register_aspect(LoggingAspect()) == 2
        phases = [b.phase for b in registry.get_all_bindings()]
        assert phases == [AdvicePhase.BEFORE, AdvicePhase.AFTER_RETURNING]

    def test_bindings_hold_bound_methods(self) -> None:
        registry = AdviceRegistry()
        instance = LoggingAspect()
        registry.register_aspect(instance)
        assert registry.get_all_bindings()[0].handler.__self__ is instance

    def test_aspect_order_recorded(self) -> None:
        registry = AdviceRegistry()
        registry.register_aspect(TimingAspect())
        assert registry.get_all_bindings()[0].aspect_order == 10

    def test_rejects_undecorated_class(self) -> None:
        class NotAnAspect:
            pass

        with pytest.raises(AopConfigurationException, match="not decorated with @aspect"):
            AdviceRegistry().register_aspect(NotAnAspect())

    def test_registering_same_instance_twice_adds_nothing(self) -> None:
        registry = AdviceRegistry()
        instance = LoggingAspect()
        registry.register_aspect(instance)
        assert registry.register_aspect(instance) == 0


class TestResolve:
    def test_no_match_is_empty(self) -> None:
        registry = AdviceRegistry()
        registry.register("**.OrderService.*", AdvicePhase.BEFORE, _noop)
        assert registry.resolve(LOG_IN) == []

    def test_grouped_by_phase(self) -> None:
        registry = AdviceRegistry()
        registry.register(LOG_IN, AdvicePhase.AFTER_RETURNING, _noop)
        registry.register(LOG_IN, AdvicePhase.BEFORE, _noop)
        registry.register(LOG_IN, AdvicePhase.AROUND, _wrap)
        registry.register(LOG_IN, AdvicePhase.AFTER_THROWING, _noop)
        assert [b.phase for b in registry.resolve(LOG_IN)] == [
            AdvicePhase.AROUND,
            AdvicePhase.BEFORE,
            AdvicePhase.AFTER_RETURNING,
            AdvicePhase.AFTER_THROWING,
        ]

    def test_registration_order_within_phase(self) -> None:
        registry = AdviceRegistry()
        registry.register(LOG_IN, AdvicePhase.BEFORE, _other)
        registry.register("**.UserService.*", AdvicePhase.BEFORE, _noop)
        assert [b.handler for b in registry.resolve(LOG_IN)] == [_other, _noop]

    def test_lower_order_first_regardless_of_registration(self) -> None:
        registry = AdviceRegistry()
        registry.register_aspect(LoggingAspect())
        registry.register_aspect(EarlyAspect())
        before = [b for b in registry.resolve(LOG_IN) if b.phase is AdvicePhase.BEFORE]
        assert [b.handler.__name__ for b in before] == ["run_early", "log_before"]

    def test_selector_scopes_operations(self) -> None:
        registry = AdviceRegistry()
        registry.register_aspect(TimingAspect())
        assert len(registry.resolve(LOG_IN)) == 1
        assert registry.resolve(LOG_OUT) == []

    def test_resolve_works_after_freeze(self) -> None:
        registry = AdviceRegistry()
        registry.register_aspect(LoggingAspect())
        registry.freeze()
        assert len(registry.resolve(LOG_OUT)) == 2
