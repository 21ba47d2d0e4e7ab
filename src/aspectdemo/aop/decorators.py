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
"""AOP decorators — @aspect and advice annotations."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

from aspectdemo.aop.types import AdvicePhase

T = TypeVar("T", bound=type)
F = TypeVar("F", bound=Callable[..., Any])


# ---------------------------------------------------------------------------
# @aspect — marks a class as an AOP aspect
# ---------------------------------------------------------------------------


def aspect(cls: T) -> T:
    """Mark a class as an aspect.

    Only instances of ``@aspect`` classes are accepted by
    :meth:`AdviceRegistry.register_aspect`.
    """
    cls.__aspectdemo_aspect__ = True  # type: ignore[attr-defined]
    return cls


# ---------------------------------------------------------------------------
# Advice decorators — @before, @after_returning, @after_throwing, @around
# ---------------------------------------------------------------------------


def _make_advice(phase: AdvicePhase) -> Callable[[str], Callable[[F], F]]:
    """Create an advice decorator factory for the given *phase*.

    The returned factory takes a pointcut expression and returns a decorator
    that annotates the wrapped method with:

    * ``__aspectdemo_advice_phase__`` — the :class:`AdvicePhase`
    * ``__aspectdemo_pointcut__``     — the pointcut expression string
    """

    def factory(pointcut: str) -> Callable[[F], F]:
        def decorator(fn: F) -> F:
            fn.__aspectdemo_advice_phase__ = phase  # type: ignore[attr-defined]
            fn.__aspectdemo_pointcut__ = pointcut  # type: ignore[attr-defined]
            return fn

        return decorator

    return factory


before = _make_advice(AdvicePhase.BEFORE)
after_returning = _make_advice(AdvicePhase.AFTER_RETURNING)
after_throwing = _make_advice(AdvicePhase.AFTER_THROWING)
around = _make_advice(AdvicePhase.AROUND)
