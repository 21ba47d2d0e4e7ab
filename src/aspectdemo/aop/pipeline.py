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
"""InterceptionPipeline — runs an operation inside its resolved advice chain.

Callers invoke the pipeline explicitly instead of going through a proxy::

    pipeline = InterceptionPipeline(registry)
    pipeline.invoke(qualified_name(users, "log_in"), users.log_in)

Execution order for one call:

1. around pre-logic, outermost first
2. before advice, in registration order
3. the operation
4. after-returning advice on success, after-throwing advice on failure
5. around post-logic, innermost first, whatever the outcome

Around advice is a generator function that yields exactly once; code before
the ``yield`` is its pre-logic and code after it is its post-logic. The
pipeline resumes it with ``next()`` rather than throwing the failure into it,
so post-logic always runs and reads the outcome from the context.
"""

from __future__ import annotations

from collections.abc import Callable, Generator
from typing import Any

import structlog

from aspectdemo.aop.registry import AdviceBinding, AdviceRegistry
from aspectdemo.aop.types import AdvicePhase, InvocationContext
from aspectdemo.kernel.exceptions import AopConfigurationException

logger = structlog.get_logger("aspectdemo.aop")


def qualified_name(target: Any, method_name: str) -> str:
    """Stable operation name ``<module>.<Class>.<method>`` for *target*.

    The class is the one that first declares *method_name* in the MRO, so
    subclasses and overrides keep the name of the base operation.
    """
    cls = next(
        (klass for klass in reversed(type(target).__mro__) if method_name in vars(klass)),
        type(target),
    )
    return f"{cls.__module__}.{cls.__name__}.{method_name}"


class InterceptionPipeline:
    """Invokes operations with the advice an :class:`AdviceRegistry` resolves.

    Holds no per-call state; every :meth:`invoke` gets its own
    :class:`InvocationContext`, so one pipeline can serve concurrent callers.
    """

    def __init__(self, registry: AdviceRegistry) -> None:
        self._registry = registry

    @property
    def registry(self) -> AdviceRegistry:
        return self._registry

    def invoke(self, operation_name: str, operation: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        """Call ``operation(*args, **kwargs)`` wrapped by the advice for *operation_name*.

        Returns the operation's result unchanged. An operation failure is
        routed to after-throwing advice and then re-raised. A failure
        raised by advice aborts the remaining advice of its phase and
        propagates.
        """
        bindings = self._registry.resolve(operation_name)
        if not bindings:
            return operation(*args, **kwargs)

        around = _of_phase(bindings, AdvicePhase.AROUND)
        before = _of_phase(bindings, AdvicePhase.BEFORE)
        after_returning = _of_phase(bindings, AdvicePhase.AFTER_RETURNING)
        after_throwing = _of_phase(bindings, AdvicePhase.AFTER_THROWING)

        ctx = InvocationContext(operation_name=operation_name, args=args, kwargs=kwargs)
        entered: list[Generator[Any, None, Any]] = []

        try:
            for binding in around:
                entered.append(_enter_around(binding, ctx))

            for binding in before:
                binding.handler(ctx)

            try:
                result = operation(*args, **kwargs)
            except BaseException as exc:
                ctx.exception = exc
                if not isinstance(exc, Exception):
                    raise
                for binding in after_throwing:
                    binding.handler(ctx)
                raise

            ctx.return_value = result
            for binding in after_returning:
                binding.handler(ctx)
            return result

        except BaseException as exc:
            # Advice aborted the call, or the operation was interrupted.
            if ctx.exception is None:
                ctx.exception = exc
            raise

        finally:
            _exit_arounds(entered, ctx)


def _of_phase(bindings: list[AdviceBinding], phase: AdvicePhase) -> list[AdviceBinding]:
    return [b for b in bindings if b.phase is phase]


def _enter_around(binding: AdviceBinding, ctx: InvocationContext) -> Generator[Any, None, Any]:
    """Run around pre-logic up to its ``yield``."""
    gen = binding.handler(ctx)
    try:
        next(gen)
    except StopIteration:
        raise AopConfigurationException(
            f"Around advice for '{ctx.operation_name}' returned without yielding",
            code="AOP_INVALID_AROUND",
            context={"pointcut": binding.pointcut},
        ) from None
    return gen


def _exit_arounds(entered: list[Generator[Any, None, Any]], ctx: InvocationContext) -> None:
    """Run around post-logic innermost first.

    A post-logic failure aborts the remaining post-logic; the generators not
    yet resumed are closed. While a failure is already propagating, that
    original failure wins and the post-logic error is attached to it as a
    note. Otherwise the post-logic error propagates.
    """
    remaining = list(reversed(entered))
    try:
        while remaining:
            _exit_around(remaining.pop(0), ctx)
    except Exception as exc:
        if ctx.exception is None:
            raise
        ctx.exception.add_note(f"around post-logic also failed: {type(exc).__name__}: {exc}")
        logger.warning(
            "around_post_logic_failed",
            operation=ctx.operation_name,
            error=str(exc),
            error_type=type(exc).__name__,
        )
    finally:
        for gen in remaining:
            gen.close()


def _exit_around(gen: Generator[Any, None, Any], ctx: InvocationContext) -> None:
    """Run around post-logic after the ``yield``."""
    try:
        next(gen)
    except StopIteration:
        return
    gen.close()
    raise AopConfigurationException(
        f"Around advice for '{ctx.operation_name}' yielded more than once",
        code="AOP_INVALID_AROUND",
    )
