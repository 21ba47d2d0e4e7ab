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
"""Aspect-Oriented Programming support for AspectDemo."""

from aspectdemo.aop.decorators import after_returning, after_throwing, around, aspect, before
from aspectdemo.aop.ordering import HIGHEST_PRECEDENCE, LOWEST_PRECEDENCE, get_order, order
from aspectdemo.aop.pipeline import InterceptionPipeline, qualified_name
from aspectdemo.aop.pointcut import matches_pointcut
from aspectdemo.aop.registry import AdviceBinding, AdviceRegistry
from aspectdemo.aop.types import AdvicePhase, InvocationContext

__all__ = [
    "HIGHEST_PRECEDENCE",
    "LOWEST_PRECEDENCE",
    "AdviceBinding",
    "AdvicePhase",
    "AdviceRegistry",
    "InterceptionPipeline",
    "InvocationContext",
    "after_returning",
    "after_throwing",
    "around",
    "aspect",
    "before",
    "get_order",
    "matches_pointcut",
    "order",
    "qualified_name",
]
