# Copyright Rand Arete @ Ananke 2025
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
# ==============================================================================
"""Structural classification of type descriptors."""

from __future__ import annotations

from enum import Enum, auto
from typing import Any

from typeshape.descriptors import (
    ClassRef,
    GenericArrayRef,
    ParameterizedRef,
    TypeVariableRef,
    WildcardRef,
)


class TypeKind(Enum):
    """The structural kind of a type descriptor.

    Drives all branching in the TypeResolver.
    """

    CONCRETE = auto()
    PARAMETERIZED = auto()
    GENERIC_ARRAY = auto()
    WILDCARD = auto()
    TYPE_VARIABLE = auto()
    UNKNOWN = auto()


_KINDS_BY_SHAPE = {
    ClassRef: TypeKind.CONCRETE,
    ParameterizedRef: TypeKind.PARAMETERIZED,
    GenericArrayRef: TypeKind.GENERIC_ARRAY,
    WildcardRef: TypeKind.WILDCARD,
    TypeVariableRef: TypeKind.TYPE_VARIABLE,
}


def classify(descriptor: Any) -> TypeKind:
    """Map a descriptor to its structural kind.

    Total: anything that is not one of the five descriptor shapes,
    including raw ``typing`` objects and None, is UNKNOWN.
    """
    return _KINDS_BY_SHAPE.get(type(descriptor), TypeKind.UNKNOWN)
