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
"""Resolved type and field definitions.

Both are immutable value results built fresh by each resolution call.
A TypeDefinition is a tree: child nodes hang off ``type_arguments``,
``component`` or the wildcard bounds, selected by ``kind``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from typeshape.categories import DataCategory
from typeshape.config import EMPTY_BINDINGS, BindingMap
from typeshape.descriptors import ClassRef, FieldRef, TypeDescriptor
from typeshape.kinds import TypeKind


@dataclass(frozen=True)
class TypeDefinition:
    """The normalized description of one resolved type node.

    Attributes:
        declared: The descriptor this node was resolved from
        kind: Structural kind of ``declared``
        runtime_type: The class this node ultimately denotes. For a
            parameterized type this is the raw generic class; for arrays
            it is ``tuple``; for wildcards and type variables it is the
            erasure (first upper bound, declared bound, or ``object``).
        is_generic: The node carries or declares type parameters
        is_array: The node is array-shaped
        is_primitive: ``runtime_type`` is a ctypes primitive
        is_primitive_wrapper: ``runtime_type`` is a primitive's wrapper
        is_serializable: ``runtime_type`` carries no excluding modifier
        type_arguments: Resolved arguments, PARAMETERIZED only
        parameter_bindings: Parameter name -> concrete class at this node
        component: Element node, arrays only
        upper_bound: First upper bound, WILDCARD only
        lower_bound: First lower bound, WILDCARD only
        data_category: Secondary classification of ``runtime_type``
    """

    declared: TypeDescriptor
    kind: TypeKind
    runtime_type: type
    is_generic: bool = False
    is_array: bool = False
    is_primitive: bool = False
    is_primitive_wrapper: bool = False
    is_serializable: bool = True
    type_arguments: Tuple[TypeDefinition, ...] = ()
    parameter_bindings: BindingMap = EMPTY_BINDINGS
    component: Optional[TypeDefinition] = None
    upper_bound: Optional[TypeDefinition] = None
    lower_bound: Optional[TypeDefinition] = None
    data_category: DataCategory = DataCategory.OBJECT

    @property
    def is_primitive_or_wrapper(self) -> bool:
        return self.is_primitive or self.is_primitive_wrapper

    def binding(self, name: str) -> Optional[type]:
        """Return the class bound to parameter ``name`` at this node."""
        return self.parameter_bindings.get(name)

    def __repr__(self) -> str:
        return f"TypeDefinition({self.kind.name}, {self.declared!r} -> {self.runtime_type.__qualname__})"


@dataclass(frozen=True)
class FieldDefinition:
    """The normalized description of one field in a binding context.

    Attributes:
        field: The field this definition describes
        declared_type: The field's erased declared type
        generic_declared_type: The field's declared type with type
            variables intact
        runtime_type: The field's class after type-variable substitution
        is_generic: The declared type is parameterized
        is_primitive: ``runtime_type`` is a ctypes primitive
        is_primitive_wrapper: ``runtime_type`` is a primitive's wrapper
        type_argument_classes: One entry per type argument of a
            parameterized field; None marks an argument left unresolved
        is_serializable: False when a modifier or tag excludes the field
        is_temporal: The field holds a date/time value
        temporal_format: Format string from a TimeFormat tag, if any
        data_category: Secondary classification of ``runtime_type``
    """

    field: FieldRef
    declared_type: ClassRef
    generic_declared_type: TypeDescriptor
    runtime_type: type
    is_generic: bool = False
    is_primitive: bool = False
    is_primitive_wrapper: bool = False
    type_argument_classes: Tuple[Optional[type], ...] = ()
    is_serializable: bool = True
    is_temporal: bool = False
    temporal_format: Optional[str] = None
    data_category: DataCategory = DataCategory.OBJECT

    @property
    def name(self) -> str:
        return self.field.name

    @property
    def is_primitive_or_wrapper(self) -> bool:
        return self.is_primitive or self.is_primitive_wrapper

    def __repr__(self) -> str:
        return f"FieldDefinition({self.field!r} -> {self.runtime_type.__qualname__})"
