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
"""Type descriptors: the closed set of structural type shapes.

A descriptor is a frozen, hashable description of a declared type. There
are exactly five shapes:

- ClassRef: a concrete class named by its fully qualified name, or an
  array of a concrete class when ``component`` is set
- ParameterizedRef: a generic class applied to type arguments (list[str])
- GenericArrayRef: an array whose component is itself generic (tuple[V, ...])
- WildcardRef: "some type", optionally bounded above and/or below
- TypeVariableRef: a reference to a declared type parameter (V)

Descriptors carry names, not classes. Loading a name into a class is the
job of the TypeLoader, so a descriptor can describe a type that is not
importable and fail only when it is resolved.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, FrozenSet, Optional, Tuple

from typeshape.errors import UnrecognizedTypeError

OBJECT_NAME = "builtins.object"
ARRAY_SUFFIX = "[]"


class TypeDescriptor:
    """Marker base for the five descriptor shapes."""

    __slots__ = ()


@dataclass(frozen=True, slots=True)
class ClassRef(TypeDescriptor):
    """A concrete class, or an array of one.

    Attributes:
        name: Fully qualified name (``module.qualname``)
        component: Element descriptor when this ref is array-shaped
    """

    name: str
    component: Optional[ClassRef] = None

    @property
    def is_array(self) -> bool:
        return self.component is not None

    @staticmethod
    def array_of(component: ClassRef) -> ClassRef:
        """Create the array-of-``component`` ref."""
        return ClassRef(component.name + ARRAY_SUFFIX, component)

    def __repr__(self) -> str:
        return self.name


@dataclass(frozen=True, slots=True)
class ParameterizedRef(TypeDescriptor):
    """A generic class applied to actual type arguments.

    Attributes:
        raw: The generic class being applied
        arguments: Actual type arguments, in declaration order
    """

    raw: ClassRef
    arguments: Tuple[TypeDescriptor, ...]

    def __repr__(self) -> str:
        args_str = ", ".join(repr(a) for a in self.arguments)
        return f"{self.raw.name}[{args_str}]"


@dataclass(frozen=True, slots=True)
class GenericArrayRef(TypeDescriptor):
    """An array whose component type is generic."""

    component: TypeDescriptor

    def __repr__(self) -> str:
        return f"{self.component!r}{ARRAY_SUFFIX}"


@dataclass(frozen=True, slots=True)
class WildcardRef(TypeDescriptor):
    """A wildcard type argument.

    An empty bound tuple means "no explicit bound on that side". Only the
    first bound of each side is used during resolution.
    """

    upper_bounds: Tuple[TypeDescriptor, ...] = ()
    lower_bounds: Tuple[TypeDescriptor, ...] = ()

    def __repr__(self) -> str:
        if self.upper_bounds:
            return f"? extends {self.upper_bounds[0]!r}"
        if self.lower_bounds:
            return f"? super {self.lower_bounds[0]!r}"
        return "?"


@dataclass(frozen=True, slots=True)
class TypeVariableRef(TypeDescriptor):
    """A reference to a declared type parameter.

    Attributes:
        name: The parameter name (e.g. "V")
        bound: Declared upper bound, if any
    """

    name: str
    bound: Optional[TypeDescriptor] = None

    def __repr__(self) -> str:
        return f"'{self.name}"


OBJECT = ClassRef(OBJECT_NAME)


def erase(descriptor: TypeDescriptor) -> ClassRef:
    """Compute the erasure of a descriptor.

    The erasure is the concrete class a value of the descriptor's type is
    guaranteed to be an instance of:

    - Parameterized types erase to their raw class
    - Generic arrays erase to an array of the component's erasure
    - Type variables erase to their bound, or object
    - Wildcards erase to their first upper bound, or object
    """
    if isinstance(descriptor, ClassRef):
        return descriptor
    if isinstance(descriptor, ParameterizedRef):
        return descriptor.raw
    if isinstance(descriptor, GenericArrayRef):
        return ClassRef.array_of(erase(descriptor.component))
    if isinstance(descriptor, TypeVariableRef):
        return erase(descriptor.bound) if descriptor.bound is not None else OBJECT
    if isinstance(descriptor, WildcardRef):
        if descriptor.upper_bounds:
            return erase(descriptor.upper_bounds[0])
        return OBJECT
    raise TypeError(f"not a type descriptor: {descriptor!r}")


# =============================================================================
# Fields
# =============================================================================


class Modifier(Enum):
    """Field and class modifiers relevant to serialization."""

    STATIC = auto()     # ClassVar[...]
    FINAL = auto()      # Final[...] or @typing.final
    TRANSIENT = auto()  # InitVar[...] or @transient


@dataclass(frozen=True, slots=True)
class FieldRef:
    """Identity and declaration of one class field.

    A field whose annotation has no descriptor shape (a general union, a
    Callable, an unresolvable forward reference) is still a field. It is
    listed and filtered like any other and fails only when its type is
    needed.

    Attributes:
        name: Field name
        owner: Fully qualified name of the declaring class
        generic_type: The declared type, with its type variables intact;
            None when the annotation could not be described
        modifiers: Modifiers applied to the declaration
        metadata: Tag objects attached with ``Annotated``
        annotation: The annotation as written, modifier wrappers removed
    """

    name: str
    owner: str
    generic_type: Optional[TypeDescriptor]
    modifiers: FrozenSet[Modifier] = frozenset()
    metadata: Tuple[Any, ...] = ()
    annotation: Any = field(default=None, compare=False)

    @property
    def is_describable(self) -> bool:
        return self.generic_type is not None

    @property
    def declared_type(self) -> ClassRef:
        """The erased declared type of the field.

        Raises:
            UnrecognizedTypeError: If the annotation has no descriptor shape
        """
        return erase(self.require_generic_type())

    def require_generic_type(self) -> TypeDescriptor:
        """Return ``generic_type``, failing for an undescribable field."""
        if self.generic_type is None:
            raise UnrecognizedTypeError(
                self.annotation,
                f"Field {self.owner}.{self.name} has an unsupported type: {self.annotation!r}",
            )
        return self.generic_type

    def find_metadata(self, tag_type: type) -> Optional[Any]:
        """Return the first metadata tag of ``tag_type``, if present."""
        for tag in self.metadata:
            if isinstance(tag, tag_type):
                return tag
        return None

    def __repr__(self) -> str:
        shown = self.generic_type if self.generic_type is not None else self.annotation
        return f"{self.owner}.{self.name}: {shown!r}"
