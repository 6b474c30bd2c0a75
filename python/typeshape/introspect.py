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
"""Building type descriptors from Python annotations.

This is the bridge between the ``typing`` module and the descriptor model:

    describe(int)                  -> ClassRef("builtins.int")
    describe(list[str])            -> ParameterizedRef(list, (str,))
    describe(tuple[int, ...])      -> ClassRef("builtins.int[]")  (array)
    describe(tuple[list[V], ...])  -> GenericArrayRef(list[V])
    describe(Any)                  -> WildcardRef()
    describe(V)                    -> TypeVariableRef("V")
    describe(Optional[Cat])        -> ClassRef(Cat)

``Annotated`` is transparent here; field metadata is collected by
``describe_field``. Shapes outside the model (general unions, Literal,
Callable, heterogeneous tuples, unresolved forward references, subscripted
classes whose type parameters are unknown) raise UnrecognizedTypeError.
``describe_field`` defers that error to field resolution.
"""

from __future__ import annotations

import dataclasses
import inspect
import logging
import sys
import types
import typing
from typing import Any, Dict, List, Optional, Set

from typeshape.descriptors import (
    ClassRef,
    FieldRef,
    GenericArrayRef,
    Modifier,
    ParameterizedRef,
    TypeDescriptor,
    TypeVariableRef,
    WildcardRef,
)
from typeshape.errors import UnrecognizedTypeError
from typeshape.loader import BUILTIN_TYPE_PARAMETERS, DEFAULT_LOADER, qualified_name

logger = logging.getLogger(__name__)

_NONE_TYPE = type(None)
_UNION_ORIGINS = (typing.Union, types.UnionType)


def describe(annotation: Any) -> TypeDescriptor:
    """Build the descriptor of a Python type annotation.

    Raises:
        UnrecognizedTypeError: If the annotation has no descriptor shape
    """
    if annotation is None or annotation is _NONE_TYPE:
        return ClassRef(qualified_name(_NONE_TYPE))
    if annotation is typing.Any:
        return WildcardRef()
    if isinstance(annotation, (typing.TypeVar, typing.ParamSpec, typing.TypeVarTuple)):
        return describe_type_variable(annotation)

    origin = typing.get_origin(annotation)
    args = typing.get_args(annotation)

    if origin is typing.Annotated:
        return describe(args[0])

    if origin in _UNION_ORIGINS:
        members = [a for a in args if a is not _NONE_TYPE]
        # Optional[X] is X; every reference may hold None
        if len(members) == 1 and len(args) == 2:
            return describe(members[0])
        raise UnrecognizedTypeError(annotation, f"Union types are not supported: {annotation!r}")

    if origin is tuple and args:
        if len(args) == 2 and args[1] is Ellipsis:
            return _describe_array(args[0])
        raise UnrecognizedTypeError(
            annotation, f"Heterogeneous tuples are not supported: {annotation!r}"
        )

    if isinstance(origin, type):
        raw = ClassRef(qualified_name(origin))
        if not args:
            return raw
        if any(isinstance(a, list) or a is Ellipsis for a in args):
            raise UnrecognizedTypeError(annotation)
        _check_arity(annotation, origin, args)
        return ParameterizedRef(raw, tuple(describe(a) for a in args))

    if isinstance(annotation, type):
        return ClassRef(qualified_name(annotation))

    raise UnrecognizedTypeError(annotation)


def _check_arity(annotation: Any, origin: type, args: tuple) -> None:
    # Subscription alone does not make a class generic: GenericAlias accepts
    # any arguments, so the parameters must be known to bind them.
    names = DEFAULT_LOADER.type_parameter_names(origin)
    if not names:
        raise UnrecognizedTypeError(
            annotation, f"{origin.__qualname__} declares no known type parameters: {annotation!r}"
        )
    if origin in BUILTIN_TYPE_PARAMETERS and len(names) != len(args):
        raise UnrecognizedTypeError(
            annotation,
            f"{origin.__qualname__} takes {len(names)} type arguments, got {len(args)}: {annotation!r}",
        )


def _describe_array(element: Any) -> TypeDescriptor:
    component = describe(element)
    if isinstance(component, ClassRef):
        return ClassRef.array_of(component)
    return GenericArrayRef(component)


def describe_type_variable(param: Any) -> TypeVariableRef:
    """Describe a TypeVar (or ParamSpec/TypeVarTuple) with its bound.

    A bound that cannot be described, such as an unresolved forward
    reference, is dropped and the variable is treated as unbounded.
    """
    bound = getattr(param, "__bound__", None)
    if bound is None:
        return TypeVariableRef(param.__name__)
    try:
        return TypeVariableRef(param.__name__, describe(bound))
    except UnrecognizedTypeError:
        logger.debug(f"Ignoring undescribable bound {bound!r} of {param.__name__}")
        return TypeVariableRef(param.__name__)


# =============================================================================
# Fields
# =============================================================================


def describe_field(name: str, annotation: Any, owner: str) -> FieldRef:
    """Build the FieldRef of one class-level annotation.

    Modifier wrappers are peeled off in any nesting order:

    - ClassVar[X]  -> STATIC
    - Final[X]     -> FINAL
    - InitVar[X]   -> TRANSIENT
    - Annotated[X, *tags] -> tags collected as metadata

    An annotation with no descriptor shape yields a FieldRef whose
    ``generic_type`` is None; the error surfaces when the field is resolved.
    """
    modifiers: Set[Modifier] = set()
    metadata: List[Any] = []

    while True:
        origin = typing.get_origin(annotation)
        args = typing.get_args(annotation)
        if origin is typing.Annotated:
            metadata.extend(args[1:])
            annotation = args[0]
        elif origin is typing.ClassVar or annotation is typing.ClassVar:
            modifiers.add(Modifier.STATIC)
            annotation = args[0] if args else typing.Any
        elif origin is typing.Final or annotation is typing.Final:
            modifiers.add(Modifier.FINAL)
            annotation = args[0] if args else typing.Any
        elif isinstance(annotation, dataclasses.InitVar):
            modifiers.add(Modifier.TRANSIENT)
            annotation = annotation.type
        else:
            break

    try:
        generic_type: Optional[TypeDescriptor] = describe(annotation)
    except UnrecognizedTypeError:
        logger.debug(f"Field {owner}.{name} has no descriptor shape: {annotation!r}")
        generic_type = None

    return FieldRef(
        name=name,
        owner=owner,
        generic_type=generic_type,
        modifiers=frozenset(modifiers),
        metadata=tuple(metadata),
        annotation=annotation,
    )


def declared_fields(cls: type) -> List[FieldRef]:
    """Describe the fields ``cls`` itself declares, in declaration order.

    Inherited annotations are not included; see FieldCatalog for the
    hierarchy walk.
    """
    owner = qualified_name(cls)
    annotations = _own_annotations(cls)
    return [describe_field(name, ann, owner) for name, ann in annotations.items()]


def _own_annotations(cls: type) -> Dict[str, Any]:
    """Return the class's own annotations with string annotations evaluated.

    Each string is evaluated on its own, in the namespace of the class's
    module, so one unresolvable name (a TYPE_CHECKING-only import) leaves
    that annotation as a string instead of failing the whole class.
    """
    module = sys.modules.get(cls.__module__)
    globalns = getattr(module, "__dict__", {})
    localns = dict(vars(cls))

    evaluated: Dict[str, Any] = {}
    for name, annotation in inspect.get_annotations(cls).items():
        if isinstance(annotation, str):
            try:
                annotation = eval(annotation, globalns, localns)
            except (NameError, AttributeError, SyntaxError, TypeError) as e:
                logger.debug(f"Cannot evaluate annotation of {cls.__qualname__}.{name}: {e}")
        evaluated[name] = annotation
    return evaluated
