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
"""Recursive type resolution.

The TypeResolver turns a type descriptor into a TypeDefinition tree. Each
structural kind has its own rule:

- CONCRETE: load the class. A raw use of a generic class gets default
  parameter bindings from the DefaultBindingPolicy. An array recurses
  into its component.
- PARAMETERIZED: resolve each argument in order, then bind the raw
  class's declared parameter names to the arguments' runtime types,
  positionally.
- GENERIC_ARRAY: recurse into the component.
- WILDCARD: recurse into the first upper and first lower bound, if any.
- TYPE_VARIABLE: no structure; binding happens at field resolution.

The resolver holds no mutable state. Every call builds a new tree, so
concurrent callers need no coordination.

Example:
    >>> resolver = TypeResolver()
    >>> td = resolver.resolve_annotation(dict[str, int])
    >>> dict(td.parameter_bindings)
    {'K': <class 'str'>, 'V': <class 'int'>}
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import immutables

from typeshape import primitives
from typeshape.categories import categorize
from typeshape.config import DEFAULT_CONFIG, EMPTY_BINDINGS, ResolverConfig
from typeshape.definitions import TypeDefinition
from typeshape.descriptors import (
    ClassRef,
    GenericArrayRef,
    ParameterizedRef,
    TypeDescriptor,
    TypeVariableRef,
    WildcardRef,
    erase,
)
from typeshape.errors import UnrecognizedTypeError
from typeshape.introspect import describe
from typeshape.kinds import TypeKind, classify
from typeshape.loader import ARRAY_TYPE, DEFAULT_LOADER, TypeLoader
from typeshape.metadata import DEFAULT_INSPECTOR, ModifierInspector

logger = logging.getLogger(__name__)


class TypeResolver:
    """Resolves type descriptors into TypeDefinition trees.

    Args:
        loader: Resolves class names; defaults to the importlib loader
        config: Resolver configuration; defaults to DEFAULT_CONFIG
        inspector: Reads class modifiers for serializability
    """

    def __init__(
        self,
        loader: Optional[TypeLoader] = None,
        config: Optional[ResolverConfig] = None,
        inspector: Optional[ModifierInspector] = None,
    ) -> None:
        self._loader = loader or DEFAULT_LOADER
        self._config = config or DEFAULT_CONFIG
        self._inspector = inspector or DEFAULT_INSPECTOR

    @property
    def loader(self) -> TypeLoader:
        return self._loader

    @property
    def config(self) -> ResolverConfig:
        return self._config

    def resolve_type(self, descriptor: TypeDescriptor) -> TypeDefinition:
        """Resolve a descriptor into a TypeDefinition tree.

        Raises:
            UnrecognizedTypeError: If ``descriptor`` has no known shape
            TypeLoadError: If a class named in the descriptor cannot be loaded
        """
        kind = classify(descriptor)
        logger.debug(f"Resolving {kind.name} {descriptor!r}")

        if kind is TypeKind.CONCRETE:
            return self._resolve_concrete(descriptor)
        if kind is TypeKind.PARAMETERIZED:
            return self._resolve_parameterized(descriptor)
        if kind is TypeKind.GENERIC_ARRAY:
            return self._resolve_generic_array(descriptor)
        if kind is TypeKind.WILDCARD:
            return self._resolve_wildcard(descriptor)
        if kind is TypeKind.TYPE_VARIABLE:
            return self._resolve_type_variable(descriptor)
        raise UnrecognizedTypeError(descriptor)

    def resolve_annotation(self, annotation: Any) -> TypeDefinition:
        """Describe a Python annotation and resolve it."""
        return self.resolve_type(describe(annotation))

    def is_generic_class(self, cls: type) -> bool:
        """True if ``cls`` declares type parameters."""
        return bool(self._loader.type_parameters(cls))

    # -------------------------------------------------------------------------
    # Per-kind rules
    # -------------------------------------------------------------------------

    def _resolve_concrete(self, ref: ClassRef) -> TypeDefinition:
        if ref.is_array:
            component = self.resolve_type(ref.component)
            return self._build(
                ref,
                TypeKind.CONCRETE,
                ARRAY_TYPE,
                is_generic=component.is_generic,
                is_array=True,
                component=component,
            )

        cls = self._loader.load(ref.name)
        params = self._loader.type_parameters(cls)
        bindings = EMPTY_BINDINGS
        if params:
            # Raw use of a generic class
            bindings = self._config.binding_policy.bindings_for(
                params, self._erased_class
            )
        return self._build(
            ref,
            TypeKind.CONCRETE,
            cls,
            is_generic=bool(params),
            parameter_bindings=bindings,
        )

    def _resolve_parameterized(self, ref: ParameterizedRef) -> TypeDefinition:
        raw = self._loader.load(ref.raw.name)
        arguments = tuple(self.resolve_type(arg) for arg in ref.arguments)
        names = self._loader.type_parameter_names(raw)
        bindings = immutables.Map(
            {name: arg.runtime_type for name, arg in zip(names, arguments, strict=True)}
        )
        return self._build(
            ref,
            TypeKind.PARAMETERIZED,
            raw,
            is_generic=True,
            type_arguments=arguments,
            parameter_bindings=bindings,
        )

    def _resolve_generic_array(self, ref: GenericArrayRef) -> TypeDefinition:
        component = self.resolve_type(ref.component)
        return self._build(
            ref,
            TypeKind.GENERIC_ARRAY,
            ARRAY_TYPE,
            is_generic=True,
            is_array=True,
            component=component,
        )

    def _resolve_wildcard(self, ref: WildcardRef) -> TypeDefinition:
        # Only the first bound on each side is honored
        upper = self.resolve_type(ref.upper_bounds[0]) if ref.upper_bounds else None
        lower = self.resolve_type(ref.lower_bounds[0]) if ref.lower_bounds else None
        return self._build(
            ref,
            TypeKind.WILDCARD,
            upper.runtime_type if upper is not None else object,
            is_generic=True,
            upper_bound=upper,
            lower_bound=lower,
        )

    def _resolve_type_variable(self, ref: TypeVariableRef) -> TypeDefinition:
        return self._build(
            ref,
            TypeKind.TYPE_VARIABLE,
            self._erased_class(ref),
            is_generic=False,
        )

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _erased_class(self, descriptor: TypeDescriptor) -> type:
        return self._loader.load(erase(descriptor).name)

    def _build(
        self,
        descriptor: TypeDescriptor,
        kind: TypeKind,
        runtime_type: type,
        **structure: Any,
    ) -> TypeDefinition:
        """Assemble a node; facts derived from the runtime type come last."""
        return TypeDefinition(
            declared=descriptor,
            kind=kind,
            runtime_type=runtime_type,
            is_primitive=primitives.is_primitive(runtime_type),
            is_primitive_wrapper=primitives.is_primitive_wrapper(runtime_type),
            is_serializable=self._inspector.is_serializable_class(runtime_type),
            data_category=categorize(runtime_type),
            **structure,
        )


def resolve_type(descriptor: TypeDescriptor) -> TypeDefinition:
    """Resolve ``descriptor`` with the default loader and configuration."""
    return TypeResolver().resolve_type(descriptor)
