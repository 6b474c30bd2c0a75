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
"""Field resolution in the context of parameter bindings.

A field is resolved against the parameter bindings of its enclosing type:

    class Box(Generic[V]):
        value: V
        values: list[V]

    bindings = resolver.resolve_annotation(Box[Cat]).parameter_bindings
    field_resolver.resolve_field(value_ref, bindings).runtime_type
        -> Cat
    field_resolver.resolve_field(values_ref, bindings).type_argument_classes
        -> (Cat,)

Substitution is one level deep. For a parameterized field, each type
argument that is a type variable is looked up in the bindings and each
concrete argument is loaded directly; nested parameterized, wildcard and
generic-array arguments are left unresolved (None). Wildcard-typed fields
are not substituted and keep their erasure.

A type variable missing from the bindings resolves to its erasure: its
declared bound, or ``object``.
"""

from __future__ import annotations

import logging
from typing import Dict, Mapping, Optional, Tuple

from typeshape import primitives
from typeshape.catalog import DEFAULT_CATALOG, FieldCatalog
from typeshape.categories import categorize
from typeshape.config import DEFAULT_CONFIG, EMPTY_BINDINGS, ResolverConfig
from typeshape.definitions import FieldDefinition, TypeDefinition
from typeshape.descriptors import (
    FieldRef,
    TypeDescriptor,
    TypeVariableRef,
    erase,
)
from typeshape.kinds import TypeKind, classify
from typeshape.loader import DEFAULT_LOADER, TypeLoader
from typeshape.metadata import DEFAULT_INSPECTOR, ModifierInspector

logger = logging.getLogger(__name__)


class FieldResolver:
    """Resolves fields into FieldDefinitions.

    Args:
        loader: Resolves class names; defaults to the importlib loader
        config: Resolver configuration; defaults to DEFAULT_CONFIG
        inspector: Reads modifiers and metadata tags
        catalog: Enumerates fields for ``resolve_fields``
    """

    def __init__(
        self,
        loader: Optional[TypeLoader] = None,
        config: Optional[ResolverConfig] = None,
        inspector: Optional[ModifierInspector] = None,
        catalog: Optional[FieldCatalog] = None,
    ) -> None:
        self._loader = loader or DEFAULT_LOADER
        self._config = config or DEFAULT_CONFIG
        self._inspector = inspector or DEFAULT_INSPECTOR
        self._catalog = catalog or DEFAULT_CATALOG

    def resolve_field(
        self,
        field: FieldRef,
        bindings: Mapping[str, type] = EMPTY_BINDINGS,
    ) -> FieldDefinition:
        """Resolve one field against ``bindings``.

        Args:
            field: The field to resolve
            bindings: Parameter name -> class of the enclosing type

        Raises:
            UnrecognizedTypeError: If the field's annotation has no
                descriptor shape
            TypeLoadError: If the field's type, or a concrete type
                argument, cannot be loaded
        """
        generic = field.require_generic_type()
        declared = erase(generic)
        declared_class = self._loader.load(declared.name)

        kind = classify(generic)
        runtime_type = declared_class
        type_argument_classes: Tuple[Optional[type], ...] = ()

        if kind is TypeKind.PARAMETERIZED:
            type_argument_classes = tuple(
                self._argument_class(arg, bindings) for arg in generic.arguments
            )
        elif kind is TypeKind.TYPE_VARIABLE:
            runtime_type = self._substitute(generic, bindings)
        # WILDCARD fields keep their erasure

        logger.debug(f"Resolved field {field!r} -> {runtime_type!r}")

        is_temporal, temporal_format = self._temporal(field, runtime_type)
        return FieldDefinition(
            field=field,
            declared_type=declared,
            generic_declared_type=generic,
            runtime_type=runtime_type,
            is_generic=kind is TypeKind.PARAMETERIZED,
            is_primitive=primitives.is_primitive(runtime_type),
            is_primitive_wrapper=primitives.is_primitive_wrapper(runtime_type),
            type_argument_classes=type_argument_classes,
            is_serializable=self._inspector.is_serializable_field(field),
            is_temporal=is_temporal,
            temporal_format=temporal_format,
            data_category=categorize(runtime_type),
        )

    def resolve_fields(
        self,
        cls: type,
        bindings: Mapping[str, type] = EMPTY_BINDINGS,
    ) -> Dict[str, FieldDefinition]:
        """Resolve every field of ``cls`` and its ancestors.

        Fields whose annotation has no descriptor shape are left out;
        ``resolve_field`` on such a field raises UnrecognizedTypeError.
        """
        resolved: Dict[str, FieldDefinition] = {}
        for name, field in self._catalog.all_fields(cls).items():
            if not field.is_describable:
                logger.debug(f"Skipping field {field!r}: unsupported type")
                continue
            resolved[name] = self.resolve_field(field, bindings)
        return resolved

    def resolve_member_fields(self, definition: TypeDefinition) -> Dict[str, FieldDefinition]:
        """Resolve the fields of a resolved type with that node's bindings."""
        return self.resolve_fields(definition.runtime_type, definition.parameter_bindings)

    def _argument_class(
        self, argument: TypeDescriptor, bindings: Mapping[str, type]
    ) -> Optional[type]:
        kind = classify(argument)
        if kind is TypeKind.TYPE_VARIABLE:
            return self._substitute(argument, bindings)
        if kind is TypeKind.CONCRETE:
            return self._loader.load(argument.name)
        return None

    def _substitute(self, variable: TypeVariableRef, bindings: Mapping[str, type]) -> type:
        if variable.name in bindings:
            return bindings[variable.name]
        logger.debug(f"No binding for {variable!r}; using its erasure")
        return self._loader.load(erase(variable).name)

    def _temporal(self, field: FieldRef, runtime_type: type) -> Tuple[bool, Optional[str]]:
        tag = self._inspector.time_format(field)
        if not isinstance(runtime_type, type):
            return False, None
        if issubclass(runtime_type, self._config.temporal_types) or (
            primitives.is_textual(runtime_type) and tag is not None
        ):
            return True, tag.value if tag is not None else None
        return False, None


def resolve_field(
    field: FieldRef, bindings: Mapping[str, type] = EMPTY_BINDINGS
) -> FieldDefinition:
    """Resolve ``field`` with the default loader and configuration."""
    return FieldResolver().resolve_field(field, bindings)
