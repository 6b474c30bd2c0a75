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
"""typeshape: runtime shapes of generic types and their fields.

Given a declared type, possibly generic, possibly a field inside a generic
class, typeshape tells serializers, mappers and validators what the type
is at runtime, what its type arguments resolve to, whether it is
primitive, an array or serializable, and how date-like fields are
formatted.

Key Components:
- descriptors: The five structural type shapes and field references
- kinds: Structural classification of descriptors
- introspect: Descriptors from Python annotations
- resolver: Recursive type resolution into TypeDefinition trees
- fields: Field resolution against parameter bindings
- catalog: Field enumeration across class hierarchies
- assignability: Lenient class assignability
- cache: Caller-side memoization of type resolution

Usage:
    >>> from typeshape import TypeResolver
    >>> td = TypeResolver().resolve_annotation(list[str])
    >>> dict(td.parameter_bindings)
    {'E': <class 'str'>}
"""

from typeshape.assignability import is_assignable
from typeshape.cache import CachedTypeResolver, CacheStats
from typeshape.catalog import FieldCatalog, all_fields
from typeshape.categories import DataCategory, categorize
from typeshape.config import (
    DEFAULT_CONFIG,
    EMPTY_BINDINGS,
    DefaultBindingPolicy,
    ResolverConfig,
)
from typeshape.definitions import FieldDefinition, TypeDefinition
from typeshape.descriptors import (
    ClassRef,
    FieldRef,
    GenericArrayRef,
    Modifier,
    ParameterizedRef,
    TypeDescriptor,
    TypeVariableRef,
    WildcardRef,
    erase,
)
from typeshape.errors import TypeLoadError, TypeShapeError, UnrecognizedTypeError
from typeshape.fields import FieldResolver, resolve_field
from typeshape.introspect import declared_fields, describe, describe_field
from typeshape.kinds import TypeKind, classify
from typeshape.loader import TypeLoader, qualified_name
from typeshape.metadata import ModifierInspector, TimeFormat, Transient, transient
from typeshape.resolver import TypeResolver, resolve_type

__all__ = [
    # Descriptors
    "TypeDescriptor",
    "ClassRef",
    "ParameterizedRef",
    "GenericArrayRef",
    "WildcardRef",
    "TypeVariableRef",
    "FieldRef",
    "Modifier",
    "erase",
    # Classification
    "TypeKind",
    "classify",
    "DataCategory",
    "categorize",
    # Introspection
    "describe",
    "describe_field",
    "declared_fields",
    "TypeLoader",
    "qualified_name",
    # Resolution
    "TypeDefinition",
    "FieldDefinition",
    "TypeResolver",
    "FieldResolver",
    "resolve_type",
    "resolve_field",
    "CachedTypeResolver",
    "CacheStats",
    # Configuration
    "ResolverConfig",
    "DefaultBindingPolicy",
    "DEFAULT_CONFIG",
    "EMPTY_BINDINGS",
    # Fields and metadata
    "FieldCatalog",
    "all_fields",
    "ModifierInspector",
    "TimeFormat",
    "Transient",
    "transient",
    # Assignability
    "is_assignable",
    # Errors
    "TypeShapeError",
    "UnrecognizedTypeError",
    "TypeLoadError",
]
