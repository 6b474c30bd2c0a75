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
"""Property tests for type resolution.

These tests generate random descriptor trees and check the structural
invariants every resolved TypeDefinition must satisfy, independent of the
particular shape being resolved.
"""

import hypothesis.strategies as st
from hypothesis import given, settings

from typeshape.assignability import is_assignable
from typeshape.cache import CachedTypeResolver
from typeshape.descriptors import (
    ClassRef,
    GenericArrayRef,
    ParameterizedRef,
    TypeVariableRef,
    WildcardRef,
)
from typeshape.kinds import TypeKind, classify
from typeshape.loader import DEFAULT_LOADER
from typeshape.resolver import TypeResolver

MODELS = "typeshape.tests.fixtures.models"

# Raw generic name -> arity
GENERICS = {
    "builtins.list": 1,
    "builtins.set": 1,
    "builtins.dict": 2,
    f"{MODELS}.Box": 1,
    f"{MODELS}.Pair": 2,
}

LEAVES = [
    "builtins.int",
    "builtins.str",
    "builtins.float",
    "builtins.bytes",
    "datetime.date",
    "ctypes.c_int",
    f"{MODELS}.Cat",
    f"{MODELS}.Animal",
    f"{MODELS}.Color",
]

RESOLVER = TypeResolver()


# =============================================================================
# Strategy Definitions
# =============================================================================


def leaf_strategy():
    """Generate a non-array concrete ref or a type variable."""
    return st.one_of(
        st.sampled_from(LEAVES).map(ClassRef),
        st.sampled_from(["T", "U", "V"]).map(TypeVariableRef),
    )


def extend(children):
    """Generate one layer of structure over ``children``."""

    @st.composite
    def parameterized(draw):
        raw = draw(st.sampled_from(sorted(GENERICS)))
        args = draw(st.lists(children, min_size=GENERICS[raw], max_size=GENERICS[raw]))
        return ParameterizedRef(ClassRef(raw), tuple(args))

    @st.composite
    def array(draw):
        component = draw(children)
        if isinstance(component, ClassRef):
            return ClassRef.array_of(component)
        return GenericArrayRef(component)

    @st.composite
    def wildcard(draw):
        upper = draw(st.lists(children, max_size=2))
        lower = draw(st.lists(children, max_size=1))
        return WildcardRef(tuple(upper), tuple(lower))

    return st.one_of(parameterized(), array(), wildcard())


descriptor_strategy = st.recursive(leaf_strategy(), extend, max_leaves=8)


def walk(definition):
    """Yield every node of a TypeDefinition tree."""
    yield definition
    children = list(definition.type_arguments)
    for child in (definition.component, definition.upper_bound, definition.lower_bound):
        if child is not None:
            children.append(child)
    for child in children:
        yield from walk(child)


# =============================================================================
# Properties
# =============================================================================


class TestResolutionProperties:
    """Invariants of resolved trees."""

    @given(descriptor_strategy)
    @settings(max_examples=200)
    def test_idempotent(self, descriptor):
        """Resolving the same descriptor twice gives equal trees."""
        assert RESOLVER.resolve_type(descriptor) == RESOLVER.resolve_type(descriptor)

    @given(descriptor_strategy)
    @settings(max_examples=200)
    def test_kind_matches_declared_shape(self, descriptor):
        """Every node's kind is the classification of its descriptor."""
        for node in walk(RESOLVER.resolve_type(descriptor)):
            assert node.kind is classify(node.declared)

    @given(descriptor_strategy)
    @settings(max_examples=200)
    def test_structure_follows_kind(self, descriptor):
        """Child slots are populated only for the kinds that own them."""
        for node in walk(RESOLVER.resolve_type(descriptor)):
            if node.kind is not TypeKind.PARAMETERIZED:
                assert node.type_arguments == ()
            if node.kind is not TypeKind.WILDCARD:
                assert node.upper_bound is None
                assert node.lower_bound is None
            assert (node.component is not None) == node.is_array
            if node.kind is TypeKind.GENERIC_ARRAY:
                assert node.is_generic and node.is_array
            if node.kind is TypeKind.TYPE_VARIABLE:
                assert not node.is_generic
                assert len(node.parameter_bindings) == 0

    @given(descriptor_strategy)
    @settings(max_examples=200)
    def test_bindings_name_declared_parameters(self, descriptor):
        """Binding keys are exactly the raw class's declared parameters."""
        for node in walk(RESOLVER.resolve_type(descriptor)):
            if node.kind is TypeKind.PARAMETERIZED:
                names = DEFAULT_LOADER.type_parameter_names(node.runtime_type)
                assert set(node.parameter_bindings.keys()) == set(names)
                assert len(node.type_arguments) == len(node.declared.arguments)
                for name, arg in zip(names, node.type_arguments):
                    assert node.parameter_bindings[name] is arg.runtime_type
            elif node.kind is TypeKind.CONCRETE and not node.is_array:
                names = DEFAULT_LOADER.type_parameter_names(node.runtime_type)
                assert set(node.parameter_bindings.keys()) == set(names)

    @given(st.lists(descriptor_strategy, min_size=1, max_size=6))
    @settings(max_examples=100)
    def test_cache_is_transparent(self, descriptors):
        """A cached resolver answers exactly like the plain resolver."""
        cached = CachedTypeResolver(RESOLVER, max_entries=3)
        for descriptor in descriptors + descriptors:
            assert cached.resolve_type(descriptor) == RESOLVER.resolve_type(descriptor)
        assert len(cached) <= 3


class TestAssignabilityProperties:
    """Invariants of is_assignable."""

    @given(descriptor_strategy, st.booleans())
    @settings(max_examples=100)
    def test_reflexive(self, descriptor, autobox):
        runtime_type = RESOLVER.resolve_type(descriptor).runtime_type
        assert is_assignable(runtime_type, runtime_type, allow_autoboxing=autobox)

    @given(descriptor_strategy)
    @settings(max_examples=100)
    def test_everything_reaches_object(self, descriptor):
        runtime_type = RESOLVER.resolve_type(descriptor).runtime_type
        assert is_assignable(runtime_type, object)
