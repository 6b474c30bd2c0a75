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
"""Unit tests for FieldCatalog and modifier inspection."""

import pytest

from typeshape.catalog import FieldCatalog, all_fields
from typeshape.descriptors import ClassRef, FieldRef, Modifier
from typeshape.metadata import ModifierInspector, TimeFormat, Transient
from typeshape.tests.fixtures.models import (
    Base,
    Cat,
    Derived,
    Event,
    Outer,
    Scratch,
    Sealed,
    WithCallback,
    WithLateName,
    WithUnion,
)

MODELS = "typeshape.tests.fixtures.models"


@pytest.fixture
def catalog() -> FieldCatalog:
    return FieldCatalog()


class TestAllFields:
    """Tests for the hierarchy walk."""

    def test_subclass_shadows_ancestor(self, catalog):
        """Derived.x hides Base.x."""
        fields = catalog.all_fields(Derived)
        assert set(fields) == {"x", "shared", "extra"}
        assert fields["x"].owner == f"{MODELS}.Derived"
        assert fields["x"].generic_type == ClassRef("builtins.str")
        assert fields["shared"].owner == f"{MODELS}.Base"

    def test_base_unaffected(self, catalog):
        fields = catalog.all_fields(Base)
        assert fields["x"].generic_type == ClassRef("builtins.int")

    def test_subclass_fields_come_first(self, catalog):
        assert list(catalog.all_fields(Cat)) == ["lives", "name"]

    def test_no_fields(self, catalog):
        assert catalog.all_fields(Sealed) == {}

    def test_nested_class(self, catalog):
        assert list(catalog.all_fields(Outer.Inner)) == ["depth"]

    def test_collection_view(self, catalog):
        names = [f.name for f in catalog.all_fields_collection(Derived)]
        assert names == ["x", "extra", "shared"]

    def test_module_level_helper(self):
        assert all_fields(Derived).keys() == FieldCatalog().all_fields(Derived).keys()


class TestSerializableFields:
    """Tests for the serializable filter."""

    def test_event(self, catalog):
        names = {f.name for f in catalog.serializable_fields(Event)}
        assert names == {"when", "day", "at", "stamp", "day_formatted", "label"}

    def test_filter(self, catalog):
        fields = [
            FieldRef("a", "pkg.A", ClassRef("builtins.int")),
            FieldRef("b", "pkg.A", ClassRef("builtins.int"), frozenset({Modifier.STATIC})),
            FieldRef("c", "pkg.A", ClassRef("builtins.int"), metadata=(Transient(),)),
        ]
        assert [f.name for f in catalog.filter_serializable(fields)] == ["a"]


class TestModifierInspector:
    """Tests for class and field modifier reads."""

    @pytest.fixture
    def inspector(self) -> ModifierInspector:
        return ModifierInspector()

    def test_final_class(self, inspector):
        assert inspector.class_modifiers(Sealed) == frozenset({Modifier.FINAL})
        assert not inspector.is_serializable_class(Sealed)

    def test_transient_class(self, inspector):
        assert inspector.class_modifiers(Scratch) == frozenset({Modifier.TRANSIENT})
        assert not inspector.is_serializable_class(Scratch)

    def test_modifiers_not_inherited(self, inspector):
        class Open(Scratch):
            pass

        assert inspector.class_modifiers(Open) == frozenset()
        assert inspector.is_serializable_class(Open)

    def test_plain_class(self, inspector):
        assert inspector.is_serializable_class(Cat)
        assert inspector.is_serializable_class(int)

    def test_time_format(self, inspector):
        tag = TimeFormat("%H:%M")
        field = FieldRef("t", "pkg.A", ClassRef("builtins.str"), metadata=(tag,))
        assert inspector.time_format(field) is tag
        assert inspector.time_format(FieldRef("t", "pkg.A", ClassRef("builtins.str"))) is None

    @pytest.mark.parametrize("modifier", list(Modifier))
    def test_every_modifier_excludes(self, inspector, modifier):
        field = FieldRef("a", "pkg.A", ClassRef("builtins.int"), frozenset({modifier}))
        assert not inspector.is_serializable_field(field)


class TestUnsupportedFieldTypes:
    """Fields with annotations outside the descriptor model are still listed."""

    def test_union_field(self, catalog):
        fields = catalog.all_fields(WithUnion)
        assert set(fields) == {"tag", "count"}
        assert not fields["tag"].is_describable
        assert fields["count"].generic_type == ClassRef("builtins.int")

    def test_callable_field(self, catalog):
        fields = catalog.all_fields(WithCallback)
        assert set(fields) == {"callback", "name"}
        assert not fields["callback"].is_describable

    def test_unresolvable_forward_reference(self, catalog):
        """A TYPE_CHECKING-only name does not hide the other fields."""
        fields = catalog.all_fields(WithLateName)
        assert fields["amount"].annotation == "LateDecimal"
        assert not fields["amount"].is_describable
        assert fields["label"].generic_type == ClassRef("builtins.str")

    def test_serializable_filter_keeps_them(self, catalog):
        names = {f.name for f in catalog.serializable_fields(WithUnion)}
        assert names == {"tag", "count"}
