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
"""Field enumeration across a class hierarchy."""

from __future__ import annotations

import inspect
from typing import Dict, Iterable, List, Optional

from typeshape.descriptors import FieldRef
from typeshape.introspect import declared_fields
from typeshape.metadata import DEFAULT_INSPECTOR, ModifierInspector


class FieldCatalog:
    """Builds name-keyed field registries for classes.

    The walk follows the method resolution order from the class itself up
    to ``object``. A field is registered only if its name is not already
    present, so a subclass declaration shadows every ancestor declaration
    of the same name.
    """

    def __init__(self, inspector: Optional[ModifierInspector] = None) -> None:
        self._inspector = inspector or DEFAULT_INSPECTOR

    def all_fields(self, cls: type) -> Dict[str, FieldRef]:
        """Return every field of ``cls`` and its ancestors, keyed by name."""
        fields: Dict[str, FieldRef] = {}
        for ancestor in inspect.getmro(cls):
            for field in declared_fields(ancestor):
                if field.name not in fields:
                    fields[field.name] = field
        return fields

    def all_fields_collection(self, cls: type) -> List[FieldRef]:
        return list(self.all_fields(cls).values())

    def serializable_fields(self, cls: type) -> List[FieldRef]:
        """Return the fields of ``cls`` that take part in serialization."""
        return self.filter_serializable(self.all_fields(cls).values())

    def filter_serializable(self, fields: Iterable[FieldRef]) -> List[FieldRef]:
        return [f for f in fields if self._inspector.is_serializable_field(f)]


DEFAULT_CATALOG = FieldCatalog()


def all_fields(cls: type) -> Dict[str, FieldRef]:
    """Return every field of ``cls`` and its ancestors, keyed by name."""
    return DEFAULT_CATALOG.all_fields(cls)
