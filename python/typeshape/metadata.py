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
"""Field metadata tags and modifier inspection.

Tags are attached to field annotations with ``typing.Annotated``:

    class Event:
        day: Annotated[str, TimeFormat("%Y-%m-%d")]
        cache: Annotated[dict, Transient()]

Class-level modifiers come from ``@typing.final`` and ``@transient``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, Optional, TypeVar

from typeshape.descriptors import FieldRef, Modifier

_C = TypeVar("_C", bound=type)

# Any of these keeps a field or class out of serialization.
EXCLUDING_MODIFIERS: FrozenSet[Modifier] = frozenset(
    {Modifier.STATIC, Modifier.FINAL, Modifier.TRANSIENT}
)


@dataclass(frozen=True, slots=True)
class TimeFormat:
    """Marks a field as a date/time value with the given format string.

    Attributes:
        value: strftime-style format (e.g. "%Y-%m-%d %H:%M:%S")
    """

    value: str


@dataclass(frozen=True, slots=True)
class Transient:
    """Excludes a field from serialization."""


def transient(cls: _C) -> _C:
    """Class decorator marking a class as transient."""
    cls.__transient__ = True
    return cls


class ModifierInspector:
    """Reads modifiers off classes and fields.

    Class modifiers are read from the class's own namespace only, so a
    subclass of a final or transient class does not inherit the flag.
    """

    def class_modifiers(self, cls: type) -> FrozenSet[Modifier]:
        own = vars(cls)
        modifiers = set()
        if own.get("__final__", False):
            modifiers.add(Modifier.FINAL)
        if own.get("__transient__", False):
            modifiers.add(Modifier.TRANSIENT)
        return frozenset(modifiers)

    def is_serializable_class(self, cls: type) -> bool:
        return not (self.class_modifiers(cls) & EXCLUDING_MODIFIERS)

    def is_serializable_field(self, field: FieldRef) -> bool:
        if field.find_metadata(Transient) is not None:
            return False
        return not (field.modifiers & EXCLUDING_MODIFIERS)

    def time_format(self, field: FieldRef) -> Optional[TimeFormat]:
        return field.find_metadata(TimeFormat)


DEFAULT_INSPECTOR = ModifierInspector()
