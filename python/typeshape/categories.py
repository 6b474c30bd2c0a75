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
"""Secondary data classification of runtime types.

Serializers pick an encoding strategy per category. The resolver attaches
the category of each node's runtime type and does not interpret it.
"""

from __future__ import annotations

import datetime
import enum
import numbers
import uuid
from enum import Enum, auto
from typing import Optional

from typeshape import primitives


class DataCategory(Enum):
    """Broad data category of a runtime type."""

    BOOLEAN = auto()
    NUMERIC = auto()
    TEXTUAL = auto()
    BINARY = auto()
    TEMPORAL = auto()
    IDENTIFIER = auto()
    ENUMERATION = auto()
    MAPPING = auto()
    COLLECTION = auto()
    ARRAY = auto()
    NONE = auto()
    OBJECT = auto()


_TEMPORAL_TYPES = (datetime.date, datetime.time, datetime.timedelta)
_NUMERIC_TYPES = (numbers.Number,)


def categorize(runtime_type: Optional[type]) -> DataCategory:
    """Return the data category of ``runtime_type``.

    Checks run most-specific first: bool before int, enums before their
    mixed-in value types, mappings before generic collections.
    """
    if runtime_type is None or runtime_type is primitives.NONE_TYPE:
        return DataCategory.NONE
    if not isinstance(runtime_type, type):
        return DataCategory.OBJECT

    boxed = primitives.primitive_to_wrapper(runtime_type)
    if issubclass(boxed, enum.Enum):
        return DataCategory.ENUMERATION
    if issubclass(boxed, bool):
        return DataCategory.BOOLEAN
    if issubclass(boxed, _NUMERIC_TYPES):
        return DataCategory.NUMERIC
    if primitives.is_textual(boxed):
        return DataCategory.TEXTUAL
    if primitives.is_binary(boxed):
        return DataCategory.BINARY
    if issubclass(boxed, _TEMPORAL_TYPES):
        return DataCategory.TEMPORAL
    if issubclass(boxed, uuid.UUID):
        return DataCategory.IDENTIFIER
    if primitives.is_map(boxed):
        return DataCategory.MAPPING
    if primitives.is_array(boxed):
        return DataCategory.ARRAY
    if primitives.is_collection(boxed):
        return DataCategory.COLLECTION
    return DataCategory.OBJECT
