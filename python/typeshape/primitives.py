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
"""Primitive and primitive-wrapper tables.

Primitives are the ctypes simple machine types. Each one boxes into a
builtin Python value type when read, which is its wrapper:

    c_int  -> int       c_double -> float
    c_bool -> bool      c_char   -> bytes

The tables are fixed; lookups are exact class matches.
"""

from __future__ import annotations

import array
import collections.abc
import ctypes
from typing import Dict, FrozenSet, Optional

PRIMITIVE_TO_WRAPPER: Dict[type, type] = {
    ctypes.c_bool: bool,
    ctypes.c_byte: int,
    ctypes.c_ubyte: int,
    ctypes.c_short: int,
    ctypes.c_ushort: int,
    ctypes.c_int: int,
    ctypes.c_uint: int,
    ctypes.c_long: int,
    ctypes.c_ulong: int,
    ctypes.c_longlong: int,
    ctypes.c_ulonglong: int,
    ctypes.c_size_t: int,
    ctypes.c_ssize_t: int,
    ctypes.c_float: float,
    ctypes.c_double: float,
    ctypes.c_longdouble: float,
    ctypes.c_char: bytes,
}

WRAPPERS: FrozenSet[type] = frozenset(PRIMITIVE_TO_WRAPPER.values())

NONE_TYPE = type(None)

# Never coerced to or from text.
BOOLEAN_AND_VOID: FrozenSet[type] = frozenset({bool, ctypes.c_bool, NONE_TYPE})


def is_primitive(cls: Optional[type]) -> bool:
    return cls in PRIMITIVE_TO_WRAPPER


def is_primitive_wrapper(cls: Optional[type]) -> bool:
    return cls in WRAPPERS


def is_primitive_or_wrapper(cls: Optional[type]) -> bool:
    return is_primitive(cls) or is_primitive_wrapper(cls)


def primitive_to_wrapper(cls: type) -> type:
    """Return the wrapper of a primitive, or ``cls`` itself otherwise."""
    return PRIMITIVE_TO_WRAPPER.get(cls, cls)


def is_textual(cls: type) -> bool:
    return isinstance(cls, type) and issubclass(cls, str)


def is_binary(cls: type) -> bool:
    return isinstance(cls, type) and issubclass(cls, (bytes, bytearray, memoryview))


def is_map(cls: type) -> bool:
    """True for mapping classes (dict, Mapping ABCs and their subclasses)."""
    return isinstance(cls, type) and issubclass(cls, collections.abc.Mapping)


def is_array(cls: type) -> bool:
    """True for array classes: tuple, array.array and ctypes arrays."""
    return isinstance(cls, type) and issubclass(cls, (tuple, array.array, ctypes.Array))


def is_collection(cls: type) -> bool:
    """True for element containers.

    Text and binary strings are sized iterables at runtime but are values,
    not containers, so they are excluded.
    """
    if not isinstance(cls, type) or is_textual(cls) or is_binary(cls):
        return False
    return issubclass(cls, collections.abc.Collection)


def is_collection_or_map_or_array(cls: type) -> bool:
    return is_collection(cls) or is_map(cls) or is_array(cls)
