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
"""Lenient class assignability for mapping frameworks.

Rules, applied in order:

1. No target: not assignable.
2. No source (a None value): assignable unless the target is primitive.
3. With autoboxing, primitives on either side become their wrappers.
4. Identical classes are assignable.
5. Text converts to and from any primitive or wrapper except the boolean
   and void kinds.
6. Any container, mapping or array accepts any other container, mapping
   or array. Element types are not checked.
7. Otherwise the host rule: primitive widening, PEP 484 numeric
   promotion (int -> float -> complex), then subclassing.
"""

from __future__ import annotations

import ctypes
from typing import Dict, FrozenSet, Optional

from typeshape.primitives import (
    BOOLEAN_AND_VOID,
    is_collection_or_map_or_array,
    is_primitive,
    is_primitive_or_wrapper,
    is_textual,
    primitive_to_wrapper,
)

_FLOATING = frozenset({ctypes.c_float, ctypes.c_double})

PRIMITIVE_WIDENING: Dict[type, FrozenSet[type]] = {
    ctypes.c_byte: frozenset({ctypes.c_short, ctypes.c_int, ctypes.c_long, ctypes.c_longlong}) | _FLOATING,
    ctypes.c_short: frozenset({ctypes.c_int, ctypes.c_long, ctypes.c_longlong}) | _FLOATING,
    ctypes.c_int: frozenset({ctypes.c_long, ctypes.c_longlong}) | _FLOATING,
    ctypes.c_long: frozenset({ctypes.c_longlong}) | _FLOATING,
    ctypes.c_longlong: _FLOATING,
    ctypes.c_float: frozenset({ctypes.c_double}),
}

NUMERIC_PROMOTION: Dict[type, FrozenSet[type]] = {
    int: frozenset({float, complex}),
    float: frozenset({complex}),
}


def is_assignable(
    from_type: Optional[type],
    to_type: Optional[type],
    allow_autoboxing: bool = True,
) -> bool:
    """Check whether a value of ``from_type`` may be treated as ``to_type``.

    Args:
        from_type: The source class, or None for a None value
        to_type: The target class
        allow_autoboxing: Box primitives into their wrappers first

    Returns:
        True if assignable under the lenient rules above
    """
    if to_type is None:
        return False
    if from_type is None:
        return not is_primitive(to_type)

    source, target = from_type, to_type
    if allow_autoboxing:
        source = primitive_to_wrapper(source)
        target = primitive_to_wrapper(target)

    if source is target:
        return True
    if _text_coercible(source, target) or _text_coercible(target, source):
        return True
    if is_collection_or_map_or_array(source) and is_collection_or_map_or_array(target):
        return True
    return _host_assignable(source, target)


def _text_coercible(text: type, other: type) -> bool:
    return (
        is_textual(text)
        and is_primitive_or_wrapper(other)
        and other not in BOOLEAN_AND_VOID
    )


def _host_assignable(source: type, target: type) -> bool:
    if target in PRIMITIVE_WIDENING.get(source, ()):
        return True
    if target in NUMERIC_PROMOTION.get(source, ()):
        return True
    return issubclass(source, target)
