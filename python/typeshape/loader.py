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
"""Loading classes by fully qualified name.

The TypeLoader is the only place where descriptor names turn into live
classes. A name is ``module.qualname``; nested classes are reached by
attribute access after the longest importable module prefix.

Builtin generics (``list``, ``dict``, the ``collections.abc`` ABCs, ...)
do not declare named type parameters at runtime, so the loader carries a
fixed parameter table for them. User generics report their parameters
from ``__parameters__``.
"""

from __future__ import annotations

import collections
import collections.abc
import contextlib
import importlib
import logging
import os
import queue
import re
import typing
from typing import Dict, Tuple

from typeshape.descriptors import ARRAY_SUFFIX, TypeVariableRef
from typeshape.errors import TypeLoadError

logger = logging.getLogger(__name__)

# Runtime class of every array-shaped type.
ARRAY_TYPE = tuple

_NONE_TYPE = type(None)

# Qualname segment of classes defined inside a function.
LOCALS_MARKER = "<locals>"

# Names that do not resolve through their module attribute.
_ALIASES: Dict[str, type] = {
    "builtins.NoneType": _NONE_TYPE,
}

BUILTIN_TYPE_PARAMETERS: Dict[type, Tuple[str, ...]] = {
    list: ("E",),
    set: ("E",),
    frozenset: ("E",),
    tuple: ("E",),
    dict: ("K", "V"),
    type: ("T",),
    collections.deque: ("E",),
    collections.Counter: ("E",),
    collections.OrderedDict: ("K", "V"),
    collections.defaultdict: ("K", "V"),
    collections.ChainMap: ("K", "V"),
    collections.abc.Iterable: ("E",),
    collections.abc.Iterator: ("E",),
    collections.abc.Reversible: ("E",),
    collections.abc.Collection: ("E",),
    collections.abc.Container: ("E",),
    collections.abc.Sequence: ("E",),
    collections.abc.MutableSequence: ("E",),
    collections.abc.Set: ("E",),
    collections.abc.MutableSet: ("E",),
    collections.abc.Mapping: ("K", "V"),
    collections.abc.MutableMapping: ("K", "V"),
    collections.abc.MappingView: ("E",),
    collections.abc.KeysView: ("K",),
    collections.abc.ValuesView: ("V",),
    collections.abc.ItemsView: ("K", "V"),
    collections.abc.Generator: ("Y", "S", "R"),
    collections.abc.AsyncGenerator: ("Y", "S"),
    collections.abc.Awaitable: ("T",),
    collections.abc.Coroutine: ("Y", "S", "R"),
    collections.abc.AsyncIterable: ("E",),
    collections.abc.AsyncIterator: ("E",),
    contextlib.AbstractContextManager: ("T",),
    contextlib.AbstractAsyncContextManager: ("T",),
    queue.Queue: ("E",),
    queue.LifoQueue: ("E",),
    queue.PriorityQueue: ("E",),
    queue.SimpleQueue: ("E",),
    re.Pattern: ("S",),
    re.Match: ("S",),
    os.PathLike: ("S",),
}


def qualified_name(cls: type) -> str:
    """Return the fully qualified name the loader resolves back to ``cls``.

    Only classes reachable from their module by attribute access round-trip.
    A class defined inside a function has ``<locals>`` in its qualname; it
    can be described, but loading the name raises TypeLoadError.
    """
    if cls is _NONE_TYPE:
        return "builtins.NoneType"
    return f"{cls.__module__}.{cls.__qualname__}"


class TypeLoader:
    """Resolves fully qualified type names to classes.

    The loader is stateless; importing a module is delegated to
    ``importlib``, which keeps its own module cache.
    """

    def load(self, name: str) -> type:
        """Load the class named ``name``.

        Array names (``builtins.int[]``) load their component to check it
        exists and return the array runtime type.

        Raises:
            TypeLoadError: If no importable module prefix exists, an
                attribute is missing, or the target is not a class
        """
        if name.endswith(ARRAY_SUFFIX):
            self.load(name[: -len(ARRAY_SUFFIX)])
            return ARRAY_TYPE
        if LOCALS_MARKER in name:
            raise TypeLoadError(
                name, "classes defined inside a function cannot be loaded by name"
            )
        if name in _ALIASES:
            return _ALIASES[name]

        parts = name.split(".")
        for split in range(len(parts) - 1, 0, -1):
            module_name = ".".join(parts[:split])
            try:
                target = importlib.import_module(module_name)
            except ModuleNotFoundError as e:
                if e.name is not None and module_name.startswith(e.name):
                    continue
                raise TypeLoadError(name, str(e)) from e
            except ImportError as e:
                raise TypeLoadError(name, str(e)) from e

            for attr in parts[split:]:
                try:
                    target = getattr(target, attr)
                except AttributeError as e:
                    logger.debug(f"Type '{name}' has no attribute '{attr}'")
                    raise TypeLoadError(
                        name, f"'{module_name}' has no attribute path '{attr}'"
                    ) from e
            if not isinstance(target, type):
                raise TypeLoadError(name, f"not a class: {target!r}")
            return target

        logger.debug(f"No importable module prefix for type '{name}'")
        raise TypeLoadError(name, "no importable module")

    def type_parameters(self, cls: type) -> Tuple[TypeVariableRef, ...]:
        """Return the type parameters ``cls`` declares, in declaration order.

        A class declaring no parameters yields an empty tuple.
        """
        if cls in BUILTIN_TYPE_PARAMETERS:
            return tuple(TypeVariableRef(n) for n in BUILTIN_TYPE_PARAMETERS[cls])

        params = getattr(cls, "__parameters__", ())
        if not isinstance(params, tuple):
            return ()

        # Imported here; introspect depends on this module for naming.
        from typeshape.introspect import describe_type_variable

        return tuple(
            describe_type_variable(p)
            for p in params
            if isinstance(p, (typing.TypeVar, typing.ParamSpec, typing.TypeVarTuple))
        )

    def type_parameter_names(self, cls: type) -> Tuple[str, ...]:
        """Return only the declared parameter names of ``cls``."""
        return tuple(p.name for p in self.type_parameters(cls))


DEFAULT_LOADER = TypeLoader()
