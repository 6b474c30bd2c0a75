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
"""Resolver configuration.

The DefaultBindingPolicy decides what an unbound type parameter resolves
to when a generic class is used raw (``Box`` instead of ``Box[Cat]``).
By default every parameter binds to ``object``, the universal top type.
"""

from __future__ import annotations

import datetime
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Tuple

import immutables

from typeshape.descriptors import TypeVariableRef

BindingMap = immutables.Map

EMPTY_BINDINGS: BindingMap = immutables.Map()


@dataclass(frozen=True)
class DefaultBindingPolicy:
    """How raw generic parameters are bound.

    Attributes:
        top_type: The type every unbound parameter resolves to.
        use_bounds: Bind a parameter to its declared bound instead of
            ``top_type`` when it has one.

    Example:
        >>> policy = DefaultBindingPolicy()
        >>> dict(policy.bindings_for((TypeVariableRef("V"),), load=None))
        {'V': <class 'object'>}
    """

    top_type: type = object
    use_bounds: bool = False

    def binding_for(
        self,
        param: TypeVariableRef,
        load: Optional[Callable[[TypeVariableRef], type]],
    ) -> type:
        """Return the default binding of one parameter.

        Args:
            param: The declared parameter
            load: Loads the erasure of a bounded parameter; only consulted
                when ``use_bounds`` is set
        """
        if self.use_bounds and param.bound is not None and load is not None:
            return load(param)
        return self.top_type

    def bindings_for(
        self,
        params: Tuple[TypeVariableRef, ...],
        load: Optional[Callable[[TypeVariableRef], type]],
    ) -> BindingMap:
        return immutables.Map({p.name: self.binding_for(p, load) for p in params})

    def to_dict(self) -> Dict[str, Any]:
        return {"top_type": self.top_type, "use_bounds": self.use_bounds}

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "DefaultBindingPolicy":
        return cls(
            top_type=d.get("top_type", object),
            use_bounds=d.get("use_bounds", False),
        )


DEFAULT_TEMPORAL_TYPES: Tuple[type, ...] = (
    datetime.date,
    datetime.datetime,
    datetime.time,
)


@dataclass(frozen=True)
class ResolverConfig:
    """Configuration shared by TypeResolver and FieldResolver.

    Attributes:
        binding_policy: Default bindings for raw generic classes.
        temporal_types: Runtime types a field is considered temporal for.
            Subclasses match too.

    Example:
        >>> config = ResolverConfig(binding_policy=DefaultBindingPolicy(use_bounds=True))
        >>> resolver = TypeResolver(config=config)
    """

    binding_policy: DefaultBindingPolicy = field(default_factory=DefaultBindingPolicy)
    temporal_types: Tuple[type, ...] = DEFAULT_TEMPORAL_TYPES

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "binding_policy": self.binding_policy.to_dict(),
            "temporal_types": list(self.temporal_types),
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "ResolverConfig":
        """Create from dictionary."""
        return cls(
            binding_policy=DefaultBindingPolicy.from_dict(d.get("binding_policy", {})),
            temporal_types=tuple(d.get("temporal_types", DEFAULT_TEMPORAL_TYPES)),
        )


DEFAULT_CONFIG = ResolverConfig()
