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
"""Errors raised while resolving type shapes.

Both errors are unrecoverable at the point where they occur: resolution
aborts and the error propagates to the caller untouched.
"""

from __future__ import annotations

from typing import Any, Optional


class TypeShapeError(Exception):
    """Base class for all typeshape errors."""


class UnrecognizedTypeError(TypeShapeError):
    """A type descriptor does not match any known structural shape.

    Attributes:
        descriptor: The offending descriptor or annotation
    """

    def __init__(self, descriptor: Any, message: Optional[str] = None):
        self.descriptor = descriptor
        shown = "[None]" if descriptor is None else repr(descriptor)
        super().__init__(message or f"Unrecognized type: {shown}")


class TypeLoadError(TypeShapeError):
    """A named type could not be located.

    Attributes:
        name: The fully qualified name that failed to load
        reason: Human-readable explanation of the failure
    """

    def __init__(self, name: str, reason: str = "not found"):
        self.name = name
        self.reason = reason
        super().__init__(f"Cannot load type '{name}': {reason}")
