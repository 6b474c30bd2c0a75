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
"""Pytest configuration for typeshape tests.

Puts the ``python/`` source directory on the path so the tests run from a
checkout without installing the package. Model classes are always
imported as ``typeshape.tests.fixtures.models`` so the classes the tests
hold are the same objects the TypeLoader loads by name.
"""

import sys
from pathlib import Path

import pytest

python_dir = Path(__file__).parent.parent.parent
if str(python_dir) not in sys.path:
    sys.path.insert(0, str(python_dir))

from typeshape.fields import FieldResolver  # noqa: E402
from typeshape.resolver import TypeResolver  # noqa: E402


@pytest.fixture
def resolver() -> TypeResolver:
    return TypeResolver()


@pytest.fixture
def field_resolver() -> FieldResolver:
    return FieldResolver()
