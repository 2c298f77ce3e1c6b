# Copyright 2025 CrownOps Engineering
#
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

"""Analyzer abstraction and registry.

Analyzers turn a package reference into an analysis. The builtin ``node``
analyzer bridges to ``@arethetypeswrong/core``; further analyzers can be
installed as plugins and selected with ``--analyzer``.
"""

from __future__ import annotations

from .base import AnalyzerError, BaseAnalyzer, FetchError, UnknownAnalyzerError
from .registry import resolve_analyzer

__all__ = [
    "AnalyzerError",
    "BaseAnalyzer",
    "FetchError",
    "UnknownAnalyzerError",
    "resolve_analyzer",
]
