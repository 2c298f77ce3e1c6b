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

"""attw - are the types wrong?

Reports whether an npm package's type declarations agree with how its
JavaScript is resolved under the node10, node16 (CJS and ESM) and bundler
resolution modes. The analysis itself is delegated to an analyzer; attw
normalises options, classifies the problems found, renders the report, and
selects the exit status for CI usage.
"""

from __future__ import annotations

from ._internal.exceptions import AttwError, AttwTypeError, AttwValidationError
from .core.analysis import Analysis, Problem, TypedAnalysis, UntypedAnalysis, parse_analysis
from .core.model_types import ProblemKind, ResolutionKind
from .options import Options

__all__ = [
    "Analysis",
    "AttwError",
    "AttwTypeError",
    "AttwValidationError",
    "Options",
    "Problem",
    "ProblemKind",
    "ResolutionKind",
    "TypedAnalysis",
    "UntypedAnalysis",
    "__version__",
    "parse_analysis",
]

__version__ = "0.1.0"
