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

"""Service layer between the CLI and the core model.

``driver`` obtains the analysis, ``classify`` groups and filters its problems,
and ``strict`` turns the result into an exit status.
"""

from __future__ import annotations

from . import classify, driver, strict

__all__ = ["classify", "driver", "strict"]
