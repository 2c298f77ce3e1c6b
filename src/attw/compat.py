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

"""Version-tolerant symbols for Python 3.10 through current releases.

attw modules import ``StrEnum``, ``UTC`` and the newer typing helpers from
here instead of branching on ``sys.version_info`` themselves.
"""

from __future__ import annotations

import datetime as _dt
import enum as _enum
from typing import TYPE_CHECKING, cast

if TYPE_CHECKING:
    from typing_extensions import TypedDict, Unpack, override
else:
    try:
        from typing import TypedDict, override  # py>=3.12
    except ImportError:
        from typing_extensions import TypedDict, override

    try:
        from typing import Unpack  # py>=3.11
    except ImportError:
        from typing_extensions import Unpack

UTC: _dt.tzinfo = getattr(_dt, "UTC", _dt.timezone.utc)


class _StrEnumBase(str, _enum.Enum):
    """Members compare and format as their string value."""


if TYPE_CHECKING:

    class StrEnum(_StrEnumBase):
        @override
        def __str__(self) -> str: ...  # pragma: no cover

else:
    _STDLIB_STR_ENUM = getattr(_enum, "StrEnum", None)

    if _STDLIB_STR_ENUM is None:

        class StrEnum(_StrEnumBase):
            """Backport of ``enum.StrEnum`` for Python 3.10."""

            def __str__(self) -> str:
                return str(self.value)

    else:
        StrEnum = cast("type[_StrEnumBase]", _STDLIB_STR_ENUM)


__all__ = ["UTC", "StrEnum", "TypedDict", "Unpack", "override"]
