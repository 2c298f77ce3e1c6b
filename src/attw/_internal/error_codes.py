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

"""Stable error code registry used across attw."""

from __future__ import annotations

from typing import TYPE_CHECKING, NewType

from attw.analyzers.base import AnalyzerError, FetchError, UnknownAnalyzerError
from attw.config.models import ConfigReadError, ConfigValidationError, InvalidConfigFileError
from attw.core.analysis import AnalysisPayloadError
from attw.core.vocabulary import UnknownIgnoreRuleError, VocabularyError
from attw.options import OptionConflictError
from attw.services.driver import AnalysisFailure

from .exceptions import AttwError, AttwTypeError, AttwValidationError

if TYPE_CHECKING:
    from collections.abc import Mapping

ErrorCode = NewType("ErrorCode", str)

_ERROR_CODES: dict[type[BaseException], ErrorCode] = {
    AttwError: ErrorCode("AT000"),
    AttwValidationError: ErrorCode("AT100"),
    AttwTypeError: ErrorCode("AT101"),
    VocabularyError: ErrorCode("AT110"),
    UnknownIgnoreRuleError: ErrorCode("AT111"),
    OptionConflictError: ErrorCode("AT112"),
    ConfigValidationError: ErrorCode("AT120"),
    ConfigReadError: ErrorCode("AT121"),
    InvalidConfigFileError: ErrorCode("AT122"),
    AnalyzerError: ErrorCode("AT200"),
    FetchError: ErrorCode("AT201"),
    UnknownAnalyzerError: ErrorCode("AT202"),
    AnalysisPayloadError: ErrorCode("AT203"),
    AnalysisFailure: ErrorCode("AT300"),
}


def error_code_for(exc: BaseException) -> ErrorCode:
    """Return a stable error code for a structured attw exception.

    Args:
        exc: Exception instance raised by attw code paths.

    Returns:
        Error code mapped from the exception's class hierarchy.
    """
    for cls in type(exc).__mro__:
        code = _ERROR_CODES.get(cls)
        if code:
            return code
    return ErrorCode("AT000")


def error_code_catalog() -> Mapping[str, ErrorCode]:
    """Return a stable mapping of fully-qualified exception names to error codes.

    Returns:
        Mapping of ``<module>.<ExceptionName>`` strings to error codes.
    """
    return {f"{exc_type.__module__}.{exc_type.__name__}": code for exc_type, code in _ERROR_CODES.items()}


__all__ = ["ErrorCode", "error_code_catalog", "error_code_for"]
