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

# ruff: noqa: ANN401

"""Argument parser helpers used by the attw CLI."""

from __future__ import annotations

import argparse
from typing import Any, Protocol

from attw._internal.process import consume


class ArgumentRegistrar(Protocol):
    """Interface shared by ``argparse.ArgumentParser`` and argument groups."""

    def add_argument(
        self,
        *args: Any,
        **kwargs: Any,
    ) -> argparse.Action:
        """Expose ``ArgumentParser.add_argument`` so helpers can operate generically."""
        ...  # pragma: no cover


def register_argument(
    registrar: ArgumentRegistrar,
    *args: Any,
    **kwargs: Any,
) -> None:
    """Register an argument on a parser/argument group, discarding the action handle.

    Args:
        registrar: Parser or argument group on which to register the option.
        *args: Positional flags and option strings forwarded to ``add_argument``.
        **kwargs: Keyword options forwarded to ``add_argument``.
    """
    consume(registrar.add_argument(*args, **kwargs))


def register_negatable(registrar: ArgumentRegistrar, *flags: str, help_text: str) -> None:
    """Register a ``--flag/--no-flag`` pair whose absence is recorded as ``None``.

    Short aliases such as ``-s`` set the flag. ``None`` lets the configuration
    file supply the value when neither form is given on the command line.
    """
    register_argument(registrar, *flags, action=argparse.BooleanOptionalAction, default=None, help=help_text)


__all__ = ["ArgumentRegistrar", "register_argument", "register_negatable"]
