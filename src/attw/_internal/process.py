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

"""Subprocess helpers and typed command wrappers."""

from __future__ import annotations

import logging
import subprocess  # noqa: S404  # JUSTIFIED: centralised wrapper for subprocess execution
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

from attw._internal.logging_utils import structured_extra
from attw.core.model_types import LogComponent

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

logger: logging.Logger = logging.getLogger("attw.analyzer")

__all__ = ["CommandOutput", "consume", "run_command"]


def consume(value: object | None) -> None:
    """Explicitly mark a value as intentionally unused."""
    _ = value


@dataclass(slots=True)
class CommandOutput:
    args: list[str]
    stdout: str
    stderr: str
    exit_code: int
    duration_ms: float


def run_command(
    args: Iterable[str],
    cwd: Path | None = None,
) -> CommandOutput:
    """Run a subprocess and return its captured output.

    Never uses ``shell=True``; the first argument is the executable.

    Args:
        args: Command line to execute.
        cwd: Optional working directory for the child process.

    Returns:
        ``CommandOutput`` containing the executed argument vector along with the
        captured stdout/stderr, exit code, and duration in milliseconds.

    Raises:
        ValueError: If ``args`` is empty.
        TypeError: If any argument is falsy (for example ``""``).
        FileNotFoundError: If the executable cannot be found.
    """
    argv = list(args)
    if not argv:
        raise ValueError
    if not all(a for a in argv):
        raise TypeError
    start = time.perf_counter()
    logger.debug(
        "Executing command: %s",
        argv[0],
        extra=structured_extra(LogComponent.ANALYZER, details={"cwd": str(cwd) if cwd else None}),
    )
    completed = subprocess.run(  # noqa: S603 - command arguments provided by caller
        argv,
        check=False,
        cwd=str(cwd) if cwd else None,
        capture_output=True,
        text=True,
        encoding="utf-8",
    )
    duration_ms = (time.perf_counter() - start) * 1000
    if completed.returncode != 0:
        logger.warning(
            "Command failed (exit=%s): %s",
            completed.returncode,
            argv[0],
            extra=structured_extra(LogComponent.ANALYZER, exit_code=completed.returncode),
        )
    return CommandOutput(
        args=argv,
        stdout=completed.stdout,
        stderr=completed.stderr,
        exit_code=completed.returncode,
        duration_ms=duration_ms,
    )
