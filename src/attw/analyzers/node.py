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

"""Builtin analyzer backed by the ``@arethetypeswrong/core`` Node package.

The analyzer runs a short ES module through ``node`` which calls
``checkPackage``/``checkTgz`` and prints a single JSON envelope on stdout:

* ``{"ok": true, "analysis": {...}}`` where typed analyses carry the result of
  ``getProblems`` under ``problems``. The per entry point resolutions stay
  under ``entrypointResolutions`` when the core provides them and are
  otherwise rebuilt from ``entrypoints``;
* ``{"ok": false, "error": {"name": ..., "message": ..., "code": ...}}``.

``@arethetypeswrong/core`` must be resolvable from the working directory.
"""

from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Callable, Mapping
from pathlib import Path
from textwrap import dedent
from typing import TYPE_CHECKING, ClassVar, Final, cast

from attw._internal.logging_utils import structured_extra
from attw._internal.process import CommandOutput, run_command
from attw.core.analysis import parse_analysis
from attw.core.model_types import LogComponent
from attw.json import as_mapping, require_json

from .base import AnalyzerError, BaseAnalyzer, FetchError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from attw.core.analysis import Analysis

logger: logging.Logger = logging.getLogger("attw.analyzer")

NODE_EXECUTABLE_ENV: Final[str] = "ATTW_NODE"
FETCH_ERROR_NAME: Final[str] = "FetchError"

BRIDGE_SCRIPT: Final[str] = dedent(
    """\
    const [mode, target, version] = process.argv.slice(1);
    const write = (payload) => process.stdout.write(JSON.stringify(payload));
    try {
      const core = await import("@arethetypeswrong/core");
      let analysis;
      if (mode === "tgz") {
        const { readFile } = await import("node:fs/promises");
        analysis = await core.checkTgz(new Uint8Array(await readFile(target)));
      } else {
        analysis = await core.checkPackage(target, version || undefined);
      }
      if (analysis.containsTypes) {
        const entrypointResolutions = analysis.entrypointResolutions ?? Object.fromEntries(
          Object.entries(analysis.entrypoints ?? {}).map(([subpath, info]) => [subpath, info.resolutions]),
        );
        analysis = { ...analysis, entrypointResolutions, problems: core.getProblems(analysis) };
      }
      write({ ok: true, analysis });
    } catch (error) {
      write({
        ok: false,
        error: {
          name: error?.name ?? "Error",
          message: error?.message ?? String(error),
          code: typeof error?.code === "string" ? error.code : null,
        },
      });
    }
    """,
)

CommandRunner = Callable[["Iterable[str]"], CommandOutput]


class NodeAnalyzer(BaseAnalyzer):
    """Analyzer that delegates to ``@arethetypeswrong/core`` through ``node``."""

    name: ClassVar[str] = "node"

    def __init__(
        self,
        executable: str | None = None,
        *,
        runner: CommandRunner = run_command,
    ) -> None:
        """Create the analyzer.

        Args:
            executable: Node executable; defaults to ``$ATTW_NODE`` or ``node``.
            runner: Command runner, replaceable in tests.
        """
        self._executable = executable
        self._runner = runner

    @property
    def executable(self) -> str:
        return self._executable or os.environ.get(NODE_EXECUTABLE_ENV) or "node"

    def check_package(self, name: str, version: str | None = None) -> Analysis:
        args = ["package", name]
        if version:
            args.append(version)
        return self._run(args)

    def check_tgz(self, data: bytes) -> Analysis:
        handle = tempfile.NamedTemporaryFile(prefix="attw-", suffix=".tgz", delete=False)  # noqa: SIM115
        archive = Path(handle.name)
        try:
            with handle:
                _ = handle.write(data)
            return self._run(["tgz", str(archive)])
        finally:
            archive.unlink(missing_ok=True)

    def _run(self, bridge_args: list[str]) -> Analysis:
        argv = [self.executable, "--input-type=module", "-e", BRIDGE_SCRIPT, "--", *bridge_args]
        try:
            output = self._runner(argv)
        except FileNotFoundError as exc:
            message = f"Node.js executable '{self.executable}' was not found"
            raise AnalyzerError(message, code="ENOENT") from exc
        logger.debug(
            "Analyzer bridge finished (exit=%s)",
            output.exit_code,
            extra=structured_extra(
                LogComponent.ANALYZER,
                analyzer=self.name,
                duration_ms=output.duration_ms,
                exit_code=output.exit_code,
            ),
        )
        envelope = self._decode(output)
        if envelope.get("ok") is True:
            payload = envelope.get("analysis")
            if not isinstance(payload, dict):
                message = "Analyzer response did not include an analysis object"
                raise AnalyzerError(message)
            return parse_analysis(cast("Mapping[str, object]", payload))
        raise _error_from_envelope(as_mapping(envelope.get("error")))

    @staticmethod
    def _decode(output: CommandOutput) -> Mapping[str, object]:
        try:
            return require_json(output.stdout)
        except ValueError as exc:
            detail = output.stderr.strip() or f"analyzer exited with status {output.exit_code}"
            raise AnalyzerError(detail) from exc


def _error_from_envelope(error: Mapping[str, object]) -> AnalyzerError:
    message = error.get("message")
    text = message if isinstance(message, str) and message else "Analyzer reported an unknown error"
    code = error.get("code")
    code_text = code if isinstance(code, str) and code else None
    if error.get("name") == FETCH_ERROR_NAME:
        return FetchError(text, code=code_text)
    return AnalyzerError(text, code=code_text)


__all__ = ["BRIDGE_SCRIPT", "NODE_EXECUTABLE_ENV", "NodeAnalyzer"]
