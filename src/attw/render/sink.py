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

"""Output sinks receiving rendered report lines."""

from __future__ import annotations

from typing import Protocol

from attw._internal.process import consume


class TextStream(Protocol):
    def write(self, s: str, /) -> int: ...


class OutputSink(Protocol):
    """Destination for rendered report output."""

    def write_line(self, text: str = "") -> None:
        """Write ``text`` followed by a newline."""
        ...  # pragma: no cover


class StreamSink:
    """Sink writing to a text stream such as ``sys.stdout``."""

    def __init__(self, stream: TextStream) -> None:
        self._stream = stream

    def write_line(self, text: str = "") -> None:
        consume(self._stream.write(text))
        consume(self._stream.write("\n"))


class DiscardSink:
    """Sink that drops everything; bound for ``--quiet``."""

    def write_line(self, text: str = "") -> None:
        consume(text)


__all__ = ["DiscardSink", "OutputSink", "StreamSink", "TextStream"]
