"""Wall-clock timing of named code sections."""

from __future__ import annotations

import sys
import time
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TextIO


class Profiler:
    """Times named sections and reports their duration in milliseconds."""

    def __init__(self, stream: TextIO | None = None):
        self._stream = stream
        self._starts: dict[str, float] = {}

    def _write(self, message: str) -> None:
        stream = sys.stdout if self._stream is None else self._stream
        print(message, file=stream, flush=True)

    def begin_timing(self, section_name: str) -> None:
        """Start (or restart) the clock for ``section_name``."""
        self._starts[section_name] = time.perf_counter()

    def end_timing(self, section_name: str) -> int | None:
        """Report the whole milliseconds since the section began.

        Returns the duration, or None when the section was never begun.
        """
        start = self._starts.get(section_name)
        if start is None:
            self._write(f"Section: [ {section_name} ] not found")
            return None
        elapsed_ms = int((time.perf_counter() - start) * 1000)
        self._write(f"Section: [ {section_name} ] took {elapsed_ms} ms.")
        return elapsed_ms

    @contextmanager
    def section(self, section_name: str) -> Iterator[None]:
        """Time the body of a ``with`` block."""
        self.begin_timing(section_name)
        try:
            yield
        finally:
            self.end_timing(section_name)