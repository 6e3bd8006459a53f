"""Nested-include-aware line source."""

from __future__ import annotations

import os
from typing import TextIO

from .exceptions import IncludeDepthError
from .filesystem import safe_read
from .models import InputFrame


class InputResolver:
    """Read lines from a stack of open sources.

    The top frame is the source currently being read. When it runs out, it is
    closed and reading resumes in the frame below, at that frame's own line.

    Args:
        max_depth: Maximum number of frames open at once.
    """

    def __init__(self, max_depth: int = 20):
        self.frames: list[InputFrame] = []
        self.max_depth = max_depth

    def open(self, name: str) -> None:
        """Open a named source and push it on the stack.

        A relative `name` opened from inside a source whose name has a
        directory part is resolved against that directory.

        Raises:
            SourceNotFoundError: If the source cannot be opened.
            IncludeDepthError: If the stack is already `max_depth` deep.
        """
        resolved = self.resolve(name)
        self._check_depth(resolved)
        self.frames.append(InputFrame(name=resolved, handle=safe_read(resolved)))

    def push(self, name: str, handle: TextIO) -> None:
        """Push an already open handle; the caller keeps ownership of it."""
        self._check_depth(name)
        self.frames.append(InputFrame(name=name, handle=handle, owned=False))

    def resolve(self, name: str) -> str:
        """Resolve `name` against the directory of the source being read.

        Absolute names, and names opened while no source is open, are returned
        unchanged.

        Examples:
            # while reading "man1/main.1"
            resolver.resolve("inc.1")  # "man1/inc.1"
        """
        if os.path.isabs(name) or not self.frames:
            return name
        directory = os.path.dirname(self.frames[-1].name)
        return os.path.join(directory, name) if directory else name

    def next_line(self) -> str | None:
        """Return the next raw line without its line ending, or None at the end."""
        while self.frames:
            frame = self.frames[-1]
            line = frame.handle.readline()
            if line:
                frame.line_number += 1
                return line.rstrip("\r\n")
            self._pop()
        return None

    def close(self) -> None:
        """Close every open frame, innermost first."""
        while self.frames:
            self._pop()

    def _pop(self) -> None:
        frame = self.frames.pop()
        if frame.owned:
            frame.handle.close()

    def _check_depth(self, name: str) -> None:
        if len(self.frames) >= self.max_depth:
            raise IncludeDepthError(name, self.max_depth)

    @property
    def location(self) -> str:
        """``name:line`` of the line most recently read."""
        if not self.frames:
            return "<eof>"
        frame = self.frames[-1]
        return f"{frame.name}:{frame.line_number}"
