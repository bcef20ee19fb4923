"""Short stack excerpts for diagnostic output.

Frames are listed most recent call first and rendered as::

    #0 argparse.py:1650 ArgumentParser::_handle_conflict_error()
"""

from __future__ import annotations

import traceback
from dataclasses import dataclass
from pathlib import Path

__all__ = ["StackFrame", "extract_frames", "exception_origin", "DEFAULT_FRAME_LIMIT"]

DEFAULT_FRAME_LIMIT = 5


@dataclass(frozen=True)
class StackFrame:
    """One frame of a stack excerpt."""

    index: int
    filename: str
    lineno: int
    function: str
    type_name: str = ""

    def format(self) -> str:
        owner = f"{self.type_name}::" if self.type_name else ""
        return f"#{self.index} {Path(self.filename).name}:{self.lineno} {owner}{self.function}()"


def _owner_type(frame) -> str:
    """Name of the class a frame's function was called on, if any."""
    local_vars = frame.f_locals
    if "self" in local_vars:
        return type(local_vars["self"]).__name__
    cls = local_vars.get("cls")
    if isinstance(cls, type):
        return cls.__name__
    return ""


def extract_frames(exc: BaseException, limit: int = DEFAULT_FRAME_LIMIT) -> list[StackFrame]:
    """Top ``limit`` frames of an exception's traceback, innermost first."""
    if limit <= 0:
        return []

    entries = list(traceback.walk_tb(exc.__traceback__))
    entries.reverse()

    frames = []
    for index, (frame, lineno) in enumerate(entries[:limit]):
        code = frame.f_code
        frames.append(
            StackFrame(
                index=index,
                filename=code.co_filename or "unknown",
                lineno=lineno or 0,
                function=code.co_name or "unknown",
                type_name=_owner_type(frame),
            )
        )
    return frames


def exception_origin(exc: BaseException) -> tuple[str, int]:
    """File and line where an exception was raised."""
    entries = list(traceback.walk_tb(exc.__traceback__))
    if not entries:
        return "unknown", 0
    frame, lineno = entries[-1]
    return frame.f_code.co_filename, lineno
