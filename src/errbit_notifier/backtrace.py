"""Backtrace parsing.

A rendered backtrace is a sequence of line pairs: a function line followed
by a position line of the form ``at <file>:<line>:<column>``::

    handle_request
    at app/views.py:42:9
    dispatch
    at app/router.py:17:5

``parse_backtrace`` turns that text into StackFrame records and
``format_traceback`` renders a Python traceback in the same shape.
``traceback_frames`` builds frames from a traceback without the text round trip.
"""

import re
import traceback
from types import TracebackType

from errbit_notifier.models import StackFrame

POSITION_PREFIX = "at "

_UNSIGNED = re.compile(r"\+?[0-9]+")


def _parse_unsigned(text: str) -> int | None:
    if _UNSIGNED.fullmatch(text):
        return int(text)
    return None


def _apply_position(frame: StackFrame, position: str) -> None:
    """Fill file, line and column of a frame from ``file:line:column``.

    Fields beyond the third are ignored. A line or column that is not an
    unsigned integer is left unset.
    """
    parts = position.split(":")
    line = _parse_unsigned(parts[1]) if len(parts) > 1 else None
    column = _parse_unsigned(parts[2]) if len(parts) > 2 else None
    if parts[0]:
        frame.file = parts[0]
    if line is not None:
        frame.line = line
    if column is not None:
        frame.column = column


def parse_backtrace(raw: str) -> list[StackFrame]:
    """Parse a rendered backtrace into stack frames.

    Each position line closes the frame started by the preceding function
    line. A function line directly followed by another function line is
    dropped; only the last line of the input is flushed without a position.

    Args:
        raw: Newline-separated backtrace text

    Returns:
        Frames in input order, never containing an empty frame
    """
    frames: list[StackFrame] = []
    pending = StackFrame()

    for line in raw.split("\n"):
        line = line.strip()
        if not line:
            continue

        if line.startswith(POSITION_PREFIX):
            _apply_position(pending, line[len(POSITION_PREFIX) :])
            if not pending.is_empty():
                frames.append(pending)
            pending = StackFrame()
        else:
            # Replaces, and so drops, a function line that never got a position
            pending = StackFrame(function=line)

    if not pending.is_empty():
        frames.append(pending)

    return frames


def format_traceback(tb: TracebackType | None) -> str:
    """Render a traceback as backtrace text, innermost frame first.

    Columns are 1-based and only written when the interpreter recorded them.
    """
    lines: list[str] = []
    for summary in reversed(traceback.extract_tb(tb)):
        lines.append(summary.name)
        position = f"{POSITION_PREFIX}{summary.filename}"
        if summary.lineno is not None:
            position += f":{summary.lineno}"
            colno = getattr(summary, "colno", None)
            if colno is not None:
                position += f":{colno + 1}"
        lines.append(position)
    return "\n".join(lines)


def traceback_frames(tb: TracebackType | None) -> list[StackFrame]:
    """Build stack frames straight from a traceback, innermost frame first.

    Unlike ``parse_backtrace(format_traceback(tb))`` this keeps file names
    containing ``:`` (such as Windows drive paths) intact.
    """
    frames: list[StackFrame] = []
    for summary in reversed(traceback.extract_tb(tb)):
        frame = StackFrame(function=summary.name)
        if summary.filename:
            frame.file = summary.filename
        if summary.lineno is not None:
            frame.line = summary.lineno
            colno = getattr(summary, "colno", None)
            if colno is not None:
                frame.column = colno + 1
        frames.append(frame)
    return frames
