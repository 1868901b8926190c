"""Error classification: turns a raised exception into an ErrorInfo."""

from __future__ import annotations

from dataclasses import dataclass

from errbit_notifier.backtrace import parse_backtrace, traceback_frames
from errbit_notifier.models import ErrorInfo, StackFrame


@dataclass(frozen=True)
class SimpleError:
    """An exception reported on its own, without a backtrace."""

    error: BaseException


@dataclass(frozen=True)
class ChainError:
    """An exception reported with its cause chain and backtrace.

    Attributes:
        error: The outermost exception, whose message carries the added context
        backtrace: Rendered backtrace text; taken from the exception's
            traceback when None
    """

    error: BaseException
    backtrace: str | None = None


RawError = SimpleError | ChainError


def error_type_name(error: BaseException) -> str:
    """Return the type token reported for an exception.

    Exceptions may name their own kind with a ``notice_type`` attribute;
    otherwise the class name is used. Only the first whitespace-delimited
    token is kept so collectors group notices consistently.

    Raises:
        ValueError: If the kind renders to an empty string
    """
    kind = getattr(error, "notice_type", None) or type(error).__name__
    tokens = str(kind).split()
    if not tokens:
        raise ValueError(f"{type(error)!r} reports an empty notice type")
    return tokens[0]


def root_cause(error: BaseException) -> BaseException:
    """Walk an exception chain down to its innermost cause."""
    seen = {id(error)}
    current = error
    while True:
        if current.__cause__ is not None:
            nxt = current.__cause__
        elif current.__context__ is not None and not current.__suppress_context__:
            nxt = current.__context__
        else:
            return current
        if id(nxt) in seen:
            return current
        seen.add(id(nxt))
        current = nxt


def _chain_backtrace(raw: ChainError, cause: BaseException) -> list[StackFrame]:
    if raw.backtrace is not None:
        return parse_backtrace(raw.backtrace)
    tb = cause.__traceback__ or raw.error.__traceback__
    if tb is None:
        return []
    return traceback_frames(tb)


def classify(raw: RawError) -> ErrorInfo:
    """Derive the type, message and backtrace of a notice error entry.

    Simple errors never carry a backtrace. Chain errors take their type from
    the root cause, their message from the outer error, and always carry a
    (possibly empty) backtrace.
    """
    if isinstance(raw, SimpleError):
        return ErrorInfo(type_=error_type_name(raw.error), message=str(raw.error))
    if isinstance(raw, ChainError):
        cause = root_cause(raw.error)
        return ErrorInfo(
            type_=error_type_name(cause),
            message=str(raw.error),
            backtrace=_chain_backtrace(raw, cause),
        )
    raise TypeError(f"Cannot classify {type(raw).__name__}")
