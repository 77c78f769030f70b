"""Parse result containers.

Three outcome shapes for a validated value (Ok, Dirty, Invalid), the
status lattice they share, and predicates usable on both synchronous
and pending (awaitable) results.
"""

from __future__ import annotations

import inspect
from collections.abc import Awaitable
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Generic, TypeVar, Union

__all__ = [
    "INVALID",
    "UNDEFINED",
    "Dirty",
    "Invalid",
    "Ok",
    "ParseReturn",
    "Status",
    "SyncParseReturn",
    "dirty",
    "invalid",
    "is_aborted",
    "is_async",
    "is_dirty",
    "is_valid",
    "ok",
    "result_for",
]

T = TypeVar("T")


class Status(str, Enum):
    """Outcome of a (sub-)validation, ordered VALID < DIRTY < ABORTED."""

    VALID = "valid"
    DIRTY = "dirty"
    ABORTED = "aborted"

    @property
    def rank(self) -> int:
        return _RANKS[self]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Status):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Status):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Status):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Status):
            return NotImplemented
        return self.rank >= other.rank


_RANKS = {Status.VALID: 0, Status.DIRTY: 1, Status.ABORTED: 2}


class _Undefined:
    """Marker for "no value produced", as opposed to an explicit None."""

    _instance: ClassVar[_Undefined | None] = None

    def __new__(cls) -> _Undefined:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __reduce__(self) -> str:
        return "UNDEFINED"


UNDEFINED: Any = _Undefined()


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful result carrying a value."""

    value: T
    status: ClassVar[Status] = Status.VALID


@dataclass(frozen=True)
class Dirty(Generic[T]):
    """Usable value with at least one issue recorded in its subtree."""

    value: T
    status: ClassVar[Status] = Status.DIRTY


@dataclass(frozen=True)
class Invalid:
    """Unrecoverable result. Carries no value; all instances are equal."""

    status: ClassVar[Status] = Status.ABORTED

    @property
    def value(self) -> Any:
        return UNDEFINED


INVALID = Invalid()

SyncParseReturn = Union[Ok[T], Dirty[T], Invalid]
ParseReturn = Union[SyncParseReturn[T], Awaitable[SyncParseReturn[T]]]


def ok(value: T) -> Ok[T]:
    return Ok(value)


def dirty(value: T) -> Dirty[T]:
    return Dirty(value)


def invalid() -> Invalid:
    return INVALID


def result_for(status: Status, value: T) -> SyncParseReturn[T]:
    """Build the result shape matching ``status``.

    An aborted status has no usable value, so it always maps to INVALID.
    """
    if status is Status.ABORTED:
        return INVALID
    if status is Status.DIRTY:
        return Dirty(value)
    return Ok(value)


def is_aborted(result: ParseReturn[Any]) -> bool:
    return getattr(result, "status", None) is Status.ABORTED


def is_dirty(result: ParseReturn[Any]) -> bool:
    return getattr(result, "status", None) is Status.DIRTY


def is_valid(result: ParseReturn[Any]) -> bool:
    return getattr(result, "status", None) is Status.VALID


def is_async(result: ParseReturn[Any]) -> bool:
    """Check whether a result is still pending (awaitable)."""
    return inspect.isawaitable(result)
