"""Process-wide error map registry.

An error map turns issue data into a human-readable message. The
registry holds the override consulted for every issue raised; it starts
out as the English default and can be replaced at configuration time.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from parse_diagnostics.locales.en import default_error_map

if TYPE_CHECKING:
    from parse_diagnostics.issues import IssueData

__all__ = [
    "ErrorMap",
    "ErrorMapContext",
    "default_error_map",
    "get_error_map",
    "reset_error_map",
    "set_error_map",
]


@dataclass(frozen=True)
class ErrorMapContext:
    """What an error map sees besides the issue itself.

    Attributes:
        data: Input value at the context that reported the issue.
        default_error: Message produced by the next lower-priority map
            (empty string for the lowest).
    """

    data: Any
    default_error: str


ErrorMap = Callable[["IssueData", ErrorMapContext], str]

_override_error_map: ErrorMap = default_error_map


def set_error_map(error_map: ErrorMap) -> None:
    """Replace the global override error map.

    Not synchronized: call at configuration time, not while validations
    are in flight.
    """
    global _override_error_map
    _override_error_map = error_map


def get_error_map() -> ErrorMap:
    """Return the current global override error map."""
    return _override_error_map


def reset_error_map() -> None:
    """Restore the English default as the global override."""
    set_error_map(default_error_map)
