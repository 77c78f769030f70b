"""Validation protocols for type checking.

Protocols describing the callables the parse core consumes, for type
hints in code that supplies checks and error maps.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from parse_diagnostics.context import ParseContext
    from parse_diagnostics.error_map import ErrorMapContext
    from parse_diagnostics.issues import IssueData
    from parse_diagnostics.results import ParseReturn


@runtime_checkable
class CheckProtocol(Protocol):
    """A validator: inspects ``ctx.data`` and returns a (possibly pending) result.

    Problems are reported through ``add_issue_to_context``, never raised.
    """

    def __call__(self, ctx: ParseContext) -> ParseReturn[Any]: ...


@runtime_checkable
class ErrorMapProtocol(Protocol):
    """Message function: issue data plus context to message text."""

    def __call__(self, issue: IssueData, ctx: ErrorMapContext) -> str: ...
