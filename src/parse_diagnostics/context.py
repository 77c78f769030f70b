"""Parse context propagation.

A ParseContext is created per validation call. Every context in one
top-level validation shares the same ParseCommon record, so they all
append to one issue list and agree on whether the run is asynchronous.
Children point at their parent; parents never hold their children.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict

from parse_diagnostics.error_map import ErrorMap, default_error_map, get_error_map
from parse_diagnostics.events import (
    ObservableMixin,
    ValidationEvent,
    ValidationEventType,
    ValidationObserver,
)
from parse_diagnostics.issues import (
    Issue,
    IssueData,
    ParsedType,
    ParsePath,
    PathSegment,
    get_parsed_type,
    make_issue,
)

__all__ = [
    "ParseCommon",
    "ParseContext",
    "ParseParams",
    "add_issue_to_context",
    "create_root_context",
]


class ParseParams(BaseModel):
    """Per-call parse configuration.

    Attributes:
        path: Path prefix for every issue raised in this call.
        error_map: Call-site error map; highest priority for every issue.
        override_error_map: Replaces the process-wide override map for this
            call only. None means "use get_error_map()".
        is_async: Whether pending child results are allowed.
    """

    model_config = ConfigDict(frozen=True)

    path: ParsePath = ()
    error_map: Callable[..., str] | None = None
    override_error_map: Callable[..., str] | None = None
    is_async: bool = False


@dataclass(eq=False)
class ParseCommon(ObservableMixin):
    """State shared by reference across one top-level call tree."""

    issues: list[Issue] = field(default_factory=list)
    contextual_error_map: ErrorMap | None = None
    override_error_map: ErrorMap | None = None
    is_async: bool = False


@dataclass(frozen=True, eq=False)
class ParseContext:
    """Context for one validation call inside a call tree.

    Attributes:
        common: Record shared with every other context of the call tree.
        path: Location of ``data`` inside the top-level input.
        schema_error_map: Error map attached to the schema being checked.
        parent: Context of the enclosing call, None at the root.
        data: Input value being checked at this location.
        parsed_type: Runtime kind of ``data``.
    """

    common: ParseCommon
    path: ParsePath
    data: Any
    parsed_type: ParsedType
    schema_error_map: ErrorMap | None = None
    parent: ParseContext | None = None

    def child(
        self,
        data: Any,
        *segments: PathSegment,
        schema_error_map: ErrorMap | None = None,
    ) -> ParseContext:
        """Derive the context for a nested value.

        The child shares ``common``, extends the path by ``segments`` and
        points back at this context. Schema error maps are not inherited.
        """
        return ParseContext(
            common=self.common,
            path=(*self.path, *segments),
            data=data,
            parsed_type=get_parsed_type(data),
            schema_error_map=schema_error_map,
            parent=self,
        )

    @property
    def issues(self) -> list[Issue]:
        return self.common.issues

    @property
    def is_async(self) -> bool:
        return self.common.is_async

    @property
    def root(self) -> ParseContext:
        ctx = self
        while ctx.parent is not None:
            ctx = ctx.parent
        return ctx


def create_root_context(
    data: Any,
    params: ParseParams | None = None,
    *,
    schema_error_map: ErrorMap | None = None,
    observers: Iterable[ValidationObserver] = (),
) -> ParseContext:
    """Create the context for a top-level validation call.

    Args:
        data: The top-level input value.
        params: Call configuration. Defaults to ParseParams().
        schema_error_map: Error map of the root schema, if any.
        observers: Receive ISSUE_ADDED events for this call tree.

    Returns:
        A root ParseContext with a fresh issue list.
    """
    params = params or ParseParams()
    common = ParseCommon(
        contextual_error_map=params.error_map,
        override_error_map=params.override_error_map,
        is_async=params.is_async,
    )
    for observer in observers:
        common.add_observer(observer)
    return ParseContext(
        common=common,
        path=tuple(params.path),
        data=data,
        parsed_type=get_parsed_type(data),
        schema_error_map=schema_error_map,
    )


def add_issue_to_context(ctx: ParseContext, issue_data: IssueData | Mapping[str, Any]) -> None:
    """Record an issue against ``ctx``.

    Message resolution order: contextual map, then the schema map, then the
    override map, then the default map. The default map is left out when
    the override map is the default map itself.

    Args:
        ctx: Context of the validator reporting the problem.
        issue_data: Issue model or mapping with a ``code``.

    Raises:
        pydantic.ValidationError: If ``issue_data`` is malformed.
    """
    override_map = ctx.common.override_error_map or get_error_map()
    issue = make_issue(
        data=ctx.data,
        path=ctx.path,
        error_maps=[
            ctx.common.contextual_error_map,
            ctx.schema_error_map,
            override_map,
            None if override_map is default_error_map else default_error_map,
        ],
        issue_data=issue_data,
    )
    ctx.common.issues.append(issue)

    ctx.common.notify(
        ValidationEvent(
            event_type=ValidationEventType.ISSUE_ADDED,
            source=ctx.common,
            data={
                "issue": issue,
                "path": issue.path,
                "code": issue.code,
                "message": issue.message,
            },
        )
    )
