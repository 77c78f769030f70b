"""Exception carrying every issue of a failed validation.

Validators never raise this. It is built by the top-level entry points
from the accumulated issue list and offers flat and nested views of the
diagnostics for rendering.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any

from parse_diagnostics.issues import Issue

__all__ = ["FlattenedErrors", "ParseError"]


def _message(issue: Issue) -> Any:
    return issue.message


@dataclass
class FlattenedErrors:
    """Issues split into top-level (form) errors and per-field errors.

    Attributes:
        form_errors: Mapped issues whose path is empty.
        field_errors: Mapped issues keyed by their first path segment.
    """

    form_errors: list[Any] = field(default_factory=list)
    field_errors: dict[str | int, list[Any]] = field(default_factory=dict)


class ParseError(Exception):
    """A validation failed; ``issues`` lists every problem found.

    Example:
        try:
            value = parse(check, payload)
        except ParseError as exc:
            for issue in exc.issues:
                print(issue.path, issue.message)
            print(exc.flatten().field_errors)
    """

    def __init__(self, issues: Iterable[Issue] = ()) -> None:
        self.issues: list[Issue] = list(issues)
        super().__init__(self.issues)

    @property
    def errors(self) -> list[Issue]:
        return self.issues

    @property
    def is_empty(self) -> bool:
        return not self.issues

    def add_issue(self, issue: Issue) -> None:
        self.issues.append(issue)

    def add_issues(self, issues: Iterable[Issue]) -> None:
        self.issues.extend(issues)

    def flatten(self, mapper: Callable[[Issue], Any] = _message) -> FlattenedErrors:
        """Group mapped issues by their first path segment.

        Args:
            mapper: Applied to each issue. Defaults to its message.

        Returns:
            FlattenedErrors with root-level issues under ``form_errors``.
        """
        flattened = FlattenedErrors()
        for issue in self.issues:
            if issue.path:
                flattened.field_errors.setdefault(issue.path[0], []).append(mapper(issue))
            else:
                flattened.form_errors.append(mapper(issue))
        return flattened

    def format(self, mapper: Callable[[Issue], Any] = _message) -> dict[Any, Any]:
        """Build a tree mirroring the input, with ``_errors`` at each node.

        Union, argument and return-type issues are expanded into the
        issues of the nested errors they carry.

        Args:
            mapper: Applied to each issue. Defaults to its message.

        Returns:
            Nested dict; every node has an ``_errors`` list.
        """
        tree: dict[Any, Any] = {"_errors": []}

        def process(error: ParseError) -> None:
            for issue in error.issues:
                nested = _nested_errors(issue)
                if nested:
                    for nested_error in nested:
                        process(nested_error)
                elif not issue.path:
                    tree["_errors"].append(mapper(issue))
                else:
                    node = tree
                    for i, segment in enumerate(issue.path):
                        node = node.setdefault(segment, {"_errors": []})
                        if i == len(issue.path) - 1:
                            node["_errors"].append(mapper(issue))

        process(self)
        return tree

    def __str__(self) -> str:
        return json.dumps(
            [issue.model_dump(exclude_none=True) for issue in self.issues],
            indent=2,
            default=str,
        )

    def __repr__(self) -> str:
        return f"ParseError(issues={len(self.issues)})"


def _nested_errors(issue: Issue) -> list[ParseError]:
    if issue.code == "invalid_union":
        return [e for e in issue.union_errors if isinstance(e, ParseError)]
    if issue.code == "invalid_arguments" and isinstance(issue.arguments_error, ParseError):
        return [issue.arguments_error]
    if issue.code == "invalid_return_type" and isinstance(issue.return_type_error, ParseError):
        return [issue.return_type_error]
    return []
