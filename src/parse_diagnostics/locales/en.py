"""English messages for every issue kind."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from parse_diagnostics.error_map import ErrorMapContext
    from parse_diagnostics.issues import IssueData

__all__ = ["default_error_map"]


def _json(value: Any) -> str:
    return json.dumps(value, default=str)


def _joined(values: Any, separator: str = " | ") -> str:
    return separator.join(repr(v) if isinstance(v, str) else str(v) for v in values)


def _string_message(validation: str | dict[str, Any]) -> str:
    if isinstance(validation, dict):
        if "includes" in validation:
            message = f'Invalid input: must include "{validation["includes"]}"'
            position = validation.get("position")
            if isinstance(position, int):
                message += f" at one or more positions greater than or equal to {position}"
            return message
        if "starts_with" in validation:
            return f'Invalid input: must start with "{validation["starts_with"]}"'
        if "ends_with" in validation:
            return f'Invalid input: must end with "{validation["ends_with"]}"'
        return "Invalid"
    if validation != "regex":
        return f"Invalid {validation}"
    return "Invalid"


def _too_small_message(issue: Any) -> str:
    if issue.type == "array":
        qualifier = "exactly" if issue.exact else "at least" if issue.inclusive else "more than"
        return f"Array must contain {qualifier} {issue.minimum} element(s)"
    if issue.type == "string":
        qualifier = "exactly" if issue.exact else "at least" if issue.inclusive else "over"
        return f"String must contain {qualifier} {issue.minimum} character(s)"
    if issue.type == "set":
        qualifier = "exactly" if issue.exact else "at least" if issue.inclusive else "more than"
        return f"Set must contain {qualifier} {issue.minimum} element(s)"
    if issue.type in ("number", "bigint"):
        qualifier = (
            "exactly equal to "
            if issue.exact
            else "greater than or equal to "
            if issue.inclusive
            else "greater than "
        )
        return f"Number must be {qualifier}{issue.minimum}"
    if issue.type == "date":
        qualifier = (
            "exactly equal to "
            if issue.exact
            else "greater than or equal to "
            if issue.inclusive
            else "greater than "
        )
        return f"Date must be {qualifier}{issue.minimum}"
    return "Invalid input"


def _too_big_message(issue: Any) -> str:
    if issue.type == "array":
        qualifier = "exactly" if issue.exact else "at most" if issue.inclusive else "less than"
        return f"Array must contain {qualifier} {issue.maximum} element(s)"
    if issue.type == "string":
        qualifier = "exactly" if issue.exact else "at most" if issue.inclusive else "under"
        return f"String must contain {qualifier} {issue.maximum} character(s)"
    if issue.type == "set":
        qualifier = "exactly" if issue.exact else "at most" if issue.inclusive else "less than"
        return f"Set must contain {qualifier} {issue.maximum} element(s)"
    if issue.type in ("number", "bigint"):
        qualifier = (
            "exactly "
            if issue.exact
            else "less than or equal to "
            if issue.inclusive
            else "less than "
        )
        return f"Number must be {qualifier}{issue.maximum}"
    if issue.type == "date":
        qualifier = (
            "exactly "
            if issue.exact
            else "smaller than or equal to "
            if issue.inclusive
            else "smaller than "
        )
        return f"Date must be {qualifier}{issue.maximum}"
    return "Invalid input"


def default_error_map(issue: IssueData, ctx: ErrorMapContext) -> str:
    """Produce the English message for ``issue``.

    Unknown kinds fall back to ``ctx.default_error``.
    """
    code = issue.code
    if code == "invalid_type":
        if issue.received == "undefined":
            return "Required"
        return f"Expected {issue.expected.value}, received {issue.received.value}"
    if code == "invalid_literal":
        return f"Invalid literal value, expected {_json(issue.expected)}"
    if code == "unrecognized_keys":
        return f"Unrecognized key(s) in object: {', '.join(repr(k) for k in issue.keys)}"
    if code == "invalid_union":
        return "Invalid input"
    if code == "invalid_union_discriminator":
        return f"Invalid discriminator value. Expected {_joined(issue.options)}"
    if code == "invalid_enum_value":
        return (
            f"Invalid enum value. Expected {_joined(issue.options)}, "
            f"received {issue.received!r}"
        )
    if code == "invalid_arguments":
        return "Invalid function arguments"
    if code == "invalid_return_type":
        return "Invalid function return type"
    if code == "invalid_date":
        return "Invalid date"
    if code == "invalid_string":
        return _string_message(issue.validation)
    if code == "too_small":
        return _too_small_message(issue)
    if code == "too_big":
        return _too_big_message(issue)
    if code == "custom":
        return "Invalid input"
    if code == "invalid_intersection_types":
        return "Intersection results could not be merged"
    if code == "not_multiple_of":
        return f"Number must be a multiple of {issue.multiple_of}"
    if code == "not_finite":
        return "Number must be finite"
    return ctx.default_error
