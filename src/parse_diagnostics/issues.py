"""Structured diagnostics.

Each kind of problem a validator can report is a frozen pydantic model
discriminated by its ``code`` field. The same models serve as raw issue
data (``message`` unset, ``path`` relative to the reporting context) and
as resolved issues (``message`` set, ``path`` absolute).
"""

from __future__ import annotations

import math
from collections.abc import Awaitable, Callable, Mapping, Sequence
from datetime import date, datetime
from enum import Enum
from typing import TYPE_CHECKING, Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from parse_diagnostics.error_map import ErrorMapContext
from parse_diagnostics.results import UNDEFINED

if TYPE_CHECKING:
    from parse_diagnostics.error_map import ErrorMap

__all__ = [
    "CustomIssue",
    "InvalidArgumentsIssue",
    "InvalidDateIssue",
    "InvalidEnumValueIssue",
    "InvalidIntersectionTypesIssue",
    "InvalidLiteralIssue",
    "InvalidReturnTypeIssue",
    "InvalidStringIssue",
    "InvalidTypeIssue",
    "InvalidUnionDiscriminatorIssue",
    "InvalidUnionIssue",
    "Issue",
    "IssueData",
    "NotFiniteIssue",
    "NotMultipleOfIssue",
    "ParsePath",
    "ParsedType",
    "TooBigIssue",
    "TooSmallIssue",
    "UnrecognizedKeysIssue",
    "coerce_issue_data",
    "get_parsed_type",
    "make_issue",
]

PathSegment = Union[str, int]
ParsePath = tuple[PathSegment, ...]


class ParsedType(str, Enum):
    """Runtime kind of an input value."""

    STRING = "string"
    NAN = "nan"
    NUMBER = "number"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    DATE = "date"
    BYTES = "bytes"
    UNDEFINED = "undefined"
    NULL = "null"
    ARRAY = "array"
    OBJECT = "object"
    UNKNOWN = "unknown"
    PROMISE = "promise"
    FUNCTION = "function"
    SET = "set"
    MAP = "map"
    NEVER = "never"
    VOID = "void"


def get_parsed_type(data: Any) -> ParsedType:
    """Classify a Python value into a ParsedType."""
    if data is UNDEFINED:
        return ParsedType.UNDEFINED
    if data is None:
        return ParsedType.NULL
    # bool before int: bool is an int subclass
    if isinstance(data, bool):
        return ParsedType.BOOLEAN
    if isinstance(data, int):
        return ParsedType.INTEGER
    if isinstance(data, float):
        return ParsedType.NAN if math.isnan(data) else ParsedType.FLOAT
    if isinstance(data, str):
        return ParsedType.STRING
    if isinstance(data, (bytes, bytearray)):
        return ParsedType.BYTES
    if isinstance(data, (datetime, date)):
        return ParsedType.DATE
    if isinstance(data, (set, frozenset)):
        return ParsedType.SET
    if isinstance(data, (list, tuple)):
        return ParsedType.ARRAY
    if isinstance(data, Mapping):
        return ParsedType.OBJECT
    if isinstance(data, Awaitable):
        return ParsedType.PROMISE
    if callable(data):
        return ParsedType.FUNCTION
    return ParsedType.UNKNOWN


class _IssueBase(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    path: ParsePath = ()
    message: str | None = None
    fatal: bool | None = None


class InvalidTypeIssue(_IssueBase):
    code: Literal["invalid_type"] = "invalid_type"
    expected: ParsedType
    received: ParsedType


class InvalidLiteralIssue(_IssueBase):
    code: Literal["invalid_literal"] = "invalid_literal"
    expected: Any


class UnrecognizedKeysIssue(_IssueBase):
    code: Literal["unrecognized_keys"] = "unrecognized_keys"
    keys: tuple[str, ...]


class InvalidUnionIssue(_IssueBase):
    code: Literal["invalid_union"] = "invalid_union"
    union_errors: tuple[Any, ...] = ()


class InvalidUnionDiscriminatorIssue(_IssueBase):
    code: Literal["invalid_union_discriminator"] = "invalid_union_discriminator"
    options: tuple[Any, ...]


class InvalidEnumValueIssue(_IssueBase):
    code: Literal["invalid_enum_value"] = "invalid_enum_value"
    options: tuple[Any, ...]
    received: Any


class InvalidArgumentsIssue(_IssueBase):
    code: Literal["invalid_arguments"] = "invalid_arguments"
    arguments_error: Any = None


class InvalidReturnTypeIssue(_IssueBase):
    code: Literal["invalid_return_type"] = "invalid_return_type"
    return_type_error: Any = None


class InvalidDateIssue(_IssueBase):
    code: Literal["invalid_date"] = "invalid_date"


class InvalidStringIssue(_IssueBase):
    """``validation`` is a check name ("email", "regex", ...) or a mapping
    with one of ``includes``/``starts_with``/``ends_with``."""

    code: Literal["invalid_string"] = "invalid_string"
    validation: str | dict[str, Any]


SizedType = Literal["array", "string", "number", "set", "date", "bigint"]


class TooSmallIssue(_IssueBase):
    code: Literal["too_small"] = "too_small"
    type: SizedType
    minimum: Any
    inclusive: bool
    exact: bool = False


class TooBigIssue(_IssueBase):
    code: Literal["too_big"] = "too_big"
    type: SizedType
    maximum: Any
    inclusive: bool
    exact: bool = False


class InvalidIntersectionTypesIssue(_IssueBase):
    code: Literal["invalid_intersection_types"] = "invalid_intersection_types"


class NotMultipleOfIssue(_IssueBase):
    code: Literal["not_multiple_of"] = "not_multiple_of"
    multiple_of: int | float


class NotFiniteIssue(_IssueBase):
    code: Literal["not_finite"] = "not_finite"


class CustomIssue(_IssueBase):
    code: Literal["custom"] = "custom"
    params: dict[str, Any] = Field(default_factory=dict)


IssueData = Annotated[
    Union[
        InvalidTypeIssue,
        InvalidLiteralIssue,
        UnrecognizedKeysIssue,
        InvalidUnionIssue,
        InvalidUnionDiscriminatorIssue,
        InvalidEnumValueIssue,
        InvalidArgumentsIssue,
        InvalidReturnTypeIssue,
        InvalidDateIssue,
        InvalidStringIssue,
        TooSmallIssue,
        TooBigIssue,
        InvalidIntersectionTypesIssue,
        NotMultipleOfIssue,
        NotFiniteIssue,
        CustomIssue,
    ],
    Field(discriminator="code"),
]

# Same shapes; an Issue is IssueData whose message has been resolved.
Issue = IssueData

_issue_data_adapter: TypeAdapter[Any] = TypeAdapter(IssueData)


def coerce_issue_data(raw: IssueData | Mapping[str, Any]) -> IssueData:
    """Return ``raw`` as an issue model.

    Raises:
        pydantic.ValidationError: If a mapping lacks a known ``code`` or the
            payload fields its kind requires.
    """
    if isinstance(raw, _IssueBase):
        return raw
    return _issue_data_adapter.validate_python(dict(raw))


def make_issue(
    data: Any,
    path: Sequence[PathSegment],
    error_maps: Sequence[ErrorMap | None],
    issue_data: IssueData | Mapping[str, Any],
) -> Issue:
    """Build a resolved issue.

    The full path is ``path`` followed by the issue data's own path. An
    explicit message on the issue data is used as-is. Otherwise the error
    maps, given in priority order, are called lowest priority first; each
    receives the previous message as its default, so the highest-priority
    map has the final say.

    Args:
        data: Input value at the reporting context, handed to each map.
        path: Path of the reporting context.
        error_maps: Message functions in priority order. None entries are
            skipped.
        issue_data: Raw issue (model or mapping).

    Returns:
        The issue with absolute path and resolved message.
    """
    issue_data = coerce_issue_data(issue_data)
    full_path = (*path, *issue_data.path)
    full_issue = issue_data.model_copy(update={"path": full_path})

    if issue_data.message is not None:
        return full_issue

    error_message = ""
    maps: list[Callable[..., str]] = [m for m in error_maps if m]
    for error_map in reversed(maps):
        error_message = error_map(
            full_issue, ErrorMapContext(data=data, default_error=error_message)
        )

    return full_issue.model_copy(update={"message": error_message})
