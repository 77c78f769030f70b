"""Shared fixtures, Hypothesis strategies and test validators."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any

import pytest
from hypothesis import strategies as st

from parse_diagnostics import (
    INVALID,
    UNDEFINED,
    AsyncObjectPair,
    CustomIssue,
    InvalidTypeIssue,
    ObjectPair,
    ParseContext,
    ParsedType,
    ParseReturn,
    ParseStatus,
    add_issue_to_context,
    dirty,
    ok,
    reset_error_map,
)

Check = Callable[[ParseContext], ParseReturn[Any]]

# -----------------------------------------------------------------------------
# Hypothesis Strategies
# -----------------------------------------------------------------------------

# Path segments: object keys or array indices
path_segments = st.one_of(
    st.text(min_size=1, max_size=10, alphabet=st.characters(whitelist_categories=("L", "N"))),
    st.integers(min_value=0, max_value=1000),
)

paths = st.lists(path_segments, max_size=5).map(tuple)

plain_values = st.one_of(st.integers(), st.text(max_size=20), st.booleans(), st.none())

valid_results = plain_values.map(ok)
dirty_results = plain_values.map(dirty)
aborted_results = st.just(INVALID)

non_aborted_results = st.one_of(valid_results, dirty_results)
any_results = st.one_of(valid_results, dirty_results, aborted_results)

messages = st.text(min_size=1, max_size=50)


# -----------------------------------------------------------------------------
# Test Validators
# -----------------------------------------------------------------------------


def _type_check(expected: ParsedType, *accepted: ParsedType) -> Check:
    accepted_types = {expected, *accepted}

    def check(ctx: ParseContext) -> ParseReturn[Any]:
        if ctx.parsed_type not in accepted_types:
            add_issue_to_context(
                ctx, InvalidTypeIssue(expected=expected, received=ctx.parsed_type)
            )
            return INVALID
        return ok(ctx.data)

    return check


check_string = _type_check(ParsedType.STRING)
check_integer = _type_check(ParsedType.INTEGER)


def check_coerced_integer(ctx: ParseContext) -> ParseReturn[Any]:
    """Integers pass; numeric strings are converted; other strings become 0 (dirty)."""
    if ctx.parsed_type is ParsedType.INTEGER:
        return ok(ctx.data)
    if ctx.parsed_type is ParsedType.STRING:
        if ctx.data.isdigit():
            return ok(int(ctx.data))
        add_issue_to_context(ctx, CustomIssue(message=f"Coerced {ctx.data!r} to 0"))
        return dirty(0)
    add_issue_to_context(
        ctx, InvalidTypeIssue(expected=ParsedType.INTEGER, received=ctx.parsed_type)
    )
    return INVALID


def optional(inner: Check) -> Check:
    def check(ctx: ParseContext) -> ParseReturn[Any]:
        if ctx.data is UNDEFINED:
            return ok(UNDEFINED)
        return inner(ctx)

    return check


def asynchronous(inner: Check) -> Check:
    """Wrap a sync check so it produces a pending result."""

    async def check(ctx: ParseContext) -> Any:
        return inner(ctx)

    return check


def object_check(shape: dict[str, Check], *, always_set: bool = False) -> Check:
    """Validate a mapping field by field, in ``shape`` order."""

    def check(ctx: ParseContext) -> ParseReturn[Any]:
        if ctx.parsed_type is not ParsedType.OBJECT:
            add_issue_to_context(
                ctx, InvalidTypeIssue(expected=ParsedType.OBJECT, received=ctx.parsed_type)
            )
            return INVALID

        status = ParseStatus()
        results = [
            (key, child(ctx.child(ctx.data.get(key, UNDEFINED), key)))
            for key, child in shape.items()
        ]
        if ctx.is_async:
            return ParseStatus.merge_object_async(
                status,
                [AsyncObjectPair(ok(key), value, always_set) for key, value in results],
            )
        return ParseStatus.merge_object_sync(
            status,
            [ObjectPair(ok(key), value, always_set) for key, value in results],
        )

    return check


def array_check(element: Check) -> Check:
    def check(ctx: ParseContext) -> ParseReturn[Any]:
        if ctx.parsed_type is not ParsedType.ARRAY:
            add_issue_to_context(
                ctx, InvalidTypeIssue(expected=ParsedType.ARRAY, received=ctx.parsed_type)
            )
            return INVALID

        results = [element(ctx.child(item, i)) for i, item in enumerate(ctx.data)]
        if ctx.is_async:
            return ParseStatus.merge_array_async(ParseStatus(), results)
        return ParseStatus.merge_array(ParseStatus(), results)

    return check


# -----------------------------------------------------------------------------
# Test Error Maps
# -----------------------------------------------------------------------------


class CountingErrorMap:
    """Error map that records every call and returns a fixed or default message."""

    def __init__(self, message: str | None = None, name: str = "map") -> None:
        self.message = message
        self.name = name
        self.calls: list[tuple[Any, str]] = []

    def __call__(self, issue: Any, ctx: Any) -> str:
        self.calls.append((issue, ctx.default_error))
        return self.message if self.message is not None else ctx.default_error

    @property
    def call_count(self) -> int:
        return len(self.calls)


# -----------------------------------------------------------------------------
# Pytest Fixtures
# -----------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def restore_error_map() -> Iterator[None]:
    """Keep the process-wide error map at its default between tests."""
    reset_error_map()
    yield
    reset_error_map()


@pytest.fixture
def status() -> ParseStatus:
    """Create a fresh ParseStatus."""
    return ParseStatus()


@pytest.fixture
def user_check() -> Check:
    """Object check expecting {"name": str, "age": int}."""
    return object_check({"name": check_string, "age": check_integer})
