"""End-to-end tests for the top-level entry points."""

from __future__ import annotations

from typing import Any

import pytest

from parse_diagnostics import (
    INVALID,
    UNDEFINED,
    ParseContext,
    ParseError,
    ParseParams,
    ParseRunner,
    Status,
    ValidationEvent,
    ValidationEventType,
    add_issue_to_context,
    ok,
    parse,
    parse_async,
    safe_parse,
    safe_parse_async,
)

from .conftest import (
    CountingErrorMap,
    array_check,
    asynchronous,
    check_coerced_integer,
    check_integer,
    check_string,
    object_check,
    optional,
)


class RecordingObserver:
    """Observer that records all events for testing."""

    def __init__(self) -> None:
        self.events: list[ValidationEvent] = []

    def on_event(self, event: ValidationEvent) -> None:
        self.events.append(event)

    @property
    def event_types(self) -> list[ValidationEventType]:
        return [e.event_type for e in self.events]


# =============================================================================
# Synchronous Scenarios
# =============================================================================


class TestSafeParse:
    def test_valid_object(self, user_check: Any) -> None:
        outcome = safe_parse(user_check, {"name": "Ada", "age": 36})

        assert outcome.success
        assert outcome.status is Status.VALID
        assert outcome.data == {"name": "Ada", "age": 36}
        assert outcome.issues == []
        assert outcome.error is None

    def test_wrong_field_type_aborts_with_one_issue(self) -> None:
        check = object_check({"name": check_string})

        outcome = safe_parse(check, {"name": 123})

        assert outcome.status is Status.ABORTED
        assert not outcome.success
        assert outcome.data is UNDEFINED
        assert len(outcome.issues) == 1
        issue = outcome.issues[0]
        assert issue.path == ("name",)
        assert issue.code == "invalid_type"
        assert issue.message == "Expected string, received integer"

    def test_dirty_array_keeps_coerced_values(self) -> None:
        outcome = safe_parse(array_check(check_coerced_integer), [1, "x", 3])

        assert outcome.status is Status.DIRTY
        assert outcome.data == [1, 0, 3]
        assert not outcome.success
        assert [i.path for i in outcome.issues] == [(1,)]

    def test_all_issues_reported_not_just_first(self, user_check: Any) -> None:
        outcome = safe_parse(array_check(user_check), [{"name": 1, "age": "x"}, {"name": "ok"}])

        assert [(i.path, i.message) for i in outcome.issues] == [
            ((0, "name"), "Expected string, received integer"),
            ((0, "age"), "Expected integer, received string"),
            ((1, "age"), "Required"),
        ]

    def test_optional_field_omitted_from_output(self) -> None:
        check = object_check({"name": check_string, "nick": optional(check_string)})

        outcome = safe_parse(check, {"name": "Ada"})

        assert outcome.data == {"name": "Ada"}

    def test_always_set_keeps_missing_optional(self) -> None:
        check = object_check({"nick": optional(check_string)}, always_set=True)

        outcome = safe_parse(check, {})

        assert outcome.data == {"nick": UNDEFINED}

    def test_proto_key_never_copied(self) -> None:
        check = object_check({"__proto__": check_string, "name": check_string})

        outcome = safe_parse(check, {"__proto__": "x", "name": "y"})

        assert outcome.success
        assert outcome.data == {"name": "y"}

    def test_params_path_prefixes_issues(self) -> None:
        outcome = safe_parse(check_string, 1, ParseParams(path=("body",)))

        assert outcome.issues[0].path == ("body",)

    def test_contextual_error_map_applies(self) -> None:
        outcome = safe_parse(
            check_string, 1, ParseParams(error_map=CountingErrorMap("call-site"))
        )

        assert outcome.issues[0].message == "call-site"

    def test_pending_result_in_sync_mode_is_an_error(self) -> None:
        with pytest.raises(RuntimeError, match="safe_parse_async"):
            safe_parse(asynchronous(check_string), "x")

    def test_failure_without_issues_is_an_error(self) -> None:
        def broken(ctx: ParseContext) -> Any:
            return INVALID

        with pytest.raises(RuntimeError, match="no issues"):
            safe_parse(broken, 1)

    def test_error_collects_issues(self, user_check: Any) -> None:
        outcome = safe_parse(user_check, {"name": 1, "age": 2})

        error = outcome.error
        assert isinstance(error, ParseError)
        assert error.issues == outcome.issues


class TestParse:
    def test_returns_value(self) -> None:
        assert parse(check_integer, 5) == 5

    def test_raises_parse_error(self, user_check: Any) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse(user_check, {"name": 1, "age": 1})

        assert len(exc_info.value.issues) == 1
        assert exc_info.value.issues[0].path == ("name",)

    def test_dirty_raises(self) -> None:
        with pytest.raises(ParseError):
            parse(array_check(check_coerced_integer), ["x"])


# =============================================================================
# Asynchronous Scenarios
# =============================================================================


class TestSafeParseAsync:
    @pytest.mark.asyncio
    async def test_async_object_matches_sync(self) -> None:
        sync_check = object_check({"name": check_string, "age": check_integer})
        async_check = object_check(
            {"name": asynchronous(check_string), "age": asynchronous(check_integer)}
        )
        data = {"name": 1, "age": "x"}

        sync_outcome = safe_parse(sync_check, data)
        async_outcome = await safe_parse_async(async_check, data)

        assert async_outcome.status is sync_outcome.status
        assert async_outcome.issues == sync_outcome.issues

    @pytest.mark.asyncio
    async def test_async_dirty_array(self) -> None:
        check = array_check(asynchronous(check_coerced_integer))

        outcome = await safe_parse_async(check, [1, "x", 3])

        assert outcome.status is Status.DIRTY
        assert outcome.data == [1, 0, 3]

    @pytest.mark.asyncio
    async def test_sync_checks_run_in_async_mode(self, user_check: Any) -> None:
        outcome = await safe_parse_async(user_check, {"name": "Ada", "age": 1})

        assert outcome.success
        assert outcome.data == {"name": "Ada", "age": 1}

    @pytest.mark.asyncio
    async def test_nested_async_composites(self) -> None:
        check = array_check(object_check({"id": asynchronous(check_integer)}))

        outcome = await safe_parse_async(check, [{"id": 1}, {"id": "2"}, {"id": 3}])

        assert outcome.status is Status.ABORTED
        assert [i.path for i in outcome.issues] == [(1, "id")]

    @pytest.mark.asyncio
    async def test_issues_appended_in_await_order(self) -> None:
        check = object_check({"a": asynchronous(check_string), "b": asynchronous(check_string)})

        outcome = await safe_parse_async(check, {"a": 1, "b": 2})

        assert [i.path for i in outcome.issues] == [("a",), ("b",)]

    @pytest.mark.asyncio
    async def test_parse_async_returns_value(self) -> None:
        assert await parse_async(asynchronous(check_integer), 9) == 9

    @pytest.mark.asyncio
    async def test_parse_async_raises(self) -> None:
        with pytest.raises(ParseError):
            await parse_async(asynchronous(check_integer), "9")


# =============================================================================
# ParseRunner Tests
# =============================================================================


class TestParseRunner:
    def test_emits_lifecycle_and_issue_events(self, user_check: Any) -> None:
        runner: ParseRunner[Any] = ParseRunner(user_check)
        observer = RecordingObserver()
        runner.add_observer(observer)

        runner.safe_parse({"name": 1, "age": "x"})

        assert observer.event_types == [
            ValidationEventType.VALIDATION_STARTED,
            ValidationEventType.ISSUE_ADDED,
            ValidationEventType.ISSUE_ADDED,
            ValidationEventType.VALIDATION_COMPLETED,
        ]
        completed = observer.events[-1].data
        assert completed["status"] is Status.ABORTED
        assert completed["issue_count"] == 2
        assert completed["success"] is False
        assert completed["duration_ms"] >= 0

    def test_each_call_has_its_own_issue_list(self) -> None:
        runner: ParseRunner[Any] = ParseRunner(check_string)

        first = runner.safe_parse(1)
        second = runner.safe_parse(2)

        assert len(first.issues) == 1
        assert len(second.issues) == 1
        assert first.issues is not second.issues

    def test_schema_error_map(self) -> None:
        runner: ParseRunner[Any] = ParseRunner(
            check_string, schema_error_map=CountingErrorMap("schema")
        )

        assert runner.safe_parse(1).issues[0].message == "schema"

    def test_call_params_override_runner_params(self) -> None:
        runner: ParseRunner[Any] = ParseRunner(
            check_string, params=ParseParams(error_map=CountingErrorMap("runner"))
        )

        outcome = runner.safe_parse(1, ParseParams(error_map=CountingErrorMap("call")))

        assert outcome.issues[0].message == "call"

    @pytest.mark.asyncio
    async def test_async_mode_flag_visible_to_checks(self) -> None:
        seen: list[bool] = []

        def check(ctx: ParseContext) -> Any:
            seen.append(ctx.is_async)
            return ok(ctx.data)

        runner: ParseRunner[Any] = ParseRunner(check)
        runner.safe_parse(1)
        await runner.safe_parse_async(1)

        assert seen == [False, True]

    def test_dirty_leaf_with_issue(self) -> None:
        def check(ctx: ParseContext) -> Any:
            add_issue_to_context(ctx, {"code": "custom", "message": "trimmed"})
            return ok(ctx.data.strip())

        outcome = safe_parse(check, " a ")

        # issues recorded but VALID result: still reported as success
        assert outcome.success
        assert outcome.issues[0].message == "trimmed"

    def test_repr(self) -> None:
        assert "ParseRunner" in repr(ParseRunner(check_string))
