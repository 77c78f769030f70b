"""Top-level validation entry points.

A check is any callable taking a ParseContext and returning a result
(possibly pending). The runner creates the root context, runs the check,
and turns the final result plus the accumulated issues into an outcome.
"""

from __future__ import annotations

import inspect
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from parse_diagnostics.context import ParseContext, ParseParams, create_root_context
from parse_diagnostics.error_map import ErrorMap
from parse_diagnostics.errors import ParseError
from parse_diagnostics.events import (
    ObservableMixin,
    ValidationEvent,
    ValidationEventType,
    ValidationObserver,
)
from parse_diagnostics.issues import Issue
from parse_diagnostics.results import UNDEFINED, ParseReturn, Status, SyncParseReturn, is_async

__all__ = [
    "Check",
    "ParseOutcome",
    "ParseRunner",
    "parse",
    "parse_async",
    "safe_parse",
    "safe_parse_async",
]

T = TypeVar("T")

Check = Callable[[ParseContext], ParseReturn[Any]]


@dataclass
class ParseOutcome(Generic[T]):
    """Final outcome of a top-level validation.

    Attributes:
        status: Status of the root result.
        data: Validated value; UNDEFINED when the root result aborted.
        issues: Every issue raised anywhere in the input, in the order the
            validators reported them.

    Example:
        outcome = safe_parse(check, {"name": 123})
        if not outcome.success:
            for issue in outcome.issues:
                print(issue.path, issue.message)
    """

    status: Status
    data: T
    issues: list[Issue] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """Only a VALID root result counts as success."""
        return self.status is Status.VALID

    @property
    def error(self) -> ParseError | None:
        """ParseError over all issues, or None on success."""
        if self.success:
            return None
        return ParseError(self.issues)


class ParseRunner(ObservableMixin, Generic[T]):
    """Runs a check against inputs and reports the outcome.

    Observers added to the runner receive VALIDATION_STARTED and
    VALIDATION_COMPLETED for each call, and ISSUE_ADDED for every issue
    raised during it.

    Example:
        runner = ParseRunner(check_user, params=ParseParams(error_map=my_map))
        runner.add_observer(LoggingObserver())

        outcome = runner.safe_parse(payload)
        value = runner.parse(payload)  # raises ParseError
        outcome = await runner.safe_parse_async(payload)
    """

    def __init__(
        self,
        check: Check,
        *,
        params: ParseParams | None = None,
        schema_error_map: ErrorMap | None = None,
    ) -> None:
        """Initialize the runner.

        Args:
            check: Callable validating the root context.
            params: Default configuration for every call.
            schema_error_map: Error map of the root schema.
        """
        self._check = check
        self._params = params or ParseParams()
        self._schema_error_map = schema_error_map

    def safe_parse(self, data: Any, params: ParseParams | None = None) -> ParseOutcome[T]:
        """Validate synchronously.

        Raises:
            RuntimeError: If the check returns a pending result.
        """
        ctx, start_time = self._start(data, params, is_async=False)
        result = self._check(ctx)
        if is_async(result):
            if inspect.iscoroutine(result):
                result.close()
            raise RuntimeError(
                "Synchronous parse encountered a pending result; use safe_parse_async"
            )
        return self._finish(ctx, result, start_time)  # type: ignore[arg-type]

    async def safe_parse_async(
        self, data: Any, params: ParseParams | None = None
    ) -> ParseOutcome[T]:
        """Validate, awaiting the root result if it is pending."""
        ctx, start_time = self._start(data, params, is_async=True)
        result = self._check(ctx)
        if is_async(result):
            result = await result  # type: ignore[misc]
        return self._finish(ctx, result, start_time)  # type: ignore[arg-type]

    def parse(self, data: Any, params: ParseParams | None = None) -> T:
        """Validate synchronously and return the value.

        Raises:
            ParseError: If the root result is not VALID.
        """
        outcome = self.safe_parse(data, params)
        if outcome.error is not None:
            raise outcome.error
        return outcome.data

    async def parse_async(self, data: Any, params: ParseParams | None = None) -> T:
        """Async counterpart of parse."""
        outcome = await self.safe_parse_async(data, params)
        if outcome.error is not None:
            raise outcome.error
        return outcome.data

    def _start(
        self, data: Any, params: ParseParams | None, *, is_async: bool
    ) -> tuple[ParseContext, float]:
        params = (params or self._params).model_copy(update={"is_async": is_async})
        ctx = create_root_context(
            data,
            params,
            schema_error_map=self._schema_error_map,
            observers=self.observers,
        )

        self.notify(
            ValidationEvent(
                event_type=ValidationEventType.VALIDATION_STARTED,
                source=self,
                data={"data": data, "is_async": is_async, "path": ctx.path},
            )
        )
        return ctx, time.perf_counter()

    def _finish(
        self, ctx: ParseContext, result: SyncParseReturn[Any], start_time: float
    ) -> ParseOutcome[T]:
        issues = ctx.common.issues
        if result.status is not Status.VALID and not issues:
            raise RuntimeError("Validation failed but no issues were recorded")

        outcome: ParseOutcome[T] = ParseOutcome(
            status=result.status,
            data=UNDEFINED if result.status is Status.ABORTED else result.value,
            issues=issues,
        )

        duration_ms = (time.perf_counter() - start_time) * 1000
        self.notify(
            ValidationEvent(
                event_type=ValidationEventType.VALIDATION_COMPLETED,
                source=self,
                data={
                    "status": outcome.status,
                    "success": outcome.success,
                    "issue_count": len(issues),
                    "duration_ms": duration_ms,
                },
            )
        )
        return outcome

    def __repr__(self) -> str:
        name = getattr(self._check, "__name__", type(self._check).__name__)
        return f"ParseRunner(check={name!r})"


def safe_parse(
    check: Check,
    data: Any,
    params: ParseParams | None = None,
    *,
    observers: Iterable[ValidationObserver] = (),
) -> ParseOutcome[Any]:
    """Run ``check`` against ``data`` synchronously and return the outcome."""
    runner: ParseRunner[Any] = ParseRunner(check, params=params)
    for observer in observers:
        runner.add_observer(observer)
    return runner.safe_parse(data)


async def safe_parse_async(
    check: Check,
    data: Any,
    params: ParseParams | None = None,
    *,
    observers: Iterable[ValidationObserver] = (),
) -> ParseOutcome[Any]:
    """Run ``check`` against ``data`` in async mode and return the outcome."""
    runner: ParseRunner[Any] = ParseRunner(check, params=params)
    for observer in observers:
        runner.add_observer(observer)
    return await runner.safe_parse_async(data)


def parse(check: Check, data: Any, params: ParseParams | None = None) -> Any:
    """Run ``check`` synchronously; return the value or raise ParseError."""
    return ParseRunner(check, params=params).parse(data)


async def parse_async(check: Check, data: Any, params: ParseParams | None = None) -> Any:
    """Run ``check`` in async mode; return the value or raise ParseError."""
    return await ParseRunner(check, params=params).parse_async(data)
