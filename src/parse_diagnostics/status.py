"""Composite status tracking.

ParseStatus records how damaged a composite value is and folds the
results of its children into one result. The async merges only await
their inputs and then hand off to the sync merges, so both modes share a
single implementation of the merge rules.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from parse_diagnostics.results import (
    INVALID,
    UNDEFINED,
    ParseReturn,
    Status,
    SyncParseReturn,
    is_async,
    result_for,
)

__all__ = ["AsyncObjectPair", "ObjectPair", "ParseStatus"]

PROTO_KEY = "__proto__"


@dataclass(frozen=True)
class ObjectPair:
    """Key and value results for one entry of an object being merged.

    Attributes:
        key: Result of validating the key.
        value: Result of validating the value.
        always_set: Keep the entry even when the value is UNDEFINED.
    """

    key: SyncParseReturn[Any]
    value: SyncParseReturn[Any]
    always_set: bool = False


@dataclass(frozen=True)
class AsyncObjectPair:
    """ObjectPair whose key and value may still be pending."""

    key: ParseReturn[Any]
    value: ParseReturn[Any]
    always_set: bool = False


async def _resolve(result: ParseReturn[Any]) -> SyncParseReturn[Any]:
    if is_async(result):
        return await result  # type: ignore[misc]
    return result  # type: ignore[return-value]


class ParseStatus:
    """Monotonic VALID -> DIRTY -> ABORTED tracker for one merge site."""

    __slots__ = ("value",)

    def __init__(self, value: Status = Status.VALID) -> None:
        self.value = value

    def dirty(self) -> None:
        """Mark as dirty unless already dirty or aborted."""
        if self.value is Status.VALID:
            self.value = Status.DIRTY

    def abort(self) -> None:
        """Mark as aborted. Final."""
        if self.value is not Status.ABORTED:
            self.value = Status.ABORTED

    def __repr__(self) -> str:
        return f"ParseStatus({self.value.value!r})"

    @staticmethod
    def merge_array(
        status: ParseStatus, results: Iterable[SyncParseReturn[Any]]
    ) -> SyncParseReturn[list[Any]]:
        """Fold element results into one list result.

        Any aborted element aborts the merge. Dirty elements mark ``status``
        dirty but their values are kept, in order.
        """
        array_value: list[Any] = []
        for result in results:
            if result.status is Status.ABORTED:
                return INVALID
            if result.status is Status.DIRTY:
                status.dirty()
            array_value.append(result.value)

        return result_for(status.value, array_value)

    @staticmethod
    async def merge_array_async(
        status: ParseStatus, results: Iterable[ParseReturn[Any]]
    ) -> SyncParseReturn[list[Any]]:
        """Await every element in order, then merge_array."""
        sync_results = [await _resolve(result) for result in results]
        return ParseStatus.merge_array(status, sync_results)

    @staticmethod
    def merge_object_sync(
        status: ParseStatus, pairs: Iterable[ObjectPair]
    ) -> SyncParseReturn[dict[Any, Any]]:
        """Fold key/value results into one mapping result.

        An aborted key or value aborts the merge. Dirty keys or values mark
        ``status`` dirty. A pair is written only when its key is not
        ``"__proto__"`` and its value is defined or ``always_set`` is set.
        Skipped pairs still count toward ``status``.
        """
        final_object: dict[Any, Any] = {}
        for pair in pairs:
            key, value = pair.key, pair.value
            if key.status is Status.ABORTED:
                return INVALID
            if value.status is Status.ABORTED:
                return INVALID
            if key.status is Status.DIRTY:
                status.dirty()
            if value.status is Status.DIRTY:
                status.dirty()

            if key.value != PROTO_KEY and (value.value is not UNDEFINED or pair.always_set):
                final_object[key.value] = value.value

        return result_for(status.value, final_object)

    @staticmethod
    async def merge_object_async(
        status: ParseStatus, pairs: Iterable[AsyncObjectPair | ObjectPair]
    ) -> SyncParseReturn[dict[Any, Any]]:
        """Await each pair's key then value, in order, then merge_object_sync."""
        sync_pairs: list[ObjectPair] = []
        for pair in pairs:
            key = await _resolve(pair.key)
            value = await _resolve(pair.value)
            sync_pairs.append(ObjectPair(key=key, value=value, always_set=pair.always_set))
        return ParseStatus.merge_object_sync(status, sync_pairs)
