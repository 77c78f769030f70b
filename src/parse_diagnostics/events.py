"""Observer pattern implementation for parse events.

Provides event types, observer protocol, and mixin for adding observer
support to the objects that drive a validation (the shared parse record
and the top-level runner).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Protocol, runtime_checkable

__all__ = [
    "LoggingObserver",
    "ObservableMixin",
    "ValidationEvent",
    "ValidationEventType",
    "ValidationObserver",
]


class ValidationEventType(Enum):
    """Types of validation events that can be observed."""

    ISSUE_ADDED = auto()
    """Emitted when an issue is appended to the shared issue list."""

    VALIDATION_STARTED = auto()
    """Emitted when a top-level validation begins."""

    VALIDATION_COMPLETED = auto()
    """Emitted when a top-level validation has produced its final result."""


@dataclass
class ValidationEvent:
    """A validation event that can be observed.

    Attributes:
        event_type: The type of event that occurred.
        source: The object that emitted the event.
        data: Event-specific data dictionary.

    Example:
        event = ValidationEvent(
            event_type=ValidationEventType.ISSUE_ADDED,
            source=common,
            data={"issue": issue, "path": issue.path, "code": issue.code},
        )
    """

    event_type: ValidationEventType
    source: object
    data: dict[str, Any] = field(default_factory=dict)


@runtime_checkable
class ValidationObserver(Protocol):
    """Protocol for validation event observers.

    Implement this protocol to receive validation events. Observers
    can be used for logging, metrics collection, rendering, etc.

    Example:
        class PrintingObserver:
            def on_event(self, event: ValidationEvent) -> None:
                print(f"{event.event_type.name}: {event.data}")
    """

    def on_event(self, event: ValidationEvent) -> None:
        """Handle a validation event.

        Args:
            event: The validation event to handle.
        """
        ...


class ObservableMixin:
    """Mixin class to add observer support to any class.

    Example:
        class MyRecord(ObservableMixin):
            def report(self, issue):
                self.notify(ValidationEvent(
                    event_type=ValidationEventType.ISSUE_ADDED,
                    source=self,
                    data={"issue": issue},
                ))
    """

    _observers: list[ValidationObserver]

    def _ensure_observers(self) -> None:
        """Ensure the observers list is initialized."""
        if not hasattr(self, "_observers") or self._observers is None:
            self._observers = []

    def add_observer(self, observer: ValidationObserver) -> None:
        """Add an observer to receive validation events.

        Args:
            observer: An object implementing the ValidationObserver protocol.
        """
        self._ensure_observers()
        if observer not in self._observers:
            self._observers.append(observer)

    def remove_observer(self, observer: ValidationObserver) -> None:
        """Remove an observer from receiving validation events.

        Args:
            observer: The observer to remove.
        """
        self._ensure_observers()
        if observer in self._observers:
            self._observers.remove(observer)

    def notify(self, event: ValidationEvent) -> None:
        """Notify all observers of a validation event.

        Args:
            event: The validation event to broadcast to observers.
        """
        self._ensure_observers()
        for observer in self._observers:
            observer.on_event(event)

    @property
    def observers(self) -> list[ValidationObserver]:
        """Get a copy of the current observers list."""
        self._ensure_observers()
        return self._observers.copy()

    def clear_observers(self) -> None:
        """Remove all observers."""
        self._ensure_observers()
        self._observers.clear()


class LoggingObserver:
    """Forward validation events to a standard library logger.

    Issues are logged at ``issue_level`` (DEBUG by default). Start and
    completion events are logged at DEBUG.

    Example:
        outcome = safe_parse(check, data, observers=[LoggingObserver()])
    """

    def __init__(
        self,
        logger: logging.Logger | None = None,
        *,
        issue_level: int = logging.DEBUG,
    ) -> None:
        self._logger = logger or logging.getLogger("parse_diagnostics")
        self._issue_level = issue_level

    def on_event(self, event: ValidationEvent) -> None:
        if event.event_type == ValidationEventType.ISSUE_ADDED:
            issue = event.data["issue"]
            self._logger.log(
                self._issue_level,
                "issue %s at %s: %s",
                issue.code,
                list(issue.path),
                issue.message,
            )
        elif event.event_type == ValidationEventType.VALIDATION_STARTED:
            self._logger.debug("validation started (async=%s)", event.data.get("is_async"))
        elif event.event_type == ValidationEventType.VALIDATION_COMPLETED:
            status = event.data.get("status")
            self._logger.debug(
                "validation completed: status=%s issues=%d",
                getattr(status, "value", status),
                event.data.get("issue_count", 0),
            )
