"""Event emitter for publishing payroll domain events.

The emitter provides:
- Handler registration by exact name or wildcard pattern
- Error isolation (handler failures don't break other handlers or the caller)
- Event batching for units of work
"""

from __future__ import annotations

import fnmatch
import logging
from dataclasses import dataclass
from typing import Any, Callable

from payroll_core.events.types import PayrollEvent

logger = logging.getLogger(__name__)

EventHandler = Callable[[PayrollEvent], None]


@dataclass
class HandlerRegistration:
    """Registration of an event handler."""

    handler: EventHandler
    pattern: str | None  # None = all events

    def matches(self, name: str) -> bool:
        if self.pattern is None:
            return True
        return fnmatch.fnmatchcase(name, self.pattern)


class EventEmitter:
    """Synchronous event emitter.

    Usage:
        emitter = EventEmitter()
        emitter.on("payroll.payRun.*", handle_run_event)
        emitter.emit("payroll.payRun.created", {"pay_run": pay_run})
    """

    def __init__(self) -> None:
        self._handlers: list[HandlerRegistration] = []

    def on(self, pattern: str, handler: EventHandler) -> None:
        """Register handler for an event name or wildcard pattern."""
        self._handlers.append(HandlerRegistration(handler=handler, pattern=pattern))

    def on_all(self, handler: EventHandler) -> None:
        """Register handler for all events."""
        self._handlers.append(HandlerRegistration(handler=handler, pattern=None))

    def off(self, handler: EventHandler) -> None:
        """Unregister a handler."""
        self._handlers = [reg for reg in self._handlers if reg.handler != handler]

    def emit(self, name: str, payload: dict[str, Any] | None = None) -> list[Exception]:
        """Emit an event to all matching handlers.

        Returns list of any exceptions raised by handlers.
        """
        return self._dispatch(PayrollEvent(name=name, payload=payload or {}))

    def batch(self) -> EventBatch:
        """Create a batch context for collecting events.

        Events are held until the context exits, then emitted together.
        Pass the batch to services in place of the emitter so nothing is
        published for work that is later rolled back.
        """
        return EventBatch(self)

    def _dispatch(self, event: PayrollEvent) -> list[Exception]:
        """Dispatch event to matching handlers."""
        errors: list[Exception] = []

        for reg in list(self._handlers):
            if not reg.matches(event.name):
                continue

            try:
                reg.handler(event)
            except Exception as e:
                logger.exception("Handler %s failed for event %s", reg.handler, event.name)
                errors.append(e)

        return errors


class EventBatch:
    """Context manager for batching events.

    Usage:
        with emitter.batch() as batch:
            service = WorkforceService(session, batch)
            await service.create_employee(data)
            await session.commit()
        # Events emitted when the context exits cleanly, dropped on error
    """

    def __init__(self, emitter: EventEmitter) -> None:
        self._emitter = emitter
        self._pending: list[PayrollEvent] = []
        self._errors: list[Exception] = []

    def __enter__(self) -> EventBatch:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        if exc_type is None:
            self._errors = self.flush()
        else:
            if self._pending:
                logger.info(
                    "Discarding %d event(s) after %s", len(self._pending), exc_type.__name__
                )
            self._pending = []

    def emit(self, name: str, payload: dict[str, Any] | None = None) -> list[Exception]:
        """Queue an event; handlers run when the batch is flushed."""
        self._pending.append(PayrollEvent(name=name, payload=payload or {}))
        return []

    def flush(self) -> list[Exception]:
        """Emit every queued event in order."""
        events, self._pending = self._pending, []
        errors: list[Exception] = []
        for event in events:
            errors.extend(self._emitter._dispatch(event))
        return errors

    @property
    def pending(self) -> list[PayrollEvent]:
        return list(self._pending)

    @property
    def errors(self) -> list[Exception]:
        """Errors from handler execution (available after context exits)."""
        return self._errors


def log_event(event: PayrollEvent) -> None:
    """Handler that writes every event to the log."""
    logger.info("event %s id=%s", event.name, event.event_id)
