"""
In-process domain event bus.

Handlers run synchronously in subscription order. A failing handler is logged
and reported in the dispatch result; it never undoes the write that produced
the event and never stops the remaining handlers.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)

Handler = Callable[[Any], None]


@dataclass
class DispatchResult:
    event_type: str
    notified: int = 0
    failed: int = 0
    failures: list[dict[str, str]] = field(default_factory=list)


class EventBus:
    def __init__(self) -> None:
        self._handlers: dict[str, list[Handler]] = {}

    def subscribe(self, event_type: str, handler: Handler) -> None:
        self._handlers.setdefault(event_type, [])
        if handler not in self._handlers[event_type]:
            self._handlers[event_type].append(handler)

    def subscribers(self, event_type: str) -> list[Handler]:
        return list(self._handlers.get(event_type, []))

    def publish(self, event: Any) -> DispatchResult:
        event_type = event.event_type
        result = DispatchResult(event_type=event_type)

        for handler in self.subscribers(event_type):
            handler_name = getattr(handler, "__qualname__", repr(handler))
            try:
                handler(event)
                result.notified += 1
            except Exception as exc:
                result.failed += 1
                result.failures.append(
                    {"handler": handler_name, "error": str(exc), "error_type": type(exc).__name__}
                )
                logger.error(
                    "Event handler failed",
                    exc_info=True,
                    extra={"event_type": event_type, "handler": handler_name, "reason": str(exc)},
                )

        logger.debug(
            "Event dispatched",
            extra={"event_type": event_type, "notified": result.notified, "failed": result.failed},
        )
        return result
