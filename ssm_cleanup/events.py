"""Orchestrator events consumed by the plugin."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Annotated, Any, ClassVar, cast

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from ._logging import SsmCleanupLogger
    from .protocols import EventHandler

LOGGER = cast("SsmCleanupLogger", logging.getLogger(__name__))


class EventTypes:
    """Names of the event topics."""

    AFTER_STACK_DESTROY: ClassVar[str] = "orchestrator:after:stack-destroy"
    PLUGIN_ERROR: ClassVar[str] = "plugin:error"


class Event(BaseModel):
    """Envelope of an event emitted on the event bus."""

    type: str
    data: Any = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    source: str | None = None


class StackDestroyEventData(BaseModel):
    """Payload of an ``orchestrator:after:stack-destroy`` event."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    stack_name: Annotated[str, Field(alias="stackName", min_length=1)]
    success: bool


class PluginErrorEventData(BaseModel):
    """Payload of a ``plugin:error`` event."""

    model_config = ConfigDict(extra="ignore")

    error: Any
    context: str = "unknown"

    @property
    def error_message(self) -> str:
        """Message of the relayed error."""
        if isinstance(self.error, Mapping):
            return str(self.error.get("message") or self.error)
        return str(getattr(self.error, "message", None) or self.error)


class EventBus:
    """In-process publish/subscribe event bus.

    A single instance is shared by everything in the process. Use
    :meth:`get_instance` rather than instantiating the class directly.

    """

    _instance: ClassVar[EventBus | None] = None

    def __init__(self) -> None:
        """Instantiate class."""
        self._handlers: dict[str, list[EventHandler]] = {}

    @classmethod
    def get_instance(cls) -> EventBus:
        """Return the shared event bus, creating it on first use."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Discard the shared event bus."""
        cls._instance = None

    def emit(self, topic: str, data: Any = None, *, source: str | None = None) -> Event:
        """Emit an event, calling each handler of the topic in subscription order.

        Args:
            topic: Name of the event topic.
            data: Event payload.
            source: Name of the emitter.

        Returns:
            The event that was passed to the handlers.

        """
        event = Event(type=topic, data=data, source=source)
        handlers = list(self._handlers.get(topic, []))
        LOGGER.debug("emitting %s to %s handler(s)", topic, len(handlers))
        for handler in handlers:
            handler(event)
        return event

    def listener_count(self, topic: str) -> int:
        """Number of handlers subscribed to a topic."""
        return len(self._handlers.get(topic, []))

    def subscribe(self, topic: str, handler: EventHandler) -> None:
        """Call ``handler`` each time an event is emitted on ``topic``."""
        self._handlers.setdefault(topic, []).append(handler)

    def unsubscribe_all(self, topic: str) -> None:
        """Remove every handler subscribed to ``topic``."""
        self._handlers.pop(topic, None)
