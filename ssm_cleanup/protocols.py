"""Protocols for structural typing.

For more information on protocols, refer to
`PEP 544 <https://www.python.org/dev/peps/pep-0544/>`__.

"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Callable

from typing_extensions import Protocol, runtime_checkable

if TYPE_CHECKING:
    from .events import Event

EventHandler = Callable[["Event"], Any]


@runtime_checkable
class EventBusProtocol(Protocol):
    """Protocol for the publish/subscribe event bus of the orchestrator.

    The bus used by a host does not need to subclass this class. It only needs
    to implement a similar interface.

    """

    @abstractmethod
    def subscribe(self, topic: str, handler: EventHandler) -> None:
        """Call ``handler`` each time an event is emitted on ``topic``."""
        raise NotImplementedError

    @abstractmethod
    def unsubscribe_all(self, topic: str) -> None:
        """Remove every handler subscribed to ``topic``."""
        raise NotImplementedError


@runtime_checkable
class EnvironmentProviderProtocol(Protocol):
    """Protocol for reading process-wide environment settings."""

    @property
    @abstractmethod
    def aws_region(self) -> str:
        """AWS region used to create clients."""
        raise NotImplementedError

    @property
    @abstractmethod
    def deploy_environment(self) -> str | None:
        """Name of the active deployment environment."""
        raise NotImplementedError
