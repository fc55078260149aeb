"""NotifierPort — abstract interface for relaying payloads to external channels."""

from abc import ABC, abstractmethod

from domain.models import Channel, Payload


class NotifierPort(ABC):
    @abstractmethod
    def forward(self, channel: Channel, payload: Payload) -> None:
        """Deliver ``payload`` once. Raises ConfigurationError or TransportError."""

    @abstractmethod
    def is_configured(self, channel: Channel) -> bool:
        """Whether ``channel`` has a destination."""
