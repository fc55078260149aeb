"""ForwardNotificationUseCase — relays an opaque payload to a named channel."""

import logging

from domain.errors import RelayError
from domain.models import Channel, Payload
from ports.notifier import NotifierPort

logger = logging.getLogger(__name__)


class ForwardNotificationUseCase:
    def __init__(self, notifier: NotifierPort):
        self._notifier = notifier

    def execute(self, channel: Channel, payload: Payload) -> None:
        logger.info(f"Forwarding to Discord {channel.value} webhook ({len(payload)} bytes)")
        try:
            self._notifier.forward(channel, payload)
        except RelayError as e:
            logger.error(f"Error forwarding to Discord ({e.kind.value}): {e}")
            raise
