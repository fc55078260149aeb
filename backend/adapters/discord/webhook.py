"""DiscordWebhookNotifier — relays opaque JSON payloads to Discord webhook URLs."""

import logging
from typing import Mapping, Optional

import requests

from domain.errors import ConfigurationError, TransportError
from domain.models import Channel, Payload
from ports.notifier import NotifierPort

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 5.0


class DiscordWebhookNotifier(NotifierPort):
    """One POST per forward, no retry.

    ``webhooks`` maps each channel to its URL; a missing or empty URL means the
    channel is unconfigured and forward() fails without touching the network.
    """

    def __init__(
        self,
        webhooks: Mapping[Channel, Optional[str]],
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self._webhooks = dict(webhooks)
        self._timeout = timeout
        self._http = session or requests

    def is_configured(self, channel: Channel) -> bool:
        return bool(self._webhooks.get(channel))

    def missing_channels(self) -> list[Channel]:
        return [channel for channel in Channel if not self.is_configured(channel)]

    def forward(self, channel: Channel, payload: Payload) -> None:
        url = self._webhooks.get(channel)
        if not url:
            raise ConfigurationError(f"Discord webhook URL not configured for {channel.value}")

        try:
            res = self._http.post(
                url,
                data=payload,
                headers={"Content-Type": "application/json"},
                timeout=self._timeout,
            )
            res.raise_for_status()
        except requests.RequestException as e:
            logger.error(f"Discord webhook failed for {channel.value}: {e}")
            raise TransportError(str(e)) from e

        logger.info(f"Discord webhook sent successfully ({channel.value}, {res.status_code})")
