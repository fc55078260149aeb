import os
import logging
from typing import Dict, Optional, Any

from dotenv import load_dotenv

from domain.models import Channel, KeyRecord

logger = logging.getLogger(__name__)

load_dotenv()

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 5000
DEFAULT_RELAY_TIMEOUT = 5.0
DEFAULT_SERVICE_NAME = "ANTC Hub Webhook Server"

# Seeded into every fresh registry. Expiry counts from process start.
DEFAULT_KEYS: Dict[str, KeyRecord] = {
    "DEVELOPER-LIFETIME-2025": KeyRecord(tier="DEVELOPER", is_lifetime=True),
    "PREMIUM-30DAYS": KeyRecord(tier="PREMIUM", is_lifetime=False, valid_for=30 * 24 * 60 * 60),
    "BASIC-11H": KeyRecord(tier="BASIC", is_lifetime=False, valid_for=11 * 60 * 60),
}

WEBHOOK_ENV_VARS = {
    Channel.KEY_TRACKING: "KEY_TRACKING_WEBHOOK",
    Channel.DEVELOPER_ACTIVITY: "DEVELOPER_ACTIVITY_WEBHOOK",
    Channel.ALL_ACTIVITY: "ALL_ACTIVITY_WEBHOOK",
}


class Config:
    def __init__(self):
        self.host = os.environ.get("HOST", DEFAULT_HOST)
        self.port = int(os.environ.get("PORT", DEFAULT_PORT))
        self.debug = os.environ.get("DEBUG", "0") == "1"
        self.relay_timeout = float(os.environ.get("RELAY_TIMEOUT", DEFAULT_RELAY_TIMEOUT))
        self.service_name = os.environ.get("SERVICE_NAME", DEFAULT_SERVICE_NAME)
        self.webhooks: Dict[Channel, Optional[str]] = {
            channel: os.environ.get(var, "").strip() or None
            for channel, var in WEBHOOK_ENV_VARS.items()
        }

    def get_webhook(self, channel: Channel) -> Optional[str]:
        return self.webhooks.get(channel)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "host": self.host,
            "port": self.port,
            "debug": self.debug,
            "relay_timeout": self.relay_timeout,
            "service_name": self.service_name,
            "webhooks_configured": {
                channel.value: url is not None for channel, url in self.webhooks.items()
            },
        }


config = Config()


def get_config() -> Config:
    return config


def create_infra_adapters(cfg: Config):
    """Create the key store and notifier. A missing webhook URL is logged, not fatal."""
    from adapters.local.memory_key_store import InMemoryKeyStore
    from adapters.discord import DiscordWebhookNotifier

    notifier = DiscordWebhookNotifier(cfg.webhooks, timeout=cfg.relay_timeout)
    missing = notifier.missing_channels()
    if missing:
        names = ", ".join(WEBHOOK_ENV_VARS[channel] for channel in missing)
        logger.warning(f"Discord webhook URLs not configured: {names}")
        logger.warning("Copy .env.example to .env and set the webhook URLs; forwarding to these channels will fail")

    adapters = {
        "key_store": InMemoryKeyStore(DEFAULT_KEYS),
        "notifier": notifier,
    }
    logger.info(f"Infra adapters: {', '.join(type(v).__name__ for v in adapters.values())}")
    return adapters
