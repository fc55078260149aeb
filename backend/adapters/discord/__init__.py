"""Discord webhook adapter for the notification relay."""

from .webhook import DiscordWebhookNotifier

__all__ = ["DiscordWebhookNotifier"]
