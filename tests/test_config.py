import logging

from adapters.discord import DiscordWebhookNotifier
from adapters.local.memory_key_store import InMemoryKeyStore
from config import DEFAULT_KEYS, Config, create_infra_adapters
from domain.models import Channel


def test_defaults(clean_env):
    cfg = Config()
    assert cfg.host == "0.0.0.0"
    assert cfg.port == 5000
    assert cfg.debug is False
    assert cfg.relay_timeout == 5.0
    assert all(cfg.get_webhook(channel) is None for channel in Channel)


def test_reads_environment(clean_env):
    clean_env.setenv("PORT", "8080")
    clean_env.setenv("DEBUG", "1")
    clean_env.setenv("RELAY_TIMEOUT", "2.5")
    clean_env.setenv("KEY_TRACKING_WEBHOOK", "https://discord.example/hook/1")
    clean_env.setenv("ALL_ACTIVITY_WEBHOOK", "   ")

    cfg = Config()
    assert cfg.port == 8080
    assert cfg.debug is True
    assert cfg.relay_timeout == 2.5
    assert cfg.get_webhook(Channel.KEY_TRACKING) == "https://discord.example/hook/1"
    assert cfg.get_webhook(Channel.ALL_ACTIVITY) is None


def test_as_dict_hides_webhook_urls(clean_env):
    clean_env.setenv("KEY_TRACKING_WEBHOOK", "https://discord.example/hook/secret")
    data = Config().as_dict()
    assert "secret" not in str(data)
    assert data["webhooks_configured"] == {
        "key_tracking": True,
        "developer_activity": False,
        "all_activity": False,
    }


def test_missing_webhooks_warn_but_do_not_fail(clean_env, caplog):
    with caplog.at_level(logging.WARNING):
        adapters = create_infra_adapters(Config())

    assert isinstance(adapters["key_store"], InMemoryKeyStore)
    assert isinstance(adapters["notifier"], DiscordWebhookNotifier)
    assert "KEY_TRACKING_WEBHOOK" in caplog.text
    assert "ALL_ACTIVITY_WEBHOOK" in caplog.text


def test_no_warning_when_fully_configured(clean_env, caplog):
    for var in ("KEY_TRACKING_WEBHOOK", "DEVELOPER_ACTIVITY_WEBHOOK", "ALL_ACTIVITY_WEBHOOK"):
        clean_env.setenv(var, f"https://discord.example/{var.lower()}")

    with caplog.at_level(logging.WARNING):
        adapters = create_infra_adapters(Config())

    assert "not configured" not in caplog.text
    assert all(adapters["notifier"].is_configured(channel) for channel in Channel)


def test_bootstrap_keys_seeded(clean_env):
    key_store = create_infra_adapters(Config())["key_store"]
    assert {v.key for v in key_store.list_keys()} == set(DEFAULT_KEYS)
    assert key_store.validate("DEVELOPER-LIFETIME-2025").valid is True
