import dataclasses

import pytest

from autofix.settings import (
    DEFAULT_BASE_URL,
    DEFAULT_MODEL,
    RepairConfig,
    get_repair_config,
    load_repair_config,
)

KEYS = [
    "PI_AUTOFIX_ENABLED",
    "PI_AUTOFIX_BASE_URL",
    "PI_AUTOFIX_MODEL",
    "PI_AUTOFIX_TIMEOUT_SECONDS",
    "SYNTHETIC_API_KEY",
]


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    from autofix import config as cfg

    # Prevent tests from accidentally reading your real .env file.
    monkeypatch.setenv("DOTENV_PATH", "tests/.env.DO_NOT_USE")
    cfg._config_adapter.cache_clear()  # type: ignore[attr-defined]
    get_repair_config.cache_clear()
    for key in KEYS:
        monkeypatch.delenv(key, raising=False)
    yield
    cfg._config_adapter.cache_clear()  # type: ignore[attr-defined]
    get_repair_config.cache_clear()


def test_defaults_without_configuration():
    cfg = load_repair_config()
    assert cfg.enabled is True
    assert cfg.base_url == DEFAULT_BASE_URL
    assert cfg.model == DEFAULT_MODEL
    assert cfg.api_key is None
    assert cfg.has_credential is False
    assert cfg.temperature == 0.0
    assert cfg.timeout_seconds == 60.0


def test_overrides_from_environment(monkeypatch):
    monkeypatch.setenv("PI_AUTOFIX_BASE_URL", "https://oracle.test/v1")
    monkeypatch.setenv("PI_AUTOFIX_MODEL", "fixer-1")
    monkeypatch.setenv("PI_AUTOFIX_TIMEOUT_SECONDS", "15")
    monkeypatch.setenv("SYNTHETIC_API_KEY", "syn_test")

    cfg = load_repair_config()
    assert cfg.base_url == "https://oracle.test/v1"
    assert cfg.model == "fixer-1"
    assert cfg.timeout_seconds == 15.0
    assert cfg.api_key == "syn_test"
    assert cfg.has_credential is True


@pytest.mark.parametrize(
    "raw,expected",
    [("false", False), ("FALSE", False), (" false ", False), ("true", True), ("0", True), ("", True)],
)
def test_enabled_flag_only_disabled_by_false(monkeypatch, raw, expected):
    monkeypatch.setenv("PI_AUTOFIX_ENABLED", raw)
    assert load_repair_config().enabled is expected


def test_empty_key_counts_as_missing(monkeypatch):
    monkeypatch.setenv("SYNTHETIC_API_KEY", "")
    assert load_repair_config().api_key is None


def test_config_is_immutable_and_hides_key_in_repr():
    cfg = RepairConfig(api_key="syn_secret")
    with pytest.raises(dataclasses.FrozenInstanceError):
        cfg.model = "other"  # type: ignore[misc]
    assert "syn_secret" not in repr(cfg)


def test_get_repair_config_is_built_once(monkeypatch):
    monkeypatch.setenv("PI_AUTOFIX_MODEL", "first")
    first = get_repair_config()
    monkeypatch.setenv("PI_AUTOFIX_MODEL", "second")
    assert get_repair_config() is first
    assert first.model == "first"
