"""Repair settings, built once at startup from configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache

from autofix.config import get_config_value, get_float_value

DEFAULT_BASE_URL = "https://api.synthetic.new/v1"
DEFAULT_MODEL = "hf:syntheticlab/fix-json"
DEFAULT_TIMEOUT_SECONDS = 60.0


def _parse_enabled(value: str | None) -> bool:
    # Only an explicit "false" turns the extension off.
    if value is None:
        return True
    return value.strip().lower() != "false"


@dataclass(frozen=True, slots=True)
class RepairConfig:
    """Immutable settings threaded through every repair call.

    `api_key` gates all network I/O: without it the oracle client fails fast
    and the parse hook is never installed.
    """

    enabled: bool = True
    base_url: str = DEFAULT_BASE_URL
    model: str = DEFAULT_MODEL
    api_key: str | None = field(default=None, repr=False)
    temperature: float = 0.0
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    @property
    def has_credential(self) -> bool:
        return bool(self.api_key)


def load_repair_config() -> RepairConfig:
    return RepairConfig(
        enabled=_parse_enabled(get_config_value("PI_AUTOFIX_ENABLED")),
        base_url=get_config_value("PI_AUTOFIX_BASE_URL") or DEFAULT_BASE_URL,
        model=get_config_value("PI_AUTOFIX_MODEL") or DEFAULT_MODEL,
        api_key=get_config_value("SYNTHETIC_API_KEY") or None,
        timeout_seconds=get_float_value("PI_AUTOFIX_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS),
    )


@lru_cache
def get_repair_config() -> RepairConfig:
    return load_repair_config()
