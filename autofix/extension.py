"""Startup wiring and the diagnostic self-test for the autofix extension."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from autofix.hook import ParseRecoveryHook
from autofix.models import RepairSuccess
from autofix.obs import Logger, NullLogger
from autofix.repair_client import RepairOracleClient
from autofix.settings import RepairConfig
from autofix.ui import HostUI

SELF_TEST_CASES: tuple[tuple[str, str], ...] = (
    ("missing colon", '{"command": "ls -la", "timeout" 30000}'),
    ("missing value", '{"command": "ls -la", "timeout": }'),
    ("missing closing brace", '{"command": "ls -la", "timeout": 30000'),
)


def build_parse_hook(
    config: RepairConfig,
    ui: HostUI,
    *,
    client: RepairOracleClient | None = None,
    obs: Logger | None = None,
) -> ParseRecoveryHook | None:
    """Return a ready hook, or None when autofix is disabled or has no credential.

    The reason for not installing is logged once here; callers should simply
    keep their plain JSON parsing when None comes back.
    """
    obs = obs or NullLogger()
    if not config.enabled:
        obs.info("autofix.disabled", reason="PI_AUTOFIX_ENABLED=false")
        return None
    if not config.has_credential:
        obs.warn("autofix.no_credential", reason="SYNTHETIC_API_KEY is not set")
        return None
    obs.info("autofix.loaded", model=config.model, base_url=config.base_url)
    return ParseRecoveryHook(config, ui, client=client, obs=obs)


@dataclass(frozen=True, slots=True)
class SelfTestResult:
    name: str
    input: str
    fixed: Any = None
    error: str | None = None

    @property
    def passed(self) -> bool:
        return self.error is None


async def run_self_test(
    client: RepairOracleClient,
    config: RepairConfig,
    ui: HostUI,
    obs: Logger | None = None,
) -> list[SelfTestResult]:
    """Run the canned malformed inputs through the oracle, one request each."""
    obs = obs or NullLogger()
    if not config.has_credential:
        ui.notify("No SYNTHETIC_API_KEY set", "error")
        return []

    ui.notify("Testing autofix...", "info")
    results: list[SelfTestResult] = []
    for name, broken in SELF_TEST_CASES:
        outcome = await client.repair(broken, config)
        if isinstance(outcome, RepairSuccess):
            result = SelfTestResult(name=name, input=broken, fixed=outcome.value)
            obs.info("autofix.selftest.case", case=name, input=broken, passed=True, fixed=json.dumps(outcome.value))
        else:
            result = SelfTestResult(name=name, input=broken, error=outcome.reason)
            obs.warn("autofix.selftest.case", case=name, input=broken, passed=False, error=outcome.reason)
        results.append(result)

    ui.notify("Autofix test complete (see logs)", "info")
    return results
