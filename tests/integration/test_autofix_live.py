""" Integration test against the live repair oracle."""

import os

import pytest

from autofix.models import RepairSuccess
from autofix.repair_client import RepairOracleClient
from autofix.settings import load_repair_config


LIVE_FLAG = os.getenv("PYTEST_AUTOFIX_LIVE")

if not LIVE_FLAG:
    pytest.skip("live autofix test disabled; set PYTEST_AUTOFIX_LIVE=1 to enable", allow_module_level=True)


@pytest.mark.asyncio
async def test_live_missing_colon_is_fixed():
    config = load_repair_config()
    if not config.has_credential:
        pytest.skip("No SYNTHETIC_API_KEY configured")

    outcome = await RepairOracleClient().repair('{"command": "ls -la", "timeout" 30000}', config)

    assert isinstance(outcome, RepairSuccess), outcome
    assert outcome.value == {"command": "ls -la", "timeout": 30000}
