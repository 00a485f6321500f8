import sys

import pytest

from autofix.models import RepairFailure, RepairSuccess
from scripts import autofix_selftest


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    from autofix import config as cfg

    monkeypatch.setenv("DOTENV_PATH", "tests/.env.DO_NOT_USE")
    for key in ["SYNTHETIC_API_KEY", "PI_AUTOFIX_MODEL", "PI_AUTOFIX_BASE_URL", "PI_AUTOFIX_ENABLED"]:
        monkeypatch.delenv(key, raising=False)
    cfg._config_adapter.cache_clear()  # type: ignore[attr-defined]
    yield
    cfg._config_adapter.cache_clear()  # type: ignore[attr-defined]


def _fake_client(outcome):
    class FakeClient:
        seen_models: list[str] = []

        async def repair(self, broken_text, config, cancel=None):  # noqa: ANN001
            FakeClient.seen_models.append(config.model)
            return outcome

    return FakeClient


def test_exit_code_without_credential(monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["autofix_selftest"])
    assert autofix_selftest.main() == 2
    assert "SYNTHETIC_API_KEY: configured=False" in capsys.readouterr().out


def test_all_cases_pass(monkeypatch, capsys):
    monkeypatch.setenv("SYNTHETIC_API_KEY", "syn_test")
    fake = _fake_client(RepairSuccess({"command": "ls -la", "timeout": 30000}))
    monkeypatch.setattr(autofix_selftest, "RepairOracleClient", fake)
    monkeypatch.setattr(sys, "argv", ["autofix_selftest", "--model", "fixer-2"])

    assert autofix_selftest.main() == 0
    out = capsys.readouterr().out
    assert "PI_AUTOFIX_MODEL=fixer-2" in out
    assert out.count("Fixed:") == 3
    assert fake.seen_models == ["fixer-2"] * 3


def test_failing_case_sets_exit_code(monkeypatch, capsys):
    monkeypatch.setenv("SYNTHETIC_API_KEY", "syn_test")
    monkeypatch.setattr(autofix_selftest, "RepairOracleClient", _fake_client(RepairFailure("http error: 500")))
    monkeypatch.setattr(sys, "argv", ["autofix_selftest"])

    assert autofix_selftest.main() == 1
    assert "Error: http error: 500" in capsys.readouterr().out
