"""Run the canned malformed-JSON cases through the repair oracle.

Usage:
  .venv/bin/python -m scripts.autofix_selftest
  .venv/bin/python -m scripts.autofix_selftest --model hf:syntheticlab/fix-json
"""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging

import anyio

from autofix.extension import run_self_test
from autofix.obs import JsonStdoutLogger
from autofix.repair_client import RepairOracleClient
from autofix.settings import load_repair_config
from autofix.ui import LoggingUI


def main() -> int:
    parser = argparse.ArgumentParser(description="Self-test the JSON autofix oracle.")
    parser.add_argument("--model", help="Override PI_AUTOFIX_MODEL for this run.")
    parser.add_argument("--base-url", help="Override PI_AUTOFIX_BASE_URL for this run.")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")

    config = load_repair_config()
    overrides = {k: v for k, v in {"model": args.model, "base_url": args.base_url}.items() if v}
    if overrides:
        config = dataclasses.replace(config, **overrides)

    print(f"PI_AUTOFIX_MODEL={config.model}")
    print(f"PI_AUTOFIX_BASE_URL={config.base_url}")
    print(f"SYNTHETIC_API_KEY: configured={config.has_credential}")

    obs = JsonStdoutLogger(service="autofix")
    results = anyio.run(run_self_test, RepairOracleClient(), config, LoggingUI(), obs)
    if not config.has_credential:
        return 2

    for result in results:
        print("\n--- Test Case ---")
        print("Input:", result.input)
        if result.passed:
            print("Fixed:", json.dumps(result.fixed))
        else:
            print("Error:", result.error)

    return 0 if all(r.passed for r in results) else 1


if __name__ == "__main__":
    raise SystemExit(main())
