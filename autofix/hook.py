"""Tool-call argument parser that falls back to the repair oracle.

The host hands every raw tool-call argument string to `ParseRecoveryHook`.
Valid JSON is returned as-is without touching the network. Anything else is
sent to the repair oracle while a per-call working status is shown; the
repaired value is returned on success, and `{}` on any failure so the host
pipeline never sees an exception from argument parsing.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from autofix.json_utils import strict_loads
from autofix.models import RepairOutcome, RepairSuccess, ToolCallContext
from autofix.obs import Logger, NullLogger, with_span
from autofix.repair_client import RepairOracleClient
from autofix.settings import RepairConfig
from autofix.status import WorkingStatusBoard
from autofix.ui import HostUI, NotifyLevel

logger = logging.getLogger(__name__)


def _repair_span_fields(_hook: Any, raw_args_text: str, tool_name: str, *args: Any, **kwargs: Any) -> dict[str, Any]:
    return {"tool": tool_name, "raw_len": len(raw_args_text or "")}


class ParseRecoveryHook:
    def __init__(
        self,
        config: RepairConfig,
        ui: HostUI,
        *,
        client: RepairOracleClient | None = None,
        obs: Logger | None = None,
        status: WorkingStatusBoard | None = None,
    ):
        self._config = config
        self._ui = ui
        self._client = client or RepairOracleClient()
        self._obs: Logger = obs or NullLogger()
        self._status = status or WorkingStatusBoard(ui)

    @property
    def config(self) -> RepairConfig:
        return self._config

    async def __call__(self, raw_args_text: str, tool_name: str) -> Any:
        return await self.handle(raw_args_text, tool_name)

    async def parse(self, ctx: ToolCallContext, cancel: asyncio.Event | None = None) -> Any:
        return await self.handle(ctx.raw_args_text, ctx.tool_name, cancel=cancel)

    async def handle(
        self,
        raw_args_text: str,
        tool_name: str,
        cancel: asyncio.Event | None = None,
    ) -> Any:
        """Return the parsed arguments, a repaired value, or `{}`. Never raises."""
        try:
            return strict_loads(raw_args_text)
        except (ValueError, TypeError) as exc:
            logger.debug("ParseRecoveryHook: local parse failed for %s: %s", tool_name, exc)

        try:
            with self._status.scope(f"Fixing JSON for {tool_name}..."):
                outcome = await self._repair(raw_args_text, tool_name, cancel)
        except Exception as exc:  # noqa: BLE001
            logger.exception("ParseRecoveryHook: repair crashed for %s", tool_name)
            self._obs.error(
                "autofix.hook.fault",
                tool=tool_name,
                error_type=type(exc).__name__,
                error=str(exc),
            )
            self._notify(tool_name, f"Could not fix JSON for {tool_name}: internal error: {exc}", "warning")
            return {}

        if isinstance(outcome, RepairSuccess):
            self._obs.info("autofix.hook.repaired", tool=tool_name)
            self._notify(tool_name, f"Fixed JSON for {tool_name}", "info")
            return outcome.value

        self._obs.warn("autofix.hook.fallback", tool=tool_name, reason=outcome.reason)
        self._notify(tool_name, f"Could not fix JSON for {tool_name}: {outcome.reason}", "warning")
        return {}

    def _notify(self, tool_name: str, message: str, level: NotifyLevel) -> None:
        try:
            self._ui.notify(message, level)
        except Exception as exc:  # noqa: BLE001
            logger.exception("ParseRecoveryHook: notify failed for %s", tool_name)
            self._obs.error(
                "autofix.hook.notify_failed",
                tool=tool_name,
                error_type=type(exc).__name__,
                error=str(exc),
            )

    @with_span("autofix.repair", logger_attr="_obs", fields_fn=_repair_span_fields)
    async def _repair(
        self,
        raw_args_text: str,
        tool_name: str,
        cancel: asyncio.Event | None,
    ) -> RepairOutcome:
        return await self._client.repair(raw_args_text, self._config, cancel)
