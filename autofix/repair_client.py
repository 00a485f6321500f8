""" Client for the remote JSON repair oracle (an OpenAI-style chat completions endpoint). """

from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass
from typing import Any, Awaitable

import httpx
import openai
from openai import AsyncOpenAI

from autofix.json_utils import parse_repaired_content
from autofix.models import (
    EMPTY_RESPONSE,
    NO_CREDENTIAL,
    RepairFailure,
    RepairOutcome,
    http_error,
    transport_error,
)
from autofix.settings import RepairConfig

REPAIR_INSTRUCTION = "Fix this broken JSON and return ONLY valid JSON, no explanation:"
CANCELLED_DETAIL = "request cancelled"


class _RequestCancelled(Exception):
    pass


def build_messages(broken_text: str) -> list[dict[str, str]]:
    return [{"role": "user", "content": f"{REPAIR_INSTRUCTION}\n\n{broken_text}"}]


def _first_choice_content(resp: Any) -> str | None:
    choices = getattr(resp, "choices", None)
    if not choices:
        return None
    message = getattr(choices[0], "message", None)
    content = getattr(message, "content", None)
    return content if isinstance(content, str) else None


def _describe(exc: Exception) -> str:
    cause = exc.__cause__
    if cause is not None and str(cause):
        return f"{exc} ({cause})"
    return str(exc) or type(exc).__name__


async def _await_unless_cancelled(request: Awaitable[Any], cancel: asyncio.Event | None) -> Any:
    """Await `request`, abandoning it as soon as `cancel` is set."""
    if cancel is None:
        return await request

    task = asyncio.ensure_future(request)
    waiter = asyncio.ensure_future(cancel.wait())
    try:
        await asyncio.wait({task, waiter}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        waiter.cancel()
        if not task.done():
            task.cancel()
            await asyncio.wait({task})
    if task.cancelled():
        raise _RequestCancelled()
    return task.result()


@dataclass(slots=True)
class RepairOracleClient:
    """Send broken JSON to the repair oracle and interpret its reply.

    Every failure mode is returned as a `RepairFailure`; nothing is raised for
    transport, HTTP or parse problems. Retries are disabled so a call makes at
    most one request.

    `http_client` may be injected to share a connection pool or to fake the
    transport in tests. It is never closed by this class.
    """

    http_client: httpx.AsyncClient | None = None

    def _sdk_client(self, config: RepairConfig) -> AsyncOpenAI:
        return AsyncOpenAI(
            api_key=config.api_key,
            base_url=config.base_url,
            timeout=config.timeout_seconds,
            max_retries=0,
            http_client=self.http_client,
        )

    async def repair(
        self,
        broken_text: str,
        config: RepairConfig,
        cancel: asyncio.Event | None = None,
    ) -> RepairOutcome:
        if not config.api_key:
            return RepairFailure(NO_CREDENTIAL)
        if cancel is not None and cancel.is_set():
            return RepairFailure(transport_error(CANCELLED_DETAIL))

        client = self._sdk_client(config)
        try:
            resp = await _await_unless_cancelled(
                client.chat.completions.create(
                    model=config.model,
                    temperature=config.temperature,
                    messages=build_messages(broken_text),
                    response_format={"type": "json_object"},
                ),
                cancel,
            )
        except _RequestCancelled:
            return RepairFailure(transport_error(CANCELLED_DETAIL))
        except openai.APIStatusError as exc:
            return RepairFailure(http_error(exc.status_code))
        except openai.APIConnectionError as exc:
            return RepairFailure(transport_error(_describe(exc)))
        except (openai.APIResponseValidationError, json.JSONDecodeError):
            # 2xx with a body that is not a chat completion envelope.
            return RepairFailure(EMPTY_RESPONSE)
        finally:
            if self.http_client is None:
                await client.close()

        content = _first_choice_content(resp)
        if not content:
            return RepairFailure(EMPTY_RESPONSE)
        return parse_repaired_content(content)
