"""Value types passed between the parse hook and the repair oracle client."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

NO_CREDENTIAL = "no credential"
EMPTY_RESPONSE = "empty response"
NO_JSON_FOUND = "no JSON found in response"
UNPARSABLE_JSON = "unparsable repaired JSON"


def transport_error(detail: str) -> str:
    return f"transport error: {detail}"


def http_error(status: int) -> str:
    return f"http error: {status}"


@dataclass(frozen=True, slots=True)
class RepairSuccess:
    """The oracle produced a fully parsed JSON document."""

    value: Any

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class RepairFailure:
    """The repair attempt failed; `reason` is one of the fixed reason strings."""

    reason: str

    @property
    def ok(self) -> bool:
        return False


RepairOutcome = Union[RepairSuccess, RepairFailure]


@dataclass(frozen=True, slots=True)
class ToolCallContext:
    raw_args_text: str
    tool_name: str
