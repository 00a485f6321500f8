from __future__ import annotations

import json
from typing import Any

from autofix.models import (
    NO_JSON_FOUND,
    UNPARSABLE_JSON,
    RepairFailure,
    RepairOutcome,
    RepairSuccess,
)


def _reject_constant(token: str) -> Any:
    raise ValueError(f"{token} is not a valid JSON value")


def strict_loads(text: str) -> Any:
    """Parse `text` as standard JSON, raising ValueError on anything else.

    Unlike plain `json.loads`, NaN/Infinity/-Infinity are rejected and input
    nested deeper than the decoder can handle is a parse error rather than a
    RecursionError.
    """

    try:
        return json.loads(text, parse_constant=_reject_constant)
    except RecursionError as exc:
        raise ValueError("JSON nested too deeply") from exc


def find_braced_span(text: str) -> str | None:
    """Return the text from the first "{" to the last "}", or None.

    This is a greedy heuristic, not a balanced-brace scan: prose containing two
    separate objects yields one span covering both (and fails to parse).
    """

    start, end = text.find("{"), text.rfind("}")
    if start == -1 or end < start:
        return None
    return text[start : end + 1]


def parse_repaired_content(content: str) -> RepairOutcome:
    """Interpret the oracle's reply text as JSON.

    Tries a full-string parse first, then salvages the braced span. Scalars and
    arrays are accepted on the direct path; the salvage path only finds objects.
    """

    try:
        return RepairSuccess(strict_loads(content))
    except ValueError:
        span = find_braced_span(content)
        if span is None:
            return RepairFailure(NO_JSON_FOUND)
        try:
            return RepairSuccess(strict_loads(span))
        except ValueError:
            return RepairFailure(UNPARSABLE_JSON)
