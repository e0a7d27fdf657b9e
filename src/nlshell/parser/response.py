"""Helpers for pulling JSON out of free-form LLM replies."""

from __future__ import annotations

import json
from typing import Any

from nlshell.exceptions import ExtractionError


def extract_json_object(text: str) -> dict[str, Any]:
    """Parse the span from the first ``{`` to the last ``}``.

    Replies are often wrapped in prose or a fenced code block, so the
    surrounding text is ignored.
    """
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end < start:
        raise ExtractionError("No JSON object found in LLM response")

    try:
        data = json.loads(text[start : end + 1])
    except json.JSONDecodeError as exc:
        raise ExtractionError(f"Malformed JSON from LLM: {exc}") from exc

    if not isinstance(data, dict):
        raise ExtractionError("LLM response JSON is not an object")
    return data
