# Helpers for the raw text a model returns before it becomes a ModelResult.

from __future__ import annotations

import json
import re
from typing import Any

from data_designer_slop_detect.models import InvalidModelResult

_JSON_OBJECT_RE = re.compile(r"\{[\s\S]*\}")

FINISH_REASONS = {
    "STOP": "The model ended normally without returning text.",
    "MAX_TOKENS": "The response hit the token limit.",
    "SAFETY": "Blocked by safety policies.",
    "RECITATION": "The model blocked content due to recitation policies.",
    "OTHER": "Blocked for unspecified reason.",
    "BLOCK_REASON_UNSPECIFIED": "Blocked by safety for an unspecified reason.",
}


def describe_finish_reason(reason: str | None) -> str:
    code = reason or "UNKNOWN"
    return FINISH_REASONS.get(code, f"Reason: {code}")


def parse_model_response(raw: str) -> dict[str, Any]:
    """Decode a model reply into a JSON object.

    Replies wrapped in prose or code fences are accepted as long as they hold
    one ``{...}`` block.
    """
    if not isinstance(raw, str) or not raw.strip():
        raise InvalidModelResult("empty model response")
    try:
        decoded = json.loads(raw)
    except ValueError:
        # also covers int literals past the digit limit, which raise a bare ValueError
        match = _JSON_OBJECT_RE.search(raw)
        if not match:
            raise InvalidModelResult("no JSON object found in model response") from None
        try:
            decoded = json.loads(match.group(0))
        except ValueError as exc:
            raise InvalidModelResult(f"malformed JSON in model response: {exc}") from exc
    if not isinstance(decoded, dict):
        raise InvalidModelResult(f"model response must be a JSON object, got {type(decoded).__name__}")
    return decoded
