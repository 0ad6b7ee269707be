# AI-likelihood estimation for short passages of text.
#
# Blends an optional model verdict with a deterministic heuristic score, then
# maps the supporting evidence onto the text as non-overlapping highlight spans.

from __future__ import annotations

import logging
from typing import Any, Mapping

from data_designer_slop_detect.blend import blend_or_fallback, heuristic_fallback
from data_designer_slop_detect.evidence import merge_evidence
from data_designer_slop_detect.heuristic import Hyperparameters
from data_designer_slop_detect.models import InvalidModelResult
from data_designer_slop_detect.patterns import SENSITIVITY_DEFAULT
from data_designer_slop_detect.response import describe_finish_reason, parse_model_response
from data_designer_slop_detect.spans import annotate

logger = logging.getLogger(__name__)

NO_MODEL_NOTE = "No model result supplied"


def analyze_text(
    text: str,
    model_payload: str | Mapping[str, Any] | None = None,
    sensitivity: int | float = SENSITIVITY_DEFAULT,
    hyperparameters: Hyperparameters | None = None,
    union_evidence: bool = False,
    finish_reason: str | None = None,
) -> dict:
    """Estimate how likely ``text`` is machine-generated.

    Args:
        text: The passage to analyze.
        model_payload: The model's verdict, as raw reply text or a decoded
            object. ``None`` or an empty reply means heuristic only.
        sensitivity: 1-10 heuristic sensitivity (5 = default weights).
        hyperparameters: Optional tuning overrides.
        union_evidence: Highlight the union of model and heuristic AI evidence
            instead of falling back to the heuristic only when the model is silent.
        finish_reason: The model's termination reason, used to explain an
            empty reply.

    Returns:
        Dict with keys: aiScore, confidence, suspiciousWords, suspiciousLines,
        analysis, reasoning, heuristicOnly, explain, spans.
    """
    if model_payload is None or (isinstance(model_payload, str) and not model_payload.strip()):
        note = NO_MODEL_NOTE
        if finish_reason is not None:
            note = f"No text content in model response. {describe_finish_reason(finish_reason)}"
        result = heuristic_fallback(text, note, sensitivity=sensitivity, hyperparameters=hyperparameters)
    else:
        payload: Any = model_payload
        if isinstance(model_payload, str):
            try:
                payload = parse_model_response(model_payload)
            except InvalidModelResult as exc:
                logger.warning(f"Could not parse model response, using heuristic only: {exc}")
                payload = None
        if payload is None:
            result = heuristic_fallback(
                text,
                "Used heuristic estimator due to model response parse failure",
                sensitivity=sensitivity,
                hyperparameters=hyperparameters,
            )
        else:
            result = blend_or_fallback(text, payload, sensitivity=sensitivity, hyperparameters=hyperparameters)

    evidence = merge_evidence(result, result.explain.heuristic, union=union_evidence)
    spans = annotate(text, evidence, hyperparameters=hyperparameters)

    payload_out = result.to_payload()
    payload_out["spans"] = [span.to_payload() for span in spans]
    return payload_out
