# Confidence-weighted blending of a model result with the heuristic result.

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from data_designer_slop_detect.heuristic import DEFAULT_HYPERPARAMETERS, Hyperparameters, extract_suspicious, score_text
from data_designer_slop_detect.models import (
    BlendedResult,
    BlendTrace,
    ExplainTrace,
    HeuristicResult,
    InvalidModelResult,
    ModelAnalysis,
    ModelResult,
    ModelTrace,
    clamp,
    round_half_up,
)
from data_designer_slop_detect.patterns import SENSITIVITY_DEFAULT

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BlendWeights:
    model: float
    heuristic: float
    disagreement: int


def blend_weights(
    model_score: int,
    model_confidence: int,
    model_evidence: int,
    heur_score: int,
    heur_confidence: int,
    hyperparameters: Hyperparameters | None = None,
) -> BlendWeights:
    """Normalized model/heuristic weights for one blend.

    Weights start from each side's confidence, shift toward the heuristic when
    the model is mid-range without supporting evidence, and are pulled toward
    an even split as the two scores disagree.
    """
    hp = hyperparameters or DEFAULT_HYPERPARAMETERS
    weak = model_evidence < hp.weak_evidence_threshold
    disagreement = abs(model_score - heur_score)

    m_w = clamp(model_confidence / 100, hp.weight_min, hp.weight_max)
    h_w = clamp(heur_confidence / 100, hp.weight_min, hp.weight_max)

    if weak and hp.midrange_low <= model_score <= hp.midrange_high:
        h_w += hp.midrange_shift
        m_w -= hp.midrange_shift

    if disagreement >= hp.disagreement_threshold:
        adj = min(hp.disagreement_max_adjust, (disagreement - hp.disagreement_threshold) / 100)
        avg = (m_w + h_w) / 2
        m_w = avg - adj / 2
        h_w = avg + adj / 2

    total = m_w + h_w
    return BlendWeights(model=m_w / total, heuristic=h_w / total, disagreement=disagreement)


def blend(
    text: str,
    model: ModelResult | Any,
    sensitivity: int | float = SENSITIVITY_DEFAULT,
    hyperparameters: Hyperparameters | None = None,
) -> BlendedResult:
    """Blend a model result with the heuristic score for the same text.

    Raises:
        InvalidModelResult: The model's score or confidence is missing or not
            a finite number.
    """
    hp = hyperparameters or DEFAULT_HYPERPARAMETERS
    model = ModelResult.parse(model)
    heur = score_text(text, sensitivity=sensitivity, hyperparameters=hp)

    weights = blend_weights(
        model.ai_score, model.confidence, model.evidence_count, heur.score, heur.confidence, hp
    )
    blended_score = round_half_up(
        clamp(weights.model * model.ai_score + weights.heuristic * heur.score, hp.score_min, hp.score_max)
    )
    blended_confidence = round_half_up(
        clamp(
            model.confidence * weights.model + heur.confidence * weights.heuristic,
            hp.blended_confidence_min,
            hp.blended_confidence_max,
        )
    )
    logger.debug(
        f"blend: model={model.ai_score}/{model.confidence} heuristic={heur.score}/{heur.confidence} "
        f"weights={weights.model:.2f}/{weights.heuristic:.2f} -> {blended_score}"
    )

    explain = ExplainTrace(
        model=ModelTrace(model.ai_score, model.confidence, model.evidence_count),
        heuristic=heur,
        blend=BlendTrace(
            blended=blended_score,
            model_weight=round(weights.model, 2),
            heuristic_weight=round(weights.heuristic, 2),
            disagreement=weights.disagreement,
        ),
    )
    return BlendedResult(
        ai_score=blended_score,
        confidence=blended_confidence,
        suspicious_words=model.suspicious_words,
        suspicious_lines=model.suspicious_lines,
        analysis=model.analysis,
        reasoning=model.reasoning,
        explain=explain,
    )


def heuristic_fallback(
    text: str,
    note: str,
    sensitivity: int | float = SENSITIVITY_DEFAULT,
    hyperparameters: Hyperparameters | None = None,
    heuristic: HeuristicResult | None = None,
) -> BlendedResult:
    """Heuristic-only result used when there is no usable model result."""
    hp = hyperparameters or DEFAULT_HYPERPARAMETERS
    heur = heuristic or score_text(text, sensitivity=sensitivity, hyperparameters=hp)
    words, lines = extract_suspicious(heur)
    confidence = round_half_up(clamp(heur.confidence, hp.blended_confidence_min, hp.blended_confidence_max))
    return BlendedResult(
        ai_score=heur.score,
        confidence=confidence,
        suspicious_words=words,
        suspicious_lines=lines,
        analysis=ModelAnalysis(
            tone="Heuristic fallback used; model result unavailable",
            patterns=", ".join(heur.reasons) or "N/A",
            content="Model result discarded",
        ),
        reasoning=note,
        explain=ExplainTrace(
            model=None,
            heuristic=heur,
            blend=BlendTrace(blended=heur.score, model_weight=0.0, heuristic_weight=1.0, disagreement=0),
        ),
        heuristic_only=True,
    )


def blend_or_fallback(
    text: str,
    payload: Any,
    sensitivity: int | float = SENSITIVITY_DEFAULT,
    hyperparameters: Hyperparameters | None = None,
) -> BlendedResult:
    """Blend, or fall back to the heuristic alone when the model result is invalid."""
    try:
        return blend(text, payload, sensitivity=sensitivity, hyperparameters=hyperparameters)
    except InvalidModelResult as exc:
        logger.warning(f"Discarding model result, using heuristic only: {exc}")
        return heuristic_fallback(
            text,
            f"Used heuristic estimator: {exc}",
            sensitivity=sensitivity,
            hyperparameters=hyperparameters,
        )
