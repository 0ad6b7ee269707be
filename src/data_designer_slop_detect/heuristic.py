# Deterministic heuristic scorer.
#
# Scans text against the pattern library and returns a 0-100 AI-likelihood
# score, a confidence, ordered reason codes, and the matched evidence split by
# category (AI / human) and granularity (word / line).

from __future__ import annotations

import re
from dataclasses import dataclass

from data_designer_slop_detect.models import (
    Category,
    EvidenceBuckets,
    EvidenceItem,
    Granularity,
    HeuristicResult,
    clamp,
    round_half_up,
)
from data_designer_slop_detect.patterns import PATTERNS, SENSITIVITY_DEFAULT, Pattern, sensitivity_multiplier

# ---------------------------------------------------------------------------
# Hyperparameters
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Hyperparameters:
    """Tunable constants for scoring, blending and annotation."""

    neutral_score: int = 40
    points_per_weight: float = 6.0
    max_hits_per_pattern: int = 3
    confidence_floor: int = 20
    confidence_per_hit: int = 10
    confidence_ceiling: int = 90
    parity_penalty: float = 0.5

    weight_min: float = 0.15
    weight_max: float = 0.85
    weak_evidence_threshold: int = 2
    midrange_low: int = 30
    midrange_high: int = 55
    midrange_shift: float = 0.15
    disagreement_threshold: int = 20
    disagreement_max_adjust: float = 0.2
    blended_confidence_min: int = 10
    blended_confidence_max: int = 95

    min_token_length: int = 3
    symbol_token_min_length: int = 6
    max_word_spans: int = 12
    max_line_spans: int = 6

    score_min: int = 0
    score_max: int = 100


DEFAULT_HYPERPARAMETERS = Hyperparameters()

_WHITESPACE_RE = re.compile(r"\s+")


def normalize(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text).strip()


@dataclass
class _Tally:
    weight: float = 0.0
    hits: int = 0


def _add_evidence(bucket: dict[str, EvidenceItem], pattern: Pattern, token: str) -> None:
    item = EvidenceItem(token, pattern.reason, pattern.category, pattern.granularity)
    bucket.setdefault(item.key, item)


def _confidence(ai_hits: int, human_hits: int, hp: Hyperparameters) -> int:
    volume = ai_hits + human_hits
    base = min(hp.confidence_ceiling, hp.confidence_floor + hp.confidence_per_hit * volume)
    high = max(ai_hits, human_hits)
    parity = min(ai_hits, human_hits) / high if high else 0.0
    return round_half_up(clamp(base * (1 - hp.parity_penalty * parity), 0, 100))


def score_text(
    text: str,
    sensitivity: int | float = SENSITIVITY_DEFAULT,
    hyperparameters: Hyperparameters | None = None,
) -> HeuristicResult:
    """Score text for AI-leaning and human-leaning patterns.

    Args:
        text: The passage to analyze.
        sensitivity: 1-10 setting that scales every pattern weight (5 = unscaled).
        hyperparameters: Optional tuning overrides.

    Returns:
        A :class:`HeuristicResult`. Text with no matches gets the neutral score.
    """
    hp = hyperparameters or DEFAULT_HYPERPARAMETERS
    multiplier = sensitivity_multiplier(sensitivity)
    normalized = normalize(text)

    tallies = {Category.AI: _Tally(), Category.HUMAN: _Tally()}
    reason_weights: dict[str, float] = {}
    buckets: dict[tuple[Category, Granularity], dict[str, EvidenceItem]] = {
        (c, g): {} for c in Category for g in Granularity
    }

    for pattern in PATTERNS:
        matches = [m for m in pattern.regex.finditer(normalized) if m.group(0).strip()]
        if not matches:
            continue
        counted = min(len(matches), hp.max_hits_per_pattern)
        weight = pattern.weight * multiplier * counted
        tally = tallies[pattern.category]
        tally.weight += weight
        tally.hits += counted
        reason_weights[pattern.reason] = reason_weights.get(pattern.reason, 0.0) + weight
        for m in matches:
            _add_evidence(buckets[(pattern.category, pattern.granularity)], pattern, m.group(0))

    ai, human = tallies[Category.AI], tallies[Category.HUMAN]
    raw = hp.neutral_score + hp.points_per_weight * (ai.weight - human.weight)
    score = round_half_up(clamp(raw, hp.score_min, hp.score_max))

    # sorted() is stable, so equal weights keep first-seen order
    reasons = tuple(sorted(reason_weights, key=lambda r: -reason_weights[r]))

    def _bucket(category: Category) -> EvidenceBuckets:
        return EvidenceBuckets(
            words=tuple(buckets[(category, Granularity.WORD)].values()),
            lines=tuple(buckets[(category, Granularity.LINE)].values()),
        )

    return HeuristicResult(
        score=score,
        confidence=_confidence(ai.hits, human.hits, hp),
        reasons=reasons,
        ai_evidence=_bucket(Category.AI),
        human_evidence=_bucket(Category.HUMAN),
    )


def extract_suspicious(result: HeuristicResult) -> tuple[tuple[EvidenceItem, ...], tuple[EvidenceItem, ...]]:
    """AI evidence shaped like a model's ``suspiciousWords`` / ``suspiciousLines``."""
    return result.ai_evidence.words, result.ai_evidence.lines
