# Value types shared by the scorer, blender, merger and annotator.
#
# Internal results are frozen dataclasses with ``to_payload`` serialisers. The
# only untrusted input, the model collaborator's JSON, is validated with pydantic.

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator


class InvalidModelResult(ValueError):
    """The model collaborator returned a result that cannot be blended."""


class Category(str, Enum):
    AI = "ai"
    HUMAN = "human"


class Granularity(str, Enum):
    WORD = "word"
    LINE = "line"


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


# ---------------------------------------------------------------------------
# Evidence
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class EvidenceItem:
    token: str
    reason: str
    category: Category
    granularity: Granularity

    def __post_init__(self) -> None:
        if not isinstance(self.token, str) or not self.token.strip():
            raise ValueError("evidence token must be non-empty")

    @property
    def key(self) -> str:
        return self.token.strip().lower()

    def to_payload(self) -> dict[str, str]:
        label = "word" if self.granularity is Granularity.WORD else "text"
        return {label: self.token, "reason": self.reason}


@dataclass(frozen=True)
class EvidenceBuckets:
    words: tuple[EvidenceItem, ...] = ()
    lines: tuple[EvidenceItem, ...] = ()

    def __len__(self) -> int:
        return len(self.words) + len(self.lines)

    def to_payload(self) -> dict[str, list[dict[str, str]]]:
        return {
            "words": [item.to_payload() for item in self.words],
            "lines": [item.to_payload() for item in self.lines],
        }


@dataclass(frozen=True)
class HeuristicResult:
    score: int
    confidence: int
    reasons: tuple[str, ...]
    ai_evidence: EvidenceBuckets
    human_evidence: EvidenceBuckets

    def to_payload(self) -> dict[str, object]:
        return {
            "score": self.score,
            "confidence": self.confidence,
            "reasons": list(self.reasons),
            "aiEvidence": self.ai_evidence.to_payload(),
            "humanEvidence": self.human_evidence.to_payload(),
        }


@dataclass(frozen=True)
class MergedEvidence:
    ai: EvidenceBuckets
    human: EvidenceBuckets

    def by_category(self) -> dict[Category, EvidenceBuckets]:
        return {Category.AI: self.ai, Category.HUMAN: self.human}


@dataclass(frozen=True)
class Span:
    start: int
    end: int
    category: Category
    reason: str
    granularity: Granularity = Granularity.WORD

    def overlaps(self, start: int, end: int) -> bool:
        return self.start < end and start < self.end

    def to_payload(self) -> dict[str, object]:
        return {
            "start": self.start,
            "end": self.end,
            "category": self.category.value,
            "granularity": self.granularity.value,
            "reason": self.reason,
        }


# ---------------------------------------------------------------------------
# Model collaborator result
# ---------------------------------------------------------------------------

DEFAULT_WORD_REASON = "AI evidence"
DEFAULT_LINE_REASON = "AI pattern"


def _coerce_evidence(raw: Any, granularity: Granularity) -> list[EvidenceItem]:
    if not isinstance(raw, list):
        return []
    keys = ("word",) if granularity is Granularity.WORD else ("text", "line")
    default_reason = DEFAULT_WORD_REASON if granularity is Granularity.WORD else DEFAULT_LINE_REASON
    items: list[EvidenceItem] = []
    for entry in raw:
        if isinstance(entry, Mapping):
            token = next((entry[k] for k in keys if entry.get(k)), None)
            reason = entry.get("reason") or default_reason
        else:
            token, reason = entry, default_reason
        if token is None or isinstance(token, (Mapping, list)):
            continue
        token = str(token)
        if not token.strip():
            continue
        items.append(EvidenceItem(token, str(reason), Category.AI, granularity))
    return items


def _checked_score(value: Any) -> int:
    # bool is an int subclass but never a score
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"expected a number, got {type(value).__name__}")
    # ints may be too large for a float; clamp them without converting
    if isinstance(value, int):
        return int(clamp(value, 0, 100))
    if not math.isfinite(value):
        raise ValueError(f"expected a finite number, got {value!r}")
    return int(clamp(round_half_up(value), 0, 100))


class ModelAnalysis(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    tone: str = ""
    patterns: str = ""
    content: str = ""

    @field_validator("tone", "patterns", "content", mode="before")
    @classmethod
    def _stringify(cls, value: Any) -> str:
        return "" if value is None else str(value)


class ModelResult(BaseModel):
    """Validated result returned by the remote model.

    Built from the model's camelCase JSON. Scores are rounded and clamped to
    0-100, evidence arrays default to empty, and anything unusable raises
    :class:`InvalidModelResult` from :meth:`parse`.
    """

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    ai_score: int = Field(alias="aiScore")
    confidence: int
    suspicious_words: tuple[EvidenceItem, ...] = Field(default=(), alias="suspiciousWords")
    suspicious_lines: tuple[EvidenceItem, ...] = Field(default=(), alias="suspiciousLines")
    analysis: ModelAnalysis = Field(default_factory=ModelAnalysis)
    reasoning: str = ""

    @field_validator("ai_score", "confidence", mode="before")
    @classmethod
    def _check_score(cls, value: Any) -> int:
        return _checked_score(value)

    @field_validator("suspicious_words", mode="before")
    @classmethod
    def _words(cls, value: Any) -> tuple[EvidenceItem, ...]:
        return tuple(_coerce_evidence(value, Granularity.WORD))

    @field_validator("suspicious_lines", mode="before")
    @classmethod
    def _lines(cls, value: Any) -> tuple[EvidenceItem, ...]:
        return tuple(_coerce_evidence(value, Granularity.LINE))

    @field_validator("analysis", mode="before")
    @classmethod
    def _analysis(cls, value: Any) -> Any:
        return value if isinstance(value, (Mapping, ModelAnalysis)) else {}

    @field_validator("reasoning", mode="before")
    @classmethod
    def _reasoning(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @property
    def evidence_count(self) -> int:
        return len(self.suspicious_words) + len(self.suspicious_lines)

    @classmethod
    def parse(cls, payload: Any) -> ModelResult:
        if isinstance(payload, ModelResult):
            return payload
        if not isinstance(payload, Mapping):
            raise InvalidModelResult(f"model result must be an object, got {type(payload).__name__}")
        try:
            return cls.model_validate(dict(payload))
        except ValidationError as exc:
            raise InvalidModelResult(f"invalid model result: {exc.errors()[0]['msg']}") from exc


# ---------------------------------------------------------------------------
# Blend output
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ModelTrace:
    score: int
    confidence: int
    evidence_count: int

    def to_payload(self) -> dict[str, int]:
        return {"score": self.score, "confidence": self.confidence, "evidenceCount": self.evidence_count}


@dataclass(frozen=True)
class BlendTrace:
    blended: int
    model_weight: float
    heuristic_weight: float
    disagreement: int

    def to_payload(self) -> dict[str, object]:
        return {
            "blended": self.blended,
            "weights": {"model": self.model_weight, "heuristic": self.heuristic_weight},
            "disagreement": self.disagreement,
        }


@dataclass(frozen=True)
class ExplainTrace:
    model: ModelTrace | None
    heuristic: HeuristicResult
    blend: BlendTrace

    def signal_balance(self) -> tuple[int, int]:
        """Share of AI-leaning vs human-leaning heuristic signals, in percent."""
        ai_count = len(self.heuristic.ai_evidence)
        human_count = len(self.heuristic.human_evidence)
        total = max(1, ai_count + human_count)
        ai_pct = round_half_up(ai_count / total * 100)
        return ai_pct, 100 - ai_pct

    def top_reasons(self, limit: int = 4) -> list[str]:
        return [reason.replace("_", " ") for reason in self.heuristic.reasons[:limit]]

    def to_payload(self) -> dict[str, object]:
        return {
            "model": self.model.to_payload() if self.model else None,
            "heuristic": self.heuristic.to_payload(),
            "blend": self.blend.to_payload(),
        }


@dataclass(frozen=True)
class BlendedResult:
    ai_score: int
    confidence: int
    suspicious_words: tuple[EvidenceItem, ...]
    suspicious_lines: tuple[EvidenceItem, ...]
    analysis: ModelAnalysis
    reasoning: str
    explain: ExplainTrace
    heuristic_only: bool = False

    def to_payload(self) -> dict[str, object]:
        return {
            "aiScore": self.ai_score,
            "confidence": self.confidence,
            "suspiciousWords": [item.to_payload() for item in self.suspicious_words],
            "suspiciousLines": [item.to_payload() for item in self.suspicious_lines],
            "analysis": self.analysis.model_dump(),
            "reasoning": self.reasoning,
            "heuristicOnly": self.heuristic_only,
            "explain": self.explain.to_payload(),
        }
