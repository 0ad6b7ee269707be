# Merging of model-supplied and heuristic evidence.

from __future__ import annotations

from typing import Iterable, Protocol, Sequence

from data_designer_slop_detect.models import EvidenceBuckets, EvidenceItem, HeuristicResult, MergedEvidence


class _HasSuspicious(Protocol):
    suspicious_words: Sequence[EvidenceItem]
    suspicious_lines: Sequence[EvidenceItem]


def dedupe_evidence(items: Iterable[EvidenceItem]) -> tuple[EvidenceItem, ...]:
    """Drop repeated tokens (case-insensitive); the first occurrence wins."""
    seen: set[str] = set()
    out: list[EvidenceItem] = []
    for item in items:
        if item.key not in seen:
            seen.add(item.key)
            out.append(item)
    return tuple(out)


def union_evidence(primary: Iterable[EvidenceItem], secondary: Iterable[EvidenceItem]) -> tuple[EvidenceItem, ...]:
    return dedupe_evidence([*primary, *secondary])


def _prefer(primary: Sequence[EvidenceItem], fallback: Sequence[EvidenceItem]) -> tuple[EvidenceItem, ...]:
    return dedupe_evidence(primary if primary else fallback)


def merge_evidence(model: _HasSuspicious, heur: HeuristicResult, union: bool = False) -> MergedEvidence:
    """Combine model and heuristic evidence into per-category buckets.

    Model words and lines are preferred; each granularity falls back to the
    heuristic independently when the model supplied none. With ``union=True``
    the AI lists become the deduplicated union of model then heuristic items.
    Human evidence only ever comes from the heuristic.
    """
    combine = union_evidence if union else _prefer
    ai = EvidenceBuckets(
        words=combine(model.suspicious_words, heur.ai_evidence.words),
        lines=combine(model.suspicious_lines, heur.ai_evidence.lines),
    )
    human = EvidenceBuckets(
        words=dedupe_evidence(heur.human_evidence.words),
        lines=dedupe_evidence(heur.human_evidence.lines),
    )
    return MergedEvidence(ai=ai, human=human)
