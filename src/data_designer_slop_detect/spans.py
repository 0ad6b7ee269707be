# Maps merged evidence onto the original text as non-overlapping spans.
#
# All matching runs against the original plain text. Rendering happens once,
# afterwards, from the span list.

from __future__ import annotations

import html
import re
from typing import Mapping, Sequence

from data_designer_slop_detect.heuristic import DEFAULT_HYPERPARAMETERS, Hyperparameters
from data_designer_slop_detect.models import Category, EvidenceBuckets, EvidenceItem, Granularity, MergedEvidence, Span
from data_designer_slop_detect.patterns import SHORT_TOKEN_ALLOWLIST

_PRIORITY: list[tuple[Category, Granularity]] = [
    (Category.AI, Granularity.WORD),
    (Category.AI, Granularity.LINE),
    (Category.HUMAN, Granularity.WORD),
    (Category.HUMAN, Granularity.LINE),
]

_CSS_CLASSES = {
    (Category.AI, Granularity.WORD): "slop-highlight",
    (Category.AI, Granularity.LINE): "slop-line-highlight",
    (Category.HUMAN, Granularity.WORD): "slop-human-highlight",
    (Category.HUMAN, Granularity.LINE): "slop-human-line-highlight",
}

_LETTER_RE = re.compile(r"[^\W\d_]")
_WORD_CHAR_RE = re.compile(r"\w")


def _keep(token: str, hp: Hyperparameters) -> bool:
    if len(token) < hp.min_token_length and token.lower() not in SHORT_TOKEN_ALLOWLIST:
        return False
    if not _LETTER_RE.search(token) and len(token) < hp.symbol_token_min_length:
        return False
    return True


def select_candidates(items: Sequence[EvidenceItem], limit: int, hp: Hyperparameters | None = None) -> list[EvidenceItem]:
    """Filter noisy tokens and keep the ``limit`` longest ones."""
    hp = hp or DEFAULT_HYPERPARAMETERS
    kept = [item for item in items if _keep(item.token.strip(), hp)]
    kept.sort(key=lambda item: len(item.token.strip()), reverse=True)
    return kept[:limit]


def _bounded(body: str, token: str) -> re.Pattern[str]:
    # boundaries only where the token edge is itself a word character
    head = r"(?<!\w)" if _WORD_CHAR_RE.match(token[0]) else ""
    tail = r"(?!\w)" if _WORD_CHAR_RE.match(token[-1]) else ""
    return re.compile(head + body + tail, re.IGNORECASE)


def find_matches(text: str, token: str) -> list[tuple[int, int]]:
    """Offsets of ``token`` in ``text``.

    Tries an exact case-insensitive match first, then one where each internal
    whitespace run in the token matches any whitespace run in the text.
    """
    token = token.strip()
    if not token:
        return []
    exact = _bounded(re.escape(token), token)
    found = [m.span() for m in exact.finditer(text)]
    if found:
        return found
    flexible = _bounded(r"\s+".join(re.escape(part) for part in token.split()), token)
    return [m.span() for m in flexible.finditer(text) if m.end() > m.start()]


def annotate(
    text: str,
    evidence: MergedEvidence | Mapping[Category, EvidenceBuckets],
    hyperparameters: Hyperparameters | None = None,
) -> list[Span]:
    """Turn evidence into sorted, non-overlapping spans over ``text``.

    Buckets are claimed in priority order: AI words, AI lines, human words,
    human lines. A match touching an already claimed range is dropped.
    """
    hp = hyperparameters or DEFAULT_HYPERPARAMETERS
    by_category = evidence.by_category() if isinstance(evidence, MergedEvidence) else evidence
    accepted: list[Span] = []

    for category, granularity in _PRIORITY:
        buckets = by_category.get(category)
        if buckets is None:
            continue
        if granularity is Granularity.WORD:
            items, limit = buckets.words, hp.max_word_spans
        else:
            items, limit = buckets.lines, hp.max_line_spans
        for item in select_candidates(items, limit, hp):
            for start, end in find_matches(text, item.token):
                if any(span.overlaps(start, end) for span in accepted):
                    continue
                accepted.append(Span(start, end, category, item.reason, granularity))

    accepted.sort(key=lambda span: span.start)
    return accepted


def render_html(text: str, spans: Sequence[Span]) -> str:
    """Escape ``text`` and wrap each span in a highlight ``<span>``."""
    parts: list[str] = []
    cursor = 0
    for span in sorted(spans, key=lambda s: s.start):
        if span.start < cursor:
            raise ValueError(f"overlapping span at offset {span.start}")
        reason = html.escape(span.reason, quote=True)
        css = _CSS_CLASSES[(span.category, span.granularity)]
        parts.append(html.escape(text[cursor : span.start]))
        parts.append(
            f'<span class="{css}" data-reason="{reason}" title="{reason}">'
            f"{html.escape(text[span.start : span.end])}</span>"
        )
        cursor = span.end
    parts.append(html.escape(text[cursor:]))
    return "".join(parts)
