# Static word and phrase lists behind the heuristic scorer.
#
# Each list is compiled once at import time into immutable ``Pattern`` records.
# AI-leaning patterns push the heuristic score up, human-leaning patterns pull
# it down. Word-granularity patterns match single words; line-granularity
# patterns match phrases or multi-word structures.

from __future__ import annotations

import re
from dataclasses import dataclass

from data_designer_slop_detect.models import Category, Granularity

LIBRARY_VERSION = "2025.1"

SENSITIVITY_MIN = 1
SENSITIVITY_MAX = 10
SENSITIVITY_DEFAULT = 5

SHORT_TOKEN_ALLOWLIST = frozenset({"ai", "gpt"})


@dataclass(frozen=True)
class Pattern:
    name: str
    category: Category
    granularity: Granularity
    reason: str
    weight: float
    regex: re.Pattern[str]


# ---------------------------------------------------------------------------
# AI-leaning vocabulary
# ---------------------------------------------------------------------------

_BUZZWORDS = [
    "delve", "delves", "delving", "tapestry", "testament", "paradigm", "realm",
    "multifaceted", "holistic", "seamless", "seamlessly", "pivotal", "leverage",
    "leveraging", "synergy", "robust", "intricate", "intricacies", "landscape",
    "foster", "fostering", "underscore", "underscores", "showcase", "showcasing",
    "navigate", "navigating", "transformative", "unparalleled", "meticulous",
    "game-changer", "cutting-edge", "ever-evolving", "invaluable", "embark",
]
_FORMAL_TRANSITIONS = [
    "furthermore", "moreover", "additionally", "consequently", "nevertheless",
    "notably", "subsequently", "ultimately", "overall",
]
_INTENSIFIERS = [
    "undeniably", "undoubtedly", "incredibly", "truly", "remarkably",
    "profoundly", "significantly", "arguably",
]

_CLICHE_PHRASES = [
    "in conclusion", "in summary", "to sum up", "in today's fast-paced world",
    "in today's digital age", "at the end of the day", "let's dive in",
    "let's delve into", "a testament to", "plays a crucial role",
    "plays a pivotal role", "in the realm of", "the world of",
    "stands as a", "serves as a", "when it comes to",
    "navigate the complexities", "unlock the potential", "rich tapestry",
    "ever-evolving landscape", "i hope this helps", "feel free to",
]
_GENERIC_HEDGING = [
    "it's worth noting", "it is worth noting", "it's important to note",
    "it is important to note", "it's important to remember",
    "it is important to remember", "it can be argued", "one could argue",
    "generally speaking", "to some extent", "in many ways", "studies show",
    "experts suggest", "many believe",
]
_AI_DISCLOSURE = [
    "as an ai", "as a language model", "as an ai language model",
    "i don't have personal opinions", "as of my last update",
    "as of my knowledge cutoff",
]

# ---------------------------------------------------------------------------
# Human-leaning vocabulary
# ---------------------------------------------------------------------------

_CONTRACTIONS = [
    "gonna", "wanna", "gotta", "kinda", "sorta", "dunno", "y'all", "ain't",
    "can't", "won't", "don't", "didn't", "isn't", "wasn't", "i'm", "i've",
    "i'd", "i'll", "that's", "there's",
]
_SLANG = [
    "lol", "lmao", "tbh", "imo", "imho", "idk", "omg", "ngl", "btw", "smh",
    "ugh", "meh", "nah", "yeah", "yep", "dude", "bro",
]
_FIRST_PERSON = [
    "i remember", "i think", "i guess", "i swear", "i was", "i just",
    "my mom", "my dad", "my wife", "my husband", "my kid", "my friend",
    "yesterday i", "last night", "last week", "this morning", "the other day",
    "honestly", "personally",
]


def _word_re(word: str) -> re.Pattern[str]:
    return re.compile(r"(?<![\w'-])" + re.escape(word) + r"(?![\w'-])", re.IGNORECASE)


def _phrase_re(phrase: str) -> re.Pattern[str]:
    body = r"\s+".join(re.escape(part) for part in phrase.split())
    return re.compile(r"(?<!\w)" + body + r"(?!\w)", re.IGNORECASE)


def _build(
    words: list[str],
    category: Category,
    granularity: Granularity,
    reason: str,
    weight: float,
) -> list[Pattern]:
    compile_one = _word_re if granularity is Granularity.WORD else _phrase_re
    return [Pattern(w, category, granularity, reason, weight, compile_one(w)) for w in words]


_STRUCTURAL = [
    Pattern(
        "triadic_list", Category.AI, Granularity.LINE, "structural_marker", 1.0,
        re.compile(r"\b\w+, \w+,? and \w+\b", re.IGNORECASE),
    ),
    Pattern(
        "not_only_but_also", Category.AI, Granularity.LINE, "structural_marker", 1.5,
        re.compile(r"\bnot (?:just|only) [^.!?]{1,40}?,? but (?:also )?\w+", re.IGNORECASE),
    ),
    Pattern(
        "em_dash", Category.AI, Granularity.WORD, "em_dash", 0.5,
        re.compile("—"),
    ),
]

_IRREGULAR_PUNCTUATION = [
    Pattern(
        "repeated_marks", Category.HUMAN, Granularity.WORD, "irregular_punctuation", 1.0,
        re.compile(r"[!?]{2,}"),
    ),
    Pattern(
        "trailing_ellipsis", Category.HUMAN, Granularity.WORD, "irregular_punctuation", 0.5,
        re.compile(r"\.{3,}|…"),
    ),
    Pattern(
        "lowercase_i", Category.HUMAN, Granularity.WORD, "irregular_casing", 1.0,
        re.compile(r"(?<![\w'])i(?=\s)"),
    ),
]

PATTERNS: tuple[Pattern, ...] = tuple(
    _build(_BUZZWORDS, Category.AI, Granularity.WORD, "buzzword", 1.5)
    + _build(_FORMAL_TRANSITIONS, Category.AI, Granularity.WORD, "formal_transition", 1.0)
    + _build(_INTENSIFIERS, Category.AI, Granularity.WORD, "intensifier", 1.0)
    + _build(_CLICHE_PHRASES, Category.AI, Granularity.LINE, "cliche_phrase", 2.5)
    + _build(_GENERIC_HEDGING, Category.AI, Granularity.LINE, "generic_hedging", 2.0)
    + _build(_AI_DISCLOSURE, Category.AI, Granularity.LINE, "ai_disclosure", 5.0)
    + _STRUCTURAL
    + _build(_CONTRACTIONS, Category.HUMAN, Granularity.WORD, "informal_contraction", 1.0)
    + _build(_SLANG, Category.HUMAN, Granularity.WORD, "casual_slang", 2.0)
    + _build(_FIRST_PERSON, Category.HUMAN, Granularity.LINE, "first_person_anecdote", 1.5)
    + _IRREGULAR_PUNCTUATION
)


def sensitivity_multiplier(sensitivity: int | float) -> float:
    """Map the 1-10 sensitivity setting onto a pattern weight multiplier.

    The default setting (5) leaves weights unchanged.
    """
    if isinstance(sensitivity, bool) or not SENSITIVITY_MIN <= sensitivity <= SENSITIVITY_MAX:
        raise ValueError(
            f"sensitivity must be between {SENSITIVITY_MIN} and {SENSITIVITY_MAX}, got {sensitivity!r}"
        )
    return sensitivity / SENSITIVITY_DEFAULT
