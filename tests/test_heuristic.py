import pytest

from data_designer_slop_detect.heuristic import Hyperparameters, extract_suspicious, normalize, score_text
from data_designer_slop_detect.models import Category, Granularity


CLEAN_TEXT = (
    "The bridge collapsed at 3:47 a.m. on a Tuesday. "
    "River water pushed through the gap in under a minute. "
    "Two cars stopped short of the edge. "
    "A third did not. "
    "The county engineer had flagged corrosion in a report eighteen months earlier. "
    "No repairs were scheduled."
)

SLOPPY_TEXT = (
    "In today's fast-paced world, it's worth noting that this pivotal framework "
    "seamlessly leverages a rich tapestry of tools. Furthermore, it plays a crucial "
    "role in the realm of design. In conclusion, it is undeniably transformative."
)

HUMAN_TEXT = "lol i just can't believe my mom did that!! honestly idk what to say..."


class TestScoreText:
    def test_clean_text_is_neutral(self):
        result = score_text(CLEAN_TEXT)
        assert result.score == 40
        assert result.confidence == 20
        assert result.reasons == ()
        assert len(result.ai_evidence) == 0
        assert len(result.human_evidence) == 0

    def test_empty_text_is_neutral(self):
        result = score_text("")
        assert result.score == 40
        assert result.confidence == 20

    def test_sloppy_text_scores_high(self):
        result = score_text(SLOPPY_TEXT)
        assert result.score == 100
        assert result.confidence == 90
        assert result.reasons[:2] == ("cliche_phrase", "buzzword")
        lines = [item.token for item in result.ai_evidence.lines]
        assert "In today's fast-paced world" in lines
        assert "In conclusion" in lines
        assert all(item.category is Category.AI for item in result.ai_evidence.words)
        assert all(item.granularity is Granularity.WORD for item in result.ai_evidence.words)

    def test_human_text_scores_low(self):
        result = score_text(HUMAN_TEXT)
        assert result.score == 0
        assert result.confidence == 90
        words = {item.token for item in result.human_evidence.words}
        assert {"lol", "idk", "can't", "!!", "..."} <= words
        lines = {item.token for item in result.human_evidence.lines}
        assert {"i just", "my mom", "honestly"} <= lines
        assert len(result.ai_evidence) == 0

    def test_reasons_are_deduplicated(self):
        result = score_text(SLOPPY_TEXT)
        assert len(result.reasons) == len(set(result.reasons))

    def test_parity_lowers_confidence(self):
        mixed = score_text("Furthermore, lol.")
        one_sided = score_text("Furthermore, this works.")
        assert one_sided.confidence == 30
        assert mixed.confidence == 20
        assert mixed.confidence < one_sided.confidence

    def test_evidence_deduplicated_case_insensitively(self):
        result = score_text("Moreover, moreover, MOREOVER.")
        assert [item.token for item in result.ai_evidence.words] == ["Moreover"]
        assert result.score == 40 + 6 * 3

    def test_hits_per_pattern_are_capped(self):
        three = score_text("truly truly truly")
        five = score_text("truly truly truly truly truly")
        assert three.score == five.score
        assert three.confidence == five.confidence

    def test_sensitivity_scales_score(self):
        text = "Furthermore, it is undeniably pivotal."
        assert score_text(text, sensitivity=1).score == 44
        assert score_text(text).score == 61
        assert score_text(text, sensitivity=10).score == 82

    @pytest.mark.parametrize("sensitivity", [0, 11, True])
    def test_invalid_sensitivity_raises(self, sensitivity):
        with pytest.raises(ValueError):
            score_text(CLEAN_TEXT, sensitivity=sensitivity)

    def test_matching_ignores_whitespace_layout(self):
        result = score_text("In    conclusion,\n\tthe end.")
        assert [item.token for item in result.ai_evidence.lines] == ["In conclusion"]

    def test_custom_hyperparameters(self):
        flat = Hyperparameters(points_per_weight=0.0)
        assert score_text(SLOPPY_TEXT, hyperparameters=flat).score == 40

    def test_structural_markers(self):
        result = score_text("It is not only fast, but also cheap, simple, and reliable.")
        assert "structural_marker" in result.reasons


class TestHelpers:
    def test_normalize(self):
        assert normalize("  a \n\n b\tc  ") == "a b c"

    def test_extract_suspicious_returns_ai_evidence(self):
        result = score_text(SLOPPY_TEXT)
        words, lines = extract_suspicious(result)
        assert words == result.ai_evidence.words
        assert lines == result.ai_evidence.lines
