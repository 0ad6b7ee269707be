from data_designer_slop_detect.evidence import dedupe_evidence, merge_evidence, union_evidence
from data_designer_slop_detect.heuristic import score_text
from data_designer_slop_detect.models import Category, EvidenceItem, Granularity, ModelResult


TEXT = (
    "In conclusion, this pivotal update is undeniably useful. "
    "honestly i think it's fine lol"
)


def _word(token, reason="model"):
    return EvidenceItem(token, reason, Category.AI, Granularity.WORD)


def _model(words=(), lines=()):
    return ModelResult.parse({
        "aiScore": 70,
        "confidence": 70,
        "suspiciousWords": [{"word": w, "reason": "model"} for w in words],
        "suspiciousLines": [{"text": t, "reason": "model"} for t in lines],
    })


class TestDedupe:
    def test_first_occurrence_wins(self):
        items = [_word("Pivotal", "first"), _word("pivotal", "second"), _word("update")]
        out = dedupe_evidence(items)
        assert [(i.token, i.reason) for i in out] == [("Pivotal", "first"), ("update", "model")]

    def test_union_keeps_primary_order(self):
        out = union_evidence([_word("b"), _word("A")], [_word("a"), _word("c")])
        assert [i.token for i in out] == ["b", "A", "c"]

    def test_union_with_itself_is_idempotent(self):
        items = [_word("one"), _word("ONE"), _word("two")]
        once = union_evidence(items, items)
        assert once == dedupe_evidence(items)
        assert union_evidence(once, once) == once


class TestMergeEvidence:
    def test_prefers_model_evidence(self):
        heur = score_text(TEXT)
        merged = merge_evidence(_model(words=["update"], lines=["is undeniably useful"]), heur)
        assert [i.token for i in merged.ai.words] == ["update"]
        assert [i.token for i in merged.ai.lines] == ["is undeniably useful"]

    def test_each_granularity_falls_back_independently(self):
        heur = score_text(TEXT)
        merged = merge_evidence(_model(words=["update"]), heur)
        assert [i.token for i in merged.ai.words] == ["update"]
        assert merged.ai.lines == heur.ai_evidence.lines
        assert [i.token for i in merged.ai.lines] == ["In conclusion"]

        merged = merge_evidence(_model(lines=["useful"]), heur)
        assert merged.ai.words == heur.ai_evidence.words

    def test_silent_model_uses_heuristic(self):
        heur = score_text(TEXT)
        merged = merge_evidence(_model(), heur)
        assert merged.ai == heur.ai_evidence

    def test_human_evidence_comes_from_heuristic(self):
        heur = score_text(TEXT)
        merged = merge_evidence(_model(words=["update"]), heur)
        assert merged.human == heur.human_evidence
        assert "lol" in {i.token for i in merged.human.words}

    def test_union_mode_combines_sources(self):
        heur = score_text(TEXT)
        merged = merge_evidence(_model(words=["update", "PIVOTAL"]), heur, union=True)
        tokens = [i.token for i in merged.ai.words]
        assert tokens == ["update", "PIVOTAL", "undeniably"]
        assert merged.ai.words[1].reason == "model"

    def test_merge_is_idempotent(self):
        heur = score_text(TEXT)
        model = _model(words=["update", "Update", "pivotal"])
        first = merge_evidence(model, heur, union=True)
        assert merge_evidence(model, heur, union=True) == first
        assert union_evidence(first.ai.words, first.ai.words) == first.ai.words

    def test_by_category(self):
        heur = score_text(TEXT)
        merged = merge_evidence(_model(), heur)
        assert merged.by_category() == {Category.AI: merged.ai, Category.HUMAN: merged.human}
