import math

from data_designer_slop_detect.generator import _model_payload, _row_text


class TestRowHelpers:
    def test_missing_target_values_are_skipped(self):
        row = {"title": "Plain title", "body": math.nan, "note": None, "tail": "end"}
        assert _row_text(row, ["title", "body", "note", "tail"]) == "Plain title end"

    def test_non_text_values_are_stringified(self):
        assert _row_text({"a": 3, "b": "words"}, ["a", "b"]) == "3 words"

    def test_missing_model_payload_is_none(self):
        assert _model_payload(math.nan) is None
        assert _model_payload(None) is None
        assert _model_payload('{"aiScore": 1}') == '{"aiScore": 1}'
