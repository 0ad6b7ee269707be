from __future__ import annotations

from typing import Literal

from pydantic import Field

from data_designer.config.column_configs import SingleColumnConfig


class SlopDetectColumnConfig(SingleColumnConfig):
    """Estimate how likely text columns are machine-generated.

    Blends an optional model verdict column with a deterministic phrase-pattern
    heuristic and produces a 0-100 AI-likelihood score, a confidence, the
    heuristic reason codes and, optionally, highlight spans over the text.

    Attributes:
        target_columns: Columns whose text content will be concatenated and scored.
        model_result_column: Optional column holding the model's verdict, either
            the raw reply text or an already decoded object. Rows without one
            are scored by the heuristic alone.
        sensitivity: Heuristic sensitivity from 1 to 10. Defaults to 5, which
            keeps the pattern weights unchanged.
        max_ai_score: Highest AI-likelihood score (0-100) for ``is_valid=True``.
        include_explain: Include the blend explain trace in output.
        include_spans: Include highlight spans over the scored text.
    """

    target_columns: list[str]
    model_result_column: str | None = Field(default=None, description="Column holding the model verdict")
    sensitivity: int = Field(default=5, ge=1, le=10, description="Heuristic sensitivity (1-10)")
    max_ai_score: int = Field(default=50, ge=0, le=100, description="Maximum AI-likelihood score for is_valid=True")
    include_explain: bool = Field(default=False, description="Include the blend explain trace in output")
    include_spans: bool = Field(default=True, description="Include highlight spans in output")
    column_type: Literal["slop-detect"] = "slop-detect"

    @staticmethod
    def get_column_emoji() -> str:
        return "\U0001f50e"

    @property
    def required_columns(self) -> list[str]:
        if self.model_result_column:
            return [*self.target_columns, self.model_result_column]
        return self.target_columns

    @property
    def side_effect_columns(self) -> list[str]:
        return []
