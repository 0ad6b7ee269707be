from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Any

from data_designer.engine.column_generators.generators.base import ColumnGeneratorFullColumn

from data_designer_slop_detect.config import SlopDetectColumnConfig
from data_designer_slop_detect.core import analyze_text

if TYPE_CHECKING:
    import pandas as pd

logger = logging.getLogger(__name__)


def _missing(value: Any) -> bool:
    return value is None or (isinstance(value, float) and math.isnan(value))


def _model_payload(value: Any) -> Any:
    return None if _missing(value) else value


def _row_text(row: Any, columns: list[str]) -> str:
    return " ".join(str(row[c]) for c in columns if not _missing(row[c]))


class SlopDetectColumnGenerator(ColumnGeneratorFullColumn[SlopDetectColumnConfig]):
    """Column generator that estimates AI likelihood per row."""

    def generate(self, data: pd.DataFrame) -> pd.DataFrame:
        logger.info(f"\U0001f50e Estimating AI likelihood for column {self.config.name!r}")
        logger.info(f"   target columns: {self.config.target_columns}")
        logger.info(f"   model result column: {self.config.model_result_column}")
        logger.info(f"   sensitivity: {self.config.sensitivity}")

        results = []
        for _, row in data.iterrows():
            text = _row_text(row, self.config.target_columns)
            payload = _model_payload(row[self.config.model_result_column]) if self.config.model_result_column else None
            analysis = analyze_text(text, model_payload=payload, sensitivity=self.config.sensitivity)
            output: dict = {
                "is_valid": analysis["aiScore"] <= self.config.max_ai_score,
                "ai_score": analysis["aiScore"],
                "confidence": analysis["confidence"],
                "heuristic_only": analysis["heuristicOnly"],
                "reasons": analysis["explain"]["heuristic"]["reasons"],
            }
            if self.config.include_explain:
                output["explain"] = analysis["explain"]
            if self.config.include_spans:
                output["spans"] = analysis["spans"]
            results.append(output)

        data = data.copy()
        data[self.config.name] = results
        return data
