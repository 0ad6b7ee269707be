# SPDX-License-Identifier: Apache-2.0
"""Slop Detect plugin for NeMo Data Designer.

Adds a ``slop-detect`` column type that estimates how likely text is
machine-generated. An optional model verdict is blended with a deterministic
phrase-pattern heuristic, and the evidence behind the estimate is mapped back
onto the text as non-overlapping highlight spans.

Usage::

    from data_designer_slop_detect import SlopDetectColumnConfig

    builder.add_column(SlopDetectColumnConfig(
        name="ai_likelihood",
        target_columns=["post"],
        model_result_column="judge_reply",
    ))
"""

from data_designer_slop_detect.blend import blend, blend_or_fallback, heuristic_fallback
from data_designer_slop_detect.config import SlopDetectColumnConfig
from data_designer_slop_detect.core import analyze_text
from data_designer_slop_detect.evidence import merge_evidence
from data_designer_slop_detect.heuristic import Hyperparameters, score_text
from data_designer_slop_detect.models import InvalidModelResult, ModelResult
from data_designer_slop_detect.patterns import LIBRARY_VERSION
from data_designer_slop_detect.spans import annotate, render_html

__all__ = [
    "SlopDetectColumnConfig",
    "analyze_text",
    "Hyperparameters",
    "score_text",
    "blend",
    "blend_or_fallback",
    "heuristic_fallback",
    "merge_evidence",
    "annotate",
    "render_html",
    "ModelResult",
    "InvalidModelResult",
    "LIBRARY_VERSION",
]
