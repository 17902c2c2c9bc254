# MIT License (see LICENSE)
"""
Analysis of a lab run by an external text generator.

No concrete client ships with the package; pass any object implementing
AnalysisService.
"""
from .service import (
    ANALYSIS_FALLBACK_MESSAGE,
    EMPTY_ANALYSIS_MESSAGE,
    AnalysisService,
    analyze_experiment,
    build_analysis_prompt,
)

__all__ = [
    "ANALYSIS_FALLBACK_MESSAGE",
    "EMPTY_ANALYSIS_MESSAGE",
    "AnalysisService",
    "analyze_experiment",
    "build_analysis_prompt",
]
