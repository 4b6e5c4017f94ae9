# src/wireless_coord/__init__.py
"""
UHF Wireless Frequency Coordination Tool.

This package assigns and validates operating frequencies for wireless
microphones and in-ear monitors in the US UHF TV band (470-608 MHz):

    active TV channels -> greedy search (spacing, IM3/IM5) -> analysis -> exports
"""

from .config_models import (
    CoordinationRequest,
    CoordinationSettings,
    Frequency,
    load_config,
)

from .search import find_frequencies
from .analyzer import analyze, AnalysisResult, Diagnostic

from .planner import (
    Planner,
    PlannerResult,
)

__all__ = [
    "CoordinationRequest",
    "CoordinationSettings",
    "Frequency",
    "load_config",
    "find_frequencies",
    "analyze",
    "AnalysisResult",
    "Diagnostic",
    "Planner",
    "PlannerResult",
]
