from __future__ import annotations

from .detection_engine import DetectionEngine
from .severity_filter import filter_by_severity
from .analysis_orchestrator import AnalysisOrchestrator

__all__ = [
    "DetectionEngine",
    "filter_by_severity",
    "AnalysisOrchestrator",
]
