"""Aggregation of indicator readings into an analysis."""

from marketpulse.analysis.engine import analyze, analyze_batch, compute_indicators

__all__ = ["analyze", "analyze_batch", "compute_indicators"]
