"""Tidiness scoring for multi-dimensional analysis models."""

from .metrics import TidinessConfig, TidinessResult, compute_tidiness, tidiness_score

__all__ = ["TidinessConfig", "TidinessResult", "compute_tidiness", "tidiness_score"]
