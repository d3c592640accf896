"""Policies deciding what a zero-entropy joint distribution scores."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

import numpy as np

from .errors import DegenerateInputError


class DegeneratePolicy(Protocol):
    """Strategy object consulted when the joint entropy H is zero."""

    def resolve(self, mutual_information: float) -> float:
        """Return the score to report, or raise DegenerateInputError."""
        return 0.0


@dataclass(frozen=True)
class RaiseOnDegenerate:
    """Refuse to score: I / H is undefined when H == 0."""

    def resolve(self, mutual_information: float) -> float:
        raise DegenerateInputError(
            "Joint entropy is zero (all weight falls in a single cluster/factor cell); tidiness is undefined."
        )


@dataclass(frozen=True)
class FixedScoreOnDegenerate:
    """Report a fixed score whenever the joint distribution collapses to one cell."""

    score: float = 1.0

    def __post_init__(self) -> None:
        if not np.isfinite(self.score):
            raise ValueError("Degenerate score must be a finite number.")
        if not 0.0 <= self.score <= 1.0:
            raise ValueError("Degenerate score must fall within [0, 1].")

    def resolve(self, mutual_information: float) -> float:
        return float(self.score)


# A single occupied cell read as a perfectly tidy correspondence.
PERFECTLY_TIDY = FixedScoreOnDegenerate(1.0)


__all__ = [
    "DegeneratePolicy",
    "FixedScoreOnDegenerate",
    "PERFECTLY_TIDY",
    "RaiseOnDegenerate",
]
