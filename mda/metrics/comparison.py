"""Score several candidate factor solutions against one cluster solution."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Mapping, Optional, Sequence

import pandas as pd

from mda.datahub.tables import ClusterInput, LoadingInput

from .errors import DegenerateInputError
from .tidiness import TidinessConfig, compute_tidiness


@dataclass(frozen=True)
class ModelScore:
    """Tidiness of a single candidate model."""

    model: str
    score: Optional[float]
    mutual_information: Optional[float]
    joint_entropy: Optional[float]
    n_factors: Optional[int]
    error: Optional[str] = None

    @property
    def scored(self) -> bool:
        """True if the model produced a tidiness score."""
        return self.score is not None


def compare_models(
    clusters: ClusterInput,
    candidates: Mapping[str, LoadingInput],
    config: Optional[TidinessConfig] = None,
    skip_degenerate: bool = False,
) -> List[ModelScore]:
    """Compute tidiness for each candidate and return them from tidiest to least tidy.

    Picking a model from the ranking is left to the analyst. With
    ``skip_degenerate`` set, zero-entropy candidates are kept in the list with
    ``score=None`` and sorted last instead of aborting the comparison.
    """
    if not candidates:
        raise ValueError("candidates must contain at least one model.")

    cfg = config or TidinessConfig()
    scores: List[ModelScore] = []
    for name, loadings in candidates.items():
        try:
            result = compute_tidiness(clusters, loadings, cfg)
        except DegenerateInputError as exc:
            if not skip_degenerate:
                raise
            if cfg.verbose:
                print(f"[tidiness] Skipping model '{name}': {exc}")
            scores.append(
                ModelScore(
                    model=str(name),
                    score=None,
                    mutual_information=None,
                    joint_entropy=None,
                    n_factors=None,
                    error=str(exc),
                )
            )
            continue
        scores.append(
            ModelScore(
                model=str(name),
                score=result.score,
                mutual_information=result.mutual_information,
                joint_entropy=result.joint_entropy,
                n_factors=result.n_factors,
            )
        )

    # Stable sort keeps the caller's order among ties.
    return sorted(scores, key=lambda item: (not item.scored, -(item.score or 0.0)))


def comparison_frame(scores: Sequence[ModelScore]) -> pd.DataFrame:
    """Tabulate model scores, one row per model, in the order given."""
    return pd.DataFrame(
        {
            "model": [item.model for item in scores],
            "n_factors": [item.n_factors for item in scores],
            "tidiness": [item.score for item in scores],
            "mutual_information": [item.mutual_information for item in scores],
            "joint_entropy": [item.joint_entropy for item in scores],
            "error": [item.error for item in scores],
        }
    )


__all__ = ["ModelScore", "compare_models", "comparison_frame"]
