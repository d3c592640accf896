"""Tidiness: normalized mutual information between clusters and factor loadings."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, Hashable, Mapping, Optional, Tuple

import pandas as pd

from mda.datahub.tables import ClusterInput, LoadingInput

from .errors import DegenerateInputError, MalformedLoadingError
from .information import joint_entropy, mutual_information
from .joint import UnmatchedPolicy, build_joint_table, joint_distribution
from .policy import DegeneratePolicy, RaiseOnDegenerate

_ROUNDOFF = 1e-12


@dataclass(frozen=True)
class TidinessResult:
    """Tidiness of one cluster solution against one factor solution."""

    score: float
    mutual_information: float
    joint_entropy: float
    joint: pd.DataFrame = field(compare=False, repr=False)
    dropped_features: Tuple[Hashable, ...] = ()
    degenerate: bool = False

    @property
    def n_clusters(self) -> int:
        return int(self.joint.shape[0])

    @property
    def n_factors(self) -> int:
        return int(self.joint.shape[1])


@dataclass
class TidinessConfig:
    """Configuration for `compute_tidiness`."""

    unmatched: UnmatchedPolicy = "drop"
    degenerate_policy: DegeneratePolicy = field(default_factory=RaiseOnDegenerate)
    verbose: bool = False

    def validate(self) -> None:
        if self.unmatched not in ("drop", "error"):
            raise ValueError(f"unmatched must be 'drop' or 'error', got '{self.unmatched}'.")
        if not callable(getattr(self.degenerate_policy, "resolve", None)):
            raise ValueError("degenerate_policy must provide a resolve(mutual_information) method.")


def compute_tidiness(
    clusters: ClusterInput,
    loadings: LoadingInput,
    config: Optional[TidinessConfig] = None,
) -> TidinessResult:
    """Compute tidiness = I / H for a cluster solution and a factor solution.

    Args:
        clusters: Feature → cluster assignment (mapping, pairs, or frame with
            ``feature``/``cluster`` columns).
        loadings: Feature × factor loadings (nested mapping, wide frame or long frame).
            Signs are ignored.
        config: Optional configuration overriding defaults.

    Returns:
        TidinessResult with the score in [0, 1] plus I, H and the joint table.

    Raises:
        CoverageMismatchError: Tables disagree on features and ``unmatched="error"``,
            or they share no features at all.
        MalformedLoadingError: A loading is missing, duplicated or non-finite.
        DegenerateInputError: H is zero and the degenerate policy refuses to score.
    """
    cfg = config or TidinessConfig()
    cfg.validate()

    table = build_joint_table(clusters, loadings, unmatched=cfg.unmatched)
    if cfg.verbose and table.dropped_features:
        print(f"[tidiness] Dropped {len(table.dropped_features)} unmatched feature(s).")

    distribution = joint_distribution(table.weights)
    mi = _clamp_roundoff(mutual_information(distribution.joint))
    entropy = joint_entropy(distribution.joint)

    if cfg.verbose:
        clusters_n, factors_n = distribution.joint.shape
        print(f"[tidiness] {clusters_n} clusters × {factors_n} factors: I={mi:.6f} bits, H={entropy:.6f} bits")

    if entropy > 0:
        score = _clamp_roundoff(mi / entropy, upper=1.0)
        degenerate = False
    else:
        score = cfg.degenerate_policy.resolve(mi)
        degenerate = True

    return TidinessResult(
        score=score,
        mutual_information=mi,
        joint_entropy=entropy,
        joint=distribution.joint,
        dropped_features=table.dropped_features,
        degenerate=degenerate,
    )


def tidiness_score(
    clusters: ClusterInput,
    loadings: LoadingInput,
    config: Optional[TidinessConfig] = None,
) -> float:
    """Shorthand returning only the tidiness score."""
    return compute_tidiness(clusters, loadings, config).score


def compute_tidiness_reference(
    clusters: Mapping[Hashable, Hashable],
    loadings: Mapping[Hashable, Mapping[Hashable, float]],
) -> float:
    """Loop-by-loop derivation of tidiness, used to cross-check `compute_tidiness`.

    Walks every (cluster, factor, feature) triple with plain dictionaries. Features
    missing from either mapping are skipped, and a zero entropy always raises.
    """
    groups = list(dict.fromkeys(clusters.values()))
    factors = list(dict.fromkeys(factor for row in loadings.values() for factor in row))

    weights: Dict[Tuple[Hashable, Hashable], float] = {}
    for group in groups:
        for factor in factors:
            total = 0.0
            for feature, assigned in clusters.items():
                if feature not in loadings:
                    continue
                try:
                    loading = loadings[feature][factor]
                except KeyError as exc:
                    raise MalformedLoadingError(f"Missing loading for {feature!r} on {factor!r}.") from exc
                indicator = 1.0 if assigned == group else 0.0
                total += indicator * abs(loading)
            weights[(group, factor)] = total

    grand_total = sum(weights.values())
    if not grand_total > 0:
        raise DegenerateInputError("Every weight is zero; the joint distribution is undefined.")

    joint = {cell: weight / grand_total for cell, weight in weights.items()}
    p_group = {group: sum(joint[(group, factor)] for factor in factors) for group in groups}
    p_factor = {factor: sum(joint[(group, factor)] for group in groups) for factor in factors}

    mi = 0.0
    entropy = 0.0
    for (group, factor), p in joint.items():
        if p <= 0:
            continue
        mi += p * math.log2(p / (p_group[group] * p_factor[factor]))
        entropy -= p * math.log2(p)

    if not entropy > 0:
        raise DegenerateInputError("Joint entropy is zero; tidiness is undefined.")
    return mi / entropy


def _clamp_roundoff(value: float, upper: Optional[float] = None) -> float:
    if -_ROUNDOFF < value < 0.0:
        return 0.0
    if upper is not None and upper < value < upper + _ROUNDOFF:
        return upper
    return float(value)


__all__ = [
    "TidinessConfig",
    "TidinessResult",
    "compute_tidiness",
    "compute_tidiness_reference",
    "tidiness_score",
]
