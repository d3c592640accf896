"""Joint (cluster, factor) weight tables and their probability distributions."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Hashable, Literal, Tuple

import pandas as pd

from mda.datahub.config import CLUSTER_COL, FACTOR_COL, FEATURE_COL, LOADING_COL, WEIGHT_COL
from mda.datahub.helpers import preview
from mda.datahub.tables import ClusterInput, LoadingInput, cluster_frame, loading_frame

from .errors import CoverageMismatchError, DegenerateInputError

UnmatchedPolicy = Literal["drop", "error"]


@dataclass(frozen=True)
class JointTable:
    """Aggregated cluster × factor weights, in long form."""

    weights: pd.DataFrame = field(compare=False)
    dropped_features: Tuple[Hashable, ...] = ()


@dataclass(frozen=True)
class JointDistribution:
    """Joint probabilities over (cluster, factor) with both marginals."""

    joint: pd.DataFrame = field(compare=False)
    cluster_marginal: pd.Series = field(compare=False)
    factor_marginal: pd.Series = field(compare=False)


def build_joint_table(
    clusters: ClusterInput,
    loadings: LoadingInput,
    unmatched: UnmatchedPolicy = "drop",
) -> JointTable:
    """Sum |loading| per (cluster, factor) over the features assigned to that cluster.

    Each loading row takes the cluster of its feature, which keeps only the
    (feature, cluster) pairs whose membership indicator is 1; every other pair
    would carry zero weight. Labels are matched by value, so "1" and 1 are
    different features. Features present in only one of the two tables are
    dropped or rejected according to ``unmatched``.
    """
    if unmatched not in ("drop", "error"):
        raise ValueError(f"Unknown unmatched policy '{unmatched}'. Expected 'drop' or 'error'.")

    cluster_df = cluster_frame(clusters)
    loading_df = loading_frame(loadings)

    cluster_of: Dict[Hashable, Hashable] = dict(
        zip(cluster_df[FEATURE_COL].tolist(), cluster_df[CLUSTER_COL].tolist())
    )
    loaded = set(loading_df[FEATURE_COL].tolist())
    assigned = pd.Series(
        [cluster_of.get(feature) for feature in loading_df[FEATURE_COL].tolist()],
        index=loading_df.index,
        dtype=object,
    )

    cluster_only = [feature for feature in cluster_of if feature not in loaded]
    loading_only = loading_df.loc[assigned.isna(), FEATURE_COL].tolist()
    unmatched_features = tuple(dict.fromkeys(cluster_only + loading_only))
    if unmatched_features and unmatched == "error":
        raise CoverageMismatchError(
            f"{len(unmatched_features)} feature(s) appear in only one table: {preview(unmatched_features)}",
            unmatched_features,
        )

    matched = loading_df.assign(**{CLUSTER_COL: assigned}).loc[
        assigned.notna(), [CLUSTER_COL, FACTOR_COL, LOADING_COL]
    ]
    if matched.empty:
        if cluster_df.empty and loading_df.empty:
            raise DegenerateInputError("No features supplied; the joint distribution is undefined.")
        raise CoverageMismatchError(
            "Cluster and loading tables share no features.", unmatched_features
        )

    weighted = matched.assign(**{WEIGHT_COL: matched[LOADING_COL].abs()})
    weighted = weighted.loc[weighted[WEIGHT_COL] > 0]
    weights = (
        weighted.groupby([CLUSTER_COL, FACTOR_COL], sort=True, observed=True)[WEIGHT_COL]
        .sum()
        .reset_index()
    )
    return JointTable(weights=weights, dropped_features=unmatched_features)


def joint_distribution(weights: pd.DataFrame) -> JointDistribution:
    """Normalize long-form weights into a cluster × factor probability table."""
    total = float(weights[WEIGHT_COL].sum()) if len(weights) else 0.0
    if not total > 0:
        raise DegenerateInputError("Every loading is zero; the joint distribution is undefined.")

    counts = weights.pivot(index=CLUSTER_COL, columns=FACTOR_COL, values=WEIGHT_COL).fillna(0.0)
    joint = counts / total
    return JointDistribution(
        joint=joint,
        cluster_marginal=joint.sum(axis=1),
        factor_marginal=joint.sum(axis=0),
    )


__all__ = [
    "JointDistribution",
    "JointTable",
    "UnmatchedPolicy",
    "build_joint_table",
    "joint_distribution",
]
