"""Canonical in-memory tables for cluster assignments and factor loadings."""

from __future__ import annotations

from typing import Hashable, List, Mapping, Optional, Sequence, Tuple, Union

import numpy as np
import pandas as pd

from mda.metrics.errors import CoverageMismatchError, MalformedLoadingError

from .config import CLUSTER_COL, FACTOR_COL, FEATURE_COL, LOADING_COL, LoadingLayout
from .helpers import as_pairs, ensure_mapping, preview, to_float

ClusterInput = Union[pd.DataFrame, pd.Series, Mapping[Hashable, Hashable], Sequence[Tuple[Hashable, Hashable]]]
LoadingInput = Union[pd.DataFrame, Mapping[Hashable, Mapping[Hashable, float]]]


def cluster_frame(
    data: ClusterInput,
    *,
    feature_col: str = FEATURE_COL,
    cluster_col: str = CLUSTER_COL,
) -> pd.DataFrame:
    """Return a ``feature, cluster`` frame with exactly one row per feature."""
    if isinstance(data, pd.DataFrame):
        missing = {feature_col, cluster_col} - set(data.columns)
        if missing:
            raise ValueError(f"Cluster table is missing columns: {sorted(missing)}")
        frame = data.loc[:, [feature_col, cluster_col]].rename(
            columns={feature_col: FEATURE_COL, cluster_col: CLUSTER_COL}
        )
    elif isinstance(data, pd.Series):
        frame = data.rename_axis(FEATURE_COL).rename(CLUSTER_COL).reset_index()
    else:
        frame = pd.DataFrame(as_pairs(data), columns=[FEATURE_COL, CLUSTER_COL])

    if frame[FEATURE_COL].isna().any():
        raise ValueError("Cluster table contains rows without a feature label.")

    unassigned = frame.loc[frame[CLUSTER_COL].isna(), FEATURE_COL].tolist()
    if unassigned:
        raise CoverageMismatchError(f"Features without a cluster: {preview(unassigned)}", tuple(unassigned))

    duplicated = frame.loc[frame[FEATURE_COL].duplicated(), FEATURE_COL].unique().tolist()
    if duplicated:
        # Membership must be hard and mutually exclusive.
        raise CoverageMismatchError(
            f"Features listed more than once in the cluster table: {preview(duplicated)}",
            tuple(duplicated),
        )
    return frame.reset_index(drop=True)


def loading_frame(
    data: LoadingInput,
    layout: Optional[LoadingLayout] = None,
    *,
    feature_col: str = FEATURE_COL,
    factor_col: str = FACTOR_COL,
    loading_col: str = LOADING_COL,
) -> pd.DataFrame:
    """Return a long ``feature, factor, loading`` frame covering every (feature, factor) pair.

    Args:
        data: Wide frame (features as index or ``feature_col``, one column per factor),
            long frame (``feature_col``, ``factor_col``, ``loading_col``), or a nested
            mapping ``{feature: {factor: loading}}``.
        layout: Force ``"wide"`` or ``"long"`` parsing of a frame; inferred when None.

    Raises:
        MalformedLoadingError: A loading is missing, duplicated, non-numeric or non-finite.
    """
    if not isinstance(data, pd.DataFrame):
        return _from_mapping(data)

    if layout is None:
        layout = "long" if {feature_col, factor_col, loading_col}.issubset(data.columns) else "wide"

    if layout == "long":
        return _from_long(data, feature_col, factor_col, loading_col)
    if layout == "wide":
        return _from_wide(data, feature_col)
    raise ValueError(f"Unknown loading layout '{layout}'. Expected 'wide' or 'long'.")


def _from_mapping(data: Mapping[Hashable, Mapping[Hashable, float]]) -> pd.DataFrame:
    rows = {feature: ensure_mapping(row) for feature, row in data.items()}
    factors: List[Hashable] = list(dict.fromkeys(factor for row in rows.values() for factor in row))

    records = []
    for feature, row in rows.items():
        for factor in factors:
            if factor not in row:
                raise MalformedLoadingError(f"Missing loading for feature {feature!r} on factor {factor!r}.")
            value = to_float(row[factor], where=f"loading for {feature!r} on {factor!r}")
            records.append((feature, factor, value))
    return pd.DataFrame.from_records(records, columns=[FEATURE_COL, FACTOR_COL, LOADING_COL])


def _from_long(df: pd.DataFrame, feature_col: str, factor_col: str, loading_col: str) -> pd.DataFrame:
    missing = {feature_col, factor_col, loading_col} - set(df.columns)
    if missing:
        raise ValueError(f"Long loading table is missing columns: {sorted(missing)}")

    frame = df.loc[:, [feature_col, factor_col, loading_col]].rename(
        columns={feature_col: FEATURE_COL, factor_col: FACTOR_COL, loading_col: LOADING_COL}
    )
    if frame[[FEATURE_COL, FACTOR_COL]].isna().any().any():
        raise MalformedLoadingError("Long loading table contains rows without a feature or factor label.")

    duplicated = frame[[FEATURE_COL, FACTOR_COL]].duplicated()
    if duplicated.any():
        pairs = [f"{row[FEATURE_COL]}/{row[FACTOR_COL]}" for _, row in frame.loc[duplicated].iterrows()]
        raise MalformedLoadingError(f"Duplicate loadings for: {preview(pairs)}")

    # Pairs absent from the long table show up as NaN after pivoting.
    wide = frame.pivot(index=FEATURE_COL, columns=FACTOR_COL, values=LOADING_COL)
    return _from_wide(wide, FEATURE_COL)


def _from_wide(df: pd.DataFrame, feature_col: str) -> pd.DataFrame:
    wide = df.set_index(feature_col) if feature_col in df.columns else df
    if len(wide.index) and not len(wide.columns):
        raise MalformedLoadingError("Loading table has no factor columns.")
    if wide.index.hasnans:
        raise MalformedLoadingError("Loading table contains rows without a feature label.")
    if wide.index.has_duplicates:
        duplicated = wide.index[wide.index.duplicated()].unique().tolist()
        raise MalformedLoadingError(f"Features listed more than once in the loading table: {preview(duplicated)}")

    try:
        values = wide.apply(pd.to_numeric, errors="raise")
    except (TypeError, ValueError) as exc:
        raise MalformedLoadingError(f"Loading table contains non-numeric values: {exc}") from exc

    matrix = values.to_numpy(dtype=float)
    rows, cols = np.nonzero(~np.isfinite(matrix))
    if len(rows):
        pairs = [f"{values.index[r]}/{values.columns[c]}" for r, c in zip(rows, cols)]
        raise MalformedLoadingError(f"Missing or non-finite loadings for: {preview(pairs)}")

    values = values.rename_axis(index=FEATURE_COL, columns=None)
    long = values.reset_index().melt(id_vars=FEATURE_COL, var_name=FACTOR_COL, value_name=LOADING_COL)
    return long.astype({LOADING_COL: float})


__all__ = ["ClusterInput", "LoadingInput", "cluster_frame", "loading_frame"]
