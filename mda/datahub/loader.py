from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional

import pandas as pd

from .config import CLUSTER_COL, FACTOR_COL, FEATURE_COL, LOADING_COL, LoadingLayout
from .tables import cluster_frame, loading_frame


def load_clusters(
    path: Path,
    feature_col: str = FEATURE_COL,
    cluster_col: str = CLUSTER_COL,
) -> pd.DataFrame:
    """Read a ``feature, cluster`` CSV into the canonical cluster frame."""
    raw = _read_csv(path, dtype={feature_col: str, cluster_col: str})
    return cluster_frame(raw, feature_col=feature_col, cluster_col=cluster_col)


def load_loadings(
    path: Path,
    layout: Optional[LoadingLayout] = None,
    feature_col: str = FEATURE_COL,
    factor_col: str = FACTOR_COL,
    loading_col: str = LOADING_COL,
) -> pd.DataFrame:
    """Read a wide (feature × factor) or long (feature, factor, loading) CSV of loadings."""
    dtype: Dict[str, type] = {feature_col: str, factor_col: str}
    raw = _read_csv(path, dtype=dtype)
    return loading_frame(
        raw,
        layout=layout,
        feature_col=feature_col,
        factor_col=factor_col,
        loading_col=loading_col,
    )


def _read_csv(path: Path, dtype: Dict[str, type]) -> pd.DataFrame:
    if not path.exists():
        raise FileNotFoundError(f"No such table: {path}")
    try:
        header = pd.read_csv(path, nrows=0, skipinitialspace=True).columns
        # Label columns stay strings so "1" and "01" remain distinct features.
        present = {column: kind for column, kind in dtype.items() if column in header}
        return pd.read_csv(path, dtype=present, skipinitialspace=True)
    except pd.errors.EmptyDataError as exc:
        raise ValueError(f"Table {path} is empty.") from exc


__all__ = ["load_clusters", "load_loadings"]
