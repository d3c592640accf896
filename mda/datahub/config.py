"""Static configuration for input tables and the bundled worked example."""

from __future__ import annotations

from typing import Dict, Literal, TypedDict


class ExampleTables(TypedDict):
    clusters: Dict[str, str]
    loadings: Dict[str, Dict[str, float]]


LoadingLayout = Literal["wide", "long"]

# Canonical column names; CSV loaders accept overrides.
FEATURE_COL = "feature"
CLUSTER_COL = "cluster"
FACTOR_COL = "factor"
LOADING_COL = "loading"
WEIGHT_COL = "weight"

# ---------------------------------------------------------------------------
# Four features, two clusters, two factors. c1 loads mostly on f2 and c2 on f1.

EXAMPLE: ExampleTables = {
    "clusters": {"A": "c1", "B": "c1", "C": "c2", "D": "c2"},
    "loadings": {
        "A": {"f1": 0.1, "f2": -0.5},
        "B": {"f1": 0.05, "f2": 0.55},
        "C": {"f1": 0.6, "f2": -0.02},
        "D": {"f1": -0.7, "f2": 0.2},
    },
}


__all__ = [
    "CLUSTER_COL",
    "EXAMPLE",
    "ExampleTables",
    "FACTOR_COL",
    "FEATURE_COL",
    "LOADING_COL",
    "LoadingLayout",
    "WEIGHT_COL",
]
