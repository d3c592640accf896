"""The four-feature worked example used to illustrate tidiness."""

from __future__ import annotations

import copy
from typing import Dict

from .config import EXAMPLE


def example_clusters() -> Dict[str, str]:
    """Clusters c1 = {A, B} and c2 = {C, D}."""
    return dict(EXAMPLE["clusters"])


def example_loadings(b_f1: float = 0.05) -> Dict[str, Dict[str, float]]:
    """Loadings of A–D on f1/f2, optionally overriding B's loading on f1.

    Raising ``b_f1`` to 0.60 splits cluster c1 across both factors, which makes
    the correspondence less tidy.
    """
    loadings = copy.deepcopy(EXAMPLE["loadings"])
    loadings["B"]["f1"] = float(b_f1)
    return loadings
