from __future__ import annotations

from typing import Any, Hashable, Mapping, Sequence, Tuple

import numpy as np

from mda.metrics.errors import MalformedLoadingError


def ensure_mapping(row: Any) -> Mapping[Hashable, Any]:
    """Guarantee nested loading rows behave like mappings."""
    if isinstance(row, Mapping):
        return row
    raise TypeError(f"Unexpected loading row type: {type(row)}")


def to_float(value: Any, *, where: str = "loading") -> float:
    """Convert a loading cell to a finite float."""
    if value is None or isinstance(value, bool):
        raise MalformedLoadingError(f"Expected a numeric {where}, received {value!r}")
    try:
        result = float(value)
    except (TypeError, ValueError) as exc:
        raise MalformedLoadingError(f"Cannot convert {where} {value!r} to float") from exc
    if not np.isfinite(result):
        raise MalformedLoadingError(f"Non-finite {where}: {value!r}")
    return result


def as_pairs(value: Any) -> Sequence[Tuple[Hashable, Hashable]]:
    """Return (feature, cluster) pairs from a mapping or a sequence of 2-tuples."""
    if isinstance(value, Mapping):
        return list(value.items())
    pairs = []
    for item in value:
        if not isinstance(item, (list, tuple)) or len(item) != 2:
            raise TypeError(f"Cluster assignments must be (feature, cluster) pairs, got {item!r}")
        pairs.append((item[0], item[1]))
    return pairs


def preview(values: Sequence[Any], limit: int = 5) -> str:
    """Short comma-joined rendering of feature labels for error messages."""
    shown = ", ".join(str(value) for value in values[:limit])
    if len(values) > limit:
        shown += f", … (+{len(values) - limit} more)"
    return shown
