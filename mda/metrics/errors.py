"""Exceptions raised while computing tidiness."""

from __future__ import annotations


class TidinessError(ValueError):
    """Base class for invalid or unusable tidiness inputs."""


class DegenerateInputError(TidinessError):
    """The joint (cluster, factor) distribution has zero entropy."""


class CoverageMismatchError(TidinessError):
    """Cluster and loading tables do not describe the same features."""

    def __init__(self, message: str, features: tuple = ()) -> None:
        super().__init__(message)
        self.features = features


class MalformedLoadingError(TidinessError):
    """A loading is missing, duplicated, or not a finite number."""


__all__ = [
    "CoverageMismatchError",
    "DegenerateInputError",
    "MalformedLoadingError",
    "TidinessError",
]
