from .example import example_clusters, example_loadings
from .loader import load_clusters, load_loadings
from .tables import ClusterInput, LoadingInput, cluster_frame, loading_frame

__all__ = [
    "ClusterInput",
    "LoadingInput",
    "cluster_frame",
    "example_clusters",
    "example_loadings",
    "load_clusters",
    "load_loadings",
    "loading_frame",
]
