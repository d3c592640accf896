"""Tidiness metric and the information measures it is built from."""

from .comparison import ModelScore, compare_models, comparison_frame
from .errors import CoverageMismatchError, DegenerateInputError, MalformedLoadingError, TidinessError
from .information import joint_entropy, mutual_information
from .joint import JointDistribution, JointTable, build_joint_table, joint_distribution
from .policy import PERFECTLY_TIDY, DegeneratePolicy, FixedScoreOnDegenerate, RaiseOnDegenerate
from .tidiness import TidinessConfig, TidinessResult, compute_tidiness, compute_tidiness_reference, tidiness_score

__all__ = [
    "CoverageMismatchError",
    "DegenerateInputError",
    "DegeneratePolicy",
    "FixedScoreOnDegenerate",
    "JointDistribution",
    "JointTable",
    "MalformedLoadingError",
    "ModelScore",
    "PERFECTLY_TIDY",
    "RaiseOnDegenerate",
    "TidinessConfig",
    "TidinessError",
    "TidinessResult",
    "build_joint_table",
    "compare_models",
    "comparison_frame",
    "compute_tidiness",
    "compute_tidiness_reference",
    "joint_distribution",
    "joint_entropy",
    "mutual_information",
    "tidiness_score",
]
