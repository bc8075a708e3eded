"""
Distribution Layer v1.0
Samplers that turn a generator's uniform stream into distributed values,
with closed-form statistics where they are defined.
"""

from .base import AbstractDistribution
from .normal import NormalDistribution, are_valid_normal_params, sample_normal
from .gamma import GammaDistribution, are_valid_gamma_params, sample_gamma
from .kumaraswamy import (
    KumaraswamyDistribution,
    are_valid_kumaraswamy_params,
    sample_kumaraswamy,
)

DISTRIBUTIONS = {
    "normal": NormalDistribution,
    "gamma": GammaDistribution,
    "kumaraswamy": KumaraswamyDistribution,
}

__all__ = [
    "AbstractDistribution",
    "NormalDistribution",
    "are_valid_normal_params",
    "sample_normal",
    "GammaDistribution",
    "are_valid_gamma_params",
    "sample_gamma",
    "KumaraswamyDistribution",
    "are_valid_kumaraswamy_params",
    "sample_kumaraswamy",
    "DISTRIBUTIONS",
]
