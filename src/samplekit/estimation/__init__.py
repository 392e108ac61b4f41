"""Estimation: likelihood, marginal statistics, grid and MH samplers."""

from samplekit.estimation.grid import GridSampler
from samplekit.estimation.likelihood import build_log_likelihood, log_likelihood
from samplekit.estimation.marginals import (
    MarginalHistogram,
    format_summary,
    summary_frame,
)
from samplekit.estimation.mh import ChainStatus, MetropolisHastingsSampler
from samplekit.estimation.sampler import Sampler, build_sampler, prefers_grid
from samplekit.estimation.state import MAX_NUM_BINS, LikelihoodMap

__all__ = [
    "log_likelihood",
    "build_log_likelihood",
    "MarginalHistogram",
    "format_summary",
    "summary_frame",
    "GridSampler",
    "MetropolisHastingsSampler",
    "ChainStatus",
    "Sampler",
    "build_sampler",
    "prefers_grid",
    "LikelihoodMap",
    "MAX_NUM_BINS",
]
