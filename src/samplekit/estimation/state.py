"""State shared by every sampler kind.

Each sampler owns one :class:`SamplerState`; the state is never shared
between sampler instances.
"""

from __future__ import annotations

import numbers
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from samplekit.estimation.likelihood import build_log_likelihood
from samplekit.estimation.marginals import (
    MarginalHistogram,
    format_summary,
    summary_frame,
)
from samplekit.exceptions import ConfigurationError, DataError, StateError
from samplekit.io.observations import Observations, load_observations
from samplekit.model.params import ParamInfo, build_param_infos

if TYPE_CHECKING:
    import pandas as pd

    from samplekit.model.functions import ModelFunction

MAX_NUM_BINS = 1_000_000

# Keys are compared by exact float equality. That is sound only because the
# samplers insert bin centroids (grid) or chain positions (MH) that are
# reproduced bit-for-bit, never independently recomputed values.
LikelihoodMap = dict[tuple[float, ...], float]


def validate_num_bins(num_bins: int) -> int:
    if isinstance(num_bins, bool) or not isinstance(num_bins, numbers.Integral):
        raise ConfigurationError(f"num_bins must be an integer, got {num_bins!r}")
    if num_bins < 1:
        raise ConfigurationError(f"num_bins must be >= 1, got {num_bins}")
    if num_bins > MAX_NUM_BINS:
        raise ConfigurationError(
            f"num_bins must be <= {MAX_NUM_BINS}, got {num_bins}"
        )
    return int(num_bins)


@dataclass
class SamplingProblem:
    """Observations, model and parameter domain of one fit."""

    observations: Observations
    func: ModelFunction
    params: list[ParamInfo]
    num_bins: int
    log_likelihood: Callable[[Sequence[float]], float] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.num_bins = validate_num_bins(self.num_bins)
        if self.observations.num_points == 0:
            raise DataError("No valid observations available for sampling")
        self.log_likelihood = build_log_likelihood(self.observations, self.func)

    @classmethod
    def from_file(
        cls,
        filepath: str | Path,
        func: ModelFunction,
        names: Sequence[str],
        mins: Sequence[float],
        maxs: Sequence[float],
        num_bins: int,
        rigidity: bool = False,
    ) -> SamplingProblem:
        # Cheap argument checks run before touching the file.
        num_bins = validate_num_bins(num_bins)
        params = build_param_infos(names, mins, maxs)
        observations = load_observations(filepath, rigidity=rigidity)
        return cls(observations=observations, func=func, params=params, num_bins=num_bins)

    @property
    def num_params(self) -> int:
        return len(self.params)

    @property
    def mins(self) -> NDArray[np.float64]:
        return np.array([p.min for p in self.params], dtype=np.float64)

    @property
    def widths(self) -> NDArray[np.float64]:
        return np.array([p.width for p in self.params], dtype=np.float64)


class SamplerState:
    """Histogram, likelihood map and the single-use guard of a sampler."""

    def __init__(self, problem: SamplingProblem, kind: str) -> None:
        self.problem = problem
        self.kind = kind
        self.marginals = MarginalHistogram(problem.params, problem.num_bins)
        self.likelihood_map: LikelihoodMap = {}
        self.been_sampled = False
        self.started = False

    def begin(self) -> None:
        """Claim the single sampling run of this instance.

        The instance is consumed as soon as a run starts, so a run that
        raised part-way leaves it unusable rather than half-filled.
        """
        if self.been_sampled:
            raise StateError(
                f"{self.kind} instance has already sampled the data points; "
                "create a new sampler to sample again"
            )
        if self.started:
            raise StateError(
                f"{self.kind} instance was interrupted during sampling and "
                "holds partial results; create a new sampler to sample again"
            )
        self.started = True

    def finish(self) -> None:
        self.marginals.normalise()
        self.been_sampled = True

    def require_sampled(self, action: str) -> None:
        if not self.been_sampled:
            raise StateError(f"Cannot {action} before sample() has been called")

    def record(self, params: Sequence[float], log_l: float) -> None:
        self.likelihood_map[tuple(float(v) for v in params)] = log_l

    def summarise(self, print_report: bool = False) -> list[ParamInfo]:
        self.require_sampled("summarise")
        self.marginals.summarise_into(self.problem.params)
        if print_report:
            print(self.summary())
        return list(self.problem.params)

    def summary(self) -> str:
        self.require_sampled("build a summary")
        if not all(p.summarised for p in self.problem.params):
            self.marginals.summarise_into(self.problem.params)
        return format_summary(
            self.problem.params,
            title=f"{self.kind} Summary",
            num_bins=self.problem.num_bins,
        )

    def summary_frame(self) -> pd.DataFrame:
        self.require_sampled("build a summary")
        if not all(p.summarised for p in self.problem.params):
            self.marginals.summarise_into(self.problem.params)
        return summary_frame(self.problem.params)

    def marginal_distribution(self) -> NDArray[np.float64]:
        return self.marginals.table.copy()
