"""Exhaustive grid sampling of the likelihood surface.

Every parameter domain is split into ``num_bins`` equal bins and the
likelihood is evaluated once at the centroid of each of the
``num_bins ** num_params`` cells. Cost is
``O(num_bins ** num_params * num_points)``, so the grid is only practical
for few parameters or coarse bins.

Each cell adds ``exp(log L)`` to its bin in every parameter's marginal.
Cells with strongly negative log-likelihood underflow to zero weight; when
every cell of a row underflows the row cannot be normalised.
"""

from __future__ import annotations

import itertools
import logging
import math
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING

from samplekit.defaults import DEFAULT_NUM_BINS
from samplekit.estimation.state import (
    LikelihoodMap,
    SamplerState,
    SamplingProblem,
)
from samplekit.model.params import build_param_infos

if TYPE_CHECKING:
    import numpy as np
    import pandas as pd
    from numpy.typing import NDArray

    from samplekit.io.observations import Observations
    from samplekit.model.functions import ModelFunction
    from samplekit.model.params import ParamInfo

logger = logging.getLogger(__name__)


class GridSampler:
    """Grid ("uniform") sampler over a bounded parameter box.

    Args:
        filepath: Observation ``.txt`` file.
        func: Model function ``f(x, params)``.
        names: Parameter names, in parameter-vector order.
        mins: Lower bound of each parameter.
        maxs: Upper bound of each parameter.
        num_bins: Bins per parameter.
        rigidity: Strict (True) or lenient (False) data loading.

    Raises:
        ConfigurationError: Invalid bins or parameter ranges.
        DataError: The observation file cannot be loaded.
    """

    kind = "Grid Sampler"

    def __init__(
        self,
        filepath: str | Path,
        func: ModelFunction,
        names: Sequence[str],
        mins: Sequence[float],
        maxs: Sequence[float],
        num_bins: int = DEFAULT_NUM_BINS,
        rigidity: bool = False,
    ) -> None:
        problem = SamplingProblem.from_file(
            filepath, func, names, mins, maxs, num_bins, rigidity
        )
        self._state = SamplerState(problem, self.kind)

    @classmethod
    def from_observations(
        cls,
        observations: Observations,
        func: ModelFunction,
        names: Sequence[str],
        mins: Sequence[float],
        maxs: Sequence[float],
        num_bins: int = DEFAULT_NUM_BINS,
    ) -> GridSampler:
        """Build a sampler from already-loaded observations."""
        problem = SamplingProblem(
            observations=observations,
            func=func,
            params=build_param_infos(names, mins, maxs),
            num_bins=num_bins,
        )
        sampler = cls.__new__(cls)
        sampler._state = SamplerState(problem, cls.kind)
        return sampler

    @property
    def num_cells(self) -> int:
        problem = self._state.problem
        return problem.num_bins ** problem.num_params

    @property
    def sampled(self) -> bool:
        return self._state.been_sampled

    def log_likelihood(self, params: Sequence[float]) -> float:
        return self._state.problem.log_likelihood(params)

    def sample(self) -> None:
        """Evaluate every grid cell once and normalise the marginals.

        Raises:
            StateError: The sampler has already been run.
        """
        state = self._state
        state.begin()
        problem = state.problem
        num_bins = problem.num_bins
        params = problem.params

        logger.debug("Grid sampling %d cells", self.num_cells)
        # product() varies the last dimension fastest: dimension 0 outermost.
        for cell in itertools.product(range(num_bins), repeat=problem.num_params):
            point = tuple(
                info.centroid(idx, num_bins) for info, idx in zip(params, cell, strict=True)
            )
            log_l = problem.log_likelihood(point)
            state.record(point, log_l)
            state.marginals.add_cell(cell, math.exp(log_l))

        state.finish()
        logger.debug("Grid sampling finished")

    def summarise(self, print_report: bool = False) -> list[ParamInfo]:
        """Compute mean, peak and std of every marginal.

        Raises:
            StateError: ``sample()`` has not been called.
        """
        return self._state.summarise(print_report)

    def summary(self) -> str:
        return self._state.summary()

    def summary_frame(self) -> pd.DataFrame:
        return self._state.summary_frame()

    def get_bins(self) -> int:
        return self._state.problem.num_bins

    def get_params_info(self) -> list[ParamInfo]:
        return list(self._state.problem.params)

    def get_param_likelihood(self) -> LikelihoodMap:
        return dict(self._state.likelihood_map)

    def get_marginal_distribution(self) -> NDArray[np.float64]:
        return self._state.marginal_distribution()

    def get_observations(self) -> Observations:
        return self._state.problem.observations
