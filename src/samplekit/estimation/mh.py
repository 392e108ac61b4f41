"""Random-walk Metropolis-Hastings sampling of the likelihood surface.

The chain lives in the unit hypercube ``[0, 1]^d`` and is mapped to
parameter space with ``param_k = min_k + coord_k * width_k``.

Random draws happen in a fixed order so that a given seed, step size,
iteration count and data set always reproduce the same chain:

1. ``d`` uniform draws for the starting position.
2. Per iteration, ``d`` normal draws for the proposal, then one uniform
   draw only when the proposal is worse than the current state.

Proposals wrap around the unit interval once (``c > 1 -> c - 1``,
``c < 0 -> c + 1``). A proposal more than one unit outside the cube is not
folded back further; its parameters fall outside the bounds and are binned
into the edge bins. Keep ``step_size`` well below 1.
"""

from __future__ import annotations

import logging
import math
import numbers
from collections.abc import Sequence
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np

from samplekit.defaults import (
    DEFAULT_NUM_BINS,
    DEFAULT_SAMPLE_POINTS,
    DEFAULT_SEED,
    DEFAULT_STEP_SIZE,
)
from samplekit.estimation.state import (
    LikelihoodMap,
    SamplerState,
    SamplingProblem,
)
from samplekit.exceptions import ConfigurationError
from samplekit.model.params import build_param_infos

if TYPE_CHECKING:
    import pandas as pd
    from numpy.typing import NDArray

    from samplekit.io.observations import Observations
    from samplekit.model.functions import ModelFunction
    from samplekit.model.params import ParamInfo

logger = logging.getLogger(__name__)


class ChainStatus(Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZED = "initialized"
    RUNNING = "running"
    SAMPLED = "sampled"


def _validate_chain_settings(
    sample_points: int,
    step_size: float,
    seed: int,
) -> tuple[int, float, int]:
    if isinstance(sample_points, bool) or not isinstance(sample_points, numbers.Integral):
        raise ConfigurationError(
            f"sample_points must be an integer, got {sample_points!r}"
        )
    if sample_points < 1:
        raise ConfigurationError(f"sample_points must be >= 1, got {sample_points}")

    step = float(step_size)
    if not math.isfinite(step) or step <= 0.0:
        raise ConfigurationError(f"step_size must be finite and > 0, got {step_size}")

    if isinstance(seed, bool) or not isinstance(seed, numbers.Integral) or seed < 0:
        raise ConfigurationError(f"seed must be a non-negative integer, got {seed!r}")

    return int(sample_points), step, int(seed)


def wrap_unit(coords: NDArray[np.float64]) -> NDArray[np.float64]:
    """Apply a single unit of toroidal wraparound to each coordinate."""
    out = np.where(coords > 1.0, coords - 1.0, coords)
    return np.where(out < 0.0, out + 1.0, out)


class MetropolisHastingsSampler:
    """Fixed-length Metropolis-Hastings random walk over a parameter box.

    Args:
        filepath: Observation ``.txt`` file.
        func: Model function ``f(x, params)``.
        names: Parameter names, in parameter-vector order.
        mins: Lower bound of each parameter.
        maxs: Upper bound of each parameter.
        sample_points: Number of chain iterations.
        step_size: Std of the Gaussian proposal in unit-cube coordinates.
        num_bins: Bins per parameter for the marginal histograms.
        rigidity: Strict (True) or lenient (False) data loading.
        seed: Seed of this sampler's private random generator.

    Raises:
        ConfigurationError: Invalid bins, ranges, sample points or step size.
        DataError: The observation file cannot be loaded.
    """

    kind = "Metropolis-Hastings Sampler"

    def __init__(
        self,
        filepath: str | Path,
        func: ModelFunction,
        names: Sequence[str],
        mins: Sequence[float],
        maxs: Sequence[float],
        sample_points: int = DEFAULT_SAMPLE_POINTS,
        step_size: float = DEFAULT_STEP_SIZE,
        num_bins: int = DEFAULT_NUM_BINS,
        rigidity: bool = False,
        seed: int = DEFAULT_SEED,
    ) -> None:
        settings = _validate_chain_settings(sample_points, step_size, seed)
        problem = SamplingProblem.from_file(
            filepath, func, names, mins, maxs, num_bins, rigidity
        )
        self._setup(problem, *settings)

    @classmethod
    def from_observations(
        cls,
        observations: Observations,
        func: ModelFunction,
        names: Sequence[str],
        mins: Sequence[float],
        maxs: Sequence[float],
        sample_points: int = DEFAULT_SAMPLE_POINTS,
        step_size: float = DEFAULT_STEP_SIZE,
        num_bins: int = DEFAULT_NUM_BINS,
        seed: int = DEFAULT_SEED,
    ) -> MetropolisHastingsSampler:
        """Build a sampler from already-loaded observations."""
        settings = _validate_chain_settings(sample_points, step_size, seed)
        problem = SamplingProblem(
            observations=observations,
            func=func,
            params=build_param_infos(names, mins, maxs),
            num_bins=num_bins,
        )
        sampler = cls.__new__(cls)
        sampler._setup(problem, *settings)
        return sampler

    def _setup(
        self,
        problem: SamplingProblem,
        sample_points: int,
        step_size: float,
        seed: int,
    ) -> None:
        self._state = SamplerState(problem, self.kind)
        self.sample_points = sample_points
        self.step_size = step_size
        self.seed = seed
        self._rng = np.random.default_rng(seed)
        self._status = ChainStatus.UNINITIALIZED
        self._mins = problem.mins
        self._widths = problem.widths

    @property
    def status(self) -> ChainStatus:
        return self._status

    @property
    def sampled(self) -> bool:
        return self._state.been_sampled

    def log_likelihood(self, params: Sequence[float]) -> float:
        return self._state.problem.log_likelihood(params)

    def _to_params(self, coords: NDArray[np.float64]) -> tuple[float, ...]:
        return tuple(float(v) for v in self._mins + coords * self._widths)

    def _log_uniform(self) -> float:
        u = self._rng.uniform()
        return math.log(u) if u > 0.0 else -math.inf

    def sample(self) -> None:
        """Run the chain for ``sample_points`` iterations and normalise.

        Raises:
            StateError: The sampler has already been run.
        """
        state = self._state
        state.begin()
        problem = state.problem
        d = problem.num_params
        rng = self._rng

        coords = rng.uniform(0.0, 1.0, size=d)
        current = self._to_params(coords)
        state.marginals.add_point(current)
        current_log_l = problem.log_likelihood(current)
        state.record(current, current_log_l)
        self._status = ChainStatus.INITIALIZED

        logger.debug(
            "Running %d Metropolis-Hastings iterations (step_size=%g, seed=%d)",
            self.sample_points,
            self.step_size,
            self.seed,
        )
        self._status = ChainStatus.RUNNING
        for _ in range(self.sample_points):
            proposal_coords = wrap_unit(coords + rng.normal(0.0, self.step_size, size=d))
            proposal = self._to_params(proposal_coords)
            proposal_log_l = problem.log_likelihood(proposal)

            # The uniform is drawn only when the proposal is worse.
            if proposal_log_l >= current_log_l or (
                proposal_log_l - current_log_l > self._log_uniform()
            ):
                coords = proposal_coords
                current = proposal
                current_log_l = proposal_log_l
                state.record(current, current_log_l)

            state.marginals.add_point(current)

        state.finish()
        self._status = ChainStatus.SAMPLED
        logger.debug("Metropolis-Hastings sampling finished")

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
