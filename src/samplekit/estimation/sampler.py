"""Sampler interface and the cost-based sampler factory."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from samplekit.defaults import (
    DEFAULT_NUM_BINS,
    DEFAULT_SAMPLE_POINTS,
    DEFAULT_SEED,
    DEFAULT_STEP_SIZE,
)
from samplekit.estimation.grid import GridSampler
from samplekit.estimation.mh import MetropolisHastingsSampler, _validate_chain_settings
from samplekit.estimation.state import LikelihoodMap, validate_num_bins

if TYPE_CHECKING:
    import numpy as np
    import pandas as pd
    from numpy.typing import NDArray

    from samplekit.io.observations import Observations
    from samplekit.model.functions import ModelFunction
    from samplekit.model.params import ParamInfo

logger = logging.getLogger(__name__)


@runtime_checkable
class Sampler(Protocol):
    """Capabilities shared by every sampler kind."""

    kind: str

    def sample(self) -> None: ...

    def summarise(self, print_report: bool = False) -> list[ParamInfo]: ...

    def summary(self) -> str: ...

    def summary_frame(self) -> pd.DataFrame: ...

    def get_bins(self) -> int: ...

    def get_params_info(self) -> list[ParamInfo]: ...

    def get_param_likelihood(self) -> LikelihoodMap: ...

    def get_marginal_distribution(self) -> NDArray[np.float64]: ...

    def get_observations(self) -> Observations: ...


def prefers_grid(num_bins: int, num_params: int, sample_points: int) -> bool:
    """True when exhaustive enumeration costs no more than the MH budget."""
    return sample_points >= num_bins**num_params


def build_sampler(
    filepath: str | Path,
    func: ModelFunction,
    names: Sequence[str],
    mins: Sequence[float],
    maxs: Sequence[float],
    num_bins: int = DEFAULT_NUM_BINS,
    step_size: float = DEFAULT_STEP_SIZE,
    sample_points: int = DEFAULT_SAMPLE_POINTS,
    rigidity: bool = False,
    seed: int = DEFAULT_SEED,
) -> GridSampler | MetropolisHastingsSampler:
    """Build the cheaper sampler for the requested resolution.

    A :class:`GridSampler` is returned when ``num_bins ** num_params`` grid
    cells fit within ``sample_points`` evaluations, otherwise a
    :class:`MetropolisHastingsSampler` with that many iterations.

    Raises:
        ConfigurationError: Invalid bins, ranges, sample points or step size.
        DataError: The observation file cannot be loaded.
    """
    num_bins = validate_num_bins(num_bins)
    sample_points, step_size, seed = _validate_chain_settings(
        sample_points, step_size, seed
    )

    if prefers_grid(num_bins, len(names), sample_points):
        logger.info(
            "Grid sampler selected (%d cells <= %d sample points)",
            num_bins ** len(names),
            sample_points,
        )
        return GridSampler(filepath, func, names, mins, maxs, num_bins, rigidity)

    logger.info(
        "Metropolis-Hastings sampler selected (%d sample points < %d cells)",
        sample_points,
        num_bins ** len(names),
    )
    return MetropolisHastingsSampler(
        filepath,
        func,
        names,
        mins,
        maxs,
        sample_points=sample_points,
        step_size=step_size,
        num_bins=num_bins,
        rigidity=rigidity,
        seed=seed,
    )
