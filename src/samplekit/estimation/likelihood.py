"""Gaussian log-likelihood of a model against observations.

The normalising constant ``-sum(log(sigma_i * sqrt(2 pi)))`` is omitted:
samplers only ever use likelihood ratios, so it cancels.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from samplekit.io.observations import Observations
    from samplekit.model.functions import ModelFunction


def log_likelihood(
    params: Sequence[float],
    observations: Observations,
    func: ModelFunction,
) -> float:
    """Return ``sum_i -(f(x_i, params) - y_i)^2 / (2 sigma_i^2)``.

    Exceptions raised by ``func`` propagate unchanged.
    """
    predicted = np.fromiter(
        (func(float(x), params) for x in observations.inputs),
        dtype=np.float64,
        count=observations.num_points,
    )
    residual = predicted - observations.outputs
    return float(-np.sum(residual * residual / (2.0 * observations.sigmas**2)))


def build_log_likelihood(
    observations: Observations,
    func: ModelFunction,
) -> Callable[[Sequence[float]], float]:
    """Bind observations and model into a callable ``f(params) -> float``."""

    def evaluate(params: Sequence[float]) -> float:
        return log_likelihood(params, observations, func)

    evaluate.observations = observations  # type: ignore[attr-defined]
    evaluate.func = func  # type: ignore[attr-defined]
    return evaluate
