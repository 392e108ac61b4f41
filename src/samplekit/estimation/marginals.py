"""Per-parameter marginal histograms and their summary statistics."""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

if TYPE_CHECKING:
    import pandas as pd

    from samplekit.model.params import ParamInfo

logger = logging.getLogger(__name__)


class MarginalHistogram:
    """``num_params x num_bins`` table of non-negative marginal mass.

    Mass is accumulated with :meth:`add_cell` (known bin indices) or
    :meth:`add_point` (parameter vector binned on the fly), then
    :meth:`normalise` scales each row to sum to one.
    """

    def __init__(self, params: Sequence[ParamInfo], num_bins: int) -> None:
        self._params = tuple(params)
        self.num_bins = int(num_bins)
        self._mins = np.array([p.min for p in self._params], dtype=np.float64)
        self._bin_widths = np.array(
            [p.width / self.num_bins for p in self._params], dtype=np.float64
        )
        self.table: NDArray[np.float64] = np.zeros(
            (len(self._params), self.num_bins), dtype=np.float64
        )
        self.normalised = False

    @property
    def num_params(self) -> int:
        return len(self._params)

    def bin_index(self, dim: int, value: float) -> int:
        """``floor((value - min) / bin_width)`` clamped to ``[0, num_bins - 1]``."""
        raw = math.floor((value - self._mins[dim]) / self._bin_widths[dim])
        return min(max(raw, 0), self.num_bins - 1)

    def add_cell(self, indices: Sequence[int], weight: float = 1.0) -> None:
        for dim, idx in enumerate(indices):
            self.table[dim, idx] += weight

    def add_point(self, params: Sequence[float], weight: float = 1.0) -> None:
        for dim, value in enumerate(params):
            self.table[dim, self.bin_index(dim, value)] += weight

    def centroids(self, dim: int) -> NDArray[np.float64]:
        idx = np.arange(self.num_bins, dtype=np.float64)
        return self._mins[dim] + (idx + 0.5) * self._bin_widths[dim]

    def normalise(self) -> None:
        """Scale every row to unit sum.

        A row whose total mass is zero (e.g. every ``exp(log L)`` underflowed)
        cannot be normalised and is left as NaN.
        """
        totals = self.table.sum(axis=1)
        for dim, total in enumerate(totals):
            if total > 0.0 and np.isfinite(total):
                self.table[dim] /= total
            else:
                logger.warning(
                    "Marginal mass for '%s' is %s; histogram cannot be normalised",
                    self._params[dim].name,
                    total,
                )
                self.table[dim] = np.nan
        self.normalised = True

    def statistics(self, dim: int) -> tuple[float, float, float]:
        """Return ``(mean, peak, std)`` of the normalised row ``dim``."""
        mass = self.table[dim]
        centres = self.centroids(dim)
        mean = float(np.sum(centres * mass))
        peak = float(centres[int(np.argmax(mass))])
        variance = float(np.sum(centres * centres * mass)) - mean * mean
        # Rounding can push a near-zero variance slightly negative.
        std = math.sqrt(max(variance, 0.0)) if np.isfinite(variance) else float("nan")
        return mean, peak, std

    def summarise_into(self, params: Sequence[ParamInfo]) -> None:
        """Write mean, peak and std of each row back onto ``params``."""
        for dim, info in enumerate(params):
            info.mean, info.peak, info.std = self.statistics(dim)


def format_summary(
    params: Sequence[ParamInfo],
    *,
    title: str = "Marginal Summary",
    num_bins: int | None = None,
) -> str:
    """Render a text table of summarised parameters."""
    lines = [title, "=" * 62]
    if num_bins is not None:
        lines.append(f"  Bins per parameter: {num_bins}")
        lines.append("")
    lines.extend(
        [
            f"  {'Parameter':<12} {'Range':>18} {'Mean':>10} {'Peak':>10} {'Std':>10}",
            f"  {'-' * 12} {'-' * 18} {'-' * 10} {'-' * 10} {'-' * 10}",
        ]
    )
    for p in params:
        rng = f"[{p.min:g}, {p.max:g}]"
        lines.append(
            f"  {p.name:<12} {rng:>18} {p.mean:10.4f} {p.peak:10.4f} {p.std:10.4f}"
        )
    return "\n".join(lines)


def summary_frame(params: Sequence[ParamInfo]) -> pd.DataFrame:
    """Summarised parameters as a DataFrame (one row per parameter)."""
    import pandas as pd

    return pd.DataFrame([p.to_dict() for p in params]).set_index("name")
