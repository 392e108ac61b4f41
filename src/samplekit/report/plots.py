"""Matplotlib charts of sampler results.

Nothing here touches sampler internals: charts are drawn from normalised
histograms, summarised :class:`~samplekit.model.params.ParamInfo` records
and raw observations. Matplotlib is imported lazily so the rest of the
package works without it.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Any

import numpy as np
from scipy import stats

if TYPE_CHECKING:
    from numpy.typing import NDArray

    from samplekit.estimation.sampler import Sampler
    from samplekit.io.observations import Observations
    from samplekit.model.functions import ModelFunction
    from samplekit.model.params import ParamInfo

NUM_FIT_POINTS = 1000


def _fmt(value: float) -> str:
    return f"{value:g}"


def _safe(text: str) -> str:
    return text.replace("/", "_").replace(" ", "")


def plot_marginal(
    param: ParamInfo,
    marginal: NDArray[np.float64] | Sequence[float],
    path: str | Path | None = None,
    *,
    title: str | None = None,
) -> Any:
    """Bar chart of a marginal density with its Gaussian approximation.

    Bar heights are ``mass / bin_width`` so the bars integrate to one and are
    comparable to ``N(param.mean, param.std)``.

    Returns:
        The matplotlib Figure (closed when ``path`` is given).
    """
    import matplotlib.pyplot as plt

    mass = np.asarray(marginal, dtype=np.float64)
    num_bins = mass.shape[0]
    bin_width = param.bin_width(num_bins)
    centres = param.min + (np.arange(num_bins) + 0.5) * bin_width

    fig, ax = plt.subplots(figsize=(10, 6))
    ax.bar(
        centres,
        mass / bin_width,
        width=bin_width,
        color=(0.2, 0.2, 0.8),
        label="Marginal Distribution",
    )
    if param.summarised and param.std > 0.0:
        xs = np.linspace(param.min, param.max, NUM_FIT_POINTS)
        ax.plot(
            xs,
            stats.norm.pdf(xs, loc=param.mean, scale=param.std),
            "r",
            linewidth=2,
            label=f"Gaussian Fit: μ = {param.mean:.3f}, σ = {param.std:.3f}",
        )
    ax.set_title(title or param.name)
    ax.set_xlabel("Parameter Value")
    ax.set_ylabel("Marginal Distribution")
    ax.legend()

    if path is not None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(path)
        plt.close(fig)
    return fig


def plot_best_fit(
    func: ModelFunction,
    params: Sequence[float],
    observations: Observations,
    path: str | Path | None = None,
    *,
    title: str = "Best Fit",
    description: str = "",
) -> Any:
    """Scatter the observations with the model curve at ``params``."""
    import matplotlib.pyplot as plt

    x = observations.inputs
    xs = np.linspace(float(x.min()), float(x.max()), NUM_FIT_POINTS)
    ys = [func(float(v), params) for v in xs]

    fig, ax = plt.subplots(figsize=(10, 6))
    ax.errorbar(x, observations.outputs, yerr=observations.sigmas, fmt="o", label="Data")
    label = f"Best Fit - {description}" if description else "Best Fit"
    ax.plot(xs, ys, "r", linewidth=2, label=label)
    ax.set_title(title)
    ax.set_xlabel("Input Data")
    ax.set_ylabel("Output Data")
    ax.legend()

    if path is not None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(path)
        plt.close(fig)
    return fig


def save_sampler_plots(
    sampler: Sampler,
    func: ModelFunction,
    out_dir: str | Path,
    *,
    description: str = "model",
) -> list[Path]:
    """Write every marginal histogram and the best-fit curve as PNG files.

    Layout::

        <out_dir>/MarginalDistribution/dist_<name>_<min>_<max>_<bins>_<desc>.png
        <out_dir>/CurveFit/fit_<name>_<min>_<max>_..._<bins>_<desc>.png

    The sampler is summarised first if needed.
    """
    out_dir = Path(out_dir)
    params = sampler.get_params_info()
    if not all(p.summarised for p in params):
        params = sampler.summarise()
    marginals = sampler.get_marginal_distribution()
    bins = sampler.get_bins()
    desc = _safe(description)

    written: list[Path] = []
    for dim, info in enumerate(params):
        path = (
            out_dir
            / "MarginalDistribution"
            / f"dist_{info.name}_{_fmt(info.min)}_{_fmt(info.max)}_{bins}_{desc}.png"
        )
        plot_marginal(info, marginals[dim], path)
        written.append(path)

    ranges = "_".join(f"{p.name}_{_fmt(p.min)}_{_fmt(p.max)}" for p in params)
    fit_path = out_dir / "CurveFit" / f"fit_{ranges}_{bins}_{desc}.png"
    plot_best_fit(
        func,
        [p.mean for p in params],
        sampler.get_observations(),
        fit_path,
        title=description,
        description=description,
    )
    written.append(fit_path)
    return written
