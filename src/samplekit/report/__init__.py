"""Charts of sampler results (requires matplotlib)."""

from samplekit.report.plots import plot_best_fit, plot_marginal, save_sampler_plots

__all__ = ["plot_marginal", "plot_best_fit", "save_sampler_plots"]
