"""Tests for sampler result plots."""

from __future__ import annotations

import numpy as np
import pytest

matplotlib = pytest.importorskip("matplotlib")
matplotlib.use("Agg")

from samplekit.cli.main import main  # noqa: E402
from samplekit.estimation import GridSampler  # noqa: E402
from samplekit.io import load_observations  # noqa: E402
from samplekit.model import ParamInfo, power_law, straight_line  # noqa: E402
from samplekit.report import plot_best_fit, plot_marginal, save_sampler_plots  # noqa: E402


class TestPlotMarginal:
    def test_returns_figure_with_gaussian_overlay(self):
        info = ParamInfo("a", 0.0, 1.0, peak=0.5, mean=0.5, std=0.2)
        fig = plot_marginal(info, [0.1, 0.2, 0.4, 0.2, 0.1])

        ax = fig.axes[0]
        assert len(ax.patches) == 5
        assert len(ax.lines) == 1
        # Bars are densities: mass / bin_width.
        assert ax.patches[2].get_height() == pytest.approx(2.0)
        matplotlib.pyplot.close(fig)

    def test_unsummarised_param_has_no_overlay(self):
        fig = plot_marginal(ParamInfo("a", 0.0, 1.0), np.full(4, 0.25))
        assert len(fig.axes[0].lines) == 0
        matplotlib.pyplot.close(fig)

    def test_writes_file(self, tmp_path):
        info = ParamInfo("a", 0.0, 1.0, peak=0.5, mean=0.5, std=0.2)
        path = tmp_path / "nested" / "a.png"
        plot_marginal(info, [0.25, 0.5, 0.25], path)
        assert path.is_file()


class TestPlotBestFit:
    def test_writes_file(self, linear_data, tmp_path):
        obs = load_observations(linear_data)
        path = tmp_path / "fit.png"
        plot_best_fit(straight_line, (0.5, 0.5), obs, path, description="y=ax+b")
        assert path.is_file()


class TestSaveSamplerPlots:
    def test_layout(self, unit_input_data, tmp_path):
        sampler = GridSampler(unit_input_data, power_law, ["a", "b"], [0, 0], [1, 1], 2)
        sampler.sample()

        written = save_sampler_plots(sampler, power_law, tmp_path, description="y=ax^b")

        assert written == [
            tmp_path / "MarginalDistribution" / "dist_a_0_1_2_y=ax^b.png",
            tmp_path / "MarginalDistribution" / "dist_b_0_1_2_y=ax^b.png",
            tmp_path / "CurveFit" / "fit_a_0_1_b_0_1_2_y=ax^b.png",
        ]
        assert all(path.is_file() for path in written)
        assert sampler.get_params_info()[0].summarised

    def test_cli_plot_dir(self, linear_data, tmp_path, capsys):
        code = main(
            ["sample", str(linear_data), "-m", "line", "-n", "4", "-s", "16",
             "-r", "a=0,1", "-r", "b=0,1", "--plot-dir", str(tmp_path)]
        )
        assert code == 0
        assert "Plot saved to:" in capsys.readouterr().out
        assert len(list((tmp_path / "MarginalDistribution").glob("*.png"))) == 2
        assert len(list((tmp_path / "CurveFit").glob("*.png"))) == 1
