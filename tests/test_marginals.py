"""Tests for marginal histograms and their statistics."""

from __future__ import annotations

import logging
import math

import numpy as np
import pytest

from samplekit.estimation import MarginalHistogram, format_summary, summary_frame
from samplekit.model import ParamInfo


@pytest.fixture
def unit_params():
    return [ParamInfo("a", 0.0, 1.0), ParamInfo("b", -2.0, 2.0)]


class TestBinning:
    def test_bin_index_floors(self, unit_params):
        hist = MarginalHistogram(unit_params, 4)
        assert hist.bin_index(0, 0.0) == 0
        assert hist.bin_index(0, 0.3) == 1
        assert hist.bin_index(0, 0.74) == 2
        assert hist.bin_index(1, -0.5) == 1
        assert hist.bin_index(1, 1.5) == 3

    def test_bin_index_clamps_out_of_range(self, unit_params):
        hist = MarginalHistogram(unit_params, 4)
        assert hist.bin_index(0, 1.0) == 3
        assert hist.bin_index(0, 1.7) == 3
        assert hist.bin_index(0, -0.2) == 0
        assert hist.bin_index(1, -9.0) == 0

    def test_add_point_updates_every_row(self, unit_params):
        hist = MarginalHistogram(unit_params, 4)
        hist.add_point((0.1, 1.9))
        hist.add_point((0.1, -1.9), weight=2.0)

        np.testing.assert_array_equal(hist.table[0], [3.0, 0.0, 0.0, 0.0])
        np.testing.assert_array_equal(hist.table[1], [2.0, 0.0, 0.0, 1.0])

    def test_centroids(self, unit_params):
        hist = MarginalHistogram(unit_params, 4)
        np.testing.assert_allclose(hist.centroids(0), [0.125, 0.375, 0.625, 0.875])
        np.testing.assert_allclose(hist.centroids(1), [-1.5, -0.5, 0.5, 1.5])


class TestNormalise:
    def test_rows_sum_to_one(self, unit_params):
        hist = MarginalHistogram(unit_params, 3)
        hist.add_cell((0, 2), 1.0)
        hist.add_cell((1, 2), 3.0)
        hist.normalise()

        assert hist.normalised
        np.testing.assert_allclose(hist.table.sum(axis=1), [1.0, 1.0])
        np.testing.assert_allclose(hist.table[0], [0.25, 0.75, 0.0])

    def test_zero_mass_row_becomes_nan(self, unit_params, caplog):
        hist = MarginalHistogram(unit_params, 3)
        with caplog.at_level(logging.WARNING, logger="samplekit.estimation.marginals"):
            hist.normalise()

        assert np.isnan(hist.table).all()
        assert "cannot be normalised" in caplog.text


class TestStatistics:
    def test_two_point_distribution(self):
        hist = MarginalHistogram([ParamInfo("a", 0.0, 1.0)], 2)
        hist.table[0] = [0.25, 0.75]

        mean, peak, std = hist.statistics(0)
        assert mean == pytest.approx(0.625)
        assert peak == 0.75
        assert std == pytest.approx(0.5 * math.sqrt(0.25 * 0.75))

    def test_point_mass_has_zero_std(self):
        hist = MarginalHistogram([ParamInfo("a", 0.0, 3.0)], 3)
        hist.table[0] = [0.0, 1.0, 0.0]

        mean, peak, std = hist.statistics(0)
        assert mean == pytest.approx(1.5)
        assert peak == 1.5
        assert std == pytest.approx(0.0, abs=1e-7)

    def test_ties_pick_first_bin(self):
        hist = MarginalHistogram([ParamInfo("a", 0.0, 1.0)], 2)
        hist.table[0] = [0.5, 0.5]
        assert hist.statistics(0)[1] == 0.25

    def test_nan_row_gives_nan_statistics(self):
        hist = MarginalHistogram([ParamInfo("a", 0.0, 1.0)], 2)
        hist.table[0] = np.nan
        mean, _, std = hist.statistics(0)
        assert math.isnan(mean)
        assert math.isnan(std)

    def test_summarise_into_sets_params(self, unit_params):
        hist = MarginalHistogram(unit_params, 2)
        hist.add_cell((1, 0), 1.0)
        hist.normalise()
        hist.summarise_into(unit_params)

        assert unit_params[0].summarised
        assert unit_params[0].mean == pytest.approx(0.75)
        assert unit_params[1].peak == pytest.approx(-1.0)


class TestSummaryOutput:
    def test_format_summary_lists_parameters(self):
        params = [ParamInfo("a", 0.0, 5.0, peak=2.5, mean=2.4, std=0.1)]
        text = format_summary(params, title="Fit", num_bins=10)

        assert text.startswith("Fit")
        assert "Bins per parameter: 10" in text
        assert "[0, 5]" in text
        assert "2.4000" in text

    def test_summary_frame_is_indexed_by_name(self):
        params = [
            ParamInfo("a", 0.0, 5.0, peak=2.5, mean=2.4, std=0.1),
            ParamInfo("b", -1.0, 1.0, peak=0.0, mean=0.1, std=0.2),
        ]
        frame = summary_frame(params)

        assert list(frame.index) == ["a", "b"]
        assert list(frame.columns) == ["min", "max", "mean", "peak", "std"]
        assert frame.loc["b", "std"] == pytest.approx(0.2)
