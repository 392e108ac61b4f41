"""Tests for observation file loading."""

from __future__ import annotations

import logging
import re

import numpy as np
import pytest

from samplekit.exceptions import (
    DataDomainError,
    DataError,
    DataFileError,
    MalformedRowError,
)
from samplekit.io import Observations, load_observations

LOGGER = "samplekit.io.observations"

X = [9.490792840979749290e-01, 4.906167379139929619e-01, 9.834871049063151904e-01]
Y = [9.745396420489874645e-01, 7.453083689569964809e-01, 9.917435524531575952e-01]


def _warnings(caplog) -> list[str]:
    return [r.getMessage() for r in caplog.records if r.levelno == logging.WARNING]


class TestLoadObservations:
    def test_reads_three_rows_in_order(self, linear_data):
        obs = load_observations(linear_data)

        assert obs.num_points == 3
        assert len(obs) == 3
        np.testing.assert_allclose(obs.inputs, [0.94908, 0.49062, 0.98349], rtol=1e-5)
        np.testing.assert_allclose(obs.outputs, [0.97454, 0.74531, 0.99174], rtol=1e-5)
        np.testing.assert_allclose(obs.sigmas, [1.0, 1.0, 1.0], rtol=1e-12)

    def test_reads_integer_tokens_and_skips_blank_lines(self, data_dir):
        obs = load_observations(data_dir / "testing_data.txt")

        np.testing.assert_allclose(obs.inputs, [1.0, 2.0, 9.0, 12.0])
        np.testing.assert_allclose(obs.outputs, [2.0, 5.0, 99.0, 33.0])
        np.testing.assert_allclose(obs.sigmas, [3.0, 3.0, 3.0, 45.0])

    def test_missing_file_is_fatal(self, data_dir):
        path = data_dir / "no_file.txt"
        with pytest.raises(DataFileError, match="Unable to open file"):
            load_observations(path)
        with pytest.raises(DataFileError):
            load_observations(path, rigidity=False)

    def test_wrong_extension_is_fatal(self, data_dir):
        path = data_dir / "testing_data_2D.csv"
        with pytest.raises(
            DataFileError,
            match=re.escape("Incorrect file extension: .csv instead of .txt"),
        ) as exc_info:
            load_observations(path)
        assert exc_info.value.path == path

    def test_extra_token_accepted_with_warning_when_lenient(self, data_dir, caplog):
        with caplog.at_level(logging.WARNING, logger=LOGGER):
            obs = load_observations(data_dir / "testing_data1.txt")

        np.testing.assert_allclose(obs.inputs, X, rtol=1e-12)
        np.testing.assert_allclose(obs.outputs, Y, rtol=1e-12)
        np.testing.assert_allclose(obs.sigmas, [1.0, 1.0, 1.0])

        messages = _warnings(caplog)
        assert len(messages) == 1
        assert "exceeding three fields" in messages[0]
        assert "line 1" in messages[0]

    def test_extra_token_rejected_when_strict(self, data_dir):
        with pytest.raises(DataDomainError, match="exceeding three fields") as exc_info:
            load_observations(data_dir / "testing_data1.txt", rigidity=True)
        assert exc_info.value.line_number == 1
        assert exc_info.value.line.endswith("7.453083689569964809e-01")

    def test_incomplete_rows_skipped_when_lenient(self, data_dir, caplog):
        with caplog.at_level(logging.WARNING, logger=LOGGER):
            obs = load_observations(data_dir / "testing_data2.txt")

        np.testing.assert_allclose(obs.inputs, X[1:], rtol=1e-12)
        np.testing.assert_allclose(obs.outputs, Y[1:], rtol=1e-12)

        messages = _warnings(caplog)
        assert len(messages) == 3
        assert "sigma data from line 1" in messages[0]
        assert "output data from line 4" in messages[1]
        assert "output data from line 5" in messages[2]
        assert messages[2].endswith("N/A")

    def test_incomplete_row_rejected_when_strict(self, data_dir):
        with pytest.raises(MalformedRowError, match="Invalid sigma data read from line 1"):
            load_observations(data_dir / "testing_data2.txt", rigidity=True)

    def test_non_numeric_rows_when_lenient(self, data_dir, caplog):
        with caplog.at_level(logging.WARNING, logger=LOGGER):
            obs = load_observations(data_dir / "testing_data3.txt")

        assert obs.num_points == 0
        messages = _warnings(caplog)
        assert messages == [
            "Skipping row - Error reading input data from line 1 : abs dd s",
            "Skipping row - Error reading input data from line 2 : s sdd ff",
            "Skipping row - Error reading input data from line 3 : d ddd ww",
        ]

    def test_non_numeric_row_rejected_when_strict(self, data_dir):
        with pytest.raises(
            MalformedRowError,
            match=re.escape("Invalid input data read from line 1 : abs dd s"),
        ):
            load_observations(data_dir / "testing_data3.txt", rigidity=True)

    def test_negative_sigma_skipped_when_lenient(self, data_dir, caplog):
        with caplog.at_level(logging.WARNING, logger=LOGGER):
            obs = load_observations(data_dir / "testing_data4.txt")

        np.testing.assert_allclose(obs.inputs, [X[0], X[2], X[0]], rtol=1e-12)
        np.testing.assert_allclose(obs.outputs, [Y[0], Y[2], Y[0]], rtol=1e-12)
        np.testing.assert_allclose(obs.sigmas, [1.0, 3.0, 1.0])

        messages = _warnings(caplog)
        assert len(messages) == 1
        assert "not strictly positive in line 2" in messages[0]

    def test_negative_sigma_rejected_when_strict(self, data_dir):
        with pytest.raises(DataDomainError, match="line 2") as exc_info:
            load_observations(data_dir / "testing_data4.txt", rigidity=True)
        assert isinstance(exc_info.value, ValueError)
        assert exc_info.value.line_number == 2

    def test_zero_sigma_treated_as_invalid(self, tmp_path):
        path = tmp_path / "zero_sigma.txt"
        path.write_text("1.0 2.0 0.0\n2.0 3.0 1.0\n", encoding="utf-8")

        assert load_observations(path).num_points == 1
        with pytest.raises(DataDomainError):
            load_observations(path, rigidity=True)

    def test_non_finite_tokens_are_malformed(self, tmp_path):
        path = tmp_path / "nan.txt"
        path.write_text("nan 2.0 1.0\n1.0 inf 1.0\n", encoding="utf-8")

        assert load_observations(path).num_points == 0
        with pytest.raises(MalformedRowError, match="input"):
            load_observations(path, rigidity=True)

    def test_undecodable_file_is_a_data_file_error(self, tmp_path):
        path = tmp_path / "binary.txt"
        path.write_bytes(b"1.0 2.0 1.0\n\xff\xfe 1 1\n")

        for rigidity in (False, True):
            with pytest.raises(DataFileError, match="Unable to decode file") as exc_info:
                load_observations(path, rigidity=rigidity)
            assert exc_info.value.path == path

    def test_header_line_is_a_malformed_row(self, tmp_path, caplog):
        path = tmp_path / "header.txt"
        path.write_text("# x y sigma\n1.0 2.0 1.0\n", encoding="utf-8")

        with caplog.at_level(logging.WARNING, logger=LOGGER):
            obs = load_observations(path)
        assert obs.num_points == 1
        assert _warnings(caplog) == [
            "Skipping row - Error reading input data from line 1 : # x y sigma"
        ]
        with pytest.raises(MalformedRowError, match="line 1"):
            load_observations(path, rigidity=True)


class TestObservations:
    def test_arrays_are_read_only(self):
        obs = Observations(inputs=[1.0, 2.0], outputs=[3.0, 4.0], sigmas=[0.5, 0.5])
        with pytest.raises(ValueError):
            obs.inputs[0] = 10.0

    def test_unequal_lengths_rejected(self):
        with pytest.raises(DataError, match="equal length"):
            Observations(inputs=[1.0, 2.0], outputs=[3.0], sigmas=[1.0, 1.0])

    def test_non_positive_sigma_rejected(self):
        with pytest.raises(DataError, match="strictly positive"):
            Observations(inputs=[1.0], outputs=[3.0], sigmas=[0.0])

    def test_to_frame(self, linear_data):
        frame = load_observations(linear_data).to_frame()
        assert list(frame.columns) == ["x", "y", "sigma"]
        assert frame.shape == (3, 3)
        assert frame["sigma"].tolist() == [1.0, 1.0, 1.0]
