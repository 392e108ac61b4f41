"""Pytest configuration and shared fixtures."""

from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"
DATA_DIR = FIXTURES_DIR / "data"


@pytest.fixture
def fixtures_dir() -> Path:
    """Return path to fixtures directory."""
    return FIXTURES_DIR


@pytest.fixture
def data_dir() -> Path:
    """Return path to observation data fixtures."""
    return DATA_DIR


@pytest.fixture
def linear_data(data_dir) -> Path:
    """Three exact points on y = 0.5 x + 0.5 with unit sigma."""
    return data_dir / "testing_data_2D.txt"


@pytest.fixture
def unit_input_data(data_dir) -> Path:
    """Two points at x = 1, so a power law reduces to y = a."""
    return data_dir / "unit_inputs.txt"


@pytest.fixture
def power_law_data(data_dir) -> Path:
    """Twenty noise-free points on y = 2.5 x^1.5 with sigma 0.1."""
    return data_dir / "power_law.txt"
