"""Observation loading and run configuration."""

from samplekit.io.config import RunConfig, load_run_config, parse_run_config
from samplekit.io.observations import Observations, load_observations

__all__ = [
    "Observations",
    "load_observations",
    "RunConfig",
    "load_run_config",
    "parse_run_config",
]
