"""samplekit: grid and Metropolis-Hastings estimation of model parameters."""

from samplekit._version import __version__
from samplekit.estimation import (
    GridSampler,
    MetropolisHastingsSampler,
    Sampler,
    build_sampler,
)
from samplekit.exceptions import (
    ConfigurationError,
    DataDomainError,
    DataError,
    DataFileError,
    MalformedRowError,
    SampleKitError,
    StateError,
)
from samplekit.io import Observations, RunConfig, load_observations, load_run_config
from samplekit.model import ParamInfo, available_models, get_model

__all__ = [
    "__version__",
    "GridSampler",
    "MetropolisHastingsSampler",
    "Sampler",
    "build_sampler",
    "Observations",
    "load_observations",
    "RunConfig",
    "load_run_config",
    "ParamInfo",
    "get_model",
    "available_models",
    "SampleKitError",
    "ConfigurationError",
    "StateError",
    "DataError",
    "DataFileError",
    "MalformedRowError",
    "DataDomainError",
]
