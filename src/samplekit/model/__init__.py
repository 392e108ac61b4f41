"""Parameter metadata and model functions."""

from samplekit.model.functions import (
    ModelFunction,
    ModelSpec,
    available_models,
    cubic,
    get_model,
    monomial,
    power_law,
    quadratic,
    straight_line,
)
from samplekit.model.params import ParamInfo, build_param_infos

__all__ = [
    "ParamInfo",
    "build_param_infos",
    "ModelFunction",
    "ModelSpec",
    "get_model",
    "available_models",
    "power_law",
    "monomial",
    "straight_line",
    "quadratic",
    "cubic",
]
