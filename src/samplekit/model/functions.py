"""Ready-made model functions and a name registry.

A model function has the signature ``f(x, params) -> float`` where
``params`` is the ordered parameter vector.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

import numpy as np

from samplekit.exceptions import ConfigurationError

ModelFunction = Callable[[float, Sequence[float]], float]


def _pow(base: float, exponent: float) -> float:
    """Real power with C ``pow`` semantics.

    A negative base with a fractional exponent gives NaN (not a complex
    number) and zero to a negative power gives inf.
    """
    with np.errstate(invalid="ignore", divide="ignore", over="ignore"):
        return float(np.power(base, exponent))


def power_law(x: float, params: Sequence[float]) -> float:
    return params[0] * _pow(x, params[1])


def monomial(x: float, params: Sequence[float]) -> float:
    return _pow(x, params[0])


def straight_line(x: float, params: Sequence[float]) -> float:
    return params[0] * x + params[1]


def quadratic(x: float, params: Sequence[float]) -> float:
    return params[0] * x * x + params[1] * x + params[2]


def cubic(x: float, params: Sequence[float]) -> float:
    return params[0] * x * x * x + params[1] * x * x + params[2] * x + params[3]


@dataclass(frozen=True, slots=True)
class ModelSpec:
    """Registry entry describing a model function."""

    name: str
    func: ModelFunction
    param_names: tuple[str, ...]
    description: str
    default_range: tuple[float, float] = (0.0, 5.0)

    @property
    def num_params(self) -> int:
        return len(self.param_names)


_MODELS: dict[str, ModelSpec] = {
    "power": ModelSpec("power", power_law, ("a", "b"), "y=ax^b"),
    "monomial": ModelSpec("monomial", monomial, ("a",), "y=x^a"),
    "line": ModelSpec("line", straight_line, ("a", "b"), "y=ax+b"),
    "quadratic": ModelSpec(
        "quadratic", quadratic, ("a", "b", "c"), "y=ax^2+bx+c", (-3.0, 3.0)
    ),
    "cubic": ModelSpec(
        "cubic", cubic, ("a", "b", "c", "d"), "y=ax^3+bx^2+cx+d", (-3.0, 3.0)
    ),
}


def get_model(name: str) -> ModelSpec:
    """Return a registered model by name."""
    try:
        return _MODELS[name.strip().lower()]
    except KeyError as e:
        raise ConfigurationError(
            f"Unknown model '{name}'. Available: {', '.join(_MODELS)}"
        ) from e


def available_models() -> tuple[str, ...]:
    return tuple(_MODELS)
