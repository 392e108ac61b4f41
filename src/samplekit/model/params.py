"""Per-parameter metadata for sampled model parameters."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, field

from samplekit.exceptions import ConfigurationError


@dataclass
class ParamInfo:
    """Bounds and summary statistics for one fitted parameter.

    Attributes:
        name: Parameter name.
        min: Lower bound of the sampled domain.
        max: Upper bound of the sampled domain.
        peak: Centroid of the most populated marginal bin (set by summarise).
        mean: Mass-weighted mean of the marginal (set by summarise).
        std: Population standard deviation of the marginal (set by summarise).
    """

    name: str
    min: float
    max: float
    peak: float = field(default_factory=lambda: float("nan"))
    mean: float = field(default_factory=lambda: float("nan"))
    std: float = field(default_factory=lambda: float("nan"))

    def __post_init__(self) -> None:
        self.name = str(self.name).strip()
        self.min = float(self.min)
        self.max = float(self.max)

        if not self.name:
            raise ConfigurationError("Parameter name cannot be empty")
        if not (math.isfinite(self.min) and math.isfinite(self.max)):
            raise ConfigurationError(
                f"Bounds for '{self.name}' must be finite, got ({self.min}, {self.max})"
            )
        if self.min >= self.max:
            raise ConfigurationError(
                f"Invalid bounds for '{self.name}': min={self.min} >= max={self.max}"
            )

    @property
    def width(self) -> float:
        return self.max - self.min

    @property
    def summarised(self) -> bool:
        return not math.isnan(self.mean)

    def bin_width(self, num_bins: int) -> float:
        return self.width / num_bins

    def centroid(self, index: int, num_bins: int) -> float:
        """Midpoint of bin ``index`` when the domain is split into ``num_bins``."""
        return self.min + (index + 0.5) * self.width / num_bins

    def to_dict(self) -> dict[str, float | str]:
        return {
            "name": self.name,
            "min": self.min,
            "max": self.max,
            "mean": self.mean,
            "peak": self.peak,
            "std": self.std,
        }


def build_param_infos(
    names: Sequence[str],
    mins: Sequence[float],
    maxs: Sequence[float],
) -> list[ParamInfo]:
    """Zip names and bounds into validated :class:`ParamInfo` records."""
    names = list(names)
    mins = list(mins)
    maxs = list(maxs)
    if not names:
        raise ConfigurationError("At least one parameter is required")
    if not (len(names) == len(mins) == len(maxs)):
        raise ConfigurationError(
            "names, mins and maxs must have equal length, got "
            f"{len(names)}, {len(mins)} and {len(maxs)}"
        )
    if len(set(names)) != len(names):
        raise ConfigurationError(f"Parameter names must be unique, got {names}")

    return [
        ParamInfo(name=name, min=lo, max=hi)
        for name, lo, hi in zip(names, mins, maxs, strict=True)
    ]
