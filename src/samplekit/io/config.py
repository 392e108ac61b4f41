"""YAML run configuration.

Example::

    model: cubic
    data: problem_data_4D.txt
    bins: 20
    samples: 100000
    step_size: 0.01
    seed: 42
    rigidity: false
    params:
      a: [-3, 3]
      b: [-3, 3]
      c: [-3, 3]
      d: [-3, 3]

Relative ``data`` paths are resolved against the config file's directory.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

import yaml

from samplekit.defaults import (
    DEFAULT_NUM_BINS,
    DEFAULT_SAMPLE_POINTS,
    DEFAULT_SEED,
    DEFAULT_STEP_SIZE,
)
from samplekit.exceptions import ConfigurationError

_KNOWN_KEYS = frozenset(
    {"model", "data", "bins", "samples", "step_size", "seed", "rigidity", "params"}
)


@dataclass(frozen=True)
class RunConfig:
    """Settings for one sampling run."""

    model: str = "power"
    data: Path | None = None
    bins: int = DEFAULT_NUM_BINS
    samples: int = DEFAULT_SAMPLE_POINTS
    step_size: float = DEFAULT_STEP_SIZE
    seed: int = DEFAULT_SEED
    rigidity: bool = False
    params: dict[str, tuple[float, float]] = field(default_factory=dict)

    def with_overrides(self, **overrides: Any) -> RunConfig:
        """Return a copy with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        if "params" in changes:
            merged = dict(self.params)
            merged.update(changes["params"])
            changes["params"] = merged
        return replace(self, **changes)


def _as_int(data: dict[str, Any], key: str, default: int) -> int:
    value = data.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"'{key}' must be an integer, got {value!r}")
    return value


def _parse_range(name: str, value: Any) -> tuple[float, float]:
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise ConfigurationError(
            f"Range for parameter '{name}' must be a [min, max] pair, got {value!r}"
        )
    try:
        lo, hi = float(value[0]), float(value[1])
    except (TypeError, ValueError) as e:
        raise ConfigurationError(
            f"Range for parameter '{name}' must be numeric, got {value!r}"
        ) from e
    return lo, hi


def parse_run_config(data: dict[str, Any], base_dir: Path | None = None) -> RunConfig:
    """Validate a config mapping (as produced by ``yaml.safe_load``)."""
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Run config must be a mapping, got {type(data).__name__}"
        )

    unknown = sorted(set(data) - _KNOWN_KEYS)
    if unknown:
        raise ConfigurationError(
            f"Unknown run config keys: {unknown}. Supported: {sorted(_KNOWN_KEYS)}"
        )

    model = data.get("model", "power")
    if not isinstance(model, str) or not model.strip():
        raise ConfigurationError(f"'model' must be a non-empty string, got {model!r}")

    data_path: Path | None = None
    if data.get("data") is not None:
        data_path = Path(str(data["data"]))
        if base_dir is not None and not data_path.is_absolute():
            data_path = base_dir / data_path

    step_size = data.get("step_size", DEFAULT_STEP_SIZE)
    if isinstance(step_size, bool) or not isinstance(step_size, (int, float)):
        raise ConfigurationError(f"'step_size' must be a number, got {step_size!r}")

    rigidity = data.get("rigidity", False)
    if not isinstance(rigidity, bool):
        raise ConfigurationError(f"'rigidity' must be true or false, got {rigidity!r}")

    raw_params = data.get("params") or {}
    if not isinstance(raw_params, dict):
        raise ConfigurationError(
            f"'params' must map parameter names to [min, max], got {raw_params!r}"
        )
    params = {str(name): _parse_range(str(name), rng) for name, rng in raw_params.items()}

    return RunConfig(
        model=model.strip(),
        data=data_path,
        bins=_as_int(data, "bins", DEFAULT_NUM_BINS),
        samples=_as_int(data, "samples", DEFAULT_SAMPLE_POINTS),
        step_size=float(step_size),
        seed=_as_int(data, "seed", DEFAULT_SEED),
        rigidity=rigidity,
        params=params,
    )


def load_run_config(path: str | Path) -> RunConfig:
    """Load and validate a YAML run configuration file."""
    path = Path(path)
    if not path.is_file():
        raise ConfigurationError(f"Config file not found: {path}")
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e
    return parse_run_config(data or {}, base_dir=path.parent)
