"""Fit y = a * x^b with both samplers on the power-law fixture.

Run from repository root:
    python examples/power_law_fit.py
"""

from __future__ import annotations

from pathlib import Path

import numpy as np

from samplekit import GridSampler, MetropolisHastingsSampler
from samplekit.model import get_model


def main() -> None:
    repo_root = Path(__file__).resolve().parents[1]
    data_path = repo_root / "tests" / "fixtures" / "data" / "power_law.txt"
    spec = get_model("power")
    lo, hi = spec.default_range
    mins = [lo] * spec.num_params
    maxs = [hi] * spec.num_params

    grid = GridSampler(data_path, spec.func, spec.param_names, mins, maxs, num_bins=100)
    grid.sample()
    print(grid.summary())
    print()

    mh = MetropolisHastingsSampler(
        data_path,
        spec.func,
        spec.param_names,
        mins,
        maxs,
        sample_points=50_000,
        step_size=0.01,
        num_bins=100,
        seed=42,
    )
    mh.sample()
    print(mh.summary())
    print()

    frames = {"grid": grid.summary_frame(), "mh": mh.summary_frame()}
    for label, frame in frames.items():
        print(f"{label}:")
        print(frame[["mean", "peak", "std"]].to_string())
        print()
    print(f"Accepted MH states: {len(mh.get_param_likelihood())}")


if __name__ == "__main__":
    np.set_printoptions(precision=6, suppress=True)
    main()
