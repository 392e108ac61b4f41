"""Command-line interface for samplekit.

Usage:
    samplekit sample data.txt --model cubic -n 20 -s 100000
    samplekit sample --config run.yaml --plot-dir plots
    samplekit models
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from argparse import Namespace


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="samplekit",
        description="Estimate model parameters by grid or Metropolis-Hastings sampling",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  samplekit sample data.txt --model power -n 100 -s 100000
  samplekit sample data.txt --model cubic -n 20 --range a=-1,1 --strict
  samplekit sample --config run.yaml --plot-dir plots
  samplekit models
        """,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # =========================================================================
    # sample command
    # =========================================================================
    sample_parser = subparsers.add_parser(
        "sample",
        help="Sample the likelihood surface and summarise the marginals",
        description=(
            "Load observations, pick the grid sampler when num_bins^num_params "
            "<= samples and the Metropolis-Hastings sampler otherwise, then "
            "print the marginal summary."
        ),
    )
    sample_parser.add_argument(
        "data",
        nargs="?",
        help="Observation file (.txt with x, y, sigma columns)",
    )
    sample_parser.add_argument(
        "-c", "--config",
        help="YAML run configuration; command-line flags take precedence",
    )
    sample_parser.add_argument(
        "-m", "--model",
        help="Model function name (see 'samplekit models')",
    )
    sample_parser.add_argument(
        "-n", "--bins",
        type=int,
        help="Number of bins per parameter (default: 100)",
    )
    sample_parser.add_argument(
        "-s", "--samples",
        type=int,
        help="Sample-point budget / MH iterations (default: 100000)",
    )
    sample_parser.add_argument(
        "--step-size",
        type=float,
        help="MH proposal std in unit-cube coordinates (default: 0.01)",
    )
    sample_parser.add_argument(
        "--seed",
        type=int,
        help="MH random seed (default: 42)",
    )
    sample_parser.add_argument(
        "-r", "--range",
        action="append",
        default=[],
        metavar="NAME=MIN,MAX",
        help="Parameter range, repeatable (e.g. --range a=-3,3)",
    )
    sample_parser.add_argument(
        "--strict",
        action="store_true",
        help="Abort on the first malformed data row instead of skipping it",
    )
    sample_parser.add_argument(
        "-p", "--plot-dir",
        help="Directory for marginal and best-fit plots (requires matplotlib)",
    )
    sample_parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log progress messages",
    )

    # =========================================================================
    # models command
    # =========================================================================
    subparsers.add_parser(
        "models",
        help="List available model functions",
        description="List the built-in model functions and their parameters.",
    )

    return parser


def _get_version() -> str:
    """Get package version."""
    try:
        from samplekit._version import __version__

        return __version__
    except ImportError:
        return "unknown"


def _parse_range_specs(specs: list[str]) -> dict[str, tuple[float, float]]:
    """Parse repeatable --range specs into parameter -> (min, max)."""
    ranges: dict[str, tuple[float, float]] = {}
    for raw in specs:
        if "=" not in raw:
            raise ValueError(f"Invalid --range spec '{raw}'. Use name=min,max")
        name, rhs = raw.split("=", 1)
        name = name.strip()
        tokens = [token.strip() for token in rhs.split(",")]
        if not name or len(tokens) != 2 or not all(tokens):
            raise ValueError(f"Invalid --range spec '{raw}'. Use name=min,max")
        if name in ranges:
            raise ValueError(f"Duplicate --range parameter '{name}'")
        ranges[name] = (float(tokens[0]), float(tokens[1]))
    return ranges


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )


def cmd_sample(args: Namespace) -> int:
    """Sample command."""
    from samplekit.estimation import build_sampler
    from samplekit.exceptions import ConfigurationError, SampleKitError
    from samplekit.io.config import RunConfig, load_run_config
    from samplekit.model import get_model

    _configure_logging(args.verbose)

    try:
        ranges = _parse_range_specs(args.range)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        config = load_run_config(args.config) if args.config else RunConfig()
        config = config.with_overrides(
            model=args.model,
            data=args.data,
            bins=args.bins,
            samples=args.samples,
            step_size=args.step_size,
            seed=args.seed,
            rigidity=True if args.strict else None,
            params=ranges or None,
        )
        if config.data is None:
            raise ConfigurationError("No data file given (positional DATA or 'data' in config)")

        spec = get_model(config.model)
        unknown = sorted(set(config.params) - set(spec.param_names))
        if unknown:
            raise ConfigurationError(
                f"Model '{spec.name}' has no parameters {unknown}; "
                f"expected {list(spec.param_names)}"
            )
        bounds = [config.params.get(name, spec.default_range) for name in spec.param_names]

        print(f"Loading data: {config.data}")
        sampler = build_sampler(
            config.data,
            spec.func,
            spec.param_names,
            [lo for lo, _ in bounds],
            [hi for _, hi in bounds],
            num_bins=config.bins,
            step_size=config.step_size,
            sample_points=config.samples,
            rigidity=config.rigidity,
            seed=config.seed,
        )
    except SampleKitError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"{sampler.kind} initiated")
    sampler.sample()
    sampler.summarise()
    print()
    print(sampler.summary())

    if args.plot_dir:
        try:
            from samplekit.report import save_sampler_plots

            written = save_sampler_plots(
                sampler, spec.func, args.plot_dir, description=spec.description
            )
        except ImportError:
            print("Note: matplotlib not installed, skipping plots")
        else:
            print()
            for path in written:
                print(f"Plot saved to: {path}")

    return 0


def cmd_models(args: Namespace) -> int:
    """Models command."""
    from samplekit.model import available_models, get_model

    print(f"  {'Model':<12} {'Parameters':<12} {'Default range':<16} Formula")
    print(f"  {'-' * 12} {'-' * 12} {'-' * 16} {'-' * 20}")
    for name in available_models():
        spec = get_model(name)
        lo, hi = spec.default_range
        print(
            f"  {name:<12} {','.join(spec.param_names):<12} "
            f"{f'[{lo:g}, {hi:g}]':<16} {spec.description}"
        )
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "sample": cmd_sample,
        "models": cmd_models,
    }

    handler = commands.get(args.command)
    if handler is None:
        print(f"Unknown command: {args.command}", file=sys.stderr)
        return 1

    return handler(args)


if __name__ == "__main__":
    sys.exit(main())
