"""Command-line entry point for the :mod:`random_chain_correlations` package."""

from __future__ import annotations

import argparse
import dataclasses
import sys
from pathlib import Path

from .config import load_config
from .disorder import run_from_config
from .errors import ConfigurationError
from .statistics import summarize, to_dataframe
from .storage import save_results, save_table
from .visualisation import plot_correlations


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description=(
            "Disorder-averaged longitudinal and transverse spin correlations "
            "of a random antiferromagnetic chain via free fermions."
        )
    )
    parser.add_argument(
        "parameters",
        type=Path,
        help="Parameter file with one 'key = value' assignment per line.",
    )
    parser.add_argument(
        "--samples",
        type=int,
        default=None,
        help="Override the number of disorder samples from the parameter file.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the random number generator (default: from file, else None).",
    )
    parser.add_argument(
        "--max-workers",
        type=int,
        default=None,
        help="Run samples in a process pool of this size (default: serial).",
    )
    parser.add_argument(
        "--progress",
        action="store_true",
        help="Show a progress bar over the disorder samples.",
    )
    parser.add_argument(
        "--save-data",
        type=Path,
        default=None,
        metavar="PATH",
        help="Persist the raw accumulated sums and parameters to a .npz file.",
    )
    parser.add_argument(
        "--save-table",
        type=Path,
        default=None,
        metavar="PATH",
        help="Write means, variances and standard errors to a CSV file.",
    )
    parser.add_argument(
        "--save-plot",
        type=Path,
        default=None,
        metavar="PATH",
        help="Save a log-log plot of the averaged correlations to this path.",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        config = load_config(args.parameters)
        overrides = {}
        if args.samples is not None:
            overrides["samples"] = args.samples
        if args.seed is not None:
            overrides["seed"] = args.seed
        if overrides:
            config = dataclasses.replace(config, **overrides)
    except (ConfigurationError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    sums = run_from_config(config, progress=args.progress, max_workers=args.max_workers)
    stats = summarize(sums, config.R, config.Rpp)

    print("Disorder-averaged correlation functions")
    print("---------------------------------------")
    print(f"Chain length N: {config.n}")
    print(f"Distribution: {config.distribution.value} [{config.j_min}, {config.omega}]")
    print(f"Samples: {config.samples}")
    print(to_dataframe(stats).to_string(index=False, float_format=lambda x: f"{x: .6e}"))

    if args.save_data is not None:
        save_results(sums, args.save_data, config)
        print(f"Saved raw sums to {args.save_data}")

    if args.save_table is not None:
        save_table(stats, args.save_table)
        print(f"Saved statistics table to {args.save_table}")

    if args.save_plot is not None:
        plot_correlations(stats, args.save_plot)
        print(f"Saved correlation plot to {args.save_plot}")

    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())
