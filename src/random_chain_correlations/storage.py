"""Persistence of disorder-averaging results."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

import numpy as np

from .config import ChainConfig
from .disorder import CorrelationSums
from .statistics import CorrelationStatistics, to_dataframe

_SUM_FIELDS = ("zz", "xx", "zz_2", "xx_2", "xxpp", "xxpp_2")


def _prepare(path: Union[str, Path]) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def save_results(
    sums: CorrelationSums,
    path: Union[str, Path],
    config: Optional[ChainConfig] = None,
) -> Path:
    """Write the raw sums (and the run parameters, if given) to a ``.npz`` archive."""

    path = _prepare(path)
    payload = {name: getattr(sums, name) for name in _SUM_FIELDS}
    payload["samples"] = np.array(sums.samples)
    if config is not None:
        payload["N"] = np.array(config.n)
        payload["distribution"] = np.array(config.distribution.value)
        payload["J_min"] = np.array(config.j_min)
        payload["Omega"] = np.array(config.omega)
        payload["R"] = np.asarray(config.R)
        payload["Rpp"] = np.asarray(config.Rpp)
        if config.seed is not None:
            payload["seed"] = np.array(config.seed)
    np.savez(path, **payload)
    return path


def load_results(path: Union[str, Path]) -> CorrelationSums:
    """Read the raw sums written by :func:`save_results`."""

    with np.load(path) as data:
        arrays = [np.array(data[name], dtype=float) for name in _SUM_FIELDS]
        samples = int(data["samples"])
    return CorrelationSums(*arrays, samples=samples)


def save_table(stats: CorrelationStatistics, path: Union[str, Path]) -> Path:
    """Write the per-separation statistics as CSV."""

    path = _prepare(path)
    to_dataframe(stats).to_csv(path, index=False)
    return path
