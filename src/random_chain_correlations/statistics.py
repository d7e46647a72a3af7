"""Sample means and variances from accumulated correlator sums."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np
import pandas as pd

from .disorder import CorrelationSums

CHANNELS = ("zz", "xx", "xxpp")


@dataclass(slots=True)
class CorrelationStatistics:
    """Disorder mean, variance and standard error per channel and separation."""

    R: np.ndarray
    Rpp: np.ndarray
    samples: int
    zz_mean: np.ndarray
    zz_var: np.ndarray
    xx_mean: np.ndarray
    xx_var: np.ndarray
    xxpp_mean: np.ndarray
    xxpp_var: np.ndarray

    def stderr(self, channel: str) -> np.ndarray:
        """Standard error of the mean of ``channel``."""

        return np.sqrt(getattr(self, f"{channel}_var") / self.samples)


def moments(total: np.ndarray, total_sq: np.ndarray, samples: int) -> Tuple[np.ndarray, np.ndarray]:
    r"""Mean and variance from :math:`\sum x` and :math:`\sum x^2`.

    Uses :math:`\mathrm{Var} = E[x^2] - E[x]^2`; negative round-off is
    clipped to zero.
    """
    if samples < 1:
        raise ValueError(f"samples must be positive, got {samples}")
    mean = np.asarray(total, dtype=float) / samples
    variance = np.asarray(total_sq, dtype=float) / samples - mean**2
    return mean, np.clip(variance, 0.0, None)


def summarize(sums: CorrelationSums, R: Sequence[int], Rpp: Sequence[int]) -> CorrelationStatistics:
    """Normalise raw sums by the number of accumulated samples."""

    zz_mean, zz_var = moments(sums.zz, sums.zz_2, sums.samples)
    xx_mean, xx_var = moments(sums.xx, sums.xx_2, sums.samples)
    xxpp_mean, xxpp_var = moments(sums.xxpp, sums.xxpp_2, sums.samples)
    return CorrelationStatistics(
        R=np.asarray(R, dtype=int),
        Rpp=np.asarray(Rpp, dtype=int),
        samples=sums.samples,
        zz_mean=zz_mean,
        zz_var=zz_var,
        xx_mean=xx_mean,
        xx_var=xx_var,
        xxpp_mean=xxpp_mean,
        xxpp_var=xxpp_var,
    )


def to_dataframe(stats: CorrelationStatistics) -> pd.DataFrame:
    """One row per separation index with mean, variance and error of each channel."""

    data = {"R": stats.R, "Rpp": stats.Rpp}
    for channel in CHANNELS:
        data[f"{channel}_mean"] = getattr(stats, f"{channel}_mean")
        data[f"{channel}_var"] = getattr(stats, f"{channel}_var")
        data[f"{channel}_stderr"] = stats.stderr(channel)
    return pd.DataFrame(data)
