"""
disorder.py
===========

Monte-Carlo disorder average of the chain correlators.

Every trial draws a fresh set of couplings, diagonalises the resulting
hopping Hamiltonian and evaluates, for each index ``r`` of the separation
domain,

* ``Z   = longitudinal_correlation(R[r])``
* ``X   = transverse_correlation(R[r])``
* ``Xpp = transverse_correlation(Rpp[r])``

The trial results are summed together with their squares.  The returned
sums are *not* divided by the number of samples; see
:func:`random_chain_correlations.statistics.summarize` for the reduction to
means and variances.

Trials are independent, so they can be evaluated in a process pool.  Each
trial receives its own child of ``numpy.random.SeedSequence(seed)``, which
makes serial and parallel runs with the same seed agree up to the order of
the floating-point summation.
"""

from __future__ import annotations

from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple, Union

import numpy as np
from tqdm import tqdm

from .config import ChainConfig, check_separations
from .correlations import correlation_matrix, longitudinal_correlation, transverse_correlation
from .couplings import CouplingSampler, Distribution, resolve_distribution
from .errors import ConfigurationError
from .hamiltonian import check_chain_length, random_hamiltonian
from .spectrum import diagonalize

SeedLike = Union[None, int, np.random.SeedSequence]


@dataclass
class CorrelationSums:
    """Running sums of the correlators and of their squares.

    Attributes
    ----------
    zz, zz_2 : numpy.ndarray
        Sum and sum of squares of the longitudinal correlator at ``R``.
    xx, xx_2 : numpy.ndarray
        Sum and sum of squares of the transverse correlator at ``R``.
    xxpp, xxpp_2 : numpy.ndarray
        Sum and sum of squares of the transverse correlator at ``Rpp``.
    samples : int
        Number of trials accumulated so far.
    """

    zz: np.ndarray
    xx: np.ndarray
    zz_2: np.ndarray
    xx_2: np.ndarray
    xxpp: np.ndarray
    xxpp_2: np.ndarray
    samples: int = 0

    @classmethod
    def zeros(cls, domain: int) -> "CorrelationSums":
        return cls(*(np.zeros(domain, dtype=float) for _ in range(6)), samples=0)

    @property
    def domain(self) -> int:
        return len(self.zz)

    def __add__(self, other: "CorrelationSums") -> "CorrelationSums":
        if not isinstance(other, CorrelationSums):
            return NotImplemented
        if other.domain != self.domain:
            raise ValueError(f"Cannot add sums over domains {self.domain} and {other.domain}")
        return CorrelationSums(
            self.zz + other.zz,
            self.xx + other.xx,
            self.zz_2 + other.zz_2,
            self.xx_2 + other.xx_2,
            self.xxpp + other.xxpp,
            self.xxpp_2 + other.xxpp_2,
            samples=self.samples + other.samples,
        )

    def as_tuple(self) -> Tuple[np.ndarray, ...]:
        """``(C_zz, C_xx, C_zz_2, C_xx_2, C_xxpp, C_xxpp_2)``."""

        return self.zz, self.xx, self.zz_2, self.xx_2, self.xxpp, self.xxpp_2


def sample_correlations(
    corr: np.ndarray,
    R: Sequence[int],
    Rpp: Sequence[int],
) -> CorrelationSums:
    """Single-trial sums for one correlation matrix."""

    domain = len(R)
    Z = np.empty(domain)
    X = np.empty(domain)
    Xpp = np.empty(domain)
    for idx in range(domain):
        Z[idx] = longitudinal_correlation(int(R[idx]), corr)
        X[idx] = transverse_correlation(int(R[idx]), corr)
        Xpp[idx] = transverse_correlation(int(Rpp[idx]), corr)
    return CorrelationSums(Z, X, Z**2, X**2, Xpp, Xpp**2, samples=1)


def run_trial(
    n: int,
    R: Sequence[int],
    Rpp: Sequence[int],
    distribution: Union[str, Distribution, CouplingSampler],
    j_min: float,
    omega: float,
    seed: SeedLike = None,
) -> CorrelationSums:
    """Evaluate one disorder realisation.

    Module-level so that it can be shipped to worker processes.
    """
    rng = np.random.default_rng(seed)
    sampler = resolve_distribution(distribution, rng)
    H = random_hamiltonian(n, sampler, j_min, omega)
    _, U = diagonalize(H)
    corr = correlation_matrix(U)
    return sample_correlations(corr, R, Rpp)


def correlation_function(
    R: Sequence[int],
    Rpp: Sequence[int],
    domain: int,
    n: int,
    samples: int,
    distribution: Union[str, Distribution, CouplingSampler],
    j_min: float,
    omega: float = 1.0,
    seed: SeedLike = None,
    progress: bool = False,
    max_workers: Optional[int] = None,
) -> CorrelationSums:
    """Disorder-summed correlators over ``samples`` random chains.

    Parameters
    ----------
    R, Rpp : sequence of int
        Separations at which the correlators are evaluated, each of length
        ``domain`` with entries in ``[1, n]``.
    domain : int
        Number of separations.
    n : int
        Chain length, even and at least 2.
    samples : int
        Number of independent disorder realisations.
    distribution : str, Distribution or callable
        Coupling distribution; a callable must accept ``(n, j_min, omega)``
        and may take an ``rng`` keyword.
        With ``max_workers > 1`` it must be picklable.
    j_min, omega : float
        Lower and upper coupling bound.
    seed : int or numpy.random.SeedSequence, optional
        Root seed; ``None`` draws fresh entropy.  Custom callables only
        follow the seed if they accept an ``rng`` keyword, through which
        each trial passes its own ``numpy.random.Generator``.
    progress : bool, optional
        Show a ``tqdm`` progress bar over the trials.
    max_workers : int, optional
        Evaluate trials in a process pool of this size when greater than 1.

    Returns
    -------
    CorrelationSums
        Sums over all trials.  Divide by ``samples`` for the means.

    Raises
    ------
    ConfigurationError
        On invalid parameters, before any trial runs.
    NumericalFailure
        If any trial fails to diagonalise; the whole run is aborted.
    """
    n = check_chain_length(n)
    R = check_separations(R, n, "R")
    Rpp = check_separations(Rpp, n, "Rpp")
    if len(R) != domain or len(Rpp) != domain:
        raise ConfigurationError(
            f"R and Rpp must both have length Domain={domain}, got {len(R)} and {len(Rpp)}"
        )
    if int(samples) != samples or samples < 1:
        raise ConfigurationError(f"samples must be a positive integer, got {samples!r}")
    samples = int(samples)
    if isinstance(distribution, str) or not callable(distribution):
        resolve_distribution(distribution)

    seeds = np.random.SeedSequence(seed).spawn(samples)
    totals = CorrelationSums.zeros(domain)

    if max_workers is not None and max_workers > 1:
        executor = ProcessPoolExecutor(max_workers=max_workers)
        futures = [
            executor.submit(run_trial, n, R, Rpp, distribution, j_min, omega, child)
            for child in seeds
        ]
        try:
            for future in tqdm(futures, desc="Disorder samples", disable=not progress):
                totals = totals + future.result()
        except BaseException:
            # a failed trial aborts the run; queued trials are dropped
            executor.shutdown(wait=False, cancel_futures=True)
            raise
        executor.shutdown(wait=True)
        return totals

    for child in tqdm(seeds, desc="Disorder samples", disable=not progress):
        totals = totals + run_trial(n, R, Rpp, distribution, j_min, omega, child)
    return totals


def run_from_config(
    config: ChainConfig,
    progress: bool = False,
    max_workers: Optional[int] = None,
) -> CorrelationSums:
    """Run :func:`correlation_function` with the parameters of ``config``."""

    return correlation_function(
        config.R,
        config.Rpp,
        config.domain,
        config.n,
        config.samples,
        config.distribution,
        config.j_min,
        config.omega,
        seed=config.seed,
        progress=progress,
        max_workers=max_workers,
    )
