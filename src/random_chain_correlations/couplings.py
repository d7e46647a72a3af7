r"""Random coupling distributions for the disordered chain.

Each bond ``i`` of the ring (between sites ``i`` and ``i+1``) carries an
independent coupling :math:`J_i`.  Two distributions are provided:

* box: :math:`J_i \sim \mathcal{U}[J_{\min}, \Omega)`,
* binary: :math:`J_i \in \{J_{\min}, \Omega\}` with equal probability.

Any callable with the signature ``(n, j_min, omega) -> sequence`` can be
used in place of the built-in distributions.
"""

from __future__ import annotations

import inspect
from enum import Enum
from functools import partial
from typing import Callable, Optional, Sequence, Union

import numpy as np

from .errors import ConfigurationError

CouplingSampler = Callable[[int, float, float], Sequence[float]]


def box_couplings(
    n: int,
    j_min: float,
    omega: float,
    rng: Optional[np.random.Generator] = None,
) -> np.ndarray:
    """Draw ``n`` couplings uniformly from ``[j_min, omega)``."""

    if rng is None:
        rng = np.random.default_rng()
    return rng.random(n) * (omega - j_min) + j_min


def binary_couplings(
    n: int,
    j_min: float,
    omega: float,
    rng: Optional[np.random.Generator] = None,
) -> np.ndarray:
    """Draw ``n`` couplings from the two-point set ``{j_min, omega}``."""

    if rng is None:
        rng = np.random.default_rng()
    values = np.array([j_min, omega], dtype=float)
    return values[rng.integers(0, 2, size=n)]


class Distribution(str, Enum):
    """Built-in coupling distributions, addressable by name."""

    BOX = "box"
    BINARY = "binary"

    def sample(
        self,
        n: int,
        j_min: float,
        omega: float,
        rng: Optional[np.random.Generator] = None,
    ) -> np.ndarray:
        return _SAMPLERS[self](n, j_min, omega, rng=rng)


_SAMPLERS = {
    Distribution.BOX: box_couplings,
    Distribution.BINARY: binary_couplings,
}


def parse_distribution(name: Union[str, Distribution]) -> Distribution:
    """Return the :class:`Distribution` called ``name`` (case-insensitive)."""

    if isinstance(name, Distribution):
        return name
    try:
        return Distribution(str(name).strip().lower())
    except ValueError:
        known = ", ".join(d.value for d in Distribution)
        raise ConfigurationError(
            f"Unsupported distribution {name!r}; expected one of: {known}"
        ) from None


def _accepts_rng(func: Callable) -> bool:
    try:
        parameters = inspect.signature(func).parameters
    except (TypeError, ValueError):
        return False
    return "rng" in parameters


def resolve_distribution(
    distribution: Union[str, Distribution, CouplingSampler],
    rng: Optional[np.random.Generator] = None,
) -> CouplingSampler:
    """Turn a distribution name, member or callable into a sampler.

    Built-in distributions are bound to ``rng``.  Custom callables that
    take an ``rng`` keyword are bound to it too; any other callable is
    returned unchanged and manages its own randomness.
    """

    if callable(distribution) and not isinstance(distribution, (str, Distribution)):
        if rng is not None and _accepts_rng(distribution):
            return partial(distribution, rng=rng)
        return distribution
    member = parse_distribution(distribution)
    return partial(_SAMPLERS[member], rng=rng)
