r"""Single-particle hopping Hamiltonian of the random chain.

After the Jordan-Wigner transformation the antiferromagnetic chain becomes
a ring of free fermions with nearest-neighbour hopping

.. math::

    H_{i,i+1} = H_{i+1,i} = J_i, \qquad
    H_{1,N} = H_{N,1} = (-1)^{N+1} J_N .

The sign on the wrap-around bond is the fermionic boundary twist.  For the
even chain lengths supported here it always equals :math:`-1`, i.e. the
fermions see antiperiodic boundary conditions.
"""

from __future__ import annotations

from typing import Optional, Sequence, Union

import numpy as np

from .couplings import CouplingSampler, Distribution, resolve_distribution
from .errors import ConfigurationError


def check_chain_length(n: int) -> int:
    """Validate the chain length and return it as ``int``."""

    if int(n) != n:
        raise ConfigurationError(f"Chain length must be an integer, got {n!r}")
    n = int(n)
    if n < 2:
        raise ConfigurationError(f"Chain length must be at least 2, got {n}")
    if n % 2:
        raise ConfigurationError(f"Chain length must be even for half filling, got {n}")
    return n


def boundary_sign(n: int) -> float:
    """Sign :math:`(-1)^{N+1}` of the wrap-around bond."""

    return -1.0 if n % 2 == 0 else 1.0


def build_hamiltonian(couplings: Sequence[float]) -> np.ndarray:
    """Assemble the ``N x N`` hopping matrix from ``N`` bond couplings.

    Parameters
    ----------
    couplings : sequence of float
        ``couplings[i]`` is the bond between sites ``i`` and ``i+1``; the
        last entry closes the ring between sites ``N-1`` and ``0``.

    Returns
    -------
    numpy.ndarray
        Real symmetric matrix with zero diagonal.
    """
    J = np.asarray(couplings, dtype=float)
    if J.ndim != 1:
        raise ConfigurationError(f"Couplings must be one-dimensional, got shape {J.shape}")
    n = check_chain_length(J.size)

    H = np.zeros((n, n), dtype=float)
    for i in range(n - 1):
        H[i, i + 1] = J[i]
        H[i + 1, i] = J[i]
    H[0, n - 1] = boundary_sign(n) * J[n - 1]
    H[n - 1, 0] = boundary_sign(n) * J[n - 1]
    return H


def random_hamiltonian(
    n: int,
    distribution: Union[str, Distribution, CouplingSampler],
    j_min: float,
    omega: float,
    rng: Optional[np.random.Generator] = None,
) -> np.ndarray:
    """Draw fresh couplings from ``distribution`` and build the Hamiltonian."""

    n = check_chain_length(n)
    sampler = resolve_distribution(distribution, rng)
    couplings = np.asarray(sampler(n, j_min, omega), dtype=float)
    if couplings.shape != (n,):
        raise ConfigurationError(
            f"Distribution returned {couplings.size} couplings for a chain of length {n}"
        )
    return build_hamiltonian(couplings)
