r"""Ground-state correlators of the half-filled hopping ring.

For a Slater determinant filling the ``N/2`` lowest single-particle modes,
Wick's theorem reduces every spin correlator to determinants built from
the single-particle matrix

.. math::

    C_{ij} = \delta_{ij} - 2 F_{ij}, \qquad
    F_{ij} = \sum_{k=1}^{N/2} U_{ik} U_{jk},

where the columns of :math:`U` are the eigenvectors of the hopping
Hamiltonian in ascending energy.

Sites are indexed ``0 .. N-1``; separations ``r`` are bond distances
``1 .. N`` and wrap around the ring.

Functions
---------
correlation_matrix : Wick kernel :math:`C` from the eigenvectors
longitudinal_pair, transverse_pair : correlators of a single site pair
longitudinal_correlation, transverse_correlation : site-averaged correlators
"""

from __future__ import annotations

import numpy as np

DELTA_TOL = 1e-15


def fermi_sea_correlator(eigenvectors: np.ndarray) -> np.ndarray:
    """Occupied-band projector :math:`F = U_{occ} U_{occ}^T` at half filling."""

    U = np.asarray(eigenvectors, dtype=float)
    k_F = U.shape[0] // 2
    occupied = U[:, :k_F]
    return occupied @ occupied.T


def correlation_matrix(eigenvectors: np.ndarray) -> np.ndarray:
    """Build the symmetric Wick matrix :math:`C = I - 2F`.

    Only the lower triangle (diagonal included) is evaluated; the upper
    triangle is its mirror image, so ``C`` is exactly symmetric.
    """
    F = fermi_sea_correlator(eigenvectors)
    n = F.shape[0]
    rows, cols = np.tril_indices(n)
    lower = np.zeros((n, n), dtype=float)
    kronecker = np.where(np.abs(rows - cols) < DELTA_TOL, 1.0, 0.0)
    lower[rows, cols] = kronecker - 2.0 * F[rows, cols]
    return lower + np.tril(lower, -1).T


def _check_pair(i: int, r: int, n: int) -> None:
    if not 1 <= r <= n:
        raise IndexError(f"Separation r={r} outside [1, {n}]")
    if not 0 <= i < n:
        raise IndexError(f"Site i={i} outside [0, {n})")


def longitudinal_pair(i: int, r: int, corr: np.ndarray) -> float:
    """ZZ correlator of sites ``i`` and ``i + r`` (mod N).

    Determinant of the ``2 x 2`` principal block of ``corr`` on the two
    sites.
    """
    n = corr.shape[0]
    _check_pair(i, r, n)
    j = (i + r) % n
    return float(corr[j, j] * corr[i, i] - corr[i, j] ** 2)


def string_block(i: int, r: int, corr: np.ndarray) -> np.ndarray:
    """The ``r x r`` block of ``corr`` spanned by the Jordan-Wigner string.

    ``A[c, w] = corr[i + c + 1, i + w]`` with indices taken mod N: the row
    window starts one site after the column window.
    """
    n = corr.shape[0]
    _check_pair(i, r, n)
    offsets = np.arange(r)
    rows = (i + offsets + 1) % n
    cols = (i + offsets) % n
    return corr[np.ix_(rows, cols)]


def transverse_pair(i: int, r: int, corr: np.ndarray) -> float:
    """XX correlator of sites ``i`` and ``i + r`` as a string determinant."""

    return float(np.linalg.det(string_block(i, r, corr)))


def longitudinal_correlation(r: int, corr: np.ndarray) -> float:
    r"""Site average :math:`\frac{1}{4N}\sum_i` of :func:`longitudinal_pair`."""

    n = corr.shape[0]
    total = 0.0
    for i in range(n):
        total += longitudinal_pair(i, r, corr)
    return total / (4 * n)


def transverse_correlation(r: int, corr: np.ndarray) -> float:
    r"""Staggered site average :math:`\frac{(-1)^r}{4N}\sum_i` of :func:`transverse_pair`."""

    n = corr.shape[0]
    total = 0.0
    for i in range(n):
        total += transverse_pair(i, r, corr)
    return (-1) ** r * total / (4 * n)
