"""Dense symmetric diagonalisation of the hopping Hamiltonian.

Thin wrapper around :func:`numpy.linalg.eigh` that turns solver failures
into :class:`~random_chain_correlations.errors.NumericalFailure` and checks
the contract the correlation matrix relies on: real ascending eigenvalues
and orthonormal eigenvector columns.
"""

from __future__ import annotations

import warnings
from typing import Tuple

import numpy as np

from .errors import NumericalFailure

DEFAULT_ORTHONORMALITY_TOL = 1e-8
DEGENERACY_TOL = 1e-10


def fermi_gap(eigenvalues: np.ndarray) -> float:
    """Gap between the lowest empty and the highest occupied level at half filling."""

    k_F = len(eigenvalues) // 2
    return float(eigenvalues[k_F] - eigenvalues[k_F - 1])


def diagonalize(
    hamiltonian: np.ndarray,
    orthonormality_tol: float = DEFAULT_ORTHONORMALITY_TOL,
) -> Tuple[np.ndarray, np.ndarray]:
    """Eigen-decompose a real symmetric matrix.

    Parameters
    ----------
    hamiltonian : numpy.ndarray
        Real symmetric ``(N, N)`` matrix.
    orthonormality_tol : float, optional
        Largest tolerated entry of ``|U^T U - I|``.

    Returns
    -------
    eigenvalues : numpy.ndarray
        Shape ``(N,)``, ascending.
    eigenvectors : numpy.ndarray
        Shape ``(N, N)``; column ``k`` belongs to ``eigenvalues[k]``.

    Raises
    ------
    NumericalFailure
        If the solver does not converge, produces non-finite values or a
        non-orthonormal basis.
    """
    H = np.asarray(hamiltonian, dtype=float)
    if not np.all(np.isfinite(H)):
        raise NumericalFailure("Hamiltonian contains non-finite entries")

    try:
        eigenvalues, eigenvectors = np.linalg.eigh(H)
    except np.linalg.LinAlgError as exc:
        raise NumericalFailure(f"Eigensolver did not converge: {exc}") from exc

    if not (np.all(np.isfinite(eigenvalues)) and np.all(np.isfinite(eigenvectors))):
        raise NumericalFailure("Eigensolver returned non-finite values")

    n = H.shape[0]
    overlap_error = float(np.max(np.abs(eigenvectors.T @ eigenvectors - np.eye(n))))
    if overlap_error > orthonormality_tol:
        raise NumericalFailure(
            f"Eigenvectors are not orthonormal: max|U^T U - I| = {overlap_error:.3e}"
        )

    if n >= 2 and abs(fermi_gap(eigenvalues)) < DEGENERACY_TOL:
        warnings.warn(
            "Degenerate Fermi level: the half-filled ground state is not unique "
            "and the correlation matrix depends on the solver's choice of basis.",
            RuntimeWarning,
            stacklevel=2,
        )

    return eigenvalues, eigenvectors
