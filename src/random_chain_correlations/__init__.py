"""Disorder-averaged spin correlations of a random antiferromagnetic chain."""

from . import (
    config,
    correlations,
    couplings,
    disorder,
    hamiltonian,
    spectrum,
    statistics,
    storage,
    visualisation,
)
from .config import ChainConfig, load_config, read_parameters
from .correlations import (
    correlation_matrix,
    longitudinal_correlation,
    longitudinal_pair,
    transverse_correlation,
    transverse_pair,
)
from .couplings import Distribution, binary_couplings, box_couplings
from .disorder import CorrelationSums, correlation_function, run_from_config
from .errors import ConfigurationError, NumericalFailure
from .hamiltonian import build_hamiltonian, random_hamiltonian
from .spectrum import diagonalize
from .statistics import CorrelationStatistics, summarize

__all__ = [
    "ChainConfig",
    "ConfigurationError",
    "CorrelationStatistics",
    "CorrelationSums",
    "Distribution",
    "NumericalFailure",
    "binary_couplings",
    "box_couplings",
    "build_hamiltonian",
    "config",
    "correlation_function",
    "correlation_matrix",
    "correlations",
    "couplings",
    "diagonalize",
    "disorder",
    "hamiltonian",
    "load_config",
    "longitudinal_correlation",
    "longitudinal_pair",
    "random_hamiltonian",
    "read_parameters",
    "run_from_config",
    "spectrum",
    "statistics",
    "storage",
    "summarize",
    "transverse_correlation",
    "transverse_pair",
    "visualisation",
]
