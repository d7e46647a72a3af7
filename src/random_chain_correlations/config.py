"""Run parameters for the disorder average.

Parameter files hold one ``key = value`` assignment per line, e.g.::

    # chain
    N = 64
    distribution = box
    J_min = 0.0
    Omega = 1.0
    samples = 1000
    Domain = 10

Numeric values are read as floats; anything that does not parse as a
number (such as the distribution name) is kept as a string.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Mapping, Optional, Sequence, Union

import numpy as np

from .couplings import Distribution, parse_distribution
from .errors import ConfigurationError
from .hamiltonian import check_chain_length

ParameterValue = Union[float, str]


def read_parameters(file_path: Union[str, Path]) -> Dict[str, ParameterValue]:
    """Read a ``key = value`` parameter file into a dictionary."""

    parameters: Dict[str, ParameterValue] = {}
    with open(file_path, "r", encoding="utf-8") as handle:
        for lineno, line in enumerate(handle, start=1):
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" not in line:
                raise ConfigurationError(f"{file_path}:{lineno}: expected 'key = value', got {line!r}")
            key, value = line.split("=", 1)
            key = key.strip()
            value = value.strip()
            try:
                parameters[key] = float(value)
            except ValueError:
                parameters[key] = value
    return parameters


def check_separations(values: Sequence[int], n: int, name: str = "R") -> np.ndarray:
    """Validate a separation sequence against the chain length ``n``."""

    arr = np.asarray(values)
    if arr.ndim != 1:
        raise ConfigurationError(f"{name} must be one-dimensional, got shape {arr.shape}")
    if arr.size and not np.all(np.equal(np.mod(arr, 1), 0)):
        raise ConfigurationError(f"{name} must contain integer separations")
    arr = arr.astype(int)
    if np.any((arr < 1) | (arr > n)):
        raise ConfigurationError(f"{name} entries must lie in [1, {n}], got {arr.tolist()}")
    return arr


def _as_int(params: Mapping[str, ParameterValue], key: str, default: Optional[int] = None) -> int:
    if key not in params:
        if default is None:
            raise ConfigurationError(f"Missing required parameter {key!r}")
        return default
    value = params[key]
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"Parameter {key!r} must be numeric, got {value!r}") from None
    if not number.is_integer():
        raise ConfigurationError(f"Parameter {key!r} must be an integer, got {value!r}")
    return int(number)


def _as_float(params: Mapping[str, ParameterValue], key: str, default: Optional[float] = None) -> float:
    if key not in params:
        if default is None:
            raise ConfigurationError(f"Missing required parameter {key!r}")
        return default
    try:
        return float(params[key])
    except (TypeError, ValueError):
        raise ConfigurationError(f"Parameter {key!r} must be numeric, got {params[key]!r}") from None


@dataclass
class ChainConfig:
    """Validated parameters of a disorder-averaging run.

    Attributes
    ----------
    n : int
        Chain length (even, at least 2).
    distribution : Distribution
        Coupling distribution.
    j_min, omega : float
        Lower and upper coupling bound.
    samples : int
        Number of Monte-Carlo trials.
    R, Rpp : numpy.ndarray
        Separation sequences of equal length ``domain``.
    seed : int, optional
        Root seed of the random number generator.
    """

    n: int
    distribution: Union[str, Distribution]
    j_min: float
    omega: float = 1.0
    samples: int = 1
    R: Sequence[int] = field(default_factory=lambda: [1])
    Rpp: Sequence[int] = field(default_factory=lambda: [1])
    seed: Optional[int] = None

    def __post_init__(self):
        self.n = check_chain_length(self.n)
        self.distribution = parse_distribution(self.distribution)
        if int(self.samples) != self.samples or self.samples < 1:
            raise ConfigurationError(f"samples must be a positive integer, got {self.samples!r}")
        self.samples = int(self.samples)
        self.R = check_separations(self.R, self.n, "R")
        self.Rpp = check_separations(self.Rpp, self.n, "Rpp")
        if len(self.R) != len(self.Rpp):
            raise ConfigurationError(
                f"R and Rpp must have the same length, got {len(self.R)} and {len(self.Rpp)}"
            )
        self.j_min = float(self.j_min)
        self.omega = float(self.omega)

    @property
    def domain(self) -> int:
        return len(self.R)

    @classmethod
    def from_parameters(cls, params: Mapping[str, ParameterValue]) -> "ChainConfig":
        """Build a configuration from a :func:`read_parameters` dictionary.

        ``R`` and ``Rpp`` are arithmetic progressions of length ``Domain``
        starting at ``R_start``/``Rpp_start`` with steps ``R_step``/``Rpp_step``
        (all defaulting to 1).
        """
        domain = _as_int(params, "Domain")
        if domain < 1:
            raise ConfigurationError(f"Domain must be at least 1, got {domain}")
        steps = np.arange(domain)
        R = _as_int(params, "R_start", 1) + _as_int(params, "R_step", 1) * steps
        Rpp = _as_int(params, "Rpp_start", 1) + _as_int(params, "Rpp_step", 1) * steps
        seed = _as_int(params, "seed") if "seed" in params else None
        return cls(
            n=_as_int(params, "N"),
            distribution=str(params.get("distribution", Distribution.BOX.value)),
            j_min=_as_float(params, "J_min"),
            omega=_as_float(params, "Omega", 1.0),
            samples=_as_int(params, "samples", 1),
            R=R,
            Rpp=Rpp,
            seed=seed,
        )


def load_config(file_path: Union[str, Path]) -> ChainConfig:
    """Read and validate a parameter file."""

    return ChainConfig.from_parameters(read_parameters(file_path))
