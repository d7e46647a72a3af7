"""Tests for parameter files and run configuration."""

import numpy as np
import pytest

from random_chain_correlations.config import (
    ChainConfig,
    check_separations,
    load_config,
    read_parameters,
)
from random_chain_correlations.couplings import Distribution
from random_chain_correlations.errors import ConfigurationError


@pytest.fixture
def parameter_file(tmp_path):
    path = tmp_path / "params.txt"
    path.write_text(
        "# random chain\n"
        "N = 16\n"
        "J_min = 0.0\n"
        "Omega = 1.0\n"
        "\n"
        "samples = 20\n"
        "Domain = 4\n"
        "distribution = binary\n"
        "Rpp_start = 2\n"
        "Rpp_step = 2\n"
    )
    return path


class TestReadParameters:

    def test_values(self, parameter_file):
        """Numbers parse as floats and names stay strings."""
        params = read_parameters(parameter_file)

        assert params['N'] == 16.0
        assert isinstance(params['N'], float)
        assert params['J_min'] == 0.0
        assert params['distribution'] == 'binary'
        assert set(params) == {'N', 'J_min', 'Omega', 'samples', 'Domain',
                               'distribution', 'Rpp_start', 'Rpp_step'}

    def test_whitespace_is_stripped(self, tmp_path):
        """Whitespace around keys and values is ignored."""
        path = tmp_path / "p.txt"
        path.write_text("  Omega=   2.5  \n")

        assert read_parameters(path) == {'Omega': 2.5}

    def test_malformed_line(self, tmp_path):
        """A line without '=' is reported with its line number."""
        path = tmp_path / "p.txt"
        path.write_text("N = 4\nsamples 10\n")

        with pytest.raises(ConfigurationError, match=":2:"):
            read_parameters(path)


class TestChainConfig:

    def test_from_file(self, parameter_file):
        """A parameter file produces a validated configuration."""
        config = load_config(parameter_file)

        assert config.n == 16
        assert config.samples == 20
        assert config.distribution is Distribution.BINARY
        assert config.domain == 4
        assert np.array_equal(config.R, [1, 2, 3, 4])
        assert np.array_equal(config.Rpp, [2, 4, 6, 8])
        assert config.seed is None

    def test_defaults(self):
        """Optional parameters fall back to their defaults."""
        config = ChainConfig.from_parameters({'N': 4.0, 'J_min': 0.0, 'Domain': 2.0})

        assert config.distribution is Distribution.BOX
        assert config.omega == 1.0
        assert config.samples == 1
        assert np.array_equal(config.R, config.Rpp)

    def test_seed(self):
        """The seed is read as an integer."""
        config = ChainConfig.from_parameters({'N': 4.0, 'J_min': 0.0, 'Domain': 1.0, 'seed': 17.0})

        assert config.seed == 17

    @pytest.mark.parametrize("n", [5, 0, 1])
    def test_invalid_chain_length(self, n):
        """Odd or too short chains are rejected."""
        with pytest.raises(ConfigurationError):
            ChainConfig(n=n, distribution='box', j_min=0.0)

    def test_non_integer_chain_length(self):
        """A fractional chain length is rejected."""
        with pytest.raises(ConfigurationError, match="integer"):
            ChainConfig.from_parameters({'N': 4.5, 'J_min': 0.0, 'Domain': 1.0})

    def test_missing_required(self):
        """Missing required keys are named in the error."""
        with pytest.raises(ConfigurationError, match="J_min"):
            ChainConfig.from_parameters({'N': 4.0, 'Domain': 1.0})

    def test_unsupported_distribution(self):
        """Unknown distribution names are rejected."""
        with pytest.raises(ConfigurationError, match="distribution"):
            ChainConfig(n=4, distribution='cauchy', j_min=0.0)

    def test_mismatched_separations(self):
        """R and Rpp must have the same length."""
        with pytest.raises(ConfigurationError, match="same length"):
            ChainConfig(n=8, distribution='box', j_min=0.0, R=[1, 2], Rpp=[1])

    def test_domain_exceeding_chain(self):
        """Separations beyond the chain length are rejected."""
        with pytest.raises(ConfigurationError):
            ChainConfig.from_parameters({'N': 4.0, 'J_min': 0.0, 'Domain': 5.0})

    def test_invalid_samples(self):
        """At least one sample is required."""
        with pytest.raises(ConfigurationError):
            ChainConfig(n=4, distribution='box', j_min=0.0, samples=0)


class TestCheckSeparations:

    def test_accepts_integral_floats(self):
        """Integral floats are converted to integer separations."""
        assert np.array_equal(check_separations([1.0, 2.0], 4), [1, 2])

    @pytest.mark.parametrize("values", [[0], [5], [1.5]])
    def test_rejects(self, values):
        """Zero, too large and fractional separations are rejected."""
        with pytest.raises(ConfigurationError):
            check_separations(values, 4)
