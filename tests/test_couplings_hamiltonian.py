"""Tests for coupling distributions and the hopping Hamiltonian."""

import numpy as np
import pytest

from random_chain_correlations.couplings import (
    Distribution,
    binary_couplings,
    box_couplings,
    parse_distribution,
    resolve_distribution,
)
from random_chain_correlations.errors import ConfigurationError
from random_chain_correlations.hamiltonian import build_hamiltonian, random_hamiltonian


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


class TestDistributions:
    """Box and binary coupling generators."""

    @pytest.mark.parametrize("n", [2, 4, 16, 101])
    def test_binary_values_are_bounds_only(self, n, rng):
        """Binary couplings only take the two bound values."""
        couplings = binary_couplings(n, 0.25, 1.5, rng=rng)

        assert couplings.shape == (n,)
        assert np.all((couplings == 0.25) | (couplings == 1.5))

    def test_binary_uses_both_values(self, rng):
        """Both binary values occur in a long draw."""
        couplings = binary_couplings(500, 0.0, 1.0, rng=rng)

        assert set(np.unique(couplings)) == {0.0, 1.0}

    def test_box_within_bounds(self, rng):
        """Box couplings lie in [j_min, omega)."""
        couplings = box_couplings(1000, 0.2, 1.0, rng=rng)

        assert couplings.shape == (1000,)
        assert np.all(couplings >= 0.2)
        assert np.all(couplings < 1.0)

    def test_same_seed_same_couplings(self):
        """Equal seeds give equal couplings."""
        a = box_couplings(10, 0.0, 1.0, rng=np.random.default_rng(7))
        b = box_couplings(10, 0.0, 1.0, rng=np.random.default_rng(7))

        assert np.array_equal(a, b)

    @pytest.mark.parametrize("name", ["box", "BOX", " binary "])
    def test_parse_by_name(self, name):
        """Distribution names are case and whitespace insensitive."""
        assert parse_distribution(name) in (Distribution.BOX, Distribution.BINARY)

    def test_unknown_name_rejected(self):
        """Unknown names raise ConfigurationError."""
        with pytest.raises(ConfigurationError, match="Unsupported distribution"):
            parse_distribution("gaussian")

    def test_enum_sample_dispatches(self, rng):
        """Enum members sample from their distribution."""
        couplings = Distribution.BINARY.sample(8, -1.0, 2.0, rng=rng)

        assert np.all(np.isin(couplings, [-1.0, 2.0]))

    def test_custom_callable_passes_through(self):
        """A custom sampler without rng keyword is used unchanged."""
        def constant(n, j_min, omega):
            return np.full(n, omega)

        assert resolve_distribution(constant) is constant

    def test_custom_callable_receives_generator(self):
        """A custom sampler with an rng keyword is bound to the supplied generator."""
        def uniform(n, j_min, omega, rng=None):
            return rng.random(n)

        sampler = resolve_distribution(uniform, np.random.default_rng(3))
        expected = np.random.default_rng(3).random(5)

        assert np.array_equal(sampler(5, 0.0, 1.0), expected)


class TestHamiltonian:
    """Structure of the hopping matrix."""

    def test_uniform_four_site_ring(self):
        """Clean four-site ring with the antiperiodic corner."""
        H = build_hamiltonian([1.0, 1.0, 1.0, 1.0])

        expected = np.array(
            [
                [0.0, 1.0, 0.0, -1.0],
                [1.0, 0.0, 1.0, 0.0],
                [0.0, 1.0, 0.0, 1.0],
                [-1.0, 0.0, 1.0, 0.0],
            ]
        )
        assert np.array_equal(H, expected)

    @pytest.mark.parametrize("n", [2, 4, 6, 10, 32])
    def test_symmetric_with_zero_diagonal(self, n, rng):
        """Random Hamiltonians are symmetric with zero diagonal."""
        H = build_hamiltonian(box_couplings(n, 0.0, 1.0, rng=rng))

        assert np.array_equal(H, H.T)
        assert np.all(np.diag(H) == 0.0)

    def test_bond_placement_and_boundary_twist(self):
        """Each bond sits on its off-diagonal and the wrap bond flips sign."""
        J = np.array([0.1, 0.2, 0.3, 0.4, 0.5, 0.6])
        H = build_hamiltonian(J)

        for i in range(5):
            assert H[i, i + 1] == J[i]
        assert H[0, 5] == -J[5]
        assert np.count_nonzero(H) == 12

    @pytest.mark.parametrize("n", [0, 1, 3, 7])
    def test_invalid_chain_length(self, n):
        """Odd or too short chains are rejected."""
        with pytest.raises(ConfigurationError):
            build_hamiltonian(np.ones(n))

    def test_random_hamiltonian_rejects_wrong_length(self):
        """A sampler returning the wrong number of couplings is rejected."""
        def too_short(n, j_min, omega):
            return np.ones(n - 1)

        with pytest.raises(ConfigurationError, match="couplings"):
            random_hamiltonian(4, too_short, 0.0, 1.0)

    def test_random_hamiltonian_binary_entries(self, rng):
        """Binary Hamiltonians only contain the two coupling values."""
        H = random_hamiltonian(8, "binary", 0.5, 2.0, rng=rng)

        bonds = np.array([H[i, i + 1] for i in range(7)] + [-H[0, 7]])
        assert np.all(np.isin(bonds, [0.5, 2.0]))
