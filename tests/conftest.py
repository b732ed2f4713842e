"""
conftest.py — Shared pytest fixtures for the massalign test suite

Provides the default scoring table, random number generators and a random
peptide factory used across all test modules.
"""

import pytest
import numpy as np

from massalign import AminoAcid, MAX, build_scoring_table, sequence_from_string


# ---------------------------------------------------------------------------
# Scoring fixtures
# ---------------------------------------------------------------------------

@pytest.fixture(scope="session")
def table():
    """Default scoring table, built once since construction is expensive."""
    return build_scoring_table()


@pytest.fixture
def seq():
    """Shorthand to decode a one-letter sequence."""
    return sequence_from_string


# ---------------------------------------------------------------------------
# Random number generator fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def rng():
    """Seeded random generator for reproducible tests."""
    return np.random.default_rng(888)


@pytest.fixture
def rng_alt():
    """Alternative seed for diversity in randomized tests."""
    return np.random.default_rng(123)


# ---------------------------------------------------------------------------
# Sequence generation helpers
# ---------------------------------------------------------------------------

@pytest.fixture
def random_peptide_factory():
    """Factory fixture returning a function to generate random peptides."""
    residues = [AminoAcid(index) for index in range(1, MAX + 1)]

    def _random_peptide(length: int, rng: np.random.Generator):
        return [residues[k] for k in rng.integers(0, len(residues), size=length)]
    return _random_peptide
