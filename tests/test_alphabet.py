"""
test_alphabet.py — Tests for window encoding and scoring table construction
"""

from itertools import product

import pytest

from massalign import (
    MAX,
    STEPS,
    AminoAcid,
    Scoring,
    ScoringTable,
    build_scoring_table,
    window_index,
)
from massalign import default


def w(text):
    """One-letter window as a tuple of AminoAcid."""
    return tuple(AminoAcid.from_char(c) for c in text)


class TestWindowIndex:
    """Folding windows of 1..STEPS symbols into table indices."""

    def test_small_values(self):
        assert window_index(()) == 0
        assert window_index(w("A")) == 1
        assert window_index(w("X")) == MAX
        assert window_index(w("AA")) == MAX + 1
        assert window_index(w("XXX")) == MAX**3 + MAX**2 + MAX

    def test_all_windows_are_distinct(self):
        """Every window of 1..STEPS scorable symbols gets its own index."""
        residues = [AminoAcid(index) for index in range(1, MAX + 1)]
        indices = [
            window_index(window)
            for size in range(1, STEPS + 1)
            for window in product(residues, repeat=size)
        ]
        assert sorted(indices) == list(range(1, len(indices) + 1))

    def test_lengths_never_collide(self):
        longest_single = max(window_index((aa,)) for aa in AminoAcid if aa <= MAX)
        assert window_index(w("AA")) > longest_single

    def test_gap_is_unscored(self):
        assert window_index((AminoAcid.GAP,)) == 0
        assert window_index((AminoAcid.A, AminoAcid.GAP)) == 0

    def test_too_long(self):
        pytest.raises(ValueError, window_index, w("AAAA"))


class TestScoringTable:
    """Scores of the default table."""

    def test_identity(self, table):
        assert table[w("A"), w("A")] == default.IDENTITY
        assert table[w("X"), w("X")] == default.IDENTITY
        # multi-symbol identity is undefined
        assert table[w("AA"), w("AA")] == 0
        assert table[w("AAA"), w("AAA")] == 0
        assert table[w("AC"), w("AC")] == 0

    def test_iso_mass(self, table):
        for window_a, window_b in [
            ("I", "L"),
            ("L", "I"),
            ("N", "GG"),
            ("GG", "N"),
            ("AS", "GT"),
            ("SA", "GT"),
            ("SA", "TG"),
            ("AS", "TG"),
            ("LQ", "AVA"),
            ("AGV", "IN"),
        ]:
            assert table[w(window_a), w(window_b)] == default.ISO_MASS, (window_a, window_b)

    def test_inequality(self, table):
        assert table[w("I"), w("Q")] == default.MISMATCH
        assert table[w("Q"), w("GG")] == 0
        assert table[w("AE"), w("GT")] == 0
        assert table[w("EQ"), w("AVA")] == 0

    def test_switched(self, table):
        assert table[w("EQ"), w("QE")] == default.SWITCHED * 2
        for window_a, window_b in [
            ("DAC", "ACD"),
            ("CDA", "ACD"),
            ("ACD", "DAC"),
            ("CDA", "DAC"),
            ("ACD", "CDA"),
            ("DAC", "CDA"),
            ("VAA", "AVA"),
        ]:
            assert table[w(window_a), w(window_b)] == default.SWITCHED * 3, (window_a, window_b)

    def test_modification_is_one_directional(self, table):
        assert table[w("D"), w("N")] == default.MODIFICATION
        assert table[w("N"), w("D")] == default.MISMATCH
        assert table[w("Q"), w("E")] == default.MODIFICATION
        assert table[w("E"), w("Q")] == default.MISMATCH
        assert table[w("R"), w("AV")] == default.MODIFICATION
        assert table[w("R"), w("GL")] == default.MODIFICATION
        assert table[w("AV"), w("R")] == 0
        assert table[w("Q"), w("AA")] == default.MODIFICATION
        assert table[w("AA"), w("Q")] == 0

    def test_index_lookup_matches_window_lookup(self, table):
        window_a, window_b = w("GG"), w("N")
        assert table.score(window_index(window_a), window_index(window_b)) == table[window_a, window_b]
        assert table.score(0, window_index(window_b)) == 0

    def test_read_only(self, table):
        with pytest.raises(ValueError):
            table.single[1, 1] = 0
        with pytest.raises(TypeError):
            table.multi[1, 30] = 5

    def test_shape_checked(self):
        pytest.raises(ValueError, ScoringTable, Scoring(), [[0]], {})

    def test_entries(self, table):
        # every single-symbol pair is defined, plus the multi-symbol rules
        assert len(table) == MAX * MAX + len(table.multi)
        assert len(table.multi) > 0


class TestScoringConfig:
    """Custom constants and their validation."""

    def test_defaults(self):
        scoring = Scoring()
        assert scoring == Scoring(**default.scoring_params())
        assert scoring.gap_extend == default.GAP_EXTEND

    @pytest.mark.parametrize("name", list(default.scoring_params()))
    def test_zero_rejected(self, name):
        with pytest.raises(ValueError):
            Scoring(**{name: 0})

    def test_out_of_byte_range(self):
        pytest.raises(ValueError, Scoring, identity=200)
        pytest.raises(ValueError, Scoring, mismatch=-129)
        pytest.raises(ValueError, Scoring, switched=50)  # 3 * 50 overflows

    def test_custom_table(self):
        scoring = Scoring(identity=10, iso_mass=7, switched=3)
        table = build_scoring_table(scoring)
        assert table.scoring is scoring
        assert table[w("A"), w("A")] == 10
        assert table[w("N"), w("GG")] == 7
        assert table[w("AG"), w("GA")] == 6

    def test_custom_classes(self):
        table = build_scoring_table(iso_mass_sets=[("W", "AC")], modifications=[("W", "Y")])
        assert table[w("CA"), w("W")] == default.ISO_MASS
        assert table[w("W"), w("Y")] == default.MODIFICATION
        assert table[w("Y"), w("W")] == default.MISMATCH
        # default iso-mass sets are not included
        assert table[w("N"), w("GG")] == 0
        assert table[w("I"), w("L")] == default.MISMATCH
