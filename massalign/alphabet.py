"""
alphabet.py — scoring table for mass-based alignment

The scoring table answers "how related are these two windows", where a
window is a run of 1..STEPS amino acids consumed in a single alignment step.

Windows are addressed by folding their indices in base MAX:

    acc = 0
    for aa in window:
        acc = acc * MAX + aa

Symbol indices run from 1 to MAX, which makes this a bijective base-MAX
numeral: windows of different lengths (or contents) never share an index,
and the empty window is 0.

Single-symbol pairs are kept in a dense (MAX+1, MAX+1) numpy array; the
multi-symbol entries (iso-mass, modification and swap rules) are sparse and
kept in a read-only mapping.  A score of 0 means no relationship is defined
and the aligner never takes such a step.
"""

from __future__ import annotations

import logging
from itertools import combinations_with_replacement, permutations
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional, Sequence, Tuple

import numpy as np
from numpy.typing import NDArray

from . import default
from .aminoacid import MAX, AminoAcid, sequence_from_string
from .default import STEPS, Scoring

logger = logging.getLogger(__name__)

Window = Sequence[AminoAcid]


def window_index(window: Window) -> int:
    """
    Fold a window of at most STEPS symbols into its table index.

    Returns 0 for the empty window and for windows holding a symbol outside
    the scorable range (GAP), both of which score as undefined.

    Raises
    ------
    ValueError
        If the window is longer than STEPS.
    """
    if len(window) > STEPS:
        raise ValueError(f"Windows hold at most {STEPS} symbols, got {len(window)}")
    acc = 0
    for aa in window:
        if not 1 <= aa <= MAX:
            return 0
        acc = acc * MAX + int(aa)
    return acc


class ScoringTable:
    """
    Immutable score lookup for pairs of windows.

    Build it once with build_scoring_table() and share it between alignment
    calls.  Lookup is either by windows, table[window_a, window_b], or by
    precomputed indices, table.score(index_a, index_b).

    Attributes
    ----------
    scoring : Scoring
        The constants the table was built from; the aligner reads the gap
        score from here.
    single : (MAX+1, MAX+1) int8 array
        Scores of single-symbol pairs.  Row and column 0 are 0.
    multi : mapping (int, int) -> int
        Scores of pairs where at least one window has 2..STEPS symbols.
        Pairs missing from the mapping score 0.
    """

    def __init__(
        self,
        scoring: Scoring,
        single: NDArray[np.int8],
        multi: Mapping[Tuple[int, int], int],
    ):
        single = np.array(single, dtype=np.int8)
        if single.shape != (MAX + 1, MAX + 1):
            raise ValueError(
                f"Single-symbol scores must have shape {(MAX + 1, MAX + 1)}, got {single.shape}"
            )
        single.setflags(write=False)
        self.scoring = scoring
        self.single = single
        self.multi = MappingProxyType(dict(multi))

    def score(self, index_a: int, index_b: int) -> int:
        """Score of two windows given by their window_index."""
        if index_a <= MAX and index_b <= MAX:
            return int(self.single[index_a, index_b])
        return self.multi.get((index_a, index_b), 0)

    def __getitem__(self, windows: Tuple[Window, Window]) -> int:
        window_a, window_b = windows
        return self.score(window_index(window_a), window_index(window_b))

    def __len__(self) -> int:
        """Number of defined (non-zero) entries."""
        return int(np.count_nonzero(self.single)) + len(self.multi)

    def __repr__(self) -> str:
        return f"ScoringTable({self.scoring!r}, entries={len(self)})"


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------

def _parse_sets(sets: Iterable[Sequence[str]]):
    return [[tuple(sequence_from_string(w)) for w in s] for s in sets]


def build_scoring_table(
    scoring: Optional[Scoring] = None,
    iso_mass_sets: Iterable[Sequence[str]] = default.ISO_MASS_SETS,
    modifications: Iterable[Sequence[str]] = default.MODIFICATIONS,
) -> ScoringTable:
    """
    Build the full scoring table.

    This enumerates every permutation of every window up to STEPS symbols,
    so it is expensive: build once and pass the result to every alignment.

    Parameters
    ----------
    scoring : Scoring, optional
        Score constants, defaults to Scoring().
    iso_mass_sets : iterable of sets of windows
        Each set lists windows (one-letter strings) of equal mass.  Every
        ordered pair of distinct windows in a set, in every symbol order,
        scores scoring.iso_mass.
    modifications : iterable of (source, *targets)
        Only source -> target scores scoring.modification; target -> source
        keeps its default.

    Rules are applied in order iso-mass, modification, swap, so a later
    rule overwrites an earlier one for the same pair of windows.

    Returns
    -------
    ScoringTable
    """
    if scoring is None:
        scoring = Scoring()

    single = np.full((MAX + 1, MAX + 1), scoring.mismatch, dtype=np.int8)
    np.fill_diagonal(single, scoring.identity)
    single[0, :] = 0
    single[:, 0] = 0
    multi: Dict[Tuple[int, int], int] = {}

    def put(window_a: Window, window_b: Window, value: int) -> None:
        index_a, index_b = window_index(window_a), window_index(window_b)
        if index_a <= MAX and index_b <= MAX:
            single[index_a, index_b] = value
        else:
            multi[index_a, index_b] = value

    # Iso-mass: symmetric, every order of every window
    for iso_set in _parse_sets(iso_mass_sets):
        for window_a, window_b in permutations(iso_set, 2):
            for seq_a in set(permutations(window_a)):
                for seq_b in set(permutations(window_b)):
                    put(seq_a, seq_b, scoring.iso_mass)

    # Modifications: one direction only
    for source, *targets in _parse_sets(modifications):
        for target in targets:
            put(source, target, scoring.modification)

    # Swaps: a window against any other order of the same symbols
    amino_acids = [AminoAcid(index) for index in range(1, MAX + 1)]
    for size in range(2, STEPS + 1):
        value = scoring.switched * size
        for symbols in combinations_with_replacement(amino_acids, size):
            if all(aa == symbols[0] for aa in symbols):
                continue
            orders = set(permutations(symbols))
            for window_a in orders:
                for window_b in orders:
                    if window_a != window_b:
                        put(window_a, window_b, value)

    table = ScoringTable(scoring, single, multi)
    logger.debug("Built scoring table with %d defined entries", len(table))
    return table
