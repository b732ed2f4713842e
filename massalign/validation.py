"""
validation.py — independent baselines and consistency checks

This module provides:

  1. single_step_global: a plain Needleman-Wunsch over single symbols with
     the same table and gap score.  Every single-symbol step is also a step
     of the mass-based aligner, so its GLOBAL score can never be lower.

  2. rescore_path / check_alignment_validity: recompute an Alignment from
     its sequences and the table and check the path invariants.

This module does not use the fill or traceback of dp_core, so bugs there
cannot mask themselves during testing.
"""

from __future__ import annotations

from typing import List, Sequence, Tuple

import numpy as np

from .aminoacid import AminoAcid
from .alphabet import ScoringTable, window_index
from .default import STEPS
from .dp_core import Alignment


def single_step_global(
    seq_a: Sequence[AminoAcid],
    seq_b: Sequence[AminoAcid],
    table: ScoringTable,
) -> int:
    """
    Global alignment score NW(A, B) using only steps of at most one symbol.

    Undefined single-symbol pairs (score 0) are skipped, as in the aligner.
    """
    n, m = len(seq_a), len(seq_b)
    gap = table.scoring.gap_extend

    S = np.zeros((n + 1, m + 1), dtype=np.int64)
    S[0, :] = np.arange(m + 1) * gap
    S[:, 0] = np.arange(n + 1) * gap

    for i in range(1, n + 1):
        xi = window_index(seq_a[i - 1:i])
        for j in range(1, m + 1):
            yj = window_index(seq_b[j - 1:j])
            best = max(S[i - 1, j] + gap, S[i, j - 1] + gap)
            score = table.score(xi, yj)
            if score != 0:
                best = max(best, S[i - 1, j - 1] + score)
            S[i, j] = best
    return int(S[n, m])


def rescore_path(alignment: Alignment, table: ScoringTable) -> List[int]:
    """
    Local score of every piece, recomputed from the sequences and the table.
    """
    gap = table.scoring.gap_extend
    scores = []
    loc_a, loc_b = alignment.start_a, alignment.start_b
    for piece in alignment.path:
        window_a = alignment.seq_a[loc_a:loc_a + piece.step_a]
        window_b = alignment.seq_b[loc_b:loc_b + piece.step_b]
        if piece.step_a == 0 or piece.step_b == 0:
            scores.append(gap)
        else:
            scores.append(table[window_a, window_b])
        loc_a += piece.step_a
        loc_b += piece.step_b
    return scores


def check_alignment_validity(
    alignment: Alignment,
    table: ScoringTable,
) -> Tuple[bool, str]:
    """
    Check that an Alignment is consistent with its sequences and table:

      1. every step is 0..STEPS on each side and there are no double gaps,
      2. the path stays within both sequences,
      3. no step has an undefined (0) score and every local score matches
         the table,
      4. cumulative scores chain from the start cell (score 0) to
         alignment.score.

    Returns
    -------
    (bool, str)
        Validity and a message describing the first problem found.
    """
    for k, piece in enumerate(alignment.path):
        if not (0 <= piece.step_a <= STEPS and 0 <= piece.step_b <= STEPS):
            return False, f"Piece {k} has step sizes out of range: {piece}"
        if piece.step_a == 0 and piece.step_b != 1:
            return False, f"Piece {k} is a double gap in A: {piece}"
        if piece.step_b == 0 and piece.step_a != 1:
            return False, f"Piece {k} is a double gap in B: {piece}"

    end_a = alignment.start_a + alignment.len_a()
    end_b = alignment.start_b + alignment.len_b()
    if end_a > len(alignment.seq_a) or end_b > len(alignment.seq_b):
        return False, (
            f"Path ends at ({end_a}, {end_b}) beyond sequence lengths "
            f"({len(alignment.seq_a)}, {len(alignment.seq_b)})"
        )

    expected = rescore_path(alignment, table)
    for k, (piece, local) in enumerate(zip(alignment.path, expected)):
        if local == 0:
            return False, f"Piece {k} takes an undefined step: {piece}"
        if piece.local_score != local:
            return False, f"Piece {k} local score {piece.local_score} != table score {local}"

    running = 0
    for k, piece in enumerate(alignment.path):
        running += piece.local_score
        if piece.score != running:
            return False, f"Piece {k} cumulative score {piece.score} != {running}"
    if alignment.path and running != alignment.score:
        return False, f"Path score {running} != alignment score {alignment.score}"

    return True, "OK"
