"""
dp_core.py — mass-based alignment dynamic programming core

This module implements a Needleman-Wunsch / Smith-Waterman variant where a
single step may consume a window of up to STEPS symbols on either side.
Window pairs are scored by a ScoringTable, so a step can match windows of
different length (iso-mass sets like N <> GG), reordered windows (AG <> GA)
and one-directional modifications (Q -> E).

Three alignment types are supported:

  - LOCAL        : best scoring patch of both sequences.
  - GLOBAL       : both sequences are consumed fully.
  - GLOBAL_FOR_B : B is consumed fully, A may have trailing ends.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence, Tuple

import numpy as np
from numpy.typing import NDArray

from .aminoacid import AminoAcid, sequence_to_string
from .alphabet import ScoringTable, window_index
from .default import STEPS

# Largest sequence length the int64 score matrix can index and accumulate
_MAX_LENGTH = np.iinfo(np.int64).max


# ---------------------------------------------------------------------------
# Alignment type and result containers
# ---------------------------------------------------------------------------

class AlignType(Enum):
    """The type of alignment to perform."""

    LOCAL = "local"
    GLOBAL = "global"
    GLOBAL_FOR_B = "global_for_b"

    @classmethod
    def coerce(cls, ty: AlignType | str) -> AlignType:
        """Accept an AlignType or its string value."""
        try:
            return cls(ty)
        except ValueError:
            raise ValueError(
                f"Unknown alignment type: {ty!r}, expected one of "
                f"{[t.value for t in cls]}"
            ) from None

    @property
    def global_b(self) -> bool:
        """True if B has to be consumed fully."""
        return self is not AlignType.LOCAL


@dataclass
class Piece:
    """
    One step of an alignment path.

    Attributes
    ----------
    score : int
        Cumulative score of the path up to and including this step.
    local_score : int
        Contribution of this step alone.
    step_a, step_b : int
        Number of symbols consumed from A and B (0..STEPS).  If one of them
        is 0 the other is 1.
    """
    score: int = 0
    local_score: int = 0
    step_a: int = 0
    step_b: int = 0

    def short(self) -> str:
        """Compact form: M(atch), I(nsertion in B), D(eletion in B) or S[a,b]."""
        steps = (self.step_a, self.step_b)
        if steps == (1, 1):
            return "M"
        if steps == (0, 1):
            return "I"
        if steps == (1, 0):
            return "D"
        return f"S[{self.step_a},{self.step_b}]"


@dataclass
class MatrixData:
    """
    DP arrays, all of shape (len_a+1, len_b+1).

    Cell (i, j) holds the best Piece ending after i symbols of A and j
    symbols of B, split over four arrays:

    score : int64
        Cumulative score.
    local_score : int8
        Score of the last step.
    step_a, step_b : uint8
        Size of the last step.  Both 0 marks a start cell.
    """
    score: NDArray[np.int64]
    local_score: NDArray[np.int8]
    step_a: NDArray[np.uint8]
    step_b: NDArray[np.uint8]

    def piece(self, i: int, j: int) -> Piece:
        return Piece(
            score=int(self.score[i, j]),
            local_score=int(self.local_score[i, j]),
            step_a=int(self.step_a[i, j]),
            step_b=int(self.step_b[i, j]),
        )


_BLOCKS = " ▁▂▃▄▅▆▇█"
_BLOCKS_NEG = " ▔▔▔▀▀▀▀█"


@dataclass
class Alignment:
    """
    Result of a single alignment run.

    Attributes
    ----------
    score : int
        Total score.
    path : list of Piece
        Steps from the start of the alignment to its end.
    start_a, start_b : int
        0-based offsets in A and B where the path starts.
    seq_a, seq_b : list of AminoAcid
        Copies of the aligned sequences.
    data : MatrixData or None
        Full DP arrays, if requested.
    """
    score: int
    path: List[Piece]
    start_a: int
    start_b: int
    seq_a: List[AminoAcid]
    seq_b: List[AminoAcid]
    data: Optional[MatrixData] = field(default=None, repr=False)

    def len_a(self) -> int:
        """Number of symbols of A covered by the path."""
        return sum(piece.step_a for piece in self.path)

    def len_b(self) -> int:
        """Number of symbols of B covered by the path."""
        return sum(piece.step_b for piece in self.path)

    def short(self) -> str:
        return "".join(piece.short() for piece in self.path)

    def aligned(self) -> str:
        """
        Four text lines: A, B and the positive and negative local scores.

        Each piece takes as many columns as its widest side; the shorter
        side is padded with '·' and gaps are drawn as '-'.
        """
        str_a, str_b, bars, bars_neg = [], [], [], []
        loc_a, loc_b = self.start_a, self.start_b
        for piece in self.path:
            width = max(piece.step_a, piece.step_b)
            window_a = sequence_to_string(self.seq_a[loc_a:loc_a + piece.step_a])
            window_b = sequence_to_string(self.seq_b[loc_b:loc_b + piece.step_b])
            str_a.append(window_a.ljust(width, "·") if window_a else "-" * width)
            str_b.append(window_b.ljust(width, "·") if window_b else "-" * width)
            local = piece.local_score
            up = _BLOCKS[min(local, len(_BLOCKS) - 1)] if local > 0 else " "
            down = _BLOCKS_NEG[min(-local, len(_BLOCKS_NEG) - 1)] if local < 0 else " "
            bars.append(up * width)
            bars_neg.append(down * width)
            loc_a += piece.step_a
            loc_b += piece.step_b
        return "\n".join("".join(line) for line in (str_a, str_b, bars, bars_neg))

    def summary(self) -> str:
        """Human readable report of this alignment."""
        return (
            f"score: {self.score}\n"
            f"path: {self.short()}\n"
            f"start: ({self.start_a}, {self.start_b})\n"
            f"aligned:\n{self.aligned()}"
        )


# ---------------------------------------------------------------------------
# Initialization
# ---------------------------------------------------------------------------

def init_matrices(n: int, m: int, ty: AlignType, gap: int) -> MatrixData:
    """
    Allocate the DP arrays and fill the boundaries for alignment type `ty`.

    LOCAL leaves all boundary cells as start cells.  GLOBAL and
    GLOBAL_FOR_B charge gaps along the first row (B consumed without A);
    GLOBAL also charges the first column (A consumed without B).
    """
    score = np.zeros((n + 1, m + 1), dtype=np.int64)
    local_score = np.zeros((n + 1, m + 1), dtype=np.int8)
    step_a = np.zeros((n + 1, m + 1), dtype=np.uint8)
    step_b = np.zeros((n + 1, m + 1), dtype=np.uint8)

    if ty.global_b:
        score[0, 1:] = np.arange(1, m + 1) * gap
        local_score[0, 1:] = gap
        step_b[0, 1:] = 1
    if ty is AlignType.GLOBAL:
        score[1:, 0] = np.arange(1, n + 1) * gap
        local_score[1:, 0] = gap
        step_a[1:, 0] = 1

    return MatrixData(
        score=score,
        local_score=local_score,
        step_a=step_a,
        step_b=step_b,
    )


def window_indices(seq: Sequence[AminoAcid]) -> List[List[int]]:
    """
    Table indices of every window of seq.

    indices[k][i] is the window_index of seq[i-k:i], the window of length k
    ending after i symbols; it is 0 where the window does not fit.
    """
    n = len(seq)
    indices = [[0] * (n + 1) for _ in range(STEPS + 1)]
    for i in range(1, n + 1):
        for k in range(1, min(STEPS, i) + 1):
            indices[k][i] = window_index(seq[i - k:i])
    return indices


# ---------------------------------------------------------------------------
# Per-cell update
# ---------------------------------------------------------------------------

def cell_update(
    data: MatrixData,
    table: ScoringTable,
    indices_a: List[List[int]],
    indices_b: List[List[int]],
    i: int,
    j: int,
) -> int:
    """
    Fill cell (i, j) with its best incoming step and return its score.

    Candidates are enumerated with len_a outer and len_b inner, both
    ascending.  Steps consuming nothing on one side must consume exactly one
    symbol on the other (no double gaps).  Steps scoring 0 are undefined
    and skipped.  On equal totals the later candidate wins, so the larger
    len_a and then the larger len_b is kept.
    """
    score = data.score
    gap = table.scoring.gap_extend

    best: Optional[Tuple[int, int, int, int]] = None
    for len_a in range(min(STEPS, i) + 1):
        for len_b in range(min(STEPS, j) + 1):
            if (len_a == 0 and len_b != 1) or (len_b == 0 and len_a != 1):
                continue
            if len_a == 0 or len_b == 0:
                step = gap
            else:
                step = table.score(indices_a[len_a][i], indices_b[len_b][j])
                if step == 0:
                    continue
            total = int(score[i - len_a, j - len_b]) + step
            if best is None or total >= best[0]:
                best = (total, step, len_a, len_b)

    if best is None:
        return int(score[i, j])
    total, step, len_a, len_b = best
    score[i, j] = total
    data.local_score[i, j] = step
    data.step_a[i, j] = len_a
    data.step_b[i, j] = len_b
    return total


# ---------------------------------------------------------------------------
# End point and traceback
# ---------------------------------------------------------------------------

def select_end(
    data: MatrixData,
    ty: AlignType,
    high: Tuple[int, int, int],
) -> Tuple[int, int, int]:
    """
    Choose (score, i, j) where the traceback starts.

    LOCAL uses the running maximum `high` gathered during the fill.  GLOBAL
    ends in the last cell.  GLOBAL_FOR_B takes the best cell of the last
    column, the first one on equal scores.
    """
    n, m = data.score.shape[0] - 1, data.score.shape[1] - 1
    if ty is AlignType.GLOBAL:
        return int(data.score[n, m]), n, m
    if ty is AlignType.GLOBAL_FOR_B:
        best_i = 0
        for i in range(1, n + 1):
            if data.score[i, m] > data.score[best_i, m]:
                best_i = i
        return int(data.score[best_i, m]), best_i, m
    return high


def traceback_alignment(data: MatrixData, i: int, j: int) -> Tuple[List[Piece], int, int]:
    """
    Walk the recorded steps back from (i, j).

    Stops at (0, 0) or at a cell without a step.  Returns the path from start
    to end and the cell it started in.
    """
    path: List[Piece] = []
    while i > 0 or j > 0:
        step_a, step_b = int(data.step_a[i, j]), int(data.step_b[i, j])
        if step_a == 0 and step_b == 0:
            break
        path.append(data.piece(i, j))
        i -= step_a
        j -= step_b
    path.reverse()
    return path, i, j


# ---------------------------------------------------------------------------
# Top-level driver
# ---------------------------------------------------------------------------

def align(
    seq_a: Sequence[AminoAcid],
    seq_b: Sequence[AminoAcid],
    table: ScoringTable,
    ty: AlignType | str = AlignType.LOCAL,
    return_data: bool = False,
) -> Alignment:
    """
    Align two amino-acid sequences.

    Parameters
    ----------
    seq_a, seq_b : sequence of AminoAcid
        The sequences, eg from sequence_from_string.  For GLOBAL_FOR_B, B is
        the one that is aligned fully.
    table : ScoringTable
        Shared, read-only scoring table from build_scoring_table().
    ty : AlignType or str, default LOCAL
        Alignment type.
    return_data : bool, default False
        If True, also return the full DP arrays (MatrixData).

    Returns
    -------
    Alignment

    Raises
    ------
    OverflowError
        If a sequence is too long for the int64 score arrays.
    ValueError
        For an unknown alignment type.
    """
    ty = AlignType.coerce(ty)
    n, m = len(seq_a), len(seq_b)
    if n > _MAX_LENGTH or m > _MAX_LENGTH:
        raise OverflowError(
            f"Sequence lengths ({n}, {m}) exceed the score range {_MAX_LENGTH}"
        )

    data = init_matrices(n, m, ty, table.scoring.gap_extend)
    indices_a = window_indices(seq_a)
    indices_b = window_indices(seq_b)

    # running maximum for LOCAL, the latest cell wins ties
    high = (0, 0, 0)
    for i in range(1, n + 1):
        for j in range(1, m + 1):
            total = cell_update(data, table, indices_a, indices_b, i, j)
            if total >= high[0]:
                high = (total, i, j)

    score, end_a, end_b = select_end(data, ty, high)
    path, start_a, start_b = traceback_alignment(data, end_a, end_b)

    return Alignment(
        score=score,
        path=path,
        start_a=start_a,
        start_b=start_b,
        seq_a=list(seq_a),
        seq_b=list(seq_b),
        data=data if return_data else None,
    )
