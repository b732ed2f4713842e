"""
template.py — many reads aligned against one template

Each read is aligned with GLOBAL_FOR_B, so the read is covered fully while
the template may stick out on both sides.  Every alignment is an
independent call with its own DP arrays; only the scoring table is shared.
"""

from __future__ import annotations

from typing import Iterable, List, Sequence

from .aminoacid import AminoAcid, sequence_to_string
from .alphabet import ScoringTable
from .dp_core import Alignment, AlignType, align


class Template:
    """
    A template sequence with the reads aligned to it.

    Attributes
    ----------
    sequence : list of AminoAcid
        The template.
    reads : list of Alignment
        One GLOBAL_FOR_B alignment per read, template as A and read as B.
    """

    def __init__(
        self,
        sequence: Sequence[AminoAcid],
        reads: Iterable[Sequence[AminoAcid]],
        table: ScoringTable,
    ):
        self.sequence = list(sequence)
        self.reads: List[Alignment] = [
            align(self.sequence, read, table, AlignType.GLOBAL_FOR_B)
            for read in reads
        ]

    def insertions(self) -> List[int]:
        """
        Extra columns needed before each template position.

        Entry p is the widest run of read symbols shown before template
        position p; the last entry (p = len(sequence)) is after the end.  A
        read window longer than the template window it covers reserves the
        excess right after that template window.
        """
        insertions = [0] * (len(self.sequence) + 1)
        for read in self.reads:
            loc_a = read.start_a
            run = 0
            for piece in read.path:
                if piece.step_a == 0:
                    run += 1
                    continue
                insertions[loc_a] = max(insertions[loc_a], run)
                loc_a += piece.step_a
                run = max(piece.step_b - piece.step_a, 0)
            insertions[loc_a] = max(insertions[loc_a], run)
        return insertions

    def render(self) -> str:
        """
        Text view: the template on the first line, then one line per read.

        Insertion columns are '-' in the template.  Deleted template
        positions are '-' in the read, and a read window shorter than the
        template window it covers is padded with '·'.
        """
        insertions = self.insertions()
        lines = [
            "".join("-" * ins + aa.char for ins, aa in zip(insertions, self.sequence))
            + "-" * insertions[-1]
        ]
        for read in self.reads:
            out = [" " * (read.start_a + sum(insertions[:read.start_a]))]
            loc_a, loc_b = read.start_a, read.start_b
            pending = 0  # columns already used in the insertion slot at loc_a
            for piece in read.path:
                window = sequence_to_string(read.seq_b[loc_b:loc_b + piece.step_b])
                if piece.step_a == 0:
                    out.append(window)
                    pending += 1
                else:
                    out.append("-" * (insertions[loc_a] - pending))
                    width = piece.step_a + sum(insertions[loc_a + 1:loc_a + piece.step_a])
                    if window:
                        out.append(window.ljust(width, "·"))
                        pending = max(len(window) - width, 0)
                    else:
                        out.append("-" * width)
                        pending = 0
                loc_a += piece.step_a
                loc_b += piece.step_b
            lines.append("".join(out).rstrip())
        return "\n".join(lines)
