"""
aminoacid.py — the amino-acid alphabet used by the mass-based aligner

AminoAcid is a closed IntEnum whose values are the dense indices 1..24 used
by the scoring table.  Index 0 is never a symbol: the table encodes the
empty window as 0.

  - AminoAcid            : 20 residues, the ambiguity codes B and Z,
                           the single-position wildcard X and GAP ('*').
  - MAX                  : number of scorable symbols (GAP excluded).
  - sequence_from_string : lenient text decoding.
  - sequence_to_string   : one-letter text encoding.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Iterable, List


class AminoAcid(IntEnum):
    """One amino acid, valued by its dense index."""

    A = 1    # Alanine
    R = 2    # Arginine
    N = 3    # Asparagine
    D = 4    # Aspartic acid
    C = 5    # Cysteine
    Q = 6    # Glutamine
    E = 7    # Glutamic acid
    G = 8    # Glycine
    H = 9    # Histidine
    I = 10   # Isoleucine
    L = 11   # Leucine
    K = 12   # Lysine
    M = 13   # Methionine
    F = 14   # Phenylalanine
    P = 15   # Proline
    S = 16   # Serine
    T = 17   # Threonine
    W = 18   # Tryptophan
    Y = 19   # Tyrosine
    V = 20   # Valine
    B = 21   # Asparagine or aspartic acid
    Z = 22   # Glutamine or glutamic acid
    X = 23   # Single unknown position
    GAP = 24  # Longer gap

    @property
    def char(self) -> str:
        """One-letter code."""
        return "*" if self is AminoAcid.GAP else self.name

    @classmethod
    def from_char(cls, char: str) -> AminoAcid:
        """
        Strict inverse of `char`.

        Raises
        ------
        ValueError
            If `char` is not a one-letter code of this alphabet.
        """
        try:
            return _FROM_CHAR[char]
        except KeyError:
            raise ValueError(f"Unknown amino acid code: {char!r}") from None

    def __str__(self) -> str:
        return self.char


# Number of symbols that can appear in scored windows (GAP is excluded)
MAX = 23

_FROM_CHAR = {aa.char: aa for aa in AminoAcid}


def sequence_from_string(text: str) -> List[AminoAcid]:
    """
    Decode a sequence, silently skipping characters that are not codes.

    This is a best-effort filter for free text, not validation: callers
    that need strict input should use AminoAcid.from_char per character.
    """
    return [_FROM_CHAR[c] for c in text if c in _FROM_CHAR]


def sequence_to_string(sequence: Iterable[AminoAcid]) -> str:
    """Concatenate the one-letter codes of `sequence`."""
    return "".join(aa.char for aa in sequence)
