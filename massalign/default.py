"""
default.py — Default parameters for mass-based alignment

Provides the default scoring constants and the hand-authored equivalence
classes (iso-mass sets and modifications) that the scoring table is built
from.  Windows are written as one-letter strings.
"""

from __future__ import annotations

from dataclasses import dataclass, fields

# Scores are stored as signed bytes
_INT8_MIN, _INT8_MAX = -128, 127

# Longest window consumed on one side in a single step
STEPS = 3

IDENTITY = 8
MISMATCH = -1
ISO_MASS = 5
MODIFICATION = 3
## Per symbol of the window: AG against GA scores 2 * SWITCHED
SWITCHED = 2
## GAP_START is not applied, every gapped symbol costs GAP_EXTEND
GAP_START = -5
GAP_EXTEND = -5


@dataclass(frozen=True)
class Scoring:
    """
    Score constants for one scoring table.

    Attributes
    ----------
    identity : int
        Same single symbol on both sides; should be the highest score.
    mismatch : int
        Different single symbols without any other relationship.
    iso_mass : int
        Windows with the same mass, eg Q against AG.
    modification : int
        One-directional substitution, eg Q in A against E in B.
    switched : int
        Reordered window, multiplied by the window length.
    gap_start, gap_extend : int
        Gap constants.  Only gap_extend is used by the aligner.

    A score of 0 marks an undefined transition in the table, so none of
    these may be 0.
    """

    identity: int = IDENTITY
    mismatch: int = MISMATCH
    iso_mass: int = ISO_MASS
    modification: int = MODIFICATION
    switched: int = SWITCHED
    gap_start: int = GAP_START
    gap_extend: int = GAP_EXTEND

    def __post_init__(self):
        for field in fields(self):
            value = getattr(self, field.name)
            if value == 0:
                raise ValueError(f"Score {field.name} must be non-zero")
            if not _INT8_MIN <= value <= _INT8_MAX:
                raise ValueError(
                    f"Score {field.name}={value} does not fit a signed byte"
                )
        if not _INT8_MIN <= self.switched * STEPS <= _INT8_MAX:
            raise ValueError(
                f"Score switched={self.switched} overflows a signed byte "
                f"for windows of length {STEPS}"
            )


# ---------------------------------------------------------------------------
# Equivalence classes
# ---------------------------------------------------------------------------

## Windows within one set have the same total residue mass
ISO_MASS_SETS = (
    ("I", "L"),
    ("N", "GG"),
    ("Q", "AG"),
    ("AV", "GL", "GI"),
    ("AN", "QG", "AGG"),
    ("LS", "IS", "TV"),
    ("AM", "CV"),
    ("NV", "AAA", "GGV"),
    ("NT", "QS", "AGS", "GGT"),
    ("LN", "IN", "QV", "AGV", "GGL", "GGI"),
    ("DL", "DI", "EV"),
    ("QT", "AAS", "AGT"),
    ("AY", "FS"),
    ("LQ", "IQ", "AAV", "AGL", "AGI"),
    ("NQ", "ANG", "QGG"),
    ("KN", "GGK"),
    ("EN", "DQ", "ADG", "EGG"),
    ("DK", "AAT", "GSV"),
    ("MN", "AAC", "GGM"),
    ("AS", "GT"),
    ("AAL", "AAI", "GVV"),
    ("QQ", "AAN", "AQG"),
    ("EQ", "AAD", "AEG"),
    ("EK", "ASV", "GLS", "GIS", "GTV"),
    ("MQ", "AGM", "CGV"),
    ("AAQ", "NGV"),
)

## (source, *targets): source in A may become any target in B, not reversed
MODIFICATIONS = (
    ("Q", "E"),          # Deamidation
    ("D", "N"),          # Deamidation
    ("C", "T"),          # Disulfide bond
    ("T", "D"),          # Methylation
    ("S", "T"),          # Methylation
    ("D", "E"),          # Methylation
    ("R", "AV", "GL"),   # Methylation
    ("Q", "AA"),         # Methylation
)


def scoring_params() -> dict:
    """
    Bundle the default constants into a dict for easy unpacking.

    Usage:
        scoring = Scoring(**{**scoring_params(), "gap_extend": -3})
    """
    return {
        "identity": IDENTITY,
        "mismatch": MISMATCH,
        "iso_mass": ISO_MASS,
        "modification": MODIFICATION,
        "switched": SWITCHED,
        "gap_start": GAP_START,
        "gap_extend": GAP_EXTEND,
    }
