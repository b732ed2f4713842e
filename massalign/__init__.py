"""
massalign: mass-based alignment of amino-acid sequences.
"""

# =============================================================================
# ALPHABET
# =============================================================================

from .aminoacid import (
    MAX,
    AminoAcid,
    sequence_from_string,
    sequence_to_string,
)

from .default import STEPS, Scoring

from .alphabet import (
    ScoringTable,
    build_scoring_table,
    window_index,
)


# =============================================================================
# CORE ALIGNMENT
# =============================================================================

from .dp_core import (
    Alignment,
    AlignType,
    MatrixData,
    Piece,
    align,
)

from .template import Template


# =============================================================================
# VALIDATION AND TESTING
# =============================================================================

from .validation import (
    check_alignment_validity,
    rescore_path,
    single_step_global,
)


__all__ = [
    # Alphabet
    "MAX",
    "STEPS",
    "AminoAcid",
    "sequence_from_string",
    "sequence_to_string",
    "Scoring",
    "ScoringTable",
    "build_scoring_table",
    "window_index",
    # Core alignment
    "Alignment",
    "AlignType",
    "MatrixData",
    "Piece",
    "align",
    "Template",
    # Validation
    "check_alignment_validity",
    "rescore_path",
    "single_step_global",
]
