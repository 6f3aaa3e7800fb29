"""Text normalization helpers for display fields."""

from pyvtrack.text.mojibake import (
    DecodingCandidate,
    arabic_score,
    generate_candidates,
    has_markers,
    is_right_to_left,
    looks_corrupted,
    recover,
    recover_fields,
)

__all__ = [
    "DecodingCandidate",
    "arabic_score",
    "generate_candidates",
    "has_markers",
    "is_right_to_left",
    "looks_corrupted",
    "recover",
    "recover_fields",
]
