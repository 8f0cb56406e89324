"""
Kundali Milan

Deterministic Ashta Koot compatibility scoring for a bride and groom.
"""

from milan.domain.matching.errors import (
    InvalidBirthProfileError,
    MatchingError,
    ReferenceTableError,
    ScoringInvariantError,
)
from milan.domain.matching.schemas import BirthProfile, CompatibilityReport
from milan.services.matching_service import MatchingService, compute_compatibility

__all__ = [
    "BirthProfile",
    "CompatibilityReport",
    "MatchingService",
    "compute_compatibility",
    "MatchingError",
    "InvalidBirthProfileError",
    "ReferenceTableError",
    "ScoringInvariantError",
]
