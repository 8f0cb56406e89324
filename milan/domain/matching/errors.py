class MatchingError(Exception):
    """
    Base exception for all matching-related domain errors.
    """
    pass


class InvalidBirthProfileError(MatchingError):
    """
    Raised when a birth profile is out of range or inconsistent.
    """
    pass


class ReferenceTableError(MatchingError):
    """
    Raised when a classical reference table is missing an entry
    or has the wrong shape. This is a configuration defect, not bad input.
    """
    pass


class ScoringInvariantError(MatchingError):
    """
    Raised when a computed guna score escapes its fixed range.
    """
    pass
