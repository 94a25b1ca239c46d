# physics/exceptions.py
# Small custom exceptions raised by the detection engine.


class DomainError(ValueError):
    """
    Raised when a value that must be a probability lies outside [0, 1].
    """
    pass


class ProbabilityComputationError(DomainError):
    """
    Raised when an internally derived probability (Pfa from a threshold, Pd
    from the Mitchell-Walker series) lands outside [0, 1]. Only degenerate
    inputs or extreme numerical edge cases get here; callers can catch it and
    carry on with other models.
    """
    pass


class BracketError(RuntimeError):
    """
    Raised when the monotonic solver can no longer widen its search bracket,
    e.g. an initial guess of zero or bounds saturated at 0 and infinity.
    """
    pass
