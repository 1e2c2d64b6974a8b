class PreconditionViolation(ValueError):
    """Raised when a caller breaks the engine's calling contract (a caller bug, not bad data)."""
