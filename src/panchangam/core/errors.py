class PanchangamError(Exception):
    """Base error."""

class NumericNonConvergence(PanchangamError):
    """Raised when the angular event solver exceeds its iteration bound."""

class InvalidInputName(PanchangamError, ValueError):
    """Raised when a masa/paksha/tithi name cannot be recognized."""

class EngineUnavailableError(PanchangamError):
    """Raised when an optional backend (e.g. Swiss Ephemeris) is not available."""
