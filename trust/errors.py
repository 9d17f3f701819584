"""
Trust Error Types.

Core errors are raised by the scoring engines; boundary errors are raised by
the record store and the instruction dispatcher in `blockchain`.

Clock skew and empty record sets are not exceptions: elapsed time is clamped
to zero and an empty recompute returns an empty mapping.
"""


class TrustError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(TrustError, ValueError):
    """An engine parameter is outside its allowed range."""


class InvalidScoreError(TrustError):
    """A trust score is outside [0.0, 1.0] or not a number."""

    def __init__(self, score, identity=None):
        self.score = score
        self.identity = identity
        where = f" for {identity}" if identity is not None else ""
        super().__init__(f"Invalid trust score{where}: {score!r} (expected 0.0 <= score <= 1.0)")


# ==============================================================================
# Boundary errors (store / dispatch)
# ==============================================================================
class RecordNotFoundError(TrustError, KeyError):
    def __init__(self, identity):
        self.identity = identity
        super().__init__(f"No trust record for {identity}")

    def __str__(self):
        return self.args[0]


class AlreadyInitializedError(TrustError):
    def __init__(self, identity):
        self.identity = identity
        super().__init__(f"Participant {identity} already initialized")


class IncorrectOwnerError(TrustError):
    """Record is not owned by this program, or an account does not match the instruction."""


class UnauthorizedReporterError(TrustError):
    def __init__(self, signer, reporter):
        self.signer = signer
        self.reporter = reporter
        super().__init__(f"Signer {signer} may not report on behalf of {reporter}")


class SelfReportError(TrustError):
    def __init__(self, identity):
        self.identity = identity
        super().__init__(f"Participant {identity} cannot report on its own messages")


class InvalidInstructionError(TrustError):
    """The dispatcher received an object that is not a known instruction."""
