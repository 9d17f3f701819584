"""
Trust Engine Configuration.

Centralizes the design constants of the scoring engine (decay, pairwise
feedback, global recompute) so they can be tuned or swapped without
touching the update loops.
"""
import math

from .errors import ConfigurationError

# ==========================================
# DECAY
# ==========================================
DECAY_MODEL = 'linear'
DECAY_RATE = 0.0001                # Linear: fraction of confidence lost per second
DECAY_HALF_LIFE = 6930.0           # Exponential: seconds until confidence halves

# ==========================================
# PAIRWISE FEEDBACK
# ==========================================
FEEDBACK_WEIGHT = 0.1              # Step size of a single outcome report
REJECT_SELF_REPORTS = False        # Dispatch policy for reporter == subject

# ==========================================
# GLOBAL RECOMPUTE (EigenTrust-like)
# ==========================================
TRUST_THRESHOLD = 0.5              # Score above which a participant is "trusted"
DAMPING_ALPHA = 0.85               # Weight of propagated trust vs. the prior
BASE_INITIAL_TRUST = 0.5           # Prior every score is pulled towards
RECOMPUTE_ITERATIONS = 5           # Fixed stopping rule (no convergence test)

# ==========================================
# SCORE BOUNDS
# ==========================================
MIN_TRUST = 0.0
MAX_TRUST = 1.0


class TrustParameters:
    """
    Bundle of the engine constants, passed explicitly into the engines.

    Args:
        feedback_weight (float): Step size of a pairwise update, >= 0.
        trust_threshold (float): Gate for a positive vote in recompute.
        alpha (float): Damping factor, strictly inside (0, 1).
        base_initial_trust (float): Prior in [0, 1].
        iterations (int): Number of recompute iterations K, >= 0.
        decay_rate (float): Linear decay per second, >= 0.
    """

    def __init__(self, feedback_weight: float = FEEDBACK_WEIGHT,
                 trust_threshold: float = TRUST_THRESHOLD,
                 alpha: float = DAMPING_ALPHA,
                 base_initial_trust: float = BASE_INITIAL_TRUST,
                 iterations: int = RECOMPUTE_ITERATIONS,
                 decay_rate: float = DECAY_RATE):
        self.feedback_weight = feedback_weight
        self.trust_threshold = trust_threshold
        self.alpha = alpha
        self.base_initial_trust = base_initial_trust
        self.iterations = iterations
        self.decay_rate = decay_rate
        self.validate()

    def validate(self):
        if not _finite(self.feedback_weight) or self.feedback_weight < 0:
            raise ConfigurationError(f"feedback_weight must be >= 0, got {self.feedback_weight}")
        if not _finite(self.trust_threshold) or not MIN_TRUST <= self.trust_threshold <= MAX_TRUST:
            raise ConfigurationError(f"trust_threshold must be in [0, 1], got {self.trust_threshold}")
        if not _finite(self.alpha) or not 0.0 < self.alpha < 1.0:
            raise ConfigurationError(f"alpha must be in (0, 1), got {self.alpha}")
        if not _finite(self.base_initial_trust) or not MIN_TRUST <= self.base_initial_trust <= MAX_TRUST:
            raise ConfigurationError(f"base_initial_trust must be in [0, 1], got {self.base_initial_trust}")
        if isinstance(self.iterations, bool) or not isinstance(self.iterations, int) or self.iterations < 0:
            raise ConfigurationError(f"iterations must be a non-negative int, got {self.iterations!r}")
        if not _finite(self.decay_rate) or self.decay_rate < 0:
            raise ConfigurationError(f"decay_rate must be >= 0, got {self.decay_rate}")

    def __repr__(self):
        return (f"<TrustParameters w={self.feedback_weight} threshold={self.trust_threshold} "
                f"alpha={self.alpha} base={self.base_initial_trust} K={self.iterations}>")


def _finite(value) -> bool:
    return isinstance(value, (int, float)) and math.isfinite(value)


DEFAULT_PARAMETERS = TrustParameters()
