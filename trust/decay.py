"""
Time Decay Module.

A stored score loses confidence while it is not refreshed. The decayed value
is computed on read, never written back by this module.

Every decay model maps an elapsed time to a factor in [0, 1] that is 1.0 at
zero elapsed time and never increases afterwards.
"""
import logging
import math
from abc import ABC, abstractmethod

from .config import DECAY_RATE, DECAY_HALF_LIFE
from .records import check_score, clamp_score

logger = logging.getLogger(__name__)


def elapsed_seconds(last_updated: int, now: int) -> int:
    """Seconds since `last_updated`, clamped to zero when the clock runs behind."""
    return max(0, int(now) - int(last_updated))


class DecayModel(ABC):
    @abstractmethod
    def factor(self, elapsed: float) -> float:
        """Multiplier applied to a score after `elapsed` seconds."""
        pass

    def apply(self, score: float, last_updated: int, now: int) -> float:
        elapsed = elapsed_seconds(last_updated, now)
        if elapsed == 0:
            return score
        return clamp_score(score * self.factor(elapsed))


class LinearDecay(DecayModel):
    """factor = 1 - rate * elapsed, floored at zero."""
    def __init__(self, rate: float = DECAY_RATE):
        if rate < 0:
            raise ValueError(f"rate must be non-negative, got {rate}")
        self.rate = rate

    def factor(self, elapsed: float) -> float:
        return max(0.0, 1.0 - self.rate * elapsed)

    def __repr__(self):
        return f"<LinearDecay rate={self.rate}>"


class ExponentialDecay(DecayModel):
    """factor = 0.5 ** (elapsed / half_life)"""
    def __init__(self, half_life: float = DECAY_HALF_LIFE):
        if half_life <= 0:
            raise ValueError(f"half_life must be positive, got {half_life}")
        self.half_life = half_life

    def factor(self, elapsed: float) -> float:
        return math.pow(0.5, elapsed / self.half_life)

    def __repr__(self):
        return f"<ExponentialDecay half_life={self.half_life}>"


class NoDecay(DecayModel):
    def factor(self, elapsed: float) -> float:
        return 1.0

    def __repr__(self):
        return "<NoDecay>"


DEFAULT_DECAY = LinearDecay()


def decay(score: float, last_updated: int, now: int, model: DecayModel = None) -> float:
    """
    Computes the time-decayed value of a stored trust score.

    Args:
        score (float): Stored trust score, must be in [0.0, 1.0].
        last_updated (int): Unix seconds the score was last written.
        now (int): Current Unix seconds, supplied by the caller.
        model (DecayModel): Decay curve, linear by default.

    Returns:
        float: Decayed score in [0.0, 1.0]. Equals `score` when now <= last_updated.

    Raises:
        InvalidScoreError: If `score` is outside [0.0, 1.0].
    """
    score = check_score(score)
    return (model or DEFAULT_DECAY).apply(score, last_updated, now)


def get_decay_model(name: str, rate: float = DECAY_RATE, half_life: float = DECAY_HALF_LIFE) -> DecayModel:
    """Returns a fresh instance of the requested decay model."""
    key = (name or '').lower()
    if key == 'linear':
        return LinearDecay(rate)
    elif key == 'exponential':
        return ExponentialDecay(half_life)
    elif key == 'none':
        return NoDecay()
    else:
        logger.warning("Unknown decay model '%s', defaulting to linear.", name)
        return LinearDecay(rate)
