"""
Trust Records Module.

Defines the persisted per-participant state (TrustRecord) and the ephemeral
input of a pairwise update (OutcomeReport).
"""
import math
from typing import Hashable

from .config import MIN_TRUST, MAX_TRUST
from .errors import InvalidScoreError

# Opaque participant identifier (a public key in the deployed system).
Identity = Hashable


def clamp_score(value: float) -> float:
    """Clamps a score into [0.0, 1.0]."""
    return max(MIN_TRUST, min(MAX_TRUST, value))


def check_score(score, identity=None) -> float:
    """Returns `score` as a float, raising InvalidScoreError if it is out of range."""
    if isinstance(score, bool) or not isinstance(score, (int, float)):
        raise InvalidScoreError(score, identity)
    score = float(score)
    if math.isnan(score) or not MIN_TRUST <= score <= MAX_TRUST:
        raise InvalidScoreError(score, identity)
    return score


class TrustRecord:
    """
    Trust state of one participant.

    Args:
        trust_score (float): Current score, always in [0.0, 1.0].
        last_updated_timestamp (int): Unix seconds of the last update.
    """
    __slots__ = ('trust_score', 'last_updated_timestamp')

    def __init__(self, trust_score: float, last_updated_timestamp: int):
        self.trust_score = trust_score
        self.last_updated_timestamp = int(last_updated_timestamp)

    def validate(self, identity=None) -> 'TrustRecord':
        check_score(self.trust_score, identity)
        return self

    def replace(self, trust_score: float = None, last_updated_timestamp: int = None) -> 'TrustRecord':
        """Returns a copy with the given fields changed."""
        return TrustRecord(
            self.trust_score if trust_score is None else trust_score,
            self.last_updated_timestamp if last_updated_timestamp is None else last_updated_timestamp,
        )

    def touched_at(self, now: int) -> int:
        """Timestamp to store when this record is updated at `now` (never moves backwards)."""
        return max(self.last_updated_timestamp, int(now))

    def __eq__(self, other):
        if not isinstance(other, TrustRecord):
            return NotImplemented
        return (self.trust_score == other.trust_score
                and self.last_updated_timestamp == other.last_updated_timestamp)

    def __hash__(self):
        return hash((self.trust_score, self.last_updated_timestamp))

    def __repr__(self):
        return f"<TrustRecord score={self.trust_score:.4f} updated={self.last_updated_timestamp}>"


class OutcomeReport:
    """One participant's verdict on a message sent by another participant."""
    __slots__ = ('reporter', 'subject', 'is_truthful')

    def __init__(self, reporter: Identity, subject: Identity, is_truthful: bool):
        self.reporter = reporter
        self.subject = subject
        self.is_truthful = bool(is_truthful)

    @property
    def is_self_report(self) -> bool:
        return self.reporter == self.subject

    def __repr__(self):
        verdict = 'truthful' if self.is_truthful else 'false'
        return f"<OutcomeReport {self.reporter} -> {self.subject}: {verdict}>"
