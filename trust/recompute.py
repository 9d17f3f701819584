"""
Global Recompute Engine.

Network-wide rescoring approximating an EigenTrust fixed point without an
explicit trust graph: every participant votes with a weight equal to its own
current score (self-referential voting), gated by the trust threshold.
Each iteration is O(n) for the built-in vote rules.

The working state is a pair of score vectors. Each iteration reads the
current vector and writes a fresh one, which then replaces it, so later
iterations see the previous iteration's recomputed scores.
"""
from abc import ABC, abstractmethod
from typing import Dict

import numpy as np

from .config import DEFAULT_PARAMETERS, MIN_TRUST, MAX_TRUST, TrustParameters
from .records import Identity, TrustRecord, check_score


# ==============================================================================
# Vote providers
# ==============================================================================
class VoteProvider(ABC):
    """
    Supplies the votes received by each participant in one iteration.

    weighted_sums(scores, threshold)[i] is the sum over j != i of the vote of
    participant j towards participant i. The built-in rules compute it
    directly from the score vector in O(n).
    """

    @abstractmethod
    def weighted_sums(self, scores: np.ndarray, threshold: float) -> np.ndarray:
        """
        Args:
            scores: Current score vector, shape (n,).
            threshold: Trust threshold for a positive vote.
        Returns:
            np.ndarray of shape (n,), self-votes excluded.
        """
        pass


class MatrixVotes(VoteProvider):
    """
    Base for explicit-edge rules that supply a full vote matrix V[j, i].

    Diagonal entries are ignored. Costs O(n^2) memory per iteration.
    """

    @abstractmethod
    def vote_matrix(self, scores: np.ndarray, threshold: float) -> np.ndarray:
        pass

    def weighted_sums(self, scores: np.ndarray, threshold: float) -> np.ndarray:
        V = np.array(self.vote_matrix(scores, threshold), dtype=np.float64)
        np.fill_diagonal(V, 0.0)
        return V.sum(axis=0)


class SubjectGatedVotes(VoteProvider):
    """
    Voter j contributes its own score towards i while i is above the threshold.

    Participants at or below the threshold receive no positive votes and fall
    to the damped prior.
    """
    def weighted_sums(self, scores: np.ndarray, threshold: float) -> np.ndarray:
        return (scores.sum() - scores) * (scores > threshold)


class VoterGatedVotes(VoteProvider):
    """Only voters above the threshold contribute, each with weight equal to its score."""
    def weighted_sums(self, scores: np.ndarray, threshold: float) -> np.ndarray:
        weights = np.where(scores > threshold, scores, 0.0)
        return weights.sum() - weights


DEFAULT_VOTES = SubjectGatedVotes()


# ==============================================================================
# Iteration
# ==============================================================================
def recompute_step(scores: np.ndarray, params: TrustParameters = DEFAULT_PARAMETERS,
                   votes: VoteProvider = None) -> np.ndarray:
    """
    One propagation iteration over a score vector. Returns a new vector.

    weighted_sum(i) = sum over j != i of V[j, i]
    total(i)        = sum over j != i of scores[j]
    new(i)          = clip(alpha * weighted_sum / total + (1 - alpha) * base)
    """
    n = scores.shape[0]
    if n == 0:
        return scores.copy()

    weighted_sum = (votes or DEFAULT_VOTES).weighted_sums(scores, params.trust_threshold)
    total_voter_trust = scores.sum() - scores

    normalized = np.zeros(n)
    has_voters = total_voter_trust > 0
    normalized[has_voters] = weighted_sum[has_voters] / total_voter_trust[has_voters]

    new_scores = params.alpha * normalized + (1.0 - params.alpha) * params.base_initial_trust
    return np.clip(new_scores, MIN_TRUST, MAX_TRUST)


def recompute(all_records: Dict[Identity, TrustRecord], now: int,
              params: TrustParameters = DEFAULT_PARAMETERS,
              votes: VoteProvider = None) -> Dict[Identity, TrustRecord]:
    """
    Recomputes every participant's score from the whole record set.

    Args:
        all_records: Mapping identity -> TrustRecord (the full owned set).
        now (int): Current Unix seconds; stamped on every output record.
        params (TrustParameters): alpha, base_initial_trust, threshold, iterations.
        votes (VoteProvider): Vote rule, SubjectGatedVotes by default.

    Returns:
        New mapping identity -> TrustRecord in the input order. Empty input
        yields an empty mapping.

    Raises:
        InvalidScoreError: If any input score is outside [0.0, 1.0].
    """
    if not all_records:
        return {}

    ids = list(all_records.keys())
    scores = np.array([check_score(all_records[vid].trust_score, vid) for vid in ids], dtype=np.float64)

    for _ in range(params.iterations):
        scores = recompute_step(scores, params, votes)

    result = {}
    for idx, vid in enumerate(ids):
        record = all_records[vid]
        result[vid] = TrustRecord(float(scores[idx]), record.touched_at(now))
    return result
