"""
Trust scoring engine for vehicular networks.

Pairwise outcome reports update two records at a time; a periodic global
recompute propagates trust across the whole population.
"""
from .config import TrustParameters, DEFAULT_PARAMETERS
from .decay import DecayModel, LinearDecay, ExponentialDecay, NoDecay, decay, get_decay_model
from .errors import TrustError, InvalidScoreError, ConfigurationError
from .pairwise import apply_report
from .recompute import VoteProvider, MatrixVotes, SubjectGatedVotes, VoterGatedVotes, recompute
from .records import TrustRecord, OutcomeReport

__all__ = [
    'TrustParameters', 'DEFAULT_PARAMETERS',
    'DecayModel', 'LinearDecay', 'ExponentialDecay', 'NoDecay', 'decay', 'get_decay_model',
    'TrustError', 'InvalidScoreError', 'ConfigurationError',
    'apply_report',
    'VoteProvider', 'MatrixVotes', 'SubjectGatedVotes', 'VoterGatedVotes', 'recompute',
    'TrustRecord', 'OutcomeReport',
]
