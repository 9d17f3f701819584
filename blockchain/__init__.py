"""Record store and instruction dispatch for the trust program."""
from .block import Block
from .store import TrustStore
from .program import TrustProgram, InitializeParticipant, ReportOutcome, RecomputeScores
