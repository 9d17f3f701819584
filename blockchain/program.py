"""
Trust Program (Dispatch Layer).

Decodes an instruction into the matching handler, loads the records it
touches from the TrustStore, runs the scoring engine and commits the result
back as one atomic batch:

1. InitializeParticipant -> allocate a record with the initial trust.
2. ReportOutcome         -> Pairwise Update Engine on reporter + subject.
3. RecomputeScores       -> Global Recompute Engine on every owned record.
"""
import logging
from typing import Dict, Sequence

from trust.config import DEFAULT_PARAMETERS, REJECT_SELF_REPORTS, TrustParameters
from trust.decay import DecayModel
from trust.errors import (
    IncorrectOwnerError, InvalidInstructionError, SelfReportError, UnauthorizedReporterError,
)
from trust.pairwise import apply_report
from trust.recompute import VoteProvider, recompute
from trust.records import Identity, OutcomeReport, TrustRecord, check_score
from .store import TrustStore

logger = logging.getLogger(__name__)


# ==============================================================================
# Instructions
# ==============================================================================
class InitializeParticipant:
    def __init__(self, initial_trust: float):
        self.initial_trust = initial_trust

    def __repr__(self):
        return f"InitializeParticipant(initial_trust={self.initial_trust})"


class ReportOutcome:
    def __init__(self, reporter: Identity, subject: Identity, is_truthful: bool):
        self.reporter = reporter
        self.subject = subject
        self.is_truthful = is_truthful

    def to_report(self) -> OutcomeReport:
        return OutcomeReport(self.reporter, self.subject, self.is_truthful)

    def __repr__(self):
        return f"ReportOutcome({self.reporter} -> {self.subject}, is_truthful={self.is_truthful})"


class RecomputeScores:
    def __repr__(self):
        return "RecomputeScores()"


# ==============================================================================
# Program
# ==============================================================================
class TrustProgram:
    def __init__(self, store: TrustStore, params: TrustParameters = DEFAULT_PARAMETERS,
                 decay_model: DecayModel = None, votes: VoteProvider = None,
                 reject_self_reports: bool = REJECT_SELF_REPORTS):
        """
        Args:
            store (TrustStore): Record store owned by this program.
            params (TrustParameters): Engine constants.
            decay_model (DecayModel): Decay curve for pairwise updates.
            votes (VoteProvider): Vote rule for the global recompute.
            reject_self_reports (bool): Refuse reports where reporter == subject.
        """
        self.store = store
        self.params = params
        self.decay_model = decay_model
        self.votes = votes
        self.reject_self_reports = reject_self_reports

    @property
    def program_id(self) -> str:
        return self.store.program_id

    def process_instruction(self, accounts: Sequence[Identity], instruction, now: int, signer: Identity = None):
        """
        Entry point. `accounts` lists the identities the instruction touches:
        [participant] for InitializeParticipant, [reporter, subject] for
        ReportOutcome, and an optional subset for RecomputeScores (empty means
        every record owned by this program).
        """
        if isinstance(instruction, InitializeParticipant):
            logger.info("Instruction: InitializeParticipant")
            if len(accounts) < 1:
                raise IncorrectOwnerError("InitializeParticipant requires the participant account")
            return self.initialize_participant(accounts[0], instruction.initial_trust, now)
        elif isinstance(instruction, ReportOutcome):
            logger.info("Instruction: ReportOutcome")
            if len(accounts) < 2:
                raise IncorrectOwnerError("ReportOutcome requires reporter and subject accounts")
            if accounts[0] != instruction.reporter or accounts[1] != instruction.subject:
                raise IncorrectOwnerError(
                    f"Accounts {list(accounts[:2])} do not match {instruction.reporter}, {instruction.subject}")
            return self.report_outcome(instruction.to_report(), now, signer=signer)
        elif isinstance(instruction, RecomputeScores):
            logger.info("Instruction: RecomputeScores")
            return self.recompute_scores(now, accounts or None)
        else:
            raise InvalidInstructionError(f"Unknown instruction: {instruction!r}")

    def initialize_participant(self, identity: Identity, initial_trust: float, now: int) -> TrustRecord:
        record = TrustRecord(check_score(initial_trust, identity), now)
        self.store.create(identity, record, owner=self.program_id, now=now)
        logger.info("Participant %s initialized with trust score: %s", identity, record.trust_score)
        return record

    def report_outcome(self, report: OutcomeReport, now: int, signer: Identity = None):
        if signer is not None and signer != report.reporter:
            raise UnauthorizedReporterError(signer, report.reporter)
        if report.is_self_report and self.reject_self_reports:
            raise SelfReportError(report.reporter)

        with self.store.transaction():
            reporter_record = self.store.get_owned(report.reporter)
            subject_record = self.store.get_owned(report.subject)
            self._warn_clock_skew(report.reporter, reporter_record, now)
            self._warn_clock_skew(report.subject, subject_record, now)

            new_reporter, new_subject = apply_report(
                report, reporter_record, subject_record, now, self.params, self.decay_model)

            # Subject written last so a self-report keeps the updated score
            writes = {report.reporter: new_reporter}
            writes[report.subject] = new_subject
            self.store.commit(writes, now, instruction='ReportOutcome')

        logger.info("Participant %s reported message from %s as %s",
                    report.reporter, report.subject, report.is_truthful)
        logger.info("Trust score of %s updated to: %s", report.subject, new_subject.trust_score)
        return new_reporter, new_subject

    def recompute_scores(self, now: int, accounts: Sequence[Identity] = None) -> Dict[Identity, TrustRecord]:
        logger.info("Starting trust score update...")
        with self.store.transaction():
            owned = self.store.list_owned()
            if accounts is not None:
                wanted = set(accounts)
                owned = [(vid, record) for vid, record in owned if vid in wanted]

            if not owned:
                logger.info("No trust records found.")
                return {}

            records = dict(owned)
            for vid, record in records.items():
                self._warn_clock_skew(vid, record, now)

            updated = recompute(records, now, self.params, self.votes)
            self.store.commit(updated, now, instruction='RecomputeScores')

        for vid, record in updated.items():
            logger.debug("Updated trust score of %s to: %s", vid, record.trust_score)
        logger.info("Trust score update complete (%d records).", len(updated))
        return updated

    def scores(self) -> Dict[Identity, float]:
        """Current score of every owned record."""
        return {vid: record.trust_score for vid, record in self.store.list_owned()}

    def _warn_clock_skew(self, identity, record: TrustRecord, now: int):
        if now < record.last_updated_timestamp:
            logger.warning("Clock skew for %s: now=%s < last_updated=%s, treating elapsed time as zero",
                           identity, now, record.last_updated_timestamp)

