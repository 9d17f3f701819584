"""
Pairwise Update Engine.

Applies one outcome report to the reporter's and the subject's records.
The reporter's decayed score is the credibility of the report: a truthful
verdict rewards the subject in proportion to its room to grow, a false one
penalizes it in proportion to its current standing.
"""
from typing import Tuple

from .config import DEFAULT_PARAMETERS, TrustParameters
from .decay import DecayModel, LinearDecay
from .records import OutcomeReport, TrustRecord, check_score, clamp_score


def feedback_delta(reporter_trust: float, subject_trust: float, is_truthful: bool,
                   feedback_weight: float) -> float:
    """Signed change of the subject's score for one report."""
    if is_truthful:
        return feedback_weight * reporter_trust * (1.0 - subject_trust)
    return -feedback_weight * reporter_trust * subject_trust


def apply_report(report: OutcomeReport, reporter_record: TrustRecord, subject_record: TrustRecord,
                 now: int, params: TrustParameters = DEFAULT_PARAMETERS,
                 decay_model: DecayModel = None) -> Tuple[TrustRecord, TrustRecord]:
    """
    Computes the records of reporter and subject after one report.

    Both records are assumed to exist and be owned by the caller; they are not
    modified. A self-report runs the same arithmetic.

    Args:
        report (OutcomeReport): The verdict.
        reporter_record (TrustRecord): Current record of report.reporter.
        subject_record (TrustRecord): Current record of report.subject.
        now (int): Current Unix seconds.
        params (TrustParameters): Engine constants (feedback_weight, decay_rate).
        decay_model (DecayModel): Decay curve, linear at params.decay_rate by default.

    Returns:
        tuple: (reporter_record', subject_record')

    Raises:
        InvalidScoreError: If either input score is outside [0.0, 1.0].
    """
    model = decay_model or LinearDecay(params.decay_rate)

    reporter_score = check_score(reporter_record.trust_score, report.reporter)
    subject_score = check_score(subject_record.trust_score, report.subject)

    reporter_decayed = model.apply(reporter_score, reporter_record.last_updated_timestamp, now)
    subject_decayed = model.apply(subject_score, subject_record.last_updated_timestamp, now)

    delta = feedback_delta(reporter_decayed, subject_decayed, report.is_truthful, params.feedback_weight)
    subject_new = clamp_score(subject_decayed + delta)

    new_reporter = TrustRecord(reporter_decayed, reporter_record.touched_at(now))
    new_subject = TrustRecord(subject_new, subject_record.touched_at(now))
    return new_reporter, new_subject
