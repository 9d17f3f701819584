"""Tests for the pairwise update engine."""
import pytest

from trust.config import TrustParameters
from trust.decay import NoDecay
from trust.errors import InvalidScoreError
from trust.pairwise import apply_report, feedback_delta
from trust.records import OutcomeReport, TrustRecord


def report(is_truthful, reporter='reporter', subject='subject'):
    return OutcomeReport(reporter, subject, is_truthful)


class TestReportDirection:
    def test_truthful_report_rewards_subject(self):
        reporter = TrustRecord(0.8, 1000)
        subject = TrustRecord(0.5, 1000)

        new_reporter, new_subject = apply_report(report(True), reporter, subject, now=1000)

        # 0.5 + 0.1 * 0.8 * (1 - 0.5)
        assert new_subject.trust_score == pytest.approx(0.54)
        assert 0.5 < new_subject.trust_score <= 1.0
        assert new_reporter.trust_score == 0.8

    def test_false_report_penalizes_subject(self):
        reporter = TrustRecord(0.8, 1000)
        subject = TrustRecord(0.5, 1000)

        _, new_subject = apply_report(report(False), reporter, subject, now=1000)

        # 0.5 - 0.1 * 0.8 * 0.5
        assert new_subject.trust_score == pytest.approx(0.46)
        assert 0.0 <= new_subject.trust_score < 0.5


class TestUpdateRule:
    def test_both_records_stamped_with_now(self):
        new_reporter, new_subject = apply_report(
            report(True), TrustRecord(0.8, 100), TrustRecord(0.5, 200), now=1000)
        assert new_reporter.last_updated_timestamp == 1000
        assert new_subject.last_updated_timestamp == 1000

    def test_reporter_score_is_decayed(self):
        new_reporter, _ = apply_report(report(True), TrustRecord(0.8, 0), TrustRecord(0.5, 1000), now=1000)
        assert new_reporter.trust_score == pytest.approx(0.72)

    def test_decayed_reporter_weighs_less(self):
        _, fresh = apply_report(report(True), TrustRecord(0.8, 1000), TrustRecord(0.5, 1000), now=1000)
        _, stale = apply_report(report(True), TrustRecord(0.8, 0), TrustRecord(0.5, 1000), now=1000)
        assert stale.trust_score < fresh.trust_score

    def test_full_trust_subject_holds_on_truthful_report(self):
        _, new_subject = apply_report(report(True), TrustRecord(0.9, 10), TrustRecord(1.0, 10), now=10)
        assert new_subject.trust_score == 1.0

    def test_zero_trust_subject_holds_on_false_report(self):
        _, new_subject = apply_report(report(False), TrustRecord(0.9, 10), TrustRecord(0.0, 10), now=10)
        assert new_subject.trust_score == 0.0

    def test_zero_credibility_reporter_changes_nothing(self):
        _, new_subject = apply_report(report(False), TrustRecord(0.0, 10), TrustRecord(0.6, 10), now=10)
        assert new_subject.trust_score == 0.6

    def test_zero_feedback_weight_only_decays(self):
        params = TrustParameters(feedback_weight=0.0)
        _, new_subject = apply_report(
            report(True), TrustRecord(0.9, 0), TrustRecord(0.5, 0), now=1000, params=params)
        assert new_subject.trust_score == pytest.approx(0.45)

    def test_large_feedback_weight_is_clamped(self):
        params = TrustParameters(feedback_weight=5.0)
        _, up = apply_report(report(True), TrustRecord(1.0, 0), TrustRecord(0.1, 0), now=0, params=params)
        _, down = apply_report(report(False), TrustRecord(1.0, 0), TrustRecord(0.9, 0), now=0, params=params)
        assert up.trust_score == 1.0
        assert down.trust_score == 0.0

    def test_decay_rate_taken_from_parameters(self):
        params = TrustParameters(decay_rate=0.001)
        new_reporter, new_subject = apply_report(
            report(True), TrustRecord(0.8, 0), TrustRecord(0.5, 100), now=100, params=params)
        # 0.8 * (1 - 0.001 * 100)
        assert new_reporter.trust_score == pytest.approx(0.72)
        assert new_subject.trust_score == pytest.approx(0.5 + 0.1 * 0.72 * 0.5)

    def test_custom_decay_model(self):
        _, new_subject = apply_report(
            report(True), TrustRecord(0.8, 0), TrustRecord(0.5, 0), now=10 ** 6, decay_model=NoDecay())
        assert new_subject.trust_score == pytest.approx(0.54)

    def test_feedback_delta_signs(self):
        assert feedback_delta(0.5, 0.5, True, 0.1) > 0
        assert feedback_delta(0.5, 0.5, False, 0.1) < 0


class TestEdgeCases:
    def test_clock_skew_keeps_timestamps_monotonic(self):
        new_reporter, new_subject = apply_report(
            report(True), TrustRecord(0.8, 2000), TrustRecord(0.5, 3000), now=1000)
        assert new_reporter.last_updated_timestamp == 2000
        assert new_subject.last_updated_timestamp == 3000
        # No negative decay: scores are used as stored
        assert new_reporter.trust_score == 0.8
        assert new_subject.trust_score == pytest.approx(0.54)

    def test_self_report_still_runs_arithmetic(self):
        record = TrustRecord(0.6, 50)
        new_reporter, new_subject = apply_report(report(True, 'car', 'car'), record, record, now=50)
        assert new_reporter.trust_score == 0.6
        assert new_subject.trust_score == pytest.approx(0.6 + 0.1 * 0.6 * 0.4)

    def test_inputs_are_not_mutated(self):
        reporter = TrustRecord(0.8, 0)
        subject = TrustRecord(0.5, 0)
        apply_report(report(False), reporter, subject, now=500)
        assert reporter == TrustRecord(0.8, 0)
        assert subject == TrustRecord(0.5, 0)

    @pytest.mark.parametrize("bad", [1.2, -0.3, float('nan')])
    def test_invalid_input_score_rejected(self, bad):
        with pytest.raises(InvalidScoreError) as exc:
            apply_report(report(True), TrustRecord(0.5, 0), TrustRecord(bad, 0), now=0)
        assert exc.value.identity == 'subject'

    @pytest.mark.parametrize("is_truthful", [True, False])
    @pytest.mark.parametrize("reporter_score,subject_score", [(0.01, 0.99), (0.5, 0.5), (1.0, 0.0), (0.99, 1.0)])
    def test_direction_and_bounds(self, is_truthful, reporter_score, subject_score):
        _, new_subject = apply_report(
            report(is_truthful), TrustRecord(reporter_score, 7), TrustRecord(subject_score, 7), now=7)
        assert 0.0 <= new_subject.trust_score <= 1.0
        if is_truthful:
            assert new_subject.trust_score >= subject_score
        else:
            assert new_subject.trust_score <= subject_score
