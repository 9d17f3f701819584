"""Tests for the time decay models."""
import logging
import math

import pytest

from trust.decay import (
    DEFAULT_DECAY, ExponentialDecay, LinearDecay, NoDecay, decay, elapsed_seconds, get_decay_model,
)
from trust.errors import InvalidScoreError


class TestDecayFunction:
    @pytest.mark.parametrize("score", [0.0, 0.25, 0.5, 0.999, 1.0])
    def test_no_elapsed_time_returns_score(self, score):
        assert decay(score, 1000, 1000) == score

    def test_linear_decay_after_elapsed_time(self):
        # 1000 s at 0.0001/s -> factor 0.9
        assert decay(0.8, 0, 1000) == pytest.approx(0.72)

    def test_decay_floors_at_zero(self):
        assert decay(0.9, 0, 20000) == 0.0

    def test_clock_skew_is_treated_as_no_elapsed_time(self):
        assert decay(0.6, 1000, 500) == 0.6

    def test_elapsed_seconds_clamped(self):
        assert elapsed_seconds(1000, 500) == 0
        assert elapsed_seconds(500, 1000) == 500

    @pytest.mark.parametrize("score", [-0.1, 1.01, float('nan'), float('inf')])
    def test_invalid_score_rejected(self, score):
        with pytest.raises(InvalidScoreError):
            decay(score, 0, 10)

    def test_non_numeric_score_rejected(self):
        with pytest.raises(InvalidScoreError):
            decay("0.5", 0, 10)

    def test_deterministic(self):
        assert decay(0.37, 12, 4567) == decay(0.37, 12, 4567)

    def test_default_model_is_linear(self):
        assert isinstance(DEFAULT_DECAY, LinearDecay)


class TestDecayModels:
    @pytest.mark.parametrize("model", [LinearDecay(), ExponentialDecay(500), NoDecay()])
    def test_monotonic_non_increasing(self, model):
        values = [model.apply(0.8, 0, t) for t in (0, 1, 10, 100, 1000, 5000, 50000)]
        assert all(a >= b for a, b in zip(values, values[1:]))
        assert all(0.0 <= v <= 1.0 for v in values)

    def test_exponential_half_life(self):
        model = ExponentialDecay(half_life=100)
        assert decay(0.8, 0, 100, model) == pytest.approx(0.4)
        assert decay(0.8, 0, 200, model) == pytest.approx(0.2)

    def test_exponential_rejects_non_positive_half_life(self):
        with pytest.raises(ValueError):
            ExponentialDecay(0)

    def test_linear_rejects_negative_rate(self):
        with pytest.raises(ValueError):
            LinearDecay(rate=-0.001)

    def test_no_decay(self):
        assert decay(0.42, 0, 10 ** 9, NoDecay()) == 0.42

    def test_custom_rate(self):
        assert decay(1.0, 0, 10, LinearDecay(rate=0.01)) == pytest.approx(0.9)


class TestDecayFactory:
    def test_known_names(self):
        assert isinstance(get_decay_model('linear'), LinearDecay)
        assert isinstance(get_decay_model('Exponential'), ExponentialDecay)
        assert isinstance(get_decay_model('none'), NoDecay)

    def test_rate_is_passed_through(self):
        model = get_decay_model('linear', rate=0.5)
        assert model.rate == 0.5

    def test_unknown_name_falls_back_to_linear(self, caplog):
        with caplog.at_level(logging.WARNING, logger='trust.decay'):
            model = get_decay_model('quadratic')
        assert isinstance(model, LinearDecay)
        assert "quadratic" in caplog.text

    def test_factor_is_one_at_zero_elapsed(self):
        for name in ('linear', 'exponential', 'none'):
            assert math.isclose(get_decay_model(name).factor(0), 1.0)
