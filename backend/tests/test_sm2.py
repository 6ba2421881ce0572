"""Unit tests for SM-2 state update."""

import pytest

from flashdeck.srs.errors import InvalidInput
from flashdeck.srs.sm2 import (
    SM2State,
    adjust_ease_factor,
    apply_scaled_review,
    apply_sm2,
    base_interval,
    round_half_up,
    scale_interval,
)


def test_ef_clamped_to_minimum():
    state = SM2State(ease_factor=1.3, repetitions=2, interval_days=5)
    # Lowest passing quality would decrease EF, but it must remain >= 1.3
    new_state = apply_sm2(state, quality=3)
    assert new_state.ease_factor == pytest.approx(1.3)


def test_lapse_resets_repetitions_and_keeps_ease():
    state = SM2State(ease_factor=2.2, repetitions=5, interval_days=30)
    new_state = apply_sm2(state, quality=0)
    assert new_state.repetitions == 0
    assert new_state.interval_days == 1
    assert new_state.ease_factor == 2.2


def test_success_increments_repetitions_and_interval_rules():
    # First success
    state = SM2State(ease_factor=2.5, repetitions=0, interval_days=1)
    s1 = apply_sm2(state, quality=4)
    assert s1.repetitions == 1
    assert s1.interval_days == 1
    assert s1.ease_factor == pytest.approx(2.5)

    # Second success
    s2 = apply_sm2(s1, quality=4)
    assert s2.repetitions == 2
    assert s2.interval_days == 6

    # Third success grows with the repetition count: round(2 * 2.5)
    s3 = apply_sm2(s2, quality=4)
    assert s3.repetitions == 3
    assert s3.interval_days == 5

    s4 = apply_sm2(s3, quality=4)
    assert s4.interval_days == 8  # round(3 * 2.5) = round(7.5), half up


def test_interval_does_not_collapse_to_ease_factor():
    state = SM2State(ease_factor=2.5, repetitions=10, interval_days=40)
    assert apply_sm2(state, quality=5).interval_days == 26  # round(10 * 2.6)


def test_quality_out_of_range_raises():
    state = SM2State(ease_factor=2.5, repetitions=0, interval_days=1)
    with pytest.raises(ValueError):
        apply_sm2(state, quality=-1)
    with pytest.raises(InvalidInput):
        apply_sm2(state, quality=6)
    with pytest.raises(InvalidInput):
        apply_sm2(state, quality=True)


class TestAdjustEaseFactor:
    def test_three_level_adjustments(self):
        assert adjust_ease_factor(2.5, 2, center=3) == pytest.approx(2.5)
        assert adjust_ease_factor(2.5, 1, center=3) == pytest.approx(2.36)
        assert adjust_ease_factor(2.5, 0, center=3) == pytest.approx(2.18)

    def test_sm2_adjustments(self):
        assert adjust_ease_factor(2.5, 5, center=5) == pytest.approx(2.6)
        assert adjust_ease_factor(2.5, 4, center=5) == pytest.approx(2.5)
        assert adjust_ease_factor(2.5, 3, center=5) == pytest.approx(2.36)

    def test_floor(self):
        assert adjust_ease_factor(1.35, 0, center=3) == 1.3


class TestIntervals:
    def test_base_interval(self):
        assert base_interval(0, 2.5) == 1
        assert base_interval(1, 2.5) == 6
        assert base_interval(2, 2.5) == 5
        assert base_interval(4, 1.3) == 5  # round(5.2)

    def test_scale_interval_floors_and_clamps(self):
        assert scale_interval(6, 0.5) == 3
        assert scale_interval(7, 0.75) == 5
        assert scale_interval(1, 0.5) == 1
        assert scale_interval(1, 0.75) == 1
        assert scale_interval(9, 1.0) == 9

    def test_round_half_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(7.5) == 8
        assert round_half_up(7.49) == 7


class TestApplyScaledReview:
    def test_hard_still_advances_repetitions(self):
        state = SM2State(ease_factor=2.5, repetitions=1, interval_days=1)
        new_state = apply_scaled_review(state, quality=0, interval_scale=0.5)
        assert new_state.repetitions == 2
        assert new_state.interval_days == 3
        assert new_state.ease_factor == pytest.approx(2.18)

    def test_medium_uses_updated_ease(self):
        state = SM2State(ease_factor=2.5, repetitions=3, interval_days=5)
        new_state = apply_scaled_review(state, quality=1, interval_scale=0.75)
        # round(3 * 2.36) = 7, then floor(7 * 0.75) = 5
        assert new_state.interval_days == 5
        assert new_state.repetitions == 4


def test_interval_uses_ease_after_this_review():
    # EF drops to 2.36 first; the prior 2.5 would give round(7.5) = 8
    state = SM2State(ease_factor=2.5, repetitions=3, interval_days=8)
    new_state = apply_sm2(state, quality=3)
    assert new_state.ease_factor == pytest.approx(2.36)
    assert new_state.interval_days == 7  # round(3 * 2.36)
