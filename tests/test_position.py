import pytest

from confluence.core.models import LevelSet, PositionLabel
from confluence.signals.position import classify_position


def test_price_on_resistance_is_at_resistance(session_levels):
    position = classify_position(24616.32, session_levels)
    assert position.label == PositionLabel.AT_RESISTANCE
    assert position.nearest_resistance == 24616.32
    assert position.nearest_support == 24427.99


def test_price_just_above_support(session_levels):
    position = classify_position(24430.0, session_levels)
    assert position.label == PositionLabel.AT_SUPPORT
    assert position.nearest_support == 24427.99
    assert position.nearest_resistance == 24572.10


@pytest.mark.parametrize(
    "price, label",
    [(24520.0, PositionLabel.NEAR_RESISTANCE), (24480.0, PositionLabel.NEAR_SUPPORT)],
)
def test_between_levels_picks_closer_side(session_levels, price, label):
    assert classify_position(price, session_levels).label == label


def test_resistance_checked_before_support():
    levels = LevelSet(
        reference_high=100.0,
        reference_low=100.0,
        resistance=(100.05, 101.0, 102.0, 103.0),
        support=(99.98, 99.0, 98.0, 97.0),
    )
    # Support is closer, but both are inside the 0.1% band.
    assert classify_position(100.0, levels).label == PositionLabel.AT_RESISTANCE


def test_price_above_every_resistance_falls_back_to_r1(session_levels):
    position = classify_position(25000.0, session_levels)
    assert position.nearest_resistance == session_levels.r1
    assert position.nearest_support == session_levels.s1
    assert position.label == PositionLabel.NEAR_RESISTANCE


def test_price_below_every_support_falls_back_to_s4(session_levels):
    position = classify_position(24000.0, session_levels)
    assert position.nearest_resistance == session_levels.r1
    assert position.nearest_support == session_levels.s4
    assert position.label == PositionLabel.NEAR_SUPPORT


def test_nearest_support_is_highest_level_below_price(session_levels):
    position = classify_position(24350.0, session_levels)
    assert position.nearest_support == session_levels.s3
    assert position.nearest_resistance == session_levels.r1


@pytest.mark.parametrize("price", [23000.0, 24121.31, 24300.0, 24500.0, 24572.1, 24700.0, 26000.0])
def test_always_one_of_four_labels(session_levels, price):
    assert classify_position(price, session_levels).label in set(PositionLabel)
