"""Tests for cycle prediction service."""
from datetime import date, datetime, timezone

import pytest

from dalbit.models.period import Period
from dalbit.models.prediction import Confidence
from dalbit.services.exceptions import InvalidInputError
from dalbit.services.prediction import calculate_cycle_prediction, determine_confidence


def make_periods(*start_dates):
    """Build periods from ISO start dates."""
    return [Period(start_date=d) for d in start_dates]


def test_no_periods_gives_no_prediction():
    assert calculate_cycle_prediction([]) is None


def test_single_period_uses_default_cycle_length():
    prediction = calculate_cycle_prediction(make_periods("2025-01-01"))

    assert prediction is not None
    assert prediction.average_cycle_length == 28
    assert prediction.confidence == Confidence.LOW
    assert prediction.next_period_date == date(2025, 1, 29)


def test_two_periods_use_actual_interval():
    prediction = calculate_cycle_prediction(make_periods("2025-01-31", "2025-02-28"))

    assert prediction.average_cycle_length == 28
    assert prediction.confidence == Confidence.LOW


def test_average_rounds_half_up():
    # 28 and 31 day cycles average 29.5
    prediction = calculate_cycle_prediction(make_periods("2025-03-01", "2025-02-01", "2025-01-01"))
    assert prediction.average_cycle_length == 30
    assert prediction.confidence == Confidence.MEDIUM

    # 30 and 31 day cycles average 30.5
    prediction = calculate_cycle_prediction(make_periods("2025-01-01", "2025-01-31", "2025-03-03"))
    assert prediction.average_cycle_length == 31


def test_only_three_most_recent_intervals_are_used():
    periods = make_periods(
        "2025-05-01",  # 30 days
        "2025-04-01",  # 28 days
        "2025-03-04",  # 32 days
        "2025-01-31",  # 31 days, ignored
        "2025-01-01",
    )

    prediction = calculate_cycle_prediction(periods)

    assert prediction.average_cycle_length == 30


def test_implausible_intervals_are_ignored():
    prediction = calculate_cycle_prediction(make_periods("2025-06-01", "2025-01-01"))

    assert prediction.average_cycle_length == 28


def test_confidence_tiers():
    assert determine_confidence(1) == Confidence.LOW
    assert determine_confidence(2) == Confidence.LOW
    assert determine_confidence(3) == Confidence.MEDIUM
    assert determine_confidence(5) == Confidence.MEDIUM
    assert determine_confidence(6) == Confidence.HIGH

    periods = make_periods(
        "2025-06-01", "2025-05-04", "2025-04-06",
        "2025-03-09", "2025-02-09", "2025-01-12"
    )
    assert calculate_cycle_prediction(periods).confidence == Confidence.HIGH


def test_unsorted_input_uses_latest_period():
    prediction = calculate_cycle_prediction(make_periods("2025-01-01", "2025-03-01", "2025-02-01"))

    assert prediction.average_cycle_length == 30
    assert prediction.next_period_date == date(2025, 3, 31)


def test_ovulation_and_fertile_window():
    prediction = calculate_cycle_prediction(make_periods("2025-02-01", "2025-01-01"))

    # 31-day cycle: ovulation 17 days after the last start
    assert prediction.ovulation_date == date(2025, 2, 18)
    assert prediction.fertile_window_start == date(2025, 2, 13)
    assert prediction.fertile_window_end == date(2025, 2, 19)


def test_future_cycles_are_self_contained():
    prediction = calculate_cycle_prediction(make_periods("2025-01-01"))

    assert [c.cycle_number for c in prediction.future_cycles] == [1, 2, 3]

    first, second, third = prediction.future_cycles
    assert first.period_start == date(2025, 1, 29)
    assert first.period_end == date(2025, 2, 2)
    assert first.ovulation_date == date(2025, 2, 12)
    assert first.fertile_window_start == date(2025, 2, 7)
    assert first.fertile_window_end == date(2025, 2, 13)
    assert second.period_start == date(2025, 2, 26)
    assert second.ovulation_date == date(2025, 3, 12)
    assert third.period_start == date(2025, 3, 26)


@pytest.mark.parametrize("months, expected", [(0, 1), (1, 1), (3, 3), (5, 5), (12, 5)])
def test_prediction_horizon_is_clamped(months, expected):
    prediction = calculate_cycle_prediction(make_periods("2025-01-01"), prediction_months=months)

    assert len(prediction.future_cycles) == expected


def test_projected_period_length():
    prediction = calculate_cycle_prediction(make_periods("2025-01-01"), avg_period_length=7)

    first = prediction.future_cycles[0]
    assert first.period_end == date(2025, 2, 4)


@pytest.mark.parametrize("period_length", [0, -3])
def test_projected_periods_last_at_least_one_day(period_length):
    prediction = calculate_cycle_prediction(make_periods("2025-01-01"), avg_period_length=period_length)

    for cycle in prediction.future_cycles:
        assert cycle.period_end == cycle.period_start


def test_prediction_is_idempotent(regular_periods):
    first = calculate_cycle_prediction(regular_periods)
    second = calculate_cycle_prediction(regular_periods)

    assert first == second
    assert [p.start_date for p in regular_periods][0] == date(2025, 1, 1)


def test_deleted_periods_are_excluded():
    periods = make_periods("2025-01-01", "2025-01-29")
    periods.append(Period(
        start_date=date(2025, 2, 10),
        deleted_at=datetime(2025, 2, 11, tzinfo=timezone.utc)
    ))

    prediction = calculate_cycle_prediction(periods)

    assert prediction.next_period_date == date(2025, 2, 26)


def test_accepts_plain_mappings():
    prediction = calculate_cycle_prediction([
        {"start_date": "2025-01-01"},
        {"start_date": "2025-01-29", "end_date": "2025-02-02", "flow_intensity": "light"},
    ])

    assert prediction.average_cycle_length == 28


def test_rejects_malformed_dates():
    with pytest.raises(InvalidInputError):
        calculate_cycle_prediction([{"start_date": "2025/01/01"}])


def test_rejects_period_ending_before_start():
    with pytest.raises(InvalidInputError):
        calculate_cycle_prediction([{"start_date": "2025-01-05", "end_date": "2025-01-01"}])
