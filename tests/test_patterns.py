"""Tests for symptom pattern analysis."""
from datetime import date, timedelta

import pytest

from dalbit.models.period import Period
from dalbit.models.phase import CyclePhase
from dalbit.models.symptom import Symptom, SymptomType
from dalbit.services.exceptions import InvalidInputError
from dalbit.services.patterns import analyze_symptom_patterns, build_cycle_windows


def test_requires_three_periods(three_cycle_periods, menstrual_cramps):
    assert analyze_symptom_patterns(three_cycle_periods[:2], menstrual_cramps) == []


def test_requires_ten_symptoms(three_cycle_periods, menstrual_cramps):
    assert analyze_symptom_patterns(three_cycle_periods, menstrual_cramps[:9]) == []


def test_requires_three_valid_cycles(three_cycle_periods, menstrual_cramps):
    # Three periods only give two complete cycles
    assert analyze_symptom_patterns(three_cycle_periods[:3], menstrual_cramps) == []


def test_cycle_windows_skip_implausible_gaps(three_cycle_periods):
    periods = [Period(start_date=date(2024, 5, 1))] + three_cycle_periods

    windows = build_cycle_windows(periods)

    assert [w.length for w in windows] == [28, 28, 28]
    assert windows[0].start == date(2025, 1, 1)
    assert windows[-1].end == date(2025, 3, 26)


def test_detects_menstrual_cramps(three_cycle_periods, menstrual_cramps):
    insights = analyze_symptom_patterns(three_cycle_periods, menstrual_cramps)

    top = insights[0]
    assert top.symptom_type == SymptomType.CRAMPS
    assert top.phase == CyclePhase.MENSTRUAL
    assert top.sample_days == 84
    assert top.cycle_count == 3
    # 9 cramps days out of 15 menstrual days, 9 out of 84 overall
    assert top.probability == pytest.approx(10 / 17)
    assert top.baseline == pytest.approx(10 / 86)
    assert top.lift == pytest.approx(86 / 17)

    cramps_phases = [i.phase for i in insights if i.symptom_type == SymptomType.CRAMPS]
    assert cramps_phases == [CyclePhase.MENSTRUAL]
    assert [i.lift for i in insights] == sorted((i.lift for i in insights), reverse=True)
    assert all(i.lift >= 1.5 for i in insights)


def test_cycle_days_are_counted_from_each_cycle_start(three_cycle_periods, menstrual_cramps):
    """An implausible earlier gap must not shift the days of later cycles."""
    periods = [Period(start_date=date(2024, 5, 1))] + three_cycle_periods

    insights = analyze_symptom_patterns(periods, menstrual_cramps)

    assert insights[0].symptom_type == SymptomType.CRAMPS
    assert insights[0].phase == CyclePhase.MENSTRUAL
    assert insights[0].lift == pytest.approx(86 / 17)


def test_uniform_symptom_has_no_pattern(three_cycle_periods):
    """A symptom recorded every day has lift close to 1 in every phase."""
    start = date(2025, 1, 1)
    symptoms = [
        Symptom(date=start + timedelta(days=i), symptom_type=SymptomType.FATIGUE, severity=2)
        for i in range(84)
    ]

    assert analyze_symptom_patterns(three_cycle_periods, symptoms) == []

    every_phase = analyze_symptom_patterns(three_cycle_periods, symptoms, min_lift=0)
    assert {i.phase for i in every_phase} == set(CyclePhase)
    for insight in every_phase:
        assert insight.lift == pytest.approx(1.0, abs=0.15)


def test_symptoms_outside_cycles_are_ignored(three_cycle_periods, menstrual_cramps):
    late = [
        Symptom(date=date(2025, 4, 1) + timedelta(days=i), symptom_type=SymptomType.ACNE, severity=1)
        for i in range(5)
    ]

    insights = analyze_symptom_patterns(three_cycle_periods, menstrual_cramps + late)

    assert SymptomType.ACNE not in {i.symptom_type for i in insights}


def test_rejects_invalid_severity(three_cycle_periods, menstrual_cramps):
    records = [s.model_dump() for s in menstrual_cramps]
    records[0]["severity"] = -1

    with pytest.raises(InvalidInputError):
        analyze_symptom_patterns(three_cycle_periods, records)


def test_patterns_are_idempotent(three_cycle_periods, menstrual_cramps):
    first = analyze_symptom_patterns(three_cycle_periods, menstrual_cramps)
    second = analyze_symptom_patterns(three_cycle_periods, menstrual_cramps)

    assert first
    assert first == second
    assert [p.start_date for p in three_cycle_periods][0] == date(2025, 1, 1)
