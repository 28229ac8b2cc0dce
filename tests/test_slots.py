"""Tests for bookable time generation."""
from datetime import time
from types import SimpleNamespace

import pytest

from cabinet.scheduling.slots import generate_bookable_times, merge_bookable_times


def slot(start, end):
    return SimpleNamespace(start_time=start, end_time=end)


def test_generates_half_hour_steps_before_end():
    times = list(generate_bookable_times(slot(time(9), time(12))))

    assert times == [time(9), time(9, 30), time(10), time(10, 30), time(11), time(11, 30)]


def test_generation_is_lazy():
    generator = generate_bookable_times(slot(time(9), time(12)))

    assert next(generator) == time(9)
    assert next(generator) == time(9, 30)


def test_generation_is_repeatable():
    window = slot(time(14), time(16))

    assert list(generate_bookable_times(window)) == list(generate_bookable_times(window))


def test_window_not_multiple_of_granularity_stops_before_end():
    assert list(generate_bookable_times(slot(time(9), time(10, 15)))) == [time(9), time(9, 30), time(10)]


def test_custom_granularity():
    times = list(generate_bookable_times(slot(time(9), time(10)), granularity=15))

    assert times == [time(9), time(9, 15), time(9, 30), time(9, 45)]


def test_window_reaching_end_of_day():
    times = list(generate_bookable_times(slot(time(23), time(23, 59))))

    assert times == [time(23), time(23, 30)]


def test_rejects_non_positive_granularity():
    with pytest.raises(ValueError):
        list(generate_bookable_times(slot(time(9), time(10)), granularity=0))


def test_merge_sorts_across_slots():
    afternoon = slot(time(14), time(15))
    morning = slot(time(9), time(10))

    assert merge_bookable_times([afternoon, morning]) == [time(9), time(9, 30), time(14), time(14, 30)]
