"""Tests for calendar conflict marking."""

from datetime import datetime, timezone

from surfcal.models.calendar import BusyInterval
from surfcal.models.surf import Rating, SurfableHour
from surfcal.rules.availability import conflicts_with_busy_intervals, mark_conflicts

from conftest import HOUR, T0


def at(timestamp: int) -> datetime:
    return datetime.fromtimestamp(timestamp, tz=timezone.utc)


def busy(start: int, end: int) -> BusyInterval:
    return BusyInterval(start=at(start), end=at(end))


def hour(start: int = T0) -> SurfableHour:
    return SurfableHour.starting_at(start, "spot", Rating.GOOD, 3.0)


class TestConflicts:
    """Tests for the half-open overlap check."""

    def test_busy_starting_at_hour_end_is_free(self):
        assert conflicts_with_busy_intervals(hour(), [busy(T0 + HOUR, T0 + 2 * HOUR)]) is False

    def test_busy_ending_at_hour_start_is_free(self):
        assert conflicts_with_busy_intervals(hour(), [busy(T0 - HOUR, T0)]) is False

    def test_busy_inside_hour_conflicts(self):
        assert conflicts_with_busy_intervals(hour(), [busy(T0 + 1800, T0 + 2000)]) is True

    def test_busy_covering_hour_conflicts(self):
        assert conflicts_with_busy_intervals(hour(), [busy(T0 - HOUR, T0 + 2 * HOUR)]) is True

    def test_partial_overlap_conflicts(self):
        assert conflicts_with_busy_intervals(hour(), [busy(T0 + HOUR - 1, T0 + 2 * HOUR)]) is True

    def test_inverted_interval_never_conflicts(self):
        assert conflicts_with_busy_intervals(hour(), [busy(T0 + 2000, T0 + 1800)]) is False

    def test_zero_length_interval_never_conflicts(self):
        assert conflicts_with_busy_intervals(hour(), [busy(T0 + 1800, T0 + 1800)]) is False

    def test_inverted_interval_does_not_hide_real_conflict(self):
        slots = [busy(T0 + 2000, T0 + 1800), busy(T0 + 10, T0 + 20)]
        assert conflicts_with_busy_intervals(hour(), slots) is True

    def test_other_timezones_compare_as_instants(self):
        from datetime import timedelta

        tz = timezone(timedelta(hours=-8))
        slot = BusyInterval(
            start=at(T0 + 1800).astimezone(tz), end=at(T0 + 2000).astimezone(tz)
        )
        assert conflicts_with_busy_intervals(hour(), [slot]) is True


class TestMarkConflicts:
    """Tests for mark_conflicts."""

    def test_marks_only_overlapping_hours(self):
        hours = [hour(T0), hour(T0 + HOUR)]
        marked = mark_conflicts(hours, [busy(T0 + 1800, T0 + 2500)])
        assert [h.calendar_conflict for h in marked] == [True, False]

    def test_empty_busy_list_marks_all_free(self):
        marked = mark_conflicts([hour(T0), hour(T0 + HOUR)], [])
        assert [h.calendar_conflict for h in marked] == [False, False]

    def test_order_and_count_preserved(self):
        hours = [hour(T0 + 2 * HOUR), hour(T0), hour(T0 + HOUR)]
        marked = mark_conflicts(hours, [busy(T0, T0 + 3 * HOUR)])
        assert [h.start_time for h in marked] == [h.start_time for h in hours]
        assert all(h.calendar_conflict for h in marked)

    def test_inputs_not_mutated(self):
        hours = [hour(T0)]
        slots = [busy(T0, T0 + HOUR)]
        mark_conflicts(hours, slots)
        assert hours[0].calendar_conflict is None
        assert len(slots) == 1

    def test_idempotent(self):
        hours = [hour(T0), hour(T0 + HOUR)]
        slots = [busy(T0 + 1800, T0 + 2500)]
        assert mark_conflicts(hours, slots) == mark_conflicts(hours, slots)
        assert mark_conflicts(mark_conflicts(hours, slots), slots) == mark_conflicts(hours, slots)

    def test_inverted_interval_marks_free(self):
        marked = mark_conflicts([hour(T0)], [busy(T0 + 2000, T0 + 1800)])
        assert marked[0].calendar_conflict is False

    def test_empty_hours(self):
        assert mark_conflicts([], [busy(T0, T0 + HOUR)]) == []
