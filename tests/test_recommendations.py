"""Tests for the surfable hours service and spot name cache."""

from datetime import datetime, timezone

import pytest

from surfcal.calendar.base import CalendarError
from surfcal.calendar.fake import FakeCalendarSource
from surfcal.models.calendar import BusyInterval
from surfcal.models.surf import AcceptanceCriteria, Rating, SurfableHour
from surfcal.providers.base import ProviderError
from surfcal.providers.fake import FakeForecastSource
from surfcal.recommendations.surfable_hours import (
    SpotNameCache,
    SurfableHoursService,
    group_by_day,
    group_by_spot,
)

from conftest import DAY, HOUR, T0, run

MALIBU = "5842041f4e65fad6a7708876"


def busy(start: int, end: int) -> BusyInterval:
    return BusyInterval(
        start=datetime.fromtimestamp(start, tz=timezone.utc),
        end=datetime.fromtimestamp(end, tz=timezone.utc),
    )


class TestSurfableHoursService:
    """Tests for SurfableHoursService."""

    def test_without_calendar_ids_conflict_unset(self, two_hour_source, empty_calendar):
        service = SurfableHoursService(two_hour_source, empty_calendar)
        hours = run(service.get_surfable_hours(["spot"], days=7, now=T0 - HOUR))
        assert len(hours) == 2
        assert all(h.calendar_conflict is None for h in hours)
        assert all("calendar_conflict" not in h.to_dict() for h in hours)
        assert empty_calendar.requested == []

    def test_empty_calendar_ids_treated_as_absent(self, two_hour_source, empty_calendar):
        service = SurfableHoursService(two_hour_source, empty_calendar)
        hours = run(
            service.get_surfable_hours(["spot"], days=7, now=T0 - HOUR, calendar_ids=[])
        )
        assert all(h.calendar_conflict is None for h in hours)

    def test_without_calendar_source_conflict_unset(self, two_hour_source):
        service = SurfableHoursService(two_hour_source)
        hours = run(
            service.get_surfable_hours(
                ["spot"], days=7, now=T0 - HOUR, calendar_ids=["me@example.com"]
            )
        )
        assert all(h.calendar_conflict is None for h in hours)

    def test_marks_conflicts(self, two_hour_source):
        calendar = FakeCalendarSource([busy(T0 + 1800, T0 + 2500)])
        service = SurfableHoursService(two_hour_source, calendar)
        hours = run(
            service.get_surfable_hours(
                ["spot"], days=7, now=T0 - HOUR, calendar_ids=["me@example.com"]
            )
        )
        assert [h.calendar_conflict for h in hours] == [True, False]
        assert calendar.requested == [["me@example.com"]]

    def test_no_busy_slots_marks_false(self, two_hour_source, empty_calendar):
        service = SurfableHoursService(two_hour_source, empty_calendar)
        hours = run(
            service.get_surfable_hours(["spot"], days=7, now=T0 - HOUR, calendar_ids=["c"])
        )
        assert [h.calendar_conflict for h in hours] == [False, False]

    def test_criteria_passed_through(self, two_hour_source):
        service = SurfableHoursService(two_hour_source)
        hours = run(
            service.get_surfable_hours(
                ["spot"],
                days=7,
                now=T0 - HOUR,
                criteria=AcceptanceCriteria(min_rating=Rating.GOOD),
            )
        )
        assert [h.condition for h in hours] == [Rating.GOOD]

    def test_calendar_failure_propagates(self, two_hour_source):
        calendar = FakeCalendarSource(error=CalendarError("calendar down"))
        service = SurfableHoursService(two_hour_source, calendar)
        with pytest.raises(CalendarError, match="calendar down"):
            run(service.get_surfable_hours(["spot"], now=T0 - HOUR, calendar_ids=["c"]))

    def test_forecast_failure_skips_calendar(self, two_hour_source, empty_calendar):
        two_hour_source.fail_on("get_ratings", ProviderError("nope", provider="fake"))
        service = SurfableHoursService(two_hour_source, empty_calendar)
        with pytest.raises(ProviderError):
            run(service.get_surfable_hours(["spot"], now=T0 - HOUR, calendar_ids=["c"]))
        assert empty_calendar.requested == []


class TestSpotNameCache:
    """Tests for SpotNameCache."""

    def test_looks_up_once(self, forecast_source: FakeForecastSource):
        cache = SpotNameCache(forecast_source)
        assert run(cache.get_name(MALIBU)) == "Malibu"
        assert run(cache.get_name(MALIBU)) == "Malibu"
        assert forecast_source.calls.count(("get_spot_info", MALIBU)) == 1

    def test_clear_forces_lookup(self, forecast_source: FakeForecastSource):
        cache = SpotNameCache(forecast_source)
        run(cache.get_name(MALIBU))
        cache.clear()
        assert MALIBU not in cache
        run(cache.get_name(MALIBU))
        assert forecast_source.calls.count(("get_spot_info", MALIBU)) == 2

    def test_falls_back_to_id(self, forecast_source: FakeForecastSource):
        forecast_source.fail_on("get_spot_info", ProviderError("down", provider="fake"))
        cache = SpotNameCache(forecast_source)
        assert run(cache.get_name("abc123")) == "abc123"
        assert "abc123" not in cache
        assert run(cache.display("abc123")) == "abc123"

    def test_display(self, forecast_source: FakeForecastSource):
        cache = SpotNameCache(forecast_source)
        assert run(cache.display(MALIBU)) == f"Malibu ({MALIBU})"


class TestGrouping:
    """Tests for grouping helpers."""

    def test_group_by_spot_keeps_first_seen_order(self):
        hours = [
            SurfableHour.starting_at(T0, "b", Rating.GOOD, 3),
            SurfableHour.starting_at(T0, "a", Rating.GOOD, 3),
            SurfableHour.starting_at(T0 + HOUR, "b", Rating.GOOD, 3),
        ]
        grouped = group_by_spot(hours)
        assert list(grouped) == ["b", "a"]
        assert len(grouped["b"]) == 2

    def test_group_by_day_sorted(self):
        hours = [
            SurfableHour.starting_at(T0 + DAY, "a", Rating.GOOD, 3),
            SurfableHour.starting_at(T0, "a", Rating.GOOD, 3),
        ]
        grouped = group_by_day(hours)
        assert len(grouped) == 2
        days = list(grouped)
        assert days == sorted(days)
        assert grouped[days[0]][0].start_time == T0
