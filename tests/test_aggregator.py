"""Tests for range, weekly and monthly aggregation."""

import asyncio
from datetime import date

import pytest

from src.shift_analytics.config import SuggestionType, settings
from src.shift_analytics.core.aggregator import PeriodAggregator
from src.shift_analytics.core.datasource import InMemoryScheduleStore
from src.shift_analytics.core.temporal import iter_dates
from src.shift_analytics.models import AnalyticsFilters, ConflictType, DayInput, Severity
from src.shift_analytics.utils.exceptions import ConfigurationError, DataInconsistencyError, ResourceLimitError

from tests.factories import MONDAY, make_employee, make_shift


class SlowEarlyDaysStore(InMemoryScheduleStore):
    """Earlier dates take longer to load, so completion order is reversed"""

    async def load_day(self, day, filters=None):
        await asyncio.sleep(0.001 * (30 - day.day))
        return await super().load_day(day, filters)


@pytest.fixture
def aggregator():
    return PeriodAggregator()


@pytest.fixture
def store(week_of_shifts, employees):
    return InMemoryScheduleStore(week_of_shifts, employees)


class TestRangeAnalytics:

    async def test_summary_matches_daily_totals(self, aggregator, store):
        result = await aggregator.analyze_range(store, date(2024, 6, 10), date(2024, 6, 16))

        assert result.period == "2024-06-10 to 2024-06-16"
        assert len(result.daily_breakdown) == 7
        assert result.summary.total_shifts == sum(d.total_shifts for d in result.daily_breakdown) == 10
        assert result.summary.total_hours == 50
        # Pool of three active employees counted on every day
        assert result.summary.total_employees == 21
        assert result.summary.average_utilization == 53.57
        assert result.summary.conflict_count == 0

    async def test_trends_are_date_ordered(self, aggregator, store):
        result = await aggregator.analyze_range(store, date(2024, 6, 10), date(2024, 6, 16))

        dates = [p.date for p in result.trends.coverage_trend]
        assert dates == list(iter_dates(date(2024, 6, 10), date(2024, 6, 16)))
        assert result.trends.coverage_trend[0].coverage == 75
        assert result.trends.utilization_trend[0].utilization == 75
        assert result.trends.conflict_trend[0].conflict_count == 0
        assert result.trends.coverage_trend[-1].coverage == 0

    async def test_concurrent_matches_sequential(self, aggregator, week_of_shifts, employees):
        start, end = date(2024, 6, 8), date(2024, 6, 16)
        slow_store = SlowEarlyDaysStore(week_of_shifts, employees)

        concurrent = await aggregator.collect_days(slow_store, start, end, max_concurrency=4)
        sequential = aggregator.analyze_days(slow_store.day_input(day) for day in iter_dates(start, end))

        assert [d.model_dump() for d in concurrent] == [d.model_dump() for d in sequential]
        assert [d.date for d in concurrent] == list(iter_dates(start, end))

    async def test_concurrency_limit_of_one(self, aggregator, store):
        limited = await aggregator.analyze_range(store, MONDAY, date(2024, 6, 14), max_concurrency=1)
        wide = await aggregator.analyze_range(store, MONDAY, date(2024, 6, 14), max_concurrency=16)

        assert limited.model_dump() == wide.model_dump()

    async def test_malformed_range_is_empty(self, aggregator, store):
        result = await aggregator.analyze_range(store, date(2024, 6, 16), date(2024, 6, 10))

        assert result.summary.total_shifts == 0
        assert result.summary.average_utilization == 0
        assert result.trends.coverage_trend == []
        assert result.daily_breakdown == []

    async def test_range_limit(self, store):
        aggregator = PeriodAggregator(max_range_days=7)

        with pytest.raises(ResourceLimitError) as exc_info:
            await aggregator.analyze_range(store, date(2024, 6, 1), date(2024, 6, 30))

        assert exc_info.value.max_days == 7
        assert exc_info.value.requested_days == 30
        assert exc_info.value.to_dict()["range"] == {
            "start_date": "2024-06-01",
            "end_date": "2024-06-30",
            "requested_days": 30,
            "max_days": 7,
        }

    async def test_zero_concurrency_rejected(self, aggregator, store):
        with pytest.raises(ConfigurationError) as exc_info:
            await aggregator.analyze_range(store, MONDAY, MONDAY, max_concurrency=0)

        assert exc_info.value.setting == "max_concurrency"
        assert exc_info.value.actual_value == 0

    async def test_misdated_source_rejected(self, aggregator, employees):
        class WrongDayStore(InMemoryScheduleStore):
            async def load_day(self, day, filters=None):
                return DayInput(date=day, shifts=self.shifts, employees=self.employees)

        store = WrongDayStore([make_shift("s", date(2024, 6, 11))], employees)

        with pytest.raises(DataInconsistencyError) as exc_info:
            await aggregator.analyze_range(store, MONDAY, MONDAY)

        assert exc_info.value.day == MONDAY
        assert exc_info.value.shift_ids == ["s"]

    async def test_breakdown_can_be_omitted(self, aggregator, store):
        result = await aggregator.analyze_range(
            store, MONDAY, date(2024, 6, 14), include_daily_breakdown=False
        )

        assert result.daily_breakdown is None
        assert len(result.trends.conflict_trend) == 5

    async def test_filters_narrow_shifts(self, aggregator, employees):
        shifts = [
            make_shift("north", assigned=["e1"], location="North Branch"),
            make_shift("south", assigned=["e2"], location="South Branch"),
        ]
        store = InMemoryScheduleStore(shifts, employees)

        result = await aggregator.analyze_range(
            store, MONDAY, MONDAY, filters=AnalyticsFilters(location="north")
        )

        [day] = result.daily_breakdown
        assert day.location == "north"
        assert [e.shift_id for e in day.role_coverage] == ["north"]


class TestWeeklyMonthly:

    async def test_week_is_seven_days(self, aggregator, store):
        result = await aggregator.analyze_week(store, MONDAY)

        assert result.period == "2024-06-10 to 2024-06-16"
        assert len(result.trends.coverage_trend) == 7

    async def test_month_covers_calendar_month(self, aggregator, store):
        result = await aggregator.analyze_month(store, 2024, 2)

        assert result.period == "2024-02-01 to 2024-02-29"
        assert len(result.daily_breakdown) == 29
        assert result.summary.total_shifts == 0


class TestCoverageOptimization:

    async def test_understaffed_roles(self, aggregator, store):
        result = await aggregator.analyze_coverage_optimization(store, MONDAY, date(2024, 6, 16))

        [staff] = result.role_coverage_metrics
        assert (staff.role, staff.required, staff.assigned, staff.gaps, staff.overlaps) == ("staff", 15, 10, 5, 0)
        assert staff.coverage == 66.67
        assert result.current_coverage == 66.67
        assert result.target_coverage == 95

        assert len(result.gaps) == 5
        assert {g.shift_id for g in result.gaps} == {f"pm-{i}" for i in range(5)}
        assert result.gaps[0].shortage == 1
        assert result.gaps[0].available_employees == ["E1 Tester", "E2 Tester"]

        types = [s.type for s in result.optimization_suggestions]
        assert types == [SuggestionType.HIRE, SuggestionType.TRAIN]
        assert "staff" in result.optimization_suggestions[0].description

    def test_overstaffed_role_suggests_reassign(self, aggregator, employees):
        day = aggregator.engine.analyze_day(
            MONDAY, [make_shift("s", assigned=["e1", "e2", "m1"])], employees
        )

        result = aggregator.optimize_coverage(MONDAY, MONDAY, [day])

        [suggestion] = result.optimization_suggestions
        assert suggestion.type == SuggestionType.REASSIGN
        assert suggestion.impact == settings.suggestion_impacts[SuggestionType.REASSIGN]
        assert suggestion.cost == settings.suggestion_costs[SuggestionType.REASSIGN]

    def test_gaps_largest_shortage_first(self, aggregator, employees):
        days = [
            aggregator.engine.analyze_day(MONDAY, [make_shift("mon", requirements=[("staff", 1)])], employees),
            aggregator.engine.analyze_day(
                date(2024, 6, 11),
                [
                    make_shift("tue-small", date(2024, 6, 11), requirements=[("staff", 2)]),
                    make_shift("tue-big", date(2024, 6, 11), requirements=[("staff", 3)]),
                ],
                employees,
            ),
        ]

        result = aggregator.optimize_coverage(MONDAY, date(2024, 6, 11), days)

        assert [(g.shift_id, g.shortage) for g in result.gaps] == [
            ("tue-big", 3), ("tue-small", 2), ("mon", 1),
        ]

    def test_balanced_roles_maintain(self, aggregator, employees):
        day = aggregator.engine.analyze_day(MONDAY, [make_shift("s", assigned=["e1"])], employees)

        result = aggregator.optimize_coverage(MONDAY, MONDAY, [day])

        assert [s.type for s in result.optimization_suggestions] == [SuggestionType.MAINTAIN]
        assert result.gaps == []

    def test_no_days_maintain(self, aggregator):
        result = aggregator.optimize_coverage(MONDAY, MONDAY, [])

        assert result.current_coverage == 0
        assert [s.type for s in result.optimization_suggestions] == [SuggestionType.MAINTAIN]


class TestConflictAnalysis:

    def test_counts_and_affected_entities(self, aggregator):
        employees = [make_employee("e1"), make_employee("m1", role="manager")]
        shifts = [
            make_shift("a", MONDAY, "09:00", "17:00", ["e1", "m1"]),
            make_shift("b", MONDAY, "12:00", "20:00", ["e1"]),
            make_shift("c", date(2024, 6, 11), "09:00", "17:00", ["m1"]),
        ]
        store = InMemoryScheduleStore(shifts, employees)
        days = aggregator.analyze_days(store.day_input(d) for d in iter_dates(MONDAY, date(2024, 6, 11)))

        result = aggregator.analyze_conflicts(MONDAY, date(2024, 6, 11), days)

        assert result.total_conflicts == 3
        assert result.critical_conflicts == 0
        counts = {(c.type, c.severity): c.count for c in result.conflict_types}
        assert counts == {
            (ConflictType.DOUBLE_BOOKING, Severity.HIGH): 1,
            (ConflictType.ROLE_MISMATCH, Severity.MEDIUM): 2,
        }
        assert result.affected_entities.shifts == ["a", "b", "c"]
        assert result.affected_entities.employees == ["e1", "m1"]
        assert [r.conflict_type for r in result.resolution_suggestions] == [
            ConflictType.DOUBLE_BOOKING, ConflictType.ROLE_MISMATCH,
        ]

    async def test_empty_range(self, aggregator, store):
        result = await aggregator.analyze_conflict_range(store, MONDAY, date(2024, 6, 14))

        assert result.total_conflicts == 0
        assert result.conflict_types == []
        assert result.resolution_suggestions == []
