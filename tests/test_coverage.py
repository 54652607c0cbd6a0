"""Tests for role coverage calculation."""

import pytest

from src.shift_analytics.core.coverage import CoverageCalculator, coverage_percentage

from tests.factories import MONDAY, make_employee, make_shift


class TestCoveragePercentage:

    def test_nothing_required_is_fully_covered(self):
        assert coverage_percentage(0, 0) == 100
        assert coverage_percentage(4, 0) == 100

    def test_rounds_half_up(self):
        assert coverage_percentage(5, 3) == 167
        assert coverage_percentage(1, 8) == 13   # 12.5
        assert coverage_percentage(2, 3, 2) == 66.67


class TestCoverageCalculator:

    @pytest.fixture
    def calculator(self):
        return CoverageCalculator(decimal_places=0)

    def test_overstaffed_line(self, calculator):
        shift = make_shift("s1", assigned=["a", "b", "c", "d", "e"], requirements=[("staff", 3)])

        [entry] = calculator.calculate([shift], [])

        assert entry.required == 3
        assert entry.assigned == 5
        assert entry.coverage == 167
        assert entry.gaps == 0
        assert entry.overlaps == 2
        assert entry.utilization == 1.67

    def test_zero_required_line(self, calculator):
        shift = make_shift("s1", requirements=[("staff", 0)])

        [entry] = calculator.calculate([shift], [])

        assert entry.coverage == 100
        assert entry.gaps == 0
        assert entry.overlaps == 0
        assert entry.utilization == 0

    def test_gaps_and_overlaps_are_exclusive(self, calculator):
        for assigned in range(6):
            shift = make_shift("s", assigned=[f"e{i}" for i in range(assigned)], requirements=[("staff", 3)])
            [entry] = calculator.calculate([shift], [])
            assert not (entry.gaps > 0 and entry.overlaps > 0)
            assert entry.gaps == max(0, 3 - assigned)

    def test_one_entry_per_requirement_line_in_order(self, calculator):
        shifts = [
            make_shift("s1", assigned=["e1"], requirements=[("staff", 1), ("manager", 1)]),
            make_shift("s2", assigned=["e1"], requirements=[("staff", 2)]),
        ]

        entries = calculator.calculate(shifts, [])

        assert [(e.shift_id, e.role) for e in entries] == [
            ("s1", "staff"), ("s1", "manager"), ("s2", "staff"),
        ]
        # Assigned counts the whole shift on every line
        assert [e.assigned for e in entries] == [1, 1, 1]

    def test_same_employee_counted_on_each_shift(self, calculator):
        shifts = [
            make_shift("s1", assigned=["e1"]),
            make_shift("s2", start="18:00", end="22:00", assigned=["e1"]),
        ]

        entries = calculator.calculate(shifts, [])

        assert sum(e.assigned for e in entries) == 2

    def test_candidates_are_employees_of_the_role(self, calculator):
        employees = [
            make_employee("e1", role="staff", total_hours_worked=12),
            make_employee("m1", role="manager"),
        ]
        shift = make_shift("s1", requirements=[("staff", 1)])

        [entry] = calculator.calculate([shift], employees)

        assert [c.id for c in entry.employees] == ["e1"]
        assert entry.employees[0].name == "E1 Tester"
        assert entry.employees[0].total_hours == 12

    def test_entry_names_its_shift(self, calculator):
        shift = make_shift("s1", start="07:30", end="15:30")

        [entry] = calculator.calculate([shift], [])

        assert entry.shift_date == MONDAY
        assert entry.start_time.strftime("%H:%M") == "07:30"
        assert entry.end_time.strftime("%H:%M") == "15:30"

    def test_no_shifts_no_entries(self, calculator):
        assert calculator.calculate([], [make_employee("e1")]) == []
