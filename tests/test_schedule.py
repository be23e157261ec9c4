"""Tests for cash-flow schedule generation."""

from datetime import date

import pytest

from ytmlib.bond import (
    InvalidFrequency,
    generate_schedule,
    payouts_by_year,
    schedule_for_terms,
    schedule_frame,
)
from ytmlib.bond.schedule import SCHEDULE_COLUMNS, payment_dates


class TestGenerateSchedule:
    def test_two_year_monthly_bond(self, evaluation_date):
        events = generate_schedule(date(2026, 1, 15), 1000.0, 9.0, 12, evaluation_date)
        assert len(events) == 24
        assert all(ev.interest_amount == pytest.approx(7.5) for ev in events)
        assert events[0].date == date(2024, 2, 15)
        assert events[-1].date == date(2026, 1, 15)
        assert events[-1].principal_amount == 1000.0
        assert all(ev.principal_amount == 0.0 for ev in events[:-1])

    def test_dates_ascending(self, evaluation_date):
        events = generate_schedule(date(2030, 6, 30), 1000.0, 7.0, 2, evaluation_date)
        dates = [ev.date for ev in events]
        assert dates == sorted(dates)
        assert len(set(dates)) == len(dates)

    @pytest.mark.parametrize("frequency", [1, 2, 4, 12])
    def test_event_count_matches_periods(self, evaluation_date, frequency):
        events = generate_schedule(date(2029, 1, 15), 1000.0, 6.0, frequency, evaluation_date)
        assert len(events) == 5 * frequency

    def test_interest_reconciles_with_coupon(self, evaluation_date):
        events = generate_schedule(date(2027, 1, 15), 500.0, 8.0, 4, evaluation_date)
        total_interest = sum(ev.interest_amount for ev in events)
        assert total_interest == pytest.approx(500.0 * 0.08 / 4 * len(events))

    def test_quantity_scales_amounts(self, evaluation_date):
        events = generate_schedule(date(2026, 1, 15), 1000.0, 9.0, 12, evaluation_date, quantity=3)
        assert events[0].interest_amount == pytest.approx(22.5)
        assert events[-1].principal_amount == 3000.0

    def test_zero_coupon(self, evaluation_date):
        events = generate_schedule(date(2026, 1, 15), 1000.0, 0.0, 1, evaluation_date)
        assert [ev.interest_amount for ev in events] == [0.0, 0.0]
        assert events[-1].principal_amount == 1000.0

    def test_total_property(self, evaluation_date):
        events = generate_schedule(date(2026, 1, 15), 1000.0, 9.0, 12, evaluation_date)
        assert events[-1].total == pytest.approx(1007.5)


class TestEdgeCases:
    def test_maturity_on_evaluation_date(self, evaluation_date):
        assert generate_schedule(evaluation_date, 1000.0, 9.0, 12, evaluation_date) == []

    def test_maturity_in_past(self, evaluation_date):
        assert generate_schedule(date(2023, 6, 1), 1000.0, 9.0, 12, evaluation_date) == []

    def test_final_period_pays_coupon_and_principal(self):
        events = generate_schedule(date(2024, 2, 10), 1000.0, 12.0, 12, date(2024, 1, 20))
        assert len(events) == 1
        assert events[0].date == date(2024, 2, 10)
        assert events[0].interest_amount == pytest.approx(10.0)
        assert events[0].principal_amount == 1000.0

    def test_annual_bond_in_final_period(self):
        events = generate_schedule(date(2024, 9, 15), 1000.0, 9.0, 1, date(2024, 1, 15))
        assert len(events) == 1
        assert events[0].interest_amount == pytest.approx(90.0)
        assert events[0].principal_amount == 1000.0

    def test_previous_coupon_on_evaluation_date_is_excluded(self):
        # 2024-01-10 is not strictly after the evaluation date
        events = generate_schedule(date(2024, 2, 10), 1000.0, 9.0, 12, date(2024, 1, 10))
        assert len(events) == 1
        assert events[0].interest_amount == pytest.approx(7.5)

    def test_two_remaining_dates_keep_coupons(self):
        events = generate_schedule(date(2024, 3, 10), 1000.0, 12.0, 12, date(2024, 1, 20))
        assert [ev.date for ev in events] == [date(2024, 2, 10), date(2024, 3, 10)]
        assert [ev.interest_amount for ev in events] == [pytest.approx(10.0)] * 2

    @pytest.mark.parametrize("frequency", [0, -1, 5, 7])
    def test_invalid_frequency(self, evaluation_date, frequency):
        with pytest.raises(InvalidFrequency):
            generate_schedule(date(2026, 1, 15), 1000.0, 9.0, frequency, evaluation_date)

    def test_invalid_amounts(self, evaluation_date):
        with pytest.raises(ValueError):
            generate_schedule(date(2026, 1, 15), 0.0, 9.0, 12, evaluation_date)
        with pytest.raises(ValueError):
            generate_schedule(date(2026, 1, 15), 1000.0, -1.0, 12, evaluation_date)
        with pytest.raises(ValueError):
            generate_schedule(date(2026, 1, 15), 1000.0, 9.0, 12, evaluation_date, quantity=0)


class TestMonthEndDates:
    def test_month_end_clamping(self):
        dates = payment_dates(date(2025, 8, 31), 4, date(2024, 12, 1))
        assert dates == [date(2025, 2, 28), date(2025, 5, 31), date(2025, 8, 31)]

    def test_no_drift_after_short_month(self):
        # counted from maturity, so November keeps the 30th after February's 28th
        dates = payment_dates(date(2025, 8, 31), 4, date(2024, 11, 1))
        assert dates[0] == date(2024, 11, 30)

    def test_leap_day_maturity(self):
        dates = payment_dates(date(2024, 2, 29), 1, date(2021, 6, 1))
        assert dates == [date(2022, 2, 28), date(2023, 2, 28), date(2024, 2, 29)]

    def test_string_dates_accepted(self):
        assert payment_dates("2024-03-15", 12, "2024-01-20") == [date(2024, 2, 15), date(2024, 3, 15)]


class TestTabularViews:
    def test_schedule_frame(self, monthly_terms, evaluation_date):
        frame = schedule_frame(schedule_for_terms(monthly_terms, evaluation_date))
        assert list(frame.columns) == SCHEDULE_COLUMNS
        assert len(frame) == 24
        assert frame["total"].iloc[-1] == pytest.approx(1007.5)

    def test_empty_frame(self):
        frame = schedule_frame([])
        assert frame.empty
        assert list(frame.columns) == SCHEDULE_COLUMNS

    def test_payouts_by_year(self, monthly_terms, evaluation_date):
        yearly = payouts_by_year(schedule_for_terms(monthly_terms, evaluation_date))
        assert list(yearly.index) == [2024, 2025, 2026]
        assert yearly.loc[2024, "interest"] == pytest.approx(82.5)
        assert yearly.loc[2025, "interest"] == pytest.approx(90.0)
        assert yearly.loc[2026, "principal"] == pytest.approx(1000.0)
        assert yearly.loc[2026, "total"] == pytest.approx(1007.5)

    def test_payouts_by_year_empty(self):
        assert payouts_by_year([]).empty
