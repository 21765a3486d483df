"""Tests for the this-week vs last-week comparison."""

from datetime import date, datetime

import pytest

from src.models.entities import Product, Sale
from src.models.enums import ProductType, TrendDirection
from src.services.weekly_comparison_service import weekly_comparison
from src.utils.calendar import WeekCalendar


class TestWeekCalendar:

    @pytest.mark.parametrize("today,monday", [
        (date(2025, 6, 9), date(2025, 6, 9)),     # Monday
        (date(2025, 6, 11), date(2025, 6, 9)),    # Wednesday
        (date(2025, 6, 14), date(2025, 6, 9)),    # Saturday
        (date(2025, 6, 15), date(2025, 6, 9)),    # Sunday belongs to the previous Monday
        (date(2025, 6, 16), date(2025, 6, 16)),
        (date(2025, 1, 1), date(2024, 12, 30)),   # across a year boundary
    ])
    def test_week_start(self, today, monday):
        assert WeekCalendar.week_start(today) == monday

    def test_week_window(self):
        window = WeekCalendar.week_of(datetime(2025, 6, 15, 22, 0))
        assert window.start == date(2025, 6, 9)
        assert window.end == date(2025, 6, 15)
        assert window.contains(date(2025, 6, 15))
        assert not window.contains(date(2025, 6, 16))

        previous = window.previous()
        assert previous.start == date(2025, 6, 2)
        assert previous.end == date(2025, 6, 8)

    def test_visit_days_mark_today(self, today):
        days = WeekCalendar.visit_days(today)
        assert [d[0] for d in days] == [1, 2, 3, 4, 5, 6]
        assert days[0][1] == "Senin"
        assert days[5][1] == "Sabtu"
        assert days[0][2] == date(2025, 6, 9)
        assert [d[3] for d in days] == [False, False, True, False, False, False]

    def test_no_visit_day_is_today_on_sunday(self):
        days = WeekCalendar.visit_days(date(2025, 6, 15))
        assert not any(is_today for _, _, _, is_today in days)

    def test_days_between_ignores_time_of_day(self):
        assert WeekCalendar.days_between(datetime(2025, 6, 11, 23, 0), datetime(2025, 6, 12, 1, 0)) == 1


class TestWeeklyComparison:

    def test_fixture_weeks(self, sales, products, today):
        comparison = weekly_comparison(sales, products, today)

        assert comparison.week_start == date(2025, 6, 9)
        assert comparison.week_end == date(2025, 6, 15)
        assert comparison.last_week_start == date(2025, 6, 2)
        assert comparison.last_week_end == date(2025, 6, 8)

        assert comparison.this_week.visited_stores == 2
        assert comparison.this_week.dd_achieved == 2
        assert comparison.this_week.fokus_achieved == 1
        assert comparison.last_week.visited_stores == 1
        assert comparison.last_week.dd_achieved == 0
        assert comparison.last_week.fokus_achieved == 1

    def test_deltas_and_trends(self, sales, products, today):
        comparison = weekly_comparison(sales, products, today)
        assert comparison.deltas() == {"visited_stores": 1, "dd_achieved": 2, "fokus_achieved": 0}
        trends = comparison.trends()
        assert trends["visited_stores"] == TrendDirection.UP
        assert trends["fokus_achieved"] == TrendDirection.FLAT

    def test_downward_trend(self):
        products = [Product(id="dd", name="Promo", type=ProductType.DD)]
        sales = [Sale(store_id="a", product_id="dd", date=datetime(2025, 6, 4, 10, 0))]
        comparison = weekly_comparison(sales, products, date(2025, 6, 11))
        assert comparison.deltas()["dd_achieved"] == -1
        assert comparison.trends()["dd_achieved"] == TrendDirection.DOWN

    def test_sunday_reference_uses_previous_monday(self, sales, products):
        comparison = weekly_comparison(sales, products, date(2025, 6, 15))
        assert comparison.week_start == date(2025, 6, 9)
        assert comparison.this_week.visited_stores == 2

    def test_to_dict(self, sales, products, today):
        payload = weekly_comparison(sales, products, today).to_dict()
        assert payload["week_start"] == "2025-06-09"
        assert payload["deltas"]["dd_achieved"] == 2
        assert payload["trends"]["dd_achieved"] == "up"
