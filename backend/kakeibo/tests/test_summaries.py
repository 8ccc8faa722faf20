from datetime import datetime, timedelta, timezone as dt_timezone

from django.test import SimpleTestCase, TestCase

from kakeibo.models import Transaction
from kakeibo.summaries import (
    CHART_COLORS,
    build_bar_chart,
    category_totals,
    month_labels,
    monthly_expense_chart,
    monthly_expense_rows,
    one_month_before,
    shift_months,
    trailing_month_summary,
    window_start,
)

# September has 30 days, so one calendar month back from here is exactly 30 days.
NOW = datetime(2026, 10, 19, 12, 0, tzinfo=dt_timezone.utc)


def _create(date, category, amount, type="expense"):
    return Transaction.objects.create(date=date, type=type, category=category, amount=amount)


class MonthArithmeticTests(SimpleTestCase):
    def test_shift_months_keeps_day(self):
        self.assertEqual(shift_months(datetime(2026, 1, 15), -1), datetime(2025, 12, 15))
        self.assertEqual(shift_months(datetime(2026, 10, 19), -11), datetime(2025, 11, 19))
        self.assertEqual(shift_months(datetime(2026, 11, 30), 2), datetime(2027, 1, 30))

    def test_shift_months_clamps_to_month_end(self):
        self.assertEqual(shift_months(datetime(2026, 3, 31), -1), datetime(2026, 2, 28))
        self.assertEqual(shift_months(datetime(2024, 3, 31), -1), datetime(2024, 2, 29))
        self.assertEqual(shift_months(datetime(2026, 5, 31), -1), datetime(2026, 4, 30))

    def test_one_month_before(self):
        self.assertEqual(one_month_before(NOW), datetime(2026, 9, 19, 12, 0, tzinfo=dt_timezone.utc))

    def test_month_labels(self):
        labels = month_labels(NOW)
        self.assertEqual(len(labels), 12)
        self.assertEqual(labels[0], "2025-11")
        self.assertEqual(labels[-1], "2026-10")
        self.assertEqual(labels, sorted(labels))
        self.assertEqual(len(set(labels)), 12)

    def test_month_labels_at_month_end(self):
        labels = month_labels(datetime(2026, 1, 31, tzinfo=dt_timezone.utc))
        self.assertEqual(labels[0], "2025-02")
        self.assertEqual(labels[1], "2025-03")
        self.assertEqual(labels[-1], "2026-01")
        self.assertEqual(len(set(labels)), 12)

    def test_window_start(self):
        self.assertEqual(window_start(NOW), datetime(2025, 11, 1, tzinfo=dt_timezone.utc))


class TrailingMonthSummaryTests(TestCase):
    def test_window_boundary(self):
        _create(NOW - timedelta(days=31), "食費", 100)
        _create(NOW - timedelta(days=29), "食費", 200)
        _create(NOW - timedelta(days=1), "食費", 300)
        summary = trailing_month_summary(now=NOW)
        self.assertEqual(summary["expense"], {"食費": 500})

    def test_split_by_type_and_grouped_by_category(self):
        _create(NOW - timedelta(days=2), "娯楽", 4000)
        _create(NOW - timedelta(days=3), "家賃", 80000)
        _create(NOW - timedelta(days=4), "娯楽", 1000)
        _create(NOW - timedelta(days=5), "給与", 300000, type="income")
        _create(NOW - timedelta(days=6), "販売", 5000, type="income")
        summary = trailing_month_summary(now=NOW)
        self.assertEqual(summary["expense"], {"家賃": 80000, "娯楽": 5000})
        self.assertEqual(list(summary["expense"]), ["家賃", "娯楽"])
        self.assertEqual(summary["income"], {"給与": 300000, "販売": 5000})

    def test_zero_activity_categories_are_absent(self):
        summary = trailing_month_summary(now=NOW)
        self.assertEqual(summary, {"expense": {}, "income": {}})

    def test_excludes_deleted_and_off_taxonomy_rows(self):
        _create(NOW - timedelta(days=1), "食費", 100).delete()
        _create(NOW - timedelta(days=1), "給与", 999)
        _create(NOW - timedelta(days=1), "食費", 700, type="income")
        self.assertEqual(category_totals("expense", one_month_before(NOW)), {})
        self.assertEqual(category_totals("income", one_month_before(NOW)), {})


class MonthlyExpenseChartTests(TestCase):
    def test_first_and_last_month_populated(self):
        _create(datetime(2025, 11, 5, tzinfo=dt_timezone.utc), "食費", 1000)
        _create(datetime(2026, 10, 3, tzinfo=dt_timezone.utc), "食費", 500)
        _create(datetime(2026, 10, 10, tzinfo=dt_timezone.utc), "食費", 250)
        chart = monthly_expense_chart(now=NOW)

        self.assertEqual(len(chart["labels"]), 12)
        self.assertEqual(chart["labels"][-1], "2026-10")
        self.assertEqual(len(chart["datasets"]), 1)
        dataset = chart["datasets"][0]
        self.assertEqual(dataset["label"], "食費")
        self.assertEqual(dataset["data"], [1000] + [0] * 10 + [750])
        self.assertEqual(dataset["backgroundColor"], CHART_COLORS[0])

    def test_rows_outside_window_or_filters_are_ignored(self):
        _create(datetime(2025, 10, 31, 23, 59, tzinfo=dt_timezone.utc), "食費", 1)
        _create(datetime(2026, 5, 1, tzinfo=dt_timezone.utc), "給与", 2, type="income")
        _create(datetime(2026, 5, 1, tzinfo=dt_timezone.utc), "給与", 3)
        _create(datetime(2026, 5, 1, tzinfo=dt_timezone.utc), "美容", 4).delete()
        self.assertEqual(list(monthly_expense_rows(NOW)), [])
        chart = monthly_expense_chart(now=NOW)
        self.assertEqual(chart["datasets"], [])
        self.assertEqual(len(chart["labels"]), 12)

    def test_rows_are_ordered_by_month(self):
        _create(datetime(2026, 1, 2, tzinfo=dt_timezone.utc), "家賃", 80000)
        _create(datetime(2025, 12, 2, tzinfo=dt_timezone.utc), "交通費", 1200)
        rows = list(monthly_expense_rows(NOW))
        self.assertEqual(rows, [("2025-12", "交通費", 1200), ("2026-01", "家賃", 80000)])
        chart = monthly_expense_chart(now=NOW)
        self.assertEqual([ds["label"] for ds in chart["datasets"]], ["交通費", "家賃"])


class BuildBarChartTests(SimpleTestCase):
    labels = ["2026-08", "2026-09", "2026-10"]

    def test_first_seen_order_and_colors(self):
        rows = [("2026-09", "娯楽", 1), ("2026-10", "食費", 2), ("2026-10", "娯楽", 3)]
        chart = build_bar_chart(self.labels, rows)
        self.assertEqual(chart["labels"], self.labels)
        self.assertEqual(
            chart["datasets"],
            [
                {"label": "娯楽", "data": [0, 1, 3], "backgroundColor": "#FF6384"},
                {"label": "食費", "data": [0, 0, 2], "backgroundColor": "#36A2EB"},
            ],
        )

    def test_colors_cycle_through_palette(self):
        rows = [("2026-10", f"category-{index}", index) for index in range(14)]
        datasets = build_bar_chart(self.labels, rows)["datasets"]
        self.assertEqual(datasets[12]["backgroundColor"], CHART_COLORS[0])
        self.assertEqual(datasets[13]["backgroundColor"], CHART_COLORS[1])

    def test_unknown_month_keeps_zero_filled_series(self):
        chart = build_bar_chart(self.labels, [("2020-01", "食費", 5)])
        self.assertEqual(chart["datasets"][0]["data"], [0, 0, 0])

    def test_no_rows(self):
        self.assertEqual(build_bar_chart(self.labels, []), {"labels": self.labels, "datasets": []})
