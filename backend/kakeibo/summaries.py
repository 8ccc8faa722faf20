import calendar
from datetime import datetime, timezone as dt_timezone

from django.db.models import Sum
from django.db.models.functions import TruncMonth
from django.utils import timezone

from kakeibo.categories import EXPENSE_CATEGORIES, TransactionType, categories_for
from kakeibo.models import Transaction

CHART_COLORS = [
    "#FF6384",
    "#36A2EB",
    "#FFCE56",
    "#4BC0C0",
    "#9966FF",
    "#FF9F40",
    "#E7E9ED",
    "#8DDF3C",
    "#F178B4",
    "#6A2E35",
    "#C4D7F2",
    "#A2D4AB",
]

MONTHS_IN_CHART = 12


def _as_utc(now=None):
    return (now or timezone.now()).astimezone(dt_timezone.utc)


def shift_months(value, months):
    """
    Move `value` by whole calendar months, keeping the day of month.
    Days past the end of the target month clamp to its last day.
    """
    month_index = value.year * 12 + (value.month - 1) + months
    year, month_zero = divmod(month_index, 12)
    month = month_zero + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def one_month_before(now):
    return shift_months(now, -1)


def category_totals(transaction_type, since):
    """
    Sum amounts per category for one type since `since`.
    Categories outside the type's taxonomy are ignored; categories with no
    activity are absent. Keys follow taxonomy order.
    """
    allowed = categories_for(transaction_type)
    grouped = (
        Transaction.objects.filter(type=transaction_type, date__gte=since, category__in=allowed)
        .values("category")
        .annotate(total=Sum("amount"))
        .order_by()
    )
    totals = {row["category"]: row["total"] or 0 for row in grouped}
    return {category: totals[category] for category in allowed if category in totals}


def trailing_month_summary(now=None):
    now = _as_utc(now)
    since = one_month_before(now)
    return {
        TransactionType.EXPENSE.value: category_totals(TransactionType.EXPENSE, since),
        TransactionType.INCOME.value: category_totals(TransactionType.INCOME, since),
    }


def month_labels(now):
    """Twelve "YYYY-MM" labels ending with the month of `now`, oldest first."""
    first_of_month = now.replace(day=1)
    return [
        shift_months(first_of_month, offset - (MONTHS_IN_CHART - 1)).strftime("%Y-%m")
        for offset in range(MONTHS_IN_CHART)
    ]


def window_start(now):
    first = shift_months(now.replace(day=1), -(MONTHS_IN_CHART - 1))
    return datetime(first.year, first.month, 1, tzinfo=dt_timezone.utc)


def monthly_expense_rows(now):
    """(month label, category, total) rows for the chart window, month then category order."""
    grouped = (
        Transaction.objects.filter(
            type=TransactionType.EXPENSE,
            date__gte=window_start(now),
            category__in=EXPENSE_CATEGORIES,
        )
        .annotate(month=TruncMonth("date", tzinfo=dt_timezone.utc))
        .values("month", "category")
        .annotate(total=Sum("amount"))
        .order_by("month", "category")
    )
    for row in grouped:
        yield row["month"].strftime("%Y-%m"), row["category"], row["total"] or 0


def build_bar_chart(labels, rows):
    """
    Reshape grouped rows into Chart.js bar data.
    One dataset per category in first-seen order, zero-filled across `labels`;
    colors cycle through CHART_COLORS in that same order.
    """
    positions = {label: index for index, label in enumerate(labels)}
    series = {}
    for label, category, total in rows:
        data = series.setdefault(category, [0] * len(labels))
        index = positions.get(label)
        if index is not None:
            data[index] += int(total)

    datasets = []
    for index, (category, data) in enumerate(series.items()):
        datasets.append(
            {
                "label": category,
                "data": data,
                "backgroundColor": CHART_COLORS[index % len(CHART_COLORS)],
            }
        )
    return {"labels": list(labels), "datasets": datasets}


def monthly_expense_chart(now=None):
    now = _as_utc(now)
    return build_bar_chart(month_labels(now), monthly_expense_rows(now))
