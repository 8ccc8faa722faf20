import logging

from django.http import HttpRequest, HttpResponse
from django.shortcuts import render
from django.template.loader import render_to_string
from django.utils.html import json_script
from django.views.decorators.http import require_GET

from kakeibo.categories import TransactionType
from kakeibo.models import Transaction
from kakeibo.summaries import monthly_expense_chart, trailing_month_summary

logger = logging.getLogger(__name__)

BAR_CHART_ELEMENT_ID = "bar-chart-data"


def _summary_rows(totals):
    return [{"category": category, "total": total} for category, total in totals.items()]


def _bar_chart_script(chart):
    try:
        return json_script(chart, BAR_CHART_ELEMENT_ID)
    except Exception:
        logger.exception("Could not serialize the monthly expense chart")
        return json_script({}, BAR_CHART_ELEMENT_ID)


@require_GET
def dashboard(request: HttpRequest) -> HttpResponse:
    summary = trailing_month_summary()
    expense_totals = summary[TransactionType.EXPENSE.value]
    income_totals = summary[TransactionType.INCOME.value]
    return render(
        request,
        "kakeibo/index.html",
        {
            "expense_summary": _summary_rows(expense_totals),
            "income_summary": _summary_rows(income_totals),
            "expense_total": sum(expense_totals.values()),
            "income_total": sum(income_totals.values()),
        },
    )


@require_GET
def transaction_list(request: HttpRequest) -> HttpResponse:
    transactions = Transaction.objects.order_by("-date", "-id")
    if request.htmx:
        html = render_to_string(
            "kakeibo/components/transaction_table.html",
            {"transactions": transactions},
            request=request,
        )
        return HttpResponse(html)

    return render(
        request,
        "kakeibo/list.html",
        {
            "transactions": transactions,
            "bar_chart_json": _bar_chart_script(monthly_expense_chart()),
        },
    )
