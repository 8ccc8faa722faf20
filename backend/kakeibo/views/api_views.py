import logging

from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods

from kakeibo.forms import TransactionForm, bind_update, form_error_message
from kakeibo.models import Transaction
from kakeibo.views.utils import (
    NOT_FOUND_MESSAGE,
    InvalidPayload,
    json_data,
    json_error,
    parse_json_body,
)

logger = logging.getLogger(__name__)


@csrf_exempt
@require_http_methods(["GET", "POST"])
def transaction_collection(request):
    if request.method == "POST":
        return _create_transaction(request)
    transactions = Transaction.objects.all()
    return json_data([txn.to_dict() for txn in transactions])


@csrf_exempt
@require_http_methods(["GET", "PUT", "DELETE"])
def transaction_detail(request, pk):
    try:
        transaction = Transaction.objects.get(pk=pk)
    except Transaction.DoesNotExist:
        return json_error(NOT_FOUND_MESSAGE, status=404)

    if request.method == "PUT":
        return _update_transaction(request, transaction)
    if request.method == "DELETE":
        transaction.delete()
        logger.info("Soft-deleted transaction %s", transaction.pk)
        return json_data(True)
    return json_data(transaction.to_dict())


def _create_transaction(request):
    try:
        payload = parse_json_body(request)
    except InvalidPayload as exc:
        logger.warning("Rejected transaction payload: %s", exc)
        return json_error(str(exc))

    form = TransactionForm(payload)
    if not form.is_valid():
        message = form_error_message(form)
        logger.warning("Rejected transaction: %s", message)
        return json_error(message)

    transaction = form.save()
    logger.info(
        "Created transaction %s (%s %s %s)",
        transaction.pk,
        transaction.type,
        transaction.category,
        transaction.amount,
    )
    return json_data(transaction.to_dict())


def _update_transaction(request, transaction):
    try:
        payload = parse_json_body(request)
    except InvalidPayload as exc:
        logger.warning("Rejected update for transaction %s: %s", transaction.pk, exc)
        return json_error(str(exc))

    form = bind_update(transaction, payload)
    if not form.is_valid():
        message = form_error_message(form)
        logger.warning("Rejected update for transaction %s: %s", transaction.pk, message)
        return json_error(message)

    transaction = form.save(commit=False)
    if form.present_fields:
        transaction.save(update_fields=[*form.present_fields, "updated_at"])
    logger.info("Updated transaction %s fields=%s", transaction.pk, ",".join(form.present_fields) or "-")
    return json_data(transaction.to_dict())
