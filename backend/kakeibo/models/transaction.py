from datetime import timezone as dt_timezone

from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone

from kakeibo.categories import TransactionType, check_category


def _utc_isoformat(value):
    if value is None:
        return None
    return value.astimezone(dt_timezone.utc).isoformat()


class ActiveTransactionManager(models.Manager):
    """Hides soft-deleted rows from normal reads."""

    def get_queryset(self):
        return super().get_queryset().filter(deleted_at__isnull=True)


class Transaction(models.Model):
    """
    One recorded income or expense event.
    Rules:
    - category must belong to the taxonomy of its type (checked in clean/forms, not by the database)
    - amount is a positive whole number in the ledger's currency
    - delete() is soft: the row stays with deleted_at set and drops out of `objects`
    """

    date = models.DateTimeField()
    type = models.CharField(max_length=7, choices=TransactionType.choices)
    category = models.CharField(max_length=50)
    amount = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    memo = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    deleted_at = models.DateTimeField(null=True, blank=True, db_index=True)

    objects = ActiveTransactionManager()
    all_objects = models.Manager()

    class Meta:
        ordering = ["-date", "-id"]
        base_manager_name = "all_objects"

    def clean(self):
        if self.type and self.category:
            check = check_category(self.type, self.category)
            if not check.valid:
                raise ValidationError(check.reason, code="invalid_category")

    def delete(self, using=None, keep_parents=False):
        self.deleted_at = timezone.now()
        self.save(using=using, update_fields=["deleted_at", "updated_at"])

    def hard_delete(self, using=None, keep_parents=False):
        return super().delete(using=using, keep_parents=keep_parents)

    def restore(self):
        self.deleted_at = None
        self.save(update_fields=["deleted_at", "updated_at"])

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def to_dict(self) -> dict:
        return {
            "id": self.pk,
            "date": _utc_isoformat(self.date),
            "type": self.type,
            "category": self.category,
            "amount": self.amount,
            "memo": self.memo,
            "created_at": _utc_isoformat(self.created_at),
            "updated_at": _utc_isoformat(self.updated_at),
            "deleted_at": _utc_isoformat(self.deleted_at),
        }

    def __str__(self):
        return f"{self.date:%Y-%m-%d} {self.type} {self.category} {self.amount}"
