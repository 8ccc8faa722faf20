"""
Fixed category taxonomy. Each transaction type owns an ordered, immutable set of
category names; a category is valid only under its own type.
"""

from dataclasses import dataclass

from django.db import models


class TransactionType(models.TextChoices):
    INCOME = "income", "収入"
    EXPENSE = "expense", "支出"


# Fixed costs
EXPENSE_FIXED_CATEGORIES = (
    "家賃",
    "医療ローン",
    "保険",
    "サブスク",
    "ショッピング分割",
    "光熱費",
)

# Variable costs
EXPENSE_VARIABLE_CATEGORIES = (
    "食費",
    "日用品",
    "交通費",
    "スキルアップ",
    "仕事用品",
    "医療",
    "美容",
    "娯楽",
    "その他（支出）",
)

EXPENSE_CATEGORIES = EXPENSE_FIXED_CATEGORIES + EXPENSE_VARIABLE_CATEGORIES

INCOME_CATEGORIES = (
    "給与",
    "賞与",
    "販売",
    "その他（収入）",
)

_CATEGORIES_BY_TYPE = {
    TransactionType.INCOME.value: INCOME_CATEGORIES,
    TransactionType.EXPENSE.value: EXPENSE_CATEGORIES,
}


@dataclass(frozen=True)
class CategoryCheck:
    valid: bool
    reason: str = ""

    def __bool__(self) -> bool:
        return self.valid


def categories_for(transaction_type) -> tuple:
    """Ordered categories for a type; empty for anything but income/expense."""
    if not isinstance(transaction_type, str):
        return ()
    return _CATEGORIES_BY_TYPE.get(transaction_type, ())


def is_valid_category(transaction_type, category) -> bool:
    return category in categories_for(transaction_type)


def check_category(transaction_type, category) -> CategoryCheck:
    if is_valid_category(transaction_type, category):
        return CategoryCheck(valid=True)
    return CategoryCheck(
        valid=False,
        reason=f"invalid category '{category}' for type '{transaction_type}'",
    )


def category_choices():
    """Grouped choices for select widgets and the admin."""
    return [
        ("支出（固定費）", [(name, name) for name in EXPENSE_FIXED_CATEGORIES]),
        ("支出（変動費）", [(name, name) for name in EXPENSE_VARIABLE_CATEGORIES]),
        ("収入", [(name, name) for name in INCOME_CATEGORIES]),
    ]
