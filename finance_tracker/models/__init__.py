from finance_tracker.models.finance import CategoryRow, TransactionRow, BudgetRow

__all__ = [
    "CategoryRow",
    "TransactionRow",
    "BudgetRow",
]
