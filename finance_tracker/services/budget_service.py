"""
Budget service - expense budgets per category and their progress.

Progress reuses the transaction query engine, so a budget window has the
same inclusive end-day semantics as exports.
"""
import logging
from dataclasses import dataclass, fields
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, List, Optional

from finance_tracker.core.records import (
    Budget,
    BudgetPeriod,
    Category,
    EnrichedBudget,
    ExportFilter,
    TransactionType,
)
from finance_tracker.ports.repositories import BudgetsRepo, TransactionStore
from finance_tracker.services.errors import NotFoundError, ValidationError
from finance_tracker.services.query_service import TransactionQueryEngine
from finance_tracker.transform.normalizers import normalize_amount, parse_instant

logger = logging.getLogger(__name__)

_BUDGET_FIELDS = [f.name for f in fields(Budget)]


@dataclass
class BudgetProgress:
    """Spending against a budget."""

    budget_id: str
    spent: str
    remaining: str
    percentage: float


class BudgetService:
    def __init__(self, budgets_repo: BudgetsRepo, store: TransactionStore):
        self.budgets_repo = budgets_repo
        self.store = store
        self.query_engine = TransactionQueryEngine(store)

    def list(self, owner_id: str) -> List[EnrichedBudget]:
        """List an owner's budgets with categories resolved."""
        return [self._enrich(b, owner_id) for b in self.budgets_repo.list(owner_id)]

    def get(self, budget_id: str, owner_id: str) -> EnrichedBudget:
        """
        Get a budget.

        Raises:
            NotFoundError: If the budget does not exist for this owner
        """
        budget = self.budgets_repo.get(budget_id, owner_id)
        if not budget:
            raise NotFoundError("Budget not found")
        return self._enrich(budget, owner_id)

    def create(self, owner_id: str, data: Dict[str, Any]) -> EnrichedBudget:
        """
        Create a budget.

        Raises:
            ValidationError: If the category is unknown or not an expense category
        """
        self._require_expense_category(data["category_id"], owner_id)

        budget = self.budgets_repo.create(
            owner_id=owner_id,
            category_id=data["category_id"],
            amount=normalize_amount(data["amount"]),
            period=BudgetPeriod(data["period"]),
            start_date=parse_instant(data["start_date"]),
            end_date=parse_instant(data["end_date"]),
        )

        logger.info(f"Budget created: {budget.id} for user: {owner_id}")
        return self._enrich(budget, owner_id)

    def update(self, budget_id: str, owner_id: str, changes: Dict[str, Any]) -> EnrichedBudget:
        """
        Apply a partial update (None values are ignored).

        Raises:
            ValidationError: If a new category is unknown or not an expense
                category, or the resulting window ends before it starts
            NotFoundError: If the budget does not exist for this owner
        """
        existing = self.budgets_repo.get(budget_id, owner_id)
        if not existing:
            raise NotFoundError("Budget not found")

        prepared: Dict[str, Any] = {}
        if changes.get("category_id"):
            self._require_expense_category(changes["category_id"], owner_id)
            prepared["category_id"] = changes["category_id"]
        if changes.get("amount") is not None:
            prepared["amount"] = normalize_amount(changes["amount"])
        if changes.get("period") is not None:
            prepared["period"] = BudgetPeriod(changes["period"])
        if changes.get("start_date") is not None:
            prepared["start_date"] = parse_instant(changes["start_date"])
        if changes.get("end_date") is not None:
            prepared["end_date"] = parse_instant(changes["end_date"])

        start = prepared.get("start_date", existing.start_date)
        end = prepared.get("end_date", existing.end_date)
        if end < start:
            raise ValidationError("endDate must not be before startDate")

        budget = self.budgets_repo.update(budget_id, owner_id, prepared)
        if not budget:
            raise NotFoundError("Budget not found")

        logger.info(f"Budget updated: {budget.id} for user: {owner_id}")
        return self._enrich(budget, owner_id)

    def delete(self, budget_id: str, owner_id: str) -> None:
        """
        Delete a budget.

        Raises:
            NotFoundError: If the budget does not exist for this owner
        """
        if not self.budgets_repo.delete(budget_id, owner_id):
            raise NotFoundError("Budget not found")

        logger.info(f"Budget deleted: {budget_id} for user: {owner_id}")

    def progress(self, budget_id: str, owner_id: str) -> BudgetProgress:
        """
        Compute spending against a budget.

        spent: expense transactions of the budget's category within
            [start_date, end_date], end day inclusive
        remaining: amount - spent, floored at 0.00
        percentage: spent / amount * 100, two places, may exceed 100

        Raises:
            NotFoundError: If the budget does not exist for this owner
        """
        budget = self.budgets_repo.get(budget_id, owner_id)
        if not budget:
            raise NotFoundError("Budget not found")

        transactions = self.query_engine.query(
            owner_id,
            ExportFilter(
                type=TransactionType.EXPENSE,
                category_id=budget.category_id,
                start_date=budget.start_date,
                end_date=budget.end_date,
            ),
        )

        limit = Decimal(budget.amount)
        spent = sum((Decimal(t.amount) for t in transactions), Decimal("0"))
        remaining = max(limit - spent, Decimal("0"))
        percentage = (spent / limit * 100) if limit else Decimal("0")

        return BudgetProgress(
            budget_id=budget.id,
            spent=normalize_amount(spent),
            remaining=normalize_amount(remaining),
            percentage=float(percentage.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)),
        )

    def _require_expense_category(self, category_id: str, owner_id: str) -> Category:
        category = self.store.get_category_by_id(category_id, owner_id)
        if not category:
            raise ValidationError("Invalid category")
        if category.type != TransactionType.EXPENSE:
            logger.warning(f"Rejected budget on non-expense category {category_id} for user: {owner_id}")
            raise ValidationError("Budget can only be set for expense categories")
        return category

    def _enrich(self, budget: Budget, owner_id: str) -> EnrichedBudget:
        category: Optional[Category] = self.store.get_category_by_id(budget.category_id, owner_id)
        values = {name: getattr(budget, name) for name in _BUDGET_FIELDS}
        return EnrichedBudget(**values, category=category)
