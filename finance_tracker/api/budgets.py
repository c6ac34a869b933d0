"""
Budget API endpoints.

Budgets apply to expense categories only; progress is computed on request
from the caller's transactions.
"""
from dataclasses import asdict
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import Response

from finance_tracker.api.deps import get_budgets_repo, get_owner_id, get_store
from finance_tracker.ports.repositories import BudgetsRepo, TransactionStore
from finance_tracker.schemas.budget import (
    BudgetCreate,
    BudgetProgressResponse,
    BudgetResponse,
    BudgetUpdate,
)
from finance_tracker.services.budget_service import BudgetService
from finance_tracker.services.errors import NotFoundError, ValidationError
from finance_tracker.transform.normalizers import NormalizeError

router = APIRouter()


@router.get("/budgets", response_model=List[BudgetResponse])
def list_budgets(
    owner_id: str = Depends(get_owner_id),
    store: TransactionStore = Depends(get_store),
    budgets_repo: BudgetsRepo = Depends(get_budgets_repo),
):
    """List the caller's budgets with their categories."""
    service = BudgetService(budgets_repo, store)
    return [BudgetResponse.model_validate(b) for b in service.list(owner_id)]


@router.post(
    "/budgets",
    response_model=BudgetResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_budget(
    payload: BudgetCreate,
    owner_id: str = Depends(get_owner_id),
    store: TransactionStore = Depends(get_store),
    budgets_repo: BudgetsRepo = Depends(get_budgets_repo),
):
    """Create a budget for an expense category."""
    service = BudgetService(budgets_repo, store)
    try:
        budget = service.create(owner_id, payload.model_dump())
    except (ValidationError, NormalizeError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    return BudgetResponse.model_validate(budget)


@router.put("/budgets/{budget_id}", response_model=BudgetResponse)
def update_budget(
    budget_id: str,
    payload: BudgetUpdate,
    owner_id: str = Depends(get_owner_id),
    store: TransactionStore = Depends(get_store),
    budgets_repo: BudgetsRepo = Depends(get_budgets_repo),
):
    """Update a budget; only fields present in the body are changed."""
    service = BudgetService(budgets_repo, store)
    try:
        budget = service.update(budget_id, owner_id, payload.model_dump(exclude_unset=True))
    except (ValidationError, NormalizeError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return BudgetResponse.model_validate(budget)


@router.delete("/budgets/{budget_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_budget(
    budget_id: str,
    owner_id: str = Depends(get_owner_id),
    store: TransactionStore = Depends(get_store),
    budgets_repo: BudgetsRepo = Depends(get_budgets_repo),
):
    """Delete a budget."""
    service = BudgetService(budgets_repo, store)
    try:
        service.delete(budget_id, owner_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/budgets/{budget_id}/progress", response_model=BudgetProgressResponse)
def get_budget_progress(
    budget_id: str,
    owner_id: str = Depends(get_owner_id),
    store: TransactionStore = Depends(get_store),
    budgets_repo: BudgetsRepo = Depends(get_budgets_repo),
):
    """
    Spending against a budget.

    Returns:
        budgetId, spent, remaining (never below 0.00) and percentage of the
        budget used (may exceed 100)
    """
    service = BudgetService(budgets_repo, store)
    try:
        progress = service.progress(budget_id, owner_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return BudgetProgressResponse(**asdict(progress))
