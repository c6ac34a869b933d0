from typing import List
from fastapi import APIRouter, Depends, status

from finance_tracker.api.deps import get_owner_id, get_store
from finance_tracker.ports.repositories import TransactionStore
from finance_tracker.schemas.transaction import CategoryCreate, CategoryResponse
from finance_tracker.services.transaction_service import CategoryService

router = APIRouter()


@router.get("/categories", response_model=List[CategoryResponse])
def list_categories(
    owner_id: str = Depends(get_owner_id),
    store: TransactionStore = Depends(get_store),
):
    """List the caller's categories."""
    service = CategoryService(store)
    return [CategoryResponse.model_validate(c) for c in service.list(owner_id)]


@router.post(
    "/categories",
    response_model=CategoryResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_category(
    payload: CategoryCreate,
    owner_id: str = Depends(get_owner_id),
    store: TransactionStore = Depends(get_store),
):
    """Create a category."""
    service = CategoryService(store)
    category = service.create(owner_id, payload.model_dump())
    return CategoryResponse.model_validate(category)
