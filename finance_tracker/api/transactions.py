"""
Transaction API endpoints: CRUD plus the CSV/JSON exports.

Export routes are registered before /transactions/{transaction_id} so that
"export" is never captured as an id.
"""
from dataclasses import replace
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import Response

from finance_tracker.api.deps import get_export_filter, get_owner_id, get_store
from finance_tracker.core.records import ExportFilter, ExportFormat
from finance_tracker.export.columns import ColumnSet
from finance_tracker.export.filenames import FilenameScheme
from finance_tracker.ports.repositories import TransactionStore
from finance_tracker.schemas.transaction import (
    Pagination,
    TransactionCreate,
    TransactionListResponse,
    TransactionResponse,
    TransactionUpdate,
)
from finance_tracker.services.errors import NotFoundError, ValidationError
from finance_tracker.services.export_service import ExportResult, ExportService
from finance_tracker.services.transaction_service import TransactionService
from finance_tracker.transform.normalizers import NormalizeError

router = APIRouter()


def _attachment(result: ExportResult) -> Response:
    return Response(
        content=result.content,
        media_type=result.content_type,
        headers={"Content-Disposition": f'attachment; filename="{result.filename}"'},
    )


@router.get("/transactions", response_model=TransactionListResponse)
def list_transactions(
    filter: ExportFilter = Depends(get_export_filter),
    owner_id: str = Depends(get_owner_id),
    store: TransactionStore = Depends(get_store),
):
    """
    List transactions, most recent first.

    Query params: type, category, startDate, endDate (whole day inclusive).
    Pagination is a single-page placeholder.
    """
    service = TransactionService(store)
    transactions = service.list(owner_id, filter)

    return TransactionListResponse(
        data=[TransactionResponse.model_validate(t) for t in transactions],
        pagination=Pagination(total=len(transactions)),
    )


@router.get("/transactions/export")
def export_transactions(
    filter: ExportFilter = Depends(get_export_filter),
    owner_id: str = Depends(get_owner_id),
    store: TransactionStore = Depends(get_store),
):
    """
    Export transactions as a file download.

    CSV uses the detailed layout (id, date, type, categoryName, description,
    amount, currency, createdAt, updatedAt); JSON is an array of enriched
    transactions. Filename: transactions_YYYYMMDD_HHMMSS.<format>
    """
    service = ExportService(store)
    result = service.export(
        owner_id,
        filter,
        column_set=ColumnSet.DETAILED,
        filename_scheme=FilenameScheme.TIMESTAMPED,
    )
    return _attachment(result)


@router.get("/transactions/export/legacy")
def export_transactions_legacy(
    filter: ExportFilter = Depends(get_export_filter),
    owner_id: str = Depends(get_owner_id),
    store: TransactionStore = Depends(get_store),
):
    """
    Legacy CSV export.

    Compact layout (id, date, description, category, type, amount) and a
    date-stamped filename: transactions-YYYY-MM-DD.csv
    """
    service = ExportService(store)
    result = service.export(
        owner_id,
        replace(filter, format=ExportFormat.CSV),
        column_set=ColumnSet.COMPACT,
        filename_scheme=FilenameScheme.DATED,
    )
    return _attachment(result)


@router.get("/transactions/{transaction_id}", response_model=TransactionResponse)
def get_transaction(
    transaction_id: str,
    owner_id: str = Depends(get_owner_id),
    store: TransactionStore = Depends(get_store),
):
    """Get a single transaction with its category."""
    service = TransactionService(store)
    try:
        transaction = service.get(transaction_id, owner_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return TransactionResponse.model_validate(transaction)


@router.post(
    "/transactions",
    response_model=TransactionResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_transaction(
    payload: TransactionCreate,
    owner_id: str = Depends(get_owner_id),
    store: TransactionStore = Depends(get_store),
):
    """Create a transaction."""
    service = TransactionService(store)
    try:
        transaction = service.create(owner_id, payload.model_dump())
    except (ValidationError, NormalizeError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    return TransactionResponse.model_validate(transaction)


@router.put("/transactions/{transaction_id}", response_model=TransactionResponse)
def update_transaction(
    transaction_id: str,
    payload: TransactionUpdate,
    owner_id: str = Depends(get_owner_id),
    store: TransactionStore = Depends(get_store),
):
    """Update a transaction; only fields present in the body are changed."""
    service = TransactionService(store)
    try:
        transaction = service.update(
            transaction_id, owner_id, payload.model_dump(exclude_unset=True)
        )
    except (ValidationError, NormalizeError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return TransactionResponse.model_validate(transaction)


@router.delete("/transactions/{transaction_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_transaction(
    transaction_id: str,
    owner_id: str = Depends(get_owner_id),
    store: TransactionStore = Depends(get_store),
):
    """Delete a transaction."""
    service = TransactionService(store)
    try:
        service.delete(transaction_id, owner_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
