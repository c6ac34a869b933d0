"""
Export service - orchestrates query → serialize → name pipeline.

Pipeline:
1. Run the query engine with the filter's type/category/date fields
2. Serialize:
   a. CSV: CSVEmitter over the selected column set
   b. JSON: array of enriched transaction objects
3. Generate the filename with the selected scheme
4. Return: content bytes, content type, filename

One code path serves both export endpoints; the canonical endpoint uses
DETAILED + TIMESTAMPED, the legacy endpoint COMPACT + DATED.
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional
from pydantic import TypeAdapter

from finance_tracker.core.config import settings
from finance_tracker.core.records import EnrichedTransaction, ExportFilter, ExportFormat
from finance_tracker.export.columns import ColumnSet, emitter_for
from finance_tracker.export.filenames import FilenameScheme, generate_filename
from finance_tracker.ports.repositories import TransactionStore
from finance_tracker.schemas.transaction import TransactionResponse
from finance_tracker.services.query_service import TransactionQueryEngine

logger = logging.getLogger(__name__)

CSV_CONTENT_TYPE = "text/csv; charset=utf-8"
JSON_CONTENT_TYPE = "application/json"

_transactions_adapter = TypeAdapter(List[TransactionResponse])


@dataclass
class ExportResult:
    """Result of an export."""

    content: bytes
    content_type: str
    filename: str
    count: int


def transactions_to_json(transactions: List[EnrichedTransaction]) -> bytes:
    """Encode enriched transactions as a UTF-8 JSON array."""
    models = [TransactionResponse.model_validate(t) for t in transactions]
    return _transactions_adapter.dump_json(models, by_alias=True)


class ExportService:
    """
    Export service - composes the query engine with the CSV emitter and
    filename generator.
    """

    def __init__(
        self,
        store: TransactionStore,
        filename_prefix: Optional[str] = None,
        currency: Optional[str] = None,
    ):
        """
        Initialize export service.

        Args:
            store: Transaction store to read from
            filename_prefix: Export filename prefix (default from settings)
            currency: Currency code for the detailed layout (default from settings)
        """
        self.query_engine = TransactionQueryEngine(store)
        self.filename_prefix = filename_prefix or settings.EXPORT_FILENAME_PREFIX
        self.currency = currency or settings.EXPORT_CURRENCY

    def export(
        self,
        owner_id: str,
        filter: ExportFilter,
        column_set: ColumnSet = ColumnSet.DETAILED,
        filename_scheme: FilenameScheme = FilenameScheme.TIMESTAMPED,
        now: Optional[datetime] = None,
    ) -> ExportResult:
        """
        Export an owner's transactions.

        Args:
            owner_id: Owner identifier
            filter: Filter and output format
            column_set: CSV column layout (ignored for JSON)
            filename_scheme: Filename scheme
            now: Instant for the filename stamp (default: current UTC time)

        Returns:
            ExportResult with content bytes, content type and filename
        """
        transactions = self.query_engine.query(owner_id, filter)

        if filter.format == ExportFormat.JSON:
            content = transactions_to_json(transactions)
            content_type = JSON_CONTENT_TYPE
        else:
            content = emitter_for(column_set, self.currency).emit_bytes(transactions)
            content_type = CSV_CONTENT_TYPE

        filename = generate_filename(
            filename_scheme, self.filename_prefix, filter.format.value, now
        )

        logger.info(
            f"Exported {len(transactions)} transactions as {filter.format.value} "
            f"for user: {owner_id} ({filename})"
        )

        return ExportResult(
            content=content,
            content_type=content_type,
            filename=filename,
            count=len(transactions),
        )
