"""Quote Service — quotations with line items and a derived total.

Invariants:
    - total_amount is recomputed from items on EVERY write (create, update,
      add_item, remove_item), so it always equals calculate_total(items)
    - New quotes start as draft with no items and total_amount 0
    - add_item / remove_item load the quote, edit its item list and persist
      through the shared patch path; a failure is reported once

Design Decisions:
    - Total recomputed in _derive after validation: a malformed caller-supplied
      total is still rejected, and a valid one is replaced by the true sum
    - calculate_total exposed directly for client-side live preview before save
"""

import logging
from uuid import uuid4

from quotedesk.core.domain_types import QuoteStatus, RecordKind
from quotedesk.core.line_items import append_item, calculate_total, drop_item
from quotedesk.core.validation import validate_quote
from quotedesk.services.record_service import RecordKindConfig, RecordService

logger = logging.getLogger(__name__)

QUOTE_CONFIG = RecordKindConfig(
    kind=RecordKind.QUOTES,
    label="Quote",
    number_field="quote_number",
    statuses=QuoteStatus,
    default_status=QuoteStatus.DRAFT,
    value_field="total_amount",
    validator=validate_quote,
    live_key="data.all_quotes",
    original_key="original.quotes",
    current_key="current.quote",
    search_aliases={
        "quote_number": ("quote_number",),
        "client": ("client_name",),
        "pc_number": ("pc_number",),
    },
)


class QuoteService(RecordService):
    """Quotation lifecycle: CRUD, queries and line-item editing."""

    def _defaults(self) -> dict:
        return {"items": [], "total_amount": 0}

    def _derive(self, record: dict) -> dict:
        record["total_amount"] = calculate_total(record.get("items"))
        return record

    @staticmethod
    def calculate_total(items: object) -> float:
        return calculate_total(items)

    async def get_by_parent(self, pc_id: str) -> list[dict]:
        """Quotes linked to one PC number."""
        try:
            records = await self._store.load_all(self.config.kind)
            return [r for r in records if r.get("pc_id") == pc_id]
        except Exception as e:
            self._reporter.report(e, "Quotes by PC Number")
            return []

    async def add_item(self, quote_id: str, item: dict) -> dict:
        try:
            quote = await self._load_existing(quote_id)
            new_item = {"id": str(uuid4()), **item, "added_at": self._clock()}
            items = append_item(quote.get("items"), new_item)
            return await self._apply_patch(quote, {
                "items": items,
                "total_amount": calculate_total(items),
            })
        except Exception as e:
            self._reporter.report(e, "Add Quote Item")
            raise

    async def remove_item(self, quote_id: str, item_id: str) -> dict:
        try:
            quote = await self._load_existing(quote_id)
            items = drop_item(quote.get("items"), item_id)
            return await self._apply_patch(quote, {
                "items": items,
                "total_amount": calculate_total(items),
            })
        except Exception as e:
            self._reporter.report(e, "Remove Quote Item")
            raise
