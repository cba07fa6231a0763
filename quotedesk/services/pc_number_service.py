"""PC Number Service — numbered project records and the company directory.

Invariants:
    - New PC numbers start as active
    - load_companies publishes the sorted, de-duplicated company names
      (company, else client_name) under data.all_companies
    - search_companies / filter_by_company read the published mirror only (no IO)
"""

import logging

from quotedesk.core.domain_types import PcStatus, RecordKind
from quotedesk.core.state_store import COMPANIES_KEY
from quotedesk.core.validation import validate_pc_number
from quotedesk.services.record_service import RecordKindConfig, RecordService

logger = logging.getLogger(__name__)

PC_NUMBER_CONFIG = RecordKindConfig(
    kind=RecordKind.PC_NUMBERS,
    label="PC Number",
    number_field="pc_number",
    statuses=PcStatus,
    default_status=PcStatus.ACTIVE,
    value_field="estimated_value",
    validator=validate_pc_number,
    live_key="data.all_pc_numbers",
    original_key="original.pc_numbers",
    current_key="current.pc",
    search_aliases={
        "pc_number": ("pc_number",),
        "company": ("company", "client_name"),
        "account_manager": ("account_manager",),
    },
)


class PcNumberService(RecordService):
    """Project record lifecycle plus company lookups for quote forms."""

    async def load_companies(self) -> list[str]:
        try:
            records = await self._store.load_all(self.config.kind)
            companies = sorted({
                name for r in records
                if (name := r.get("company") or r.get("client_name"))
            })
            self._state.set(COMPANIES_KEY, companies)
            logger.debug(f"Loaded {len(companies)} unique companies")
            return companies
        except Exception as e:
            self._reporter.report(e, "Load Companies")
            return []

    def search_companies(self, term: str | None) -> list[str]:
        companies = self._state.get(COMPANIES_KEY, [])
        if not term or not term.strip():
            return companies
        needle = term.strip().lower()
        return [c for c in companies if needle in c.lower()]

    def filter_by_company(self, company: str | None) -> list[dict]:
        records = self._state.get(self.config.live_key, [])
        if not company or not company.strip():
            return records
        return [
            r for r in records
            if r.get("company") == company or r.get("client_name") == company
        ]
