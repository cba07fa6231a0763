"""API Dependencies — resolve the record services built in the lifespan.

Invariants:
    - Services live on app.state.records (one RecordServices per app)
    - Routes never construct services themselves
"""

from fastapi import Request

from quotedesk.services.pc_number_service import PcNumberService
from quotedesk.services.quote_service import QuoteService
from quotedesk.services.wiring import RecordServices


def get_record_services(request: Request) -> RecordServices:
    records = getattr(request.app.state, "records", None)
    if records is None:
        raise RuntimeError("Record services not initialized")
    return records


def get_quote_service(request: Request) -> QuoteService:
    return get_record_services(request).quotes


def get_pc_number_service(request: Request) -> PcNumberService:
    return get_record_services(request).pc_numbers
