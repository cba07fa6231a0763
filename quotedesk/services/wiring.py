"""Service Wiring — builds the record services around one shared context.

Invariants:
    - Exactly one StateStore, FaultReporter, store and counter per RecordServices
    - Every service and synchronizer receives its collaborators explicitly
      (no module-level service singletons)

Design Decisions:
    - Plain factory function over a DI container: four collaborators, two
      services — every dependency visible in one place
    - Collaborators are parameters so tests can inject fakes for any of them
"""

from dataclasses import dataclass

from quotedesk.config import Settings
from quotedesk.core.domain_types import RecordKind
from quotedesk.core.numbering import NumberingPolicy
from quotedesk.core.repository_protocols import (
    FaultReporter, RecordStore, SequenceCounter,
)
from quotedesk.core.state_store import StateStore
from quotedesk.services.pc_number_service import PC_NUMBER_CONFIG, PcNumberService
from quotedesk.services.quote_service import QUOTE_CONFIG, QuoteService
from quotedesk.services.record_service import RecordKindConfig, utc_now
from quotedesk.services.sequence_generator import SequenceNumberGenerator
from quotedesk.services.state_synchronizer import StateSynchronizer

NUMBER_FIELDS = {
    RecordKind.QUOTES: QUOTE_CONFIG.number_field,
    RecordKind.PC_NUMBERS: PC_NUMBER_CONFIG.number_field,
}


@dataclass
class RecordServices:
    """The application's record context: state mirror plus both services."""
    state: StateStore
    reporter: FaultReporter
    quotes: QuoteService
    pc_numbers: PcNumberService


def build_numbering_policies(settings: Settings) -> dict[RecordKind, NumberingPolicy]:
    return {
        RecordKind.QUOTES: NumberingPolicy(
            prefix=settings.quote_number_prefix,
            padding=settings.sequence_padding,
            start_at=settings.sequence_start_at,
        ),
        RecordKind.PC_NUMBERS: NumberingPolicy(
            prefix=settings.pc_number_prefix,
            padding=settings.sequence_padding,
            start_at=settings.sequence_start_at,
        ),
    }


def _synchronizer(
    config: RecordKindConfig, store: RecordStore,
    state: StateStore, reporter: FaultReporter,
) -> StateSynchronizer:
    return StateSynchronizer(
        store, state, reporter, config.kind,
        config.live_key, config.original_key,
    )


def build_record_services(
    store: RecordStore,
    counter: SequenceCounter,
    policies: dict[RecordKind, NumberingPolicy],
    reporter: FaultReporter,
    state: StateStore | None = None,
    clock=utc_now,
) -> RecordServices:
    """Wire both record services around one state store and one counter."""
    state = state if state is not None else StateStore()
    sequence = SequenceNumberGenerator(counter, policies, reporter)
    quotes = QuoteService(
        QUOTE_CONFIG, store, sequence, reporter, state,
        _synchronizer(QUOTE_CONFIG, store, state, reporter), clock,
    )
    pc_numbers = PcNumberService(
        PC_NUMBER_CONFIG, store, sequence, reporter, state,
        _synchronizer(PC_NUMBER_CONFIG, store, state, reporter), clock,
    )
    return RecordServices(
        state=state, reporter=reporter, quotes=quotes, pc_numbers=pc_numbers,
    )
