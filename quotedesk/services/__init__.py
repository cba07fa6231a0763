"""Services Layer — record lifecycle orchestration around the pure core.

Invariants:
    - Services receive every collaborator through their constructor
    - Async only at the store / counter boundary; all rules live in core/

Design Decisions:
    - One generic RecordService, one subclass per record kind
"""
