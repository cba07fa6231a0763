"""Core Layer — pure record logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - All functions are pure and deterministic (StateStore is the one
      in-memory object, and it performs no IO)

Design Decisions:
    - Functional core separated from imperative shell: services orchestrate
      the async store calls around these functions
"""
