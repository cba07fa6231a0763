"""Pydantic Schemas — request validation for API endpoints.

Invariants:
    - Schemas check types at the system boundary; business rules (required
      references, numeric totals) stay in core/validation.py so every violation
      is reported together
    - Free-form record fields pass through (extra="allow")

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
