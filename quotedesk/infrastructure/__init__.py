"""Infrastructure Layer — database access, logging and fault reporting.

Invariants:
    - Store and counter implement the Protocols in core/repository_protocols.py
    - All SQLAlchemy failures mapped to PersistenceError at the session boundary

Design Decisions:
    - Concrete collaborators chosen in main.py; services only see Protocols
"""
