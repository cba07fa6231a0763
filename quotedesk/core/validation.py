"""Record Validation — pure rule checks that collect every violation.

Invariants:
    - Validators never raise and never short-circuit: all violations returned
    - An empty list means the record may be written
    - Callers reject the whole write on any violation (no partial persistence)

Design Decisions:
    - Plain functions returning list[str]: the service owns the decision to raise,
      so these stay testable with data in / data out
    - "Present" for optional numeric fields means not None and not ""
"""

import re

from quotedesk.core.domain_types import NAME_MAX, TITLE_MAX
from quotedesk.core.lenient import is_finite_number

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def _is_blank(value: object) -> bool:
    if value is None:
        return True
    return not str(value).strip()


def _is_present(value: object) -> bool:
    return value is not None and value != ""


def validate_quote(record: dict) -> list[str]:
    """Check required references and the numeric total."""
    violations = []
    if _is_blank(record.get("pc_id")):
        violations.append("PC Number is required")
    if _is_blank(record.get("price_list_id")):
        violations.append("Price List is required")
    total = record.get("total_amount")
    if _is_present(total) and not is_finite_number(total):
        violations.append("Total amount must be a valid number")
    return violations


def validate_pc_number(record: dict) -> list[str]:
    """Check required contact fields, lengths, email and estimated value."""
    violations = []
    if _is_blank(record.get("project_title")):
        violations.append("Project title is required")
    if _is_blank(record.get("client_name")):
        violations.append("Client name is required")
    if _is_blank(record.get("contact_name")):
        violations.append("Contact name is required")

    title = record.get("project_title")
    if isinstance(title, str) and len(title) > TITLE_MAX:
        violations.append(f"Project title must be less than {TITLE_MAX} characters")
    client = record.get("client_name")
    if isinstance(client, str) and len(client) > NAME_MAX:
        violations.append(f"Client name must be less than {NAME_MAX} characters")

    email = record.get("contact_email")
    if not _is_blank(email) and not _EMAIL_RE.match(str(email).strip()):
        violations.append("Contact email must be a valid email address")

    value = record.get("estimated_value")
    if _is_present(value) and not is_finite_number(value):
        violations.append("Estimated value must be a valid number")
    return violations


def format_violations(violations: list[str]) -> str:
    """Single combined message naming every violation."""
    return f"Validation failed: {', '.join(violations)}"
