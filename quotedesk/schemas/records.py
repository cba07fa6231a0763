"""Record Schemas — request bodies for quote and PC number endpoints.

Invariants:
    - Create/update bodies accept unknown fields (records are free-form documents)
    - Updates are dumped with exclude_unset: only fields the client sent are merged
    - Item numeric fields accept numbers or strings; malformed values are kept
      and count as 0 in totals
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from quotedesk.core.domain_types import PcStatus, QuoteStatus

Numeric = float | int | str | None


class QuoteCreate(BaseModel):
    """New quote — references are checked by the service, not here."""
    model_config = ConfigDict(extra="allow")

    pc_id: str | None = None
    price_list_id: str | None = None
    client_name: str | None = Field(None, max_length=200)
    pc_number: str | None = None
    status: QuoteStatus | None = None

    def to_fields(self) -> dict:
        return self.model_dump(exclude_unset=True, mode="json")


class QuoteUpdate(QuoteCreate):
    """Partial quote patch."""


class QuoteItemCreate(BaseModel):
    """Line item to append to a quote."""
    model_config = ConfigDict(extra="allow")

    description: str | None = Field(None, max_length=1000)
    quantity: Numeric = None
    unit_price: Numeric = None


class CalculateTotalRequest(BaseModel):
    """Live-preview total for unsaved items."""
    items: list[dict] = Field(default_factory=list)


class PcNumberCreate(BaseModel):
    """New project record."""
    model_config = ConfigDict(extra="allow")

    project_title: str | None = None
    client_name: str | None = None
    contact_name: str | None = None
    contact_email: str | None = None
    company: str | None = None
    account_manager: str | None = None
    estimated_value: Numeric = None
    status: PcStatus | None = None

    @field_validator("project_title", "client_name", "contact_name")
    @classmethod
    def strip_text(cls, v: str | None) -> str | None:
        return v.strip() if isinstance(v, str) else v

    def to_fields(self) -> dict:
        return self.model_dump(exclude_unset=True, mode="json")


class PcNumberUpdate(PcNumberCreate):
    """Partial PC number patch."""
