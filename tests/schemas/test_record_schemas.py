"""Record request schemas — partial updates, free-form fields, status enums."""

import pytest
from pydantic import ValidationError

from quotedesk.schemas.records import (
    CalculateTotalRequest, PcNumberCreate, PcNumberUpdate, QuoteCreate, QuoteUpdate,
)


def test_update_dumps_only_fields_sent():
    patch = QuoteUpdate(client_name="Globex")
    assert patch.to_fields() == {"client_name": "Globex"}


def test_unknown_fields_pass_through():
    body = QuoteCreate(pc_id="PC-1", price_list_id="PL-1", notes="Call first")
    assert body.to_fields()["notes"] == "Call first"


def test_status_is_dumped_as_its_value():
    assert QuoteUpdate(status="approved").to_fields() == {"status": "approved"}
    assert PcNumberUpdate(status="urgent").to_fields() == {"status": "urgent"}


def test_unknown_status_is_rejected():
    with pytest.raises(ValidationError):
        QuoteCreate(status="lost")


def test_pc_text_fields_are_trimmed():
    body = PcNumberCreate(project_title="  Fit-out ", client_name=" Acme ")
    assert body.to_fields() == {"project_title": "Fit-out", "client_name": "Acme"}


def test_malformed_numbers_are_kept_for_the_service():
    body = PcNumberCreate(estimated_value="lots")
    assert body.to_fields() == {"estimated_value": "lots"}


def test_calculate_total_request_defaults_to_no_items():
    assert CalculateTotalRequest().items == []
