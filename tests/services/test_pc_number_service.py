"""PC Number Service — project records, validation and the company directory."""

import pytest

from quotedesk.core.domain_types import PcStatus
from quotedesk.core.errors import RecordValidationError
from quotedesk.core.state_store import COMPANIES_KEY


def _pc(**overrides) -> dict:
    fields = {
        "project_title": "Office fit-out",
        "client_name": "Acme Ltd",
        "contact_name": "Sam Doe",
        "contact_email": "sam@acme.com",
    }
    fields.update(overrides)
    return fields


async def test_create_builds_an_active_numbered_record(pc_service):
    pc = await pc_service.create(_pc())
    assert pc["pc_number"] == "PC-000001"
    assert pc["status"] == "active"
    assert pc["project_title"] == "Office fit-out"


async def test_invalid_pc_number_is_rejected_with_every_violation(pc_service):
    with pytest.raises(RecordValidationError) as exc_info:
        await pc_service.create({"contact_email": "nope", "estimated_value": "big"})
    violations = exc_info.value.violations
    assert "Project title is required" in violations
    assert "Contact email must be a valid email address" in violations
    assert "Estimated value must be a valid number" in violations
    assert await pc_service.get_all() == []


async def test_statistics_sum_estimated_values(pc_service):
    await pc_service.create(_pc(estimated_value=1000))
    urgent = await pc_service.create(_pc(estimated_value="500"))
    await pc_service.update(urgent["id"], {"status": PcStatus.URGENT})

    stats = await pc_service.get_statistics()
    assert stats["total"] == 2
    assert stats["counts_by_status"]["active"] == 1
    assert stats["counts_by_status"]["urgent"] == 1
    assert stats["total_value"] == 1500.0
    assert stats["average_value"] == 750.0


async def test_search_company_alias_matches_client_name(pc_service):
    await pc_service.create(_pc(company="Initech"))
    await pc_service.create(_pc(client_name="Globex"))

    assert len(await pc_service.search("initech", "company")) == 1
    assert len(await pc_service.search("globex", "company")) == 1


async def test_load_companies_is_sorted_and_unique(pc_service, records):
    await pc_service.create(_pc(company="Initech"))
    await pc_service.create(_pc(client_name="Globex"))
    await pc_service.create(_pc(company="Initech", client_name="Peter"))

    companies = await pc_service.load_companies()

    assert companies == ["Globex", "Initech"]
    assert records.state.get(COMPANIES_KEY) == ["Globex", "Initech"]


async def test_search_companies_reads_published_directory(pc_service):
    await pc_service.create(_pc(company="Initech"))
    await pc_service.create(_pc(client_name="Globex"))
    await pc_service.load_companies()

    assert pc_service.search_companies("GLO") == ["Globex"]
    assert pc_service.search_companies("") == ["Globex", "Initech"]
    assert pc_service.search_companies("umbrella") == []


async def test_filter_by_company_uses_the_mirror(pc_service):
    await pc_service.create(_pc(company="Initech"))
    await pc_service.create(_pc(client_name="Globex"))

    assert len(pc_service.filter_by_company("Globex")) == 1
    assert len(pc_service.filter_by_company("Initech")) == 1
    assert len(pc_service.filter_by_company(None)) == 2


async def test_delete_removes_from_store_and_mirror(pc_service, records):
    pc = await pc_service.create(_pc())
    assert await pc_service.delete(pc["id"]) is True
    assert await pc_service.get_all() == []
    assert records.state.get("data.all_pc_numbers") == []
