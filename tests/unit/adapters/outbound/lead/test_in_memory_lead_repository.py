"""Unit tests for the in-memory lead repository."""

import pytest

from dormant_leads.adapters.outbound.lead import InMemoryLeadRepository
from dormant_leads.domain.value_objects.lead_status import LeadStatus


@pytest.mark.asyncio
async def test_returned_leads_are_copies(make_lead, now):
    repository = InMemoryLeadRepository()
    lead = make_lead()
    await repository.save(lead)

    fetched = await repository.get(lead.id)
    fetched.transition_to(LeadStatus.CONTACTED, now)

    assert (await repository.get(lead.id)).status == LeadStatus.ELIGIBLE

    lead.dormant_score = 0.1
    assert (await repository.get(lead.id)).dormant_score == 0.8


@pytest.mark.asyncio
async def test_get_missing_returns_none():
    assert await InMemoryLeadRepository().get("missing") is None
