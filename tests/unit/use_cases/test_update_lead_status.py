"""Unit tests for lead lifecycle and maintenance use cases."""

from datetime import timedelta

import pytest

from dormant_leads.adapters.outbound.lead import InMemoryLeadRepository
from dormant_leads.adapters.outbound.network_event import InMemoryNetworkEventRepository
from dormant_leads.adapters.outbound.phone_model import InMemoryPhoneModelRepository
from dormant_leads.application.dtos.phone_model import PhoneModel
from dormant_leads.application.use_cases.update_lead_status import (
    LeadMaintenance,
    UpdateLeadStatus,
)
from dormant_leads.domain.entities.network_event import NetworkEvent
from dormant_leads.domain.exceptions import (
    InvalidLeadTransitionError,
    LeadNotFoundError,
    PhoneModelNotFoundError,
)
from dormant_leads.domain.value_objects.lead_status import LeadStatus


@pytest.fixture
def lead_repository():
    return InMemoryLeadRepository()


@pytest.fixture
def phone_model_repository():
    return InMemoryPhoneModelRepository()


@pytest.fixture
def event_repository():
    return InMemoryNetworkEventRepository()


@pytest.fixture
def use_case(lead_repository, phone_model_repository, now):
    return UpdateLeadStatus(
        lead_repository, phone_model_repository, max_contacts_per_lead=2, clock=lambda: now
    )


@pytest.mark.asyncio
async def test_transition_persists_new_status(use_case, lead_repository, make_lead, now):
    lead = make_lead()
    await lead_repository.save(lead)

    response = await use_case.transition(lead.id, LeadStatus.CONTACTED)

    assert response.status == LeadStatus.CONTACTED
    assert response.contact_count == 1
    stored = await lead_repository.get(lead.id)
    assert stored.status == LeadStatus.CONTACTED
    assert stored.last_contact_at == now


@pytest.mark.asyncio
async def test_transition_unknown_lead(use_case):
    with pytest.raises(LeadNotFoundError):
        await use_case.transition("missing", LeadStatus.CONTACTED)


@pytest.mark.asyncio
async def test_forbidden_transition_leaves_lead_untouched(use_case, lead_repository, make_lead):
    lead = make_lead()
    await lead_repository.save(lead)

    with pytest.raises(InvalidLeadTransitionError):
        await use_case.transition(lead.id, LeadStatus.CONVERTED)

    assert (await lead_repository.get(lead.id)).status == LeadStatus.ELIGIBLE


@pytest.mark.asyncio
async def test_lapsed_lead_cannot_be_contacted(use_case, lead_repository, make_lead, now):
    lead = make_lead(created_at=now - timedelta(days=40))
    await lead_repository.save(lead)

    with pytest.raises(InvalidLeadTransitionError):
        await use_case.transition(lead.id, LeadStatus.CONTACTED)

    stored = await lead_repository.get(lead.id)
    assert stored.status == LeadStatus.ELIGIBLE
    assert stored.contact_count == 0


@pytest.mark.asyncio
async def test_assign_device_sets_tier(
    use_case, lead_repository, phone_model_repository, make_lead
):
    lead = make_lead()
    await lead_repository.save(lead)
    await phone_model_repository.add(
        PhoneModel(
            id="samsung-galaxy-s21-128",
            brand="Samsung",
            model="Galaxy S21",
            storage="128GB",
            avg_price_tier=3,
        )
    )

    response = await use_case.assign_device(lead.id, "samsung-galaxy-s21-128")

    assert response.device_tier == 3
    assert (await lead_repository.get(lead.id)).device_tier == 3


@pytest.mark.asyncio
async def test_assign_unknown_device(use_case, lead_repository, make_lead):
    lead = make_lead()
    await lead_repository.save(lead)

    with pytest.raises(PhoneModelNotFoundError):
        await use_case.assign_device(lead.id, "nokia-3310")


@pytest.mark.asyncio
async def test_purge_expires_leads_in_place_and_cleans_events(
    lead_repository, event_repository, make_lead, now
):
    live = make_lead()
    lapsed = make_lead(expires_at=now - timedelta(days=1))
    await lead_repository.save(live)
    await lead_repository.save(lapsed)

    old_event = NetworkEvent(msisdn_hash="h", payload={}, created_at=now - timedelta(days=120))
    recent_event = NetworkEvent(msisdn_hash="h", payload={}, created_at=now - timedelta(days=2))
    pending_event = NetworkEvent(msisdn_hash="h", payload={}, created_at=now - timedelta(days=120))
    for event in (old_event, recent_event, pending_event):
        await event_repository.store(event)
    await event_repository.mark_processed(old_event.id)
    await event_repository.mark_processed(recent_event.id)

    maintenance = LeadMaintenance(
        lead_repository, event_repository, event_retention_days=90, clock=lambda: now
    )
    result = await maintenance.purge()

    assert result == {"leads_expired": 1, "events_cleaned": 1}
    assert len(await lead_repository.list_all()) == 2
    assert (await lead_repository.get(lapsed.id)).status == LeadStatus.EXPIRED
    assert (await lead_repository.get(live.id)).status == LeadStatus.ELIGIBLE
    assert [event.id for event in await event_repository.list_unprocessed()] == [pending_event.id]

    # Nothing left to expire on a second run
    assert (await maintenance.purge())["leads_expired"] == 0
