"""Unit tests for lead queries and dashboard statistics."""

from datetime import timedelta

import pytest

from dormant_leads.adapters.outbound.lead import InMemoryLeadRepository
from dormant_leads.application.dtos.query_leads import QueryLeads
from dormant_leads.application.use_cases.lead_queries import LeadQueries
from dormant_leads.domain.exceptions import LeadNotFoundError
from dormant_leads.domain.value_objects.lead_status import LeadStatus


@pytest.fixture
def repository():
    return InMemoryLeadRepository()


@pytest.fixture
def queries(repository, now):
    return LeadQueries(repository, max_contacts_per_lead=2, clock=lambda: now)


@pytest.mark.asyncio
async def test_get_unknown_lead_raises(queries):
    with pytest.raises(LeadNotFoundError):
        await queries.get("missing")


@pytest.mark.asyncio
async def test_get_returns_stored_lead(queries, repository, make_lead):
    lead = make_lead()
    await repository.save(lead)

    response = await queries.get(lead.id)

    assert response.lead_id == lead.id
    assert response.dormant_score == 0.8


@pytest.mark.asyncio
async def test_get_reports_lapsed_lead_as_expired(queries, repository, make_lead, now):
    lead = make_lead(created_at=now - timedelta(days=40))
    await repository.save(lead)

    response = await queries.get(lead.id)

    assert response.status == LeadStatus.EXPIRED


@pytest.mark.asyncio
async def test_default_query_hides_expired_leads(queries, repository, make_lead, now):
    live = make_lead()
    lapsed = make_lead(expires_at=now - timedelta(hours=1))
    await repository.save(live)
    await repository.save(lapsed)

    result = await queries.query(QueryLeads())

    assert [lead.lead_id for lead in result.leads] == [live.id]
    assert result.total == 1

    expired = await queries.query(QueryLeads(status=LeadStatus.EXPIRED))
    assert [lead.lead_id for lead in expired.leads] == [lapsed.id]
    assert [lead.status for lead in expired.leads] == [LeadStatus.EXPIRED]


@pytest.mark.asyncio
async def test_eligible_status_filter_requires_eligible_flag(queries, repository, make_lead):
    eligible = make_lead()
    excluded = make_lead(eligible=False)
    await repository.save(eligible)
    await repository.save(excluded)

    result = await queries.query(QueryLeads(status=LeadStatus.ELIGIBLE))

    assert [lead.lead_id for lead in result.leads] == [eligible.id]


@pytest.mark.asyncio
async def test_tier_and_activity_filters(queries, repository, make_lead, now):
    old_tier4 = make_lead(device_tier=4, created_at=now - timedelta(days=10))
    new_tier4 = make_lead(device_tier=4, created_at=now - timedelta(days=1))
    new_tier2 = make_lead(device_tier=2, created_at=now - timedelta(days=1))
    for lead in (old_tier4, new_tier4, new_tier2):
        await repository.save(lead)

    by_tier = await queries.query(QueryLeads(tier=4))
    assert {lead.lead_id for lead in by_tier.leads} == {old_tier4.id, new_tier4.id}

    recent = await queries.query(
        QueryLeads(tier=4, last_active_after=now - timedelta(days=5))
    )
    assert [lead.lead_id for lead in recent.leads] == [new_tier4.id]

    older = await queries.query(QueryLeads(last_active_before=now - timedelta(days=5)))
    assert [lead.lead_id for lead in older.leads] == [old_tier4.id]


@pytest.mark.asyncio
async def test_query_pages_by_score(queries, repository, make_lead):
    scores = [0.5, 0.9, 0.7, 0.6]
    for score in scores:
        await repository.save(make_lead(dormant_score=score))

    page = await queries.query(QueryLeads(limit=2, offset=1))

    assert [lead.dormant_score for lead in page.leads] == [0.7, 0.6]
    assert page.total == 4
    assert (page.limit, page.offset) == (2, 1)


@pytest.mark.asyncio
async def test_query_echoes_filters(queries, now):
    result = await queries.query(
        QueryLeads(status=LeadStatus.CONTACTED, tier=3, last_active_before=now)
    )

    assert result.filters.status == LeadStatus.CONTACTED
    assert result.filters.tier == 3
    assert result.filters.lastActiveBefore == now.isoformat()
    assert result.filters.lastActiveAfter is None


@pytest.mark.asyncio
async def test_eligible_lists_nudgeable_leads_best_first(queries, repository, make_lead, now):
    low = make_lead(dormant_score=0.6)
    high = make_lead(dormant_score=0.95)
    maxed = make_lead(dormant_score=0.99)
    maxed.transition_to(LeadStatus.CONTACTED, now)
    maxed.transition_to(LeadStatus.CONTACTED, now)
    excluded = make_lead(eligible=False)
    for lead in (low, high, maxed, excluded):
        await repository.save(lead)

    leads = await queries.eligible(limit=10)

    assert [lead.lead_id for lead in leads] == [high.id, low.id]
    assert len(await queries.eligible(limit=1)) == 1


@pytest.mark.asyncio
async def test_stats(queries, repository, make_lead, now):
    waiting = make_lead(device_tier=4)
    contacted = make_lead(device_tier=2)
    contacted.transition_to(LeadStatus.CONTACTED, now)
    converted = make_lead(device_tier=5)
    converted.transition_to(LeadStatus.CONTACTED, now)
    converted.transition_to(LeadStatus.CONVERTED, now)
    excluded = make_lead(eligible=False)
    lapsed = make_lead(expires_at=now - timedelta(days=1))
    for lead in (waiting, contacted, converted, excluded, lapsed):
        await repository.save(lead)

    stats = await queries.stats()

    assert stats.total_leads == 4
    assert stats.by_status.model_dump() == {
        "eligible": 2,
        "contacted": 1,
        "responded": 0,
        "converted": 1,
        "expired": 1,
    }
    assert stats.by_tier.tier_0 == 2
    assert stats.by_tier.tier_2 == 1
    assert stats.by_tier.tier_4 == 1
    assert stats.by_tier.tier_5 == 1
    assert stats.conversion_funnel.eligible == 4
    assert stats.conversion_funnel.contacted == 2
    assert stats.conversion_funnel.responded == 1
    assert stats.conversion_funnel.converted == 1
    assert stats.conversion_funnel.conversion_rate == 25.0


@pytest.mark.asyncio
async def test_stats_on_empty_store(queries):
    stats = await queries.stats()

    assert stats.total_leads == 0
    assert stats.conversion_funnel.conversion_rate == 0.0
