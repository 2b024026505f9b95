"""Lead repository adapters."""

from dormant_leads.adapters.outbound.lead.lead_repository import InMemoryLeadRepository
from dormant_leads.adapters.outbound.lead.postgres_lead_repository import PostgresLeadRepository

__all__ = [
    "InMemoryLeadRepository",
    "PostgresLeadRepository",
]
