"""Dependency injection factory functions."""

from typing import Optional

from dormant_leads.adapters.outbound.lead import (
    InMemoryLeadRepository,
    PostgresLeadRepository,
)
from dormant_leads.adapters.outbound.network_event import (
    InMemoryNetworkEventRepository,
    PostgresNetworkEventRepository,
)
from dormant_leads.adapters.outbound.phone_model import (
    InMemoryPhoneModelRepository,
    PostgresPhoneModelRepository,
)
from dormant_leads.application.ports.lead_repository import LeadRepository
from dormant_leads.application.ports.network_event_repository import NetworkEventRepository
from dormant_leads.application.ports.phone_model_repository import PhoneModelRepository
from dormant_leads.application.use_cases.dormant_rules import DormantRules
from dormant_leads.application.use_cases.lead_queries import LeadQueries
from dormant_leads.application.use_cases.phone_model_catalog import (
    PhoneModelCatalog,
    SeedPhoneModels,
)
from dormant_leads.application.use_cases.process_dormant_event import ProcessDormantEvent
from dormant_leads.application.use_cases.update_lead_status import (
    LeadMaintenance,
    UpdateLeadStatus,
)
from dormant_leads.infrastructure.config.settings import settings


def _require_database_url(setting_name: str) -> None:
    if not settings.database_url:
        raise ValueError(f"DATABASE_URL is required when {setting_name}=postgres")


def create_lead_repository() -> LeadRepository:
    """
    Factory function to create lead repository.

    Returns:
        LeadRepository instance
    """
    if settings.lead_repository == "postgres":
        _require_database_url("LEAD_REPOSITORY")
        return PostgresLeadRepository()
    else:
        return InMemoryLeadRepository()


def create_network_event_repository() -> NetworkEventRepository:
    """
    Factory function to create network event repository.

    Returns:
        NetworkEventRepository instance
    """
    if settings.network_event_repository == "postgres":
        _require_database_url("NETWORK_EVENT_REPOSITORY")
        return PostgresNetworkEventRepository()
    else:
        return InMemoryNetworkEventRepository()


def create_phone_model_repository() -> PhoneModelRepository:
    """
    Factory function to create phone model repository.

    Returns:
        PhoneModelRepository instance
    """
    if settings.phone_model_repository == "postgres":
        _require_database_url("PHONE_MODEL_REPOSITORY")
        return PostgresPhoneModelRepository()
    else:
        return InMemoryPhoneModelRepository()


def create_dormant_rules() -> DormantRules:
    """
    Factory function to create the dormant rule engine from settings.

    Returns:
        DormantRules instance
    """
    return DormantRules(
        min_days_after_swap=settings.min_days_after_swap,
        max_activation_window_days=settings.max_activation_window_days,
        max_swaps_30d_threshold=settings.max_swaps_30d_threshold,
        min_days_between_contacts=settings.min_days_between_contacts,
    )


def create_process_dormant_event_use_case(
    lead_repository: Optional[LeadRepository] = None,
    event_repository: Optional[NetworkEventRepository] = None,
) -> ProcessDormantEvent:
    """
    Factory function to create ProcessDormantEvent with dependencies.

    Args:
        lead_repository: Shared lead repository (created if omitted)
        event_repository: Shared event repository (created if omitted)

    Returns:
        ProcessDormantEvent instance
    """
    return ProcessDormantEvent(
        lead_repository or create_lead_repository(),
        event_repository or create_network_event_repository(),
        create_dormant_rules(),
        lead_ttl_days=settings.lead_ttl_days,
    )


def create_lead_queries(lead_repository: Optional[LeadRepository] = None) -> LeadQueries:
    """
    Factory function to create LeadQueries.

    Returns:
        LeadQueries instance
    """
    return LeadQueries(
        lead_repository or create_lead_repository(),
        max_contacts_per_lead=settings.max_contacts_per_lead,
    )


def create_update_lead_status_use_case(
    lead_repository: Optional[LeadRepository] = None,
    phone_model_repository: Optional[PhoneModelRepository] = None,
) -> UpdateLeadStatus:
    """
    Factory function to create UpdateLeadStatus.

    Returns:
        UpdateLeadStatus instance
    """
    return UpdateLeadStatus(
        lead_repository or create_lead_repository(),
        phone_model_repository or create_phone_model_repository(),
        max_contacts_per_lead=settings.max_contacts_per_lead,
    )


def create_lead_maintenance(
    lead_repository: Optional[LeadRepository] = None,
    event_repository: Optional[NetworkEventRepository] = None,
) -> LeadMaintenance:
    """
    Factory function to create LeadMaintenance.

    Returns:
        LeadMaintenance instance
    """
    return LeadMaintenance(
        lead_repository or create_lead_repository(),
        event_repository or create_network_event_repository(),
        event_retention_days=settings.network_event_retention_days,
    )


def create_phone_model_catalog(
    phone_model_repository: Optional[PhoneModelRepository] = None,
) -> PhoneModelCatalog:
    """
    Factory function to create PhoneModelCatalog.

    Returns:
        PhoneModelCatalog instance
    """
    return PhoneModelCatalog(phone_model_repository or create_phone_model_repository())


def create_seed_phone_models_use_case(
    phone_model_repository: Optional[PhoneModelRepository] = None,
) -> SeedPhoneModels:
    """
    Factory function to create SeedPhoneModels.

    Returns:
        SeedPhoneModels instance
    """
    return SeedPhoneModels(phone_model_repository or create_phone_model_repository())
