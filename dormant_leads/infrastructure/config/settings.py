"""Application settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration settings."""

    debug_mode: bool = False
    lead_repository: str = "in_memory"  # in_memory or postgres
    network_event_repository: str = "in_memory"  # in_memory or postgres
    phone_model_repository: str = "in_memory"  # in_memory or postgres
    database_url: str = ""  # Required when any repository is postgres
    create_tables: bool = False  # Create missing tables at startup instead of running alembic

    # Dormant detection rules
    min_days_after_swap: int = 3
    max_activation_window_days: int = 14
    lead_ttl_days: int = 30
    max_swaps_30d_threshold: int = 2
    min_days_between_contacts: int = 14
    max_contacts_per_lead: int = 2

    network_event_retention_days: int = 90
    phone_models_path: str = ""  # Defaults to data/phone_models.json in the project root

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",
    )


settings = Settings()
