"""Seed the phone model catalog from the JSON file.

Usage:
    python -m dormant_leads.seed
"""

import asyncio
import sys

from dotenv import load_dotenv

from dormant_leads.adapters.outbound.phone_model import load_phone_models
from dormant_leads.infrastructure.config.settings import settings
from dormant_leads.infrastructure.logging.logger import log_event, logger
from dormant_leads.infrastructure.wiring.dependencies import create_seed_phone_models_use_case


def main() -> int:
    """
    Replace the phone model catalog with the seed file contents.

    Returns:
        Number of inserted phone models

    Exits with status 1 on any failure.
    """
    try:
        phone_models = load_phone_models(settings.phone_models_path or None)
        created = asyncio.run(create_seed_phone_models_use_case().run(phone_models))
    except Exception:
        logger.exception("Error seeding phone models")
        sys.exit(1)

    log_event(component="seed", action="completed", created=created)
    return created


if __name__ == "__main__":
    load_dotenv()
    main()
