"""JSON-file phone model catalog reader."""

import json
import os
from pathlib import Path
from typing import Optional

from pydantic import TypeAdapter

from dormant_leads.application.dtos.phone_model import PhoneModel

_PHONE_MODEL_LIST = TypeAdapter(list[PhoneModel])


def default_catalog_path() -> str:
    """Path to data/phone_models.json relative to project root."""
    project_root = Path(__file__).parent.parent.parent.parent.parent
    return str(project_root / "data" / "phone_models.json")


def load_phone_models(path: Optional[str] = None) -> list[PhoneModel]:
    """
    Read and validate a JSON array of phone models.

    Args:
        path: Path to the JSON file. Defaults to data/phone_models.json relative to project root.

    Returns:
        Validated phone models in file order

    Raises:
        FileNotFoundError: If the file does not exist
        json.JSONDecodeError: If the file is not valid JSON
        pydantic.ValidationError: If any record violates the PhoneModel schema
    """
    if path is None:
        path = default_catalog_path()
    if not os.path.exists(path):
        raise FileNotFoundError(f"Phone models file not found: {path}")

    with open(path, "r", encoding="utf-8") as file:
        raw = json.load(file)

    return _PHONE_MODEL_LIST.validate_python(raw)
