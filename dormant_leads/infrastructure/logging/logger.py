"""Structured logger for observability."""

import logging
from typing import Any, Optional

# Configure root logger with JSON-like structured format
_logger = logging.getLogger("dormant_leads")
_logger.setLevel(logging.INFO)

# Create console handler if not exists
if not _logger.handlers:
    handler = logging.StreamHandler()
    handler.setLevel(logging.INFO)
    formatter = logging.Formatter(
        "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(formatter)
    _logger.addHandler(handler)

MASK_PREFIX_LENGTH = 8


def mask_hash(msisdn_hash: str) -> str:
    """Keep only the first characters of a subscriber hash for logs."""
    return f"{msisdn_hash[:MASK_PREFIX_LENGTH]}..."


def log_event(
    component: str,
    level: int = logging.INFO,
    **kwargs: Any,
) -> None:
    """
    Log a structured event.

    Args:
        component: Component name (e.g., 'http', 'dormant', 'seed')
        level: Log level (default: INFO)
        **kwargs: Additional structured fields to log
    """
    fields = {"component": component}
    fields.update(kwargs)

    # Format as key=value pairs for readability
    log_parts = [f"{k}={v!r}" for k, v in fields.items()]
    log_message = " | ".join(log_parts)

    _logger.log(level, log_message)


def log_lead_decision(
    lead_id: str,
    msisdn_hash: str,
    dormant_score: float,
    next_action: str,
    exclusions: list[str],
    created: bool,
    **kwargs: Any,
) -> None:
    """
    Log the outcome of evaluating a dormant event.

    Args:
        lead_id: Lead identifier
        msisdn_hash: Subscriber hash (masked before logging)
        dormant_score: Computed score
        next_action: Decided next action
        exclusions: Exclusion reason codes
        created: True if a new lead was created, False if updated
        **kwargs: Additional fields
    """
    log_event(
        component="dormant",
        lead_id=lead_id,
        msisdn_hash=mask_hash(msisdn_hash),
        dormant_score=round(dormant_score, 4),
        next_action=next_action,
        exclusions=exclusions,
        lead_created=created,
        **kwargs,
    )


def log_seed_progress(created: int, total: int, **kwargs: Any) -> None:
    """
    Log seed job progress.

    Args:
        created: Rows inserted so far
        total: Rows to insert
        **kwargs: Additional fields
    """
    log_event(component="seed", created=created, total=total, **kwargs)


def log_request(
    method: str,
    path: str,
    status_code: int,
    duration_ms: float,
    client: Optional[str] = None,
) -> None:
    """
    Log a completed HTTP request.

    Args:
        method: HTTP method
        path: Request path
        status_code: Response status code
        duration_ms: Handling time in milliseconds
        client: Client host, if known
    """
    level = logging.WARNING if status_code >= 400 else logging.INFO
    fields: dict[str, Any] = {
        "method": method,
        "path": path,
        "status_code": status_code,
        "duration_ms": round(duration_ms, 1),
    }
    if client is not None:
        fields["client"] = client
    log_event(component="http", level=level, **fields)


# Export logger instance
logger = _logger
