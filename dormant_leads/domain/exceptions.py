"""Domain exceptions."""


class DormantLeadsError(Exception):
    """Base class for errors raised by the dormant leads domain."""


class LeadNotFoundError(DormantLeadsError):
    """Raised when a lead id does not exist."""

    def __init__(self, lead_id: str) -> None:
        super().__init__(f"Lead not found: {lead_id}")
        self.lead_id = lead_id


class PhoneModelNotFoundError(DormantLeadsError):
    """Raised when a phone model id is not in the catalog."""

    def __init__(self, phone_model_id: str) -> None:
        super().__init__(f"Phone model not found: {phone_model_id}")
        self.phone_model_id = phone_model_id


class InvalidLeadTransitionError(DormantLeadsError):
    """Raised when a lead cannot move to the requested status."""

    def __init__(self, lead_id: str, current: str, target: str, reason: str = "") -> None:
        message = f"Lead {lead_id} cannot move from {current} to {target}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.lead_id = lead_id
        self.current = current
        self.target = target
