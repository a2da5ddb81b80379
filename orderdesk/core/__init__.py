"""Order consistency and prioritization engine."""

from orderdesk.core.composer import ValidationRules, compose_creation, compose_update
from orderdesk.core.line_items import ResolvedItems, resolve_line_items
from orderdesk.core.payment import PaymentState, check_payment
from orderdesk.core.ranking import (
    effective_priority,
    rank_by_urgency,
    select_priority_candidates,
    urgency_tier,
)
from orderdesk.core.result import Accepted, Rejected, RejectionKind, Result
from orderdesk.core.service import OrderService

__all__ = [
    # Results
    "Accepted",
    "Rejected",
    "RejectionKind",
    "Result",
    # Components
    "resolve_line_items",
    "ResolvedItems",
    "check_payment",
    "PaymentState",
    "compose_creation",
    "compose_update",
    "ValidationRules",
    "rank_by_urgency",
    "effective_priority",
    "urgency_tier",
    "select_priority_candidates",
    # Service
    "OrderService",
]
