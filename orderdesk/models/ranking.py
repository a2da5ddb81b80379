"""Dashboard ranking models."""

from enum import Enum

from orderdesk.models.order import Order


class UrgencyTier(str, Enum):
    """Dashboard grouping derived from priority and delivery proximity."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    NORMAL = "normal"


class RankedOrder(Order):
    """An order with its computed dashboard score attached."""

    effective_priority: int
    urgency_tier: UrgencyTier
