"""Data models for the order desk."""

from orderdesk.models.catalog import CatalogItem
from orderdesk.models.order import (
    ConfirmationStatus,
    DeliveryStatus,
    LineItemInput,
    Order,
    OrderCreate,
    OrderItem,
    OrderPatch,
    OrderSource,
    OrderStatus,
    PaymentStatus,
)
from orderdesk.models.ranking import RankedOrder, UrgencyTier

__all__ = [
    # Catalog
    "CatalogItem",
    # Order
    "Order",
    "OrderItem",
    "OrderSource",
    "OrderStatus",
    "PaymentStatus",
    "ConfirmationStatus",
    "DeliveryStatus",
    # Requests
    "OrderCreate",
    "OrderPatch",
    "LineItemInput",
    # Ranking
    "RankedOrder",
    "UrgencyTier",
]
