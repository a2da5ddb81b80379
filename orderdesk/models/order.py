"""Order-related data models."""

from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr
from pydantic.alias_generators import to_camel


class OrderSource(str, Enum):
    """Channel the order came in through."""

    INSTAGRAM = "instagram"
    FACEBOOK = "facebook"
    WHATSAPP = "whatsapp"
    CALL = "call"
    OFFLINE = "offline"


class OrderStatus(str, Enum):
    """Order workflow status. Any value may be set directly."""

    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class PaymentStatus(str, Enum):
    """How much of the order has been paid."""

    UNPAID = "unpaid"
    PARTIALLY_PAID = "partially_paid"
    PAID = "paid"
    CASH_ON_DELIVERY = "cash_on_delivery"
    REFUNDED = "refunded"


class ConfirmationStatus(str, Enum):
    """Whether the customer has confirmed the order."""

    UNCONFIRMED = "unconfirmed"
    PENDING_CONFIRMATION = "pending_confirmation"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class DeliveryStatus(str, Enum):
    """Where the shipment is."""

    NOT_SHIPPED = "not_shipped"
    SHIPPED = "shipped"
    IN_TRANSIT = "in_transit"
    OUT_FOR_DELIVERY = "out_for_delivery"
    DELIVERED = "delivered"
    RETURNED = "returned"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class OrderItem(BaseModel):
    """Line item with the catalog name and price captured at order time."""

    item_id: str
    name: str
    unit_price: Decimal = Field(ge=0)
    quantity: int = Field(ge=1)
    customization_request: str = ""

    @property
    def subtotal(self) -> Decimal:
        """Price of this line."""
        return self.unit_price * self.quantity


class Order(BaseModel):
    """Complete order record as kept by the order store."""

    id: UUID = Field(default_factory=uuid4)
    order_code: str
    order_from: OrderSource
    customer_name: str
    customer_id: str
    address: str = ""

    # Items
    items: list[OrderItem] = Field(default_factory=list)
    total_price: Decimal = Field(default=Decimal("0"), ge=0)

    # Statuses
    status: OrderStatus = OrderStatus.PENDING
    payment_status: PaymentStatus = PaymentStatus.UNPAID
    paid_amount: Decimal = Field(default=Decimal("0"), ge=0)
    confirmation_status: ConfirmationStatus = ConfirmationStatus.UNCONFIRMED

    # Delivery
    delivery_status: DeliveryStatus = DeliveryStatus.NOT_SHIPPED
    tracking_id: str = ""
    delivery_partner: str = ""
    expected_delivery_date: date | None = None
    actual_delivery_date: date | None = None

    # Metadata
    customer_notes: str = ""
    priority: int = 0
    created_at: datetime = Field(default_factory=_utcnow)


class _RequestModel(BaseModel):
    """Raw caller input.

    Values are kept as the caller sent them; the validators in
    ``orderdesk.core`` do all parsing so that every rejection carries a
    field-specific message. Both snake_case and camelCase keys are accepted.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def provided(self, name: str) -> bool:
        """True if the caller sent ``name``, even as an explicit null."""
        return name in self.model_fields_set


class LineItemInput(_RequestModel):
    """One requested line: a catalog reference and a quantity."""

    item_id: StrictStr | StrictInt
    # Numeric inputs stay raw so booleans and fractions reach the validators.
    quantity: Any = None
    customization_request: str | None = None


class _OrderFields(_RequestModel):
    order_from: str | None = None
    customer_name: str | None = None
    customer_id: str | None = None
    address: str | None = None
    items: list[LineItemInput] | None = None
    status: str | None = None
    payment_status: str | None = None
    paid_amount: Any = None
    confirmation_status: str | None = None
    delivery_status: str | None = None
    tracking_id: str | None = None
    delivery_partner: str | None = None
    expected_delivery_date: date | str | None = None
    actual_delivery_date: date | str | None = None
    customer_notes: str | None = None
    priority: Any = None


class OrderCreate(_OrderFields):
    """Input for creating an order. Absent optional fields take defaults."""


class OrderPatch(_OrderFields):
    """Partial update.

    A key that is absent leaves the stored value alone. A key sent as null
    is a deliberate value: it clears dates and free text, and is rejected on
    fields that cannot be empty.
    """

    def provided_fields(self) -> list[str]:
        """Names of the fields present in this patch, in declaration order."""
        return [name for name in type(self).model_fields if self.provided(name)]
