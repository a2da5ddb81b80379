"""Order state composition for creation and partial updates.

Both entry points validate the whole request before producing anything:
the first failing rule is returned as a ``Rejected`` and no order is built,
so a caller can only ever store a fully consistent order.
"""

import random
from dataclasses import dataclass, field
from datetime import date, timezone, tzinfo
from typing import Any, Callable

from orderdesk.config import Settings, get_settings
from orderdesk.core.dates import business_today, business_zone
from orderdesk.core.line_items import ResolveItem, resolve_line_items
from orderdesk.core.payment import check_payment
from orderdesk.core.result import Accepted, Rejected, Result
from orderdesk.core.validators import (
    check_date,
    check_enum,
    check_int_range,
    check_max_length,
    check_non_negative_amount,
    check_not_blank,
)
from orderdesk.models.order import (
    ConfirmationStatus,
    DeliveryStatus,
    Order,
    OrderCreate,
    OrderPatch,
    OrderSource,
    OrderStatus,
    PaymentStatus,
)

Check = Callable[[], Result[Any]]


@dataclass(frozen=True)
class ValidationRules:
    """Limits the composer enforces."""

    priority_min: int = 0
    priority_max: int = 5
    max_customer_notes_length: int = 5000
    zone: tzinfo = field(default=timezone.utc)

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "ValidationRules":
        settings = settings or get_settings()
        return cls(
            priority_min=settings.priority_min,
            priority_max=settings.priority_max,
            max_customer_notes_length=settings.max_customer_notes_length,
            zone=business_zone(settings.business_timezone),
        )


def generate_order_code() -> str:
    """Human-readable order code such as ``ORD482913``."""
    return f"ORD{random.randint(100000, 999999)}"


def _run_checks(checks: list[tuple[str, Check]]) -> Result[dict[str, Any]]:
    """Run checks in order, stopping at the first rejection."""
    values: dict[str, Any] = {}
    for name, check in checks:
        result = check()
        if isinstance(result, Rejected):
            return result
        values[name] = result.value
    return Accepted(values)


def _clean_text(value: str | None) -> str:
    return (value or "").strip()


def _notes_check(value: str | None, rules: ValidationRules) -> Check:
    return lambda: check_max_length(
        value,
        field="customer_notes",
        label="Customer notes",
        max_length=rules.max_customer_notes_length,
    )


def _priority_check(value: Any, rules: ValidationRules, allow_absent: bool) -> Check:
    return lambda: check_int_range(
        value,
        field="priority",
        label="Priority",
        minimum=rules.priority_min,
        maximum=rules.priority_max,
        allow_absent=allow_absent,
    )


def _missing_required(payload: OrderCreate) -> str | None:
    if not payload.order_from:
        return "order_from"
    if not _clean_text(payload.customer_name):
        return "customer_name"
    if not _clean_text(payload.customer_id):
        return "customer_id"
    return None


async def compose_creation(
    payload: OrderCreate,
    resolve_item: ResolveItem,
    *,
    rules: ValidationRules | None = None,
    today: date | None = None,
    order_code: str | None = None,
) -> Result[Order]:
    """
    Validate a creation request and build the new order.

    Args:
        payload: Raw creation input
        resolve_item: Catalog lookup
        rules: Limits to enforce (defaults from settings)
        today: Business date for the not-in-the-past delivery check
        order_code: Code to assign; generated when omitted

    Returns:
        Accepted(Order) ready to be saved, or the first Rejected
    """
    rules = rules or ValidationRules.from_settings()
    today = today or business_today(rules.zone)

    notes = _notes_check(payload.customer_notes, rules)()
    if isinstance(notes, Rejected):
        return notes

    missing = _missing_required(payload)
    if missing:
        return Rejected("Order source, customer name, and customer ID are required", missing)
    if not payload.items:
        return Rejected("At least one item is required", "items")

    checked = _run_checks(
        [
            ("order_from", lambda: check_enum(
                payload.order_from, OrderSource, field="order_from", label="order source"
            )),
            ("status", lambda: check_enum(
                payload.status, OrderStatus, field="status", label="status"
            )),
            ("confirmation_status", lambda: check_enum(
                payload.confirmation_status,
                ConfirmationStatus,
                field="confirmation_status",
                label="confirmation status",
            )),
            ("delivery_status", lambda: check_enum(
                payload.delivery_status,
                DeliveryStatus,
                field="delivery_status",
                label="delivery status",
            )),
            ("priority", _priority_check(payload.priority, rules, allow_absent=True)),
            ("expected_delivery_date", lambda: check_date(
                payload.expected_delivery_date,
                field="expected_delivery_date",
                label="expected delivery date",
                not_before=today,
                zone=rules.zone,
            )),
            ("actual_delivery_date", lambda: check_date(
                payload.actual_delivery_date,
                field="actual_delivery_date",
                label="actual delivery date",
                zone=rules.zone,
            )),
        ]
    )
    if isinstance(checked, Rejected):
        return checked
    values = checked.value

    resolved = await resolve_line_items(payload.items, resolve_item)
    if isinstance(resolved, Rejected):
        return resolved

    payment = check_payment(
        resolved.value.total_price,
        payment_status=payload.payment_status,
        paid_amount=payload.paid_amount,
    )
    if isinstance(payment, Rejected):
        return payment

    order = Order(
        order_code=order_code or generate_order_code(),
        order_from=values["order_from"],
        customer_name=_clean_text(payload.customer_name),
        customer_id=_clean_text(payload.customer_id),
        address=_clean_text(payload.address),
        items=resolved.value.order_items,
        total_price=resolved.value.total_price,
        status=values["status"] or OrderStatus.PENDING,
        payment_status=payment.value.payment_status,
        paid_amount=payment.value.paid_amount,
        confirmation_status=values["confirmation_status"] or ConfirmationStatus.UNCONFIRMED,
        delivery_status=values["delivery_status"] or DeliveryStatus.NOT_SHIPPED,
        tracking_id=_clean_text(payload.tracking_id),
        delivery_partner=_clean_text(payload.delivery_partner),
        expected_delivery_date=values["expected_delivery_date"],
        actual_delivery_date=values["actual_delivery_date"],
        customer_notes=_clean_text(payload.customer_notes),
        priority=values["priority"] if values["priority"] is not None else 0,
    )
    return Accepted(order)


def _update_checks(patch: OrderPatch, rules: ValidationRules) -> list[tuple[str, Check]]:
    """Checks for the scalar fields present in ``patch``, in evaluation order."""
    candidates: list[tuple[str, Check]] = [
        ("customer_notes", _notes_check(patch.customer_notes, rules)),
        ("customer_name", lambda: check_not_blank(
            patch.customer_name, field="customer_name", label="Customer name"
        )),
        ("customer_id", lambda: check_not_blank(
            patch.customer_id, field="customer_id", label="Customer ID"
        )),
        ("order_from", lambda: check_enum(
            patch.order_from,
            OrderSource,
            field="order_from",
            label="order source",
            allow_absent=False,
        )),
        ("status", lambda: check_enum(
            patch.status, OrderStatus, field="status", label="status", allow_absent=False
        )),
        ("confirmation_status", lambda: check_enum(
            patch.confirmation_status,
            ConfirmationStatus,
            field="confirmation_status",
            label="confirmation status",
            allow_absent=False,
        )),
        ("delivery_status", lambda: check_enum(
            patch.delivery_status,
            DeliveryStatus,
            field="delivery_status",
            label="delivery status",
            allow_absent=False,
        )),
        ("priority", _priority_check(patch.priority, rules, allow_absent=False)),
        # Dates already in the past stay editable on update.
        ("expected_delivery_date", lambda: check_date(
            patch.expected_delivery_date,
            field="expected_delivery_date",
            label="expected delivery date",
            zone=rules.zone,
        )),
        ("actual_delivery_date", lambda: check_date(
            patch.actual_delivery_date,
            field="actual_delivery_date",
            label="actual delivery date",
            zone=rules.zone,
        )),
    ]
    return [(name, check) for name, check in candidates if patch.provided(name)]


def _null_payment_field(patch: OrderPatch) -> Rejected | None:
    if patch.provided("payment_status") and patch.payment_status is None:
        result = check_enum(
            None,
            PaymentStatus,
            field="payment_status",
            label="payment status",
            allow_absent=False,
        )
        return result if isinstance(result, Rejected) else None
    if patch.provided("paid_amount") and patch.paid_amount is None:
        result = check_non_negative_amount(
            None, field="paid_amount", label="Paid amount", allow_absent=False
        )
        return result if isinstance(result, Rejected) else None
    return None


async def compose_update(
    order: Order,
    patch: OrderPatch,
    resolve_item: ResolveItem,
    *,
    rules: ValidationRules | None = None,
) -> Result[Order]:
    """
    Validate a partial update against the stored order and merge it.

    Only fields present in ``patch`` change. Payment rules are re-checked
    on the post-merge values whenever a payment field is sent or the item
    list changes the total.

    Returns:
        Accepted(updated copy of ``order``) or the first Rejected
    """
    rules = rules or ValidationRules.from_settings()

    checked = _run_checks(_update_checks(patch, rules))
    if isinstance(checked, Rejected):
        return checked
    updates: dict[str, Any] = checked.value

    if "customer_notes" in updates:
        updates["customer_notes"] = _clean_text(updates["customer_notes"])
    for name in ("address", "tracking_id", "delivery_partner"):
        if patch.provided(name):
            updates[name] = _clean_text(getattr(patch, name))

    total_price = order.total_price
    if patch.provided("items"):
        if not patch.items:
            return Rejected("At least one item is required", "items")
        resolved = await resolve_line_items(patch.items, resolve_item)
        if isinstance(resolved, Rejected):
            return resolved
        total_price = resolved.value.total_price
        updates["items"] = resolved.value.order_items
        updates["total_price"] = total_price

    null_payment = _null_payment_field(patch)
    if null_payment is not None:
        return null_payment

    payment_sent = patch.provided("payment_status") or patch.provided("paid_amount")
    if payment_sent or total_price != order.total_price:
        payment = check_payment(
            total_price,
            payment_status=patch.payment_status,
            paid_amount=patch.paid_amount,
            current_status=order.payment_status,
            current_paid=order.paid_amount,
        )
        if isinstance(payment, Rejected):
            return payment
        if patch.provided("payment_status"):
            updates["payment_status"] = payment.value.payment_status
        if patch.provided("paid_amount"):
            updates["paid_amount"] = payment.value.paid_amount

    return Accepted(order.model_copy(update=updates))
