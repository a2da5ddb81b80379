"""Payment consistency between status, paid amount and order total."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from orderdesk.core.result import Accepted, Rejected, RejectionKind, Result
from orderdesk.core.validators import check_enum, check_non_negative_amount
from orderdesk.models.order import PaymentStatus


@dataclass(frozen=True)
class PaymentState:
    """Payment fields as they will be stored once the request is merged."""

    payment_status: PaymentStatus
    paid_amount: Decimal


def check_payment(
    total_price: Decimal,
    *,
    payment_status: Any = None,
    paid_amount: Any = None,
    current_status: PaymentStatus = PaymentStatus.UNPAID,
    current_paid: Decimal = Decimal("0"),
) -> Result[PaymentState]:
    """
    Validate payment fields against the effective order total.

    ``payment_status`` and ``paid_amount`` are the raw requested values; None
    means "keep ``current_status`` / ``current_paid``". The amount and
    partially-paid rules are evaluated on the merged values, so changing only
    one of the two fields cannot leave the order inconsistent.

    Args:
        total_price: New total if items changed, otherwise the stored total
        payment_status: Requested payment status, or None
        paid_amount: Requested paid amount, or None
        current_status: Stored status (UNPAID on creation)
        current_paid: Stored paid amount (0 on creation)

    Returns:
        Accepted(PaymentState) with the effective values, or Rejected
    """
    status_check = check_enum(
        payment_status, PaymentStatus, field="payment_status", label="payment status"
    )
    if isinstance(status_check, Rejected):
        return status_check

    amount_check = check_non_negative_amount(
        paid_amount, field="paid_amount", label="Paid amount"
    )
    if isinstance(amount_check, Rejected):
        return amount_check

    effective_status = status_check.value or current_status
    effective_paid = amount_check.value if amount_check.value is not None else current_paid

    if effective_paid > total_price:
        return Rejected(
            "Paid amount cannot exceed total price",
            "paid_amount",
            RejectionKind.CONSISTENCY,
        )

    if effective_status == PaymentStatus.PARTIALLY_PAID and not (
        Decimal("0") < effective_paid < total_price
    ):
        return Rejected(
            "Partially paid orders must have a paid amount greater than 0 "
            "and less than the total price",
            "paid_amount",
            RejectionKind.CONSISTENCY,
        )

    return Accepted(PaymentState(payment_status=effective_status, paid_amount=effective_paid))
