"""Line-item resolution against the catalog."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Awaitable, Callable, Sequence

from orderdesk.core.result import Accepted, Rejected, RejectionKind, Result
from orderdesk.core.validators import parse_integer
from orderdesk.models.catalog import CatalogItem
from orderdesk.models.order import LineItemInput, OrderItem

ResolveItem = Callable[[str], Awaitable[CatalogItem | None]]


@dataclass(frozen=True)
class ResolvedItems:
    """Snapshot lines in request order and their exact total."""

    order_items: list[OrderItem]
    total_price: Decimal


async def resolve_line_items(
    lines: Sequence[LineItemInput],
    resolve_item: ResolveItem,
) -> Result[ResolvedItems]:
    """
    Resolve requested lines against the catalog, in order.

    Lookups are issued one at a time so the first failing line is the one
    reported; nothing after it is looked up. The caller rejects an empty
    list before getting here.

    Args:
        lines: Requested lines
        resolve_item: Catalog lookup returning None for unknown ids

    Returns:
        Accepted(ResolvedItems) or the first Rejected
    """
    order_items: list[OrderItem] = []
    total_price = Decimal("0")

    for line in lines:
        item_id = str(line.item_id).strip()
        item = await resolve_item(item_id)
        if item is None:
            return Rejected(
                f"Item with id {item_id} not found",
                "items",
                RejectionKind.REFERENTIAL,
            )

        quantity = parse_integer(line.quantity)
        if quantity is None or quantity < 1:
            return Rejected("Quantity must be a positive integer", "items")

        order_items.append(
            OrderItem(
                item_id=item.id,
                name=item.name,
                unit_price=item.unit_price,
                quantity=quantity,
                customization_request=(line.customization_request or "").strip(),
            )
        )
        total_price += item.unit_price * quantity

    return Accepted(ResolvedItems(order_items=order_items, total_price=total_price))
