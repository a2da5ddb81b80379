"""Order service: the composer and ranking wired to catalog and store."""

from datetime import date
from uuid import UUID

from orderdesk.config import Settings, get_settings
from orderdesk.core.composer import ValidationRules, compose_creation, compose_update
from orderdesk.core.dates import business_today
from orderdesk.core.line_items import ResolveItem
from orderdesk.core.ranking import rank_by_urgency, select_priority_candidates
from orderdesk.core.result import Rejected, RejectionKind, Result
from orderdesk.models.order import Order, OrderCreate, OrderPatch
from orderdesk.models.ranking import RankedOrder
from orderdesk.state.orders import OrderStore
from orderdesk.utils.logging import OrderAuditLogger


class OrderService:
    """
    Entry points for creating, updating and ranking orders.

    Validation happens entirely before the store is written, so a rejected
    request leaves the stored order untouched.
    """

    def __init__(
        self,
        resolve_item: ResolveItem,
        store: OrderStore,
        settings: Settings | None = None,
    ):
        self.resolve_item = resolve_item
        self.store = store
        self.settings = settings or get_settings()
        self.rules = ValidationRules.from_settings(self.settings)
        self.audit = OrderAuditLogger("order_service")

    def today(self) -> date:
        return business_today(self.rules.zone)

    async def create_order(self, payload: OrderCreate) -> Result[Order]:
        """Validate and store a new order."""
        result = await compose_creation(
            payload, self.resolve_item, rules=self.rules, today=self.today()
        )
        if isinstance(result, Rejected):
            self.audit.log_rejected("create", result.reason, result.kind.value, result.field)
            return result

        order = result.value
        await self.store.save(order)
        self.audit.log_created(
            str(order.id),
            order.order_code,
            str(order.total_price),
            items=len(order.items),
        )
        return result

    async def update_order(self, order_id: UUID, patch: OrderPatch) -> Result[Order]:
        """Apply a partial update, all or nothing."""
        order = await self.store.load(order_id)
        if order is None:
            rejected = Rejected("Order not found", None, RejectionKind.NOT_FOUND)
            self.audit.log_rejected(
                "update", rejected.reason, rejected.kind.value, order_id=str(order_id)
            )
            return rejected

        result = await compose_update(order, patch, self.resolve_item, rules=self.rules)
        if isinstance(result, Rejected):
            self.audit.log_rejected(
                "update",
                result.reason,
                result.kind.value,
                result.field,
                order_id=str(order_id),
            )
            return result

        await self.store.save(result.value)
        self.audit.log_updated(str(order_id), patch.provided_fields())
        return result

    async def get_order(self, order_id: UUID) -> Order | None:
        return await self.store.load(order_id)

    async def list_orders(self) -> list[Order]:
        return await self.store.list_all()

    async def priority_orders(self) -> list[RankedOrder]:
        """Open orders needing attention, most urgent first."""
        today = self.today()
        orders = await self.store.list_all()
        candidates = select_priority_candidates(
            orders,
            today,
            priority_threshold=self.settings.priority_score_threshold,
            window_days=self.settings.priority_window_days,
        )
        ranked = rank_by_urgency(candidates, today)
        self.audit.log_ranked(len(candidates), len(ranked), today.isoformat())
        return ranked
