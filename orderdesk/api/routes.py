"""API routes for the order desk."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status

from orderdesk.config import get_settings
from orderdesk.core.result import Rejected, RejectionKind
from orderdesk.core.service import OrderService
from orderdesk.models.order import Order, OrderCreate, OrderPatch
from orderdesk.models.ranking import RankedOrder
from orderdesk.state.catalog import SAMPLE_CATALOG, InMemoryCatalog, RedisCatalog
from orderdesk.state.manager import get_state_manager
from orderdesk.state.orders import InMemoryOrderStore, RedisOrderStore
from orderdesk.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()

_REJECTION_STATUS = {
    RejectionKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    RejectionKind.REFERENTIAL: status.HTTP_400_BAD_REQUEST,
    RejectionKind.CONSISTENCY: status.HTTP_400_BAD_REQUEST,
    RejectionKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
}

# Memory backend collaborators, shared for the life of the process
_memory_catalog = InMemoryCatalog(SAMPLE_CATALOG)
_memory_store = InMemoryOrderStore()


# Dependency to get the order service


async def get_order_service() -> OrderService:
    """Build the order service on the configured storage backend."""
    settings = get_settings()
    if settings.storage_backend == "redis":
        state_manager = await get_state_manager()
        catalog = RedisCatalog(state_manager)
        return OrderService(catalog.resolve_item, RedisOrderStore(state_manager), settings)
    return OrderService(_memory_catalog.resolve_item, _memory_store, settings)


def _raise_rejection(rejected: Rejected) -> None:
    raise HTTPException(
        status_code=_REJECTION_STATUS[rejected.kind],
        detail={"message": rejected.reason, "field": rejected.field},
    )


# Routes


@router.get("/orders", response_model=list[Order])
async def list_orders(service: OrderService = Depends(get_order_service)) -> list[Order]:
    """List all orders, newest first."""
    return await service.list_orders()


@router.get("/orders/priority", response_model=list[RankedOrder])
async def get_priority_orders(
    service: OrderService = Depends(get_order_service),
) -> list[RankedOrder]:
    """
    Orders needing attention, most urgent first.

    Each order carries its ``effective_priority`` score and ``urgency_tier``.
    """
    return await service.priority_orders()


@router.post(
    "/orders",
    response_model=Order,
    status_code=status.HTTP_201_CREATED,
)
async def create_order(
    request: OrderCreate,
    service: OrderService = Depends(get_order_service),
) -> Order:
    """
    Create an order.

    The total price is computed from the catalog; any total sent by the
    caller is ignored.
    """
    result = await service.create_order(request)
    if isinstance(result, Rejected):
        _raise_rejection(result)
    return result.value


@router.get("/orders/{order_id}", response_model=Order)
async def get_order(
    order_id: UUID,
    service: OrderService = Depends(get_order_service),
) -> Order:
    """Get order details."""
    order = await service.get_order(order_id)
    if order is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"message": "Order not found", "field": None},
        )
    return order


@router.put("/orders/{order_id}", response_model=Order)
async def update_order(
    order_id: UUID,
    request: OrderPatch,
    service: OrderService = Depends(get_order_service),
) -> Order:
    """
    Partially update an order.

    Keys left out of the body are untouched; ``null`` clears dates and text.
    """
    result = await service.update_order(order_id, request)
    if isinstance(result, Rejected):
        _raise_rejection(result)
    logger.debug("order_update_served", order_id=str(order_id))
    return result.value
