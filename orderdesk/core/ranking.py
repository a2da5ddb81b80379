"""Urgency ranking for the priority dashboard."""

from datetime import date
from typing import Iterable

from orderdesk.core.dates import business_today, days_until
from orderdesk.models.order import Order, OrderStatus
from orderdesk.models.ranking import RankedOrder, UrgencyTier

OVERDUE_BASE = 100
DUE_TODAY_BONUS = 50
DUE_SOON_BASE = 30
DUE_SOON_STEP = 5
DUE_SOON_DAYS = 3

CRITICAL_PRIORITY = 8
HIGH_PRIORITY = 5

CLOSED_STATUSES = frozenset({OrderStatus.COMPLETED, OrderStatus.CANCELLED})

# Derived fields an already ranked order carries; recomputed on every ranking.
RANKING_FIELDS = {"effective_priority", "urgency_tier"}


def effective_priority(order: Order, today: date) -> int:
    """
    Dashboard score: the order's priority plus deadline pressure.

    Overdue orders gain 100 plus one per day late, orders due today gain 50,
    and orders due in one to three days gain 25, 20 or 15.
    """
    score = order.priority
    if order.expected_delivery_date is None:
        return score

    days = days_until(order.expected_delivery_date, today)
    if days < 0:
        score += OVERDUE_BASE + abs(days)
    elif days == 0:
        score += DUE_TODAY_BONUS
    elif days <= DUE_SOON_DAYS:
        score += DUE_SOON_BASE - DUE_SOON_STEP * days
    return score


def urgency_tier(order: Order, today: date) -> UrgencyTier:
    """Tier used for grouping and colouring; independent of the score."""
    if order.expected_delivery_date is None:
        if order.priority >= CRITICAL_PRIORITY:
            return UrgencyTier.CRITICAL
        if order.priority >= HIGH_PRIORITY:
            return UrgencyTier.HIGH
        return UrgencyTier.NORMAL

    days = days_until(order.expected_delivery_date, today)
    if days < 0:
        return UrgencyTier.CRITICAL
    if days == 0:
        return UrgencyTier.HIGH
    if days <= DUE_SOON_DAYS:
        return UrgencyTier.MEDIUM
    return UrgencyTier.NORMAL


def rank_by_urgency(orders: Iterable[Order], today: date | None = None) -> list[RankedOrder]:
    """
    Attach score and tier to each order and sort most urgent first.

    The sort is stable: orders with equal scores keep their input order.
    Orders are not modified; new ``RankedOrder`` objects are returned.
    """
    today = today or business_today()
    ranked = [
        RankedOrder(
            **order.model_dump(exclude=RANKING_FIELDS),
            effective_priority=effective_priority(order, today),
            urgency_tier=urgency_tier(order, today),
        )
        for order in orders
    ]
    return sorted(ranked, key=lambda entry: entry.effective_priority, reverse=True)


def select_priority_candidates(
    orders: Iterable[Order],
    today: date | None = None,
    *,
    priority_threshold: int = HIGH_PRIORITY,
    window_days: int = DUE_SOON_DAYS,
) -> list[Order]:
    """
    Open orders that belong on the dashboard.

    An order qualifies when it is neither completed nor cancelled and it has
    a high priority, is overdue, or is due within ``window_days``.
    """
    today = today or business_today()
    selected = []
    for order in orders:
        if order.status in CLOSED_STATUSES:
            continue
        due_soon = (
            order.expected_delivery_date is not None
            and days_until(order.expected_delivery_date, today) <= window_days
        )
        if order.priority >= priority_threshold or due_soon:
            selected.append(order)
    return selected
