"""
Daily vendor revenue and runner earnings.

The day is the local calendar day (APP_TIMEZONE) containing ``now``. The
summing functions are pure over order data; the async wrappers only narrow
the query before handing rows to them.
"""
from datetime import datetime, timedelta, timezone, tzinfo
from decimal import Decimal
from typing import Iterable, List, NamedTuple, Optional, Tuple
from uuid import UUID
from zoneinfo import ZoneInfo

from tortoise import timezone as tz

from studel.core.auth import Actor
from studel.core.config import APP_TIMEZONE
from studel.models.order import Order, OrderStatus
from studel.services import order_store


class DailyTotal(NamedTuple):
    day_start: datetime
    day_end: datetime
    order_count: int
    total: Decimal
    orders: List[Order]


def local_zone(name: str = APP_TIMEZONE) -> tzinfo:
    if name.upper() == "UTC":
        return timezone.utc
    return ZoneInfo(name)


def day_bounds(now: datetime, zone: Optional[tzinfo] = None) -> Tuple[datetime, datetime]:
    """Local midnight to next local midnight around ``now``, returned in UTC."""
    zone = zone or local_zone()
    local_now = _as_utc(now).astimezone(zone)
    start = datetime(local_now.year, local_now.month, local_now.day, tzinfo=zone)
    end = datetime.combine(start.date() + timedelta(days=1), start.time(), tzinfo=zone)
    return start.astimezone(timezone.utc), end.astimezone(timezone.utc)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def vendor_daily_summary(orders: Iterable[Order], now: datetime, zone: Optional[tzinfo] = None) -> DailyTotal:
    """Sum of total_price (delivery fee excluded) over today's non-cancelled orders."""
    start, end = day_bounds(now, zone)
    todays = [
        o for o in orders
        if start <= _as_utc(o.created_at) < end and o.status != OrderStatus.CANCELLED
    ]
    total = sum((o.total_price for o in todays), Decimal("0"))
    return DailyTotal(start, end, len(todays), total, todays)


def runner_daily_earnings(
    orders: Iterable[Order], runner_id: UUID, now: datetime, zone: Optional[tzinfo] = None
) -> DailyTotal:
    """Sum of delivery_fee over the runner's orders delivered today."""
    start, end = day_bounds(now, zone)
    todays = [
        o for o in orders
        if o.runner_id == runner_id
        and o.status == OrderStatus.DELIVERED
        and start <= _as_utc(o.created_at) < end
    ]
    total = sum((o.delivery_fee for o in todays), Decimal("0"))
    return DailyTotal(start, end, len(todays), total, todays)


async def fetch_vendor_daily_summary(vendor_id: UUID, now: Optional[datetime] = None) -> DailyTotal:
    now = now or tz.now()
    start, end = day_bounds(now)
    orders = await order_store.list_orders(vendor_id=vendor_id, created_from=start, created_to=end)
    return vendor_daily_summary(orders, now)


async def fetch_runner_daily_earnings(actor: Actor, now: Optional[datetime] = None) -> DailyTotal:
    now = now or tz.now()
    start, end = day_bounds(now)
    orders = await order_store.list_orders(
        runner_id=actor.id,
        statuses=[OrderStatus.DELIVERED],
        created_from=start,
        created_to=end,
    )
    return runner_daily_earnings(orders, actor.id, now)
