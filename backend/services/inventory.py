# backend/services/inventory.py
"""
Inventory ledger: flower batches, their stock and their shelf-life clock.

Functions take the current collection and return a new one; the caller
swaps it in as a whole.
"""

import math
import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from schemas.flower import FlowerBatch, FlowerOut, FlowerUpsert, FlowerView
from services.errors import InsufficientStock, NotFound, ValidationRejected

DEFAULT_THRESHOLD = 5
DEFAULT_SHELF_LIFE_DAYS = 7
DEFAULT_STOCK = 0
SECONDS_PER_DAY = 24 * 60 * 60


def _as_number(value: Any) -> Optional[float]:
    """Parse form input into a finite float, or None."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _int_or_default(value: Any, default: int) -> int:
    number = _as_number(value)
    if number is None or number < 0:
        return default
    return int(number)


def _shelf_life_or_default(value: Any) -> float:
    number = _as_number(value)
    if number is None or number <= 0:
        return DEFAULT_SHELF_LIFE_DAYS
    return number


def find_flower(flowers: List[FlowerBatch], flower_id: str) -> Optional[FlowerBatch]:
    return next((f for f in flowers if f.id == flower_id), None)


def get_flower(flowers: List[FlowerBatch], flower_id: str) -> FlowerBatch:
    flower = find_flower(flowers, flower_id)
    if flower is None:
        raise NotFound("Flower batch not found")
    return flower


def upsert_flower(
    flowers: List[FlowerBatch], payload: FlowerUpsert, now: datetime
) -> Tuple[List[FlowerBatch], FlowerBatch]:
    """Create a batch, or replace an existing one keeping its received date."""
    name = (payload.name or "").strip()
    if not name:
        raise ValidationRejected("Name is required")

    price = _as_number(payload.price)
    if price is None or price < 0:
        raise ValidationRejected("Price must be a non-negative number")

    existing = find_flower(flowers, payload.id) if payload.id else None

    batch = FlowerBatch(
        id=existing.id if existing else uuid.uuid4().hex,
        name=name,
        price=price,
        stock=_int_or_default(payload.stock, DEFAULT_STOCK),
        threshold=_int_or_default(payload.threshold, DEFAULT_THRESHOLD),
        shelf_life_days=_shelf_life_or_default(payload.shelf_life_days),
        added_at=existing.added_at if existing else now,
        image=payload.image or f"https://picsum.photos/200/200?random={int(now.timestamp() * 1000)}",
        description=payload.description or "",
    )

    if existing:
        updated = [batch if f.id == existing.id else f for f in flowers]
    else:
        updated = [*flowers, batch]
    return updated, batch


def remove_flower(flowers: List[FlowerBatch], flower_id: str) -> List[FlowerBatch]:
    return [f for f in flowers if f.id != flower_id]


def decrement_stock_many(
    flowers: List[FlowerBatch], quantities: Dict[str, int]
) -> List[FlowerBatch]:
    """Apply several stock decrements as one update.

    Either every batch is decremented or, if any would go negative or is
    missing, none is.
    """
    by_id = {f.id: f for f in flowers}
    for flower_id, qty in quantities.items():
        if qty < 0:
            raise ValidationRejected("Quantity must not be negative")
        flower = by_id.get(flower_id)
        if flower is None:
            raise InsufficientStock(f"Flower batch {flower_id} is no longer in stock")
        if flower.stock - qty < 0:
            raise InsufficientStock(f"Insufficient stock for {flower.name}")

    return [
        f.model_copy(update={"stock": f.stock - quantities[f.id]}) if f.id in quantities else f
        for f in flowers
    ]


def decrement_stock(flowers: List[FlowerBatch], flower_id: str, quantity: int) -> List[FlowerBatch]:
    return decrement_stock_many(flowers, {flower_id: quantity})


# ---- shelf life ----

def days_since_added(flower: FlowerBatch, now: datetime) -> float:
    return (now - flower.added_at).total_seconds() / SECONDS_PER_DAY


def days_left(flower: FlowerBatch, now: datetime) -> float:
    return flower.shelf_life_days - days_since_added(flower, now)


def is_low_stock(flower: FlowerBatch) -> bool:
    return flower.stock <= flower.threshold


def to_view(flower: FlowerBatch) -> FlowerView:
    return FlowerView(**flower.model_dump())


def to_out(flower: FlowerBatch, now: datetime) -> FlowerOut:
    left = days_left(flower, now)
    return FlowerOut(
        **flower.model_dump(),
        days_left=round(left, 1),
        status="EXPIRED" if left < 0 else "Fresh",
        low_stock=is_low_stock(flower),
    )
