# backend/services/cart.py
"""
Cart and checkout engine.

The cart holds snapshots of batches (price captured when the line is created).
Checkout builds every resulting collection up front; nothing is applied until
the caller commits the returned result.
"""

import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from schemas.cart import CartLine
from schemas.flower import FlowerBatch
from schemas.sale import Sale
from schemas.shift import Shift
from services.errors import EmptyCart, NoActiveShift
from services.inventory import decrement_stock_many, find_flower
from services.shifts import find_open_shift, record_sale


@dataclass(frozen=True)
class CheckoutResult:
    flowers: List[FlowerBatch]
    sales: List[Sale]
    shifts: List[Shift]
    cart: List[CartLine]
    sale: Sale


def _live_stock(flowers: List[FlowerBatch], flower_id: str) -> int:
    flower = find_flower(flowers, flower_id)
    return flower.stock if flower else 0


def add_line(cart: List[CartLine], batch: FlowerBatch, shift: Optional[Shift]) -> List[CartLine]:
    if shift is None:
        raise NoActiveShift()
    if batch.stock <= 0:
        return cart

    existing = next((line for line in cart if line.id == batch.id), None)
    if existing:
        # Capped at the live stock
        if existing.quantity >= batch.stock:
            return cart
        return [
            line.model_copy(update={"quantity": line.quantity + 1}) if line.id == batch.id else line
            for line in cart
        ]
    return [*cart, CartLine(**batch.model_dump(), quantity=1)]


def remove_line(cart: List[CartLine], flower_id: str) -> List[CartLine]:
    return [line for line in cart if line.id != flower_id]


def adjust_quantity(
    cart: List[CartLine], flower_id: str, delta: int, flowers: List[FlowerBatch]
) -> List[CartLine]:
    """Change a line by `delta`. Out of range results leave the line as it was."""
    stock = _live_stock(flowers, flower_id)
    updated = []
    for line in cart:
        if line.id == flower_id:
            new_qty = line.quantity + delta
            if 0 < new_qty <= stock:
                line = line.model_copy(update={"quantity": new_qty})
        updated.append(line)
    return updated


def cart_total(cart: List[CartLine]) -> float:
    return round(sum(line.price * line.quantity for line in cart), 2)


def checkout(
    cart: List[CartLine],
    flowers: List[FlowerBatch],
    sales: List[Sale],
    shifts: List[Shift],
    now: datetime,
) -> CheckoutResult:
    shift = find_open_shift(shifts)
    if shift is None:
        raise NoActiveShift()
    if not cart:
        raise EmptyCart()

    quantities = {}
    for line in cart:
        quantities[line.id] = quantities.get(line.id, 0) + line.quantity

    new_flowers = decrement_stock_many(flowers, quantities)
    sale = build_sale(cart, shift, now)
    new_shifts = record_sale(shifts, shift.id, sale.total)

    return CheckoutResult(
        flowers=new_flowers,
        sales=[*sales, sale],
        shifts=new_shifts,
        cart=[],
        sale=sale,
    )


def build_sale(cart: List[CartLine], shift: Shift, now: datetime) -> Sale:
    return Sale(
        id=uuid.uuid4().hex,
        items=list(cart),
        total=cart_total(cart),
        timestamp=now,
        shift_id=shift.id,
    )
