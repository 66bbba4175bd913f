# backend/services/shifts.py
"""
Shift ledger: cash-drawer sessions. At most one shift is open at a time and a
closed shift never changes again.
"""

import uuid
from datetime import datetime
from typing import List, Optional, Tuple

from schemas.shift import Shift
from services.errors import NoActiveShift, NotFound, ShiftAlreadyOpen


def find_open_shift(shifts: List[Shift]) -> Optional[Shift]:
    return next((s for s in shifts if s.is_open), None)


def open_shift(shifts: List[Shift], start_cash: float, now: datetime) -> Tuple[List[Shift], Shift]:
    if find_open_shift(shifts) is not None:
        raise ShiftAlreadyOpen()

    shift = Shift(
        id=uuid.uuid4().hex,
        opened_at=now,
        closed_at=None,
        start_cash=start_cash,
        end_cash=None,
        total_sales=0.0,
        sales_count=0,
        is_open=True,
    )
    # Newest first
    return [shift, *shifts], shift


def close_shift(shifts: List[Shift], now: datetime) -> Tuple[List[Shift], Shift]:
    current = find_open_shift(shifts)
    if current is None:
        raise NoActiveShift("No shift is open")

    closed = current.model_copy(update={
        "is_open": False,
        "closed_at": now,
        "end_cash": round(current.start_cash + current.total_sales, 2),
    })
    return [closed if s.id == closed.id else s for s in shifts], closed


def record_sale(shifts: List[Shift], shift_id: str, total: float) -> List[Shift]:
    """Add one sale to the open shift's running rollup."""
    target = next((s for s in shifts if s.id == shift_id), None)
    if target is None:
        raise NotFound("Shift not found")
    if not target.is_open:
        raise NoActiveShift("Shift is already closed")

    updated = target.model_copy(update={
        "total_sales": round(target.total_sales + total, 2),
        "sales_count": target.sales_count + 1,
    })
    return [updated if s.id == shift_id else s for s in shifts]
