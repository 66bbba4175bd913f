# routes/reports.py
from collections import defaultdict
from datetime import datetime, timezone
from typing import Optional, List

from fastapi import APIRouter, Depends, HTTPException, Query

from services import inventory
from services.controller import PosController
from utils.session import require_session
from schemas.reports import InventorySummary, SalesSummaryResponse, SalesSummaryItem

router = APIRouter(prefix="/reports", tags=["Reports"])

# -----------------------------
# 1) Inventory dashboard
# -----------------------------
@router.get("/inventory", response_model=InventorySummary)
def report_inventory(controller: PosController = Depends(require_session)):
    now = controller.clock()
    rows = [inventory.to_out(f, now) for f in controller.list_flowers()]
    return InventorySummary(
        total_items=sum(r.stock for r in rows),
        low_stock=sum(1 for r in rows if r.low_stock),
        expired=sum(1 for r in rows if r.status == "EXPIRED"),
        items=rows,
    )

# -----------------------------
# 2) Sales summary per day
# -----------------------------
def _parse_iso(s: Optional[str]) -> Optional[datetime]:
    if not s:
        return None
    try:
        dt = datetime.fromisoformat(s)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Bad datetime format: {s}")
    # Naive input is read as UTC, like every stored timestamp
    return dt if dt.tzinfo else dt.replace(tzinfo=timezone.utc)

@router.get("/sales-summary", response_model=SalesSummaryResponse)
def report_sales_summary(
    date_from: Optional[str] = Query(None, description="ISO datetime from"),
    date_to: Optional[str] = Query(None, description="ISO datetime to"),
    controller: PosController = Depends(require_session),
):
    fdt = _parse_iso(date_from)
    tdt = _parse_iso(date_to)

    per_day = defaultdict(lambda: [0, 0.0])
    for sale in controller.state.sales:
        if fdt and sale.timestamp < fdt:
            continue
        if tdt and sale.timestamp > tdt:
            continue
        bucket = per_day[sale.timestamp.date()]
        bucket[0] += 1
        bucket[1] += sale.total

    items: List[SalesSummaryItem] = [
        SalesSummaryItem(date=d, sales=count, total_amount=round(amount, 2))
        for d, (count, amount) in sorted(per_day.items())
    ]
    total_sales = sum(i.sales for i in items)
    total_amount = round(sum(i.total_amount for i in items), 2)

    return SalesSummaryResponse(
        items=items,
        total_sales=total_sales,
        total_amount=total_amount,
        date_from=fdt,
        date_to=tdt,
    )
