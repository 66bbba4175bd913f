# backend/routes/sales.py
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from schemas.sale import Sale, SalesPage
from services.controller import PosController
from utils.session import require_session

router = APIRouter(prefix="/sales", tags=["Sales"])


# Sale history, newest first
@router.get("", response_model=SalesPage)
def list_sales(
    shift_id: Optional[str] = Query(None, description="Filter by shift"),
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    controller: PosController = Depends(require_session),
):
    sales = controller.state.sales
    if shift_id:
        sales = [s for s in sales if s.shift_id == shift_id]
    sales = sorted(sales, key=lambda s: s.timestamp, reverse=True)

    total = len(sales)
    items = sales[(page - 1) * page_size: page * page_size]
    return {"items": items, "total": total, "page": page, "page_size": page_size}


@router.get("/{sale_id}", response_model=Sale)
def get_sale(sale_id: str, controller: PosController = Depends(require_session)):
    sale = next((s for s in controller.state.sales if s.id == sale_id), None)
    if not sale:
        raise HTTPException(status_code=404, detail="Sale not found")
    return sale
