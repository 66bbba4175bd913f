# backend/routes/shifts.py
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from database import get_db
from schemas.sale import Sale
from schemas.shift import Shift, ShiftOpen
from services.controller import PosController
from utils.audit import write_log
from utils.session import client_ip, require_session

router = APIRouter(prefix="/shifts", tags=["Shifts"])


# Shift history, newest first
@router.get("", response_model=List[Shift])
def list_shifts(controller: PosController = Depends(require_session)):
    return controller.state.shifts


@router.get("/current", response_model=Optional[Shift])
def current_shift(controller: PosController = Depends(require_session)):
    return controller.state.open_shift


@router.post("/open", response_model=Shift)
def open_shift(
    payload: ShiftOpen,
    request: Request,
    db: Session = Depends(get_db),
    controller: PosController = Depends(require_session),
):
    shift = controller.open_shift(payload.start_cash)
    write_log(db, actor=controller.state.username, action="SHIFT_OPEN", resource="shifts",
              status="SUCCESS", ip=client_ip(request),
              meta={"shift_id": shift.id, "start_cash": shift.start_cash})
    return shift


@router.post("/close", response_model=Shift)
def close_shift(
    request: Request,
    db: Session = Depends(get_db),
    controller: PosController = Depends(require_session),
):
    shift = controller.close_shift()
    write_log(db, actor=controller.state.username, action="SHIFT_CLOSE", resource="shifts",
              status="SUCCESS", ip=client_ip(request),
              meta={"shift_id": shift.id, "total_sales": shift.total_sales,
                    "sales_count": shift.sales_count, "end_cash": shift.end_cash})
    return shift


# Receipts recorded against one shift
@router.get("/{shift_id}/sales", response_model=List[Sale])
def shift_sales(shift_id: str, controller: PosController = Depends(require_session)):
    if not any(s.id == shift_id for s in controller.state.shifts):
        raise HTTPException(status_code=404, detail="Shift not found")
    return [s for s in controller.state.sales if s.shift_id == shift_id]
