# backend/routes/alerts.py
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from database import get_db
from schemas.alert import AlertList
from services.alerts import unread_count
from services.controller import PosController
from utils.audit import write_log
from utils.session import client_ip, require_session

router = APIRouter(prefix="/alerts", tags=["Alerts"])

def _alerts_out(controller: PosController) -> AlertList:
    alerts = controller.state.alerts
    return AlertList(items=alerts, unread=unread_count(alerts))

@router.get("", response_model=AlertList)
def list_alerts(controller: PosController = Depends(require_session)):
    return _alerts_out(controller)

# Run a scan now instead of waiting for the next tick
@router.post("/scan", response_model=AlertList)
def scan_alerts(controller: PosController = Depends(require_session)):
    controller.scan_alerts()
    return _alerts_out(controller)

@router.delete("", response_model=AlertList)
def clear_alerts(
    request: Request,
    db: Session = Depends(get_db),
    controller: PosController = Depends(require_session),
):
    cleared = len(controller.state.alerts)
    controller.clear_alerts()
    write_log(db, actor=controller.state.username, action="ALERTS_CLEAR", resource="alerts",
              status="SUCCESS", ip=client_ip(request), meta={"cleared": cleared})
    return _alerts_out(controller)
