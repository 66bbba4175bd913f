# backend/routes/logs.py
from datetime import date, datetime, time, timedelta
from typing import Any, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, ConfigDict
from sqlalchemy.orm import Query as OrmQuery, Session

from database import get_db
from models.log import Log
from services.controller import PosController
from utils.session import require_session

router = APIRouter(prefix="/logs", tags=["Logs"])


class LogResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    actor: Optional[str] = None
    action: str
    resource: str
    status: str
    ip: Optional[str] = None
    ts: datetime
    meta: Optional[Any] = None


class LogPage(BaseModel):
    items: List[LogResponse]
    total: int
    page: int
    page_size: int


def _parse_day(value: Optional[str], name: str) -> Optional[date]:
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Bad {name} format, expected YYYY-MM-DD: {value}")


def _filter_logs(
    query: OrmQuery,
    *,
    action: Optional[str],
    resource: Optional[str],
    status: Optional[str],
    actor: Optional[str],
    day_from: Optional[date],
    day_to: Optional[date],
) -> OrmQuery:
    # Action names are prefixes like SHIFT_ / CART_, so partial matches are useful
    if action:
        query = query.filter(Log.action.ilike(f"%{action}%"))
    if resource:
        query = query.filter(Log.resource == resource)
    if status:
        query = query.filter(Log.status == status.upper())
    if actor:
        query = query.filter(Log.actor == actor)
    if day_from:
        query = query.filter(Log.ts >= datetime.combine(day_from, time.min))
    if day_to:
        # Whole final day, exclusive upper bound
        query = query.filter(Log.ts < datetime.combine(day_to + timedelta(days=1), time.min))
    return query


# Audit trail of till actions, newest first
@router.get("", response_model=LogPage)
def get_logs(
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    action: Optional[str] = Query(None, description="Action name or part of it, e.g. SHIFT"),
    resource: Optional[str] = Query(None, description="flowers, cart, shifts, alerts or auth"),
    status: Optional[str] = Query(None, description="SUCCESS or FAIL"),
    actor: Optional[str] = Query(None, description="Username that performed the action"),
    date_from: Optional[str] = Query(None, description="First day (YYYY-MM-DD)"),
    date_to: Optional[str] = Query(None, description="Last day (YYYY-MM-DD)"),
    db: Session = Depends(get_db),
    controller: PosController = Depends(require_session),
):
    query = _filter_logs(
        db.query(Log),
        action=action,
        resource=resource,
        status=status,
        actor=actor,
        day_from=_parse_day(date_from, "date_from"),
        day_to=_parse_day(date_to, "date_to"),
    )

    total = query.count()
    rows = (query
            .order_by(Log.ts.desc(), Log.id.desc())
            .offset((page - 1) * page_size)
            .limit(page_size)
            .all())
    return LogPage(items=rows, total=total, page=page, page_size=page_size)
