# backend/routes/auth.py
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from database import get_db
from schemas.auth import LoginRequest, SessionResponse
from services.controller import PosController
from services.errors import AuthenticationFailed
from utils.audit import write_log
from utils.session import client_ip, get_controller, require_session

router = APIRouter(tags=["Auth"])


def _session_out(controller: PosController) -> SessionResponse:
    shift = controller.state.open_shift
    return SessionResponse(
        authenticated=controller.state.authenticated,
        username=controller.state.username,
        open_shift_id=shift.id if shift else None,
    )


# Check the shop credentials and load the stored state
@router.post("/login", response_model=SessionResponse)
def login(
    payload: LoginRequest,
    request: Request,
    db: Session = Depends(get_db),
    controller: PosController = Depends(get_controller),
):
    try:
        controller.login(payload.username, payload.password)
    except AuthenticationFailed:
        write_log(db, actor=payload.username, action="LOGIN", resource="auth",
                  status="FAIL", ip=client_ip(request))
        raise

    write_log(db, actor=payload.username, action="LOGIN", resource="auth",
              status="SUCCESS", ip=client_ip(request),
              meta={"flowers": len(controller.state.flowers), "alerts": len(controller.state.alerts)})
    return _session_out(controller)


# Leave the till: the cart is dropped, everything else stays in memory
@router.post("/logout", response_model=SessionResponse)
def logout(
    request: Request,
    db: Session = Depends(get_db),
    controller: PosController = Depends(require_session),
):
    actor = controller.state.username
    controller.logout()
    write_log(db, actor=actor, action="LOGOUT", resource="auth", status="SUCCESS", ip=client_ip(request))
    return _session_out(controller)


@router.get("/me", response_model=SessionResponse)
def me(controller: PosController = Depends(get_controller)):
    return _session_out(controller)
