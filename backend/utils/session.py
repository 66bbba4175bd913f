# utils/session.py
from fastapi import Depends, HTTPException, Request, status

from services.controller import PosController

# The controller is created once per application in main.lifespan
def get_controller(request: Request) -> PosController:
    return request.app.state.controller

# Reject requests until the shop account has logged in
def require_session(controller: PosController = Depends(get_controller)) -> PosController:
    if not controller.state.authenticated:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not logged in",
        )
    return controller

def client_ip(request: Request):
    return request.client.host if request.client else None
