# backend/routes/flowers.py
import httpx
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlalchemy.orm import Session

from database import get_db
from schemas.flower import AdviceRequest, AdviceResponse, FlowerOut, FlowerUpsert, FlowerView
from services import inventory
from services.advisor import ask_advisor
from services.controller import PosController
from utils.advisor_client import AdvisorNotConfigured, advisor_client
from utils.audit import write_log
from utils.session import client_ip, require_session

router = APIRouter(prefix="/flowers", tags=["Flowers"])
logger = logging.getLogger(__name__)


@router.get("", response_model=List[FlowerOut])
def list_flowers(
    in_stock: bool = False,
    controller: PosController = Depends(require_session),
):
    """Inventory listing; `in_stock=true` gives the sellable grid of the till."""
    now = controller.clock()
    flowers = controller.list_flowers()
    if in_stock:
        flowers = [f for f in flowers if f.stock > 0]
    return [inventory.to_out(f, now) for f in flowers]


@router.get("/{flower_id}", response_model=FlowerView)
def get_flower(flower_id: str, controller: PosController = Depends(require_session)):
    return controller.flower_view(flower_id)


# Add stock or edit a batch. A known id edits, anything else creates.
@router.post("", response_model=FlowerOut)
def save_flower(
    payload: FlowerUpsert,
    request: Request,
    db: Session = Depends(get_db),
    controller: PosController = Depends(require_session),
):
    batch = controller.save_flower(payload)
    write_log(db, actor=controller.state.username, action="FLOWER_SAVE", resource="flowers",
              status="SUCCESS", ip=client_ip(request),
              meta={"id": batch.id, "name": batch.name, "stock": batch.stock})
    return inventory.to_out(batch, controller.clock())


@router.put("/{flower_id}", response_model=FlowerOut)
def update_flower(
    flower_id: str,
    payload: FlowerUpsert,
    request: Request,
    db: Session = Depends(get_db),
    controller: PosController = Depends(require_session),
):
    controller.flower_view(flower_id)  # 404 for unknown batches
    payload = payload.model_copy(update={"id": flower_id})
    return save_flower(payload, request, db, controller)


@router.delete("/{flower_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_flower(
    flower_id: str,
    request: Request,
    db: Session = Depends(get_db),
    controller: PosController = Depends(require_session),
):
    if not controller.remove_flower(flower_id):
        raise HTTPException(status_code=404, detail="Flower batch not found")
    write_log(db, actor=controller.state.username, action="FLOWER_DELETE", resource="flowers",
              status="SUCCESS", ip=client_ip(request), meta={"id": flower_id})
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# Ask the text-generation service about a batch
@router.post("/{flower_id}/advice", response_model=AdviceResponse)
async def flower_advice(
    flower_id: str,
    payload: AdviceRequest,
    controller: PosController = Depends(require_session),
):
    view = controller.flower_view(flower_id)
    try:
        text = await ask_advisor(advisor_client, view, payload.topic)
    except AdvisorNotConfigured:
        raise HTTPException(status_code=503, detail="System not configured")
    except httpx.HTTPError as e:
        logger.exception("Advisor request failed: %s", e)
        raise HTTPException(status_code=502, detail="Failed to fetch AI response. Please check API configuration.")
    return AdviceResponse(flower_id=view.id, topic=payload.topic, text=text)
