# backend/routes/cart.py
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from database import get_db
from schemas.cart import CartAddItem, CartAdjustItem, CartOut
from schemas.sale import Sale
from services import cart as cart_engine
from services.controller import PosController
from services.errors import PosError
from utils.audit import write_log
from utils.session import client_ip, require_session

router = APIRouter(prefix="/cart", tags=["Cart"])

def _cart_to_out(controller: PosController) -> CartOut:
    cart = controller.state.cart
    return CartOut(items=cart, total=cart_engine.cart_total(cart))

@router.get("", response_model=CartOut)
def get_cart(controller: PosController = Depends(require_session)):
    return _cart_to_out(controller)

# Add one unit of a batch; sold-out batches and lines at the stock cap are left as they are
@router.post("/add", response_model=CartOut)
def add_to_cart(
    payload: CartAddItem,
    controller: PosController = Depends(require_session),
):
    controller.add_to_cart(payload.flower_id)
    return _cart_to_out(controller)

@router.patch("/items/{flower_id}", response_model=CartOut)
def adjust_cart_item(
    flower_id: str,
    payload: CartAdjustItem,
    controller: PosController = Depends(require_session),
):
    controller.adjust_cart(flower_id, payload.delta)
    return _cart_to_out(controller)

@router.delete("/items/{flower_id}", response_model=CartOut)
def delete_cart_item(
    flower_id: str,
    controller: PosController = Depends(require_session),
):
    controller.remove_from_cart(flower_id)
    return _cart_to_out(controller)

@router.post("/checkout", response_model=Sale)
def checkout(
    request: Request,
    db: Session = Depends(get_db),
    controller: PosController = Depends(require_session),
):
    try:
        sale = controller.checkout()
    except PosError as e:
        write_log(db, actor=controller.state.username, action="CHECKOUT", resource="cart",
                  status="FAIL", ip=client_ip(request), meta={"reason": e.detail})
        raise

    write_log(
        db,
        actor=controller.state.username,
        action="CHECKOUT",
        resource="cart",
        status="SUCCESS",
        ip=client_ip(request),
        meta={"sale_id": sale.id, "shift_id": sale.shift_id, "items": len(sale.items), "total": sale.total},
    )
    return sale
