# backend/schemas/flower.py
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


# A tracked quantity of one flower variety, entered at one time
class FlowerBatch(BaseModel):
    id: str
    name: str
    price: float = Field(ge=0)
    stock: int = Field(ge=0)
    threshold: int = Field(default=5, ge=0)  # Low stock alert threshold
    shelf_life_days: float = Field(default=7, gt=0)
    added_at: datetime  # When the batch was received
    image: str
    description: Optional[str] = ""


# Raw form payload for creating or editing a batch.
# Fields stay loosely typed; the inventory ledger decides what is valid
# and which defaults apply.
class FlowerUpsert(BaseModel):
    id: Optional[str] = None
    name: Optional[str] = None
    price: Optional[Any] = None
    stock: Optional[Any] = None
    threshold: Optional[Any] = None
    shelf_life_days: Optional[Any] = None
    image: Optional[str] = None
    description: Optional[str] = None


# Read-only snapshot of a batch handed to collaborators outside the core
class FlowerView(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    price: float
    stock: int
    threshold: int
    shelf_life_days: float
    added_at: datetime
    image: str
    description: Optional[str] = ""


# Inventory listing row with freshness information
class FlowerOut(FlowerBatch):
    days_left: float
    status: str  # "EXPIRED" or "Fresh"
    low_stock: bool


class AdviceRequest(BaseModel):
    topic: str = Field(pattern="^(care|arrangement|sales)$")


class AdviceResponse(BaseModel):
    flower_id: str
    topic: str
    text: str
