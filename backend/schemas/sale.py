from pydantic import BaseModel
from typing import List
from datetime import datetime

from schemas.cart import CartLine


# Immutable receipt written once per checkout
class Sale(BaseModel):
    id: str
    items: List[CartLine]
    total: float
    timestamp: datetime
    shift_id: str


# Schema for paginated sale lists
class SalesPage(BaseModel):
    items: List[Sale]
    total: int
    page: int
    page_size: int
