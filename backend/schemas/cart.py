from pydantic import BaseModel, Field
from typing import List

from schemas.flower import FlowerBatch

# A batch snapshot plus the requested quantity
class CartLine(FlowerBatch):
    quantity: int = Field(ge=1)

# Request schema for adding a batch to the cart
class CartAddItem(BaseModel):
    flower_id: str

# Request schema for changing a line quantity by a relative amount
class CartAdjustItem(BaseModel):
    delta: int

# Response schema for the entire cart summary
class CartOut(BaseModel):
    items: List[CartLine]
    total: float
