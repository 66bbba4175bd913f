from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


# A cash-drawer session against which sales are aggregated
class Shift(BaseModel):
    id: str
    opened_at: datetime
    closed_at: Optional[datetime] = None
    start_cash: float
    end_cash: Optional[float] = None
    total_sales: float = 0.0
    sales_count: int = 0
    is_open: bool = True


# Request schema for opening the drawer
class ShiftOpen(BaseModel):
    start_cash: float = Field(default=0, ge=0)
