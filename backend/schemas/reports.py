# schemas/reports.py
from datetime import datetime, date
from typing import List, Optional
from pydantic import BaseModel

from schemas.flower import FlowerOut

# Schemas for the inventory dashboard
class InventorySummary(BaseModel):
    total_items: int
    low_stock: int
    expired: int
    items: List[FlowerOut]

# Schemas for sales performance summaries
class SalesSummaryItem(BaseModel):
    date: date
    sales: int
    total_amount: float

class SalesSummaryResponse(BaseModel):
    items: List[SalesSummaryItem]
    total_sales: int
    total_amount: float
    date_from: Optional[datetime] = None
    date_to: Optional[datetime] = None
