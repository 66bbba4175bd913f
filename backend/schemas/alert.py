from pydantic import BaseModel
from typing import List, Literal, Optional
from datetime import datetime

AlertType = Literal["low-stock", "decay", "info"]

class Alert(BaseModel):
    id: str
    type: AlertType
    message: str
    flower_id: Optional[str] = None
    timestamp: datetime
    read: bool = False

class AlertList(BaseModel):
    items: List[Alert]
    unread: int
