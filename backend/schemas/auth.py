from pydantic import BaseModel
from typing import Optional

# Schema for the shop login form
class LoginRequest(BaseModel):
    username: str
    password: str

# Response describing the current session
class SessionResponse(BaseModel):
    authenticated: bool
    username: Optional[str] = None
    open_shift_id: Optional[str] = None
