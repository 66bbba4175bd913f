# backend/models/snapshot.py
from sqlalchemy import Column, String, DateTime, JSON, func
from database import Base

# Model StoredCollection
# One row per persisted collection (flowers, sales, shifts, alerts).
# The payload is always the whole collection serialized as a JSON list,
# written as a full replacement on every change.
class StoredCollection(Base):
    __tablename__ = "stored_collections"

    key = Column(String(64), primary_key=True)
    payload = Column(JSON, nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
