# backend/services/storage.py
"""
Persistence gateway: whole-collection snapshots in the stored_collections table.
"""

import logging
from datetime import datetime
from typing import Callable, Dict, List, Optional

from pydantic import BaseModel
from sqlalchemy.orm import Session

from database import SessionLocal
from models.snapshot import StoredCollection
from schemas.alert import Alert
from schemas.flower import FlowerBatch
from schemas.sale import Sale
from schemas.shift import Shift
from services.seed import initial_flowers

logger = logging.getLogger(__name__)

KEYS = {
    "flowers": "bloompos_flowers",
    "sales": "bloompos_sales",
    "shifts": "bloompos_shifts",
    "alerts": "bloompos_alerts",
}

RECORD_TYPES = {
    "flowers": FlowerBatch,
    "sales": Sale,
    "shifts": Shift,
    "alerts": Alert,
}


class CollectionStore:
    def __init__(self, session_factory: Callable[[], Session] = SessionLocal):
        self.session_factory = session_factory

    def _read(self, name: str) -> Optional[list]:
        db = self.session_factory()
        try:
            row = db.get(StoredCollection, KEYS[name])
            return None if row is None else row.payload
        finally:
            db.close()

    def _load(self, name: str, default: Callable[[], list]) -> list:
        payload = self._read(name)
        if payload is None:
            logger.info("No stored %s collection, using defaults", name)
            return default()
        record_type = RECORD_TYPES[name]
        return [record_type.model_validate(item) for item in payload]

    def load_flowers(self, now: Optional[datetime] = None) -> List[FlowerBatch]:
        return self._load("flowers", lambda: initial_flowers(now))

    def load_sales(self) -> List[Sale]:
        return self._load("sales", list)

    def load_shifts(self) -> List[Shift]:
        return self._load("shifts", list)

    def load_alerts(self) -> List[Alert]:
        return self._load("alerts", list)

    def save(self, **collections: List[BaseModel]) -> None:
        """Write the given collections (flowers=..., sales=..., ...) in one transaction.

        Each collection replaces its stored snapshot as a whole.
        """
        unknown = set(collections) - set(KEYS)
        if unknown:
            raise KeyError(f"Unknown collections: {sorted(unknown)}")

        db = self.session_factory()
        try:
            for name, records in collections.items():
                payload = [r.model_dump(mode="json") for r in records]
                db.merge(StoredCollection(key=KEYS[name], payload=payload))
            db.commit()
        except Exception:
            db.rollback()
            logger.exception("Failed to persist collections: %s", ", ".join(collections))
            raise
        finally:
            db.close()

    def reset(self, flowers: List[FlowerBatch]) -> Dict[str, int]:
        """Replace every collection: the given inventory and empty ledgers."""
        self.save(flowers=flowers, sales=[], shifts=[], alerts=[])
        return {"flowers": len(flowers), "sales": 0, "shifts": 0, "alerts": 0}
