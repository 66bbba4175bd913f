# backend/services/controller.py
"""
Session controller owning the whole point-of-sale state.

Every public method runs under one lock and replaces collections as a whole.
Changed collections are written back through the store only while a user is
logged in; in-memory state stays authoritative for the running process.
"""

import logging
import secrets
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, List, Optional

from schemas.alert import Alert
from schemas.cart import CartLine
from schemas.flower import FlowerBatch, FlowerUpsert, FlowerView
from schemas.sale import Sale
from schemas.shift import Shift
from services import alerts as alert_engine
from services import cart as cart_engine
from services import inventory, shifts as shift_ledger
from services.errors import AuthenticationFailed
from services.storage import CollectionStore

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class AppState:
    flowers: List[FlowerBatch] = field(default_factory=list)
    sales: List[Sale] = field(default_factory=list)
    shifts: List[Shift] = field(default_factory=list)
    alerts: List[Alert] = field(default_factory=list)
    cart: List[CartLine] = field(default_factory=list)
    authenticated: bool = False
    username: Optional[str] = None

    @property
    def open_shift(self) -> Optional[Shift]:
        return shift_ledger.find_open_shift(self.shifts)


class PosController:
    def __init__(
        self,
        store: CollectionStore,
        username: str,
        password: str,
        alert_cap: int = alert_engine.ALERT_CAP,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.store = store
        self._username = username
        self._password = password
        self.alert_cap = alert_cap
        self.clock = clock
        self.state = AppState()
        self._lock = threading.RLock()

    def _persist(self, **collections) -> None:
        if self.state.authenticated:
            self.store.save(**collections)

    # ---- authentication gate ----

    def login(self, username: str, password: str) -> AppState:
        ok_user = secrets.compare_digest(username.encode(), self._username.encode())
        ok_pass = secrets.compare_digest(password.encode(), self._password.encode())
        if not (ok_user and ok_pass):
            raise AuthenticationFailed()

        with self._lock:
            self.state = AppState(
                flowers=self.store.load_flowers(self.clock()),
                sales=self.store.load_sales(),
                shifts=self.store.load_shifts(),
                alerts=self.store.load_alerts(),
                cart=[],
                authenticated=True,
                username=username,
            )
            open_shift = self.state.open_shift
            if open_shift:
                logger.info("Resuming open shift %s", open_shift.id)
            self.scan_alerts()
            # First write after login stores the seed inventory as well
            self.store.save(flowers=self.state.flowers, shifts=self.state.shifts, alerts=self.state.alerts)
            return self.state

    def logout(self) -> None:
        with self._lock:
            self.state.cart = []
            self.state.authenticated = False
            self.state.username = None

    # ---- inventory ----

    def list_flowers(self) -> List[FlowerBatch]:
        return list(self.state.flowers)

    def flower_view(self, flower_id: str) -> FlowerView:
        return inventory.to_view(inventory.get_flower(self.state.flowers, flower_id))

    def save_flower(self, payload: FlowerUpsert) -> FlowerBatch:
        with self._lock:
            flowers, batch = inventory.upsert_flower(self.state.flowers, payload, self.clock())
            self.state.flowers = flowers
            self._persist(flowers=flowers)
            return batch

    def remove_flower(self, flower_id: str) -> bool:
        with self._lock:
            flowers = inventory.remove_flower(self.state.flowers, flower_id)
            removed = len(flowers) != len(self.state.flowers)
            self.state.flowers = flowers
            if removed:
                self._persist(flowers=flowers)
            return removed

    # ---- cart ----

    def add_to_cart(self, flower_id: str) -> List[CartLine]:
        with self._lock:
            batch = inventory.get_flower(self.state.flowers, flower_id)
            self.state.cart = cart_engine.add_line(self.state.cart, batch, self.state.open_shift)
            return self.state.cart

    def remove_from_cart(self, flower_id: str) -> List[CartLine]:
        with self._lock:
            self.state.cart = cart_engine.remove_line(self.state.cart, flower_id)
            return self.state.cart

    def adjust_cart(self, flower_id: str, delta: int) -> List[CartLine]:
        with self._lock:
            self.state.cart = cart_engine.adjust_quantity(self.state.cart, flower_id, delta, self.state.flowers)
            return self.state.cart

    def checkout(self) -> Sale:
        with self._lock:
            result = cart_engine.checkout(
                self.state.cart, self.state.flowers, self.state.sales, self.state.shifts, self.clock()
            )
            self.state.flowers = result.flowers
            self.state.sales = result.sales
            self.state.shifts = result.shifts
            self.state.cart = result.cart
            self._persist(flowers=result.flowers, sales=result.sales, shifts=result.shifts)
            logger.info("Sale %s completed, total %.2f", result.sale.id, result.sale.total)
            return result.sale

    # ---- shifts ----

    def open_shift(self, start_cash: float) -> Shift:
        with self._lock:
            shifts, shift = shift_ledger.open_shift(self.state.shifts, start_cash, self.clock())
            self.state.shifts = shifts
            self._persist(shifts=shifts)
            return shift

    def close_shift(self) -> Shift:
        with self._lock:
            shifts, closed = shift_ledger.close_shift(self.state.shifts, self.clock())
            self.state.shifts = shifts
            self._persist(shifts=shifts)
            return closed

    # ---- alerts ----

    def scan_alerts(self) -> int:
        """Run one inventory scan; returns how many alerts were added."""
        with self._lock:
            before = {a.message for a in self.state.alerts}
            merged = alert_engine.run_scan(self.state.alerts, self.state.flowers, self.clock(), self.alert_cap)
            added = sum(1 for a in merged if a.message not in before)
            if merged != self.state.alerts:
                self.state.alerts = merged
                self._persist(alerts=merged)
            return added

    def clear_alerts(self) -> None:
        with self._lock:
            self.state.alerts = []
            self._persist(alerts=[])
