# backend/services/alerts.py
"""
Alert engine: low-stock and decay notifications from an inventory scan.
"""

import asyncio
import logging
import math
from datetime import datetime
from typing import List

from starlette.concurrency import run_in_threadpool

from schemas.alert import Alert
from schemas.flower import FlowerBatch
from services.inventory import days_left, days_since_added

logger = logging.getLogger(__name__)

ALERT_CAP = 50
NEAR_DECAY_DAYS = 2


def scan_inventory(flowers: List[FlowerBatch], now: datetime) -> List[Alert]:
    """Evaluate both rules for every batch. Both may fire for the same batch."""
    stamp = int(now.timestamp() * 1000)
    found: List[Alert] = []

    for f in flowers:
        # Check stock
        if 0 < f.stock <= f.threshold:
            found.append(Alert(
                id=f"low-{f.id}-{stamp}",
                type="low-stock",
                message=f"Low stock: {f.name} ({f.stock} left)",
                flower_id=f.id,
                timestamp=now,
            ))

        # Check decay
        age = days_since_added(f, now)
        left = days_left(f, now)
        if left < 0:
            found.append(Alert(
                id=f"decay-{f.id}-{stamp}",
                type="decay",
                message=f"EXPIRED: {f.name} (Added {math.floor(age)} days ago)",
                flower_id=f.id,
                timestamp=now,
            ))
        elif left < NEAR_DECAY_DAYS:
            found.append(Alert(
                id=f"near-decay-{f.id}-{stamp}",
                type="decay",
                message=f"Near Decay: {f.name} ({left:.1f} days left)",
                flower_id=f.id,
                timestamp=now,
            ))

    return found


def merge_alerts(existing: List[Alert], new: List[Alert], cap: int = ALERT_CAP) -> List[Alert]:
    """Prepend alerts whose message is not already in `existing`, then keep the newest `cap`.

    Only the stored collection is checked: two batches producing the same text
    in one scan are both kept, and a near-decay countdown that moved by 0.1 day
    counts as a new alert.
    """
    seen = {a.message for a in existing}
    unique_new = [a for a in new if a.message not in seen]
    return [*unique_new, *existing][:cap]


def run_scan(
    existing: List[Alert], flowers: List[FlowerBatch], now: datetime, cap: int = ALERT_CAP
) -> List[Alert]:
    return merge_alerts(existing, scan_inventory(flowers, now), cap)


def unread_count(alerts: List[Alert]) -> int:
    return sum(1 for a in alerts if not a.read)


async def alert_scan_loop(controller, interval_seconds: float) -> None:
    """Rescan inventory forever, sleeping `interval_seconds` between runs."""
    while True:
        await asyncio.sleep(interval_seconds)
        try:
            # The scan takes the controller lock and writes to the database
            added = await run_in_threadpool(controller.scan_alerts)
            if added:
                logger.info("Alert scan produced %d new alert(s)", added)
        except Exception:
            # Retried on the next tick
            logger.exception("Periodic alert scan failed")
