# backend/services/seed.py
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from schemas.flower import FlowerBatch


def initial_flowers(now: Optional[datetime] = None) -> List[FlowerBatch]:
    """Sample inventory used when the store has never been written."""
    now = now or datetime.now(timezone.utc)
    return [
        FlowerBatch(
            id="1", name="Red Rose", price=5.00, stock=50, threshold=10, shelf_life_days=7,
            added_at=now, image="https://picsum.photos/200/200?random=1",
            description="Classic red rose, perfect for romantic occasions.",
        ),
        FlowerBatch(
            id="2", name="White Lily", price=7.50, stock=30, threshold=5, shelf_life_days=5,
            added_at=now - timedelta(days=4), image="https://picsum.photos/200/200?random=2",
            description="Elegant white lily, symbols of purity.",
        ),
        FlowerBatch(
            id="3", name="Sunflower", price=4.00, stock=12, threshold=8, shelf_life_days=10,
            added_at=now, image="https://picsum.photos/200/200?random=3",
            description="Bright and cheerful sunflower.",
        ),
        # Low on stock and close to its shelf life
        FlowerBatch(
            id="4", name="Tulip Batch A", price=3.50, stock=3, threshold=10, shelf_life_days=6,
            added_at=now - timedelta(days=5), image="https://picsum.photos/200/200?random=4",
            description="Fresh spring tulips.",
        ),
    ]
