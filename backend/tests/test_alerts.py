import asyncio
from datetime import timedelta

import pytest

from schemas.alert import Alert
from services import alerts
from conftest import NOW


def test_low_stock_alert(make_flower):
    found = alerts.scan_inventory([make_flower(name="X", stock=3, threshold=10)], NOW)
    assert [a.message for a in found] == ["Low stock: X (3 left)"]
    assert found[0].type == "low-stock"
    assert found[0].flower_id == "f1"
    assert found[0].read is False


def test_sold_out_batch_is_not_low_stock(make_flower):
    assert alerts.scan_inventory([make_flower(stock=0, threshold=10)], NOW) == []


def test_expired_alert(make_flower):
    flower = make_flower(name="X", stock=50, added_at=NOW - timedelta(days=8), shelf_life_days=6)
    found = alerts.scan_inventory([flower], NOW)
    assert [a.message for a in found] == ["EXPIRED: X (Added 8 days ago)"]
    assert found[0].type == "decay"


def test_near_decay_alert(make_flower):
    flower = make_flower(name="X", stock=50, added_at=NOW - timedelta(days=5, hours=12), shelf_life_days=7)
    found = alerts.scan_inventory([flower], NOW)
    assert [a.message for a in found] == ["Near Decay: X (1.5 days left)"]


def test_low_stock_and_decay_fire_together(make_flower):
    flower = make_flower(name="Tulip", stock=3, threshold=10, added_at=NOW - timedelta(days=5), shelf_life_days=6)
    messages = {a.message for a in alerts.scan_inventory([flower], NOW)}
    assert messages == {"Low stock: Tulip (3 left)", "Near Decay: Tulip (1.0 days left)"}


def test_rescan_with_unchanged_inventory_adds_nothing(make_flower):
    flowers = [make_flower(stock=2), make_flower(id="f2", name="Old", added_at=NOW - timedelta(days=9))]
    first = alerts.run_scan([], flowers, NOW)
    second = alerts.run_scan(first, flowers, NOW + timedelta(minutes=1))
    assert len(first) == 2
    assert second == first


def test_new_alerts_are_prepended(make_flower):
    old = Alert(id="old", type="info", message="Shop opened", timestamp=NOW)
    merged = alerts.run_scan([old], [make_flower(stock=1)], NOW)
    assert [a.id for a in merged][-1] == "old"
    assert merged[0].message == "Low stock: Peony (1 left)"


def test_collection_is_capped_keeping_newest(make_flower):
    existing = [
        Alert(id=f"a{i}", type="info", message=f"old {i}", timestamp=NOW) for i in range(50)
    ]
    flowers = [make_flower(id=f"f{i}", name=f"F{i}", stock=1) for i in range(3)]
    merged = alerts.run_scan(existing, flowers, NOW)

    assert len(merged) == 50
    assert [a.message for a in merged[:3]] == ["Low stock: F0 (1 left)", "Low stock: F1 (1 left)", "Low stock: F2 (1 left)"]
    assert merged[-1].id == "a46"


def test_unread_count():
    items = [
        Alert(id="1", type="info", message="a", timestamp=NOW),
        Alert(id="2", type="info", message="b", timestamp=NOW, read=True),
    ]
    assert alerts.unread_count(items) == 1


@pytest.mark.parametrize("stock,threshold,expected", [
    (5, 5, ["Low stock: X (5 left)"]),
    (1, 5, ["Low stock: X (1 left)"]),
    (6, 5, []),
    (0, 0, []),
])
def test_low_stock_boundaries(make_flower, stock, threshold, expected):
    found = alerts.scan_inventory([make_flower(name="X", stock=stock, threshold=threshold)], NOW)
    assert [a.message for a in found] == expected


@pytest.mark.parametrize("age,shelf_life,expected", [
    (timedelta(days=5), 7, []),
    (timedelta(days=5, minutes=1), 7, ["Near Decay: X (2.0 days left)"]),
    (timedelta(days=6), 6, ["Near Decay: X (0.0 days left)"]),
    (timedelta(days=6, minutes=1), 6, ["EXPIRED: X (Added 6 days ago)"]),
])
def test_decay_boundaries(make_flower, age, shelf_life, expected):
    flower = make_flower(name="X", stock=50, added_at=NOW - age, shelf_life_days=shelf_life)
    found = alerts.scan_inventory([flower], NOW)
    assert [a.message for a in found] == expected


def test_same_text_from_two_batches_in_one_scan_is_kept_twice(make_flower):
    flowers = [make_flower(id="a", name="Rose", stock=3), make_flower(id="b", name="Rose", stock=3)]
    merged = alerts.run_scan([], flowers, NOW)
    assert [(a.flower_id, a.message) for a in merged] == [
        ("a", "Low stock: Rose (3 left)"),
        ("b", "Low stock: Rose (3 left)"),
    ]
    assert alerts.run_scan(merged, flowers, NOW + timedelta(minutes=1)) == merged


class FlakyController:
    def __init__(self):
        self.calls = 0

    def scan_alerts(self):
        self.calls += 1
        if self.calls == 1:
            raise RuntimeError("database unavailable")
        return 1


def test_scan_loop_keeps_running_after_a_failed_scan(caplog):
    controller = FlakyController()

    async def run():
        task = asyncio.create_task(alerts.alert_scan_loop(controller, 0.01))
        for _ in range(200):
            if controller.calls >= 3:
                break
            await asyncio.sleep(0.01)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task
        return task

    task = asyncio.run(run())

    assert controller.calls >= 3
    assert task.cancelled()
    assert "Periodic alert scan failed" in caplog.text


def test_scan_loop_waits_before_first_scan():
    controller = FlakyController()

    async def run():
        task = asyncio.create_task(alerts.alert_scan_loop(controller, 60))
        await asyncio.sleep(0.05)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

    asyncio.run(run())
    assert controller.calls == 0


def test_scan_loop_does_not_block_the_event_loop():
    import threading
    import time

    lock = threading.Lock()

    class SlowController:
        def scan_alerts(self):
            with lock:
                time.sleep(0.3)
            return 0

    async def run():
        task = asyncio.create_task(alerts.alert_scan_loop(SlowController(), 0))
        worst = 0.0
        for _ in range(20):
            started = time.monotonic()
            await asyncio.sleep(0.01)
            worst = max(worst, time.monotonic() - started)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task
        return worst

    assert asyncio.run(run()) < 0.2
