# tests/test_locks.py
import threading
import time

from app.core.locks import KeyedLock


def test_lock_is_dropped_after_release():
    locks = KeyedLock()
    with locks.hold(1):
        assert len(locks) == 1
    assert len(locks) == 0


def test_same_key_is_serialised():
    locks = KeyedLock()
    active = 0
    max_active = 0
    guard = threading.Lock()

    def worker():
        nonlocal active, max_active
        with locks.hold("product-1"):
            with guard:
                active += 1
                max_active = max(max_active, active)
            time.sleep(0.01)
            with guard:
                active -= 1

    threads = [threading.Thread(target=worker) for _ in range(5)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert max_active == 1
    assert len(locks) == 0


def test_different_keys_do_not_block_each_other():
    locks = KeyedLock()
    entered = threading.Event()

    def other():
        with locks.hold(2):
            entered.set()

    with locks.hold(1):
        t = threading.Thread(target=other)
        t.start()
        assert entered.wait(timeout=2)
        t.join()
