from __future__ import annotations

import threading
import time
from types import SimpleNamespace

from src.gatepass_system.gatepass_system.common import ids as ids_module
from src.gatepass_system.gatepass_system.common.ids import TimeRandomIdGenerator
from src.gatepass_system.gatepass_system.common.locks import KeyedLock


def test_lock_entries_are_dropped_after_release():
    locks = KeyedLock()
    for i in range(1000):
        with locks.hold(f"bogus{i}"):
            assert len(locks) == 1
    assert len(locks) == 0


def test_lock_entry_survives_while_someone_waits():
    locks = KeyedLock()
    entered = threading.Event()
    release = threading.Event()

    def holder():
        with locks.hold("REQ1"):
            entered.set()
            release.wait(5)

    def waiter():
        with locks.hold("REQ1"):
            pass

    t1 = threading.Thread(target=holder)
    t1.start()
    entered.wait(5)
    t2 = threading.Thread(target=waiter)
    t2.start()
    time.sleep(0.05)
    assert len(locks) == 1

    release.set()
    t1.join(5)
    t2.join(5)
    assert len(locks) == 0


def test_same_key_is_serialized_other_keys_are_not():
    locks = KeyedLock()
    active = {"REQ1": 0}
    peak = []
    guard = threading.Lock()

    def work():
        with locks.hold("REQ1"):
            with guard:
                active["REQ1"] += 1
                peak.append(active["REQ1"])
            time.sleep(0.01)
            with guard:
                active["REQ1"] -= 1

    threads = [threading.Thread(target=work) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(5)
    assert max(peak) == 1

    with locks.hold("REQ1"):
        done = threading.Event()

        def other():
            with locks.hold("REQ2"):
                done.set()

        threading.Thread(target=other).start()
        assert done.wait(1)


def test_ids_are_unique_and_carry_prefix():
    gen = TimeRandomIdGenerator()
    issued = [gen.new_id("REQ") for _ in range(2000)]
    assert len(set(issued)) == 2000
    assert all(i.startswith("REQ") and i[3:].isdigit() for i in issued)


def test_id_memory_is_limited_to_current_millisecond(monkeypatch):
    now = [1_700_000_000.0]
    monkeypatch.setattr(ids_module, "time", SimpleNamespace(time=lambda: now[0]))
    gen = TimeRandomIdGenerator()

    first = {gen.new_id("LOG") for _ in range(5)}
    assert len(first) == 5
    assert all(i.startswith("LOG1700000000000") for i in first)

    now[0] += 1.0
    later = gen.new_id("LOG")
    assert later.startswith("LOG1700000001000")
    assert len(gen._issued) == 1


def test_id_millisecond_never_moves_backwards(monkeypatch):
    now = [1_700_000_010.0]
    monkeypatch.setattr(ids_module, "time", SimpleNamespace(time=lambda: now[0]))
    gen = TimeRandomIdGenerator()

    first = gen.new_id("REQ")
    now[0] -= 5.0
    second = gen.new_id("REQ")

    assert second.startswith("REQ1700000010000")
    assert second != first
