import random

import pytest

from supermarket_sim.entities import Customer, CustomerIdAllocator
from supermarket_sim.errors import EmptyQueue
from supermarket_sim.events import Arrival, Departure, EventQueue


def _arrival(t, cid=1):
    return Arrival(t, Customer(cid, arrival_time=t, service_duration=1.0))


def test_pop_returns_events_in_time_order():
    rng = random.Random(4)
    q = EventQueue()
    for i in range(200):
        q.push(Departure(rng.uniform(0, 100), i % 3))
    times = []
    while not q.is_empty():
        times.append(q.pop().t)
    assert times == sorted(times)
    assert len(times) == 200


def test_equal_timestamps_pop_in_insertion_order():
    q = EventQueue()
    first = _arrival(5.0, cid=1)
    second = Departure(5.0, 0)
    third = _arrival(5.0, cid=2)
    q.push(Departure(9.0, 1))
    q.push(first)
    q.push(second)
    q.push(third)
    assert [q.pop() for _ in range(3)] == [first, second, third]
    assert q.pop().t == 9.0


def test_pop_on_empty_queue_raises():
    q = EventQueue()
    assert q.is_empty()
    with pytest.raises(EmptyQueue):
        q.pop()


def test_len_counts_pending_events():
    q = EventQueue()
    q.push(_arrival(3.0))
    q.push(Departure(1.0, 0))
    assert len(q) == 2
    assert q.pop().t == 1.0
    assert len(q) == 1


def test_events_are_immutable_and_tagged():
    ev = Departure(1.0, 2)
    assert ev.kind == "departure"
    assert _arrival(0.0).kind == "arrival"
    with pytest.raises(Exception):
        ev.t = 5.0


def test_id_allocator_is_monotonic_and_per_instance():
    a, b = CustomerIdAllocator(), CustomerIdAllocator()
    assert [a.next_id() for _ in range(3)] == [1, 2, 3]
    assert b.next_id() == 1
    assert a.next_id() == 4
