import pytest

from mcuasync.ringbuf import RingBuffer


def test_reference_sequence():
    rb = RingBuffer(10)
    pushed = rb.push_many(range(10))
    assert pushed == rb.capacity
    assert len(rb) == rb.capacity
    assert rb.is_full()
    assert not rb.is_empty()
    assert rb.front() == 0
    rb.pop()
    assert rb.front() == 1
    assert len(rb) == rb.capacity - 1
    rb.clear()
    assert len(rb) == 0
    assert rb.is_empty()

    for i in range(10):
        rb.push(i)
    assert len(rb) == rb.capacity
    assert rb.is_full()
    assert rb.peek(len(rb)) == list(range(rb.capacity))
    rb.pop()
    rb.pop()
    rb.pop()
    assert len(rb) == rb.capacity - 3
    assert rb.peek(len(rb)) == list(range(3, rb.capacity))
    rb.clear()
    assert len(rb) == 0
    assert rb.is_empty()


def test_size_must_exceed_one():
    with pytest.raises(ValueError):
        RingBuffer(1)


def test_front_of_empty_raises():
    with pytest.raises(IndexError):
        RingBuffer(4).front()


def test_push_to_full_fails():
    rb = RingBuffer(3)
    assert rb.push("a")
    assert rb.push("b")
    assert not rb.push("c")
    assert rb.peek() == ["a", "b"]


def test_pop_counts():
    rb = RingBuffer(8)
    rb.push_many([1, 2, 3])
    assert rb.pop(5) == 3
    assert rb.pop() == 0
    assert rb.is_empty()


def test_wraparound_order_and_continuity():
    rb = RingBuffer(5)
    rb.push_many([1, 2, 3, 4])
    assert rb.is_continuous()
    rb.pop(3)
    rb.push_many([5, 6, 7])
    assert not rb.is_continuous()
    assert rb.peek() == [4, 5, 6, 7]
    assert list(rb) == [4, 5, 6, 7]
    assert rb.peek(2) == [4, 5]


def test_peek_more_than_available():
    rb = RingBuffer(6)
    rb.push_many("xy")
    assert rb.peek(10) == ["x", "y"]
    assert len(rb) == 2


def test_empty_is_continuous():
    assert RingBuffer(2).is_continuous()


def test_length_invariant_under_mixed_operations():
    rb = RingBuffer(7)
    expected = []
    for step in range(40):
        if step % 3 == 2:
            if rb.pop():
                expected.pop(0)
        elif rb.push(step):
            expected.append(step)
        assert len(rb) == len(expected)
        assert rb.peek() == expected
        assert len(rb) <= rb.capacity