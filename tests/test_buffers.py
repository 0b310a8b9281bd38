from __future__ import annotations

import pytest

from streamview.core.buffers import HistoryBuffer


def test_history_buffer_basic() -> None:
    buf: HistoryBuffer[int] = HistoryBuffer(capacity=3)
    buf.add(1)
    buf.add(2)
    buf.add(3)
    assert buf.size() == 3
    assert buf.is_full()
    assert buf.pop_oldest() == 1
    buf.add(4)
    assert buf.snapshot() == [2, 3, 4]
    assert buf.oldest() == 2
    assert buf.newest() == 4
    assert buf.newest(1) == 3


def test_add_to_full_buffer_raises() -> None:
    buf: HistoryBuffer[float] = HistoryBuffer(capacity=1)
    buf.add(1.0)
    with pytest.raises(OverflowError):
        buf.add(2.0)


def test_empty_buffer() -> None:
    buf: HistoryBuffer[float] = HistoryBuffer(capacity=2)
    assert buf.oldest() is None
    assert len(buf) == 0
    assert buf.capacity() == 2


def test_zero_capacity_rejected() -> None:
    with pytest.raises(ValueError):
        HistoryBuffer(capacity=0)
