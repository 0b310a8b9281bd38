from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, Dict, List, Tuple, Union

from .buffers import HistoryBuffer
from .view import check_window_len


class RescanExtrema:
    """Running min/max of the last ``window_len`` values.

    Insertion updates the cached extrema in constant time. Eviction only
    triggers a linear rescan of the remaining history when the evicted value
    was itself the cached minimum or maximum.
    """

    def __init__(self, window_len: int) -> None:
        self._history: HistoryBuffer[float] = HistoryBuffer(check_window_len(window_len))
        self._min = 0.0
        self._max = 0.0
        self._initialized = False
        self.rescans = 0

    def push(self, value: float) -> None:
        if not self._initialized:
            self._initialized = True
            self._min = value
            self._max = value

        if self._history.is_full():
            old = self._history.pop_oldest()
            if old == self._min or old == self._max:
                self._rescan(seed=value)

        self._history.add(value)
        if value < self._min:
            self._min = value
        if value > self._max:
            self._max = value

    def _rescan(self, seed: float) -> None:
        self.rescans += 1
        if len(self._history) == 0:
            # window of one: nothing survives the eviction
            self._min = seed
            self._max = seed
            return
        lo = hi = self._history.oldest()
        for v in self._history:
            if v < lo:
                lo = v
            if v > hi:
                hi = v
        self._min = lo
        self._max = hi

    @property
    def minimum(self) -> float:
        return self._min

    @property
    def maximum(self) -> float:
        return self._max

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def window_len(self) -> int:
        return self._history.capacity()

    def snapshot(self) -> List[float]:
        return self._history.snapshot()


class MonotonicExtrema:
    """Running min/max of the last ``window_len`` values via monotonic deques.

    Constant amortized cost per push regardless of how often the extremum
    leaves the window (e.g. a steadily drifting series).
    """

    def __init__(self, window_len: int) -> None:
        self._history: HistoryBuffer[float] = HistoryBuffer(check_window_len(window_len))
        # (sequence number, value); values increasing in _mins, decreasing in _maxs
        self._mins: Deque[Tuple[int, float]] = deque()
        self._maxs: Deque[Tuple[int, float]] = deque()
        self._seq = 0

    def push(self, value: float) -> None:
        if self._history.is_full():
            self._history.pop_oldest()
        self._history.add(value)

        seq = self._seq
        self._seq += 1
        expired = seq - self._history.capacity()
        while self._mins and self._mins[0][0] <= expired:
            self._mins.popleft()
        while self._maxs and self._maxs[0][0] <= expired:
            self._maxs.popleft()

        while self._mins and self._mins[-1][1] >= value:
            self._mins.pop()
        self._mins.append((seq, value))
        while self._maxs and self._maxs[-1][1] <= value:
            self._maxs.pop()
        self._maxs.append((seq, value))

    @property
    def minimum(self) -> float:
        return self._mins[0][1] if self._mins else 0.0

    @property
    def maximum(self) -> float:
        return self._maxs[0][1] if self._maxs else 0.0

    @property
    def initialized(self) -> bool:
        return self._seq > 0

    @property
    def window_len(self) -> int:
        return self._history.capacity()

    def snapshot(self) -> List[float]:
        return self._history.snapshot()


ExtremaTracker = Union[RescanExtrema, MonotonicExtrema]


@dataclass
class ExtremaSpec:
    key: str
    build: Callable[[int], ExtremaTracker]
    label: str


EXTREMA: Dict[str, ExtremaSpec] = {
    "rescan": ExtremaSpec(key="rescan", build=RescanExtrema, label="rescan on extremum eviction"),
    "monotonic": ExtremaSpec(key="monotonic", build=MonotonicExtrema, label="monotonic deque"),
}


def build_extrema(key: str, window_len: int) -> ExtremaTracker:
    try:
        spec = EXTREMA[key]
    except KeyError:
        raise ValueError(f"Unknown extrema tracker {key!r}; expected one of {sorted(EXTREMA)}") from None
    return spec.build(window_len)
