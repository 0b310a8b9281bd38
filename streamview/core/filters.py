from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Dict

from .buffers import HistoryBuffer
from .view import View, check_window_len


class Echo(View):
    """Identity pass-through: outputs the latest observation.

    ``window_len`` is validated but otherwise ignored.
    """

    name = "echo"

    def __init__(self, window_len: int = 1) -> None:
        check_window_len(window_len)
        self._out = 0.0

    def update(self, value: float) -> None:
        self._out = value

    def last(self) -> float:
        return self._out


class TrendFlex(View):
    """Trend-standardizing oscillator.

    A two-pole recursive smoother feeds a bounded history of ``window_len + 1``
    smoothed values. The mean difference between the newest smoothed value and
    every retained one is the trend statistic, standardized by an
    exponentially weighted mean square of itself (0.96 old / 0.04 new).

    Output is 0 until the history is full, and whenever the mean square is
    not positive.
    """

    name = "trend_flex"

    def __init__(self, window_len: int) -> None:
        window_len = check_window_len(window_len)
        self.window_len = window_len
        self._filts: HistoryBuffer[float] = HistoryBuffer(window_len + 1)
        self._last_val = 0.0
        self._last_ms = 0.0
        self._out = 0.0

        a1 = math.exp(-8.88442402435 / window_len)
        self._b1 = 2.0 * a1 * math.cos(4.44221201218 / window_len)
        self._c3 = -a1 * a1
        self._c1 = 1.0 - self._b1 - self._c3

    def update(self, value: float) -> None:
        filts = self._filts
        if len(filts) == 0:
            self._last_val = value
        if filts.is_full():
            filts.pop_oldest()

        n = len(filts)
        filt = self._c1 * (value + self._last_val) / 2.0
        if n >= 1:
            filt += self._b1 * filts.newest()
        if n >= 2:
            filt += self._c3 * filts.newest(1)
        self._last_val = value
        filts.add(filt)

        d_sum = 0.0
        for f in filts:
            d_sum += filt - f
        d_sum /= self.window_len

        ms = 0.04 * d_sum * d_sum + 0.96 * self._last_ms
        self._last_ms = ms
        if not filts.is_full() or ms <= 0.0:
            self._out = 0.0
        else:
            self._out = d_sum / math.sqrt(ms)

    def last(self) -> float:
        return self._out


@dataclass
class FilterSpec:
    key: str
    build: Callable[[int], View]
    label: str


FILTERS: Dict[str, FilterSpec] = {
    "echo": FilterSpec(key="echo", build=Echo, label="Echo"),
    "trend_flex": FilterSpec(key="trend_flex", build=TrendFlex, label="TrendFlex"),
}


def build_view(kind: str, window_len: int) -> View:
    try:
        spec = FILTERS[kind]
    except KeyError:
        raise ValueError(f"Unknown view kind {kind!r}; expected one of {sorted(FILTERS)}") from None
    return spec.build(window_len)
