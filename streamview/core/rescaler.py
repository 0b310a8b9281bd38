from __future__ import annotations

import logging
import math
from typing import Tuple

from .extrema import ExtremaTracker, build_extrema
from .view import View, check_window_len


logger = logging.getLogger(__name__)


class Rescaler(View):
    """Map an inner view's output into ``[-1, 1]`` over a trailing window.

    The window minimum maps to -1 and the window maximum to +1. When every
    value in the window is identical (including a window of one) the output
    is 0. The rescaler owns its inner view exclusively.
    """

    def __init__(self, inner: View, window_len: int, extrema: str = "rescan") -> None:
        self._inner = inner
        self._window_len = check_window_len(window_len)
        self._tracker: ExtremaTracker = build_extrema(extrema, self._window_len)
        self._last_raw = 0.0
        self.name = f"{getattr(inner, 'name', 'view')}_rescaled"
        logger.debug(
            "rescaler created",
            extra={"inner": type(inner).__name__, "window_len": self._window_len, "extrema": extrema},
        )

    def update(self, value: float) -> None:
        self._inner.update(value)
        v = self._inner.last()
        self._tracker.push(v)
        self._last_raw = v

    def last(self) -> float:
        lo = self._tracker.minimum
        hi = self._tracker.maximum
        if hi == lo:
            return 0.0
        x = self._last_raw
        span = hi - lo
        if math.isinf(span):
            # window spans more than the float range; work in halves
            x, lo, span = x / 2.0, lo / 2.0, hi / 2.0 - lo / 2.0
        return min(1.0, max(-1.0, -1.0 + 2.0 * (x - lo) / span))

    @property
    def inner(self) -> View:
        return self._inner

    @property
    def window_len(self) -> int:
        return self._window_len

    @property
    def running_min(self) -> float:
        return self._tracker.minimum

    @property
    def running_max(self) -> float:
        return self._tracker.maximum

    @property
    def last_raw(self) -> float:
        return self._last_raw

    @property
    def initialized(self) -> bool:
        return self._tracker.initialized

    @property
    def history(self) -> Tuple[float, ...]:
        return tuple(self._tracker.snapshot())
