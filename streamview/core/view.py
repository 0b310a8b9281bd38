from __future__ import annotations

import copy
import operator
from abc import ABC, abstractmethod
from typing import TypeVar


V = TypeVar("V", bound="View")


def check_window_len(window_len: int) -> int:
    if isinstance(window_len, bool):
        raise TypeError("window_len must be an int, got bool")
    try:
        n = operator.index(window_len)
    except TypeError:
        raise TypeError(f"window_len must be an int, got {type(window_len).__name__}") from None
    if n < 1:
        raise ValueError(f"window_len must be positive, got {n}")
    return n


class View(ABC):
    """Single-scalar-in, single-scalar-out streaming computation.

    ``update`` consumes exactly one observation and advances internal state.
    ``last`` is a pure read that returns the same value until the next
    ``update``; before any update it returns ``0.0``. Updates on one view must
    be strictly sequential. Replicas meant to run over different data are made
    with ``clone`` and share no mutable state with the original.
    """

    name: str = "view"

    @abstractmethod
    def update(self, value: float) -> None:
        ...

    @abstractmethod
    def last(self) -> float:
        ...

    def clone(self: V) -> V:
        return copy.deepcopy(self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(last={self.last():.6g})"
