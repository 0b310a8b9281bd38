from __future__ import annotations

import copy
import logging
from typing import List, Optional, Tuple, TypeVar

from .view import View


logger = logging.getLogger(__name__)

V = TypeVar("V", bound=View)


class Aggregator:
    """Fan one observation stream out to many independent views.

    Registration order is the order of ``snapshot`` results. Views are owned
    by the aggregator and only ever appended.
    """

    def __init__(self) -> None:
        self._views: List[View] = []
        self._names: List[str] = []

    def register(self, view: V, name: Optional[str] = None) -> V:
        label = name if name is not None else getattr(view, "name", type(view).__name__)
        self._views.append(view)
        self._names.append(label)
        logger.debug("view registered", extra={"view": label, "position": len(self._views) - 1})
        return view

    def update(self, value: float) -> None:
        for view in self._views:
            view.update(value)

    def snapshot(self) -> List[float]:
        return [view.last() for view in self._views]

    def clone(self) -> "Aggregator":
        return copy.deepcopy(self)

    @property
    def views(self) -> Tuple[View, ...]:
        return tuple(self._views)

    @property
    def names(self) -> List[str]:
        return list(self._names)

    def __len__(self) -> int:
        return len(self._views)
