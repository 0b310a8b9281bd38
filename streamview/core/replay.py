from __future__ import annotations

from typing import Callable, Dict, Hashable, Iterable, Optional, Sequence, TypeVar, Union

import numpy as np
import pandas as pd

from .aggregator import Aggregator


P = TypeVar("P", bound=Hashable)


def replay(aggregator: Aggregator, values: Iterable[float]) -> np.ndarray:
    """Feed ``values`` one at a time and stack the snapshot after each step.

    Returns an array of shape ``(n_values, len(aggregator))``.
    """
    rows = []
    for v in values:
        aggregator.update(float(v))
        rows.append(aggregator.snapshot())
    if not rows:
        return np.empty((0, len(aggregator)), dtype=float)
    return np.asarray(rows, dtype=float)


def replay_frame(
    aggregator: Aggregator,
    values: Union[Sequence[float], pd.Series],
    index: Optional[Sequence] = None,
) -> pd.DataFrame:
    """Like ``replay`` but labelled: one column per registered view.

    A ``pd.Series`` input keeps its index unless ``index`` is given.
    """
    if index is None and isinstance(values, pd.Series):
        index = values.index
    out = replay(aggregator, values)
    names = aggregator.names
    if len(set(names)) != len(names):
        names = [f"{n}_{i}" for i, n in enumerate(names)]
    return pd.DataFrame(out, columns=names, index=index)


def sweep(
    factory: Callable[[P], Aggregator],
    params: Iterable[P],
    values: Sequence[float],
) -> Dict[P, np.ndarray]:
    """Run one freshly built aggregator per parameter over the same series."""
    return {p: replay(factory(p), values) for p in params}
