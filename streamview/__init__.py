"""Streaming views over scalar observation series.

Each view consumes one observation per ``update`` and exposes its current
output through ``last``. Views compose: a ``Rescaler`` wraps any view and
maps its output into [-1, 1] over a trailing window, and an ``Aggregator``
drives many views off a single stream and reads them back in order.
"""

from .core.aggregator import Aggregator
from .core.filters import FILTERS, Echo, TrendFlex, build_view
from .core.rescaler import Rescaler
from .core.view import View

__all__ = [
    "Aggregator",
    "Echo",
    "FILTERS",
    "Rescaler",
    "TrendFlex",
    "View",
    "build_view",
    "config",
    "core",
    "utils",
]
