"""Core primitives: the view interface, bounded history, windowed extrema,
rescaling, filters and the fan-out aggregator.
"""
