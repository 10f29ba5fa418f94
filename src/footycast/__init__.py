"""
FootyCast: heuristic win/draw/loss predictions for upcoming football fixtures.
"""

__version__ = "0.1.0"
