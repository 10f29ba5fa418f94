"""
Deterministic match-outcome scoring engine for FootyCast.

- `head_to_head` tallies past meetings of two teams.
- `estimator` turns team metrics + the tally into percentages.
- `recommendation` explains the favoured outcome.
"""

from footycast.engine.estimator import estimate
from footycast.engine.head_to_head import aggregate

__all__ = ["aggregate", "estimate"]
