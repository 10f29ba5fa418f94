"""
FastAPI prediction service for FootyCast.

Exposes endpoints to:
- List upcoming fixtures with the teams' standings.
- Predict the outcome of a fixture and return percentages + a recommendation.
"""
