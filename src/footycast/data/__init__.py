"""
Data layer for FootyCast.

Includes:
- History CSV schema and validation (`schema`)
- Loading utilities (`data_loader`)
- football-data.org client (`football_api`)
- In-memory history cache (`history_store`)
"""
