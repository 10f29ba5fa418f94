"""
Shared helpers for FootyCast (logging and path resolution).
"""
