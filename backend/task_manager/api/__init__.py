"""API Layer — FastAPI routes, authentication gate and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Routes stay thin: parse, authorize, delegate to services, commit, serialize
"""
