"""API Layer — FastAPI routes, error handlers, and the Lambda event adapter.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Adapters never contain business logic (delegate to services/)
"""
