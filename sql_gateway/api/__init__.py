"""API Layer: FastAPI routes, dependencies, response formatting and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints answer with the response envelope (or the HTML docs page)

Design Decisions:
    - Thin routes delegate to services
"""
