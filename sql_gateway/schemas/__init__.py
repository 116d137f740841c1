"""Pydantic Schemas: request validation at the API boundary.

Invariants:
    - Schemas validate at system boundary (request bodies)
"""
