"""Infrastructure Layer: database binding and cross-cutting concerns.

Invariants:
    - Database failures surface as core ExecutionError, never raw driver exceptions
"""
