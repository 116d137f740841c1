"""SQL Gateway Package: HTTP-to-SQL gateway over a single relational database.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Empty __init__.py: explicit imports only, no star exports
"""
