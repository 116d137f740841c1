"""Services Layer: orchestrates statement building, execution and envelopes.

Invariants:
    - One database call per operation
"""
