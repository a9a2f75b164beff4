"""Core Layer — pure domain rules, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - All functions are pure and deterministic (clocks are passed in)

Design Decisions:
    - Functional core separated from imperative shell (ADR: impureim sandwich)
"""
