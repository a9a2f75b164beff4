"""Services Layer — account lifecycle, cart aggregation, review guard, catalog.

Invariants:
    - Every service receives its AsyncSession (and collaborators) explicitly
    - Each public mutation commits exactly once or raises

Design Decisions:
    - One service per aggregate for locality (ADR: no god objects)
"""
