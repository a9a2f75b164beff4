"""Infrastructure Layer — store access, credential crypto and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from services/ or api/routes/
    - Store and crypto failures are mapped to typed errors (core/errors.py) before leaving

Design Decisions:
    - Components are plain classes built once in the lifespan and passed explicitly
      (no module-level singletons)
"""
