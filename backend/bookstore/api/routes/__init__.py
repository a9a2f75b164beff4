"""Route Modules — one file per resource/concern.

Invariants:
    - Each module defines its own APIRouter with prefix and tags
    - Routes never contain business logic (delegate to services/)
    - Auth gates applied as dependencies, at router level where a whole group shares them

Design Decisions:
    - Explicit registration in main.py over auto-discovery
"""
