"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (user input, API responses)
    - Schema failures surface as 400 through the RequestValidationError handler

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
