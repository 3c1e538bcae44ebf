"""Pydantic Schemas — request/response DTOs exchanged through the mediator and the API.

Invariants:
    - Requests and responses are plain data carriers: no behavior
    - Shape validation (lengths, ranges) happens here, at the system boundary;
      business validation happens in services/validate_*.py

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
    - Command/Query base classes tell the mediator whether to commit
"""
