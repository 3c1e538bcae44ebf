"""API Layer — FastAPI controllers, guards and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Controllers only build a request DTO and send it through the mediator
    - All error responses share the CleanCrudError envelope

Design Decisions:
    - Failed Results become RequestFailedError, rendered by the global handler
"""
