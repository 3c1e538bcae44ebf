"""Services Layer — mediator, validators, handlers and factories.

Invariants:
    - One handler file and at most one validator file per feature
    - Mediator uses explicit registration (no auto-discovery)
    - Nothing here commits except the mediator (and startup bootstrap)

Design Decisions:
    - Validators collect errors, handlers return Results: expected failures
      never travel as exceptions
"""
