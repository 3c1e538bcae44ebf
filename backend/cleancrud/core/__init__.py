"""Core Layer — domain model and Result type, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, models/ or db/
    - Aggregates are mutated only through their own methods

Design Decisions:
    - Functional core separated from imperative shell: repositories are
      Protocols here, implemented in infrastructure/
"""
