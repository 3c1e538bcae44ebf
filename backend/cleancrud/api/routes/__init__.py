"""Route Modules — one controller file per resource.

Invariants:
    - Each module defines its own APIRouter with prefix and tags
    - Routes never contain business logic (build request → mediator.send → unwrap)

Design Decisions:
    - Explicit registration in main.py over auto-discovery
"""
