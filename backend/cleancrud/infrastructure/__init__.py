"""Infrastructure Layer — DB session management, repositories, security, logging.

Invariants:
    - Implements the contracts declared in core/repository_protocols.py
    - Never imported by core/
"""
