"""Client Layer — typed Python client for the Clean Crud API.

Invariants:
    - Services speak the same request/response DTOs as the server (schemas/)
    - Cross-cutting behavior lives in httpx event hooks (interceptors), never in services
    - Guards run before a request is sent; the error handler runs on every response

Design Decisions:
    - httpx.AsyncClient with event_hooks: interceptors are plain async callables
    - transport injectable so tests drive the real app in-process (ASGITransport)
"""
