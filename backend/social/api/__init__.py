"""API Layer — route table, routes, error handlers and server assembly.

Invariants:
    - Routes registered explicitly from route() factories (no auto-discovery)
    - All endpoints return JSON responses
"""
