"""Infrastructure Layer — database access and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from api/
    - Backend exceptions are mapped to core/errors.py before leaving this layer
"""
