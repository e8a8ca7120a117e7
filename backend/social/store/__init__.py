"""Store Layer — persistence boundary for domain entities.

Invariants:
    - Stores receive an AsyncSession; they never create engines or sessions
    - Every public store method raises only core/errors.py types
"""
