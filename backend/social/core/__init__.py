"""Core Layer — pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from api/, store/, infrastructure/, or db/
    - All functions are pure and deterministic (hashing salts aside)
"""
