"""Route Modules — one file per resource/concern.

Invariants:
    - Each module exposes route() / routes() returning Route values
    - Routes never contain persistence logic (delegate to store/)
"""
