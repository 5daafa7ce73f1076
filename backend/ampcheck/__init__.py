"""AMP Checker Application Package — fetch a page, validate its AMP markup.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
