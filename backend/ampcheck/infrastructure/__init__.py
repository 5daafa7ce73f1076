"""Infrastructure Layer — outbound HTTP, validator subprocess, logging setup.

Invariants:
    - Infrastructure never imports from services/ or api/
    - All external failures mapped to AmpCheckError subclasses (core/errors.py)
"""
