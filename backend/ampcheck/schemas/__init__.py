"""Pydantic Schemas — verdict envelope and validator result shapes.

Invariants:
    - Field aliases match the public JSON contract (testResult, specUrl, statusCode)
"""
