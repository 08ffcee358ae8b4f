"""Pydantic Schemas: request body validation for the demo API.

Invariants:
    - Schemas validate at the system boundary only
    - Domain enums from core/ used for status and type fields
"""
