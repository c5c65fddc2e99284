"""Pydantic Schemas - request body shapes for the catalog forms.

Invariants:
    - Schemas only fix the SHAPE of a submission (strings, lists)
    - Catalog rules live in core/validate_catalog.py so every violation can be
      reported together with the sanitized submission
"""
