"""Services - catalog operations orchestrating core rules and persistence.

Invariants:
    - Services receive their DatabaseSessionManager explicitly (no globals)
    - Routes never touch the ORM directly; they call CatalogService
"""
