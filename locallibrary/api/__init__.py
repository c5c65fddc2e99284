"""API Layer - FastAPI routes, presenters and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return JSON view-data or a 303 redirect to a canonical URL

Design Decisions:
    - Thin routes delegate to CatalogService; presenters shape the JSON
"""
