"""API Layer — FastAPI routes and error handlers.

Invariants:
    - Routes mounted explicitly by main.create_app() (no auto-discovery)
    - All endpoints return structured JSON responses

Design Decisions:
    - Thin routes delegate to services
"""
