"""Route Modules — one file per resource/concern.

Invariants:
    - Each module exposes a build_*_router() that turns its route table into an APIRouter
    - Routes never contain business logic (delegate to services)

Design Decisions:
    - Explicit mounting in main.create_app() over decorator self-registration
"""
