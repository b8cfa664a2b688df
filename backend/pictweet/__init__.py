"""
PicTweet Backend — Application Package Initializer
==================================================

What: Marks the `pictweet` directory as a Python package.
Who:  Imported by uvicorn (`pictweet.main:app`), Alembic and pytest.

Architecture Note:
    The backend is a layered CRUD service:

    ┌─────────────────────────────────────┐
    │      Routes (API / dispatch)        │  ← paths, params, status codes
    ├─────────────────────────────────────┤
    │   Services (controller logic)       │  ← lookups, inserts, deletes
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Routes stay thin and hand everything to a service; services never touch
    HTTP objects, so they can be tested with a mocked session.
"""

__version__ = "1.0.0"
