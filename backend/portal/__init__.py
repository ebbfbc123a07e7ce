"""
Campus Portal Backend: Application Package Initializer
======================================================

What: Marks the `portal` directory as a Python package.
Who:  Used by uvicorn (`portal.main:app`), pytest and `python -m portal`.

Architecture Note:
    The backend is a thin HTTP shell around route groups:

    ┌─────────────────────────────────────┐
    │      Application factory (main)     │  ← middleware, handlers, lifespan
    ├─────────────────────────────────────┤
    │        Route groups (routes/)       │  ← student, admin, faculty, ...
    ├─────────────────────────────────────┤
    │      Database (async SQLAlchemy)    │  ← connect() on startup
    └─────────────────────────────────────┘

    Configuration (config.py) is read once at import and never changes.
"""

__version__ = "1.0.0"
