"""
Campus Portal Backend: Middleware Package
==========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain:
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    JSON bodies and cookies need no middleware here: FastAPI parses
    request bodies into handler arguments and Starlette exposes
    `request.cookies` on every request.
"""
