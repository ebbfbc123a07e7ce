"""
Campus Portal Backend: Response Schemas
========================================

What:  Pydantic models for the responses the bootstrap itself serves.
How:   FastAPI serializes handler return values through these models and
       uses them for the OpenAPI documentation.
"""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """
    Body of `GET {BASE}/health`.

    Serializes to exactly `{"status": "ok"}`; health checks compare the body
    verbatim, so no other field belongs here.
    """
    status: str = Field(default="ok", description="Always 'ok' while the process serves HTTP")


class RouteGroupResponse(BaseModel):
    """Descriptor returned by a route group's index endpoint."""
    group: str = Field(description="Name of the route group that answered")
