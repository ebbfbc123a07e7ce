"""
Campus Portal Backend: Health Check Route
==========================================

What:  Liveness endpoint for Docker health checks and load balancers.
How:   Answers `{"status": "ok"}` with HTTP 200 whenever the process can
       serve HTTP. Database reachability is reported by the startup
       connect log, not here.
"""

from fastapi import APIRouter

from portal.schemas.route import HealthResponse

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check() -> HealthResponse:
    return HealthResponse(status="ok")
