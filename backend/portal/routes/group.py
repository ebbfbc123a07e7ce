"""
Campus Portal Backend: Route Group Builder
===========================================

What:  Builds the APIRouter behind each named route group.
How:   Every group gets its own tag (for the OpenAPI docs) and an index
       endpoint that names the group, so a client can tell which group a
       prefix resolves to. Group modules add their handlers to the
       returned router.
"""

from fastapi import APIRouter

from portal.schemas.route import RouteGroupResponse


def group_router(name: str, index_path: str = "") -> APIRouter:
    """
    Create the router for route group `name`.

    Args:
        name:        Group name, used as tag and in the index response.
        index_path:  Path of the index endpoint inside the group. Groups
                     mounted directly at the base path need a non-empty
                     one so they do not collide with each other.
    """
    router = APIRouter(tags=[name])

    @router.get(
        index_path,
        response_model=RouteGroupResponse,
        summary=f"Describe the {name} route group",
    )
    async def describe_group() -> RouteGroupResponse:
        return RouteGroupResponse(group=name)

    return router
