"""Career-service route group, mounted at {BASE}/careerService."""

from portal.routes.group import group_router

router = group_router("careerService")
