"""Student route group, mounted at {BASE}/student."""

from portal.routes.group import group_router

router = group_router("student")
