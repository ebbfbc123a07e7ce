"""Admin route group, mounted at {BASE}/admin."""

from portal.routes.group import group_router

router = group_router("admin")
