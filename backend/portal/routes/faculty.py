"""Faculty route group, mounted at {BASE}/faculty."""

from portal.routes.group import group_router

router = group_router("faculty")
