"""Attendance route group, mounted at {BASE}/attendance."""

from portal.routes.group import group_router

router = group_router("attendance")
