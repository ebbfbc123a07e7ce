"""Batch registration route group, mounted at {BASE}/batch."""

from portal.routes.group import group_router

router = group_router("batchRegister")
