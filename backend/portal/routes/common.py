"""
Batch lookup route group.

Mounted directly at {BASE}, next to the question upload group, so its
paths must stay disjoint from that group's.
"""

from portal.routes.group import group_router

router = group_router("common", index_path="/common")
