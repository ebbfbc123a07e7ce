"""
Question upload route group.

Mounted directly at {BASE}; see common.py for the sibling group.
"""

from portal.routes.group import group_router

router = group_router("questionUpload", index_path="/questionUpload")
