"""
Campus Portal Backend: API Routes Package
==========================================

What:  The route groups served under the configured base path.

Mount table (relative to BASE_PATH, in mounting order):
    /student         student.py
    /admin           admin.py
    /careerService   career_service.py
    /faculty         faculty.py
    (base)           common.py           batch lookup
    (base)           question_upload.py
    /batch           batch_register.py
    /attendance      attendance.py

    health.py serves GET {BASE}/health and is mounted by the app factory.
"""

from typing import List, Tuple

from fastapi import APIRouter

from portal.routes import (
    admin,
    attendance,
    batch_register,
    career_service,
    common,
    faculty,
    question_upload,
    student,
)

# (sub path under BASE_PATH, router); "" mounts at the base path itself
RouteGroups = List[Tuple[str, APIRouter]]

ROUTE_GROUPS: RouteGroups = [
    ("/student", student.router),
    ("/admin", admin.router),
    ("/careerService", career_service.router),
    ("/faculty", faculty.router),
    ("", common.router),
    ("", question_upload.router),
    ("/batch", batch_register.router),
    ("/attendance", attendance.router),
]
