"""
Campus Portal Backend: Application Endpoint Tests
==================================================

What:  HTTP-level tests against apps built by create_app().
How:   HTTPX AsyncClient over ASGITransport; route groups replaced by stub
       routers where the test needs to know which group answered.

What we test:
    ✅ GET / hint and GET {BASE}/health body
    ✅ Every mount prefix reaches its own router
    ✅ Changing BASE_PATH moves every prefix
    ✅ Default route groups answer their descriptor endpoint
    ✅ CORS headers, request ID header, JSON body and cookie access
"""

import pytest
from fastapi import APIRouter, Request

from portal.config import Settings
from portal.main import create_app
from portal.routes import ROUTE_GROUPS

# (sub path, stub name, path inside the stub)
STUB_GROUPS = [
    ("/student", "student", "/whoami"),
    ("/admin", "admin", "/whoami"),
    ("/careerService", "careerService", "/whoami"),
    ("/faculty", "faculty", "/whoami"),
    ("", "common", "/common-whoami"),
    ("", "questionUpload", "/question-whoami"),
    ("/batch", "batchRegister", "/whoami"),
    ("/attendance", "attendance", "/whoami"),
]


@pytest.fixture
def stub_groups(stub_router):
    return [(sub, stub_router(name, path)) for sub, name, path in STUB_GROUPS]


class TestRootAndHealth:

    @pytest.mark.asyncio
    async def test_root_hint_names_base_path(self, test_settings, client_factory):
        app = create_app(settings=test_settings)
        async with client_factory(app) as client:
            response = await client.get("/")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert response.text == "Backend is up. Try /api/health"

    @pytest.mark.asyncio
    async def test_health_returns_exact_body(self, test_settings, client_factory):
        app = create_app(settings=test_settings)
        async with client_factory(app) as client:
            response = await client.get("/api/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    @pytest.mark.asyncio
    async def test_health_not_served_outside_base(self, test_settings, client_factory):
        app = create_app(settings=test_settings)
        async with client_factory(app) as client:
            response = await client.get("/health")

        assert response.status_code == 404


class TestRouteGroupMounting:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("sub_path,name,path", STUB_GROUPS)
    async def test_prefix_reaches_its_router(
        self, sub_path, name, path, test_settings, stub_groups, client_factory
    ):
        app = create_app(settings=test_settings, route_groups=stub_groups)
        async with client_factory(app) as client:
            response = await client.get(f"/api{sub_path}{path}")

        assert response.status_code == 200
        assert response.json()["stub"] == name

    @pytest.mark.asyncio
    async def test_base_path_change_moves_every_prefix(self, stub_groups, client_factory):
        settings = Settings(_env_file=None, base_path="/v2")
        app = create_app(settings=settings, route_groups=stub_groups)

        async with client_factory(app) as client:
            for sub_path, name, path in STUB_GROUPS:
                moved = await client.get(f"/v2{sub_path}{path}")
                old = await client.get(f"/api{sub_path}{path}")
                assert moved.status_code == 200, sub_path
                assert moved.json()["stub"] == name
                assert old.status_code == 404, sub_path

            health = await client.get("/v2/health")
            root = await client.get("/")

        assert health.json() == {"status": "ok"}
        assert "/v2/health" in root.text

    @pytest.mark.asyncio
    async def test_root_base_path_has_no_double_slash(self, stub_groups, client_factory):
        settings = Settings(_env_file=None, base_path="/")
        app = create_app(settings=settings, route_groups=stub_groups)

        async with client_factory(app) as client:
            health = await client.get("/health")
            student = await client.get("/student/whoami")

        assert health.json() == {"status": "ok"}
        assert student.json()["stub"] == "student"

    @pytest.mark.asyncio
    async def test_base_path_without_leading_slash(self, stub_groups, client_factory):
        settings = Settings(_env_file=None, base_path="api")
        app = create_app(settings=settings, route_groups=stub_groups)

        async with client_factory(app) as client:
            health = await client.get("/api/health")
            student = await client.get("/api/student/whoami")

        assert health.json() == {"status": "ok"}
        assert student.json()["stub"] == "student"

    def test_default_mount_table(self):
        assert [sub for sub, _ in ROUTE_GROUPS] == [sub for sub, _, _ in STUB_GROUPS]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "path,group",
        [
            ("/api/student", "student"),
            ("/api/admin", "admin"),
            ("/api/careerService", "careerService"),
            ("/api/faculty", "faculty"),
            ("/api/common", "common"),
            ("/api/questionUpload", "questionUpload"),
            ("/api/batch", "batchRegister"),
            ("/api/attendance", "attendance"),
        ],
    )
    async def test_default_groups_describe_themselves(
        self, path, group, test_settings, client_factory
    ):
        app = create_app(settings=test_settings)
        async with client_factory(app) as client:
            response = await client.get(path)

        assert response.status_code == 200
        assert response.json() == {"group": group}


class TestMiddleware:

    @pytest.mark.asyncio
    async def test_cors_allows_any_origin(self, test_settings, client_factory):
        app = create_app(settings=test_settings)
        async with client_factory(app) as client:
            response = await client.get(
                "/api/health", headers={"Origin": "http://frontend.example"}
            )

        assert response.headers["access-control-allow-origin"] == "*"

    @pytest.mark.asyncio
    async def test_cors_preflight(self, test_settings, client_factory):
        app = create_app(settings=test_settings)
        async with client_factory(app) as client:
            response = await client.options(
                "/api/student",
                headers={
                    "Origin": "http://frontend.example",
                    "Access-Control-Request-Method": "POST",
                    "Access-Control-Request-Headers": "content-type",
                },
            )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"

    @pytest.mark.asyncio
    async def test_request_id_generated(self, test_settings, client_factory):
        app = create_app(settings=test_settings)
        async with client_factory(app) as client:
            response = await client.get("/api/health")

        assert len(response.headers["X-Request-ID"]) == 8

    @pytest.mark.asyncio
    async def test_request_id_echoed(self, test_settings, client_factory):
        app = create_app(settings=test_settings)
        async with client_factory(app) as client:
            response = await client.get("/", headers={"X-Request-ID": "trace-42"})

        assert response.headers["X-Request-ID"] == "trace-42"

    @pytest.mark.asyncio
    async def test_json_body_and_cookies_reach_handlers(self, test_settings, client_factory):
        router = APIRouter()

        @router.post("/echo")
        async def echo(payload: dict, request: Request):
            return {"body": payload, "cookies": dict(request.cookies)}

        app = create_app(settings=test_settings, route_groups=[("/student", router)])
        async with client_factory(app) as client:
            response = await client.post(
                "/api/student/echo",
                json={"roll": "21CS042"},
                headers={"Cookie": "token=abc"},
            )

        assert response.status_code == 200
        assert response.json() == {"body": {"roll": "21CS042"}, "cookies": {"token": "abc"}}
