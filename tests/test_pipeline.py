"""
Tests for the request pipeline: stage order, preconditions, public assets,
body/cookie parsing and request logging.
"""

import json
import logging

import pytest
from fastapi import Request
from fastapi.testclient import TestClient
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.responses import PlainTextResponse
from starlette.routing import Route

from storefront.api.middleware import (
    AuthInitMiddleware,
    FlashMiddleware,
    GlobalContextMiddleware,
    SessionAuthMiddleware,
)
from storefront.api.middleware.parsers import PayloadTooLargeError, limit_body
from storefront.api.middleware.static_files import resolve_public_file
from storefront.api.pipeline import STAGE_ORDER, build_pipeline, validate_pipeline
from storefront.shared.core.exceptions import PipelineConfigurationError


def _ok(request):
    return PlainTextResponse("ok")


class TestPipelineDefinition:
    def test_stage_order(self, settings, session_store):
        stages = build_pipeline(settings, session_store)
        assert tuple(stage.name for stage in stages) == STAGE_ORDER
        assert STAGE_ORDER == (
            "request_logging",
            "body_parsers",
            "public_assets",
            "session",
            "flash",
            "auth_init",
            "auth_session",
            "global_context",
            "breadcrumbs",
        )

    def test_short_circuit_stages(self, settings, session_store):
        stages = build_pipeline(settings, session_store)
        assert [s.name for s in stages if s.short_circuit] == ["public_assets", "global_context"]

    def test_session_stage_options(self, settings, session_store):
        session_stage = next(s for s in build_pipeline(settings, session_store) if s.name == "session")
        assert session_stage.options["store"] is session_store
        assert session_stage.options["cookie_name"] == "storefront.sid"
        assert session_stage.options["max_age"].total_seconds() == 3 * 60 * 60

    def test_reordered_pipeline_is_rejected(self, settings, session_store):
        stages = list(build_pipeline(settings, session_store))
        stages[4], stages[3] = stages[3], stages[4]

        with pytest.raises(ValueError):
            validate_pipeline(stages)

    def test_app_keeps_pipeline(self, app):
        assert tuple(stage.name for stage in app.state.pipeline) == STAGE_ORDER


class TestStagePreconditions:
    @pytest.mark.parametrize(
        "middleware,requires",
        [
            (FlashMiddleware, "session"),
            (AuthInitMiddleware, "session"),
            (SessionAuthMiddleware, "auth_init"),
            (GlobalContextMiddleware, "auth_session"),
        ],
    )
    def test_stage_without_prerequisite_fails_loudly(self, middleware, requires):
        bare = Starlette(routes=[Route("/", _ok)], middleware=[Middleware(middleware)])

        with pytest.raises(PipelineConfigurationError) as exc_info:
            TestClient(bare).get("/")

        assert exc_info.value.details["requires"] == requires


class TestPublicAssets:
    def test_serves_stylesheet(self, client):
        response = client.get("/stylesheets/style.css")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/css")

    def test_asset_skips_session_and_context(
        self, build_app, session_store, category_repository, tmp_path
    ):
        (tmp_path / "robots.txt").write_text("User-agent: *\n")
        client = TestClient(build_app(PUBLIC_DIR=tmp_path))
        client.cookies.set("storefront.sid", "not-a-valid-token")

        response = client.get("/robots.txt")

        assert response.status_code == 200
        assert response.text == "User-agent: *\n"
        assert session_store.loads == 0
        assert category_repository.calls == 0
        assert "set-cookie" not in response.headers

    def test_asset_served_when_category_fetch_fails(
        self, build_app, failing_category_repository, tmp_path
    ):
        (tmp_path / "logo.svg").write_text("<svg/>")
        client = TestClient(
            build_app(PUBLIC_DIR=tmp_path, category_repository=failing_category_repository)
        )

        assert client.get("/logo.svg", follow_redirects=False).status_code == 200

    def test_non_asset_continues_down_the_pipeline(self, client, category_repository):
        response = client.get("/pages/about-us")

        assert response.status_code == 200
        assert category_repository.calls == 1

    def test_resolve_rejects_directories_and_escapes(self, tmp_path):
        public = tmp_path / "public"
        (public / "images").mkdir(parents=True)
        (public / "images" / "a.png").write_bytes(b"png")
        (tmp_path / "secret.txt").write_text("nope")

        assert resolve_public_file(public, "/images/a.png") == (public / "images" / "a.png").resolve()
        assert resolve_public_file(public, "/images") is None
        assert resolve_public_file(public, "/") is None
        assert resolve_public_file(public, "/../secret.txt") is None
        assert resolve_public_file(public, "/missing.css") is None

    def test_post_to_asset_path_is_not_served(self, client):
        response = client.post("/stylesheets/style.css")
        assert response.status_code in (404, 405)


class TestBodyParsers:
    @pytest.fixture
    def echo_client(self, app, client):
        @app.post("/echo")
        async def echo(request: Request):
            raw = await request.body()
            return {
                "body": request.state.body,
                "raw": raw.decode(),
                "cookies": request.state.cookies,
            }

        return client

    def test_json_body_parsed_and_replayed(self, echo_client):
        response = echo_client.post("/echo", json={"quantity": 2, "sku": "SH-001"})

        assert response.status_code == 200
        payload = response.json()
        assert payload["body"] == {"quantity": 2, "sku": "SH-001"}
        assert json.loads(payload["raw"]) == {"quantity": 2, "sku": "SH-001"}

    def test_urlencoded_body_parsed(self, echo_client):
        response = echo_client.post("/echo", data={"email": "a@example.com", "note": ""})
        assert response.json()["body"] == {"email": "a@example.com", "note": ""}

    def test_other_content_types_leave_empty_body(self, echo_client):
        response = echo_client.post(
            "/echo", content=b"plain words", headers={"content-type": "text/plain"}
        )
        assert response.json()["body"] == {}
        assert response.json()["raw"] == "plain words"

    def test_cookies_parsed(self, echo_client):
        echo_client.cookies.set("theme", "dark")
        assert echo_client.post("/echo", json={}).json()["cookies"] == {"theme": "dark"}

    def test_malformed_json_is_rejected(self, echo_client):
        response = echo_client.post(
            "/echo", content=b"{not json", headers={"content-type": "application/json"}
        )
        assert response.status_code == 422

    def test_oversized_body_is_rejected(self, echo_client):
        response = echo_client.post(
            "/echo",
            content=b"x=" + b"a" * (100 * 1024 + 1),
            headers={"content-type": "application/x-www-form-urlencoded"},
        )
        assert response.status_code == 413

    def test_repeated_form_key_keeps_last_value(self, echo_client):
        response = echo_client.post(
            "/echo",
            content=b"size=40&size=42",
            headers={"content-type": "application/x-www-form-urlencoded"},
        )
        assert response.json()["body"] == {"size": "42"}

    def test_json_array_kept_under_key(self, echo_client):
        assert echo_client.post("/echo", json=[1, 2]).json()["body"] == {"_json": [1, 2]}

    def test_rejected_bodies_are_answered_not_raised(self, app, echo_client, caplog):
        strict_client = TestClient(app)

        with caplog.at_level("INFO"):
            malformed = strict_client.post(
                "/user/signin", content=b"{bad", headers={"content-type": "application/json"}
            )
            oversized = strict_client.post(
                "/echo",
                content=b"x=" + b"a" * (100 * 1024 + 1),
                headers={"content-type": "application/x-www-form-urlencoded"},
            )

        assert malformed.status_code == 422
        assert "Malformed JSON body" in malformed.text
        assert oversized.status_code == 413
        assert "Request entity too large" in oversized.text
        assert not [r for r in caplog.records if r.levelno >= logging.ERROR]

    @pytest.mark.asyncio
    async def test_body_limit_applies_to_streamed_chunks(self):
        chunks = [
            {"type": "http.request", "body": b"a" * 6, "more_body": True},
            {"type": "http.request", "body": b"a" * 6, "more_body": False},
        ]

        async def receive():
            return chunks.pop(0)

        receive_limited = limit_body(receive, max_body_size=10)
        assert (await receive_limited())["body"] == b"a" * 6
        with pytest.raises(PayloadTooLargeError):
            await receive_limited()



class TestRequestLogging:
    def test_request_id_header_generated(self, client):
        response = client.get("/pages/careers")
        assert len(response.headers["x-request-id"]) == 32

    def test_request_id_header_propagated(self, client):
        response = client.get("/pages/careers", headers={"X-Request-ID": "abc123"})
        assert response.headers["x-request-id"] == "abc123"

    def test_one_line_per_request(self, client, caplog):
        with caplog.at_level("INFO", logger="storefront.access"):
            client.get("/pages/careers")

        lines = [r.getMessage() for r in caplog.records if r.name == "storefront.access"]
        assert len(lines) == 1
        assert lines[0].startswith("GET /pages/careers 200 ")
        assert lines[0].endswith(" ms")

    def test_client_errors_logged_as_warnings(self, client, caplog):
        with caplog.at_level("INFO", logger="storefront.access"):
            client.get("/missing-page")

        record = next(r for r in caplog.records if r.name == "storefront.access")
        assert record.levelname == "WARNING"
