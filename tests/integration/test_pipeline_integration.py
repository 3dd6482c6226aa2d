"""Integration tests for the assembled pipeline: CORS, logging, auth, handlers."""

import logging
from typing import Any

import pytest
from fastapi.testclient import TestClient

from spitfire_posts import Settings, create_app
from spitfire_posts.core.middleware import PipelineMiddleware
from spitfire_posts.exceptions import ConfigurationError

REQUEST_LOGGER = "spitfire_posts.core.request_logger"


def _request_records(caplog: pytest.LogCaptureFixture) -> list[Any]:
    return [r for r in caplog.records if r.name == REQUEST_LOGGER]


class TestAuthentication:
    """Every route requires the API key; rejection never reaches a handler."""

    @pytest.mark.parametrize(
        ("method", "path"),
        [
            ("GET", "/"),
            ("GET", "/ping"),
            ("GET", "/posts"),
            ("POST", "/posts"),
            ("PUT", "/posts/p1"),
            ("DELETE", "/posts/p1"),
        ],
    )
    @pytest.mark.parametrize("headers", [{}, {"SPITFIRE-API-KEY": ""}, {"SPITFIRE-API-KEY": "x"}])
    def test_unauthenticated_requests_get_401(
        self,
        client: TestClient,
        store: Any,
        method: str,
        path: str,
        headers: dict[str, str],
    ) -> None:
        response = client.request(method, path, headers=headers, json={"title": "A"})

        assert response.status_code == 401
        assert response.json() == {"message": "Unauthorized"}
        assert store.calls == []
        assert len(store) == 0

    def test_unknown_path_requires_auth_first(self, client: TestClient) -> None:
        assert client.get("/nope").status_code == 401

    def test_unknown_path_when_authenticated_is_404(
        self, client: TestClient, auth_headers: dict[str, str]
    ) -> None:
        response = client.get("/nope", headers=auth_headers)

        assert response.status_code == 404
        assert response.json() == {"error": "Not Found"}

    def test_wrong_method_is_405(self, client: TestClient, auth_headers: dict[str, str]) -> None:
        response = client.patch("/posts", headers=auth_headers)

        assert response.status_code == 405
        assert response.json() == {"error": "Method Not Allowed"}

    def test_multiple_configured_keys(self, store: Any) -> None:
        client = TestClient(create_app(Settings(api_keys=frozenset({"ELITE", "ACE"})), store))

        assert client.get("/ping", headers={"SPITFIRE-API-KEY": "ACE"}).status_code == 200
        assert client.get("/ping", headers={"SPITFIRE-API-KEY": "ELITE"}).status_code == 200

    def test_empty_key_set_fails_at_startup(self, store: Any) -> None:
        with pytest.raises(ConfigurationError):
            create_app(Settings(api_keys=frozenset()), store)


class TestRequestLogging:
    """The logger observes every request, including short-circuited ones."""

    def test_successful_request_logged(
        self,
        client: TestClient,
        auth_headers: dict[str, str],
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        with caplog.at_level(logging.INFO):
            client.get("/ping", headers=auth_headers)

        records = _request_records(caplog)
        assert len(records) == 1
        assert records[0].path == "/ping"
        assert records[0].status_code == 200
        assert records[0].latency_ms >= 0

    def test_auth_rejection_logged_with_401(
        self, client: TestClient, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.INFO):
            client.get("/posts")

        records = _request_records(caplog)
        assert [(r.path, r.status_code) for r in records] == [("/posts", 401)]

    def test_validation_failure_logged_with_400(
        self,
        client: TestClient,
        auth_headers: dict[str, str],
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        with caplog.at_level(logging.INFO):
            client.post("/posts", json={"title": ""}, headers=auth_headers)

        assert [r.status_code for r in _request_records(caplog)] == [400]

    def test_preflight_is_not_logged(
        self, client: TestClient, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.INFO):
            client.options(
                "/posts",
                headers={"Origin": "https://example.com", "Access-Control-Request-Method": "POST"},
            )

        assert _request_records(caplog) == []


class TestCors:
    """CORS runs outermost: preflights skip auth, all responses carry headers."""

    def test_preflight_needs_no_api_key(self, client: TestClient) -> None:
        response = client.options(
            "/posts",
            headers={
                "Origin": "https://example.com",
                "Access-Control-Request-Method": "DELETE",
                "Access-Control-Request-Headers": "SPITFIRE-API-KEY",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-max-age"] == "43200"

    def test_unauthorized_response_carries_cors_headers(self, client: TestClient) -> None:
        response = client.get("/posts", headers={"Origin": "https://example.com"})

        assert response.status_code == 401
        assert response.headers["access-control-allow-origin"] in ("*", "https://example.com")

    def test_cors_max_age_from_settings(self, store: Any) -> None:
        settings = Settings(api_keys=frozenset({"ELITE"}), cors_max_age=120)
        client = TestClient(create_app(settings, store))

        response = client.options(
            "/posts",
            headers={"Origin": "https://example.com", "Access-Control-Request-Method": "GET"},
        )

        assert response.headers["access-control-max-age"] == "120"


class TestAppAssembly:
    def test_pipeline_stage_order(self, app: Any) -> None:
        pipeline = [m for m in app.user_middleware if m.cls is PipelineMiddleware]

        assert len(pipeline) == 1
        stages = pipeline[0].kwargs["stages"]
        assert type(stages[0]).__name__ == "RequestLogger"
        assert stages[1].__name__ == "guard(AuthGuard)"

    def test_cors_is_outermost(self, app: Any) -> None:
        assert app.user_middleware[0].cls.__name__ == "CORSMiddleware"

    def test_default_store_is_in_memory(self) -> None:
        app = create_app(Settings())

        assert type(app.state.store).__name__ == "InMemoryPostStore"

    def test_unhandled_error_is_logged_as_500(
        self, settings: Settings, caplog: pytest.LogCaptureFixture
    ) -> None:
        class BrokenState:
            pass

        app = create_app(settings, BrokenState())  # type: ignore[arg-type]
        client = TestClient(app, raise_server_exceptions=False)

        with caplog.at_level(logging.INFO):
            response = client.get("/posts", headers={"SPITFIRE-API-KEY": "ELITE"})

        assert response.status_code == 500
        assert [r.status_code for r in _request_records(caplog)] == [500]
