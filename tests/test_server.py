"""Tests for the embedded webhook listener."""

from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient
from starlette.responses import PlainTextResponse

from conftest import json_body, signed_headers
from hubhook import webhook
from hubhook.config import normalize_path
from hubhook.exceptions import ConfigurationError
from hubhook.server import create_app, run, serve

STAR_PAYLOAD = {"repository": {"stargazers_count": 5}}


class TestNormalizePath:
    """Tests for listener path normalization."""

    def test_empty_is_root(self):
        assert normalize_path("") == "/"

    def test_root_unchanged(self):
        assert normalize_path("/") == "/"

    def test_adds_leading_slash(self):
        assert normalize_path("github") == "/github"

    def test_keeps_nested_path(self):
        assert normalize_path("/hooks/github") == "/hooks/github"


class TestListenerRouting:
    """Tests for method and path filtering."""

    @pytest.fixture
    def handler(self):
        return MagicMock(return_value=None)

    @pytest.fixture
    def client(self, handler, secret):
        hook = webhook(secret).on("star", handler)
        return TestClient(create_app(hook))

    def test_post_root_dispatches(self, client, handler):
        """End-to-end: a signed star event invokes the handler once, 200."""
        body = json_body(STAR_PAYLOAD)
        response = client.post("/", content=body, headers=signed_headers(body))

        assert response.status_code == 200
        assert response.content == b""
        handler.assert_called_once_with(STAR_PAYLOAD)

    def test_unrecognized_event_handler_invoked(self, secret):
        """A handler registered for a name GitHub added later still runs."""
        handler = MagicMock(return_value=None)
        client = TestClient(create_app(webhook(secret).on("merge_group", handler)))
        body = json_body({"action": "checks_requested"})

        response = client.post("/", content=body, headers=signed_headers(body, "merge_group"))

        assert response.status_code == 200
        handler.assert_called_once_with({"action": "checks_requested"})

    @pytest.mark.parametrize(
        "method", ["GET", "PUT", "DELETE", "PATCH", "OPTIONS", "TRACE", "PROPFIND"]
    )
    def test_other_methods_not_found(self, client, handler, method):
        """Methods other than POST get 404."""
        response = client.request(method, "/")

        assert response.status_code == 404
        assert response.content == b""
        handler.assert_not_called()

    def test_other_path_not_found(self, client, handler):
        """POSTs to any other path get 404."""
        body = json_body(STAR_PAYLOAD)
        response = client.post("/elsewhere", content=body, headers=signed_headers(body))

        assert response.status_code == 404
        handler.assert_not_called()

    def test_docs_routes_disabled(self, client):
        """No documentation routes are exposed."""
        assert client.get("/docs").status_code == 404
        assert client.get("/openapi.json").status_code == 404

    def test_bad_signature_forbidden(self, client, handler):
        """An invalid signature gets 403 through the listener."""
        body = json_body(STAR_PAYLOAD)
        headers = signed_headers(body, secret="wrong")
        response = client.post("/", content=body, headers=headers)

        assert response.status_code == 403
        assert response.content == b""
        handler.assert_not_called()

    def test_missing_event_forbidden(self, client):
        """A missing event header gets 403 through the listener."""
        body = json_body(STAR_PAYLOAD)
        response = client.post("/", content=body, headers=signed_headers(body, event=None))
        assert response.status_code == 403

    def test_malformed_body_internal_error(self, client):
        """A signed malformed body gets 500 through the listener."""
        body = b"{not json"
        response = client.post("/", content=body, headers=signed_headers(body))

        assert response.status_code == 500
        assert response.content == b""

    def test_unhandled_event_ok(self, client, handler):
        """Events without handlers are acknowledged with 200."""
        body = json_body({"zen": "Keep it logically awesome."})
        response = client.post("/", content=body, headers=signed_headers(body, event="ping"))

        assert response.status_code == 200
        handler.assert_not_called()


class TestListenerPaths:
    """Tests for custom listener paths."""

    def test_custom_path(self, secret):
        """Only the configured path is accepted."""
        handler = MagicMock(return_value=None)
        client = TestClient(webhook(secret).on("push", handler).app("/github"))
        body = json_body({"ref": "refs/heads/main"})
        headers = signed_headers(body, event="push")

        assert client.post("/", content=body, headers=headers).status_code == 404
        assert client.post("/github", content=body, headers=headers).status_code == 200
        handler.assert_called_once_with({"ref": "refs/heads/main"})

    def test_path_without_leading_slash(self, secret):
        """A path token without a slash matches the slashed path."""
        client = TestClient(webhook(secret).app("github"))
        body = json_body({})
        response = client.post("/github", content=body, headers=signed_headers(body))
        assert response.status_code == 200


class TestListenerResponses:
    """Tests for handler-provided responses."""

    def test_handler_response_forwarded(self, secret):
        """A handler's Response is returned unchanged."""

        def on_star(payload):
            count = payload["repository"]["stargazers_count"]
            return PlainTextResponse(f"stars={count}", status_code=202, headers={"x-seen": "1"})

        client = TestClient(webhook(secret).on("star", on_star).app())
        body = json_body(STAR_PAYLOAD)
        response = client.post("/", content=body, headers=signed_headers(body))

        assert response.status_code == 202
        assert response.text == "stars=5"
        assert response.headers["x-seen"] == "1"

    def test_async_handler_response_forwarded(self, secret):
        """Async handlers may return a Response too."""

        async def on_star(payload):
            return PlainTextResponse("async", status_code=201)

        client = TestClient(webhook(secret).on("star", on_star).app())
        body = json_body(STAR_PAYLOAD)
        response = client.post("/", content=body, headers=signed_headers(body))

        assert response.status_code == 201
        assert response.text == "async"

    def test_handler_fault_internal_error(self, secret):
        """A raising handler gets 500 with no body."""

        def on_star(payload):
            raise RuntimeError("boom")

        client = TestClient(webhook(secret).on("star", on_star).app())
        body = json_body(STAR_PAYLOAD)
        response = client.post("/", content=body, headers=signed_headers(body))

        assert response.status_code == 500
        assert response.content == b""

    def test_unsigned_mode(self):
        """Without a secret, unsigned requests are dispatched."""
        handler = MagicMock(return_value=None)
        client = TestClient(webhook().on("star", handler).app())
        body = json_body(STAR_PAYLOAD)
        response = client.post("/", content=body, headers=signed_headers(body, secret=None))

        assert response.status_code == 200
        handler.assert_called_once_with(STAR_PAYLOAD)


class TestRun:
    """Tests for starting the listener."""

    def test_run_starts_uvicorn(self, secret):
        """run() hands the app to uvicorn with host and port."""
        hook = webhook(secret)
        with patch("hubhook.server.uvicorn.run") as uvicorn_run:
            run(hook, 3000, "/github", "127.0.0.1")

        uvicorn_run.assert_called_once()
        _, kwargs = uvicorn_run.call_args
        assert kwargs == {"host": "127.0.0.1", "port": 3000}

    def test_listen_end_to_end_wiring(self, secret):
        """webhook(...).on(...).listen(3000) reaches uvicorn."""
        with patch("hubhook.server.uvicorn.run") as uvicorn_run:
            webhook(secret).on("star", MagicMock()).listen(3000)

        assert uvicorn_run.call_args.kwargs["port"] == 3000
        assert uvicorn_run.call_args.kwargs["host"] == "0.0.0.0"

    @pytest.mark.parametrize("port", [0, -1, 65536])
    def test_run_rejects_invalid_port(self, secret, port):
        """Ports outside 1..65535 are a configuration error."""
        with pytest.raises(ConfigurationError):
            run(webhook(secret), port)

    @pytest.mark.asyncio
    async def test_serve_runs_uvicorn_server(self, secret):
        """serve() awaits uvicorn.Server.serve()."""
        with patch("hubhook.server.uvicorn.Server") as server_cls:
            server_cls.return_value.serve = MagicMock(return_value=_done())
            await serve(webhook(secret), 8080, "/github")

        config = server_cls.call_args.args[0]
        assert config.port == 8080
        server_cls.return_value.serve.assert_called_once()

    @pytest.mark.asyncio
    async def test_serve_rejects_invalid_port(self, secret):
        with pytest.raises(ConfigurationError):
            await serve(webhook(secret), 70000)


async def _done() -> None:
    return None


class TestRunFromSettings:
    """Tests for run_from_settings."""

    def test_uses_settings(self, secret):
        from hubhook.config import Settings
        from hubhook.server import run_from_settings

        settings = Settings(secret=secret, host="127.0.0.1", port=9000, path="hooks")
        with (
            patch("hubhook.server.configure_logging") as configure,
            patch("hubhook.server.uvicorn.run") as uvicorn_run,
        ):
            run_from_settings(webhook(secret), settings)

        configure.assert_called_once_with(level="INFO", format="json")
        assert uvicorn_run.call_args.kwargs == {"host": "127.0.0.1", "port": 9000}
