"""Tests for the trgrpc command line."""

import io
import json
from pathlib import Path

import httpx
import pytest

import trgrpc.http.transport as transport_module
from trgrpc.cli.main import (
    EXIT_CONFIG_ERROR,
    EXIT_HTTP_ERROR,
    EXIT_OK,
    EXIT_TRANSPORT_ERROR,
    build_client,
    build_parser,
    read_body,
    run,
)
from trgrpc.config.schema import Config
from trgrpc.http.transport import HttpTransport


@pytest.fixture
def config_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.delenv("TRGRPC_PASSWORD", raising=False)
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"connection": {"host": "daemon.test", "username": "admin"}}))
    return path


@pytest.fixture
def use_handler(monkeypatch: pytest.MonkeyPatch):
    """Route the default transport through a mock handler."""

    def install(handler):
        monkeypatch.setattr(
            transport_module,
            "_default_transport",
            HttpTransport(transport=httpx.MockTransport(handler)),
        )

    return install


class TestRun:
    """End-to-end runs of the CLI against a mocked daemon."""

    def test_success_writes_payload(self, config_file, use_handler, daemon, capsys):
        use_handler(daemon)

        code = run(["--config", str(config_file), '{"method":"session-get"}'])

        assert code == EXIT_OK
        assert capsys.readouterr().out == daemon.body.decode()
        assert daemon.requests[-1].content == b'{"method":"session-get"}'
        assert str(daemon.requests[-1].url) == "http://daemon.test:9091/transmission/rpc"

    def test_http_error_exit_code(self, config_file, use_handler, capsys):
        use_handler(lambda request: httpx.Response(401, content=b"Unauthorized"))

        code = run(["--config", str(config_file), "{}"])

        assert code == EXIT_HTTP_ERROR
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "HTTP error 401" in captured.err

    def test_transport_error_exit_code(self, config_file, use_handler, capsys):
        def refuse(request):
            raise httpx.ConnectError("Connection refused")

        use_handler(refuse)

        code = run(["--config", str(config_file), "{}"])

        assert code == EXIT_TRANSPORT_ERROR
        assert "COULDNT_CONNECT" in capsys.readouterr().err

    def test_bad_config_file(self, tmp_path, capsys):
        path = tmp_path / "config.json"
        path.write_text("{broken")

        code = run(["--config", str(path), "{}"])

        assert code == EXIT_CONFIG_ERROR
        assert "Configuration error" in capsys.readouterr().err

    def test_bad_override(self, config_file, capsys):
        code = run(["--config", str(config_file), "--proxy", "socks5://x:1", "{}"])

        assert code == EXIT_CONFIG_ERROR

    def test_url_override(self, config_file, use_handler, daemon):
        use_handler(daemon)

        code = run(["--config", str(config_file), "--url", "http://other.test:9091/rpc", "{}"])

        assert code == EXIT_OK
        assert str(daemon.requests[-1].url) == "http://other.test:9091/rpc"


class TestHelpers:
    """Tests for argument handling helpers."""

    def test_read_body_from_stdin(self):
        assert read_body("-", io.BytesIO(b'{"method":"x"}')) == b'{"method":"x"}'

    def test_read_body_from_argument(self):
        assert read_body('{"a":"é"}', io.BytesIO()) == '{"a":"é"}'.encode()

    def test_body_defaults_to_stdin(self):
        args = build_parser().parse_args([])
        assert args.body == "-"
        assert args.ssl is None

    def test_overrides_applied(self):
        args = build_parser().parse_args(
            ["--username", "bob", "--password", "pw", "--ssl", "--timeout", "3", "{}"]
        )

        client = build_client(args, Config())

        assert client.username == "bob"
        assert client.password == "pw"
        assert client.ssl is True
        assert client.timeout == 3.0
        assert client.url.startswith("https://")

    def test_https_url_enables_ssl(self):
        args = build_parser().parse_args(["--url", "https://nas:9091/transmission/rpc"])

        client = build_client(args, Config())

        assert client.ssl is True
        assert client.url == "https://nas:9091/transmission/rpc"
