"""
test_cli.py - 실행 진입점 테스트

serve()는 mock → 블로킹 없이 기동 순서와 실패 처리만 검증.
"""

import socket
from pathlib import Path
from unittest.mock import patch

import pytest

from src.app.cli import build_parser, main
from src.domain.errors import ErrorCodes, FrontendError


@pytest.fixture
def clean_env(monkeypatch, tmp_path: Path) -> None:
    """리스너/설정 환경 변수 제거."""
    for name in ("SOCKET", "PORT", "TEMPLATES_DIR", "STATIC_DIR", "SHUTDOWN_TIMEOUT", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


class TestParser:

    def test_defaults_are_none(self):
        args = build_parser().parse_args([])

        assert args.config is None
        assert args.templates_dir is None
        assert args.shutdown_timeout is None
        assert args.log_level is None

    def test_log_level_case_insensitive(self):
        assert build_parser().parse_args(["--log-level", "debug"]).log_level == "DEBUG"


@pytest.mark.usefixtures("clean_env")
class TestMain:

    def test_starts_server_on_unix_socket(
        self, monkeypatch, templates_dir: Path, static_dir: Path, tmp_path: Path
    ):
        sock_path = tmp_path / "cli.sock"
        monkeypatch.setenv("SOCKET", str(sock_path))

        with patch("src.app.cli.serve") as mock_serve:
            code = main([
                "--config", str(tmp_path / "none.yaml"),
                "--templates-dir", str(templates_dir),
                "--static-dir", str(static_dir),
                "--shutdown-timeout", "0.5",
            ])

        assert code == 0
        mock_serve.assert_called_once()
        app, listener, settings = mock_serve.call_args.args
        try:
            assert listener.family == socket.AF_UNIX
            assert settings.shutdown_timeout == 0.5
            assert settings.templates_dir == templates_dir
            assert "index.html" in app.state.templates
        finally:
            listener.close()

    def test_listener_conflict_exits_1(self, monkeypatch, templates_dir: Path, caplog):
        monkeypatch.setenv("SOCKET", "/tmp/x.sock")
        monkeypatch.setenv("PORT", "8080")

        with patch("src.app.cli.serve") as mock_serve:
            code = main(["--templates-dir", str(templates_dir)])

        assert code == 1
        mock_serve.assert_not_called()
        assert "unable to open listener" in caplog.text
        assert "LISTENER_CONFLICT" in caplog.text

    def test_template_error_exits_1(self, tmp_path: Path, caplog):
        with patch("src.app.cli.serve") as mock_serve:
            code = main(["--templates-dir", str(tmp_path / "missing")])

        assert code == 1
        mock_serve.assert_not_called()
        assert "unable to compile templates" in caplog.text

    def test_invalid_config_exits_1(self, monkeypatch, caplog):
        monkeypatch.setenv("SHUTDOWN_TIMEOUT", "never")

        with patch("src.app.cli.serve") as mock_serve:
            code = main([])

        assert code == 1
        mock_serve.assert_not_called()
        assert "CONFIG_INVALID" in caplog.text

    def test_serve_error_exits_1(
        self, monkeypatch, templates_dir: Path, tmp_path: Path, caplog
    ):
        monkeypatch.setenv("SOCKET", str(tmp_path / "err.sock"))
        error = FrontendError(ErrorCodes.SHUTDOWN_TIMEOUT, timeout=5.0)

        with patch("src.app.cli.serve", side_effect=error) as mock_serve:
            code = main(["--templates-dir", str(templates_dir)])

        mock_serve.call_args.args[1].close()
        assert code == 1
        assert "SHUTDOWN_TIMEOUT" in caplog.text

    def test_unknown_log_level_exits_1(self, monkeypatch, templates_dir: Path, caplog):
        monkeypatch.setenv("LOG_LEVEL", "verbose")

        with patch("src.app.cli.serve") as mock_serve:
            code = main(["--templates-dir", str(templates_dir)])

        assert code == 1
        mock_serve.assert_not_called()
        assert "CONFIG_INVALID" in caplog.text
        assert "log_level" in caplog.text

    def test_infinite_shutdown_timeout_exits_1(self, templates_dir: Path, caplog):
        with patch("src.app.cli.serve") as mock_serve:
            code = main(["--templates-dir", str(templates_dir), "--shutdown-timeout", "inf"])

        assert code == 1
        mock_serve.assert_not_called()
        assert "shutdown_timeout" in caplog.text
