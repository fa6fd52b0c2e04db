import logging
import socket

import pytest

import toronto_time.__main__ as entry
from toronto_time import create_app
from toronto_time.config import Config
from toronto_time.exceptions import StartupError


@pytest.fixture
def occupied_port():
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    sock.listen(1)
    yield sock.getsockname()[1]
    sock.close()


def test_main_exits_nonzero_when_database_unavailable(monkeypatch):
    def fail():
        raise StartupError("Database connection failed: refused")
    monkeypatch.setattr(entry, "create_app", fail)

    assert entry.main() == 1


def test_main_exits_nonzero_when_port_is_taken(app, occupied_port, monkeypatch, caplog):
    closed = []
    app.config.update(HOST="127.0.0.1", PORT=occupied_port)
    monkeypatch.setattr(entry, "create_app", lambda: app)
    monkeypatch.setattr(entry, "close_database", closed.append)

    with caplog.at_level(logging.CRITICAL, logger="toronto_time"):
        assert entry.main() == 1

    critical = [r.getMessage() for r in caplog.records if r.levelno == logging.CRITICAL]
    assert len(critical) == 1
    assert critical[0].startswith("Error starting server:")
    assert str(occupied_port) in critical[0]
    assert closed == [app.extensions["time_log_db"]]


def test_create_app_rejects_unopenable_log_file(session_factory, tmp_path):
    with pytest.raises(StartupError, match="Error opening log file"):
        create_app(session_factory, config={"LOG_FILE": str(tmp_path / "missing" / "app.log")})


def test_main_exits_nonzero_when_log_file_unopenable(tmp_path, monkeypatch, caplog):
    monkeypatch.setattr(Config, "LOG_FILE", str(tmp_path / "missing" / "app.log"))

    with caplog.at_level(logging.CRITICAL, logger="toronto_time"):
        assert entry.main() == 1

    assert any("Error opening log file" in r.getMessage() for r in caplog.records)
