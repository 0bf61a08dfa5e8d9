import logging
import socket

import pytest

from hoteltrek import __main__ as runner
from hoteltrek.config import settings


@pytest.fixture()
def uvicorn_calls(monkeypatch):
    calls = []
    monkeypatch.setattr(runner.uvicorn, "run", lambda *args, **kwargs: calls.append((args, kwargs)))
    return calls


@pytest.fixture()
def busy_port(monkeypatch):
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as holder:
        holder.bind(("127.0.0.1", 0))
        holder.listen(1)
        port = holder.getsockname()[1]
        monkeypatch.setattr(settings, "host", "127.0.0.1")
        monkeypatch.setattr(settings, "port", port)
        yield port


def test_port_in_use_exits_cleanly(busy_port, uvicorn_calls, caplog):
    caplog.set_level(logging.INFO, logger="hoteltrek")

    assert runner.main() == 0
    assert uvicorn_calls == []
    assert f"Port {busy_port} is already in use. Server might be already running." in caplog.text


def test_free_port_starts_uvicorn(monkeypatch, uvicorn_calls):
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as scratch:
        scratch.bind(("127.0.0.1", 0))
        port = scratch.getsockname()[1]
    monkeypatch.setattr(settings, "host", "127.0.0.1")
    monkeypatch.setattr(settings, "port", port)

    assert runner.main() == 0
    assert len(uvicorn_calls) == 1
    args, kwargs = uvicorn_calls[0]
    assert args == ("hoteltrek.main:app",)
    assert kwargs["host"] == "127.0.0.1"
    assert kwargs["port"] == port
