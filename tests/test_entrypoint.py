import logging
from unittest.mock import MagicMock

import pytest

from urlshortener import __main__ as entrypoint


@pytest.fixture(autouse=True)
def isolated(monkeypatch, tmp_path):
    for name in ("CONFIG_PATH", "ENVIRONMENT", "STORAGE_PATH", "HTTP_ADDRESS"):
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)

    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_run_serves_app(monkeypatch, tmp_path):
    monkeypatch.setenv("STORAGE_PATH", str(tmp_path / "storage.db"))
    monkeypatch.setenv("HTTP_ADDRESS", "127.0.0.1:9999")
    serve = MagicMock()
    monkeypatch.setattr(entrypoint.uvicorn, "run", serve)

    entrypoint.run()

    serve.assert_called_once()
    kwargs = serve.call_args.kwargs
    assert kwargs["host"] == "127.0.0.1"
    assert kwargs["port"] == 9999
    assert kwargs["timeout_keep_alive"] == 10
    serve.call_args.args[0].state.store.close()


def test_run_exits_when_storage_unavailable(monkeypatch, tmp_path):
    monkeypatch.setenv("STORAGE_PATH", str(tmp_path))
    monkeypatch.setattr(entrypoint.uvicorn, "run", MagicMock())
    with pytest.raises(SystemExit) as excinfo:
        entrypoint.run()
    assert excinfo.value.code == 1
    entrypoint.uvicorn.run.assert_not_called()


def test_run_exits_on_bad_config():
    with pytest.raises(SystemExit) as excinfo:
        entrypoint.run()
    assert "STORAGE_PATH" in str(excinfo.value.code)
