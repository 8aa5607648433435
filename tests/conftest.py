"""Fixtures partagées : configuration isolée dans tmp_path et client Flask."""

from pathlib import Path

import pytest

from sts.core.config import TrackerConfig
from sts.web.app import TrackerWebApp


@pytest.fixture
def config(tmp_path: Path, monkeypatch) -> TrackerConfig:
    for key in ["PORT", "HOST"]:
        monkeypatch.delenv(key, raising=False)

    config = TrackerConfig(str(tmp_path / "sts.ini"))
    config.set("storage", "data_dir", str(tmp_path / "data"))
    config.set("logging", "log_file", str(tmp_path / "logs" / "sts.log"))
    return config


@pytest.fixture
def web_app(config: TrackerConfig) -> TrackerWebApp:
    web_app = TrackerWebApp(config)
    web_app.app.config["TESTING"] = True
    return web_app


@pytest.fixture
def client(web_app: TrackerWebApp):
    return web_app.app.test_client()


@pytest.fixture
def logged_in(client):
    response = client.post("/login", data={"username": "BAKIM", "password": "MAXIME"})
    assert response.status_code == 302
    return client
