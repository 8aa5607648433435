"""Tests de la ligne de commande."""

from pathlib import Path

import pytest

from sts.core.config import TrackerConfig
from sts.main import main


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ["PORT", "HOST"]:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def config_path(tmp_path: Path) -> str:
    path = str(tmp_path / "sts.ini")
    config = TrackerConfig(path)
    config.set("storage", "data_dir", str(tmp_path / "data"))
    config.set("logging", "log_file", str(tmp_path / "logs" / "sts.log"))
    config.save()
    return path


class TestMain:
    def test_create_config(self, tmp_path: Path):
        path = tmp_path / "new.ini"
        assert main(["--create-config", "-c", str(path)]) == 0
        assert "[auth]" in path.read_text(encoding="utf-8")

    def test_validate_config(self, config_path: str):
        assert main(["-c", config_path, "--validate-config"]) == 0

    def test_validate_invalid_port(self, config_path: str):
        assert main(["-c", config_path, "--port", "70000", "--validate-config"]) == 1

    def test_export(self, config_path: str, tmp_path: Path):
        output = tmp_path / "out.csv"
        assert main(["-c", config_path, "--export", str(output)]) == 0

        content = output.read_text(encoding="utf-8")
        assert content.startswith("--- Spindle Takip ---\n")
        assert (tmp_path / "data" / "spindle_data.csv").exists()
        assert (tmp_path / "data" / "yedek_data.csv").exists()

    def test_run_uses_configured_port(self, config_path: str, monkeypatch):
        calls = {}

        def fake_run(self, **kwargs):
            calls.update(kwargs)

        monkeypatch.setattr("flask.Flask.run", fake_run)
        assert main(["-c", config_path, "--port", "8123"]) == 0
        assert calls["port"] == 8123
        assert calls["host"] == "0.0.0.0"

    def test_invalid_session_lifetime_rejected(self, config_path: str, tmp_path: Path, capsys):
        config = TrackerConfig(config_path)
        config.set("auth", "session_lifetime", "8h")
        config.save()

        output = tmp_path / "out.csv"
        assert main(["-c", config_path, "--export", str(output)]) == 1
        assert not output.exists()
        assert "Configuration invalide" in capsys.readouterr().out
