"""Tests for mdgeo.config module."""

from pathlib import Path

import pytest

from mdgeo import config


@pytest.fixture(autouse=True)
def _no_env_token(monkeypatch, tmp_path):
    monkeypatch.delenv("SOCRATA_APP_TOKEN", raising=False)
    # keep load_dotenv from picking up a developer .env
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(config, "load_dotenv", lambda: False)


class TestLoadConfig:
    def test_defaults_without_file(self):
        cfg = config.load_config()
        assert cfg["geocode"]["base_url"] == config.DEFAULT_GEOCODE_URL
        assert cfg["geocode"]["timeout"] == 30
        assert cfg["geocode"]["retries"] == 0
        assert cfg["opendata"]["domain"] == "opendata.maryland.gov"
        assert cfg["opendata"]["page_size"] == 50000
        assert cfg["opendata"]["app_token"] is None

    def test_yaml_overrides(self, tmp_path: Path):
        path = tmp_path / "mdgeo.yaml"
        path.write_text(
            "geocode:\n"
            "  timeout: 10\n"
            "opendata:\n"
            "  domain: data.baltimorecity.gov\n"
            "  app_token: abc\n",
            encoding="utf-8",
        )
        cfg = config.load_config(path)
        assert cfg["geocode"]["timeout"] == 10
        assert cfg["geocode"]["base_url"] == config.DEFAULT_GEOCODE_URL
        assert cfg["opendata"]["domain"] == "data.baltimorecity.gov"
        assert cfg["opendata"]["app_token"] == "abc"

    def test_empty_file(self, tmp_path: Path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert config.load_config(path)["opendata"]["timeout"] == 90

    def test_empty_sections(self, tmp_path: Path):
        path = tmp_path / "sections.yaml"
        path.write_text("geocode:\nopendata:\n", encoding="utf-8")
        cfg = config.load_config(path)
        assert cfg["geocode"]["timeout"] == 30

    def test_env_token(self, monkeypatch):
        monkeypatch.setenv("SOCRATA_APP_TOKEN", "  envtok ")
        assert config.load_config()["opendata"]["app_token"] == "envtok"

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            config.load_config(tmp_path / "nope.yaml")

    def test_not_a_mapping(self, tmp_path: Path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ValueError):
            config.load_config(path)

    @pytest.mark.parametrize(
        "body",
        [
            "geocode:\n  timeout: 0\n",
            "opendata:\n  retries: -1\n",
            "opendata:\n  page_size: 0\n",
        ],
    )
    def test_invalid_values(self, tmp_path: Path, body):
        path = tmp_path / "bad.yaml"
        path.write_text(body, encoding="utf-8")
        with pytest.raises(ValueError):
            config.load_config(path)
