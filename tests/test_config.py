"""Tests for rover_images.config -- YAML loading, env overrides, precedence, atomic writes."""

from __future__ import annotations

import os
import stat
from pathlib import Path

import pytest

from rover_images.config import (
    KNOWN_KEYS,
    atomic_write,
    default_config_path,
    get_data_dir,
    load_config_file,
    load_env_overrides,
    resolve_settings,
)
from rover_images.exceptions import ConfigError
from rover_images.models import NASA_BASE_URL


def _write_yaml(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------


class TestDefaults:
    def test_no_config_file(self, isolated_home: Path) -> None:
        settings = resolve_settings()
        assert settings.rover_name == "curiosity"
        assert settings.camera_name == "NAVCAM"
        assert settings.api_key == "DEMO_KEY"
        assert settings.base_url == NASA_BASE_URL
        assert settings.timeout == 30
        assert settings.cache_file == isolated_home / ".rover-images.cache"
        assert settings.config_file is None

    def test_default_config_path(self, isolated_home: Path) -> None:
        assert default_config_path() == isolated_home / "config.yaml"

    def test_known_keys(self) -> None:
        assert set(KNOWN_KEYS) == {
            "cache_file",
            "rover_name",
            "camera_name",
            "api_key",
            "base_url",
            "timeout",
        }


# ---------------------------------------------------------------------------
# Config file
# ---------------------------------------------------------------------------


class TestConfigFile:
    def test_default_location_is_read(self, isolated_home: Path) -> None:
        _write_yaml(isolated_home / "config.yaml", "rover-name: spirit\ncamera-name: PANCAM\n")
        settings = resolve_settings()
        assert settings.rover_name == "spirit"
        assert settings.camera_name == "PANCAM"
        assert settings.config_file == isolated_home / "config.yaml"

    def test_explicit_path(self, isolated_home: Path, tmp_path: Path) -> None:
        path = _write_yaml(tmp_path / "custom.yaml", "api_key: abc123\n")
        settings = resolve_settings(config_file=str(path))
        assert settings.api_key == "abc123"
        assert settings.config_file == path

    def test_explicit_path_wins_over_default(self, isolated_home: Path, tmp_path: Path) -> None:
        _write_yaml(isolated_home / "config.yaml", "rover_name: spirit\n")
        path = _write_yaml(tmp_path / "custom.yaml", "rover_name: opportunity\n")
        assert resolve_settings(config_file=path).rover_name == "opportunity"

    def test_explicit_missing_file_raises(self, isolated_home: Path, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="Config file not found"):
            resolve_settings(config_file=tmp_path / "missing.yaml")

    def test_cache_file_tilde_is_expanded(self, isolated_home: Path) -> None:
        _write_yaml(isolated_home / "config.yaml", "cache_file: ~/caches/rover.json\n")
        assert resolve_settings().cache_file == isolated_home / "caches" / "rover.json"

    def test_keys_are_case_and_separator_insensitive(self, tmp_path: Path) -> None:
        path = _write_yaml(
            tmp_path / "c.yaml",
            "Rover-Name: spirit\nCAMERA_NAME: PANCAM\nbase-url: http://localhost\n",
        )
        assert load_config_file(path) == {
            "rover_name": "spirit",
            "camera_name": "PANCAM",
            "base_url": "http://localhost",
        }

    def test_unknown_keys_ignored(self, tmp_path: Path) -> None:
        path = _write_yaml(tmp_path / "c.yaml", "rover_name: spirit\ncolour: red\n")
        assert load_config_file(path) == {"rover_name": "spirit"}

    def test_empty_file(self, tmp_path: Path) -> None:
        path = _write_yaml(tmp_path / "c.yaml", "")
        assert load_config_file(path) == {}

    def test_malformed_yaml(self, isolated_home: Path) -> None:
        _write_yaml(isolated_home / "config.yaml", "rover_name: [unclosed\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            resolve_settings()

    def test_non_mapping_document(self, tmp_path: Path) -> None:
        path = _write_yaml(tmp_path / "c.yaml", "- a\n- b\n")
        with pytest.raises(ConfigError, match="must contain a mapping"):
            load_config_file(path)

    def test_unreadable_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="Cannot read config file"):
            load_config_file(tmp_path)

    def test_non_utf8_file(self, isolated_home: Path) -> None:
        (isolated_home / "config.yaml").write_bytes(b"api_key: \xff\xfe\n")
        with pytest.raises(ConfigError, match="Cannot read config file"):
            resolve_settings()

    @pytest.mark.parametrize(
        ("text", "field", "expected"),
        [
            ("api_key: 1234567890\n", "api_key", "1234567890"),
            ("camera-name: 123\n", "camera_name", "123"),
            ("rover_name: on\n", "rover_name", "true"),
            ("api_key: 1.5\n", "api_key", "1.5"),
            ("rover_name: 2024-01-01\n", "rover_name", "2024-01-01"),
        ],
    )
    def test_scalars_read_as_strings(
        self, isolated_home: Path, text: str, field: str, expected: str
    ) -> None:
        _write_yaml(isolated_home / "config.yaml", text)
        assert getattr(resolve_settings(), field) == expected

    def test_numeric_timeout_stays_numeric(self, tmp_path: Path) -> None:
        path = _write_yaml(tmp_path / "c.yaml", "timeout: 12\n")
        assert load_config_file(path) == {"timeout": 12}

    @pytest.mark.parametrize("text", ["timeout: abc\n", "timeout: 0\n", "rover_name: [a, b]\n"])
    def test_invalid_values(self, isolated_home: Path, text: str) -> None:
        _write_yaml(isolated_home / "config.yaml", text)
        with pytest.raises(ConfigError, match="Invalid configuration"):
            resolve_settings()


# ---------------------------------------------------------------------------
# Environment and precedence
# ---------------------------------------------------------------------------


class TestEnvironment:
    def test_env_overrides(self) -> None:
        env = {"ROVER_NAME": "spirit", "API_KEY": "k", "UNRELATED": "x", "CAMERA_NAME": ""}
        assert load_env_overrides(env) == {"rover_name": "spirit", "api_key": "k"}

    def test_env_beats_file(self, isolated_home: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        _write_yaml(isolated_home / "config.yaml", "rover_name: spirit\ncamera_name: PANCAM\n")
        monkeypatch.setenv("ROVER_NAME", "opportunity")
        settings = resolve_settings()
        assert settings.rover_name == "opportunity"
        assert settings.camera_name == "PANCAM"

    def test_cache_file_from_env(
        self, isolated_home: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("CACHE_FILE", str(tmp_path / "env.cache"))
        assert resolve_settings().cache_file == tmp_path / "env.cache"

    def test_timeout_from_env_is_coerced(
        self, isolated_home: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("TIMEOUT", "2.5")
        assert resolve_settings().timeout == 2.5

    def test_flags_beat_env_and_file(
        self, isolated_home: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        _write_yaml(isolated_home / "config.yaml", "rover_name: spirit\ncamera_name: PANCAM\n")
        monkeypatch.setenv("ROVER_NAME", "opportunity")
        monkeypatch.setenv("CAMERA_NAME", "FHAZ")
        settings = resolve_settings(rover="perseverance", camera="NAVCAM_LEFT")
        assert settings.rover_name == "perseverance"
        assert settings.camera_name == "NAVCAM_LEFT"

    def test_explicit_environ_mapping(self, isolated_home: Path) -> None:
        settings = resolve_settings(environ={"BASE_URL": "http://localhost:9000"})
        assert settings.base_url == "http://localhost:9000"


# ---------------------------------------------------------------------------
# Paths and atomic writes
# ---------------------------------------------------------------------------


class TestDataDir:
    def test_xdg_custom(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("rover_images.config._is_xdg_platform", lambda: True)
        monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "xdg"))
        result = get_data_dir()
        assert result == tmp_path / "xdg" / "rover-images"
        assert result.is_dir()

    def test_fallback(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("rover_images.config._is_xdg_platform", lambda: False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))
        assert get_data_dir() == tmp_path / ".rover-images"


class TestAtomicWrite:
    def test_writes_content(self, tmp_path: Path) -> None:
        path = tmp_path / "out.json"
        atomic_write(path, '{"a": 1}')
        assert path.read_text(encoding="utf-8") == '{"a": 1}'

    def test_replaces_existing(self, tmp_path: Path) -> None:
        path = tmp_path / "out.json"
        path.write_text("old", encoding="utf-8")
        atomic_write(path, "new")
        assert path.read_text(encoding="utf-8") == "new"
        assert os.listdir(tmp_path) == ["out.json"]

    def test_owner_only_permissions(self, tmp_path: Path) -> None:
        path = tmp_path / "out.json"
        atomic_write(path, "x")
        assert stat.S_IMODE(path.stat().st_mode) == 0o600

    def test_cleans_up_on_failure(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        def boom(src: str, dst: str) -> None:
            raise OSError("disk full")

        monkeypatch.setattr("rover_images.config.os.replace", boom)
        with pytest.raises(OSError, match="disk full"):
            atomic_write(tmp_path / "out.json", "x")
        assert os.listdir(tmp_path) == []
