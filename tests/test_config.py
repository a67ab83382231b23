"""Tests for configuration management."""

from pathlib import Path

import pytest

from proxyctl import config


class TestLoadEnvFile:
    """Tests for load_env_file."""

    def test_load_env_file_missing_returns_empty(self, temp_dir: Path) -> None:
        assert config.load_env_file(temp_dir / ".env") == {}

    def test_load_env_file_parses_and_strips(self, temp_dir: Path) -> None:
        env_path = temp_dir / ".env"
        env_path.write_text("# comment\n\nPROXYCTL_HOST=\"proxy.local\"\nPROXYCTL_PORT='9000'\n")
        assert config.load_env_file(env_path) == {
            "PROXYCTL_HOST": "proxy.local",
            "PROXYCTL_PORT": "9000",
        }


class TestLoadGlobalConfig:
    """Tests for load_global_config."""

    def test_missing_returns_empty(self, isolated_config: Path) -> None:
        assert config.load_global_config() == {}

    def test_loads_yml(self, isolated_config: Path) -> None:
        path = config.get_global_config_path()
        path.parent.mkdir()
        path.write_text("PROXYCTL_HOST: global.host\nPROXYCTL_PORT: 7000\n")
        assert config.load_global_config() == {"PROXYCTL_HOST": "global.host", "PROXYCTL_PORT": 7000}

    def test_non_mapping_is_ignored(self, isolated_config: Path) -> None:
        path = config.get_global_config_path()
        path.parent.mkdir()
        path.write_text("- just\n- a list\n")
        assert config.load_global_config() == {}


class TestGetConfig:
    """Tests for get_config precedence."""

    def test_defaults(self, isolated_config: Path) -> None:
        assert config.get_host() == "localhost"
        assert config.get_port() == 1080
        assert config.get_timeout() == 30.0
        assert config.is_verbose() is False

    def test_explicit_default_wins_over_builtin(self, isolated_config: Path) -> None:
        assert config.get_config("PROXYCTL_HOST", default="fallback") == "fallback"

    def test_global_over_default(self, isolated_config: Path) -> None:
        path = config.create_global_config()
        path.write_text("PROXYCTL_PORT: 7000\n")
        assert config.get_port() == 7000

    def test_project_over_global(self, isolated_config: Path) -> None:
        config.create_global_config().write_text("PROXYCTL_PORT: 7000\n")
        (isolated_config / ".env").write_text("PROXYCTL_PORT=8000\n")
        assert config.get_port() == 8000

    def test_env_over_project(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (isolated_config / ".env").write_text("PROXYCTL_PORT=8000\n")
        monkeypatch.setenv("PROXYCTL_PORT", "9000")
        assert config.get_port() == 9000

    def test_explicit_project_dir(self, isolated_config: Path, temp_dir: Path) -> None:
        other = temp_dir / "other"
        other.mkdir()
        (other / ".env").write_text("PROXYCTL_HOST=other.host\n")
        assert config.get_host(other) == "other.host"
        assert config.get_host() == "localhost"

    def test_invalid_port_falls_back(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("PROXYCTL_PORT", "not-a-port")
        assert config.get_port() == 1080

    @pytest.mark.parametrize("raw", ["0", "-5", "soon"])
    def test_invalid_timeout_falls_back(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch, raw: str
    ) -> None:
        monkeypatch.setenv("PROXYCTL_TIMEOUT", raw)
        assert config.get_timeout() == 30.0

    @pytest.mark.parametrize(("raw", "expected"), [("true", True), ("1", True), ("no", False)])
    def test_verbose_flag(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch, raw: str, expected: bool
    ) -> None:
        monkeypatch.setenv("PROXYCTL_VERBOSE", raw)
        assert config.is_verbose() is expected


class TestCreateGlobalConfig:
    def test_writes_defaults_once(self, isolated_config: Path) -> None:
        path = config.create_global_config()
        assert path.exists()
        assert config.load_global_config()["PROXYCTL_PORT"] == 1080

        path.write_text("PROXYCTL_HOST: kept\n")
        config.create_global_config()
        assert config.load_global_config() == {"PROXYCTL_HOST": "kept"}
