"""
Configuration management for proxyctl.

Supports multiple configuration sources in order of priority:
1. Environment variables (highest priority)
2. Project .env file (<project>/.env)
3. Global config file (~/.proxyctl/config.yml)
4. Default values (lowest priority)
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

DEFAULTS: dict[str, Any] = {
    "PROXYCTL_HOST": "localhost",
    "PROXYCTL_PORT": 1080,
    "PROXYCTL_TIMEOUT": 30.0,
    "PROXYCTL_VERBOSE": False,
}


def get_global_config_dir() -> Path:
    return Path.home() / ".proxyctl"


def get_global_config_path() -> Path:
    return get_global_config_dir() / "config.yml"


def load_env_file(env_path: Path) -> dict[str, str]:
    """Load environment variables from .env file."""
    env_vars = {}
    if env_path.exists():
        with open(env_path) as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith("#") and "=" in line:
                    key, value = line.split("=", 1)
                    # Remove quotes if present
                    value = value.strip().strip("\"'")
                    env_vars[key.strip()] = value
    return env_vars


def load_global_config() -> dict[str, Any]:
    """Load global configuration from ~/.proxyctl/config.yml."""
    config_path = get_global_config_path()
    if config_path.exists():
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            logger.warning("Ignoring malformed global config %s", config_path)
            return {}
        return data
    return {}


def load_project_config(project_dir: Path | None = None) -> dict[str, str]:
    """Load project-specific configuration from <project_dir>/.env."""
    if project_dir is None:
        project_dir = Path.cwd()
    return load_env_file(project_dir / ".env")


def get_config(key: str, project_dir: Path | None = None, default: Any = None) -> Any:
    """
    Get configuration value with priority:
    1. Environment variable
    2. Project .env file
    3. Global config file
    4. Default value

    Args:
        key: Configuration key
        project_dir: Optional project directory (defaults to the cwd)
        default: Default value if not found

    Returns:
        Configuration value or default
    """
    # 1. Check environment variable
    env_value = os.environ.get(key)
    if env_value:
        return env_value

    # 2. Check project .env file
    project_config = load_project_config(project_dir)
    if key in project_config:
        return project_config[key]

    # 3. Check global config
    global_config = load_global_config()
    if key in global_config:
        return global_config[key]

    # 4. Return default
    return default if default is not None else DEFAULTS.get(key)


def get_host(project_dir: Path | None = None) -> str:
    """Get proxy host (default: localhost)."""
    return str(get_config("PROXYCTL_HOST", project_dir))


def get_port(project_dir: Path | None = None) -> int:
    """Get proxy port (default: 1080)."""
    value = get_config("PROXYCTL_PORT", project_dir)
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.warning("Invalid PROXYCTL_PORT %r, using %d", value, DEFAULTS["PROXYCTL_PORT"])
        return DEFAULTS["PROXYCTL_PORT"]


def get_timeout(project_dir: Path | None = None) -> float:
    """Get transport timeout in seconds (default: 30)."""
    value = get_config("PROXYCTL_TIMEOUT", project_dir)
    try:
        timeout = float(value)
    except (TypeError, ValueError):
        timeout = 0.0
    if timeout <= 0:
        logger.warning("Invalid PROXYCTL_TIMEOUT %r, using %s", value, DEFAULTS["PROXYCTL_TIMEOUT"])
        return DEFAULTS["PROXYCTL_TIMEOUT"]
    return timeout


def is_verbose(project_dir: Path | None = None) -> bool:
    """Return True if verbose logging is enabled."""
    value = get_config("PROXYCTL_VERBOSE", project_dir)
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("1", "true", "yes", "on")


def create_global_config() -> Path:
    """Create global config directory and file if they don't exist."""
    config_dir = get_global_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)

    config_path = get_global_config_path()
    if not config_path.exists():
        with open(config_path, "w") as f:
            yaml.dump(dict(DEFAULTS), f, default_flow_style=False)

    return config_path
