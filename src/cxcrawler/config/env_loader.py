"""Environment variable and configuration file loading."""

from pathlib import Path
from typing import Any

import yaml

CONFIG_DIR_NAME = ".cxcrawler"


def get_global_config_path() -> Path:
    """Return the path of the global ~/.cxcrawler/config.yml file."""
    return Path.home() / CONFIG_DIR_NAME / "config.yml"


def get_project_env_path(project_dir: Path | None = None) -> Path:
    """Return the project .env path (.cxcrawler/.env under ``project_dir`` or the cwd)."""
    return (project_dir or Path.cwd()) / CONFIG_DIR_NAME / ".env"


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


def load_global_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load global configuration from ~/.cxcrawler/config.yml."""
    config_path = config_path or get_global_config_path()
    if config_path.exists():
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
        return data if isinstance(data, dict) else {}
    return {}


def load_project_config(project_dir: Path | None = None) -> dict[str, str]:
    """Load project-specific configuration from .cxcrawler/.env."""
    return load_env_file(get_project_env_path(project_dir))
