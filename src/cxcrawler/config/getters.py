"""Configuration getter functions."""

import logging
import os
from pathlib import Path
from typing import Any

from cxcrawler.tools.http.client import ClientSettings

from .env_loader import load_global_config, load_project_config

logger = logging.getLogger(__name__)

BASE_URL_KEY = "CXCRAWLER_BASE_URL"
TIMEOUT_KEY = "CXCRAWLER_TIMEOUT"
PROXY_KEY = "CXCRAWLER_PROXY"
MAX_RETRIES_KEY = "CXCRAWLER_MAX_RETRIES"
RETRY_DELAY_KEY = "CXCRAWLER_RETRY_DELAY"
VERBOSE_KEY = "CXCRAWLER_VERBOSE"


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
    return default


def _get_number(key: str, default: float, cast: type, project_dir: Path | None) -> Any:
    raw = get_config(key, project_dir)
    if raw is None or raw == "":
        return default
    try:
        value = cast(raw)
    except (TypeError, ValueError):
        logger.warning("Ignoring malformed %s=%r, using %s", key, raw, default)
        return default
    if value < 0:
        logger.warning("Ignoring negative %s=%r, using %s", key, raw, default)
        return default
    return value


def get_base_url(project_dir: Path | None = None) -> str:
    """Get the site origin (default: https://cxsecurity.com)."""
    return str(get_config(BASE_URL_KEY, project_dir, default=ClientSettings.base_url))


def get_timeout(project_dir: Path | None = None) -> float:
    """Get the per-request timeout in seconds."""
    return _get_number(TIMEOUT_KEY, ClientSettings.timeout, float, project_dir)


def get_proxy(project_dir: Path | None = None) -> str | None:
    """Get the outbound proxy URL, if any."""
    return get_config(PROXY_KEY, project_dir) or None


def get_max_retries(project_dir: Path | None = None) -> int:
    """Get the number of retries after the first attempt."""
    return _get_number(MAX_RETRIES_KEY, ClientSettings.max_retries, int, project_dir)


def get_retry_delay(project_dir: Path | None = None) -> float:
    """Get the pause between attempts in seconds."""
    return _get_number(RETRY_DELAY_KEY, ClientSettings.retry_delay, float, project_dir)


def get_verbose(project_dir: Path | None = None) -> bool:
    """Return True when debug logging is requested through configuration."""
    value = get_config(VERBOSE_KEY, project_dir, default=False)
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in {"1", "true", "yes", "on"}


def load_client_settings(project_dir: Path | None = None) -> ClientSettings:
    """Build fetcher settings from every configuration layer."""
    return ClientSettings(
        base_url=get_base_url(project_dir),
        timeout=get_timeout(project_dir),
        proxy=get_proxy(project_dir),
        max_retries=get_max_retries(project_dir),
        retry_delay=get_retry_delay(project_dir),
    )
