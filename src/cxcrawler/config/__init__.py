"""
Configuration management for cxcrawler.

Supports multiple configuration sources in order of priority:
1. Environment variables (highest priority)
2. Project .env file (.cxcrawler/.env in the working directory)
3. Global config file (~/.cxcrawler/config.yml)
4. Default values (lowest priority)
"""

from .env_loader import (
    get_global_config_path,
    get_project_env_path,
    load_env_file,
    load_global_config,
    load_project_config,
)
from .getters import (
    get_base_url,
    get_config,
    get_max_retries,
    get_proxy,
    get_retry_delay,
    get_timeout,
    get_verbose,
    load_client_settings,
)

__all__ = [
    # env_loader
    "get_global_config_path",
    "get_project_env_path",
    "load_env_file",
    "load_global_config",
    "load_project_config",
    # getters
    "get_base_url",
    "get_config",
    "get_max_retries",
    "get_proxy",
    "get_retry_delay",
    "get_timeout",
    "get_verbose",
    "load_client_settings",
]
