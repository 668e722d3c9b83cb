"""
Configuration loading with multi-layer merging.

Implements the configuration precedence chain:
    defaults < user config < project config < env vars

CLI flags are applied on top by the commands themselves, see
RunwayConfig.with_overrides().
"""

import json
import logging
import os
import shlex
from pathlib import Path
from typing import Any

from .models import RunwayConfig

logger = logging.getLogger(__name__)

# Global cache to avoid reloading config multiple times per session
_config_cache: RunwayConfig | None = None

_TRUTHY_FALSE = ("false", "0", "", "no", "off")


def get_xdg_config_home() -> Path:
    """
    Get XDG config home directory.

    Returns:
        Path to config directory (defaults to ~/.config)
    """
    if xdg_home := os.environ.get("XDG_CONFIG_HOME"):
        return Path(xdg_home)
    return Path.home() / ".config"


def get_user_config_path() -> Path:
    """
    Get path to user configuration file.

    Returns:
        Path to ~/.config/runway/config.json (or XDG equivalent)
    """
    return get_xdg_config_home() / "runway" / "config.json"


def get_project_config_path(cwd: Path | None = None) -> Path:
    """
    Get path to project configuration file.

    Args:
        cwd: Working directory to search from (defaults to current directory)

    Returns:
        Path to .runway.json in the project root
    """
    if cwd is None:
        cwd = Path.cwd()
    return cwd / ".runway.json"


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """
    Deep merge two dictionaries.

    Values in `override` take precedence over values in `base`.
    Nested dicts are merged, not replaced.

    Example:
        >>> base = {"java": {"command": "java", "options": []}}
        >>> override = {"java": {"options": ["-Xmx1g"]}, "toolchain": "demo"}
        >>> deep_merge(base, override)
        {'java': {'command': 'java', 'options': ['-Xmx1g']}, 'toolchain': 'demo'}
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def load_json_file(path: Path) -> dict[str, Any] | None:
    """
    Load a JSON file, returning None if it doesn't exist or is invalid.

    Args:
        path: Path to JSON file

    Returns:
        Parsed JSON as dict, or None if file doesn't exist or can't be parsed
    """
    if not path.exists():
        return None

    try:
        with path.open() as f:
            data = json.load(f)
            if isinstance(data, dict):
                return data
            return None
    except (json.JSONDecodeError, OSError) as e:
        logger.warning("Failed to parse config at %s: %s", path, e)
        return None


def _section(result: dict[str, Any], name: str) -> dict[str, Any]:
    if not isinstance(result.get(name), dict):
        result[name] = {}
    section: dict[str, Any] = result[name]
    return section


def apply_env_overrides(config_dict: dict[str, Any]) -> dict[str, Any]:
    """
    Apply environment variable overrides to configuration.

    Env vars have the highest precedence and override all config files.

    Supported env vars:
        RUNWAY_TOOLCHAIN - overrides toolchain
        RUNWAY_JAVA_COMMAND - overrides java.command
        RUNWAY_JAVA_OPTS - overrides java.options (shell-style split)
        RUNWAY_JS - overrides js.enabled
        RUNWAY_NATIVE - overrides native.enabled

    Args:
        config_dict: Configuration dictionary to override

    Returns:
        Configuration dictionary with env var overrides applied
    """
    result = config_dict.copy()

    if toolchain := os.environ.get("RUNWAY_TOOLCHAIN"):
        result["toolchain"] = toolchain

    if java_command := os.environ.get("RUNWAY_JAVA_COMMAND"):
        _section(result, "java")["command"] = java_command

    if java_opts := os.environ.get("RUNWAY_JAVA_OPTS"):
        try:
            _section(result, "java")["options"] = shlex.split(java_opts)
        except ValueError:
            logger.warning("Invalid RUNWAY_JAVA_OPTS value '%s', ignoring", java_opts)

    if (js_str := os.environ.get("RUNWAY_JS")) is not None:
        _section(result, "js")["enabled"] = js_str.lower() not in _TRUTHY_FALSE

    if (native_str := os.environ.get("RUNWAY_NATIVE")) is not None:
        _section(result, "native")["enabled"] = native_str.lower() not in _TRUTHY_FALSE

    return result


def get_default_config() -> dict[str, Any]:
    """
    Get hardcoded default configuration.

    Returns:
        Dictionary with default configuration values
    """
    return {
        "java": {"command": "java", "options": []},
        "js": {"enabled": False},
        "native": {"enabled": False},
    }


def load_config(project_dir: Path | None = None, use_cache: bool = True) -> RunwayConfig:
    """
    Load configuration with multi-layer merging.

    Configuration precedence (highest to lowest):
        1. Environment variables (RUNWAY_*)
        2. Project config (.runway.json)
        3. User config (~/.config/runway/config.json)
        4. Hardcoded defaults

    Args:
        project_dir: Project directory to load .runway.json from (defaults to cwd)
        use_cache: If True, return cached config from previous load

    Returns:
        Validated RunwayConfig instance

    Raises:
        ValidationError: If the merged config fails Pydantic validation

    Example:
        >>> config = load_config()
        >>> config.java.command
        'java'
    """
    global _config_cache

    if use_cache and _config_cache is not None:
        return _config_cache

    merged = get_default_config()

    if user_config := load_json_file(get_user_config_path()):
        merged = deep_merge(merged, user_config)

    if project_config := load_json_file(get_project_config_path(project_dir)):
        merged = deep_merge(merged, project_config)

    merged = apply_env_overrides(merged)

    config = RunwayConfig(**merged)

    _config_cache = config

    return config


def clear_cache() -> None:
    """
    Clear the cached configuration.

    Useful for testing or when config files change during execution.
    """
    global _config_cache
    _config_cache = None
