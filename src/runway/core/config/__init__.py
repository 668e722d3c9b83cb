"""
Configuration models and loading.

This module provides Pydantic models for runway configuration
with multi-layer merging: defaults < user < project < env vars.
"""

from .loader import (
    clear_cache,
    get_project_config_path,
    get_user_config_path,
    get_xdg_config_home,
    load_config,
)
from .models import (
    BenchmarkConfig,
    JavaConfig,
    JsConfig,
    NativeConfig,
    RunwayConfig,
    WatchConfig,
)

__all__ = [
    # Models
    "BenchmarkConfig",
    "JavaConfig",
    "JsConfig",
    "NativeConfig",
    "RunwayConfig",
    "WatchConfig",
    # Loader functions
    "clear_cache",
    "get_project_config_path",
    "get_user_config_path",
    "get_xdg_config_home",
    "load_config",
]
