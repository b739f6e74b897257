"""
Adapter Configuration Module

Per-bidder endpoint and debug settings loaded from YAML.
"""

from .adapter_config import (
    AdapterConfig,
    AdapterConfigError,
    AdapterConfigManager,
    endpoint_env_var,
    get_adapter_config,
    get_adapter_config_manager,
)

__all__ = [
    "AdapterConfig",
    "AdapterConfigError",
    "AdapterConfigManager",
    "endpoint_env_var",
    "get_adapter_config",
    "get_adapter_config_manager",
]
