"""
Adapter Configuration Management

Loads per-bidder adapter settings (endpoint, debug, timeouts) from a YAML
file, with environment variable overrides.

Example file:

    debug: false
    adapters:
      sovrn:
        endpoint: http://ap.lijit.com/rtb/bid?src=prebid_server
      verizonmedia:
        endpoint: https://c2shb.ssp.yahoo.com/bidRequest
        timeout_ms: 250
"""

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import yaml

from ..logging import config_logger

logger = config_logger()


class AdapterConfigError(ValueError):
    """Raised when adapter configuration is invalid."""
    pass


@dataclass
class AdapterConfig:
    """
    Configuration for a single bidder adapter.

    Attributes:
        bidder_code: Bidder the settings apply to
        endpoint: Partner bid endpoint (absolute http/https URL)
        enabled: Whether the adapter should be built
        debug: Capture request/response bodies and verbose errors
        timeout_ms: Per-call timeout handed to the transport
        extra_info: Free-form partner settings
    """

    bidder_code: str
    endpoint: str
    enabled: bool = True
    debug: bool = False
    timeout_ms: int = 200
    extra_info: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        """Validate endpoint and timeout."""
        parsed = urlparse(self.endpoint or "")
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise AdapterConfigError(
                f"{self.bidder_code}: endpoint must be an absolute http(s) URL, got {self.endpoint!r}"
            )
        if self.timeout_ms <= 0:
            raise AdapterConfigError(
                f"{self.bidder_code}: timeout_ms must be positive, got {self.timeout_ms}"
            )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "bidder_code": self.bidder_code,
            "endpoint": self.endpoint,
            "enabled": self.enabled,
            "debug": self.debug,
            "timeout_ms": self.timeout_ms,
            "extra_info": self.extra_info,
        }

    @classmethod
    def from_dict(cls, bidder_code: str, data: dict[str, Any]) -> "AdapterConfig":
        """Create from dictionary."""
        return cls(
            bidder_code=bidder_code,
            endpoint=data.get("endpoint", ""),
            enabled=data.get("enabled", True),
            debug=data.get("debug", False),
            timeout_ms=data.get("timeout_ms", 200),
            extra_info=data.get("extra_info", {}),
        )


def _env_truthy(value: str | None) -> bool:
    return (value or "").strip().lower() in ("1", "true", "yes", "on")


def endpoint_env_var(bidder_code: str) -> str:
    """Environment variable overriding a bidder's endpoint, e.g. SOVRN_ENDPOINT."""
    return re.sub(r"[^A-Z0-9]", "_", bidder_code.upper()) + "_ENDPOINT"


class AdapterConfigManager:
    """
    Manages adapter configurations from a YAML file.

    Supports loading from:
    - A YAML file (ADAPTER_CONFIG_PATH, default config/adapters.yaml)
    - Environment variable overrides (<BIDDER>_ENDPOINT, ADAPTERS_DEBUG)
    """

    def __init__(self, config_path: str | None = None):
        """
        Initialize the config manager.

        Args:
            config_path: Path to the adapters YAML file.
                         Defaults to config/adapters.yaml
        """
        if config_path is None:
            config_path = os.environ.get(
                "ADAPTER_CONFIG_PATH",
                str(Path(__file__).parent.parent.parent.parent / "config" / "adapters.yaml"),
            )
        self.config_path = Path(config_path)
        self._cache: dict[str, AdapterConfig] = {}

    def load_all(self) -> dict[str, AdapterConfig]:
        """
        Load every adapter configuration from the file.

        Entries that fail validation are logged and skipped.

        Raises:
            AdapterConfigError: the file is not valid YAML
        """
        self._cache.clear()
        data = self._read_file()

        global_debug = bool(data.get("debug", False)) or _env_truthy(
            os.environ.get("ADAPTERS_DEBUG")
        )

        for bidder_code, entry in (data.get("adapters") or {}).items():
            entry = dict(entry or {})
            override = os.environ.get(endpoint_env_var(bidder_code))
            if override:
                entry["endpoint"] = override
            if global_debug:
                entry["debug"] = True

            try:
                config = AdapterConfig.from_dict(bidder_code, entry)
            except AdapterConfigError as e:
                logger.error("Invalid adapter configuration", bidder=bidder_code, error=str(e))
                continue

            self._cache[bidder_code] = config

        logger.info(
            "Loaded adapter configuration",
            path=str(self.config_path),
            adapters=sorted(self._cache),
        )
        return dict(self._cache)

    def get(self, bidder_code: str) -> AdapterConfig | None:
        """
        Get configuration for a specific bidder.

        Args:
            bidder_code: The bidder's code

        Returns:
            AdapterConfig if configured, None otherwise
        """
        if not self._cache:
            self.load_all()
        return self._cache.get(bidder_code)

    def get_enabled(self) -> dict[str, AdapterConfig]:
        """Get configurations of enabled adapters."""
        if not self._cache:
            self.load_all()
        return {code: config for code, config in self._cache.items() if config.enabled}

    def reload(self) -> None:
        """Reload configuration from disk."""
        self.load_all()

    def _read_file(self) -> dict[str, Any]:
        if not self.config_path.exists():
            logger.warning("Adapter config file not found", path=str(self.config_path))
            return {}

        try:
            with open(self.config_path) as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise AdapterConfigError(f"YAML error in {self.config_path}: {e}") from e

        if not isinstance(data, dict):
            return {}
        return data


# Global instance for easy access
_manager: AdapterConfigManager | None = None


def get_adapter_config_manager() -> AdapterConfigManager:
    """Get the global adapter config manager instance."""
    global _manager
    if _manager is None:
        _manager = AdapterConfigManager()
        _manager.load_all()
    return _manager


def get_adapter_config(bidder_code: str) -> AdapterConfig | None:
    """
    Convenience function to get a bidder's adapter configuration.

    Args:
        bidder_code: The bidder's code

    Returns:
        AdapterConfig, or None when the bidder is not configured
    """
    return get_adapter_config_manager().get(bidder_code)
