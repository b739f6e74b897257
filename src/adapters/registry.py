"""
Bidder registry.

Maps bidder codes to adapter builders and constructs adapters from the
configuration file.
"""

from typing import Callable

from .bidder import Adapter
from .bidders import sovrn, sovrn_xsp, verizon_media
from .config.adapter_config import (
    AdapterConfig,
    AdapterConfigManager,
    get_adapter_config,
    get_adapter_config_manager,
)
from .logging import config_logger

logger = config_logger()

AdapterBuilder = Callable[[AdapterConfig], Adapter]

BUILDERS: dict[str, AdapterBuilder] = {
    sovrn.BIDDER_CODE: sovrn.builder,
    sovrn_xsp.BIDDER_CODE: sovrn_xsp.builder,
    verizon_media.BIDDER_CODE: verizon_media.builder,
}


class RegistryError(Exception):
    """Base exception for registry errors."""
    pass


class UnknownBidderError(RegistryError):
    """Raised when no adapter exists for a bidder code."""
    pass


class BidderNotConfiguredError(RegistryError):
    """Raised when a bidder has no adapter configuration."""
    pass


def available_bidders() -> list[str]:
    """Bidder codes with a registered adapter."""
    return sorted(BUILDERS)


def build_adapter(bidder_code: str, config: AdapterConfig | None = None) -> Adapter:
    """
    Build the adapter for a bidder.

    Args:
        bidder_code: Registered bidder code
        config: Adapter settings; read from the configuration file when omitted

    Raises:
        UnknownBidderError: no adapter is registered for the code
        BidderNotConfiguredError: no configuration was given or found
    """
    builder = BUILDERS.get(bidder_code)
    if builder is None:
        raise UnknownBidderError(f"No adapter registered for bidder '{bidder_code}'")

    if config is None:
        config = get_adapter_config(bidder_code)
    if config is None:
        raise BidderNotConfiguredError(f"No configuration for bidder '{bidder_code}'")

    return builder(config)


def build_enabled_adapters(
    manager: AdapterConfigManager | None = None,
) -> dict[str, Adapter]:
    """
    Build adapters for every enabled, registered bidder in the configuration.

    Configured bidders without a registered adapter are logged and skipped.
    """
    manager = manager or get_adapter_config_manager()

    adapters = {}
    for bidder_code, config in manager.get_enabled().items():
        if bidder_code not in BUILDERS:
            logger.warning("Configured bidder has no adapter", bidder=bidder_code)
            continue
        adapters[bidder_code] = BUILDERS[bidder_code](config)
    return adapters
