"""
OpenRTB bidder adapters for The Nexus Engine.

Each adapter translates the exchange's canonical bid request into a demand
partner's wire format (make_requests) and the partner's response back into
typed bids (make_bids).

Usage:
    from src.adapters import build_adapter

    adapter = build_adapter("sovrn")
    envelopes, errors = adapter.make_requests(bid_request)
"""

from .bidder import Adapter
from .config import AdapterConfig, AdapterConfigManager
from .definition import AdapterDefinition, HeaderPolicy, RequestOverrides
from .errors import AdapterError, BadInput, BadServerResponse, InternalError
from .models import (
    BidderResponse,
    BidRequest,
    BidType,
    RequestData,
    RequestPolicy,
    ResponseData,
    ResultShape,
    TypedBid,
)
from .registry import (
    UnknownBidderError,
    available_bidders,
    build_adapter,
    build_enabled_adapters,
)

__version__ = '1.0.0'

__all__ = [
    'Adapter',
    'AdapterConfig',
    'AdapterConfigManager',
    'AdapterDefinition',
    'AdapterError',
    'BadInput',
    'BadServerResponse',
    'BidderResponse',
    'BidRequest',
    'BidType',
    'HeaderPolicy',
    'InternalError',
    'RequestData',
    'RequestOverrides',
    'RequestPolicy',
    'ResponseData',
    'ResultShape',
    'TypedBid',
    'UnknownBidderError',
    'available_bidders',
    'build_adapter',
    'build_enabled_adapters',
]
