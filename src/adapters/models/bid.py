"""Transport envelopes and typed bid results exchanged with the orchestrator."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .openrtb import Bid


class BidType(str, Enum):
    """Media type attached to a returned bid."""

    BANNER = "banner"
    VIDEO = "video"
    AUDIO = "audio"
    NATIVE = "native"


class RequestPolicy(str, Enum):
    """How surviving impressions are grouped into outbound requests."""

    BATCHED = "batched"  # One request carrying every impression
    SPLIT = "split"  # One request per impression


class ResultShape(str, Enum):
    """Shape of the value returned by make_bids."""

    LEGACY = "legacy"  # Bare list of TypedBid
    TYPED = "typed"  # BidderResponse with currency


@dataclass
class RequestData:
    """
    One outbound HTTP call, ready for the transport.

    Attributes:
        method: HTTP method
        uri: Partner endpoint
        body: Serialized OpenRTB request
        headers: Header mapping
        imp_ids: IDs of the impressions carried in the body
    """

    method: str
    uri: str
    body: bytes
    headers: dict[str, str] = field(default_factory=dict)
    imp_ids: list[str] = field(default_factory=list)


@dataclass
class ResponseData:
    """HTTP status and raw body returned by the transport for one envelope."""

    status_code: int
    body: bytes = b""
    headers: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class TypedBid:
    """A canonical bid paired with its resolved media type."""

    bid: Bid
    bid_type: BidType


@dataclass
class BidderDebug:
    """Request/response capture for one envelope, recorded in debug mode."""

    request_uri: str
    request_body: str = ""
    status_code: int | None = None
    response_body: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "request_uri": self.request_uri,
            "request_body": self.request_body,
            "status_code": self.status_code,
            "response_body": self.response_body,
        }


@dataclass
class BidderResponse:
    """Typed result of one partner response."""

    currency: str = "USD"
    bids: list[TypedBid] = field(default_factory=list)
    debug: list[BidderDebug] = field(default_factory=list)
