"""Canonical OpenRTB objects and adapter result types."""

from .bid import (
    BidderDebug,
    BidderResponse,
    BidType,
    RequestData,
    RequestPolicy,
    ResponseData,
    ResultShape,
    TypedBid,
)
from .openrtb import (
    App,
    Audio,
    Banner,
    Bid,
    BidRequest,
    BidResponse,
    Device,
    Format,
    Imp,
    Native,
    Publisher,
    SeatBid,
    Site,
    User,
    Video,
)

__all__ = [
    "App",
    "Audio",
    "Banner",
    "Bid",
    "BidRequest",
    "BidResponse",
    "BidderDebug",
    "BidderResponse",
    "BidType",
    "Device",
    "Format",
    "Imp",
    "Native",
    "Publisher",
    "RequestData",
    "RequestPolicy",
    "ResponseData",
    "ResultShape",
    "SeatBid",
    "Site",
    "TypedBid",
    "User",
    "Video",
]
