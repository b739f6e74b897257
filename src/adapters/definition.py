"""
Adapter definitions.

An adapter is a configuration of the shared pipeline, not a subclass: the
definition names the partner's parameter schema, request policy, impression
rewrite, request-level overrides, header set and response rules.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from .models.bid import BidType, RequestPolicy, ResultShape
from .models.openrtb import Imp


@dataclass(frozen=True)
class RequestOverrides:
    """
    Request-level fields an impression's parameters replace.

    publisher_id targets the app publisher when the request has an app,
    otherwise the site publisher.
    """

    site_id: str = ""
    app_id: str = ""
    publisher_id: str = ""

    def is_empty(self) -> bool:
        return not (self.site_id or self.app_id or self.publisher_id)


@dataclass(frozen=True)
class HeaderPolicy:
    """
    Headers attached to every outbound envelope.

    Attributes:
        content_type: Content-Type value
        accept: Accept value (omitted when None)
        openrtb_version: x-openrtb-version value (omitted when None)
        forward_user_agent: Forward device.ua as User-Agent
        forward_ip: Forward device.ip as X-Forwarded-For
        forward_language: Forward device.language as Accept-Language
        forward_dnt: Forward device.dnt as DNT
        buyer_uid_cookie: Cookie name carrying user.buyeruid (omitted when None)
    """

    content_type: str = "application/json"
    accept: Optional[str] = None
    openrtb_version: Optional[str] = None
    forward_user_agent: bool = False
    forward_ip: bool = False
    forward_language: bool = False
    forward_dnt: bool = False
    buyer_uid_cookie: Optional[str] = None


def _keep_imp(imp: Imp, params: Any) -> Imp:
    return imp


def _no_overrides(params: Any) -> RequestOverrides:
    return RequestOverrides()


@dataclass(frozen=True)
class AdapterDefinition:
    """
    Partner-specific rules for the shared request/response pipeline.

    Attributes:
        name: Bidder code
        params_cls: Dataclass decoding imp.ext["bidder"]
        media_types: Media types the partner accepts and returns
        policy: Batched or split request grouping
        result_shape: Legacy list or typed BidderResponse
        required_context: "site" or "app" when the partner needs one
        rewrite_imp: Returns a rewritten copy of an impression; raises
                     ValueError when the impression cannot be sent
        request_overrides: Request-level fields taken from the parameters
        headers: Outbound header policy
        creative_types: Creative-type code table read from bid.ext, if the
                        partner signals one
        require_seatbid: Treat a response without seat bids as an error
        unescape_markup: URL-unescape bid.adm
        strip_bid_ext: Drop bid.ext from returned bids
    """

    name: str
    params_cls: type
    media_types: frozenset[BidType]
    policy: RequestPolicy = RequestPolicy.BATCHED
    result_shape: ResultShape = ResultShape.TYPED
    required_context: Optional[str] = None
    rewrite_imp: Callable[[Imp, Any], Imp] = _keep_imp
    request_overrides: Callable[[Any], RequestOverrides] = _no_overrides
    headers: HeaderPolicy = field(default_factory=HeaderPolicy)
    creative_types: Optional[dict[int, BidType]] = None
    require_seatbid: bool = False
    unescape_markup: bool = False
    strip_bid_ext: bool = False
