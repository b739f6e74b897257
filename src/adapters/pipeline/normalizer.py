"""
Response normalization.

Status handling:
- 204: the partner chose not to bid; no bids, no errors
- 200: decode the OpenRTB bid response
- anything else: BadServerResponse carrying the status code

A bid for an impression that was not sent fails the whole response. A bad
creative-type signal only drops that bid.
"""

import json
from dataclasses import replace
from urllib.parse import unquote_plus

from ..definition import AdapterDefinition
from ..errors import AdapterError, BadServerResponse
from ..logging import pipeline_logger
from ..models.bid import BidderResponse, ResponseData, TypedBid
from ..models.openrtb import Bid, BidResponse, Imp
from .media_type import explicit_media_type, find_imp, resolve_media_type

logger = pipeline_logger()

HTTP_OK = 200
HTTP_NO_CONTENT = 204
DEFAULT_CURRENCY = "USD"


def decode_body(body: bytes | str) -> BidResponse:
    """
    Decode a partner response body.

    Raises:
        BadServerResponse: the body is not an OpenRTB bid response
    """
    try:
        data = json.loads(body)
        if not isinstance(data, dict):
            raise TypeError(f"expected a JSON object, got {type(data).__name__}")
        return BidResponse.from_dict(data)
    except (TypeError, ValueError, AttributeError) as e:
        raise BadServerResponse(f"Bad server response: {e}", status_code=HTTP_OK) from e


def check_status(response: ResponseData, debug: bool = False) -> AdapterError | None:
    """Return the error for a non-200/204 status, else None."""
    if response.status_code in (HTTP_OK, HTTP_NO_CONTENT):
        return None

    message = f"Unexpected status code: {response.status_code}."
    if debug:
        body = response.body.decode("utf-8", errors="replace")
        message += f" Body: {body}"
    else:
        message += " Run with request.debug = 1 for more info"
    return BadServerResponse(message, status_code=response.status_code)


def _finalize_bid(bid: Bid, definition: AdapterDefinition) -> Bid:
    changes = {}
    if definition.unescape_markup and bid.adm:
        changes["adm"] = unquote_plus(bid.adm)
    if definition.strip_bid_ext:
        changes["ext"] = None
    return replace(bid, **changes) if changes else bid


def normalize_response(
    imps: list[Imp],
    response: ResponseData,
    definition: AdapterDefinition,
    debug: bool = False,
) -> tuple[BidderResponse | None, list[AdapterError]]:
    """
    Convert a partner response into typed bids.

    Args:
        imps: Impressions carried by the envelope this response answers
        response: Status and body from the transport
        definition: Partner rules
        debug: Include the response body in status errors

    Returns:
        Tuple of (BidderResponse or None, errors). None means no usable
        response: a 204 or a call-level failure.
    """
    if response.status_code == HTTP_NO_CONTENT:
        return None, []

    status_error = check_status(response, debug=debug)
    if status_error is not None:
        return None, [status_error]

    try:
        bid_response = decode_body(response.body)
    except BadServerResponse as e:
        return None, [e]

    if definition.require_seatbid and not bid_response.seatbid:
        return None, [
            BadServerResponse(
                f"Invalid SeatBids count: {len(bid_response.seatbid)}",
                status_code=response.status_code,
            )
        ]

    errors: list[AdapterError] = []
    result = BidderResponse(currency=bid_response.cur or DEFAULT_CURRENCY)

    for seatbid in bid_response.seatbid:
        for bid in seatbid.bid:
            if find_imp(bid.impid, imps) is None:
                # The join key must always resolve
                return None, [BadServerResponse(f"Unknown ad unit code '{bid.impid}'")]

            try:
                explicit = explicit_media_type(bid.ext, definition.creative_types)
            except BadServerResponse as e:
                errors.append(e)
                continue

            bid_type = resolve_media_type(bid.impid, imps, explicit)
            if bid_type not in definition.media_types:
                logger.debug(
                    "Skipping bid for unsupported media type",
                    bidder=definition.name,
                    imp_id=bid.impid,
                    bid_type=bid_type.value,
                )
                continue

            result.bids.append(
                TypedBid(bid=_finalize_bid(bid, definition), bid_type=bid_type)
            )

    return result, errors
