"""Transport envelope construction: body serialization and headers."""

import json

from ..definition import HeaderPolicy
from ..errors import InternalError
from ..models.bid import RequestData
from ..models.openrtb import BidRequest
from .shaper import ShapedRequest


def build_headers(request: BidRequest, policy: HeaderPolicy) -> dict[str, str]:
    """
    Build the header set for one request.

    Device signals are forwarded only when present on the request.
    """
    headers = {"Content-Type": policy.content_type}
    if policy.accept:
        headers["Accept"] = policy.accept
    if policy.openrtb_version:
        headers["x-openrtb-version"] = policy.openrtb_version

    device = request.device
    if device is not None:
        if policy.forward_user_agent and device.ua:
            headers["User-Agent"] = device.ua
        if policy.forward_ip and device.ip:
            headers["X-Forwarded-For"] = device.ip
        if policy.forward_language and device.language:
            headers["Accept-Language"] = device.language
        if policy.forward_dnt and device.dnt is not None:
            headers["DNT"] = str(device.dnt)

    if policy.buyer_uid_cookie and request.user is not None:
        buyer_uid = (request.user.buyeruid or "").strip()
        if buyer_uid:
            headers["Cookie"] = f"{policy.buyer_uid_cookie}={buyer_uid}"

    return headers


def serialize_request(request: BidRequest) -> bytes:
    """
    Serialize a request to compact JSON.

    Raises:
        InternalError: the request holds values JSON cannot represent
    """
    try:
        return json.dumps(
            request.to_dict(), separators=(",", ":"), allow_nan=False
        ).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise InternalError(f"Failed to serialize request {request.id}: {e}") from e


def build_envelope(
    shaped: ShapedRequest,
    endpoint: str,
    policy: HeaderPolicy,
    method: str = "POST",
) -> RequestData:
    """Attach method, URI, body and headers to a shaped request."""
    return RequestData(
        method=method,
        uri=endpoint,
        body=serialize_request(shaped.request),
        headers=build_headers(shaped.request, policy),
        imp_ids=list(shaped.imp_ids),
    )
