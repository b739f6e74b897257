"""
Media-type resolution for returned bids.

A bid's impression ID is joined back to the impressions that were sent. An
explicit creative-type signal in the bid ext wins; otherwise the populated
media sub-object of the impression decides, banner first.
"""

from typing import Any

from ..errors import BadServerResponse
from ..logging import pipeline_logger
from ..models.bid import BidType
from ..models.openrtb import Imp

logger = pipeline_logger()

# Resolution order when an impression declares several media types
MEDIA_TYPE_PRIORITY: tuple[BidType, ...] = (
    BidType.BANNER,
    BidType.VIDEO,
    BidType.NATIVE,
    BidType.AUDIO,
)

CREATIVE_TYPE_KEY = "creative_type"


def find_imp(imp_id: str, imps: list[Imp]) -> Imp | None:
    """Return the impression with the given ID, if any."""
    for imp in imps:
        if imp.id == imp_id:
            return imp
    return None


def media_type_for_imp(imp: Imp) -> BidType:
    """Pick the media type declared by an impression."""
    for bid_type in MEDIA_TYPE_PRIORITY:
        if getattr(imp, bid_type.value) is not None:
            return bid_type

    # Compatibility shim for banner-only partners; mis-tags video-only
    # responses from partners that drop the banner object.
    logger.debug("Impression declares no media type, defaulting to banner", imp_id=imp.id)
    return BidType.BANNER


def explicit_media_type(
    ext: Any, creative_types: dict[int, BidType] | None
) -> BidType | None:
    """
    Read the creative-type signal from a bid ext.

    Args:
        ext: The bid's ext value
        creative_types: Partner's creative-type code table, or None when the
                        partner sends no such signal

    Returns:
        The signalled media type, or None when no signal is present

    Raises:
        BadServerResponse: the ext is malformed or the code is unknown
    """
    if not creative_types or ext is None:
        return None
    if not isinstance(ext, dict):
        raise BadServerResponse(f"Invalid bid ext: {ext!r}")
    if CREATIVE_TYPE_KEY not in ext:
        return None

    code = ext[CREATIVE_TYPE_KEY]
    if isinstance(code, bool) or not isinstance(code, int) or code not in creative_types:
        raise BadServerResponse(f"Unsupported creative type: {code}")
    return creative_types[code]


def resolve_media_type(
    imp_id: str,
    imps: list[Imp],
    explicit: BidType | None = None,
) -> BidType:
    """
    Determine the media type for a returned bid.

    Args:
        imp_id: The bid's impression ID
        imps: Impressions that were sent to the partner
        explicit: Creative type signalled by the partner, if any

    Raises:
        BadServerResponse: imp_id matches none of the impressions
    """
    imp = find_imp(imp_id, imps)
    if imp is None:
        raise BadServerResponse(f"Unknown ad unit code '{imp_id}'")
    if explicit is not None:
        return explicit
    return media_type_for_imp(imp)
