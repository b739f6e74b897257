"""
Sovrn XSP adapter (in-app inventory).

App requests only. Impressions are batched; med_id and pub_id replace the app
and app publisher IDs, zone_id replaces the tagid. Bids carry their media type
in ext.creative_type.
"""

from ..bidder import Adapter
from ..config.adapter_config import AdapterConfig
from ..definition import AdapterDefinition, HeaderPolicy, RequestOverrides
from ..ext.params import SovrnXspParams
from ..models.bid import BidType, RequestPolicy, ResultShape
from ..models.openrtb import Imp

BIDDER_CODE = "sovrnxsp"

# bid.ext.creative_type values
CREATIVE_TYPE_BANNER = 0
CREATIVE_TYPE_VIDEO = 1
CREATIVE_TYPE_NATIVE = 2
CREATIVE_TYPE_AUDIO = 3

# Audio is defined by XSP but not served through this adapter
CREATIVE_TYPES: dict[int, BidType] = {
    CREATIVE_TYPE_BANNER: BidType.BANNER,
    CREATIVE_TYPE_VIDEO: BidType.VIDEO,
    CREATIVE_TYPE_NATIVE: BidType.NATIVE,
}


def rewrite_imp(imp: Imp, params: SovrnXspParams) -> Imp:
    if params.zone_id:
        imp.tagid = params.zone_id
    return imp


def request_overrides(params: SovrnXspParams) -> RequestOverrides:
    return RequestOverrides(app_id=params.med_id, publisher_id=params.pub_id)


DEFINITION = AdapterDefinition(
    name=BIDDER_CODE,
    params_cls=SovrnXspParams,
    media_types=frozenset({BidType.BANNER, BidType.VIDEO, BidType.NATIVE}),
    policy=RequestPolicy.BATCHED,
    result_shape=ResultShape.TYPED,
    required_context="app",
    rewrite_imp=rewrite_imp,
    request_overrides=request_overrides,
    headers=HeaderPolicy(
        content_type="application/json;charset=utf-8",
        accept="application/json",
        openrtb_version="2.5",
    ),
    creative_types=CREATIVE_TYPES,
    strip_bid_ext=True,
)


def builder(config: AdapterConfig) -> Adapter:
    """Build a Sovrn XSP adapter for the given configuration."""
    return Adapter(DEFINITION, config)
