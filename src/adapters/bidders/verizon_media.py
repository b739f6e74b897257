"""
Verizon Media adapter.

The bid service accepts one impression per call, so every impression becomes
its own request with site.id set from dcn and tagid from pos. Banner only.
"""

from ..bidder import Adapter
from ..config.adapter_config import AdapterConfig
from ..definition import AdapterDefinition, HeaderPolicy, RequestOverrides
from ..ext.params import VerizonMediaParams
from ..models.bid import BidType, RequestPolicy, ResultShape
from ..models.openrtb import Imp
from ..pipeline.shaper import normalize_banner_size

BIDDER_CODE = "verizonmedia"


def rewrite_imp(imp: Imp, params: VerizonMediaParams) -> Imp:
    imp.tagid = params.pos
    if imp.banner is not None:
        imp.banner = normalize_banner_size(imp.banner)
    return imp


def request_overrides(params: VerizonMediaParams) -> RequestOverrides:
    return RequestOverrides(site_id=params.dcn)


DEFINITION = AdapterDefinition(
    name=BIDDER_CODE,
    params_cls=VerizonMediaParams,
    media_types=frozenset({BidType.BANNER}),
    policy=RequestPolicy.SPLIT,
    result_shape=ResultShape.TYPED,
    required_context="site",
    rewrite_imp=rewrite_imp,
    request_overrides=request_overrides,
    headers=HeaderPolicy(
        content_type="application/json;charset=utf-8",
        accept="application/json",
        openrtb_version="2.5",
        forward_user_agent=True,
    ),
    require_seatbid=True,
)


def builder(config: AdapterConfig) -> Adapter:
    """Build a Verizon Media adapter for the given configuration."""
    return Adapter(DEFINITION, config)
