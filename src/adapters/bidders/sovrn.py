"""
Sovrn adapter.

All banner and video impressions go out in a single request. Each impression's
tagid comes from its parameters, banners are sent with explicit w/h only, and
the user's buyer UID travels in the ljt_reader cookie.
"""

from dataclasses import replace

from ..bidder import Adapter
from ..config.adapter_config import AdapterConfig
from ..definition import AdapterDefinition, HeaderPolicy
from ..ext.params import SovrnParams
from ..models.bid import BidType, RequestPolicy, ResultShape
from ..models.openrtb import Imp
from ..pipeline.shaper import normalize_banner_size

BIDDER_CODE = "sovrn"
USER_ID_COOKIE = "ljt_reader"

REQUIRED_VIDEO_FIELDS = ("mimes", "maxduration", "protocols")


def rewrite_imp(imp: Imp, params: SovrnParams) -> Imp:
    """Apply tag, floor, banner size and video settings to an impression copy."""
    imp.tagid = params.tagid
    if params.bidfloor > 0:
        imp.bidfloor = params.bidfloor

    if imp.banner is not None:
        banner = normalize_banner_size(imp.banner)
        banner.format = []
        imp.banner = banner

    if imp.video is not None:
        video = replace(imp.video, **params.video)
        missing = [name for name in REQUIRED_VIDEO_FIELDS if not getattr(video, name)]
        if missing:
            raise ValueError(f"Missing required video parameter(s): {', '.join(missing)}")
        imp.video = video

    return imp


DEFINITION = AdapterDefinition(
    name=BIDDER_CODE,
    params_cls=SovrnParams,
    media_types=frozenset({BidType.BANNER, BidType.VIDEO}),
    policy=RequestPolicy.BATCHED,
    result_shape=ResultShape.LEGACY,
    rewrite_imp=rewrite_imp,
    headers=HeaderPolicy(
        content_type="application/json",
        forward_user_agent=True,
        forward_ip=True,
        forward_language=True,
        forward_dnt=True,
        buyer_uid_cookie=USER_ID_COOKIE,
    ),
    unescape_markup=True,
)


def builder(config: AdapterConfig) -> Adapter:
    """Build a Sovrn adapter for the given configuration."""
    return Adapter(DEFINITION, config)
