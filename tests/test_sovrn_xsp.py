"""End-to-end tests for the Sovrn XSP adapter."""

import json

import pytest

from src.adapters.bidders import sovrn_xsp
from src.adapters.config import AdapterConfig
from src.adapters.errors import BadInput, BadServerResponse
from src.adapters.models.bid import BidderResponse, BidType, ResponseData
from src.adapters.models.openrtb import (
    App,
    Banner,
    BidRequest,
    Imp,
    Native,
    Publisher,
    Site,
    Video,
)

ENDPOINT = "http://xsp.test/json/rtb"


@pytest.fixture
def adapter():
    """XSP adapter pointed at a test endpoint."""
    return sovrn_xsp.builder(AdapterConfig(bidder_code="sovrnxsp", endpoint=ENDPOINT))


@pytest.fixture
def app_request():
    """In-app request with banner, video and native impressions."""
    return BidRequest(
        id="auction-1",
        imp=[
            Imp(
                id="banner-1",
                banner=Banner(w=320, h=50),
                ext={"bidder": {"pub_id": "pub-1", "med_id": "med-1", "zone_id": "zone-1"}},
            ),
            Imp(
                id="video-1",
                video=Video(mimes=["video/mp4"]),
                ext={"bidder": {"pub_id": "pub-1", "med_id": "med-1"}},
            ),
            Imp(
                id="native-1",
                native=Native(request="{}"),
                ext={"bidder": {}},
            ),
        ],
        app=App(id="app", bundle="com.example", publisher=Publisher(id="orig")),
    )


def response_with(*bids) -> ResponseData:
    body = json.dumps({"id": "auction-1", "seatbid": [{"bid": list(bids)}]}).encode()
    return ResponseData(status_code=200, body=body)


class TestSovrnXspRequests:
    """Test outbound XSP requests."""

    def test_app_ids_rewritten(self, adapter, app_request):
        """med_id, pub_id and zone_id replace app, publisher and tag IDs."""
        envelopes, errors = adapter.make_requests(app_request)

        assert errors == []
        assert len(envelopes) == 1
        body = json.loads(envelopes[0].body)
        assert body["app"]["id"] == "med-1"
        assert body["app"]["publisher"]["id"] == "pub-1"
        assert body["imp"][0]["tagid"] == "zone-1"
        assert "tagid" not in body["imp"][1]
        assert app_request.app.id == "app"
        assert app_request.app.publisher.id == "orig"

    def test_headers(self, adapter, app_request):
        """XSP headers announce JSON and OpenRTB 2.5."""
        envelopes, _ = adapter.make_requests(app_request)

        assert envelopes[0].headers == {
            "Content-Type": "application/json;charset=utf-8",
            "Accept": "application/json",
            "x-openrtb-version": "2.5",
        }

    def test_non_app_request(self, adapter, app_request):
        """Site requests are rejected outright."""
        app_request.app = None
        app_request.site = Site(id="site")

        envelopes, errors = adapter.make_requests(app_request)

        assert envelopes == []
        assert errors == [BadInput("non-app request")]

    def test_missing_bidder_ext(self, adapter, app_request):
        """Impressions without bidder parameters are dropped."""
        app_request.imp[2].ext = {}

        envelopes, errors = adapter.make_requests(app_request)

        assert envelopes[0].imp_ids == ["banner-1", "video-1"]
        assert errors == [BadInput("imp #2: ext.bidder not provided", imp_index=2)]


class TestSovrnXspBids:
    """Test XSP response handling."""

    def test_creative_types(self, adapter, app_request):
        """creative_type decides the media type and the ext is removed."""
        envelopes, _ = adapter.make_requests(app_request)
        response = response_with(
            {"id": "a", "impid": "banner-1", "price": 1.0, "ext": {"creative_type": 0}},
            {"id": "b", "impid": "video-1", "price": 2.0, "ext": {"creative_type": 1}},
            {"id": "c", "impid": "native-1", "price": 3.0, "ext": {"creative_type": 2}},
        )

        result, errors = adapter.make_bids(app_request, envelopes[0], response)

        assert errors == []
        assert isinstance(result, BidderResponse)
        assert result.currency == "USD"
        assert [b.bid_type for b in result.bids] == [
            BidType.BANNER,
            BidType.VIDEO,
            BidType.NATIVE,
        ]
        assert all(b.bid.ext is None for b in result.bids)

    def test_audio_creative_rejected(self, adapter, app_request):
        """Audio creatives are reported and dropped; other bids survive."""
        envelopes, _ = adapter.make_requests(app_request)
        response = response_with(
            {"id": "a", "impid": "banner-1", "price": 1.0, "ext": {"creative_type": 0}},
            {"id": "b", "impid": "video-1", "price": 2.0, "ext": {"creative_type": 3}},
        )

        result, errors = adapter.make_bids(app_request, envelopes[0], response)

        assert [b.bid.id for b in result.bids] == ["a"]
        assert errors == [BadServerResponse("Unsupported creative type: 3")]

    def test_missing_creative_type_uses_imp(self, adapter, app_request):
        """Without a signal the impression's media type is used."""
        envelopes, _ = adapter.make_requests(app_request)
        response = response_with({"id": "b", "impid": "video-1", "price": 2.0})

        result, errors = adapter.make_bids(app_request, envelopes[0], response)

        assert errors == []
        assert result.bids[0].bid_type == BidType.VIDEO

    def test_debug_capture(self, app_request):
        """Debug-enabled adapters attach the exchange to the response."""
        adapter = sovrn_xsp.builder(
            AdapterConfig(bidder_code="sovrnxsp", endpoint=ENDPOINT, debug=True)
        )
        envelopes, _ = adapter.make_requests(app_request)
        response = response_with({"id": "a", "impid": "banner-1", "price": 1.0})

        result, _ = adapter.make_bids(app_request, envelopes[0], response)

        assert len(result.debug) == 1
        assert result.debug[0].request_uri == ENDPOINT
        assert result.debug[0].status_code == 200
        assert '"banner-1"' in result.debug[0].response_body
