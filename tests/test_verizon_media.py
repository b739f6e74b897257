"""End-to-end tests for the Verizon Media adapter."""

import json

import pytest

from src.adapters.bidders import verizon_media
from src.adapters.config import AdapterConfig
from src.adapters.errors import BadInput, BadServerResponse
from src.adapters.models.bid import BidType, ResponseData
from src.adapters.models.openrtb import (
    Banner,
    BidRequest,
    Device,
    Format,
    Imp,
    Native,
    Site,
)

ENDPOINT = "https://verizon.test/bidRequest"


@pytest.fixture
def adapter():
    """Verizon Media adapter pointed at a test endpoint."""
    return verizon_media.builder(
        AdapterConfig(bidder_code="verizonmedia", endpoint=ENDPOINT)
    )


@pytest.fixture
def bid_request():
    """Two banner impressions A and B."""
    return BidRequest(
        id="auction-1",
        imp=[
            Imp(
                id="A",
                banner=Banner(format=[Format(w=300, h=250)]),
                ext={"bidder": {"dcn": "dcn-1", "pos": "111"}},
            ),
            Imp(
                id="B",
                banner=Banner(w=728, h=90),
                ext={"bidder": {"dcn": "dcn-1", "pos": "112"}},
            ),
        ],
        site=Site(id="site", page="http://example.com"),
        device=Device(ua="test-ua", ip="10.0.0.1"),
    )


class TestVerizonMediaRequests:
    """Test outbound Verizon Media requests."""

    def test_one_request_per_imp(self, adapter, bid_request):
        """Each impression gets its own envelope and placement."""
        envelopes, errors = adapter.make_requests(bid_request)

        assert errors == []
        assert [e.imp_ids for e in envelopes] == [["A"], ["B"]]

        first, second = (json.loads(e.body) for e in envelopes)
        assert [imp["id"] for imp in first["imp"]] == ["A"]
        assert first["imp"][0]["tagid"] == "111"
        assert first["imp"][0]["banner"]["w"] == 300
        assert first["site"]["id"] == "dcn-1"
        assert second["imp"][0]["tagid"] == "112"

    def test_headers(self, adapter, bid_request):
        """Only the user agent is forwarded from the device."""
        envelopes, _ = adapter.make_requests(bid_request)

        assert envelopes[0].headers == {
            "Content-Type": "application/json;charset=utf-8",
            "Accept": "application/json",
            "x-openrtb-version": "2.5",
            "User-Agent": "test-ua",
        }

    def test_native_imp_rejected(self, adapter):
        """A native-only request produces no envelopes and one error."""
        request = BidRequest(
            id="auction-2",
            imp=[
                Imp(
                    id="N",
                    native=Native(request="{}"),
                    ext={"bidder": {"dcn": "dcn-1", "pos": "111"}},
                )
            ],
            site=Site(id="site"),
        )

        envelopes, errors = adapter.make_requests(request)

        assert envelopes == []
        assert len(errors) == 1
        assert isinstance(errors[0], BadInput)

    def test_invalid_banner_size(self, adapter, bid_request):
        """Zero-size banners are dropped with the size in the error."""
        bid_request.imp[1].banner = Banner(w=0, h=90)

        envelopes, errors = adapter.make_requests(bid_request)

        assert len(envelopes) == 1
        assert errors == [
            BadInput("imp #1: Invalid sizes provided for Banner 0x90", imp_index=1)
        ]

    def test_non_site_request(self, adapter, bid_request):
        """Requests without a site are rejected."""
        bid_request.site = None

        envelopes, errors = adapter.make_requests(bid_request)

        assert envelopes == []
        assert errors == [BadInput("non-site request")]


class TestVerizonMediaBids:
    """Test Verizon Media response handling."""

    def test_bid_for_first_imp_only(self, adapter, bid_request):
        """A bid for A in A's envelope yields one banner bid and no errors."""
        envelopes, _ = adapter.make_requests(bid_request)
        body = json.dumps(
            {"id": "auction-1", "seatbid": [{"bid": [{"id": "x", "impid": "A", "price": 2.5}]}]}
        ).encode()

        result, errors = adapter.make_bids(bid_request, envelopes[0], ResponseData(200, body))

        assert errors == []
        assert len(result.bids) == 1
        assert result.bids[0].bid_type == BidType.BANNER
        assert result.bids[0].bid.price == 2.5

    def test_bid_for_other_envelope_imp(self, adapter, bid_request):
        """A bid for B in A's envelope is an unknown ad unit."""
        envelopes, _ = adapter.make_requests(bid_request)
        body = json.dumps(
            {"id": "auction-1", "seatbid": [{"bid": [{"id": "x", "impid": "B", "price": 2.5}]}]}
        ).encode()

        result, errors = adapter.make_bids(bid_request, envelopes[0], ResponseData(200, body))

        assert result is None
        assert errors == [BadServerResponse("Unknown ad unit code 'B'")]

    def test_empty_seatbid(self, adapter, bid_request):
        """A 200 with no seat bids is an error."""
        envelopes, _ = adapter.make_requests(bid_request)
        body = json.dumps({"id": "auction-1", "seatbid": []}).encode()

        result, errors = adapter.make_bids(bid_request, envelopes[0], ResponseData(200, body))

        assert result is None
        assert errors == [BadServerResponse("Invalid SeatBids count: 0")]
