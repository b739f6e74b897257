"""Tests for bidder parameter extension parsing."""

import pytest

from src.adapters.errors import BadInput
from src.adapters.ext.params import (
    SovrnParams,
    SovrnXspParams,
    VerizonMediaParams,
    extract_bidder_ext,
    parse_imp_params,
)
from src.adapters.models.openrtb import Imp


def make_imp(ext) -> Imp:
    return Imp(id="imp-1", ext=ext)


class TestExtractBidderExt:
    """Test locating the bidder blob."""

    def test_dict_ext(self):
        """A dict ext yields its bidder object."""
        assert extract_bidder_ext(make_imp({"bidder": {"tagid": "1"}}), 0) == {"tagid": "1"}

    def test_json_string_ext(self):
        """A raw JSON ext is decoded."""
        imp = make_imp('{"bidder": {"dcn": "site"}}')
        assert extract_bidder_ext(imp, 0) == {"dcn": "site"}

    def test_json_bytes_ext(self):
        """A raw JSON bytes ext is decoded."""
        imp = make_imp(b'{"bidder": {"dcn": "site"}}')
        assert extract_bidder_ext(imp, 0) == {"dcn": "site"}

    @pytest.mark.parametrize(
        "ext",
        [{}, None, {"bidder": "nope"}, "{not json", b"[1, 2]", {"prebid": {}}],
    )
    def test_missing_bidder(self, ext):
        """Missing or malformed blobs are BadInput tagged with the index."""
        with pytest.raises(BadInput) as exc_info:
            extract_bidder_ext(make_imp(ext), 3)

        assert exc_info.value.message == "imp #3: ext.bidder not provided"
        assert exc_info.value.imp_index == 3


class TestSovrnParams:
    """Test Sovrn parameter decoding."""

    def test_string_tagid(self):
        """String tag IDs are kept."""
        assert SovrnParams.from_dict({"tagid": "123456"}).tagid == "123456"

    def test_camel_case_tagid(self):
        """tagId is accepted when tagid is absent."""
        assert SovrnParams.from_dict({"tagId": "654321"}).tagid == "654321"

    def test_integer_tagid(self):
        """Integer tag IDs are converted to strings."""
        assert SovrnParams.from_dict({"tagid": 123456}).tagid == "123456"

    def test_missing_tagid(self):
        """A missing tag ID is rejected."""
        with pytest.raises(ValueError, match="Missing required parameter 'tagid'"):
            SovrnParams.from_dict({"bidfloor": 1.0})

    def test_zero_tagid(self):
        """Zero is not a valid tag ID."""
        with pytest.raises(ValueError, match="Invalid tagid 0"):
            SovrnParams.from_dict({"tagid": 0})

    def test_wrong_tagid_type(self):
        """Non string/integer tag IDs are rejected."""
        with pytest.raises(TypeError):
            SovrnParams.from_dict({"tagid": ["1"]})

    def test_bidfloor_and_video_fields(self):
        """Floor and video settings are collected; unknown fields are ignored."""
        params = SovrnParams.from_dict(
            {
                "tagid": "1",
                "bidfloor": 0.25,
                "maxduration": 30,
                "protocols": [2, 3],
                "minduration": 0,
                "unknown": "ignored",
            }
        )
        assert params.bidfloor == 0.25
        assert params.video == {"maxduration": 30, "protocols": [2, 3]}

    def test_bad_bidfloor(self):
        """A non-numeric floor is rejected."""
        with pytest.raises(TypeError, match="bidfloor must be a number"):
            SovrnParams.from_dict({"tagid": "1", "bidfloor": "cheap"})


class TestVerizonMediaParams:
    """Test Verizon Media parameter decoding."""

    def test_valid(self):
        """dcn and pos are read."""
        params = VerizonMediaParams.from_dict({"dcn": "site-dcn", "pos": "header"})
        assert params == VerizonMediaParams(dcn="site-dcn", pos="header")

    def test_missing_dcn(self):
        """dcn is required."""
        with pytest.raises(ValueError, match="missing param dcn"):
            VerizonMediaParams.from_dict({"pos": "header"})

    def test_missing_pos(self):
        """pos is required."""
        with pytest.raises(ValueError, match="missing param pos"):
            VerizonMediaParams.from_dict({"dcn": "site-dcn", "pos": ""})


class TestSovrnXspParams:
    """Test Sovrn XSP parameter decoding."""

    def test_all_optional(self):
        """An empty blob is valid."""
        assert SovrnXspParams.from_dict({}) == SovrnXspParams()

    def test_wrong_type(self):
        """String fields must be strings."""
        with pytest.raises(TypeError, match="pub_id must be a string"):
            SovrnXspParams.from_dict({"pub_id": 12})


class TestParseImpParams:
    """Test the per-impression parse entry point."""

    def test_success(self):
        """A valid blob yields the parameter dataclass."""
        imp = make_imp({"bidder": {"dcn": "d", "pos": "p"}})
        assert parse_imp_params(imp, 0, VerizonMediaParams).pos == "p"

    def test_validation_error_carries_index(self):
        """Validation failures become BadInput with the index in the message."""
        imp = make_imp({"bidder": {"pos": "p"}})

        with pytest.raises(BadInput) as exc_info:
            parse_imp_params(imp, 2, VerizonMediaParams)

        assert exc_info.value.message == "imp #2: missing param dcn"
        assert exc_info.value.imp_index == 2
        assert exc_info.value.scope == "imp"
