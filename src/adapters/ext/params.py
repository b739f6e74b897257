"""
Bidder parameter extensions.

Each impression carries its bidder parameters under imp.ext["bidder"]. Every
adapter declares a parameter dataclass whose from_dict() raises ValueError or
TypeError on bad input; parse_imp_params() turns those into BadInput tagged
with the impression index. Unknown fields are ignored.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Protocol, TypeVar

from ..errors import BadInput
from ..models.openrtb import Imp


class BidderParams(Protocol):
    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BidderParams": ...


P = TypeVar("P", bound=BidderParams)


def decode_imp_ext(imp: Imp) -> Any:
    """Return imp.ext with a raw JSON string or bytes value decoded; None if malformed."""
    ext = imp.ext
    if isinstance(ext, (bytes, str)):
        try:
            return json.loads(ext)
        except ValueError:
            return None
    return ext


def extract_bidder_ext(imp: Imp, index: int) -> dict[str, Any]:
    """
    Return the raw bidder blob of an impression.

    Raises:
        BadInput: ext is missing, malformed, or has no "bidder" object
    """
    ext = decode_imp_ext(imp)
    bidder = ext.get("bidder") if isinstance(ext, dict) else None
    if not isinstance(bidder, dict):
        raise BadInput(f"imp #{index}: ext.bidder not provided", imp_index=index)
    return bidder


def parse_imp_params(imp: Imp, index: int, params_cls: type[P]) -> P:
    """
    Decode an impression's bidder blob into the adapter's parameter type.

    Args:
        imp: The impression to read
        index: Position of the impression in the request
        params_cls: Adapter parameter dataclass

    Raises:
        BadInput: the blob is missing or fails validation
    """
    bidder = extract_bidder_ext(imp, index)
    try:
        return params_cls.from_dict(bidder)
    except (TypeError, ValueError) as e:
        raise BadInput(f"imp #{index}: {e}", imp_index=index) from e


def _string(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise TypeError(f"{key} must be a string")
    return value.strip()


def _number(data: dict[str, Any], key: str) -> float:
    value = data.get(key)
    if value is None:
        return 0.0
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"{key} must be a number")
    return float(value)


def _int_or_list(key: str, value: Any) -> Any:
    if isinstance(value, list):
        if not all(isinstance(v, (int, str)) and not isinstance(v, bool) for v in value):
            raise TypeError(f"{key} must be a list of integers or strings")
        return list(value)
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{key} must be an integer")
    return value


# Video fields Sovrn accepts in its ext and copies onto imp.video
SOVRN_VIDEO_FIELDS = (
    "mimes",
    "minduration",
    "maxduration",
    "protocols",
    "w",
    "h",
    "startdelay",
    "placement",
    "linearity",
    "skip",
    "skipmin",
    "skipafter",
    "sequence",
    "battr",
    "maxextended",
    "minbitrate",
    "maxbitrate",
    "boxingallowed",
    "playbackmethod",
    "playbackend",
    "delivery",
    "pos",
    "api",
)


@dataclass(frozen=True)
class SovrnParams:
    """
    Sovrn impression parameters.

    Attributes:
        tagid: Sovrn tag ID; accepted as "tagid" or "tagId", string or integer
        bidfloor: Floor override, applied when positive
        video: Video settings overriding the impression's video object
    """

    tagid: str
    bidfloor: float = 0.0
    video: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SovrnParams":
        raw_tag = data.get("tagid")
        if raw_tag in (None, ""):
            raw_tag = data.get("tagId")
        if isinstance(raw_tag, bool):
            raise TypeError("tagid must be a string or integer")
        if isinstance(raw_tag, int):
            if raw_tag <= 0:
                raise ValueError(f"Invalid tagid {raw_tag}")
            tagid = str(raw_tag)
        elif isinstance(raw_tag, str) or raw_tag is None:
            tagid = (raw_tag or "").strip()
        else:
            raise TypeError("tagid must be a string or integer")

        if not tagid:
            raise ValueError("Missing required parameter 'tagid'")

        video = {
            key: _int_or_list(key, data[key])
            for key in SOVRN_VIDEO_FIELDS
            if data.get(key) not in (None, 0, [])
        }

        return cls(tagid=tagid, bidfloor=_number(data, "bidfloor"), video=video)


@dataclass(frozen=True)
class SovrnXspParams:
    """Sovrn XSP (in-app) impression parameters. All fields are optional."""

    pub_id: str = ""
    med_id: str = ""
    zone_id: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SovrnXspParams":
        return cls(
            pub_id=_string(data, "pub_id"),
            med_id=_string(data, "med_id"),
            zone_id=_string(data, "zone_id"),
        )


@dataclass(frozen=True)
class VerizonMediaParams:
    """
    Verizon Media impression parameters.

    Attributes:
        dcn: Site ID, replaces site.id
        pos: Placement ID, replaces imp.tagid
    """

    dcn: str
    pos: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "VerizonMediaParams":
        dcn = _string(data, "dcn")
        if not dcn:
            raise ValueError("missing param dcn")
        pos = _string(data, "pos")
        if not pos:
            raise ValueError("missing param pos")
        return cls(dcn=dcn, pos=pos)
