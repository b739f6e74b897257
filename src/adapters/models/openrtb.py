"""
Canonical OpenRTB 2.5 bid request / bid response models.

Only the objects and fields the adapters read or rewrite are modelled; every
object keeps its `ext` so partner-specific data passes through untouched.

Reference: https://github.com/InteractiveAdvertisingBureau/openrtb2.x
"""

from dataclasses import dataclass, field, fields
from typing import Any, Optional


def _is_empty(value: Any) -> bool:
    return value is None or value == "" or value == [] or value == {}


class OpenRTBObject:
    """Shared serialization for OpenRTB dataclasses."""

    def to_dict(self) -> dict[str, Any]:
        """Convert to an OpenRTB dictionary, omitting unset fields."""
        result = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, OpenRTBObject):
                value = value.to_dict()
            elif isinstance(value, list):
                value = [
                    v.to_dict() if isinstance(v, OpenRTBObject) else v
                    for v in value
                ]
            if not _is_empty(value):
                result[f.name] = value
        return result


@dataclass
class Format(OpenRTBObject):
    """Allowed banner size (Section 3.2.10)."""

    w: int = 0
    h: int = 0
    ext: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        result = {"w": self.w, "h": self.h}
        if self.ext:
            result["ext"] = self.ext
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Format":
        return cls(w=data.get("w", 0), h=data.get("h", 0), ext=data.get("ext") or {})


@dataclass
class Banner(OpenRTBObject):
    """Banner impression (Section 3.2.6)."""

    w: Optional[int] = None
    h: Optional[int] = None
    format: list[Format] = field(default_factory=list)
    id: str = ""
    pos: Optional[int] = None
    battr: list[int] = field(default_factory=list)
    mimes: list[str] = field(default_factory=list)
    api: list[int] = field(default_factory=list)
    topframe: Optional[int] = None
    ext: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Banner":
        return cls(
            w=data.get("w"),
            h=data.get("h"),
            format=[Format.from_dict(f) for f in data.get("format") or []],
            id=data.get("id") or "",
            pos=data.get("pos"),
            battr=data.get("battr") or [],
            mimes=data.get("mimes") or [],
            api=data.get("api") or [],
            topframe=data.get("topframe"),
            ext=data.get("ext") or {},
        )


@dataclass
class Video(OpenRTBObject):
    """Video impression (Section 3.2.7)."""

    mimes: list[str] = field(default_factory=list)
    minduration: Optional[int] = None
    maxduration: Optional[int] = None
    protocols: list[int] = field(default_factory=list)
    w: Optional[int] = None
    h: Optional[int] = None
    startdelay: Optional[int] = None
    placement: Optional[int] = None
    linearity: Optional[int] = None
    skip: Optional[int] = None
    skipmin: Optional[int] = None
    skipafter: Optional[int] = None
    sequence: Optional[int] = None
    battr: list[int] = field(default_factory=list)
    maxextended: Optional[int] = None
    minbitrate: Optional[int] = None
    maxbitrate: Optional[int] = None
    boxingallowed: Optional[int] = None
    playbackmethod: list[int] = field(default_factory=list)
    playbackend: Optional[int] = None
    delivery: list[int] = field(default_factory=list)
    pos: Optional[int] = None
    api: list[int] = field(default_factory=list)
    ext: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Video":
        known = {f.name for f in fields(cls)}
        values = {k: v for k, v in data.items() if k in known and v is not None}
        return cls(**values)


@dataclass
class Audio(OpenRTBObject):
    """Audio impression (Section 3.2.8)."""

    mimes: list[str] = field(default_factory=list)
    minduration: Optional[int] = None
    maxduration: Optional[int] = None
    protocols: list[int] = field(default_factory=list)
    startdelay: Optional[int] = None
    ext: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Audio":
        return cls(
            mimes=data.get("mimes") or [],
            minduration=data.get("minduration"),
            maxduration=data.get("maxduration"),
            protocols=data.get("protocols") or [],
            startdelay=data.get("startdelay"),
            ext=data.get("ext") or {},
        )


@dataclass
class Native(OpenRTBObject):
    """Native impression (Section 3.2.9)."""

    request: str = ""
    ver: str = ""
    api: list[int] = field(default_factory=list)
    battr: list[int] = field(default_factory=list)
    ext: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Native":
        return cls(
            request=data.get("request") or "",
            ver=data.get("ver") or "",
            api=data.get("api") or [],
            battr=data.get("battr") or [],
            ext=data.get("ext") or {},
        )


@dataclass
class Imp(OpenRTBObject):
    """
    A single ad slot (Section 3.2.4).

    Attributes:
        id: Unique within the request; the join key for returned bids
        ext: Holds the bidder parameter blob under ext["bidder"]. May also be
             a raw JSON string or bytes when passed through unparsed.
    """

    id: str
    banner: Optional[Banner] = None
    video: Optional[Video] = None
    audio: Optional[Audio] = None
    native: Optional[Native] = None
    tagid: str = ""
    bidfloor: Optional[float] = None
    bidfloorcur: str = ""
    secure: Optional[int] = None
    instl: Optional[int] = None
    displaymanager: str = ""
    ext: Any = field(default_factory=dict)

    @property
    def media_types(self) -> list[str]:
        """Names of the populated media sub-objects."""
        return [
            name
            for name in ("banner", "video", "native", "audio")
            if getattr(self, name) is not None
        ]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Imp":
        banner = data.get("banner")
        video = data.get("video")
        audio = data.get("audio")
        native = data.get("native")
        return cls(
            id=data.get("id") or "",
            banner=Banner.from_dict(banner) if banner is not None else None,
            video=Video.from_dict(video) if video is not None else None,
            audio=Audio.from_dict(audio) if audio is not None else None,
            native=Native.from_dict(native) if native is not None else None,
            tagid=data.get("tagid") or "",
            bidfloor=data.get("bidfloor"),
            bidfloorcur=data.get("bidfloorcur") or "",
            secure=data.get("secure"),
            instl=data.get("instl"),
            displaymanager=data.get("displaymanager") or "",
            ext=data.get("ext") or {},
        )


@dataclass
class Publisher(OpenRTBObject):
    """Publisher of the site or app (Section 3.2.15)."""

    id: str = ""
    name: str = ""
    domain: str = ""
    ext: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Publisher":
        return cls(
            id=data.get("id") or "",
            name=data.get("name") or "",
            domain=data.get("domain") or "",
            ext=data.get("ext") or {},
        )


@dataclass
class Site(OpenRTBObject):
    """Website context (Section 3.2.13)."""

    id: str = ""
    name: str = ""
    domain: str = ""
    page: str = ""
    ref: str = ""
    cat: list[str] = field(default_factory=list)
    publisher: Optional[Publisher] = None
    ext: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Site":
        publisher = data.get("publisher")
        return cls(
            id=data.get("id") or "",
            name=data.get("name") or "",
            domain=data.get("domain") or "",
            page=data.get("page") or "",
            ref=data.get("ref") or "",
            cat=data.get("cat") or [],
            publisher=Publisher.from_dict(publisher) if publisher is not None else None,
            ext=data.get("ext") or {},
        )


@dataclass
class App(OpenRTBObject):
    """Application context (Section 3.2.14)."""

    id: str = ""
    name: str = ""
    bundle: str = ""
    domain: str = ""
    storeurl: str = ""
    ver: str = ""
    cat: list[str] = field(default_factory=list)
    publisher: Optional[Publisher] = None
    ext: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "App":
        publisher = data.get("publisher")
        return cls(
            id=data.get("id") or "",
            name=data.get("name") or "",
            bundle=data.get("bundle") or "",
            domain=data.get("domain") or "",
            storeurl=data.get("storeurl") or "",
            ver=data.get("ver") or "",
            cat=data.get("cat") or [],
            publisher=Publisher.from_dict(publisher) if publisher is not None else None,
            ext=data.get("ext") or {},
        )


@dataclass
class Device(OpenRTBObject):
    """Device context (Section 3.2.18)."""

    ua: str = ""
    ip: str = ""
    ipv6: str = ""
    language: str = ""
    dnt: Optional[int] = None
    lmt: Optional[int] = None
    devicetype: Optional[int] = None
    make: str = ""
    model: str = ""
    os: str = ""
    osv: str = ""
    ifa: str = ""
    geo: dict[str, Any] = field(default_factory=dict)
    ext: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Device":
        return cls(
            ua=data.get("ua") or "",
            ip=data.get("ip") or "",
            ipv6=data.get("ipv6") or "",
            language=data.get("language") or "",
            dnt=data.get("dnt"),
            lmt=data.get("lmt"),
            devicetype=data.get("devicetype"),
            make=data.get("make") or "",
            model=data.get("model") or "",
            os=data.get("os") or "",
            osv=data.get("osv") or "",
            ifa=data.get("ifa") or "",
            geo=data.get("geo") or {},
            ext=data.get("ext") or {},
        )


@dataclass
class User(OpenRTBObject):
    """User context (Section 3.2.20)."""

    id: str = ""
    buyeruid: str = ""
    yob: Optional[int] = None
    gender: str = ""
    ext: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "User":
        return cls(
            id=data.get("id") or "",
            buyeruid=data.get("buyeruid") or "",
            yob=data.get("yob"),
            gender=data.get("gender") or "",
            ext=data.get("ext") or {},
        )


@dataclass
class BidRequest(OpenRTBObject):
    """
    Canonical bid request (Section 3.2.1).

    Adapters receive this by reference and must treat it as read-only: every
    partner-specific rewrite is applied to a copy.
    """

    id: str
    imp: list[Imp] = field(default_factory=list)
    site: Optional[Site] = None
    app: Optional[App] = None
    device: Optional[Device] = None
    user: Optional[User] = None
    test: Optional[int] = None
    at: Optional[int] = None
    tmax: Optional[int] = None
    cur: list[str] = field(default_factory=list)
    bcat: list[str] = field(default_factory=list)
    badv: list[str] = field(default_factory=list)
    source: dict[str, Any] = field(default_factory=dict)
    regs: dict[str, Any] = field(default_factory=dict)
    ext: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BidRequest":
        site = data.get("site")
        app = data.get("app")
        device = data.get("device")
        user = data.get("user")
        return cls(
            id=data.get("id") or "",
            imp=[Imp.from_dict(imp) for imp in data.get("imp") or []],
            site=Site.from_dict(site) if site is not None else None,
            app=App.from_dict(app) if app is not None else None,
            device=Device.from_dict(device) if device is not None else None,
            user=User.from_dict(user) if user is not None else None,
            test=data.get("test"),
            at=data.get("at"),
            tmax=data.get("tmax"),
            cur=data.get("cur") or [],
            bcat=data.get("bcat") or [],
            badv=data.get("badv") or [],
            source=data.get("source") or {},
            regs=data.get("regs") or {},
            ext=data.get("ext") or {},
        )


@dataclass(frozen=True)
class Bid(OpenRTBObject):
    """
    A partner's offer for one impression (Section 4.2.3).

    Frozen: a decoded bid is never modified, only replaced.
    """

    id: str = ""
    impid: str = ""
    price: float = 0.0
    adm: str = ""
    nurl: str = ""
    burl: str = ""
    adid: str = ""
    crid: str = ""
    cid: str = ""
    adomain: tuple[str, ...] = ()
    dealid: str = ""
    w: Optional[int] = None
    h: Optional[int] = None
    ext: Any = None

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result.pop("adomain", None)
        if self.adomain:
            result["adomain"] = list(self.adomain)
        # price 0 is a legal (if useless) bid
        result["price"] = self.price
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Bid":
        adomain = data.get("adomain") or ()
        if isinstance(adomain, str):
            adomain = (adomain,)
        return cls(
            id=data.get("id") or "",
            impid=data.get("impid") or "",
            price=float(data.get("price", 0.0)),
            adm=data.get("adm") or "",
            nurl=data.get("nurl") or "",
            burl=data.get("burl") or "",
            adid=data.get("adid") or "",
            crid=data.get("crid") or "",
            cid=data.get("cid") or "",
            adomain=tuple(adomain),
            dealid=data.get("dealid") or "",
            w=data.get("w"),
            h=data.get("h"),
            ext=data.get("ext"),
        )


@dataclass
class SeatBid(OpenRTBObject):
    """Bids grouped by buyer seat (Section 4.2.2)."""

    bid: list[Bid] = field(default_factory=list)
    seat: str = ""
    group: Optional[int] = None
    ext: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SeatBid":
        return cls(
            bid=[Bid.from_dict(b) for b in data.get("bid") or []],
            seat=data.get("seat") or "",
            group=data.get("group"),
            ext=data.get("ext") or {},
        )


@dataclass
class BidResponse(OpenRTBObject):
    """Partner bid response (Section 4.2.1)."""

    id: str = ""
    seatbid: list[SeatBid] = field(default_factory=list)
    bidid: str = ""
    cur: str = ""
    nbr: Optional[int] = None
    ext: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BidResponse":
        return cls(
            id=data.get("id") or "",
            seatbid=[SeatBid.from_dict(sb) for sb in data.get("seatbid") or []],
            bidid=data.get("bidid") or "",
            cur=data.get("cur") or "",
            nbr=data.get("nbr"),
            ext=data.get("ext") or {},
        )
