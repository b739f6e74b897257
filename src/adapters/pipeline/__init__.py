"""
Shared request/response pipeline.

shaper -> envelope -> (transport) -> normalizer -> media_type
"""

from .envelope import build_envelope, build_headers, serialize_request
from .media_type import explicit_media_type, media_type_for_imp, resolve_media_type
from .normalizer import normalize_response
from .shaper import ShapedRequest, normalize_banner_size, shape_requests

__all__ = [
    "ShapedRequest",
    "build_envelope",
    "build_headers",
    "explicit_media_type",
    "media_type_for_imp",
    "normalize_banner_size",
    "normalize_response",
    "resolve_media_type",
    "serialize_request",
    "shape_requests",
]
