"""Bidder parameter extensions carried in imp.ext."""

from .params import (
    SovrnParams,
    SovrnXspParams,
    VerizonMediaParams,
    decode_imp_ext,
    extract_bidder_ext,
    parse_imp_params,
)

__all__ = [
    "SovrnParams",
    "SovrnXspParams",
    "VerizonMediaParams",
    "decode_imp_ext",
    "extract_bidder_ext",
    "parse_imp_params",
]
