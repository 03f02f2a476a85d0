"""
IPv4 Arithmetic Module

Provides binary/dotted-decimal conversion, subnet range calculation
and subnet mask to CIDR encoding.
"""

from cidrkit.ip.errors import (
    AddressError,
    InvalidInputError,
    InvalidMaskError,
    InvalidPrefixError,
)
from cidrkit.ip.core import (
    SubnetRange,
    RangeResult,
    BinaryAddressDecoder,
    SubnetRangeCalculator,
    MaskToCidrEncoder,
    decode_binary,
    encode_address,
    compute_range,
    compute_ranges,
    to_cidr,
    mask_to_prefix,
    prefix_to_mask,
)

__all__ = [
    "AddressError",
    "InvalidInputError",
    "InvalidMaskError",
    "InvalidPrefixError",
    "SubnetRange",
    "RangeResult",
    "BinaryAddressDecoder",
    "SubnetRangeCalculator",
    "MaskToCidrEncoder",
    "decode_binary",
    "encode_address",
    "compute_range",
    "compute_ranges",
    "to_cidr",
    "mask_to_prefix",
    "prefix_to_mask",
]
