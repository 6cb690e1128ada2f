"""
Binary codec: canonical on-chain tuple layouts per order variant.
"""

from uniswapx_sdk.core.codec.abi import (
    DUTCH_ORDER_ABI,
    ORDER_ABI,
    ORDER_INFO_ABI,
    PRIORITY_COSIGNER_DATA_ABI,
    PRIORITY_ORDER_ABI,
    RELAY_ORDER_ABI,
    V2_COSIGNER_DATA_ABI,
    V2_DUTCH_ORDER_ABI,
    V3_COSIGNER_DATA_ABI,
    V3_DUTCH_ORDER_ABI,
    decode_order,
    encode_cosigner_data,
    encode_order,
    serialize_order,
)

__all__ = [
    # Layouts
    "ORDER_INFO_ABI",
    "DUTCH_ORDER_ABI",
    "V2_DUTCH_ORDER_ABI",
    "V2_COSIGNER_DATA_ABI",
    "V3_DUTCH_ORDER_ABI",
    "V3_COSIGNER_DATA_ABI",
    "PRIORITY_ORDER_ABI",
    "PRIORITY_COSIGNER_DATA_ABI",
    "RELAY_ORDER_ABI",
    "ORDER_ABI",
    # Functions
    "encode_order",
    "serialize_order",
    "decode_order",
    "encode_cosigner_data",
]
