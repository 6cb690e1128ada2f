"""
Order type discrimination from raw encoded bytes.
"""

from uniswapx_sdk.discriminator.parser import (
    ORDER_INFO_OFFSET,
    OrderParser,
    get_order_type_from_encoded,
    parse_order,
    parse_order_json,
    read_reactor,
)

__all__ = [
    "ORDER_INFO_OFFSET",
    "OrderParser",
    "read_reactor",
    "get_order_type_from_encoded",
    "parse_order",
    "parse_order_json",
]
