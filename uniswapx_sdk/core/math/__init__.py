"""
Decay and curve math для UniswapX ордеров

Целочисленные примитивы, совпадающие бит-в-бит с settlement-контрактами.
"""

# Linear decay (time / block) и exclusivity override
from uniswapx_sdk.core.math.decay import (
    apply_exclusivity_override,
    get_decayed_amount,
    linear_block_decay,
)

# Nonlinear block curve (V3)
from uniswapx_sdk.core.math.block_curve import (
    MAX_CURVE_POINTS,
    RELATIVE_BLOCK_BITS,
    decode_relative_blocks,
    encode_relative_blocks,
    get_block_decayed_amount,
    get_end_amount,
    get_max_amount_out,
)

# Priority fee scaling
from uniswapx_sdk.core.math.priority import scale_input, scale_output

__all__ = [
    # Linear decay
    "get_decayed_amount",
    "linear_block_decay",
    "apply_exclusivity_override",
    # Block curve — Constants
    "MAX_CURVE_POINTS",
    "RELATIVE_BLOCK_BITS",
    # Block curve — Functions
    "encode_relative_blocks",
    "decode_relative_blocks",
    "get_block_decayed_amount",
    "get_end_amount",
    "get_max_amount_out",
    # Priority scaling
    "scale_input",
    "scale_output",
]
