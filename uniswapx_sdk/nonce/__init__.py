"""
Permit2 nonce bitmap helpers and allocation.
"""

from uniswapx_sdk.nonce.bitmap import (
    NO_UNSET_BIT,
    WORD_SIZE,
    CancelParams,
    build_nonce,
    get_cancel_multiple_params,
    get_cancel_single_params,
    get_first_unset_bit,
    is_bit_set,
    set_bit,
    split_nonce,
)
from uniswapx_sdk.nonce.manager import NonceManager

__all__ = [
    # Constants
    "WORD_SIZE",
    "NO_UNSET_BIT",
    # Bitmap
    "split_nonce",
    "build_nonce",
    "get_first_unset_bit",
    "set_bit",
    "is_bit_set",
    # Cancellation
    "CancelParams",
    "get_cancel_single_params",
    "get_cancel_multiple_params",
    # Manager
    "NonceManager",
]
