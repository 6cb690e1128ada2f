"""
Order validation: simulated-settlement outcome classification and quoting.
"""

from uniswapx_sdk.validation.exclusive_filler import (
    NONE_VALIDATION,
    CustomOrderValidation,
    ExclusiveFillerData,
    ValidationInfo,
    ValidationType,
    encode_exclusive_filler_data,
    parse_exclusive_filler_data,
    parse_validation,
)
from uniswapx_sdk.validation.outcomes import (
    BASIC_ERROR,
    KNOWN_ERRORS,
    OrderValidation,
    classify_revert,
    revert_text,
)
from uniswapx_sdk.validation.quoter import (
    QUOTE_SELECTOR,
    RELAY_EXECUTE_SELECTOR,
    OrderQuote,
    OrderQuoter,
    RelayOrderQuoter,
    SignedOrder,
)

__all__ = [
    # Outcomes
    "OrderValidation",
    "BASIC_ERROR",
    "KNOWN_ERRORS",
    "classify_revert",
    "revert_text",
    # Exclusive filler validation
    "ValidationType",
    "ExclusiveFillerData",
    "CustomOrderValidation",
    "ValidationInfo",
    "NONE_VALIDATION",
    "parse_exclusive_filler_data",
    "parse_validation",
    "encode_exclusive_filler_data",
    # Quoters
    "SignedOrder",
    "OrderQuote",
    "OrderQuoter",
    "RelayOrderQuoter",
    "QUOTE_SELECTOR",
    "RELAY_EXECUTE_SELECTOR",
]
