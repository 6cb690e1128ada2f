"""
Order variant models and value objects.

Contains order headers, per-variant payloads, resolution results and
the closed Order union with its dispatch helpers.
"""

from uniswapx_sdk.core.domain.dutch import DutchInput, DutchOrder, DutchOutput
from uniswapx_sdk.core.domain.order import (
    COSIGNED_ORDER_CLASSES,
    ORDER_CLASSES,
    UNISWAPX_ORDER_CLASSES,
    CosignedOrder,
    Order,
    PriorityOrder,
    UniswapXOrder,
    V2DutchOrder,
    V3DutchOrder,
    check_submittable,
    ensure_order,
    get_order_type,
    is_cosigned,
    is_limit_order,
    order_from_json,
    order_to_json,
    with_non_fee_recipient,
)
from uniswapx_sdk.core.domain.order_info import (
    OrderInfo,
    RelayOrderInfo,
    ResolutionContext,
    ResolvedOrder,
    ResolvedRelayOrder,
    TokenAmount,
)
from uniswapx_sdk.core.domain.priority import (
    CosignedPriorityOrder,
    PriorityCosignerData,
    PriorityInput,
    PriorityOutput,
    UnsignedPriorityOrder,
)
from uniswapx_sdk.core.domain.relay import RelayFee, RelayInput, RelayOrder
from uniswapx_sdk.core.domain.resolution import block_overrides, original_if_zero, resolve_order
from uniswapx_sdk.core.domain.types import Address, HexData, Int256, OrderModel, Uint256
from uniswapx_sdk.core.domain.v2_dutch import (
    CosignedV2DutchOrder,
    UnsignedV2DutchOrder,
    V2CosignerData,
)
from uniswapx_sdk.core.domain.v3_dutch import (
    CosignedV3DutchOrder,
    NonlinearDutchDecay,
    UnsignedV3DutchOrder,
    V3CosignerData,
    V3DutchInput,
    V3DutchOutput,
)

__all__ = [
    # Primitive types
    "Address",
    "HexData",
    "Int256",
    "Uint256",
    "OrderModel",
    # Headers and resolution
    "OrderInfo",
    "RelayOrderInfo",
    "ResolutionContext",
    "ResolvedOrder",
    "ResolvedRelayOrder",
    "TokenAmount",
    # Dutch
    "DutchInput",
    "DutchOutput",
    "DutchOrder",
    # V2 Dutch
    "V2CosignerData",
    "UnsignedV2DutchOrder",
    "CosignedV2DutchOrder",
    # V3 Dutch
    "NonlinearDutchDecay",
    "V3DutchInput",
    "V3DutchOutput",
    "V3CosignerData",
    "UnsignedV3DutchOrder",
    "CosignedV3DutchOrder",
    # Priority
    "PriorityInput",
    "PriorityOutput",
    "PriorityCosignerData",
    "UnsignedPriorityOrder",
    "CosignedPriorityOrder",
    # Relay
    "RelayInput",
    "RelayFee",
    "RelayOrder",
    # Order union
    "Order",
    "UniswapXOrder",
    "CosignedOrder",
    "V2DutchOrder",
    "V3DutchOrder",
    "PriorityOrder",
    "ORDER_CLASSES",
    "UNISWAPX_ORDER_CLASSES",
    "COSIGNED_ORDER_CLASSES",
    "ensure_order",
    "get_order_type",
    "is_cosigned",
    "is_limit_order",
    "check_submittable",
    "with_non_fee_recipient",
    "order_to_json",
    "order_from_json",
    # Resolution
    "resolve_order",
    "block_overrides",
    "original_if_zero",
]
