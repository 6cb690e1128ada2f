"""
EIP-712 — signing-domain схемы ордеров и Permit2 witness данные

Swapper подписывает Permit2 PermitWitnessTransferFrom, где witness — структура
ордера (ExclusiveDutchOrder, V2DutchOrder, V3DutchOrder, PriorityOrder, RelayOrder).
Order hash = EIP-712 struct hash witness-а; домен Permit2 параметризован chain id
и адресом Permit2.

Relay использует batch-форму (input и fee — два permitted токена).
"""

from typing import Any, Dict, List, Tuple

from eth_account.messages import SignableMessage, encode_typed_data
from eth_utils import keccak

from uniswapx_sdk.config.chains import ChainConfig
from uniswapx_sdk.config.constants import PERMIT2_DOMAIN_NAME
from uniswapx_sdk.core.math.block_curve import encode_relative_blocks
from uniswapx_sdk.core.domain.dutch import DutchOrder
from uniswapx_sdk.core.domain.order import Order, ensure_order
from uniswapx_sdk.core.domain.order_info import OrderInfo
from uniswapx_sdk.core.domain.priority import CosignedPriorityOrder, UnsignedPriorityOrder
from uniswapx_sdk.core.domain.relay import RelayOrder
from uniswapx_sdk.core.domain.types import hex_to_bytes
from uniswapx_sdk.core.domain.v2_dutch import CosignedV2DutchOrder, UnsignedV2DutchOrder
from uniswapx_sdk.core.domain.v3_dutch import (
    CosignedV3DutchOrder,
    NonlinearDutchDecay,
    UnsignedV3DutchOrder,
)

TypeFields = List[Dict[str, str]]


# =============================================================================
# TYPES
# =============================================================================
ORDER_INFO_TYPE: TypeFields = [
    {"name": "reactor", "type": "address"},
    {"name": "swapper", "type": "address"},
    {"name": "nonce", "type": "uint256"},
    {"name": "deadline", "type": "uint256"},
    {"name": "additionalValidationContract", "type": "address"},
    {"name": "additionalValidationData", "type": "bytes"},
]

DUTCH_OUTPUT_TYPE: TypeFields = [
    {"name": "token", "type": "address"},
    {"name": "startAmount", "type": "uint256"},
    {"name": "endAmount", "type": "uint256"},
    {"name": "recipient", "type": "address"},
]

DUTCH_ORDER_TYPES: Dict[str, TypeFields] = {
    "ExclusiveDutchOrder": [
        {"name": "info", "type": "OrderInfo"},
        {"name": "decayStartTime", "type": "uint256"},
        {"name": "decayEndTime", "type": "uint256"},
        {"name": "exclusiveFiller", "type": "address"},
        {"name": "exclusivityOverrideBps", "type": "uint256"},
        {"name": "inputToken", "type": "address"},
        {"name": "inputStartAmount", "type": "uint256"},
        {"name": "inputEndAmount", "type": "uint256"},
        {"name": "outputs", "type": "DutchOutput[]"},
    ],
    "OrderInfo": ORDER_INFO_TYPE,
    "DutchOutput": DUTCH_OUTPUT_TYPE,
}

V2_DUTCH_ORDER_TYPES: Dict[str, TypeFields] = {
    "V2DutchOrder": [
        {"name": "info", "type": "OrderInfo"},
        {"name": "cosigner", "type": "address"},
        {"name": "baseInputToken", "type": "address"},
        {"name": "baseInputStartAmount", "type": "uint256"},
        {"name": "baseInputEndAmount", "type": "uint256"},
        {"name": "baseOutputs", "type": "DutchOutput[]"},
    ],
    "OrderInfo": ORDER_INFO_TYPE,
    "DutchOutput": DUTCH_OUTPUT_TYPE,
}

V3_DUTCH_ORDER_TYPES: Dict[str, TypeFields] = {
    "V3DutchOrder": [
        {"name": "info", "type": "OrderInfo"},
        {"name": "cosigner", "type": "address"},
        {"name": "startingBaseFee", "type": "uint256"},
        {"name": "baseInput", "type": "V3DutchInput"},
        {"name": "baseOutputs", "type": "V3DutchOutput[]"},
    ],
    "OrderInfo": ORDER_INFO_TYPE,
    "V3DutchInput": [
        {"name": "token", "type": "address"},
        {"name": "startAmount", "type": "uint256"},
        {"name": "curve", "type": "NonlinearDutchDecay"},
        {"name": "maxAmount", "type": "uint256"},
        {"name": "adjustmentPerGweiBaseFee", "type": "uint256"},
    ],
    "V3DutchOutput": [
        {"name": "token", "type": "address"},
        {"name": "startAmount", "type": "uint256"},
        {"name": "curve", "type": "NonlinearDutchDecay"},
        {"name": "recipient", "type": "address"},
        {"name": "minAmount", "type": "uint256"},
        {"name": "adjustmentPerGweiBaseFee", "type": "uint256"},
    ],
    "NonlinearDutchDecay": [
        {"name": "relativeBlocks", "type": "uint256"},
        {"name": "relativeAmounts", "type": "int256[]"},
    ],
}

PRIORITY_ORDER_TYPES: Dict[str, TypeFields] = {
    "PriorityOrder": [
        {"name": "info", "type": "OrderInfo"},
        {"name": "cosigner", "type": "address"},
        {"name": "auctionStartBlock", "type": "uint256"},
        {"name": "baselinePriorityFeeWei", "type": "uint256"},
        {"name": "input", "type": "PriorityInput"},
        {"name": "outputs", "type": "PriorityOutput[]"},
    ],
    "OrderInfo": ORDER_INFO_TYPE,
    "PriorityInput": [
        {"name": "token", "type": "address"},
        {"name": "amount", "type": "uint256"},
        {"name": "mpsPerPriorityFeeWei", "type": "uint256"},
    ],
    "PriorityOutput": [
        {"name": "token", "type": "address"},
        {"name": "amount", "type": "uint256"},
        {"name": "mpsPerPriorityFeeWei", "type": "uint256"},
        {"name": "recipient", "type": "address"},
    ],
}

RELAY_ORDER_TYPES: Dict[str, TypeFields] = {
    "RelayOrder": [
        {"name": "info", "type": "RelayOrderInfo"},
        {"name": "input", "type": "Input"},
        {"name": "fee", "type": "FeeEscalator"},
        {"name": "universalRouterCalldata", "type": "bytes"},
    ],
    "RelayOrderInfo": [
        {"name": "reactor", "type": "address"},
        {"name": "swapper", "type": "address"},
        {"name": "nonce", "type": "uint256"},
        {"name": "deadline", "type": "uint256"},
    ],
    "Input": [
        {"name": "token", "type": "address"},
        {"name": "amount", "type": "uint256"},
        {"name": "recipient", "type": "address"},
    ],
    "FeeEscalator": [
        {"name": "token", "type": "address"},
        {"name": "startAmount", "type": "uint256"},
        {"name": "endAmount", "type": "uint256"},
        {"name": "startTime", "type": "uint256"},
        {"name": "endTime", "type": "uint256"},
    ],
}

TOKEN_PERMISSIONS_TYPE: TypeFields = [
    {"name": "token", "type": "address"},
    {"name": "amount", "type": "uint256"},
]


def _permit_witness_types(witness_type_name: str, batch: bool) -> Dict[str, TypeFields]:
    primary = "PermitBatchWitnessTransferFrom" if batch else "PermitWitnessTransferFrom"
    permitted = "TokenPermissions[]" if batch else "TokenPermissions"
    return {
        primary: [
            {"name": "permitted", "type": permitted},
            {"name": "spender", "type": "address"},
            {"name": "nonce", "type": "uint256"},
            {"name": "deadline", "type": "uint256"},
            {"name": "witness", "type": witness_type_name},
        ],
        "TokenPermissions": TOKEN_PERMISSIONS_TYPE,
    }


# =============================================================================
# WITNESS
# =============================================================================


def _order_info_message(info: OrderInfo) -> Dict[str, Any]:
    return {
        "reactor": info.reactor,
        "swapper": info.swapper,
        "nonce": info.nonce,
        "deadline": info.deadline,
        "additionalValidationContract": info.additional_validation_contract,
        "additionalValidationData": hex_to_bytes(info.additional_validation_data),
    }


def _curve_message(curve: NonlinearDutchDecay) -> Dict[str, Any]:
    return {
        "relativeBlocks": encode_relative_blocks(curve.relative_blocks),
        "relativeAmounts": list(curve.relative_amounts),
    }


def _dutch_outputs_message(outputs: list) -> List[Dict[str, Any]]:
    return [
        {
            "token": o.token,
            "startAmount": o.start_amount,
            "endAmount": o.end_amount,
            "recipient": o.recipient,
        }
        for o in outputs
    ]


def witness(order: Order) -> Tuple[str, Dict[str, TypeFields], Dict[str, Any]]:
    """
    Witness ордера: (имя типа, EIP-712 типы, значения).

    Cosigned и unsigned формы имеют один witness: cosigner data в него не входит.
    """
    ensure_order(order)
    if isinstance(order, DutchOrder):
        return (
            "ExclusiveDutchOrder",
            DUTCH_ORDER_TYPES,
            {
                "info": _order_info_message(order.info),
                "decayStartTime": order.decay_start_time,
                "decayEndTime": order.decay_end_time,
                "exclusiveFiller": order.exclusive_filler,
                "exclusivityOverrideBps": order.exclusivity_override_bps,
                "inputToken": order.input.token,
                "inputStartAmount": order.input.start_amount,
                "inputEndAmount": order.input.end_amount,
                "outputs": _dutch_outputs_message(order.outputs),
            },
        )
    if isinstance(order, (UnsignedV2DutchOrder, CosignedV2DutchOrder)):
        return (
            "V2DutchOrder",
            V2_DUTCH_ORDER_TYPES,
            {
                "info": _order_info_message(order.info),
                "cosigner": order.cosigner,
                "baseInputToken": order.input.token,
                "baseInputStartAmount": order.input.start_amount,
                "baseInputEndAmount": order.input.end_amount,
                "baseOutputs": _dutch_outputs_message(order.outputs),
            },
        )
    if isinstance(order, (UnsignedV3DutchOrder, CosignedV3DutchOrder)):
        return (
            "V3DutchOrder",
            V3_DUTCH_ORDER_TYPES,
            {
                "info": _order_info_message(order.info),
                "cosigner": order.cosigner,
                "startingBaseFee": order.starting_base_fee,
                "baseInput": {
                    "token": order.input.token,
                    "startAmount": order.input.start_amount,
                    "curve": _curve_message(order.input.curve),
                    "maxAmount": order.input.max_amount,
                    "adjustmentPerGweiBaseFee": order.input.adjustment_per_gwei_base_fee,
                },
                "baseOutputs": [
                    {
                        "token": o.token,
                        "startAmount": o.start_amount,
                        "curve": _curve_message(o.curve),
                        "recipient": o.recipient,
                        "minAmount": o.min_amount,
                        "adjustmentPerGweiBaseFee": o.adjustment_per_gwei_base_fee,
                    }
                    for o in order.outputs
                ],
            },
        )
    if isinstance(order, (UnsignedPriorityOrder, CosignedPriorityOrder)):
        return (
            "PriorityOrder",
            PRIORITY_ORDER_TYPES,
            {
                "info": _order_info_message(order.info),
                "cosigner": order.cosigner,
                "auctionStartBlock": order.auction_start_block,
                "baselinePriorityFeeWei": order.baseline_priority_fee_wei,
                "input": {
                    "token": order.input.token,
                    "amount": order.input.amount,
                    "mpsPerPriorityFeeWei": order.input.mps_per_priority_fee_wei,
                },
                "outputs": [
                    {
                        "token": o.token,
                        "amount": o.amount,
                        "mpsPerPriorityFeeWei": o.mps_per_priority_fee_wei,
                        "recipient": o.recipient,
                    }
                    for o in order.outputs
                ],
            },
        )
    if isinstance(order, RelayOrder):
        return (
            "RelayOrder",
            RELAY_ORDER_TYPES,
            {
                "info": {
                    "reactor": order.info.reactor,
                    "swapper": order.info.swapper,
                    "nonce": order.info.nonce,
                    "deadline": order.info.deadline,
                },
                "input": {
                    "token": order.input.token,
                    "amount": order.input.amount,
                    "recipient": order.input.recipient,
                },
                "fee": {
                    "token": order.fee.token,
                    "startAmount": order.fee.start_amount,
                    "endAmount": order.fee.end_amount,
                    "startTime": order.fee.start_time,
                    "endTime": order.fee.end_time,
                },
                "universalRouterCalldata": hex_to_bytes(order.universal_router_calldata),
            },
        )
    raise TypeError(f"Unsupported order variant: {type(order).__name__}")


def order_hash(order: Order) -> bytes:
    """
    Order hash: EIP-712 struct hash witness-а (без домена).

    Returns:
        32 байта
    """
    _, types, message = witness(order)
    # struct hash не зависит от домена, домен нужен только для encode_typed_data
    signable = encode_typed_data(
        domain_data={"name": PERMIT2_DOMAIN_NAME},
        message_types=types,
        message_data=message,
    )
    return bytes(signable.body)


# =============================================================================
# PERMIT2
# =============================================================================


def _permitted(order: Order) -> Any:
    if isinstance(order, RelayOrder):
        return [
            {"token": order.input.token, "amount": order.input.amount},
            {"token": order.fee.token, "amount": order.fee.end_amount},
        ]
    if isinstance(order, (DutchOrder, UnsignedV2DutchOrder, CosignedV2DutchOrder)):
        amount = order.input.end_amount
    elif isinstance(order, (UnsignedV3DutchOrder, CosignedV3DutchOrder)):
        amount = order.input.max_amount
    elif isinstance(order, (UnsignedPriorityOrder, CosignedPriorityOrder)):
        amount = order.input.amount
    else:
        raise TypeError(f"Unsupported order variant: {type(order).__name__}")
    return {"token": order.input.token, "amount": amount}


def permit_data(order: Order, chain_config: ChainConfig) -> Dict[str, Any]:
    """
    Полные EIP-712 данные для подписи swapper.

    Returns:
        {"domain": ..., "types": ..., "values": ...}

    Raises:
        MissingConfiguration: Permit2 не задан для сети
    """
    witness_type_name, witness_types, witness_values = witness(order)
    batch = isinstance(order, RelayOrder)
    types = _permit_witness_types(witness_type_name, batch)
    types.update(witness_types)
    return {
        "domain": {
            "name": PERMIT2_DOMAIN_NAME,
            "chainId": chain_config.chain_id,
            "verifyingContract": chain_config.get_permit2(),
        },
        "types": types,
        "values": {
            "permitted": _permitted(order),
            "spender": order.info.reactor,
            "nonce": order.info.nonce,
            "deadline": order.info.deadline,
            "witness": witness_values,
        },
    }


def signable_message(order: Order, chain_config: ChainConfig) -> SignableMessage:
    data = permit_data(order, chain_config)
    return encode_typed_data(
        domain_data=data["domain"],
        message_types=data["types"],
        message_data=data["values"],
    )


def signing_digest(order: Order, chain_config: ChainConfig) -> bytes:
    """Digest, который подписывает swapper: keccak(0x19 ‖ 0x01 ‖ domainSeparator ‖ hashStruct)."""
    signable = signable_message(order, chain_config)
    return keccak(b"\x19" + signable.version + signable.header + signable.body)
