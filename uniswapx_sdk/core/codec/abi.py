"""
ABI Codec — кодирование ордеров в каноническую on-chain раскладку

Каждый вариант кодируется как один tuple, порядок и вложенность полей совпадают
со структурами reactor-контрактов. Любое отклонение ломает декодирование on-chain.

Unsigned формы V2/V3/Priority кодируются с cosigner data по умолчанию и пустой
cosignature; при декодировании пустая cosignature → unsigned вариант.
"""

from typing import Any, Dict, List, Tuple

from eth_abi import decode as abi_decode
from eth_abi import encode as abi_encode
from eth_abi.exceptions import DecodingError
from pydantic import ValidationError

from uniswapx_sdk.config.constants import ZERO_ADDRESS, OrderType
from uniswapx_sdk.core.domain.dutch import DutchInput, DutchOrder, DutchOutput
from uniswapx_sdk.core.domain.order import Order, ensure_order
from uniswapx_sdk.core.domain.order_info import OrderInfo, RelayOrderInfo
from uniswapx_sdk.core.domain.priority import (
    CosignedPriorityOrder,
    PriorityCosignerData,
    PriorityInput,
    PriorityOutput,
    UnsignedPriorityOrder,
)
from uniswapx_sdk.core.domain.relay import RelayFee, RelayInput, RelayOrder
from uniswapx_sdk.core.domain.types import bytes_to_hex, hex_to_bytes
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
from uniswapx_sdk.core.errors import InvalidDecayCurve, OrderDecodeError
from uniswapx_sdk.core.math.block_curve import decode_relative_blocks, encode_relative_blocks


# =============================================================================
# LAYOUTS
# =============================================================================
ORDER_INFO_ABI = "(address,address,uint256,uint256,address,bytes)"
RELAY_ORDER_INFO_ABI = "(address,address,uint256,uint256)"

DUTCH_INPUT_ABI = "(address,uint256,uint256)"
DUTCH_OUTPUT_ABI = "(address,uint256,uint256,address)"

DUTCH_ORDER_ABI = (
    f"({ORDER_INFO_ABI},uint256,uint256,address,uint256,{DUTCH_INPUT_ABI},{DUTCH_OUTPUT_ABI}[])"
)

V2_COSIGNER_DATA_ABI = "(uint256,uint256,address,uint256,uint256,uint256[])"
V2_DUTCH_ORDER_ABI = (
    f"({ORDER_INFO_ABI},address,{DUTCH_INPUT_ABI},{DUTCH_OUTPUT_ABI}[],"
    f"{V2_COSIGNER_DATA_ABI},bytes)"
)

CURVE_ABI = "(uint256,int256[])"
V3_INPUT_ABI = f"(address,uint256,{CURVE_ABI},uint256,uint256)"
V3_OUTPUT_ABI = f"(address,uint256,{CURVE_ABI},address,uint256,uint256)"
V3_COSIGNER_DATA_ABI = "(uint256,address,uint256,uint256,uint256[])"
V3_DUTCH_ORDER_ABI = (
    f"({ORDER_INFO_ABI},address,uint256,{V3_INPUT_ABI},{V3_OUTPUT_ABI}[],"
    f"{V3_COSIGNER_DATA_ABI},bytes)"
)

PRIORITY_INPUT_ABI = "(address,uint256,uint256)"
PRIORITY_OUTPUT_ABI = "(address,uint256,uint256,address)"
PRIORITY_COSIGNER_DATA_ABI = "(uint256)"
PRIORITY_ORDER_ABI = (
    f"({ORDER_INFO_ABI},address,uint256,uint256,{PRIORITY_INPUT_ABI},{PRIORITY_OUTPUT_ABI}[],"
    f"{PRIORITY_COSIGNER_DATA_ABI},bytes)"
)

RELAY_ORDER_ABI = (
    f"({RELAY_ORDER_INFO_ABI},(address,uint256,address),"
    "(address,uint256,uint256,uint256,uint256),bytes)"
)

ORDER_ABI: Dict[OrderType, str] = {
    OrderType.DUTCH: DUTCH_ORDER_ABI,
    OrderType.LIMIT: DUTCH_ORDER_ABI,
    OrderType.DUTCH_V2: V2_DUTCH_ORDER_ABI,
    OrderType.DUTCH_V3: V3_DUTCH_ORDER_ABI,
    OrderType.PRIORITY: PRIORITY_ORDER_ABI,
    OrderType.RELAY: RELAY_ORDER_ABI,
}

# cosigner data для unsigned форм (контракт ожидает непустой outputOverrides)
_DEFAULT_V2_COSIGNER_DATA: Tuple = (0, 0, ZERO_ADDRESS, 0, 0, [0])
_DEFAULT_V3_COSIGNER_DATA: Tuple = (0, ZERO_ADDRESS, 0, 0, [0])
_DEFAULT_PRIORITY_COSIGNER_DATA: Tuple = (0,)
_EMPTY_COSIGNATURE: bytes = b""


# =============================================================================
# ENCODING HELPERS
# =============================================================================


def _order_info_values(info: OrderInfo) -> Tuple:
    return (
        info.reactor,
        info.swapper,
        info.nonce,
        info.deadline,
        info.additional_validation_contract,
        hex_to_bytes(info.additional_validation_data),
    )


def _curve_values(curve: NonlinearDutchDecay) -> Tuple:
    return (encode_relative_blocks(curve.relative_blocks), list(curve.relative_amounts))


def v2_cosigner_data_values(data: V2CosignerData) -> Tuple:
    return (
        data.decay_start_time,
        data.decay_end_time,
        data.exclusive_filler,
        data.exclusivity_override_bps,
        data.input_override,
        list(data.output_overrides),
    )


def v3_cosigner_data_values(data: V3CosignerData) -> Tuple:
    return (
        data.decay_start_block,
        data.exclusive_filler,
        data.exclusivity_override_bps,
        data.input_override,
        list(data.output_overrides),
    )


def priority_cosigner_data_values(data: PriorityCosignerData) -> Tuple:
    return (data.auction_target_block,)


def encode_cosigner_data(data: Any) -> bytes:
    """ABI-кодирование cosigner data (входит в cosignature hash)."""
    if isinstance(data, V2CosignerData):
        return abi_encode([V2_COSIGNER_DATA_ABI], [v2_cosigner_data_values(data)])
    if isinstance(data, V3CosignerData):
        return abi_encode([V3_COSIGNER_DATA_ABI], [v3_cosigner_data_values(data)])
    if isinstance(data, PriorityCosignerData):
        return abi_encode([PRIORITY_COSIGNER_DATA_ABI], [priority_cosigner_data_values(data)])
    raise TypeError(f"Unsupported cosigner data: {type(data).__name__}")


def _dutch_values(order: DutchOrder) -> Tuple:
    return (
        _order_info_values(order.info),
        order.decay_start_time,
        order.decay_end_time,
        order.exclusive_filler,
        order.exclusivity_override_bps,
        (order.input.token, order.input.start_amount, order.input.end_amount),
        [(o.token, o.start_amount, o.end_amount, o.recipient) for o in order.outputs],
    )


def _v2_values(order: Any) -> Tuple:
    if isinstance(order, CosignedV2DutchOrder):
        cosigner_data = v2_cosigner_data_values(order.cosigner_data)
        cosignature = hex_to_bytes(order.cosignature)
    else:
        cosigner_data = _DEFAULT_V2_COSIGNER_DATA
        cosignature = _EMPTY_COSIGNATURE
    return (
        _order_info_values(order.info),
        order.cosigner,
        (order.input.token, order.input.start_amount, order.input.end_amount),
        [(o.token, o.start_amount, o.end_amount, o.recipient) for o in order.outputs],
        cosigner_data,
        cosignature,
    )


def _v3_values(order: Any) -> Tuple:
    if isinstance(order, CosignedV3DutchOrder):
        cosigner_data = v3_cosigner_data_values(order.cosigner_data)
        cosignature = hex_to_bytes(order.cosignature)
    else:
        cosigner_data = _DEFAULT_V3_COSIGNER_DATA
        cosignature = _EMPTY_COSIGNATURE
    return (
        _order_info_values(order.info),
        order.cosigner,
        order.starting_base_fee,
        (
            order.input.token,
            order.input.start_amount,
            _curve_values(order.input.curve),
            order.input.max_amount,
            order.input.adjustment_per_gwei_base_fee,
        ),
        [
            (
                o.token,
                o.start_amount,
                _curve_values(o.curve),
                o.recipient,
                o.min_amount,
                o.adjustment_per_gwei_base_fee,
            )
            for o in order.outputs
        ],
        cosigner_data,
        cosignature,
    )


def _priority_values(order: Any) -> Tuple:
    if isinstance(order, CosignedPriorityOrder):
        cosigner_data = priority_cosigner_data_values(order.cosigner_data)
        cosignature = hex_to_bytes(order.cosignature)
    else:
        cosigner_data = _DEFAULT_PRIORITY_COSIGNER_DATA
        cosignature = _EMPTY_COSIGNATURE
    return (
        _order_info_values(order.info),
        order.cosigner,
        order.auction_start_block,
        order.baseline_priority_fee_wei,
        (order.input.token, order.input.amount, order.input.mps_per_priority_fee_wei),
        [(o.token, o.amount, o.mps_per_priority_fee_wei, o.recipient) for o in order.outputs],
        cosigner_data,
        cosignature,
    )


def _relay_values(order: RelayOrder) -> Tuple:
    info = order.info
    fee = order.fee
    return (
        (info.reactor, info.swapper, info.nonce, info.deadline),
        (order.input.token, order.input.amount, order.input.recipient),
        (fee.token, fee.start_amount, fee.end_amount, fee.start_time, fee.end_time),
        hex_to_bytes(order.universal_router_calldata),
    )


# =============================================================================
# ENCODE
# =============================================================================


def encode_order(order: Order) -> bytes:
    """
    Каноническая ABI-кодировка ордера.

    Args:
        order: Любой вариант ордера

    Returns:
        abi.encode(tuple) байты
    """
    ensure_order(order)
    if isinstance(order, DutchOrder):
        return abi_encode([DUTCH_ORDER_ABI], [_dutch_values(order)])
    if isinstance(order, (UnsignedV2DutchOrder, CosignedV2DutchOrder)):
        return abi_encode([V2_DUTCH_ORDER_ABI], [_v2_values(order)])
    if isinstance(order, (UnsignedV3DutchOrder, CosignedV3DutchOrder)):
        return abi_encode([V3_DUTCH_ORDER_ABI], [_v3_values(order)])
    if isinstance(order, (UnsignedPriorityOrder, CosignedPriorityOrder)):
        return abi_encode([PRIORITY_ORDER_ABI], [_priority_values(order)])
    if isinstance(order, RelayOrder):
        return abi_encode([RELAY_ORDER_ABI], [_relay_values(order)])
    raise TypeError(f"Unsupported order variant: {type(order).__name__}")


def serialize_order(order: Order) -> str:
    """Каноническая кодировка в 0x-hex."""
    return bytes_to_hex(encode_order(order))


# =============================================================================
# DECODE HELPERS
# =============================================================================


def _order_info_from(values: Tuple) -> OrderInfo:
    reactor, swapper, nonce, deadline, validation_contract, validation_data = values
    return OrderInfo(
        reactor=reactor,
        swapper=swapper,
        nonce=nonce,
        deadline=deadline,
        additional_validation_contract=validation_contract,
        additional_validation_data=bytes_to_hex(validation_data),
    )


def _curve_from(values: Tuple) -> NonlinearDutchDecay:
    packed, relative_amounts = values
    return NonlinearDutchDecay(
        relative_blocks=decode_relative_blocks(packed, len(relative_amounts)),
        relative_amounts=list(relative_amounts),
    )


def _dutch_outputs_from(values: List[Tuple]) -> List[DutchOutput]:
    return [
        DutchOutput(token=token, start_amount=start, end_amount=end, recipient=recipient)
        for token, start, end, recipient in values
    ]


def _decode_dutch(values: Tuple) -> DutchOrder:
    info, decay_start, decay_end, filler, override_bps, input_values, outputs = values
    token, start, end = input_values
    return DutchOrder(
        info=_order_info_from(info),
        decay_start_time=decay_start,
        decay_end_time=decay_end,
        exclusive_filler=filler,
        exclusivity_override_bps=override_bps,
        input=DutchInput(token=token, start_amount=start, end_amount=end),
        outputs=_dutch_outputs_from(outputs),
    )


def _decode_v2(values: Tuple) -> Any:
    info, cosigner, input_values, outputs, cosigner_data, cosignature = values
    token, start, end = input_values
    fields: Dict[str, Any] = dict(
        info=_order_info_from(info),
        cosigner=cosigner,
        input=DutchInput(token=token, start_amount=start, end_amount=end),
        outputs=_dutch_outputs_from(outputs),
    )
    if len(cosignature) == 0:
        return UnsignedV2DutchOrder(**fields)

    decay_start, decay_end, filler, override_bps, input_override, output_overrides = cosigner_data
    return CosignedV2DutchOrder(
        **fields,
        cosigner_data=V2CosignerData(
            decay_start_time=decay_start,
            decay_end_time=decay_end,
            exclusive_filler=filler,
            exclusivity_override_bps=override_bps,
            input_override=input_override,
            output_overrides=list(output_overrides),
        ),
        cosignature=bytes_to_hex(cosignature),
    )


def _decode_v3(values: Tuple) -> Any:
    info, cosigner, starting_base_fee, input_values, outputs, cosigner_data, cosignature = values
    token, start, curve, max_amount, adjustment = input_values
    fields: Dict[str, Any] = dict(
        info=_order_info_from(info),
        cosigner=cosigner,
        starting_base_fee=starting_base_fee,
        input=V3DutchInput(
            token=token,
            start_amount=start,
            curve=_curve_from(curve),
            max_amount=max_amount,
            adjustment_per_gwei_base_fee=adjustment,
        ),
        outputs=[
            V3DutchOutput(
                token=out_token,
                start_amount=out_start,
                curve=_curve_from(out_curve),
                recipient=recipient,
                min_amount=min_amount,
                adjustment_per_gwei_base_fee=out_adjustment,
            )
            for out_token, out_start, out_curve, recipient, min_amount, out_adjustment in outputs
        ],
    )
    if len(cosignature) == 0:
        return UnsignedV3DutchOrder(**fields)

    decay_start_block, filler, override_bps, input_override, output_overrides = cosigner_data
    return CosignedV3DutchOrder(
        **fields,
        cosigner_data=V3CosignerData(
            decay_start_block=decay_start_block,
            exclusive_filler=filler,
            exclusivity_override_bps=override_bps,
            input_override=input_override,
            output_overrides=list(output_overrides),
        ),
        cosignature=bytes_to_hex(cosignature),
    )


def _decode_priority(values: Tuple) -> Any:
    (
        info,
        cosigner,
        auction_start_block,
        baseline_fee,
        input_values,
        outputs,
        cosigner_data,
        cosignature,
    ) = values
    token, amount, mps = input_values
    fields: Dict[str, Any] = dict(
        info=_order_info_from(info),
        cosigner=cosigner,
        auction_start_block=auction_start_block,
        baseline_priority_fee_wei=baseline_fee,
        input=PriorityInput(token=token, amount=amount, mps_per_priority_fee_wei=mps),
        outputs=[
            PriorityOutput(
                token=out_token,
                amount=out_amount,
                mps_per_priority_fee_wei=out_mps,
                recipient=recipient,
            )
            for out_token, out_amount, out_mps, recipient in outputs
        ],
    )
    if len(cosignature) == 0:
        return UnsignedPriorityOrder(**fields)
    (auction_target_block,) = cosigner_data
    return CosignedPriorityOrder(
        **fields,
        cosigner_data=PriorityCosignerData(auction_target_block=auction_target_block),
        cosignature=bytes_to_hex(cosignature),
    )


def _decode_relay(values: Tuple) -> RelayOrder:
    info, input_values, fee, calldata = values
    reactor, swapper, nonce, deadline = info
    token, amount, recipient = input_values
    fee_token, start_amount, end_amount, start_time, end_time = fee
    return RelayOrder(
        info=RelayOrderInfo(reactor=reactor, swapper=swapper, nonce=nonce, deadline=deadline),
        input=RelayInput(token=token, amount=amount, recipient=recipient),
        fee=RelayFee(
            token=fee_token,
            start_amount=start_amount,
            end_amount=end_amount,
            start_time=start_time,
            end_time=end_time,
        ),
        universal_router_calldata=bytes_to_hex(calldata),
    )


_DECODERS = {
    OrderType.DUTCH: _decode_dutch,
    OrderType.LIMIT: _decode_dutch,
    OrderType.DUTCH_V2: _decode_v2,
    OrderType.DUTCH_V3: _decode_v3,
    OrderType.PRIORITY: _decode_priority,
    OrderType.RELAY: _decode_relay,
}


# =============================================================================
# DECODE
# =============================================================================


def decode_order(data: bytes, order_type: OrderType) -> Order:
    """
    Декодирование ордера известного типа.

    Args:
        data: ABI-кодировка (bytes или 0x-hex)
        order_type: Тип раскладки

    Returns:
        Вариант ордера; для V2/V3/Priority unsigned при пустой cosignature

    Raises:
        OrderDecodeError: Байты не соответствуют раскладке или нарушают инварианты модели
    """
    try:
        raw = hex_to_bytes(data) if isinstance(data, str) else bytes(data)
    except ValueError as e:
        raise OrderDecodeError(f"Encoded order is not valid hex: {e}") from e
    try:
        (values,) = abi_decode([ORDER_ABI[order_type]], raw)
    except (DecodingError, OverflowError) as e:
        raise OrderDecodeError(f"Malformed {order_type.value} order encoding: {e}") from e

    try:
        return _DECODERS[order_type](values)
    except (ValidationError, InvalidDecayCurve) as e:
        raise OrderDecodeError(f"Decoded {order_type.value} order is invalid: {e}") from e

