"""
Order Resolution — разрешение ордера до конкретных сумм

Для каждого варианта повторяет расчёт settlement-контракта в заданном контексте
исполнения (timestamp или блок, filler, priority fee).

Правила:
- Dutch / V2: линейный распад по времени, override для не-эксклюзивного filler
  до начала распада
- V3: нелинейная кривая по блокам от decay_start_block, input ограничен max_amount,
  outputs — min_amount; override для не-эксклюзивного filler до decay_start_block
- Priority: масштабирование priority fee, ордер не исполним до target/start блока
- Relay: input фиксирован, fee распадается по времени
- Unsigned V2/V3/Priority: резолв невозможен (нет cosigner data)
"""

from typing import Dict, List, Optional, Union

from uniswapx_sdk.config.constants import ZERO_ADDRESS
from uniswapx_sdk.core.domain.dutch import DutchOrder
from uniswapx_sdk.core.domain.order import Order, ensure_order
from uniswapx_sdk.core.domain.order_info import (
    ResolutionContext,
    ResolvedOrder,
    ResolvedRelayOrder,
    TokenAmount,
)
from uniswapx_sdk.core.domain.priority import CosignedPriorityOrder, UnsignedPriorityOrder
from uniswapx_sdk.core.domain.relay import RelayOrder
from uniswapx_sdk.core.domain.v2_dutch import CosignedV2DutchOrder, UnsignedV2DutchOrder
from uniswapx_sdk.core.domain.v3_dutch import CosignedV3DutchOrder, UnsignedV3DutchOrder
from uniswapx_sdk.core.errors import OrderNotFillable, UnresolvableOrder
from uniswapx_sdk.core.math.block_curve import get_block_decayed_amount
from uniswapx_sdk.core.math.decay import apply_exclusivity_override, get_decayed_amount
from uniswapx_sdk.core.math.priority import scale_input, scale_output


# =============================================================================
# HELPERS
# =============================================================================


def original_if_zero(value: int, original: int) -> int:
    """Override == 0 означает "использовать исходное значение"."""
    return original if value == 0 else value


def _require_timestamp(context: ResolutionContext) -> int:
    if context.timestamp is None:
        raise ValueError("timestamp is required to resolve a time-decaying order")
    return context.timestamp


def _require_block(context: ResolutionContext) -> int:
    if context.current_block is None:
        raise ValueError("current_block is required to resolve a block-decaying order")
    return context.current_block


def _use_exclusivity_override(
    exclusive_filler: str, filler: Optional[str], now: int, exclusivity_end: int
) -> bool:
    # эксклюзивность действует до конца периода включительно и только для чужого filler
    if exclusive_filler == ZERO_ADDRESS:
        return False
    if now > exclusivity_end:
        return False
    return filler is None or filler.lower() != exclusive_filler.lower()


# =============================================================================
# PER-VARIANT RESOLUTION
# =============================================================================


def _resolve_dutch(order: DutchOrder, context: ResolutionContext) -> ResolvedOrder:
    now = _require_timestamp(context)
    use_override = _use_exclusivity_override(
        order.exclusive_filler, context.filler, now, order.decay_start_time
    )
    outputs: List[TokenAmount] = []
    for output in order.outputs:
        amount = get_decayed_amount(
            output.start_amount,
            output.end_amount,
            order.decay_start_time,
            order.decay_end_time,
            now,
        )
        if use_override:
            amount = apply_exclusivity_override(amount, order.exclusivity_override_bps)
        outputs.append(TokenAmount(token=output.token, amount=amount))

    input_amount = get_decayed_amount(
        order.input.start_amount,
        order.input.end_amount,
        order.decay_start_time,
        order.decay_end_time,
        now,
    )
    return ResolvedOrder(input=TokenAmount(order.input.token, input_amount), outputs=outputs)


def _resolve_v2(order: CosignedV2DutchOrder, context: ResolutionContext) -> ResolvedOrder:
    now = _require_timestamp(context)
    data = order.cosigner_data
    use_override = _use_exclusivity_override(
        data.exclusive_filler, context.filler, now, data.decay_start_time
    )
    input_amount = get_decayed_amount(
        original_if_zero(data.input_override, order.input.start_amount),
        order.input.end_amount,
        data.decay_start_time,
        data.decay_end_time,
        now,
    )
    outputs: List[TokenAmount] = []
    for output, override in zip(order.outputs, data.output_overrides):
        amount = get_decayed_amount(
            original_if_zero(override, output.start_amount),
            output.end_amount,
            data.decay_start_time,
            data.decay_end_time,
            now,
        )
        if use_override:
            amount = apply_exclusivity_override(amount, data.exclusivity_override_bps)
        outputs.append(TokenAmount(token=output.token, amount=amount))
    return ResolvedOrder(input=TokenAmount(order.input.token, input_amount), outputs=outputs)


def _resolve_v3(order: CosignedV3DutchOrder, context: ResolutionContext) -> ResolvedOrder:
    current_block = _require_block(context)
    data = order.cosigner_data
    use_override = _use_exclusivity_override(
        data.exclusive_filler, context.filler, current_block, data.decay_start_block
    )

    input_amount = get_block_decayed_amount(
        order.input.curve.relative_blocks,
        order.input.curve.relative_amounts,
        original_if_zero(data.input_override, order.input.start_amount),
        data.decay_start_block,
        current_block,
    )
    input_amount = min(max(input_amount, 0), order.input.max_amount)

    outputs: List[TokenAmount] = []
    for output, override in zip(order.outputs, data.output_overrides):
        amount = get_block_decayed_amount(
            output.curve.relative_blocks,
            output.curve.relative_amounts,
            original_if_zero(override, output.start_amount),
            data.decay_start_block,
            current_block,
        )
        amount = max(amount, output.min_amount)
        if use_override:
            amount = apply_exclusivity_override(amount, data.exclusivity_override_bps)
        outputs.append(TokenAmount(token=output.token, amount=amount))
    return ResolvedOrder(input=TokenAmount(order.input.token, input_amount), outputs=outputs)


def _resolve_priority(order: CosignedPriorityOrder, context: ResolutionContext) -> ResolvedOrder:
    if context.current_block is not None:
        target_block = order.cosigner_data.auction_target_block
        if target_block > 0 and context.current_block < target_block:
            raise OrderNotFillable("Target block in the future")
        if context.current_block < order.auction_start_block:
            raise OrderNotFillable("Start block in the future")

    fee = context.priority_fee
    input_amount = scale_input(order.input.amount, fee, order.input.mps_per_priority_fee_wei)
    outputs = [
        TokenAmount(
            token=output.token,
            amount=scale_output(output.amount, fee, output.mps_per_priority_fee_wei),
        )
        for output in order.outputs
    ]
    return ResolvedOrder(input=TokenAmount(order.input.token, input_amount), outputs=outputs)


def _resolve_relay(order: RelayOrder, context: ResolutionContext) -> ResolvedRelayOrder:
    now = _require_timestamp(context)
    fee_amount = get_decayed_amount(
        order.fee.start_amount,
        order.fee.end_amount,
        order.fee.start_time,
        order.fee.end_time,
        now,
    )
    return ResolvedRelayOrder(
        input=TokenAmount(order.input.token, order.input.amount),
        fee=TokenAmount(order.fee.token, fee_amount),
    )


# =============================================================================
# DISPATCH
# =============================================================================


def resolve_order(
    order: Order, context: ResolutionContext
) -> Union[ResolvedOrder, ResolvedRelayOrder]:
    """
    Резолв ордера в контексте исполнения.

    Raises:
        UnresolvableOrder: Unsigned V2/V3/Priority (нет cosigner data)
        OrderNotFillable: Priority до target/start блока
        ValueError: В контексте нет timestamp/current_block, нужного варианту
    """
    ensure_order(order)
    if isinstance(order, DutchOrder):
        return _resolve_dutch(order, context)
    if isinstance(order, CosignedV2DutchOrder):
        return _resolve_v2(order, context)
    if isinstance(order, CosignedV3DutchOrder):
        return _resolve_v3(order, context)
    if isinstance(order, CosignedPriorityOrder):
        return _resolve_priority(order, context)
    if isinstance(order, RelayOrder):
        return _resolve_relay(order, context)
    if isinstance(order, (UnsignedV2DutchOrder, UnsignedV3DutchOrder, UnsignedPriorityOrder)):
        raise UnresolvableOrder(f"{type(order).__name__} has no cosigner data to resolve")
    raise TypeError(f"Unsupported order variant: {type(order).__name__}")


def block_overrides(order: Order) -> Optional[Dict[str, str]]:
    """
    Синтетический контекст блока для симуляции.

    Только cosigned Priority: симуляция выполняется на auction_target_block.
    """
    ensure_order(order)
    if isinstance(order, CosignedPriorityOrder):
        return {"number": hex(order.cosigner_data.auction_target_block)}
    return None
