"""
V3 Dutch — Dutch ордер с нелинейным распадом по блокам

Распад задаётся кривой NonlinearDutchDecay (смещения блоков + величины),
отсчитываемой от decayStartBlock из cosigner data. Дополнительно ордер несёт
startingBaseFee и adjustmentPerGweiBaseFee для gas-адаптации на стороне контракта,
а также границы: max_amount для input и min_amount для outputs.
"""

from typing import ClassVar, List

from pydantic import Field, field_validator

from uniswapx_sdk.config.constants import OrderType
from uniswapx_sdk.core.domain.dutch import validate_outputs_not_empty
from uniswapx_sdk.core.domain.order_info import OrderInfo
from uniswapx_sdk.core.domain.types import Address, HexData, Int256, OrderModel, Uint256
from uniswapx_sdk.core.domain.v2_dutch import check_output_overrides
from uniswapx_sdk.core.math.block_curve import (
    MAX_CURVE_POINTS,
    RELATIVE_BLOCK_MASK,
    get_end_amount,
    get_max_amount_out,
)


# =============================================================================
# CURVE
# =============================================================================


class NonlinearDutchDecay(OrderModel):
    """
    Кривая распада по блокам.

    relative_blocks хранятся распакованными; упаковка в uint256 — задача кодека.
    Сумма в точке i равна start_amount - relative_amounts[i].
    """

    relative_blocks: List[int] = Field(default_factory=list)
    relative_amounts: List[Int256] = Field(default_factory=list)

    @field_validator("relative_blocks")
    @classmethod
    def validate_relative_blocks(cls, v: List[int]) -> List[int]:
        """Смещения строго возрастают и помещаются в 16 бит."""
        if len(v) > MAX_CURVE_POINTS:
            raise ValueError(f"Curve has {len(v)} points, max {MAX_CURVE_POINTS}")
        prev = -1
        for block in v:
            if block < 0 or block > RELATIVE_BLOCK_MASK:
                raise ValueError(f"Relative block {block} does not fit in 16 bits")
            if block <= prev:
                raise ValueError("relativeBlocks not strictly increasing")
            prev = block
        return v

    @field_validator("relative_amounts")
    @classmethod
    def validate_relative_amounts(cls, v: List[int], info) -> List[int]:
        if "relative_blocks" in info.data and len(info.data["relative_blocks"]) != len(v):
            raise ValueError("relativeBlocks and relativeAmounts length mismatch")
        return v


# =============================================================================
# INPUT / OUTPUT
# =============================================================================


class V3DutchInput(OrderModel):
    """Input V3 ордера (верхняя граница max_amount)."""

    token: Address
    start_amount: Uint256
    curve: NonlinearDutchDecay
    max_amount: Uint256
    adjustment_per_gwei_base_fee: Uint256 = 0

    def end_amount(self) -> int:
        return get_end_amount(self.start_amount, self.curve.relative_amounts)


class V3DutchOutput(OrderModel):
    """Output V3 ордера (нижняя граница min_amount)."""

    token: Address
    start_amount: Uint256
    curve: NonlinearDutchDecay
    recipient: Address
    min_amount: Uint256
    adjustment_per_gwei_base_fee: Uint256 = 0

    def end_amount(self) -> int:
        return get_end_amount(self.start_amount, self.curve.relative_amounts)

    def max_amount_out(self) -> int:
        """Максимальная сумма output вдоль кривой."""
        return get_max_amount_out(self.start_amount, self.curve.relative_amounts)


# =============================================================================
# COSIGNER DATA
# =============================================================================


class V3CosignerData(OrderModel):
    """Параметры аукциона V3 (блок начала распада, эксклюзивность, overrides)."""

    decay_start_block: Uint256
    exclusive_filler: Address
    exclusivity_override_bps: Uint256
    input_override: Uint256 = 0
    output_overrides: List[Uint256]


# =============================================================================
# ORDERS
# =============================================================================


class V3DutchOrderFields(OrderModel):
    """Поля, подписываемые swapper."""

    ORDER_TYPE: ClassVar[OrderType] = OrderType.DUTCH_V3

    info: OrderInfo
    cosigner: Address
    starting_base_fee: Uint256
    input: V3DutchInput
    outputs: List[V3DutchOutput]

    @field_validator("outputs")
    @classmethod
    def validate_outputs(cls, v: List[V3DutchOutput]) -> List[V3DutchOutput]:
        return validate_outputs_not_empty(v)


class UnsignedV3DutchOrder(V3DutchOrderFields):
    """V3 ордер до cosign."""


class CosignedV3DutchOrder(V3DutchOrderFields):
    """
    V3 ордер с cosigner data.

    decay_start_block не сравнивается с deadline: контракт этого не требует.
    """

    cosigner_data: V3CosignerData
    cosignature: HexData

    @field_validator("cosigner_data")
    @classmethod
    def validate_cosigner_data(cls, v: V3CosignerData, info) -> V3CosignerData:
        if "input" in info.data and v.input_override > info.data["input"].start_amount:
            raise ValueError("inputOverride larger than original input")
        if "outputs" in info.data:
            check_output_overrides(v.output_overrides, info.data["outputs"])
        return v

    @field_validator("cosignature")
    @classmethod
    def validate_cosignature(cls, v: str) -> str:
        if v == "0x":
            raise ValueError("cosignature not set")
        return v

    def to_unsigned(self) -> UnsignedV3DutchOrder:
        return UnsignedV3DutchOrder(
            info=self.info,
            cosigner=self.cosigner,
            starting_base_fee=self.starting_base_fee,
            input=self.input,
            outputs=self.outputs,
        )
