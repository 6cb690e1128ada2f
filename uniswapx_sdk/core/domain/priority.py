"""
Priority Order — аукцион по priority fee

Суммы масштабируются priority fee транзакции: каждый wei сверх baseline
сдвигает сумму на mpsPerPriorityFeeWei milli-bps. Масштабироваться может
ровно одна сторона: input ИЛИ outputs.

Cosigner задаёт auctionTargetBlock — блок, раньше которого ордер не исполним.
"""

from typing import ClassVar, List

from pydantic import Field, field_validator

from uniswapx_sdk.config.constants import OrderType
from uniswapx_sdk.core.domain.dutch import validate_outputs_not_empty
from uniswapx_sdk.core.domain.order_info import OrderInfo
from uniswapx_sdk.core.domain.types import Address, HexData, OrderModel, Uint256


# =============================================================================
# INPUT / OUTPUT
# =============================================================================


class PriorityInput(OrderModel):
    token: Address
    amount: Uint256
    mps_per_priority_fee_wei: Uint256


class PriorityOutput(OrderModel):
    token: Address
    amount: Uint256
    mps_per_priority_fee_wei: Uint256
    recipient: Address


class PriorityCosignerData(OrderModel):
    auction_target_block: Uint256


# =============================================================================
# ORDERS
# =============================================================================


class PriorityOrderFields(OrderModel):
    """
    Поля, подписываемые swapper.

    Инварианты:
    - auction_start_block > 0
    - outputs не пусты
    - аукцион сконфигурирован: input scaling != 0 или все outputs scaling != 0
    - не обе стороны одновременно
    """

    ORDER_TYPE: ClassVar[OrderType] = OrderType.PRIORITY

    info: OrderInfo
    cosigner: Address
    auction_start_block: Uint256 = Field(..., gt=0, description="Блок начала аукциона")
    baseline_priority_fee_wei: Uint256 = Field(
        0, description="Priority fee, не участвующая в масштабировании"
    )
    input: PriorityInput
    outputs: List[PriorityOutput]

    @field_validator("outputs")
    @classmethod
    def validate_auction_side(cls, v: List[PriorityOutput], info) -> List[PriorityOutput]:
        validate_outputs_not_empty(v)
        if "input" not in info.data:
            return v
        input_scaling = info.data["input"].mps_per_priority_fee_wei
        if input_scaling == 0 and not all(output.mps_per_priority_fee_wei > 0 for output in v):
            raise ValueError("Priority auction not configured")
        if input_scaling > 0 and any(output.mps_per_priority_fee_wei > 0 for output in v):
            raise ValueError("Can only configure priority auction on either input or output")
        return v


class UnsignedPriorityOrder(PriorityOrderFields):
    """Priority ордер до cosign."""


class CosignedPriorityOrder(PriorityOrderFields):
    """Priority ордер с auction target block от cosigner."""

    cosigner_data: PriorityCosignerData
    cosignature: HexData

    @field_validator("cosigner_data")
    @classmethod
    def validate_target_block(cls, v: PriorityCosignerData, info) -> PriorityCosignerData:
        """0 < auction_target_block < auction_start_block."""
        if v.auction_target_block == 0:
            raise ValueError("auctionTargetBlock not set")
        if "auction_start_block" in info.data:
            start_block = info.data["auction_start_block"]
            if v.auction_target_block >= start_block:
                raise ValueError(
                    f"auctionTargetBlock {v.auction_target_block} must be before "
                    f"auctionStartBlock {start_block}"
                )
        return v

    @field_validator("cosignature")
    @classmethod
    def validate_cosignature(cls, v: str) -> str:
        if v == "0x":
            raise ValueError("cosignature not set")
        return v

    def to_unsigned(self) -> UnsignedPriorityOrder:
        return UnsignedPriorityOrder(
            info=self.info,
            cosigner=self.cosigner,
            auction_start_block=self.auction_start_block,
            baseline_priority_fee_wei=self.baseline_priority_fee_wei,
            input=self.input,
            outputs=self.outputs,
        )
