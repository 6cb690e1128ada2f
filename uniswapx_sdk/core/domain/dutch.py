"""
DutchOrder — Exclusive Dutch ордер с линейным распадом по времени

Input и outputs линейно распадаются между decayStartTime и decayEndTime.
До decayStartTime действует период эксклюзивности: filler, отличный от
exclusiveFiller, платит override (exclusivityOverrideBps сверху outputs).
"""

from typing import ClassVar, List

from pydantic import Field, field_validator

from uniswapx_sdk.config.constants import ZERO_ADDRESS, OrderType
from uniswapx_sdk.core.domain.order_info import OrderInfo
from uniswapx_sdk.core.domain.types import Address, OrderModel, Uint256


# =============================================================================
# INPUT / OUTPUT
# =============================================================================


class DutchInput(OrderModel):
    """Input Dutch ордера (может расти со временем)."""

    token: Address
    start_amount: Uint256
    end_amount: Uint256


class DutchOutput(OrderModel):
    """
    Output Dutch ордера.

    Outputs распадаются только вниз: start_amount >= end_amount.
    """

    token: Address
    start_amount: Uint256
    end_amount: Uint256
    recipient: Address

    @field_validator("end_amount")
    @classmethod
    def validate_decay_direction(cls, v: int, info) -> int:
        """Проверка start_amount >= end_amount."""
        if "start_amount" in info.data:
            start = info.data["start_amount"]
            if start < v:
                raise ValueError(f"startAmount must be greater than endAmount: {start}")
        return v


def validate_outputs_not_empty(outputs: list) -> list:
    """Общий инвариант всех UniswapX вариантов: хотя бы один output."""
    if not outputs:
        raise ValueError("outputs not set")
    return outputs


# =============================================================================
# DUTCH ORDER
# =============================================================================


class DutchOrder(OrderModel):
    """
    Exclusive Dutch ордер (V1).

    Инварианты:
    - decay_start_time <= decay_end_time <= info.deadline
    - outputs не пусты, каждый output распадается вниз
    """

    ORDER_TYPE: ClassVar[OrderType] = OrderType.DUTCH

    info: OrderInfo
    decay_start_time: Uint256 = Field(..., description="Начало распада (unix seconds)")
    decay_end_time: Uint256 = Field(..., description="Конец распада (unix seconds)")
    exclusive_filler: Address = Field(ZERO_ADDRESS, description="Эксклюзивный filler")
    exclusivity_override_bps: Uint256 = Field(
        0, description="Override для не-эксклюзивных filler (0 = строгая эксклюзивность)"
    )
    input: DutchInput
    outputs: List[DutchOutput]

    @field_validator("decay_start_time")
    @classmethod
    def validate_decay_start(cls, v: int, info) -> int:
        """decayStartTime не позже deadline."""
        if "info" in info.data:
            deadline = info.data["info"].deadline
            if v > deadline:
                raise ValueError(f"decayStartTime must be before or same as deadline: {v}")
        return v

    @field_validator("decay_end_time")
    @classmethod
    def validate_decay_end(cls, v: int, info) -> int:
        """decayStartTime <= decayEndTime <= deadline."""
        if "decay_start_time" in info.data and v < info.data["decay_start_time"]:
            raise ValueError(
                f"decayEndTime {v} must be after or same as decayStartTime "
                f"{info.data['decay_start_time']}"
            )
        if "info" in info.data:
            deadline = info.data["info"].deadline
            if v > deadline:
                raise ValueError(f"decayEndTime must be before or same as deadline: {v}")
        return v

    @field_validator("outputs")
    @classmethod
    def validate_outputs(cls, v: List[DutchOutput]) -> List[DutchOutput]:
        return validate_outputs_not_empty(v)
