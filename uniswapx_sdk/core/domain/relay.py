"""
Relay Order — ордер с фиксированным input и эскалирующейся комиссией

Input передаётся recipient без изменений, fee линейно растёт от start_amount до
end_amount между start_time и end_time. universal_router_calldata исполняется
reactor-ом после переводов (opaque для SDK).
"""

from typing import ClassVar

from pydantic import field_validator

from uniswapx_sdk.config.constants import OrderType
from uniswapx_sdk.core.domain.order_info import RelayOrderInfo
from uniswapx_sdk.core.domain.types import Address, HexData, OrderModel, Uint256


class RelayInput(OrderModel):
    token: Address
    amount: Uint256
    recipient: Address


class RelayFee(OrderModel):
    """
    Fee escalator.

    Инварианты: start_amount <= end_amount, start_time <= end_time.
    """

    token: Address
    start_amount: Uint256
    end_amount: Uint256
    start_time: Uint256
    end_time: Uint256

    @field_validator("end_amount")
    @classmethod
    def validate_escalation(cls, v: int, info) -> int:
        if "start_amount" in info.data and info.data["start_amount"] > v:
            raise ValueError(
                f"startAmount must be less than or equal than endAmount: {info.data['start_amount']}"
            )
        return v

    @field_validator("end_time")
    @classmethod
    def validate_window(cls, v: int, info) -> int:
        if "start_time" in info.data and info.data["start_time"] > v:
            raise ValueError(f"feeEndTime {v} must be after or same as feeStartTime")
        return v


class RelayOrder(OrderModel):
    """Relay ордер. Fee окно не выходит за deadline."""

    ORDER_TYPE: ClassVar[OrderType] = OrderType.RELAY

    info: RelayOrderInfo
    input: RelayInput
    fee: RelayFee
    universal_router_calldata: HexData = "0x"

    @field_validator("fee")
    @classmethod
    def validate_fee_deadline(cls, v: RelayFee, info) -> RelayFee:
        if "info" in info.data:
            deadline = info.data["info"].deadline
            if v.start_time > deadline:
                raise ValueError(f"feeStartTime must be before or same as deadline: {v.start_time}")
            if v.end_time > deadline:
                raise ValueError(f"feeEndTime must be before or same as deadline: {v.end_time}")
        return v
