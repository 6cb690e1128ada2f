"""
V2 Dutch — Dutch ордер с cosigner

Swapper подписывает базовые параметры (input, outputs, cosigner). Cosigner позже
подставляет параметры аукциона (окно распада, эксклюзивность, overrides), подписывая
их отдельно поверх order hash.

Unsigned и cosigned формы — два независимых варианта (не иерархия): общая
раскладка полей живёт в V2DutchOrderFields.
"""

from typing import ClassVar, List

from pydantic import Field, field_validator

from uniswapx_sdk.config.constants import OrderType
from uniswapx_sdk.core.domain.dutch import DutchInput, DutchOutput, validate_outputs_not_empty
from uniswapx_sdk.core.domain.order_info import OrderInfo
from uniswapx_sdk.core.domain.types import Address, HexData, OrderModel, Uint256


# =============================================================================
# COSIGNER DATA
# =============================================================================


class V2CosignerData(OrderModel):
    """Параметры аукциона, подставляемые cosigner."""

    decay_start_time: Uint256
    decay_end_time: Uint256
    exclusive_filler: Address
    exclusivity_override_bps: Uint256
    input_override: Uint256 = Field(0, description="0 = использовать input.start_amount")
    output_overrides: List[Uint256] = Field(
        ..., description="По одному на output, 0 = использовать output.start_amount"
    )

    @field_validator("decay_end_time")
    @classmethod
    def validate_decay_window(cls, v: int, info) -> int:
        if "decay_start_time" in info.data and v < info.data["decay_start_time"]:
            raise ValueError(
                f"decayEndTime {v} must be after or same as decayStartTime "
                f"{info.data['decay_start_time']}"
            )
        return v


# =============================================================================
# ORDERS
# =============================================================================


class V2DutchOrderFields(OrderModel):
    """Поля, подписываемые swapper (общие для обеих форм)."""

    ORDER_TYPE: ClassVar[OrderType] = OrderType.DUTCH_V2

    info: OrderInfo
    cosigner: Address
    input: DutchInput
    outputs: List[DutchOutput]

    @field_validator("outputs")
    @classmethod
    def validate_outputs(cls, v: List[DutchOutput]) -> List[DutchOutput]:
        return validate_outputs_not_empty(v)


class UnsignedV2DutchOrder(V2DutchOrderFields):
    """V2 ордер до cosign: резолв невозможен."""


class CosignedV2DutchOrder(V2DutchOrderFields):
    """
    V2 ордер с cosigner data и cosignature.

    Инварианты:
    - cosigner decay_start_time <= decay_end_time <= deadline
    - input_override <= input.start_amount
    - output_overrides по одному на output, ненулевой override >= output.start_amount
    - cosignature не пуста
    """

    cosigner_data: V2CosignerData
    cosignature: HexData

    @field_validator("cosigner_data")
    @classmethod
    def validate_cosigner_data(cls, v: V2CosignerData, info) -> V2CosignerData:
        if "info" in info.data:
            deadline = info.data["info"].deadline
            if v.decay_start_time > deadline:
                raise ValueError(
                    f"decayStartTime must be before or same as deadline: {v.decay_start_time}"
                )
            if v.decay_end_time > deadline:
                raise ValueError(
                    f"decayEndTime must be before or same as deadline: {v.decay_end_time}"
                )
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

    def to_unsigned(self) -> UnsignedV2DutchOrder:
        """Форма без cosigner data (то, что подписывает swapper)."""
        return UnsignedV2DutchOrder(
            info=self.info, cosigner=self.cosigner, input=self.input, outputs=self.outputs
        )


def check_output_overrides(overrides: List[int], outputs: list) -> None:
    """
    Проверка output overrides против базовых outputs.

    Raises:
        ValueError: Пустой список, несовпадение длины или override меньше start_amount
    """
    if not overrides:
        raise ValueError("outputOverrides not set")
    if len(overrides) != len(outputs):
        raise ValueError(
            f"outputOverrides length {len(overrides)} does not match outputs length {len(outputs)}"
        )
    for override, output in zip(overrides, outputs):
        if override != 0 and override < output.start_amount:
            raise ValueError("outputOverride smaller than original output")
