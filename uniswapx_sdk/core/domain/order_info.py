"""
OrderInfo — общий заголовок ордеров и результаты резолва

OrderInfo всегда первый элемент on-chain структуры ордера. Содержит bytes
(additionalValidationData), поэтому в ABI-кодировке хранится как tail pointer.
RelayOrderInfo статический (без additional validation) и кодируется inline.
"""

from dataclasses import dataclass
from typing import List, Optional

from pydantic import Field

from uniswapx_sdk.config.constants import ZERO_ADDRESS
from uniswapx_sdk.core.domain.types import Address, HexData, OrderModel, Uint256


# =============================================================================
# HEADERS
# =============================================================================


class OrderInfo(OrderModel):
    """Заголовок UniswapX ордера (Dutch, V2, V3, Priority)."""

    reactor: Address = Field(..., description="Settlement контракт (reactor)")
    swapper: Address = Field(..., description="Владелец ордера, подписывает permit")
    nonce: Uint256 = Field(..., description="Permit2 nonce (word * 256 + bit)")
    deadline: Uint256 = Field(..., description="Срок действия (unix seconds)")
    additional_validation_contract: Address = Field(
        ZERO_ADDRESS, description="Контракт дополнительной валидации (нулевой адрес если нет)"
    )
    additional_validation_data: HexData = Field(
        "0x", description="Opaque payload для additional validation контракта"
    )


class RelayOrderInfo(OrderModel):
    """Заголовок Relay ордера (без additional validation)."""

    reactor: Address = Field(..., description="Relay reactor")
    swapper: Address = Field(..., description="Владелец ордера")
    nonce: Uint256 = Field(..., description="Permit2 nonce")
    deadline: Uint256 = Field(..., description="Срок действия (unix seconds)")


# =============================================================================
# RESOLUTION
# =============================================================================


@dataclass(frozen=True)
class ResolutionContext:
    """
    Контекст исполнения для резолва сумм.

    Dutch/V2/Relay используют timestamp, V3/Priority — current_block.
    priority_fee — priority fee сверх baseline (wei), только для Priority.
    """

    timestamp: Optional[int] = None
    current_block: Optional[int] = None
    filler: Optional[str] = None
    priority_fee: int = 0


@dataclass(frozen=True)
class TokenAmount:
    """Конкретная сумма токена после резолва."""

    token: str
    amount: int


@dataclass(frozen=True)
class ResolvedOrder:
    """Резолв UniswapX ордера: input и outputs в конкретных суммах."""

    input: TokenAmount
    outputs: List[TokenAmount]


@dataclass(frozen=True)
class ResolvedRelayOrder:
    """Резолв Relay ордера: input фиксирован, fee распадается по времени."""

    input: TokenAmount
    fee: TokenAmount
