"""
Exclusive Filler Validation — payload additional validation контракта

additionalValidationData = abi.encode(address filler, uint256 lastExclusiveTimestamp).
До lastExclusiveTimestamp ордер может исполнить только filler.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from eth_abi import decode as abi_decode
from eth_abi import encode as abi_encode
from eth_abi.exceptions import DecodingError
from eth_utils import to_checksum_address

from uniswapx_sdk.config.chains import ChainConfig
from uniswapx_sdk.core.domain.order_info import OrderInfo
from uniswapx_sdk.core.domain.types import bytes_to_hex, hex_to_bytes


class ValidationType(str, Enum):
    NONE = "None"
    EXCLUSIVE_FILLER = "ExclusiveFiller"


@dataclass(frozen=True)
class ExclusiveFillerData:
    filler: str
    last_exclusive_timestamp: int


@dataclass(frozen=True)
class CustomOrderValidation:
    """Распознанный тип additional validation (data=None для NONE)."""

    type: ValidationType
    data: Optional[ExclusiveFillerData] = None


@dataclass(frozen=True)
class ValidationInfo:
    """Значения полей OrderInfo для additional validation."""

    additional_validation_contract: str
    additional_validation_data: str


NONE_VALIDATION = CustomOrderValidation(type=ValidationType.NONE)


def parse_exclusive_filler_data(encoded: str) -> CustomOrderValidation:
    """Декодирование exclusive filler payload; NONE_VALIDATION при неверной кодировке."""
    try:
        filler, timestamp = abi_decode(["address", "uint256"], hex_to_bytes(encoded))
    except (DecodingError, ValueError):
        return NONE_VALIDATION
    return CustomOrderValidation(
        type=ValidationType.EXCLUSIVE_FILLER,
        data=ExclusiveFillerData(
            filler=to_checksum_address(filler), last_exclusive_timestamp=timestamp
        ),
    )


def parse_validation(info: OrderInfo) -> CustomOrderValidation:
    return parse_exclusive_filler_data(info.additional_validation_data)


def encode_exclusive_filler_data(
    filler: str,
    last_exclusive_timestamp: int,
    chain_config: Optional[ChainConfig] = None,
    validation_contract: Optional[str] = None,
) -> ValidationInfo:
    """
    Payload и контракт exclusive filler validation.

    Args:
        filler: Эксклюзивный filler
        last_exclusive_timestamp: Конец эксклюзивности (unix seconds)
        chain_config: Источник адреса validation контракта
        validation_contract: Явный адрес (приоритетнее chain_config)

    Raises:
        ValueError: Не задан ни validation_contract, ни chain_config
        MissingConfiguration: Для сети нет validation контракта
    """
    if validation_contract is not None:
        contract = to_checksum_address(validation_contract)
    elif chain_config is not None:
        contract = chain_config.get_exclusive_filler_validation()
    else:
        raise ValueError("No validation contract provided")

    encoded = abi_encode(["address", "uint256"], [filler, last_exclusive_timestamp])
    return ValidationInfo(
        additional_validation_contract=contract,
        additional_validation_data=bytes_to_hex(encoded),
    )
