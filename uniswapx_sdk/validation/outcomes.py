"""
Validation Outcomes — классификация результата симуляции settlement

Любой revert симуляции сводится к значению из закрытого множества OrderValidation.
Revert data сравнивается с таблицей известных ошибок задеплоенных reactors
(селекторы custom errors и строковые reasons) подстрочным поиском в порядке таблицы.

Строковые reverts (Error(string), селектор 0x08c379a0) сначала декодируются,
так что селектор, завёрнутый в строку, тоже распознаётся.
"""

import logging
from enum import Enum
from typing import Dict, Final, Optional

from eth_abi import decode as abi_decode
from eth_abi.exceptions import DecodingError

from uniswapx_sdk.config.constants import ZERO_ADDRESS
from uniswapx_sdk.validation.exclusive_filler import ValidationType, parse_exclusive_filler_data

logger = logging.getLogger(__name__)


class OrderValidation(str, Enum):
    """Результат валидации ордера"""

    EXPIRED = "Expired"
    NONCE_USED = "NonceUsed"
    INSUFFICIENT_FUNDS = "InsufficientFunds"
    INVALID_SIGNATURE = "InvalidSignature"
    INVALID_ORDER_FIELDS = "InvalidOrderFields"
    UNKNOWN_ERROR = "UnknownError"
    VALIDATION_FAILED = "ValidationFailed"
    EXCLUSIVITY_PERIOD = "ExclusivityPeriod"
    ORDER_NOT_FILLABLE_YET = "OrderNotFillableYet"
    INVALID_GAS_PRICE = "InvalidGasPrice"
    INVALID_COSIGNATURE = "InvalidCosignature"
    OK = "OK"


# =============================================================================
# KNOWN ERRORS
# =============================================================================
BASIC_ERROR: Final[str] = "08c379a0"

# Селектор ошибки additional validation контракта
VALIDATION_FAILED_SELECTOR: Final[str] = "0a0b0d79"

# Порядок значим: первый совпавший ключ определяет результат
KNOWN_ERRORS: Final[Dict[str, OrderValidation]] = {
    "8baa579f": OrderValidation.INVALID_SIGNATURE,
    "815e1d64": OrderValidation.INVALID_SIGNATURE,
    "756688fe": OrderValidation.NONCE_USED,
    # invalid dutch decay time
    "302e5b7c": OrderValidation.INVALID_ORDER_FIELDS,
    "773a6187": OrderValidation.INVALID_ORDER_FIELDS,
    # invalid reactor address
    "4ddf4a64": OrderValidation.INVALID_ORDER_FIELDS,
    # both input and output decay
    "d303758b": OrderValidation.INVALID_ORDER_FIELDS,
    # incorrect amounts
    "7c1f8113": OrderValidation.INVALID_ORDER_FIELDS,
    "43133453": OrderValidation.INVALID_ORDER_FIELDS,
    "48fee69c": OrderValidation.INVALID_ORDER_FIELDS,
    "70f65caa": OrderValidation.EXPIRED,
    "ee3b3d4b": OrderValidation.NONCE_USED,
    VALIDATION_FAILED_SELECTOR: OrderValidation.VALIDATION_FAILED,
    "b9ec1e96": OrderValidation.EXCLUSIVITY_PERIOD,
    "062dec56": OrderValidation.EXCLUSIVITY_PERIOD,
    "75c1bb14": OrderValidation.EXCLUSIVITY_PERIOD,
    # invalid cosigner output / input
    "a305df82": OrderValidation.INVALID_ORDER_FIELDS,
    "ac9143e7": OrderValidation.INVALID_ORDER_FIELDS,
    # duplicate fee output
    "fff08303": OrderValidation.INVALID_ORDER_FIELDS,
    "d7815be1": OrderValidation.INVALID_COSIGNATURE,
    "TRANSFER_FROM_FAILED": OrderValidation.INSUFFICIENT_FUNDS,
    # invalid fee escalation amounts
    "d856fc5a": OrderValidation.INVALID_ORDER_FIELDS,
    # signature expired
    "cd21db4f": OrderValidation.EXPIRED,
    # priority reactor: InvalidDeadline
    "769d11e4": OrderValidation.EXPIRED,
    # priority reactor: OrderNotFillable
    "c6035520": OrderValidation.ORDER_NOT_FILLABLE_YET,
    # priority reactor: InputOutputScaling
    "a6b844f5": OrderValidation.INVALID_ORDER_FIELDS,
    # priority reactor: InvalidGasPrice
    "f3eb44e5": OrderValidation.INVALID_GAS_PRICE,
}


# =============================================================================
# CLASSIFICATION
# =============================================================================


def revert_text(return_data: bytes) -> str:
    """
    Текст для сопоставления с KNOWN_ERRORS.

    Error(string) декодируется в строку; иначе — 0x-hex revert data.
    """
    hex_data = return_data.hex()
    if hex_data.startswith(BASIC_ERROR):
        try:
            (reason,) = abi_decode(["string"], return_data[4:])
            return reason
        except (DecodingError, UnicodeDecodeError):
            logger.debug("Malformed Error(string) revert: 0x%s", hex_data)
    return "0x" + hex_data


def classify_revert(
    return_data: bytes, additional_validation_data: Optional[str] = None
) -> OrderValidation:
    """
    Классификация revert data симуляции.

    Args:
        return_data: Revert data неуспешного вызова
        additional_validation_data: Payload additional validation ордера. Если
            передан, ошибка validation контракта с ненулевым exclusive filler
            трактуется как ExclusivityPeriod.

    Returns:
        OrderValidation (UnknownError для нераспознанных данных)
    """
    text = revert_text(return_data)
    for key, validation in KNOWN_ERRORS.items():
        if key not in text:
            continue
        if key == VALIDATION_FAILED_SELECTOR and additional_validation_data is not None:
            filler_validation = parse_exclusive_filler_data(additional_validation_data)
            if (
                filler_validation.type == ValidationType.EXCLUSIVE_FILLER
                and filler_validation.data.filler != ZERO_ADDRESS
            ):
                return OrderValidation.EXCLUSIVITY_PERIOD
        return validation

    logger.warning("Unknown revert data: %s", text)
    return OrderValidation.UNKNOWN_ERROR
