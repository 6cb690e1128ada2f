"""
Order Type Discriminator — определение варианта ордера по сырым байтам

Тип ордера определяется адресом reactor, который извлекается без полного
декодирования:

    [0:32]    offset кортежа ордера (0x20, кортеж динамический)
    [32:64]   первое слово кортежа:
              - UniswapX: tail offset OrderInfo (OrderInfo содержит bytes)
              - Relay: reactor inline (RelayOrderInfo статический)
    reactor = младшие 20 байт слова по адресу 32 + offset

Адрес reactor ищется в ReactorRegistry (инверсия per-chain таблиц reactors).
"""

import logging
from typing import Any, Dict, Final, Optional, Union

from eth_utils import to_checksum_address

from uniswapx_sdk.config.chains import ReactorRegistry
from uniswapx_sdk.config.constants import OrderType
from uniswapx_sdk.core.codec.abi import decode_order
from uniswapx_sdk.core.domain.order import Order, get_order_type, order_from_json
from uniswapx_sdk.core.domain.types import hex_to_bytes
from uniswapx_sdk.core.errors import OrderDecodeError

logger = logging.getLogger(__name__)

SLOT_LENGTH: Final[int] = 32
ADDRESS_LENGTH: Final[int] = 20

# Первое слово кортежа ордера (сразу после offset-а самого кортежа)
ORDER_INFO_OFFSET: Final[int] = SLOT_LENGTH


def _to_bytes(encoded: Union[bytes, str]) -> bytes:
    if isinstance(encoded, str):
        try:
            return hex_to_bytes(encoded)
        except ValueError as e:
            raise OrderDecodeError(f"Encoded order is not valid hex: {e}") from e
    return bytes(encoded)


def _slot(data: bytes, offset: int) -> bytes:
    slot = data[offset : offset + SLOT_LENGTH]
    if len(slot) != SLOT_LENGTH:
        raise OrderDecodeError(f"Encoded order too short: no slot at byte {offset}")
    return slot


def read_reactor(encoded: Union[bytes, str]) -> str:
    """
    Адрес reactor из кодированного ордера (checksum).

    Raises:
        OrderDecodeError: Данные короче ожидаемого
    """
    data = _to_bytes(encoded)
    head = _slot(data, ORDER_INFO_OFFSET)
    pointer = int.from_bytes(head, "big")
    if pointer < len(data):
        # OrderInfo в tail: pointer относительно начала кортежа
        reactor_slot = _slot(data, ORDER_INFO_OFFSET + pointer)
    else:
        # слово не может быть offset-ом: это inline reactor (Relay)
        reactor_slot = head
    return to_checksum_address(reactor_slot[SLOT_LENGTH - ADDRESS_LENGTH :])


# =============================================================================
# PARSER
# =============================================================================


class OrderParser:
    """
    Парсер кодированных ордеров с инжектированным реестром reactors.

    Args:
        registry: Реестр reactor → OrderType (по умолчанию известные деплои)
    """

    def __init__(self, registry: Optional[ReactorRegistry] = None):
        self.registry = registry or ReactorRegistry.default()

    def reactor_order_type(self, encoded: Union[bytes, str]) -> OrderType:
        """
        OrderType по reactor (без различения Dutch/Limit).

        Raises:
            MissingConfiguration: Reactor не зарегистрирован
        """
        reactor = read_reactor(encoded)
        order_type = self.registry.lookup(reactor)
        logger.debug("Reactor %s identifies %s order", reactor, order_type.value)
        return order_type

    def parse(self, encoded: Union[bytes, str]) -> Order:
        """
        Декодирование ордера по раскладке его варианта.

        Для V2/V3/Priority с пустой cosignature возвращается unsigned форма.

        Raises:
            MissingConfiguration: Reactor не зарегистрирован
            OrderDecodeError: Данные не соответствуют раскладке варианта
        """
        data = _to_bytes(encoded)
        return decode_order(data, self.reactor_order_type(data))

    def order_type(self, encoded: Union[bytes, str]) -> OrderType:
        """OrderType кодированного ордера; Dutch без распада — LIMIT."""
        data = _to_bytes(encoded)
        order_type = self.reactor_order_type(data)
        if order_type != OrderType.DUTCH:
            return order_type
        return get_order_type(decode_order(data, order_type))


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def get_order_type_from_encoded(
    encoded: Union[bytes, str], registry: Optional[ReactorRegistry] = None
) -> OrderType:
    return OrderParser(registry).order_type(encoded)


def parse_order(encoded: Union[bytes, str], registry: Optional[ReactorRegistry] = None) -> Order:
    return OrderParser(registry).parse(encoded)


def parse_order_json(data: Dict[str, Any]) -> Order:
    """
    Восстановление ордера из JSON-формы по полю "type".

    Raises:
        MissingConfiguration: Неизвестный тип
        pydantic.ValidationError: Нарушены инварианты варианта
    """
    return order_from_json(data)
