"""
Per-chain configuration — адреса контрактов по сетям

Конфигурация передаётся явно в конструкторы (OrderQuoter, NonceManager, signing),
глобальные таблицы используются только как значения по умолчанию.
Это позволяет тестировать ядро с инжектированными фикстурами.
"""

from dataclasses import dataclass, field
from typing import Dict, Final, Iterable, Mapping, Optional, Tuple

from eth_utils import to_checksum_address

from uniswapx_sdk.config.constants import (
    PERMIT2_ADDRESS,
    ZERO_ADDRESS,
    OrderType,
    multicall_address_on,
)
from uniswapx_sdk.core.errors import MissingConfiguration


# =============================================================================
# CHAIN CONFIG
# =============================================================================


@dataclass(frozen=True)
class ChainConfig:
    """
    Адреса контрактов одной сети.

    Нулевой адрес в reactors означает "тип ордера объявлен, но не задеплоен".
    """

    chain_id: int
    permit2: Optional[str] = None
    quoter: Optional[str] = None
    reactors: Mapping[OrderType, str] = field(default_factory=dict)
    exclusive_filler_validation: Optional[str] = None
    multicall: Optional[str] = None

    def get_permit2(self) -> str:
        if not self.permit2:
            raise MissingConfiguration("permit2", str(self.chain_id))
        return self.permit2

    def get_quoter(self) -> str:
        if not self.quoter:
            raise MissingConfiguration("quoter", str(self.chain_id))
        return self.quoter

    def get_reactor(self, order_type: OrderType) -> str:
        """
        Адрес reactor для типа ордера.

        Raises:
            MissingConfiguration: Если reactor не задан или равен нулевому адресу
        """
        address = self.reactors.get(order_type)
        if not address or address == ZERO_ADDRESS:
            raise MissingConfiguration("reactor", str(self.chain_id))
        return address

    def get_exclusive_filler_validation(self) -> str:
        if not self.exclusive_filler_validation:
            raise MissingConfiguration("exclusiveFillerValidation", str(self.chain_id))
        return self.exclusive_filler_validation

    def get_multicall(self) -> str:
        return self.multicall or multicall_address_on(self.chain_id)


# =============================================================================
# DEFAULT DEPLOYMENTS
# =============================================================================
# Сети с одинаковыми адресами (mainnet, goerli, polygon, base, unichain)
NETWORKS_WITH_SAME_ADDRESS: Final[Tuple[int, ...]] = (1, 5, 137, 8453, 130)

_QUOTER_SAME_ADDRESS: Final[str] = "0x54539967a06Fc0E3C3ED0ee320Eb67362D13C5fF"
_QUOTER_L2: Final[str] = "0x88440407634F89873c5D9439987Ac4BE9725fea8"
_EXCLUSIVE_FILLER_VALIDATION: Final[str] = "0x8A66A74e15544db9688B68B06E116f5d19e5dF90"

_DUTCH_REACTOR: Final[str] = "0x6000da47483062A0D734Ba3dc7576Ce6A0B645C4"
_RELAY_REACTOR: Final[str] = "0x0000000000A4e21E2597DCac987455c48b12edBF"

_SAME_ADDRESS_REACTORS: Final[Dict[OrderType, str]] = {
    OrderType.DUTCH: _DUTCH_REACTOR,
    OrderType.DUTCH_V2: ZERO_ADDRESS,
    OrderType.RELAY: _RELAY_REACTOR,
}

_REACTOR_OVERRIDES: Final[Dict[int, Dict[OrderType, str]]] = {
    1: {
        OrderType.DUTCH: _DUTCH_REACTOR,
        OrderType.DUTCH_V2: "0x00000011F84B9aa48e5f8aA8B9897600006289Be",
        OrderType.PRIORITY: ZERO_ADDRESS,
        OrderType.RELAY: _RELAY_REACTOR,
    },
    12341234: {
        OrderType.DUTCH: "0xbD7F9D0239f81C94b728d827a87b9864972661eC",
        OrderType.DUTCH_V2: ZERO_ADDRESS,
        OrderType.RELAY: _RELAY_REACTOR,
    },
    11155111: {
        OrderType.DUTCH_V2: "0x0e22B6638161A89533940Db590E67A52474bEBcd",
        OrderType.DUTCH: "0xD6c073F2A3b676B8f9002b276B618e0d8bA84Fad",
        OrderType.RELAY: _RELAY_REACTOR,
    },
    42161: {
        OrderType.DUTCH_V2: "0x1bd1aAdc9E230626C44a139d7E70d842749351eb",
        OrderType.DUTCH: ZERO_ADDRESS,
        OrderType.RELAY: ZERO_ADDRESS,
        OrderType.DUTCH_V3: "0xB274d5F4b833b61B340b654d600A864fB604a87c",
    },
    8453: {
        OrderType.DUTCH: ZERO_ADDRESS,
        OrderType.DUTCH_V2: ZERO_ADDRESS,
        OrderType.RELAY: ZERO_ADDRESS,
        OrderType.PRIORITY: "0x000000001Ec5656dcdB24D90DFa42742738De729",
    },
    130: {
        OrderType.DUTCH: ZERO_ADDRESS,
        OrderType.DUTCH_V2: ZERO_ADDRESS,
        OrderType.RELAY: ZERO_ADDRESS,
        OrderType.PRIORITY: "0x00000006021a6Bce796be7ba509BBBA71e956e37",
    },
}

_QUOTER_OVERRIDES: Final[Dict[int, str]] = {
    11155111: "0xAA6187C48096e093c37d2cF178B1e8534A6934f7",
    42161: _QUOTER_L2,
    12341234: "0xbea0901A41177811b099F787D753436b2c47690E",
    8453: _QUOTER_L2,
    130: _QUOTER_L2,
}

_NO_EXCLUSIVE_FILLER_VALIDATION: Final[Tuple[int, ...]] = (5, 11155111, 42161)


def _build_default_configs() -> Dict[int, ChainConfig]:
    chain_ids = list(NETWORKS_WITH_SAME_ADDRESS) + [11155111, 42161, 12341234]
    configs: Dict[int, ChainConfig] = {}
    for chain_id in chain_ids:
        if chain_id in _NO_EXCLUSIVE_FILLER_VALIDATION:
            filler_validation = ZERO_ADDRESS
        else:
            filler_validation = _EXCLUSIVE_FILLER_VALIDATION
        configs[chain_id] = ChainConfig(
            chain_id=chain_id,
            permit2=PERMIT2_ADDRESS,
            quoter=_QUOTER_OVERRIDES.get(chain_id, _QUOTER_SAME_ADDRESS),
            reactors=dict(_REACTOR_OVERRIDES.get(chain_id, _SAME_ADDRESS_REACTORS)),
            exclusive_filler_validation=filler_validation,
            multicall=multicall_address_on(chain_id),
        )
    return configs


DEFAULT_CHAIN_CONFIGS: Final[Dict[int, ChainConfig]] = _build_default_configs()


def get_chain_config(
    chain_id: int, configs: Optional[Mapping[int, ChainConfig]] = None
) -> ChainConfig:
    """
    Конфигурация сети.

    Args:
        chain_id: Идентификатор сети
        configs: Таблица конфигураций (по умолчанию DEFAULT_CHAIN_CONFIGS)

    Raises:
        MissingConfiguration: Если сеть не поддерживается
    """
    table = DEFAULT_CHAIN_CONFIGS if configs is None else configs
    if chain_id not in table:
        raise MissingConfiguration("chainId", str(chain_id))
    return table[chain_id]


# =============================================================================
# REACTOR REGISTRY
# =============================================================================


@dataclass(frozen=True)
class ReactorRegistry:
    """
    Обратный индекс: reactor address (lowercase) → OrderType.

    Строится инверсией per-chain таблиц reactors. Нулевой адрес пропускается:
    он объявлен для нескольких типов и не идентифицирует вариант.
    """

    entries: Mapping[str, OrderType] = field(default_factory=dict)

    @classmethod
    def from_configs(cls, configs: Iterable[ChainConfig]) -> "ReactorRegistry":
        entries: Dict[str, OrderType] = {}
        for config in configs:
            for order_type, address in config.reactors.items():
                key = address.lower()
                if key == ZERO_ADDRESS:
                    continue
                existing = entries.get(key)
                if existing is not None and existing != order_type:
                    raise ValueError(
                        f"Reactor {address} registered as both {existing.value} and {order_type.value}"
                    )
                entries[key] = order_type
        return cls(entries=entries)

    @classmethod
    def default(cls) -> "ReactorRegistry":
        return cls.from_configs(DEFAULT_CHAIN_CONFIGS.values())

    def lookup(self, reactor: str) -> OrderType:
        """
        OrderType по адресу reactor.

        Raises:
            MissingConfiguration: Если адрес не зарегистрирован
        """
        key = reactor.lower()
        if key not in self.entries:
            raise MissingConfiguration("reactor", key)
        return self.entries[key]

    def reactor_for(self, order_type: OrderType) -> str:
        """Первый зарегистрированный reactor для типа (checksum)."""
        for address, registered in self.entries.items():
            if registered == order_type:
                return to_checksum_address(address)
        raise MissingConfiguration("orderType", order_type.value)
