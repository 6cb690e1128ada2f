"""
Constants — фиксированные параметры settlement-контрактов

Значения зафиксированы в задеплоенных контрактах (Permit2, reactors, multicall3).
Любое изменение ломает совместимость с on-chain расчётами.
"""

from enum import Enum
from typing import Final


# =============================================================================
# ORDER TYPES
# =============================================================================


class OrderType(str, Enum):
    """Тип ордера (определяется reactor-адресом)"""

    DUTCH = "Dutch"
    RELAY = "Relay"
    DUTCH_V2 = "Dutch_V2"
    DUTCH_V3 = "Dutch_V3"
    LIMIT = "Limit"
    PRIORITY = "Priority"


# =============================================================================
# NUMERIC BOUNDS
# =============================================================================
UINT256_MAX: Final[int] = 2**256 - 1
INT256_MIN: Final[int] = -(2**255)
INT256_MAX: Final[int] = 2**255 - 1

# Basis points (10_000 = 100%), используется для exclusivity override
BPS: Final[int] = 10_000

# Milli-basis points (10_000_000 = 100%), используется для priority scaling
MPS: Final[int] = 10**7

# exclusivityOverrideBps == 0 означает строгую эксклюзивность
STRICT_EXCLUSIVITY: Final[int] = 0


# =============================================================================
# ADDRESSES
# =============================================================================
ZERO_ADDRESS: Final[str] = "0x0000000000000000000000000000000000000000"

PERMIT2_ADDRESS: Final[str] = "0x000000000022D473030F116dDEE9F6B43aC78BA3"

# multicall3: одинаковый адрес на всех EVM-сетях кроме zkSync (create2 отличается)
MULTICALL_ADDRESS: Final[str] = "0xcA11bde05977b3631167028862bE2a173976CA11"
ZKSYNC_MULTICALL_ADDRESS: Final[str] = "0xF9cda624FBC7e059355ce98a31693d299FACd963"
ZKSYNC_CHAIN_ID: Final[int] = 324

# Permit2 EIP-712 domain name
PERMIT2_DOMAIN_NAME: Final[str] = "Permit2"


def multicall_address_on(chain_id: int = 1) -> str:
    """Адрес multicall3 для сети."""
    if chain_id == ZKSYNC_CHAIN_ID:
        return ZKSYNC_MULTICALL_ADDRESS
    return MULTICALL_ADDRESS
