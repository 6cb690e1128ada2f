"""
Configuration: order types, protocol constants and per-chain deployments.
"""

from uniswapx_sdk.config.chains import (
    DEFAULT_CHAIN_CONFIGS,
    NETWORKS_WITH_SAME_ADDRESS,
    ChainConfig,
    ReactorRegistry,
    get_chain_config,
)
from uniswapx_sdk.config.constants import (
    BPS,
    INT256_MAX,
    INT256_MIN,
    MPS,
    MULTICALL_ADDRESS,
    PERMIT2_ADDRESS,
    PERMIT2_DOMAIN_NAME,
    STRICT_EXCLUSIVITY,
    UINT256_MAX,
    ZERO_ADDRESS,
    OrderType,
    multicall_address_on,
)

__all__ = [
    # Constants
    "BPS",
    "MPS",
    "UINT256_MAX",
    "INT256_MIN",
    "INT256_MAX",
    "STRICT_EXCLUSIVITY",
    "ZERO_ADDRESS",
    "PERMIT2_ADDRESS",
    "PERMIT2_DOMAIN_NAME",
    "MULTICALL_ADDRESS",
    "OrderType",
    "multicall_address_on",
    # Chains
    "ChainConfig",
    "DEFAULT_CHAIN_CONFIGS",
    "NETWORKS_WITH_SAME_ADDRESS",
    "ReactorRegistry",
    "get_chain_config",
]
