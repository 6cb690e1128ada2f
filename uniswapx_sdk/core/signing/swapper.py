"""
Swapper signature — подпись Permit2 witness digest-а владельцем средств.
"""

from typing import Union

from uniswapx_sdk.config.chains import ChainConfig
from uniswapx_sdk.core.domain.order import Order
from uniswapx_sdk.core.signing.cosign import recover_address
from uniswapx_sdk.core.signing.eip712 import signing_digest


def recover_signer(order: Order, signature: Union[bytes, str], chain_config: ChainConfig) -> str:
    """
    Адрес, подписавший permit ордера.

    Raises:
        ValueError: Подпись не 65 байт или невалидна
        MissingConfiguration: Permit2 не задан для сети
    """
    return recover_address(signing_digest(order, chain_config), signature)


def is_signed_by(
    order: Order, signature: Union[bytes, str], chain_config: ChainConfig
) -> bool:
    """Подпись принадлежит swapper-у ордера."""
    try:
        signer = recover_signer(order, signature, chain_config)
    except ValueError:
        return False
    return signer.lower() == order.info.swapper.lower()
