"""
Cosign — подпись cosigner-а над order hash и cosigner data

Hash, подписываемый cosigner-ом (solidity packed):
- V2:           keccak(orderHash ‖ abi.encode(cosignerData))
- V3, Priority: keccak(orderHash ‖ uint256(chainId) ‖ abi.encode(cosignerData))

Подпись делается над сырым hash (без EIP-191 префикса), поэтому восстановление
адреса идёт через eth_keys напрямую.
"""

from typing import Callable, Union

from eth_keys import keys
from eth_keys.exceptions import BadSignature
from eth_keys.exceptions import ValidationError as KeyValidationError
from eth_utils import keccak

from uniswapx_sdk.core.codec.abi import encode_cosigner_data
from uniswapx_sdk.core.domain.order import COSIGNED_ORDER_CLASSES, CosignedOrder
from uniswapx_sdk.core.domain.priority import (
    CosignedPriorityOrder,
    PriorityCosignerData,
    UnsignedPriorityOrder,
)
from uniswapx_sdk.core.domain.types import bytes_to_hex, hex_to_bytes
from uniswapx_sdk.core.domain.v2_dutch import (
    CosignedV2DutchOrder,
    UnsignedV2DutchOrder,
    V2CosignerData,
)
from uniswapx_sdk.core.domain.v3_dutch import (
    CosignedV3DutchOrder,
    UnsignedV3DutchOrder,
    V3CosignerData,
)
from uniswapx_sdk.core.signing.eip712 import order_hash

CosignerData = Union[V2CosignerData, V3CosignerData, PriorityCosignerData]
CosignableOrder = Union[
    UnsignedV2DutchOrder,
    CosignedV2DutchOrder,
    UnsignedV3DutchOrder,
    CosignedV3DutchOrder,
    UnsignedPriorityOrder,
    CosignedPriorityOrder,
]

# signer получает 32-байтный hash и возвращает 65-байтную подпись r ‖ s ‖ v
HashSigner = Callable[[bytes], bytes]

SIGNATURE_LENGTH = 65

_COSIGNED_CLASS = {
    UnsignedV2DutchOrder: CosignedV2DutchOrder,
    UnsignedV3DutchOrder: CosignedV3DutchOrder,
    UnsignedPriorityOrder: CosignedPriorityOrder,
}


# =============================================================================
# HASH
# =============================================================================


def cosigner_digest(order: CosignableOrder, cosigner_data: CosignerData, chain_id: int) -> bytes:
    """
    Hash, который подписывает cosigner.

    Args:
        order: Unsigned или cosigned ордер (order hash у обеих форм одинаков)
        cosigner_data: Cosigner data, соответствующая варианту ордера
        chain_id: Chain id (не входит в hash для V2)

    Raises:
        TypeError: Cosigner data не соответствует варианту
    """
    if isinstance(order, (UnsignedV2DutchOrder, CosignedV2DutchOrder)):
        expected = V2CosignerData
    elif isinstance(order, (UnsignedV3DutchOrder, CosignedV3DutchOrder)):
        expected = V3CosignerData
    elif isinstance(order, (UnsignedPriorityOrder, CosignedPriorityOrder)):
        expected = PriorityCosignerData
    else:
        raise TypeError(f"Order variant is not cosignable: {type(order).__name__}")
    if not isinstance(cosigner_data, expected):
        raise TypeError(
            f"{type(order).__name__} requires {expected.__name__}, "
            f"got {type(cosigner_data).__name__}"
        )

    payload = order_hash(order)
    if expected is not V2CosignerData:
        payload += chain_id.to_bytes(32, "big")
    payload += encode_cosigner_data(cosigner_data)
    return keccak(payload)


def cosignature_hash(order: CosignedOrder, chain_id: int) -> bytes:
    """Hash cosign-а уже cosigned ордера."""
    return cosigner_digest(order, order.cosigner_data, chain_id)


# =============================================================================
# RECOVERY
# =============================================================================


def recover_address(digest: bytes, signature: Union[bytes, str]) -> str:
    """
    Адрес подписавшего сырой 32-байтный hash.

    v принимается как 27/28 (Ethereum) или 0/1 (raw secp256k1).

    Raises:
        ValueError: Подпись не 65 байт или невалидна
    """
    raw = hex_to_bytes(signature) if isinstance(signature, str) else bytes(signature)
    if len(raw) != SIGNATURE_LENGTH:
        raise ValueError(f"Signature must be {SIGNATURE_LENGTH} bytes, got {len(raw)}")
    v = raw[64]
    if v >= 27:
        v -= 27
    if v not in (0, 1):
        raise ValueError(f"Invalid signature recovery id: {raw[64]}")
    try:
        signature_obj = keys.Signature(signature_bytes=raw[:64] + bytes([v]))
        public_key = signature_obj.recover_public_key_from_msg_hash(digest)
    except (BadSignature, KeyValidationError) as e:
        raise ValueError(f"Invalid signature: {e}") from e
    return public_key.to_checksum_address()


def recover_cosigner(order: CosignedOrder, chain_id: int) -> str:
    """Адрес cosigner-а, восстановленный из cosignature."""
    return recover_address(cosignature_hash(order, chain_id), order.cosignature)


# =============================================================================
# COSIGN
# =============================================================================


def cosign(
    order: CosignableOrder,
    cosigner_data: CosignerData,
    signer: HashSigner,
    chain_id: int,
) -> CosignedOrder:
    """
    Cosign ордера: подпись hash-а и сборка cosigned формы.

    Cosigned ордер уже несущий cosigner data пере-подписывается с новой.

    Args:
        order: Unsigned (или cosigned) V2/V3/Priority ордер
        cosigner_data: Параметры аукциона
        signer: Подписывает 32-байтный hash, возвращает r ‖ s ‖ v
        chain_id: Chain id

    Raises:
        ValueError: Cosigner data нарушает инварианты ордера
    """
    if isinstance(order, COSIGNED_ORDER_CLASSES):
        order = order.to_unsigned()
    digest = cosigner_digest(order, cosigner_data, chain_id)
    signature = bytes(signer(digest))
    if len(signature) != SIGNATURE_LENGTH:
        raise ValueError(f"Signer returned {len(signature)} bytes, expected {SIGNATURE_LENGTH}")

    fields = {name: getattr(order, name) for name in type(order).model_fields}
    cosigned_cls = _COSIGNED_CLASS[type(order)]
    return cosigned_cls(
        **fields,
        cosigner_data=cosigner_data,
        cosignature=bytes_to_hex(signature),
    )
