"""
Signing: Permit2 witness hashing, swapper signatures and cosigning.
"""

from uniswapx_sdk.core.signing.cosign import (
    SIGNATURE_LENGTH,
    cosign,
    cosignature_hash,
    cosigner_digest,
    recover_address,
    recover_cosigner,
)
from uniswapx_sdk.core.signing.eip712 import (
    DUTCH_ORDER_TYPES,
    PRIORITY_ORDER_TYPES,
    RELAY_ORDER_TYPES,
    V2_DUTCH_ORDER_TYPES,
    V3_DUTCH_ORDER_TYPES,
    order_hash,
    permit_data,
    signable_message,
    signing_digest,
    witness,
)
from uniswapx_sdk.core.signing.swapper import is_signed_by, recover_signer

__all__ = [
    # EIP-712 types
    "DUTCH_ORDER_TYPES",
    "V2_DUTCH_ORDER_TYPES",
    "V3_DUTCH_ORDER_TYPES",
    "PRIORITY_ORDER_TYPES",
    "RELAY_ORDER_TYPES",
    # Order hash and permit
    "witness",
    "order_hash",
    "permit_data",
    "signable_message",
    "signing_digest",
    # Swapper
    "recover_signer",
    "is_signed_by",
    # Cosigner
    "SIGNATURE_LENGTH",
    "cosigner_digest",
    "cosignature_hash",
    "cosign",
    "recover_cosigner",
    "recover_address",
]
