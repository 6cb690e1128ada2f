"""
Primitive types — ABI-совместимые примитивы для pydantic моделей

- Address: EIP-55 checksum адрес (нормализуется при конструировании)
- Uint256 / Int256: целые в диапазоне Solidity типов, в JSON сериализуются строкой
- HexData: 0x-префиксная hex строка (lowercase), для opaque bytes
"""

from typing import Annotated, Any, Dict

from eth_utils import is_address, to_checksum_address
from pydantic import AfterValidator, BaseModel, Field, PlainSerializer
from pydantic.alias_generators import to_camel

from uniswapx_sdk.config.constants import INT256_MAX, INT256_MIN, UINT256_MAX


# =============================================================================
# VALIDATORS
# =============================================================================


def _checksum_address(value: str) -> str:
    if not is_address(value):
        raise ValueError(f"Invalid address: {value}")
    return to_checksum_address(value)


def _hex_data(value: str) -> str:
    if not value.startswith("0x"):
        raise ValueError(f"Hex data must be 0x-prefixed: {value}")
    body = value[2:]
    if len(body) % 2 != 0:
        raise ValueError(f"Hex data must have even length: {value}")
    try:
        bytes.fromhex(body)
    except ValueError:
        raise ValueError(f"Invalid hex data: {value}")
    return "0x" + body.lower()


# =============================================================================
# ANNOTATED TYPES
# =============================================================================
Address = Annotated[str, AfterValidator(_checksum_address)]

Uint256 = Annotated[
    int,
    Field(ge=0, le=UINT256_MAX),
    PlainSerializer(str, return_type=str, when_used="json"),
]

Int256 = Annotated[
    int,
    Field(ge=INT256_MIN, le=INT256_MAX),
    PlainSerializer(str, return_type=str, when_used="json"),
]

HexData = Annotated[str, AfterValidator(_hex_data)]


def hex_to_bytes(value: str) -> bytes:
    """0x-hex → bytes."""
    return bytes.fromhex(value[2:] if value.startswith("0x") else value)


def bytes_to_hex(value: bytes) -> str:
    """bytes → 0x-hex (lowercase)."""
    return "0x" + value.hex()


# =============================================================================
# BASE MODEL
# =============================================================================


class OrderModel(BaseModel):
    """
    База для всех моделей ордеров.

    Immutable (frozen=True), поля в snake_case, JSON-форма в camelCase
    с uint/int в виде десятичных строк.
    """

    model_config = {"frozen": True, "alias_generator": to_camel, "populate_by_name": True}

    def to_json(self) -> Dict[str, Any]:
        """JSON-форма (camelCase, большие числа строками)."""
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_json(cls, data: Dict[str, Any]):
        """Восстановление из JSON-формы (инварианты проверяются заново)."""
        return cls.model_validate(data)
