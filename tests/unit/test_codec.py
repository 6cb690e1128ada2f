"""
Tests for binary codec

Каноническая ABI-кодировка каждого варианта и обратное декодирование.
"""

import pytest
from eth_abi import decode as abi_decode

from tests.unit.factories import RELAY_REACTOR
from uniswapx_sdk.config.constants import OrderType
from uniswapx_sdk.core.codec import (
    PRIORITY_COSIGNER_DATA_ABI,
    V2_COSIGNER_DATA_ABI,
    V3_DUTCH_ORDER_ABI,
    decode_order,
    encode_cosigner_data,
    encode_order,
    serialize_order,
)
from uniswapx_sdk.core.domain import PriorityCosignerData
from uniswapx_sdk.core.errors import OrderDecodeError


VARIANTS = [
    ("dutch_order", OrderType.DUTCH),
    ("limit_order", OrderType.LIMIT),
    ("unsigned_v2_order", OrderType.DUTCH_V2),
    ("cosigned_v2_order", OrderType.DUTCH_V2),
    ("unsigned_v3_order", OrderType.DUTCH_V3),
    ("cosigned_v3_order", OrderType.DUTCH_V3),
    ("unsigned_priority_order", OrderType.PRIORITY),
    ("cosigned_priority_order", OrderType.PRIORITY),
    ("relay_order", OrderType.RELAY),
]


class TestEncodeDecode:
    @pytest.mark.parametrize("fixture_name,order_type", VARIANTS)
    def test_decode_restores_variant(self, request, fixture_name, order_type):
        order = request.getfixturevalue(fixture_name)
        decoded = decode_order(encode_order(order), order_type)
        assert type(decoded) is type(order)
        assert decoded == order

    def test_hex_input_accepted(self, dutch_order):
        assert decode_order(serialize_order(dutch_order), OrderType.DUTCH) == dutch_order

    def test_serialize_is_hex(self, dutch_order):
        encoded = serialize_order(dutch_order)
        assert encoded.startswith("0x")
        assert bytes.fromhex(encoded[2:]) == encode_order(dutch_order)

    def test_encoding_is_deterministic(self, cosigned_v3_order):
        assert encode_order(cosigned_v3_order) == encode_order(cosigned_v3_order)


class TestLayouts:
    def test_tuple_offset_prefix(self, dutch_order):
        """Кортеж динамический: первое слово — offset 0x20."""
        data = encode_order(dutch_order)
        assert int.from_bytes(data[:32], "big") == 32

    def test_relay_reactor_inline(self, relay_order):
        """RelayOrderInfo статический: reactor — первое слово кортежа."""
        data = encode_order(relay_order)
        assert "0x" + data[44:64].hex() == RELAY_REACTOR.lower()

    def test_v3_relative_blocks_packed(self, cosigned_v3_order):
        (values,) = abi_decode([V3_DUTCH_ORDER_ABI], encode_order(cosigned_v3_order))
        packed_blocks, amounts = values[3][2]
        assert packed_blocks == 10 | (20 << 16)
        assert list(amounts) == [-100, -200]

    def test_unsigned_has_empty_cosignature(self, unsigned_v3_order):
        (values,) = abi_decode([V3_DUTCH_ORDER_ABI], encode_order(unsigned_v3_order))
        assert values[-1] == b""


class TestCosignerDataEncoding:
    def test_v2(self, v2_cosigner_data):
        encoded = encode_cosigner_data(v2_cosigner_data)
        (values,) = abi_decode([V2_COSIGNER_DATA_ABI], encoded)
        assert values[0] == v2_cosigner_data.decay_start_time
        assert list(values[5]) == [2100]

    def test_priority(self):
        encoded = encode_cosigner_data(PriorityCosignerData(auction_target_block=150))
        assert abi_decode([PRIORITY_COSIGNER_DATA_ABI], encoded) == ((150,),)


class TestDecodeErrors:
    def test_garbage(self):
        with pytest.raises(OrderDecodeError):
            decode_order(b"\x01\x02\x03", OrderType.DUTCH)

    def test_invalid_hex(self):
        with pytest.raises(OrderDecodeError, match="not valid hex"):
            decode_order("0xzz", OrderType.DUTCH)

    def test_wrong_layout(self, relay_order):
        with pytest.raises(OrderDecodeError):
            decode_order(encode_order(relay_order), OrderType.DUTCH_V3)

    def test_invalid_decoded_model(self, dutch_order):
        """Декодированные поля нарушают инварианты модели."""
        data = bytearray(encode_order(dutch_order))
        # decayEndTime (слово 3 кортежа) за deadline
        data[32 + 2 * 32 : 32 + 3 * 32] = (2**64).to_bytes(32, "big")
        with pytest.raises(OrderDecodeError):
            decode_order(bytes(data), OrderType.DUTCH)

    def test_unsupported_variant(self):
        with pytest.raises(TypeError):
            encode_order("not an order")
