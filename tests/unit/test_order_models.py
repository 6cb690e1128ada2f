"""
Tests for order models

Проверка:
- Инвариантов конструирования каждого варианта (ValueError без коэрции)
- Нормализации адресов и hex данных
- Классификации (Limit, cosigned)
- JSON round-trip через order_to_json / order_from_json
"""

import pytest
from pydantic import ValidationError

from tests.unit.factories import (
    COSIGNER,
    FILLER,
    NOW,
    RECIPIENT,
    TOKEN_IN,
    TOKEN_OUT,
    V2_REACTOR,
    make_dutch_order,
    make_info,
)
from uniswapx_sdk.config.constants import OrderType
from uniswapx_sdk.core.domain import (
    CosignedPriorityOrder,
    CosignedV2DutchOrder,
    CosignedV3DutchOrder,
    DutchInput,
    DutchOrder,
    DutchOutput,
    NonlinearDutchDecay,
    PriorityCosignerData,
    PriorityInput,
    PriorityOutput,
    RelayFee,
    UnsignedPriorityOrder,
    UnsignedV2DutchOrder,
    UnsignedV3DutchOrder,
    V2CosignerData,
    check_submittable,
    get_order_type,
    is_cosigned,
    order_from_json,
    order_to_json,
    with_non_fee_recipient,
)
from uniswapx_sdk.core.errors import MissingConfiguration


# =============================================================================
# PRIMITIVES
# =============================================================================


class TestPrimitives:
    def test_address_checksummed(self):
        output = DutchOutput(
            token=TOKEN_OUT.lower(), start_amount=1, end_amount=1, recipient=RECIPIENT.lower()
        )
        assert output.token == TOKEN_OUT
        assert output.recipient == RECIPIENT

    def test_invalid_address(self):
        with pytest.raises(ValidationError):
            DutchInput(token="0x1234", start_amount=1, end_amount=1)

    def test_negative_uint_rejected(self):
        with pytest.raises(ValidationError):
            DutchInput(token=TOKEN_IN, start_amount=-1, end_amount=1)

    def test_uint_overflow_rejected(self):
        with pytest.raises(ValidationError):
            DutchInput(token=TOKEN_IN, start_amount=2**256, end_amount=1)

    def test_hex_data_normalized(self):
        info = make_info(V2_REACTOR, additional_validation_data="0xABCD")
        assert info.additional_validation_data == "0xabcd"

    @pytest.mark.parametrize("value", ["abcd", "0xabc", "0xzz"])
    def test_invalid_hex_data(self, value):
        with pytest.raises(ValidationError):
            make_info(V2_REACTOR, additional_validation_data=value)

    def test_models_frozen(self, dutch_order):
        with pytest.raises(ValidationError):
            dutch_order.decay_start_time = 0


# =============================================================================
# DUTCH
# =============================================================================


class TestDutchOrder:
    def test_valid(self, dutch_order):
        assert dutch_order.decay_start_time == NOW - 100
        assert get_order_type(dutch_order) == OrderType.DUTCH

    def test_limit_classification(self, limit_order):
        assert get_order_type(limit_order) == OrderType.LIMIT

    def test_output_must_decay_down(self):
        with pytest.raises(ValidationError, match="startAmount must be greater than endAmount"):
            make_dutch_order(output_start=100, output_end=200)

    def test_decay_end_before_start(self):
        with pytest.raises(ValidationError, match="decayEndTime"):
            make_dutch_order(decay_start_time=NOW, decay_end_time=NOW - 1)

    def test_decay_after_deadline(self):
        with pytest.raises(ValidationError, match="deadline"):
            make_dutch_order(decay_start_time=NOW, decay_end_time=NOW + 101)

    def test_outputs_required(self, dutch_order):
        data = dutch_order.to_json()
        data["outputs"] = []
        with pytest.raises(ValidationError, match="outputs not set"):
            DutchOrder.from_json(data)

    def test_check_submittable(self, dutch_order):
        check_submittable(dutch_order, now=NOW)
        with pytest.raises(ValueError, match="Deadline must be in the future"):
            check_submittable(dutch_order, now=NOW + 100)


# =============================================================================
# V2 / V3
# =============================================================================


class TestV2DutchOrder:
    def test_cosigned_is_separate_variant(self, unsigned_v2_order, cosigned_v2_order):
        assert not isinstance(cosigned_v2_order, UnsignedV2DutchOrder)
        assert is_cosigned(cosigned_v2_order)
        assert not is_cosigned(unsigned_v2_order)
        assert cosigned_v2_order.to_unsigned() == unsigned_v2_order

    def test_output_overrides_length(self, unsigned_v2_order, v2_cosigner_data):
        data = v2_cosigner_data.model_copy(update={"output_overrides": [2100, 2100]})
        with pytest.raises(ValidationError, match="outputOverrides length"):
            CosignedV2DutchOrder(
                **unsigned_v2_order.model_dump(), cosigner_data=data, cosignature="0x01"
            )

    def test_output_override_below_start(self, unsigned_v2_order, v2_cosigner_data):
        data = v2_cosigner_data.model_copy(update={"output_overrides": [1999]})
        with pytest.raises(ValidationError, match="outputOverride smaller"):
            CosignedV2DutchOrder(
                **unsigned_v2_order.model_dump(), cosigner_data=data, cosignature="0x01"
            )

    def test_input_override_above_start(self, unsigned_v2_order, v2_cosigner_data):
        data = v2_cosigner_data.model_copy(update={"input_override": 1001})
        with pytest.raises(ValidationError, match="inputOverride larger"):
            CosignedV2DutchOrder(
                **unsigned_v2_order.model_dump(), cosigner_data=data, cosignature="0x01"
            )

    def test_empty_cosignature(self, unsigned_v2_order, v2_cosigner_data):
        with pytest.raises(ValidationError, match="cosignature not set"):
            CosignedV2DutchOrder(
                **unsigned_v2_order.model_dump(),
                cosigner_data=v2_cosigner_data,
                cosignature="0x",
            )

    def test_cosigner_decay_window(self):
        with pytest.raises(ValidationError):
            V2CosignerData(
                decay_start_time=10,
                decay_end_time=5,
                exclusive_filler=FILLER,
                exclusivity_override_bps=0,
                output_overrides=[0],
            )


class TestV3DutchOrder:
    def test_curve_strictly_increasing(self):
        with pytest.raises(ValidationError, match="strictly increasing"):
            NonlinearDutchDecay(relative_blocks=[2, 2], relative_amounts=[1, 2])

    def test_curve_length_mismatch(self):
        with pytest.raises(ValidationError, match="length mismatch"):
            NonlinearDutchDecay(relative_blocks=[1, 2], relative_amounts=[1])

    def test_curve_offset_width(self):
        with pytest.raises(ValidationError):
            NonlinearDutchDecay(relative_blocks=[70000], relative_amounts=[1])

    def test_end_amounts(self, unsigned_v3_order):
        assert unsigned_v3_order.input.end_amount() == 1200
        assert unsigned_v3_order.outputs[0].end_amount() == 900
        assert unsigned_v3_order.outputs[0].max_amount_out() == 900

    def test_cosigned(self, cosigned_v3_order, unsigned_v3_order):
        assert isinstance(cosigned_v3_order, CosignedV3DutchOrder)
        assert cosigned_v3_order.to_unsigned() == unsigned_v3_order
        assert get_order_type(cosigned_v3_order) == OrderType.DUTCH_V3


# =============================================================================
# PRIORITY / RELAY
# =============================================================================


class TestPriorityOrder:
    def _fields(self, input_mps=0, output_mps=1, start_block=200):
        return dict(
            info=make_info(V2_REACTOR),
            cosigner=COSIGNER,
            auction_start_block=start_block,
            input=PriorityInput(token=TOKEN_IN, amount=1000, mps_per_priority_fee_wei=input_mps),
            outputs=[
                PriorityOutput(
                    token=TOKEN_OUT,
                    amount=1000,
                    mps_per_priority_fee_wei=output_mps,
                    recipient=RECIPIENT,
                )
            ],
        )

    def test_auction_not_configured(self):
        with pytest.raises(ValidationError, match="not configured"):
            UnsignedPriorityOrder(**self._fields(input_mps=0, output_mps=0))

    def test_both_sides_scaled(self):
        with pytest.raises(ValidationError, match="either input or output"):
            UnsignedPriorityOrder(**self._fields(input_mps=1, output_mps=1))

    def test_input_and_one_output_scaled(self):
        """Scaling input и хотя бы одного output запрещено."""
        fields = self._fields(input_mps=5, output_mps=5)
        fields["outputs"].append(
            PriorityOutput(
                token=TOKEN_OUT, amount=500, mps_per_priority_fee_wei=0, recipient=RECIPIENT
            )
        )
        with pytest.raises(ValidationError, match="either input or output"):
            UnsignedPriorityOrder(**fields)

    def test_input_side_only(self):
        order = UnsignedPriorityOrder(**self._fields(input_mps=1, output_mps=0))
        assert order.input.mps_per_priority_fee_wei == 1

    def test_zero_start_block(self):
        with pytest.raises(ValidationError):
            UnsignedPriorityOrder(**self._fields(start_block=0))

    def test_target_block_before_start(self):
        with pytest.raises(ValidationError, match="auctionTargetBlock"):
            CosignedPriorityOrder(
                **self._fields(),
                cosigner_data=PriorityCosignerData(auction_target_block=200),
                cosignature="0x01",
            )

    def test_target_block_required(self):
        with pytest.raises(ValidationError, match="auctionTargetBlock not set"):
            CosignedPriorityOrder(
                **self._fields(),
                cosigner_data=PriorityCosignerData(auction_target_block=0),
                cosignature="0x01",
            )


class TestRelayOrder:
    def test_fee_must_escalate(self):
        with pytest.raises(ValidationError, match="less than or equal"):
            RelayFee(token=TOKEN_IN, start_amount=20, end_amount=10, start_time=0, end_time=1)

    def test_fee_window(self):
        with pytest.raises(ValidationError, match="feeEndTime"):
            RelayFee(token=TOKEN_IN, start_amount=1, end_amount=1, start_time=10, end_time=5)

    def test_fee_after_deadline(self, relay_order):
        data = relay_order.to_json()
        data["fee"]["endTime"] = str(NOW + 1001)
        with pytest.raises(ValidationError, match="deadline"):
            type(relay_order).from_json(data)

    def test_order_type(self, relay_order):
        assert get_order_type(relay_order) == OrderType.RELAY


# =============================================================================
# RECIPIENTS
# =============================================================================


class TestWithNonFeeRecipient:
    def test_replaces_recipients(self, dutch_order):
        updated = with_non_fee_recipient(dutch_order, FILLER)
        assert all(output.recipient == FILLER for output in updated.outputs)
        assert dutch_order.outputs[0].recipient == RECIPIENT

    def test_keeps_fee_outputs(self, dutch_order):
        fee_output = dutch_order.outputs[0].model_copy(update={"recipient": COSIGNER})
        order = dutch_order.model_copy(update={"outputs": [dutch_order.outputs[0], fee_output]})
        updated = with_non_fee_recipient(order, FILLER, fee_recipient=COSIGNER)
        assert [output.recipient for output in updated.outputs] == [FILLER, COSIGNER]

    def test_same_as_fee_recipient(self, dutch_order):
        with pytest.raises(ValueError, match="newRecipient"):
            with_non_fee_recipient(dutch_order, FILLER, fee_recipient=FILLER.lower())

    def test_relay_has_no_outputs(self, relay_order):
        with pytest.raises(TypeError):
            with_non_fee_recipient(relay_order, FILLER)


# =============================================================================
# JSON
# =============================================================================


class TestJsonRoundTrip:
    @pytest.mark.parametrize(
        "fixture_name",
        [
            "dutch_order",
            "limit_order",
            "unsigned_v2_order",
            "cosigned_v2_order",
            "unsigned_v3_order",
            "cosigned_v3_order",
            "unsigned_priority_order",
            "cosigned_priority_order",
            "relay_order",
        ],
    )
    def test_round_trip(self, request, fixture_name):
        order = request.getfixturevalue(fixture_name)
        restored = order_from_json(order_to_json(order))
        assert type(restored) is type(order)
        assert restored == order

    def test_json_form(self, cosigned_v2_order):
        data = order_to_json(cosigned_v2_order)
        assert data["type"] == "Dutch_V2"
        assert data["info"]["nonce"] == "1"
        assert data["cosignerData"]["outputOverrides"] == ["2100"]
        assert data["cosignature"].startswith("0x")

    def test_limit_tag(self, limit_order):
        assert order_to_json(limit_order)["type"] == "Limit"

    def test_curve_json(self, unsigned_v3_order):
        curve = order_to_json(unsigned_v3_order)["input"]["curve"]
        assert curve == {"relativeBlocks": [10, 20], "relativeAmounts": ["-100", "-200"]}

    def test_unknown_type(self, dutch_order):
        data = order_to_json(dutch_order)
        data["type"] = "Dutch_V9"
        with pytest.raises(MissingConfiguration):
            order_from_json(data)

    def test_empty_cosignature_gives_unsigned(self, unsigned_v2_order):
        data = order_to_json(unsigned_v2_order)
        data["cosignature"] = "0x"
        assert isinstance(order_from_json(data), UnsignedV2DutchOrder)

    def test_unknown_variant_rejected(self):
        with pytest.raises(TypeError):
            order_to_json(object())
