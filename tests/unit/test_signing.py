"""
Tests for signing

- Order hash (EIP-712 struct hash witness-а)
- Permit2 witness данные и digest swapper-а
- Cosign / восстановление cosigner-а
"""

import pytest
from eth_account import Account

from tests.unit.factories import (
    CHAIN_ID,
    COSIGNER,
    COSIGNER_KEY,
    OTHER_FILLER,
    SWAPPER,
    SWAPPER_KEY,
    sign_hash,
)
from uniswapx_sdk.config.constants import PERMIT2_ADDRESS
from uniswapx_sdk.core.domain import PriorityCosignerData
from uniswapx_sdk.core.signing import (
    SIGNATURE_LENGTH,
    cosign,
    cosignature_hash,
    cosigner_digest,
    is_signed_by,
    order_hash,
    permit_data,
    recover_address,
    recover_cosigner,
    recover_signer,
    signable_message,
    signing_digest,
    witness,
)


# =============================================================================
# ORDER HASH
# =============================================================================


class TestOrderHash:
    def test_is_32_bytes(self, dutch_order, relay_order, cosigned_v3_order):
        for order in (dutch_order, relay_order, cosigned_v3_order):
            assert len(order_hash(order)) == 32

    def test_depends_on_fields(self, dutch_order):
        other = dutch_order.model_copy(
            update={"info": dutch_order.info.model_copy(update={"nonce": 2})}
        )
        assert order_hash(dutch_order) != order_hash(other)

    @pytest.mark.parametrize(
        "cosigned_name,unsigned_name",
        [
            ("cosigned_v2_order", "unsigned_v2_order"),
            ("cosigned_v3_order", "unsigned_v3_order"),
            ("cosigned_priority_order", "unsigned_priority_order"),
        ],
    )
    def test_cosigner_data_not_in_hash(self, request, cosigned_name, unsigned_name):
        cosigned = request.getfixturevalue(cosigned_name)
        unsigned = request.getfixturevalue(unsigned_name)
        assert order_hash(cosigned) == order_hash(unsigned)

    def test_witness_type_names(self, dutch_order, unsigned_v2_order, relay_order):
        assert witness(dutch_order)[0] == "ExclusiveDutchOrder"
        assert witness(unsigned_v2_order)[0] == "V2DutchOrder"
        assert witness(relay_order)[0] == "RelayOrder"


# =============================================================================
# PERMIT2
# =============================================================================


class TestPermitData:
    def test_single_permit(self, dutch_order, chain_config):
        data = permit_data(dutch_order, chain_config)
        assert data["domain"] == {
            "name": "Permit2",
            "chainId": CHAIN_ID,
            "verifyingContract": PERMIT2_ADDRESS,
        }
        assert "PermitWitnessTransferFrom" in data["types"]
        assert data["values"]["spender"] == dutch_order.info.reactor
        assert data["values"]["permitted"] == {
            "token": dutch_order.input.token,
            "amount": dutch_order.input.end_amount,
        }
        assert data["values"]["nonce"] == dutch_order.info.nonce

    def test_v3_permits_max_amount(self, unsigned_v3_order, chain_config):
        permitted = permit_data(unsigned_v3_order, chain_config)["values"]["permitted"]
        assert permitted["amount"] == unsigned_v3_order.input.max_amount

    def test_relay_batch_permit(self, relay_order, chain_config):
        data = permit_data(relay_order, chain_config)
        assert "PermitBatchWitnessTransferFrom" in data["types"]
        assert [p["amount"] for p in data["values"]["permitted"]] == [1000, 20]


class TestSwapperSignature:
    @pytest.mark.parametrize(
        "fixture_name", ["dutch_order", "unsigned_v2_order", "unsigned_v3_order", "relay_order"]
    )
    def test_recover_signer(self, request, fixture_name, chain_config):
        order = request.getfixturevalue(fixture_name)
        signature = SWAPPER_KEY.sign_msg_hash(signing_digest(order, chain_config)).to_bytes()
        assert recover_signer(order, signature, chain_config) == SWAPPER
        assert is_signed_by(order, signature, chain_config)

    def test_eth_account_signature(self, dutch_order, chain_config):
        """Подпись eth_account (v = 27/28) над signable message восстанавливается."""
        signed = Account.sign_message(
            signable_message(dutch_order, chain_config), private_key=SWAPPER_KEY.to_bytes()
        )
        assert recover_signer(dutch_order, signed.signature, chain_config) == SWAPPER
        assert signed.message_hash == signing_digest(dutch_order, chain_config)

    def test_wrong_signer(self, dutch_order, chain_config):
        signature = COSIGNER_KEY.sign_msg_hash(signing_digest(dutch_order, chain_config)).to_bytes()
        assert not is_signed_by(dutch_order, signature, chain_config)

    def test_digest_depends_on_chain(self, dutch_order, chain_config):
        other = type(chain_config)(chain_id=10, permit2=PERMIT2_ADDRESS)
        assert signing_digest(dutch_order, chain_config) != signing_digest(dutch_order, other)

    def test_malformed_signature(self, dutch_order, chain_config):
        with pytest.raises(ValueError, match="65 bytes"):
            recover_signer(dutch_order, b"\x00" * 64, chain_config)
        assert not is_signed_by(dutch_order, "0x" + "00" * 10, chain_config)


# =============================================================================
# COSIGN
# =============================================================================


class TestCosign:
    @pytest.mark.parametrize(
        "fixture_name", ["cosigned_v2_order", "cosigned_v3_order", "cosigned_priority_order"]
    )
    def test_recover_cosigner(self, request, fixture_name):
        order = request.getfixturevalue(fixture_name)
        assert len(bytes.fromhex(order.cosignature[2:])) == SIGNATURE_LENGTH
        assert recover_cosigner(order, CHAIN_ID) == COSIGNER

    def test_v2_hash_ignores_chain(self, cosigned_v2_order):
        assert cosignature_hash(cosigned_v2_order, 1) == cosignature_hash(cosigned_v2_order, 10)

    def test_v3_hash_binds_chain(self, cosigned_v3_order):
        assert cosignature_hash(cosigned_v3_order, 1) != cosignature_hash(cosigned_v3_order, 10)
        assert recover_cosigner(cosigned_v3_order, 10) != COSIGNER

    def test_recosign_replaces_data(self, cosigned_v2_order, v2_cosigner_data):
        data = v2_cosigner_data.model_copy(update={"exclusive_filler": OTHER_FILLER})
        recosigned = cosign(cosigned_v2_order, data, sign_hash(COSIGNER_KEY), CHAIN_ID)
        assert recosigned.cosigner_data.exclusive_filler == OTHER_FILLER
        assert recover_cosigner(recosigned, CHAIN_ID) == COSIGNER

    def test_mismatched_cosigner_data(self, unsigned_v2_order):
        with pytest.raises(TypeError):
            cosigner_digest(unsigned_v2_order, PriorityCosignerData(auction_target_block=1), 1)

    def test_not_cosignable(self, dutch_order, v2_cosigner_data):
        with pytest.raises(TypeError):
            cosigner_digest(dutch_order, v2_cosigner_data, CHAIN_ID)

    def test_invalid_cosigner_data_rejected(self, unsigned_priority_order):
        """Target block не раньше start block: cosigned форма не строится."""
        with pytest.raises(ValueError):
            cosign(
                unsigned_priority_order,
                PriorityCosignerData(auction_target_block=500),
                sign_hash(COSIGNER_KEY),
                CHAIN_ID,
            )

    def test_signer_wrong_length(self, unsigned_v2_order, v2_cosigner_data):
        with pytest.raises(ValueError, match="expected 65"):
            cosign(unsigned_v2_order, v2_cosigner_data, lambda digest: b"\x01" * 64, CHAIN_ID)


class TestRecoverAddress:
    def test_accepts_both_v_conventions(self):
        digest = b"\x11" * 32
        raw = SWAPPER_KEY.sign_msg_hash(digest).to_bytes()
        ethereum_style = raw[:64] + bytes([raw[64] + 27])
        assert recover_address(digest, raw) == SWAPPER
        assert recover_address(digest, ethereum_style) == SWAPPER
        assert recover_address(digest, "0x" + raw.hex()) == SWAPPER

    def test_invalid_recovery_id(self):
        with pytest.raises(ValueError, match="recovery id"):
            recover_address(b"\x11" * 32, b"\x01" * 64 + bytes([5]))
