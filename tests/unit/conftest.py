"""
Общие фикстуры unit тестов: конфигурация сети и ордера всех вариантов.
"""

import pytest

from tests.unit.factories import (
    CHAIN_ID,
    COSIGNER,
    COSIGNER_KEY,
    DUTCH_REACTOR,
    FILLER,
    NOW,
    PRIORITY_REACTOR,
    QUOTER,
    RECIPIENT,
    RELAY_REACTOR,
    SWAPPER,
    TOKEN_IN,
    TOKEN_OUT,
    V2_REACTOR,
    V3_REACTOR,
    make_dutch_order,
    make_info,
    sign_hash,
)
from uniswapx_sdk.config.chains import ChainConfig, ReactorRegistry
from uniswapx_sdk.config.constants import PERMIT2_ADDRESS, ZERO_ADDRESS, OrderType
from uniswapx_sdk.core.domain import (
    DutchInput,
    DutchOutput,
    NonlinearDutchDecay,
    PriorityCosignerData,
    PriorityInput,
    PriorityOutput,
    RelayFee,
    RelayInput,
    RelayOrder,
    RelayOrderInfo,
    UnsignedPriorityOrder,
    UnsignedV2DutchOrder,
    UnsignedV3DutchOrder,
    V2CosignerData,
    V3CosignerData,
    V3DutchInput,
    V3DutchOutput,
)
from uniswapx_sdk.core.signing import cosign


# =============================================================================
# CONFIG FIXTURES
# =============================================================================


@pytest.fixture
def chain_config():
    """Конфигурация тестовой сети со всеми reactors."""
    return ChainConfig(
        chain_id=CHAIN_ID,
        permit2=PERMIT2_ADDRESS,
        quoter=QUOTER,
        reactors={
            OrderType.DUTCH: DUTCH_REACTOR,
            OrderType.DUTCH_V2: V2_REACTOR,
            OrderType.DUTCH_V3: V3_REACTOR,
            OrderType.PRIORITY: PRIORITY_REACTOR,
            OrderType.RELAY: RELAY_REACTOR,
        },
        exclusive_filler_validation=ZERO_ADDRESS,
    )


@pytest.fixture
def registry(chain_config):
    return ReactorRegistry.from_configs([chain_config])


# =============================================================================
# ORDER FIXTURES
# =============================================================================


@pytest.fixture
def dutch_order():
    """Dutch: output 1e18 → 9e17 между NOW-100 и NOW."""
    return make_dutch_order()


@pytest.fixture
def limit_order():
    """Dutch без распада (классифицируется как Limit)."""
    return make_dutch_order(output_start=10**18, output_end=10**18)


@pytest.fixture
def unsigned_v2_order():
    return UnsignedV2DutchOrder(
        info=make_info(V2_REACTOR),
        cosigner=COSIGNER,
        input=DutchInput(token=TOKEN_IN, start_amount=1000, end_amount=1000),
        outputs=[
            DutchOutput(token=TOKEN_OUT, start_amount=2000, end_amount=1800, recipient=RECIPIENT)
        ],
    )


@pytest.fixture
def v2_cosigner_data():
    return V2CosignerData(
        decay_start_time=NOW - 100,
        decay_end_time=NOW + 100,
        exclusive_filler=FILLER,
        exclusivity_override_bps=100,
        input_override=0,
        output_overrides=[2100],
    )


@pytest.fixture
def cosigned_v2_order(unsigned_v2_order, v2_cosigner_data):
    return cosign(unsigned_v2_order, v2_cosigner_data, sign_hash(COSIGNER_KEY), CHAIN_ID)


@pytest.fixture
def unsigned_v3_order():
    return UnsignedV3DutchOrder(
        info=make_info(V3_REACTOR),
        cosigner=COSIGNER,
        starting_base_fee=10**9,
        input=V3DutchInput(
            token=TOKEN_IN,
            start_amount=1000,
            curve=NonlinearDutchDecay(relative_blocks=[10, 20], relative_amounts=[-100, -200]),
            max_amount=1150,
        ),
        outputs=[
            V3DutchOutput(
                token=TOKEN_OUT,
                start_amount=1000,
                curve=NonlinearDutchDecay(relative_blocks=[10], relative_amounts=[100]),
                recipient=RECIPIENT,
                min_amount=920,
            )
        ],
    )


@pytest.fixture
def v3_cosigner_data():
    return V3CosignerData(
        decay_start_block=100,
        exclusive_filler=ZERO_ADDRESS,
        exclusivity_override_bps=0,
        input_override=0,
        output_overrides=[0],
    )


@pytest.fixture
def cosigned_v3_order(unsigned_v3_order, v3_cosigner_data):
    return cosign(unsigned_v3_order, v3_cosigner_data, sign_hash(COSIGNER_KEY), CHAIN_ID)


@pytest.fixture
def unsigned_priority_order():
    return UnsignedPriorityOrder(
        info=make_info(PRIORITY_REACTOR),
        cosigner=COSIGNER,
        auction_start_block=200,
        baseline_priority_fee_wei=0,
        input=PriorityInput(token=TOKEN_IN, amount=1000, mps_per_priority_fee_wei=0),
        outputs=[
            PriorityOutput(
                token=TOKEN_OUT, amount=1000, mps_per_priority_fee_wei=1, recipient=RECIPIENT
            )
        ],
    )


@pytest.fixture
def cosigned_priority_order(unsigned_priority_order):
    return cosign(
        unsigned_priority_order,
        PriorityCosignerData(auction_target_block=150),
        sign_hash(COSIGNER_KEY),
        CHAIN_ID,
    )


@pytest.fixture
def relay_order():
    return RelayOrder(
        info=RelayOrderInfo(reactor=RELAY_REACTOR, swapper=SWAPPER, nonce=7, deadline=NOW + 1000),
        input=RelayInput(token=TOKEN_IN, amount=1000, recipient=RECIPIENT),
        fee=RelayFee(
            token=TOKEN_IN,
            start_amount=10,
            end_amount=20,
            start_time=NOW - 50,
            end_time=NOW + 50,
        ),
        universal_router_calldata="0xdeadbeef",
    )
