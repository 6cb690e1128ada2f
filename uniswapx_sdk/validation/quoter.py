"""
Order Quoter — валидация ордеров симуляцией settlement

UniswapX ордера симулируются через quoter контракт (quote(bytes order, bytes sig)),
Relay ордера — прямым вызовом reactor.execute((bytes order, bytes sig)).
Результат каждого ордера — OrderValidation плюс resolved суммы при успехе.

Батч:
- ордера с block override (cosigned Priority) симулируются отдельным multicall
  на своём блоке, остальные — одним общим multicall
- multicalls выполняются параллельно, результаты возвращаются в порядке входа

Терминальная коррекция (после классификации):
- Expired или истёкший deadline: если nonce уже использован — NonceUsed
  (reactor проверяет deadline раньше nonce, исполненные ордера выглядят истёкшими)
- OK с block override при текущем блоке ниже override — OrderNotFillableYet
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, Union

from eth_abi import decode as abi_decode
from eth_abi import encode as abi_encode
from eth_abi.exceptions import DecodingError
from eth_utils import function_signature_to_4byte_selector, to_checksum_address

from uniswapx_sdk.config.chains import ChainConfig
from uniswapx_sdk.config.constants import OrderType
from uniswapx_sdk.core.codec.abi import ORDER_INFO_ABI, encode_order
from uniswapx_sdk.core.domain.order import UNISWAPX_ORDER_CLASSES, Order
from uniswapx_sdk.core.domain.order_info import (
    ResolutionContext,
    ResolvedOrder,
    ResolvedRelayOrder,
    TokenAmount,
)
from uniswapx_sdk.core.domain.relay import RelayOrder
from uniswapx_sdk.core.domain.resolution import block_overrides, resolve_order
from uniswapx_sdk.core.domain.types import hex_to_bytes
from uniswapx_sdk.core.ledger import Call, CallResult, Ledger
from uniswapx_sdk.core.signing.swapper import recover_signer
from uniswapx_sdk.nonce.manager import NonceManager
from uniswapx_sdk.validation.outcomes import OrderValidation, classify_revert

logger = logging.getLogger(__name__)

QUOTE_SELECTOR = function_signature_to_4byte_selector("quote(bytes,bytes)")
RELAY_EXECUTE_SELECTOR = function_signature_to_4byte_selector("execute((bytes,bytes))")

# ResolvedOrder quoter контракта: (info, input, outputs, sig, hash)
RESOLVED_ORDER_ABI = (
    f"({ORDER_INFO_ABI},(address,uint256,uint256),(address,uint256,address)[],bytes,bytes32)"
)


@dataclass(frozen=True)
class SignedOrder:
    order: Order
    signature: Union[bytes, str]

    def signature_bytes(self) -> bytes:
        if isinstance(self.signature, str):
            return hex_to_bytes(self.signature)
        return bytes(self.signature)


@dataclass(frozen=True)
class OrderQuote:
    """Результат валидации; quote задан только для успешной симуляции."""

    validation: OrderValidation
    quote: Optional[Union[ResolvedOrder, ResolvedRelayOrder]] = None


def _override_block(order: Order) -> Optional[int]:
    overrides = block_overrides(order)
    if not overrides:
        return None
    return int(overrides["number"], 16)


# =============================================================================
# BASE QUOTER
# =============================================================================


class _BaseOrderQuoter:
    """Общий цикл: симуляция → классификация → терминальная коррекция."""

    def __init__(
        self,
        ledger: Ledger,
        chain_config: ChainConfig,
        nonce_manager: Optional[NonceManager] = None,
    ):
        self._ledger = ledger
        self.chain_config = chain_config
        self._nonce_manager = nonce_manager or NonceManager(ledger, chain_config.get_permit2())

    @property
    def target(self) -> str:
        raise NotImplementedError

    def _check_variant(self, order: Order) -> None:
        raise NotImplementedError

    def _call_data(self, signed: SignedOrder) -> bytes:
        raise NotImplementedError

    def _classify(self, signed: SignedOrder, result: CallResult) -> OrderValidation:
        raise NotImplementedError

    def _quote(
        self, signed: SignedOrder, result: CallResult, now: int
    ) -> Optional[Union[ResolvedOrder, ResolvedRelayOrder]]:
        raise NotImplementedError

    async def validate(self, order: Order, signature: Union[bytes, str]) -> OrderQuote:
        """Валидация одного подписанного ордера."""
        return (await self.validate_batch([SignedOrder(order, signature)]))[0]

    async def validate_batch(self, orders: Sequence[SignedOrder]) -> List[OrderQuote]:
        """
        Валидация батча подписанных ордеров.

        Returns:
            OrderQuote на каждый ордер, в порядке входа

        Raises:
            TypeError: Вариант ордера не поддерживается этим quoter
            ValueError: Ledger вернул число результатов, отличное от числа вызовов
        """
        for signed in orders:
            self._check_variant(signed.order)
        if not orders:
            return []

        results = await self._simulate(orders)
        validations = [
            OrderValidation.OK if result.success else self._classify(signed, result)
            for signed, result in zip(orders, results)
        ]
        now = await self._ledger.timestamp()
        validations = await self._check_terminal_states(orders, validations, now)

        quotes: List[OrderQuote] = []
        for signed, result, validation in zip(orders, results, validations):
            quote = self._quote(signed, result, now) if result.success else None
            quotes.append(OrderQuote(validation=validation, quote=quote))
        return quotes

    async def _simulate(self, orders: Sequence[SignedOrder]) -> List[CallResult]:
        overridden: List[Tuple[int, int]] = []
        plain: List[int] = []
        for i, signed in enumerate(orders):
            block = _override_block(signed.order)
            if block is None:
                plain.append(i)
            else:
                overridden.append((i, block))

        tasks = [
            self._ledger.multicall([self._call(orders[i])], block_number=block)
            for i, block in overridden
        ]
        if plain:
            tasks.append(self._ledger.multicall([self._call(orders[i]) for i in plain]))
        logger.debug(
            "Simulating %d orders in %d multicalls (%d with block override)",
            len(orders),
            len(tasks),
            len(overridden),
        )
        batches = await asyncio.gather(*tasks)
        expected = [1] * len(overridden) + ([len(plain)] if plain else [])
        for size, batch in zip(expected, batches):
            if len(batch) != size:
                raise ValueError(f"Ledger returned {len(batch)} results for {size} calls")

        results: List[Optional[CallResult]] = [None] * len(orders)
        for (i, _), batch in zip(overridden, batches):
            results[i] = batch[0]
        if plain:
            for i, result in zip(plain, batches[-1]):
                results[i] = result
        return results

    def _call(self, signed: SignedOrder) -> Call:
        return Call(target=self.target, data=self._call_data(signed))

    async def _check_terminal_states(
        self, orders: Sequence[SignedOrder], validations: List[OrderValidation], now: int
    ) -> List[OrderValidation]:
        current_block: Optional[int] = None
        if any(
            validation == OrderValidation.OK and _override_block(signed.order) is not None
            for signed, validation in zip(orders, validations)
        ):
            current_block = await self._ledger.block_number()

        return list(
            await asyncio.gather(
                *(
                    self._check_terminal_state(signed, validation, now, current_block)
                    for signed, validation in zip(orders, validations)
                )
            )
        )

    async def _check_terminal_state(
        self,
        signed: SignedOrder,
        validation: OrderValidation,
        now: int,
        current_block: Optional[int],
    ) -> OrderValidation:
        order = signed.order
        if validation == OrderValidation.EXPIRED or order.info.deadline < now:
            try:
                swapper = recover_signer(order, signed.signature_bytes(), self.chain_config)
            except ValueError as e:
                logger.debug("Cannot recover signer of expired order: %s", e)
                return OrderValidation.EXPIRED
            used = await self._nonce_manager.is_used(swapper, order.info.nonce)
            return OrderValidation.NONCE_USED if used else OrderValidation.EXPIRED

        block = _override_block(order)
        if validation == OrderValidation.OK and block is not None and current_block < block:
            return OrderValidation.ORDER_NOT_FILLABLE_YET
        return validation


# =============================================================================
# UNISWAPX
# =============================================================================


class OrderQuoter(_BaseOrderQuoter):
    """
    Quoter для UniswapX ордеров (Dutch, Limit, V2, V3, Priority).

    Args:
        ledger: Async доступ к сети
        chain_config: Адреса контрактов сети
        quoter_address: Явный адрес quoter (иначе из chain_config)
        nonce_manager: Для терминальной коррекции (иначе создаётся по Permit2 сети)

    Raises:
        MissingConfiguration: Нет quoter или Permit2 для сети
    """

    def __init__(
        self,
        ledger: Ledger,
        chain_config: ChainConfig,
        quoter_address: Optional[str] = None,
        nonce_manager: Optional[NonceManager] = None,
    ):
        super().__init__(ledger, chain_config, nonce_manager)
        self._quoter = to_checksum_address(quoter_address or chain_config.get_quoter())

    @property
    def target(self) -> str:
        return self._quoter

    def _check_variant(self, order: Order) -> None:
        if not isinstance(order, UNISWAPX_ORDER_CLASSES):
            raise TypeError(f"OrderQuoter does not support {type(order).__name__}")

    def _call_data(self, signed: SignedOrder) -> bytes:
        return QUOTE_SELECTOR + abi_encode(
            ["bytes", "bytes"], [encode_order(signed.order), signed.signature_bytes()]
        )

    def _classify(self, signed: SignedOrder, result: CallResult) -> OrderValidation:
        return classify_revert(
            result.return_data, signed.order.info.additional_validation_data
        )

    def _quote(self, signed: SignedOrder, result: CallResult, now: int) -> Optional[ResolvedOrder]:
        try:
            (resolved,) = abi_decode([RESOLVED_ORDER_ABI], result.return_data)
        except DecodingError as e:
            logger.warning("Cannot decode quote result: %s", e)
            return None
        _, input_token, outputs, _, _ = resolved
        return ResolvedOrder(
            input=TokenAmount(token=to_checksum_address(input_token[0]), amount=input_token[1]),
            outputs=[
                TokenAmount(token=to_checksum_address(output[0]), amount=output[1])
                for output in outputs
            ],
        )


# =============================================================================
# RELAY
# =============================================================================


class RelayOrderQuoter(_BaseOrderQuoter):
    """
    Quoter для Relay ордеров: симуляция reactor.execute.

    execute ничего не возвращает, поэтому quote — резолв ордера на текущий timestamp.
    """

    def __init__(
        self,
        ledger: Ledger,
        chain_config: ChainConfig,
        reactor_address: Optional[str] = None,
        nonce_manager: Optional[NonceManager] = None,
    ):
        super().__init__(ledger, chain_config, nonce_manager)
        self._reactor = to_checksum_address(
            reactor_address or chain_config.get_reactor(OrderType.RELAY)
        )

    @property
    def target(self) -> str:
        return self._reactor

    def _check_variant(self, order: Order) -> None:
        if not isinstance(order, RelayOrder):
            raise TypeError(f"RelayOrderQuoter does not support {type(order).__name__}")

    def _call_data(self, signed: SignedOrder) -> bytes:
        return RELAY_EXECUTE_SELECTOR + abi_encode(
            ["(bytes,bytes)"], [(encode_order(signed.order), signed.signature_bytes())]
        )

    def _classify(self, signed: SignedOrder, result: CallResult) -> OrderValidation:
        return classify_revert(result.return_data)

    def _quote(
        self, signed: SignedOrder, result: CallResult, now: int
    ) -> Optional[ResolvedRelayOrder]:
        return resolve_order(signed.order, ResolutionContext(timestamp=now))
