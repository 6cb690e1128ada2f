"""
Nonce Manager — выделение Permit2 nonces для владельцев

Сканирует bitmap владельца с кэшированного слова, пропускает полностью занятые
слова и возвращает первый свободный бит, помечая его занятым в локальном кэше.

Кэш не является резервированием: nonces, выделенные вне этого экземпляра
(или параллельно из другого контекста для того же владельца), ему неизвестны,
и use_nonce может вернуть дубликат.
"""

import logging
from typing import Dict, Tuple

from eth_utils import to_checksum_address

from uniswapx_sdk.config.constants import UINT256_MAX
from uniswapx_sdk.core.ledger import Ledger
from uniswapx_sdk.nonce.bitmap import (
    build_nonce,
    get_first_unset_bit,
    is_bit_set,
    set_bit,
    split_nonce,
)

logger = logging.getLogger(__name__)


class NonceManager:
    """
    Трекер Permit2 nonces по владельцам.

    Args:
        ledger: Async доступ к nonceBitmap
        permit2_address: Адрес Permit2 в сети
        start_nonce: Nonce, с которого начинается сканирование (меньшие не выдаются)
    """

    def __init__(self, ledger: Ledger, permit2_address: str, start_nonce: int = 0):
        self._ledger = ledger
        self.permit2_address = to_checksum_address(permit2_address)
        self._start_word, self._start_bit = split_nonce(start_nonce)
        # owner -> (word, bitmap) последнего использованного слова
        self._cache: Dict[str, Tuple[int, int]] = {}

    async def use_nonce(self, owner: str) -> int:
        """
        Следующий свободный nonce владельца; помечается занятым локально.

        Returns:
            nonce = word * 256 + bit_pos
        """
        key = owner.lower()
        word, bitmap = await self._next_open_word(owner)
        bit_pos = get_first_unset_bit(bitmap)
        self._cache[key] = (word, set_bit(bitmap, bit_pos))
        nonce = build_nonce(word, bit_pos)
        logger.debug("Allocated nonce %d for %s (word=%d bit=%d)", nonce, owner, word, bit_pos)
        return nonce

    async def is_used(self, owner: str, nonce: int) -> bool:
        """Nonce уже использован или отменён on-chain (одно чтение ledger)."""
        word, bit_pos = split_nonce(nonce)
        bitmap = await self._ledger.nonce_bitmap(self.permit2_address, owner, word)
        return is_bit_set(bitmap, bit_pos)

    async def _next_open_word(self, owner: str) -> Tuple[int, int]:
        cached = self._cache.get(owner.lower())
        if cached is not None:
            word, bitmap = cached
        else:
            word = self._start_word
            bitmap = await self._ledger.nonce_bitmap(self.permit2_address, owner, word)
            # биты ниже start_nonce в стартовом слове считаются занятыми
            bitmap |= (1 << self._start_bit) - 1

        while bitmap == UINT256_MAX:
            word += 1
            logger.debug("Nonce word %d full for %s, reading next", word - 1, owner)
            bitmap = await self._ledger.nonce_bitmap(self.permit2_address, owner, word)

        return word, bitmap
