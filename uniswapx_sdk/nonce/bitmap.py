"""
Nonce Bitmap — арифметика Permit2 unordered nonces

Permit2 хранит для владельца разреженный bitmap использованных nonces,
разбитый на 256-битные слова:

    nonce = word * 256 + bit_pos

Отмена выполняется вызовом invalidateUnorderedNonces(word, mask).
"""

from collections import OrderedDict
from dataclasses import dataclass
from typing import Final, Iterable, List, Tuple

from uniswapx_sdk.config.constants import UINT256_MAX

WORD_SIZE: Final[int] = 256

# Возвращается get_first_unset_bit, когда все биты слова заняты
NO_UNSET_BIT: Final[int] = -1


@dataclass(frozen=True)
class CancelParams:
    """Аргументы invalidateUnorderedNonces(word, mask)."""

    word: int
    mask: int


def split_nonce(nonce: int) -> Tuple[int, int]:
    """
    Разбор nonce на (word, bit_pos).

    >>> split_nonce(257)
    (1, 1)
    """
    if nonce < 0 or nonce > UINT256_MAX:
        raise ValueError(f"Nonce out of uint256 range: {nonce}")
    return nonce // WORD_SIZE, nonce % WORD_SIZE


def build_nonce(word: int, bit_pos: int) -> int:
    """
    Сборка nonce из (word, bit_pos).

    >>> build_nonce(4, 1)
    1025
    """
    if not 0 <= bit_pos < WORD_SIZE:
        raise ValueError(f"Bit position out of range: {bit_pos}")
    return word * WORD_SIZE + bit_pos


def get_first_unset_bit(bitmap: int) -> int:
    """Позиция младшего нулевого бита; NO_UNSET_BIT для полностью занятого слова."""
    for i in range(WORD_SIZE):
        if not (bitmap >> i) & 1:
            return i
    return NO_UNSET_BIT


def set_bit(bitmap: int, bit_pos: int) -> int:
    """Bitmap с установленным битом (без изменений, если бит уже установлен)."""
    return bitmap | (1 << bit_pos)


def is_bit_set(bitmap: int, bit_pos: int) -> bool:
    return (bitmap >> bit_pos) & 1 == 1


def get_cancel_single_params(nonce: int) -> CancelParams:
    word, bit_pos = split_nonce(nonce)
    return CancelParams(word=word, mask=1 << bit_pos)


def get_cancel_multiple_params(nonces: Iterable[int]) -> List[CancelParams]:
    """
    Группировка nonces по словам с объединением масок.

    Порядок групп соответствует первому появлению слова во входе.
    """
    masks: "OrderedDict[int, int]" = OrderedDict()
    for nonce in nonces:
        word, bit_pos = split_nonce(nonce)
        masks[word] = masks.get(word, 0) | (1 << bit_pos)
    return [CancelParams(word=word, mask=mask) for word, mask in masks.items()]
