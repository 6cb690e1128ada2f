"""
Nonlinear Block Curve — многосегментная кривая распада по блокам (V3 Dutch)

Кривая задаётся парами (relative_block, relative_amount):
- relative_blocks: строго возрастающие смещения от decayStartBlock
- relative_amounts: знаковые int256, вычитаются из startAmount
  (положительное значение = сумма уменьшается)

On-chain смещения упакованы по 16 бит в один uint256 (не более 16 точек).
Функции повторяют логику NonlinearDutchDecayLib settlement-контракта.
"""

from typing import Final, List, Sequence, Tuple

from uniswapx_sdk.core.errors import InvalidDecayCurve
from uniswapx_sdk.core.math.decay import linear_block_decay


# =============================================================================
# CONSTANTS
# =============================================================================
RELATIVE_BLOCK_BITS: Final[int] = 16
RELATIVE_BLOCK_MASK: Final[int] = (1 << RELATIVE_BLOCK_BITS) - 1
MAX_CURVE_POINTS: Final[int] = 256 // RELATIVE_BLOCK_BITS


# =============================================================================
# PACKING
# =============================================================================


def encode_relative_blocks(relative_blocks: Sequence[int]) -> int:
    """
    Упаковка смещений в uint256: смещение i занимает биты [16i, 16i + 16).

    Raises:
        InvalidDecayCurve: Больше 16 смещений или смещение вне [0, 2**16)
    """
    if len(relative_blocks) > MAX_CURVE_POINTS:
        raise InvalidDecayCurve(
            f"Curve has {len(relative_blocks)} relative blocks, max {MAX_CURVE_POINTS}"
        )
    packed = 0
    for i, block in enumerate(relative_blocks):
        if block < 0 or block > RELATIVE_BLOCK_MASK:
            raise InvalidDecayCurve(f"Relative block {block} does not fit in 16 bits")
        packed |= block << (i * RELATIVE_BLOCK_BITS)
    return packed


def decode_relative_blocks(packed: int, length: int) -> List[int]:
    """
    Распаковка первых `length` смещений.

    Длина берётся из relative_amounts: упакованное значение не хранит её,
    нулевые смещения неотличимы от отсутствующих.
    """
    if length > MAX_CURVE_POINTS:
        raise InvalidDecayCurve(f"Curve length {length} exceeds {MAX_CURVE_POINTS}")
    if packed < 0 or packed >= 2**256:
        raise InvalidDecayCurve(f"Packed relative blocks out of uint256 range: {packed}")
    return [(packed >> (i * RELATIVE_BLOCK_BITS)) & RELATIVE_BLOCK_MASK for i in range(length)]


# =============================================================================
# RESOLUTION
# =============================================================================


def _locate_array_position(
    relative_blocks: Sequence[int], current_relative_block: int
) -> Tuple[int, int]:
    # первая точка >= текущего смещения и предыдущая; после конца кривой → (last, last)
    prev = 0
    for nxt, block in enumerate(relative_blocks):
        if block >= current_relative_block:
            return prev, nxt
        prev = nxt
    last = len(relative_blocks) - 1
    return last, last


def get_block_decayed_amount(
    relative_blocks: Sequence[int],
    relative_amounts: Sequence[int],
    start_amount: int,
    decay_start_block: int,
    current_block: int,
) -> int:
    """
    Сумма на блоке current_block по нелинейной кривой.

    Args:
        relative_blocks: Смещения точек кривой от decay_start_block
        relative_amounts: Величины, вычитаемые из start_amount в каждой точке
        start_amount: Сумма до начала распада
        decay_start_block: Блок начала распада
        current_block: Блок резолва

    Returns:
        - start_amount, если current_block <= decay_start_block или кривая пуста
        - интерполяция внутри сегмента, содержащего текущее смещение
        - start_amount - relative_amounts[-1] на/после последней точки

    Raises:
        InvalidDecayCurve: Больше 16 точек или длины не совпадают

    Examples:
        >>> get_block_decayed_amount([4], [40], 100, 0, 2)
        80
        >>> get_block_decayed_amount([4, 6], [-40, -20], 100, 0, 5)
        130
    """
    if len(relative_amounts) > MAX_CURVE_POINTS:
        raise InvalidDecayCurve(
            f"Curve has {len(relative_amounts)} points, max {MAX_CURVE_POINTS}"
        )
    if decay_start_block >= current_block or len(relative_amounts) == 0:
        return start_amount
    if len(relative_blocks) != len(relative_amounts):
        raise InvalidDecayCurve(
            f"relativeBlocks and relativeAmounts length mismatch: "
            f"{len(relative_blocks)} != {len(relative_amounts)}"
        )

    block_delta = current_block - decay_start_block

    # До первой точки: сегмент от decay_start_block (смещение 0, startAmount)
    if relative_blocks[0] > block_delta:
        return linear_block_decay(
            0, relative_blocks[0], block_delta, start_amount, start_amount - relative_amounts[0]
        )

    prev, nxt = _locate_array_position(relative_blocks, block_delta)
    return linear_block_decay(
        relative_blocks[prev],
        relative_blocks[nxt],
        block_delta,
        start_amount - relative_amounts[prev],
        start_amount - relative_amounts[nxt],
    )


# =============================================================================
# CURVE BOUNDS
# =============================================================================


def get_end_amount(start_amount: int, relative_amounts: Sequence[int]) -> int:
    """Сумма в последней точке кривой (start_amount для пустой кривой)."""
    if not relative_amounts:
        return start_amount
    return start_amount - relative_amounts[-1]


def get_max_amount_out(start_amount: int, relative_amounts: Sequence[int]) -> int:
    """
    Максимальная сумма вдоль кривой: start - min(relative_amounts).

    Raises:
        InvalidDecayCurve: Кривая пуста
    """
    if not relative_amounts:
        raise InvalidDecayCurve("relativeAmounts must not be empty")
    return start_amount - min(relative_amounts)
