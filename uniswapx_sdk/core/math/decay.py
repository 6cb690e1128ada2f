"""
Linear Decay — линейный распад суммы по времени и по блокам

Все вычисления в целых числах (uint256 семантика settlement-контрактов).
Округление: floor от абсолютной величины смещения, смещение направлено от start к end,
т.е. результат всегда округляется в сторону startAmount.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. now <= decayStart → startAmount
2. now >= decayEnd → endAmount
3. Между границами интерполяция монотонна (для возрастающих и убывающих диапазонов)
"""

from uniswapx_sdk.config.constants import BPS, STRICT_EXCLUSIVITY, UINT256_MAX


# =============================================================================
# TIME DECAY
# =============================================================================


def get_decayed_amount(
    start_amount: int,
    end_amount: int,
    decay_start_time: int,
    decay_end_time: int,
    timestamp: int,
) -> int:
    """
    Сумма после линейного распада по времени.

    Args:
        start_amount: Сумма в момент decay_start_time
        end_amount: Сумма в момент decay_end_time
        decay_start_time: Начало распада (unix seconds)
        decay_end_time: Конец распада (unix seconds)
        timestamp: Момент резолва (unix seconds)

    Returns:
        Разрешённая сумма

    Examples:
        >>> get_decayed_amount(100, 50, 0, 10, 5)
        75
        >>> get_decayed_amount(100, 200, 0, 10, 20)
        200
    """
    if decay_end_time <= timestamp:
        return end_amount
    if decay_start_time >= timestamp:
        return start_amount
    if start_amount == end_amount:
        return start_amount

    elapsed = timestamp - decay_start_time
    duration = decay_end_time - decay_start_time
    if end_amount < start_amount:
        return start_amount - (start_amount - end_amount) * elapsed // duration
    return start_amount + (end_amount - start_amount) * elapsed // duration


# =============================================================================
# BLOCK DECAY
# =============================================================================


def linear_block_decay(
    start_point: int,
    end_point: int,
    current_point: int,
    start_amount: int,
    end_amount: int,
) -> int:
    """
    Линейный распад по номерам блоков (одна секция кривой).

    Args:
        start_point: Блок начала секции
        end_point: Блок конца секции
        current_point: Текущий блок
        start_amount: Сумма в start_point
        end_amount: Сумма в end_point

    Returns:
        Интерполированная сумма; end_amount если current_point >= end_point

    Examples:
        >>> linear_block_decay(0, 10, 5, 100, 50)
        75
        >>> linear_block_decay(0, 10, 5, 100, 75)
        88
    """
    if current_point >= end_point:
        return end_amount
    if current_point <= start_point:
        return start_amount

    elapsed = current_point - start_point
    duration = end_point - start_point
    if end_amount < start_amount:
        return start_amount - (start_amount - end_amount) * elapsed // duration
    return start_amount + (end_amount - start_amount) * elapsed // duration


# =============================================================================
# EXCLUSIVITY OVERRIDE
# =============================================================================


def apply_exclusivity_override(amount: int, exclusivity_override_bps: int) -> int:
    """
    Сумма output для не-эксклюзивного filler в период эксклюзивности.

    Строгая эксклюзивность (bps == 0) делает ордер неисполнимым ни по какой цене.

    Examples:
        >>> apply_exclusivity_override(1000, 100)
        1010
        >>> apply_exclusivity_override(1000, 0) == UINT256_MAX
        True
    """
    if exclusivity_override_bps == STRICT_EXCLUSIVITY:
        return UINT256_MAX
    return amount * (BPS + exclusivity_override_bps) // BPS
