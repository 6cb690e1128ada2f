"""
Priority Fee Scaling — масштабирование сумм priority-ордера

amount' = amount × (MPS ± priorityFee × mpsPerPriorityFeeWei) / MPS

Асимметрия округления намеренная и совпадает с PriorityFeeLib контракта:
- input: floor, обнуляется когда fee-член достигает 100% суммы
- output: ceil (остаток округляется вверх)
"""

from uniswapx_sdk.config.constants import MPS


def scale_input(amount: int, priority_fee: int, mps_per_priority_fee_wei: int) -> int:
    """
    Масштабирование input (swapper отдаёт меньше при большей priority fee).

    Examples:
        >>> scale_input(1000, 1, 1000)
        999
        >>> scale_input(1000, 10**4, 1000)
        0
    """
    scaling = priority_fee * mps_per_priority_fee_wei
    if scaling >= MPS:
        return 0
    return amount * (MPS - scaling) // MPS


def scale_output(amount: int, priority_fee: int, mps_per_priority_fee_wei: int) -> int:
    """
    Масштабирование output (swapper получает больше при большей priority fee).

    Examples:
        >>> scale_output(1000, 0, 1000)
        1000
        >>> scale_output(1000, 1, 1)
        1001
    """
    numerator = amount * (MPS + priority_fee * mps_per_priority_fee_wei)
    return -(-numerator // MPS)
