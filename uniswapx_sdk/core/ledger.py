"""
Ledger — асинхронный доступ к состоянию сети

SDK не содержит транспорта: nonce manager и quoter получают реализацию Ledger
от вызывающего кода (RPC клиент, форк, in-memory fake в тестах).
"""

from dataclasses import dataclass
from typing import List, Optional, Protocol, Sequence


@dataclass(frozen=True)
class Call:
    """Один read/simulate вызов внутри multicall."""

    target: str
    data: bytes


@dataclass(frozen=True)
class CallResult:
    """
    Результат вызова.

    success=False: return_data содержит revert data.
    """

    success: bool
    return_data: bytes


class Ledger(Protocol):
    """
    Async коллаборатор для чтения состояния и симуляции вызовов.

    multicall исполняет независимые вызовы за один round trip, без падения
    всего батча на revert одного вызова. block_number задаёт синтетический
    номер блока (override) для симуляции.
    """

    async def multicall(
        self, calls: Sequence[Call], block_number: Optional[int] = None
    ) -> List[CallResult]:
        ...

    async def nonce_bitmap(self, permit2: str, owner: str, word: int) -> int:
        ...

    async def block_number(self) -> int:
        ...

    async def timestamp(self) -> int:
        ...
