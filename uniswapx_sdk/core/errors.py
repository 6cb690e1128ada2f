"""
Errors — исключения SDK

Два режима ошибок:
- Нарушения инвариантов при конструировании → ValueError (fail fast, без коэрции)
- Ошибки поиска конфигурации (chain id, reactor) → MissingConfiguration

Классификация результатов симуляции никогда не бросает исключений для ожидаемых
on-chain отказов (см. uniswapx_sdk.validation).
"""


class MissingConfiguration(Exception):
    """
    Отсутствует конфигурация для ключа.

    Attributes:
        key: Категория ключа ("permit2", "quoter", "reactor", "chainId", "orderType")
        value: Значение, для которого конфигурация не найдена
    """

    def __init__(self, key: str, value: str):
        self.key = key
        self.value = value
        super().__init__(f"Missing configuration for {key}: {value}")


class InvalidDecayCurve(ValueError):
    """Кривая распада некорректна (слишком много точек, несовпадение длин)."""


class OrderDecodeError(ValueError):
    """Байты не соответствуют ожидаемой ABI-раскладке ордера."""


class OrderNotFillable(Exception):
    """Ордер не может быть исполнен в данном контексте (блок ещё не наступил)."""


class UnresolvableOrder(Exception):
    """Ордер нельзя разрешить до конкретных сумм (нет cosigner data)."""
