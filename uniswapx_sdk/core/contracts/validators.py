"""
JSON Schema Contract Validators

Валидация JSON-формы ордеров (Order.to_json / order_to_json) против формальных
JSON Schema контрактов (Draft 2020-12, библиотека jsonschema).

Схемы (uniswapx_sdk/core/contracts/schema/):
- dutch_order.json (Dutch, Limit)
- v2_dutch_order.json (Dutch_V2, unsigned и cosigned)
- v3_dutch_order.json (Dutch_V3, unsigned и cosigned)
- priority_order.json (Priority, unsigned и cosigned)
- relay_order.json (Relay)

Схема проверяет форму данных (camelCase ключи, uint как десятичные строки,
адреса и hex); семантические инварианты (порядок времён, направление распада)
проверяются pydantic моделями.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import jsonschema
from jsonschema import Draft202012Validator

from uniswapx_sdk.config.constants import OrderType
from uniswapx_sdk.core.domain.order import Order, order_to_json
from uniswapx_sdk.core.errors import MissingConfiguration

SCHEMA_DIR: Path = Path(__file__).parent / "schema"

SCHEMA_BY_ORDER_TYPE: Dict[OrderType, str] = {
    OrderType.DUTCH: "dutch_order",
    OrderType.LIMIT: "dutch_order",
    OrderType.DUTCH_V2: "v2_dutch_order",
    OrderType.DUTCH_V3: "v3_dutch_order",
    OrderType.PRIORITY: "priority_order",
    OrderType.RELAY: "relay_order",
}


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик и кэш схем ордеров.

    Args:
        schema_dir: Каталог со схемами (по умолчанию schema/ внутри пакета)

    Raises:
        RuntimeError: Если каталог не существует
    """

    def __init__(self, schema_dir: Optional[Path] = None):
        self._schema_dir = schema_dir or SCHEMA_DIR
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Схема по имени файла без расширения (например, 'relay_order').

        Повторная загрузка возвращает тот же dict из кэша.

        Raises:
            FileNotFoundError: Файла схемы нет
            ValueError: Схема не проходит meta-validation Draft 2020-12
        """
        cached = self._schemas.get(schema_name)
        if cached is not None:
            return cached

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}") from e

        self._schemas[schema_name] = schema
        return schema


_default_loader: Optional[SchemaLoader] = None


def default_loader() -> SchemaLoader:
    """Общий загрузчик схем пакета (создаётся при первом обращении)."""
    global _default_loader
    if _default_loader is None:
        _default_loader = SchemaLoader()
    return _default_loader


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Валидатор JSON-формы ордеров одного семейства.

    Подклассы задают schema_name; базовый класс можно создать с явным именем схемы.

    Args:
        schema_name: Имя схемы (иначе атрибут класса)
        loader: Источник схем (иначе default_loader())
    """

    schema_name: str = ""

    def __init__(self, schema_name: Optional[str] = None, loader: Optional[SchemaLoader] = None):
        name = schema_name or type(self).schema_name
        if not name:
            raise ValueError("schema_name is required")
        self.schema_name = name
        self.schema = (loader or default_loader()).load_schema(name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Raises:
            jsonschema.ValidationError: Первое найденное нарушение
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]):
        return self.validator.iter_errors(data)

    def error_messages(self, data: Dict[str, Any]) -> List[str]:
        """
        Все нарушения в виде "путь: сообщение", отсортированные по пути.

        Путь записывается через точку ("input.curve.relativeBlocks.0"),
        корень документа — "$".

        Returns:
            Пустой список, если данные валидны
        """
        messages = []
        for error in self.validator.iter_errors(data):
            path = ".".join(str(part) for part in error.absolute_path) or "$"
            messages.append(f"{path}: {error.message}")
        return sorted(messages)


class DutchOrderValidator(ContractValidator):
    """Exclusive Dutch и Limit ордера."""

    schema_name = "dutch_order"


class V2DutchOrderValidator(ContractValidator):
    schema_name = "v2_dutch_order"


class V3DutchOrderValidator(ContractValidator):
    schema_name = "v3_dutch_order"


class PriorityOrderValidator(ContractValidator):
    schema_name = "priority_order"


class RelayOrderValidator(ContractValidator):
    schema_name = "relay_order"


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validator_for(order_type: OrderType) -> ContractValidator:
    """
    Валидатор для типа ордера.

    Raises:
        MissingConfiguration: Для типа нет схемы
    """
    schema_name = SCHEMA_BY_ORDER_TYPE.get(order_type)
    if schema_name is None:
        raise MissingConfiguration("schema", str(order_type))
    return ContractValidator(schema_name)


def validate_order_json(data: Dict[str, Any]) -> None:
    """
    Валидация JSON-формы ордера с тегом "type" (order_to_json).

    Схема выбирается по тегу; сама схема требует, чтобы тег совпадал
    с семейством, так что подмена тега тоже является нарушением.

    Args:
        data: JSON-форма ордера

    Raises:
        jsonschema.ValidationError: Данные не соответствуют схеме
        MissingConfiguration: Неизвестный или отсутствующий "type"
    """
    raw_type = data.get("type")
    try:
        order_type = OrderType(raw_type)
    except ValueError as e:
        raise MissingConfiguration("orderType", str(raw_type)) from e
    validator_for(order_type).validate(data)


def validate_order(order: Order) -> None:
    """Валидация JSON-формы модели ордера (с тегом типа)."""
    validate_order_json(order_to_json(order))


def validate_dutch_order(data: Dict[str, Any]) -> None:
    DutchOrderValidator().validate(data)


def validate_v2_dutch_order(data: Dict[str, Any]) -> None:
    V2DutchOrderValidator().validate(data)


def validate_v3_dutch_order(data: Dict[str, Any]) -> None:
    V3DutchOrderValidator().validate(data)


def validate_priority_order(data: Dict[str, Any]) -> None:
    PriorityOrderValidator().validate(data)


def validate_relay_order(data: Dict[str, Any]) -> None:
    RelayOrderValidator().validate(data)
