"""
Contract Validation Module

JSON Schema контракты для JSON-формы ордеров.
"""

from .validators import (
    SCHEMA_BY_ORDER_TYPE,
    ContractValidator,
    DutchOrderValidator,
    PriorityOrderValidator,
    RelayOrderValidator,
    SchemaLoader,
    V2DutchOrderValidator,
    V3DutchOrderValidator,
    validate_dutch_order,
    validate_order,
    validate_order_json,
    validate_priority_order,
    validate_relay_order,
    validate_v2_dutch_order,
    validate_v3_dutch_order,
    validator_for,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "DutchOrderValidator",
    "V2DutchOrderValidator",
    "V3DutchOrderValidator",
    "PriorityOrderValidator",
    "RelayOrderValidator",
    # Functions
    "SCHEMA_BY_ORDER_TYPE",
    "validator_for",
    "validate_order",
    "validate_order_json",
    "validate_dutch_order",
    "validate_v2_dutch_order",
    "validate_v3_dutch_order",
    "validate_priority_order",
    "validate_relay_order",
]
