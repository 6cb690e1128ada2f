"""
Order — замкнутое множество вариантов ордеров

Варианты объединены в Union (sum type). Операции над ордерами диспетчеризуются
явным перебором вариантов (isinstance), неизвестный тип → TypeError.
"""

import time
from typing import Any, Dict, Optional, Tuple, Type, Union

from eth_utils import to_checksum_address

from uniswapx_sdk.config.constants import OrderType
from uniswapx_sdk.core.domain.dutch import DutchOrder
from uniswapx_sdk.core.domain.priority import CosignedPriorityOrder, UnsignedPriorityOrder
from uniswapx_sdk.core.domain.relay import RelayOrder
from uniswapx_sdk.core.domain.v2_dutch import CosignedV2DutchOrder, UnsignedV2DutchOrder
from uniswapx_sdk.core.domain.v3_dutch import CosignedV3DutchOrder, UnsignedV3DutchOrder
from uniswapx_sdk.core.errors import MissingConfiguration


# =============================================================================
# VARIANT SET
# =============================================================================
V2DutchOrder = Union[UnsignedV2DutchOrder, CosignedV2DutchOrder]
V3DutchOrder = Union[UnsignedV3DutchOrder, CosignedV3DutchOrder]
PriorityOrder = Union[UnsignedPriorityOrder, CosignedPriorityOrder]

UniswapXOrder = Union[
    DutchOrder,
    UnsignedV2DutchOrder,
    CosignedV2DutchOrder,
    UnsignedV3DutchOrder,
    CosignedV3DutchOrder,
    UnsignedPriorityOrder,
    CosignedPriorityOrder,
]

CosignedOrder = Union[CosignedV2DutchOrder, CosignedV3DutchOrder, CosignedPriorityOrder]

Order = Union[UniswapXOrder, RelayOrder]

UNISWAPX_ORDER_CLASSES: Tuple[Type, ...] = (
    DutchOrder,
    UnsignedV2DutchOrder,
    CosignedV2DutchOrder,
    UnsignedV3DutchOrder,
    CosignedV3DutchOrder,
    UnsignedPriorityOrder,
    CosignedPriorityOrder,
)

COSIGNED_ORDER_CLASSES: Tuple[Type, ...] = (
    CosignedV2DutchOrder,
    CosignedV3DutchOrder,
    CosignedPriorityOrder,
)

ORDER_CLASSES: Tuple[Type, ...] = UNISWAPX_ORDER_CLASSES + (RelayOrder,)

# (unsigned, cosigned) по типу; Dutch и Relay не имеют cosigned формы
_JSON_CLASSES: Dict[OrderType, Tuple[Type, Optional[Type]]] = {
    OrderType.DUTCH: (DutchOrder, None),
    OrderType.LIMIT: (DutchOrder, None),
    OrderType.DUTCH_V2: (UnsignedV2DutchOrder, CosignedV2DutchOrder),
    OrderType.DUTCH_V3: (UnsignedV3DutchOrder, CosignedV3DutchOrder),
    OrderType.PRIORITY: (UnsignedPriorityOrder, CosignedPriorityOrder),
    OrderType.RELAY: (RelayOrder, None),
}


def ensure_order(order: Any) -> None:
    """TypeError для объектов вне множества вариантов."""
    if not isinstance(order, ORDER_CLASSES):
        raise TypeError(f"Unsupported order variant: {type(order).__name__}")


# =============================================================================
# CLASSIFICATION
# =============================================================================


def is_limit_order(order: Order) -> bool:
    """Dutch ордер без распада (start == end у input и всех outputs)."""
    if not isinstance(order, DutchOrder):
        return False
    if order.input.start_amount != order.input.end_amount:
        return False
    return all(output.start_amount == output.end_amount for output in order.outputs)


def get_order_type(order: Order) -> OrderType:
    """
    OrderType варианта.

    Dutch ордер без распада классифицируется как LIMIT.
    """
    ensure_order(order)
    if is_limit_order(order):
        return OrderType.LIMIT
    return type(order).ORDER_TYPE


def is_cosigned(order: Order) -> bool:
    ensure_order(order)
    return isinstance(order, COSIGNED_ORDER_CLASSES)


# =============================================================================
# CONSTRUCTION CHECKS
# =============================================================================


def check_submittable(order: Order, now: Optional[int] = None) -> None:
    """
    Проверки, зависящие от часов (выполняются перед подписью/отправкой).

    Raises:
        ValueError: deadline не в будущем
    """
    ensure_order(order)
    current = int(time.time()) if now is None else now
    if order.info.deadline <= current:
        raise ValueError(f"Deadline must be in the future: {order.info.deadline}")


def with_non_fee_recipient(
    order: UniswapXOrder, new_recipient: str, fee_recipient: Optional[str] = None
) -> UniswapXOrder:
    """
    Замена recipient у всех outputs, кроме fee outputs.

    Args:
        order: Ордер с outputs
        new_recipient: Новый получатель
        fee_recipient: Получатель комиссии (его outputs не меняются)

    Raises:
        ValueError: new_recipient совпадает с fee_recipient
        TypeError: Вариант без outputs (Relay)
    """
    if not isinstance(order, UNISWAPX_ORDER_CLASSES):
        raise TypeError(f"Order variant has no outputs: {type(order).__name__}")
    if fee_recipient is not None and new_recipient.lower() == fee_recipient.lower():
        raise ValueError(f"newRecipient must be different from feeRecipient: {new_recipient}")

    recipient = to_checksum_address(new_recipient)
    outputs = []
    for output in order.outputs:
        if fee_recipient is not None and output.recipient.lower() == fee_recipient.lower():
            outputs.append(output)
        else:
            outputs.append(output.model_copy(update={"recipient": recipient}))
    return order.model_copy(update={"outputs": outputs})


# =============================================================================
# JSON
# =============================================================================


def order_to_json(order: Order) -> Dict[str, Any]:
    """JSON-форма ордера с тегом варианта ("type")."""
    ensure_order(order)
    data = order.to_json()
    data["type"] = get_order_type(order).value
    return data


def order_from_json(data: Dict[str, Any]) -> Order:
    """
    Восстановление ордера из JSON-формы.

    Cosigned форма выбирается по наличию непустой cosignature.

    Raises:
        MissingConfiguration: Неизвестный тип
    """
    payload = dict(data)
    raw_type = payload.pop("type", None)
    try:
        order_type = OrderType(raw_type)
    except ValueError:
        raise MissingConfiguration("orderType", str(raw_type))

    unsigned_cls, cosigned_cls = _JSON_CLASSES[order_type]
    cosignature = payload.get("cosignature")
    if cosigned_cls is not None and cosignature and cosignature != "0x":
        return cosigned_cls.model_validate(payload)
    payload.pop("cosignerData", None)
    payload.pop("cosignature", None)
    return unsigned_cls.model_validate(payload)
