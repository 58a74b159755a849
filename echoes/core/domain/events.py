"""
Events — Модели событий, публикуемых в host event log

Immutable Pydantic модели. Каждое событие получает порядковый номер
(sequence) в момент commit'а transition, поэтому порядок в логе совпадает
с total order, навязанным host'ом.
"""

from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, Field


# =============================================================================
# ENUMS
# =============================================================================


class EventKind(str, Enum):
    """Тип события"""

    ECHO_CREATED = "EchoCreated"
    TRANSFER = "Transfer"
    PRICE_UPDATED = "PriceUpdated"
    BASE_URI_UPDATED = "BaseURIUpdated"
    OWNERSHIP_TRANSFERRED = "OwnershipTransferred"


# =============================================================================
# EVENT MODELS
# =============================================================================


class _EventBase(BaseModel):
    # Адрес компонента, выпустившего событие (Tree или Echo)
    emitter: str = Field(..., min_length=42, max_length=42)
    sequence: int = Field(default=-1, description="Позиция в event log (-1 до commit)")

    model_config = {"frozen": True}


class EchoCreated(_EventBase):
    """Tree опубликовал новую коллекцию."""

    kind: EventKind = EventKind.ECHO_CREATED
    identifier: str = Field(..., description="0x-hex identifier (32 байта)")
    echo_address: str
    owner: str


class Transfer(_EventBase):
    """
    Передача токена. При mint from_address = None.

    Наблюдатели, отслеживающие балансы, опираются на это событие.
    """

    kind: EventKind = EventKind.TRANSFER
    from_address: Optional[str] = None
    to_address: str
    token_id: int = Field(..., ge=0)


class PriceUpdated(_EventBase):
    kind: EventKind = EventKind.PRICE_UPDATED
    old_price: int = Field(..., ge=0)
    new_price: int = Field(..., ge=0)


class BaseURIUpdated(_EventBase):
    kind: EventKind = EventKind.BASE_URI_UPDATED
    base_uri: str


class OwnershipTransferred(_EventBase):
    kind: EventKind = EventKind.OWNERSHIP_TRANSFERRED
    previous_owner: str
    new_owner: str


Event = Union[EchoCreated, Transfer, PriceUpdated, BaseURIUpdated, OwnershipTransferred]
