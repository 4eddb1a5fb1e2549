# ======================================================================================================================
# 📁 file        : tf_events.py — Схема событий и система подписок Tradition Forms 2025
# 🕒 created     : 18.10.2025 07:26
# 🎉 contains    : TEventType/TEvent, TSubscription/TSubscriptionIndex, фабрики событий форм
# 🌅 project     : Tradition Forms 2025 🜂
# ======================================================================================================================
# 🚢 ...imports...
import json
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional
from pydantic import BaseModel, ValidationError

# 💎🧩⚙️ ... __ALL__ ...
__all__ = ["TEventType", "TEvent", "TSubscription", "TSubscriptionIndex",
           "create_form_event", "create_render_event"]
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TEventType — Типы событий жизненного цикла
# ----------------------------------------------------------------------------------------------------------------------
class TEventType(str, Enum):
    FORM_POSTBACK = "form.postback"
    FORM_INVALID = "form.invalid"
    FORM_RENDERED = "form.rendered"
    PAGE_RENDERED = "page.rendered"
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TEvent — Унифицированное событие шины
# ----------------------------------------------------------------------------------------------------------------------
class TEvent(BaseModel):
    type: TEventType
    source: str
    timestamp: float
    payload: Dict[str, Any]

    @classmethod
    def create(cls, event_type: TEventType, source: str, payload: Dict[str, Any] | None = None) -> "TEvent":
        return cls(
            type=event_type,
            source=source,
            timestamp=time.time(),
            payload=payload or {},
        )

    def to_json(self) -> str:
        return self.model_dump_json()

    @classmethod
    def from_json(cls, json_str: str) -> Optional["TEvent"]:
        try:
            return cls(**json.loads(json_str))
        except (ValueError, ValidationError):
            return None
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TSubscription — Подписка и фильтрация событий
# ----------------------------------------------------------------------------------------------------------------------
@dataclass
class TSubscription:
    target_id: str                                   # id получателя
    event_type: TEventType                           # тип события
    handler: Callable[[TEvent, Any], Any]            # handler(event, sender)
    filters: Dict[str, Any] = field(default_factory=dict)  # условия по payload

    def matches(self, event: TEvent) -> bool:
        return self.event_type == event.type and all(
            event.payload.get(key) == value for key, value in self.filters.items())
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TSubscriptionIndex — индекс подписок по типу события
# ----------------------------------------------------------------------------------------------------------------------
class TSubscriptionIndex:
    def __init__(self):
        self._subscriptions: Dict[TEventType, List[TSubscription]] = {}

    def add(self, subscription: TSubscription):
        self._subscriptions.setdefault(subscription.event_type, []).append(subscription)

    def find(self, event: TEvent) -> List[TSubscription]:
        return [s for s in self._subscriptions.get(event.type, []) if s.matches(event)]

    def remove_by_target(self, target_id: str, event_type: TEventType | None = None) -> int:
        removed = 0
        for etype, subs in self._subscriptions.items():
            if event_type is not None and etype != event_type:
                continue
            keep = [s for s in subs if s.target_id != target_id]
            removed += len(subs) - len(keep)
            self._subscriptions[etype] = keep
        return removed

    def __len__(self):
        return sum(len(s) for s in self._subscriptions.values())
# ----------------------------------------------------------------------------------------------------------------------
# 🏭 Фабрики событий
# ----------------------------------------------------------------------------------------------------------------------
def create_form_event(source: str, is_valid: bool, object_id: str, is_new: bool,
                      is_complete: bool | None = None) -> TEvent:
    """is_complete: объект проходит строгую проверку (DESIRED-поля тоже заполнены)."""
    event_type = TEventType.FORM_POSTBACK if is_valid else TEventType.FORM_INVALID
    payload = {"object_id": object_id, "is_new": is_new}
    if is_complete is not None:
        payload["is_complete"] = is_complete
    return TEvent.create(event_type, source, payload)


def create_render_event(event_type: TEventType, source: str, size: int) -> TEvent:
    return TEvent.create(event_type, source, {"size": size})
# ======================================================================================================================
# 📁🌄 tf_events.py 🜂 The End — See You Next Session 2025
# ======================================================================================================================
