# ======================================================================================================================
# 📁 file        : tf_sys.py — базовые классы Tradition Forms 2025
# 🕒 created     : 11.10.2025 12:23
# 🎉 contains    : ENV-конфиг, исключения, TOwnerObject, TComponent
# 🌅 project     : Tradition Forms 2025 🜂
# ======================================================================================================================
# 🚢 ...imports...
from __future__ import annotations
import os
import traceback
from typing import Dict, Iterator, MutableMapping
from tf_logger import format_log_line, route_line
# 💎 ... CONFIG / CONSTS ...
_ENV: MutableMapping[str, str] = os.environ  # подменяется в тестах через set_env_mapping()
_AUTO_COUNTERS: Dict[str, int] = {}          # номера автоимён компонентов без Owner
MAX_OWNER_DEPTH = 1024
# 💎🧩⚙️ ... __ALL__ ...
__all__ = [
    'TOwnerObject', 'TComponent', 'TPresentationError', 'TFieldNotFoundError',
    'set_env_mapping', 'get_env_mapping', 'reset_auto_counters', '_key', '_key_int', '_key_bool',
]
# 🍍 ... ENV ...
def set_env_mapping(mapping: MutableMapping[str, str] | None) -> None:
    """None возвращает os.environ."""
    global _ENV
    _ENV = os.environ if mapping is None else mapping
# ---
def get_env_mapping() -> MutableMapping[str, str]:
    return _ENV
# ---
def _key(name: str | None, default: str = '') -> str | None:
    """Пустой или отсутствующий ключ получает default, и default остаётся в мапе."""
    if not name:
        return None
    value = _ENV.get(name)
    if value:
        return value
    _ENV[name] = str(default)
    return _ENV[name]
# ---
def _key_int(name: str, default: int = 0) -> int:
    try:
        return int(_key(name, str(default)))
    except ValueError:
        return default
# ---
def _key_bool(name: str, default: bool = False) -> bool:
    return _key(name, '1' if default else '0').strip().lower() in ('1', 'true', 'yes', 'on')
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 Исключения слоя представления
# ----------------------------------------------------------------------------------------------------------------------
class TPresentationError(Exception):
    """Некорректное состояние view/presentation: неизвестный тип панели, неверный enum и т.п."""


class TFieldNotFoundError(TPresentationError, KeyError):
    """Для view field с ключом нет presentable field."""

    def __str__(self):
        return Exception.__str__(self)
# ---
def reset_auto_counters():
    """Сбрасывает глобальные счётчики автоимён (для тестов и повторного старта)."""
    _AUTO_COUNTERS.clear()
# ---
def _auto_name(component: "TOwnerObject") -> str:
    """
    Имя класса без ведущей 'T' плюс номер: TFormPaneForFields → FormPaneForFields1.
    Номера ведёт Owner, у корневых компонентов счётчик общий.
    """
    base = type(component).__name__
    if len(base) > 1 and base[0] == "T":
        base = base[1:]
    owner = component.Owner
    counters = _AUTO_COUNTERS if owner is None else owner.f_auto_counters
    n = counters.get(base, 0)
    while True:
        n += 1
        name = f"{base}{n}"
        if owner is None or name not in owner.Components:
            break
    counters[base] = n
    return name
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TOwnerObject — узел дерева контролов
# ----------------------------------------------------------------------------------------------------------------------
class TOwnerObject:
    # ⚡🛠️ ▸ __init__
    def __init__(self, Owner: "TOwnerObject | None" = None, Name: str | None = None):
        """
        Owner хранит детей в Components по имени.
        Без Name имя выдаётся при первом обращении к Name.
        """
        self.Owner: "TOwnerObject | None" = Owner
        self.Components: Dict[str, "TOwnerObject"] = {}
        self.f_auto_counters: Dict[str, int] = {}
        self.f_name = Name or ""
        self.attach()
        # ⚡🛠️ TOwnerObject ▸ End of __init__
    # ..................................................................................................................
    # 🏷️ Имя и путь
    # ..................................................................................................................
    @property
    def Name(self) -> str:
        if not self.f_name:
            self.f_name = _auto_name(self)
        return self.f_name

    @Name.setter
    def Name(self, value: str | None):
        self.f_name = value or ""

    def id(self) -> str:
        """Путь от корня через дефис: Page1-Form1-FormPaneForFields1."""
        names = []
        node = self
        while node is not None:
            if len(names) >= MAX_OWNER_DEPTH:
                self.fail("id", "Ownership cycle detected", RuntimeError)
            names.append(node.Name)
            node = node.Owner
        return "-".join(reversed(names))
    # ..................................................................................................................
    # 👨‍👩‍👧 Владение
    # ..................................................................................................................
    def attach(self):
        if self.Owner is None:
            return
        if self.Owner.find(self.Name) is not None:
            self.fail("attach", f"Duplicate component: {self.Name}", ValueError)
        self.Owner.Components[self.Name] = self

    def set_owner(self, Owner: "TOwnerObject | None"):
        """
        Фабрика создаёт контролы без владельца, панель усыновляет их позже.
        Имя, уже занятое у нового владельца, заменяется автоименем.
        """
        if Owner is self.Owner:
            return
        if self.Owner is not None:
            self.Owner.remove(self)
        self.Owner = Owner
        if Owner is not None and self.f_name in Owner.Components:
            self.f_name = ""
        self.attach()

    def find(self, name: str) -> "TOwnerObject | None":
        return self.Components.get(name)

    def iter_tree(self) -> Iterator["TOwnerObject"]:
        yield self
        for child in self.Components.values():
            yield from child.iter_tree()

    def remove(self, child: "TOwnerObject"):
        if self.find(child.Name) is not child:
            self.fail("remove", f"Component not found: {child.Name}", KeyError)
        del self.Components[child.Name]

    def free(self):
        """Освобождает поддерево и выходит из Owner."""
        for child in list(self.Components.values()):
            child.free()
        if self.Owner is not None:
            self.Owner.remove(self)
            self.Owner = None
        self.debug("free", f"{self.Name} released")
    # ..................................................................................................................
    # 📡 Log / Debug / Fail
    # ..................................................................................................................
    def log(self, function: str, *parts, window: int = 1):
        route_line(format_log_line(self.Name, function, " ".join(map(str, parts))), window)

    def debug(self, function: str, *parts):
        """Только при DEBUG_MODE=1."""
        if _key("DEBUG_MODE", "0") != "1":
            return
        route_line(f"🔍 [DEBUG][{type(self).__name__}.{function}] {' '.join(map(str, parts))}", 2)

    def fail(self, function: str, msg: str, exc_type: type = Exception):
        """Лог + сообщение и стек в <FAIL_LOG_DIR>/fail.log, затем raise exc_type("Класс.функция(): msg")."""
        where = f"{type(self).__name__}.{function}()"
        self.log("fail", msg)
        report = [
            f"💥 {where} FAILED",
            f"📦 owner: {self.Owner.Name if self.Owner is not None else '-'}",
            f"⚙️ message: {msg}",
            "🧩 Traceback (most recent calls):",
            "".join(traceback.format_stack(limit=_key_int("TRACE_LIMIT", 12))),
        ]
        log_dir = _key("FAIL_LOG_DIR", "log")
        try:
            os.makedirs(log_dir, exist_ok=True)
            with open(os.path.join(log_dir, "fail.log"), "a", encoding="utf-8") as f:
                f.write("\n".join(report) + "\n" + "-" * 80 + "\n")
        except OSError as e:
            self.log("fail", f"⚠️ fail.log is not writable: {e}")
        raise exc_type(f"{where}: {msg}")
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TComponent — компонент с логированием
# ----------------------------------------------------------------------------------------------------------------------
class TComponent(TOwnerObject):

    def __init__(self, Owner: "TOwnerObject | None" = None, Name: str | None = None):
        super().__init__(Owner, Name)
        self.debug("__init__", f"⚙️ {self.Name} created")

    def app(self) -> "TApplication":
        """Singleton TApplication."""
        from tf_application import TApplication
        return TApplication.app()
# ======================================================================================================================
# 📁🌄 tf_sys.py 🜂 The End — See You Next Session 2025
# ======================================================================================================================
