# ======================================================================================================================
# 📁 file        : tf_model.py — модель данных, к которой привязываются контролы
# 🕒 created     : 22.10.2025 08:14
# 🎉 contains    : перечисления, key chain, TPresentableField*, TPresentableObject, TFile, провайдеры опций
# 🌅 project     : Tradition Forms 2025 🜂
# ======================================================================================================================
# 🚢 ...imports...
from __future__ import annotations
import copy
import re
import uuid
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence
from pydantic import BaseModel, ConfigDict, Field
from tf_sys import _key_int
# 💎 ... CONFIG / CONSTS ...
KEY_SEPARATOR = "."
_RE_MONTH = re.compile(r"^(\d{4})-(\d{2})$")
_RE_WEEK = re.compile(r"^(\d{4})-W(\d{2})$")
_RE_TIME = re.compile(r"^(\d{2}):(\d{2})(?::(\d{2}))?$")
_RE_SECTION_INDEX = re.compile(r"_\d+$")
_CURRENT = object()
# 💎🧩⚙️ ... __ALL__ ...
__all__ = [
    'TMandatoriness', 'TPostBackState', 'TFieldRenderMode', 'TFormPaneType', 'TValidityCheck',
    'TOptionControlType', 'TOptionDisplayStyle', 'TValueSeparator', 'TDateTimeType', 'TSectionGroupType',
    'TBuildingRule',
    'KEY_SEPARATOR', 'key_chain_from_key', 'key_from_chain', 'remove_indexes_from',
    'TPresentableField', 'TPresentableFieldForElement',
    'TPresentableFieldForString', 'TPresentableFieldForBool', 'TPresentableFieldForInt',
    'TPresentableFieldForFloat', 'TPresentableFieldForDateTime', 'TPresentableFieldForObject',
    'TPresentableFieldForFile', 'TPresentableFieldForCollection',
    'TPresentableObject', 'TFile',
    'TOptionProvider', 'TStaticOptionProvider',
    'TLookupProvider', 'TStaticLookupProvider', 'TObjectLookupProvider',
    'TOptionDataProvider',
]
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 Перечисления
# ----------------------------------------------------------------------------------------------------------------------
class TMandatoriness(str, Enum):
    OPTIONAL = "optional"
    DESIRED = "desired"
    REQUIRED = "required"


class TPostBackState(str, Enum):
    NO_POSTBACK = "no_postback"
    INVALID_POSTBACK = "invalid_postback"
    VALID_POSTBACK = "valid_postback"


class TFieldRenderMode(str, Enum):
    FORM = "form"
    LIST_TABLE = "list_table"


class TFormPaneType(str, Enum):
    STAND_ALONE = "stand_alone"
    SECTION = "section"


class TValidityCheck(str, Enum):
    TRANSITIONAL = "transitional"
    STRICT = "strict"


class TOptionControlType(str, Enum):
    AUTOMATIC = "automatic"
    DROP_DOWN = "drop_down"
    RADIO_BUTTONS = "radio_buttons"


class TOptionDisplayStyle(str, Enum):
    TEXT_ONLY = "text_only"
    TEXT_WITH_ICON_FALLBACK = "text_with_icon_fallback"
    ICON_ONLY = "icon_only"
    ICON_WITH_TEXT_FALLBACK = "icon_with_text_fallback"
    NONE = "none"


class TValueSeparator(str, Enum):
    NONE = "none"
    COMMA = "comma"
    SEMICOLON = "semicolon"
    SPACE = "space"
    LINE_BREAK = "line_break"


class TDateTimeType(str, Enum):
    DATE = "date"
    LOCAL_DATE_AND_TIME = "local_date_and_time"
    MONTH = "month"
    TIME = "time"
    WEEK = "week"


class TSectionGroupType(str, Enum):
    TABLE = "table"
    TABS = "tabs"


class TBuildingRule(str, Enum):
    IGNORE_MISSING_FIELDS = "ignore_missing_fields"
    RAISE_ON_MISSING_FIELDS = "raise_on_missing_fields"
# ----------------------------------------------------------------------------------------------------------------------
# 🔑 Key chain: "Address.City" → ["Address", "City"]
# ----------------------------------------------------------------------------------------------------------------------
def key_chain_from_key(key: str | None) -> List[str]:
    if not key:
        return []
    return key.split(KEY_SEPARATOR)
# ---
def key_from_chain(chain: Sequence[str]) -> str:
    return KEY_SEPARATOR.join(chain)
# ---
def remove_indexes_from(chain: Sequence[str]) -> List[str]:
    """Суффиксы секций коллекций: ["Items", "City_0"] → ["Items", "City"]; "first_name" не меняется."""
    return [_RE_SECTION_INDEX.sub("", link) for link in chain]
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TPresentableField — поле объекта + история версий
# ----------------------------------------------------------------------------------------------------------------------
class TPresentableField:
    is_for_single_element = True

    def __init__(self, key: str, parent: "TPresentableObject | None" = None, is_read_only: bool = False):
        self.key = key
        self.parent = parent
        self.is_read_only = is_read_only
        self.versions: List[tuple[datetime, Any]] = []

    def _current_snapshot(self):
        raise NotImplementedError

    def _detached_with(self, snapshot) -> "TPresentableField":
        raise NotImplementedError

    def record_version(self, at: datetime, value: Any = _CURRENT):
        """Фиксирует значение поля на момент at (по умолчанию текущее)."""
        snapshot = self._current_snapshot() if value is _CURRENT else value
        self.versions.append((at, snapshot))
        self.versions.sort(key=lambda v: v[0])

    def get_versioned_field(self, date: datetime | None) -> "TPresentableField | None":
        """
        Отсоединённая копия поля со значением, действовавшим на date.
        None, если date не задана или на тот момент версий ещё не было.
        """
        if date is None:
            return None
        found = None
        for at, snapshot in self.versions:
            if at <= date:
                found = (snapshot,)
            else:
                break
        if found is None:
            return None
        return self._detached_with(found[0])

    def __repr__(self):
        return f"<{self.__class__.__name__} key={self.key!r}>"
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 Поля для одиночных значений
# ----------------------------------------------------------------------------------------------------------------------
class TPresentableFieldForElement(TPresentableField):

    def __init__(self, key: str, value: Any = None, parent: "TPresentableObject | None" = None,
                 is_read_only: bool = False):
        super().__init__(key, parent, is_read_only)
        self.value = value

    # 🔄 значение «как объект»: тот же value, имя из словаря модели
    @property
    def value_as_object(self) -> Any:
        return self.value

    @value_as_object.setter
    def value_as_object(self, v: Any):
        self.value = v

    def _parse(self, s: str) -> Any:
        return s

    def _format(self, v: Any) -> str:
        return str(v)

    @property
    def value_as_string(self) -> str:
        return "" if self.value is None else self._format(self.value)

    @property
    def sortable_value(self) -> str:
        return self.value_as_string

    def try_set_value_as_string(self, s: str | None) -> bool:
        """Пустая строка → None. Неразборчивый ввод значение не трогает и даёт False."""
        if s is None or s == "":
            self.value = None
            return True
        try:
            self.value = self._parse(s)
        except (ValueError, TypeError):
            return False
        return True

    def _current_snapshot(self):
        return self.value

    def _detached_with(self, snapshot) -> "TPresentableFieldForElement":
        clone = copy.copy(self)
        clone.versions = []
        clone.parent = None
        clone.value = snapshot
        return clone


class TPresentableFieldForString(TPresentableFieldForElement):
    pass


class TPresentableFieldForBool(TPresentableFieldForElement):

    def _parse(self, s: str) -> bool:
        v = s.strip().lower()
        if v == "true":
            return True
        if v == "false":
            return False
        raise ValueError(f"not a boolean: {s!r}")

    def _format(self, v: Any) -> str:
        return "True" if v else "False"


class TPresentableFieldForInt(TPresentableFieldForElement):

    def _parse(self, s: str) -> int:
        return int(s.strip())

    def _format(self, v: Any) -> str:
        return str(int(v))

    @property
    def sortable_value(self) -> str:
        # ведущие нули, чтобы строковая сортировка совпала с числовой
        return "" if self.value is None else f"{self.value:+020d}"


class TPresentableFieldForFloat(TPresentableFieldForElement):

    def _parse(self, s: str) -> float:
        return float(s.strip().replace(",", "."))

    def _format(self, v: Any) -> str:
        f = float(v)
        return str(int(f)) if f.is_integer() else repr(f)


class TPresentableFieldForDateTime(TPresentableFieldForElement):
    """ISO-8601. Понимает и «короткие» формы из html-инпутов: 2025-03, 2025-W10, 12:30."""

    def _parse(self, s: str) -> datetime:
        s = s.strip()
        m = _RE_MONTH.match(s)
        if m:
            return datetime(int(m.group(1)), int(m.group(2)), 1)
        m = _RE_WEEK.match(s)
        if m:
            return datetime.fromisocalendar(int(m.group(1)), int(m.group(2)), 1)
        m = _RE_TIME.match(s)
        if m:
            return datetime(1900, 1, 1, int(m.group(1)), int(m.group(2)), int(m.group(3) or 0))
        return datetime.fromisoformat(s)

    def _format(self, v: Any) -> str:
        return v.isoformat()


class TPresentableFieldForObject(TPresentableFieldForElement):
    """Ссылка на другой объект. resolver: строка → объект (или None)."""

    def __init__(self, key: str, value: Any = None, resolver: Callable[[str], Any] | None = None,
                 parent: "TPresentableObject | None" = None, is_read_only: bool = False):
        self.resolver = resolver
        super().__init__(key, value, parent, is_read_only)

    def _parse(self, s: str) -> Any:
        if self.resolver is None:
            raise ValueError(f"field {self.key!r} has no resolver")
        return self.resolver(s)

    def _format(self, v: Any) -> str:
        if isinstance(v, TPresentableObject):
            return v.get_title()
        return str(v)


class TPresentableFieldForFile(TPresentableFieldForElement):

    def _parse(self, s: str) -> Any:
        raise ValueError("files cannot be parsed from strings")

    def _format(self, v: Any) -> str:
        return v.name
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TPresentableFieldForCollection — список значений одного типа
# ----------------------------------------------------------------------------------------------------------------------
class TPresentableFieldForCollection(TPresentableField):
    is_for_single_element = False

    def __init__(self, key: str, element: TPresentableFieldForElement | None = None, values: Iterable[Any] = (),
                 item_factory: Callable[[], "TPresentableObject"] | None = None,
                 parent: "TPresentableObject | None" = None, is_read_only: bool = False):
        super().__init__(key, parent, is_read_only)
        self.element = element if element is not None else TPresentableFieldForString(key)
        self.item_factory = item_factory
        self.values: List[Any] = []
        for v in values:
            self.append(v)

    @property
    def count(self) -> int:
        return len(self.values)

    def append(self, v: Any):
        if isinstance(v, TPresentableObject):
            v.parent_field = self
        self.values.append(v)

    add_object = append

    def clear(self):
        self.values.clear()

    def try_add_string(self, s: str) -> bool:
        try:
            self.append(self.element._parse(s))
        except (ValueError, TypeError):
            return False
        return True

    def get_values_as_string(self) -> List[str]:
        return [self.element._format(v) for v in self.values if v is not None]

    def get_values_as_object(self) -> List[Any]:
        return list(self.values)

    def get_sortable_values(self) -> List[str]:
        return sorted(self.get_values_as_string())

    def new_item_as_object(self) -> "TPresentableObject":
        if self.item_factory is None:
            raise TypeError(f"collection {self.key!r} has no item factory")
        return self.item_factory()

    def swap(self, i: int, j: int):
        self.values[i], self.values[j] = self.values[j], self.values[i]

    def sort_objects(self, key: Callable[[Any], Any]):
        self.values.sort(key=key)

    def _current_snapshot(self):
        return list(self.values)

    def _detached_with(self, snapshot) -> "TPresentableFieldForCollection":
        clone = copy.copy(self)
        clone.versions = []
        clone.parent = None
        clone.values = list(snapshot)
        return clone
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TPresentableObject — объект с полями
# ----------------------------------------------------------------------------------------------------------------------
class TPresentableObject:

    def __init__(self, id: uuid.UUID | None = None, is_new: bool = True, title_key: str | None = None):
        self.id: uuid.UUID = id or uuid.uuid4()
        self.is_new = is_new
        self.remove_on_update = False
        self.title_key = title_key
        self.created_at: datetime | None = None
        self.created_by: str = ""
        self.modified_at: datetime | None = None
        self.modified_by: str = ""
        self.parent_field: TPresentableFieldForCollection | None = None
        self.f_fields: Dict[str, TPresentableField] = {}
    # ..................................................................................................................
    # 🏗️ Поля
    # ..................................................................................................................
    def add_field(self, field: TPresentableField) -> TPresentableField:
        field.parent = self
        self.f_fields[field.key] = field
        return field

    def string(self, key: str, value: str | None = None, **kw) -> TPresentableFieldForString:
        return self.add_field(TPresentableFieldForString(key, value, **kw))

    def bool(self, key: str, value: bool | None = None, **kw) -> TPresentableFieldForBool:
        return self.add_field(TPresentableFieldForBool(key, value, **kw))

    def int(self, key: str, value: int | None = None, **kw) -> TPresentableFieldForInt:
        return self.add_field(TPresentableFieldForInt(key, value, **kw))

    def float(self, key: str, value: float | None = None, **kw) -> TPresentableFieldForFloat:
        return self.add_field(TPresentableFieldForFloat(key, value, **kw))

    def datetime(self, key: str, value: datetime | None = None, **kw) -> TPresentableFieldForDateTime:
        return self.add_field(TPresentableFieldForDateTime(key, value, **kw))

    def object(self, key: str, value: Any = None, **kw) -> TPresentableFieldForObject:
        return self.add_field(TPresentableFieldForObject(key, value, **kw))

    def file(self, key: str, value: "TFile | None" = None, **kw) -> TPresentableFieldForFile:
        return self.add_field(TPresentableFieldForFile(key, value, **kw))

    def collection(self, key: str, values: Iterable[Any] = (), **kw) -> TPresentableFieldForCollection:
        return self.add_field(TPresentableFieldForCollection(key, values=values, **kw))

    @property
    def fields(self) -> List[TPresentableField]:
        return list(self.f_fields.values())
    # ..................................................................................................................
    # 🔍 Поиск
    # ..................................................................................................................
    def find_presentable_field(self, key: str | Sequence[str]) -> TPresentableField | None:
        """Ищет поле по ключу или цепочке ключей, спускаясь по полям-объектам."""
        chain = key_chain_from_key(key) if isinstance(key, str) else list(key)
        if not chain:
            return None
        field = self.f_fields.get(chain[0])
        if field is None or len(chain) == 1:
            return field
        if field.is_for_single_element and isinstance(field.value, TPresentableObject):
            return field.value.find_presentable_field(chain[1:])
        return None

    def find_presentable_fields(self, key: str | Sequence[str]) -> List[TPresentableField]:
        """То же, но проходит и через коллекции объектов, результатов может быть несколько."""
        chain = key_chain_from_key(key) if isinstance(key, str) else list(key)
        if not chain:
            return []
        field = self.f_fields.get(chain[0])
        if field is None:
            return []
        if len(chain) == 1:
            return [field]
        if field.is_for_single_element:
            children = [field.value]
        else:
            children = field.get_values_as_object()
        result: List[TPresentableField] = []
        for child in children:
            if isinstance(child, TPresentableObject):
                result.extend(child.find_presentable_fields(chain[1:]))
        return result

    def get_title(self) -> str:
        keys = [self.title_key] if self.title_key else ["Title", "Name"]
        for key in keys:
            field = self.f_fields.get(key)
            if field is not None and field.is_for_single_element and field.value is not None:
                return field.value_as_string
        return self.id.hex

    def __repr__(self):
        return f"<{self.__class__.__name__} id={self.id.hex} new={self.is_new}>"
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TFile — загруженный файл
# ----------------------------------------------------------------------------------------------------------------------
class TFile(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    name: str
    mime_type: str = "application/octet-stream"
    data: bytes = b""
    created_at: datetime = Field(default_factory=datetime.now)
    remove_on_update: bool = False

    @property
    def size(self) -> int:
        return len(self.data)

    def existed_at(self, date: datetime | None) -> bool:
        return date is not None and self.created_at <= date
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 Провайдеры опций и подсказок
# ----------------------------------------------------------------------------------------------------------------------
class TOptionProvider:
    """Отдаёт словарь ключ → текст для выпадающих списков и радио-кнопок."""

    def get_option_dictionary(self, parent: TPresentableObject | None, topmost: TPresentableObject | None,
                              option_data_provider: "TOptionDataProvider | None") -> Dict[str, str]:
        raise NotImplementedError

    def get_display_value_for_null(self) -> str:
        return ""

    def get_icon_url_for(self, key: str) -> str:
        return ""


class TStaticOptionProvider(TOptionProvider):

    def __init__(self, options: Dict[str, str], null_text: str = "", icons: Dict[str, str] | None = None):
        self.options = dict(options)
        self.null_text = null_text
        self.icons = dict(icons or {})

    def get_option_dictionary(self, parent, topmost, option_data_provider) -> Dict[str, str]:
        return dict(self.options)

    def get_display_value_for_null(self) -> str:
        return self.null_text

    def get_icon_url_for(self, key: str) -> str:
        return self.icons.get(key, "")


class TLookupProvider:
    """Поиск значений по части строки (для полей с автодополнением)."""

    def find_values(self, term: str) -> List[str]:
        raise NotImplementedError

    def find_unique_value_by_vague_term(self, term: str) -> str | None:
        """Точное совпадение (без учёта регистра) или единственный кандидат."""
        if not term:
            return None
        candidates = self.find_values(term)
        for candidate in candidates:
            if candidate.lower() == term.lower():
                return candidate
        if len(candidates) == 1:
            return candidates[0]
        return None

    def find_key_for_value(self, value: str | None) -> Any:
        return value or None

    def find_value_for_key(self, key: Any) -> str:
        return "" if key is None else str(key)


class TStaticLookupProvider(TLookupProvider):

    def __init__(self, values: Iterable[str]):
        self.values = list(values)

    def find_values(self, term: str) -> List[str]:
        t = (term or "").lower()
        return [v for v in self.values if t in v.lower()]


class TObjectLookupProvider(TLookupProvider):
    """Подсказки по заголовкам объектов; значение ↔ объект."""

    def __init__(self, objects: Iterable[TPresentableObject]):
        self.objects = list(objects)

    def find_values(self, term: str) -> List[str]:
        t = (term or "").lower()
        return [o.get_title() for o in self.objects if t in o.get_title().lower()]

    def find_key_for_value(self, value: str | None) -> TPresentableObject | None:
        if not value:
            return None
        for o in self.objects:
            if o.get_title().lower() == value.lower():
                return o
        return None

    def find_value_for_key(self, key: TPresentableObject | None) -> str:
        return "" if key is None else key.get_title()
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TOptionDataProvider — контекст текущего пользователя
# ----------------------------------------------------------------------------------------------------------------------
class TOptionDataProvider:

    def __init__(self, user_name: str = "anonymous"):
        """
        temporary_files: загрузки, ещё не сохранённые вместе с объектом (старые первыми).
        Хранится не больше MAX_TEMPORARY_FILES; после сохранения объекта форма освобождает свои файлы.
        """
        self.user_name = user_name
        self.temporary_files: Dict[str, TFile] = {}

    def store_temporary_file(self, file: TFile) -> str:
        key = file.id.hex
        self.temporary_files.pop(key, None)
        self.temporary_files[key] = file
        limit = max(1, _key_int("MAX_TEMPORARY_FILES", 32))
        while len(self.temporary_files) > limit:
            del self.temporary_files[next(iter(self.temporary_files))]
        return key

    def find_temporary_file(self, key: str | None) -> Optional[TFile]:
        if not key:
            return None
        return self.temporary_files.get(key)

    def release_temporary_file(self, key: str | None) -> Optional[TFile]:
        """Файл сохранён вместе с объектом: из временных он уходит."""
        if not key:
            return None
        return self.temporary_files.pop(key, None)

    def find_file(self, file_id: uuid.UUID) -> Optional[TFile]:
        """Файл для ссылки <base>/<hex>/<name>. Здесь только временные; хранилище переопределяет."""
        return self.find_temporary_file(file_id.hex)
# ======================================================================================================================
# 📁🌄 tf_model.py 🜂 The End — See You Next Session 2025
# ======================================================================================================================
