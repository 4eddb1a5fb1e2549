# ======================================================================================================================
# 📁 file        : tf_views.py — описания представлений (view fields / view panes)
# 🕒 created     : 22.10.2025 15:37
# 🎉 contains    : TViewField*, TViewPane*, TFormView, TListTableView — pydantic-модели метаданных
# 🌅 project     : Tradition Forms 2025 🜂
# ======================================================================================================================
# 🚢 ...imports...
from __future__ import annotations
import re
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence, Tuple
from pydantic import BaseModel, ConfigDict, Field
from tf_model import (
    TMandatoriness, TValidityCheck, TFieldRenderMode, TValueSeparator, TDateTimeType, TSectionGroupType,
    TOptionControlType, TOptionDisplayStyle,
    TPresentableObject, TPresentableField, TPresentableFieldForElement, TPresentableFieldForCollection,
    TPresentableFieldForString, TPresentableFieldForBool, TPresentableFieldForInt, TPresentableFieldForFloat,
    TPresentableFieldForDateTime, TPresentableFieldForObject, TPresentableFieldForFile,
    TOptionProvider, TLookupProvider, TOptionDataProvider, TFile,
    key_chain_from_key,
)
# 💎 ... CONFIG / CONSTS ...
MSG_INVALID_VALUE = "Please enter a valid value for this field."
MSG_MANDATORY = {
    TMandatoriness.REQUIRED: "This is a mandatory field.",
    TMandatoriness.DESIRED: "Alternatively you can leave this field blank for now.",
    TMandatoriness.OPTIONAL: "Alternatively you can leave this field blank.",
}
_RE_EMAIL_ADDRESS = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
# 💎🧩⚙️ ... __ALL__ ...
__all__ = [
    'TViewField', 'TViewFieldForText', 'TViewFieldForCalculatedValue',
    'TViewFieldForEditableValue', 'TViewFieldForElement',
    'TViewFieldForSingleLineText', 'TViewFieldForEmailAddress', 'TViewFieldForPassword',
    'TViewFieldForMultilineText', 'TViewFieldForMultilineRichText',
    'TViewFieldForNumber', 'TViewFieldForBool', 'TViewFieldForChoice',
    'TViewFieldForDateTime', 'TViewFieldForLookup', 'TViewFieldForStringLookup',
    'TViewFieldForPresentableObjectLookup', 'TViewFieldForFile',
    'TViewFieldForCollection', 'TViewFieldForMultipleSingleLineTexts', 'TViewFieldForMultipleChoices',
    'TViewFieldForMultipleLookups', 'TViewFieldForMultipleStringLookups', 'TViewFieldForMultiplePresentableObjectLookups',
    'TViewPane', 'TViewPaneWithTitle', 'TViewPaneForFields', 'TViewPaneForPanes', 'TViewGroupedPane',
    'TViewCollectionPane', 'TFormView', 'TListTableView',
    'date_time_input_value', 'date_time_display_value', 'MSG_INVALID_VALUE',
]
# ----------------------------------------------------------------------------------------------------------------------
# 🍍 Дата/время в формате html-инпутов
# ----------------------------------------------------------------------------------------------------------------------
def date_time_input_value(value: datetime | None, date_time_type: TDateTimeType) -> str:
    """Значение для <input type=date|datetime-local|month|time|week>."""
    if value is None:
        return ""
    if date_time_type == TDateTimeType.DATE:
        return value.strftime("%Y-%m-%d")
    if date_time_type == TDateTimeType.LOCAL_DATE_AND_TIME:
        return value.strftime("%Y-%m-%dT%H:%M")
    if date_time_type == TDateTimeType.MONTH:
        return value.strftime("%Y-%m")
    if date_time_type == TDateTimeType.TIME:
        return value.strftime("%H:%M")
    if date_time_type == TDateTimeType.WEEK:
        year, week, _ = value.isocalendar()
        return f"{year}-W{week:02d}"
    raise ValueError(f"Date time type {date_time_type} is unknown.")
# ---
def date_time_display_value(value: datetime | None, date_time_type: TDateTimeType) -> str:
    if date_time_type == TDateTimeType.LOCAL_DATE_AND_TIME and value is not None:
        return value.strftime("%Y-%m-%d %H:%M")
    return date_time_input_value(value, date_time_type)
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TViewField — как показывать поле
# ----------------------------------------------------------------------------------------------------------------------
class TViewField(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True, validate_assignment=True)

    title: str = ""
    is_visible: bool = True

    def get_read_only_value_for(self, presentable_field: TPresentableField | None,
                                topmost: TPresentableObject | None,
                                option_data_provider: TOptionDataProvider | None) -> str:
        return ""


class TViewFieldForText(TViewField):
    """Статичный текст внутри формы."""
    text: str = ""

    def get_read_only_value_for(self, presentable_field, topmost, option_data_provider) -> str:
        return self.text


class TViewFieldForCalculatedValue(TViewField):
    """Вычисляемое значение от корневого объекта формы."""
    calculate: Callable[[Optional[TPresentableObject]], str]

    def get_read_only_value_for(self, presentable_field, topmost, option_data_provider) -> str:
        return self.calculate(topmost) or ""
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TViewFieldForEditableValue — поле, привязанное к ключу объекта
# ----------------------------------------------------------------------------------------------------------------------
class TViewFieldForEditableValue(TViewField):
    key: str = ""
    mandatoriness: TMandatoriness = TMandatoriness.OPTIONAL
    is_read_only: bool = False
    is_autofocused: bool = False
    description_for_edit_mode: str = ""
    description_for_view_mode: str = ""

    @property
    def key_chain(self) -> List[str]:
        return key_chain_from_key(self.key)

    def is_mandatory(self, validity_check: TValidityCheck) -> bool:
        return (self.mandatoriness == TMandatoriness.REQUIRED
                or (self.mandatoriness == TMandatoriness.DESIRED and validity_check == TValidityCheck.STRICT))

    def get_info_message_about_mandatoriness(self) -> str:
        return MSG_MANDATORY[self.mandatoriness]

    def get_default_error_message(self) -> str:
        return f"{MSG_INVALID_VALUE} {self.get_info_message_about_mandatoriness()}"

    def create_presentable_field(self, parent: TPresentableObject | None = None) -> TPresentableField:
        raise NotImplementedError

    def validate_field(self, presentable_field, validity_check: TValidityCheck,
                       topmost: TPresentableObject | None,
                       option_data_provider: TOptionDataProvider | None) -> str | None:
        raise NotImplementedError
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 Поля для одиночных значений
# ----------------------------------------------------------------------------------------------------------------------
class TViewFieldForElement(TViewFieldForEditableValue):

    def create_presentable_field(self, parent: TPresentableObject | None = None) -> TPresentableFieldForElement:
        return TPresentableFieldForString(self.key, parent=parent)

    def get_read_only_value_for(self, presentable_field, topmost, option_data_provider) -> str:
        if presentable_field is None:
            return ""
        return presentable_field.value_as_string

    def validate_field(self, presentable_field, validity_check, topmost, option_data_provider) -> str | None:
        """None: значение допустимо, иначе текст ошибки."""
        is_empty = presentable_field is None or presentable_field.value is None \
            or presentable_field.value_as_string == ""
        if is_empty:
            if self.is_mandatory(validity_check):
                return self.get_default_error_message()
            return None
        return self.validate_value(presentable_field, topmost, option_data_provider)

    def validate_value(self, presentable_field, topmost, option_data_provider) -> str | None:
        return None


class TViewFieldForSingleLineText(TViewFieldForElement):
    max_length: int = Field(256, ge=0)
    placeholder: str = ""

    def validate_value(self, presentable_field, topmost, option_data_provider) -> str | None:
        if self.max_length and len(presentable_field.value_as_string) > self.max_length:
            return f"Please enter at most {self.max_length} characters."
        return None


class TViewFieldForEmailAddress(TViewFieldForSingleLineText):

    def validate_value(self, presentable_field, topmost, option_data_provider) -> str | None:
        error = super().validate_value(presentable_field, topmost, option_data_provider)
        if error is None and not _RE_EMAIL_ADDRESS.match(presentable_field.value_as_string):
            error = self.get_default_error_message()
        return error


class TViewFieldForPassword(TViewFieldForSingleLineText):
    pass


class TViewFieldForMultilineText(TViewFieldForElement):
    max_length: int = Field(16384, ge=0)
    placeholder: str = ""

    def validate_value(self, presentable_field, topmost, option_data_provider) -> str | None:
        if self.max_length and len(presentable_field.value_as_string) > self.max_length:
            return f"Please enter at most {self.max_length} characters."
        return None


class TViewFieldForMultilineRichText(TViewFieldForMultilineText):
    """Rich text из редактора: набор кнопок задаёт, какие теги переживут post back."""
    has_bold_button: bool = True
    has_italic_button: bool = True
    has_underline_button: bool = True
    has_strikethrough_button: bool = True
    has_subscript_button: bool = False
    has_superscript_button: bool = False
    has_remove_format_button: bool = True
    has_bullets_button: bool = True
    has_numbering_button: bool = True
    has_indent_buttons: bool = True
    has_table_buttons: bool = True
    has_toggle_full_window_button: bool = True

    def get_allowed_html_tags(self, hyperlink_detection: bool) -> Dict[str, List[str]]:
        """Тег → разрешённые атрибуты. <a> только при ручных ссылках."""
        tags: Dict[str, List[str]] = {"br": []}
        if not hyperlink_detection:
            tags["a"] = ["href"]
        for flag, names in (
            (self.has_bold_button, ("b",)),
            (self.has_italic_button, ("i",)),
            (self.has_underline_button, ("u",)),
            (self.has_strikethrough_button, ("strike",)),
            (self.has_subscript_button, ("sub",)),
            (self.has_superscript_button, ("sup",)),
            (self.has_indent_buttons, ("blockquote",)),
            (self.has_bullets_button, ("ul", "li")),
            (self.has_numbering_button, ("ol", "li")),
        ):
            if flag:
                for name in names:
                    tags[name] = []
        if self.has_table_buttons:
            tags.update(table=[], tr=[], td=["colspan", "rowspan"])
        return tags

    def get_editor_buttons(self, hyperlink_detection: bool) -> List[List[str]]:
        """[заголовок, команда] для data-buttons редактора."""
        buttons = (
            (self.has_bold_button, "Bold", "bold"),
            (self.has_italic_button, "Italic", "italic"),
            (self.has_underline_button, "Underline", "underline"),
            (self.has_strikethrough_button, "Strikethrough", "strikeThrough"),
            (self.has_subscript_button, "Subscript", "subscript"),
            (self.has_superscript_button, "Superscript", "superscript"),
            (self.has_remove_format_button, "Remove format", "removeFormat"),
            (self.has_bullets_button, "Bullets", "insertUnorderedList"),
            (self.has_numbering_button, "Numbering", "insertOrderedList"),
            (self.has_indent_buttons, "Decrease indent", "outdent"),
            (self.has_indent_buttons, "Increase indent", "indent"),
            (not hyperlink_detection, "Insert link", "createLink"),
            (not hyperlink_detection, "Remove link", "unlink"),
            (self.has_table_buttons, "Insert table", "insertTable"),
            (self.has_table_buttons, "Insert table row", "insertTableRow"),
            (self.has_table_buttons, "Remove table row", "removeTableRow"),
            (self.has_toggle_full_window_button, "Toggle full window", "toggleFullWindow"),
        )
        return [[title, command] for flag, title, command in buttons if flag]


class TViewFieldForNumber(TViewFieldForElement):
    is_integer: bool = False
    min_value: Optional[float] = None
    max_value: Optional[float] = None
    step: float = Field(0, ge=0)
    unit: str = ""
    option_provider: Optional[TOptionProvider] = None

    def create_presentable_field(self, parent: TPresentableObject | None = None) -> TPresentableFieldForElement:
        if self.is_integer:
            return TPresentableFieldForInt(self.key, parent=parent)
        return TPresentableFieldForFloat(self.key, parent=parent)

    def validate_value(self, presentable_field, topmost, option_data_provider) -> str | None:
        value = presentable_field.value
        if self.min_value is not None and value < self.min_value:
            return f"Please enter a value of at least {presentable_field._format(self.min_value)}."
        if self.max_value is not None and value > self.max_value:
            return f"Please enter a value of at most {presentable_field._format(self.max_value)}."
        return None


class TViewFieldForBool(TViewFieldForElement):
    text_for_true: str = "Yes"
    text_for_false: str = "No"

    def create_presentable_field(self, parent: TPresentableObject | None = None) -> TPresentableFieldForElement:
        return TPresentableFieldForBool(self.key, parent=parent)

    def get_read_only_value_for(self, presentable_field, topmost, option_data_provider) -> str:
        if presentable_field is None or presentable_field.value is None:
            return ""
        return self.text_for_true if presentable_field.value else self.text_for_false


class TViewFieldForChoice(TViewFieldForElement):
    option_provider: Optional[TOptionProvider] = None
    option_control_type: TOptionControlType = TOptionControlType.AUTOMATIC
    option_display_style: TOptionDisplayStyle = TOptionDisplayStyle.TEXT_ONLY

    def get_options(self, parent, topmost, option_data_provider) -> dict[str, str]:
        if self.option_provider is None:
            raise TypeError(f'Option provider of view field for key "{self.key}" must not be null.')
        return self.option_provider.get_option_dictionary(parent, topmost, option_data_provider)

    def get_read_only_value_for(self, presentable_field, topmost, option_data_provider) -> str:
        if presentable_field is None or presentable_field.value is None:
            return ""
        return self.get_read_only_value_for_key(presentable_field.value_as_string, presentable_field.parent,
                                                topmost, option_data_provider)

    def get_read_only_value_for_key(self, key: str, parent, topmost, option_data_provider) -> str:
        options = self.get_options(parent, topmost, option_data_provider)
        return options.get(key, key)

    def validate_value(self, presentable_field, topmost, option_data_provider) -> str | None:
        options = self.get_options(presentable_field.parent, topmost, option_data_provider)
        if presentable_field.value_as_string not in options:
            return self.get_default_error_message()
        return None


class TViewFieldForDateTime(TViewFieldForElement):
    date_time_type: TDateTimeType = TDateTimeType.DATE
    min_value: Optional[datetime] = None
    max_value: Optional[datetime] = None
    step: Optional[timedelta] = None
    option_provider: Optional[TOptionProvider] = None

    def create_presentable_field(self, parent: TPresentableObject | None = None) -> TPresentableFieldForElement:
        return TPresentableFieldForDateTime(self.key, parent=parent)

    def get_read_only_value_for(self, presentable_field, topmost, option_data_provider) -> str:
        if presentable_field is None:
            return ""
        return date_time_display_value(presentable_field.value, self.date_time_type)

    def validate_value(self, presentable_field, topmost, option_data_provider) -> str | None:
        value = presentable_field.value
        if self.min_value is not None and value < self.min_value:
            return f"Please enter a value not before {date_time_display_value(self.min_value, self.date_time_type)}."
        if self.max_value is not None and value > self.max_value:
            return f"Please enter a value not after {date_time_display_value(self.max_value, self.date_time_type)}."
        return None


class TViewFieldForLookup(TViewFieldForElement):
    lookup_provider: Optional[TLookupProvider] = None
    placeholder: str = ""
    min_search_length: int = Field(3, ge=0)
    is_fill_in_allowed: bool = True

    def require_lookup_provider(self) -> TLookupProvider:
        if self.lookup_provider is None:
            raise TypeError(f'Lookup provider of view field for key "{self.key}" must not be null.')
        return self.lookup_provider


class TViewFieldForStringLookup(TViewFieldForLookup):
    pass


class TViewFieldForPresentableObjectLookup(TViewFieldForLookup):
    is_fill_in_allowed: bool = False
    on_click_url: Optional[Callable[[TPresentableObject], str]] = None

    def create_presentable_field(self, parent: TPresentableObject | None = None) -> TPresentableFieldForElement:
        return TPresentableFieldForObject(self.key, parent=parent)

    def get_read_only_value_for(self, presentable_field, topmost, option_data_provider) -> str:
        if presentable_field is None or presentable_field.value is None:
            return ""
        return self.require_lookup_provider().find_value_for_key(presentable_field.value)


class TViewFieldForFile(TViewFieldForElement):
    accepted_mime_types: List[str] = Field(default_factory=list)
    max_file_size: int = Field(0, ge=0)

    def create_presentable_field(self, parent: TPresentableObject | None = None) -> TPresentableFieldForElement:
        return TPresentableFieldForFile(self.key, parent=parent)

    def validate_upload(self, file: TFile) -> str | None:
        """Проверка загруженного файла до присвоения полю."""
        if self.accepted_mime_types and file.mime_type not in self.accepted_mime_types:
            return "The type of the uploaded file is not allowed."
        if self.max_file_size and file.size > self.max_file_size:
            return f"The uploaded file must not be larger than {self.max_file_size} bytes."
        return None
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 Поля для коллекций
# ----------------------------------------------------------------------------------------------------------------------
class TViewFieldForCollection(TViewFieldForEditableValue):
    limit: int = Field(0, ge=0)  # 0: без ограничения

    def get_value_separator(self, render_mode: TFieldRenderMode) -> TValueSeparator:
        return TValueSeparator.COMMA

    def create_presentable_field(self, parent: TPresentableObject | None = None) -> TPresentableFieldForCollection:
        return TPresentableFieldForCollection(self.key, parent=parent)

    def get_read_only_values_for(self, presentable_field, topmost, option_data_provider) -> List[str]:
        if presentable_field is None:
            return []
        return presentable_field.get_values_as_string()

    def get_read_only_value_for(self, presentable_field, topmost, option_data_provider) -> str:
        return ", ".join(self.get_read_only_values_for(presentable_field, topmost, option_data_provider))

    def validate_field(self, presentable_field, validity_check, topmost, option_data_provider) -> str | None:
        count = 0 if presentable_field is None else presentable_field.count
        if count < 1:
            return self.get_default_error_message() if self.is_mandatory(validity_check) else None
        if self.limit and count > self.limit:
            return f"Please enter at most {self.limit} values."
        return self.validate_values(presentable_field, topmost, option_data_provider)

    def validate_values(self, presentable_field, topmost, option_data_provider) -> str | None:
        return None


class TViewFieldForMultipleSingleLineTexts(TViewFieldForCollection):
    max_length: int = Field(256, ge=0)
    placeholder: str = ""

    def get_value_separator(self, render_mode: TFieldRenderMode) -> TValueSeparator:
        if render_mode == TFieldRenderMode.FORM:
            return TValueSeparator.LINE_BREAK
        return TValueSeparator.COMMA

    def validate_values(self, presentable_field, topmost, option_data_provider) -> str | None:
        if self.max_length:
            for value in presentable_field.get_values_as_string():
                if len(value) > self.max_length:
                    return f"Please enter at most {self.max_length} characters per line."
        return None


class TViewFieldForMultipleChoices(TViewFieldForCollection):
    option_provider: Optional[TOptionProvider] = None

    def get_options(self, parent, topmost, option_data_provider) -> dict[str, str]:
        if self.option_provider is None:
            raise TypeError(f'Option provider of view field for key "{self.key}" must not be null.')
        return self.option_provider.get_option_dictionary(parent, topmost, option_data_provider)

    def get_read_only_values_for(self, presentable_field, topmost, option_data_provider) -> List[str]:
        if presentable_field is None:
            return []
        options = self.get_options(presentable_field.parent, topmost, option_data_provider)
        return [options.get(k, k) for k in presentable_field.get_values_as_string()]

    def validate_values(self, presentable_field, topmost, option_data_provider) -> str | None:
        options = self.get_options(presentable_field.parent, topmost, option_data_provider)
        for key in presentable_field.get_values_as_string():
            if key not in options:
                return self.get_default_error_message()
        return None


class TViewFieldForMultipleLookups(TViewFieldForCollection):
    """Несколько значений с автодополнением, в форме по одному на строку."""
    lookup_provider: Optional[TLookupProvider] = None
    placeholder: str = ""
    min_search_length: int = Field(1, ge=0)
    is_fill_in_allowed: bool = False

    def get_value_separator(self, render_mode: TFieldRenderMode) -> TValueSeparator:
        if render_mode == TFieldRenderMode.FORM:
            return TValueSeparator.LINE_BREAK
        return TValueSeparator.COMMA

    def require_lookup_provider(self) -> TLookupProvider:
        if self.lookup_provider is None:
            raise TypeError(f'Lookup provider of view field for key "{self.key}" must not be null.')
        return self.lookup_provider


class TViewFieldForMultipleStringLookups(TViewFieldForMultipleLookups):
    is_fill_in_allowed: bool = True

    def get_read_only_values_for(self, presentable_field, topmost, option_data_provider) -> List[str]:
        if presentable_field is None:
            return []
        lookup_provider = self.require_lookup_provider()
        return [lookup_provider.find_value_for_key(k) or k for k in presentable_field.get_values_as_string()]


class TViewFieldForMultiplePresentableObjectLookups(TViewFieldForMultipleLookups):
    on_click_url: Optional[Callable[[TPresentableObject], str]] = None

    def create_presentable_field(self, parent: TPresentableObject | None = None) -> TPresentableFieldForCollection:
        return TPresentableFieldForCollection(self.key, element=TPresentableFieldForObject(self.key), parent=parent)

    def get_read_only_values_for(self, presentable_field, topmost, option_data_provider) -> List[str]:
        if presentable_field is None:
            return []
        lookup_provider = self.require_lookup_provider()
        return [lookup_provider.find_value_for_key(v) for v in presentable_field.get_values_as_object()
                if v is not None]
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TViewPane — группа полей / панелей
# ----------------------------------------------------------------------------------------------------------------------
class TViewPane(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True, validate_assignment=True)

    key: str = ""
    is_visible: bool = True

    @property
    def key_chain(self) -> List[str]:
        return key_chain_from_key(self.key)

    def iter_view_fields(self) -> Iterator[TViewField]:
        """Все view fields панели и вложенных панелей."""
        return iter(())

    def iter_editable_view_fields(self) -> Iterator[TViewFieldForEditableValue]:
        for view_field in self.iter_view_fields():
            if isinstance(view_field, TViewFieldForEditableValue):
                yield view_field

    def find_view_fields(self, key: str) -> List[TViewFieldForEditableValue]:
        return [f for f in self.iter_editable_view_fields() if f.key == key]

    def find_one_view_field(self, key: str) -> TViewFieldForEditableValue | None:
        found = self.find_view_fields(key)
        return found[0] if found else None

    def find_presentable_child_object(self, presentable_object: TPresentableObject) -> TPresentableObject | None:
        """Объект, для которого рисуется панель: сам объект, либо значение поля по key."""
        if not self.key:
            return presentable_object
        field = presentable_object.find_presentable_field(self.key_chain)
        if field is None or not field.is_for_single_element:
            return None
        value = field.value_as_object
        return value if isinstance(value, TPresentableObject) else None

    def find_presentable_child_objects(self, presentable_object: TPresentableObject) -> List[TPresentableObject]:
        if not self.key:
            return [presentable_object]
        result = []
        for field in presentable_object.find_presentable_fields(self.key_chain):
            values = [field.value_as_object] if field.is_for_single_element else field.get_values_as_object()
            result.extend(v for v in values if isinstance(v, TPresentableObject))
        return result

    def is_read_only_for(self, presentable_object: TPresentableObject | None) -> bool:
        return all(f.is_read_only for f in self.iter_editable_view_fields())

    def iter_keyed_view_fields(self, key_chain: Sequence[str] = ()) -> Iterator[Tuple[List[str], Any]]:
        """(полная цепочка ключей от корня формы, view field)."""
        chain = list(key_chain) + self.key_chain
        for view_field in self.iter_editable_view_fields():
            yield chain + view_field.key_chain, view_field

    def is_valid_value(self, presentable_object: TPresentableObject, validity_check: TValidityCheck,
                       option_data_provider: TOptionDataProvider | None = None) -> bool:
        """Поля вложенных объектов проверяются для каждого найденного объекта, пустые коллекции пропускаются."""
        for chain, view_field in self.iter_keyed_view_fields():
            fields = presentable_object.find_presentable_fields(chain)
            if not fields and len(chain) == 1:
                fields = [None]
            for field in fields:
                if view_field.validate_field(field, validity_check, presentable_object, option_data_provider):
                    return False
        return True

    def set_mandatoriness(self, mandatoriness: TMandatoriness):
        """Меняет обязательность всех необязательных-по-умолчанию полей; OPTIONAL не трогаем."""
        for view_field in self.iter_editable_view_fields():
            if view_field.mandatoriness != TMandatoriness.OPTIONAL:
                view_field.mandatoriness = mandatoriness

    def set_read_only(self):
        for view_field in self.iter_editable_view_fields():
            view_field.is_read_only = True


class TViewPaneWithTitle(TViewPane):
    title: str = ""


class TViewPaneForFields(TViewPaneWithTitle):
    view_fields: List[TViewField] = Field(default_factory=list)
    has_two_columns_in_wide_windows: bool = False

    def iter_view_fields(self) -> Iterator[TViewField]:
        return iter(self.view_fields)


class TViewPaneForPanes(TViewPaneWithTitle):
    view_panes: List[TViewPane] = Field(default_factory=list)

    def iter_view_fields(self) -> Iterator[TViewField]:
        for pane in self.view_panes:
            yield from pane.iter_view_fields()

    def iter_keyed_view_fields(self, key_chain: Sequence[str] = ()) -> Iterator[Tuple[List[str], Any]]:
        chain = list(key_chain) + self.key_chain
        for pane in self.view_panes:
            yield from pane.iter_keyed_view_fields(chain)


class TViewGroupedPane(TViewPane):
    section_group_type: TSectionGroupType = TSectionGroupType.TABLE
    sections: List[TViewPaneWithTitle] = Field(default_factory=list)

    def iter_view_fields(self) -> Iterator[TViewField]:
        for section in self.sections:
            yield from section.iter_view_fields()

    def iter_keyed_view_fields(self, key_chain: Sequence[str] = ()) -> Iterator[Tuple[List[str], Any]]:
        chain = list(key_chain) + self.key_chain
        for section in self.sections:
            yield from section.iter_keyed_view_fields(chain)


class TViewCollectionPane(TViewPaneWithTitle):
    """Коллекция вложенных объектов: по секции на объект + шаблон для новых."""
    view_fields: List[TViewField] = Field(default_factory=list)
    title_field: str = ""
    has_button_for_adding_new_objects: bool = True
    has_buttons_for_removing_objects: bool = True
    confirmation_message_for_removal: str = ""
    is_sortable: bool = False
    auto_add_first_section: bool = False
    placeholder: str = ""

    def iter_view_fields(self) -> Iterator[TViewField]:
        return iter(self.view_fields)

    def to_view_pane_with_title(self) -> TViewPaneForFields:
        return TViewPaneForFields(title=self.title, view_fields=self.view_fields)
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 Представления целиком
# ----------------------------------------------------------------------------------------------------------------------
class TFormView(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True, validate_assignment=True)

    title: str = ""
    description: str = ""
    view_panes: List[TViewPane] = Field(default_factory=list)
    action: str = ""
    error_message: str = ""
    is_autocomplete_enabled: bool = False
    has_unload_warning: bool = True

    def find_view_fields(self, key: str) -> List[TViewFieldForEditableValue]:
        result = []
        for pane in self.view_panes:
            result.extend(pane.find_view_fields(key))
        return result

    def find_one_view_field(self, key_chain: Sequence[str]) -> TViewFieldForEditableValue | None:
        """View field по полной цепочке ключей (как в client field id, без индексов секций)."""
        wanted = list(key_chain)
        for pane in self.view_panes:
            for chain, view_field in pane.iter_keyed_view_fields():
                if chain == wanted:
                    return view_field
        return None

    def is_valid_value(self, presentable_object: TPresentableObject, validity_check: TValidityCheck,
                       option_data_provider: TOptionDataProvider | None = None) -> bool:
        return all(pane.is_valid_value(presentable_object, validity_check, option_data_provider)
                   for pane in self.view_panes if pane.is_visible)


class TListTableView(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True, validate_assignment=True)

    title: str = ""
    description: str = ""
    view_fields: List[TViewField] = Field(default_factory=list)
    is_sortable: bool = True
    on_click_url: Optional[Callable[[TPresentableObject], str]] = None
# ======================================================================================================================
# 📁🌄 tf_views.py 🜂 The End — See You Next Session 2025
# ======================================================================================================================
