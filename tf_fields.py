# ======================================================================================================================
# 📁 file        : tf_fields.py — семейство WebField: поля формы и ячейки таблиц
# 🕒 created     : 23.10.2025 09:48
# 🎉 contains    : TWebField, TWebFieldForReadOnlyValue, TWebFieldForEditableValue, TWebFieldForElement,
#                  Bool / Number / Text / Choice / Lookup / File / DateTime / Collection / Object
# 🌅 project     : Tradition Forms 2025 🜂
# ======================================================================================================================
# 🚢 ...imports...
from __future__ import annotations
import hashlib
import json
import re
import threading
import uuid
from datetime import datetime
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple
from urllib.parse import quote
from tf_sys import TPresentationError
from tf_html import NEW_PARAGRAPH_HTML, THtmlWriter, html_encode, remove_unnecessary_white_space, sanitize_rich_text
from tf_controls import TWebControl, hyperlink_detection
from tf_model import (
    TMandatoriness, TPostBackState, TFieldRenderMode, TValidityCheck, TOptionControlType,
    TOptionDisplayStyle, TValueSeparator, TDateTimeType, TPresentableObject, TFile,
)
from tf_views import date_time_input_value, date_time_display_value
# 💎 ... CONFIG / CONSTS ...
PASSWORD_MASK = "••••••"
SECONDS_PER_MONTH = 2629746
_OBJECT_SWAP_LOCK = threading.Lock()  # подмена значения поля при diff-рендере объектов
# 💎🧩⚙️ ... __ALL__ ...
__all__ = [
    'TWebField', 'TWebFieldForReadOnlyValue', 'TWebFieldForEditableValue', 'TWebFieldForElement',
    'TWebFieldForBool', 'TWebFieldForNumber', 'TWebFieldForSingleLineText', 'TWebFieldForEmailAddress',
    'TWebFieldForPassword', 'TWebFieldForMultilineText', 'TWebFieldForMultilineRichText', 'TWebFieldForChoice',
    'TWebFieldForLookup', 'TWebFieldForStringLookup', 'TWebFieldForObject', 'TWebFieldForPresentableObjectLookup',
    'TWebFieldForFile', 'TWebFieldForDateTime',
    'TWebFieldForCollection', 'TWebFieldForMultipleSingleLineTexts', 'TWebFieldForMultipleChoices',
    'TWebFieldForMultipleLookups', 'TWebFieldForMultipleStringLookups', 'TWebFieldForMultiplePresentableObjectLookups',
    'get_value_separator_html', 'PASSWORD_MASK',
]
# ---
def _format_number(value) -> str:
    f = float(value)
    return str(int(f)) if f.is_integer() else repr(f)
# ---
def get_value_separator_html(separator: TValueSeparator) -> str:
    if separator == TValueSeparator.COMMA:
        return ", "
    if separator == TValueSeparator.SEMICOLON:
        return "; "
    if separator == TValueSeparator.SPACE:
        return " "
    if separator == TValueSeparator.LINE_BREAK:
        return "<br />"
    raise TPresentationError(f'Value separator "{separator}" is unknown.')
# ---
def _split_by_separator(value: str, separator: TValueSeparator) -> List[str]:
    if separator == TValueSeparator.COMMA:
        parts = value.split(",")
    elif separator == TValueSeparator.SEMICOLON:
        parts = value.split(";")
    elif separator == TValueSeparator.SPACE:
        parts = value.split(" ")
    elif separator == TValueSeparator.LINE_BREAK:
        parts = re.split(r"\r?\n", value)
    else:
        raise TPresentationError(f'Value separator "{separator}" is unknown.')
    return [p for p in parts if p]
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TWebField — div в форме, td в таблице
# ----------------------------------------------------------------------------------------------------------------------
class TWebField(TWebControl):

    def __init__(self, view_field, render_mode: TFieldRenderMode, Owner=None, Name: str | None = None):
        super().__init__("td" if render_mode == TFieldRenderMode.LIST_TABLE else "div", Owner, Name)
        self.view_field = view_field
        self.render_mode = render_mode

    def get_is_visible(self) -> bool:
        return self.view_field.is_visible

    def render_child_controls(self, html: THtmlWriter):
        super().render_child_controls(html)
        if self.render_mode == TFieldRenderMode.FORM:
            self.render_display_title(html)

    def render_display_title(self, html: THtmlWriter):
        html._tg("label", self.view_field.title)
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TWebFieldForReadOnlyValue — текст / вычисляемое значение
# ----------------------------------------------------------------------------------------------------------------------
class TWebFieldForReadOnlyValue(TWebField):

    def __init__(self, view_field, render_mode: TFieldRenderMode, topmost: TPresentableObject | None = None,
                 option_data_provider=None, Owner=None, Name: str | None = None):
        super().__init__(view_field, render_mode, Owner, Name)
        self.topmost = topmost
        self.option_data_provider = option_data_provider

    def get_read_only_value(self) -> str:
        return self.view_field.get_read_only_value_for(None, self.topmost, self.option_data_provider)

    def render_child_controls(self, html: THtmlWriter):
        super().render_child_controls(html)
        is_form = self.render_mode == TFieldRenderMode.FORM
        if is_form:
            html.tg("p")
        html.enc(self.get_read_only_value())
        if is_form:
            html.etg("p")
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TWebFieldForEditableValue — поле, привязанное к presentable field
# ----------------------------------------------------------------------------------------------------------------------
class TWebFieldForEditableValue(TWebField):
    # ⚡🛠️ ▸ __init__
    def __init__(self, presentable_field, view_field, render_mode: TFieldRenderMode,
                 topmost: TPresentableObject | None = None, option_data_provider=None,
                 comparison_date: datetime | None = None, prefix: str = "", suffix: str = "",
                 post_back_state: TPostBackState = TPostBackState.NO_POSTBACK, Owner=None, Name: str | None = None):
        """
        client_field_id = prefix + "." + key + suffix: имя инпута в post-данных.
        Скрытый инпут <client_field_id>:: хранит хэш значения на момент рендера:
        если пользователь ничего не менял, а объект на сервере успел измениться, серверное значение побеждает.
        """
        super().__init__(view_field, render_mode, Owner, Name)
        self.client_field_id = (prefix + "." if prefix else "") + view_field.key + suffix
        self.comparison_date = comparison_date
        if render_mode == TFieldRenderMode.FORM:
            self.css_class_for_desired_value_symbol = "desired"
            self.css_class_for_required_value_symbol = "required"
            self.css_class_for_error_message = "fielderror"
            self.css_class_for_description = "fielddescription"
        else:
            self.css_class_for_desired_value_symbol = ""
            self.css_class_for_required_value_symbol = ""
            self.css_class_for_error_message = ""
            self.css_class_for_description = ""
        self.error_message: str | None = None
        self.is_included_in_post_back = False
        self.is_read_only = (render_mode == TFieldRenderMode.LIST_TABLE or view_field.is_read_only
                             or presentable_field.is_read_only)
        self.option_data_provider = option_data_provider
        self.post_back_state = post_back_state
        self.parent_presentable_object = presentable_field.parent
        self.topmost = topmost
        # ⚡🛠️ TWebFieldForEditableValue ▸ End of __init__
    # ..................................................................................................................
    @property
    def previous_value(self) -> str | None:
        raise NotImplementedError

    def clean_post_back_value(self, value: str) -> str:
        return remove_unnecessary_white_space(value)

    @staticmethod
    def get_hashed_value_for(value: str | None) -> str | None:
        if value is None:
            return None
        return hashlib.sha1(value.encode("utf-8")).hexdigest()

    def get_options(self, option_provider) -> Dict[str, str]:
        if option_provider is None:
            return {}
        return option_provider.get_option_dictionary(self.parent_presentable_object, self.topmost,
                                                     self.option_data_provider)

    def _is_valid_post_back_in_form(self) -> bool:
        return self.render_mode == TFieldRenderMode.FORM and self.post_back_state == TPostBackState.VALID_POSTBACK
    # ..................................................................................................................
    # 🎨 Рендеринг
    # ..................................................................................................................
    def render_display_title(self, html: THtmlWriter):
        html.tg("label", attrs=None if self.is_read_only else {"for": self.client_field_id})
        html.enc(self.view_field.title)
        mandatoriness = self.view_field.mandatoriness
        if not self.is_read_only and mandatoriness != TMandatoriness.OPTIONAL:
            if mandatoriness == TMandatoriness.DESIRED:
                css_class = self.css_class_for_desired_value_symbol
            elif mandatoriness == TMandatoriness.REQUIRED:
                css_class = self.css_class_for_required_value_symbol
            else:
                raise TPresentationError(f'Mandatoriness "{mandatoriness}" is invalid.')
            html.tg("span", css_class).text("*").etg("span")
        html.etg("label")

    def render_child_controls(self, html: THtmlWriter):
        super().render_child_controls(html)
        if self.render_mode == TFieldRenderMode.LIST_TABLE:
            self.render_read_only_value(html)
        elif self.is_read_only:
            html.tg("p")
            self.render_read_only_value(html)
            if self.view_field.description_for_view_mode:
                html.stg("br").enc(self.view_field.description_for_view_mode)
            html.etg("p")
        else:
            html.tg("div")
            self.render_editable_value(html)
            self.render_hashed_value(html)
            if self.error_message:
                html._tg("span", self.error_message, self.css_class_for_error_message)
            if self.view_field.description_for_edit_mode:
                html._tg("span", self.view_field.description_for_edit_mode, self.css_class_for_description)
            html.etg("div")

    def render_hashed_value(self, html: THtmlWriter):
        hashed_value = self.get_hashed_value_for(self.previous_value)
        if hashed_value:
            html.hidden(self.client_field_id + "::", hashed_value)

    def render_data_list(self, html: THtmlWriter, client_id: str, options: Dict[str, str]):
        if not options:
            return
        html.tg("datalist", attrs={"id": client_id})
        for key, text in options.items():
            attrs = {"value": html_encode(key)}
            if key == text:
                html.stg("option", attrs=attrs)
            else:
                html._tg("option", text, attrs=attrs)
        html.etg("datalist")

    def render_editable_value(self, html: THtmlWriter):
        raise NotImplementedError

    def render_read_only_value(self, html: THtmlWriter):
        raise NotImplementedError

    def set_has_valid_value(self, validity_check: TValidityCheck = TValidityCheck.TRANSITIONAL):
        raise NotImplementedError
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TWebFieldForElement — одно значение
# ----------------------------------------------------------------------------------------------------------------------
class TWebFieldForElement(TWebFieldForEditableValue):

    def __init__(self, presentable_field, view_field, render_mode: TFieldRenderMode, *args, **kwargs):
        super().__init__(presentable_field, view_field, render_mode, *args, **kwargs)
        self.presentable_field = presentable_field
        self.post_back_value: str | None = None
        self._previous_value = self.field_value_as_string()

    @property
    def previous_value(self) -> str | None:
        return self._previous_value

    def field_value_as_string(self) -> str:
        """Значение поля в том виде, в котором оно уходит в инпут."""
        return self.presentable_field.value_as_string

    @property
    def editable_value(self) -> str | None:
        if self.post_back_state == TPostBackState.VALID_POSTBACK:
            return self.post_back_value
        return self.field_value_as_string()
    # ..................................................................................................................
    # 🔁 Post back
    # ..................................................................................................................
    def create_child_controls(self, request):
        self.error_message = None
        self.is_included_in_post_back = False
        if not self._is_valid_post_back_in_form():
            return
        if self.is_read_only:
            self.is_included_in_post_back = True
            return
        self.post_back_value = request.form.get(self.client_field_id)
        if self.post_back_value is None:
            return
        self.is_included_in_post_back = True
        self.post_back_value = self.clean_post_back_value(self.post_back_value)
        if self.field_value_as_string() != self.post_back_value:
            hashed_previous_value = request.form.get(self.client_field_id + "::")
            if self.get_hashed_value_for(self.post_back_value) == hashed_previous_value:
                self.post_back_value = self.field_value_as_string()
            elif not self.presentable_field.try_set_value_as_string(self.post_back_value):
                self.error_message = self.view_field.get_default_error_message()

    def set_has_valid_value(self, validity_check: TValidityCheck = TValidityCheck.TRANSITIONAL):
        if not self.is_included_in_post_back or self.is_read_only or self.error_message:
            return
        if self.presentable_field.value_as_object is None and self.post_back_value:
            # неразрешимый ввод в необязательных lookup-полях
            self.error_message = self.view_field.get_default_error_message()
        else:
            self.error_message = self.view_field.validate_field(self.presentable_field, validity_check,
                                                                self.topmost, self.option_data_provider)
    # ..................................................................................................................
    # 🎨 Рендеринг
    # ..................................................................................................................
    def get_attributes(self) -> Iterator[Tuple[str, Any]]:
        yield from super().get_attributes()
        if self.render_mode == TFieldRenderMode.LIST_TABLE:
            sortable_value = self.presentable_field.sortable_value
            if sortable_value and sortable_value != self.get_read_only_value():
                yield "data-value", html_encode(sortable_value)

    def get_comparative_value(self) -> str | None:
        comparative_field = self.presentable_field.get_versioned_field(self.comparison_date)
        if comparative_field is None:
            return None
        return self.view_field.get_read_only_value_for(comparative_field, self.topmost, self.option_data_provider)

    def render_comparative_value(self, html: THtmlWriter, current_value: str | None, render=None) -> bool:
        """Пишет удалённое значение (diffrm); True: текущее значение надо подсветить как новое."""
        if self.comparison_date is None:
            return False
        comparative_value = self.get_comparative_value()
        is_diff_new = not comparative_value or comparative_value != current_value
        if is_diff_new and comparative_value:
            html.tg("span", "diffrm")
            if render is None:
                html.enc(comparative_value)
            else:
                render(html, comparative_value)
            html.etg("span")
            if current_value:
                html.text(" ")
        return is_diff_new

    def get_read_only_value(self) -> str:
        return self.view_field.get_read_only_value_for(self.presentable_field, self.topmost, self.option_data_provider)

    def render_read_only_value(self, html: THtmlWriter):
        value = self.get_read_only_value()
        is_diff_new = self.render_comparative_value(html, value)
        if value:
            if is_diff_new:
                html._tg("span", value, "diffnew")
            else:
                html.enc(value)

    def _input_attributes(self, input_type: str | None = None) -> Dict[str, Any]:
        attrs: Dict[str, Any] = {"id": self.client_field_id}
        if input_type:
            attrs["type"] = input_type
        attrs["name"] = self.client_field_id
        if self.view_field.is_autofocused:
            attrs["autofocus"] = "autofocus"
        if self.view_field.mandatoriness == TMandatoriness.REQUIRED:
            attrs["required"] = "required"
        return attrs
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 Bool — радиокнопки Да/Нет
# ----------------------------------------------------------------------------------------------------------------------
class TWebFieldForBool(TWebFieldForElement):

    def create_child_controls(self, request):
        super().create_child_controls(request)
        if self._is_valid_post_back_in_form() and not self.is_included_in_post_back:
            self.is_included_in_post_back = True
            if self.view_field.mandatoriness == TMandatoriness.REQUIRED:
                self.error_message = self.view_field.get_default_error_message()

    def render_editable_value(self, html: THtmlWriter):
        value = (self.editable_value or "").strip().lower()
        is_set = value in ("true", "false")
        is_checked = value == "true"
        self._render_radio_button(html, self.view_field.text_for_true, "True", is_set and is_checked, True)
        self._render_radio_button(html, self.view_field.text_for_false, "False", is_set and not is_checked, False)

    def _render_radio_button(self, html: THtmlWriter, title: str, value: str, is_checked: bool, is_first: bool):
        html.tg("label", "radio")
        attrs = {"id": f"{self.client_field_id}-{value}", "type": "radio", "name": self.client_field_id}
        if is_first and self.view_field.is_autofocused:
            attrs["autofocus"] = "autofocus"
        if is_checked:
            attrs["checked"] = "checked"
        attrs["value"] = value
        html.stg("input", attrs=attrs)
        html.enc(title)
        html.etg("label")
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 Number
# ----------------------------------------------------------------------------------------------------------------------
class TWebFieldForNumber(TWebFieldForElement):

    def render_editable_value(self, html: THtmlWriter):
        attrs = self._input_attributes("number")
        view_field = self.view_field
        if view_field.max_value is not None:
            attrs["max"] = _format_number(view_field.max_value)
        if view_field.min_value is not None:
            attrs["min"] = _format_number(view_field.min_value)
        options = self.get_options(view_field.option_provider)
        list_id = "o" + self.client_field_id
        if options:
            attrs["list"] = list_id
        if view_field.step > 0:
            attrs["step"] = _format_number(view_field.step)
        if self.editable_value is not None:
            attrs["value"] = html_encode(self.editable_value)
        html.stg("input", attrs=attrs)
        html.enc(view_field.unit)
        self.render_data_list(html, list_id, options)
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 Текстовые поля
# ----------------------------------------------------------------------------------------------------------------------
class TWebFieldForSingleLineText(TWebFieldForElement):
    input_type = "text"

    def render_editable_value(self, html: THtmlWriter):
        attrs = self._input_attributes(self.input_type)
        attrs["maxlength"] = str(self.view_field.max_length)
        attrs["placeholder"] = html_encode(self.view_field.placeholder)
        if self.editable_value:
            attrs["value"] = html_encode(self.editable_value)
        html.stg("input", attrs=attrs)


class TWebFieldForEmailAddress(TWebFieldForSingleLineText):
    input_type = "email"

    @staticmethod
    def render_email_address(html: THtmlWriter, email_address: str | None):
        value = html_encode(email_address)
        if value:
            html.tg("a", attrs={"href": "mailto:" + value}).text(value).etg("a")

    def render_read_only_value(self, html: THtmlWriter):
        if self.render_mode == TFieldRenderMode.LIST_TABLE:
            super().render_read_only_value(html)
            return
        value = self.get_read_only_value()
        is_diff_new = self.render_comparative_value(html, value, self.render_email_address)
        if value:
            if is_diff_new:
                html.tg("span", "diffnew")
            self.render_email_address(html, value)
            if is_diff_new:
                html.etg("span")


class TWebFieldForPassword(TWebFieldForSingleLineText):
    input_type = "password"

    def create_child_controls(self, request):
        if (self._is_valid_post_back_in_form() and not self.is_read_only and self.previous_value
                and request.form.get(self.client_field_id) == ""):
            # пустой инпут: пароль не меняли
            self.error_message = None
            self.is_included_in_post_back = True
            self.post_back_value = self.previous_value
            return
        super().create_child_controls(request)

    def render_editable_value(self, html: THtmlWriter):
        attrs = self._input_attributes(self.input_type)
        attrs["maxlength"] = str(self.view_field.max_length)
        attrs["placeholder"] = html_encode(self.view_field.placeholder)
        html.stg("input", attrs=attrs)

    def render_hashed_value(self, html: THtmlWriter):
        pass

    def get_attributes(self) -> Iterator[Tuple[str, Any]]:
        # без data-value: значение пароля не уходит в таблицы
        yield from TWebFieldForEditableValue.get_attributes(self)

    def get_read_only_value(self) -> str:
        return PASSWORD_MASK if self.presentable_field.value_as_string else ""

    def get_comparative_value(self) -> str | None:
        comparative_field = self.presentable_field.get_versioned_field(self.comparison_date)
        if comparative_field is None:
            return None
        return PASSWORD_MASK if comparative_field.value_as_string else ""


class TWebFieldForMultilineText(TWebFieldForElement):

    def render_editable_value(self, html: THtmlWriter):
        attrs = self._input_attributes()
        attrs["maxlength"] = str(self.view_field.max_length)
        attrs["placeholder"] = html_encode(self.view_field.placeholder)
        html.tg("textarea", attrs=attrs).enc(self.editable_value).etg("textarea")

    def write_multiline_value(self, html: THtmlWriter, value: str, detection: bool,
                              new_paragraph_html: str = NEW_PARAGRAPH_HTML):
        html.multiline_plain_text_unsafe(value, detection, new_paragraph_html)

    def render_read_only_value(self, html: THtmlWriter):
        is_list_table = self.render_mode == TFieldRenderMode.LIST_TABLE
        detection = hyperlink_detection()
        if is_list_table:
            html.tg("p")
        value = self.get_read_only_value()
        is_diff_new = False
        if self.comparison_date is not None:
            comparative_value = self.get_comparative_value()
            is_diff_new = not comparative_value or comparative_value != value
            if is_diff_new and comparative_value:
                html.tg("span", "diffrm")
                self.write_multiline_value(html, comparative_value, detection, '</span></p><p><span class="diffrm">')
                html.etg("span")
                if value:
                    html.text(" ")
        if value:
            if is_diff_new:
                html.tg("span", "diffnew")
                self.write_multiline_value(html, value, detection, '</span></p><p><span class="diffnew">')
                html.etg("span")
            else:
                self.write_multiline_value(html, value, detection)
        if is_list_table:
            html.etg("p")


class TWebFieldForMultilineRichText(TWebFieldForMultilineText):
    """textarea.rte для редактора; post back чистится до тегов, разрешённых кнопками."""

    def clean_post_back_value(self, value: str) -> str:
        allowed_tags = self.view_field.get_allowed_html_tags(hyperlink_detection())
        return super().clean_post_back_value(sanitize_rich_text(value, allowed_tags))

    def render_editable_value(self, html: THtmlWriter):
        attrs = self._input_attributes()
        attrs["data-buttons"] = html_encode(json.dumps(self.view_field.get_editor_buttons(hyperlink_detection()),
                                                       ensure_ascii=False))
        html.tg("textarea", "rte", attrs).enc(self.editable_value).etg("textarea")

    def write_multiline_value(self, html: THtmlWriter, value: str, detection: bool,
                              new_paragraph_html: str = NEW_PARAGRAPH_HTML):
        html.multiline_rich_text(value, detection, new_paragraph_html)

    def render_child_controls(self, html: THtmlWriter):
        if self.render_mode != TFieldRenderMode.FORM or not self.is_read_only:
            super().render_child_controls(html)
            return
        # в режиме просмотра div вместо p: внутри могут быть списки и таблицы
        TWebField.render_child_controls(self, html)
        html.tg("div", "rt")
        self.render_read_only_value(html)
        if self.view_field.description_for_view_mode:
            html.stg("br").enc(self.view_field.description_for_view_mode)
        html.etg("div")
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 Choice — радиокнопки или select
# ----------------------------------------------------------------------------------------------------------------------
def _render_single_choice(field: TWebFieldForEditableValue, html: THtmlWriter, options: Dict[str, str],
                          null_text: str, selected_key: str | None, use_radio_buttons: bool):
    view_field = field.view_field
    is_required = view_field.mandatoriness == TMandatoriness.REQUIRED
    if use_radio_buttons:
        for i, (key, text) in enumerate(options.items()):
            if i > 0:
                html.stg("br")
            attrs = {"id": f"{field.client_field_id}-{i}", "type": "radio", "name": field.client_field_id,
                     "value": html_encode(key)}
            if i == 0 and view_field.is_autofocused:
                attrs["autofocus"] = "autofocus"
            if key == selected_key:
                attrs["checked"] = "checked"
            html.tg("label", "radio").stg("input", attrs=attrs).enc(text).etg("label")
        return
    attrs = {"id": field.client_field_id, "name": field.client_field_id, "size": "1"}
    if view_field.is_autofocused:
        attrs["autofocus"] = "autofocus"
    if is_required:
        attrs["required"] = "required"
    html.tg("select", attrs=attrs)
    if not is_required or not selected_key or selected_key not in options:
        html.text('<option value="">').enc(null_text).etg("option")
    for key, text in options.items():
        option_attrs = {"value": html_encode(key)}
        if key == selected_key:
            option_attrs["selected"] = "selected"
        html._tg("option", text, attrs=option_attrs)
    html.etg("select")
# ---
def _uses_radio_buttons(view_field, option_count: int) -> bool:
    control_type = view_field.option_control_type
    return view_field.mandatoriness == TMandatoriness.REQUIRED and (
        control_type == TOptionControlType.RADIO_BUTTONS
        or (control_type == TOptionControlType.AUTOMATIC and option_count < 7))


class TWebFieldForChoice(TWebFieldForElement):

    def create_child_controls(self, request):
        super().create_child_controls(request)
        if self._is_valid_post_back_in_form() and not self.is_included_in_post_back:
            self.is_included_in_post_back = True
            if self.view_field.mandatoriness == TMandatoriness.REQUIRED:
                self.error_message = self.view_field.get_default_error_message()

    def _require_option_provider(self):
        option_provider = self.view_field.option_provider
        if option_provider is None:
            raise TypeError(f'Option provider of view field for key "{self.view_field.key}" must not be null.')
        return option_provider

    def get_comparative_key(self) -> str | None:
        comparative_field = self.presentable_field.get_versioned_field(self.comparison_date)
        return None if comparative_field is None else comparative_field.value_as_string

    def render_editable_value(self, html: THtmlWriter):
        option_provider = self._require_option_provider()
        options = self.get_options(option_provider)
        _render_single_choice(self, html, options, option_provider.get_display_value_for_null(),
                              self.editable_value, _uses_radio_buttons(self.view_field, len(options)))

    def render_read_only_value(self, html: THtmlWriter):
        selected_key = self.presentable_field.value_as_string
        is_diff_new = False
        if self.comparison_date is not None:
            comparative_key = self.get_comparative_key()
            is_diff_new = not comparative_key or comparative_key != selected_key
            if is_diff_new and comparative_key:
                html.tg("span", "diffrm")
                self.render_option(html, comparative_key)
                html.etg("span")
                if selected_key:
                    html.text(" ")
        if selected_key:
            if is_diff_new:
                html.tg("span", "diffnew")
            self.render_option(html, selected_key)
            if is_diff_new:
                html.etg("span")

    def render_option(self, html: THtmlWriter, key: str):
        """Текст и/или иконка опции по display style."""
        option_provider = self._require_option_provider()
        icon_url = option_provider.get_icon_url_for(key)
        value = html_encode(self.view_field.get_read_only_value_for_key(
            key, self.parent_presentable_object, self.topmost, self.option_data_provider))
        style = self.view_field.option_display_style
        if style in (TOptionDisplayStyle.TEXT_ONLY, TOptionDisplayStyle.TEXT_WITH_ICON_FALLBACK):
            if value:
                html.text(value)
            elif style == TOptionDisplayStyle.TEXT_WITH_ICON_FALLBACK and icon_url:
                html.stg("img", attrs={"src": icon_url})
        elif style in (TOptionDisplayStyle.ICON_ONLY, TOptionDisplayStyle.ICON_WITH_TEXT_FALLBACK):
            if icon_url:
                html.stg("img", attrs={"src": icon_url, "title": value})
            elif style == TOptionDisplayStyle.ICON_WITH_TEXT_FALLBACK and value:
                html.text(value)
        elif style != TOptionDisplayStyle.NONE:
            raise TPresentationError(f'Option display style "{style}" is not supported.')
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 Lookup — текстовый инпут с подсказками
# ----------------------------------------------------------------------------------------------------------------------
class TWebFieldForLookup(TWebFieldForElement):

    def clean_post_back_value(self, value: str) -> str:
        # только strip: серии пробелов должны остаться
        return value.strip() if value is not None else value

    def render_editable_value(self, html: THtmlWriter):
        view_field = self.view_field
        attrs: Dict[str, Any] = {"id": self.client_field_id, "type": "text"}
        if view_field.is_autofocused:
            attrs["autofocus"] = "autofocus"
        attrs["data-ajaxlist"] = self.client_field_id + ".json"
        if view_field.is_fill_in_allowed:
            attrs["data-allowfillin"] = "1"
        attrs["data-min-search-length"] = str(view_field.min_search_length)
        attrs["name"] = self.client_field_id
        attrs["placeholder"] = html_encode(view_field.placeholder)
        if view_field.mandatoriness == TMandatoriness.REQUIRED:
            attrs["required"] = "required"
        if self.editable_value:
            attrs["value"] = html_encode(self.editable_value)
        html.stg("input", attrs=attrs)


class TWebFieldForStringLookup(TWebFieldForLookup):

    @property
    def editable_value(self) -> str | None:
        lookup_provider = self.view_field.require_lookup_provider()
        if self.post_back_state == TPostBackState.VALID_POSTBACK:
            key = self.post_back_value
        else:
            key = self.presentable_field.value_as_string
        return lookup_provider.find_value_for_key(key) or key

    def clean_post_back_value(self, value: str) -> str:
        cleaned_value = super().clean_post_back_value(value)
        lookup_provider = self.view_field.require_lookup_provider()
        unique_value = lookup_provider.find_unique_value_by_vague_term(cleaned_value)
        key = None if unique_value is None else lookup_provider.find_key_for_value(unique_value)
        return key or cleaned_value
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TWebFieldForObject — diff-рендер ссылок на объекты
# ----------------------------------------------------------------------------------------------------------------------
class TWebFieldForObject(TWebFieldForElement):
    """
    Сравнительное значение считается view field'ом от самого presentable field:
    на время вызова в поле подставляется версия объекта, затем значение возвращается.
    """

    def get_comparative_value(self) -> str | None:
        comparative_field = self.presentable_field.get_versioned_field(self.comparison_date)
        if comparative_field is None or comparative_field.value_as_object is None:
            return None
        current_object = self.presentable_field.value_as_object
        with _OBJECT_SWAP_LOCK:
            try:
                self.presentable_field.value_as_object = comparative_field.value_as_object
                return self.view_field.get_read_only_value_for(self.presentable_field, self.topmost,
                                                               self.option_data_provider)
            finally:
                self.presentable_field.value_as_object = current_object


class TWebFieldForPresentableObjectLookup(TWebFieldForLookup, TWebFieldForObject):

    def field_value_as_string(self) -> str:
        value = self.presentable_field.value_as_object
        return value.id.hex if isinstance(value, TPresentableObject) else ""

    @property
    def editable_value(self) -> str | None:
        if self.post_back_state == TPostBackState.VALID_POSTBACK:
            return self.post_back_value
        return self.view_field.require_lookup_provider().find_value_for_key(self.presentable_field.value_as_object)

    def _autocomplete_value(self, value: str) -> str:
        unique_value = self.view_field.require_lookup_provider().find_unique_value_by_vague_term(value)
        return unique_value or value

    def create_child_controls(self, request):
        self.error_message = None
        self.is_included_in_post_back = False
        if not self._is_valid_post_back_in_form():
            return
        if self.is_read_only:
            self.is_included_in_post_back = True
            return
        self.post_back_value = request.form.get(self.client_field_id)
        if self.post_back_value is None:
            return
        self.is_included_in_post_back = True
        lookup_provider = self.view_field.require_lookup_provider()
        self.post_back_value = self.clean_post_back_value(self.post_back_value)
        field_string_value = lookup_provider.find_value_for_key(self.presentable_field.value_as_object)
        if self.post_back_value != field_string_value:
            self.post_back_value = self._autocomplete_value(self.post_back_value)
        post_back_object = lookup_provider.find_key_for_value(self.post_back_value)
        if self.presentable_field.value_as_object is not post_back_object:
            hashed_previous_value = request.form.get(self.client_field_id + "::")
            post_back_id = post_back_object.id.hex if post_back_object is not None else None
            if self.get_hashed_value_for(post_back_id) == hashed_previous_value:
                self.post_back_value = field_string_value
            else:
                self.presentable_field.value_as_object = post_back_object

    def render_read_only_value(self, html: THtmlWriter):
        value = self.get_read_only_value()
        is_diff_new = self.render_comparative_value(html, value)
        if not value:
            return
        if is_diff_new:
            html.tg("span", "diffnew")
        on_click_url = self.view_field.on_click_url
        href = on_click_url(self.presentable_field.value_as_object) if on_click_url else None
        if href:
            html.tg("a", attrs={"href": href})
        html.enc(value)
        if href:
            html.etg("a")
        if is_diff_new:
            html.etg("span")
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 File — загрузка файла
# ----------------------------------------------------------------------------------------------------------------------
class TWebFieldForFile(TWebFieldForElement):

    def __init__(self, presentable_field, view_field, render_mode: TFieldRenderMode, *args, **kwargs):
        super().__init__(presentable_field, view_field, render_mode, *args, **kwargs)
        self.file_base_directory = ""
        self.has_file_link_anchors = render_mode != TFieldRenderMode.LIST_TABLE
        self.removed_file: TFile | None = None
        self.temporary_file: TFile | None = None

    def _store_temporary_file(self, file: TFile):
        if self.option_data_provider is not None:
            self.option_data_provider.store_temporary_file(file)
        self.temporary_file = file
        self.removed_file = self.presentable_field.value_as_object
        self.presentable_field.value_as_object = file

    def create_child_controls(self, request):
        self.error_message = None
        self.is_included_in_post_back = False
        if not self._is_valid_post_back_in_form():
            return
        self.is_included_in_post_back = True
        if self.is_read_only:
            return
        has_valid_value = True
        upload = request.files.get(self.client_field_id)
        if upload is not None and len(upload.data) > 0:
            file = TFile(name=upload.filename, mime_type=upload.content_type, data=upload.data)
            self.error_message = self.view_field.validate_upload(file)
            if self.error_message:
                has_valid_value = False
            else:
                self._store_temporary_file(file)
        else:
            temporary_file = None
            if self.option_data_provider is not None:
                temporary_file = self.option_data_provider.find_temporary_file(
                    request.form.get(self.client_field_id + "::TID"))
            if temporary_file is not None:
                self._store_temporary_file(temporary_file)
            elif self._is_uuid(request.form.get(self.client_field_id + "::RID")):
                self.removed_file = self.presentable_field.value_as_object
                self.presentable_field.value_as_object = None
        has_valid_value = has_valid_value and (self.view_field.mandatoriness != TMandatoriness.REQUIRED
                                               or self.presentable_field.value_as_object is not None)
        if not has_valid_value and not self.error_message:
            self.error_message = self.view_field.get_default_error_message()

    @staticmethod
    def _is_uuid(value: str | None) -> bool:
        if not value:
            return False
        try:
            uuid.UUID(value)
        except ValueError:
            return False
        return True

    def get_file_link_anchor_attributes_for(self, file: TFile, file_id: uuid.UUID | None = None) -> Dict[str, str]:
        if not self.has_file_link_anchors:
            raise RuntimeError("File link anchors are disabled for this web field.")
        file_id = file_id or file.id
        base = self.file_base_directory.rstrip("/")
        href = f"{base}/{file_id.hex}/{quote(file.name)}" if base else f"{file_id.hex}/{quote(file.name)}"
        return {"href": href, "target": "_blank"}

    def render_editable_value(self, html: THtmlWriter):
        attrs = {"id": self.client_field_id, "type": "file", "name": self.client_field_id,
                 "accept": " ".join(html_encode(m) for m in self.view_field.accepted_mime_types)}
        if self.view_field.is_autofocused:
            attrs["autofocus"] = "autofocus"
        if self.view_field.mandatoriness == TMandatoriness.REQUIRED:
            attrs["required"] = "required"
        html.stg("input", attrs=attrs)
        file = self.presentable_field.value_as_object
        if file is not None and not file.remove_on_update and file.name:
            self.render_file_link(html, file, True, False)
        if self.removed_file is not None:
            html.hidden(self.client_field_id + "::RID", self.removed_file.id.hex)

    def render_file_link(self, html: THtmlWriter, file: TFile, has_remove_icon: bool, is_diff_new: bool):
        is_form = self.render_mode == TFieldRenderMode.FORM
        if is_form:
            html.tg("span", "listitem")
        if is_diff_new:
            html.tg("span", "diffnew")
        if self.temporary_file is None:
            file_id = file.id
            remove_input = self.client_field_id + "::RID"
        else:
            file_id = self.temporary_file.id
            remove_input = ""
            if has_remove_icon:
                html.hidden(self.client_field_id + "::TID", file_id.hex)
        if self.has_file_link_anchors:
            html.tg("a", attrs=self.get_file_link_anchor_attributes_for(file, file_id))
        html.enc(file.name)
        if self.has_file_link_anchors:
            html.etg("a")
        if has_remove_icon:
            html.text("&nbsp;")
            html.tg("span", "listaction", {
                "data-confirmation": html_encode(f'Would you really like to mark the file "{file.name}" for removal?'),
                "data-remove-input": remove_input,
                "data-remove-value": file_id.hex,
            })
            html.text("&#xE15C;").etg("span")
        if is_diff_new:
            html.etg("span")
        if is_form:
            html.etg("span")

    def render_read_only_value(self, html: THtmlWriter):
        file = self.presentable_field.value_as_object
        if file is not None and file.name:
            is_diff_new = self.comparison_date is not None and not file.existed_at(self.comparison_date)
            self.render_file_link(html, file, False, is_diff_new)
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 DateTime
# ----------------------------------------------------------------------------------------------------------------------
def _time_tag(value: datetime, date_time_type: TDateTimeType) -> str:
    return (f'<time datetime="{date_time_input_value(value, date_time_type)}">'
            f'{html_encode(date_time_display_value(value, date_time_type))}</time>')


class TWebFieldForDateTime(TWebFieldForElement):

    def field_value_as_string(self) -> str:
        return date_time_input_value(self.presentable_field.value, self.view_field.date_time_type)

    def get_input_type_and_step(self) -> Tuple[str, int]:
        date_time_type = self.view_field.date_time_type
        seconds = self.view_field.step.total_seconds() if self.view_field.step is not None else 0
        if date_time_type == TDateTimeType.DATE:
            return "date", round(seconds / 86400)
        if date_time_type == TDateTimeType.LOCAL_DATE_AND_TIME:
            return "datetime-local", round(seconds)
        if date_time_type == TDateTimeType.MONTH:
            return "month", round(seconds / SECONDS_PER_MONTH)
        if date_time_type == TDateTimeType.TIME:
            return "time", round(seconds)
        if date_time_type == TDateTimeType.WEEK:
            return "week", round(seconds / (7 * 86400))
        raise ValueError(f'Date time type "{date_time_type}" is not known.')

    def render_editable_value(self, html: THtmlWriter):
        input_type, step = self.get_input_type_and_step()
        view_field = self.view_field
        attrs = self._input_attributes(input_type)
        attrs["max"] = date_time_input_value(view_field.max_value, view_field.date_time_type)
        attrs["min"] = date_time_input_value(view_field.min_value, view_field.date_time_type)
        options = self.get_options(view_field.option_provider)
        list_id = "o" + self.client_field_id
        if options:
            attrs["list"] = list_id
        if step > 0:
            attrs["step"] = str(step)
        attrs["value"] = html_encode(self.editable_value)
        html.stg("input", attrs=attrs)
        self.render_data_list(html, list_id, options)

    def render_read_only_value(self, html: THtmlWriter):
        date_time_type = self.view_field.date_time_type
        value = self.presentable_field.value
        is_diff_new = False
        if self.comparison_date is not None:
            comparative_field = self.presentable_field.get_versioned_field(self.comparison_date)
            comparative_value = None if comparative_field is None else comparative_field.value
            is_diff_new = comparative_value is None or comparative_value != value
            if is_diff_new and comparative_value is not None:
                html.tg("span", "diffrm").text(_time_tag(comparative_value, date_time_type)).etg("span")
                if value is not None:
                    html.text(" ")
        if value is not None:
            if is_diff_new:
                html.tg("span", "diffnew")
            html.text(_time_tag(value, date_time_type))
            if is_diff_new:
                html.etg("span")
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TWebFieldForCollection — несколько значений
# ----------------------------------------------------------------------------------------------------------------------
class TWebFieldForCollection(TWebFieldForEditableValue):

    def __init__(self, presentable_field, view_field, render_mode: TFieldRenderMode, *args, **kwargs):
        super().__init__(presentable_field, view_field, render_mode, *args, **kwargs)
        self.presentable_field = presentable_field
        self.post_back_values: List[str] = []
        self._previous_value = "".join(presentable_field.get_values_as_string())

    @property
    def previous_value(self) -> str | None:
        return self._previous_value

    @property
    def value_separator(self) -> TValueSeparator:
        return self.view_field.get_value_separator(self.render_mode)

    def get_value_separator_html(self) -> str:
        return get_value_separator_html(self.value_separator)
    # ..................................................................................................................
    # 🔁 Post back
    # ..................................................................................................................
    def create_child_controls(self, request):
        self.error_message = None
        self.is_included_in_post_back = False
        if not self._is_valid_post_back_in_form():
            return
        if self.is_read_only:
            self.is_included_in_post_back = True
            return
        if not self.set_post_back_values(request.get_all(self.client_field_id)):
            return
        self.is_included_in_post_back = True
        if self.post_back_values == self.presentable_field.get_values_as_string():
            return
        hashed_previous_value = request.form.get(self.client_field_id + "::")
        if self.get_hashed_value_for("".join(self.post_back_values)) == hashed_previous_value:
            self.post_back_values = self.presentable_field.get_values_as_string()
        else:
            self.presentable_field.clear()
            for value in self.post_back_values:
                if not self.presentable_field.try_add_string(value):
                    self.error_message = self.view_field.get_default_error_message()

    def split_post_back_value(self, value: str) -> List[str]:
        """Один инпут может нести несколько значений через разделитель."""
        return _split_by_separator(value, self.value_separator)

    def set_post_back_values(self, post_back_values: List[str] | None) -> bool:
        self.post_back_values = []
        if not post_back_values:
            return False
        for post_back_value in post_back_values:
            for value in self.split_post_back_value(post_back_value):
                cleaned_value = self.clean_post_back_value(value)
                if cleaned_value:
                    self.post_back_values.append(cleaned_value)
        return True

    def set_has_valid_value(self, validity_check: TValidityCheck = TValidityCheck.TRANSITIONAL):
        if not self.is_included_in_post_back or self.is_read_only or self.error_message:
            return
        for i, value in enumerate(self.presentable_field.get_values_as_object()):
            if value is None and i < len(self.post_back_values) and self.post_back_values[i]:
                self.error_message = self.view_field.get_default_error_message()
                return
        self.error_message = self.view_field.validate_field(self.presentable_field, validity_check,
                                                            self.topmost, self.option_data_provider)
    # ..................................................................................................................
    # 🎨 Рендеринг
    # ..................................................................................................................
    def get_attributes(self) -> Iterator[Tuple[str, Any]]:
        yield from super().get_attributes()
        if self.render_mode == TFieldRenderMode.LIST_TABLE:
            sortable_value = ",".join(html_encode(v) for v in self.presentable_field.get_sortable_values())
            if sortable_value:
                yield "data-value", sortable_value

    def get_comparative_values(self) -> List[str] | None:
        comparative_field = self.presentable_field.get_versioned_field(self.comparison_date)
        if comparative_field is None:
            return None
        return self.view_field.get_read_only_values_for(comparative_field, self.topmost, self.option_data_provider)

    def get_editable_values(self) -> List[str]:
        if self.post_back_state == TPostBackState.VALID_POSTBACK:
            return self.post_back_values
        return self.presentable_field.get_values_as_string()

    def get_read_only_values(self) -> List[str]:
        return self.view_field.get_read_only_values_for(self.presentable_field, self.topmost,
                                                        self.option_data_provider)

    def render_read_only_value(self, html: THtmlWriter):
        current_values = self.get_read_only_values()
        comparative_values = self.get_comparative_values()
        separator = self.get_value_separator_html()
        is_first_value = True
        for comparative_value in comparative_values or ():
            if comparative_value and comparative_value not in current_values:
                if not is_first_value:
                    html.text(separator)
                is_first_value = False
                html._tg("span", comparative_value, "diffrm")
        for current_value in current_values:
            if not current_value:
                continue
            if not is_first_value:
                html.text(separator)
            is_first_value = False
            if comparative_values is not None and current_value not in comparative_values:
                html._tg("span", current_value, "diffnew")
            else:
                html.enc(current_value)


class TWebFieldForMultipleSingleLineTexts(TWebFieldForCollection):

    def render_editable_value(self, html: THtmlWriter):
        attrs = self._input_attributes()
        attrs["maxlength"] = str(self.view_field.max_length)
        attrs["placeholder"] = html_encode(self.view_field.placeholder)
        is_line_break = self.value_separator == TValueSeparator.LINE_BREAK
        joiner = "\n" if is_line_break else self.get_value_separator_html()
        value = joiner.join(html_encode(v) for v in self.get_editable_values() if v is not None)
        if is_line_break:
            html.tg("textarea", attrs=attrs).text(value).etg("textarea")
        else:
            attrs["type"] = "text"
            attrs["multiple"] = "multiple"
            attrs["value"] = value
            html.stg("input", attrs=attrs)

    def _input_attributes(self) -> Dict[str, Any]:
        attrs: Dict[str, Any] = {"id": self.client_field_id, "name": self.client_field_id}
        if self.view_field.is_autofocused:
            attrs["autofocus"] = "autofocus"
        if self.view_field.mandatoriness == TMandatoriness.REQUIRED:
            attrs["required"] = "required"
        return attrs


class TWebFieldForMultipleChoices(TWebFieldForCollection):

    def split_post_back_value(self, value: str) -> List[str]:
        # флажок = один ключ, ключ может содержать запятую
        return [value] if value else []

    def create_child_controls(self, request):
        super().create_child_controls(request)
        if self._is_valid_post_back_in_form() and not self.is_included_in_post_back:
            # ни одного флажка, браузер поле не присылает
            self.is_included_in_post_back = True
            if self.view_field.mandatoriness == TMandatoriness.REQUIRED:
                self.error_message = self.view_field.get_default_error_message()
            else:
                self.presentable_field.clear()

    def _require_option_provider(self):
        option_provider = self.view_field.option_provider
        if option_provider is None:
            raise TypeError(f'Option provider of view field for key "{self.view_field.key}" must not be null.')
        return option_provider

    def render_editable_value(self, html: THtmlWriter):
        option_provider = self._require_option_provider()
        options = self.get_options(option_provider)
        selected_keys = self.get_editable_values()
        if self.view_field.limit < 2 and self.view_field.limit != 0:
            selected_key = selected_keys[0] if selected_keys else None
            use_radio_buttons = self.view_field.mandatoriness == TMandatoriness.REQUIRED and len(options) < 7
            _render_single_choice(self, html, options, option_provider.get_display_value_for_null(),
                                  selected_key, use_radio_buttons)
            return
        for i, (key, text) in enumerate(options.items()):
            attrs = {"id": f"{self.client_field_id}-{i}", "type": "checkbox", "name": self.client_field_id,
                     "value": html_encode(key)}
            if i == 0 and self.view_field.is_autofocused:
                attrs["autofocus"] = "autofocus"
            if key in selected_keys:
                attrs["checked"] = "checked"
            html.tg("label", "checkbox").stg("input", attrs=attrs).enc(text).etg("label")
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 Multiple lookups — textarea с подсказками, значение на строку
# ----------------------------------------------------------------------------------------------------------------------
class TWebFieldForMultipleLookups(TWebFieldForCollection):

    def clean_post_back_value(self, value: str) -> str:
        return value.strip() if value is not None else value

    def render_editable_value(self, html: THtmlWriter):
        view_field = self.view_field
        attrs: Dict[str, Any] = {"id": self.client_field_id}
        if view_field.is_autofocused:
            attrs["autofocus"] = "autofocus"
        attrs["data-ajaxlist"] = self.client_field_id + ".json"
        if view_field.is_fill_in_allowed:
            attrs["data-allowfillin"] = "1"
        attrs["data-min-search-length"] = str(view_field.min_search_length)
        attrs["name"] = self.client_field_id
        attrs["placeholder"] = html_encode(view_field.placeholder)
        if view_field.mandatoriness == TMandatoriness.REQUIRED:
            attrs["required"] = "required"
        value = "\n".join(html_encode(v) for v in self.get_editable_values() if v)
        html.tg("textarea", attrs=attrs).text(value).etg("textarea")


class TWebFieldForMultipleStringLookups(TWebFieldForMultipleLookups):
    """В модели ключи, в textarea значения провайдера."""

    def clean_post_back_value(self, value: str) -> str:
        cleaned_value = super().clean_post_back_value(value)
        lookup_provider = self.view_field.require_lookup_provider()
        unique_value = lookup_provider.find_unique_value_by_vague_term(cleaned_value)
        key = None if unique_value is None else lookup_provider.find_key_for_value(unique_value)
        return key or cleaned_value

    def get_editable_values(self) -> List[str]:
        lookup_provider = self.view_field.require_lookup_provider()
        return [lookup_provider.find_value_for_key(k) or k for k in super().get_editable_values()]


class TWebFieldForMultiplePresentableObjectLookups(TWebFieldForMultipleLookups):
    """
    Значения коллекции: объекты. Хэш в <client_field_id>:: считается от id объектов,
    post back сначала дополняется до единственного кандидата, затем переводится в объекты.
    """

    def __init__(self, presentable_field, view_field, render_mode: TFieldRenderMode, *args, **kwargs):
        super().__init__(presentable_field, view_field, render_mode, *args, **kwargs)
        self._previous_value = self._join_ids(presentable_field.get_values_as_object())

    @staticmethod
    def _join_ids(objects: Iterable[Any]) -> str:
        return "".join(o.id.hex for o in objects if isinstance(o, TPresentableObject))

    def _autocomplete_value(self, value: str) -> str:
        unique_value = self.view_field.require_lookup_provider().find_unique_value_by_vague_term(value)
        return unique_value or value

    def create_child_controls(self, request):
        self.error_message = None
        self.is_included_in_post_back = False
        if not self._is_valid_post_back_in_form():
            return
        if self.is_read_only:
            self.is_included_in_post_back = True
            return
        if not self.set_post_back_values(request.get_all(self.client_field_id)):
            return
        self.is_included_in_post_back = True
        lookup_provider = self.view_field.require_lookup_provider()
        self.post_back_values = [self._autocomplete_value(v) for v in self.post_back_values]
        post_back_objects = [lookup_provider.find_key_for_value(v) for v in self.post_back_values]
        current_objects = [o for o in self.presentable_field.get_values_as_object() if o is not None]
        if len(post_back_objects) == len(current_objects) \
                and all(a is b for a, b in zip(post_back_objects, current_objects)):
            return
        hashed_previous_value = request.form.get(self.client_field_id + "::")
        if self.get_hashed_value_for(self._join_ids(post_back_objects)) == hashed_previous_value:
            self.post_back_values = self.get_read_only_values()
        else:
            self.presentable_field.clear()
            # None остаётся на месте неразрешённой строки: set_has_valid_value покажет ошибку
            for post_back_object in post_back_objects:
                self.presentable_field.append(post_back_object)

    def get_editable_values(self) -> List[str]:
        if self.post_back_state == TPostBackState.VALID_POSTBACK:
            return self.post_back_values
        return self.get_read_only_values()
# ======================================================================================================================
# 📁🌄 tf_fields.py 🜂 The End — See You Next Session 2025
# ======================================================================================================================
