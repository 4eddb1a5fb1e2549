# ======================================================================================================================
# 📁 file        : tf_lists.py — таблицы и карточки объектов
# 🕒 created     : 25.10.2025 14:40
# 🎉 contains    : TListTableRow, TListTable, TCardPane
# 🌅 project     : Tradition Forms 2025 🜂
# ======================================================================================================================
# 🚢 ...imports...
from __future__ import annotations
from typing import Any, Dict, Iterable, Iterator, List, Tuple
from tf_html import THtmlWriter, html_encode
from tf_controls import TCascadedControl, TMasterControl, TWebControl
from tf_model import TFieldRenderMode, TPostBackState, TPresentableObject
from tf_views import TViewFieldForEditableValue, TListTableView
# 💎 ... CONFIG / CONSTS ...
ELLIPSIS = "…"
# 💎🧩⚙️ ... __ALL__ ...
__all__ = ['TListTableRow', 'TListTable', 'TCardPane', 'truncate']
# ---
def truncate(text: str, max_length: int) -> str:
    """Обрезает по границе слова и добавляет многоточие."""
    if max_length <= 0 or len(text) <= max_length:
        return text
    cut = text[:max_length].rstrip()
    space = cut.rfind(" ")
    if space > max_length // 2:
        cut = cut[:space].rstrip()
    return cut + ELLIPSIS
# ---
def _list_table_factory(web_factory, option_data_provider=None):
    if web_factory is not None:
        return web_factory
    from tf_factory import TWebFactory
    return TWebFactory(TFieldRenderMode.LIST_TABLE, option_data_provider)
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TListTableRow — строка таблицы, ячейка на каждое видимое поле
# ----------------------------------------------------------------------------------------------------------------------
class TListTableRow(TCascadedControl):

    def __init__(self, presentable_object: TPresentableObject, view: TListTableView, file_base_directory: str,
                 web_factory, Owner=None, Name: str | None = None):
        super().__init__("tr", Owner, Name)
        self.Attributes: Dict[str, str] = {}
        self.file_base_directory = file_base_directory
        self.presentable_object = presentable_object
        self.view = view
        self.web_factory = web_factory

    def create_child_controls(self, request):
        for view_field in self.view.view_fields:
            if not view_field.is_visible:
                continue
            if not isinstance(view_field, TViewFieldForEditableValue):
                self.add_control(self.web_factory.build_field_for(
                    view_field, self.presentable_object, None, "", "", TPostBackState.NO_POSTBACK,
                    self.file_base_directory))
                continue
            presentable_field = self.presentable_object.find_presentable_field(view_field.key)
            if presentable_field is None:
                # в строках таблиц отсутствующие поля всегда пропускаются
                self.add_control(TWebControl("td"))
            else:
                self.add_control(self.web_factory.build_field_for_editable(
                    presentable_field, view_field, self.presentable_object, None, "", "",
                    TPostBackState.NO_POSTBACK, self.file_base_directory))
        super().create_child_controls(request)

    def get_attributes(self) -> Iterator[Tuple[str, Any]]:
        yield from super().get_attributes()
        yield from self.Attributes.items()
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TListTable — таблица объектов
# ----------------------------------------------------------------------------------------------------------------------
class TListTable(TMasterControl):

    def __init__(self, presentable_objects: Iterable[TPresentableObject], view: TListTableView,
                 file_base_directory: str = "", web_factory=None, Owner=None, Name: str | None = None):
        super().__init__("div", Owner, Name)
        self.css_class_for_table = ""
        self.file_base_directory = file_base_directory
        self.presentable_objects = list(presentable_objects)
        self.view = view
        self.web_factory = _list_table_factory(web_factory)
        self.on_click_url = view.on_click_url
        self.rows: List[TListTableRow] = []
        self.web_factory.set_css_classes_for_list_table(self)

    def create_child_controls(self, request):
        self.rows = []
        for presentable_object in self.presentable_objects:
            row = self.web_factory.build_row_for(presentable_object, self.view, self.file_base_directory)
            if self.on_click_url is not None:
                row.Attributes["data-href"] = html_encode(self.on_click_url(presentable_object))
            self.add_control(row)
            self.rows.append(row)
        super().create_child_controls(request)

    def render_child_controls(self, html: THtmlWriter):
        if self.view.title:
            html._tg("h1", self.view.title)
        self.render_description_message(html, self.view.description)
        attrs = {}
        if self.view.is_sortable:
            attrs["data-sortable"] = "1"
        html.tg("table", self.css_class_for_table, attrs)
        html.tg("thead")
        self.render_header_row(html)
        html.etg("thead")
        html.tg("tbody")
        super().render_child_controls(html)
        html.etg("tbody")
        html.etg("table")

    def render_header_row(self, html: THtmlWriter):
        html.tg("tr")
        for view_field in self.view.view_fields:
            if view_field.is_visible:
                html._tg("th", view_field.title)
        html.etg("tr")
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TCardPane — карточки-ссылки: заголовок + короткое описание
# ----------------------------------------------------------------------------------------------------------------------
class TCardPane(TMasterControl):

    def __init__(self, presentable_objects: Iterable[TPresentableObject], title_key: str = "",
                 description_key: str = "", max_description_length: int = 160, web_factory=None,
                 Owner=None, Name: str | None = None):
        super().__init__("div", Owner, Name)
        self.description = ""
        self.description_key = description_key
        self.max_description_length = max_description_length
        self.presentable_objects = list(presentable_objects)
        self.title_key = title_key
        _list_table_factory(web_factory).set_css_classes_for_card_pane(self)

    def get_title_for(self, presentable_object: TPresentableObject) -> str:
        if self.title_key:
            field = presentable_object.find_presentable_field(self.title_key)
            if field is not None and field.is_for_single_element and field.value_as_string:
                return field.value_as_string
        return presentable_object.get_title()

    def get_description_for(self, presentable_object: TPresentableObject) -> str:
        if not self.description_key:
            return ""
        field = presentable_object.find_presentable_field(self.description_key)
        if field is None or not field.is_for_single_element:
            return ""
        return field.value_as_string

    def render_child_controls(self, html: THtmlWriter):
        self.render_description_message(html, self.description)
        super().render_child_controls(html)
        for presentable_object in self.presentable_objects:
            if presentable_object is None:
                continue
            attrs = {}
            if self.on_click_url is not None:
                attrs["href"] = html_encode(self.on_click_url(presentable_object))
            html.tg("a", attrs=attrs)
            html._tg("h1", self.get_title_for(presentable_object))
            description = self.get_description_for(presentable_object)
            if description:
                html._tg("p", truncate(description, self.max_description_length))
            html.etg("a")
# ======================================================================================================================
# 📁🌄 tf_lists.py 🜂 The End — See You Next Session 2025
# ======================================================================================================================
