# ======================================================================================================================
# 📁 file        : tf_panes.py — панели формы: строители дерева контролов
# 🕒 created     : 24.10.2025 10:21
# 🎉 contains    : TFormPane, TFormPaneWithTitle, TFormPaneForFields, TFormPaneForPanes, TFormGroupedPane,
#                  TFormCollectionPane, TFormPanePlaceholder
# 🌅 project     : Tradition Forms 2025 🜂
# ======================================================================================================================
# 🚢 ...imports...
from __future__ import annotations
import uuid
from datetime import datetime
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple
from tf_sys import TPresentationError, TFieldNotFoundError
from tf_html import THtmlWriter, html_encode
from tf_controls import TWebControl
from tf_model import (
    TPostBackState, TFormPaneType, TPresentableObject, TPresentableFieldForCollection, key_chain_from_key,
)
from tf_views import (
    TViewFieldForEditableValue, TViewPaneWithTitle, TViewPaneForFields, TViewPaneForPanes, TViewGroupedPane,
    TViewCollectionPane,
)
# 💎 ... CONFIG / CONSTS ...
NEW_OBJECT_ID = "N"
PREPARED_OBJECT_ID = "P"
REMOVAL_PREFIX = "R-"
# 💎🧩⚙️ ... __ALL__ ...
__all__ = [
    'TFormPane', 'TFormPaneWithTitle', 'TFormPaneForFields', 'TFormPaneForPanes', 'TFormGroupedPane',
    'TFormCollectionPane', 'TFormPanePlaceholder',
    'NEW_OBJECT_ID', 'PREPARED_OBJECT_ID', 'REMOVAL_PREFIX',
]
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TFormPane — базовая панель формы
# ----------------------------------------------------------------------------------------------------------------------
class TFormPane(TWebControl):
    # ⚡🛠️ ▸ __init__
    def __init__(self, tag_name: str, presentable_object: TPresentableObject | None, key: str,
                 topmost: TPresentableObject | None, comparison_date: datetime | None, prefix: str, suffix: str,
                 post_back_state: TPostBackState, file_base_directory: str, form_factory,
                 Owner=None, Name: str | None = None):
        """
        Панель знает объект, для которого рисуется, и префикс имён инпутов.
        Ключ панели дописывается к префиксу: "" + "Address" → "Address", "Order" + "Address" → "Order.Address".
        has_read_only_fields_only / has_valid_value: три состояния: None (не вычислено), True, False.
        """
        super().__init__(tag_name, Owner, Name)
        self.client_field_id_prefix = prefix or ""
        if key:
            if self.client_field_id_prefix:
                self.client_field_id_prefix += "."
            self.client_field_id_prefix += key
        self.client_field_id_suffix = suffix or ""
        self.comparison_date = comparison_date
        self.file_base_directory = file_base_directory
        self.form_factory = form_factory
        self.has_read_only_fields_only: Optional[bool] = None
        self.has_valid_value: Optional[bool] = None
        self.key = key or ""
        self.post_back_state = post_back_state
        self.presentable_object = presentable_object
        self.topmost = topmost
        self._presentable_field_to_render_pane_for = None
        self._presentable_object_to_render_pane_for = None
        # ⚡🛠️ TFormPane ▸ End of __init__
    # ..................................................................................................................
    @property
    def is_empty(self) -> bool:
        """Пуста, если все дети пустые панели (или детей нет)."""
        for ctrl in self.Controls:
            if not isinstance(ctrl, TFormPane) or not ctrl.is_empty:
                return False
        return True

    @property
    def ignore_missing_fields(self) -> bool:
        return self.form_factory.ignore_missing_fields
    # ..................................................................................................................
    # 🔍 Объект / поле, для которого рисуется панель
    # ..................................................................................................................
    def get_presentable_field_to_render_pane_for(self):
        if self._presentable_field_to_render_pane_for is None:
            if self.presentable_object is None:
                if not self.ignore_missing_fields:
                    raise TPresentationError("Presentable object may not be null.")
            else:
                field = self.presentable_object.find_presentable_field(key_chain_from_key(self.key))
                if field is None and not self.ignore_missing_fields:
                    raise TFieldNotFoundError(
                        f'Presentable field for view field with key "{self.key}" cannot be found.')
                self._presentable_field_to_render_pane_for = field
        return self._presentable_field_to_render_pane_for

    def get_presentable_object_to_render_pane_for(self) -> TPresentableObject | None:
        if self._presentable_object_to_render_pane_for is None:
            if not self.key:
                self._presentable_object_to_render_pane_for = self.presentable_object
            else:
                field = self.get_presentable_field_to_render_pane_for()
                if field is None:
                    return None
                if field.is_for_single_element:
                    value = field.value_as_object
                    if isinstance(value, TPresentableObject):
                        self._presentable_object_to_render_pane_for = value
                elif not self.ignore_missing_fields:
                    raise TPresentationError(
                        f'Presentable field for view field with key "{self.key}" was expected to be for a single '
                        f'element, but it is for a collection.')
        return self._presentable_object_to_render_pane_for
    # ..................................................................................................................
    # 🎨 Рендеринг
    # ..................................................................................................................
    def render_child_controls(self, html: THtmlWriter):
        html.text(self.inner_html)
        for ctrl in self.Controls:
            if isinstance(ctrl, TFormPane) and ctrl.is_empty:
                continue
            ctrl.render(html)
    # ..................................................................................................................
    # ✔️ Валидность
    # ..................................................................................................................
    def set_has_read_only_fields_only_from(self, form_panes: Iterable["TFormPane"]):
        self.has_read_only_fields_only = True
        for form_pane in form_panes:
            if form_pane.has_read_only_fields_only is False:
                self.has_read_only_fields_only = False
                break

    def set_has_valid_value(self):
        raise NotImplementedError

    def set_has_valid_value_from(self, form_panes: Iterable["TFormPane"]):
        """Панели объектов, помеченных на удаление, не проверяются. None от любой панели даёт итог None."""
        self.has_valid_value = True
        for form_pane in form_panes:
            if form_pane.presentable_object is not None and form_pane.presentable_object.remove_on_update:
                continue
            form_pane.set_has_valid_value()
            if form_pane.has_valid_value is None:
                self.has_valid_value = None
                break
            if form_pane.has_valid_value is False:
                self.has_valid_value = False
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TFormPaneWithTitle — fieldset (самостоятельная) / section (секция группы)
# ----------------------------------------------------------------------------------------------------------------------
class TFormPaneWithTitle(TFormPane):

    def __init__(self, pane_type: TFormPaneType, presentable_object, key, topmost, comparison_date, prefix, suffix,
                 post_back_state, file_base_directory, form_factory, Owner=None, Name: str | None = None):
        is_stand_alone = pane_type == TFormPaneType.STAND_ALONE
        super().__init__("fieldset" if is_stand_alone else "section", presentable_object, key, topmost,
                         comparison_date, prefix, suffix, post_back_state, file_base_directory, form_factory,
                         Owner, Name)
        if is_stand_alone:
            self.add_class("fieldset")
        self.css_class_for_pane_error = ""
        self.force_rendering_of_object_id = False
        self.is_new_from_post_back = False
        self.pane_type = pane_type

    @property
    def is_removed(self) -> bool:
        return self.presentable_object is not None and bool(self.presentable_object.remove_on_update)

    def get_css_classes(self) -> List[str]:
        classes = super().get_css_classes()
        if self.pane_type == TFormPaneType.SECTION:
            if self.is_removed:
                classes.append("removed")
        elif self.has_valid_value is False and self.css_class_for_pane_error:
            classes.append(self.css_class_for_pane_error)
        return classes

    def get_attributes(self) -> Iterator[Tuple[str, Any]]:
        yield from super().get_attributes()
        if self.pane_type == TFormPaneType.SECTION and not self.is_removed:
            if self.has_valid_value is False:
                if self.css_class_for_pane_error:
                    yield "data-header-css-class", self.css_class_for_pane_error
                yield "data-selected", "1"
            elif self.has_read_only_fields_only is False:
                yield "data-selected", "2"

    def get_object_id_for_post_back(self) -> str:
        """Что уходит в скрытый инпут объекта: R-N / N / P / hex / R-hex."""
        obj = self.presentable_object
        if obj.is_new:
            if obj.remove_on_update:
                return REMOVAL_PREFIX + NEW_OBJECT_ID
            if self.is_new_from_post_back:
                return NEW_OBJECT_ID
            return PREPARED_OBJECT_ID
        if obj.remove_on_update:
            return REMOVAL_PREFIX + obj.id.hex
        return obj.id.hex

    def render_pane_title_and_object_id(self, html: THtmlWriter, title: str | None):
        if self.pane_type != TFormPaneType.SECTION and title:
            html._tg("span", title)
        if self.force_rendering_of_object_id or self.key:
            html.hidden(self.client_field_id_prefix + self.client_field_id_suffix,
                        self.get_object_id_for_post_back())
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TFormPaneForFields — панель с полями
# ----------------------------------------------------------------------------------------------------------------------
class TFormPaneForFields(TFormPaneWithTitle):

    def __init__(self, pane_type: TFormPaneType, presentable_object, view_pane: TViewPaneForFields, topmost,
                 comparison_date, prefix, suffix, post_back_state, file_base_directory, form_factory,
                 Owner=None, Name: str | None = None):
        super().__init__(pane_type, presentable_object, view_pane.key, topmost, comparison_date, prefix, suffix,
                         post_back_state, file_base_directory, form_factory, Owner, Name)
        self.view_pane = view_pane
        self.form_fields: List = []

    def create_child_controls(self, request):
        self.form_fields = []
        presentable_object = self.get_presentable_object_to_render_pane_for()
        if presentable_object is not None:
            for view_field in self.view_pane.view_fields:
                if not view_field.is_visible:
                    continue
                if not isinstance(view_field, TViewFieldForEditableValue):
                    self.add_control(self.form_factory.build_field_for(
                        view_field, self.topmost, self.comparison_date, self.client_field_id_prefix,
                        self.client_field_id_suffix, self.post_back_state, self.file_base_directory))
                    continue
                presentable_field = presentable_object.find_presentable_field(view_field.key_chain)
                if presentable_field is None:
                    if not self.ignore_missing_fields:
                        raise TFieldNotFoundError(
                            f'Presentable field for view field with key "{view_field.key}" cannot be found.')
                    continue
                web_field = self.form_factory.build_field_for_editable(
                    presentable_field, view_field, self.topmost, self.comparison_date, self.client_field_id_prefix,
                    self.client_field_id_suffix, self.post_back_state, self.file_base_directory)
                self.add_control(web_field)
                self.form_fields.append(web_field)
        super().create_child_controls(request)
        self.has_read_only_fields_only = all(f.is_read_only for f in self.form_fields)

    def render_child_controls(self, html: THtmlWriter):
        if self.view_pane.has_two_columns_in_wide_windows and self.view_pane.title:
            raise RuntimeError("View pane for fields cannot be rendered with two columns if a title is set. "
                               "Please do not set a title for view pane and encapsulate it into a view pane "
                               "for panes instead, which has the title to be displayed set.")
        self.render_pane_title_and_object_id(html, self.view_pane.title)
        is_section = self.pane_type == TFormPaneType.SECTION
        if is_section:
            html.tg("fieldset", "fieldset")
        super().render_child_controls(html)
        if is_section:
            html.etg("fieldset")

    def set_has_valid_value(self):
        self.has_valid_value = True
        for form_field in self.form_fields:
            form_field.set_has_valid_value()
            if not form_field.is_included_in_post_back and not self.presentable_object.is_new:
                raise TPresentationError(
                    f'Form cannot be validated because expected web field with key "{form_field.client_field_id}" '
                    f'is not included in post back data. Typically this occures if the post back data was '
                    f'manipulated.')
            if form_field.error_message:
                self.has_valid_value = False
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TFormPaneForPanes — панель из панелей
# ----------------------------------------------------------------------------------------------------------------------
class TFormPaneForPanes(TFormPaneWithTitle):

    def __init__(self, pane_type: TFormPaneType, presentable_object, view_pane: TViewPaneForPanes, topmost,
                 comparison_date, prefix, suffix, post_back_state, file_base_directory, form_factory,
                 Owner=None, Name: str | None = None):
        super().__init__(pane_type, presentable_object, view_pane.key, topmost, comparison_date, prefix, suffix,
                         post_back_state, file_base_directory, form_factory, Owner, Name)
        self.view_pane = view_pane
        self.form_panes: List[TFormPane] = []

    def create_child_controls(self, request):
        self.form_panes = []
        presentable_object = self.get_presentable_object_to_render_pane_for()
        if presentable_object is not None:
            for view_pane in self.view_pane.view_panes:
                if view_pane.is_visible:
                    form_pane = self.form_factory.build_pane_for(
                        presentable_object, view_pane, self.topmost, self.comparison_date,
                        self.client_field_id_prefix, self.client_field_id_suffix, self.post_back_state,
                        self.file_base_directory)
                    self.add_control(form_pane)
                    self.form_panes.append(form_pane)
        super().create_child_controls(request)
        self.set_has_read_only_fields_only_from(self.form_panes)

    def render_child_controls(self, html: THtmlWriter):
        self.render_pane_title_and_object_id(html, self.view_pane.title)
        super().render_child_controls(html)

    def set_has_valid_value(self):
        self.set_has_valid_value_from(self.form_panes)
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TFormGroupedPane — секции-вкладки / секции-таблица
# ----------------------------------------------------------------------------------------------------------------------
class TFormGroupedPane(TFormPane):

    def __init__(self, presentable_object, view_pane: TViewGroupedPane, topmost, comparison_date, prefix, suffix,
                 post_back_state, file_base_directory, form_factory, Owner=None, Name: str | None = None):
        super().__init__("div", presentable_object, view_pane.key, topmost, comparison_date, prefix, suffix,
                         post_back_state, file_base_directory, form_factory, Owner, Name)
        self.view_pane = view_pane
        self.form_sections: List[TFormPaneWithTitle] = []

    def create_child_controls(self, request):
        self.form_sections = []
        presentable_object = self.get_presentable_object_to_render_pane_for()
        if presentable_object is not None:
            for view_section in self.view_pane.sections:
                if not view_section.is_visible:
                    continue
                form_section = self.form_factory.build_pane_section_for(
                    presentable_object, view_section, self.topmost, self.comparison_date,
                    self.client_field_id_prefix, self.client_field_id_suffix, self.post_back_state,
                    self.file_base_directory, False)
                if view_section.title:
                    form_section.Attributes["data-title"] = html_encode(view_section.title)
                self.add_control(form_section)
                self.form_sections.append(form_section)
        super().create_child_controls(request)
        self.set_has_read_only_fields_only_from(self.form_sections)

    def set_has_valid_value(self):
        self.set_has_valid_value_from(self.form_sections)
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TFormCollectionPane — секция на каждый вложенный объект коллекции
# ----------------------------------------------------------------------------------------------------------------------
class TFormCollectionPane(TFormPane):
    # ⚡🛠️ ▸ __init__
    def __init__(self, presentable_object, view_pane: TViewCollectionPane, topmost, comparison_date, prefix, suffix,
                 post_back_state, file_base_directory, form_factory, Owner=None, Name: str | None = None):
        """
        Секции объектов коллекции + шаблон секции для новых объектов (его клонирует клиент).
        В post-данных каждая секция i присылает <prefix><suffix>_i = id объекта и <prefix><suffix>_i:: = порядок.
        """
        super().__init__("div", presentable_object, view_pane.key, topmost, comparison_date, prefix, suffix,
                         post_back_state, file_base_directory, form_factory, Owner, Name)
        field = self.get_presentable_field_to_render_pane_for()
        self.is_read_only = field is None or field.is_read_only or view_pane.is_read_only_for(presentable_object)
        self.view_pane = view_pane
        self.form_sections: List[TFormPaneWithTitle] = []
        self.f_is_visible = False
        # ⚡🛠️ TFormCollectionPane ▸ End of __init__

    def get_is_visible(self) -> bool:
        return self.f_is_visible
    # ..................................................................................................................
    # 🏗️ Секции
    # ..................................................................................................................
    def add_section_for_presentable_object(self, presentable_object: TPresentableObject,
                                           view_section: TViewPaneWithTitle, id_suffix: str,
                                           is_new_from_post_back: bool):
        for existing_section in self.form_sections:
            if existing_section.presentable_object.id == presentable_object.id:
                return
        section = self.form_factory.build_pane_section_for(
            presentable_object, view_section, self.topmost, self.comparison_date, self.client_field_id_prefix,
            self.client_field_id_suffix + id_suffix, self.post_back_state, self.file_base_directory,
            is_new_from_post_back)
        self.add_title_field_to_section(presentable_object, section, id_suffix)
        section.force_rendering_of_object_id = True
        self.add_control(section)
        self.form_sections.append(section)

    def add_section_template(self, placeholder: TPresentableObject, view_section: TViewPaneWithTitle):
        section = self.form_factory.build_pane_section_template_for(
            placeholder, view_section, self.topmost, self.comparison_date, self.client_field_id_prefix,
            self.client_field_id_suffix, self.file_base_directory)
        self.add_title_field_to_section(placeholder, section, "")
        section.force_rendering_of_object_id = True
        self.add_control(section)

    def add_title_field_to_section(self, presentable_object: TPresentableObject, section: TFormPaneWithTitle,
                                   id_suffix: str):
        title_field = self.view_pane.title_field
        if not title_field:
            return
        view_field_for_title = self.view_pane.find_one_view_field(title_field)
        if self.view_pane.has_button_for_adding_new_objects and view_field_for_title is None:
            raise TPresentationError("Title field of view pane is not contained in view fields of view pane.")
        presentable_field_for_title = presentable_object.find_presentable_field(title_field)
        if presentable_field_for_title is None or not presentable_field_for_title.is_for_single_element:
            if not self.ignore_missing_fields:
                raise TFieldNotFoundError(f'Presentable field for view field with key "{title_field}" cannot be found.')
            return
        if view_field_for_title is None:
            if presentable_field_for_title.value_as_string:
                section.Attributes["data-title"] = html_encode(presentable_field_for_title.value_as_string)
        elif view_field_for_title.is_read_only or presentable_field_for_title.is_read_only:
            title = view_field_for_title.get_read_only_value_for(presentable_field_for_title, self.topmost,
                                                                 self.form_factory.option_data_provider)
            if title:
                section.Attributes["data-title"] = html_encode(title)
        else:
            title_input_name = self.client_field_id_prefix + "." if self.client_field_id_prefix else ""
            title_input_name += title_field + self.client_field_id_suffix + id_suffix
            section.Attributes["data-title-input-name"] = title_input_name
    # ..................................................................................................................
    # 🔁 Жизненный цикл
    # ..................................................................................................................
    def create_child_controls(self, request):
        field = self.get_presentable_field_to_render_pane_for()
        if not isinstance(field, TPresentableFieldForCollection):
            if field is not None:
                raise TPresentationError(
                    f'Form collection pane for presentable field of type {type(field).__name__} with key '
                    f'"{field.key}" cannot be rendered because it is not a presentable field for collections.')
            return
        view_section = self.view_pane.to_view_pane_with_title()
        if self.view_pane.auto_add_first_section:
            self.Attributes["data-add-first-section"] = "1"
        elif self.view_pane.placeholder:
            self.add_control(self.form_factory.build_pane_section_placeholder(self.view_pane.placeholder))
        if not self.is_read_only:
            if self.view_pane.has_buttons_for_removing_objects:
                self.Attributes["data-remove-button"] = "1"
                if self.view_pane.confirmation_message_for_removal:
                    self.Attributes["data-remove-confirmation"] = html_encode(
                        self.view_pane.confirmation_message_for_removal)
            if self.view_pane.is_sortable and not field.is_read_only:
                self.Attributes["data-is-sortable"] = "1"
        if self.view_pane.has_button_for_adding_new_objects and not self.is_read_only:
            self.add_section_template(field.new_item_as_object(), view_section)
        self.form_sections = []
        self.create_child_controls_for_post_back_sections(request, field, view_section)
        self.create_child_controls_for_non_post_back_sections(field, view_section)
        super().create_child_controls(request)
        self.set_has_read_only_fields_only_from(self.form_sections)
        no_new_sections = self.is_read_only or not self.view_pane.has_button_for_adding_new_objects
        self.f_is_visible = not (no_new_sections and not self.form_sections)

    @staticmethod
    def _pick_post_back_id(post_back_ids: List[str]) -> str:
        """Несколько id под одним именем: приоритет у R-…, затем у N."""
        post_back_ids = [p for p in post_back_ids if p]
        if not post_back_ids:
            return ""
        picked = post_back_ids[0]
        for candidate in post_back_ids:
            if candidate.startswith(REMOVAL_PREFIX):
                return candidate
            if candidate == NEW_OBJECT_ID:
                picked = candidate
        return picked

    def _find_post_back_object(self, field: TPresentableFieldForCollection, post_back_id: str,
                               prepared: List[int]) -> Tuple[TPresentableObject | None, int, bool]:
        """(объект, прежний индекс, новый-из-postback) для одного присланного id."""
        can_add = self.view_pane.has_button_for_adding_new_objects
        can_remove = self.view_pane.has_buttons_for_removing_objects
        if can_add and post_back_id == NEW_OBJECT_ID:
            post_back_object = field.new_item_as_object()
            previous_index = field.count
            field.add_object(post_back_object)
            return post_back_object, previous_index, True
        if can_add and can_remove and post_back_id == REMOVAL_PREFIX + NEW_OBJECT_ID:
            post_back_object = field.new_item_as_object()
            post_back_object.remove_on_update = True
            return post_back_object, field.count, True
        if post_back_id == PREPARED_OBJECT_ID:
            # prepared[0]: сколько подготовленных новых объектов уже разобрано
            index_of_prepared_object = 0
            for j, current in enumerate(field.get_values_as_object()):
                if current.is_new:
                    index_of_prepared_object += 1
                    if index_of_prepared_object > prepared[0]:
                        prepared[0] = index_of_prepared_object
                        return current, j, False
            return None, -1, False
        is_removal = post_back_id.startswith(REMOVAL_PREFIX)
        if is_removal:
            post_back_id = post_back_id[len(REMOVAL_PREFIX):]
        try:
            post_back_uuid = uuid.UUID(post_back_id)
        except ValueError:
            self.debug("create_child_controls", f"unknown post back id {post_back_id!r}")
            return None, -1, False
        for j, current in enumerate(field.get_values_as_object()):
            if current.id == post_back_uuid:
                if can_remove and is_removal:
                    current.remove_on_update = True
                    return current, -1, False
                return current, j, False
        return None, -1, False

    def create_child_controls_for_post_back_sections(self, request, field: TPresentableFieldForCollection,
                                                     view_section: TViewPaneWithTitle):
        if self.post_back_state != TPostBackState.VALID_POSTBACK:
            return
        base_name = self.client_field_id_prefix + self.client_field_id_suffix
        sort_sequence: Dict[uuid.UUID, int] = {}
        prepared = [0]
        i = 0
        while True:
            post_back_id = self._pick_post_back_id(request.get_all(f"{base_name}_{i}"))
            if not post_back_id:
                break
            post_back_object, previous_index, is_new_from_post_back = \
                self._find_post_back_object(field, post_back_id, prepared)
            if post_back_object is not None:
                order = request.form.get(f"{base_name}_{i}::")
                if order:
                    try:
                        sort_sequence[post_back_object.id] = int(order)
                    except ValueError:
                        self.debug("create_child_controls", f"bad order {order!r} for section {i}")
                self.add_section_for_presentable_object(post_back_object, view_section, f"_{i}",
                                                        is_new_from_post_back)
                if i < previous_index < field.count:
                    field.swap(i, previous_index)
            i += 1
        if sort_sequence:
            # без номера в начало с прежним порядком, остальные по присланному номеру
            field.sort_objects(lambda o: (o.id in sort_sequence, sort_sequence.get(o.id, 0)))

    def create_child_controls_for_non_post_back_sections(self, field: TPresentableFieldForCollection,
                                                         view_section: TViewPaneWithTitle):
        i = len(self.form_sections)
        for current in field.get_values_as_object():
            self.add_section_for_presentable_object(current, view_section, f"_{i}", False)
            i += 1

    def set_has_valid_value(self):
        self.set_has_valid_value_from(self.form_sections)
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TFormPanePlaceholder — текст вместо пустой коллекции
# ----------------------------------------------------------------------------------------------------------------------
class TFormPanePlaceholder(TWebControl):

    def __init__(self, text: str, Owner=None, Name: str | None = None):
        super().__init__("div", Owner, Name)
        self.text = text

    @property
    def is_empty(self) -> bool:
        return False

    def render_child_controls(self, html: THtmlWriter):
        html.enc(self.text)
# ======================================================================================================================
# 📁🌄 tf_panes.py 🜂 The End — See You Next Session 2025
# ======================================================================================================================
