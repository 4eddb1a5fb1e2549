# ======================================================================================================================
# 📁 file        : tf_factory.py — фабрика веб-полей и панелей
# 🕒 created     : 24.10.2025 16:05
# 🎉 contains    : TWebFactory — стеки соответствий view field → web field, строители панелей, CSS-классы
# 🌅 project     : Tradition Forms 2025 🜂
# ======================================================================================================================
# 🚢 ...imports...
from __future__ import annotations
from datetime import datetime
from typing import Callable, List, Tuple, Type
from tf_logger import LoggableComponent
from tf_sys import TPresentationError, _key_bool
from tf_model import (
    TBuildingRule, TFieldRenderMode, TFormPaneType, TPostBackState, TSectionGroupType, TPresentableObject,
)
from tf_views import (
    TViewField, TViewFieldForEditableValue, TViewFieldForCollection,
    TViewFieldForSingleLineText, TViewFieldForNumber, TViewFieldForStringLookup,
    TViewFieldForPresentableObjectLookup, TViewFieldForPassword, TViewFieldForMultilineText, TViewFieldForFile,
    TViewFieldForEmailAddress, TViewFieldForDateTime, TViewFieldForChoice, TViewFieldForBool,
    TViewFieldForMultipleSingleLineTexts, TViewFieldForMultipleChoices, TViewFieldForMultilineRichText,
    TViewFieldForMultipleStringLookups, TViewFieldForMultiplePresentableObjectLookups,
    TViewPane, TViewPaneWithTitle, TViewPaneForFields, TViewPaneForPanes, TViewGroupedPane, TViewCollectionPane,
)
from tf_fields import (
    TWebField, TWebFieldForReadOnlyValue, TWebFieldForEditableValue,
    TWebFieldForSingleLineText, TWebFieldForNumber, TWebFieldForStringLookup, TWebFieldForPresentableObjectLookup,
    TWebFieldForPassword, TWebFieldForMultilineText, TWebFieldForFile, TWebFieldForEmailAddress,
    TWebFieldForDateTime, TWebFieldForChoice, TWebFieldForBool,
    TWebFieldForMultipleSingleLineTexts, TWebFieldForMultipleChoices, TWebFieldForMultilineRichText,
    TWebFieldForMultipleStringLookups, TWebFieldForMultiplePresentableObjectLookups,
)
from tf_panes import (
    TFormPane, TFormPaneWithTitle, TFormPaneForFields, TFormPaneForPanes, TFormGroupedPane, TFormCollectionPane,
    TFormPanePlaceholder,
)
# 💎🧩⚙️ ... __ALL__ ...
__all__ = ['TWebFactory', 'default_building_rule']
# ---
def default_building_rule() -> TBuildingRule:
    if _key_bool("IGNORE_MISSING_FIELDS", False):
        return TBuildingRule.IGNORE_MISSING_FIELDS
    return TBuildingRule.RAISE_ON_MISSING_FIELDS
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TWebFactory
# ----------------------------------------------------------------------------------------------------------------------
class TWebFactory(LoggableComponent):
    # ⚡🛠️ ▸ __init__
    def __init__(self, render_mode: TFieldRenderMode, option_data_provider=None,
                 building_rule: TBuildingRule | None = None):
        """
        Соответствия хранятся стеками: последнее зарегистрированное проверяется первым,
        поэтому более узкие типы (EmailAddress, Password) регистрируются после SingleLineText.
        """
        self.building_rule = building_rule or default_building_rule()
        self.ignore_missing_fields = self.building_rule == TBuildingRule.IGNORE_MISSING_FIELDS
        self.option_data_provider = option_data_provider
        self.render_mode = render_mode
        self.mappings_for_read_only_fields: List[Tuple[Type, Callable]] = []
        self.mappings_for_fields_for_elements: List[Tuple[Type, Callable]] = []
        self.mappings_for_fields_for_collections: List[Tuple[Type, Callable]] = []
        self.register_default_mappings_for_read_only_fields()
        self.register_default_mappings_for_fields_for_elements()
        self.register_default_mappings_for_fields_for_collections()
        # ⚡🛠️ TWebFactory ▸ End of __init__
    # ..................................................................................................................
    # 🗺️ Соответствия view field → web field
    # ..................................................................................................................
    def register_field_mapping(self, view_field_type: Type[TViewField], builder: Callable):
        """
        builder для read-only: (view_field, topmost, comparison_date, prefix, suffix, post_back_state, fbd);
        для редактируемых то же, но первым аргументом presentable_field.
        """
        self.debug("register_field_mapping", view_field_type.__name__)
        if issubclass(view_field_type, TViewFieldForCollection):
            self.mappings_for_fields_for_collections.append((view_field_type, builder))
        elif issubclass(view_field_type, TViewFieldForEditableValue):
            self.mappings_for_fields_for_elements.append((view_field_type, builder))
        else:
            self.mappings_for_read_only_fields.append((view_field_type, builder))

    @staticmethod
    def _find_builder(mappings: List[Tuple[Type, Callable]], view_field) -> Callable | None:
        for view_field_type, builder in reversed(mappings):
            if isinstance(view_field, view_field_type):
                return builder
        return None

    def _element(self, web_field_class):
        def build(presentable_field, view_field, topmost, comparison_date, prefix, suffix, post_back_state,
                  file_base_directory):
            return web_field_class(presentable_field, view_field, self.render_mode, topmost,
                                   self.option_data_provider, comparison_date, prefix, suffix, post_back_state)
        return build

    def _build_file_field(self, presentable_field, view_field, topmost, comparison_date, prefix, suffix,
                          post_back_state, file_base_directory):
        web_field = TWebFieldForFile(presentable_field, view_field, self.render_mode, topmost,
                                     self.option_data_provider, comparison_date, prefix, suffix, post_back_state)
        web_field.file_base_directory = file_base_directory or ""
        return web_field

    def register_default_mappings_for_read_only_fields(self):
        self.register_field_mapping(TViewField, lambda view_field, topmost, *rest: TWebFieldForReadOnlyValue(
            view_field, self.render_mode, topmost, self.option_data_provider))

    def register_default_mappings_for_fields_for_elements(self):
        # последнее зарегистрированное проверяется первым
        self.register_field_mapping(TViewFieldForSingleLineText, self._element(TWebFieldForSingleLineText))
        self.register_field_mapping(TViewFieldForNumber, self._element(TWebFieldForNumber))
        self.register_field_mapping(TViewFieldForStringLookup, self._element(TWebFieldForStringLookup))
        self.register_field_mapping(TViewFieldForPresentableObjectLookup,
                                    self._element(TWebFieldForPresentableObjectLookup))
        self.register_field_mapping(TViewFieldForPassword, self._element(TWebFieldForPassword))
        self.register_field_mapping(TViewFieldForMultilineText, self._element(TWebFieldForMultilineText))
        self.register_field_mapping(TViewFieldForMultilineRichText, self._element(TWebFieldForMultilineRichText))
        self.register_field_mapping(TViewFieldForFile, self._build_file_field)
        self.register_field_mapping(TViewFieldForEmailAddress, self._element(TWebFieldForEmailAddress))
        self.register_field_mapping(TViewFieldForDateTime, self._element(TWebFieldForDateTime))
        self.register_field_mapping(TViewFieldForChoice, self._element(TWebFieldForChoice))
        self.register_field_mapping(TViewFieldForBool, self._element(TWebFieldForBool))

    def register_default_mappings_for_fields_for_collections(self):
        self.register_field_mapping(TViewFieldForMultipleSingleLineTexts,
                                    self._element(TWebFieldForMultipleSingleLineTexts))
        self.register_field_mapping(TViewFieldForMultipleChoices, self._element(TWebFieldForMultipleChoices))
        self.register_field_mapping(TViewFieldForMultipleStringLookups,
                                    self._element(TWebFieldForMultipleStringLookups))
        self.register_field_mapping(TViewFieldForMultiplePresentableObjectLookups,
                                    self._element(TWebFieldForMultiplePresentableObjectLookups))
    # ..................................................................................................................
    # 🏗️ Поля
    # ..................................................................................................................
    def build_field_for(self, view_field: TViewField, topmost: TPresentableObject | None,
                        comparison_date: datetime | None, prefix: str, suffix: str,
                        post_back_state: TPostBackState, file_base_directory: str) -> TWebField:
        builder = self._find_builder(self.mappings_for_read_only_fields, view_field)
        if builder is None:
            raise TPresentationError(f'View field cannot be rendered because the form factory cannot build form '
                                     f'fields of type "{type(view_field).__name__}" for presentable fields.')
        return builder(view_field, topmost, comparison_date, prefix, suffix, post_back_state, file_base_directory)

    def build_field_for_editable(self, presentable_field, view_field: TViewFieldForEditableValue,
                                 topmost: TPresentableObject | None, comparison_date: datetime | None, prefix: str,
                                 suffix: str, post_back_state: TPostBackState,
                                 file_base_directory: str) -> TWebFieldForEditableValue:
        if presentable_field.is_for_single_element:
            mappings, kind = self.mappings_for_fields_for_elements, "a single value"
        else:
            mappings, kind = self.mappings_for_fields_for_collections, "multiple values"
        builder = self._find_builder(mappings, view_field)
        if builder is None:
            raise TPresentationError(
                f'View field with key "{view_field.key}" cannot be rendered because the form factory cannot build '
                f'form fields of type "{type(view_field).__name__}" for presentable fields storing {kind}.')
        return builder(presentable_field, view_field, topmost, comparison_date, prefix, suffix, post_back_state,
                       file_base_directory)
    # ..................................................................................................................
    # 🏗️ Панели
    # ..................................................................................................................
    def build_pane_for(self, presentable_object, view_pane: TViewPane, topmost, comparison_date, prefix, suffix,
                       post_back_state, file_base_directory) -> TFormPane:
        args = (topmost, comparison_date, prefix, suffix, post_back_state, file_base_directory, self)
        if isinstance(view_pane, TViewPaneForFields):
            form_pane = TFormPaneForFields(TFormPaneType.STAND_ALONE, presentable_object, view_pane, *args)
            self.set_css_classes_for_pane_for_fields(form_pane, view_pane.has_two_columns_in_wide_windows)
        elif isinstance(view_pane, TViewPaneForPanes):
            form_pane = TFormPaneForPanes(TFormPaneType.STAND_ALONE, presentable_object, view_pane, *args)
            self.set_css_classes_for_pane(form_pane)
        elif isinstance(view_pane, TViewGroupedPane):
            form_pane = TFormGroupedPane(presentable_object, view_pane, *args)
            self.set_css_classes_for_grouped_pane(form_pane, view_pane.section_group_type)
        elif isinstance(view_pane, TViewCollectionPane):
            form_pane = TFormCollectionPane(presentable_object, view_pane, *args)
            self.set_css_classes_for_grouped_pane(form_pane, TSectionGroupType.TABS)
        else:
            raise TPresentationError(
                f'Form pane for unknown view pane of type "{type(view_pane).__name__}" cannot be created.')
        return form_pane

    def _build_section(self, presentable_object, view_section: TViewPaneWithTitle, topmost, comparison_date,
                       prefix, suffix, post_back_state, file_base_directory) -> TFormPaneWithTitle:
        args = (topmost, comparison_date, prefix, suffix, post_back_state, file_base_directory, self)
        if isinstance(view_section, TViewPaneForFields):
            return TFormPaneForFields(TFormPaneType.SECTION, presentable_object, view_section, *args)
        if isinstance(view_section, TViewPaneForPanes):
            return TFormPaneForPanes(TFormPaneType.SECTION, presentable_object, view_section, *args)
        raise TPresentationError(
            f'Form pane section for unknown view pane of type "{type(view_section).__name__}" cannot be created.')

    def build_pane_section_for(self, presentable_object, view_section: TViewPaneWithTitle, topmost,
                               comparison_date, prefix, suffix, post_back_state, file_base_directory,
                               is_new_from_post_back: bool) -> TFormPaneWithTitle:
        form_section = self._build_section(presentable_object, view_section, topmost, comparison_date, prefix,
                                           suffix, post_back_state, file_base_directory)
        self.set_css_classes_for_pane_section(form_section)
        form_section.is_new_from_post_back = is_new_from_post_back
        return form_section

    def build_pane_section_template_for(self, placeholder, view_section: TViewPaneWithTitle, topmost,
                                        comparison_date, prefix, suffix,
                                        file_base_directory) -> TFormPaneWithTitle:
        """Шаблон секции: без post back, всегда «новый» (клиент клонирует его при добавлении)."""
        form_section = self._build_section(placeholder, view_section, topmost, comparison_date, prefix, suffix,
                                           TPostBackState.NO_POSTBACK, file_base_directory)
        self.set_css_classes_for_pane_section_template(form_section)
        form_section.is_new_from_post_back = True
        return form_section

    def build_pane_section_placeholder(self, placeholder_text: str) -> TFormPanePlaceholder:
        section_placeholder = TFormPanePlaceholder(placeholder_text)
        self.set_css_classes_for_pane_section_placeholder(section_placeholder)
        return section_placeholder
    # ..................................................................................................................
    # 🏗️ Строки таблиц и формы
    # ..................................................................................................................
    def build_row_for(self, presentable_object, view, file_base_directory: str = ""):
        from tf_lists import TListTableRow
        return TListTableRow(presentable_object, view, file_base_directory, self)

    def build_form_for(self, presentable_object, view, file_base_directory: str = ""):
        from tf_form import TForm
        return TForm(presentable_object, view, file_base_directory, self)
    # ..................................................................................................................
    # 🎨 CSS-классы
    # ..................................................................................................................
    def set_css_classes_for_card_pane(self, card_pane):
        card_pane.add_class("cardpane")

    def set_css_classes_for_form(self, form):
        form.css_class_for_description_pane = "descriptionpane"
        form.css_class_for_error_pane = "formerror"
        form.css_class_for_update_status = "updatestatus"

    def set_css_classes_for_list_table(self, list_table):
        list_table.css_class_for_table = "datatable"

    def set_css_classes_for_pane(self, form_pane: TFormPaneWithTitle):
        form_pane.css_class_for_pane_error = "paneerror"

    def set_css_classes_for_pane_for_fields(self, form_pane: TFormPaneForFields, has_two_columns: bool):
        self.set_css_classes_for_pane_section(form_pane)
        if has_two_columns:
            form_pane.add_class("twocolumns")

    def set_css_classes_for_grouped_pane(self, form_pane: TFormPane, section_group_type: TSectionGroupType):
        if section_group_type == TSectionGroupType.TABLE:
            form_pane.add_class("tablepane")
        elif section_group_type == TSectionGroupType.TABS:
            form_pane.add_class("tabs")
        else:
            raise TPresentationError(f'Section group type "{section_group_type}" is unknown.')

    def set_css_classes_for_pane_section(self, form_section: TFormPaneWithTitle):
        form_section.css_class_for_pane_error = "paneerror"

    def set_css_classes_for_pane_section_placeholder(self, section_placeholder: TFormPanePlaceholder):
        section_placeholder.add_class("placeholder")

    def set_css_classes_for_pane_section_template(self, form_section: TFormPaneWithTitle):
        form_section.add_class("template")
# ======================================================================================================================
# 📁🌄 tf_factory.py 🜂 The End — See You Next Session 2025
# ======================================================================================================================
