"""
Tests for TWebFactory.

These tests verify:
1. View field to web field mappings (narrow types win, custom mappings override)
2. Building rule from configuration
3. Pane, section, template and placeholder builders with their CSS classes
4. Form, list table and card CSS hooks
"""

import pytest

from tf_factory import TWebFactory, default_building_rule
from tf_fields import (
    TWebFieldForBool,
    TWebFieldForEmailAddress,
    TWebFieldForFile,
    TWebFieldForMultipleChoices,
    TWebFieldForMultilineRichText,
    TWebFieldForMultipleSingleLineTexts,
    TWebFieldForMultipleStringLookups,
    TWebFieldForNumber,
    TWebFieldForPassword,
    TWebFieldForReadOnlyValue,
    TWebFieldForSingleLineText,
)
from tf_model import (
    TBuildingRule,
    TFieldRenderMode,
    TPostBackState,
    TPresentableObject,
    TSectionGroupType,
    TStaticLookupProvider,
)
from tf_panes import (
    TFormCollectionPane,
    TFormGroupedPane,
    TFormPaneForFields,
    TFormPaneForPanes,
    TFormPanePlaceholder,
)
from tf_sys import TPresentationError
from tf_views import (
    TViewCollectionPane,
    TViewFieldForBool,
    TViewFieldForEmailAddress,
    TViewFieldForFile,
    TViewFieldForMultipleChoices,
    TViewFieldForMultilineRichText,
    TViewFieldForMultipleSingleLineTexts,
    TViewFieldForMultipleStringLookups,
    TViewFieldForNumber,
    TViewFieldForPassword,
    TViewFieldForSingleLineText,
    TViewFieldForText,
    TViewGroupedPane,
    TViewPane,
    TViewPaneForFields,
    TViewPaneForPanes,
)


# =============================================================================
# TEST FIXTURES
# =============================================================================

NO_POSTBACK = TPostBackState.NO_POSTBACK


def make_factory(mode: TFieldRenderMode = TFieldRenderMode.FORM) -> TWebFactory:
    return TWebFactory(mode, None, TBuildingRule.RAISE_ON_MISSING_FIELDS)


def make_object() -> TPresentableObject:
    obj = TPresentableObject()
    obj.string("Name", "Ann")
    obj.string("Mail", "ann@example.com")
    obj.string("Secret", "s3cret")
    obj.int("Age", 30)
    obj.bool("Active", True)
    obj.file("Photo")
    obj.collection("Tags", ["a"])
    return obj


def editable(factory, presentable_field, view_field, file_base_directory=""):
    return factory.build_field_for_editable(presentable_field, view_field, None, None, "", "", NO_POSTBACK,
                                            file_base_directory)


# =============================================================================
# FIELD MAPPINGS
# =============================================================================

class TestFieldMappings:
    """Lookup of web field classes for view fields."""

    @pytest.mark.parametrize("key, view_field, expected", [
        ("Name", TViewFieldForSingleLineText(key="Name"), TWebFieldForSingleLineText),
        ("Mail", TViewFieldForEmailAddress(key="Mail"), TWebFieldForEmailAddress),
        ("Secret", TViewFieldForPassword(key="Secret"), TWebFieldForPassword),
        ("Age", TViewFieldForNumber(key="Age", is_integer=True), TWebFieldForNumber),
        ("Active", TViewFieldForBool(key="Active"), TWebFieldForBool),
        ("Tags", TViewFieldForMultipleSingleLineTexts(key="Tags"), TWebFieldForMultipleSingleLineTexts),
        ("Tags", TViewFieldForMultipleChoices(key="Tags"), TWebFieldForMultipleChoices),
        ("Name", TViewFieldForMultilineRichText(key="Name"), TWebFieldForMultilineRichText),
        ("Tags", TViewFieldForMultipleStringLookups(key="Tags", lookup_provider=TStaticLookupProvider(["a"])),
         TWebFieldForMultipleStringLookups),
    ])
    def test_default_mappings(self, key, view_field, expected):
        obj = make_object()
        web_field = editable(make_factory(), obj.find_presentable_field(key), view_field)
        assert type(web_field) is expected

    def test_file_field_gets_base_directory(self):
        obj = make_object()
        web_field = editable(make_factory(), obj.find_presentable_field("Photo"), TViewFieldForFile(key="Photo"),
                             "/files")
        assert isinstance(web_field, TWebFieldForFile)
        assert web_field.file_base_directory == "/files"

    def test_render_mode_is_passed_on(self):
        obj = make_object()
        factory = make_factory(TFieldRenderMode.LIST_TABLE)
        web_field = editable(factory, obj.find_presentable_field("Name"), TViewFieldForSingleLineText(key="Name"))
        assert web_field.render_mode == TFieldRenderMode.LIST_TABLE
        assert web_field.TagName == "td"

    def test_read_only_field(self):
        web_field = make_factory().build_field_for(TViewFieldForText(title="Note", text="Hi"), None, None, "", "",
                                                   NO_POSTBACK, "")
        assert isinstance(web_field, TWebFieldForReadOnlyValue)

    def test_element_view_field_for_collection_is_rejected(self):
        obj = make_object()
        with pytest.raises(TPresentationError):
            editable(make_factory(), obj.find_presentable_field("Tags"), TViewFieldForSingleLineText(key="Tags"))

    def test_collection_view_field_for_element_is_rejected(self):
        obj = make_object()
        with pytest.raises(TPresentationError):
            editable(make_factory(), obj.find_presentable_field("Name"), TViewFieldForMultipleChoices(key="Name"))

    def test_custom_mapping_wins(self):
        """The last registered mapping is checked first."""

        class TShoutingField(TWebFieldForSingleLineText):
            pass

        factory = make_factory()
        factory.register_field_mapping(TViewFieldForSingleLineText, factory._element(TShoutingField))
        obj = make_object()
        web_field = editable(factory, obj.find_presentable_field("Name"), TViewFieldForSingleLineText(key="Name"))
        assert type(web_field) is TShoutingField
        # узкий тип, зарегистрированный раньше, теперь перекрыт
        web_field = editable(factory, obj.find_presentable_field("Mail"), TViewFieldForEmailAddress(key="Mail"))
        assert type(web_field) is TShoutingField

    def test_mapping_dispatch_by_type(self):
        factory = make_factory()
        before = (len(factory.mappings_for_read_only_fields), len(factory.mappings_for_fields_for_elements),
                  len(factory.mappings_for_fields_for_collections))
        factory.register_field_mapping(TViewFieldForMultipleChoices, factory._element(TWebFieldForMultipleChoices))
        factory.register_field_mapping(TViewFieldForText, lambda *args: None)
        after = (len(factory.mappings_for_read_only_fields), len(factory.mappings_for_fields_for_elements),
                 len(factory.mappings_for_fields_for_collections))
        assert after == (before[0] + 1, before[1], before[2] + 1)


# =============================================================================
# BUILDING RULE
# =============================================================================

class TestBuildingRule:
    """IGNORE_MISSING_FIELDS switches the default rule."""

    def test_default_raises(self):
        assert default_building_rule() == TBuildingRule.RAISE_ON_MISSING_FIELDS
        assert TWebFactory(TFieldRenderMode.FORM).ignore_missing_fields is False

    def test_ignore_from_env(self, isolated_env):
        isolated_env["IGNORE_MISSING_FIELDS"] = "1"
        assert default_building_rule() == TBuildingRule.IGNORE_MISSING_FIELDS
        assert TWebFactory(TFieldRenderMode.FORM).ignore_missing_fields is True

    def test_explicit_rule_beats_env(self, isolated_env):
        isolated_env["IGNORE_MISSING_FIELDS"] = "1"
        factory = TWebFactory(TFieldRenderMode.FORM, None, TBuildingRule.RAISE_ON_MISSING_FIELDS)
        assert factory.ignore_missing_fields is False


# =============================================================================
# PANE BUILDERS
# =============================================================================

class TestPaneBuilders:
    """Pane classes and their CSS classes."""

    def build(self, view_pane):
        obj = make_object()
        return make_factory().build_pane_for(obj, view_pane, obj, None, "", "", NO_POSTBACK, "")

    def test_pane_for_fields(self):
        pane = self.build(TViewPaneForFields())
        assert isinstance(pane, TFormPaneForFields)
        assert pane.css_class_for_pane_error == "paneerror"
        assert pane.get_css_classes() == ["fieldset"]

    def test_pane_for_fields_two_columns(self):
        pane = self.build(TViewPaneForFields(has_two_columns_in_wide_windows=True))
        assert pane.get_css_classes() == ["fieldset", "twocolumns"]

    def test_pane_for_panes(self):
        pane = self.build(TViewPaneForPanes())
        assert isinstance(pane, TFormPaneForPanes)
        assert pane.css_class_for_pane_error == "paneerror"

    def test_grouped_panes(self):
        table = self.build(TViewGroupedPane())
        tabs = self.build(TViewGroupedPane(section_group_type=TSectionGroupType.TABS))
        assert isinstance(table, TFormGroupedPane)
        assert table.get_css_classes() == ["tablepane"]
        assert tabs.get_css_classes() == ["tabs"]

    def test_collection_pane(self):
        pane = self.build(TViewCollectionPane(key="Tags"))
        assert isinstance(pane, TFormCollectionPane)
        assert pane.get_css_classes() == ["tabs"]

    def test_unknown_view_pane(self):
        with pytest.raises(TPresentationError):
            self.build(TViewPane())

    def test_section(self):
        obj = make_object()
        section = make_factory().build_pane_section_for(obj, TViewPaneForFields(title="S"), obj, None, "", "_0",
                                                        NO_POSTBACK, "", True)
        assert section.TagName == "section"
        assert section.is_new_from_post_back is True
        assert section.css_class_for_pane_error == "paneerror"
        assert section.client_field_id_suffix == "_0"

    def test_section_template(self):
        obj = make_object()
        template = make_factory().build_pane_section_template_for(obj, TViewPaneForFields(), obj, None, "Items",
                                                                  "", "")
        assert template.get_css_classes() == ["template"]
        assert template.post_back_state == TPostBackState.NO_POSTBACK
        assert template.is_new_from_post_back is True

    def test_placeholder(self):
        placeholder = make_factory().build_pane_section_placeholder("Nothing yet")
        assert isinstance(placeholder, TFormPanePlaceholder)
        assert placeholder.render_html() == '<div class="placeholder">Nothing yet</div>'
