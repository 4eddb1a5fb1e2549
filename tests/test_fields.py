"""
Tests for web fields.

These tests verify:
1. Form and list table rendering per field type
2. Post back handling: cleanup, parsing errors, hash based conflict resolution
3. Mandatory checks for fields the browser omits when empty
4. File uploads, temporary files and removal
5. Rich text sanitizing and editor markup
6. Multiple lookups with autocompletion and conflict resolution
7. Diff rendering against a comparison date
"""

import hashlib
from datetime import datetime

import pytest

from tf_application import TRequest, TUploadedFile
from tf_fields import (
    PASSWORD_MASK,
    TWebFieldForBool,
    TWebFieldForChoice,
    TWebFieldForDateTime,
    TWebFieldForEmailAddress,
    TWebFieldForFile,
    TWebFieldForMultilineRichText,
    TWebFieldForMultilineText,
    TWebFieldForMultipleChoices,
    TWebFieldForMultiplePresentableObjectLookups,
    TWebFieldForMultipleSingleLineTexts,
    TWebFieldForMultipleStringLookups,
    TWebFieldForNumber,
    TWebFieldForPassword,
    TWebFieldForPresentableObjectLookup,
    TWebFieldForReadOnlyValue,
    TWebFieldForSingleLineText,
    TWebFieldForStringLookup,
    get_value_separator_html,
)
from tf_model import (
    TFieldRenderMode,
    TFile,
    TMandatoriness,
    TObjectLookupProvider,
    TOptionDataProvider,
    TPostBackState,
    TPresentableFieldForObject,
    TPresentableObject,
    TStaticLookupProvider,
    TStaticOptionProvider,
    TValueSeparator,
)
from tf_sys import TPresentationError
from tf_views import (
    TViewFieldForBool,
    TViewFieldForChoice,
    TViewFieldForDateTime,
    TViewFieldForEmailAddress,
    TViewFieldForFile,
    TViewFieldForMultilineRichText,
    TViewFieldForMultilineText,
    TViewFieldForMultipleChoices,
    TViewFieldForMultiplePresentableObjectLookups,
    TViewFieldForMultipleSingleLineTexts,
    TViewFieldForMultipleStringLookups,
    TViewFieldForNumber,
    TViewFieldForPassword,
    TViewFieldForPresentableObjectLookup,
    TViewFieldForSingleLineText,
    TViewFieldForStringLookup,
    TViewFieldForText,
)


# =============================================================================
# TEST FIXTURES
# =============================================================================

FORM = TFieldRenderMode.FORM
LIST_TABLE = TFieldRenderMode.LIST_TABLE
VALID = TPostBackState.VALID_POSTBACK
COLORS = TStaticOptionProvider({"r": "Red", "g": "Green"})


def sha1(value: str) -> str:
    return hashlib.sha1(value.encode("utf-8")).hexdigest()


def make_field(cls, presentable_field, view_field, mode=FORM, state=TPostBackState.NO_POSTBACK, **kwargs):
    """Helper to build a web field outside of any pane."""
    return cls(presentable_field, view_field, mode, post_back_state=state, **kwargs)


def post(field, form, files=None):
    """Helper to run a post back through a field and validate it."""
    field.create_child_controls(TRequest.from_url("/", form=form, files=files))
    field.set_has_valid_value()
    return field


def make_city(name: str) -> TPresentableObject:
    city = TPresentableObject(is_new=False)
    city.string("Title", name)
    return city


# =============================================================================
# SINGLE LINE TEXT
# =============================================================================

class TestSingleLineText:
    """Rendering and post back of a plain text field."""

    def make(self, value="Alice", state=TPostBackState.NO_POSTBACK, **view_kwargs):
        obj = TPresentableObject()
        presentable_field = obj.string("Name", value)
        view_field = TViewFieldForSingleLineText(key="Name", title="Name", **view_kwargs)
        return presentable_field, make_field(TWebFieldForSingleLineText, presentable_field, view_field, state=state)

    def test_form_rendering(self):
        _, field = self.make()
        html = field.render_html()
        assert html.startswith('<div><label for="Name">Name</label><div>')
        assert '<input id="Name" type="text" name="Name" maxlength="256" value="Alice" />' in html
        assert f'<input type="hidden" name="Name::" value="{sha1("Alice")}" />' in html

    def test_required_mark(self):
        _, field = self.make(mandatoriness=TMandatoriness.REQUIRED)
        html = field.render_html()
        assert '<label for="Name">Name<span class="required">*</span></label>' in html
        assert 'required="required"' in html

    def test_read_only_rendering(self):
        _, field = self.make(is_read_only=True, description_for_view_mode="Set by admin")
        assert field.render_html() == "<div><label>Name</label><p>Alice<br />Set by admin</p></div>"

    def test_list_table_cell(self):
        obj = TPresentableObject()
        view_field = TViewFieldForSingleLineText(key="Name")
        field = make_field(TWebFieldForSingleLineText, obj.string("Name", "A & B"), view_field, LIST_TABLE)
        assert field.render_html() == "<td>A &amp; B</td>"

    def test_post_back_collapses_white_space(self):
        presentable_field, field = self.make(state=VALID)
        post(field, {"Name": "  Bob   Smith "})
        assert presentable_field.value == "Bob Smith"
        assert field.is_included_in_post_back
        assert field.error_message is None

    def test_missing_input_is_not_included(self):
        presentable_field, field = self.make(state=VALID)
        post(field, {})
        assert not field.is_included_in_post_back
        assert presentable_field.value == "Alice"

    def test_unchanged_input_keeps_server_value(self):
        """The user did not touch the field: a newer server value wins."""
        presentable_field, field = self.make(value="Carol", state=VALID)
        post(field, {"Name": "Alice", "Name::": sha1("Alice")})
        assert presentable_field.value == "Carol"
        assert field.editable_value == "Carol"

    def test_changed_input_overwrites_server_value(self):
        presentable_field, field = self.make(value="Carol", state=VALID)
        post(field, {"Name": "Dave", "Name::": sha1("Alice")})
        assert presentable_field.value == "Dave"

    def test_required_field_left_empty(self):
        presentable_field, field = self.make(state=VALID, mandatoriness=TMandatoriness.REQUIRED)
        post(field, {"Name": ""})
        assert presentable_field.value is None
        assert field.error_message == field.view_field.get_default_error_message()
        assert '<span class="fielderror">' in field.render_html()

    def test_no_post_back_outside_valid_state(self):
        presentable_field, field = self.make(state=TPostBackState.INVALID_POSTBACK)
        post(field, {"Name": "Bob"})
        assert presentable_field.value == "Alice"
        assert not field.is_included_in_post_back

    def test_prefix_and_suffix_build_client_id(self):
        obj = TPresentableObject()
        view_field = TViewFieldForSingleLineText(key="Qty")
        field = make_field(TWebFieldForSingleLineText, obj.string("Qty"), view_field, prefix="Items", suffix="_0")
        assert field.client_field_id == "Items.Qty_0"


# =============================================================================
# NUMBERS AND BOOLEANS
# =============================================================================

class TestNumberAndBool:
    """Number and yes/no fields."""

    def test_invalid_number_keeps_value_and_reports(self):
        obj = TPresentableObject()
        presentable_field = obj.int("Age", 30)
        view_field = TViewFieldForNumber(key="Age", is_integer=True)
        field = post(make_field(TWebFieldForNumber, presentable_field, view_field, state=VALID), {"Age": "abc"})
        assert presentable_field.value == 30
        assert field.error_message == view_field.get_default_error_message()
        assert 'value="abc"' in field.render_html()

    def test_number_input_attributes(self):
        obj = TPresentableObject()
        view_field = TViewFieldForNumber(key="Age", is_integer=True, min_value=0, max_value=120, step=1, unit="y")
        html = make_field(TWebFieldForNumber, obj.int("Age", 30), view_field).render_html()
        assert '<input id="Age" type="number" name="Age" max="120" min="0" step="1" value="30" />y' in html

    def test_int_cell_carries_sortable_value(self):
        obj = TPresentableObject()
        view_field = TViewFieldForNumber(key="Age", is_integer=True)
        html = make_field(TWebFieldForNumber, obj.int("Age", 5), view_field, LIST_TABLE).render_html()
        assert html == '<td data-value="+0000000000000000005">5</td>'

    def test_bool_radio_buttons(self):
        obj = TPresentableObject()
        view_field = TViewFieldForBool(key="Flag", title="Flag")
        html = make_field(TWebFieldForBool, obj.bool("Flag", True), view_field).render_html()
        assert ('<label class="radio"><input id="Flag-True" type="radio" name="Flag" checked="checked" '
                'value="True" />Yes</label>') in html
        assert '<input id="Flag-False" type="radio" name="Flag" value="False" />No' in html

    def test_bool_post_back(self):
        obj = TPresentableObject()
        presentable_field = obj.bool("Flag", True)
        view_field = TViewFieldForBool(key="Flag")
        post(make_field(TWebFieldForBool, presentable_field, view_field, state=VALID), {"Flag": "False"})
        assert presentable_field.value is False

    def test_required_bool_without_selection(self):
        obj = TPresentableObject()
        view_field = TViewFieldForBool(key="Flag", mandatoriness=TMandatoriness.REQUIRED)
        field = post(make_field(TWebFieldForBool, obj.bool("Flag"), view_field, state=VALID), {})
        assert field.is_included_in_post_back
        assert field.error_message == view_field.get_default_error_message()


# =============================================================================
# TEXT VARIANTS
# =============================================================================

class TestTextVariants:
    """E-mail, password and read-only value fields."""

    def test_email_read_only_is_mailto_link(self):
        obj = TPresentableObject()
        view_field = TViewFieldForEmailAddress(key="Mail", is_read_only=True)
        html = make_field(TWebFieldForEmailAddress, obj.string("Mail", "bob@example.com"), view_field).render_html()
        assert '<p><a href="mailto:bob@example.com">bob@example.com</a></p>' in html

    def test_password_is_never_echoed(self):
        obj = TPresentableObject()
        view_field = TViewFieldForPassword(key="Pwd")
        html = make_field(TWebFieldForPassword, obj.string("Pwd", "secret"), view_field).render_html()
        assert "secret" not in html
        assert "Pwd::" not in html
        assert 'type="password"' in html

    def test_blank_password_keeps_value(self):
        obj = TPresentableObject()
        presentable_field = obj.string("Pwd", "secret")
        view_field = TViewFieldForPassword(key="Pwd", mandatoriness=TMandatoriness.REQUIRED)
        field = post(make_field(TWebFieldForPassword, presentable_field, view_field, state=VALID), {"Pwd": ""})
        assert presentable_field.value == "secret"
        assert field.is_included_in_post_back
        assert field.error_message is None

    def test_new_password(self):
        obj = TPresentableObject()
        presentable_field = obj.string("Pwd", "secret")
        view_field = TViewFieldForPassword(key="Pwd")
        post(make_field(TWebFieldForPassword, presentable_field, view_field, state=VALID), {"Pwd": "changed"})
        assert presentable_field.value == "changed"

    def test_password_cell_is_masked(self):
        obj = TPresentableObject()
        view_field = TViewFieldForPassword(key="Pwd")
        html = make_field(TWebFieldForPassword, obj.string("Pwd", "secret"), view_field, LIST_TABLE).render_html()
        assert html == f"<td>{PASSWORD_MASK}</td>"

    def test_static_text(self):
        field = TWebFieldForReadOnlyValue(TViewFieldForText(title="Info", text="Hello"), FORM)
        assert field.render_html() == "<div><label>Info</label><p>Hello</p></div>"
        cell = TWebFieldForReadOnlyValue(TViewFieldForText(text="Hello"), LIST_TABLE)
        assert cell.render_html() == "<td>Hello</td>"

    def test_invisible_field(self):
        obj = TPresentableObject()
        view_field = TViewFieldForSingleLineText(key="Name", is_visible=False)
        assert make_field(TWebFieldForSingleLineText, obj.string("Name", "x"), view_field).render_html() == ""


# =============================================================================
# RICH TEXT
# =============================================================================

class TestRichText:
    """Editor markup, sanitized post back and read-only rendering."""

    def make(self, value, state=TPostBackState.NO_POSTBACK, **view_kwargs):
        obj = TPresentableObject()
        presentable_field = obj.string("Notes", value)
        view_field = TViewFieldForMultilineRichText(key="Notes", title="Notes", **view_kwargs)
        return presentable_field, make_field(TWebFieldForMultilineRichText, presentable_field, view_field,
                                             state=state)

    def test_editor_textarea(self):
        _, field = self.make("<b>x</b>", has_underline_button=False, has_strikethrough_button=False,
                             has_remove_format_button=False, has_bullets_button=False, has_numbering_button=False,
                             has_indent_buttons=False, has_table_buttons=False,
                             has_toggle_full_window_button=False)
        html = field.render_html()
        buttons = "[[&quot;Bold&quot;, &quot;bold&quot;], [&quot;Italic&quot;, &quot;italic&quot;]]"
        assert (f'<textarea class="rte" id="Notes" name="Notes" data-buttons="{buttons}">'
                '&lt;b&gt;x&lt;/b&gt;</textarea>') in html

    def test_link_buttons_without_hyperlink_detection(self, isolated_env):
        isolated_env["HYPERLINK_DETECTION"] = "0"
        _, field = self.make("")
        assert "&quot;createLink&quot;" in field.render_html()
        assert "a" in field.view_field.get_allowed_html_tags(False)
        assert "a" not in field.view_field.get_allowed_html_tags(True)

    def test_post_back_is_sanitized(self):
        presentable_field, field = self.make("", state=VALID)
        post(field, {"Notes": '<p>Hi  <strong>there</strong></p><script>bad()</script><u onclick="x">u</u>'})
        assert presentable_field.value == "Hi <b>there</b><br />bad()<u>u</u>"
        assert field.error_message is None

    def test_buttons_limit_tags(self):
        presentable_field, field = self.make("", state=VALID, has_table_buttons=False, has_bold_button=False)
        post(field, {"Notes": "<b>a</b><table><tr><td>b</td></tr></table>"})
        assert presentable_field.value == "ab"

    def test_read_only_uses_div(self):
        _, field = self.make("Hi <b>there</b>", is_read_only=True, description_for_view_mode="Note")
        html = field.render_html()
        assert '<label>Notes</label><div class="rt">Hi <b>there</b><br />Note</div>' in html
        assert "<p>" not in html

    def test_read_only_links_addresses(self):
        _, field = self.make("see https://example.com", is_read_only=True)
        html = field.render_html()
        assert '<a href="https://example.com" rel="noopener" target="_blank">https://example.com</a>' in html

    def test_list_table_cell(self):
        obj = TPresentableObject()
        view_field = TViewFieldForMultilineRichText(key="Notes")
        field = make_field(TWebFieldForMultilineRichText, obj.string("Notes", "<i>x</i>"), view_field, LIST_TABLE)
        assert field.render_html() == "<td><p><i>x</i></p></td>"


# =============================================================================
# CHOICES AND LOOKUPS
# =============================================================================

class TestChoices:
    """Single choice, multiple choices and lookups."""

    def test_optional_choice_is_select(self):
        obj = TPresentableObject()
        view_field = TViewFieldForChoice(key="Color", option_provider=COLORS)
        html = make_field(TWebFieldForChoice, obj.string("Color", "g"), view_field).render_html()
        assert ('<select id="Color" name="Color" size="1"><option value=""></option>'
                '<option value="r">Red</option><option value="g" selected="selected">Green</option>'
                '</select>') in html

    def test_required_choice_with_few_options_uses_radio_buttons(self):
        obj = TPresentableObject()
        view_field = TViewFieldForChoice(key="Color", option_provider=COLORS, mandatoriness=TMandatoriness.REQUIRED)
        html = make_field(TWebFieldForChoice, obj.string("Color", "g"), view_field).render_html()
        assert '<input id="Color-1" type="radio" name="Color" value="g" checked="checked" />' in html
        assert "<select" not in html

    def test_required_choice_without_selection(self):
        obj = TPresentableObject()
        view_field = TViewFieldForChoice(key="Color", option_provider=COLORS, mandatoriness=TMandatoriness.REQUIRED)
        field = post(make_field(TWebFieldForChoice, obj.string("Color"), view_field, state=VALID), {})
        assert field.error_message == view_field.get_default_error_message()

    def test_unknown_choice_is_rejected(self):
        obj = TPresentableObject()
        view_field = TViewFieldForChoice(key="Color", option_provider=COLORS)
        field = post(make_field(TWebFieldForChoice, obj.string("Color"), view_field, state=VALID), {"Color": "x"})
        assert field.error_message == view_field.get_default_error_message()

    def test_read_only_choice_shows_option_text(self):
        obj = TPresentableObject()
        view_field = TViewFieldForChoice(key="Color", option_provider=COLORS, is_read_only=True)
        html = make_field(TWebFieldForChoice, obj.string("Color", "g"), view_field).render_html()
        assert "<p>Green</p>" in html

    def test_choice_without_provider_fails_on_render(self):
        obj = TPresentableObject()
        view_field = TViewFieldForChoice(key="Color")
        with pytest.raises(TypeError):
            make_field(TWebFieldForChoice, obj.string("Color"), view_field).render_html()

    def test_multiple_choices_post_back(self):
        obj = TPresentableObject()
        presentable_field = obj.collection("Colors")
        view_field = TViewFieldForMultipleChoices(key="Colors", option_provider=COLORS)
        field = make_field(TWebFieldForMultipleChoices, presentable_field, view_field, state=VALID)
        post(field, {"Colors": ["r", "g"]})
        assert presentable_field.values == ["r", "g"]
        assert field.error_message is None

    def test_choice_key_with_comma_survives(self):
        obj = TPresentableObject()
        presentable_field = obj.collection("Sizes")
        view_field = TViewFieldForMultipleChoices(key="Sizes", option_provider=TStaticOptionProvider(
            {"1,5": "One and a half", "2": "Two"}))
        field = make_field(TWebFieldForMultipleChoices, presentable_field, view_field, state=VALID)
        post(field, {"Sizes": ["1,5", "2"]})
        assert presentable_field.values == ["1,5", "2"]
        assert field.error_message is None

    def test_optional_multiple_choices_cleared_when_absent(self):
        obj = TPresentableObject()
        presentable_field = obj.collection("Colors", ["r"])
        view_field = TViewFieldForMultipleChoices(key="Colors", option_provider=COLORS)
        post(make_field(TWebFieldForMultipleChoices, presentable_field, view_field, state=VALID), {})
        assert presentable_field.values == []

    def test_multiple_choices_render_checkboxes(self):
        obj = TPresentableObject()
        view_field = TViewFieldForMultipleChoices(key="Colors", option_provider=COLORS)
        html = make_field(TWebFieldForMultipleChoices, obj.collection("Colors", ["g"]), view_field).render_html()
        assert '<input id="Colors-1" type="checkbox" name="Colors" value="g" checked="checked" />' in html

    def test_multiple_choices_with_limit_one_is_single_choice(self):
        obj = TPresentableObject()
        view_field = TViewFieldForMultipleChoices(key="Colors", option_provider=COLORS, limit=1)
        html = make_field(TWebFieldForMultipleChoices, obj.collection("Colors"), view_field).render_html()
        assert "<select" in html
        assert 'type="checkbox"' not in html

    def test_string_lookup_completes_vague_term(self):
        obj = TPresentableObject()
        presentable_field = obj.string("City")
        view_field = TViewFieldForStringLookup(key="City", lookup_provider=TStaticLookupProvider(["Berlin", "Bern"]))
        post(make_field(TWebFieldForStringLookup, presentable_field, view_field, state=VALID), {"City": " lin "})
        assert presentable_field.value == "Berlin"

    def test_object_lookup_resolves_object(self):
        berlin = make_city("Berlin")
        obj = TPresentableObject()
        presentable_field = obj.object("City")
        view_field = TViewFieldForPresentableObjectLookup(
            key="City", lookup_provider=TObjectLookupProvider([berlin, make_city("Bern")]))
        field = make_field(TWebFieldForPresentableObjectLookup, presentable_field, view_field, state=VALID)
        post(field, {"City": "berl"})
        assert presentable_field.value is berlin
        assert field.error_message is None

    def test_object_lookup_read_only_link(self):
        berlin = make_city("Berlin")
        obj = TPresentableObject()
        view_field = TViewFieldForPresentableObjectLookup(
            key="City", is_read_only=True, lookup_provider=TObjectLookupProvider([berlin]),
            on_click_url=lambda o: f"/city/{o.get_title()}")
        html = make_field(TWebFieldForPresentableObjectLookup, obj.object("City", berlin), view_field).render_html()
        assert '<p><a href="/city/Berlin">Berlin</a></p>' in html


# =============================================================================
# MULTIPLE LOOKUPS
# =============================================================================

class TestMultipleLookups:
    """One value per line, completed through the lookup provider."""

    def make_strings(self, values=(), state=VALID, **view_kwargs):
        obj = TPresentableObject()
        presentable_field = obj.collection("Tags", values)
        view_field = TViewFieldForMultipleStringLookups(
            key="Tags", lookup_provider=TStaticLookupProvider(["alpha", "beta", "gamma"]), **view_kwargs)
        return presentable_field, make_field(TWebFieldForMultipleStringLookups, presentable_field, view_field,
                                             state=state)

    def make_objects(self, values=(), state=VALID, mode=FORM):
        self.berlin, self.bern, self.rome = make_city("Berlin"), make_city("Bern"), make_city("Rome")
        obj = TPresentableObject()
        presentable_field = obj.collection("Cities", values, element=TPresentableFieldForObject("Cities"))
        view_field = TViewFieldForMultiplePresentableObjectLookups(
            key="Cities", lookup_provider=TObjectLookupProvider([self.berlin, self.bern, self.rome]))
        return presentable_field, make_field(TWebFieldForMultiplePresentableObjectLookups, presentable_field,
                                             view_field, mode, state)

    def test_string_textarea(self):
        _, field = self.make_strings(["alpha", "beta"], state=TPostBackState.NO_POSTBACK,
                                     mandatoriness=TMandatoriness.REQUIRED)
        html = field.render_html()
        assert ('<textarea id="Tags" data-ajaxlist="Tags.json" data-allowfillin="1" data-min-search-length="1" '
                'name="Tags" required="required">alpha\nbeta</textarea>') in html
        assert f'<input type="hidden" name="Tags::" value="{sha1("alphabeta")}" />' in html

    def test_string_values_are_completed(self):
        presentable_field, field = self.make_strings(["x"])
        post(field, {"Tags": "alp\r\n bet \n\nzzz"})
        assert presentable_field.values == ["alpha", "beta", "zzz"]
        assert field.error_message is None

    def test_string_conflict_keeps_server_value(self):
        presentable_field, field = self.make_strings(["gamma"])
        post(field, {"Tags": "alpha", "Tags::": sha1("alpha")})
        assert presentable_field.values == ["gamma"]
        assert field.get_editable_values() == ["gamma"]

    def test_object_values_are_resolved(self):
        presentable_field, field = self.make_objects()
        post(field, {"Cities": "rom\nberlin"})
        assert presentable_field.values == [self.rome, self.berlin]
        assert field.error_message is None

    def test_object_textarea_has_no_fill_in(self):
        presentable_field, field = self.make_objects(state=TPostBackState.NO_POSTBACK)
        presentable_field.append(self.bern)
        html = field.render_html()
        assert '<textarea id="Cities" data-ajaxlist="Cities.json" data-min-search-length="1" name="Cities">' in html
        assert ">Bern</textarea>" in html

    def test_unresolved_line_is_an_error(self):
        presentable_field, field = self.make_objects()
        post(field, {"Cities": "Rome\nber"})
        assert presentable_field.values == [self.rome, None]
        assert field.error_message == field.view_field.get_default_error_message()

    def test_unchanged_objects(self):
        presentable_field, field = self.make_objects()
        presentable_field.append(self.berlin)
        post(field, {"Cities": "Berlin"})
        assert presentable_field.values == [self.berlin]
        assert field.is_included_in_post_back

    def test_object_conflict_keeps_server_value(self):
        presentable_field, field = self.make_objects()
        presentable_field.append(self.rome)
        post(field, {"Cities": "Berlin", "Cities::": sha1(self.berlin.id.hex)})
        assert presentable_field.values == [self.rome]
        assert field.get_editable_values() == ["Rome"]

    def test_object_hash_uses_ids(self):
        presentable_field, field = self.make_objects(state=TPostBackState.NO_POSTBACK)
        presentable_field.append(self.berlin)
        presentable_field.append(self.rome)
        field = make_field(TWebFieldForMultiplePresentableObjectLookups, presentable_field, field.view_field)
        assert field.previous_value == self.berlin.id.hex + self.rome.id.hex

    def test_object_list_table_cell(self):
        presentable_field, field = self.make_objects(state=TPostBackState.NO_POSTBACK, mode=LIST_TABLE)
        presentable_field.append(self.rome)
        presentable_field.append(self.berlin)
        assert field.render_html() == '<td data-value="Berlin,Rome">Rome, Berlin</td>'


# =============================================================================
# DATE AND TIME
# =============================================================================

class TestDateTime:
    """Date/time inputs."""

    def test_date_input(self):
        obj = TPresentableObject()
        view_field = TViewFieldForDateTime(key="When")
        html = make_field(TWebFieldForDateTime, obj.datetime("When", datetime(2025, 3, 4)), view_field).render_html()
        assert '<input id="When" type="date" name="When" value="2025-03-04" />' in html

    def test_date_post_back(self):
        obj = TPresentableObject()
        presentable_field = obj.datetime("When", datetime(2025, 3, 4))
        view_field = TViewFieldForDateTime(key="When")
        post(make_field(TWebFieldForDateTime, presentable_field, view_field, state=VALID), {"When": "2025-04-05"})
        assert presentable_field.value == datetime(2025, 4, 5)

    def test_read_only_time_tag(self):
        obj = TPresentableObject()
        view_field = TViewFieldForDateTime(key="When", is_read_only=True)
        html = make_field(TWebFieldForDateTime, obj.datetime("When", datetime(2025, 3, 4)), view_field).render_html()
        assert '<time datetime="2025-03-04">2025-03-04</time>' in html


# =============================================================================
# COLLECTIONS
# =============================================================================

class TestCollections:
    """Multiple single line texts."""

    def test_line_break_post_back(self):
        obj = TPresentableObject()
        presentable_field = obj.collection("Tags", ["x"])
        view_field = TViewFieldForMultipleSingleLineTexts(key="Tags")
        post(make_field(TWebFieldForMultipleSingleLineTexts, presentable_field, view_field, state=VALID),
             {"Tags": "a\r\nb\n\nc"})
        assert presentable_field.values == ["a", "b", "c"]

    def test_repeated_inputs_post_back(self):
        obj = TPresentableObject()
        presentable_field = obj.collection("Tags")
        view_field = TViewFieldForMultipleSingleLineTexts(key="Tags")
        post(make_field(TWebFieldForMultipleSingleLineTexts, presentable_field, view_field, state=VALID),
             {"Tags": ["a", "b\nc", ""]})
        assert presentable_field.values == ["a", "b", "c"]

    def test_form_uses_textarea(self):
        obj = TPresentableObject()
        view_field = TViewFieldForMultipleSingleLineTexts(key="Tags")
        html = make_field(TWebFieldForMultipleSingleLineTexts, obj.collection("Tags", ["a", "b"]),
                          view_field).render_html()
        assert '<textarea id="Tags" name="Tags" maxlength="256">a\nb</textarea>' in html

    def test_list_table_cell(self):
        obj = TPresentableObject()
        view_field = TViewFieldForMultipleSingleLineTexts(key="Tags")
        html = make_field(TWebFieldForMultipleSingleLineTexts, obj.collection("Tags", ["b", "a"]), view_field,
                          LIST_TABLE).render_html()
        assert html == '<td data-value="a,b">b, a</td>'

    def test_unknown_separator(self):
        with pytest.raises(TPresentationError):
            get_value_separator_html(TValueSeparator.NONE)


# =============================================================================
# FILES
# =============================================================================

class TestFiles:
    """Uploads, temporary files and removal."""

    def make(self, value=None, state=VALID, mode=FORM, **view_kwargs):
        obj = TPresentableObject()
        presentable_field = obj.file("Doc", value)
        view_field = TViewFieldForFile(key="Doc", **view_kwargs)
        provider = TOptionDataProvider()
        field = make_field(TWebFieldForFile, presentable_field, view_field, mode, state,
                           option_data_provider=provider)
        return presentable_field, field, provider

    def test_upload_is_stored_as_temporary_file(self):
        presentable_field, field, provider = self.make()
        post(field, {}, {"Doc": TUploadedFile("a.txt", "text/plain", b"hi")})
        assert presentable_field.value.name == "a.txt"
        assert provider.find_temporary_file(presentable_field.value.id.hex) is presentable_field.value
        assert 'name="Doc::TID"' in field.render_html()

    def test_upload_too_large(self):
        presentable_field, field, _ = self.make(max_file_size=1)
        post(field, {}, {"Doc": TUploadedFile("a.txt", "text/plain", b"hi")})
        assert presentable_field.value is None
        assert field.error_message == "The uploaded file must not be larger than 1 bytes."

    def test_temporary_file_survives_another_post_back(self):
        presentable_field, field, provider = self.make()
        file = TFile(name="a.txt")
        provider.store_temporary_file(file)
        post(field, {"Doc::TID": file.id.hex})
        assert presentable_field.value is file

    def test_removal(self):
        file = TFile(name="a.txt")
        presentable_field, field, _ = self.make(value=file)
        post(field, {"Doc::RID": file.id.hex})
        assert presentable_field.value is None
        assert field.removed_file is file

    def test_required_file_missing(self):
        _, field, _ = self.make(mandatoriness=TMandatoriness.REQUIRED)
        post(field, {})
        assert field.error_message == field.view_field.get_default_error_message()

    def test_link_uses_base_directory(self):
        _, field, _ = self.make(state=TPostBackState.NO_POSTBACK)
        field.file_base_directory = "/files/"
        file = TFile(name="a b.txt")
        attrs = field.get_file_link_anchor_attributes_for(file)
        assert attrs == {"href": f"/files/{file.id.hex}/a%20b.txt", "target": "_blank"}

    def test_list_table_has_no_anchors(self):
        file = TFile(name="a.txt")
        _, field, _ = self.make(value=file, state=TPostBackState.NO_POSTBACK, mode=LIST_TABLE)
        with pytest.raises(RuntimeError):
            field.get_file_link_anchor_attributes_for(file)
        assert field.render_html() == "<td>a.txt</td>"


# =============================================================================
# COMPARISON
# =============================================================================

class TestComparison:
    """Diff rendering against an earlier version."""

    def test_changed_value(self):
        obj = TPresentableObject()
        presentable_field = obj.string("Name", "Old")
        presentable_field.record_version(datetime(2025, 1, 1))
        presentable_field.value = "New"
        view_field = TViewFieldForSingleLineText(key="Name", title="Name", is_read_only=True)
        field = make_field(TWebFieldForSingleLineText, presentable_field, view_field,
                           comparison_date=datetime(2025, 6, 1))
        html = field.render_html()
        assert '<p><span class="diffrm">Old</span> <span class="diffnew">New</span></p>' in html

    def test_unchanged_value(self):
        obj = TPresentableObject()
        presentable_field = obj.string("Name", "Same")
        presentable_field.record_version(datetime(2025, 1, 1))
        view_field = TViewFieldForSingleLineText(key="Name", is_read_only=True)
        field = make_field(TWebFieldForSingleLineText, presentable_field, view_field,
                           comparison_date=datetime(2025, 6, 1))
        assert "<p>Same</p>" in field.render_html()

    def test_value_without_history_is_new(self):
        obj = TPresentableObject()
        view_field = TViewFieldForSingleLineText(key="Name", is_read_only=True)
        field = make_field(TWebFieldForSingleLineText, obj.string("Name", "Fresh"), view_field,
                           comparison_date=datetime(2025, 6, 1))
        assert '<span class="diffnew">Fresh</span>' in field.render_html()

    def test_changed_choice_shows_option_texts(self):
        obj = TPresentableObject()
        presentable_field = obj.string("Color", "g")
        presentable_field.record_version(datetime(2025, 1, 1), "r")
        view_field = TViewFieldForChoice(key="Color", option_provider=COLORS, is_read_only=True)
        field = make_field(TWebFieldForChoice, presentable_field, view_field, comparison_date=datetime(2025, 6, 1))
        assert '<p><span class="diffrm">Red</span> <span class="diffnew">Green</span></p>' in field.render_html()

    def test_unchanged_choice(self):
        obj = TPresentableObject()
        presentable_field = obj.string("Color", "g")
        presentable_field.record_version(datetime(2025, 1, 1))
        view_field = TViewFieldForChoice(key="Color", option_provider=COLORS, is_read_only=True)
        field = make_field(TWebFieldForChoice, presentable_field, view_field, comparison_date=datetime(2025, 6, 1))
        assert "<p>Green</p>" in field.render_html()

    def test_removed_choice(self):
        obj = TPresentableObject()
        presentable_field = obj.string("Color")
        presentable_field.record_version(datetime(2025, 1, 1), "r")
        view_field = TViewFieldForChoice(key="Color", option_provider=COLORS, is_read_only=True)
        field = make_field(TWebFieldForChoice, presentable_field, view_field, comparison_date=datetime(2025, 6, 1))
        assert '<p><span class="diffrm">Red</span></p>' in field.render_html()

    def test_changed_multiline_text_keeps_paragraphs(self):
        obj = TPresentableObject()
        presentable_field = obj.string("Notes", "b\n\nc")
        presentable_field.record_version(datetime(2025, 1, 1), "a")
        view_field = TViewFieldForMultilineText(key="Notes", is_read_only=True)
        field = make_field(TWebFieldForMultilineText, presentable_field, view_field,
                           comparison_date=datetime(2025, 6, 1))
        assert ('<p><span class="diffrm">a</span> <span class="diffnew">b</span></p>'
                '<p><span class="diffnew">c</span></p>') in field.render_html()

    def test_changed_rich_text(self):
        obj = TPresentableObject()
        presentable_field = obj.string("Notes", "New")
        presentable_field.record_version(datetime(2025, 1, 1), "Old <i>x</i>")
        view_field = TViewFieldForMultilineRichText(key="Notes", is_read_only=True)
        field = make_field(TWebFieldForMultilineRichText, presentable_field, view_field,
                           comparison_date=datetime(2025, 6, 1))
        assert ('<div class="rt"><span class="diffrm">Old <i>x</i></span> <span class="diffnew">New</span></div>'
                in field.render_html())

    def test_changed_date(self):
        obj = TPresentableObject()
        presentable_field = obj.datetime("When", datetime(2025, 3, 4))
        presentable_field.record_version(datetime(2025, 1, 1), datetime(2025, 2, 1))
        view_field = TViewFieldForDateTime(key="When", is_read_only=True)
        field = make_field(TWebFieldForDateTime, presentable_field, view_field, comparison_date=datetime(2025, 6, 1))
        assert ('<span class="diffrm"><time datetime="2025-02-01">2025-02-01</time></span> '
                '<span class="diffnew"><time datetime="2025-03-04">2025-03-04</time></span>') in field.render_html()

    def test_unchanged_date(self):
        obj = TPresentableObject()
        presentable_field = obj.datetime("When", datetime(2025, 3, 4))
        presentable_field.record_version(datetime(2025, 1, 1))
        view_field = TViewFieldForDateTime(key="When", is_read_only=True)
        field = make_field(TWebFieldForDateTime, presentable_field, view_field, comparison_date=datetime(2025, 6, 1))
        html = field.render_html()
        assert '<p><time datetime="2025-03-04">2025-03-04</time></p>' in html
        assert "diff" not in html

    def test_object_lookup_comparison_restores_current_object(self):
        berlin, rome = make_city("Berlin"), make_city("Rome")
        obj = TPresentableObject()
        presentable_field = obj.object("City", rome)
        presentable_field.record_version(datetime(2025, 1, 1), berlin)
        view_field = TViewFieldForPresentableObjectLookup(
            key="City", is_read_only=True, lookup_provider=TObjectLookupProvider([berlin, rome]))
        field = make_field(TWebFieldForPresentableObjectLookup, presentable_field, view_field,
                           comparison_date=datetime(2025, 6, 1))
        assert '<p><span class="diffrm">Berlin</span> <span class="diffnew">Rome</span></p>' in field.render_html()
        assert presentable_field.value is rome

    def test_object_comparison_sees_the_parent(self):
        class TCityInParentView(TViewFieldForPresentableObjectLookup):
            def get_read_only_value_for(self, presentable_field, topmost, option_data_provider) -> str:
                title = super().get_read_only_value_for(presentable_field, topmost, option_data_provider)
                return f"{title} ({presentable_field.parent.get_title()})"

        berlin, rome = make_city("Berlin"), make_city("Rome")
        obj = TPresentableObject()
        obj.string("Name", "Ann")
        presentable_field = obj.object("City", rome)
        presentable_field.record_version(datetime(2025, 1, 1), berlin)
        view_field = TCityInParentView(key="City", is_read_only=True,
                                       lookup_provider=TObjectLookupProvider([berlin, rome]))
        field = make_field(TWebFieldForPresentableObjectLookup, presentable_field, view_field,
                           comparison_date=datetime(2025, 6, 1))
        html = field.render_html()
        assert '<span class="diffrm">Berlin (Ann)</span> <span class="diffnew">Rome (Ann)</span>' in html
        assert presentable_field.value is rome

    def test_file_created_after_comparison_date_is_new(self):
        obj = TPresentableObject()
        file = TFile(name="a.txt", created_at=datetime(2025, 7, 1))
        view_field = TViewFieldForFile(key="Doc", is_read_only=True)
        field = make_field(TWebFieldForFile, obj.file("Doc", file), view_field, comparison_date=datetime(2025, 6, 1))
        assert (f'<span class="listitem"><span class="diffnew"><a href="{file.id.hex}/a.txt" target="_blank">'
                'a.txt</a></span></span>') in field.render_html()

    def test_file_that_existed_is_not_marked(self):
        obj = TPresentableObject()
        file = TFile(name="a.txt", created_at=datetime(2025, 1, 1))
        view_field = TViewFieldForFile(key="Doc", is_read_only=True)
        field = make_field(TWebFieldForFile, obj.file("Doc", file), view_field, comparison_date=datetime(2025, 6, 1))
        html = field.render_html()
        assert ">a.txt</a>" in html
        assert "diffnew" not in html

    def test_changed_collection(self):
        obj = TPresentableObject()
        presentable_field = obj.collection("Tags", ["b", "c"])
        presentable_field.record_version(datetime(2025, 1, 1), ["a", "b"])
        view_field = TViewFieldForMultipleSingleLineTexts(key="Tags")
        field = make_field(TWebFieldForMultipleSingleLineTexts, presentable_field, view_field, LIST_TABLE,
                           comparison_date=datetime(2025, 6, 1))
        assert field.render_html() == ('<td data-value="b,c"><span class="diffrm">a</span>, b, '
                                       '<span class="diffnew">c</span></td>')
