# ======================================================================================================================
# 📁 file        : tf_form.py — форма: экземпляры, post back, публикация событий
# 🕒 created     : 25.10.2025 09:12
# 🎉 contains    : TForm, TModificationInfo
# 🌅 project     : Tradition Forms 2025 🜂
# ======================================================================================================================
# 🚢 ...imports...
from __future__ import annotations
from datetime import datetime
from typing import Any, Iterator, List, Optional, Tuple
from tf_html import THtmlWriter
from tf_controls import TCascadedControl, TWebControl, TInfoPane
from tf_events import TEventType, create_form_event, create_render_event
from tf_fields import TWebFieldForFile
from tf_model import TPostBackState, TPresentableObject, TValidityCheck
from tf_panes import TFormPane
# 💎 ... CONFIG / CONSTS ...
MSG_CORRECT_INVALID_INPUT = "Please correct the invalid input values."
# 💎🧩⚙️ ... __ALL__ ...
__all__ = ['TForm', 'TModificationInfo', 'MSG_CORRECT_INVALID_INPUT']
# ---
def _format_stamp(value: datetime | None) -> str:
    return "" if value is None else value.strftime("%Y-%m-%d %H:%M")
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TModificationInfo — кто и когда создал / изменил объект
# ----------------------------------------------------------------------------------------------------------------------
class TModificationInfo(TWebControl):

    def __init__(self, presentable_object: TPresentableObject, Owner=None, Name: str | None = None):
        super().__init__("div", Owner, Name)
        self.presentable_object = presentable_object

    def get_parts(self) -> List[str]:
        obj = self.presentable_object
        parts = []
        if obj.created_at is not None:
            part = f"Created {_format_stamp(obj.created_at)}"
            if obj.created_by:
                part += f" by {obj.created_by}"
            parts.append(part + ".")
        if obj.modified_at is not None:
            part = f"Last modified {_format_stamp(obj.modified_at)}"
            if obj.modified_by:
                part += f" by {obj.modified_by}"
            parts.append(part + ".")
        return parts

    def get_is_visible(self) -> bool:
        return bool(self.get_parts())

    def render_child_controls(self, html: THtmlWriter):
        html.enc(" ".join(self.get_parts()))
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TForm
# ----------------------------------------------------------------------------------------------------------------------
class TForm(TCascadedControl):
    # ⚡🛠️ ▸ __init__
    def __init__(self, presentable_object: TPresentableObject, view, file_base_directory: str = "",
                 web_factory=None, Owner=None, Name: str | None = None):
        """
        Цикл запроса:
            create_child_controls → instance id + post back state → панели → has_valid_value
            handle_events         → form.postback / form.invalid в TApplication
            render                → instance/object, ошибка, описание, панели, updatestatus
        """
        super().__init__("form", Owner, Name)
        if web_factory is None:
            from tf_factory import TWebFactory
            from tf_model import TFieldRenderMode
            web_factory = TWebFactory(TFieldRenderMode.FORM, None)
        self.action = ""
        self.comparison_date: datetime | None = None
        self.css_class_for_description_pane = ""
        self.css_class_for_error_pane = ""
        self.css_class_for_update_status = ""
        self.f_error_message = view.error_message or ""
        self.file_base_directory = file_base_directory
        self.form_panes: List[TFormPane] = []
        self.has_valid_value: Optional[bool] = None
        self.instance_id = ""
        self.post_back_state = TPostBackState.NO_POSTBACK
        self.presentable_object = presentable_object
        self.view = view
        self.web_factory = web_factory
        web_factory.set_css_classes_for_form(self)
        # ⚡🛠️ TForm ▸ End of __init__
    # ..................................................................................................................
    @property
    def error_message(self) -> str:
        return self.f_error_message

    @error_message.setter
    def error_message(self, value: str | None):
        self.f_error_message = value or ""
        if self.f_error_message:
            self.has_valid_value = False
        else:
            self.set_has_valid_value()
    # ..................................................................................................................
    # 🔁 Жизненный цикл
    # ..................................................................................................................
    def create_child_controls(self, request):
        self.action = self.view.action or getattr(request, "path_and_query", "") or ""
        self.set_instance_id_and_post_back_state(request)
        self.form_panes = []
        for view_pane in self.view.view_panes:
            if view_pane.is_visible:
                form_pane = self.web_factory.build_pane_for(
                    self.presentable_object, view_pane, self.presentable_object, self.comparison_date, "", "",
                    self.post_back_state, self.file_base_directory)
                self.add_control(form_pane)
                self.form_panes.append(form_pane)
        super().create_child_controls(request)
        self.set_has_valid_value()
        self.debug("create_child_controls", f"state={self.post_back_state.value} valid={self.has_valid_value}")

    def set_instance_id_and_post_back_state(self, request):
        """Id экземпляра одноразовый: повторная отправка той же формы даёт INVALID_POSTBACK."""
        app = self.app()
        user_key = request.user_key(self.web_factory.option_data_provider)
        post_back_instance_id = request.form.get("instance")
        if post_back_instance_id is None:
            self.post_back_state = TPostBackState.NO_POSTBACK
        elif app.consume_form_instance(user_key, post_back_instance_id):
            self.post_back_state = TPostBackState.VALID_POSTBACK
        else:
            self.post_back_state = TPostBackState.INVALID_POSTBACK
        self.instance_id = app.issue_form_instance(user_key)

    def set_has_valid_value(self):
        if self.post_back_state != TPostBackState.VALID_POSTBACK:
            return
        self.has_valid_value = True
        for form_pane in self.form_panes:
            form_pane.set_has_valid_value()
            if form_pane.has_valid_value is None:
                self.has_valid_value = None
                break
            if form_pane.has_valid_value is False:
                self.has_valid_value = False

    def handle_events(self, request, response):
        super().handle_events(request, response)
        if self.post_back_state == TPostBackState.NO_POSTBACK:
            return
        is_valid = self.post_back_state == TPostBackState.VALID_POSTBACK and self.has_valid_value is True
        is_complete = None
        if is_valid:
            is_complete = self.view.is_valid_value(self.presentable_object, TValidityCheck.STRICT,
                                                   self.web_factory.option_data_provider)
        event = create_form_event(self.Name, is_valid, self.presentable_object.id.hex, self.presentable_object.is_new,
                                  is_complete)
        self.log("handle_events", f"{event.type.value} for object {event.payload['object_id']}")
        self.app().handle_event(event, self)
        if is_valid:
            self.release_temporary_files()

    def release_temporary_files(self) -> int:
        """После обработки валидного post back загрузки формы больше не временные."""
        option_data_provider = self.web_factory.option_data_provider
        if option_data_provider is None:
            return 0
        released = 0
        for control in self.iter_tree():
            if isinstance(control, TWebFieldForFile) and control.temporary_file is not None:
                if option_data_provider.release_temporary_file(control.temporary_file.id.hex) is not None:
                    released += 1
        if released:
            self.debug("release_temporary_files", f"{released} files released")
        return released
    # ..................................................................................................................
    # 🎨 Рендеринг
    # ..................................................................................................................
    def get_attributes(self) -> Iterator[Tuple[str, Any]]:
        yield from super().get_attributes()
        yield "action", self.action
        if not self.view.is_autocomplete_enabled:
            yield "autocomplete", "off"
        yield "enctype", "multipart/form-data"
        yield "method", "post"
        if self.view.has_unload_warning:
            yield "data-unload-warning", "1"

    def render(self, html: THtmlWriter):
        start = len(html.Canvas)
        super().render(html)
        size = sum(len(s) for s in html.Canvas[start:])
        self.app().handle_event(create_render_event(TEventType.FORM_RENDERED, self.Name, size), self)

    def render_child_controls(self, html: THtmlWriter):
        html.hidden("instance", self.instance_id)
        html.hidden("object", "N" if self.presentable_object.is_new else self.presentable_object.id.hex)
        self.render_error_message(html)
        self.render_description_message(html)
        for ctrl in self.Controls:
            if isinstance(ctrl, TFormPane) and ctrl.is_empty:
                continue
            ctrl.render(html)
        self.render_modification_info(html)

    def render_error_message(self, html: THtmlWriter):
        if self.has_valid_value is False:
            TInfoPane(self.f_error_message or MSG_CORRECT_INVALID_INPUT, self.css_class_for_error_pane).render(html)

    def render_description_message(self, html: THtmlWriter):
        if self.view.description:
            TInfoPane(self.view.description, self.css_class_for_description_pane).render(html)

    def render_modification_info(self, html: THtmlWriter):
        if self.presentable_object.is_new:
            return
        info = TModificationInfo(self.presentable_object)
        info.add_class(self.css_class_for_update_status)
        info.render(html)
# ======================================================================================================================
# 📁🌄 tf_form.py 🜂 The End — See You Next Session 2025
# ======================================================================================================================
