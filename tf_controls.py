# ======================================================================================================================
# 📁 file        : tf_controls.py — базовые контролы Tradition Forms
# 🕒 created     : 22.10.2025 19:02
# 🎉 contains    : TControl, TCascadedControl, TWebControl, TMasterControl, TLiteral, TInfoPane
# 🌅 project     : Tradition Forms 2025 🜂
# ======================================================================================================================
# 🚢 ...imports...
from __future__ import annotations
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple
from tf_sys import TComponent, _key_bool
from tf_html import THtmlWriter
# 💎🧩⚙️ ... __ALL__ ...
__all__ = ['TControl', 'TCascadedControl', 'TWebControl', 'TMasterControl', 'TLiteral', 'TInfoPane',
           'hyperlink_detection']
# ---
def hyperlink_detection() -> bool:
    return _key_bool("HYPERLINK_DETECTION", True)
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TControl — узел UI-дерева, один html-элемент
# ----------------------------------------------------------------------------------------------------------------------
class TControl(TComponent):
    # ⚡🛠️ ▸ __init__
    def __init__(self, tag_name: str, Owner: "TComponent | None" = None, Name: str | None = None):
        """
        Жизненный цикл на каждый запрос:
            create_child_controls(request) → handle_events(request, response) → render(html)
        """
        if not tag_name:
            raise ValueError("Tag may not be null or empty.")
        super().__init__(Owner, Name)
        self.TagName: str = tag_name
        self.CssClasses: List[str] = []
        # ⚡🛠️ TControl ▸ End of __init__
    # ---
    def add_class(self, *classes: str) -> "TControl":
        for cls in classes:
            if cls and cls not in self.CssClasses:
                self.CssClasses.append(cls)
        return self
    # ..................................................................................................................
    # 🔁 Жизненный цикл
    # ..................................................................................................................
    def create_child_controls(self, request):
        pass

    def handle_events(self, request, response):
        pass
    # ..................................................................................................................
    # 🎨 Рендеринг
    # ..................................................................................................................
    def get_css_classes(self) -> List[str]:
        return list(self.CssClasses)

    def get_attributes(self) -> Iterator[Tuple[str, Any]]:
        yield "class", " ".join(c for c in self.get_css_classes() if c)

    def get_is_visible(self) -> bool:
        return True

    @property
    def is_visible(self) -> bool:
        return self.get_is_visible()

    def render(self, html: THtmlWriter):
        if not self.get_is_visible():
            return
        html.tg(self.TagName, attrs=list(self.get_attributes()))
        self.render_child_controls(html)
        html.etg(self.TagName)

    def render_child_controls(self, html: THtmlWriter):
        pass

    def render_html(self) -> str:
        html = THtmlWriter()
        self.render(html)
        return html.html()
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TCascadedControl — контрол с упорядоченными детьми
# ----------------------------------------------------------------------------------------------------------------------
class TCascadedControl(TControl):

    def __init__(self, tag_name: str, Owner: "TComponent | None" = None, Name: str | None = None):
        super().__init__(tag_name, Owner, Name)
        self.Controls: List[TControl] = []

    def add_control(self, ctrl: TControl) -> TControl:
        """Усыновляет контрол (Owner + Components) и ставит в конец Controls."""
        ctrl.set_owner(self)
        self.Controls.append(ctrl)
        return ctrl

    def create_child_controls(self, request):
        for ctrl in self.Controls:
            ctrl.create_child_controls(request)

    def handle_events(self, request, response):
        for ctrl in self.Controls:
            ctrl.handle_events(request, response)

    def render_child_controls(self, html: THtmlWriter):
        for ctrl in self.Controls:
            ctrl.render(html)
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TWebControl — произвольный тег с атрибутами
# ----------------------------------------------------------------------------------------------------------------------
class TWebControl(TCascadedControl):

    def __init__(self, tag_name: str, Owner: "TComponent | None" = None, Name: str | None = None):
        super().__init__(tag_name, Owner, Name)
        self.Attributes: Dict[str, Any] = {}
        self.inner_html: str = ""

    @property
    def is_empty(self) -> bool:
        return not self.Controls

    def clear(self):
        for ctrl in self.Controls:
            ctrl.free()
        self.Controls.clear()

    def get_attributes(self) -> Iterator[Tuple[str, Any]]:
        yield from super().get_attributes()
        yield from self.Attributes.items()

    def render_child_controls(self, html: THtmlWriter):
        html.text(self.inner_html)
        super().render_child_controls(html)
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TMasterControl — список объектов со ссылками
# ----------------------------------------------------------------------------------------------------------------------
class TMasterControl(TCascadedControl):

    def __init__(self, tag_name: str, Owner: "TComponent | None" = None, Name: str | None = None):
        super().__init__(tag_name, Owner, Name)
        self.css_class_for_description_pane = "description"
        self.on_click_url: Optional[Callable[[Any], str]] = None

    def render_description_message(self, html: THtmlWriter, description: str | None):
        if not description:
            return
        html.tg("div", self.css_class_for_description_pane)
        html.multiline_plain_text(description, hyperlink_detection())
        html.etg("div")
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TLiteral / TInfoPane
# ----------------------------------------------------------------------------------------------------------------------
class TLiteral(TControl):
    """Кусок текста без собственного тега."""

    def __init__(self, text: str = "", Owner: "TComponent | None" = None, Name: str | None = None):
        super().__init__("literal", Owner, Name)
        self.text = text

    def render(self, html: THtmlWriter):
        html.enc(self.text)


class TInfoPane(TWebControl):
    """div с многострочным сообщением: описание формы, ошибка, статус."""

    def __init__(self, message: str = "", css_class: str = "", Owner: "TComponent | None" = None,
                 Name: str | None = None):
        super().__init__("div", Owner, Name)
        self.message = message
        self.add_class(css_class)

    def get_is_visible(self) -> bool:
        return bool(self.message)

    def render_child_controls(self, html: THtmlWriter):
        html.multiline_plain_text(self.message, hyperlink_detection())
# ======================================================================================================================
# 📁🌄 tf_controls.py 🜂 The End — See You Next Session 2025
# ======================================================================================================================
