# ======================================================================================================================
# 📁 file        : tf_page.py — страница Tradition Forms
# 🕒 created     : 26.10.2025 11:20
# 🎉 contains    : TPage — html-документ: head + header / nav / main / footer
# 🌅 project     : Tradition Forms 2025 🜂
# ======================================================================================================================
# 🚢 ...imports...
from __future__ import annotations
from typing import List, Tuple
from tf_html import THtmlWriter, html_encode
from tf_controls import TCascadedControl, TWebControl
# 💎 ... CONFIG / CONSTS ...
DOCTYPE = "<!DOCTYPE html>\n"
VIEWPORT = "width=device-width, initial-scale=1.0"
# 💎🧩⚙️ ... __ALL__ ...
__all__ = ['TPage']
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TPage
# ----------------------------------------------------------------------------------------------------------------------
class TPage(TCascadedControl):
    # ⚡🛠️ ▸ __init__
    def __init__(self, title: str = "", Owner=None, Name: str | None = None):
        """
        Страница = четыре секции. Контролы кладутся в header / nav / content / footer,
        пустые секции не рендерятся.
        """
        super().__init__("html", Owner, Name)
        self.title = title
        self.description = ""
        self.keywords = ""
        self.language = "en"
        self.stylesheets: List[str] = []
        self.scripts: List[Tuple[str, bool]] = []
        # --- Секции ---
        self.header = self.add_control(TWebControl("header"))
        self.nav = self.add_control(TWebControl("nav"))
        self.content = self.add_control(TWebControl("main"))
        self.content.Attributes["role"] = "main"
        self.footer = self.add_control(TWebControl("footer"))
        # ⚡🛠️ TPage ▸ End of __init__
    # ---
    def add_stylesheet(self, href: str) -> "TPage":
        if href and href not in self.stylesheets:
            self.stylesheets.append(href)
        return self

    def add_script(self, src: str, defer: bool = True) -> "TPage":
        self.scripts.append((src, defer))
        return self
    # ..................................................................................................................
    # 🔁 Жизненный цикл
    # ..................................................................................................................
    def handle_events(self, request, response):
        response.headers["Cache-Control"] = "no-store"
        super().handle_events(request, response)
    # ..................................................................................................................
    # 🎨 Рендеринг
    # ..................................................................................................................
    def render(self, html: THtmlWriter):
        html.text(DOCTYPE)
        html.tg("html", attrs={"lang": self.language})
        self.render_head(html)
        html.tg("body", self.get_css_classes())
        self.render_child_controls(html)
        html.etg("body")
        html.etg("html")

    def render_head(self, html: THtmlWriter):
        html.tg("head")
        html.stg("meta", attrs={"charset": "utf-8"})
        html.stg("meta", attrs=(("name", "viewport"), ("content", VIEWPORT)))
        if self.description:
            html.stg("meta", attrs=(("name", "description"), ("content", html_encode(self.description))))
        if self.keywords:
            html.stg("meta", attrs=(("name", "keywords"), ("content", html_encode(self.keywords))))
        html._tg("title", self.title)
        for href in self.stylesheets:
            html.stg("link", attrs=(("rel", "stylesheet"), ("href", html_encode(href))))
        for src, defer in self.scripts:
            html.tg("script", attrs=(("src", html_encode(src)), ("defer", "defer" if defer else "")))
            html.etg("script")
        html.etg("head")

    def render_child_controls(self, html: THtmlWriter):
        for section in self.Controls:
            if isinstance(section, TWebControl) and section.is_empty and not section.inner_html:
                continue
            section.render(html)
# ======================================================================================================================
# 📁🌄 tf_page.py 🜂 The End — See You Next Session 2025
# ======================================================================================================================
