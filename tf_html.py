# ======================================================================================================================
# 📁 file        : tf_html.py — HTML-писатель Tradition Forms
# 🕒 created     : 21.10.2025 10:05
# 🎉 contains    : THtmlWriter — Canvas + tg/etg/stg, кодирование, многострочный текст
# 🌅 project     : Tradition Forms 2025 🜂
# ======================================================================================================================
# 🚢 ...imports...
from __future__ import annotations
import re
from html import escape
from typing import Iterable, Mapping, Sequence, Tuple, Union
# 💎 ... CONFIG / CONSTS ...
NEW_PARAGRAPH_HTML = "</p><p>"
_RE_MULTIPLE_SPACES = re.compile(r" {2,}")
_RE_HYPERLINK = re.compile(r"([a-zA-Z0-9]+://[^\s<>]+[a-zA-Z0-9/])")
_RE_HYPERLINK_TAG = re.compile(r'(<a\s[^>]*?href=")([^"]*)("[^>]*>)', re.IGNORECASE)
_EMAIL_DELIMITERS = r'\s"(),:;\[\]<>'
_RE_EMAIL = re.compile(
    rf'(?<![^{_EMAIL_DELIMITERS}])'
    rf'([^{_EMAIL_DELIMITERS}@]+@[^{_EMAIL_DELIMITERS}@]+\.[^{_EMAIL_DELIMITERS}@]*[^{_EMAIL_DELIMITERS}@.])'
)
# 🧱 заглушки для тегов: переживают html-кодирование, пробелы внутри не встречаются после схлопывания
_PLACEHOLDERS: Tuple[Tuple[str, str], ...] = ((">", ".    ."), ("<", ".   ."), ('"', ".  ."))
_RE_TAG = re.compile(r"<(/?)([a-zA-Z][a-zA-Z0-9]*)(\s[^<>]*?)?\s*/?>")
_RE_TAG_ATTRIBUTE = re.compile(r'([a-zA-Z-]+)\s*=\s*(?:"([^"]*)"|\'([^\']*)\'|([^\s"\'>]+))')
_RE_SAFE_URL = re.compile(r"^(https?://|mailto:)", re.IGNORECASE)
_RICH_TEXT_RENAMES = {"em": "i", "strong": "b"}
_RICH_TEXT_LINE_BREAK = "<br />"

Attrs = Union[Mapping[str, object], Sequence[Tuple[str, object]], None]
# 💎🧩⚙️ ... __ALL__ ...
__all__ = [
    'THtmlWriter', 'NEW_PARAGRAPH_HTML',
    'html_encode', 'remove_unnecessary_white_space', 'replace_email_addresses',
    'convert_multiline_plain_text', 'convert_multiline_plain_text_unsafe', 'convert_multiline_rich_text',
    'sanitize_rich_text',
]
# ----------------------------------------------------------------------------------------------------------------------
# 🍍 Текстовые утилиты
# ----------------------------------------------------------------------------------------------------------------------
def html_encode(value) -> str:
    if value is None:
        return ""
    return escape(str(value), quote=True)
# ---
def remove_unnecessary_white_space(value: str | None) -> str | None:
    """Обрезает края и схлопывает серии пробелов в один."""
    if not value:
        return value
    return _RE_MULTIPLE_SPACES.sub(" ", value.strip())
# ---
def replace_email_addresses(text: str, replacement: str) -> str:
    """replacement может ссылаться на адрес через $1."""
    return _RE_EMAIL.sub(lambda m: replacement.replace("$1", m.group(1)), text)
# ---
def _tags_to_placeholders(markup: str) -> str:
    for ch, ph in _PLACEHOLDERS:
        markup = markup.replace(ch, ph)
    return markup
# ---
def _placeholders_to_tags(text: str) -> str:
    for ch, ph in _PLACEHOLDERS:
        text = text.replace(ph, ch)
    return text
# ---
def convert_multiline_plain_text_unsafe(value: str | None, hyperlink_detection: bool = True,
                                        new_paragraph_html: str = NEW_PARAGRAPH_HTML) -> str:
    """
    Плоский текст → HTML: e-mail и ссылки становятся <a>, остальное кодируется,
    переводы строк → абзацы / <br />. «Unsafe»: вход уже должен быть без серий пробелов.
    """
    if not value:
        return value or ""
    text = replace_email_addresses(value, _tags_to_placeholders('<a href="mailto:$1">$1</a>'))
    if hyperlink_detection:
        link = _tags_to_placeholders('<a href="$1" rel="noopener" target="_blank">$1</a>')
        text = _RE_HYPERLINK.sub(lambda m: link.replace("$1", m.group(1)), text)
    text = _placeholders_to_tags(html_encode(text))
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = text.replace("\n\n", new_paragraph_html)
    return text.replace("\n", "<br />")
# ---
def convert_multiline_plain_text(value: str | None, hyperlink_detection: bool = True,
                                 new_paragraph_html: str = NEW_PARAGRAPH_HTML) -> str:
    if not value:
        return value or ""
    return convert_multiline_plain_text_unsafe(remove_unnecessary_white_space(value), hyperlink_detection,
                                               new_paragraph_html)
# ---
def convert_multiline_rich_text(value: str | None, hyperlink_detection: bool = True,
                                new_paragraph_html: str = NEW_PARAGRAPH_HTML) -> str:
    """Уже очищенный rich text (абзацы <p>): схлопываем строки и пробелы, линкуем адреса."""
    if not value:
        return value or ""
    text = remove_unnecessary_white_space(value.replace("\r", "").replace("\n", ""))
    text = replace_email_addresses(text, '<a href="mailto:$1">$1</a>')
    if hyperlink_detection:
        text = _RE_HYPERLINK.sub(r'<a href="\1" rel="noopener" target="_blank">\1</a>', text)
    else:
        text = _RE_HYPERLINK_TAG.sub(r'<a href="\2" rel="noopener" target="_blank">', text)
    return text.replace("</p><p>", new_paragraph_html)
# ---
def _rebuild_tag(match: re.Match, allowed_tags: Mapping[str, Sequence[str]]) -> str:
    closing, name, raw_attributes = match.group(1), match.group(2).lower(), match.group(3) or ""
    if name in ("br", "div") or (name == "p" and closing):
        return _tags_to_placeholders(_RICH_TEXT_LINE_BREAK)
    name = _RICH_TEXT_RENAMES.get(name, name)
    if name not in allowed_tags:
        return ""
    if closing:
        return _tags_to_placeholders(f"</{name}>")
    parts = [name]
    for attr in _RE_TAG_ATTRIBUTE.finditer(raw_attributes):
        key = attr.group(1).lower()
        value = next((g for g in attr.groups()[1:] if g is not None), "")
        if key not in allowed_tags[name]:
            continue
        if key in ("href", "src") and not _RE_SAFE_URL.match(value.strip()):
            continue
        parts.append(f'{key}="{html_encode(value)}"')
    return _tags_to_placeholders("<" + " ".join(parts) + ">")
# ---
def sanitize_rich_text(value: str | None, allowed_tags: Mapping[str, Sequence[str]]) -> str:
    """
    Post back rich-text редактора → безопасный фрагмент.
    allowed_tags: тег → разрешённые атрибуты. em/strong становятся i/b,
    </p>, <br> и <div> → <br />, прочие теги вырезаются, остальные < > кодируются.
    Переводы строк → пробелы, <br /> по краям обрезаются.
    """
    if not value:
        return value or ""
    text = _RE_MULTIPLE_SPACES.sub(" ", value).replace("<p><br></p>", _RICH_TEXT_LINE_BREAK)
    text = _RE_TAG.sub(lambda m: _rebuild_tag(m, allowed_tags), text)
    text = text.replace("<", "&lt;").replace(">", "&gt;")
    text = _placeholders_to_tags(text)
    text = text.replace("\r", " ").replace("\n", " ")
    while text.startswith(_RICH_TEXT_LINE_BREAK):
        text = text[len(_RICH_TEXT_LINE_BREAK):]
    while text.endswith(_RICH_TEXT_LINE_BREAK):
        text = text[:-len(_RICH_TEXT_LINE_BREAK)]
    return text.strip()
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 THtmlWriter — накопитель разметки
# ----------------------------------------------------------------------------------------------------------------------
class THtmlWriter:
    """
    Пишет HTML в Canvas (список строк). Атрибуты с пустым ключом или значением
    не выводятся. Значения атрибутов пишутся как есть: пользовательские данные
    кодирует вызывающая сторона.
    """

    def __init__(self):
        self.Canvas: list[str] = []
    # ..................................................................................................................
    # 🎨 Базовые примитивы
    # ..................................................................................................................
    def text(self, raw) -> "THtmlWriter":
        if raw:
            self.Canvas.append(str(raw))
        return self

    def enc(self, value) -> "THtmlWriter":
        if value is not None and value != "":
            self.Canvas.append(html_encode(value))
        return self

    def attr(self, key: str, value) -> "THtmlWriter":
        if key and value is not None and value != "":
            self.Canvas.append(f' {key}="{value}"')
        return self

    def _open(self, tag: str, cls, attrs: Attrs):
        self.Canvas.append(f"<{tag}")
        if cls:
            self.attr("class", cls if isinstance(cls, str) else " ".join(c for c in cls if c))
        if attrs:
            items = attrs.items() if isinstance(attrs, Mapping) else attrs
            for key, value in items:
                self.attr(key, value)

    def tg(self, tag: str, cls: str | Iterable[str] | None = None, attrs: Attrs = None) -> "THtmlWriter":
        """Открывающий тег."""
        self._open(tag, cls, attrs)
        self.Canvas.append(">")
        return self

    def stg(self, tag: str, cls: str | Iterable[str] | None = None, attrs: Attrs = None) -> "THtmlWriter":
        """Самозакрывающийся тег."""
        self._open(tag, cls, attrs)
        self.Canvas.append(" />")
        return self

    def etg(self, tag: str) -> "THtmlWriter":
        self.Canvas.append(f"</{tag}>")
        return self

    def _tg(self, tag: str, value, cls: str | Iterable[str] | None = None, attrs: Attrs = None) -> "THtmlWriter":
        """Тег целиком с закодированным содержимым."""
        return self.tg(tag, cls, attrs).enc(value).etg(tag)

    def hidden(self, name: str, value) -> "THtmlWriter":
        return self.stg("input", attrs=(("type", "hidden"), ("name", name), ("value", html_encode(value))))
    # ..................................................................................................................
    # 📝 Многострочный текст
    # ..................................................................................................................
    def multiline_plain_text(self, value: str | None, hyperlink_detection: bool = True,
                             new_paragraph_html: str = NEW_PARAGRAPH_HTML) -> "THtmlWriter":
        return self.text(convert_multiline_plain_text(value, hyperlink_detection, new_paragraph_html))

    def multiline_plain_text_unsafe(self, value: str | None, hyperlink_detection: bool = True,
                                    new_paragraph_html: str = NEW_PARAGRAPH_HTML) -> "THtmlWriter":
        return self.text(convert_multiline_plain_text_unsafe(value, hyperlink_detection, new_paragraph_html))

    def multiline_rich_text(self, value: str | None, hyperlink_detection: bool = True,
                            new_paragraph_html: str = NEW_PARAGRAPH_HTML) -> "THtmlWriter":
        return self.text(convert_multiline_rich_text(value, hyperlink_detection, new_paragraph_html))
    # ..................................................................................................................
    def html(self) -> str:
        return "".join(self.Canvas)

    def clear(self):
        self.Canvas.clear()

    def __str__(self):
        return self.html()

# ======================================================================================================================
# 📁🌄 tf_html.py 🜂 The End — See You Next Session 2025
# ======================================================================================================================
