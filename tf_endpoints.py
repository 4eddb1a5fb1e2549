# ======================================================================================================================
# 📁 file        : tf_endpoints.py — endpoints рядом со страницами: подсказки lookup-полей и файлы
# 🕒 created     : 03.11.2025 11:20
# 🎉 contains    : TLookupEndpoint, TFileEndpoint
# 🌅 project     : Tradition Forms 2025 🜂
# ======================================================================================================================
# 🚢 ...imports...
from __future__ import annotations
import json
import uuid
from typing import Any, Callable, List, Optional, Sequence, Tuple
from urllib.parse import quote
from tf_logger import LoggableComponent
from tf_sys import _key_int
from tf_application import TRequest, TResponse
from tf_model import TFile, TOptionDataProvider, TPresentableObject, key_chain_from_key, remove_indexes_from
from tf_views import TFormView, TViewFieldForLookup, TViewFieldForMultipleLookups
# 💎 ... CONFIG / CONSTS ...
LOOKUP_SUFFIX = ".json"
LOOKUP_RESULT_LIMIT = 512
READ_METHODS = ("GET", "HEAD")
# 💎🧩⚙️ ... __ALL__ ...
__all__ = ['TLookupEndpoint', 'TFileEndpoint', 'LOOKUP_RESULT_LIMIT']
# ---
def _normalize_base_path(base_path: str) -> str:
    """'/people' → '/people/'."""
    base_path = "/" + base_path.strip("/")
    return base_path if base_path == "/" else base_path + "/"
# ---
def _status_response(status: int, text: str) -> TResponse:
    response = TResponse()
    response.status = status
    response.body = f"<h2>{status} {text}</h2>"
    return response
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TLookupEndpoint — JSON-подсказки для data-ajaxlist
# ----------------------------------------------------------------------------------------------------------------------
class TLookupEndpoint(LoggableComponent):
    # ⚡🛠️ ▸ __init__
    def __init__(self, base_path: str, form_view: TFormView,
                 presentable_object: TPresentableObject | Callable[[TRequest], TPresentableObject | None]):
        """
        GET <base_path><client field id>.json?q=<term> → JSON-массив значений lookup provider'а.
        Поле ищется в form_view по цепочке ключей без индексов секций (Items.City_0 → Items.City);
        presentable_object (или фабрика от запроса) решает, есть ли у пользователя редактируемое поле.
        """
        self.base_path = _normalize_base_path(base_path)
        self.form_view = form_view
        self.presentable_object = presentable_object
        # ⚡🛠️ TLookupEndpoint ▸ End of __init__

    def __repr__(self):
        return f"<TLookupEndpoint {self.base_path}*{LOOKUP_SUFFIX}>"

    def matches(self, request: TRequest) -> bool:
        path = request.path
        return (path.startswith(self.base_path) and path.endswith(LOOKUP_SUFFIX)
                and len(path) > len(self.base_path) + len(LOOKUP_SUFFIX))

    def get_presentable_object(self, request: TRequest) -> TPresentableObject | None:
        source = self.presentable_object
        return source if isinstance(source, TPresentableObject) else source(request)

    def find_view_field(self, key: str) -> Tuple[Any, List[str]]:
        """(view field или None, цепочка ключей без индексов)."""
        key_chain = remove_indexes_from(key_chain_from_key(key))
        view_field = self.form_view.find_one_view_field(key_chain)
        if not isinstance(view_field, (TViewFieldForLookup, TViewFieldForMultipleLookups)) or view_field.is_read_only:
            return None, key_chain
        return view_field, key_chain

    @staticmethod
    def is_access_allowed(presentable_object: TPresentableObject | None, key_chain: Sequence[str]) -> bool:
        """Хотя бы одно найденное поле редактируемо; пустая коллекция проверяется по самой коллекции."""
        if presentable_object is None:
            return False
        chain = list(key_chain)
        while chain:
            fields = presentable_object.find_presentable_fields(chain)
            if fields:
                return any(not field.is_read_only for field in fields)
            chain.pop()
        return False

    def process(self, request: TRequest) -> TResponse:
        if request.method not in READ_METHODS:
            return _status_response(405, "Method Not Allowed")
        key = request.path[len(self.base_path):-len(LOOKUP_SUFFIX)]
        view_field, key_chain = self.find_view_field(key)
        if view_field is None or not self.is_access_allowed(self.get_presentable_object(request), key_chain):
            self.log("process", f"⚠️ no editable lookup field for '{key}'")
            return _status_response(404, "Not Found")
        term = request.query.get("q")
        if term is None:
            return _status_response(404, "Not Found")
        limit = max(1, _key_int("LOOKUP_RESULT_LIMIT", LOOKUP_RESULT_LIMIT))
        values = [v for v in view_field.require_lookup_provider().find_values(term) if v is not None][:limit]
        self.debug("process", f"'{key}' q={term!r} → {len(values)} values")
        response = TResponse()
        response.body = json.dumps(values, ensure_ascii=False)
        response.content_type = "application/json"
        response.headers["Cache-Control"] = "no-store"
        return response
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TFileEndpoint — содержимое файлов по ссылкам <base>/<hex>/<name>
# ----------------------------------------------------------------------------------------------------------------------
class TFileEndpoint(LoggableComponent):
    # ⚡🛠️ ▸ __init__
    def __init__(self, base_path: str, option_data_provider: TOptionDataProvider | None = None,
                 find_file: Callable[[uuid.UUID], Optional[TFile]] | None = None):
        """
        base_path совпадает с file_base_directory формы.
        Файл ищет find_file, без него option_data_provider.find_file (временные загрузки).
        Имя в ссылке должно совпасть с именем файла.
        """
        self.base_path = _normalize_base_path(base_path)
        self.option_data_provider = option_data_provider
        self.find_file_callback = find_file
        # ⚡🛠️ TFileEndpoint ▸ End of __init__

    def __repr__(self):
        return f"<TFileEndpoint {self.base_path}<id>/<name>>"

    def _split_path(self, path: str) -> Tuple[uuid.UUID, str] | None:
        if not path.startswith(self.base_path):
            return None
        parts = path[len(self.base_path):].split("/", 1)
        if len(parts) != 2 or not parts[1]:
            return None
        try:
            return uuid.UUID(parts[0]), parts[1]
        except ValueError:
            return None

    def matches(self, request: TRequest) -> bool:
        return self._split_path(request.path) is not None

    def find_file(self, file_id: uuid.UUID) -> Optional[TFile]:
        if self.find_file_callback is not None:
            return self.find_file_callback(file_id)
        if self.option_data_provider is not None:
            return self.option_data_provider.find_file(file_id)
        return None

    def process(self, request: TRequest) -> TResponse:
        if request.method not in READ_METHODS:
            return _status_response(405, "Method Not Allowed")
        file_id, name = self._split_path(request.path)
        file = self.find_file(file_id)
        if file is None or file.name != name:
            self.log("process", f"⚠️ file {file_id.hex}/{name} not found")
            return _status_response(404, "Not Found")
        response = TResponse()
        response.body = file.data
        response.content_type = file.mime_type or "application/octet-stream"
        response.charset = None
        response.headers["Content-Disposition"] = f"inline; filename*=UTF-8''{quote(file.name)}"
        response.headers["Cache-Control"] = "private"
        return response
# ======================================================================================================================
# 📁🌄 tf_endpoints.py 🜂 The End — See You Next Session 2025
# ======================================================================================================================
