# ======================================================================================================================
# 📁 file        : tf_application.py — хостинг Tradition Forms
# 🕒 created     : 26.10.2025 13:48
# 🎉 contains    : TRequest, TUploadedFile, TResponse, TApplication, фасады req*
# 🌅 project     : Tradition Forms 2025 🜂
# ======================================================================================================================
# 🚢 ...imports...
from __future__ import annotations
import argparse
import asyncio
import threading
import traceback
import uuid
from dataclasses import dataclass
from datetime import datetime
from html import escape
from typing import Any, Callable, Dict, Iterable, List, Tuple
from urllib.parse import parse_qsl, unquote, urlsplit
from tf_sys import TOwnerObject, _key, _key_int
from tf_logger import init_log_router, stop_log_router
from tf_events import TEvent, TEventType, TSubscription, TSubscriptionIndex, create_render_event
from tf_html import THtmlWriter
# 💎 ... CONFIG / CONSTS ...
STATIC_SUFFIXES = (".css", ".js", ".ico", ".png", ".jpg", ".svg", ".map")
EVENT_BUFFER_SIZE = 1000
TRUE_WORDS = frozenset(("1", "true", "yes", "on", "y", "t"))
FALSE_WORDS = frozenset(("0", "false", "no", "off", "n", "none", ""))
# 💎🧩⚙️ ... __ALL__ ...
__all__ = ['TRequest', 'TUploadedFile', 'TResponse', 'TApplication', 'req', 'req_int', 'req_float', 'req_bool']
# ---
def _group_multi(pairs: Iterable[Tuple[str, Any]]) -> Dict[str, List[Any]]:
    """Повторяющиеся ключи (checkbox-группы, multiple select, несколько файлов) собираются в списки."""
    values: Dict[str, List[Any]] = {}
    for key, value in pairs:
        values.setdefault(key, []).append(value)
    return values
# ---
def _as_lists(mapping: Dict[str, Any] | None) -> Dict[str, List[Any]]:
    """{"c": ["r", "g"], "x": "1"} → {"c": ["r", "g"], "x": ["1"]}."""
    return {key: list(value) if isinstance(value, (list, tuple)) else [value]
            for key, value in (mapping or {}).items()}
# ---
def _first_values(lists: Dict[str, List[Any]]) -> Dict[str, Any]:
    return {key: values[0] for key, values in lists.items() if values}
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TUploadedFile — файл из multipart-запроса
# ----------------------------------------------------------------------------------------------------------------------
@dataclass
class TUploadedFile:
    filename: str
    content_type: str
    data: bytes
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TRequest — контейнер запроса: query, form, files, заголовки
# ----------------------------------------------------------------------------------------------------------------------
class TRequest:
    def __init__(self):
        """
        query / form / files: первое значение каждого ключа.
        query_lists / form_lists / file_lists: все значения в порядке прихода.
        """
        self.method: str = "GET"
        self.path: str = "/"
        self.query_string: str = ""
        self.query: Dict[str, str] = {}
        self.query_lists: Dict[str, List[str]] = {}
        self.form: Dict[str, str] = {}
        self.form_lists: Dict[str, List[str]] = {}
        self.files: Dict[str, TUploadedFile] = {}
        self.file_lists: Dict[str, List[TUploadedFile]] = {}
        self.headers: Dict[str, str] = {}
        self.cookies: Dict[str, str] = {}
        self.remote: str = ""
        self.user_agent: str = ""
        self.user_name: str = ""

    def set_query(self, lists: Dict[str, List[str]]):
        self.query_lists = lists
        self.query = _first_values(lists)

    def set_form(self, lists: Dict[str, List[str]]):
        self.form_lists = lists
        self.form = _first_values(lists)

    def set_files(self, lists: Dict[str, List[TUploadedFile]]):
        self.file_lists = lists
        self.files = _first_values(lists)

    @classmethod
    def from_url(cls, url: str, form: Dict[str, str | List[str]] | None = None,
                 files: Dict[str, TUploadedFile | List[TUploadedFile]] | None = None,
                 remote: str = "127.0.0.1", user_agent: str = "", user_name: str = "") -> "TRequest":
        """Запрос без сервера: CLI-режим и тесты. С form/files это POST; значение-список = повторяющийся ключ."""
        request = cls()
        parts = urlsplit(url)
        request.path = unquote(parts.path) or "/"
        request.query_string = parts.query
        request.set_query(_group_multi(parse_qsl(parts.query, keep_blank_values=True)))
        request.set_form(_as_lists(form))
        request.set_files(_as_lists(files))
        request.method = "POST" if form is not None or files else "GET"
        request.remote = remote
        request.user_agent = user_agent
        request.user_name = user_name
        return request

    @classmethod
    async def from_aiohttp(cls, http_request) -> "TRequest":
        """Тело больше client_max_size: post() бросает web.HTTPRequestEntityTooLarge."""
        from aiohttp import web

        request = cls()
        request.method = http_request.method
        request.path = http_request.rel_url.path or "/"
        request.query_string = http_request.rel_url.query_string
        request.set_query(_group_multi(http_request.rel_url.query.items()))
        request.headers = dict(http_request.headers)
        request.cookies = dict(http_request.cookies)
        request.remote = http_request.remote or ""
        request.user_agent = http_request.headers.get("User-Agent", "")
        if http_request.method == "POST":
            # post() разбирает и urlencoded, и multipart
            data = await http_request.post()
            pairs, uploads = [], []
            for key, value in data.items():
                if isinstance(value, web.FileField):
                    uploads.append((key, TUploadedFile(value.filename or "", value.content_type or "",
                                                       value.file.read())))
                elif isinstance(value, (bytes, bytearray)):
                    pairs.append((key, bytes(value).decode("utf-8", errors="replace")))
                else:
                    pairs.append((key, str(value)))
            request.set_form(_group_multi(pairs))
            request.set_files(_group_multi(uploads))
        return request
    # ---
    @property
    def path_and_query(self) -> str:
        return f"{self.path}?{self.query_string}" if self.query_string else self.path

    def get(self, key: str, default: str | None = None) -> str | None:
        """Сначала form, затем query."""
        if key in self.form:
            return self.form[key]
        return self.query.get(key, default)

    def get_all(self, key: str) -> List[str]:
        """Все значения ключа: из form, а если там нет, из query."""
        if key in self.form_lists:
            return list(self.form_lists[key])
        return list(self.query_lists.get(key, ()))

    def get_files(self, key: str) -> List[TUploadedFile]:
        return list(self.file_lists.get(key, ()))

    def __getitem__(self, key: str) -> str:
        """request['page'] → значение или пустая строка."""
        return self.get(key, "")

    def user_key(self, option_data_provider=None) -> str:
        """Ключ реестра экземпляров форм: remote#user#agent."""
        user_name = getattr(option_data_provider, "user_name", None) or self.user_name
        return f"{self.remote}#{user_name}#{self.user_agent}"

    def __repr__(self):
        return f"<TRequest {self.method} {self.path_and_query} form={len(self.form)} files={len(self.files)}>"
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TResponse
# ----------------------------------------------------------------------------------------------------------------------
class TResponse:
    def __init__(self):
        """body: str (html, json) или bytes (содержимое файла)."""
        self.status = 200
        self.headers: Dict[str, str] = {}
        self.body: str | bytes = ""
        self.content_type = "text/html"
        self.charset: str | None = "utf-8"

    @property
    def is_redirected(self) -> bool:
        return "Location" in self.headers

    def redirect(self, url: str, status: int = 303):
        """После успешного post back переход по url; страница не рендерится."""
        self.status = status
        self.headers["Location"] = url
        self.body = ""
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TApplication — страницы, события, экземпляры форм, хостинг
# ----------------------------------------------------------------------------------------------------------------------
class TApplication(TOwnerObject):
    _instance = None

    # ⚡🛠️ ▸ __init__
    def __init__(self):
        if TApplication._instance is not None:
            raise RuntimeError("TApplication is a singleton. Use TApplication.app() instead.")
        super().__init__(Owner=None, Name="Application")
        TApplication._instance = self
        self.args = None
        self.mode = ""
        self.request = TRequest()
        self.start_time = datetime.now()
        # Каталог страниц: путь → фабрика страницы
        self.Pages: Dict[str, Callable[[], Any]] = {}
        # Endpoints: lookup-подсказки, файлы
        self.Endpoints: List[Any] = []
        # События
        self._subscriptions = TSubscriptionIndex()
        self._event_buffer: List[TEvent] = []
        self._events_processed = 0
        # Реестр экземпляров форм: user_key → выданные instance id (старые первыми)
        self.form_instances: Dict[str, List[str]] = {}
        self._form_instances_lock = threading.Lock()
        self.log("__init__", "application created")
        # ⚡🛠️ TApplication ▸ End of __init__
    # --- Singleton access ---
    @staticmethod
    def app() -> "TApplication":
        if TApplication._instance is None:
            TApplication()
        return TApplication._instance

    @staticmethod
    def reset():
        """Забывает singleton (тесты, повторный старт)."""
        TApplication._instance = None
    # ------------------------------------------------------------------------------------------------------------------
    # 🧭 Страницы
    # ------------------------------------------------------------------------------------------------------------------
    def add_page(self, path: str, factory: Callable[[], Any]):
        """Фабрика вызывается на каждый запрос: страница живёт один цикл."""
        self.Pages[path] = factory
        self.log("add_page", f"🧭 page '{path}' added")

    def find_page(self, path: str):
        factory = self.Pages.get(path) or self.Pages.get(path.rstrip("/") or "/")
        return factory() if factory else None
    # ------------------------------------------------------------------------------------------------------------------
    # 🔌 Endpoints: подсказки lookup-полей, файлы
    # ------------------------------------------------------------------------------------------------------------------
    def add_endpoint(self, endpoint):
        """endpoint: matches(request) → bool, process(request) → TResponse. Проверяются до страниц."""
        self.Endpoints.append(endpoint)
        self.log("add_endpoint", f"🔌 {endpoint!r} added")
        return endpoint

    def find_endpoint(self, request: TRequest):
        for endpoint in self.Endpoints:
            if endpoint.matches(request):
                return endpoint
        return None

    def dispatch(self, request: TRequest) -> TResponse | None:
        """Endpoint, затем страница; None: ни того, ни другого."""
        endpoint = self.find_endpoint(request)
        if endpoint is not None:
            self.request = request
            return endpoint.process(request)
        page = self.find_page(request.path)
        if page is None:
            return None
        return self.process(page, request)

    def process(self, page, request: TRequest) -> TResponse:
        """
        Полный цикл:
            create_child_controls → handle_events → render (если не было redirect)
        """
        self.request = request
        response = TResponse()
        page.create_child_controls(request)
        page.handle_events(request, response)
        if response.is_redirected:
            self.debug("process", f"redirect → {response.headers['Location']}")
            return response
        html = THtmlWriter()
        page.render(html)
        response.body = html.html()
        self.handle_event(create_render_event(TEventType.PAGE_RENDERED, page.Name, len(response.body)), page)
        return response
    # ------------------------------------------------------------------------------------------------------------------
    # 📡 События
    # ------------------------------------------------------------------------------------------------------------------
    def subscribe(self, target_id: str, event_type: TEventType, handler: Callable[[TEvent, Any], Any],
                  **filters) -> TSubscription:
        """Подписывает handler(event, sender) на события типа event_type с фильтрами по payload."""
        subscription = TSubscription(target_id=target_id, event_type=event_type, handler=handler, filters=filters)
        self._subscriptions.add(subscription)
        self.log("subscribe", f"{target_id} -> {event_type.value} {filters}")
        return subscription

    def unsubscribe(self, target_id: str, event_type: TEventType | None = None) -> int:
        removed = self._subscriptions.remove_by_target(target_id, event_type)
        self.log("unsubscribe", f"{target_id} from {event_type.value if event_type else 'all events'}: {removed}")
        return removed

    def handle_event(self, event: TEvent, sender=None) -> int:
        """Уведомляет подписчиков; возвращает число вызванных handler'ов. Ошибки handler'ов не глушатся."""
        self._event_buffer.append(event)
        if len(self._event_buffer) > EVENT_BUFFER_SIZE:
            self._event_buffer.pop(0)
        matching_subs = self._subscriptions.find(event)
        for sub in matching_subs:
            sub.handler(event, sender)
        self._events_processed += 1
        if self._events_processed % 1000 == 0:
            self.log("handle_event", f"processed {self._events_processed} events")
        return len(matching_subs)

    def get_event_history(self, limit: int = 100) -> List[TEvent]:
        return self._event_buffer[-limit:]
    # ------------------------------------------------------------------------------------------------------------------
    # 🎫 Экземпляры форм
    # ------------------------------------------------------------------------------------------------------------------
    def issue_form_instance(self, user_key: str) -> str:
        """
        Новый одноразовый id; на пользователя хранится не больше FORM_INSTANCE_LIMIT.
        Пользователей не больше FORM_INSTANCE_USERS: вытесняется тот, кто дольше всех не получал форм.
        """
        instance_id = uuid.uuid4().hex
        limit = max(1, _key_int("FORM_INSTANCE_LIMIT", 64))
        user_limit = max(1, _key_int("FORM_INSTANCE_USERS", 10000))
        with self._form_instances_lock:
            # pop + вставка: ключ уходит в конец порядка вытеснения
            instances = self.form_instances.pop(user_key, [])
            instances.append(instance_id)
            del instances[:-limit]
            self.form_instances[user_key] = instances
            while len(self.form_instances) > user_limit:
                evicted_key = next(iter(self.form_instances))
                del self.form_instances[evicted_key]
                self.debug("issue_form_instance", f"user key {evicted_key!r} evicted")
        return instance_id

    def consume_form_instance(self, user_key: str, instance_id: str) -> bool:
        """Пустой список удаляется вместе с ключом пользователя."""
        with self._form_instances_lock:
            instances = self.form_instances.get(user_key)
            if not instances or instance_id not in instances:
                return False
            instances.remove(instance_id)
            if not instances:
                del self.form_instances[user_key]
            return True
    # ------------------------------------------------------------------------------------------------------------------
    # 🌐 HTTP: aiohttp-обработчик и сервер
    # ------------------------------------------------------------------------------------------------------------------
    async def handle(self, http_request):
        """aiohttp-обработчик: статика → 204, endpoint / страница → ответ, слишком большое тело → 413, ошибка → 500."""
        from aiohttp import web

        url = http_request.rel_url.path
        if url.endswith(STATIC_SUFFIXES) and http_request.method != "POST":
            static_request = TRequest.from_url(str(http_request.rel_url))
            if self.find_endpoint(static_request) is None:
                self.debug("handle", f"⏭ static {url} → 204")
                return web.Response(status=204)
        try:
            request = await TRequest.from_aiohttp(http_request)
            response = self.dispatch(request)
            if response is None:
                self.log("handle", f"⚠️ page '{request.path}' not found")
                return web.Response(status=404, text="<h2>404 Not Found</h2>", content_type="text/html",
                                    charset="utf-8")
        except web.HTTPRequestEntityTooLarge as e:
            self.log("handle", f"⚠️ {url}: request body too large ({e.text})")
            return web.Response(status=413, text="<h2>413 Request Entity Too Large</h2>", content_type="text/html",
                                charset="utf-8")
        except Exception as e:
            recent = ", ".join(event.type.value for event in self.get_event_history(5))
            self.log("handle", f"🔥 {type(e).__name__}: {e} (recent events: {recent or '-'})")
            tb = escape(traceback.format_exc())
            html = f"<h2>🔥 Render error</h2><pre>{escape(str(e))}</pre><hr><pre>{tb}</pre>"
            return web.Response(status=500, text=html, content_type="text/html", charset="utf-8")
        if response.is_redirected:
            return web.Response(status=response.status, headers=response.headers)
        if isinstance(response.body, bytes):
            return web.Response(status=response.status, headers=response.headers, body=response.body,
                                content_type=response.content_type, charset=response.charset)
        return web.Response(status=response.status, headers=response.headers, text=response.body,
                            content_type=response.content_type, charset=response.charset)

    def make_web_app(self):
        """client_max_size из MAX_REQUEST_SIZE: тело больше лимита даёт 413."""
        from aiohttp import web

        app = web.Application(client_max_size=max(1024, _key_int("MAX_REQUEST_SIZE", 64 * 1024 * 1024)))
        app.router.add_get("/{tail:.*}", self.handle)
        app.router.add_post("/{tail:.*}", self.handle)
        return app

    async def run_web_server(self, host: str | None = None, port: int | None = None):
        """HTTP-сервер: каждая страница собирается заново на каждый запрос."""
        from aiohttp import web

        host = host or _key("WEB_HOST", "0.0.0.0")
        port = port or _key_int("WEB_PORT", 8081)
        runner = web.AppRunner(self.make_web_app())
        await runner.setup()
        site = web.TCPSite(runner, host, port)
        await site.start()
        self.log("run_web_server", f"✅ Listening on http://{host}:{port}")
        try:
            while True:
                await asyncio.sleep(3600)
        finally:
            await runner.cleanup()
    # ------------------------------------------------------------------------------------------------------------------
    # 🚀 Start Application
    # ------------------------------------------------------------------------------------------------------------------
    def detect_mode(self, argv: List[str] | None = None) -> str:
        """
        Режим запуска:
        - cli    → запуск с параметром --url (страница печатается в stdout)
        - server → обычный запуск или --serve
        """
        parser = argparse.ArgumentParser()
        parser.add_argument("--url", help="CLI mode: render one page by URL to stdout")
        parser.add_argument("--serve", action="store_true", help="Run internal web server")
        parser.add_argument("--host", help="Bind host (WEB_HOST)")
        parser.add_argument("--port", type=int, help="Bind port (WEB_PORT)")
        args, _ = parser.parse_known_args(argv)
        self.args = args
        self.mode = "cli" if args.url else "server"
        self.debug("detect_mode", f"🔍 mode={self.mode}")
        return self.mode

    def render_url(self, url: str) -> str:
        request = TRequest.from_url(url)
        response = self.dispatch(request)
        if response is None:
            self.fail("render_url", f"page '{request.path}' not found", LookupError)
        if isinstance(response.body, bytes):
            return response.body.decode(response.charset or "utf-8", errors="replace")
        return response.body

    async def start(self, argv: List[str] | None = None):
        mode = self.detect_mode(argv)
        if mode == "cli":
            print(self.render_url(self.args.url))
            return
        init_log_router()
        try:
            await self.run_web_server(self.args.host, self.args.port)
        finally:
            stop_log_router()

    def __repr__(self):
        last = self.get_event_history(1)
        last_event = last[0].type.value if last else "-"
        return (f"<TApplication pages={len(self.Pages)} endpoints={len(self.Endpoints)} "
                f"subscriptions={len(self._subscriptions)} last_event={last_event}>")
# ----------------------------------------------------------------------------------------------------------------------
# 🔎 req*: параметры текущего запроса
# ----------------------------------------------------------------------------------------------------------------------
def req(key: str, default: str = "") -> str:
    """Возвращает строковый параметр из текущего запроса (form, затем query)."""
    value = TApplication.app().request.get(key)
    return str(default) if value is None else value

def req_int(key: str, default: int = 0) -> int:
    """Возвращает параметр как int (при ошибке default)."""
    try:
        return int(float(req(key, str(default))))
    except (ValueError, OverflowError):
        return int(default)

def req_float(key: str, default: float = 0.0) -> float:
    """Возвращает параметр как float (при ошибке default)."""
    try:
        return float(req(key, str(default)))
    except ValueError:
        return float(default)

def req_bool(key: str, default: bool = False) -> bool:
    """Слова из TRUE_WORDS и FALSE_WORDS; остальное даёт default."""
    word = req(key, "1" if default else "0").strip().lower()
    return word in TRUE_WORDS if word in TRUE_WORDS | FALSE_WORDS else bool(default)
# ======================================================================================================================
# 📁🌄 tf_application.py 🜂 The End — See You Next Session 2025
# ======================================================================================================================
