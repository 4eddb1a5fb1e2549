# ======================================================================================================================
# 📁 file        : tf_logger.py — Rich LogRouter для Tradition Forms
# 🕒 created     : 13.10.2025 09:40
# 🎉 contains    : TLogRouter, LOG_ROUTER, format_log_line, route_line, LoggableComponent
# 🌅 project     : Tradition Forms 2025 🜂
# ======================================================================================================================
# 🚢 ...imports...
from __future__ import annotations
import threading
from collections import deque
from datetime import datetime
from typing import Callable, Deque, Dict, List
from rich.columns import Columns
from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.text import Text
# 💎 ... CONFIG / CONSTS ...
WINDOW_TITLES = {1: "Requests", 2: "Debug", 3: "Server"}
VISIBLE_LINES = 20
# 💎🧩⚙️ ... __ALL__ ...
__all__ = [
    'TLogRouter', 'LOG_ROUTER', 'init_log_router', 'stop_log_router',
    'format_log_line', 'route_line', 'LoggableComponent',
]
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 TLogRouter — лог-центр: окна-буферы, подписчики, Rich Live
# ----------------------------------------------------------------------------------------------------------------------
class TLogRouter:
    # ⚡🛠️ ▸ __init__
    def __init__(self, window_count: int = 3, refresh_rate: float = 0.5, buffer_size: int = 200, live: bool = True):
        """
        Окно 1: запросы и жизненный цикл страниц, 2: debug, 3: сервер.
        live=False: только буферы и подписчики (CLI и тесты).
        """
        self.console = Console()
        self.window_count = window_count
        self.refresh_rate = refresh_rate
        self.buffer_size = buffer_size
        self.buffers: Dict[int, Deque[str]] = {}
        self.lock = threading.Lock()
        self.stopped = threading.Event()
        # fn(message, window)
        self.subscribers: List[Callable[[str, int], None]] = []
        self.thread: threading.Thread | None = None
        if live:
            self.thread = threading.Thread(target=self._render_loop, name="TLogRouter", daemon=True)
            self.thread.start()
        # ⚡🛠️ TLogRouter ▸ End of __init__
    # ..................................................................................................................
    # 📡 API
    # ..................................................................................................................
    def _buffer(self, window: int) -> Deque[str]:
        buf = self.buffers.get(window)
        if buf is None:
            buf = self.buffers[window] = deque(maxlen=self.buffer_size)
        return buf

    def write(self, message: str, window: int = 1):
        with self.lock:
            self._buffer(window).append(message)
        for fn in list(self.subscribers):
            try:
                fn(message, window)
            except Exception as e:
                self.console.print(f"[TLogRouter.write] subscriber error: {e}")

    def lines(self, window: int = 1) -> List[str]:
        with self.lock:
            return list(self.buffers.get(window, ()))

    def add_subscriber(self, fn: Callable[[str, int], None]):
        if fn and fn not in self.subscribers:
            self.subscribers.append(fn)

    def stop(self):
        self.stopped.set()
        if self.thread is not None:
            self.thread.join(timeout=2)
    # ..................................................................................................................
    # 🎨 Render
    # ..................................................................................................................
    def _render_loop(self):
        with Live(self._layout(), console=self.console, refresh_per_second=max(1, int(1 / self.refresh_rate))) as live:
            while not self.stopped.wait(self.refresh_rate):
                live.update(self._layout())

    def _layout(self) -> Panel:
        with self.lock:
            panels = [
                Panel(Text("\n".join(list(self.buffers.get(i, ()))[-VISIBLE_LINES:]) or "(no logs)"),
                      title=WINDOW_TITLES.get(i, f"Window {i}"))
                for i in range(1, self.window_count + 1)
            ]
        return Panel(Columns(panels, expand=True), title="Tradition Forms Log Console")
# ----------------------------------------------------------------------------------------------------------------------
# 🌍 Global instance
# ----------------------------------------------------------------------------------------------------------------------
LOG_ROUTER: TLogRouter | None = None


def init_log_router(live: bool = True) -> TLogRouter:
    global LOG_ROUTER
    if LOG_ROUTER is None:
        LOG_ROUTER = TLogRouter(live=live)
    return LOG_ROUTER


def stop_log_router():
    global LOG_ROUTER
    if LOG_ROUTER is not None:
        LOG_ROUTER.stop()
        LOG_ROUTER = None
# ---
def format_log_line(who: str, function: str, msg: str) -> str:
    """[TF_1][12:00:01][Form1]create_child_controls(): ..."""
    from tf_sys import _key

    prefix = f"{_key('PROJECT_SYMBOL', 'TF')}_{_key('PROJECT_VERSION', '1')}"
    return f"[{prefix}][{datetime.now():%H:%M:%S}][{who}]{function}(): {msg}"
# ---
def route_line(text: str, window: int = 1):
    """В LOG_ROUTER, а без него в stdout (если LOG_ECHO=1)."""
    from tf_sys import _key

    if LOG_ROUTER is not None:
        LOG_ROUTER.write(text, window=window)
    elif _key('LOG_ECHO', '1') == '1':
        print(text, flush=True)
# ----------------------------------------------------------------------------------------------------------------------
# 🧩 LoggableComponent — log/debug для классов вне дерева владения
# ----------------------------------------------------------------------------------------------------------------------
class LoggableComponent:

    def log(self, function: str, *parts, window: int = 1):
        route_line(format_log_line(type(self).__name__, function, " ".join(map(str, parts))), window)

    def debug(self, function: str, *parts):
        from tf_sys import _key

        if _key("DEBUG_MODE", "0") == "1":
            route_line(format_log_line(type(self).__name__, function, "🔍 " + " ".join(map(str, parts))), 2)
# ======================================================================================================================
# 📁🌄 tf_logger.py 🜂 The End — See You Next Session 2025
# ======================================================================================================================
