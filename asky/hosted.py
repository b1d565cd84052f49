"""Hosted backend: prompts driven by an external frame loop.

This module provides:
- TextNode / SceneNode: the minimal scene graph prompts are drawn into
- HostedRenderer: Renderer that builds a fresh list of styled text nodes
- DeferredQueue: the lock-protected list of pending scene mutations
- HostedBackend: per-frame adapter (tick) that feeds keys and draws prompts
- Asky: async facade returning one-shot futures (listen / clear / delay)

The host owns the frame loop and calls ``HostedBackend.tick()`` once per
frame. Nothing here blocks. Async callers await the futures returned by
``Asky``; they resolve during a tick.

Example:
    backend = HostedBackend()
    asky = Asky(backend)
    node = SceneNode("question")

    async def flow() -> None:
        name = await asky.listen(Text(message="Name?"), node)
        await asky.delay(1.0)
        await asky.clear(node)

    # host frame loop
    backend.feed(KeyEvent.text("Ada"))
    backend.tick()
"""

from __future__ import annotations

import asyncio
import logging
import threading
import time
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Iterable, TypeVar

from rich.style import Style as TextStyle
from rich.text import Text as RichText

from .config import AskyConfig
from .errors import AskyError, Cancel
from .keys import KeyEvent
from .prompts import (
    Confirm,
    Message,
    MultiSelect,
    Number,
    Password,
    Prompt,
    Select,
    Text,
    Toggle,
)
from .renderer import DrawTime, Renderer, cell_width
from .style import Theme

logger = logging.getLogger(__name__)

T = TypeVar("T")

SUPPORTED_PROMPTS = (Confirm, Toggle, Text, Password, Number, Select, MultiSelect, Message)

CURSOR_STYLE = TextStyle(reverse=True)


@dataclass
class TextNode:
    """One styled run of text. ``cursor`` marks the cell under the cursor."""

    text: str
    style: TextStyle | None = None
    cursor: bool = False


@dataclass(eq=False)
class SceneNode:
    """A container whose children are owned by whichever prompt draws into it."""

    name: str = ""
    children: list[TextNode] = field(default_factory=list)

    def replace_children(self, children: Iterable[TextNode]) -> None:
        self.children = list(children)

    def despawn_children(self) -> None:
        self.children = []

    def plain(self) -> str:
        return "".join(child.text for child in self.children)

    def to_text(self) -> RichText:
        """Render the children as a rich Text (cursor cell in reverse video)."""
        text = RichText()
        for child in self.children:
            style = child.style
            if child.cursor:
                style = style + CURSOR_STYLE if style is not None else CURSOR_STYLE
            text.append(child.text, style=style)
        return text


class HostedRenderer(Renderer):
    """Collects each frame as a list of TextNodes instead of writing bytes."""

    def __init__(self, theme: Theme | None = None) -> None:
        super().__init__(theme)
        self.nodes: list[TextNode] = []
        self.rows = 0
        self._cursor_at: tuple[int, int] | None = None

    def _pre_prompt(self) -> None:
        self.nodes = []
        self._cursor_at = None

    def _emit(self, text: str, style: TextStyle | None) -> None:
        self.nodes.append(TextNode(text, style))

    def _post_prompt(self, rows: int) -> None:
        self.rows = rows
        if self._cursor_at is not None and self.cursor_visible:
            self._split_cursor(*self._cursor_at)

    def _place_cursor(self, row: int, col: int) -> None:
        self._cursor_at = (row, col)

    def _set_cursor_visible(self, visible: bool) -> None:
        pass

    def _split_cursor(self, row: int, col: int) -> None:
        """Isolate the cell at (row, col) into its own cursor node."""
        r = c = 0
        for index, node in enumerate(self.nodes):
            for i, ch in enumerate(node.text):
                if r == row and c >= col:
                    pieces = []
                    if i:
                        pieces.append(TextNode(node.text[:i], node.style))
                    if ch == "\n":
                        pieces.append(TextNode(" ", cursor=True))
                        rest = node.text[i:]
                    else:
                        pieces.append(TextNode(ch, node.style, cursor=True))
                        rest = node.text[i + 1 :]
                    if rest:
                        pieces.append(TextNode(rest, node.style))
                    self.nodes[index : index + 1] = pieces
                    return
                if ch == "\n":
                    r += 1
                    c = 0
                else:
                    c += cell_width(ch)
        self.nodes.append(TextNode(" ", cursor=True))


class AskyState(Enum):
    """Where a hosted prompt is in its lifecycle."""

    READING = "reading"
    WAITING = "waiting"
    COMPLETE = "complete"


@dataclass(eq=False)
class PromptSession:
    prompt: Prompt[Any]
    node: SceneNode
    future: asyncio.Future[Any]
    renderer: HostedRenderer
    state: AskyState = AskyState.READING


Mutation = Callable[["HostedBackend"], None]


@dataclass(eq=False)
class Deferred:
    """One pending mutation, the one-shot it settles and the node it targets."""

    mutation: Mutation
    future: asyncio.Future[Any]
    node: SceneNode | None = None


class DeferredQueue:
    """Pending scene mutations, pushed by async callers, drained by tick()."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._items: list[Deferred] = []

    def push(
        self, mutation: Mutation, future: asyncio.Future[Any], node: SceneNode | None = None
    ) -> None:
        with self._lock:
            self._items.append(Deferred(mutation, future, node))

    def drain(self) -> list[Deferred]:
        with self._lock:
            items, self._items = self._items, []
        return items

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)


def _settle(future: asyncio.Future[Any], result: Any = None, error: BaseException | None = None) -> None:
    """Resolve ``future`` once, from whichever thread the host ticks on."""

    def apply() -> None:
        if future.done():
            return
        if error is not None:
            future.set_exception(error)
        else:
            future.set_result(result)

    if future.done():
        return
    loop = future.get_loop()
    try:
        running = asyncio.get_running_loop()
    except RuntimeError:
        running = None
    if running is loop:
        apply()
    else:
        loop.call_soon_threadsafe(apply)


class HostedBackend:
    """Frame-driven prompt adapter.

    Each ``tick()``:
        1. gives prompts that finished last frame their Last draw
        2. applies deferred mutations (new sessions, clears, timers)
        3. fires elapsed delays
        4. dispatches this frame's key events to reading prompts and
           resolves the one-shot of any prompt that submits or cancels
        5. redraws every prompt still reading

    A prompt only receives input once it has been drawn at least once.
    A node has at most one live prompt: a deferred ``listen`` or ``clear``
    targeting a node evicts the prompt still reading there, rejecting its
    one-shot with Cancel.
    """

    def __init__(
        self,
        config: AskyConfig | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.config = config or AskyConfig.from_env()
        self.theme = self.config.theme()
        self.queue = DeferredQueue()
        self.frame = 0
        self._clock = clock
        self._sessions: list[PromptSession] = []
        self._timers: list[tuple[float, asyncio.Future[None]]] = []
        self._events: deque[KeyEvent] = deque()

    @property
    def sessions(self) -> list[PromptSession]:
        return list(self._sessions)

    def feed(self, event: KeyEvent) -> None:
        """Queue a key event for the next frame."""
        self._events.append(event)

    def tick(self) -> None:
        self.frame += 1
        # Last draws come first so mutations queued by resumed callers win.
        for session in [s for s in self._sessions if s.state is AskyState.WAITING]:
            self._finish(session)
        self._apply_deferred()
        self._fire_timers()

        events = []
        while self._events:
            events.append(self._events.popleft())
        for session in self._sessions:
            if session.state is AskyState.READING:
                self._dispatch(session, events)

        for session in self._sessions:
            if session.state is AskyState.READING:
                self._draw(session)

    async def run_until(self, future: asyncio.Future[T], interval: float = 0.0) -> T:
        """Tick on the running loop until ``future`` resolves, then return it.

        The Last draw of a prompt that resolved ``future`` happens on the
        following tick.
        """
        while not future.done():
            self.tick()
            await asyncio.sleep(interval)
        return future.result()

    def close(self) -> None:
        """Reject every outstanding one-shot and drop all pending work."""
        for item in self.queue.drain():
            _settle(item.future, error=Cancel())
        for session in self._sessions:
            session.prompt.cancel()
            _settle(session.future, error=Cancel())
        for _, future in self._timers:
            _settle(future, error=Cancel())
        self._sessions.clear()
        self._timers.clear()
        self._events.clear()

    # -- mutations applied during a tick --

    def start_session(
        self, prompt: Prompt[Any], node: SceneNode, future: asyncio.Future[Any]
    ) -> PromptSession:
        renderer = HostedRenderer(self.theme)
        if prompt.hides_cursor:
            renderer.hide_cursor()
        session = PromptSession(prompt, node, future, renderer)
        self._sessions.append(session)
        logger.debug("hosted prompt started: %s on %r", type(prompt).__name__, node.name)
        return session

    def start_timer(self, seconds: float, future: asyncio.Future[None]) -> None:
        self._timers.append((self._clock() + seconds, future))

    def _apply_deferred(self) -> None:
        items = self.queue.drain()
        if items:
            logger.debug("frame %d: applying %d deferred mutation(s)", self.frame, len(items))
        for item in items:
            if item.node is not None:
                self._evict(item.node)
            item.mutation(self)

    def _evict(self, node: SceneNode) -> None:
        for session in [s for s in self._sessions if s.node is node]:
            logger.debug("hosted prompt evicted from %r: %s", node.name, type(session.prompt).__name__)
            session.prompt.cancel()
            _settle(session.future, error=Cancel())
            self._sessions.remove(session)

    def _fire_timers(self) -> None:
        now = self._clock()
        pending = []
        for deadline, future in self._timers:
            if deadline <= now:
                _settle(future)
            else:
                pending.append((deadline, future))
        self._timers = pending

    def _dispatch(self, session: PromptSession, events: list[KeyEvent]) -> None:
        prompt = session.prompt
        if session.future.cancelled():
            prompt.cancel()
        elif session.renderer.draw_time() is DrawTime.FIRST:
            # Not on screen yet; input this frame is not meant for it.
            return
        for event in events:
            if prompt.done:
                break
            if prompt.will_handle_key(event):
                prompt.handle_key(event)
        if prompt.done:
            self._resolve(session)

    def _resolve(self, session: PromptSession) -> None:
        prompt = session.prompt
        name = type(prompt).__name__
        session.state = AskyState.WAITING
        if prompt.cancelled:
            logger.debug("hosted prompt cancelled: %s", name)
            _settle(session.future, error=Cancel())
            return
        try:
            value = prompt.value()
        except AskyError as exc:
            logger.debug("hosted prompt %s yielded error: %s", name, exc)
            _settle(session.future, error=exc)
            return
        logger.debug("hosted prompt submitted: %s", name)
        _settle(session.future, result=value)

    def _draw(self, session: PromptSession) -> None:
        renderer = session.renderer
        session.prompt.draw(renderer)
        session.node.replace_children(renderer.nodes)
        if renderer.draw_time() is DrawTime.FIRST:
            renderer.update_draw_time()

    def _finish(self, session: PromptSession) -> None:
        renderer = session.renderer
        while renderer.draw_time() is not DrawTime.LAST:
            renderer.update_draw_time()
        self._draw(session)
        session.state = AskyState.COMPLETE
        self._sessions.remove(session)


class Asky:
    """Async facade over a HostedBackend.

    Each call records a deferred mutation and returns a one-shot future that
    resolves during a later tick.
    """

    def __init__(self, backend: HostedBackend, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self.backend = backend
        self._loop = loop

    def _future(self) -> asyncio.Future[Any]:
        loop = self._loop or asyncio.get_running_loop()
        return loop.create_future()

    def listen(self, prompt: Prompt[T], node: SceneNode) -> asyncio.Future[T]:
        """Present ``prompt`` in ``node``; resolves with its value or Cancel."""
        if not isinstance(prompt, SUPPORTED_PROMPTS):
            raise TypeError(f"unsupported prompt type: {type(prompt).__name__}")
        future = self._future()
        self.backend.queue.push(
            lambda backend: backend.start_session(prompt, node, future), future, node
        )
        return future

    def clear(self, node: SceneNode) -> asyncio.Future[None]:
        """Despawn every child of ``node``."""
        future = self._future()

        def mutation(backend: HostedBackend) -> None:
            node.despawn_children()
            _settle(future)

        self.backend.queue.push(mutation, future, node)
        return future

    def delay(self, seconds: float) -> asyncio.Future[None]:
        """Resolve after ``seconds`` of backend clock time have passed."""
        future = self._future()
        self.backend.queue.push(lambda backend: backend.start_timer(seconds, future), future)
        return future
