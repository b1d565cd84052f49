"""Tests for the hosted backend in asky/hosted.py.

Covers:
- Session lifecycle across ticks (First draw, input, Last draw)
- One-shot resolution for submit, cancel and value errors
- clear() and delay() deferred mutations, node eviction and close()
- Cursor cell splitting in hosted frames
- DeferredQueue under concurrent producers
"""

from __future__ import annotations

import asyncio
import threading

import pytest

from asky.config import AskyConfig
from asky.errors import Cancel, InvalidValue
from asky.hosted import Asky, AskyState, DeferredQueue, HostedBackend, SceneNode
from asky.keys import Key, KeyEvent
from asky.prompts import Confirm, Number, Prompt, Text
from asky.renderer import Renderer

ENTER = KeyEvent.key(Key.ENTER)
ESCAPE = KeyEvent.key(Key.ESCAPE)


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def make_backend(clock: FakeClock | None = None) -> HostedBackend:
    config = AskyConfig(ascii=True)
    if clock is None:
        return HostedBackend(config)
    return HostedBackend(config, clock=clock)


class TestSessionLifecycle:
    """Tests for listen() across ticks."""

    async def test_confirm_round_trip(self) -> None:
        """Submit resolves in the key's frame; the Last draw lands next frame."""
        backend = make_backend()
        asky = Asky(backend)
        node = SceneNode("question")

        future = asky.listen(Confirm(message="Sure?"), node)
        assert node.children == []

        backend.tick()
        assert node.plain() == "[ ] Sure?\n No    Yes   \n"
        assert len(backend.sessions) == 1

        backend.feed(KeyEvent.char("y"))
        backend.tick()
        assert future.done()
        assert future.result() is True
        assert backend.sessions[0].state is AskyState.WAITING
        assert node.plain() == "[ ] Sure?\n No    Yes   \n"

        backend.tick()
        assert node.plain() == "[x] Sure? Yes\n"
        assert backend.sessions == []

    async def test_input_before_first_draw_is_dropped(self) -> None:
        backend = make_backend()
        asky = Asky(backend)
        future = asky.listen(Confirm(), SceneNode())
        backend.feed(KeyEvent.char("y"))
        backend.tick()
        assert not future.done()

    async def test_escape_rejects_with_cancel(self) -> None:
        backend = make_backend()
        asky = Asky(backend)
        node = SceneNode()
        future = asky.listen(Confirm(message="Sure?"), node)
        backend.tick()

        backend.feed(ESCAPE)
        backend.tick()
        assert isinstance(future.exception(), Cancel)

        backend.tick()
        assert node.plain() == "[x] Sure? ...\n"

    async def test_value_error_rejects_future(self) -> None:
        backend = make_backend()
        asky = Asky(backend)
        future = asky.listen(Number(kind="u8"), SceneNode())
        backend.tick()
        backend.feed(ENTER)
        backend.tick()
        assert isinstance(future.exception(), InvalidValue)

    async def test_cancelled_future_cancels_prompt(self) -> None:
        backend = make_backend()
        asky = Asky(backend)
        prompt = Confirm()
        future = asky.listen(prompt, SceneNode())
        backend.tick()
        future.cancel()
        backend.tick()
        assert prompt.cancelled
        backend.tick()
        assert backend.sessions == []

    async def test_keys_reach_every_reading_prompt(self) -> None:
        backend = make_backend()
        asky = Asky(backend)
        first = asky.listen(Confirm(), SceneNode("a"))
        second = asky.listen(Text(), SceneNode("b"))
        backend.tick()
        backend.feed(KeyEvent.char("n"))
        backend.tick()
        assert first.result() is False
        assert not second.done()
        assert backend.sessions[1].prompt.input.value == "n"

    async def test_unsupported_prompt(self) -> None:
        class Custom(Prompt[int]):
            message = "?"

            def _handle_key(self, event: KeyEvent) -> bool:
                return True

            def _draw(self, r: Renderer) -> int:
                return 0

            def _value(self) -> int:
                return 0

        with pytest.raises(TypeError):
            Asky(make_backend()).listen(Custom(), SceneNode())

    async def test_close_rejects_pending(self) -> None:
        backend = make_backend()
        asky = Asky(backend)
        future = asky.listen(Confirm(), SceneNode())
        backend.tick()
        backend.close()
        assert isinstance(future.exception(), Cancel)
        assert backend.sessions == []

    async def test_close_rejects_queued_mutations(self) -> None:
        """Calls not yet applied by a tick still resume their callers."""
        backend = make_backend()
        asky = Asky(backend)
        node = SceneNode()
        futures = [asky.listen(Confirm(), node), asky.clear(node), asky.delay(1.0)]
        backend.close()
        assert len(backend.queue) == 0
        for future in futures:
            assert isinstance(future.exception(), Cancel)

    async def test_events_fed_from_another_thread_are_kept(self) -> None:
        backend = make_backend()
        asky = Asky(backend)
        asky.listen(Text(), SceneNode())
        backend.tick()

        def producer() -> None:
            for _ in range(500):
                backend.feed(KeyEvent.char("a"))

        thread = threading.Thread(target=producer)
        thread.start()
        while thread.is_alive():
            backend.tick()
        thread.join()
        backend.tick()
        assert backend.sessions[0].prompt.input.value == "a" * 500


class TestDeferredMutations:
    """Tests for clear(), delay() and run_until()."""

    async def test_clear_despawns_children(self) -> None:
        backend = make_backend()
        asky = Asky(backend)
        node = SceneNode()
        asky.listen(Confirm(), node)
        backend.tick()
        assert node.children

        future = asky.clear(node)
        assert not future.done()
        backend.tick()
        assert future.done()
        assert node.children == []

    async def test_clear_evicts_live_prompt(self) -> None:
        """A prompt still reading in a cleared node is cancelled, not redrawn."""
        backend = make_backend()
        asky = Asky(backend)
        node = SceneNode()
        prompt = Confirm()
        answer = asky.listen(prompt, node)
        backend.tick()

        asky.clear(node)
        backend.tick()
        assert isinstance(answer.exception(), Cancel)
        assert prompt.cancelled
        assert backend.sessions == []
        backend.tick()
        assert node.children == []

    async def test_listen_replaces_prompt_in_same_node(self) -> None:
        backend = make_backend()
        asky = Asky(backend)
        node = SceneNode()
        first = asky.listen(Confirm(message="One?"), node)
        backend.tick()

        second = asky.listen(Confirm(message="Two?"), node)
        backend.tick()
        assert isinstance(first.exception(), Cancel)
        assert not second.done()
        assert [s.prompt.message for s in backend.sessions] == ["Two?"]
        assert node.plain().startswith("[ ] Two?")

    async def test_other_nodes_keep_their_prompts(self) -> None:
        backend = make_backend()
        asky = Asky(backend)
        keep = asky.listen(Confirm(), SceneNode("a"))
        backend.tick()
        asky.clear(SceneNode("b"))
        backend.tick()
        assert not keep.done()
        assert len(backend.sessions) == 1

    async def test_delay_uses_backend_clock(self) -> None:
        clock = FakeClock()
        backend = make_backend(clock)
        future = Asky(backend).delay(5.0)

        backend.tick()
        assert not future.done()
        clock.now = 4.9
        backend.tick()
        assert not future.done()
        clock.now = 5.0
        backend.tick()
        assert future.done()

    async def test_flow_with_run_until(self) -> None:
        """An async caller awaits a prompt, then clears its node."""
        backend = make_backend()
        asky = Asky(backend)
        node = SceneNode("name")

        async def flow() -> str:
            name = await asky.listen(Text(message="Name?"), node)
            await asky.clear(node)
            return name

        task = asyncio.create_task(flow())
        await asyncio.sleep(0)
        backend.tick()
        assert node.plain().startswith("[ ] Name?\n> ")

        backend.feed(KeyEvent.text("Ada"))
        backend.feed(ENTER)
        result = await backend.run_until(task)

        assert result == "Ada"
        assert node.children == []

    async def test_run_until_raises_cancel(self) -> None:
        backend = make_backend()
        asky = Asky(backend)
        future = asky.listen(Confirm(), SceneNode())
        backend.tick()
        backend.feed(KeyEvent.key(Key.INTERRUPT))
        with pytest.raises(Cancel):
            await backend.run_until(future)


class TestHostedCursor:
    """Tests for the cursor cell in hosted frames."""

    async def test_cursor_at_line_end_adds_space(self) -> None:
        backend = make_backend()
        node = SceneNode()
        Asky(backend).listen(Text(message="Name?"), node)
        backend.tick()
        assert node.plain() == "[ ] Name?\n>  \n"
        assert [c.text for c in node.children if c.cursor] == [" "]

    async def test_cursor_splits_character(self) -> None:
        backend = make_backend()
        node = SceneNode()
        Asky(backend).listen(Text(message="Name?"), node)
        backend.tick()
        backend.feed(KeyEvent.text("ab"))
        backend.feed(KeyEvent.key(Key.LEFT))
        backend.tick()
        assert node.plain() == "[ ] Name?\n> ab\n"
        assert [c.text for c in node.children if c.cursor] == ["b"]
        assert node.to_text().plain == node.plain()

    async def test_cursorless_prompt_has_no_cursor_cell(self) -> None:
        backend = make_backend()
        node = SceneNode()
        Asky(backend).listen(Confirm(), node)
        backend.tick()
        assert not any(c.cursor for c in node.children)


class TestDeferredQueue:
    """Tests for DeferredQueue."""

    async def test_drain_empties_queue(self) -> None:
        loop = asyncio.get_running_loop()
        node = SceneNode()
        queue = DeferredQueue()
        queue.push(lambda backend: None, loop.create_future())
        queue.push(lambda backend: None, loop.create_future(), node)
        assert len(queue) == 2
        items = queue.drain()
        assert [item.node for item in items] == [None, node]
        assert len(queue) == 0

    async def test_concurrent_pushes_are_all_kept(self) -> None:
        future = asyncio.get_running_loop().create_future()
        queue = DeferredQueue()

        def producer() -> None:
            for _ in range(200):
                queue.push(lambda backend: None, future)

        threads = [threading.Thread(target=producer) for _ in range(8)]
        for t in threads:
            t.start()
        drained = 0
        while any(t.is_alive() for t in threads):
            drained += len(queue.drain())
        for t in threads:
            t.join()
        drained += len(queue.drain())
        assert drained == 8 * 200
