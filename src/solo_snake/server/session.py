"""One running game bound to its tick timer and connected renderers."""

from __future__ import annotations

import asyncio
import logging

from solo_snake.events import EventKind, GameEvent
from solo_snake.game import GameState, GameStateMachine
from solo_snake.timer import TickTimer

logger = logging.getLogger(__name__)

_CLIENT_QUEUE_SIZE = 1000

ACTIONS = ("start", "restart", "pause", "resume")


class GameSession:
    """Keeps the tick timer in step with the state machine.

    The timer runs only while the game is PLAYING and is recreated whenever
    the tick interval changes. All machine calls happen synchronously on the
    event loop, so input never interleaves with a tick. Every game event is
    fanned out to per-client queues drained by the WebSocket handlers.
    """

    def __init__(
        self,
        machine: GameStateMachine,
        queue_size: int = _CLIENT_QUEUE_SIZE,
    ) -> None:
        if queue_size < 1:
            raise ValueError("queue_size must be at least 1.")
        self.machine = machine
        self.queue_size = queue_size
        self.timer = TickTimer(self.machine.tick)
        self._clients: list[asyncio.Queue] = []
        self.machine.subscribe(self._on_event)

    @property
    def client_count(self) -> int:
        return len(self._clients)

    def apply(self, action: str) -> bool:
        """Run one of :data:`ACTIONS` against the machine."""
        if action not in ACTIONS:
            raise ValueError(f"Unknown action: {action!r}")
        return getattr(self.machine, action)()

    def handle_key(self, key: str) -> bool:
        return self.machine.handle_key(key)

    def snapshot(self) -> dict:
        return self.machine.snapshot()

    def connect(self) -> asyncio.Queue:
        """Register a renderer and return the queue its events arrive on.

        The first item is a full snapshot, queued in the same step as the
        registration so no event can fall between the two.
        """
        queue: asyncio.Queue = asyncio.Queue(maxsize=self.queue_size)
        queue.put_nowait({"event": "snapshot", "data": self.snapshot()})
        self._clients.append(queue)
        return queue

    def disconnect(self, queue: asyncio.Queue) -> None:
        if queue in self._clients:
            self._clients.remove(queue)

    def _on_event(self, event: GameEvent) -> None:
        if event.kind == EventKind.STATE:
            if self.machine.state == GameState.PLAYING:
                self.timer.start(self.machine.tick_interval_ms)
            else:
                self.timer.stop()
        elif event.kind == EventKind.SPEED and self.timer.running:
            self.timer.restart(self.machine.tick_interval_ms)

        payload = event.to_dict()
        for queue in list(self._clients):
            if queue.full():
                # Slow renderer: keep the newest events, drop the oldest.
                queue.get_nowait()
                logger.warning("Renderer queue full; dropped oldest event.")
            queue.put_nowait(payload)

    async def close(self) -> None:
        """Stop ticking and detach from the machine."""
        await self.timer.aclose()
        self.machine.unsubscribe(self._on_event)
        self._clients.clear()
        logger.info("Game session closed.")
