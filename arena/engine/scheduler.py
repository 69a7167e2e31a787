"""TickScheduler: drives the two periodic processes of the arena.

1. Attack-timer decay at a short fixed interval (state cleanup only).
2. Full-state ``gameUpdate`` broadcast at a fixed rate; this is the periodic
   resync beneath the incremental event stream.

Both loops run as tasks on the server's event loop, so a tick never
interleaves with a message handler mid-mutation.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from arena.core.events import GameEvent
    from arena.engine.game_engine import GameEngine

logger = logging.getLogger(__name__)


class TickScheduler:
    """Owns the decay and snapshot tasks."""

    def __init__(
        self,
        engine: GameEngine,
        publish: Callable[[list[GameEvent]], None],
    ) -> None:
        self._engine = engine
        self._publish = publish
        cfg = engine.config
        self._decay_ms = cfg.attack_tick_ms
        self._snapshot_interval = cfg.snapshot_interval
        self._tasks: list[asyncio.Task] = []
        self._snapshots_sent = 0

    @property
    def running(self) -> bool:
        return any(not t.done() for t in self._tasks)

    @property
    def snapshots_sent(self) -> int:
        return self._snapshots_sent

    # -- single ticks (also used directly by tests) --

    def run_decay_tick(self) -> None:
        self._engine.decay_attack_timers(self._decay_ms)

    def run_snapshot_tick(self) -> bool:
        """Broadcast one gameUpdate. Returns False when nobody is connected."""
        event = self._engine.snapshot_event()
        if event is None:
            return False
        self._publish([event])
        self._snapshots_sent += 1
        return True

    # -- lifecycle --

    def start(self) -> None:
        if self.running:
            return
        self._tasks = [
            asyncio.create_task(self._loop(self.run_decay_tick, self._decay_ms / 1000.0), name="attack-decay"),
            asyncio.create_task(self._loop(self.run_snapshot_tick, self._snapshot_interval), name="snapshot"),
        ]
        logger.info(
            "TickScheduler started (decay every %.0fms, snapshot every %.1fms)",
            self._decay_ms, self._snapshot_interval * 1000,
        )

    async def stop(self) -> None:
        tasks, self._tasks = self._tasks, []
        for task in tasks:
            task.cancel()
        for task in tasks:
            try:
                await task
            except asyncio.CancelledError:
                pass
        logger.info("TickScheduler stopped after %d snapshots.", self._snapshots_sent)

    @staticmethod
    async def _loop(tick: Callable[[], object], interval: float) -> None:
        loop = asyncio.get_running_loop()
        next_at = loop.time()
        while True:
            try:
                tick()
            except Exception:
                logger.exception("Tick %s failed", getattr(tick, "__name__", tick))
            # Fixed-rate schedule; skip missed slots instead of bursting to catch up
            next_at += interval
            now = loop.time()
            if next_at < now:
                next_at = now
            await asyncio.sleep(next_at - now)
