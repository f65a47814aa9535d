from __future__ import annotations

from typing import Optional

from .core import Events, GameState, TetrisGame


class DropClock:
    """Gravity timer owned by whoever drives the game loop.

    The clock keeps a single pending deadline whose period is the session's
    drop interval. Call `sync` after every transition so a level-up
    reschedules it and a game-over cancels it; `advance` then reports how many
    ticks are due for the elapsed time.
    """

    def __init__(self) -> None:
        self.interval: Optional[float] = None
        self.elapsed = 0.0

    @property
    def active(self) -> bool:
        return self.interval is not None

    def sync(self, state: GameState) -> None:
        if state.drop_interval != self.interval:
            self.interval = state.drop_interval
            self.elapsed = 0.0

    def advance(self, elapsed_ms: float) -> int:
        if self.interval is None:
            return 0
        self.elapsed += elapsed_ms
        due = int(self.elapsed // self.interval)
        self.elapsed -= due * self.interval
        return due

    def drive(self, game: TetrisGame, elapsed_ms: float) -> Events:
        """Advance by `elapsed_ms`, apply due ticks to `game`, return their events."""
        self.sync(game.state)
        events: Events = ()
        for _ in range(self.advance(elapsed_ms)):
            _, emitted = game.tick(elapsed_ms)
            events += emitted
            previous = self.interval
            self.sync(game.state)
            if self.interval != previous:
                # Rescheduled or halted: leftover time does not carry over.
                break
        return events
