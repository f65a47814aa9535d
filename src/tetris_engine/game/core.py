from __future__ import annotations

import logging
import random
from dataclasses import dataclass, replace
from enum import Enum, IntEnum
from typing import List, Optional, Tuple

import numpy as np

from .grid import GameGrid
from .pieces import Piece, TetrominoType
from .rules import ScoringRules

logger = logging.getLogger(__name__)


class Action(IntEnum):
    START = 0
    MOVE_LEFT = 1
    MOVE_RIGHT = 2
    ROTATE = 3
    SOFT_DROP = 4
    HARD_DROP = 5
    TICK = 6


class Phase(Enum):
    NOT_STARTED = "not-started"
    RUNNING = "running"
    GAME_OVER = "game-over"


class EventKind(Enum):
    STARTED = "started"
    MOVED = "moved"
    ROTATED = "rotated"
    DROPPED = "dropped"
    HARD_DROPPED = "hardDropped"
    LOCKED = "locked"
    LINE_CLEARED = "lineCleared"
    TETRIS_CLEARED = "tetrisCleared"
    LEVELED_UP = "leveledUp"
    GAME_OVER = "gameOver"
    REJECTED = "rejected"


class RejectReason(Enum):
    NOT_RUNNING = "not-running"
    GAME_OVER = "game-over"
    COLLISION = "collision"


@dataclass(frozen=True)
class Event:
    kind: EventKind
    lines: int = 0
    reason: Optional[RejectReason] = None

    @property
    def accepted(self) -> bool:
        return self.kind is not EventKind.REJECTED

    @classmethod
    def rejected(cls, reason: RejectReason) -> "Event":
        return cls(EventKind.REJECTED, reason=reason)


Events = Tuple[Event, ...]


@dataclass
class GameConfig:
    width: int = 10
    height: int = 20
    random_seed: Optional[int] = None
    spawn_y: int = 0


@dataclass(frozen=True)
class GameState:
    """Read-only snapshot of one play session.

    `piece` is the falling piece with its top-left anchor at (`x`, `y`); it is
    never part of `grid` until it locks. `drop_interval` is None whenever the
    session is not running, which tells the clock owner to stop ticking.
    """

    grid: GameGrid
    piece: Optional[Piece] = None
    x: int = 0
    y: int = 0
    next_kind: Optional[TetrominoType] = None
    score: int = 0
    rows: int = 0
    level: int = 0
    drop_interval: Optional[float] = None
    started: bool = False
    game_over: bool = False

    @classmethod
    def initial(cls, config: Optional[GameConfig] = None) -> "GameState":
        config = config or GameConfig()
        return cls(grid=GameGrid.empty(config.width, config.height))

    @property
    def phase(self) -> Phase:
        if self.game_over:
            return Phase.GAME_OVER
        if self.started:
            return Phase.RUNNING
        return Phase.NOT_STARTED

    @property
    def running(self) -> bool:
        return self.phase is Phase.RUNNING

    def piece_cells(self) -> List[Tuple[int, int]]:
        if self.piece is None:
            return []
        return self.piece.cells_at(self.x, self.y)

    def board_with_piece(self) -> np.ndarray:
        # Overlay the falling piece as negative kind values
        state = self.grid.clone_state()
        if self.piece is not None and not self.game_over:
            for x, y in self.piece_cells():
                if self.grid.is_inside(x, y):
                    state[y, x] = -int(self.piece.kind)
        return state


def random_kind(rng: random.Random) -> TetrominoType:
    return rng.choice(list(TetrominoType))


def spawn_x(piece: Piece, width: int) -> int:
    return (width - piece.width) // 2


def _fits(state: GameState, piece: Piece, x: int, y: int) -> bool:
    return not state.grid.collides(piece.cells_at(x, y))


def start(state: GameState, rng: random.Random, rules: ScoringRules, config: GameConfig) -> Tuple[GameState, Events]:
    piece = Piece(random_kind(rng))
    fresh = GameState(
        grid=GameGrid.empty(config.width, config.height),
        piece=piece,
        x=spawn_x(piece, config.width),
        y=config.spawn_y,
        next_kind=random_kind(rng),
        drop_interval=rules.initial_drop_interval,
        started=True,
    )
    logger.debug("session started with %s, next %s", piece.kind.name, fresh.next_kind.name)
    return fresh, (Event(EventKind.STARTED),)


def try_move(state: GameState, direction: int) -> Tuple[GameState, Events]:
    assert state.piece is not None
    new_x = state.x + direction
    if not _fits(state, state.piece, new_x, state.y):
        return state, (Event.rejected(RejectReason.COLLISION),)
    return replace(state, x=new_x), (Event(EventKind.MOVED),)


def try_rotate(state: GameState) -> Tuple[GameState, Events]:
    assert state.piece is not None
    # No wall kicks: a rotation that would overlap anything is refused.
    rotated = state.piece.rotated(1)
    if not _fits(state, rotated, state.x, state.y):
        return state, (Event.rejected(RejectReason.COLLISION),)
    return replace(state, piece=rotated), (Event(EventKind.ROTATED),)


def soft_drop(state: GameState, rng: random.Random, rules: ScoringRules, config: GameConfig) -> Tuple[GameState, Events]:
    assert state.piece is not None
    if _fits(state, state.piece, state.x, state.y + 1):
        return replace(state, y=state.y + 1), (Event(EventKind.DROPPED),)
    locked, events = lock(state, rng, rules, config)
    return locked, (Event(EventKind.LOCKED),) + events


def hard_drop(state: GameState, rng: random.Random, rules: ScoringRules, config: GameConfig) -> Tuple[GameState, Events]:
    assert state.piece is not None
    new_y = state.y
    while _fits(state, state.piece, state.x, new_y + 1):
        new_y += 1
    locked, events = lock(replace(state, y=new_y), rng, rules, config)
    return locked, (Event(EventKind.HARD_DROPPED),) + events


def lock(state: GameState, rng: random.Random, rules: ScoringRules, config: GameConfig) -> Tuple[GameState, Events]:
    """Merge the falling piece, clear rows, score, and dispatch the next piece."""
    assert state.piece is not None and state.next_kind is not None
    events: List[Event] = []

    merged = state.grid.merged(state.piece_cells(), int(state.piece.kind))
    grid, cleared = merged.cleared()

    score, rows, level, interval = state.score, state.rows, state.level, state.drop_interval
    if cleared > 0:
        score += rules.score_for_lines(cleared, level)
        rows += cleared
        if cleared >= 4:
            events.append(Event(EventKind.TETRIS_CLEARED, lines=cleared))
        else:
            events.append(Event(EventKind.LINE_CLEARED, lines=cleared))
        logger.debug("cleared %d row(s) at level %d, score %d", cleared, level, score)
        new_level = rules.level_for_rows(rows)
        if new_level > level:
            level = new_level
            interval = rules.drop_interval_for_level(level)
            events.append(Event(EventKind.LEVELED_UP))
            logger.info("level up: %d (drop interval %.1f ms)", level, interval)

    piece = Piece(state.next_kind)
    x = spawn_x(piece, grid.width)
    game_over = grid.collides(piece.cells_at(x, config.spawn_y))
    if game_over:
        interval = None
        events.append(Event(EventKind.GAME_OVER))
        logger.info("game over: score %d, rows %d, level %d", score, rows, level)

    new_state = replace(
        state,
        grid=grid,
        piece=piece,
        x=x,
        y=config.spawn_y,
        next_kind=random_kind(rng),
        score=score,
        rows=rows,
        level=level,
        drop_interval=interval,
        game_over=game_over,
    )
    return new_state, tuple(events)


def step(
    state: GameState,
    action: Action,
    rng: random.Random,
    rules: Optional[ScoringRules] = None,
    config: Optional[GameConfig] = None,
) -> Tuple[GameState, Events]:
    """Apply one action and return the next snapshot with the events it emitted.

    Rejected actions return the very same `state` object together with a
    single `REJECTED` event carrying the reason.
    """
    rules = rules or ScoringRules()
    config = config or GameConfig(width=state.grid.width, height=state.grid.height)
    action = Action(action)

    if action == Action.START:
        return start(state, rng, rules, config)
    if state.game_over:
        return state, (Event.rejected(RejectReason.GAME_OVER),)
    if not state.started:
        return state, (Event.rejected(RejectReason.NOT_RUNNING),)

    if action == Action.MOVE_LEFT:
        return try_move(state, -1)
    if action == Action.MOVE_RIGHT:
        return try_move(state, 1)
    if action == Action.ROTATE:
        return try_rotate(state)
    if action == Action.HARD_DROP:
        return hard_drop(state, rng, rules, config)
    # SOFT_DROP and TICK behave identically
    return soft_drop(state, rng, rules, config)


class TetrisGame:
    """Holds the current snapshot for collaborators that prefer method calls.

    All rules live in `step`; this class only threads the latest state, the
    injected random source and the configuration through it.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.rng = rng if rng is not None else random.Random(self.config.random_seed)
        self.state = GameState.initial(self.config)
        self.last_events: Events = ()

    def step(self, action: Action) -> Tuple[GameState, Events]:
        self.state, self.last_events = step(self.state, action, self.rng, self.rules, self.config)
        return self.state, self.last_events

    def reset(self, seed: Optional[int] = None) -> Tuple[GameState, Events]:
        if seed is not None:
            self.rng.seed(seed)
        return self.start()

    def start(self) -> Tuple[GameState, Events]:
        return self.step(Action.START)

    def move(self, direction: int) -> Tuple[GameState, Events]:
        if direction == -1:
            return self.step(Action.MOVE_LEFT)
        if direction == 1:
            return self.step(Action.MOVE_RIGHT)
        raise ValueError(f"direction must be -1 or +1, got {direction!r}")

    def rotate(self) -> Tuple[GameState, Events]:
        return self.step(Action.ROTATE)

    def soft_drop(self) -> Tuple[GameState, Events]:
        return self.step(Action.SOFT_DROP)

    def hard_drop(self) -> Tuple[GameState, Events]:
        return self.step(Action.HARD_DROP)

    def tick(self, elapsed_ms: float = 0.0) -> Tuple[GameState, Events]:
        # The clock owner decides cadence from drop_interval; elapsed time
        # does not change what a single tick does.
        return self.step(Action.TICK)

    @property
    def game_over(self) -> bool:
        return self.state.game_over

    def get_state(self) -> np.ndarray:
        return self.state.board_with_piece()
