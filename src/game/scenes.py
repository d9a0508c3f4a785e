# src/game/scenes.py
"""
Start -> Playing -> Lost -> Playing ...

Every scene is a plain state value. A transition function takes the
current state and one input event and returns (next_state, commands),
where commands are draw / sound requests for whatever front end is
attached. Nothing in here touches a window or a mixer.
"""
from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple, Type, Union

from .config import Tuning
from .effects import EffectKind
from .items import ItemKind
from .session import RunResult
from .simulation import Simulation


# --- input events ---

@dataclass(frozen=True)
class Tick:
    dt: float


@dataclass(frozen=True)
class JumpPressed:
    pass


Event = Union[Tick, JumpPressed]


# --- output commands ---

@dataclass(frozen=True)
class DrawSprite:
    name: str
    x: float
    y: float
    w: float
    h: float
    opacity: float = 1.0
    z: int = 0


@dataclass(frozen=True)
class DrawText:
    text: str
    x: float
    y: float
    size: int = 24
    color: str = "fg"
    anchor: str = "topleft"     # "topleft" | "topright" | "center"
    z: int = 100


@dataclass(frozen=True)
class PlaySound:
    name: str


Command = Union[DrawSprite, DrawText, PlaySound]


# --- states ---

@dataclass
class StartState:
    bird_y: float
    bob_dir: int = -1


@dataclass
class PlayingState:
    sim: Simulation


@dataclass
class LostState:
    result: RunResult


State = Union[StartState, PlayingState, LostState]

ITEM_SPRITES = {
    ItemKind.COIN: "coin",
    ItemKind.BOOST: "boost",
    ItemKind.PHASE: "phase",
}


def _ground(tuning: Tuning, offset: float = 0.0) -> List[Command]:
    w = tuning.ground_tile_w
    cmds: List[Command] = []
    x = -offset
    while x < tuning.width:
        cmds.append(DrawSprite("ground", x, tuning.ground_y, w, tuning.ground_height, z=10))
        x += w
    return cmds


def start_frame(state: StartState, tuning: Tuning) -> List[Command]:
    bird_w, bird_h = tuning.player_w * 1.5, tuning.player_h * 1.5
    return _ground(tuning) + [
        DrawText("FLAPPY RUSH", tuning.width / 2, tuning.height / 2 - 100, size=48, anchor="center"),
        DrawText("Press SPACE or Click to Start", tuning.width / 2, tuning.height / 2,
                 size=24, anchor="center"),
        DrawSprite("player", tuning.width / 2 - bird_w / 2, state.bird_y - bird_h / 2, bird_w, bird_h, z=20),
    ]


def playing_frame(sim: Simulation) -> List[Command]:
    """Everything the renderer needs for one Playing frame."""
    t, s, p = sim.tuning, sim.session, sim.player
    cmds: List[Command] = []
    for pipe in sim.pipes:
        cmds.append(DrawSprite("pipe", pipe.x, 0, pipe.width, pipe.top_height))
        cmds.append(DrawSprite("pipe", pipe.x, pipe.gap_bottom, pipe.width, pipe.bottom_height))
    for item in sim.items:
        half = item.size / 2
        cmds.append(DrawSprite(ITEM_SPRITES[item.kind], item.x - half, item.y - half, item.size, item.size, z=5))
    cmds.extend(_ground(t, s.ground_offset))
    cmds.append(DrawSprite("player", p.x, p.y, p.w, p.h, opacity=p.opacity, z=20))

    cmds.append(DrawText(f"Score: {s.score}", t.width - 20, 20, anchor="topright"))
    cmds.append(DrawText(f"Coins: {s.coins}", 20, 20, color="coin"))
    if s.effects.is_active(EffectKind.DOUBLE_SCORE):
        left = math.ceil(s.effects.remaining(EffectKind.DOUBLE_SCORE))
        cmds.append(DrawText(f"Double Points: {left}s", 20, 50, size=20, color="double"))
    if s.effects.is_active(EffectKind.PHASE):
        left = math.ceil(s.effects.remaining(EffectKind.PHASE))
        cmds.append(DrawText(f"Ghost Mode: {left}s", 20, 80, size=20, color="ghost"))
    cmds.append(DrawText(f"Speed: {round(s.speed)}", 20, 110, size=18, color="speed"))
    if s.in_stage:
        left = t.stage_duration - s.stage_counter
        cmds.append(DrawText(f"STRAIGHT LINE: {left} left", 20, 140, size=16, color="stage"))
    return cmds


def lost_frame(state: LostState, tuning: Tuning) -> List[Command]:
    cx, cy = tuning.width / 2, tuning.height / 2
    return _ground(tuning) + [
        DrawText("GAME OVER", cx, cy - 100, size=48, color="danger", anchor="center"),
        DrawText(f"Score: {state.result.score}", cx, cy, size=32, anchor="center"),
        DrawText(f"Coins: {state.result.coins}", cx, cy + 40, size=24, color="coin", anchor="center"),
        DrawText("Press SPACE or Click to Play Again", cx, cy + 80, size=20, anchor="center"),
    ]


# --- transitions ---

Transition = Tuple[State, List[Command]]


class SceneMachine:
    """Holds the current scene and feeds it events."""

    def __init__(self, tuning: Optional[Tuning] = None, seed: Optional[int] = None):
        self.tuning = tuning or Tuning()
        self.seed = seed
        self.runs = 0
        self.state: State = StartState(bird_y=self.tuning.height / 2 + 50)
        self._handlers: Dict[Type, Callable[[State, Event], Transition]] = {
            StartState: self._start,
            PlayingState: self._playing,
            LostState: self._lost,
        }

    @property
    def scene(self) -> str:
        return {StartState: "start", PlayingState: "playing", LostState: "lost"}[type(self.state)]

    def feed(self, event: Event) -> List[Command]:
        self.state, commands = self._handlers[type(self.state)](self.state, event)
        return commands

    def _new_run(self) -> PlayingState:
        # a fixed seed still gives each run its own layout
        seed = None if self.seed is None else self.seed + self.runs
        self.runs += 1
        return PlayingState(sim=Simulation(self.tuning, seed=seed))

    def _start(self, state: StartState, event: Event) -> Transition:
        if isinstance(event, JumpPressed):
            return self._new_run(), []
        t = self.tuning
        y = state.bird_y + state.bob_dir * t.menu_bob_speed * event.dt
        bob_dir = state.bob_dir
        if y <= t.menu_bob_min:
            bob_dir = 1
        if y >= t.menu_bob_max:
            bob_dir = -1
        nxt = StartState(bird_y=y, bob_dir=bob_dir)
        return nxt, start_frame(nxt, t)

    def _playing(self, state: PlayingState, event: Event) -> Transition:
        if isinstance(event, JumpPressed):
            return state, [PlaySound(name) for name in state.sim.jump()]
        tick = state.sim.step(event.dt)
        sounds: List[Command] = [PlaySound(name) for name in tick.sounds]
        if tick.lost:
            nxt = LostState(result=tick.result)
            return nxt, sounds + lost_frame(nxt, self.tuning)
        return state, sounds + playing_frame(state.sim)

    def _lost(self, state: LostState, event: Event) -> Transition:
        if isinstance(event, JumpPressed):
            return self._new_run(), []
        return state, lost_frame(state, self.tuning)
