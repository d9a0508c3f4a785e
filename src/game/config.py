# src/game/config.py
from __future__ import annotations
from dataclasses import dataclass

# --- Display (reference viewport; everything below is expressed at this size) ---
WIDTH = 800
HEIGHT = 600
FPS = 60

# --- World / Physics ---
GRAVITY = 800.0             # px/s^2, downward positive
JUMP_IMPULSE = -220.0       # vertical velocity set by a jump (px/s)
MAX_VY = 1000.0             # only used to normalise observations
BASE_SPEED = 240.0          # initial scroll speed (px/s)
SPEED_INCREASE = 100.0      # added to the scroll speed at each milestone
SPEED_INCREASE_THRESHOLD = 2  # every N points scored
GROUND_HEIGHT = 100         # ground strip at the bottom of the playfield
CEILING_Y = -100            # player top at/above this line loses
GROUND_TILE_W = 336 * 2.5   # width of one ground tile (wraps)

# --- Player ---
PLAYER_W = 48
PLAYER_H = 34
MENU_BOB_SPEED = 30.0       # start screen bird (px/s)
MENU_BOB_RANGE = (30, 70)   # below HEIGHT/2
GHOST_OPACITY = 0.6

# --- Pipes ---
PIPE_W = 104
GAP_SIZE = 150              # vertical opening between the segments
PIPE_MIN = 80               # smallest top segment
BASE_PIPE_INTERVAL = 1.5    # seconds between pipes at BASE_SPEED
STAGE_START_SCORE = 4       # straight-line stage may start from this score
STAGE_EVERY = 10            # ... on multiples of this
STAGE_DURATION = 5          # pipes held at the same gap
STAGE_INSET = 50            # stage gap drawn from the normal range shrunk by this

# --- Items ---
COIN_INTERVAL = 2.2
BOOST_INTERVAL = 5.0
PHASE_INTERVAL = 6.0
COIN_CHANCE = 1.0
BOOST_CHANCE = 0.5          # tuning value
PHASE_CHANCE = 0.4          # tuning value
SPAWN_DELAY = 0.1           # let a fresh pipe gap register before placing an item
COIN_MARGIN = 40
ITEM_MARGIN = 50
COIN_SIZE = 30
ITEM_SIZE = 40
COIN_SPAWN_OFFSET = 100     # spawn x = WIDTH + offset
ITEM_SPAWN_OFFSET = 150
FALLBACK_BAND = 200         # no gap yet: y in [band, HEIGHT - band]
EFFECT_DURATION = 5.0

SEED_DEFAULT = 12345

# --- Colors (RGB) ---
COLOR_BG = (78, 192, 202)
COLOR_FG = (255, 255, 255)
COLOR_PIPE = (84, 180, 52)
COLOR_GROUND = (222, 216, 149)
COLOR_GROUND_EDGE = (92, 160, 56)
COLOR_PLAYER = (250, 204, 44)
COLOR_COIN = (255, 215, 0)
COLOR_BOOST = (220, 60, 60)
COLOR_PHASE = (200, 200, 255)
COLOR_DANGER = (255, 86, 110)
COLOR_DOUBLE = (255, 100, 255)
COLOR_GHOST = (150, 255, 150)
COLOR_SPEED = (255, 255, 100)
COLOR_STAGE = (255, 100, 100)


@dataclass(frozen=True)
class Tuning:
    """
    Every gameplay constant for one playfield size.
    Distances and speeds scale with the viewport (x by width, y by height);
    times, chances and score thresholds do not.
    """
    width: float = WIDTH
    height: float = HEIGHT
    gravity: float = GRAVITY
    jump_impulse: float = JUMP_IMPULSE
    max_vy: float = MAX_VY
    base_speed: float = BASE_SPEED
    speed_increase: float = SPEED_INCREASE
    speed_increase_threshold: int = SPEED_INCREASE_THRESHOLD
    ground_height: float = GROUND_HEIGHT
    ceiling_y: float = CEILING_Y
    ground_tile_w: float = GROUND_TILE_W
    player_x: float = WIDTH / 4
    player_w: float = PLAYER_W
    player_h: float = PLAYER_H
    menu_bob_speed: float = MENU_BOB_SPEED
    menu_bob_min: float = HEIGHT / 2 + MENU_BOB_RANGE[0]
    menu_bob_max: float = HEIGHT / 2 + MENU_BOB_RANGE[1]
    pipe_w: float = PIPE_W
    gap_size: float = GAP_SIZE
    pipe_min: float = PIPE_MIN
    base_pipe_interval: float = BASE_PIPE_INTERVAL
    stage_start_score: int = STAGE_START_SCORE
    stage_every: int = STAGE_EVERY
    stage_duration: int = STAGE_DURATION
    stage_inset: float = STAGE_INSET
    coin_interval: float = COIN_INTERVAL
    boost_interval: float = BOOST_INTERVAL
    phase_interval: float = PHASE_INTERVAL
    coin_chance: float = COIN_CHANCE
    boost_chance: float = BOOST_CHANCE
    phase_chance: float = PHASE_CHANCE
    spawn_delay: float = SPAWN_DELAY
    coin_margin: float = COIN_MARGIN
    item_margin: float = ITEM_MARGIN
    coin_size: float = COIN_SIZE
    item_size: float = ITEM_SIZE
    coin_spawn_offset: float = COIN_SPAWN_OFFSET
    item_spawn_offset: float = ITEM_SPAWN_OFFSET
    fallback_band: float = FALLBACK_BAND
    effect_duration: float = EFFECT_DURATION
    ghost_opacity: float = GHOST_OPACITY

    @property
    def ground_y(self) -> float:
        return self.height - self.ground_height

    @classmethod
    def for_viewport(cls, width: float, height: float) -> "Tuning":
        """Rescale the reference constants to a width x height playfield."""
        assert width > 0 and height > 0, "viewport must be non-empty"
        sx = width / WIDTH
        sy = height / HEIGHT
        return cls(
            width=float(width),
            height=float(height),
            gravity=GRAVITY * sy,
            jump_impulse=JUMP_IMPULSE * sy,
            max_vy=MAX_VY * sy,
            base_speed=BASE_SPEED * sx,
            speed_increase=SPEED_INCREASE * sx,
            ground_height=GROUND_HEIGHT * sy,
            ceiling_y=CEILING_Y * sy,
            ground_tile_w=GROUND_TILE_W * sx,
            player_x=width / 4,
            player_w=PLAYER_W * sx,
            player_h=PLAYER_H * sy,
            menu_bob_speed=MENU_BOB_SPEED * sy,
            menu_bob_min=height / 2 + MENU_BOB_RANGE[0] * sy,
            menu_bob_max=height / 2 + MENU_BOB_RANGE[1] * sy,
            pipe_w=PIPE_W * sx,
            gap_size=GAP_SIZE * sy,
            pipe_min=PIPE_MIN * sy,
            stage_inset=STAGE_INSET * sy,
            coin_margin=COIN_MARGIN * sy,
            item_margin=ITEM_MARGIN * sy,
            coin_size=COIN_SIZE * sy,
            item_size=ITEM_SIZE * sy,
            coin_spawn_offset=COIN_SPAWN_OFFSET * sx,
            item_spawn_offset=ITEM_SPAWN_OFFSET * sx,
            fallback_band=FALLBACK_BAND * sy,
        )
