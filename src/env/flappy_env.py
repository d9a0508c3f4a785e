# src/env/flappy_env.py
from __future__ import annotations
from typing import Optional, Tuple, Dict, Any
import numpy as np
import gymnasium as gym
import pygame

from src.game.config import Tuning, WIDTH, HEIGHT
from src.game.simulation import Simulation
from src.game.scenes import playing_frame
from src.env.observations import build_observation, OBS_LOW, OBS_HIGH


class FlappyEnv(gym.Env):
    """
    Flappy Rush Gymnasium environment (vector observations).
    - Simulation at 60 Hz (internal).
    - Agent acts every `frame_skip` frames (default 4) -> 15 decisions/sec.
    - Observation: shape (8,), float32 (see observations.build_observation).
    """
    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 60}

    def __init__(self,
                 render_mode: Optional[str] = None,
                 frame_skip: int = 4,
                 time_limit_seconds: Optional[float] = 30.0,
                 width: int = WIDTH,
                 height: int = HEIGHT):
        super().__init__()
        assert frame_skip >= 1, "frame_skip must be >= 1"
        assert render_mode is None or render_mode in self.metadata["render_modes"]
        self.render_mode = render_mode
        self.frame_skip = int(frame_skip)
        self.tuning = Tuning.for_viewport(width, height)

        # Internal sim timing
        self.sim_fps = 60
        self.dt = 1.0 / self.sim_fps

        self.time_limit_decisions = None
        if time_limit_seconds is not None:
            # decisions per second = sim_fps / frame_skip
            self.time_limit_decisions = int(self.sim_fps * time_limit_seconds / self.frame_skip)

        # Actions: 0 = NOOP, 1 = JUMP
        self.action_space = gym.spaces.Discrete(2)
        self.observation_space = gym.spaces.Box(low=OBS_LOW, high=OBS_HIGH, dtype=np.float32)

        # --- Runtime state ---
        self.sim: Optional[Simulation] = None
        self.timestep: int = 0
        self.current_seed: Optional[int] = None
        self.death_cause: Optional[str] = None

        # Rendering
        self.screen = None
        self.clock = None
        self.renderer = None

    # -------------------- Core API --------------------

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None):
        super().reset(seed=seed)

        # Seeded -> strict reproducibility; unseeded -> Simulation picks its own seed.
        sim_seed = int(seed) if seed is not None else None
        self.sim = Simulation(self.tuning, seed=sim_seed)

        self.timestep = 0
        self.death_cause = None
        self.current_seed = self.sim.seed

        obs = build_observation(self.sim)
        info = {"seed": self.current_seed, "score": 0, "coins": 0}
        return obs, info

    def step(self, action: int):
        assert self.action_space.contains(action), f"Invalid action {action}"
        assert self.sim is not None, "call reset() first"

        if action == 1:
            self.sim.jump()

        points = 0
        for _ in range(self.frame_skip):
            tick = self.sim.step(self.dt)
            points += tick.points
            if tick.lost:
                self.death_cause = tick.death_cause
                break

        alive = not self.sim.over
        # +1 for surviving the decision, +1 per pipe passed, -1 on death (once)
        reward = (1.0 + float(points)) if alive else -1.0

        self.timestep += 1
        terminated = not alive
        truncated = False
        if (self.time_limit_decisions is not None) and (self.timestep >= self.time_limit_decisions):
            truncated = True

        obs = build_observation(self.sim)
        s = self.sim.session
        info = {
            "score": s.score,
            "coins": s.coins,
            "speed": s.speed,
            "timestep": self.timestep,
            "seed": self.current_seed,
            "death_cause": self.death_cause,
        }

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, truncated, info

    # -------------------- Rendering --------------------

    def render(self):
        if self.render_mode is None or self.sim is None:
            return

        # imported lazily so headless training never needs a display
        from src.game.game import Renderer

        if self.screen is None:
            pygame.init()
            size = (int(self.tuning.width), int(self.tuning.height))
            if self.render_mode == "human":
                self.screen = pygame.display.set_mode(size)
                pygame.display.set_caption("Flappy Rush - Gym Env")
            else:
                self.screen = pygame.Surface(size)
            self.clock = pygame.time.Clock()
            self.renderer = Renderer(self.screen)

        if self.render_mode == "human":
            # Pump minimal event queue so the OS doesn't think we're hung
            pygame.event.pump()

        self.renderer.draw(playing_frame(self.sim))

        if self.render_mode == "human":
            pygame.display.flip()
            self.clock.tick(self.metadata.get("render_fps", 60))
            return None

        # (H, W, 3) uint8 array
        arr = pygame.surfarray.array3d(self.screen)  # (W, H, 3)
        return np.transpose(arr, (1, 0, 2))

    def close(self):
        if self.screen is not None:
            pygame.display.quit()
            pygame.quit()
            self.screen = None
            self.clock = None
            self.renderer = None
