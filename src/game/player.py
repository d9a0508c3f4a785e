# src/game/player.py
from __future__ import annotations
import pygame
from dataclasses import dataclass


@dataclass
class Player:
    """
    The bird. x stays fixed (the world scrolls left), y is the TOP edge.
    Velocity is downward positive.
    """
    x: float
    y: float
    vy: float = 0.0
    w: float = 34.0
    h: float = 24.0
    alive: bool = True
    opacity: float = 1.0

    @property
    def rect(self) -> pygame.Rect:
        return pygame.Rect(int(self.x), int(self.y), int(self.w), int(self.h))

    def jump(self, impulse: float):
        """Set (never add) the upward velocity. No buffering, no double-jump logic."""
        self.vy = impulse

    def update_physics(self, dt: float, gravity: float):
        """Semi-implicit Euler: velocity first, then position with the new velocity."""
        self.vy += gravity * dt
        self.y += self.vy * dt
