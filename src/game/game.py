# src/game/game.py
import sys, argparse
from typing import Dict, List, Tuple
import pygame
from pygame import K_SPACE, K_ESCAPE
from .config import (
    WIDTH, HEIGHT, FPS, SEED_DEFAULT, Tuning,
    COLOR_BG, COLOR_FG, COLOR_PIPE, COLOR_GROUND, COLOR_GROUND_EDGE, COLOR_PLAYER,
    COLOR_COIN, COLOR_BOOST, COLOR_PHASE, COLOR_DANGER, COLOR_DOUBLE, COLOR_GHOST,
    COLOR_SPEED, COLOR_STAGE,
)
from .scenes import SceneMachine, Tick, JumpPressed, DrawSprite, DrawText, PlaySound, Command

SPRITE_COLORS = {
    "pipe": COLOR_PIPE,
    "ground": COLOR_GROUND,
    "player": COLOR_PLAYER,
    "coin": COLOR_COIN,
    "boost": COLOR_BOOST,
    "phase": COLOR_PHASE,
}

TEXT_COLORS = {
    "fg": COLOR_FG,
    "coin": COLOR_COIN,
    "danger": COLOR_DANGER,
    "double": COLOR_DOUBLE,
    "ghost": COLOR_GHOST,
    "speed": COLOR_SPEED,
    "stage": COLOR_STAGE,
}


def parse_args():
    p = argparse.ArgumentParser()
    p.add_argument("--seed", type=int, default=None,
                   help="Run seed. Omit for SEED_DEFAULT, use -1 for random each launch.")
    p.add_argument("--width", type=int, default=WIDTH, help="Playfield width in px")
    p.add_argument("--height", type=int, default=HEIGHT, help="Playfield height in px")
    p.add_argument("--trace-sounds", action="store_true",
                   help="Print sound cues to the console (no audio backend)")
    return p.parse_args()


class Renderer:
    """Draws scene commands as flat shapes. Fonts are cached per size."""

    def __init__(self, screen: pygame.Surface, trace_sounds: bool = False):
        self.screen = screen
        self.trace_sounds = trace_sounds
        self._fonts: Dict[int, pygame.font.Font] = {}

    def _font(self, size: int) -> pygame.font.Font:
        if size not in self._fonts:
            self._fonts[size] = pygame.font.Font(None, int(size * 1.3))
        return self._fonts[size]

    def _sprite(self, cmd: DrawSprite):
        rect = pygame.Rect(int(cmd.x), int(cmd.y), max(0, int(cmd.w)), max(0, int(cmd.h)))
        color = SPRITE_COLORS.get(cmd.name, COLOR_FG)
        if cmd.opacity < 1.0:
            # translucent: draw on its own surface
            surf = pygame.Surface(rect.size, pygame.SRCALPHA)
            surf.fill((*color, int(255 * cmd.opacity)))
            self.screen.blit(surf, rect.topleft)
        elif cmd.name == "player":
            pygame.draw.ellipse(self.screen, color, rect)
        else:
            pygame.draw.rect(self.screen, color, rect)
            if cmd.name == "ground":
                pygame.draw.line(self.screen, COLOR_GROUND_EDGE, rect.topleft, rect.topright, 4)

    def _text(self, cmd: DrawText):
        img = self._font(cmd.size).render(cmd.text, True, TEXT_COLORS.get(cmd.color, COLOR_FG))
        pos: Tuple[int, int]
        if cmd.anchor == "center":
            pos = (int(cmd.x - img.get_width() / 2), int(cmd.y - img.get_height() / 2))
        elif cmd.anchor == "topright":
            pos = (int(cmd.x - img.get_width()), int(cmd.y))
        else:
            pos = (int(cmd.x), int(cmd.y))
        self.screen.blit(img, pos)

    def draw(self, commands: List[Command]):
        self.screen.fill(COLOR_BG)
        drawables = [c for c in commands if not isinstance(c, PlaySound)]
        for cmd in sorted(drawables, key=lambda c: c.z):
            if isinstance(cmd, DrawSprite):
                self._sprite(cmd)
            else:
                self._text(cmd)
        if self.trace_sounds:
            for cmd in commands:
                if isinstance(cmd, PlaySound):
                    print(f"[sound] {cmd.name}")


def run():
    args = parse_args()

    # Resolve seed: None -> use SEED_DEFAULT; -1 -> random
    if args.seed is None:
        launch_seed = SEED_DEFAULT
    elif args.seed == -1:
        launch_seed = None
    else:
        launch_seed = args.seed

    tuning = Tuning.for_viewport(args.width, args.height)

    pygame.init()
    pygame.display.set_caption("Flappy Rush")
    screen = pygame.display.set_mode((int(tuning.width), int(tuning.height)))
    clock = pygame.time.Clock()
    renderer = Renderer(screen, trace_sounds=args.trace_sounds)
    machine = SceneMachine(tuning, seed=launch_seed)

    while True:
        dt = clock.tick(FPS) / 1000.0
        if dt > 1.0 / 30.0:  # clamp stalls
            dt = 1.0 / 30.0

        commands: List[Command] = []
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                pygame.quit(); sys.exit()
            if event.type == pygame.KEYDOWN:
                if event.key == K_ESCAPE:
                    pygame.quit(); sys.exit()
                if event.key == K_SPACE:
                    commands += machine.feed(JumpPressed())
            if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                commands += machine.feed(JumpPressed())

        before = machine.scene
        commands += machine.feed(Tick(dt))
        if before == "playing" and machine.scene == "lost":
            print(f"Run over: score={machine.state.result.score} coins={machine.state.result.coins}")

        renderer.draw(commands)
        pygame.display.flip()

if __name__ == "__main__":
    run()
