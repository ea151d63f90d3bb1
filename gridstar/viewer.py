# gridstar/viewer.py
from __future__ import annotations
import argparse
import logging
from dataclasses import dataclass
from typing import Optional, Tuple
import pygame

from .astar import AStarEngine
from .config import Settings, add_settings_arguments
from .generator import generate_obstacles, regenerate_seed
from .grid import Grid

logger = logging.getLogger(__name__)

CANVAS_W, CANVAS_H = 960, 540
HUD_H = 44
MAX_DENSITY = 0.45
MIN_SPEED, MAX_SPEED = 1.0, 30.0
MIN_WIDTH, MAX_WIDTH = 16, 120
MIN_HEIGHT, MAX_HEIGHT = 9, 80

@dataclass
class Colors:
    BG = (11, 16, 32)
    FLOOR = (255, 255, 255)
    CLOSED = (224, 224, 224)
    OPEN = (168, 197, 255)
    WALL = (11, 11, 15)
    CURRENT = (255, 159, 26)
    PATH = (255, 209, 102)
    START = (0, 208, 132)
    GOAL = (239, 71, 111)
    GRID = (230, 230, 234)
    TEXT = (230, 233, 239)

class StepClock:
    """Turns elapsed wall time into a whole number of engine steps."""
    def __init__(self, speed: float):
        self.acc = 0.0
        self.set_speed(speed)

    def set_speed(self, speed: float) -> None:
        self.speed = speed
        self.interval = 1.0 / max(0.1, speed)

    def reset(self) -> None:
        self.acc = 0.0

    def advance(self, dt: float) -> int:
        self.acc += dt
        steps = 0
        while self.acc >= self.interval:
            self.acc -= self.interval
            steps += 1
        return steps

def fit_settings(settings: Settings) -> Settings:
    """Clamp grid size and density to what the canvas and controls support."""
    fitted = settings.updated(
        width=max(MIN_WIDTH, min(settings.width, MAX_WIDTH)),
        height=max(MIN_HEIGHT, min(settings.height, MAX_HEIGHT)),
        density=min(settings.density, MAX_DENSITY),
    )
    if fitted != settings:
        logger.warning("viewer settings clamped to %dx%d, density %.2f", fitted.width, fitted.height, fitted.density)
    return fitted

def cell_layout(width: int, height: int) -> Tuple[int, int, int]:
    """(cell size, x offset, y offset) that centers the grid on the canvas."""
    cell = max(2, min(CANVAS_W // width, CANVAS_H // height))
    ox = max(0, (CANVAS_W - cell * width) // 2)
    oy = max(0, (CANVAS_H - cell * height) // 2)
    return cell, ox, oy

class Viewer:
    def __init__(self, settings: Settings, fps: int = 60):
        self.settings = fit_settings(settings.validate())
        self.fps = fps
        self.running = False
        self.attempts = 1
        self.clock = StepClock(self.settings.speed)
        self.engine: Optional[AStarEngine] = None
        self.grid = Grid(self.settings.width, self.settings.height)

        self.screen = pygame.display.set_mode((CANVAS_W, CANVAS_H + HUD_H))
        pygame.display.set_caption("gridstar: A* step by step")
        self.font = pygame.font.SysFont(None, 20)
        self.ticker = pygame.time.Clock()
        self.regenerate()

    # ----------------- engine lifecycle -----------------
    def regenerate(self) -> None:
        s = self.settings
        self.grid = Grid(s.width, s.height)
        gen = generate_obstacles(s.width, s.height, s.density, s.seed, s.guarantee_solvable)
        self.attempts = gen.attempts
        if gen.attempts > 1:
            logger.info("layout found after %d attempts (seed=%r)", gen.attempts, gen.seed)
        self.engine = AStarEngine(s.width, s.height, gen.mask)
        self.running = False
        self.clock.reset()

    def update_settings(self, **changes) -> None:
        self.settings = self.settings.updated(**changes)
        self.clock.set_speed(self.settings.speed)
        if set(changes) - {"speed"}:
            self.regenerate()

    def toggle_wall_at(self, px: int, py: int) -> None:
        if self.running or self.engine is None:
            return
        cell, ox, oy = cell_layout(self.grid.width, self.grid.height)
        gx, gy = (px - ox) // cell, (py - oy) // cell
        if not self.grid.in_bounds(gx, gy):
            return
        mask = self.grid.toggled(self.engine.obstacles, self.grid.index(gx, gy))
        self.engine = AStarEngine(self.grid.width, self.grid.height, mask)

    # ----------------- draw -----------------
    def _fill_cell(self, i: int, color, inset: int = 0) -> None:
        cell, ox, oy = cell_layout(self.grid.width, self.grid.height)
        x, y = self.grid.coord(i)
        rect = pygame.Rect(ox + x * cell + inset, oy + y * cell + inset, cell - 2 * inset, cell - 2 * inset)
        self.screen.fill(color, rect)

    def draw(self) -> None:
        view = self.engine.snapshot()
        cell, ox, oy = cell_layout(view.width, view.height)
        scr = self.screen
        scr.fill(Colors.BG)
        scr.fill(Colors.FLOOR, pygame.Rect(ox, oy, cell * view.width, cell * view.height))

        for i, closed in enumerate(view.closed_mask):
            if closed:
                self._fill_cell(i, Colors.CLOSED)
        for i in view.open_cells:
            self._fill_cell(i, Colors.OPEN)
        for i, blocked in enumerate(view.obstacles):
            if blocked:
                self._fill_cell(i, Colors.WALL, inset=1)
        if view.current is not None:
            self._fill_cell(view.current, Colors.CURRENT, inset=2)
        for i in view.path:
            self._fill_cell(i, Colors.PATH, inset=3)
        self._fill_cell(0, Colors.START, inset=2)
        self._fill_cell(view.width * view.height - 1, Colors.GOAL, inset=2)

        if cell >= 6:
            for x in range(view.width + 1):
                pygame.draw.line(scr, Colors.GRID, (ox + x * cell, oy), (ox + x * cell, oy + cell * view.height))
            for y in range(view.height + 1):
                pygame.draw.line(scr, Colors.GRID, (ox, oy + y * cell), (ox + cell * view.width, oy + y * cell))

        if not view.finished:
            status = "Searching..."
        elif view.succeeded:
            status = "Goal reached"
        else:
            status = "No path"
        line1 = (f"Iter: {view.iterations}   Open: {len(view.open_cells)}   {status}   "
                 f"[{'playing' if self.running else 'paused'}]   speed={self.settings.speed:g}/s   "
                 f"density={self.settings.density:.2f}   solvable={'on' if self.settings.guarantee_solvable else 'off'}   "
                 f"attempts={self.attempts}")
        line2 = f"seed={self.settings.seed!r}"
        if view.current_scores is not None:
            g, h, f = view.current_scores
            line2 += f"   current f=g+h: {f:.0f} = {g:.0f} + {h:.0f}"
        scr.blit(self.font.render(line1, True, Colors.TEXT), (10, CANVAS_H + 6))
        scr.blit(self.font.render(line2, True, Colors.TEXT), (10, CANVAS_H + 24))
        pygame.display.flip()

    # ----------------- loop -----------------
    def handle_key(self, event) -> bool:
        """Returns False when the viewer should quit."""
        s = self.settings
        if event.key in (pygame.K_ESCAPE, pygame.K_q):
            return False
        elif event.key == pygame.K_SPACE:
            self.running = not self.running
        elif event.key == pygame.K_n and not self.running and not self.engine.finished:
            self.engine.step()
        elif event.key == pygame.K_r:
            self.regenerate()
        elif event.key == pygame.K_g:
            self.update_settings(seed=regenerate_seed(s.seed))
        elif event.key in (pygame.K_EQUALS, pygame.K_PLUS, pygame.K_KP_PLUS):
            self.update_settings(speed=min(s.speed + 1, MAX_SPEED))
        elif event.key in (pygame.K_MINUS, pygame.K_KP_MINUS):
            self.update_settings(speed=max(s.speed - 1, MIN_SPEED))
        elif event.key == pygame.K_RIGHTBRACKET:
            self.update_settings(density=round(min(s.density + 0.01, MAX_DENSITY), 2))
        elif event.key == pygame.K_LEFTBRACKET:
            self.update_settings(density=round(max(s.density - 0.01, 0.0), 2))
        elif event.key == pygame.K_s:
            self.update_settings(guarantee_solvable=not s.guarantee_solvable)
        return True

    def run(self) -> None:
        alive = True
        while alive:
            dt = self.ticker.tick(self.fps) / 1000.0
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    alive = False
                elif event.type == pygame.KEYDOWN:
                    alive = self.handle_key(event)
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    self.toggle_wall_at(*event.pos)

            if self.running and not self.engine.finished:
                for _ in range(self.clock.advance(dt)):
                    self.engine.step()
            self.draw()

def main():
    parser = argparse.ArgumentParser(description="Interactive A* viewer")
    add_settings_arguments(parser)
    parser.add_argument("--speed", type=float, default=Settings().speed, help="steps per second")
    parser.add_argument("--fps", type=int, default=60, help="frames per second")
    args = parser.parse_args()
    try:
        settings = Settings.from_args(args)
    except ValueError as e:
        parser.error(str(e))

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    pygame.init()
    try:
        Viewer(settings, fps=args.fps).run()
    finally:
        pygame.quit()

if __name__ == "__main__":
    main()
