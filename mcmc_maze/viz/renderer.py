import logging
import threading
import time
import pygame
from typing import List, Optional

from mcmc_maze.core.maze import Cell, Maze
from mcmc_maze.core.path import Path
from mcmc_maze.algo.solver import DidNotConverge, SolveCancelled, StepUpdate, solve_maze

logger = logging.getLogger(__name__)

# Minimum wall-clock time between two frames while the solver is running
DRAW_EVERY_N_MS = 50.0

class Renderer:
    COLOR_BG = (250, 250, 250)
    COLOR_WALL = (0, 0, 0)
    COLOR_SAMPLE = (255, 128, 128, 64)  # Translucent red
    COLOR_SOLUTION = (0, 0, 255)
    COLOR_BEST = (230, 140, 0)  # Closest path of a run that gave up
    COLOR_HUD = (40, 40, 40)

    def __init__(self, maze: Maze, start: Cell, destination: Cell, rng,
                 width=1280, height=720, record=False, **solver_options):
        self.maze = maze
        self.start = start
        self.destination = destination
        self.rng = rng
        self.solver_options = solver_options
        self.screen_width = width
        self.screen_height = height

        # Camera
        self.cell_size = 16.0  # Pixels per cell
        self.offset_x = 0.0
        self.offset_y = 0.0
        self.zoom_speed = 1.1

        from mcmc_maze.viz.recorder import VideoRecorder
        self.recorder = VideoRecorder(active=record)

        # Solver progress, fed by on_step
        self.ticks = 0
        self.samples: List[Path] = []
        self.solution: Optional[Path] = None
        self.best: Optional[Path] = None
        self.cancel = threading.Event()

        self.font = None
        self.running = True
        self.clock = None
        self.surface = None
        self.t_start = 0.0
        self.t_last_frame = 0.0

    def fit_to_screen(self):
        """Auto-adjust zoom and pan to fit the entire maze on screen with padding."""
        padding = 40
        available_w = self.screen_width - (padding * 2)
        available_h = self.screen_height - (padding * 2)

        self.cell_size = min(available_w / self.maze.cols, available_h / self.maze.rows)

        self.offset_x = (self.screen_width - self.maze.cols * self.cell_size) / 2
        self.offset_y = (self.screen_height - self.maze.rows * self.cell_size) / 2

    def init_window(self):
        pygame.init()
        pygame.display.set_caption(f"MCMC Maze - {self.maze.rows}x{self.maze.cols}")
        self.surface = pygame.display.set_mode((self.screen_width, self.screen_height), pygame.RESIZABLE)
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("Consolas", 16)

        self.fit_to_screen()

    def cell_center(self, cell: Cell):
        sx = (cell.col + 0.5) * self.cell_size + self.offset_x
        sy = (cell.row + 0.5) * self.cell_size + self.offset_y
        return sx, sy

    def handle_input(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
                self.cancel.set()

            elif event.type == pygame.VIDEORESIZE:
                self.screen_width, self.screen_height = event.w, event.h

            elif event.type == pygame.MOUSEWHEEL:
                # Zoom towards mouse
                mx, my = pygame.mouse.get_pos()
                wx = (mx - self.offset_x) / self.cell_size
                wy = (my - self.offset_y) / self.cell_size

                if event.y > 0:
                    self.cell_size *= self.zoom_speed
                else:
                    self.cell_size /= self.zoom_speed
                self.cell_size = max(1.0, min(200.0, self.cell_size))

                self.offset_x = mx - wx * self.cell_size
                self.offset_y = my - wy * self.cell_size

            elif event.type == pygame.MOUSEMOTION:
                if pygame.mouse.get_pressed()[0] or pygame.mouse.get_pressed()[2]:
                    self.offset_x += event.rel[0]
                    self.offset_y += event.rel[1]

    def draw_maze(self):
        self.surface.fill(self.COLOR_BG)
        size = self.cell_size

        for cell in self.maze.cells():
            px = cell.col * size + self.offset_x
            py = cell.row * size + self.offset_y

            # Each cell owns its south and east walls; the outer border covers the rest
            south = self.maze.south(cell)
            if south is None or not self.maze.is_edge_between(cell, south):
                pygame.draw.line(self.surface, self.COLOR_WALL, (px, py + size), (px + size, py + size), 1)
            east = self.maze.east(cell)
            if east is None or not self.maze.is_edge_between(cell, east):
                pygame.draw.line(self.surface, self.COLOR_WALL, (px + size, py), (px + size, py + size), 1)

        border = (self.offset_x, self.offset_y, self.maze.cols * size + 1, self.maze.rows * size + 1)
        pygame.draw.rect(self.surface, self.COLOR_WALL, border, 1)

    def path_points(self, path: Path):
        points = [self.cell_center(self.start)]
        respect_walls = self.solver_options.get("respect_walls", False)
        points.extend(self.cell_center(c) for c in self.maze.follow_path(self.start, path, respect_walls))
        return points

    def draw_paths(self):
        # Samples accepted since the last frame, blended on a transparent layer
        overlay = pygame.Surface((self.screen_width, self.screen_height), pygame.SRCALPHA)
        for path in self.samples:
            points = self.path_points(path)
            if len(points) > 1:
                pygame.draw.lines(overlay, self.COLOR_SAMPLE, False, points, 2)
        self.surface.blit(overlay, (0, 0))

        if self.solution is not None:
            points = self.path_points(self.solution)
            if len(points) > 1:
                pygame.draw.lines(self.surface, self.COLOR_SOLUTION, False, points, 3)
        elif self.best is not None:
            points = self.path_points(self.best)
            if len(points) > 1:
                pygame.draw.lines(self.surface, self.COLOR_BEST, False, points, 3)

    def draw_hud(self):
        elapsed_ms = max((time.perf_counter() - self.t_start) * 1000.0, 1e-9)
        if self.solution is not None:
            status = "Solved"
        elif self.best is not None:
            status = "Gave up"
        else:
            status = "Running"
        info = [
            f"   ticks/ms: {self.ticks / elapsed_ms:>10.2f}",
            f"total ticks: {self.ticks:>10}",
            f" total time: {elapsed_ms:>10.0f}",
            f"     status: {status:>10}",
            "REC" if self.recorder.active else "",
        ]

        for i, text in enumerate(info):
            lbl = self.font.render(text, True, self.COLOR_HUD)
            self.surface.blit(lbl, (10, 10 + i * 20))

    def next_frame(self):
        """Pumps one frame: input, draw, flip. Blocks on the frame clock."""
        self.handle_input()
        self.draw_maze()
        self.draw_paths()
        self.draw_hud()
        pygame.display.flip()

        if self.recorder.active:
            self.recorder.capture_frame(self.surface)

        self.samples.clear()
        self.clock.tick(60)
        self.t_last_frame = time.perf_counter()

    def on_step(self, update: StepUpdate):
        self.ticks += 1
        if update is not None:
            _, path = update
            self.samples.append(path)

        if (time.perf_counter() - self.t_last_frame) * 1000.0 >= DRAW_EVERY_N_MS:
            return self.next_frame
        return None

    def run_loop(self) -> Optional[Path]:
        """
        Solves the maze while drawing it, then keeps the window open until closed.
        If the iteration budget runs out, the closest path is shown instead and
        DidNotConverge is re-raised once the window is closed.
        """
        self.t_start = self.t_last_frame = time.perf_counter()
        gave_up = None

        try:
            try:
                self.solution = solve_maze(self.rng, self.maze, self.start, self.destination,
                                           self.on_step, cancel=self.cancel, **self.solver_options)
                logger.info(f"Solution in {self.ticks} ticks: {self.solution}")
            except SolveCancelled as e:
                logger.info(str(e))
            except DidNotConverge as e:
                logger.warning(str(e))
                self.best = e.best
                gave_up = e

            while self.running:
                self.next_frame()
        finally:
            self.recorder.stop()
            pygame.quit()

        if gave_up is not None:
            raise gave_up
        return self.solution
