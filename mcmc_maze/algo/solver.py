import logging
import random
from enum import Enum
from typing import Any, Awaitable, Callable, Iterator, Optional, Tuple

from mcmc_maze.core.maze import Cell, Maze
from mcmc_maze.core.path import Path
from mcmc_maze.algo.metropolis import MetropolisMinimizer

logger = logging.getLogger(__name__)

# None means "candidate rejected, nothing new to show"
StepUpdate = Optional[Tuple[Maze, Path]]


class SolverState(Enum):
    RUNNING = "running"
    DONE = "done"
    EXHAUSTED = "exhausted"
    CANCELLED = "cancelled"


class DidNotConverge(RuntimeError):
    def __init__(self, iterations: int, best: Path, best_cost: float):
        super().__init__(f"No solution after {iterations} iterations (best cost {best_cost:g})")
        self.iterations = iterations
        self.best = best
        self.best_cost = best_cost


class SolveCancelled(RuntimeError):
    def __init__(self, iterations: int):
        super().__init__(f"Solve cancelled after {iterations} iterations")
        self.iterations = iterations


class MCMCSolver:
    """
    Drives a MetropolisMinimizer over Paths until one ends on the destination.

    The cost of a path is the distance from its endpoint (followed from
    `start`) to `destination`. run() is a generator yielding one StepUpdate per
    non-terminal iteration; it returns once the state leaves RUNNING.

    `cancel` is any object with an is_set() method (e.g. threading.Event).
    `max_iterations` bounds the number of sampler ticks; None means unbounded.
    """

    def __init__(self, maze: Maze, start: Cell, destination: Cell, rng: random.Random,
                 respect_walls: bool = False, max_iterations: Optional[int] = None,
                 cancel=None):
        # Bounds-check both endpoints up front
        maze.index_for_cell(start)
        maze.index_for_cell(destination)

        self.maze = maze
        self.start = start
        self.destination = destination
        self.rng = rng
        self.respect_walls = respect_walls
        self.max_iterations = max_iterations
        self.cancel = cancel

        self.iterations = 0
        self.solution: Optional[Path] = None
        self.sampler = MetropolisMinimizer(Path(), self.cost)

        self.best = self.sampler.current
        self.best_cost = self.sampler.current_cost

        if self.sampler.current_cost == 0:
            # start == destination: the empty path already solves it
            self.state = SolverState.DONE
            self.solution = self.sampler.current
        else:
            self.state = SolverState.RUNNING

    def endpoint(self, path: Path) -> Cell:
        return self.maze.endpoint(self.start, path, self.respect_walls)

    def cost(self, path: Path) -> float:
        return self.maze.distance(self.endpoint(path), self.destination)

    @property
    def current(self) -> Path:
        return self.sampler.current

    def run(self) -> Iterator[StepUpdate]:
        if self.state is SolverState.RUNNING:
            logger.info(f"Solving {self.maze.rows}x{self.maze.cols} from {tuple(self.start)} "
                        f"to {tuple(self.destination)} (initial cost {self.sampler.current_cost:g})")

        while self.state is SolverState.RUNNING:
            if self.cancel is not None and self.cancel.is_set():
                self.state = SolverState.CANCELLED
                logger.info(f"Cancelled after {self.iterations} iterations")
                return

            if self.max_iterations is not None and self.iterations >= self.max_iterations:
                self.state = SolverState.EXHAUSTED
                logger.warning(f"Iteration budget of {self.max_iterations} exhausted "
                               f"(best cost {self.best_cost:g})")
                return

            self.iterations += 1
            accepted = self.sampler.tick(self.rng, self.cost)

            if accepted is None:
                yield None
                continue

            path, cost = accepted
            logger.debug(f"tick {self.iterations}: accepted len={len(path)} cost={cost:g}")
            if cost < self.best_cost:
                self.best, self.best_cost = path, cost

            if self.endpoint(path) == self.destination:
                self.state = SolverState.DONE
                self.solution = path
                logger.info(f"Solved in {self.iterations} iterations "
                            f"({self.sampler.accepted} accepted), path length {len(path)}")
                return

            yield self.maze, path

    def result(self) -> Path:
        """The solution, or the exception describing why there is none."""
        if self.state is SolverState.DONE:
            return self.solution
        if self.state is SolverState.EXHAUSTED:
            raise DidNotConverge(self.iterations, self.best, self.best_cost)
        if self.state is SolverState.CANCELLED:
            raise SolveCancelled(self.iterations)
        raise RuntimeError("Solver is still running")


def solve_maze(rng: random.Random, maze: Maze, start: Cell, destination: Cell,
               on_step: Optional[Callable[[StepUpdate], Optional[Callable[[], Any]]]] = None,
               **options) -> Path:
    """
    Runs the solver to completion and returns the solving Path.

    `on_step` is called after every non-terminal iteration with either
    (maze, accepted_path) or None. It may return a callable, which is invoked
    (and may block) before the next iteration starts.
    Extra keyword options are passed to MCMCSolver.
    """
    solver = MCMCSolver(maze, start, destination, rng, **options)
    for update in solver.run():
        if on_step is not None:
            resume = on_step(update)
            if resume is not None:
                resume()
    return solver.result()


async def solve_maze_async(rng: random.Random, maze: Maze, start: Cell, destination: Cell,
                           on_step: Optional[Callable[[StepUpdate], Optional[Awaitable]]] = None,
                           **options) -> Path:
    """
    Same contract as solve_maze, but a value returned by `on_step` is awaited
    before the next iteration. This is the only point where the loop yields to
    the event loop.
    """
    solver = MCMCSolver(maze, start, destination, rng, **options)
    for update in solver.run():
        if on_step is not None:
            resume = on_step(update)
            if resume is not None:
                await resume
    return solver.result()
