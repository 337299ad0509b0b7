import math
import random
from typing import Callable, Generic, Optional, Tuple, TypeVar

from mcmc_maze.core.path import Proposal

T = TypeVar("T", bound=Proposal)

# Inverse temperature
BETA = 0.5


class ZeroCostError(RuntimeError):
    """The current state already has cost 0; the acceptance ratio is undefined."""


def acceptance_probability(candidate_cost: float, current_cost: float, beta: float = BETA) -> float:
    """min(1, exp(-beta * candidate_cost / current_cost)). Always within [0, 1]."""
    if current_cost == 0:
        raise ZeroCostError("Acceptance ratio is undefined for a zero-cost current state")
    return min(1.0, math.exp(-beta * candidate_cost / current_cost))


class MetropolisMinimizer(Generic[T]):
    """
    Single-walker Metropolis sampler used as a stochastic minimiser.

    Only the current state and its cost are kept (memoryless chain). The
    candidate's cost is recomputed on every tick. Proposals are assumed
    symmetric, so no Hastings correction is applied.
    """

    def __init__(self, initial: T, cost: Callable[[T], float]):
        self.current = initial
        self.current_cost = cost(initial)
        # Reporting only
        self.ticks = 0
        self.accepted = 0

    def tick(self, rng: random.Random, cost: Callable[[T], float]) -> Optional[Tuple[T, float]]:
        """
        Proposes one candidate and accepts or rejects it.
        Returns (state, cost) when the candidate became the current state, else None.
        """
        candidate = self.current.candidate(rng)
        candidate_cost = cost(candidate)
        self.ticks += 1

        p = acceptance_probability(candidate_cost, self.current_cost)
        if rng.random() <= p:
            self.current = candidate
            self.current_cost = candidate_cost
            self.accepted += 1
            return self.current, self.current_cost
        return None
