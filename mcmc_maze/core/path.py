import random
from abc import ABC, abstractmethod
from enum import Enum
from typing import Iterator, List, Optional


class Proposal(ABC):
    """A state the Metropolis sampler can walk: knows how to propose a neighbouring state."""

    @abstractmethod
    def candidate(self, rng: random.Random) -> "Proposal":
        """Returns a new, mutated value. Must not modify self."""
        pass


class Move(Enum):
    NORTH = "N"
    EAST = "E"
    SOUTH = "S"
    WEST = "W"

    @staticmethod
    def arbitrary(rng: random.Random) -> Optional["Move"]:
        """One of the four directions or None (a null step), each with probability 1/5."""
        choice = rng.randrange(5)
        if choice == 4:
            return None
        return _DIRECTIONS[choice]


_DIRECTIONS = (Move.NORTH, Move.EAST, Move.SOUTH, Move.WEST)

# Edit kinds picked uniformly by Path.candidate
SUBSTITUTE = 0
APPEND = 1
TRUNCATE = 2
TRANSPOSE = 3


class Path(Proposal):
    """
    Ordered sequence of step attempts from a fixed start cell.
    Entries are Move members or None for "stay put".
    """

    __slots__ = ('moves',)

    def __init__(self, moves: Optional[List[Optional[Move]]] = None):
        self.moves: List[Optional[Move]] = list(moves) if moves else []

    def __len__(self) -> int:
        return len(self.moves)

    def __iter__(self) -> Iterator[Optional[Move]]:
        return iter(self.moves)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Path):
            return NotImplemented
        return self.moves == other.moves

    def __repr__(self) -> str:
        steps = "".join(m.name[0] if m is not None else "." for m in self.moves)
        return f"Path({steps!r})"

    def copy(self) -> "Path":
        return Path(self.moves)

    def candidate(self, rng: random.Random) -> "Path":
        """
        Returns a new Path one local edit away from this one.

        The edit kind is uniform over substitute / append / truncate / transpose.
        The proposal is treated as symmetric by the sampler, which is only an
        approximation: append and truncate change the length, so the reverse
        move is not always equally likely. Good enough for optimisation, not
        for exact sampling.
        """
        candidate = self.copy()
        moves = candidate.moves
        kind = rng.randrange(4)

        if kind == SUBSTITUTE:
            if moves:
                idx = rng.randrange(len(moves))
                moves[idx] = Move.arbitrary(rng)
        elif kind == APPEND:
            moves.append(Move.arbitrary(rng))
        elif kind == TRUNCATE:
            if moves:
                moves.pop()
        else:
            if moves:
                a = rng.randrange(len(moves))
                b = rng.randrange(len(moves))
                moves[a], moves[b] = moves[b], moves[a]

        return candidate
