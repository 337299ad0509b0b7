from typing import Iterator, List, NamedTuple, Optional

from mcmc_maze.core.path import Move


class Cell(NamedTuple):
    row: int
    col: int


class Maze:
    """
    Grid graph whose carved edges form the maze.
    Cells are addressed as Cell(row, col); storage is a dense adjacency list
    keyed by linear index (row * cols + col).
    """

    __slots__ = ('rows', 'cols', 'adjacency')

    def __init__(self, rows: int, cols: int):
        if rows <= 0 or cols <= 0:
            raise ValueError(f"Maze dimensions must be positive, got {rows}x{cols}")
        self.rows = rows
        self.cols = cols
        # No edges yet; generators carve them in place
        self.adjacency: List[List[int]] = [[] for _ in range(rows * cols)]

    def __len__(self) -> int:
        return self.rows * self.cols

    def __repr__(self) -> str:
        return f"Maze({self.rows}x{self.cols}, edges={self.edge_count()})"

    def index_for_cell(self, cell: Cell) -> int:
        if 0 <= cell.row < self.rows and 0 <= cell.col < self.cols:
            return cell.row * self.cols + cell.col
        raise IndexError(f"Cell {tuple(cell)} out of bounds")

    def cell_for_index(self, index: int) -> Cell:
        if 0 <= index < len(self.adjacency):
            return Cell(index // self.cols, index % self.cols)
        raise IndexError(f"Index {index} out of bounds")

    # Direction helpers. None means the step would leave the grid.
    def north(self, cell: Cell) -> Optional[Cell]:
        if cell.row > 0:
            return Cell(cell.row - 1, cell.col)
        return None

    def east(self, cell: Cell) -> Optional[Cell]:
        if cell.col < self.cols - 1:
            return Cell(cell.row, cell.col + 1)
        return None

    def south(self, cell: Cell) -> Optional[Cell]:
        if cell.row < self.rows - 1:
            return Cell(cell.row + 1, cell.col)
        return None

    def west(self, cell: Cell) -> Optional[Cell]:
        if cell.col > 0:
            return Cell(cell.row, cell.col - 1)
        return None

    def step(self, cell: Cell, move: Optional[Move]) -> Optional[Cell]:
        """Cell reached by a single Move from `cell`, or None for a null/off-grid move."""
        if move is None:
            return None
        if move is Move.NORTH:
            return self.north(cell)
        if move is Move.EAST:
            return self.east(cell)
        if move is Move.SOUTH:
            return self.south(cell)
        return self.west(cell)

    def neighbors(self, cell: Cell) -> Iterator[Cell]:
        """
        Yields grid-adjacent cells in N, E, S, W order.
        Does NOT check edges (that's what edges() is for).
        """
        for helper in (self.north, self.east, self.south, self.west):
            neighbor = helper(cell)
            if neighbor is not None:
                yield neighbor

    def edges(self, cell: Cell) -> Iterator[Cell]:
        """Yields the cells joined to `cell` by a carved edge."""
        for idx in self.adjacency[self.index_for_cell(cell)]:
            yield self.cell_for_index(idx)

    def is_edge_between(self, a: Cell, b: Cell) -> bool:
        return self.index_for_cell(b) in self.adjacency[self.index_for_cell(a)]

    def carve(self, a: Cell, b: Cell):
        """
        Adds the undirected edge a <-> b.
        Both cells must be grid neighbours; carving twice is a no-op.
        """
        if b not in self.neighbors(a):
            raise ValueError(f"Cannot carve between non-adjacent cells {tuple(a)} and {tuple(b)}")

        idx_a = self.index_for_cell(a)
        idx_b = self.index_for_cell(b)
        if idx_b in self.adjacency[idx_a]:
            return

        self.adjacency[idx_a].append(idx_b)
        self.adjacency[idx_b].append(idx_a)

    def edge_count(self) -> int:
        # Every edge is stored once per endpoint
        return sum(len(links) for links in self.adjacency) // 2

    def cells(self) -> Iterator[Cell]:
        """Row-major iteration over every cell. Restartable: each call is a fresh generator."""
        for idx in range(len(self.adjacency)):
            yield self.cell_for_index(idx)

    def distance(self, a: Cell, b: Cell) -> float:
        # Manhattan distance: moves are axis-aligned, so this is the number of
        # steps needed on an open grid. Zero iff a == b.
        return float(abs(a.row - b.row) + abs(a.col - b.col))

    def follow_path(self, start: Cell, path, respect_walls: bool = False) -> Iterator[Cell]:
        """
        Yields the position after each move of `path`, starting from `start`.

        A move that would leave the grid, or a null move, keeps the current
        position. With respect_walls=True a move is also refused when no
        carved edge joins the two cells; by default walls are not consulted
        and the walk is purely geometric.
        """
        current = start
        for move in path:
            target = self.step(current, move)
            if target is not None:
                if not respect_walls or self.is_edge_between(current, target):
                    current = target
            yield current

    def endpoint(self, start: Cell, path, respect_walls: bool = False) -> Cell:
        current = start
        for current in self.follow_path(start, path, respect_walls):
            pass
        return current
