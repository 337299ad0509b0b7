import unittest
import sys
import os

# Add project root to path so we can import mcmc_maze
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from mcmc_maze.core.maze import Cell, Maze
from mcmc_maze.core.path import Move, Path

class TestMaze(unittest.TestCase):
    def test_initialization(self):
        maze = Maze(4, 6)
        self.assertEqual(len(maze), 24)
        self.assertEqual(maze.edge_count(), 0)

    def test_invalid_dimensions(self):
        with self.assertRaises(ValueError):
            Maze(0, 5)
        with self.assertRaises(ValueError):
            Maze(5, 0)

    def test_index_bijection(self):
        rows, cols = 16, 8
        maze = Maze(rows, cols)
        for row in range(rows):
            for col in range(cols):
                cell = Cell(row, col)
                self.assertEqual(maze.cell_for_index(maze.index_for_cell(cell)), cell)

        self.assertEqual(maze.index_for_cell(Cell(2, 3)), 19)  # 2 * 8 + 3

        with self.assertRaises(IndexError):
            maze.index_for_cell(Cell(16, 0))
        with self.assertRaises(IndexError):
            maze.index_for_cell(Cell(0, -1))
        with self.assertRaises(IndexError):
            maze.cell_for_index(rows * cols)

    def test_cells_row_major_and_restartable(self):
        maze = Maze(2, 3)
        expected = [Cell(0, 0), Cell(0, 1), Cell(0, 2), Cell(1, 0), Cell(1, 1), Cell(1, 2)]
        self.assertEqual(list(maze.cells()), expected)
        self.assertEqual(list(maze.cells()), expected)

    def test_neighbors(self):
        maze = Maze(3, 3)
        # Centre has all four, N/E/S/W order
        self.assertEqual(list(maze.neighbors(Cell(1, 1))),
                         [Cell(0, 1), Cell(1, 2), Cell(2, 1), Cell(1, 0)])

        # Corner (0,0) only has East and South
        self.assertEqual(list(maze.neighbors(Cell(0, 0))), [Cell(0, 1), Cell(1, 0)])

    def test_carve_and_edges(self):
        maze = Maze(2, 2)
        a, b = Cell(0, 0), Cell(0, 1)
        maze.carve(a, b)
        maze.carve(b, a)  # already present

        self.assertEqual(maze.edge_count(), 1)
        self.assertTrue(maze.is_edge_between(a, b))
        self.assertTrue(maze.is_edge_between(b, a))
        self.assertFalse(maze.is_edge_between(a, Cell(1, 0)))
        self.assertEqual(list(maze.edges(a)), [b])
        self.assertEqual(list(maze.edges(Cell(1, 1))), [])

        with self.assertRaises(ValueError):
            maze.carve(Cell(0, 0), Cell(1, 1))  # diagonal

    def test_step(self):
        maze = Maze(3, 3)
        centre = Cell(1, 1)
        self.assertEqual(maze.step(centre, Move.NORTH), Cell(0, 1))
        self.assertEqual(maze.step(centre, Move.EAST), Cell(1, 2))
        self.assertEqual(maze.step(centre, Move.SOUTH), Cell(2, 1))
        self.assertEqual(maze.step(centre, Move.WEST), Cell(1, 0))
        self.assertIsNone(maze.step(centre, None))
        self.assertIsNone(maze.step(Cell(0, 0), Move.NORTH))
        self.assertIsNone(maze.step(Cell(2, 2), Move.EAST))

    def test_distance(self):
        maze = Maze(5, 5)
        self.assertEqual(maze.distance(Cell(2, 2), Cell(2, 2)), 0.0)
        self.assertEqual(maze.distance(Cell(0, 0), Cell(4, 4)), 8.0)
        self.assertEqual(maze.distance(Cell(3, 1), Cell(1, 4)), maze.distance(Cell(1, 4), Cell(3, 1)))

    def test_empty_path_stays_at_start(self):
        maze = Maze(3, 3)
        cell = Cell(1, 1)
        self.assertEqual(list(maze.follow_path(cell, Path())), [])
        self.assertEqual(maze.endpoint(cell, Path()), cell)
        self.assertEqual(maze.distance(maze.endpoint(cell, Path()), cell), 0.0)

    def test_follow_path_clamps_to_grid(self):
        maze = Maze(2, 2)
        path = Path([Move.NORTH, Move.EAST, None, Move.EAST, Move.SOUTH, Move.SOUTH])
        cells = list(maze.follow_path(Cell(0, 0), path))

        # Off-grid and null moves repeat the current cell
        self.assertEqual(cells, [Cell(0, 0), Cell(0, 1), Cell(0, 1), Cell(0, 1), Cell(1, 1), Cell(1, 1)])
        self.assertEqual(len(cells), len(path))

    def test_follow_path_through_walls(self):
        maze = Maze(1, 3)  # no edges carved at all
        path = Path([Move.EAST, Move.EAST])
        self.assertEqual(maze.endpoint(Cell(0, 0), path), Cell(0, 2))

    def test_follow_path_respecting_walls(self):
        maze = Maze(1, 3)
        maze.carve(Cell(0, 0), Cell(0, 1))
        path = Path([Move.EAST, Move.EAST, Move.WEST])

        cells = list(maze.follow_path(Cell(0, 0), path, respect_walls=True))
        # Second EAST hits the wall between (0,1) and (0,2)
        self.assertEqual(cells, [Cell(0, 1), Cell(0, 1), Cell(0, 0)])

if __name__ == '__main__':
    unittest.main()
