from typing import Dict, Optional
from mcmc_maze.core.maze import Cell, Maze

def calculate_stats(maze: Maze) -> Dict[str, float]:
    dead_ends = 0      # 1 edge
    corridors = 0      # 2 edges
    intersections = 0  # 3+ edges

    for links in maze.adjacency:
        degree = len(links)
        if degree == 1: dead_ends += 1
        elif degree == 2: corridors += 1
        elif degree >= 3: intersections += 1

    total = len(maze)
    return {
        "edges": maze.edge_count(),
        "dead_ends": dead_ends,
        "corridors": corridors,
        "intersections": intersections,
        "dead_end_percent": (dead_ends / total) * 100,
    }

def render_ascii(maze: Maze, start: Optional[Cell] = None, path=None, respect_walls: bool = False) -> str:
    """
    Text drawing of the maze, two characters per cell column.
    Cells visited by `path` (followed from `start`) are marked with '*'.
    """
    marked = set()
    if start is not None:
        marked.add(start)
        if path is not None:
            marked.update(maze.follow_path(start, path, respect_walls))

    lines = ["+" + "--+" * maze.cols]
    for row in range(maze.rows):
        body = "|"
        floor = "+"
        for col in range(maze.cols):
            cell = Cell(row, col)
            body += "* " if cell in marked else "  "

            east = maze.east(cell)
            body += " " if east is not None and maze.is_edge_between(cell, east) else "|"
            south = maze.south(cell)
            floor += "  +" if south is not None and maze.is_edge_between(cell, south) else "--+"
        lines.append(body)
        lines.append(floor)
    return "\n".join(lines)
