import argparse
import sys
import os
import logging
import random
import time

# Ensure project root is in path so we can import 'mcmc_maze' package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from mcmc_maze.core.maze import Cell

# 15x30 grid, seeded for repeatable demos
DEFAULT_ROWS = 15
DEFAULT_COLS = 30
DEFAULT_SEED = 42

def setup_logging(verbose: bool):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

def positive_int(text: str) -> int:
    value = int(text)
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {text}")
    return value

def corners(maze):
    return Cell(0, 0), Cell(maze.rows - 1, maze.cols - 1)

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="MCMC Maze: solve a perfect maze with a Metropolis sampler")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    def add_maze_args(p):
        p.add_argument("--rows", type=positive_int, default=DEFAULT_ROWS, help="Maze rows")
        p.add_argument("--cols", type=positive_int, default=DEFAULT_COLS, help="Maze columns")
        p.add_argument("--seed", type=int, default=DEFAULT_SEED, help="Random seed")

    # Solve Command
    solve_parser = subparsers.add_parser("solve", help="Generate a maze and solve it")
    add_maze_args(solve_parser)
    solve_parser.add_argument("--respect-walls", action="store_true", help="Refuse moves through uncarved walls")
    solve_parser.add_argument("--max-iterations", type=int, default=None, help="Give up after this many ticks")
    solve_parser.add_argument("--visual", action="store_true", help="Show visualization")
    solve_parser.add_argument("--record", action="store_true", help="Record video (implies --visual)")

    # Generate Command
    gen_parser = subparsers.add_parser("generate", help="Generate a maze and print it")
    add_maze_args(gen_parser)

    # Benchmark Command
    bench_parser = subparsers.add_parser("benchmark", help="Solve several seeds headless")
    add_maze_args(bench_parser)
    bench_parser.add_argument("--runs", type=positive_int, default=10, help="Number of seeds to run")
    bench_parser.add_argument("--respect-walls", action="store_true", help="Refuse moves through uncarved walls")
    bench_parser.add_argument("--max-iterations", type=int, default=1_000_000, help="Per-run tick budget")

    return parser

def cmd_generate(args, logger) -> int:
    from mcmc_maze.algo.dfs import generate
    from mcmc_maze.core.complexity import calculate_stats, render_ascii

    maze = generate(random.Random(args.seed), args.rows, args.cols)
    logger.info(f"Stats: {calculate_stats(maze)}")
    print(render_ascii(maze))
    return 0

def cmd_solve(args, logger) -> int:
    from mcmc_maze.algo.dfs import generate
    from mcmc_maze.algo.solver import DidNotConverge, solve_maze
    from mcmc_maze.core.complexity import render_ascii

    rng = random.Random(args.seed)
    maze = generate(rng, args.rows, args.cols)
    start, destination = corners(maze)
    options = {"respect_walls": args.respect_walls, "max_iterations": args.max_iterations}

    logger.info(f"Solving {args.rows}x{args.cols} maze from {tuple(start)} to {tuple(destination)}...")

    try:
        if args.visual or args.record:
            from mcmc_maze.viz.renderer import Renderer
            renderer = Renderer(maze, start, destination, rng, record=args.record, **options)
            renderer.init_window()
            solution = renderer.run_loop()
            if solution is None:
                logger.info("Visualization closed before a solution was found.")
                return 0
        else:
            ticks = 0

            def on_step(update):
                nonlocal ticks
                ticks += 1
                if ticks % 100_000 == 0:
                    print(f"\rTicks: {ticks}", end="")

            t0 = time.time()
            solution = solve_maze(rng, maze, start, destination, on_step, **options)
            print(f"\nDone in {time.time() - t0:.3f}s.")
    except DidNotConverge as e:
        logger.error(str(e))
        return 1

    print(f"Path Length: {len(solution)}")
    print(render_ascii(maze, start, solution, args.respect_walls))
    return 0

def cmd_benchmark(args, logger) -> int:
    from mcmc_maze.algo.dfs import generate
    from mcmc_maze.algo.solver import MCMCSolver

    print(f"\n{'SEED':<8} | {'TIME (s)':<10} | {'TICKS':<10} | {'ACCEPTED':<10} | {'PATH LEN':<10}")
    print("-" * 60)

    failures = 0
    for seed in range(args.seed, args.seed + args.runs):
        rng = random.Random(seed)
        maze = generate(rng, args.rows, args.cols)
        start, destination = corners(maze)
        solver = MCMCSolver(maze, start, destination, rng,
                            respect_walls=args.respect_walls, max_iterations=args.max_iterations)

        t0 = time.time()
        for _ in solver.run():
            pass
        duration = time.time() - t0

        path_len = len(solver.solution) if solver.solution is not None else "-"
        if solver.solution is None:
            failures += 1
        print(f"{seed:<8} | {duration:<10.4f} | {solver.iterations:<10} | "
              f"{solver.sampler.accepted:<10} | {path_len:<10}")

    if failures:
        logger.warning(f"{failures}/{args.runs} runs did not converge within {args.max_iterations} ticks")
    return 0

def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)
    logger = logging.getLogger("mcmc_maze")

    if args.command is None:
        parser.print_help()
        return 0

    logger.info(f"Running command: {args.command}")

    if args.command == "generate":
        return cmd_generate(args, logger)
    elif args.command == "solve":
        return cmd_solve(args, logger)
    elif args.command == "benchmark":
        return cmd_benchmark(args, logger)
    return 0

if __name__ == "__main__":
    sys.exit(main())
