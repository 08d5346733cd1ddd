"""Command-line interface for the propagation engine."""

import argparse
import json
import logging
import os
import sys

from .benchmark import Benchmark, load_puzzles
from .core.grid import Grid
from .engine import Board, DeductionSolver, PropagationConfig, PRESETS


def main(argv=None):
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Sudoku candidate propagation engine",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Propagate a puzzle and show what is left
  python -m sudoku_propagation.cli solve --puzzle "0030206..." --candidates

  # Solve the third puzzle of a file with singles only
  python -m sudoku_propagation.cli solve --file puzzles.txt --index 2 --config singles

  # Compare configurations over two puzzle sets
  python -m sudoku_propagation.cli benchmark easy.txt hard.txt --output results/
        """
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Log every deduction"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Solve command
    solve_parser = subparsers.add_parser("solve", help="Propagate a single puzzle")
    source = solve_parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--puzzle", "-p", type=str,
        help="Puzzle string (81 chars, 0 or . for empty cells)"
    )
    source.add_argument(
        "--file", "-f", type=str,
        help="Puzzle file (text, one puzzle per line, or JSON)"
    )
    solve_parser.add_argument(
        "--index", "-i", type=int, default=0,
        help="Which puzzle of --file to use (default: 0)"
    )
    solve_parser.add_argument(
        "--config", "-c", choices=sorted(PRESETS), default="full",
        help="Strategy configuration (default: full)"
    )
    solve_parser.add_argument(
        "--candidates", action="store_true",
        help="Print remaining candidates of unresolved cells"
    )
    solve_parser.add_argument(
        "--json", action="store_true",
        help="Print session statistics as JSON"
    )

    # Benchmark command
    bench_parser = subparsers.add_parser("benchmark", help="Run the engine over puzzle files")
    bench_parser.add_argument(
        "inputs", nargs="+",
        help="Puzzle files; each file is one puzzle set"
    )
    bench_parser.add_argument(
        "--configs", nargs="+", choices=sorted(PRESETS), default=None,
        help="Configurations to compare (default: all)"
    )
    bench_parser.add_argument(
        "--output", "-o", type=str, default="results",
        help="Output directory for results (default: results)"
    )
    bench_parser.add_argument(
        "--no-charts", action="store_true",
        help="Skip chart generation"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    if args.command == "solve":
        return cmd_solve(args)
    elif args.command == "benchmark":
        return cmd_benchmark(args)


def cmd_solve(args):
    """Handle the solve command."""
    try:
        if args.puzzle:
            puzzle = Grid.from_string(args.puzzle)
        else:
            puzzle = load_puzzles(args.file)[args.index]
    except (ValueError, IndexError, OSError) as e:
        print(f"Error reading puzzle: {e}")
        sys.exit(1)

    print("Input puzzle:")
    print(puzzle)
    print()

    solver = DeductionSolver(PropagationConfig.preset(args.config))
    result, stats = solver.solve(puzzle)

    if args.json:
        print(json.dumps(stats.to_dict(), indent=2))
    elif not stats.consistent:
        print("✗ Contradiction: the puzzle has no solution")
        print(f"  {stats.error}")
    else:
        mark = "✓ Solved" if stats.solved else "… Stuck"
        print(f"{mark}: {stats.resolved}/81 cells in {stats.time_seconds:.4f}s")
        for name, count in stats.strategies.items():
            if count:
                print(f"  {name}: {count}")
        print(result)

    if args.candidates and solver.board is not None and not stats.solved:
        print()
        print(format_candidates(solver.board))

    return 0 if stats.consistent else 2


def format_candidates(board: Board) -> str:
    """One line per unresolved cell: position and remaining digits."""
    lines = []
    for row in range(9):
        for col in range(9):
            cell = board.cell_at(row, col)
            if not cell.is_resolved:
                digits = "".join(str(d) for d in cell.sorted_candidates())
                lines.append(f"r{row + 1}c{col + 1}: {digits}")
    return "\n".join(lines)


def cmd_benchmark(args):
    """Handle the benchmark command."""
    puzzle_sets = {}
    for path in args.inputs:
        name = os.path.splitext(os.path.basename(path))[0]
        puzzle_sets[name] = load_puzzles(path)

    configs = None
    if args.configs:
        configs = {name: PRESETS[name] for name in args.configs}

    benchmark = Benchmark(puzzle_sets, configs)

    print("=" * 60)
    print("PROPAGATION BENCHMARK")
    print("=" * 60)
    print(f"Puzzle sets: {', '.join(f'{k} ({len(v)})' for k, v in puzzle_sets.items())}")
    print(f"Configurations: {', '.join(benchmark.configs.keys())}")
    print(f"Output directory: {args.output}")
    print("=" * 60)

    benchmark.run()
    summary = benchmark.get_summary()

    print("\nBy Configuration:")
    print("-" * 50)
    for config, stats in summary["results_by_config"].items():
        print(f"\n{config}:")
        print(f"  Solved: {stats['solve_rate']:.1f}% ({stats['total_solved']}/{stats['total_tested']})")
        print(f"  Contradictions: {stats['contradictions']}")
        print(f"  Avg Time: {stats['avg_time_seconds']:.4f}s")
        print(f"  Avg Resolved: {stats['avg_resolved']:.1f}/81")

    benchmark.save_results(args.output)

    if not args.no_charts:
        from .benchmark.visualizer import Visualizer

        print("\nGenerating charts...")
        visualizer = Visualizer(benchmark.results, args.output)
        charts = visualizer.generate_all()
        visualizer.generate_summary_table()
        for chart in charts:
            print(f"  - {os.path.basename(chart)}")

    print("\n" + "=" * 60)
    print("Benchmark complete!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
